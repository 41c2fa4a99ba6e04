"""
Tests for committing section descriptors to OpenSees.

The first group builds real sections in a wiped 3D model and checks that
OpenSees accepts every command (materials limited to those shipped with
every openseespy build). The second group patches ``ops`` and checks the
command sequence.

Units: kip-inch-second (KIS) throughout.
"""

from unittest.mock import call, patch

import pytest
import openseespy.opensees as ops

from fibersec.cft import rcft_section
from fibersec.encased import src_section
from fibersec.geometry import CircPatch, Fiber, QuadPatch
from fibersec.hss import rect_hss_section
from fibersec.materials import elastic
from fibersec.opensees import build, build_materials
from fibersec.rc import circular_rc_section, rectangular_rc_section
from fibersec.section import AddedElastic, SectionDescriptor, SectionMode
from fibersec.wide_flange import ElasticPPSteel, Lehigh, Steel01Steel, wf_section


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def clean_model():
    """Wipe OpenSees model before and after each test."""
    ops.wipe()
    yield
    ops.wipe()


def _setup_3d_model():
    """Helper: set up a minimal 3D model for testing."""
    ops.model('basic', '-ndm', 3, '-ndf', 6)


def _rect_rc(section_id=1, start=1, nf2_or_axis=10, **kwargs):
    return rectangular_rc_section(section_id, start, 10, nf2_or_axis, "US",
                                  20.0, 20.0, 5.0, "calc", 1.5, 60.0, "calc",
                                  29000.0, 1.0, 0.79, 4, 4, 60.0, 0.5, 0.2,
                                  2, 2, 4.0, **kwargs)


# ============================================================================
# COMMITS ACCEPTED BY OPENSEES
# ============================================================================

class TestBuildInOpenSees:

    def test_rect_hss(self):
        _setup_3d_model()
        desc = rect_hss_section(1, 1, 20, 10, "US", 10.0, 6.0, 0.5, 46.0,
                                steel_type="ElasticPP")
        assert build(desc) == 1

    def test_wf_with_residual_stress(self):
        _setup_3d_model()
        desc = wf_section(2, 1, 20, 10, 14.0, 0.5, 8.0, 0.6,
                          Steel01Steel(29000.0, 50.0, 0.01),
                          lehigh=Lehigh(-15.0, 4))
        assert build(desc) == 2

    def test_wf_two_d_fibers(self):
        _setup_3d_model()
        desc = wf_section(3, 1, 20, "strong", 14.0, 0.5, 8.0, 0.6,
                          ElasticPPSteel(29000.0, 50.0), GJ=1.0e5)
        assert build(desc) == 3

    def test_rectangular_rc(self):
        _setup_3d_model()
        assert build(_rect_rc(section_id=4)) == 4

    def test_circular_rc_elastic(self):
        _setup_3d_model()
        desc = circular_rc_section(5, 1, 20, 20, "US", 24.0, 5.0, "calc", 1.5,
                                   60.0, "calc", 29000.0, 1.0, 0.79, 8, 60.0,
                                   0.5, 0.2, 3.0, concrete_type="Elastic",
                                   steel_type="Elastic")
        assert build(desc) == 5

    def test_rcft_elastic_with_added_stiffness(self):
        _setup_3d_model()
        desc = rcft_section(6, 1, 20, 10, "US", 12.0, 8.0, 0.5, 46.0, 58.0,
                            29000.0, 5.0, steel_type="Elastic",
                            concrete_type="ElasticNoTension",
                            added_elastic=AddedElastic.three_d(10.0, 100.0, 50.0, 20.0))
        assert build(desc) == 6

    def test_src_elastic(self):
        _setup_3d_model()
        desc = src_section(7, 1, 20, 20, "US", 24.0, 24.0, 5.0, 12.0, 0.4,
                           10.0, 0.6, 50.0, "calc", 29000.0,
                           ["4z-4y", 1.0, 60.0, 90.0, 29000.0, 0.5, 6.0, 60.0, 1.5],
                           concrete_type="Elastic", steel_type="ElasticPP",
                           reinforcement_type="ElasticPP")
        assert build(desc) == 7

    def test_no_section_fills_open_section(self):
        _setup_3d_model()
        desc = rect_hss_section("noSection", 1, 20, 10, "US", 10.0, 6.0, 0.5,
                                46.0, steel_type="ElasticPP")
        ops.section('Fiber', 8, '-GJ', 1.0e6)
        assert build(desc) is None

    def test_sections_share_a_model(self):
        _setup_3d_model()
        first = _rect_rc(section_id=1, start=1)
        second = _rect_rc(section_id=2, start=first.next_mat_tag)
        assert build(first) == 1
        assert build(second) == 2


# ============================================================================
# COMMAND SEQUENCE
# ============================================================================

def _descriptor(mode=SectionMode.FULL, components=None):
    tag = 3 if mode is SectionMode.FULL else None
    GJ = 100.0 if mode is SectionMode.FULL else None
    return SectionDescriptor("test", mode, tag, GJ, None,
                             [elastic(1, 29000.0)], components or [], 2)


class TestBuildSequence:

    @patch("fibersec.opensees.ops")
    def test_order(self, mock_ops):
        quad = QuadPatch(1, 2, 3, ((-1.0, -1.0), (1.0, -1.0), (1.0, 1.0), (-1.0, 1.0)))
        circ = CircPatch(1, 8, 2, 0.0, 0.0, 1.0, 2.0, 0.0, 360.0)
        desc = _descriptor(components=[quad, circ, Fiber(0.5, 0.25, 2.0, 1)])
        assert build(desc) == 3
        assert mock_ops.method_calls == [
            call.uniaxialMaterial("Elastic", 1, 29000.0),
            call.section('Fiber', 3, '-GJ', 100.0),
            call.patch('quad', 1, 2, 3, -1.0, -1.0, 1.0, -1.0, 1.0, 1.0, -1.0, 1.0),
            call.patch('circ', 1, 8, 2, 0.0, 0.0, 1.0, 2.0, 0.0, 360.0),
            call.fiber(0.5, 0.25, 2.0, 1),
        ]

    @patch("fibersec.opensees.ops")
    def test_no_section(self, mock_ops):
        desc = _descriptor(SectionMode.NO_SECTION, [Fiber(0.0, 0.0, 1.0, 1)])
        assert build(desc) is None
        mock_ops.section.assert_not_called()
        mock_ops.fiber.assert_called_once_with(0.0, 0.0, 1.0, 1)

    @patch("fibersec.opensees.ops")
    def test_materials_only(self, mock_ops):
        desc = _descriptor(SectionMode.MATERIALS_ONLY)
        assert build(desc) is None
        assert mock_ops.method_calls == [call.uniaxialMaterial("Elastic", 1, 29000.0)]

    @patch("fibersec.opensees.ops")
    def test_build_materials_returns_tags(self, mock_ops):
        desc = _rect_rc(section_id="materialsOnly")
        assert build_materials(desc) == [1, 2, 3]
        assert mock_ops.uniaxialMaterial.call_count == 3

    @patch("fibersec.opensees.ops")
    def test_zero_division_patches_skipped(self, mock_ops):
        desc = _descriptor(components=[
            QuadPatch(1, 0, 3, ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))),
            CircPatch(1, 4, 0, 0.0, 0.0, 0.0, 1.0, 0.0, 90.0),
        ])
        build(desc)
        mock_ops.patch.assert_not_called()

    @patch("fibersec.opensees.ops")
    def test_unknown_component(self, mock_ops):
        desc = _descriptor(components=[(0.0, 0.0, 1.0, 1)])
        with pytest.raises(TypeError, match="Cannot commit"):
            build(desc)

    @patch("fibersec.opensees.ops")
    def test_family_section_uses_gj(self, mock_ops):
        desc = _rect_rc(section_id=9, GJ=2.5e6)
        build(desc)
        mock_ops.section.assert_called_once_with('Fiber', 9, '-GJ', 2.5e6)
        # 4 cover quads, 1 core quad
        assert mock_ops.patch.call_count == 5
        assert mock_ops.fiber.call_count == 2 * 12
