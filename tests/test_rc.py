"""
Tests for rectangular and circular reinforced concrete sections.

Reference columns (US, kip-inch):
    Rectangular: 20 x 20, fc = 5, cover 1.5, 4 x 4 #8 bars (Ab = 0.79),
                 #4 ties (Abt = 0.2) with 2 legs each way at s = 4.
    Circular:    D = 24, fc = 5, cover 1.5, 8 #8 bars, #4 spiral at s = 3.
"""

import math

import pytest

from fibersec.errors import SectionError
from fibersec.geometry import CircPatch, QuadPatch
from fibersec.materials import design_concrete_modulus
from fibersec.rc import (
    RCConcreteType,
    RCSteelType,
    TransverseReinforcement,
    bar_fibers,
    circular_rc_confinement,
    circular_rc_section,
    rectangular_rc_confinement,
    rectangular_rc_section,
)
from fibersec.section import AddedElastic, BendingType
from fibersec.torsion import (
    circle_torsion_constant,
    concrete_shear_modulus,
    rect_solid_torsion_constant,
)

B = H = 20.0
FC = 5.0
AB = 0.79
N_BARS = 2 * 4 + 2 * 4 - 4
AS = N_BARS * AB

D = 24.0


def _rect(section_id=1, start=1, nf1=20, axis="Z", **kwargs):
    args = dict(B=B, H=H, fc=FC, Ec="calc", cover=1.5, fy=60.0, fu="calc",
                Es=29000.0, db=1.0, Ab=AB, n_bar_x=4, n_bar_y=4, fyt=60.0,
                dbt=0.5, Abt=0.2, n_leg_x=2, n_leg_y=2, s=4.0)
    args.update(kwargs)
    return rectangular_rc_section(section_id, start, nf1, axis, "US", **args)


def _circ(section_id=1, start=1, nf1=20, axis="Z", **kwargs):
    args = dict(D=D, fc=FC, Ec="calc", cover=1.5, fy=60.0, fu="calc",
                Es=29000.0, db=1.0, Ab=AB, n_bar=8, fyt=60.0, dbt=0.5,
                Abt=0.2, s=3.0)
    args.update(kwargs)
    return circular_rc_section(section_id, start, nf1, axis, "US", **args)


class TestBarFibers:

    def test_each_bar_displaces_core(self):
        fibers = bar_fibers([(1.0, 2.0, 0.5)], core_tag=2, steel_tag=3)
        assert [(f.mat_tag, f.area) for f in fibers] == [(2, -0.5), (3, 0.5)]
        assert all((f.y, f.z) == (1.0, 2.0) for f in fibers)


# ============================================================================
# RECTANGULAR RC
# ============================================================================

class TestRectangularConfinement:

    def test_core_is_confined(self):
        conf = rectangular_rc_confinement(B, H, FC, 1.5, 1.0, AB, 4, 4, 60.0,
                                          0.5, 0.2, 2, 2, 4.0)
        assert 0.0 < conf.ke < 1.0
        assert abs(conf.fl1 - conf.fl2) < 1e-12
        assert conf.fcc > FC
        assert conf.ecc > conf.ec == 0.002

    def test_closer_ties_confine_more(self):
        wide = rectangular_rc_confinement(B, H, FC, 1.5, 1.0, AB, 4, 4, 60.0,
                                          0.5, 0.2, 2, 2, 6.0)
        close = rectangular_rc_confinement(B, H, FC, 1.5, 1.0, AB, 4, 4, 60.0,
                                           0.5, 0.2, 2, 2, 3.0)
        assert close.fcc > wide.fcc


class TestRectangularRC:

    def test_areas_all_modes(self):
        for axis in ("Z", "Y", 10):
            desc = _rect(axis=axis)
            assert abs(desc.area() - B * H) < 1e-9
            assert abs(desc.area(1) + desc.area(2) - (B * H - AS)) < 1e-9
            assert abs(desc.area(3) - AS) < 1e-9

    def test_axis_tags(self):
        assert _rect(axis="z").bending.type is BendingType.STRONG
        assert _rect(axis="Y").bending.type is BendingType.WEAK

    def test_strong_weak_rejected(self):
        with pytest.raises(SectionError, match="unknown bending type"):
            _rect(axis="strong")

    def test_three_d_bars(self):
        desc = _rect(axis=10)
        bars = [f for f in desc.fibers() if f.mat_tag == 3]
        assert len(bars) == N_BARS
        edge = 0.5 * B - 1.5 - 0.5 - 0.5
        assert max(abs(f.y) for f in bars) == edge
        assert max(abs(f.z) for f in bars) == edge
        quads = [c for c in desc.components if isinstance(c, QuadPatch)]
        assert len(quads) == 5

    def test_two_d_bar_layers(self):
        desc = _rect(axis="Z")
        bars = [f for f in desc.fibers() if f.mat_tag == 3]
        assert len(bars) == 4
        assert abs(bars[0].area - 4 * AB) < 1e-12
        assert abs(bars[1].area - 2 * AB) < 1e-12

    def test_concrete04_tags(self):
        desc = _rect(start=5, added_elastic=AddedElastic.two_d(10.0, 100.0))
        assert desc.mat_tags == [5, 6, 7, 8]
        cover, core = desc.material(5), desc.material(6)
        assert cover.kind == core.kind == "Concrete04"
        assert cover.args[0] == -FC
        assert core.args[0] < -FC
        assert abs(cover.args[3] - design_concrete_modulus(FC, "US")) < 1e-9

    def test_elastic_concrete_shares_tag(self):
        desc = _rect(start=5, concrete_type="Elastic")
        assert desc.mat_tags == [5, 7]
        assert desc.material(5).kind == "Elastic"
        assert abs(desc.area(5) - (B * H - AS)) < 1e-9
        desc = _rect(concrete_type=RCConcreteType.ELASTIC_NO_TENSION)
        assert desc.material(1).kind == "ENT"

    def test_steel_types(self):
        assert _rect(steel_type="ElasticPP").material(3).kind == "ElasticPP"
        small = _rect(steel_type=RCSteelType.ELASTIC_SMALL_STIFFNESS).material(3)
        assert small.option("-Direct", 4) == (29000.0, 0.0, 60.0, 29.0)
        assert _rect(steel_type="Elastic").material(3).kind == "Elastic"

    def test_gj(self):
        desc = _rect(axis=10)
        Ec = design_concrete_modulus(FC, "US")
        expected = concrete_shear_modulus(Ec) * rect_solid_torsion_constant(H, B)
        assert abs(desc.GJ - expected) < 1e-6
        assert _rect(axis=10, GJ=1.0e6).GJ == 1.0e6

    def test_composite_gj_option_rejected(self):
        with pytest.raises(SectionError, match="composite sections only"):
            _rect(axis=10, GJ="max")

    def test_numeric_ec(self):
        desc = _rect(Ec=4000.0)
        assert desc.material(1).args[3] == 4000.0

    def test_fu_below_fy(self):
        with pytest.raises(SectionError, match="less than yield"):
            _rect(fu=50.0)

    def test_fu_is_only_validated(self):
        assert _rect(fu=80.0).materials == _rect(fu="calc").materials
        assert _circ(fu=80.0).materials == _circ().materials
        with pytest.raises(SectionError, match="less than yield"):
            _circ(fu=50.0)

    def test_needs_two_bars_per_face(self):
        with pytest.raises(SectionError, match="at least 2 rebar"):
            _rect(n_bar_x=1)

    def test_cover_too_large(self):
        with pytest.raises(SectionError, match="no confined core"):
            _rect(cover=10.0)

    def test_bad_fc(self):
        with pytest.raises(SectionError, match="concrete compressive strength"):
            _rect(fc=-5.0)


# ============================================================================
# CIRCULAR RC
# ============================================================================

class TestCircularConfinement:

    def test_spiral_confines_more_than_hoops(self):
        spiral = circular_rc_confinement(D, FC, 1.5, AB, 8, 60.0, 0.5, 0.2, 3.0,
                                         "Spiral", "US")
        hoops = circular_rc_confinement(D, FC, 1.5, AB, 8, 60.0, 0.5, 0.2, 3.0,
                                        TransverseReinforcement.TIES, "US")
        assert spiral.ke > hoops.ke
        assert spiral.fcc > hoops.fcc > FC
        assert spiral.fl1 == spiral.fl2

    def test_unknown_transverse(self):
        with pytest.raises(SectionError, match="transverse reinforcement"):
            circular_rc_confinement(D, FC, 1.5, AB, 8, 60.0, 0.5, 0.2, 3.0,
                                    "Hoop", "US")


class TestCircularRC:

    def test_areas_all_modes(self):
        gross = 0.25 * math.pi * D * D
        for axis in ("Z", "Y", 20):
            desc = _circ(axis=axis)
            assert abs(desc.area() - gross) < 1e-9
            assert abs(desc.area(3) - 8 * AB) < 1e-9

    def test_cover_shell_spans_to_core_radius(self):
        desc = _circ(axis=20)
        shell = desc.components[0]
        assert isinstance(shell, CircPatch)
        assert shell.mat_tag == 1
        assert shell.int_rad == 0.5 * D - 1.5 - 0.25
        assert shell.ext_rad == 0.5 * D

    def test_bar_positions(self):
        desc = _circ(axis=20)
        bars = [f for f in desc.fibers() if f.mat_tag == 3]
        assert len(bars) == 8
        r_bar = 0.5 * D - 1.5 - 0.5 - 0.5
        for f in bars:
            assert abs(math.hypot(f.y, f.z) - r_bar) < 1e-9
        # the last bar sits on the z-axis
        assert abs(bars[-1].y) < 1e-9 and abs(bars[-1].z - r_bar) < 1e-9

    def test_two_d_bars_on_one_axis(self):
        desc = _circ(axis="Z")
        bars = [f for f in desc.fibers() if f.mat_tag == 3]
        assert all(f.z == 0.0 for f in bars)
        assert abs(sum(f.y * f.area for f in bars)) < 1e-9

    def test_ties_weaker_core(self):
        spiral = _circ()
        ties = _circ(transverse="Ties")
        assert ties.material(2).args[0] > spiral.material(2).args[0]

    def test_tags(self):
        desc = _circ(start=11, added_elastic=AddedElastic.two_d(10.0, 100.0))
        assert desc.mat_tags == [11, 12, 13, 14]

    def test_gj(self):
        desc = _circ(axis=20)
        Ec = design_concrete_modulus(FC, "US")
        expected = concrete_shear_modulus(Ec) * circle_torsion_constant(D)
        assert abs(desc.GJ - expected) < 1e-6

    def test_needs_a_bar(self):
        with pytest.raises(SectionError, match="at least one"):
            _circ(n_bar=0)

    def test_materials_only(self):
        desc = _circ(section_id="materialsOnly")
        assert desc.components == []
        assert desc.mat_tags == [1, 2, 3]
