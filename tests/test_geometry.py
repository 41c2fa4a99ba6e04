"""
Tests for the fiber geometry primitives.

Areas and centroids are checked against closed-form values; patch expansion
is checked for fiber counts and conservation of area.
"""

import logging
import math

import pytest

from fibersec.errors import GeometryError
from fibersec.geometry import (
    CircPatch,
    Fiber,
    QuadPatch,
    circular_segment_area,
    circular_segment_centroid,
    combined_centroid,
    expand,
    four_fiber_section,
    half_circ_tube_patch_2d,
    rect_patch_2d,
    solid_circle_rings,
    two_fiber_section,
)


def _centroid_y(fibers):
    area = sum(f.area for f in fibers)
    return sum(f.y * f.area for f in fibers) / area


# ============================================================================
# PATCHES
# ============================================================================

class TestQuadPatch:

    def test_rectangle_area(self):
        p = QuadPatch(1, 4, 3, ((-2.0, -1.0), (2.0, -1.0), (2.0, 1.0), (-2.0, 1.0)))
        assert abs(p.area - 8.0) < 1e-12

    def test_fiber_count_and_area(self):
        p = QuadPatch(1, 4, 3, ((-2.0, -1.0), (2.0, -1.0), (2.0, 1.0), (-2.0, 1.0)))
        fibers = p.fibers()
        assert len(fibers) == 12
        assert abs(sum(f.area for f in fibers) - 8.0) < 1e-12
        assert all(f.mat_tag == 1 for f in fibers)

    def test_fiber_positions_symmetric(self):
        p = QuadPatch(7, 2, 2, ((-1.0, -1.0), (1.0, -1.0), (1.0, 1.0), (-1.0, 1.0)))
        ys = sorted(f.y for f in p.fibers())
        zs = sorted(f.z for f in p.fibers())
        assert ys == pytest.approx([-0.5, -0.5, 0.5, 0.5])
        assert zs == pytest.approx([-0.5, -0.5, 0.5, 0.5])

    def test_zero_divisions_give_no_fibers(self):
        p = QuadPatch(1, 0, 3, ((0, 0), (1, 0), (1, 1), (0, 1)))
        assert p.fibers() == []

    def test_three_vertices_rejected(self):
        with pytest.raises(GeometryError):
            QuadPatch(1, 1, 1, ((0, 0), (1, 0), (1, 1)))

    def test_negative_divisions_rejected(self):
        with pytest.raises(GeometryError, match="Negative"):
            QuadPatch(1, -1, 1, ((0, 0), (1, 0), (1, 1), (0, 1)))


class TestCircPatch:

    def test_annulus_area(self):
        p = CircPatch(1, 16, 2, 0.0, 0.0, 1.0, 2.0)
        assert abs(p.area - math.pi * 3.0) < 1e-12

    def test_fibers_conserve_area(self):
        p = CircPatch(1, 16, 2, 0.0, 0.0, 1.0, 2.0)
        fibers = p.fibers()
        assert len(fibers) == 32
        assert abs(sum(f.area for f in fibers) - math.pi * 3.0) < 1e-9

    def test_full_circle_centroid_at_center(self):
        p = CircPatch(1, 12, 3, 1.5, -2.0, 0.0, 3.0)
        fibers = p.fibers()
        area = sum(f.area for f in fibers)
        assert abs(sum(f.y * f.area for f in fibers) / area - 1.5) < 1e-9
        assert abs(sum(f.z * f.area for f in fibers) / area + 2.0) < 1e-9

    def test_quarter_sector(self):
        p = CircPatch(1, 4, 1, 0.0, 0.0, 0.0, 2.0, 0.0, 90.0)
        assert abs(p.area - math.pi) < 1e-12
        assert all(f.y > 0 and f.z > 0 for f in p.fibers())

    def test_bad_radii_rejected(self):
        with pytest.raises(GeometryError, match="radii"):
            CircPatch(1, 4, 1, 0.0, 0.0, 2.0, 1.0)


class TestExpand:

    def test_mixed_components(self):
        comps = [
            Fiber(0.0, 0.0, 1.5, 3),
            QuadPatch(3, 2, 2, ((0, 0), (1, 0), (1, 1), (0, 1))),
        ]
        fibers = expand(comps)
        assert len(fibers) == 5
        assert abs(sum(f.area for f in fibers) - 2.5) < 1e-12


# ============================================================================
# CIRCULAR SEGMENTS
# ============================================================================

class TestCircularSegment:

    def test_half_circle(self):
        assert abs(circular_segment_area(0.0, 2.0) - 2.0 * math.pi) < 1e-12
        assert abs(circular_segment_centroid(0.0, 2.0) - 8.0 / (3 * math.pi)) < 1e-12

    def test_chord_at_radius_is_empty(self):
        assert circular_segment_area(2.0, 2.0) == 0.0
        assert circular_segment_centroid(2.0, 2.0) == 2.0

    def test_negative_distance_mirrors(self):
        assert circular_segment_area(-0.5, 2.0) == circular_segment_area(0.5, 2.0)
        assert circular_segment_centroid(-0.5, 2.0) == -circular_segment_centroid(0.5, 2.0)

    def test_chord_outside_circle(self):
        with pytest.raises(GeometryError, match="outside"):
            circular_segment_area(2.5, 2.0)

    def test_combined_centroid_subtracts(self):
        x, y, a = combined_centroid([(0.0, 0.0, 4.0), (2.0, 0.0, -1.0)])
        assert abs(a - 3.0) < 1e-12
        assert abs(x + 2.0 / 3.0) < 1e-12
        assert y == 0.0

    def test_combined_centroid_zero_area(self):
        with pytest.raises(GeometryError):
            combined_centroid([(0.0, 0.0, 1.0), (1.0, 0.0, -1.0)])


# ============================================================================
# 2D PATCHES
# ============================================================================

class TestRectPatch2d:

    def test_strips(self):
        fibers = rect_patch_2d(2, 4, 3.0, -1.0, 1.0)
        assert len(fibers) == 4
        assert all(abs(f.area - 1.5) < 1e-12 for f in fibers)
        assert [f.y for f in fibers] == pytest.approx([-0.75, -0.25, 0.25, 0.75])
        assert all(f.z == 0.0 for f in fibers)

    def test_zero_fibers(self):
        assert rect_patch_2d(2, 0, 3.0, -1.0, 1.0) == []

    def test_inverted_bounds_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fibersec.geometry"):
            fibers = rect_patch_2d(2, 1, 3.0, 1.0, -1.0)
        assert fibers[0].area < 0
        assert "negative area" in caplog.text


class TestHalfCircTube2d:

    def test_half_annulus_area(self):
        fibers = half_circ_tube_patch_2d(1, 10, 0.0, "top", 10.0, 1.0)
        assert len(fibers) == 10
        expected = 0.5 * math.pi * (5.0 ** 2 - 4.0 ** 2)
        assert abs(sum(f.area for f in fibers) - expected) < 1e-9

    @pytest.mark.parametrize("nf", [1, 2, 3, 7, 33])
    @pytest.mark.parametrize("t", [0.25, 1.0, 5.0])
    def test_area_for_any_fiber_count(self, nf, t):
        D = 10.0
        ro, ri = 0.5 * D, 0.5 * D - t
        half = 0.5 * math.pi * (ro ** 2 - ri ** 2)
        top = half_circ_tube_patch_2d(1, nf, 2.0, "top", D, t)
        bottom = half_circ_tube_patch_2d(1, nf, 2.0, "bottom", D, t)
        assert len(top) == len(bottom) == nf
        assert abs(sum(f.area for f in top) - half) < 1e-9
        assert abs(sum(f.area for f in top + bottom) - 2 * half) < 1e-9

    def test_half_annulus_centroid(self):
        fibers = half_circ_tube_patch_2d(1, 8, 0.0, "top", 10.0, 1.0)
        ro, ri = 5.0, 4.0
        expected = 4 * (ro ** 3 - ri ** 3) / (3 * math.pi * (ro ** 2 - ri ** 2))
        assert abs(_centroid_y(fibers) - expected) < 1e-9

    def test_solid_half_disk(self):
        fibers = half_circ_tube_patch_2d(1, 6, 0.0, "top", 4.0, 2.0)
        assert abs(sum(f.area for f in fibers) - 2.0 * math.pi) < 1e-9
        assert abs(_centroid_y(fibers) - 8.0 / (3 * math.pi)) < 1e-9

    def test_bottom_is_mirrored_about_center(self):
        top = half_circ_tube_patch_2d(1, 5, 3.0, "top", 10.0, 1.0)
        bottom = half_circ_tube_patch_2d(1, 5, 3.0, "bottom", 10.0, 1.0)
        for t, b in zip(top, bottom):
            assert abs((t.y - 3.0) + (b.y - 3.0)) < 1e-12
            assert abs(t.area - b.area) < 1e-12

    def test_unknown_side(self):
        with pytest.raises(GeometryError, match="side"):
            half_circ_tube_patch_2d(1, 5, 0.0, "left", 10.0, 1.0)

    def test_thickness_too_large(self):
        with pytest.raises(GeometryError):
            half_circ_tube_patch_2d(1, 5, 0.0, "top", 10.0, 6.0)


class TestSolidCircleRings:

    def test_rings_fill_disk(self):
        rings = solid_circle_rings(4, 20, 2, 3.0)
        assert len(rings) == 4
        assert rings[0].int_rad == 0.0
        assert rings[-1].ext_rad == 3.0
        assert abs(sum(r.area for r in rings) - 9.0 * math.pi) < 1e-9

    def test_inner_rings_are_coarser(self):
        rings = solid_circle_rings(4, 20, 2, 3.0)
        assert [r.n_circ for r in rings] == [5, 10, 15, 20]


# ============================================================================
# LUMPED SECTIONS
# ============================================================================

class TestLumpedSections:

    def test_two_fiber_reproduces_inertia(self):
        fibers = two_fiber_section(1, 10.0, 250.0)
        assert abs(sum(f.area for f in fibers) - 10.0) < 1e-12
        assert abs(sum(f.area * f.y ** 2 for f in fibers) - 250.0) < 1e-9

    def test_four_fiber_reproduces_inertia(self):
        fibers = four_fiber_section(1, 8.0, 200.0, 50.0)
        assert abs(sum(f.area for f in fibers) - 8.0) < 1e-12
        assert abs(sum(f.area * f.y ** 2 for f in fibers) - 200.0) < 1e-9
        assert abs(sum(f.area * f.z ** 2 for f in fibers) - 50.0) < 1e-9

    def test_non_positive_area_rejected(self):
        with pytest.raises(GeometryError):
            two_fiber_section(1, 0.0, 1.0)
