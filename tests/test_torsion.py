"""
Tests for torsion constants and GJ option handling.
"""

import math

import pytest

from fibersec.errors import SectionError
from fibersec.torsion import (
    GJMode,
    circle_torsion_constant,
    composite_gj,
    concrete_shear_modulus,
    parse_gj,
    rect_solid_torsion_constant,
    rect_solid_torsion_constant_single_term,
    rect_tube_torsion_constant,
    round_tube_torsion_constant,
    steel_shear_modulus,
    wf_torsion_constant,
)


class TestShearModulus:

    def test_steel(self):
        assert abs(steel_shear_modulus(29000.0) - 29000.0 / 2.6) < 1e-9

    def test_concrete(self):
        assert abs(concrete_shear_modulus(3600.0) - 1500.0) < 1e-9


class TestTorsionConstants:

    def test_rect_tube(self):
        assert abs(rect_tube_torsion_constant(10.0, 6.0, 0.5) - 2 * 0.5 * 100 * 36 / 16) < 1e-9

    def test_round_tube(self):
        expected = 0.5 * math.pi * (5.0 ** 4 - 4.5 ** 4)
        assert abs(round_tube_torsion_constant(10.0, 0.5) - expected) < 1e-9

    def test_circle(self):
        assert abs(circle_torsion_constant(4.0) - 8.0 * math.pi) < 1e-12

    def test_wide_flange(self):
        J = wf_torsion_constant(14.0, 0.5, 8.0, 0.6)
        assert abs(J - (2 * 8.0 * 0.6 ** 3 + 0.5 ** 2 * 12.8) / 3.0) < 1e-12

    def test_square_solid(self):
        # beta -> 0.1406 for a square
        J = rect_solid_torsion_constant(10.0, 10.0)
        assert abs(J / 10.0 ** 4 - 0.1406) < 0.001

    def test_solid_symmetric_in_sides(self):
        assert rect_solid_torsion_constant(20.0, 10.0) == rect_solid_torsion_constant(10.0, 20.0)

    def test_long_rectangle_tends_to_thin_strip(self):
        J = rect_solid_torsion_constant(200.0, 1.0)
        assert abs(J / (200.0 / 3.0) - 1.0) < 0.01

    def test_single_term_close_to_series(self):
        one = rect_solid_torsion_constant_single_term(20.0, 10.0)
        two = rect_solid_torsion_constant(20.0, 10.0)
        assert abs(one - two) / two < 0.01


class TestGJOptions:

    def test_default(self):
        assert parse_gj("x", None) is GJMode.CALC
        assert parse_gj("x", None, default=GJMode.MAX) is GJMode.MAX

    def test_number(self):
        assert parse_gj("x", 1.5e6) == 1.5e6
        assert parse_gj("x", "2500") == 2500.0

    def test_mode_names(self):
        assert parse_gj("x", "SteelOnly") is GJMode.STEEL_ONLY
        assert parse_gj("x", "concreteonly") is GJMode.CONCRETE_ONLY
        assert parse_gj("x", "max") is GJMode.MAX
        assert parse_gj("x", "max_steel_or_concrete_only") is GJMode.MAX

    def test_unknown(self):
        with pytest.raises(SectionError, match="x: unknown GJ option"):
            parse_gj("x", "plenty")

    def test_composite(self):
        assert composite_gj("x", "steelonly", 10.0, 20.0) == 10.0
        assert composite_gj("x", GJMode.CONCRETE_ONLY, 10.0, 20.0) == 20.0
        assert composite_gj("x", GJMode.MAX, 10.0, 20.0) == 20.0

    def test_composite_calc_has_no_rule(self):
        with pytest.raises(SectionError, match="x: GJ mode 'calc' has no composite rule"):
            composite_gj("x", GJMode.CALC, 10.0, 20.0)

    def test_composite_missing_value(self):
        assert composite_gj("x", GJMode.STEEL_ONLY, 10.0, None) == 10.0
        with pytest.raises(SectionError, match="x: GJ mode 'max_steel_or_concrete_only' needs a value"):
            composite_gj("x", GJMode.MAX, 10.0, None)
        with pytest.raises(SectionError, match="concreteonly"):
            composite_gj("x", GJMode.CONCRETE_ONLY, 10.0, None)
