"""
Tests for confined concrete strength and effective confinement.
"""

import math

import pytest

from fibersec.confinement import (
    circular_confinement_coefficient,
    confined_strain,
    confined_strength,
    effective_confinement_coefficient,
    rectangular_tie_pressures,
)
from fibersec.errors import MaterialError


class TestConfinedStrength:

    def test_unconfined(self):
        assert confined_strength(5.0, 0.0, 0.0) == 5.0

    def test_equal_pressures_closed_form(self):
        fc, fl = 5.0, 0.4
        expected = fc * (-1.254 + 2.254 * math.sqrt(1 + 7.94 * fl / fc) - 2 * fl / fc)
        assert abs(confined_strength(fc, fl, fl) - expected) < 1e-12

    def test_order_of_pressures_does_not_matter(self):
        a = confined_strength(5.0, 0.2, 0.6)
        b = confined_strength(5.0, 0.6, 0.2)
        assert a == b
        assert a > 5.0

    def test_one_sided_pressure_confines(self):
        assert confined_strength(5.0, 0.5, 0.0) > 5.0

    def test_regression_close_to_closed_form_near_equal(self):
        equal = confined_strength(5.0, 0.4, 0.4)
        near = confined_strength(5.0, 0.4, 0.4001)
        assert abs(equal - near) / equal < 0.02

    def test_more_pressure_more_strength(self):
        assert confined_strength(5.0, 0.8, 0.8) > confined_strength(5.0, 0.4, 0.4)

    def test_negative_pressure_rejected(self):
        with pytest.raises(MaterialError, match="non-negative"):
            confined_strength(5.0, -0.1, 0.2)

    def test_confined_strain(self):
        assert confined_strain(0.002, 5.0, 5.0) == 0.002
        assert abs(confined_strain(0.002, 6.0, 5.0) - 0.004) < 1e-15


class TestEffectiveConfinement:

    def test_no_arching_no_spacing(self):
        ke = effective_confinement_coefficient([], 20.0, 20.0, 0.0, 0.0)
        assert abs(ke - 1.0) < 1e-12

    def test_arching_reduces_ke(self):
        ke = effective_confinement_coefficient([6.0] * 8, 20.0, 20.0, 5.0, 4.0)
        Ae = (400.0 - 8 * 36.0 / 6.0) * (1 - 5.0 / 40.0) ** 2
        assert abs(ke - Ae / (400.0 - 4.0)) < 1e-12
        assert 0.0 < ke < 1.0

    def test_circular_spiral_vs_hoops(self):
        spiral = circular_confinement_coefficient(20.0, 3.0, 0.02, spiral=True)
        hoops = circular_confinement_coefficient(20.0, 3.0, 0.02, spiral=False)
        assert hoops < spiral
        assert abs(spiral - (1 - 0.075) / 0.98) < 1e-12

    def test_tie_pressures(self):
        flz, fly = rectangular_tie_pressures(0.8, 4, 2, 0.2, 4.0, 20.0, 10.0, 60.0)
        assert abs(flz - 0.8 * 4 * 0.2 / (4.0 * 10.0) * 60.0) < 1e-12
        assert abs(fly - 0.8 * 2 * 0.2 / (4.0 * 20.0) * 60.0) < 1e-12
