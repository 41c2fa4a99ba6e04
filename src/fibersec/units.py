"""
Unit-system constant tables.

Every empirical fit used by the section builders was calibrated either in
kip-inch (US) or N-mm (SI). The two tables below collect the constants that
differ between the systems, so that material and section code only asks
``units_constants(units)`` for a value instead of branching on a tag.

    US: stress in ksi, length in inch
    SI: stress in MPa, length in mm
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from fibersec.errors import UnitsError


class UnitSystem(str, Enum):
    US = "US"
    SI = "SI"

    @classmethod
    def parse(cls, value: Union["UnitSystem", str]) -> "UnitSystem":
        """Return the unit system for an enum member or its tag string."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            raise UnitsError(
                f"Unknown unit system '{value}'. Use 'US' or 'SI'."
            ) from None


@dataclass(frozen=True)
class UnitConstants:
    """Constants that depend on the unit system.

    Attributes:
        Es:               Default steel modulus.
        fu_coefficient:   Coefficient of the Fy^-1.61 term of the Fu fit.
        shen_fy_high:     Shen regime threshold Fya (high/medium boundary).
        shen_fy_low:      Shen regime threshold Fyb (medium/low boundary).
        to_mpa:           Factor converting a stress to MPa.
        to_mm:            Factor converting a length to mm.
        ec_design:        Coefficient of sqrt(fc) for the design Ec.
        min_bar_spacing:  Minimum clear spacing floor for bar bundles.
    """
    Es: float
    fu_coefficient: float
    shen_fy_high: float
    shen_fy_low: float
    to_mpa: float
    to_mm: float
    ec_design: float
    min_bar_spacing: float


UNIT_CONSTANTS: Dict[UnitSystem, UnitConstants] = {
    UnitSystem.US: UnitConstants(
        Es=29000.0,
        fu_coefficient=187.0,
        shen_fy_high=52.0,
        shen_fy_low=40.0,
        to_mpa=6.89476,
        to_mm=25.4,
        ec_design=1802.5,
        min_bar_spacing=1.5,
    ),
    UnitSystem.SI: UnitConstants(
        Es=200000.0,
        fu_coefficient=4190.0,
        shen_fy_high=358.5,
        shen_fy_low=275.8,
        to_mpa=1.0,
        to_mm=1.0,
        ec_design=4733.0,
        min_bar_spacing=38.1,
    ),
}


def units_constants(units: Union[UnitSystem, str]) -> UnitConstants:
    """Look up the constant table for ``units`` ('US' or 'SI')."""
    return UNIT_CONSTANTS[UnitSystem.parse(units)]
