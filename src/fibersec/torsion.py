"""
Torsional stiffness (GJ) estimators.

Shear moduli use fixed Poisson ratios: steel G = E/2.6 (nu = 0.3), concrete
G = E/2.4 (nu = 0.2).

References:
    - Thin-walled closed section (Bredt): J = 4*A0^2*t/perimeter.
    - Thin-walled open section: J = sum(b*t^3)/3.
    - Solid rectangle: Timoshenko & Goodier, Theory of Elasticity, series
      solution for beta(H/B).
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Optional, Union

from fibersec.errors import SectionError

logger = logging.getLogger(__name__)


def steel_shear_modulus(Es: float) -> float:
    return Es / (2 * (1 + 0.3))


def concrete_shear_modulus(Ec: float) -> float:
    return Ec / (2 * (1 + 0.2))


# ============================================================================
# TORSION CONSTANTS
# ============================================================================

def rect_tube_torsion_constant(D: float, B: float, t: float) -> float:
    """J = 2*t*D^2*B^2/(D + B) for a thin-walled rectangular tube."""
    return 2 * t * D * D * B * B / (D + B)


def round_tube_torsion_constant(D: float, t: float) -> float:
    """J = 0.5*pi*(ro^4 - ri^4)."""
    ro = D / 2.0
    ri = ro - t
    return 0.5 * math.pi * (ro ** 4 - ri ** 4)


def circle_torsion_constant(D: float) -> float:
    """Polar moment of a solid circle, 0.5*pi*(D/2)^4."""
    return 0.5 * math.pi * (D / 2.0) ** 4


def wf_torsion_constant(d: float, tw: float, bf: float, tf: float) -> float:
    """J = (2*bf*tf^3 + tw^2*dw)/3 with dw = d - 2*tf.

    The web term keeps the tw^2 exponent of the established fit.
    """
    dw = d - 2 * tf
    return (2 * bf * tf ** 3 + tw ** 2 * dw) / 3.0


def rect_solid_torsion_constant(H: float, B: float) -> float:
    """Solid rectangle, two-term series in the aspect ratio (long/short).

        beta = (1 - 192/(pi^5*ar)*(tanh(pi*ar/2) + tanh(3*pi*ar/2)/243))/3
        J = beta*long*short^3
    """
    long_side, short_side = (H, B) if H >= B else (B, H)
    ar = long_side / short_side
    beta = (1 - 192.0 / (math.pi ** 5 * ar)
            * (math.tanh(math.pi * ar / 2.0)
               + math.tanh(3 * math.pi * ar / 2.0) / 243)) / 3.0
    return beta * long_side * short_side ** 3


def rect_solid_torsion_constant_single_term(H: float, B: float) -> float:
    """Solid rectangle, first series term with B across the narrow side.

        beta = (1 - 192/pi^5*B/H*tanh(pi*H/(2*B)))/3
        J = beta*H*B^3
    """
    beta = 1.0 / 3.0 * (1 - 192.0 / math.pi ** 5 * B / H
                         * math.tanh(math.pi * H / (2.0 * B)))
    return beta * H * B ** 3


# ============================================================================
# COMPOSITE GJ
# ============================================================================

class GJMode(str, Enum):
    CALC = "calc"
    STEEL_ONLY = "steelonly"
    CONCRETE_ONLY = "concreteonly"
    MAX = "max_steel_or_concrete_only"


def parse_gj(family: str, GJ: Union[float, str, None],
             default: GJMode = GJMode.CALC) -> Union[GJMode, float]:
    """Resolve a GJ option to a mode or a literal value.

    Args:
        family:  Family name used in error messages.
        GJ:      None (use ``default``), a number, or a mode name.
        default: Mode used when ``GJ`` is None.
    """
    if GJ is None:
        return default
    if isinstance(GJ, GJMode):
        return GJ
    if isinstance(GJ, (int, float)) and not isinstance(GJ, bool):
        return float(GJ)
    if isinstance(GJ, str):
        key = GJ.strip()
        for mode in GJMode:
            if key.lower() == mode.value.lower():
                return mode
        if key.lower() == "max":
            return GJMode.MAX
        try:
            return float(key)
        except ValueError:
            pass
    raise SectionError(family, f"unknown GJ option {GJ!r}.")


def composite_gj(family: str, mode: Union[GJMode, str], steel: Optional[float],
                 concrete: Optional[float]) -> float:
    """Pick the torsional stiffness of a steel-concrete composite section.

    Args:
        family:   Section family name used in error messages.
        mode:     steelonly, concreteonly or max.
        steel:    Steel GJ (G*J of the steel shape).
        concrete: Concrete GJ.
    """
    mode = GJMode(mode)
    if mode is GJMode.STEEL_ONLY:
        needed = [steel]
    elif mode is GJMode.CONCRETE_ONLY:
        needed = [concrete]
    elif mode is GJMode.MAX:
        needed = [steel, concrete]
    else:
        raise SectionError(family, f"GJ mode '{mode.value}' has no composite rule.")
    if any(v is None for v in needed):
        raise SectionError(family, f"GJ mode '{mode.value}' needs a value that was not computed.")
    value = max(needed)
    logger.debug("composite GJ (%s): %g", mode.value, value)
    return value
