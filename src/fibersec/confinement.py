"""
Confined concrete strength and effective confinement.

Stress units are whatever the caller uses for fc; every expression here is
dimensionless in the ratio fl/fc.

References:
    - Mander, J.B., Priestley, M.J.N., Park, R. (1988). "Theoretical Stress-Strain
      Model for Confined Concrete." ASCE J. Structural Engineering, 114(8).
    - Chang, G.A. and Mander, J.B. (1994). "Seismic Energy Based Fatigue Damage
      Analysis of Bridge Columns: Part I." NCEER-94-0006.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Tuple

from fibersec.errors import MaterialError

logger = logging.getLogger(__name__)


# ============================================================================
# CONFINED STRENGTH
# ============================================================================

def confined_strength(fc: float, fl1: float, fl2: float) -> float:
    """Confined compressive strength fcc under lateral pressures fl1, fl2.

    The pressures are reordered so that fl1 <= fl2.

        fl2 == 0:   fcc = fc
        fl1 == fl2: fcc = fc*(-1.254 + 2.254*sqrt(1 + 7.94*fl/fc) - 2*fl/fc)
        otherwise:  fcc = K*fc with the biaxial regression on r = fl1/fl2

    Args:
        fc:  Unconfined compressive strength (positive).
        fl1: Lateral confining pressure in one direction (>= 0).
        fl2: Lateral confining pressure in the other direction (>= 0).

    Returns:
        fcc (positive).

    Reference:
        Mander et al. (1988), Eq. 29 and Fig. 4 (as fit by Chang & Mander).
    """
    if fl1 < 0.0 or fl2 < 0.0:
        raise MaterialError(
            f"Confining pressures must be non-negative, got {fl1} and {fl2}."
        )
    fl1, fl2 = min(fl1, fl2), max(fl1, fl2)

    if fl2 == 0.0:
        return fc
    if fl1 == fl2:
        fl = fl1
        return fc * (-1.254 + 2.254 * math.sqrt(1 + 7.94 * fl / fc) - 2 * fl / fc)

    xbar = (fl1 + fl2) / (2.0 * fc)
    r = fl1 / fl2
    A = 6.8886 - (0.6069 + 17.275 * r) * math.exp(-4.989 * r)
    B = 4.5 / ((5 / A) * (0.9849 - 0.6306 * math.exp(-3.8939 * r)) - 0.1) - 5
    K = 1 + A * xbar * (0.1 + 0.9 / (1 + B * xbar))
    return K * fc


def confined_strain(ec: float, fcc: float, fc: float) -> float:
    """Strain at confined peak stress, ecc = ec*(1 + 5*(fcc/fc - 1))."""
    return ec * (1 + 5 * (fcc / fc - 1))


# ============================================================================
# EFFECTIVE CONFINEMENT COEFFICIENT
# ============================================================================

def effective_confinement_coefficient(clear_distances: Iterable[float],
                                      Bc: float, Hc: float, s_clear: float,
                                      As: float) -> float:
    """Mander ke for a rectangular core confined by ties.

    Each clear distance w between adjacent restrained bars removes a
    parabolic arch of area w^2/6 from the effectively confined core; tie
    spacing reduces it further along the member.

    Args:
        clear_distances: Clear distances between laterally supported bars,
                         one entry per gap around the perimeter.
        Bc:              Core width (center line of ties).
        Hc:              Core depth (center line of ties).
        s_clear:         Clear vertical spacing between ties, s' = s - dbt.
        As:              Longitudinal steel area inside the core.

    Returns:
        ke = Ae / (Ac - As).
    """
    Ac = Bc * Hc
    Ae = Ac - sum(w * w / 6.0 for w in clear_distances)
    Ae *= (1 - s_clear / (2 * Bc)) * (1 - s_clear / (2 * Hc))
    return Ae / (Ac - As)


def circular_confinement_coefficient(ds: float, s_clear: float, rho_cc: float,
                                     spiral: bool) -> float:
    """Mander ke for a circular core.

    Args:
        ds:      Core diameter (center line of hoops/spiral).
        s_clear: Clear spacing s' = s - dbt.
        rho_cc:  Longitudinal steel ratio of the core.
        spiral:  True for a continuous spiral, False for circular hoops.
    """
    arch = 1 - 0.5 * s_clear / ds
    if spiral:
        return arch / (1.0 - rho_cc)
    return arch * arch / (1.0 - rho_cc)


def rectangular_tie_pressures(ke: float, n_legs_y: int, n_legs_x: int,
                              Abt: float, s: float, Bc: float, Hc: float,
                              fyt: float) -> Tuple[float, float]:
    """Effective lateral pressures (flz, fly) from rectangular ties.

    ``n_legs_y`` tie legs cross the core depth (resisting dilation along z)
    and ``n_legs_x`` cross the core width.
    """
    rho_z = n_legs_y * Abt / (s * Hc)
    rho_y = n_legs_x * Abt / (s * Bc)
    return ke * rho_z * fyt, ke * rho_y * fyt
