"""
Reinforced concrete (RC) column fiber sections.

Rectangular and circular columns with unconfined cover, a core confined by
ties or a spiral (Mander et al. 1988), and discrete longitudinal bars. Each
bar is a steel fiber plus a negative-area core fiber at the same point, so
the concrete it displaces is not counted twice.

Axis tags for 2D sections are 'Z' (bending about z, fibers along the depth
H) and 'Y' (bending about y, fibers along the width B).

Material tags (start tag N):
    N   cover concrete (also the core for the elastic concrete kinds)
    N+1 core concrete (Concrete04 only)
    N+2 longitudinal bars
    N+3 added elastic

References:
    - Mander, J.B., Priestley, M.J.N., Park, R. (1988). ASCE J. Struct.
      Eng. 114(8).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from fibersec.confinement import (
    circular_confinement_coefficient,
    confined_strain,
    confined_strength,
    effective_confinement_coefficient,
    rectangular_tie_pressures,
)
from fibersec.errors import SectionError
from fibersec.geometry import (
    CircPatch,
    Fiber,
    QuadPatch,
    half_circ_tube_patch_2d,
    rect_patch_2d,
    solid_circle_rings,
)
from fibersec.materials import (
    bilinear_kinematic,
    concrete04,
    design_concrete_modulus,
    elastic,
    elastic_no_tension,
    elastic_pp,
    resolve_es,
    resolve_fu,
)
from fibersec.section import (
    AXIS_TAGS,
    AddedElastic,
    Bending,
    BendingType,
    SectionBuilder,
    SectionDescriptor,
    defines_section,
    open_section,
    parse_bending,
    parse_material_type,
    region_count,
    with_added_gj,
)
from fibersec.torsion import (
    GJMode,
    circle_torsion_constant,
    concrete_shear_modulus,
    parse_gj,
    rect_solid_torsion_constant,
)
from fibersec.units import UnitSystem, units_constants

logger = logging.getLogger(__name__)

RECT_FAMILY = "RectangularRC"
CIRC_FAMILY = "CircularRC"

RECT_PEAK_STRAIN = 0.002
ULTIMATE_STRAIN = 0.05
SMALL_STIFFNESS_RATIO = 1.0 / 1000.0


class RCConcreteType(str, Enum):
    CONCRETE04 = "Concrete04"
    ELASTIC = "Elastic"
    ELASTIC_NO_TENSION = "ElasticNoTension"


class RCSteelType(str, Enum):
    ELASTIC_PP = "ElasticPP"
    ELASTIC_SMALL_STIFFNESS = "ElasticSmallStiffness"
    ELASTIC = "Elastic"


class TransverseReinforcement(str, Enum):
    SPIRAL = "Spiral"
    TIES = "Ties"

    @classmethod
    def parse(cls, family: str, value) -> "TransverseReinforcement":
        if isinstance(value, cls):
            return value
        for member in cls:
            if str(value).lower() == member.value.lower():
                return member
        raise SectionError(family, f"unknown transverse reinforcement type: {value}")


@dataclass(frozen=True)
class RCConfinement:
    """Confinement state of an RC core.

    Attributes:
        ke:   Effective confinement coefficient.
        fl1:  Lateral pressure in one direction.
        fl2:  Lateral pressure in the other direction.
        ec:   Unconfined strain at peak stress.
        fcc:  Confined strength.
        ecc:  Strain at confined peak stress.
    """
    ke: float
    fl1: float
    fl2: float
    ec: float
    fcc: float
    ecc: float


# ============================================================================
# SHARED
# ============================================================================

def _check_inputs(family: str, fc: float, **dims):
    if fc <= 0.0:
        raise SectionError(family, "concrete compressive strength should be input as a positive value.")
    for name, value in dims.items():
        if value <= 0.0:
            raise SectionError(family, f"{name} should be input as a positive value.")


def _resolve_steel(family: str, fy, fu, Es, units) -> Tuple[float, float]:
    """Yield stress and modulus of the bars.

    None of the bar laws takes an ultimate strength, so ``fu`` is only
    checked against ``fy``.
    """
    fy = float(fy)
    if fy <= 0.0:
        raise SectionError(family, "reinforcing steel yield stress should be input as a positive value.")
    fu = resolve_fu(fu, fy, units)
    if fu < fy:
        raise SectionError(family, f"reinforcing steel ultimate strength ({fu}) is less than yield stress ({fy}).")
    return fy, resolve_es(Es, units)


def _resolve_ec(Ec, fc: float, units) -> float:
    if isinstance(Ec, str) and Ec.lower() == "calc":
        return design_concrete_modulus(fc, units)
    return float(Ec)


def _rc_gj(family: str, GJ, calc: float) -> float:
    value = parse_gj(family, GJ)
    if isinstance(value, float):
        return value
    if value is not GJMode.CALC:
        raise SectionError(family, f"GJ option '{value.value}' applies to composite sections only.")
    return calc


def _define_concrete(sec: SectionBuilder, kind: RCConcreteType, fc: float,
                     Ec: float, conf: RCConfinement) -> Tuple[int, int]:
    """Cover and core concrete; the elastic kinds share one material."""
    cover = sec.tags.at(0)
    if kind is RCConcreteType.CONCRETE04:
        core = sec.tags.at(1)
        sec.define(concrete04(cover, fc, conf.ec, ULTIMATE_STRAIN, Ec))
        sec.define(concrete04(core, conf.fcc, conf.ecc, ULTIMATE_STRAIN, Ec))
        return cover, core
    if kind is RCConcreteType.ELASTIC:
        sec.define(elastic(cover, Ec))
    else:
        sec.define(elastic_no_tension(cover, Ec))
    return cover, cover


def _define_bars(sec: SectionBuilder, kind: RCSteelType, fy: float,
                 Es: float) -> int:
    tag = sec.tags.at(2)
    if kind is RCSteelType.ELASTIC_PP:
        sec.define(elastic_pp(tag, Es, fy / Es))
    elif kind is RCSteelType.ELASTIC_SMALL_STIFFNESS:
        sec.define(bilinear_kinematic(tag, Es, fy, Es * SMALL_STIFFNESS_RATIO))
    else:
        sec.define(elastic(tag, Es))
    return tag


def bar_fibers(bars: List[Tuple[float, float, float]], core_tag: int,
               steel_tag: int) -> List[Fiber]:
    """Steel fibers at (y, z, area) with the displaced core removed."""
    out: List[Fiber] = []
    for y, z, area in bars:
        out.append(Fiber(y, z, -area, core_tag))
        out.append(Fiber(y, z, area, steel_tag))
    return out


# ============================================================================
# RECTANGULAR RC
# ============================================================================

def rectangular_rc_confinement(B: float, H: float, fc: float, cover: float,
                               db: float, Ab: float, n_bar_x: int,
                               n_bar_y: int, fyt: float, dbt: float,
                               Abt: float, n_leg_x: int, n_leg_y: int,
                               s: float) -> RCConfinement:
    """Confined strength of a tied rectangular core.

    The core is measured to the tie center line. Every pair of adjacent
    perimeter bars is taken as laterally supported.
    """
    Hc = H - 2 * cover - dbt
    Bc = B - 2 * cover - dbt
    z_bar = 0.5 * B - cover - dbt - db / 2
    y_bar = 0.5 * H - cover - dbt - db / 2
    As = (2 * n_bar_x + 2 * n_bar_y - 4) * Ab

    wiz = (2 * z_bar - (n_bar_x - 1) * db) / float(n_bar_x - 1)
    wiy = (2 * y_bar - (n_bar_y - 1) * db) / float(n_bar_y - 1)
    clear = [wiy] * (2 * (n_bar_y - 1)) + [wiz] * (2 * (n_bar_x - 1))
    ke = effective_confinement_coefficient(clear, Bc, Hc, s - dbt, As)
    flz, fly = rectangular_tie_pressures(ke, n_leg_y, n_leg_x, Abt, s, Bc, Hc, fyt)
    fcc = confined_strength(fc, flz, fly)
    ecc = confined_strain(RECT_PEAK_STRAIN, fcc, fc)
    logger.debug("rectangular RC core: ke=%g flz=%g fly=%g fcc=%g", ke, flz, fly, fcc)
    return RCConfinement(ke, flz, fly, RECT_PEAK_STRAIN, fcc, ecc)


def rectangular_rc_section(section_id, start_mat_tag: int, nf1, nf2_or_axis,
                           units: Union[UnitSystem, str],
                           B: float, H: float, fc: float,
                           Ec: Union[float, str], cover: float,
                           fy: float, fu: Union[float, str],
                           Es: Union[float, str],
                           db: float, Ab: float, n_bar_x: int, n_bar_y: int,
                           fyt: float, dbt: float, Abt: float,
                           n_leg_x: int, n_leg_y: int, s: float,
                           concrete_type: Union[RCConcreteType, str] = RCConcreteType.CONCRETE04,
                           steel_type: Union[RCSteelType, str] = RCSteelType.ELASTIC_PP,
                           added_elastic: Optional[AddedElastic] = None,
                           GJ: Union[float, str, None] = None) -> SectionDescriptor:
    """Rectangular reinforced concrete fiber section.

    Args:
        section_id:      Section tag, 'noSection' or 'materialsOnly'.
        start_mat_tag:   First material tag.
        nf1:             Fibers along the primary axis.
        nf2_or_axis:     Fibers along the secondary axis (3D), or 'Z'/'Y'.
        units:           'US' or 'SI'.
        B:               Width (along z).
        H:               Depth (along y).
        fc, Ec:          Concrete strength and modulus ('calc' for the design Ec).
        cover:           Clear cover to the ties.
        fy, fu, Es:      Longitudinal bar properties; fu is validated only.
        db, Ab:          Bar diameter and area.
        n_bar_x:         Bars along each face parallel to B (>= 2).
        n_bar_y:         Bars along each face parallel to H (>= 2).
        fyt, dbt, Abt:   Tie yield stress, diameter and area.
        n_leg_x:         Tie legs parallel to B.
        n_leg_y:         Tie legs parallel to H.
        s:               Tie spacing.
        concrete_type:   Concrete04, Elastic or ElasticNoTension.
        steel_type:      ElasticPP, ElasticSmallStiffness or Elastic.
        added_elastic:   Optional synthetic elastic stiffness.
        GJ:              Torsional stiffness or 'calc' (default).

    Returns:
        SectionDescriptor.
    """
    family = RECT_FAMILY
    bending = parse_bending(family, nf1, nf2_or_axis, tags=AXIS_TAGS)
    units = UnitSystem.parse(units)
    B, H, fc = float(B), float(H), float(fc)
    _check_inputs(family, fc, B=B, H=H, s=float(s))
    n_bar_x, n_bar_y = int(n_bar_x), int(n_bar_y)
    if n_bar_x < 2 or n_bar_y < 2:
        raise SectionError(family, "need at least 2 rebar in each direction.")
    fy, Es = _resolve_steel(family, fy, fu, Es, units)
    Ec = _resolve_ec(Ec, fc, units)
    concrete_type = parse_material_type(family, RCConcreteType, concrete_type)
    steel_type = parse_material_type(family, RCSteelType, steel_type)

    Hc = H - 2 * cover - dbt
    Bc = B - 2 * cover - dbt
    if Hc <= 0.0 or Bc <= 0.0:
        raise SectionError(family, f"cover ({cover}) leaves no confined core.")
    conf = rectangular_rc_confinement(B, H, fc, cover, db, Ab, n_bar_x, n_bar_y,
                                      fyt, dbt, Abt, n_leg_x, n_leg_y, s)

    section_gj = None
    if defines_section(family, section_id):
        calc = concrete_shear_modulus(Ec) * rect_solid_torsion_constant(H, B)
        section_gj = with_added_gj(_rc_gj(family, GJ, calc), added_elastic, bending)

    with open_section(family, section_id, start_mat_tag, bending,
                      GJ=section_gj) as sec:
        cover_tag, core_tag = _define_concrete(sec, concrete_type, fc, Ec, conf)
        bar_tag = _define_bars(sec, steel_type, fy, Es)
        if not sec.materials_only:
            sec.extend(_rect_concrete_fibers(cover_tag, core_tag, bending, B, H, Bc, Hc))
            z_bar = 0.5 * B - cover - dbt - db / 2
            y_bar = 0.5 * H - cover - dbt - db / 2
            sec.extend(bar_fibers(_rect_bars(bending, y_bar, z_bar, Ab, n_bar_x, n_bar_y),
                                  core_tag, bar_tag))
        sec.add_elastic(bending, added_elastic, tag=sec.tags.at(3))
    return sec.descriptor


def _rect_concrete_fibers(cover: int, core: int, bending: Bending, B: float,
                          H: float, Bc: float, Hc: float) -> list:
    if not bending.is_3d:
        # about y the roles of the depth and width swap
        if bending.type is BendingType.STRONG:
            D, W, Dc, Wc = H, B, Hc, Bc
        else:
            D, W, Dc, Wc = B, H, Bc, Hc
        nf1 = bending.nf1
        n_shell = region_count(0.5 * D - 0.5 * Dc, D, nf1)
        n_core = region_count(Dc, D, nf1)
        return (rect_patch_2d(cover, n_shell, W, -0.5 * D, -0.5 * Dc)
                + rect_patch_2d(cover, n_core, W - Wc, -0.5 * Dc, 0.5 * Dc)
                + rect_patch_2d(cover, n_shell, W, 0.5 * Dc, 0.5 * D)
                + rect_patch_2d(core, n_core, Wc, -0.5 * Dc, 0.5 * Dc))

    nf1, nf2 = bending.nf1, bending.nf2
    out: list = []
    n_ij = region_count(0.5 * H - 0.5 * Hc, H, nf2)
    n_jk = region_count(B, B, nf1)
    out.append(QuadPatch(cover, n_ij, n_jk,
                         ((0.5 * Hc, -0.5 * B), (0.5 * H, -0.5 * B),
                          (0.5 * H, 0.5 * B), (0.5 * Hc, 0.5 * B))))
    out.append(QuadPatch(cover, n_ij, n_jk,
                         ((-0.5 * H, -0.5 * B), (-0.5 * Hc, -0.5 * B),
                          (-0.5 * Hc, 0.5 * B), (-0.5 * H, 0.5 * B))))
    n_ij = region_count(Hc, H, nf2)
    n_jk = region_count(0.5 * B - 0.5 * Bc, B, nf1)
    out.append(QuadPatch(cover, n_ij, n_jk,
                         ((-0.5 * Hc, -0.5 * B), (0.5 * Hc, -0.5 * B),
                          (0.5 * Hc, -0.5 * Bc), (-0.5 * Hc, -0.5 * Bc))))
    out.append(QuadPatch(cover, n_ij, n_jk,
                         ((-0.5 * Hc, 0.5 * Bc), (0.5 * Hc, 0.5 * Bc),
                          (0.5 * Hc, 0.5 * B), (-0.5 * Hc, 0.5 * B))))
    out.append(QuadPatch(core, region_count(Hc, H, nf2), region_count(Bc, B, nf1),
                         ((-0.5 * Hc, -0.5 * Bc), (0.5 * Hc, -0.5 * Bc),
                          (0.5 * Hc, 0.5 * Bc), (-0.5 * Hc, 0.5 * Bc))))
    return out


def _rect_bars(bending: Bending, y_bar: float, z_bar: float, Ab: float,
               n_bar_x: int, n_bar_y: int) -> List[Tuple[float, float, float]]:
    """Bar (y, z, area) triples; 2D layers lump the bars of one row."""
    if not bending.is_3d:
        if bending.type is BendingType.STRONG:
            edge, n_edge, n_side = y_bar, n_bar_x, n_bar_y
        else:
            edge, n_edge, n_side = z_bar, n_bar_y, n_bar_x
        bars = [(edge, 0.0, n_edge * Ab)]
        for i in range(1, n_side - 1):
            bars.append((edge - i * 2 * edge / float(n_side - 1), 0.0, 2 * Ab))
        bars.append((-edge, 0.0, n_edge * Ab))
        return bars

    bars = []
    for i in range(n_bar_x):
        z = -z_bar + i * 2 * z_bar / float(n_bar_x - 1)
        bars.append((y_bar, z, Ab))
        bars.append((-y_bar, z, Ab))
    for i in range(1, n_bar_y - 1):
        y = y_bar - i * 2 * y_bar / float(n_bar_y - 1)
        bars.append((y, -z_bar, Ab))
        bars.append((y, z_bar, Ab))
    return bars


# ============================================================================
# CIRCULAR RC
# ============================================================================

def circular_rc_confinement(D: float, fc: float, cover: float, Ab: float,
                            n_bar: int, fyt: float, dbt: float, Abt: float,
                            s: float,
                            transverse: Union[TransverseReinforcement, str],
                            units: Union[UnitSystem, str]) -> RCConfinement:
    """Confined strength of a circular core with hoops or a spiral."""
    transverse = TransverseReinforcement.parse(CIRC_FAMILY, transverse)
    ds = D - 2 * cover - dbt
    Ac = 0.25 * math.pi * ds * ds
    rho_cc = n_bar * Ab / Ac
    ke = circular_confinement_coefficient(ds, s - dbt, rho_cc,
                                          transverse is TransverseReinforcement.SPIRAL)
    rho_s = 4.0 * Abt / (s * ds)
    fl = 0.5 * ke * rho_s * fyt
    fcc = confined_strength(fc, fl, fl)
    # peak strain fit is calibrated in MPa
    ec = math.pow(fc * units_constants(units).to_mpa, 0.25) / 1150.0
    ecc = confined_strain(ec, fcc, fc)
    logger.debug("circular RC core: ke=%g fl=%g fcc=%g", ke, fl, fcc)
    return RCConfinement(ke, fl, fl, ec, fcc, ecc)


def circular_rc_section(section_id, start_mat_tag: int, nf1, nf2_or_axis,
                        units: Union[UnitSystem, str],
                        D: float, fc: float, Ec: Union[float, str],
                        cover: float, fy: float, fu: Union[float, str],
                        Es: Union[float, str], db: float, Ab: float,
                        n_bar: int, fyt: float, dbt: float, Abt: float,
                        s: float,
                        transverse: Union[TransverseReinforcement, str] = TransverseReinforcement.SPIRAL,
                        concrete_type: Union[RCConcreteType, str] = RCConcreteType.CONCRETE04,
                        steel_type: Union[RCSteelType, str] = RCSteelType.ELASTIC_PP,
                        added_elastic: Optional[AddedElastic] = None,
                        GJ: Union[float, str, None] = None) -> SectionDescriptor:
    """Circular reinforced concrete fiber section.

    Bars are evenly spaced on a circle of radius D/2 - cover - dbt - db/2
    starting one spacing from the z-axis. Other arguments match
    ``rectangular_rc_section``; ``transverse`` is 'Spiral' or 'Ties'.
    """
    family = CIRC_FAMILY
    bending = parse_bending(family, nf1, nf2_or_axis, tags=AXIS_TAGS)
    units = UnitSystem.parse(units)
    D, fc = float(D), float(fc)
    _check_inputs(family, fc, D=D, s=float(s))
    n_bar = int(n_bar)
    if n_bar < 1:
        raise SectionError(family, "need at least one longitudinal bar.")
    fy, Es = _resolve_steel(family, fy, fu, Es, units)
    Ec = _resolve_ec(Ec, fc, units)
    concrete_type = parse_material_type(family, RCConcreteType, concrete_type)
    steel_type = parse_material_type(family, RCSteelType, steel_type)

    r_gross = 0.5 * D
    r_core = 0.5 * D - cover - 0.5 * dbt
    if r_core <= 0.0:
        raise SectionError(family, f"cover ({cover}) leaves no confined core.")
    conf = circular_rc_confinement(D, fc, cover, Ab, n_bar, fyt, dbt, Abt, s,
                                   transverse, units)

    section_gj = None
    if defines_section(family, section_id):
        calc = concrete_shear_modulus(Ec) * circle_torsion_constant(D)
        section_gj = with_added_gj(_rc_gj(family, GJ, calc), added_elastic, bending)

    with open_section(family, section_id, start_mat_tag, bending,
                      GJ=section_gj) as sec:
        cover_tag, core_tag = _define_concrete(sec, concrete_type, fc, Ec, conf)
        bar_tag = _define_bars(sec, steel_type, fy, Es)
        if not sec.materials_only:
            sec.extend(_circ_concrete_fibers(cover_tag, core_tag, bending, D,
                                             r_gross, r_core))
            r_bar = 0.5 * D - cover - dbt - 0.5 * db
            sec.extend(bar_fibers(_circ_bars(bending, r_bar, Ab, n_bar),
                                  core_tag, bar_tag))
        sec.add_elastic(bending, added_elastic, tag=sec.tags.at(3))
    return sec.descriptor


def _circ_concrete_fibers(cover: int, core: int, bending: Bending, D: float,
                          r_gross: float, r_core: float) -> list:
    shell = r_gross - r_core
    if not bending.is_3d:
        n_cover = region_count(r_gross, D, bending.nf1)
        n_core = region_count(r_core, D, bending.nf1)
        return (half_circ_tube_patch_2d(cover, n_cover, 0.0, "top", D, shell)
                + half_circ_tube_patch_2d(cover, n_cover, 0.0, "bottom", D, shell)
                + half_circ_tube_patch_2d(core, n_core, 0.0, "top", 2 * r_core, r_core)
                + half_circ_tube_patch_2d(core, n_core, 0.0, "bottom", 2 * r_core, r_core))

    nf = max(bending.nf1, bending.nf2)
    out: list = [CircPatch(cover, region_count(math.pi * D, D, nf),
                           region_count(shell, D, nf), 0.0, 0.0, r_core, r_gross)]
    out += solid_circle_rings(core, region_count(2 * math.pi * r_core, D, nf),
                              region_count(0.5 * r_core, D, nf), r_core)
    return out


def _circ_bars(bending: Bending, r_bar: float, Ab: float,
               n_bar: int) -> List[Tuple[float, float, float]]:
    bars = []
    for i in range(1, n_bar + 1):
        theta = 2 * math.pi / n_bar * i
        if bending.type is BendingType.STRONG:
            bars.append((r_bar * math.sin(theta), 0.0, Ab))
        elif bending.type is BendingType.WEAK:
            bars.append((r_bar * math.cos(theta), 0.0, Ab))
        else:
            bars.append((r_bar * math.sin(theta), r_bar * math.cos(theta), Ab))
    return bars
