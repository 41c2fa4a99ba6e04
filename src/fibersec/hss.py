"""
Hollow structural section (HSS) steel fiber sections.

Rectangular tubes are split into four flat walls and four corner arcs. The
corners are quarter annuli of inner radius t and outer radius 2t, so each
flat wall stops 2t short of the outer faces. Round tubes are a single
annulus.

Material tags (start tag N):
    Rectangular: N flat walls, N+1 corners, N+2 added elastic
    Round:       N tube, N+2 added elastic (N+1 unused)

Units: 'US' (kip, in, ksi) or 'SI' (N, mm, MPa).

References:
    - Denavit, M.D. and Hajjar, J.F. (2014). NSEL-034, Section 3.4.
    - Abdel-Rahman, N. and Sivakumaran, K.S. (1997). ASCE J. Struct. Eng.
      123(9).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from fibersec.errors import SectionError
from fibersec.geometry import CircPatch, QuadPatch, half_circ_tube_patch_2d, rect_patch_2d
from fibersec.materials import (
    ShenSteelType,
    elastic_pp,
    hss_steel_abdel_rahman,
    resolve_es,
    resolve_fu,
    shen_steel,
    steel02,
)
from fibersec.section import (
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
    parse_gj,
    rect_tube_torsion_constant,
    round_tube_torsion_constant,
    steel_shear_modulus,
)
from fibersec.units import UnitSystem

logger = logging.getLogger(__name__)

RECT_FAMILY = "recthssSection"
ROUND_FAMILY = "roundhssSection"

# Cold work of the forming process
EPO_FLAT = 0.0004
EPO_CORNER = 0.0006
FY_CORNER_FACTOR = 1.09
FU_CORNER_FACTOR = 1.03

STEEL02_HARDENING = 0.003


class HSSSteelType(str, Enum):
    PROPOSED_FOR_BEHAVIOR = "ProposedForBehavior"
    PROPOSED_FOR_BEHAVIOR_NO_LB = "ProposedForBehavior_noLB"
    ABDEL_RAHMAN = "AbdelRahman"
    ABDEL_RAHMAN_LOW_HARDENING = "AbdelRahman_LowHardening"
    ELASTIC_PP = "ElasticPP"
    STEEL02 = "Steel02"


# ============================================================================
# STEEL PROPERTIES
# ============================================================================

@dataclass(frozen=True)
class TubeSteel:
    """Resolved tube steel properties."""
    Fy: float
    Fu: float
    Es: float
    units: UnitSystem

    @property
    def eu(self) -> float:
        """Strain at ultimate stress, 120*ey."""
        return 120.0 * self.Fy / self.Es

    @property
    def Fy_corner(self) -> float:
        return FY_CORNER_FACTOR * self.Fy

    @property
    def Fu_corner(self) -> float:
        return max(FU_CORNER_FACTOR * self.Fu, self.Fy_corner)


def tube_steel(family: str, Fy, Fu, Es, units,
               fu_above_fy: bool = True) -> TubeSteel:
    """Validate tube steel input and resolve 'calc' defaults.

    Args:
        family:      Family name used in error messages.
        Fy:          Yield stress (> 0).
        Fu:          Ultimate stress or 'calc'.
        Es:          Elastic modulus (> 0) or 'calc'.
        units:       'US' or 'SI'.
        fu_above_fy: Require Fu > Fy; otherwise only Fu > 0.
    """
    units = UnitSystem.parse(units)
    Fy = float(Fy)
    if Fy <= 0.0:
        raise SectionError(family, "steel yield strength should be input as a positive value.")
    if not isinstance(Fu, str):
        if fu_above_fy and float(Fu) <= Fy:
            raise SectionError(family, "steel ultimate strength should be greater than yield strength or 'calc'.")
        if float(Fu) <= 0.0:
            raise SectionError(family, "steel ultimate strength should be input as a positive value or 'calc'.")
    if not isinstance(Es, str) and float(Es) <= 0.0:
        raise SectionError(family, "steel elastic modulus should be input as a positive value or 'calc'.")
    return TubeSteel(Fy, resolve_fu(Fu, Fy, units), resolve_es(Es, units), units)


def _check_positive(family: str, **values):
    for name, value in values.items():
        if value <= 0.0:
            raise SectionError(family, f"{name} should be input as a positive value.")


def check_rect_tube(family: str, D: float, B: float, t: float):
    _check_positive(family, D=D, B=B, t=t)
    # each corner arc spans 2t of both faces
    if t >= 0.25 * D or t >= 0.25 * B:
        raise SectionError(family, f"t ({t}) is too large compared to D ({D}) or B ({B}).")


def check_round_tube(family: str, D: float, t: float):
    _check_positive(family, D=D, t=t)
    if t >= 0.5 * D:
        raise SectionError(family, f"t ({t}) is too large compared to D ({D}).")


# ============================================================================
# RECTANGULAR TUBE GEOMETRY
# ============================================================================

def rect_tube_fibers(flat: int, corner: int, bending: Bending,
                     D: float, B: float, t: float) -> list:
    """Fibers/patches of a rectangular tube wall with rounded corners.

    D runs along y (depth), B along z (width).
    """
    out: list = []
    if not bending.is_3d:
        # 2D weak-axis bending swaps the roles of the two faces
        H, W = (D, B) if bending.type is BendingType.STRONG else (B, D)
        nf1 = bending.nf1
        out += rect_patch_2d(flat, region_count(H - 4 * t, H, nf1), 2 * t,
                             -H / 2 + 2 * t, H / 2 - 2 * t)
        out += rect_patch_2d(flat, region_count(t, H, nf1), W - 4 * t,
                             H / 2 - t, H / 2)
        out += rect_patch_2d(flat, region_count(t, H, nf1), W - 4 * t,
                             -H / 2, -H / 2 + t)
        n_corner = region_count(2 * t, H, nf1)
        out += half_circ_tube_patch_2d(corner, n_corner, H / 2 - 2 * t, "top", 4 * t, t)
        out += half_circ_tube_patch_2d(corner, n_corner, -H / 2 + 2 * t, "bottom", 4 * t, t)
        return out

    nf1, nf2 = bending.nf1, bending.nf2
    n_t_y = region_count(t, D, nf1)
    n_t_z = region_count(t, B, nf2)
    n_web_y = region_count(D - 4 * t, D, nf1)
    n_flange_z = region_count(B - 4 * t, B, nf2)
    yi = D / 2 - 2 * t
    zi = B / 2 - 2 * t

    # flanges (top, bottom), then webs (negative z, positive z)
    out.append(QuadPatch(flat, n_flange_z, n_t_y,
                         ((D / 2, -zi), (D / 2, zi), (D / 2 - t, zi), (D / 2 - t, -zi))))
    out.append(QuadPatch(flat, n_flange_z, n_t_y,
                         ((-D / 2 + t, -zi), (-D / 2 + t, zi), (-D / 2, zi), (-D / 2, -zi))))
    out.append(QuadPatch(flat, n_t_z, n_web_y,
                         ((yi, -B / 2), (yi, -B / 2 + t), (-yi, -B / 2 + t), (-yi, -B / 2))))
    out.append(QuadPatch(flat, n_t_z, n_web_y,
                         ((yi, B / 2 - t), (yi, B / 2), (-yi, B / 2), (-yi, B / 2 - t))))

    size = min(D / float(nf1), B / float(nf2))
    n_circ = int(math.ceil(t * math.pi / size))
    n_rad = int(math.ceil(t / size))
    for yc, zc, start, end in ((yi, zi, 0.0, 90.0), (yi, -zi, 270.0, 360.0),
                               (-yi, -zi, 180.0, 270.0), (-yi, zi, 90.0, 180.0)):
        out.append(CircPatch(corner, n_circ, n_rad, yc, zc, t, 2 * t, start, end))
    return out


# ============================================================================
# RECTANGULAR HSS
# ============================================================================

def _rect_hss_materials(sec: SectionBuilder, steel: TubeSteel, t: float,
                        steel_type: HSSSteelType) -> Tuple[int, int]:
    flat = sec.tags.at(0)
    corner = sec.tags.at(1)
    if steel_type in (HSSSteelType.PROPOSED_FOR_BEHAVIOR,
                      HSSSteelType.PROPOSED_FOR_BEHAVIOR_NO_LB):
        sec.define(shen_steel(flat, steel.Es, steel.Fy, steel.Fu, steel.eu,
                              steel.units, ShenSteelType.CFT,
                              initial_plastic_strain=EPO_FLAT))
        sec.define(shen_steel(corner, steel.Es, steel.Fy_corner, steel.Fu_corner,
                              steel.eu, steel.units, ShenSteelType.CFT,
                              initial_plastic_strain=EPO_CORNER))
    elif steel_type in (HSSSteelType.ABDEL_RAHMAN,
                        HSSSteelType.ABDEL_RAHMAN_LOW_HARDENING):
        ratio = 0.001 if steel_type is HSSSteelType.ABDEL_RAHMAN_LOW_HARDENING else 0.005
        sec.define(hss_steel_abdel_rahman(flat, steel.Fy, steel.Es,
                                          hardening_ratio=ratio))
        # inside corner radius taken equal to the wall thickness
        sec.define(hss_steel_abdel_rahman(corner, steel.Fy, steel.Es,
                                          corner=(steel.Fu, t, t),
                                          hardening_ratio=ratio))
    elif steel_type is HSSSteelType.ELASTIC_PP:
        for tag in (flat, corner):
            sec.define(elastic_pp(tag, steel.Es, steel.Fy / steel.Es))
    else:
        for tag in (flat, corner):
            sec.define(steel02(tag, steel.Fy, steel.Es, STEEL02_HARDENING))
    return flat, corner


def rect_hss_section(section_id, start_mat_tag: int, nf1, nf2_or_mode,
                     units: Union[UnitSystem, str],
                     D: float, B: float, t: float, Fy: float,
                     Fu: Union[float, str] = "calc",
                     Es: Union[float, str] = "calc",
                     steel_type: Union[HSSSteelType, str] = HSSSteelType.PROPOSED_FOR_BEHAVIOR,
                     added_elastic: Optional[AddedElastic] = None,
                     GJ: Union[float, str, None] = None) -> SectionDescriptor:
    """Rectangular HSS fiber section.

    Args:
        section_id:    Section tag, 'noSection' or 'materialsOnly'.
        start_mat_tag: First material tag (N flat, N+1 corner, N+2 elastic).
        nf1, nf2_or_mode: Fiber targets; 'strong'/'weak' for 2D.
        units:         'US' or 'SI'.
        D:             Depth (along y).
        B:             Width (along z).
        t:             Wall thickness.
        Fy, Fu, Es:    Steel properties; Fu and Es accept 'calc'.
        steel_type:    Steel material model.
        added_elastic: Optional synthetic elastic stiffness.
        GJ:            Torsional stiffness or 'calc' (default).

    Returns:
        SectionDescriptor.
    """
    family = RECT_FAMILY
    bending = parse_bending(family, nf1, nf2_or_mode)
    D, B, t = float(D), float(B), float(t)
    check_rect_tube(family, D, B, t)
    steel = tube_steel(family, Fy, Fu, Es, units)
    steel_type = parse_material_type(family, HSSSteelType, steel_type)
    if steel_type is HSSSteelType.PROPOSED_FOR_BEHAVIOR:
        logger.debug("%s: ProposedForBehavior steel has no local buckling "
                     "model for bare tubes; using ProposedForBehavior_noLB.", family)

    section_gj = None
    if defines_section(family, section_id):
        value = parse_gj(family, GJ)
        if not isinstance(value, float):
            value = (steel_shear_modulus(steel.Es)
                     * rect_tube_torsion_constant(D, B, t))
        section_gj = with_added_gj(value, added_elastic, bending)

    with open_section(family, section_id, start_mat_tag, bending,
                      GJ=section_gj) as sec:
        flat, corner = _rect_hss_materials(sec, steel, t, steel_type)
        if not sec.materials_only:
            sec.extend(rect_tube_fibers(flat, corner, bending, D, B, t))
        sec.add_elastic(bending, added_elastic, tag=sec.tags.at(2))
    return sec.descriptor


# ============================================================================
# ROUND HSS
# ============================================================================

def round_tube_fibers(mat: int, bending: Bending, D: float, t: float) -> list:
    """Fibers/patches of a round tube; 2D modes are identical by symmetry."""
    ro = D / 2.0
    if not bending.is_3d:
        n = region_count(ro, D, bending.nf1)
        return (half_circ_tube_patch_2d(mat, n, 0.0, "top", D, t)
                + half_circ_tube_patch_2d(mat, n, 0.0, "bottom", D, t))
    nf = max(bending.nf1, bending.nf2)
    n_circ = region_count(math.pi * D, D, nf)
    n_rad = region_count(t, D, nf)
    return [CircPatch(mat, n_circ, n_rad, 0.0, 0.0, ro - t, ro, 0.0, 360.0)]


def round_hss_section(section_id, start_mat_tag: int, nf1, nf2_or_mode,
                      units: Union[UnitSystem, str],
                      D: float, t: float, Fy: float,
                      Fu: Union[float, str] = "calc",
                      Es: Union[float, str] = "calc",
                      steel_type: Union[HSSSteelType, str] = HSSSteelType.PROPOSED_FOR_BEHAVIOR,
                      added_elastic: Optional[AddedElastic] = None,
                      GJ: Union[float, str, None] = None) -> SectionDescriptor:
    """Round HSS fiber section.

    Same arguments as ``rect_hss_section`` with outside diameter ``D``.
    Material tags: N tube, N+2 added elastic.
    """
    family = ROUND_FAMILY
    bending = parse_bending(family, nf1, nf2_or_mode)
    D, t = float(D), float(t)
    check_round_tube(family, D, t)
    steel = tube_steel(family, Fy, Fu, Es, units)
    steel_type = parse_material_type(
        family, HSSSteelType, steel_type,
        allowed=[m for m in HSSSteelType if m is not HSSSteelType.ABDEL_RAHMAN_LOW_HARDENING])

    section_gj = None
    if defines_section(family, section_id):
        value = parse_gj(family, GJ)
        if not isinstance(value, float):
            value = steel_shear_modulus(steel.Es) * round_tube_torsion_constant(D, t)
        section_gj = with_added_gj(value, added_elastic, bending)

    with open_section(family, section_id, start_mat_tag, bending,
                      GJ=section_gj) as sec:
        tag = sec.tags.at(0)
        if steel_type in (HSSSteelType.PROPOSED_FOR_BEHAVIOR,
                          HSSSteelType.PROPOSED_FOR_BEHAVIOR_NO_LB):
            sec.define(shen_steel(tag, steel.Es, steel.Fy, steel.Fu, steel.eu,
                                  steel.units, ShenSteelType.COLD_FORMED,
                                  initial_plastic_strain=EPO_CORNER,
                                  initial_plastic_modulus=steel.Es / 100.0))
        elif steel_type is HSSSteelType.ABDEL_RAHMAN:
            sec.define(hss_steel_abdel_rahman(tag, steel.Fy, steel.Es))
        elif steel_type is HSSSteelType.ELASTIC_PP:
            sec.define(elastic_pp(tag, steel.Es, steel.Fy / steel.Es))
        else:
            sec.define(steel02(tag, steel.Fy, steel.Es, STEEL02_HARDENING))
        if not sec.materials_only:
            sec.extend(round_tube_fibers(tag, bending, D, t))
        sec.add_elastic(bending, added_elastic, tag=sec.tags.at(2))
    return sec.descriptor
