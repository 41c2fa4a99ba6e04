"""
Concrete-filled steel tube (CFT) fiber sections.

Circular (CCFT) and rectangular (RCFT) tubes filled with concrete. The steel
tube uses the same decomposition as the bare HSS sections; the concrete
fills the tube interior exactly (including the rounded corners of a
rectangular tube, which are quarter disks of radius t).

Confinement and local buckling follow the proposed-for-behavior
formulation: the tube's hoop stress confines a circular core, local
buckling strain and post-buckling slope come from slenderness regressions
on D/t*(Fy/Es) (CCFT) or H/t*sqrt(Fy/Es) (RCFT).

Material tags (start tag N):
    CCFT: N steel, N+1 concrete, N+2 added elastic
    RCFT: N flat walls, N+1 corners, N+2 concrete, N+3 added elastic

References:
    - Denavit, M.D. and Hajjar, J.F. (2014). NSEL-034, Chapter 3.
    - Sakino, K. et al. (2004). ASCE J. Struct. Eng. 130(2).
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Optional, Union

from fibersec.errors import SectionError
from fibersec.geometry import (
    CircPatch,
    QuadPatch,
    half_circ_tube_patch_2d,
    rect_patch_2d,
    solid_circle_rings,
)
from fibersec.hss import (
    EPO_CORNER,
    EPO_FLAT,
    TubeSteel,
    check_rect_tube,
    check_round_tube,
    rect_tube_fibers,
    round_tube_fibers,
    tube_steel,
)
from fibersec.materials import (
    POPOVICS,
    Confinement,
    LocalBuckling,
    ShenSteelType,
    TensionType,
    ccft_concrete_sakino,
    chang_mander_concrete,
    design_concrete_modulus,
    elastic,
    elastic_no_tension,
    elastic_pp,
    hss_steel_abdel_rahman,
    rcft_concrete_sakino,
    rcft_steel_sakino,
    shen_steel,
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
    GJMode,
    circle_torsion_constant,
    composite_gj,
    concrete_shear_modulus,
    parse_gj,
    rect_solid_torsion_constant,
    rect_tube_torsion_constant,
    round_tube_torsion_constant,
    steel_shear_modulus,
)
from fibersec.units import UnitSystem

logger = logging.getLogger(__name__)

CCFT_FAMILY = "ccftSection"
RCFT_FAMILY = "rcftSection"


class CFTSteelType(str, Enum):
    PROPOSED_FOR_BEHAVIOR = "ProposedForBehavior"
    PROPOSED_FOR_BEHAVIOR_NO_LB = "ProposedForBehavior_noLB"
    ABDEL_RAHMAN = "AbdelRahman"
    MODIFIED_ABDEL_RAHMAN = "ModifiedAbdelRahman"
    ELASTIC = "Elastic"
    ELASTIC_PP = "ElasticPP"
    SAKINO = "Sakino"


class CFTConcreteType(str, Enum):
    PROPOSED_FOR_BEHAVIOR = "ProposedForBehavior"
    PROPOSED_FOR_BEHAVIOR_NO_SOFTENING = "ProposedForBehavior_NoSoftening"
    PROPOSED_FOR_DESIGN = "ProposedForDesign"
    PROPOSED_FOR_DESIGN_EI = "ProposedForDesign_EI"
    ELASTIC = "Elastic"
    ELASTIC_NO_TENSION = "ElasticNoTension"
    SAKINO = "Sakino"


CCFT_STEEL_TYPES = (
    CFTSteelType.PROPOSED_FOR_BEHAVIOR,
    CFTSteelType.PROPOSED_FOR_BEHAVIOR_NO_LB,
    CFTSteelType.ABDEL_RAHMAN,
    CFTSteelType.ELASTIC_PP,
    CFTSteelType.SAKINO,
)
CCFT_CONCRETE_TYPES = (
    CFTConcreteType.PROPOSED_FOR_BEHAVIOR,
    CFTConcreteType.PROPOSED_FOR_BEHAVIOR_NO_SOFTENING,
    CFTConcreteType.PROPOSED_FOR_DESIGN,
    CFTConcreteType.PROPOSED_FOR_DESIGN_EI,
    CFTConcreteType.SAKINO,
)
RCFT_CONCRETE_TYPES = (
    CFTConcreteType.PROPOSED_FOR_BEHAVIOR,
    CFTConcreteType.PROPOSED_FOR_DESIGN,
    CFTConcreteType.PROPOSED_FOR_DESIGN_EI,
    CFTConcreteType.ELASTIC,
    CFTConcreteType.ELASTIC_NO_TENSION,
    CFTConcreteType.SAKINO,
)


def _check_fc(family: str, fc) -> float:
    fc = float(fc)
    if fc <= 0.0:
        raise SectionError(family, "concrete compressive strength should be input as a positive value.")
    return fc


def _cft_gj(family: str, GJ, steel_gj: float, concrete_gj: float) -> float:
    value = parse_gj(family, GJ, default=GJMode.STEEL_ONLY)
    if isinstance(value, float):
        return value
    if value is GJMode.CALC:
        value = GJMode.STEEL_ONLY
    return composite_gj(family, value, steel_gj, concrete_gj)


# ============================================================================
# CIRCULAR CFT
# ============================================================================

def ccft_section(section_id, start_mat_tag: int, nf1, nf2_or_mode,
                 units: Union[UnitSystem, str],
                 D: float, t: float, Fy: float,
                 Fu: Union[float, str], Es: Union[float, str], fc: float,
                 steel_type: Union[CFTSteelType, str] = CFTSteelType.PROPOSED_FOR_BEHAVIOR,
                 concrete_type: Union[CFTConcreteType, str] = CFTConcreteType.PROPOSED_FOR_BEHAVIOR,
                 added_elastic: Optional[AddedElastic] = None,
                 GJ: Union[float, str, None] = None) -> SectionDescriptor:
    """Circular concrete-filled tube fiber section.

    Args:
        section_id:    Section tag, 'noSection' or 'materialsOnly'.
        start_mat_tag: First material tag (N steel, N+1 concrete, N+2 elastic).
        nf1, nf2_or_mode: Fiber targets; 'strong'/'weak' for 2D.
        units:         'US' or 'SI'.
        D:             Tube outside diameter.
        t:             Tube wall thickness.
        Fy, Fu, Es:    Steel properties; Fu and Es accept 'calc'.
        fc:            Concrete compressive strength.
        steel_type:    Tube steel model.
        concrete_type: Core concrete model.
        added_elastic: Optional synthetic elastic stiffness.
        GJ:            Number, or 'steelonly' (default), 'concreteonly', 'max'.

    Returns:
        SectionDescriptor.
    """
    family = CCFT_FAMILY
    bending = parse_bending(family, nf1, nf2_or_mode)
    D, t = float(D), float(t)
    check_round_tube(family, D, t)
    steel = tube_steel(family, Fy, Fu, Es, units, fu_above_fy=False)
    fc = _check_fc(family, fc)
    steel_type = parse_material_type(family, CFTSteelType, steel_type, CCFT_STEEL_TYPES)
    concrete_type = parse_material_type(family, CFTConcreteType, concrete_type,
                                        CCFT_CONCRETE_TYPES)

    rs = 0.5 * D
    rc = rs - t

    section_gj = None
    if defines_section(family, section_id):
        steel_gj = steel_shear_modulus(steel.Es) * round_tube_torsion_constant(D, t)
        concrete_gj = (concrete_shear_modulus(design_concrete_modulus(fc, steel.units))
                       * circle_torsion_constant(2 * rc))
        section_gj = with_added_gj(_cft_gj(family, GJ, steel_gj, concrete_gj),
                                   added_elastic, bending)

    with open_section(family, section_id, start_mat_tag, bending,
                      GJ=section_gj) as sec:
        stl = sec.tags.at(0)
        conc = sec.tags.at(1)
        _ccft_materials(sec, stl, conc, steel, fc, D, t, steel_type, concrete_type)
        if not sec.materials_only:
            sec.extend(round_tube_fibers(stl, bending, D, t))
            sec.extend(_ccft_core_fibers(conc, bending, D, rc))
        sec.add_elastic(bending, added_elastic, tag=sec.tags.at(2))
    return sec.descriptor


def ccft_parameters(D: float, t: float, Fy: float, Es: float, fc: float) -> dict:
    """Confinement and local buckling parameters of a circular CFT.

    Returns a dict with alpha_hoop, fl, rn_post, R, local_buckling_strain
    (positive magnitude), Ksft and frs.
    """
    Dt = D / t
    alpha_hoop = max(0.138 - 0.00174 * Dt, 0.0)
    R = Dt * (Fy / Es)
    return {
        "alpha_hoop": alpha_hoop,
        "fl": 2 * alpha_hoop * Fy / (Dt - 2),
        "rn_post": 0.4 + 0.016 * Dt * (fc / Fy),
        "R": R,
        "local_buckling_strain": 0.2139 * math.pow(R, -1.413) * (Fy / Es),
        "Ksft": -Es / 30,
        "frs": min(0.17 / R, 1.0),
    }


def _ccft_materials(sec: SectionBuilder, stl: int, conc: int, steel: TubeSteel,
                    fc: float, D: float, t: float, steel_type: CFTSteelType,
                    concrete_type: CFTConcreteType):
    p = ccft_parameters(D, t, steel.Fy, steel.Es, fc)
    logger.debug("%s: fl=%g lb=%g R=%g", sec.family, p["fl"],
                 p["local_buckling_strain"], p["R"])
    Es, Fy = steel.Es, steel.Fy

    if steel_type in (CFTSteelType.PROPOSED_FOR_BEHAVIOR,
                      CFTSteelType.PROPOSED_FOR_BEHAVIOR_NO_LB):
        lb = None
        if steel_type is CFTSteelType.PROPOSED_FOR_BEHAVIOR:
            lb = LocalBuckling(
                strain=-p["local_buckling_strain"],
                Ksft=p["Ksft"],
                alpha_fulb=p["frs"],
                ref="Flb",
                degradation_ep=(10.0 * p["R"], 0.05),
                degradation_kappa=(15.0 * p["R"], 0.05),
            )
        sec.define(shen_steel(stl, Es, Fy, steel.Fu, steel.eu, steel.units,
                              ShenSteelType.CFT, initial_plastic_strain=EPO_CORNER,
                              biaxial_stress=p["alpha_hoop"], local_buckling=lb))
    elif steel_type is CFTSteelType.ABDEL_RAHMAN:
        sec.define(hss_steel_abdel_rahman(stl, Fy, Es))
    elif steel_type is CFTSteelType.ELASTIC_PP:
        sec.define(elastic_pp(stl, Es, Fy / Es))
    else:
        sec.define(elastic_pp(stl, Es, 1.08 * Fy / Es, -0.89 * Fy / Es, 0.0))

    confinement = Confinement.symmetric(p["fl"])
    if concrete_type is CFTConcreteType.PROPOSED_FOR_BEHAVIOR:
        sec.define(chang_mander_concrete(conc, fc, steel.units, confinement,
                                         rn_post=p["rn_post"]))
    elif concrete_type is CFTConcreteType.PROPOSED_FOR_BEHAVIOR_NO_SOFTENING:
        sec.define(chang_mander_concrete(conc, fc, steel.units, confinement,
                                         rn_post=0.0))
    elif concrete_type is CFTConcreteType.PROPOSED_FOR_DESIGN:
        sec.define(chang_mander_concrete(conc, fc, steel.units, confinement,
                                         tension=TensionType.NONE,
                                         rn_pre=POPOVICS, rn_post=POPOVICS))
    elif concrete_type is CFTConcreteType.PROPOSED_FOR_DESIGN_EI:
        sec.define(chang_mander_concrete(conc, fc, steel.units, confinement,
                                         rn_pre=POPOVICS, rn_post=POPOVICS))
    else:
        sec.define(ccft_concrete_sakino(conc, fc, D, t, Fy, steel.units))


def _ccft_core_fibers(conc: int, bending: Bending, D: float, rc: float) -> list:
    if not bending.is_3d:
        n = region_count(rc, D, bending.nf1)
        return (half_circ_tube_patch_2d(conc, n, 0.0, "top", 2 * rc, rc)
                + half_circ_tube_patch_2d(conc, n, 0.0, "bottom", 2 * rc, rc))
    nf = max(bending.nf1, bending.nf2)
    return solid_circle_rings(conc, region_count(2 * rc * math.pi, D, nf),
                              region_count(2 * rc * 0.25, D, nf), rc)


# ============================================================================
# RECTANGULAR CFT
# ============================================================================

def rcft_parameters(D: float, B: float, t: float, Fy: float, Es: float,
                    fc: float) -> dict:
    """Local buckling and post-peak parameters of a rectangular CFT.

    Uses the larger face H = max(D, B). Returns a dict with H, rn_post, R1,
    R2, local_buckling_strain (negative), Ksft (clamped to at most -Es/30)
    and frs (clamped to at most 1).
    """
    H = max(D, B)
    R1 = (H / t) * math.sqrt(Fy / Es)
    R2 = (H / t) * (Fy / Es)
    return {
        "H": H,
        "rn_post": 1.7 * (H / t) * math.sqrt(Fy / Es) * (fc / Fy),
        "R1": R1,
        "R2": R2,
        "local_buckling_strain": -3.14 * math.pow(R1, -1.48) * (Fy / Es),
        "Ksft": min(3.22 * (0.08 - R2) * Es, -Es / 30.0),
        "frs": min(1.0 + 7.31 * (0.08 - R2), 1.0),
    }


def rcft_section(section_id, start_mat_tag: int, nf1, nf2_or_mode,
                 units: Union[UnitSystem, str],
                 D: float, B: float, t: float, Fy: float,
                 Fu: Union[float, str], Es: Union[float, str], fc: float,
                 steel_type: Union[CFTSteelType, str] = CFTSteelType.PROPOSED_FOR_BEHAVIOR,
                 concrete_type: Union[CFTConcreteType, str] = CFTConcreteType.PROPOSED_FOR_BEHAVIOR,
                 residual_stress_parameter: float = 0.75,
                 hardening_ratio: float = 0.005,
                 added_elastic: Optional[AddedElastic] = None,
                 GJ: Union[float, str, None] = None) -> SectionDescriptor:
    """Rectangular concrete-filled tube fiber section.

    Args:
        section_id:    Section tag, 'noSection' or 'materialsOnly'.
        start_mat_tag: First material tag (N flat, N+1 corner, N+2 concrete,
                       N+3 added elastic).
        nf1, nf2_or_mode: Fiber targets; 'strong'/'weak' for 2D.
        units:         'US' or 'SI'.
        D:             Depth (along y).
        B:             Width (along z).
        t:             Wall thickness.
        Fy, Fu, Es:    Steel properties; Fu and Es accept 'calc'.
        fc:            Concrete compressive strength.
        steel_type:    Tube steel model.
        concrete_type: Core concrete model.
        residual_stress_parameter, hardening_ratio:
                       Abdel-Rahman parameters for ``ModifiedAbdelRahman``.
        added_elastic: Optional synthetic elastic stiffness.
        GJ:            Number, or 'steelonly' (default), 'concreteonly', 'max'.

    Returns:
        SectionDescriptor.
    """
    family = RCFT_FAMILY
    bending = parse_bending(family, nf1, nf2_or_mode)
    D, B, t = float(D), float(B), float(t)
    check_rect_tube(family, D, B, t)
    steel = tube_steel(family, Fy, Fu, Es, units, fu_above_fy=False)
    fc = _check_fc(family, fc)
    steel_type = parse_material_type(family, CFTSteelType, steel_type)
    concrete_type = parse_material_type(family, CFTConcreteType, concrete_type,
                                        RCFT_CONCRETE_TYPES)

    section_gj = None
    if defines_section(family, section_id):
        steel_gj = steel_shear_modulus(steel.Es) * rect_tube_torsion_constant(D, B, t)
        concrete_gj = (concrete_shear_modulus(design_concrete_modulus(fc, steel.units))
                       * rect_solid_torsion_constant(D - 2 * t, B - 2 * t))
        section_gj = with_added_gj(_cft_gj(family, GJ, steel_gj, concrete_gj),
                                   added_elastic, bending)

    with open_section(family, section_id, start_mat_tag, bending,
                      GJ=section_gj) as sec:
        flat = sec.tags.at(0)
        corner = sec.tags.at(1)
        conc = sec.tags.at(2)
        _rcft_materials(sec, flat, corner, conc, steel, fc, D, B, t,
                        steel_type, concrete_type,
                        residual_stress_parameter, hardening_ratio)
        if not sec.materials_only:
            sec.extend(rect_tube_fibers(flat, corner, bending, D, B, t))
            sec.extend(_rcft_core_fibers(conc, bending, D, B, t))
        sec.add_elastic(bending, added_elastic, tag=sec.tags.at(3))
    return sec.descriptor


def _rcft_materials(sec: SectionBuilder, flat: int, corner: int, conc: int,
                    steel: TubeSteel, fc: float, D: float, B: float, t: float,
                    steel_type: CFTSteelType, concrete_type: CFTConcreteType,
                    rs: float, hardening_ratio: float):
    p = rcft_parameters(D, B, t, steel.Fy, steel.Es, fc)
    logger.debug("%s: lb=%g Ksft=%g frs=%g", sec.family,
                 p["local_buckling_strain"], p["Ksft"], p["frs"])
    Es, Fy, Fu = steel.Es, steel.Fy, steel.Fu

    if steel_type in (CFTSteelType.PROPOSED_FOR_BEHAVIOR,
                      CFTSteelType.PROPOSED_FOR_BEHAVIOR_NO_LB):
        lb = None
        if steel_type is CFTSteelType.PROPOSED_FOR_BEHAVIOR:
            lb = LocalBuckling(
                strain=p["local_buckling_strain"],
                Ksft=p["Ksft"],
                alpha_fulb=p["frs"],
                ref="Fy",
                degradation_ep=(20.0 * p["R2"], 0.05),
                degradation_kappa=(30.0 * p["R2"], 0.05),
            )
        sec.define(shen_steel(flat, Es, Fy, Fu, steel.eu, steel.units,
                              ShenSteelType.CFT, initial_plastic_strain=EPO_FLAT,
                              local_buckling=lb))
        sec.define(shen_steel(corner, Es, steel.Fy_corner, steel.Fu_corner,
                              steel.eu, steel.units, ShenSteelType.CFT,
                              initial_plastic_strain=EPO_CORNER,
                              local_buckling=lb))
    elif steel_type is CFTSteelType.ABDEL_RAHMAN:
        sec.define(hss_steel_abdel_rahman(flat, Fy, Es))
        sec.define(hss_steel_abdel_rahman(corner, Fy, Es, corner=(Fu, t, t)))
    elif steel_type is CFTSteelType.MODIFIED_ABDEL_RAHMAN:
        sec.define(hss_steel_abdel_rahman(flat, Fy, Es,
                                          residual_stress_parameter=rs,
                                          hardening_ratio=hardening_ratio))
        sec.define(hss_steel_abdel_rahman(corner, Fy, Es, corner=(Fu, t, t),
                                          residual_stress_parameter=rs,
                                          hardening_ratio=hardening_ratio))
    elif steel_type is CFTSteelType.ELASTIC:
        sec.define(elastic(flat, Es))
        sec.define(elastic(corner, Es))
    elif steel_type is CFTSteelType.ELASTIC_PP:
        sec.define(elastic_pp(flat, Es, Fy / Es))
        sec.define(elastic_pp(corner, Es, Fy / Es))
    else:
        sec.define(rcft_steel_sakino(flat, Fy, Es, p["H"], t))
        sec.define(rcft_steel_sakino(corner, Fy, Es, p["H"], t))

    if concrete_type is CFTConcreteType.PROPOSED_FOR_BEHAVIOR:
        sec.define(chang_mander_concrete(conc, fc, steel.units,
                                         rn_post=p["rn_post"]))
    elif concrete_type is CFTConcreteType.PROPOSED_FOR_DESIGN:
        sec.define(chang_mander_concrete(conc, fc, steel.units,
                                         tension=TensionType.NONE,
                                         rn_pre=POPOVICS, rn_post=POPOVICS))
    elif concrete_type is CFTConcreteType.PROPOSED_FOR_DESIGN_EI:
        sec.define(chang_mander_concrete(conc, fc, steel.units,
                                         rn_pre=POPOVICS, rn_post=POPOVICS))
    elif concrete_type is CFTConcreteType.ELASTIC:
        sec.define(elastic(conc, design_concrete_modulus(fc, steel.units)))
    elif concrete_type is CFTConcreteType.ELASTIC_NO_TENSION:
        sec.define(elastic_no_tension(conc, design_concrete_modulus(fc, steel.units)))
    else:
        sec.define(rcft_concrete_sakino(conc, fc, p["H"], t, Fy, steel.units))


def _rcft_core_fibers(conc: int, bending: Bending, D: float, B: float,
                      t: float) -> list:
    """Concrete filling a rectangular tube with corner arcs of radius 2t."""
    out: list = []
    if not bending.is_3d:
        H, W = (D, B) if bending.type is BendingType.STRONG else (B, D)
        nf1 = bending.nf1
        n_t = region_count(t, H, nf1)
        out += rect_patch_2d(conc, n_t, W - 4 * t, H / 2 - 2 * t, H / 2 - t)
        out += rect_patch_2d(conc, n_t, W - 4 * t, -H / 2 + t, -H / 2 + 2 * t)
        out += half_circ_tube_patch_2d(conc, n_t, H / 2 - 2 * t, "top", 2 * t, t)
        out += half_circ_tube_patch_2d(conc, n_t, -H / 2 + 2 * t, "bottom", 2 * t, t)
        out += rect_patch_2d(conc, region_count(H - 4 * t, H, nf1), W - 2 * t,
                             -H / 2 + 2 * t, H / 2 - 2 * t)
        return out

    nf1, nf2 = bending.nf1, bending.nf2
    yi = D / 2 - 2 * t
    zi = B / 2 - 2 * t
    size = min(D / float(nf1), B / float(nf2))
    n_circ = int(math.ceil(0.5 * t * math.pi / size))
    n_rad = int(math.ceil(t / size))
    for yc, zc, start, end in ((yi, zi, 0.0, 90.0), (yi, -zi, 270.0, 360.0),
                               (-yi, -zi, 180.0, 270.0), (-yi, zi, 90.0, 180.0)):
        out.append(CircPatch(conc, n_circ, n_rad, yc, zc, 0.0, t, start, end))

    n_t_y = region_count(t, D, nf1)
    n_flange_z = region_count(B - 4 * t, B, nf2)
    out.append(QuadPatch(conc, n_flange_z, n_t_y,
                         ((D / 2 - t, -zi), (D / 2 - t, zi), (yi, zi), (yi, -zi))))
    out.append(QuadPatch(conc, n_flange_z, n_t_y,
                         ((-yi, -zi), (-yi, zi), (-D / 2 + t, zi), (-D / 2 + t, -zi))))
    out.append(QuadPatch(conc, region_count(B - 2 * t, B, nf2),
                         region_count(D - 4 * t, D, nf1),
                         ((yi, -B / 2 + t), (yi, B / 2 - t),
                          (-yi, B / 2 - t), (-yi, -B / 2 + t))))
    return out
