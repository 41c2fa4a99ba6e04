"""
Wide-flange (WF) steel fiber sections.

The section is decomposed into two flange rectangles and a clear web
rectangle (no overlap at the flange/web junction). Optional fillets add
point fibers at the spandrel centroids; the optional Lehigh residual stress
pattern splits each flange into sectors, one material per stress level.

Coordinate system:
    y = 0 at mid-depth, z = 0 at the web center line.
    Strong-axis bending moves fibers along y (depth d), weak-axis along z
    (flange width bf). 2D weak-axis sections list z positions as y.

Material tags (start tag N, allocated in order):
    Plain:                 N
    Steel01 + residual:    N base Steel01, then one InitStressMaterial wrapper
                           per stress level
    Lehigh (n sectors):    N .. N+n-1 flange sectors (tip to center), N+n web
    Added elastic:         next free tag

References:
    - Galambos, T.V. and Ketter, R.L. (1959). Lehigh residual stress pattern.
    - Denavit, M.D. and Hajjar, J.F. (2014). NSEL-034, Section 3.3.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Union

from fibersec.errors import SectionError
from fibersec.geometry import Fiber, QuadPatch, rect_patch_2d
from fibersec.materials import (
    LocalBuckling,
    MaterialDefinition,
    ShenSteelType,
    bilinear_kinematic,
    elastic,
    elastic_pp,
    init_stress_material,
    lehigh_residual_stress,
    shen_steel,
    steel01,
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
    region_count,
    with_added_gj,
)
from fibersec.torsion import GJMode, parse_gj, steel_shear_modulus, wf_torsion_constant
from fibersec.units import UnitSystem

logger = logging.getLogger(__name__)

FAMILY = "wfSection"


# ============================================================================
# DIMENSIONS
# ============================================================================

@dataclass(frozen=True)
class WFDimensions:
    """Wide-flange dimensions.

    Attributes:
        d:  Overall depth.
        tw: Web thickness.
        bf: Flange width.
        tf: Flange thickness.
        k:  Distance from the outer flange face to the web toe of the fillet.
            ``k == tf`` (the default) means no fillet.
    """
    d: float
    tw: float
    bf: float
    tf: float
    k: Optional[float] = None

    def validate(self, family: str = FAMILY):
        if self.d <= 0.0 or self.tw <= 0.0 or self.bf <= 0.0 or self.tf <= 0.0:
            raise SectionError(family, "section dimensions should be input as positive values.")
        if 2 * self.tf >= self.d:
            raise SectionError(family, f"flange thickness {self.tf} leaves no web in depth {self.d}.")
        if self.tw > self.bf:
            raise SectionError(family, f"web thickness {self.tw} exceeds flange width {self.bf}.")
        if self.k is not None and self.k < self.tf:
            raise SectionError(family, f"k ({self.k}) should not be less than tf ({self.tf}).")

    @property
    def dw(self) -> float:
        return self.d - 2 * self.tf

    @property
    def d1(self) -> float:
        return self.dw / 2.0

    @property
    def d2(self) -> float:
        return self.d / 2.0

    @property
    def b1(self) -> float:
        return self.tw / 2.0

    @property
    def b2(self) -> float:
        return self.bf / 2.0

    @property
    def fillet_radius(self) -> float:
        if self.k is None:
            return 0.0
        return max(self.k - self.tf, 0.0)

    @property
    def fillet_area(self) -> float:
        """Area of one fillet, (1 - pi/4)*r^2."""
        r = self.fillet_radius
        return (1 - 0.25 * math.pi) * r * r

    @property
    def fillet_offset(self) -> float:
        """Distance of the fillet centroid from the flange/web faces.

        The spandrel centroid lies 2r/(12 - 3*pi) from the arc center, so
        r - 2r/(12 - 3*pi) from the two faces it is bounded by.
        """
        r = self.fillet_radius
        return r - 2 * r / (12 - 3 * math.pi)

    @property
    def area(self) -> float:
        return 2 * self.bf * self.tf + self.dw * self.tw + 4 * self.fillet_area


# ============================================================================
# STEEL MATERIAL VARIANTS
# ============================================================================

class WFSteel:
    """Base of the WF steel material variants.

    ``with_residual_stress`` maps a residual stress onto one material
    definition of the variant's kind. Variants that cannot carry a residual
    stress set ``supports_residual_stress = False``.
    """
    supports_residual_stress = True

    def with_residual_stress(self, tag: int, fr: float,
                             dims: WFDimensions) -> MaterialDefinition:
        raise NotImplementedError

    def define_plain(self, sec: SectionBuilder, dims: WFDimensions) -> int:
        """Define the single material used without a residual stress pattern."""
        return sec.define(self.with_residual_stress(sec.tags.take(), 0.0, dims))

    def define_levels(self, sec: SectionBuilder, stresses: List[float],
                      dims: WFDimensions) -> List[int]:
        """Define one material per residual stress level, in order."""
        return [sec.define(self.with_residual_stress(sec.tags.take(), fr, dims))
                for fr in stresses]


@dataclass
class ExistingMaterial(WFSteel):
    """Fibers use an already defined material ``tag``."""
    tag: int
    Es: Optional[float] = None
    supports_residual_stress = False

    def define_plain(self, sec, dims):
        return self.tag


@dataclass
class ElasticSteel(WFSteel):
    Es: float
    supports_residual_stress = False

    def define_plain(self, sec, dims):
        return sec.define(elastic(sec.tags.take(), self.Es))


@dataclass
class ElasticPPSteel(WFSteel):
    Es: float
    Fy: float

    def with_residual_stress(self, tag, fr, dims):
        return elastic_pp(tag, self.Es, self.Fy / self.Es, -self.Fy / self.Es,
                          -fr / self.Es)


@dataclass
class ElasticSmallStiffnessSteel(WFSteel):
    """Elastic-plastic with a post-yield tangent of Es/1000."""
    Es: float
    Fy: float

    def with_residual_stress(self, tag, fr, dims):
        return bilinear_kinematic(tag, self.Es, self.Fy, self.Es / 1000.0,
                                  initial_stress=fr)


@dataclass
class HardeningSteel(WFSteel):
    """Bilinear kinematic hardening with post-yield tangent b*Es."""
    Es: float
    Fy: float
    b: float

    def with_residual_stress(self, tag, fr, dims):
        return bilinear_kinematic(tag, self.Es, self.Fy, self.b * self.Es,
                                  initial_stress=fr)


@dataclass
class Steel01Steel(WFSteel):
    """Steel01 base material; residual stress through InitStressMaterial."""
    Es: float
    Fy: float
    b: float

    def define_plain(self, sec, dims):
        return sec.define(steel01(sec.tags.take(), self.Fy, self.Es, self.b))

    def define_levels(self, sec, stresses, dims):
        base = self.define_plain(sec, dims)
        return [sec.define(init_stress_material(sec.tags.take(), base, fr))
                for fr in stresses]


@dataclass
class Steel02Steel(WFSteel):
    Es: float
    Fy: float
    b: float

    def with_residual_stress(self, tag, fr, dims):
        return steel02(tag, self.Fy, self.Es, self.b, sig_init=fr)


@dataclass
class ShenSteel(WFSteel):
    """Hot-rolled Shen steel with the residual stress as initial stress."""
    Es: float
    Fy: float
    Fu: float
    eu: float
    units: Union[UnitSystem, str]

    def with_residual_stress(self, tag, fr, dims):
        return shen_steel(tag, self.Es, self.Fy, self.Fu, self.eu, self.units,
                          ShenSteelType.HOT_ROLLED, initial_stress=fr)


@dataclass
class ShenSteelDegrade(WFSteel):
    """Shen steel with flange local buckling and post-buckling degradation.

    The buckling strain follows the plastic hinge length ratio
    Lp/L = 0.405 - 0.0033*dw/tw - 0.0268*bf/(2*tf) + 0.184*(Fu/Fy - 1).
    """
    Es: float
    Fy: float
    Fu: float
    eu: float
    units: Union[UnitSystem, str]

    def local_buckling_strain(self, dims: WFDimensions) -> float:
        LpLi = (0.405 - 0.0033 * (dims.dw / dims.tw)
                - 0.0268 * (0.5 * dims.bf / dims.tf)
                + 0.184 * (self.Fu / self.Fy - 1))
        return -self.Fy / self.Es * (1 + 100 * LpLi / (1 - LpLi))

    def with_residual_stress(self, tag, fr, dims):
        elb = self.local_buckling_strain(dims)
        lb = LocalBuckling(
            strain=elb + fr / self.Es,
            Ksft=-self.Es / 200.0,
            alpha_fulb=0.2,
            ref="Fy",
            degradation_ep=(2.0, 0.05),
            degradation_kappa=(2.0, 0.05),
        )
        return shen_steel(tag, self.Es, self.Fy, self.Fu, self.eu, self.units,
                          ShenSteelType.HOT_ROLLED, initial_stress=fr,
                          local_buckling=lb)


@dataclass(frozen=True)
class Lehigh:
    """Lehigh residual stress pattern: tip stress ``frc`` (<= 0), ``n_sectors`` levels."""
    frc: float
    n_sectors: int


# ============================================================================
# FIBERS
# ============================================================================

def _fillet_fibers(dims: WFDimensions, mat_tag: int,
                   bending: Bending) -> List[Fiber]:
    if dims.fillet_radius <= 0.0:
        return []
    A = dims.fillet_area
    off = dims.fillet_offset
    if bending.type is BendingType.STRONG:
        y = dims.d1 - off
        return [Fiber(y, 0.0, 2 * A, mat_tag), Fiber(-y, 0.0, 2 * A, mat_tag)]
    if bending.type is BendingType.WEAK:
        z = dims.b1 + off
        return [Fiber(z, 0.0, 2 * A, mat_tag), Fiber(-z, 0.0, 2 * A, mat_tag)]
    y = dims.d1 - off
    z = dims.b1 + off
    return [Fiber(y, z, A, mat_tag), Fiber(-y, z, A, mat_tag),
            Fiber(y, -z, A, mat_tag), Fiber(-y, -z, A, mat_tag)]


def _plain_fibers(dims: WFDimensions, mat: int, bending: Bending) -> list:
    d, tw, bf, tf = dims.d, dims.tw, dims.bf, dims.tf
    d1, d2, b1, b2 = dims.d1, dims.d2, dims.b1, dims.b2
    nf1 = bending.nf1
    out: list = []
    if bending.type is BendingType.STRONG:
        out += rect_patch_2d(mat, region_count(tf, d, nf1), bf, d1, d2)
        out += rect_patch_2d(mat, region_count(dims.dw, d, nf1), tw, -d1, d1)
        out += rect_patch_2d(mat, region_count(tf, d, nf1), bf, -d2, -d1)
    elif bending.type is BendingType.WEAK:
        n_flange = region_count((bf - tw) / 2, bf, nf1)
        out += rect_patch_2d(mat, n_flange, 2 * tf, b1, b2)
        out += rect_patch_2d(mat, region_count(tw, bf, nf1), d, -b1, b1)
        out += rect_patch_2d(mat, n_flange, 2 * tf, -b2, -b1)
    else:
        nf2 = bending.nf2
        n_tf = region_count(tf, d, nf1)
        n_bf = region_count(bf, bf, nf2)
        out.append(QuadPatch(mat, n_tf, n_bf,
                             ((d1, -b2), (d2, -b2), (d2, b2), (d1, b2))))
        out.append(QuadPatch(mat, region_count(dims.dw, d, nf1),
                             region_count(tw, bf, nf2),
                             ((-d1, -b1), (d1, -b1), (d1, b1), (-d1, b1))))
        out.append(QuadPatch(mat, n_tf, n_bf,
                             ((-d2, -b2), (-d1, -b2), (-d1, b2), (-d2, b2))))
    out += _fillet_fibers(dims, mat, bending)
    return out


def _lehigh_fibers(dims: WFDimensions, sector_tags: List[int], web_tag: int,
                   bending: Bending) -> list:
    d, tw, bf, tf = dims.d, dims.tw, dims.bf, dims.tf
    d1, d2, b1, b2 = dims.d1, dims.d2, dims.b1, dims.b2
    n = len(sector_tags)
    nf1 = bending.nf1
    out: list = []
    if bending.type is BendingType.STRONG:
        bf1 = bf / n
        n_tf = region_count(tf, d, nf1)
        for mat in sector_tags:
            out += rect_patch_2d(mat, n_tf, bf1, d1, d2)
            out += rect_patch_2d(mat, n_tf, bf1, -d2, -d1)
        out += rect_patch_2d(web_tag, region_count(dims.dw, d, nf1), tw, -d1, d1)
    elif bending.type is BendingType.WEAK:
        b21 = b2 / n
        n_b = region_count(b21, bf, nf1)
        for i, mat in enumerate(sector_tags):
            bft = b2 - i * b21
            out += rect_patch_2d(mat, n_b, 2 * tf, bft - b21, bft)
            out += rect_patch_2d(mat, n_b, 2 * tf, -bft, -bft + b21)
        out += rect_patch_2d(web_tag, region_count(tw, bf, nf1), dims.dw, -b1, b1)
    else:
        nf2 = bending.nf2
        bf1 = (bf / 2.0) / n
        n_tf = region_count(tf, d, nf1)
        n_b = region_count(bf1, bf, nf2)
        for i, mat in enumerate(sector_tags):
            b2i = b2 - bf1 * i
            b1i = max(b2i - bf1, 0.0)
            out.append(QuadPatch(mat, n_tf, n_b,
                                 ((d1, -b2i), (d2, -b2i), (d2, -b1i), (d1, -b1i))))
            out.append(QuadPatch(mat, n_tf, n_b,
                                 ((d1, b1i), (d2, b1i), (d2, b2i), (d1, b2i))))
            out.append(QuadPatch(mat, n_tf, n_b,
                                 ((-d2, -b2i), (-d1, -b2i), (-d1, -b1i), (-d2, -b1i))))
            out.append(QuadPatch(mat, n_tf, n_b,
                                 ((-d2, b1i), (-d1, b1i), (-d1, b2i), (-d2, b2i))))
        out.append(QuadPatch(web_tag, region_count(dims.dw, d, nf1),
                             region_count(tw, bf, nf2),
                             ((-d1, -b1), (d1, -b1), (d1, b1), (-d1, b1))))
    out += _fillet_fibers(dims, web_tag, bending)
    return out


def populate_wf(sec: SectionBuilder, bending: Bending, dims: WFDimensions,
                material: WFSteel, lehigh: Optional[Lehigh] = None):
    """Define the WF materials and fibers inside an open builder.

    Tags are taken from ``sec.tags``, so a WF nested in another section
    (e.g. an encased shape) continues the outer tag sequence.

    Args:
        sec:      Open section builder.
        bending:  Bending mode and fiber targets.
        dims:     Section dimensions.
        material: Steel material variant.
        lehigh:   Optional residual stress pattern.
    """
    if lehigh is not None and not material.supports_residual_stress:
        logger.warning("%s: residual stress is ignored for %s material.",
                       sec.family, type(material).__name__)
        lehigh = None

    if lehigh is None:
        mat = material.define_plain(sec, dims)
        if not sec.materials_only:
            sec.extend(_plain_fibers(dims, mat, bending))
        return

    rs = lehigh_residual_stress(lehigh.frc, lehigh.n_sectors, dims.bf, dims.tf,
                                dims.tw, dims.dw, dims.fillet_area)
    logger.debug("%s: Lehigh frc=%g frt=%g over %d sectors", sec.family,
                 lehigh.frc, rs.frt, lehigh.n_sectors)
    tags = material.define_levels(sec, list(rs.sector_stresses) + [rs.frt], dims)
    if not sec.materials_only:
        sec.extend(_lehigh_fibers(dims, tags[:-1], tags[-1], bending))


# ============================================================================
# ENTRY POINT
# ============================================================================

def wf_gj(dims: WFDimensions, material: WFSteel, bending: Bending,
          GJ: Union[float, str, None] = None) -> float:
    """Section GJ: a literal value, or G*J from the steel modulus."""
    value = parse_gj(FAMILY, GJ)
    if isinstance(value, float):
        return value
    if value is not GJMode.CALC and value is not GJMode.STEEL_ONLY:
        raise SectionError(FAMILY, f"GJ option '{value.value}' does not apply to a steel shape.")
    if material.Es is None:
        if not bending.is_3d:
            return 0.0
        raise SectionError(FAMILY, "no E defined to calculate GJ.")
    return steel_shear_modulus(material.Es) * wf_torsion_constant(dims.d, dims.tw,
                                                                  dims.bf, dims.tf)


def wf_section(section_id, start_mat_tag: int, nf1, nf2_or_mode,
               d: float, tw: float, bf: float, tf: float,
               material: WFSteel,
               lehigh: Optional[Lehigh] = None,
               fillet_k: Optional[float] = None,
               added_elastic: Optional[AddedElastic] = None,
               GJ: Union[float, str, None] = None) -> SectionDescriptor:
    """Wide-flange steel fiber section.

    Args:
        section_id:    Section tag, 'noSection' or 'materialsOnly'.
        start_mat_tag: First material tag to allocate.
        nf1:           Fibers along the primary bending direction.
        nf2_or_mode:   Fibers along the secondary direction (3D), or
                       'strong' / 'weak' for a 2D section.
        d, tw, bf, tf: Depth, web thickness, flange width, flange thickness.
        material:      Steel material variant (``ElasticPPSteel`` etc.).
        lehigh:        Optional Lehigh residual stress pattern.
        fillet_k:      Fillet k-distance; fillets are added when k > tf.
        added_elastic: Optional synthetic elastic stiffness.
        GJ:            Torsional stiffness, or 'calc' (default).

    Returns:
        SectionDescriptor.
    """
    bending = parse_bending(FAMILY, nf1, nf2_or_mode)
    dims = WFDimensions(float(d), float(tw), float(bf), float(tf),
                        None if fillet_k is None else float(fillet_k))
    dims.validate()
    if lehigh is not None:
        if lehigh.frc > 0.0:
            raise SectionError(FAMILY, "the compressive residual stress (frc) should be negative.")
        if int(lehigh.n_sectors) <= 0:
            raise SectionError(FAMILY, "the number of residual stress sectors should be positive.")

    section_gj = None
    if defines_section(FAMILY, section_id):
        section_gj = with_added_gj(wf_gj(dims, material, bending, GJ),
                                   added_elastic, bending)

    with open_section(FAMILY, section_id, start_mat_tag, bending,
                      GJ=section_gj) as sec:
        populate_wf(sec, bending, dims, material, lehigh)
        sec.add_elastic(bending, added_elastic)
    return sec.descriptor
