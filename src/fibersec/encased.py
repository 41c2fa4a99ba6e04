"""
Steel-reinforced concrete (SRC) fiber sections.

A wide-flange shape encased in a rectangular concrete column with an
optional reinforcing cage. The concrete is split into three regions:

    cover              outside the tie center line, unconfined
    medium confined    inside the cage, confined by the ties only
    highly confined    between the flanges, next to the web, where the
                       flanges add confinement; its boundary is a parabola
                       from z = za at mid-depth to z = bf/2 at the flanges

Material tags (start tag N):
    N       cover concrete
    N+1     medium confined concrete (the cover tag without a cage)
    N+2     highly confined concrete
    N+3..   WF steel (10 Lehigh flange sectors, then the web)
    N+14    longitudinal reinforcing bars
    N+15    added elastic

Reinforcement is described by ``SRCReinforcement``, either built directly
or parsed from the legacy list ``[config, db, Fy, Fu, Es, dbt, s, Fyt,
cover]`` with ``config`` like ``"4z-4y"``, ``"4x-6y-corner"`` or
``"4z-4y-even"``.

References:
    - Denavit, M.D. and Hajjar, J.F. (2014). NSEL-034, Section 3.6.
    - Mander, J.B., Priestley, M.J.N., Park, R. (1988). ASCE J. Struct.
      Eng. 114(8).
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from fibersec.confinement import effective_confinement_coefficient, rectangular_tie_pressures
from fibersec.errors import SectionError
from fibersec.geometry import QuadPatch, rect_patch_2d
from fibersec.materials import (
    CHANG_MANDER,
    POPOVICS,
    Confinement,
    LocalBuckling,
    ShenSteelType,
    TensionType,
    bilinear_kinematic,
    chang_mander_concrete,
    design_concrete_modulus,
    elastic,
    elastic_no_tension,
    elastic_pp,
    resolve_es,
    resolve_fu,
    shen_steel,
)
from fibersec.rc import bar_fibers
from fibersec.section import (
    AXIS_TAGS,
    STRONG_WEAK_TAGS,
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
    composite_gj,
    concrete_shear_modulus,
    parse_gj,
    rect_solid_torsion_constant_single_term,
    steel_shear_modulus,
    wf_torsion_constant,
)
from fibersec.units import UnitSystem, units_constants
from fibersec.wide_flange import (
    ElasticPPSteel,
    ElasticSmallStiffnessSteel,
    ElasticSteel,
    Lehigh,
    ShenSteel,
    WFDimensions,
    populate_wf,
)

logger = logging.getLogger(__name__)

FAMILY = "srcSection"

RESIDUAL_STRESS_SECTORS = 10
RESIDUAL_STRESS_RATIO = -0.3
POST_PEAK_RN = 0.75

_CONFIG_RE = re.compile(r"^(\d+)[xz]-(\d+)y-?([a-z0-9]*)$", re.IGNORECASE)


class SRCConcreteType(str, Enum):
    PROPOSED_FOR_BEHAVIOR = "ProposedForBehavior"
    PROPOSED_FOR_DESIGN = "ProposedForDesign"
    PROPOSED_FOR_DESIGN_EI = "ProposedForDesign_EI"
    ELASTIC = "Elastic"
    ELASTIC_NO_TENSION = "ElasticNoTension"


class SRCSteelType(str, Enum):
    SHEN = "Shen"
    ELASTIC_PP = "ElasticPP"
    ELASTIC_SMALL_STIFFNESS = "ElasticSmallStiffness"
    ELASTIC = "Elastic"


class SRCReinforcementType(str, Enum):
    PROPOSED_FOR_BEHAVIOR = "ProposedForBehavior"
    ELASTIC_PP = "ElasticPP"
    ELASTIC_SMALL_STIFFNESS = "ElasticSmallStiffness"
    ELASTIC = "Elastic"


class BarLayout(str, Enum):
    CORNER = "corner"
    EVEN = "even"


# ============================================================================
# REINFORCING CAGE
# ============================================================================

@dataclass(frozen=True)
class SRCReinforcement:
    """Longitudinal bars and ties of an SRC column.

    ``n_bar_z`` bars run along each face parallel to z (the width B) and
    ``n_bar_y`` along each face parallel to y (the depth H), corners
    included. In the corner layout the bars are bundled at the corners
    (counts must be even); in the even layout they are spread over the
    faces.

    Attributes:
        n_bar_z, n_bar_y: Bar counts per face.
        db:               Bar diameter.
        Fy, Fu, Es:       Bar steel properties (already resolved).
        dbt:              Tie diameter (0 for no confinement).
        s:                Tie spacing.
        fyt:              Tie yield stress.
        cover:            Clear cover to the ties.
        layout:           Corner or even.
    """
    n_bar_z: int
    n_bar_y: int
    db: float
    Fy: float
    Fu: float
    Es: float
    dbt: float
    s: float
    fyt: float
    cover: float
    layout: BarLayout = BarLayout.CORNER

    @classmethod
    def parse(cls, reinf, units: Union[UnitSystem, str]) -> Optional["SRCReinforcement"]:
        """Parse the legacy reinforcement list; 'none' gives None."""
        if reinf is None or isinstance(reinf, cls):
            return reinf
        items = [reinf] if isinstance(reinf, str) else list(reinf)
        config = str(items[0]) if items else ""
        if config.lower() == "none":
            return None
        match = _CONFIG_RE.match(config)
        if match is None:
            raise SectionError(FAMILY, f"unknown reinforcing configuration: {config}")
        if len(items) != 9:
            raise SectionError(FAMILY, "reinforcement needs config, db, Fy, Fu, Es, dbt, s, Fyt and cover.")
        option = match.group(3).lower() or BarLayout.CORNER.value
        try:
            layout = BarLayout(option)
        except ValueError:
            raise SectionError(FAMILY, f"unknown reinforcing layout option: {option}") from None
        Fy = float(items[2])
        return cls(
            n_bar_z=int(match.group(1)),
            n_bar_y=int(match.group(2)),
            db=float(items[1]),
            Fy=Fy,
            Fu=resolve_fu(items[3], Fy, units),
            Es=resolve_es(items[4], units),
            dbt=float(items[5]),
            s=float(items[6]),
            fyt=float(items[7]),
            cover=float(items[8]),
            layout=layout,
        )

    @property
    def Ab(self) -> float:
        return math.pi * self.db * self.db / 4.0

    @property
    def Abt(self) -> float:
        return math.pi * self.dbt * self.dbt / 4.0

    @property
    def cover_to_tie_center(self) -> float:
        return self.cover + 0.5 * self.dbt

    @property
    def total_area(self) -> float:
        return (2 * self.n_bar_z + 2 * self.n_bar_y - 4) * self.Ab

    def corner_location(self, B: float, H: float) -> Tuple[float, float]:
        """(y, z) of the corner bar center."""
        return (H / 2 - self.cover - self.dbt - self.db / 2,
                B / 2 - self.cover - self.dbt - self.db / 2)

    def bundle_spacing(self, units: Union[UnitSystem, str]) -> float:
        """Center-to-center spacing of bundled corner bars."""
        clear = min(1.5 * self.db, units_constants(units).min_bar_spacing)
        return clear + self.db

    def validate(self, B: float, H: float, units: Union[UnitSystem, str]):
        if self.n_bar_z < 2 or self.n_bar_y < 2:
            raise SectionError(FAMILY, "need at least 2 rebar in each direction.")
        cy, cz = self.corner_location(B, H)
        if self.layout is BarLayout.CORNER:
            if self.n_bar_z % 2 == 1 or self.n_bar_y % 2 == 1:
                raise SectionError(FAMILY, "rebar should be specified in even numbers for the corner layout.")
            sp = self.bundle_spacing(units)
            if (2 * cz - (self.n_bar_z - 2) * sp - self.db <= 0.0
                    or 2 * cy - (self.n_bar_y - 2) * sp - self.db <= 0.0):
                raise SectionError(FAMILY, "overlap of reinforcing.")
        else:
            if (2 * cz / (self.n_bar_z - 1) <= self.db
                    or 2 * cy / (self.n_bar_y - 1) <= self.db):
                raise SectionError(FAMILY, "overlap of reinforcing.")

    def clear_distances(self, B: float, H: float,
                        units: Union[UnitSystem, str]) -> List[float]:
        """Clear distances between adjacent bars around the perimeter."""
        cy, cz = self.corner_location(B, H)
        nz, ny = self.n_bar_z, self.n_bar_y
        if self.layout is BarLayout.CORNER:
            sp = self.bundle_spacing(units)
            gap_z = 2 * cz - (nz - 2) * sp - self.db
            gap_y = 2 * cy - (ny - 2) * sp - self.db
            return ([gap_z, gap_z, gap_y, gap_y]
                    + [sp - self.db] * (2 * (nz - 2) + 2 * (ny - 2)))
        sz = 2 * cz / (nz - 1)
        sy = 2 * cy / (ny - 1)
        return [sz - self.db] * (2 * (nz - 1)) + [sy - self.db] * (2 * (ny - 1))

    def lateral_pressures(self, B: float, H: float,
                          units: Union[UnitSystem, str]) -> Tuple[float, float]:
        """Effective tie pressures (flz, fly) on the medium confined core."""
        if self.dbt == 0.0:
            return 0.0, 0.0
        c = self.cover_to_tie_center
        Hc = H - 2 * c
        Bc = B - 2 * c
        ke = effective_confinement_coefficient(self.clear_distances(B, H, units),
                                               Bc, Hc, self.s - self.dbt,
                                               self.total_area)
        return rectangular_tie_pressures(ke, 2, 2, self.Abt, self.s, Bc, Hc, self.fyt)

    def bar_positions(self, bending: BendingType, B: float, H: float,
                      units: Union[UnitSystem, str]) -> List[Tuple[float, float, float]]:
        """Bar (y, z, area) triples; 2D layers lump the bars of one row."""
        cy, cz = self.corner_location(B, H)
        Ab = self.Ab
        nz, ny = self.n_bar_z, self.n_bar_y

        if bending is not BendingType.THREE_D:
            if bending is BendingType.STRONG:
                edge, n_edge, n_side = cy, nz, ny
            else:
                edge, n_edge, n_side = cz, ny, nz
            if self.layout is BarLayout.CORNER:
                sp = self.bundle_spacing(units)
                half = [(edge, 0.0, n_edge * Ab)]
                half += [(edge - i * sp, 0.0, 2 * Ab) for i in range(1, n_side // 2)]
                return half + [(-y, z, a) for y, z, a in half]
            step = 2 * edge / (n_side - 1)
            bars = [(edge, 0.0, n_edge * Ab)]
            bars += [(edge - i * step, 0.0, 2 * Ab) for i in range(1, n_side - 1)]
            bars.append((-edge, 0.0, n_edge * Ab))
            return bars

        if self.layout is BarLayout.CORNER:
            sp = self.bundle_spacing(units)
            quadrant = [(cy, cz)]
            quadrant += [(cy, cz - i * sp) for i in range(1, nz // 2)]
            quadrant += [(cy - i * sp, cz) for i in range(1, ny // 2)]
            bars = []
            for sy, sz in ((1, 1), (1, -1), (-1, -1), (-1, 1)):
                bars += [(sy * y, sz * z, Ab) for y, z in quadrant]
            return bars
        step_z = 2 * cz / (nz - 1)
        step_y = 2 * cy / (ny - 1)
        bars = []
        for i in range(nz):
            z = -cz + i * step_z
            bars.append((cy, z, Ab))
            bars.append((-cy, z, Ab))
        for i in range(1, ny - 1):
            y = cy - i * step_y
            bars.append((y, -cz, Ab))
            bars.append((y, cz, Ab))
        return bars


# ============================================================================
# CONCRETE REGIONS
# ============================================================================

@dataclass(frozen=True)
class _Layout:
    """Half-dimensions of the section regions."""
    d1: float
    d2: float
    b1: float
    b2: float
    H1: float
    H2: float
    B1: float
    B2: float
    cover_h: float
    cover_b: float
    za: float
    zb: float

    @classmethod
    def of(cls, B: float, H: float, dims: WFDimensions, cover: float) -> "_Layout":
        b1 = dims.tw / 2
        b2 = dims.bf / 2
        return cls(
            d1=dims.dw / 2,
            d2=dims.d / 2,
            b1=b1,
            b2=b2,
            H1=H / 2,
            H2=H / 2 - cover,
            B1=B / 2,
            B2=B / 2 - cover,
            cover_h=cover,
            cover_b=cover,
            za=max(b2 - 0.25 * dims.dw, b1),
            zb=b2,
        )

    @property
    def pa(self) -> float:
        return (self.zb - self.za) / (self.d1 * self.d1)

    def parabola_mean(self, y1: float, y2: float) -> float:
        """Mean half-width of the highly confined zone over y1..y2."""
        return self.pa * (y1 * y1 + y1 * y2 + y2 * y2) / 3.0 + self.za


def _concrete_fibers_strong(L: _Layout, B: float, H: float, nf1: int,
                            cover: int, med: int, high: int) -> list:
    out: list = []
    if L.cover_b > 0.0:
        out += rect_patch_2d(cover, region_count(H, H, nf1), 2 * L.cover_b, -L.H1, L.H1)
    if L.cover_h > 0.0:
        n = region_count(L.cover_h, H, nf1)
        out += rect_patch_2d(cover, n, B - 2 * L.cover_b, -L.H1, -L.H2)
        out += rect_patch_2d(cover, n, B - 2 * L.cover_b, L.H2, L.H1)

    n = region_count(L.H2 - L.d2, H, nf1)
    out += rect_patch_2d(med, n, B - 2 * L.cover_b, -L.H2, -L.d2)
    out += rect_patch_2d(med, n, B - 2 * L.cover_b, L.d2, L.H2)
    n = region_count(L.d2 - L.d1, H, nf1)
    width = B - 2 * L.cover_b - 2 * L.b2
    out += rect_patch_2d(med, n, width, -L.d2, -L.d1)
    out += rect_patch_2d(med, n, width, L.d1, L.d2)

    n_web = region_count(2 * L.d1, H, nf1)
    for i in range(1, n_web + 1):
        y1 = -L.d1 + (i - 1) * (2 * L.d1 / n_web)
        y2 = -L.d1 + i * (2 * L.d1 / n_web)
        bh = L.parabola_mean(y1, y2)
        out += rect_patch_2d(high, 1, 2 * (bh - L.b1), y1, y2)
        out += rect_patch_2d(med, 1, 2 * (L.B2 - bh), y1, y2)
    return out


def _concrete_fibers_weak(L: _Layout, B: float, H: float, nf1: int,
                          cover: int, med: int, high: int) -> list:
    out: list = []
    if L.cover_b > 0.0:
        n = region_count(L.cover_b, B, nf1)
        out += rect_patch_2d(cover, n, H, -L.B1, -L.B2)
        out += rect_patch_2d(cover, n, H, L.B2, L.B1)
    if L.cover_h > 0.0:
        out += rect_patch_2d(cover, region_count(B - 2 * L.cover_b, B, nf1),
                             2 * L.cover_h, -L.B2, L.B2)

    n = region_count(L.B2 - L.b2, B, nf1)
    out += rect_patch_2d(med, n, H - 2 * L.cover_h, -L.B2, -L.b2)
    out += rect_patch_2d(med, n, H - 2 * L.cover_h, L.b2, L.B2)
    out += rect_patch_2d(med, region_count(2 * L.b2, B, nf1), 2 * (L.H2 - L.d2),
                         -L.b2, L.b2)

    dw = 2 * L.d1
    if L.za > L.b1:
        n = region_count(L.za - L.b1, B, nf1)
        out += rect_patch_2d(high, n, dw, -L.za, -L.b1)
        out += rect_patch_2d(high, n, dw, L.b1, L.za)
    n_par = region_count(L.zb - L.za, B, nf1)
    for i in range(1, n_par + 1):
        z1 = L.za + (i - 1) * ((L.zb - L.za) / n_par)
        z2 = L.za + i * ((L.zb - L.za) / n_par)
        # mean depth of the medium confined lens around mid-depth
        wmc = (4.0 / (3.0 * math.sqrt(L.pa) * (z1 - z2))
               * (math.pow(z1 - L.za, 1.5) - math.pow(z2 - L.za, 1.5)))
        out += rect_patch_2d(high, 1, dw - wmc, -z2, -z1)
        out += rect_patch_2d(high, 1, dw - wmc, z1, z2)
        out += rect_patch_2d(med, 1, wmc, -z2, -z1)
        out += rect_patch_2d(med, 1, wmc, z1, z2)
    return out


def _concrete_patches_3d(L: _Layout, B: float, H: float, nf1: int, nf2: int,
                         cover: int, med: int, high: int) -> list:
    out: list = []
    if L.cover_b > 0.0:
        n_y = region_count(H, H, nf1)
        n_z = region_count(L.cover_b, B, nf2)
        out.append(QuadPatch(cover, n_y, n_z,
                             ((L.H1, -L.B2), (-L.H1, -L.B2), (-L.H1, -L.B1), (L.H1, -L.B1))))
        out.append(QuadPatch(cover, n_y, n_z,
                             ((L.H1, L.B1), (-L.H1, L.B1), (-L.H1, L.B2), (L.H1, L.B2))))
    if L.cover_h > 0.0:
        n_y = region_count(L.cover_h, H, nf1)
        n_z = region_count(B - 2 * L.cover_b, B, nf2)
        out.append(QuadPatch(cover, n_y, n_z,
                             ((L.H1, L.B2), (L.H2, L.B2), (L.H2, -L.B2), (L.H1, -L.B2))))
        out.append(QuadPatch(cover, n_y, n_z,
                             ((-L.H2, L.B2), (-L.H1, L.B2), (-L.H1, -L.B2), (-L.H2, -L.B2))))

    n_y = region_count(L.H2 - L.d2, H, nf1)
    n_z = region_count(B - 2 * L.cover_b, B, nf2)
    out.append(QuadPatch(med, n_y, n_z,
                         ((L.H2, L.B2), (L.d2, L.B2), (L.d2, -L.B2), (L.H2, -L.B2))))
    out.append(QuadPatch(med, n_y, n_z,
                         ((-L.d2, L.B2), (-L.H2, L.B2), (-L.H2, -L.B2), (-L.d2, -L.B2))))
    n_y = region_count(L.d2 - L.d1, H, nf1)
    n_z = region_count(L.B2 - L.b2, B, nf2)
    out.append(QuadPatch(med, n_y, n_z,
                         ((L.d2, L.B2), (L.d1, L.B2), (L.d1, L.b2), (L.d2, L.b2))))
    out.append(QuadPatch(med, n_y, n_z,
                         ((-L.d1, L.B2), (-L.d2, L.B2), (-L.d2, L.b2), (-L.d1, L.b2))))
    out.append(QuadPatch(med, n_y, n_z,
                         ((L.d2, -L.b2), (L.d1, -L.b2), (L.d1, -L.B2), (L.d2, -L.B2))))
    out.append(QuadPatch(med, n_y, n_z,
                         ((-L.d1, -L.b2), (-L.d2, -L.b2), (-L.d2, -L.B2), (-L.d1, -L.B2))))

    n_web = region_count(2 * L.d1, H, nf1)
    for i in range(1, n_web + 1):
        y1 = -L.d1 + (i - 1) * (2 * L.d1 / n_web)
        y2 = -L.d1 + i * (2 * L.d1 / n_web)
        bh = L.parabola_mean(y1, y2)
        n_high = region_count(bh - L.b1, B, nf2)
        n_med = region_count(L.B2 - bh, B, nf2)
        out.append(QuadPatch(high, 1, n_high, ((y2, bh), (y1, bh), (y1, L.b1), (y2, L.b1))))
        out.append(QuadPatch(med, 1, n_med, ((y2, L.B2), (y1, L.B2), (y1, bh), (y2, bh))))
        out.append(QuadPatch(high, 1, n_high, ((y2, -L.b1), (y1, -L.b1), (y1, -bh), (y2, -bh))))
        out.append(QuadPatch(med, 1, n_med, ((y2, -bh), (y1, -bh), (y1, -L.B2), (y2, -L.B2))))
    return out


# ============================================================================
# MATERIALS
# ============================================================================

def _define_concrete(sec: SectionBuilder, kind: SRCConcreteType, fc: float,
                     units: UnitSystem, has_cage: bool,
                     fl_med: Tuple[float, float],
                     fl_high: Tuple[float, float]) -> Tuple[int, int, int]:
    cover = sec.tags.at(0)
    if kind in (SRCConcreteType.ELASTIC, SRCConcreteType.ELASTIC_NO_TENSION):
        Ec = design_concrete_modulus(fc, units)
        make = elastic if kind is SRCConcreteType.ELASTIC else elastic_no_tension
        sec.define(make(cover, Ec))
        return cover, cover, cover

    if kind is SRCConcreteType.PROPOSED_FOR_BEHAVIOR:
        options = dict(rn_pre=CHANG_MANDER, rn_post=POST_PEAK_RN)
    elif kind is SRCConcreteType.PROPOSED_FOR_DESIGN:
        options = dict(rn_pre=POPOVICS, rn_post=POPOVICS, tension=TensionType.NONE)
    else:
        options = dict(rn_pre=POPOVICS, rn_post=POPOVICS)

    sec.define(chang_mander_concrete(cover, fc, units, Confinement.cover(), **options))
    med = cover
    if has_cage:
        med = sec.define(chang_mander_concrete(sec.tags.at(1), fc, units,
                                               Confinement.triaxial(*fl_med), **options))
    high = sec.define(chang_mander_concrete(sec.tags.at(2), fc, units,
                                            Confinement.triaxial(*fl_high), **options))
    return cover, med, high


def _define_reinforcing(sec: SectionBuilder, kind: SRCReinforcementType,
                        cage: SRCReinforcement, units: UnitSystem) -> int:
    tag = sec.tags.at(RESIDUAL_STRESS_SECTORS + 4)
    Es, Fy = cage.Es, cage.Fy
    if kind is SRCReinforcementType.PROPOSED_FOR_BEHAVIOR:
        ey = Fy / Es
        logger.debug("%s: bar local buckling strain %g", sec.family, ey)
        lb = LocalBuckling(strain=-ey, Ksft=-Es / 100.0, alpha_fulb=0.2, ref="Fy",
                           degradation_ep=(2.0, 0.05),
                           degradation_kappa=(2.0, 0.05))
        sec.define(shen_steel(tag, Es, Fy, cage.Fu, 120.0 * ey, units,
                              ShenSteelType.HOT_ROLLED, local_buckling=lb))
    elif kind is SRCReinforcementType.ELASTIC_PP:
        sec.define(elastic_pp(tag, Es, Fy / Es))
    elif kind is SRCReinforcementType.ELASTIC_SMALL_STIFFNESS:
        sec.define(bilinear_kinematic(tag, Es, Fy, Es / 1000.0))
    else:
        sec.define(elastic(tag, Es))
    return tag


def _wf_material(kind: SRCSteelType, Es: float, Fy: float, Fu: float,
                 units: UnitSystem):
    if kind is SRCSteelType.SHEN:
        return ShenSteel(Es, Fy, Fu, 120.0 * Fy / Es, units)
    if kind is SRCSteelType.ELASTIC_PP:
        return ElasticPPSteel(Es, Fy)
    if kind is SRCSteelType.ELASTIC_SMALL_STIFFNESS:
        return ElasticSmallStiffnessSteel(Es, Fy)
    return ElasticSteel(Es)


def _wf_bending(bending: Bending, B: float, H: float,
                dims: WFDimensions) -> Bending:
    """Fiber targets for the encased shape, scaled to its share of B and H."""
    if bending.type is BendingType.STRONG:
        return Bending.strong(region_count(dims.d, H, bending.nf1))
    if bending.type is BendingType.WEAK:
        return Bending.weak(region_count(dims.bf, B, bending.nf1))
    return Bending.three_d(region_count(dims.d, H, bending.nf1),
                           region_count(dims.bf, B, bending.nf2))


# ============================================================================
# ENTRY POINT
# ============================================================================

def src_gj(B: float, H: float, fc: float, dims: WFDimensions, Es: float,
           units: Union[UnitSystem, str], GJ: Union[float, str, None] = None) -> float:
    """Section GJ; defaults to the larger of the steel and concrete values."""
    value = parse_gj(FAMILY, GJ, default=GJMode.MAX)
    if isinstance(value, float):
        return value
    if value is GJMode.CALC:
        value = GJMode.MAX
    steel = steel_shear_modulus(Es) * wf_torsion_constant(dims.d, dims.tw, dims.bf, dims.tf)
    concrete = (concrete_shear_modulus(design_concrete_modulus(fc, units))
                * rect_solid_torsion_constant_single_term(H, B))
    return composite_gj(FAMILY, value, steel, concrete)


def src_section(section_id, start_mat_tag: int, nf1, nf2_or_axis,
                units: Union[UnitSystem, str],
                B: float, H: float, fc: float,
                d: float, tw: float, bf: float, tf: float,
                Fy: float, Fu: Union[float, str], Es: Union[float, str],
                reinforcement: Union[SRCReinforcement, Sequence, str, None],
                concrete_type: Union[SRCConcreteType, str] = SRCConcreteType.PROPOSED_FOR_BEHAVIOR,
                steel_type: Union[SRCSteelType, str] = SRCSteelType.SHEN,
                reinforcement_type: Union[SRCReinforcementType, str] = SRCReinforcementType.PROPOSED_FOR_BEHAVIOR,
                residual_stress_parameter: float = 1.0,
                define_steel: bool = True,
                define_rc: bool = True,
                added_elastic: Optional[AddedElastic] = None,
                GJ: Union[float, str, None] = None) -> SectionDescriptor:
    """Steel-reinforced concrete fiber section.

    Args:
        section_id:         Section tag, 'noSection' or 'materialsOnly'.
        start_mat_tag:      First material tag (see module docstring).
        nf1:                Fibers along the primary axis.
        nf2_or_axis:        Fibers along the secondary axis (3D), or 'Z'/'Y'.
        units:              'US' or 'SI'.
        B:                  Column width (along z, parallel to the flanges).
        H:                  Column depth (along y, parallel to the web).
        fc:                 Concrete compressive strength.
        d, tw, bf, tf:      Encased WF dimensions.
        Fy, Fu, Es:         WF steel properties; Fu and Es accept 'calc'.
        reinforcement:      ``SRCReinforcement``, the legacy list, or 'none'.
        concrete_type:      Concrete model for the three regions.
        steel_type:         WF steel model.
        reinforcement_type: Bar steel model.
        residual_stress_parameter:
                            Scales the Lehigh tip stress -0.3*Fy.
        define_steel:       False omits the WF shape.
        define_rc:          False omits the concrete and bars.
        added_elastic:      Optional synthetic elastic stiffness.
        GJ:                 Number, or 'max' (default), 'steelonly',
                            'concreteonly'.

    Returns:
        SectionDescriptor.
    """
    family = FAMILY
    # the legacy strong/weak tags are accepted alongside Z/Y
    tags = AXIS_TAGS
    if isinstance(nf2_or_axis, str) and nf2_or_axis.strip().lower() in STRONG_WEAK_TAGS:
        tags = STRONG_WEAK_TAGS
    bending = parse_bending(family, nf1, nf2_or_axis, tags=tags)
    units = UnitSystem.parse(units)
    B, H, fc, Fy = float(B), float(H), float(fc), float(Fy)
    dims = WFDimensions(float(d), float(tw), float(bf), float(tf))
    for name, value in (("d", dims.d), ("tw", dims.tw), ("bf", dims.bf), ("tf", dims.tf)):
        if value <= 0.0:
            raise SectionError(family, f"steel section dimension {name} should be input as a positive value.")
    if B <= dims.bf or H <= dims.d:
        raise SectionError(family, "gross section dimensions should be greater than those of the steel section.")
    if Fy <= 0.0:
        raise SectionError(family, "steel yield strength should be input as a positive value.")
    if not isinstance(Fu, str) and float(Fu) <= Fy:
        raise SectionError(family, "steel ultimate strength should be greater than Fy or 'calc'.")
    if not isinstance(Es, str) and float(Es) <= 0.0:
        raise SectionError(family, "steel elastic modulus should be input as a positive value or 'calc'.")
    if fc <= 0.0:
        raise SectionError(family, "concrete compressive strength should be input as a positive value.")
    Fu = resolve_fu(Fu, Fy, units)
    Es = resolve_es(Es, units)
    concrete_type = parse_material_type(family, SRCConcreteType, concrete_type)
    steel_type = parse_material_type(family, SRCSteelType, steel_type)
    reinforcement_type = parse_material_type(family, SRCReinforcementType, reinforcement_type)

    cage = SRCReinforcement.parse(reinforcement, units)
    if cage is not None:
        cage.validate(B, H, units)
        fl_med = cage.lateral_pressures(B, H, units)
        cover = cage.cover_to_tie_center
    else:
        fl_med = (0.0, 0.0)
        cover = 0.0
    # flanges restrain the concrete between them
    flange_fl = dims.tf * dims.tf * Fy / (3 * math.pow((dims.bf - dims.tw) / 2, 2))
    fl_high = (fl_med[0], fl_med[1] + flange_fl)
    L = _Layout.of(B, H, dims, cover)
    if L.H2 <= L.d2 or L.B2 <= L.b2:
        raise SectionError(family, "the reinforcing cage intersects the steel section.")
    logger.debug("%s: fl_med=(%g, %g) fl_high=(%g, %g)", family,
                 fl_med[0], fl_med[1], fl_high[0], fl_high[1])

    section_gj = None
    if defines_section(family, section_id):
        section_gj = with_added_gj(src_gj(B, H, fc, dims, Es, units, GJ),
                                   added_elastic, bending)

    with open_section(family, section_id, start_mat_tag, bending,
                      GJ=section_gj) as sec:
        med = None
        if define_rc:
            cover_tag, med, high = _define_concrete(sec, concrete_type, fc, units,
                                                    cage is not None, fl_med, fl_high)
            if not sec.materials_only:
                if bending.type is BendingType.STRONG:
                    sec.extend(_concrete_fibers_strong(L, B, H, bending.nf1,
                                                       cover_tag, med, high))
                elif bending.type is BendingType.WEAK:
                    sec.extend(_concrete_fibers_weak(L, B, H, bending.nf1,
                                                     cover_tag, med, high))
                else:
                    sec.extend(_concrete_patches_3d(L, B, H, bending.nf1, bending.nf2,
                                                    cover_tag, med, high))

        if define_steel:
            # concrete holds N..N+2 even when defined elsewhere or aliased
            sec.tags.reserve(3)
            material = _wf_material(steel_type, Es, Fy, Fu, units)
            lehigh = None
            if steel_type is not SRCSteelType.ELASTIC:
                lehigh = Lehigh(RESIDUAL_STRESS_RATIO * Fy * residual_stress_parameter,
                                RESIDUAL_STRESS_SECTORS)
            populate_wf(sec, _wf_bending(bending, B, H, dims), dims, material, lehigh)

        if cage is not None and define_rc:
            bar_tag = _define_reinforcing(sec, reinforcement_type, cage, units)
            if not sec.materials_only:
                sec.extend(bar_fibers(cage.bar_positions(bending.type, B, H, units),
                                      med, bar_tag))

        sec.add_elastic(bending, added_elastic,
                        tag=sec.tags.at(RESIDUAL_STRESS_SECTORS + 5))
    return sec.descriptor
