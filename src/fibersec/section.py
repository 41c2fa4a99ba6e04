"""
Section assembly core shared by every shape family.

A section build runs in two phases:

    1. Section scalars (GJ) are computed from the raw inputs.
    2. ``open_section`` yields a ``SectionBuilder`` that collects material
       definitions and fibers/patches. Nothing reaches the solver here; the
       finished ``SectionDescriptor`` is committed by ``fibersec.opensees``.

Material tags are handed out by a ``MaterialTagSequence`` owned by the
builder. Families address their materials by a fixed offset from the start
tag (``tags.at(2)``) or take the next free tag (``tags.take()``); both keep
``tags.next`` past every tag used so far. ``tags.reserve(n)`` holds the
first n tags of a fixed layout whether or not they get defined.
"""

from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from fibersec.errors import SectionError
from fibersec.geometry import (
    Component,
    Fiber,
    expand,
    four_fiber_section,
    two_fiber_section,
)
from fibersec.materials import MaterialDefinition, elastic

logger = logging.getLogger(__name__)

NO_SECTION = "noSection"
MATERIALS_ONLY = "materialsOnly"

STRONG_WEAK_TAGS = ("strong", "weak")
AXIS_TAGS = ("z", "y")


# ============================================================================
# BENDING MODE
# ============================================================================

class BendingType(str, Enum):
    STRONG = "2dStrong"
    WEAK = "2dWeak"
    THREE_D = "3d"


@dataclass(frozen=True)
class Bending:
    """Bending mode and fiber count targets.

    ``STRONG`` and ``WEAK`` are 2D reductions with one fiber row; in the RC
    and SRC families they correspond to bending about the Z and Y axes.
    """
    type: BendingType
    nf1: int
    nf2: Optional[int] = None

    @classmethod
    def strong(cls, nf: int) -> "Bending":
        return cls(BendingType.STRONG, int(nf))

    @classmethod
    def weak(cls, nf: int) -> "Bending":
        return cls(BendingType.WEAK, int(nf))

    @classmethod
    def three_d(cls, nf1: int, nf2: int) -> "Bending":
        return cls(BendingType.THREE_D, int(nf1), int(nf2))

    @property
    def is_3d(self) -> bool:
        return self.type is BendingType.THREE_D


def _positive_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        return int(value) if value > 0 and value == int(value) else None
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit() and int(text) > 0:
            return int(text)
    return None


def parse_bending(family: str, nf1, nf2_or_mode,
                  tags: Sequence[str] = STRONG_WEAK_TAGS) -> Bending:
    """Resolve the overloaded second fiber-count argument.

    Args:
        family:       Family name used in error messages.
        nf1:          Primary fiber count target.
        nf2_or_mode:  A ``Bending`` instance, a positive integer (3D), or one
                      of ``tags`` (case-insensitive): the first selects the
                      strong-axis 2D reduction, the second the weak-axis one.
        tags:         Mode tags accepted by the family.

    Returns:
        Bending.
    """
    if isinstance(nf2_or_mode, Bending):
        return nf2_or_mode
    n1 = _positive_int(nf1)
    if n1 is None:
        raise SectionError(family,
                           f"fiber count must be a positive integer, got {nf1!r}.")
    n2 = _positive_int(nf2_or_mode)
    if n2 is not None:
        return Bending.three_d(n1, n2)
    if isinstance(nf2_or_mode, str):
        key = nf2_or_mode.strip().lower()
        if key == tags[0].lower():
            return Bending.strong(n1)
        if key == tags[1].lower():
            return Bending.weak(n1)
    raise SectionError(
        family,
        f"unknown bending type {nf2_or_mode!r}; expected a positive fiber "
        f"count or one of {', '.join(repr(t) for t in tags)}."
    )


def parse_material_type(family: str, enum_cls, value, allowed=None):
    """Resolve a material type name to ``enum_cls``, restricted to ``allowed``."""
    try:
        member = enum_cls(value)
    except ValueError:
        raise SectionError(family, f"unknown material type '{value}'.") from None
    if allowed is not None and member not in allowed:
        raise SectionError(family, f"material type '{member.value}' is not available.")
    return member


def region_count(extent: float, overall: float, nf: float) -> int:
    """Fibers for a region: ceil(nf/overall * extent), never rounded down."""
    return int(math.ceil(nf / overall * extent))


# ============================================================================
# MATERIAL TAGS
# ============================================================================

class MaterialTagSequence:
    """Caller-owned material tag allocator.

    Args:
        start: First material tag of the section.
    """

    def __init__(self, start: int):
        self.start = int(start)
        self.next = self.start

    def at(self, offset: int) -> int:
        """Tag at a fixed ``offset`` from the start."""
        tag = self.start + offset
        self.next = max(self.next, tag + 1)
        return tag

    def reserve(self, count: int) -> None:
        """Hold the first ``count`` tags from the start, used or not."""
        self.next = max(self.next, self.start + count)

    def take(self) -> int:
        """Next free tag."""
        tag = self.next
        self.next += 1
        return tag

    def __repr__(self) -> str:
        return f"MaterialTagSequence(start={self.start}, next={self.next})"


# ============================================================================
# SECTION ID / DESCRIPTOR
# ============================================================================

class SectionMode(str, Enum):
    FULL = "full"
    NO_SECTION = NO_SECTION
    MATERIALS_ONLY = MATERIALS_ONLY


def parse_section_id(family: str, section_id) -> Tuple[SectionMode, Optional[int]]:
    """Split a section id into (mode, numeric tag)."""
    if isinstance(section_id, str):
        key = section_id.strip().lower()
        if key == NO_SECTION.lower():
            return SectionMode.NO_SECTION, None
        if key == MATERIALS_ONLY.lower():
            return SectionMode.MATERIALS_ONLY, None
        if key.lstrip("-").isdigit():
            return SectionMode.FULL, int(key)
    elif isinstance(section_id, int) and not isinstance(section_id, bool):
        return SectionMode.FULL, section_id
    raise SectionError(
        family,
        f"section id must be an integer, '{NO_SECTION}' or "
        f"'{MATERIALS_ONLY}', got {section_id!r}."
    )


def defines_section(family: str, section_id) -> bool:
    """True when ``section_id`` is numeric, i.e. section scalars are needed."""
    return parse_section_id(family, section_id)[0] is SectionMode.FULL


@dataclass
class SectionDescriptor:
    """Materials and fibers of one section, ready to commit.

    Attributes:
        family:       Shape family that produced it.
        mode:         FULL, NO_SECTION or MATERIALS_ONLY.
        tag:          Section tag (FULL mode only).
        GJ:           Torsional stiffness (FULL mode only).
        bending:      Bending mode used for the fibers.
        materials:    Material definitions in definition order.
        components:   Fibers and patches in emission order.
        next_mat_tag: First material tag not used by this section.
    """
    family: str
    mode: SectionMode
    tag: Optional[int]
    GJ: Optional[float]
    bending: Optional[Bending]
    materials: List[MaterialDefinition] = field(default_factory=list)
    components: List[Component] = field(default_factory=list)
    next_mat_tag: int = 0

    @property
    def mat_tags(self) -> List[int]:
        return [m.tag for m in self.materials]

    def material(self, tag: int) -> MaterialDefinition:
        for m in self.materials:
            if m.tag == tag:
                return m
        raise KeyError(f"Material {tag} is not defined by this {self.family} section.")

    def fibers(self) -> List[Fiber]:
        """All fibers, with patches expanded."""
        return expand(self.components)

    def area(self, mat_tag: Optional[int] = None) -> float:
        """Total signed fiber area, optionally for one material tag."""
        return sum(f.area for f in self.fibers()
                   if mat_tag is None or f.mat_tag == mat_tag)


# ============================================================================
# BUILDER
# ============================================================================

class SectionBuilder:
    """Collects materials and fibers for one section build."""

    def __init__(self, family: str, start_mat_tag: int,
                 mode: SectionMode = SectionMode.FULL,
                 tags: Optional[MaterialTagSequence] = None):
        self.family = family
        self.mode = mode
        self.tags = tags if tags is not None else MaterialTagSequence(start_mat_tag)
        self.materials: List[MaterialDefinition] = []
        self.components: List[Component] = []
        self._defined: Dict[int, MaterialDefinition] = {}
        self.closed = False

    @property
    def materials_only(self) -> bool:
        return self.mode is SectionMode.MATERIALS_ONLY

    def _check_open(self):
        if self.closed:
            raise RuntimeError(f"{self.family} section builder is closed.")

    def define(self, material: MaterialDefinition) -> int:
        """Register a material definition and return its tag."""
        self._check_open()
        if material.tag in self._defined:
            raise SectionError(
                self.family,
                f"material tag {material.tag} is defined twice "
                f"({self._defined[material.tag].kind} and {material.kind})."
            )
        self._defined[material.tag] = material
        self.materials.append(material)
        self.tags.next = max(self.tags.next, material.tag + 1)
        return material.tag

    def add(self, *components: Component):
        self._check_open()
        self.components.extend(components)

    def extend(self, components: Iterable[Component]):
        self._check_open()
        self.components.extend(components)

    def add_elastic(self, bending: Bending, added: Optional["AddedElastic"],
                    tag: Optional[int] = None):
        """Append the synthetic elastic stiffness fibers, if requested.

        The material takes ``tag`` when given (families with a fixed offset),
        otherwise the next free tag.
        """
        if added is None:
            return
        if tag is None:
            tag = self.tags.take()
        self.define(elastic(tag, AddedElastic.E))
        if self.materials_only:
            return
        self.extend(added.fibers(tag, bending, self.family))


@contextmanager
def open_section(family: str, section_id, start_mat_tag: int,
                 bending: Optional[Bending] = None,
                 GJ: Optional[float] = None,
                 tags: Optional[MaterialTagSequence] = None
                 ) -> Iterator[SectionBuilder]:
    """Scoped section build.

    Yields a builder; the builder is closed on exit whether or not the body
    raised. On success ``builder.descriptor`` holds the result. A body that
    raises leaves no descriptor, so a failed build never produces a partial
    section.
    """
    mode, tag = parse_section_id(family, section_id)
    builder = SectionBuilder(family, start_mat_tag, mode, tags)
    builder.descriptor = None
    try:
        yield builder
    finally:
        builder.closed = True
    builder.descriptor = SectionDescriptor(
        family=family,
        mode=mode,
        tag=tag,
        GJ=GJ if mode is SectionMode.FULL else None,
        bending=bending,
        materials=list(builder.materials),
        components=list(builder.components),
        next_mat_tag=builder.tags.next,
    )
    logger.debug("%s section %s: %d materials, %d components, next tag %d",
                 family, tag if tag is not None else mode.value,
                 len(builder.materials), len(builder.components),
                 builder.tags.next)


# ============================================================================
# ADDED ELASTIC STIFFNESS
# ============================================================================

@dataclass
class AddedElastic:
    """Synthetic elastic stiffness appended to a section.

    2D sections use ``EA`` and ``EI``; 3D sections use ``EA``, ``EIz``,
    ``EIy`` and ``GJ``. The fibers use an Elastic material with E = 1, so
    the fiber area and inertia equal the requested rigidities.
    """
    EA: float
    EI: Optional[float] = None
    EIz: Optional[float] = None
    EIy: Optional[float] = None
    GJ: float = 0.0

    E = 1.0

    @classmethod
    def two_d(cls, EA: float, EI: float) -> "AddedElastic":
        return cls(EA=EA, EI=EI)

    @classmethod
    def three_d(cls, EA: float, EIz: float, EIy: float,
                GJ: float) -> "AddedElastic":
        return cls(EA=EA, EIz=EIz, EIy=EIy, GJ=GJ)

    def fibers(self, mat_tag: int, bending: Bending, family: str) -> List[Fiber]:
        if self.EA <= 0.0:
            raise SectionError(family, f"added elastic EA must be positive, got {self.EA}.")
        if bending.is_3d:
            if self.EIz is None or self.EIy is None:
                raise SectionError(family, "3D added elastic needs EA, EIz, EIy and GJ.")
            return four_fiber_section(mat_tag, self.EA / self.E,
                                      self.EIz / self.E, self.EIy / self.E)
        if self.EI is None:
            raise SectionError(family, "2D added elastic needs EA and EI.")
        return two_fiber_section(mat_tag, self.EA / self.E, self.EI / self.E)


def with_added_gj(GJ: Optional[float], added: Optional[AddedElastic],
                  bending: Bending) -> Optional[float]:
    """Section GJ including the torsional stiffness of added elastic fibers."""
    if GJ is None or added is None or not bending.is_3d:
        return GJ
    return GJ + added.GJ


# ============================================================================
# LUMPED STIFFNESS SECTIONS
# ============================================================================

def two_fiber_stiffness_section(section_id, mat_tag: int, area: float,
                                I: float) -> SectionDescriptor:
    """2D section of two fibers reproducing ``area`` and ``I``.

    Uses an existing material ``mat_tag``; no materials are defined.
    """
    family = "twoFiberSection"
    with open_section(family, section_id, mat_tag,
                      bending=Bending.strong(2)) as sec:
        if not sec.materials_only:
            sec.extend(two_fiber_section(mat_tag, area, I))
    return sec.descriptor


def four_fiber_section_gj(section_id, mat_tag: int, area: float, Iy: float,
                          Iz: float, GJ: float) -> SectionDescriptor:
    """3D section of four fibers reproducing ``area``, ``Iy``, ``Iz`` and ``GJ``.

    Uses an existing material ``mat_tag``; no materials are defined.
    """
    family = "fourFiberSectionGJ"
    with open_section(family, section_id, mat_tag,
                      bending=Bending.three_d(2, 2), GJ=GJ) as sec:
        if not sec.materials_only:
            sec.extend(four_fiber_section(mat_tag, area, Iz, Iy))
    return sec.descriptor
