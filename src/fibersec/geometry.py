"""
Geometry primitives for fiber discretization.

Coordinate convention:
    y-axis = depth direction (strong-axis bending moves fibers along y)
    z-axis = width direction
    Origin = geometric center of the section

2D reductions place every fiber at z = 0 and let the fiber area carry the
width of the region. 3D sections use quadrilateral and circular patches,
which the solver expands itself; ``QuadPatch.fibers()`` and
``CircPatch.fibers()`` reproduce that expansion so areas and positions can
be checked without a solver.

References:
    - OpenSees command manual: patch quad, patch circ, fiber.
    - Circular segment geometry: area 0.5*R^2*(theta - sin(theta)),
      centroid 4*R*sin^3(theta/2) / (3*(theta - sin(theta))).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from fibersec.errors import GeometryError

logger = logging.getLogger(__name__)


# ============================================================================
# FIBERS AND PATCHES
# ============================================================================

@dataclass
class Fiber:
    """A single point fiber.

    Attributes:
        y:       Position along the depth axis.
        z:       Position along the width axis.
        area:    Fiber area. Negative areas subtract material (holes).
        mat_tag: Uniaxial material tag.
    """
    y: float
    z: float
    area: float
    mat_tag: int

    def fibers(self) -> List["Fiber"]:
        return [self]


def _polygon_area_centroid(
        points: Sequence[Tuple[float, float]]) -> Tuple[float, float, float]:
    """Shoelace area and centroid of a simple polygon given as (y, z)."""
    a2 = 0.0
    cy = 0.0
    cz = 0.0
    n = len(points)
    for k in range(n):
        y0, z0 = points[k]
        y1, z1 = points[(k + 1) % n]
        cross = y0 * z1 - y1 * z0
        a2 += cross
        cy += (y0 + y1) * cross
        cz += (z0 + z1) * cross
    if a2 == 0.0:
        return 0.0, points[0][0], points[0][1]
    return abs(a2) / 2.0, cy / (3.0 * a2), cz / (3.0 * a2)


@dataclass
class QuadPatch:
    """Quadrilateral patch with vertices I, J, K, L given as (y, z).

    Subdivided isoparametrically: ``n_ij`` cells along edge I-J and
    ``n_jk`` cells along edge J-K.
    """
    mat_tag: int
    n_ij: int
    n_jk: int
    vertices: Tuple[Tuple[float, float], ...]

    def __post_init__(self):
        if len(self.vertices) != 4:
            raise GeometryError("A quad patch needs exactly four vertices.")
        if self.n_ij < 0 or self.n_jk < 0:
            raise GeometryError(
                f"Negative number of fibers in quad patch "
                f"({self.n_ij} x {self.n_jk})."
            )
        self.vertices = tuple((float(y), float(z)) for y, z in self.vertices)

    @property
    def area(self) -> float:
        return _polygon_area_centroid(self.vertices)[0]

    def _map(self, xi: float, eta: float) -> Tuple[float, float]:
        (yi, zi), (yj, zj), (yk, zk), (yl, zl) = self.vertices
        n1 = (1.0 - xi) * (1.0 - eta) / 4.0
        n2 = (1.0 + xi) * (1.0 - eta) / 4.0
        n3 = (1.0 + xi) * (1.0 + eta) / 4.0
        n4 = (1.0 - xi) * (1.0 + eta) / 4.0
        return (n1 * yi + n2 * yj + n3 * yk + n4 * yl,
                n1 * zi + n2 * zj + n3 * zk + n4 * zl)

    def fibers(self) -> List[Fiber]:
        out: List[Fiber] = []
        if self.n_ij == 0 or self.n_jk == 0:
            return out
        d_xi = 2.0 / self.n_ij
        d_eta = 2.0 / self.n_jk
        for j in range(self.n_jk):
            eta0 = -1.0 + d_eta * j
            for i in range(self.n_ij):
                xi0 = -1.0 + d_xi * i
                cell = [
                    self._map(xi0, eta0),
                    self._map(xi0 + d_xi, eta0),
                    self._map(xi0 + d_xi, eta0 + d_eta),
                    self._map(xi0, eta0 + d_eta),
                ]
                area, y, z = _polygon_area_centroid(cell)
                out.append(Fiber(y, z, area, self.mat_tag))
        return out


@dataclass
class CircPatch:
    """Circular (annular sector) patch; angles in degrees from the y-axis."""
    mat_tag: int
    n_circ: int
    n_rad: int
    y_center: float
    z_center: float
    int_rad: float
    ext_rad: float
    start_ang: float = 0.0
    end_ang: float = 360.0

    def __post_init__(self):
        if self.n_circ < 0 or self.n_rad < 0:
            raise GeometryError(
                f"Negative number of fibers in circular patch "
                f"({self.n_circ} x {self.n_rad})."
            )
        if self.int_rad < 0.0 or self.ext_rad < self.int_rad:
            raise GeometryError(
                f"Invalid radii for circular patch: "
                f"{self.int_rad} to {self.ext_rad}."
            )

    @property
    def area(self) -> float:
        sweep = math.radians(self.end_ang - self.start_ang)
        return 0.5 * sweep * (self.ext_rad ** 2 - self.int_rad ** 2)

    def fibers(self) -> List[Fiber]:
        out: List[Fiber] = []
        if self.n_circ == 0 or self.n_rad == 0:
            return out
        d_theta = math.radians(self.end_ang - self.start_ang) / self.n_circ
        d_rad = (self.ext_rad - self.int_rad) / self.n_rad
        theta0 = math.radians(self.start_ang)
        half = d_theta / 2.0
        for j in range(self.n_rad):
            r1 = self.int_rad + d_rad * j
            r2 = r1 + d_rad
            if r2 == r1:
                continue
            area = 0.5 * d_theta * (r2 ** 2 - r1 ** 2)
            # centroid radius of an annular sector
            rc = (2.0 / 3.0) * (r2 ** 3 - r1 ** 3) / (r2 ** 2 - r1 ** 2)
            if half != 0.0:
                rc *= math.sin(half) / half
            for i in range(self.n_circ):
                theta = theta0 + d_theta * (i + 0.5)
                out.append(Fiber(self.y_center + rc * math.cos(theta),
                                 self.z_center + rc * math.sin(theta),
                                 area, self.mat_tag))
        return out


Component = Union[Fiber, QuadPatch, CircPatch]


def expand(components: Iterable[Component]) -> List[Fiber]:
    """Flatten a sequence of fibers and patches into fibers."""
    out: List[Fiber] = []
    for c in components:
        out.extend(c.fibers())
    return out


# ============================================================================
# CIRCULAR SEGMENTS
# ============================================================================

def _segment_angle(d: float, R: float) -> float:
    if abs(d) > R:
        raise GeometryError(
            f"Chord distance {d} lies outside a circle of radius {R}."
        )
    return 2.0 * math.acos(abs(d) / R)


def circular_segment_area(d: float, R: float) -> float:
    """Area of the circular segment beyond a chord at distance ``d``.

    Args:
        d: Perpendicular distance from the center to the chord.
        R: Circle radius.

    Returns:
        Segment area, 0.5*R^2*(theta - sin(theta)) with theta = 2*acos(|d|/R).
    """
    theta = _segment_angle(d, R)
    return 0.5 * R ** 2 * (theta - math.sin(theta))


def circular_segment_centroid(d: float, R: float) -> float:
    """Centroid offset (from the center) of the segment beyond a chord at ``d``.

    The segment collapses to a point at d == R, where the centroid is R.
    """
    sign = 1.0 if d >= 0.0 else -1.0
    theta = _segment_angle(d, R)
    if theta == 0.0:
        return sign * R
    return sign * (4.0 * R * math.sin(theta / 2.0) ** 3
                   / (3.0 * (theta - math.sin(theta))))


def combined_centroid(
        shapes: Iterable[Tuple[float, float, float]]) -> Tuple[float, float, float]:
    """Centroid of a composite of (x, y, signed area) pieces.

    Negative areas subtract, so an annulus is the outer disk plus the inner
    disk with negative area.

    Returns:
        (x, y, total area)
    """
    total = 0.0
    sx = 0.0
    sy = 0.0
    for x, y, a in shapes:
        total += a
        sx += x * a
        sy += y * a
    if total == 0.0:
        raise GeometryError("Composite shape has zero total area.")
    return sx / total, sy / total, total


# ============================================================================
# 2D PATCHES
# ============================================================================

def rect_patch_2d(mat_tag: int, nf: int, width: float,
                  y_start: float, y_end: float) -> List[Fiber]:
    """Rectangular region of a 2D section as ``nf`` fibers stacked along y.

    Args:
        mat_tag: Material tag.
        nf:      Number of fibers (strips) between y_start and y_end.
        width:   Region width (collapsed onto z = 0).
        y_start: Lower y bound.
        y_end:   Upper y bound.

    Returns:
        List of fibers, each with area width*(y_end - y_start)/nf.
    """
    nf = int(nf)
    if nf < 0:
        raise GeometryError(f"Negative number of fibers ({nf}).")
    if y_start >= y_end:
        logger.warning(
            "Rectangular patch has y_start (%g) >= y_end (%g); "
            "fibers will have negative area.", y_start, y_end)
    if nf == 0:
        return []
    height = (y_end - y_start) / nf
    area = width * height
    return [Fiber(y_start + (i + 0.5) * height, 0.0, area, mat_tag)
            for i in range(nf)]


def half_circ_tube_patch_2d(mat_tag: int, nf: int, center: float, side: str,
                            D: float, t: float) -> List[Fiber]:
    """Half of an annular tube as ``nf`` horizontal strips.

    Each strip between two chords is the outer segment difference minus the
    inner segment difference, and the strip fiber sits at the centroid of
    those signed pieces. With t == D/2 the half tube is a solid half disk.

    Args:
        mat_tag: Material tag.
        nf:      Number of strips.
        center:  y coordinate of the tube center.
        side:    'top' (strips above center) or 'bottom'.
        D:       Outer diameter.
        t:       Wall thickness.

    Returns:
        List of ``nf`` fibers.
    """
    if side == "top":
        direction = 1.0
    elif side == "bottom":
        direction = -1.0
    else:
        raise GeometryError(f"Unknown half-tube side '{side}'. "
                            "Use 'top' or 'bottom'.")
    if D <= 0.0:
        raise GeometryError(f"Tube diameter must be positive, got {D}.")
    if t <= 0.0:
        raise GeometryError(f"Tube thickness must be positive, got {t}.")
    if t > D / 2.0:
        raise GeometryError(
            f"Tube thickness {t} exceeds half the diameter {D}.")
    nf = int(nf)
    if nf < 0:
        raise GeometryError(f"Negative number of fibers ({nf}).")

    ro = D / 2.0
    ri = ro - t
    y_each = ro / nf if nf else 0.0

    out: List[Fiber] = []
    for i in range(1, nf + 1):
        y_far = ro - (i - 1) * y_each
        y_near = max(ro - i * y_each, 0.0)

        pieces = [
            (circular_segment_centroid(y_far, ro), 0.0,
             -circular_segment_area(y_far, ro)),
            (circular_segment_centroid(y_near, ro), 0.0,
             circular_segment_area(y_near, ro)),
        ]
        if y_far >= ri and y_near >= ri:
            pass  # strip lies entirely in the wall
        elif y_far >= ri > y_near:
            pieces.append((circular_segment_centroid(y_near, ri), 0.0,
                           -circular_segment_area(y_near, ri)))
        else:
            pieces.append((circular_segment_centroid(y_far, ri), 0.0,
                           circular_segment_area(y_far, ri)))
            pieces.append((circular_segment_centroid(y_near, ri), 0.0,
                           -circular_segment_area(y_near, ri)))

        y_bar, _, area = combined_centroid(pieces)
        out.append(Fiber(center + direction * y_bar, 0.0, area, mat_tag))
    return out


def solid_circle_rings(mat_tag: int, n_circ: int, n_rad: int,
                       radius: float) -> List[CircPatch]:
    """Solid disk as four concentric rings of equal width.

    Ring k (k = 1..4) spans (k-1)/4..k/4 of ``radius`` and gets
    ceil(k/4 * n_circ) circumferential divisions, so fibers near the
    center are not needlessly thin.
    """
    return [CircPatch(mat_tag, int(math.ceil(f * n_circ)), n_rad, 0.0, 0.0,
                      (f - 0.25) * radius, f * radius, 0.0, 360.0)
            for f in (0.25, 0.5, 0.75, 1.0)]


# ============================================================================
# LUMPED STIFFNESS SECTIONS
# ============================================================================

def two_fiber_section(mat_tag: int, A: float, I: float) -> List[Fiber]:
    """Two fibers matching area ``A`` and moment of inertia ``I`` (2D)."""
    if A <= 0.0:
        raise GeometryError(f"Two-fiber section needs a positive area, got {A}.")
    y = math.sqrt(I / A)
    return [Fiber(y, 0.0, A / 2.0, mat_tag),
            Fiber(-y, 0.0, A / 2.0, mat_tag)]


def four_fiber_section(mat_tag: int, A: float, Iz: float,
                       Iy: float) -> List[Fiber]:
    """Four fibers matching ``A``, ``Iz`` (about z) and ``Iy`` (about y)."""
    if A <= 0.0:
        raise GeometryError(f"Four-fiber section needs a positive area, got {A}.")
    y = math.sqrt(Iz / A)
    z = math.sqrt(Iy / A)
    return [Fiber(y, z, A / 4.0, mat_tag),
            Fiber(y, -z, A / 4.0, mat_tag),
            Fiber(-y, z, A / 4.0, mat_tag),
            Fiber(-y, -z, A / 4.0, mat_tag)]
