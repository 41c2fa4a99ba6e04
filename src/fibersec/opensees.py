"""
Commit a SectionDescriptor to OpenSees through openseespy.

This is the only module that talks to the solver. A descriptor is complete
before anything is sent, so a family that fails validation never leaves
half a section registered.

    desc = rect_hss_section(1, 1, 20, 20, 'US', 10.0, 6.0, 0.5, 46.0)
    build(desc)

Commit order:
    1. ops.uniaxialMaterial for every material, in definition order
    2. ops.section('Fiber', tag, '-GJ', GJ) (numeric section ids only)
    3. ops.patch / ops.fiber for every component, in emission order

With the 'noSection' sentinel step 2 is skipped and the fibers go into the
section the caller has open; with 'materialsOnly' only step 1 runs.
"""

from __future__ import annotations

import logging
from typing import Optional

import openseespy.opensees as ops

from fibersec.geometry import CircPatch, Fiber, QuadPatch
from fibersec.section import SectionDescriptor, SectionMode

logger = logging.getLogger(__name__)


def build_materials(desc: SectionDescriptor) -> list:
    """Register the descriptor's materials; returns their tags."""
    for mat in desc.materials:
        ops.uniaxialMaterial(*mat.command())
    logger.debug("%s: committed materials %s", desc.family, desc.mat_tags)
    return desc.mat_tags


def build(desc: SectionDescriptor) -> Optional[int]:
    """Register materials, section and fibers of ``desc``.

    Returns:
        The section tag, or None for 'noSection' and 'materialsOnly'.
    """
    build_materials(desc)
    if desc.mode is SectionMode.MATERIALS_ONLY:
        return None

    if desc.mode is SectionMode.FULL:
        ops.section('Fiber', desc.tag, '-GJ', desc.GJ)

    n = 0
    for comp in desc.components:
        if isinstance(comp, Fiber):
            ops.fiber(comp.y, comp.z, comp.area, comp.mat_tag)
        elif isinstance(comp, QuadPatch):
            if comp.n_ij == 0 or comp.n_jk == 0:
                continue
            coords = [c for vertex in comp.vertices for c in vertex]
            ops.patch('quad', comp.mat_tag, comp.n_ij, comp.n_jk, *coords)
        elif isinstance(comp, CircPatch):
            if comp.n_circ == 0 or comp.n_rad == 0:
                continue
            ops.patch('circ', comp.mat_tag, comp.n_circ, comp.n_rad,
                      comp.y_center, comp.z_center, comp.int_rad, comp.ext_rad,
                      comp.start_ang, comp.end_ang)
        else:
            raise TypeError(f"Cannot commit component of type {type(comp).__name__}.")
        n += 1

    logger.debug("%s section %s: committed %d components", desc.family,
                 desc.tag if desc.tag is not None else desc.mode.value, n)
    return desc.tag
