"""Exception hierarchy for section and material generation."""

from __future__ import annotations


class FiberSectionError(Exception):
    """Base class for every error raised by fibersec."""


class GeometryError(FiberSectionError, ValueError):
    """Invalid input to a geometry primitive."""


class MaterialError(FiberSectionError, ValueError):
    """Invalid input to a material law or property derivation."""


class UnitsError(MaterialError):
    """Unknown unit system tag."""


class SectionError(FiberSectionError, ValueError):
    """Invalid input to a section family builder.

    The message is prefixed with the family name so nested builds (a WF
    inside an SRC section) still say where the problem was found.
    """

    def __init__(self, family: str, message: str):
        self.family = family
        super().__init__(f"{family}: {message}")
