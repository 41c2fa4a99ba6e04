"""
fibersec: fiber-section geometry and materials for OpenSees.

Each family function validates its inputs, allocates material tags from a
caller-supplied start tag, and returns a SectionDescriptor holding the
uniaxial material definitions and the patches/fibers of the section.
Nothing touches the solver until the descriptor is committed with
fibersec.opensees.build().

Families:
    wf_section            - Wide flange (I-shape) steel
    rect_hss_section      - Rectangular hollow structural steel
    round_hss_section     - Round hollow structural steel
    ccft_section          - Circular concrete-filled steel tube
    rcft_section          - Rectangular concrete-filled steel tube
    rectangular_rc_section, circular_rc_section - Reinforced concrete
    src_section           - Steel-reinforced (encased) concrete

Modules:
    units        - US / SI unit constants
    geometry     - Fibers, patches and their areas / centroids
    materials    - Uniaxial material definitions (Shen, Chang-Mander, Sakino, ...)
    confinement  - Confined concrete strength and effective confinement
    torsion      - Torsion constants and GJ combination rules
    section      - Bending parsing, tag allocation, descriptor builder
    opensees     - Commit descriptors through openseespy
"""

from fibersec.errors import (
    FiberSectionError,
    GeometryError,
    MaterialError,
    SectionError,
    UnitsError,
)

from fibersec.units import UnitSystem, units_constants

from fibersec.section import (
    AXIS_TAGS,
    MATERIALS_ONLY,
    NO_SECTION,
    STRONG_WEAK_TAGS,
    AddedElastic,
    Bending,
    BendingType,
    SectionDescriptor,
    SectionMode,
    four_fiber_section_gj,
    parse_bending,
    two_fiber_stiffness_section,
)

from fibersec.wide_flange import (
    ElasticPPSteel,
    ElasticSmallStiffnessSteel,
    ElasticSteel,
    ExistingMaterial,
    HardeningSteel,
    Lehigh,
    ShenSteel,
    ShenSteelDegrade,
    Steel01Steel,
    Steel02Steel,
    WFDimensions,
    wf_section,
)

from fibersec.hss import HSSSteelType, rect_hss_section, round_hss_section

from fibersec.cft import (
    CFTConcreteType,
    CFTSteelType,
    ccft_parameters,
    ccft_section,
    rcft_parameters,
    rcft_section,
)

from fibersec.rc import (
    RCConcreteType,
    RCSteelType,
    TransverseReinforcement,
    circular_rc_section,
    rectangular_rc_section,
)

from fibersec.encased import (
    BarLayout,
    SRCConcreteType,
    SRCReinforcement,
    SRCReinforcementType,
    SRCSteelType,
    src_section,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "FiberSectionError", "GeometryError", "MaterialError", "SectionError",
    "UnitsError",
    # Units
    "UnitSystem", "units_constants",
    # Section plumbing
    "AXIS_TAGS", "STRONG_WEAK_TAGS", "NO_SECTION", "MATERIALS_ONLY",
    "AddedElastic", "Bending", "BendingType", "SectionDescriptor",
    "SectionMode", "parse_bending", "two_fiber_stiffness_section",
    "four_fiber_section_gj",
    # Wide flange
    "WFDimensions", "ExistingMaterial", "ElasticSteel", "ElasticPPSteel",
    "ElasticSmallStiffnessSteel", "HardeningSteel", "Steel01Steel",
    "Steel02Steel", "ShenSteel", "ShenSteelDegrade", "Lehigh", "wf_section",
    # HSS
    "HSSSteelType", "rect_hss_section", "round_hss_section",
    # CFT
    "CFTSteelType", "CFTConcreteType", "ccft_section", "rcft_section",
    "ccft_parameters", "rcft_parameters",
    # RC
    "RCConcreteType", "RCSteelType", "TransverseReinforcement",
    "rectangular_rc_section", "circular_rc_section",
    # SRC
    "SRCConcreteType", "SRCSteelType", "SRCReinforcementType", "BarLayout",
    "SRCReinforcement", "src_section",
]
