"""
Uniaxial material definitions for steel, concrete and composite sections.

Every function returns a ``MaterialDefinition`` record (tag, OpenSees
material kind, argument tuple); nothing is sent to the solver here. The
argument tuples follow the OpenSees ``uniaxialMaterial`` command exactly, so
``fibersec.opensees`` can pass them through unchanged.

Units: any consistent system. Empirical fits that are not dimensionally
consistent take a ``units`` argument ('US': ksi/in, 'SI': MPa/mm).

References:
    - Denavit, M.D. and Hajjar, J.F. (2014). "Characterization of Behavior of
      Steel-Concrete Composite Members and Frames with Applications for
      Design." NSEL Report NSEL-034, University of Illinois.
    - Shen, C., Mamaghani, I.H.P., Mizuno, E., Usami, T. (1995). "Cyclic
      Behavior of Structural Steels. II: Theory." ASCE J. Eng. Mech. 121(11).
    - Chang, G.A. and Mander, J.B. (1994). NCEER-94-0006.
    - Abdel-Rahman, N. and Sivakumaran, K.S. (1997). "Material Properties
      Models for Analysis of Cold-Formed Steel Members." ASCE J. Struct.
      Eng. 123(9).
    - Sakino, K., Nakahara, H., Morino, S., Nishiyama, I. (2004). "Behavior of
      Centrally Loaded Concrete-Filled Steel-Tube Short Columns." ASCE J.
      Struct. Eng. 130(2).
    - Galambos, T.V. and Ketter, R.L. (1959). "Columns Under Combined Bending
      and Thrust." (Lehigh residual stress pattern.)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from fibersec.confinement import confined_strain, confined_strength
from fibersec.errors import MaterialError
from fibersec.units import UnitSystem, units_constants

logger = logging.getLogger(__name__)

CALC = "calc"


# ============================================================================
# MATERIAL DEFINITIONS
# ============================================================================

@dataclass(frozen=True)
class MaterialDefinition:
    """One OpenSees uniaxial material.

    Attributes:
        tag:  Material tag.
        kind: OpenSees material type, e.g. 'ElasticPP' or 'shenSteel01'.
        args: Arguments following the tag, in command order. Option flags
              (e.g. '-initialStress') appear inline as strings.
    """
    tag: int
    kind: str
    args: Tuple = ()

    def command(self) -> Tuple:
        """(kind, tag, *args) as passed to ``ops.uniaxialMaterial``."""
        return (self.kind, self.tag) + tuple(self.args)

    def option(self, flag: str, count: int = 1) -> Optional[Tuple]:
        """Values following an inline option flag, or None if absent."""
        args = list(self.args)
        if flag not in args:
            return None
        i = args.index(flag)
        return tuple(args[i + 1:i + 1 + count])


def elastic(tag: int, E: float) -> MaterialDefinition:
    return MaterialDefinition(tag, "Elastic", (E,))


def elastic_no_tension(tag: int, E: float) -> MaterialDefinition:
    return MaterialDefinition(tag, "ENT", (E,))


def elastic_pp(tag: int, E: float, eps_yp: float,
               eps_yn: Optional[float] = None,
               eps0: Optional[float] = None) -> MaterialDefinition:
    """Elastic-perfectly-plastic; optional negative yield strain and offset."""
    args: Tuple = (E, eps_yp)
    if eps_yn is not None:
        args += (eps_yn, 0.0 if eps0 is None else eps0)
    return MaterialDefinition(tag, "ElasticPP", args)


def steel01(tag: int, Fy: float, E: float, b: float) -> MaterialDefinition:
    return MaterialDefinition(tag, "Steel01", (Fy, E, b))


def steel02(tag: int, Fy: float, E: float, b: float, R0: float = 20.0,
            cR1: float = 0.925, cR2: float = 0.15,
            sig_init: Optional[float] = None) -> MaterialDefinition:
    """Giuffre-Menegotto-Pinto steel; ``sig_init`` adds the isotropic
    hardening defaults and an initial stress."""
    args: Tuple = (Fy, E, b, R0, cR1, cR2)
    if sig_init is not None:
        args += (0.0, 1.0, 0.0, 1.0, sig_init)
    return MaterialDefinition(tag, "Steel02", args)


def init_stress_material(tag: int, base_tag: int,
                         sigma: float) -> MaterialDefinition:
    return MaterialDefinition(tag, "InitStressMaterial", (base_tag, sigma))


def bilinear_kinematic(tag: int, E: float, Fy: float, E_post: float,
                       initial_stress: Optional[float] = None
                       ) -> MaterialDefinition:
    """Multi-surface kinematic hardening law with one yield surface.

    Args:
        tag:            Material tag.
        E:              Elastic modulus.
        Fy:             Yield stress.
        E_post:         Post-yield tangent.
        initial_stress: Initial (residual) stress; omitted when None.
    """
    args: Tuple = ()
    if initial_stress is not None:
        args += ("-initialStress", initial_stress)
    args += ("-Direct", E, 0.0, Fy, E_post)
    return MaterialDefinition(tag, "multiSurfaceKinematicHardening", args)


def stress_strain_symmetric(tag: int, points: List[Tuple[float, float]],
                            E_final: float) -> MaterialDefinition:
    """Multi-surface kinematic hardening from a symmetric backbone."""
    args: Tuple = ("-StressStrainSymmetric",)
    for stress, strain in points:
        args += (stress, strain)
    args += (E_final,)
    return MaterialDefinition(tag, "multiSurfaceKinematicHardening", args)


def concrete04(tag: int, fc: float, ec: float, ecu: float,
               Ec: float) -> MaterialDefinition:
    """Popovics concrete; fc, ec, ecu given positive, stored negative."""
    return MaterialDefinition(tag, "Concrete04", (-fc, -ec, -ecu, Ec))


def hysteretic(tag: int, positive: List[Tuple[float, float]],
               negative: List[Tuple[float, float]],
               pinch_x: float = 0.0, pinch_y: float = 1.0,
               damage1: float = 0.0, damage2: float = 0.0,
               beta: float = 0.0) -> MaterialDefinition:
    """Hysteretic material with three (stress, strain) points per branch."""
    args: Tuple = ()
    for stress, strain in list(positive) + list(negative):
        args += (stress, strain)
    args += (pinch_x, pinch_y, damage1, damage2, beta)
    return MaterialDefinition(tag, "Hysteretic", args)


# ============================================================================
# DEFAULT VALUES
# ============================================================================

def default_fu(Fy: float, units: Union[UnitSystem, str]) -> float:
    """Ultimate stress estimated from yield stress.

    Fu = (C*Fy^-1.61 + 1)*Fy with C = 187 (US) or 4190 (SI).
    """
    c = units_constants(units)
    return ((c.fu_coefficient * math.pow(Fy, -1.61)) + 1) * Fy


def default_es(units: Union[UnitSystem, str]) -> float:
    """Steel elastic modulus: 29000 ksi (US) or 200000 MPa (SI)."""
    return units_constants(units).Es


def resolve_fu(Fu: Union[float, str], Fy: float,
               units: Union[UnitSystem, str]) -> float:
    """``Fu`` as a number; 'calc' selects ``default_fu``."""
    if isinstance(Fu, str) and Fu.lower() == CALC:
        return default_fu(Fy, units)
    return float(Fu)


def resolve_es(Es: Union[float, str], units: Union[UnitSystem, str]) -> float:
    """``Es`` as a number; 'calc' selects ``default_es``."""
    if isinstance(Es, str) and Es.lower() == CALC:
        return default_es(units)
    return float(Es)


def design_concrete_modulus(fc: float, units: Union[UnitSystem, str]) -> float:
    """Ec = 1802.5*sqrt(fc) (US, ksi) or 4733*sqrt(fc) (SI, MPa)."""
    return units_constants(units).ec_design * math.sqrt(fc)


# ============================================================================
# SHEN STEEL
# ============================================================================

class ShenSteelType(str, Enum):
    HOT_ROLLED = "hotRolled"
    COLD_FORMED = "coldFormed"
    COLD_FORMED2 = "coldFormed2"
    CFT = "CFT"


@dataclass(frozen=True)
class ShenSteelProperties:
    """Shen bounding-surface model constants for one strength regime."""
    kappa_bar0: float
    Ep0i: float
    alpha: float
    a: float
    b: float
    c: float
    omega: float
    zeta: float
    e: float
    f: float
    epst: float
    Epst: float
    M: float


def shen_steel_properties(Fy: float, Es: float,
                          units: Union[UnitSystem, str]) -> ShenSteelProperties:
    """Look up the Shen model constants for a yield stress.

    Regimes (Fya, Fyb = 52, 40 ksi or 358.5, 275.8 MPa):
        Fy >  Fya:          high strength
        Fyb < Fy <= Fya:    medium strength
        Fy <= Fyb:          low strength

    Args:
        Fy:    Yield stress.
        Es:    Elastic modulus.
        units: 'US' or 'SI'.

    Returns:
        ShenSteelProperties.
    """
    c = units_constants(units)
    Fya = c.shen_fy_high
    Fyb = c.shen_fy_low
    ey = Fy / Es

    if Fy > Fya:
        return ShenSteelProperties(
            kappa_bar0=1.06 * Fy,
            Ep0i=7.85e-3 * Es,
            alpha=0.175,
            a=-0.553,
            b=6.47,
            c=34.8,
            omega=2.67 / Fy,
            zeta=8.04e-3 / (ey * ey),
            e=7.00e2,
            f=0.361 * Es,
            epst=0.0,
            Epst=1.02e-2 * Es,
            M=0.0,
        )
    if Fy > Fyb and Fy <= Fya:
        return ShenSteelProperties(
            kappa_bar0=1.13 * Fy,
            Ep0i=1.01e-2 * Es,
            alpha=0.217,
            a=-0.528,
            b=1.88,
            c=18.7,
            omega=4.0 / Fy,
            zeta=1.52e-3 / (ey * ey),
            e=3.16e2,
            f=0.484 * Es,
            epst=1.24e-2,
            Epst=3.40e-2 * Es,
            M=-0.052,
        )
    if Fy <= Fyb:
        return ShenSteelProperties(
            kappa_bar0=1.15 * Fy,
            Ep0i=8.96e-3 * Es,
            alpha=0.191,
            a=-0.505,
            b=2.17,
            c=14.4,
            omega=3.08 / Fy,
            zeta=9.89e-4 / (ey * ey),
            e=5.00e2,
            f=0.300 * Es,
            epst=1.53e-2,
            Epst=2.49e-2 * Es,
            M=-0.37,
        )
    raise MaterialError(f"Yield stress {Fy} does not fall in any Shen regime.")


@dataclass(frozen=True)
class LocalBuckling:
    """Local buckling and post-buckling degradation for ``shen_steel``.

    Attributes:
        strain:      Strain at local buckling (negative, compression).
        Ksft:        Post-buckling softening slope.
        alpha_fulb:  Residual stress ratio after local buckling.
        ref:         Reference stress for the residual ratio ('Fy' or 'Flb').
        degradation_ep, degradation_kappa, degradation_fulb:
                     Optional (rate, limit) pairs; a zero rate is omitted.
    """
    strain: float
    Ksft: float
    alpha_fulb: float
    ref: str = "Fy"
    degradation_ep: Optional[Tuple[float, float]] = None
    degradation_kappa: Optional[Tuple[float, float]] = None
    degradation_fulb: Optional[Tuple[float, float]] = None

    def args(self) -> Tuple:
        out: Tuple = ("-localBuckling", self.strain, self.Ksft,
                      self.alpha_fulb, self.ref)
        for flag, deg in (("-localBucklingDegradationEp", self.degradation_ep),
                          ("-localBucklingDegradationKappa", self.degradation_kappa),
                          ("-localBucklingDegradationFulb", self.degradation_fulb)):
            if deg is not None and deg[0] != 0.0:
                out += (flag, deg[0], deg[1])
        return out


def shen_steel(tag: int, Es: float, Fy: float, Fu: float, eu: float,
               units: Union[UnitSystem, str],
               steel_type: Union[ShenSteelType, str],
               initial_stress: float = 0.0,
               initial_plastic_strain: float = 0.0,
               initial_plastic_modulus: Optional[float] = None,
               biaxial_stress: float = 0.0,
               local_buckling: Optional[LocalBuckling] = None
               ) -> MaterialDefinition:
    """Shen bounding-surface steel (``shenSteel01``).

    Args:
        tag:                      Material tag.
        Es:                       Elastic modulus.
        Fy:                       Yield stress.
        Fu:                       Ultimate stress.
        eu:                       Strain at ultimate stress.
        units:                    'US' or 'SI' (selects the Shen regime table).
        steel_type:               hotRolled, coldFormed, coldFormed2 or CFT.
        initial_stress:           Residual stress, strictly within (-Fy, Fy).
        initial_plastic_strain:   Cold-work plastic strain (cold-formed/CFT).
        initial_plastic_modulus:  Override of the plastic modulus at the end of
                                  the yield plateau (coldFormed only).
        biaxial_stress:           Hoop stress ratio for CFT tubes.
        local_buckling:           Local buckling parameters.

    Returns:
        MaterialDefinition.
    """
    Es = float(Es)
    Fy = float(Fy)
    Fu = float(Fu)
    eu = float(eu)
    if Es <= 0.0:
        raise MaterialError(f"shenSteel: Es must be positive, got {Es}.")
    if Fy <= 0.0:
        raise MaterialError(f"shenSteel: Fy must be positive, got {Fy}.")
    if Fu < Fy:
        raise MaterialError(f"shenSteel: Fu ({Fu}) must not be less than Fy ({Fy}).")
    if eu <= 0.0:
        raise MaterialError(f"shenSteel: eu must be positive, got {eu}.")
    if initial_stress <= -Fy or initial_stress >= Fy:
        raise MaterialError(
            f"shenSteel: initial stress {initial_stress} is outside the "
            f"elastic range (-{Fy}, {Fy})."
        )
    if initial_plastic_strain < 0.0:
        raise MaterialError(
            f"shenSteel: initial plastic strain must be positive, "
            f"got {initial_plastic_strain}."
        )
    if initial_plastic_modulus is not None and initial_plastic_modulus <= 0.0:
        raise MaterialError(
            f"shenSteel: initial plastic modulus must be positive, "
            f"got {initial_plastic_modulus}."
        )
    try:
        steel_type = ShenSteelType(steel_type)
    except ValueError:
        raise MaterialError(f"shenSteel: unknown steel type '{steel_type}'.") from None

    p = shen_steel_properties(Fy, Es, units)
    Epst = p.Epst if initial_plastic_modulus is None else initial_plastic_modulus
    epo = initial_plastic_strain

    if steel_type is ShenSteelType.HOT_ROLLED:
        extra: Tuple = ("-hotRolled", 0.0, 0.0, Es / 100.0)
    elif steel_type is ShenSteelType.COLD_FORMED:
        extra = ("-coldFormed", epo, Epst)
    elif steel_type is ShenSteelType.COLD_FORMED2:
        extra = ("-coldFormed2", epo)
    else:
        extra = ("-coldFormed", epo, Es / 100.0)

    if initial_stress != 0.0:
        extra += ("-initialStress", initial_stress)
    if biaxial_stress != 0.0:
        extra += ("-biaxialStress", biaxial_stress)
    if local_buckling is not None and local_buckling.strain != 0.0:
        extra += local_buckling.args()

    args = (Es, Fy, Fu, eu, p.kappa_bar0, p.Ep0i, p.alpha, p.a, p.b, p.c,
            p.omega, p.zeta, p.e, p.f) + extra
    return MaterialDefinition(tag, "shenSteel01", args)


# ============================================================================
# CHANG-MANDER CONCRETE
# ============================================================================

class TensionType(str, Enum):
    CHANG_MANDER = "ChangMander"
    NONE = "none"


class ModulusType(str, Enum):
    CHANG_MANDER = "ChangMander"
    DESIGN = "design"


POPOVICS = "Popovics"
CHANG_MANDER = "ChangMander"


@dataclass(frozen=True)
class Confinement:
    """Lateral confinement of a concrete region.

    Use the constructors: ``none()``, ``biaxial(fl)``, ``symmetric(fl)``,
    ``triaxial(fl1, fl2)`` or ``cover()`` (unconfined, spalling at 2*ecc).
    """
    fl1: float = 0.0
    fl2: float = 0.0
    spall: Optional[float] = None

    @classmethod
    def none(cls) -> "Confinement":
        return cls()

    @classmethod
    def biaxial(cls, fl: float) -> "Confinement":
        return cls(fl1=fl, fl2=0.0)

    @classmethod
    def symmetric(cls, fl: float) -> "Confinement":
        return cls(fl1=fl, fl2=fl)

    @classmethod
    def triaxial(cls, fl1: float, fl2: float) -> "Confinement":
        return cls(fl1=fl1, fl2=fl2)

    @classmethod
    def cover(cls) -> "Confinement":
        return cls(spall=2.0)


@dataclass(frozen=True)
class ChangManderParameters:
    """Derived constants of the Chang-Mander concrete law (compression positive)."""
    fcc: float
    ecc: float
    Ec: float
    rn_pre: float
    rn_post: float
    ft: float
    et: float
    rp: float
    xp_cr: float


def _rn(value: Union[str, float], Ec: float, ecc: float, fcc: float,
        fc_mpa: float, which: str) -> float:
    if isinstance(value, str):
        if value == POPOVICS:
            n = Ec * ecc / fcc
            return n / (n - 1)
        if value == CHANG_MANDER:
            return fc_mpa / 5.2 - 1.9
        try:
            return float(value)
        except ValueError:
            raise MaterialError(
                f"changManderConcrete: unknown {which} type '{value}'."
            ) from None
    return float(value)


def chang_mander_parameters(fc: float, units: Union[UnitSystem, str],
                            confinement: Optional[Confinement] = None,
                            tension: Union[TensionType, str] = TensionType.CHANG_MANDER,
                            Ec_type: Union[ModulusType, str] = ModulusType.DESIGN,
                            rn_pre: Union[str, float] = CHANG_MANDER,
                            rn_post: Union[str, float] = CHANG_MANDER
                            ) -> ChangManderParameters:
    """Compute the Chang-Mander law constants.

    Args:
        fc:          Unconfined compressive strength. A non-positive value is
                     negated with a warning.
        units:       'US' (ksi) or 'SI' (MPa).
        confinement: Lateral confinement; default unconfined.
        tension:     'ChangMander' tension branch or 'none'.
        Ec_type:     'design' (1802.5*sqrt(fc) ksi) or 'ChangMander'
                     (8200*fc^0.375 MPa).
        rn_pre:      Pre-peak shape: 'ChangMander', 'Popovics' or a number.
        rn_post:     Post-peak shape: 'ChangMander', 'Popovics' or a number.

    Returns:
        ChangManderParameters.
    """
    c = units_constants(units)
    confinement = confinement or Confinement.none()
    fc = float(fc)
    if fc <= 0.0:
        logger.warning("changManderConcrete: fc should be positive, got %g; "
                       "using %g.", fc, -fc)
        fc = -fc
    fl1 = float(confinement.fl1)
    fl2 = float(confinement.fl2)
    if fl1 < 0.0 or fl2 < 0.0:
        raise MaterialError(
            f"changManderConcrete: confining pressure must be non-negative, "
            f"got {fl1} and {fl2}."
        )
    try:
        tension = TensionType(tension)
    except ValueError:
        raise MaterialError(f"changManderConcrete: unknown tension type '{tension}'.") from None
    try:
        Ec_type = ModulusType(Ec_type)
    except ValueError:
        raise MaterialError(f"changManderConcrete: unknown Ec type '{Ec_type}'.") from None

    k = c.to_mpa
    if Ec_type is ModulusType.CHANG_MANDER:
        Ec = (8200.0 * math.pow(fc * k, 0.375)) / k
    else:
        Ec = c.ec_design * math.sqrt(fc)

    ec = math.pow(fc * k, 0.25) / 1150.0
    fcc = confined_strength(fc, fl1, fl2)
    ecc = confined_strain(ec, fcc, fc)

    if tension is TensionType.CHANG_MANDER:
        ft = (0.5 * math.sqrt(fc * k)) / k
        et = 1.23 * ft / Ec
    else:
        ft = 0.0
        et = 0.0

    return ChangManderParameters(
        fcc=fcc,
        ecc=ecc,
        Ec=Ec,
        rn_pre=_rn(rn_pre, Ec, ecc, fcc, fc * k, "rn_pre"),
        rn_post=_rn(rn_post, Ec, ecc, fcc, fc * k, "rn_post"),
        ft=ft,
        et=et,
        rp=4.0,
        xp_cr=4.0,
    )


def chang_mander_concrete(tag: int, fc: float, units: Union[UnitSystem, str],
                          confinement: Optional[Confinement] = None,
                          spall: Optional[float] = None,
                          tension: Union[TensionType, str] = TensionType.CHANG_MANDER,
                          Ec_type: Union[ModulusType, str] = ModulusType.DESIGN,
                          rn_pre: Union[str, float] = CHANG_MANDER,
                          rn_post: Union[str, float] = CHANG_MANDER
                          ) -> MaterialDefinition:
    """Chang-Mander concrete (``changManderConcrete01``).

    ``spall`` adds a spalling strain ratio in addition to the one implied by
    ``Confinement.cover()``. See ``chang_mander_parameters`` for the rest.
    """
    confinement = confinement or Confinement.none()
    p = chang_mander_parameters(fc, units, confinement, tension, Ec_type,
                                rn_pre, rn_post)
    extra: Tuple = ()
    if confinement.spall is not None:
        extra += ("-spall", confinement.spall)
    if spall is not None:
        extra += ("-spall", spall)
    args = (-p.fcc, -p.ecc, p.Ec, p.rn_pre, p.rn_post, p.ft, p.et,
            p.rp, p.xp_cr) + extra
    logger.debug("changManderConcrete %d: fcc=%g ecc=%g", tag, p.fcc, p.ecc)
    return MaterialDefinition(tag, "changManderConcrete01", args)


# ============================================================================
# SAKINO CFT MATERIALS
# ============================================================================

def _check_sakino(name: str, fc: float, D: float, t: float, Fy: float) -> float:
    if fc <= 0.0:
        logger.warning("%s: fc should be positive, got %g; using %g.",
                       name, fc, -fc)
        fc = -fc
    for label, value in (("D", D), ("t", t), ("Fy", Fy)):
        if value <= 0.0:
            raise MaterialError(f"{name}: {label} must be positive, got {value}.")
    return fc


def _sakino_core(fc: float, D: float, sre: float,
                 units: Union[UnitSystem, str]) -> Tuple[float, float, float, float]:
    """(fcp, Ec, eco, W) of the Sakino-Sun concrete core."""
    c = units_constants(units)
    k = c.to_mpa
    gammau = 1.67 * math.pow(D * c.to_mm, -0.112)
    fcp = gammau * fc
    Ec = (6.90 + 3.32 * math.sqrt(abs(fcp) * k)) * 1.0e3 / k
    eco = 0.94 * math.pow(abs(fcp) * k, 0.25) * 1.0e-3
    W = 1.50 - 17.1e-3 * abs(fcp) * k + 2.39 * math.sqrt(abs(sre) * k)
    return fcp, Ec, eco, W


def ccft_concrete_sakino(tag: int, fc: float, D: float, t: float, Fy: float,
                         units: Union[UnitSystem, str]) -> MaterialDefinition:
    """Confined core concrete of a circular CFT (``sakinoSunConcrete04``).

    Args:
        tag:   Material tag.
        fc:    Concrete compressive strength.
        D:     Tube outside diameter.
        t:     Tube wall thickness.
        Fy:    Tube yield stress.
        units: 'US' or 'SI'.
    """
    fc = _check_sakino("ccftConcreteSakino", fc, D, t, Fy)
    alpha_vm = -0.19
    fr = -2 * t * alpha_vm * Fy / (D - 2 * t)
    sre = (4.1 / 23) * fr
    fcp, Ec, eco, W = _sakino_core(fc, D, sre, units)

    K = 1.0 + 4.1 * abs(fr / fcp)
    fcc = K * fcp
    if K <= 1.5:
        ecc = eco * (1.0 + 4.7 * (K - 1))
    else:
        ecc = eco * (3.4 + 20.0 * (K - 1))
    return MaterialDefinition(tag, "sakinoSunConcrete04", (-fcc, -ecc, Ec, W))


def rcft_concrete_sakino(tag: int, fc: float, D: float, t: float, Fy: float,
                         units: Union[UnitSystem, str]) -> MaterialDefinition:
    """Core concrete of a rectangular CFT (``sakinoSunConcrete04``)."""
    fc = _check_sakino("rcftConcreteSakino", fc, D, t, Fy)
    sre = 2.0 * t ** 2 * (D - t) * Fy / (D - 2.0 * t) ** 3
    fcp, Ec, eco, W = _sakino_core(fc, D, sre, units)
    return MaterialDefinition(tag, "sakinoSunConcrete04", (-fcp, -eco, Ec, W))


def rcft_steel_sakino(tag: int, Fy: float, Es: float, B: float,
                      t: float) -> MaterialDefinition:
    """Tube steel of a rectangular CFT with local buckling (``Hysteretic``).

    The compression branch depends on the slenderness sqrt(alpha_s) =
    (B/t)*sqrt(Fy/Es): <= 1.54 strain hardening before buckling, between 1.54
    and 2.03 buckling at yield, >= 2.03 elastic buckling.
    """
    root_alpha = (B / t) * math.sqrt(Fy / Es)
    ssT = (1.19 - 0.207 * root_alpha) * Fy
    ey = Fy / Es
    positive = [(Fy, ey), (Fy, ey + 1), (Fy, ey + 2)]

    if root_alpha <= 1.54:
        seq11 = 1.0 / (0.698 + 0.128 * (B / t) ** 2 * (Fy / Es))
        esB = (6.06 / root_alpha ** 2 - 0.801 / root_alpha + 1.10) * ey
        esT = esB + 3.59 * ey
        negative = [(-Fy, -ey), (-Fy * seq11, -esB), (-ssT, -esT)]
    elif root_alpha < 2.03:
        esB = ey
        esT = esB + 3.59 * ey
        negative = [(-Fy, -ey), (-ssT, -esT), (-ssT, -esT - 1)]
    else:
        seq12 = 1.0 / (0.698 + 0.128 * (B / t) ** 2 * (Fy / Es) * (4.00 / 6.97))
        ssB = Fy * seq12
        esB = ssB / Es
        esT = esB + 3.59 * esB
        negative = [(-ssB, -ssB / Es), (-ssT, -esT), (-ssT, -esT - 1)]
    return hysteretic(tag, positive, negative)


# ============================================================================
# ABDEL-RAHMAN COLD-FORMED STEEL
# ============================================================================

def hss_steel_abdel_rahman(tag: int, Fy: float, Es: float,
                           corner: Optional[Tuple[float, float, float]] = None,
                           residual_stress_parameter: float = 0.75,
                           hardening_ratio: float = 0.005) -> MaterialDefinition:
    """Cold-formed tube steel after Abdel-Rahman & Sivakumaran (1997).

    Trilinear backbone (rs*Fy at Es, Fy at 0.5Es then 0.1Es) followed by a
    hardening slope ``hardening_ratio*Es``. Dimensionally consistent.

    Args:
        tag:                       Material tag.
        Fy:                        Yield stress of the flat region.
        Es:                        Elastic modulus.
        corner:                    (Fu, r, t) to raise Fy for cold work at a
                                   corner of inside radius r.
        residual_stress_parameter: rs, proportional limit ratio in [0, 1].
        hardening_ratio:           Final tangent as a fraction of Es.

    Returns:
        MaterialDefinition (multiSurfaceKinematicHardening).
    """
    Fy = float(Fy)
    Es = float(Es)
    if corner is not None:
        Fu, r, t = (float(v) for v in corner)
        Bc = 3.69 * (Fu / Fy) - 0.819 * (Fu / Fy) ** 2 - 1.79
        m = 0.192 * (Fu / Fy) - 0.068
        dFy = 0.60 * (Bc / math.pow(r / t, m) - 1) * Fy
        Fy = Fy + dFy
    rs = float(residual_stress_parameter)
    if rs > 1.0 or rs < 0.0:
        raise MaterialError(
            f"hssSteelAbdelRahman: residual stress parameter must be between "
            f"0 and 1, got {rs}."
        )

    s1 = rs * Fy
    s2 = (1.0 - 0.5 * (1.0 - rs)) * Fy
    s3 = Fy
    E1 = Es
    E2 = 0.5 * Es
    E3 = 0.1 * Es
    E4 = hardening_ratio * Es
    e1 = s1 / E1
    e2 = e1 + (s2 - s1) / E2
    e3 = e2 + (s3 - s2) / E3
    return stress_strain_symmetric(tag, [(s1, e1), (s2, e2), (s3, e3)], E4)


# ============================================================================
# PANEL ZONE
# ============================================================================

def simple_panel_zone(tag: int, Vu: float, Ke: float,
                      h: float = 1.0) -> MaterialDefinition:
    """Trilinear shear spring for a beam-column panel zone.

    Args:
        tag: Material tag.
        Vu:  Ultimate panel shear strength.
        Ke:  Elastic shear stiffness.
        h:   Lever arm converting shear to moment (1.0 keeps force units).
    """
    Vu = float(Vu)
    Ke = float(Ke)
    h = float(h)
    My = 0.6 * Vu * h
    Qy = 0.6 * Vu / Ke
    Mu = Vu * h
    Qu = 2.6 * Vu / Ke
    Ku = 0.01 * Ke * h
    return stress_strain_symmetric(tag, [(My, Qy), (Mu, Qu)], Ku)


# ============================================================================
# RESIDUAL STRESS
# ============================================================================

@dataclass(frozen=True)
class LehighResidualStress:
    """Lehigh residual stress pattern of a rolled wide-flange.

    Attributes:
        sector_stresses: Stress of each flange sector, tip (index 0) to center.
        frt:             Tensile stress at the flange center and in the web.
    """
    sector_stresses: Tuple[float, ...]
    frt: float


def lehigh_residual_stress(frc: float, n_sectors: int, bf: float, tf: float,
                           tw: float, dw: float,
                           fillet_area: float = 0.0) -> LehighResidualStress:
    """Residual stresses of the Lehigh pattern.

    Flange stress varies linearly from ``frc`` at the tips to ``frt`` at the
    center; the web carries ``frt`` uniformly. ``frt`` follows from axial
    force balance over flanges, web and the four fillets.

    Args:
        frc:          Compressive stress at the flange tips (<= 0).
        n_sectors:    Number of flange sectors (material levels).
        bf, tf:       Flange width and thickness.
        tw, dw:       Web thickness and clear web depth.
        fillet_area:  Area of one fillet (0 without fillets).
    """
    if frc > 0.0:
        raise MaterialError(
            f"Compressive residual stress frc must be negative, got {frc}."
        )
    if int(n_sectors) <= 0:
        raise MaterialError(
            f"Number of residual stress sectors must be positive, got {n_sectors}."
        )
    frt = -frc * (bf * tf) / (bf * tf + tw * dw + 4 * fillet_area)
    n = int(n_sectors)
    levels = tuple(frc + ((i - 0.5) / n) * (frt - frc) for i in range(1, n + 1))
    return LehighResidualStress(sector_stresses=levels, frt=frt)
