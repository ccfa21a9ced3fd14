# almanac/core/orbits.py
# -----------------------------------------------------------------------------
# Orbital Models for the Sun, Moon, Planets and Comets
#
# Theories:
#   • Sun: Newcomb with planetary and lunar perturbations (Exp. Supp. 1961)
#   • Moon: Brown (1919) re-normalised by the k1..k6 factors
#   • Mercury, Venus: mean elements plus planetary perturbation series
#   • Mars, Jupiter, Saturn: mean elements as polynomials in time
#   • Uranus, Neptune, Pluto: epoch elements with secular rates
#   • Comets: osculating elements, eccentricity clamped below parabolic
#
# Output:
#   • Planets and comets yield an OrbitalState (heliocentric ecliptic λ, β, r
#     referred to the mean equinox of date) for the coordinate pipeline
#   • Moon and shadow yield geocentric equatorial positions directly
#
# Every model is a pure function of the Frame; nothing is carried between
# calls or between bodies.
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Callable, Dict, Optional, Sequence, Tuple, Any, TYPE_CHECKING

from almanac.core import tables
from almanac.core.tables import SeriesTerm, LunarTerm, OrbitalElementTable
from almanac.core.timescales import Constants, day_number

if TYPE_CHECKING:
    from almanac.core.frame import Frame

log = logging.getLogger(__name__)

__all__ = [
    "OrbitalState",
    "GeocentricPosition",
    "MeanElements",
    "Perturbation",
    "PlanetModel",
    "CometElements",
    "IKEYA_ZHANG",
    "PLANET_MODELS",
    "reduce_to_range",
    "pyth",
    "solve_kepler",
    "true_anomaly",
    "trig_series",
    "solar_orbit",
    "planet_orbit",
    "comet_orbit",
    "lunar_position",
    "shadow_position",
    "ring_magnitude",
]

RADIAN = Constants.RADIAN
RADSEC = Constants.RADSEC
TWO_PI = Constants.TWO_PI
LN_10 = 2.30258509
KEPLER_TOLERANCE = 1e-14
MAX_ECCENTRICITY = 0.999
GAUSS_K = .01720209895

# ───────────────────────────── Records ─────────────────────────────

@dataclass(frozen=True)
class OrbitalState:
    """Heliocentric ecliptic state of one body at one instant."""
    longitude: float        # λ, radians in [0, 2π)
    latitude: float         # β, radians
    radius: float           # r, AU
    motion: float           # apparent angular rate, radians/day
    semidiameter: float     # arcseconds at 1 AU
    magnitude: float        # provisional, before the distance term

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class GeocentricPosition:
    """Geocentric equatorial place referred to the true equator and equinox."""
    right_ascension: float
    declination: float
    horizontal_parallax: float
    semidiameter: float             # arcseconds
    magnitude: float
    ecliptic_longitude: float = 0.0
    distance: float = 1.0           # AU (Earth radii scale for the Moon is not used)
    phase: Optional[float] = None   # lunar elongation / 360°


@dataclass(frozen=True)
class MeanElements:
    """Mean orbital elements at one instant; angles in radians."""
    eccentricity: float
    inclination: float
    ascending_node: float
    perihelion: float           # longitude of perihelion
    semi_major_axis: float
    mean_anomaly: float
    daily_motion: float         # degrees/day


@dataclass(frozen=True)
class Perturbation:
    longitude: float = 0.0      # radians, added before reduction to the ecliptic
    latitude: float = 0.0       # radians, added after reduction
    log_radius: float = 0.0     # log10 of the radius factor


@dataclass(frozen=True)
class CometElements:
    """Osculating comet elements; angles in degrees."""
    name: str
    perihelion_day: float       # day number of perihelion passage
    perihelion_distance: float  # q, AU
    eccentricity: float
    inclination: float
    argument_of_perihelion: float
    ascending_node: float


# 153P/Ikeya–Zhang, perihelion 2002-03-18T23:28:53.76Z
IKEYA_ZHANG = CometElements(
    name="153P/Ikeya-Zhang",
    perihelion_day=day_number(datetime(2002, 3, 18, 23, 28, 53, 760000)),
    perihelion_distance=0.5070601,
    eccentricity=0.990111,
    inclination=28.12106,
    argument_of_perihelion=34.6666,
    ascending_node=93.1206,
)

# ───────────────────────────── Numerics ─────────────────────────────

def reduce_to_range(angle: float, centered: bool = False) -> float:
    """Wrap an angle to [0, 2π), or to (−π, π] when centered."""
    a = math.fmod(angle, TWO_PI)
    if centered:
        if a > math.pi:
            a -= TWO_PI
        elif a <= -math.pi:
            a += TWO_PI
        return a
    if a < 0:
        a += TWO_PI
    if a >= TWO_PI:
        a = 0.0
    return a


def pyth(x: float) -> float:
    """√(1 − x²), clamped at zero."""
    x *= x
    if x > 1:
        x = 1
    return math.sqrt(1 - x)


def solve_kepler(mean_anomaly: float, eccentricity: float) -> float:
    """Eccentric anomaly E with M = E − e·sin E, for 0 ≤ e < 1."""
    m, e = mean_anomaly, eccentricity
    enom = m + e * math.sin(m)
    while True:
        dele = (m - enom + e * math.sin(enom)) / (1 - e * math.cos(enom))
        enom += dele
        if abs(dele) <= KEPLER_TOLERANCE:
            return enom


def true_anomaly(eccentric_anomaly: float, eccentricity: float) -> float:
    e = eccentricity
    return 2 * math.atan2(math.sqrt(1 + e) * math.sin(eccentric_anomaly / 2),
                          math.sqrt(1 - e) * math.cos(eccentric_anomaly / 2))


def trig_series(f: Callable[[float], float], terms: Sequence[SeriesTerm],
                arguments: Sequence[float]) -> float:
    """Σ amplitude · f(phase + Σ multiplier·argument)."""
    total = 0.0
    for amplitude, phase, multipliers in terms:
        angle = phase
        for m, a in zip(multipliers, arguments):
            angle += m * a
        total += amplitude * f(angle)
    return total


def _fmod360(x: float) -> float:
    return math.fmod(x, 360.0)


def _reduce_to_ecliptic(orbit_longitude: float, node: float, inclination: float) -> Tuple[float, float]:
    nd = orbit_longitude - node
    lam = node + math.atan2(math.sin(nd) * math.cos(inclination), math.cos(nd))
    sl = math.sin(inclination) * math.sin(nd)
    return lam, math.atan2(sl, pyth(sl))


def _phase_angle_deg(lam: float, rad: float, eday: float) -> float:
    lsun = (99.696678 + 0.9856473354 * eday) * RADIAN
    elong = lam - lsun
    ci = (rad - math.cos(elong)) / math.sqrt(1 + rad * rad - 2 * rad * math.cos(elong))
    return math.atan2(pyth(ci), ci) / RADIAN

# ───────────────────────────── Sun ─────────────────────────────

def solar_orbit(eday: float, capt: float, occultation_mode: bool = False) -> OrbitalState:
    """Geocentric ecliptic place of the Sun (mean equinox of date)."""
    capt2 = capt * capt
    capt3 = capt * capt2
    argp = 281.220833 + .0000470684 * eday + .000453 * capt2 + .000003 * capt3
    anom = 358.475845 + .9856002670 * eday - .000150 * capt2 - .000003 * capt3
    dmoon = _fmod360(350.737681 + 12.1907491914 * eday - .001436 * capt2) * RADIAN
    gmoon = _fmod360(11.250889 + 13.2293504490 * eday - .003212 * capt2) * RADIAN
    mmoon = _fmod360(296.104608 + 13.0649924465 * eday + 9.192e-3 * capt2) * RADIAN
    mven = (212.448 + 1.602121635 * eday) * RADIAN
    merth = (358.476 + 0.985600267 * eday) * RADIAN
    mmars = (319.590 + .524024095 * eday) * RADIAN
    mjup = (225.269 + .083082362 * eday) * RADIAN
    msat = (175.593 + .033450794 * eday) * RADIAN

    anom += trig_series(math.cos, tables.SUN_ANOMALY_COS, (mmars, merth, mven, mjup)) / 3600.
    anom += trig_series(math.sin, tables.SUN_ANOMALY_SIN,
                        (mmars, merth, mven, mjup, .07884 * capt)) / 3600.
    argp *= RADIAN
    anom = _fmod360(anom) * RADIAN

    # Elliptic orbit
    lam = anom + argp
    pturbl = ((6910.057 - 17.240 * capt - 0.052 * capt2) * math.sin(anom)
              + (72.338 - 0.361 * capt) * math.sin(2. * anom)
              + (1.054 - 0.001 * capt) * math.sin(3. * anom) + 0.018 * math.sin(4. * anom))
    lam += pturbl * RADSEC
    lograd = ((30.57e-6 - 0.15e-6 * capt)
              - (7274.12e-6 - 18.14e-6 * capt - 0.05e-6 * capt2) * math.cos(anom)
              - (91.38e-6 - 0.46e-6 * capt) * math.cos(2. * anom)
              - (1.45e-6 - 0.01e-6 * capt) * math.cos(3. * anom)
              - 0.02e-6 * math.cos(4. * anom))

    # Perturbations
    planets = (mmars, merth, mven, mjup, msat)
    pturbl = trig_series(math.cos, tables.SUN_LONGITUDE_PLANETARY, planets)
    pturbl += trig_series(math.sin, tables.SUN_LONGITUDE_LUNAR, (dmoon, mmoon, merth)) + .9
    pturbb = trig_series(math.cos, tables.SUN_LATITUDE_PLANETARY, (merth, mven, mjup))
    pturbb += trig_series(math.sin, tables.SUN_LATITUDE_LUNAR, (gmoon, mmoon, dmoon))
    pturbr = trig_series(math.cos, tables.SUN_RADIUS_PLANETARY, planets)
    pturbr += trig_series(math.cos, tables.SUN_RADIUS_LUNAR, (dmoon, mmoon, merth))

    lam = reduce_to_range(lam + pturbl * RADSEC)
    lograd = (lograd + pturbr) * LN_10
    rad = 1 + lograd * (1 + lograd * (.5 + lograd / 6))
    return OrbitalState(
        longitude=lam,
        latitude=pturbb * RADSEC,
        radius=rad,
        motion=.9856473354 * RADIAN / (rad * rad),
        semidiameter=959.63 if occultation_mode else 961.182,
        magnitude=-26.5,
    )

# ───────────────────────────── Planets ─────────────────────────────

@dataclass(frozen=True)
class PlanetModel:
    """Keplerian planet: mean elements, optional perturbations, fixed corrections."""
    name: str
    elements: Callable[[float, float], MeanElements]
    semidiameter: float
    magnitude: Callable[[float, float, float, "Frame"], float]
    perturbations: Optional[Callable[[float, float], Perturbation]] = None
    longitude_offset_arcsec: float = 0.0
    latitude_offset_arcsec: float = 0.0


def _elements(ecc: float, incl: float, node: float, argp: float,
              mrad: float, anom: float, motion: float) -> MeanElements:
    return MeanElements(
        eccentricity=ecc,
        inclination=incl * RADIAN,
        ascending_node=node * RADIAN,
        perihelion=argp * RADIAN,
        semi_major_axis=mrad,
        mean_anomaly=_fmod360(anom) * RADIAN,
        daily_motion=motion,
    )


def _mercury_elements(eday: float, capt: float) -> MeanElements:
    capt2 = capt * capt
    return _elements(
        ecc=.20561421 + .00002046 * capt - 0.03e-6 * capt2,
        incl=7.0028806 + .0018608 * capt - 18.3e-6 * capt2,
        node=47.145944 + 1.185208 * capt + .0001739 * capt2,
        argp=75.899697 + 1.555490 * capt + .0002947 * capt2,
        mrad=.3870986,
        anom=102.279381 + 4.0923344364 * eday + 6.7e-6 * capt2,
        motion=4.0923770233,
    )


def _mercury_perturbations(eday: float, capt: float) -> Perturbation:
    q0 = (102.28 + 4.092334429 * eday) * RADIAN
    v0 = (212.536 + 1.602126105 * eday) * RADIAN
    t0 = (-1.45 + .985604737 * eday) * RADIAN
    j0 = (225.36 + .083086735 * eday) * RADIAN
    s0 = (175.68 + .033455441 * eday) * RADIAN
    pturbl = sum(trig_series(math.cos, terms, (q0, -p))
                 for terms, p in zip(tables.MERCURY_LONGITUDE, (v0, t0, j0, s0)))
    pturbr = sum(trig_series(math.cos, terms, (q0, -p))
                 for terms, p in zip(tables.MERCURY_RADIUS, (v0, t0, j0)))
    return Perturbation(longitude=pturbl * RADSEC, log_radius=pturbr)


def _venus_arguments(eday: float) -> Tuple[float, float, float, float, float]:
    v0 = (212.60 + 1.602130154 * eday) * RADIAN
    t0 = (358.63 + .985608747 * eday) * RADIAN
    m0 = (319.74 + 0.524032490 * eday) * RADIAN
    j0 = (225.43 + .083090842 * eday) * RADIAN
    s0 = (175.8 + .033459258 * eday) * RADIAN
    return v0, t0, m0, j0, s0


def _venus_elements(eday: float, capt: float) -> MeanElements:
    capt2 = capt * capt
    mean = _elements(
        ecc=.00682069 - .00004774 * capt + 0.091e-6 * capt2,
        incl=3.393631 + .0010058 * capt - 0.97e-6 * capt2,
        node=75.779647 + .89985 * capt + .00041 * capt2,
        argp=130.163833 + 1.408036 * capt - .0009763 * capt2,
        mrad=.7233316,
        anom=212.603219 + 1.6021301540 * eday + .00128605 * capt2,
        motion=1.6021687039,
    )
    # Long period terms in the mean anomaly
    v0, t0, m0, j0, s0 = _venus_arguments(eday)
    anom = mean.mean_anomaly
    anom += ((2.761 - 0.022 * capt) * RADSEC
             * math.sin(13. * t0 - 8. * v0 + 43.83 * RADIAN + 4.52 * RADIAN * capt)
             + 0.268 * RADSEC * math.cos(4. * m0 - 7. * t0 + 3. * v0)
             + 0.019 * RADSEC * math.sin(4. * m0 - 7. * t0 + 3. * v0)
             - 0.208 * RADSEC * math.sin(s0 + 1.4 * RADIAN * capt))
    return MeanElements(mean.eccentricity, mean.inclination, mean.ascending_node,
                        mean.perihelion, mean.semi_major_axis, anom, mean.daily_motion)


def _venus_perturbations(eday: float, capt: float) -> Perturbation:
    v0, t0, m0, j0, _ = _venus_arguments(eday)
    return Perturbation(
        longitude=trig_series(math.cos, tables.VENUS_LONGITUDE, (v0, t0, m0, j0)) * RADSEC,
        latitude=trig_series(math.cos, tables.VENUS_LATITUDE, (v0, t0, j0)) * RADSEC,
        log_radius=trig_series(math.cos, tables.VENUS_RADIUS, (v0, t0, m0, j0)),
    )


def _mars_elements(eday: float, capt: float) -> MeanElements:
    capt2 = capt * capt
    return _elements(
        ecc=.09331290 + .000092064 * capt,
        incl=1.850333 - 6.75e-4 * capt,
        node=48.786442 + .770992 * capt,
        argp=334.218203 + 1.840758 * capt + 1.30e-4 * capt2,
        mrad=1.5236915,
        anom=319.529425 + .5240207666 * eday + 1.808e-4 * capt2,
        motion=0.5240711638,
    )


def _jupiter_elements(eday: float, capt: float) -> MeanElements:
    return _elements(
        ecc=.0483376 + 163.e-6 * capt,
        incl=1.308660 - .0055 * capt,
        node=99.43785 + 1.011 * capt,
        argp=12.71165 + 1.611 * capt,
        mrad=5.202803,
        anom=225.22165 + .0830912 * eday - .0484 * capt,
        motion=299.1284 / 3600.,
    )


def _saturn_elements(eday: float, capt: float) -> MeanElements:
    return _elements(
        ecc=.0558900 - .000347 * capt,
        incl=2.49256 - .0044 * capt,
        node=112.78364 + .87306 * capt,
        argp=91.08897 + 1.95917 * capt,
        mrad=9.538843,
        anom=175.47630 + .03345972 * eday - .56527 * capt,
        motion=120.4550 / 3600.,
    )


def _epoch_elements(table: OrbitalElementTable) -> Callable[[float, float], MeanElements]:
    def elements(eday: float, capt: float) -> MeanElements:
        cy = (eday - table.epoch_day) / 36525.
        mrad = table.semi_major_axis + table.semi_major_axis_rate * cy
        ecc = table.eccentricity + table.eccentricity_rate * cy
        cy /= 3600.
        argp = table.perihelion_longitude + table.perihelion_longitude_rate * cy
        return _elements(
            ecc=ecc,
            incl=table.inclination + table.inclination_rate * cy,
            node=table.ascending_node + table.ascending_node_rate * cy,
            argp=argp,
            mrad=mrad,
            anom=table.mean_longitude + table.mean_longitude_rate * cy - argp,
            motion=table.mean_longitude_rate / 36525. / 3600.,
        )
    return elements


def _mercury_magnitude(lam: float, beta: float, rad: float, frame: "Frame") -> float:
    i = _phase_angle_deg(lam, rad, frame.eday)
    return -.003 + .01815 * i + .0001023 * i * i


def _venus_magnitude(lam: float, beta: float, rad: float, frame: "Frame") -> float:
    i = _phase_angle_deg(lam, rad, frame.eday)
    return -4 + .01322 * i + .0000004247 * i * i * i


def _mars_magnitude(lam: float, beta: float, rad: float, frame: "Frame") -> float:
    return -1.30 + .01486 * _phase_angle_deg(lam, rad, frame.eday)


def _jupiter_magnitude(lam: float, beta: float, rad: float, frame: "Frame") -> float:
    return -8.93


def ring_magnitude(lam: float, beta: float, rad: float, frame: "Frame") -> float:
    """Saturn's magnitude from the ring-plane geometry, Exp. Supp. p. 363ff."""
    obliq = frame.obliquity
    capt = frame.capt
    capt2 = capt * capt
    xms, yms, zms = frame.sun_vector
    sd = rad * (math.cos(beta) * math.sin(lam) * math.sin(obliq) + math.sin(beta) * math.cos(obliq)) + zms
    sa = rad * (math.cos(beta) * math.sin(lam) * math.cos(obliq) - math.sin(beta) * math.sin(obliq)) + yms
    ca = rad * math.cos(beta) * math.cos(lam) + xms
    alpha = math.atan2(sa, ca)
    delta = math.atan2(sd, math.sqrt(sa * sa + ca * ca))

    capj = (6.9056 - 0.4322 * capt) * RADIAN
    capn = (126.3615 + 3.9894 * capt + 0.2403 * capt2) * RADIAN
    eye = (28.0743 - 0.0128 * capt) * RADIAN
    comg = (168.1179 + 1.3936 * capt) * RADIAN
    omg = (42.9236 - 2.7390 * capt - 0.2344 * capt2) * RADIAN

    # Saturnicentric ring-plane coordinates of the Earth
    sb = math.sin(capj) * math.cos(delta) * math.sin(alpha - capn) - math.cos(capj) * math.sin(delta)
    su = math.cos(capj) * math.cos(delta) * math.sin(alpha - capn) + math.sin(capj) * math.sin(delta)
    cu = math.cos(delta) * math.cos(alpha - capn)
    u = math.atan2(su, cu)
    b = math.atan2(sb, math.sqrt(su * su + cu * cu))

    # ... and of the Sun
    su = math.sin(eye) * math.sin(beta) + math.cos(eye) * math.cos(beta) * math.sin(lam - comg)
    cu = math.cos(beta) * math.cos(lam - comg)
    up = math.atan2(su, cu)

    sb = math.sin(b)
    return (-8.68 + 2.52 * abs(reduce_to_range(up + omg - u, centered=True))
            - 2.60 * abs(sb) + 1.25 * (sb * sb))


def _ringed(name: str, elements: Callable[[float, float], MeanElements]) -> PlanetModel:
    return PlanetModel(name, elements, semidiameter=83.33, magnitude=ring_magnitude,
                       longitude_offset_arcsec=-1185., latitude_offset_arcsec=-51.)


PLANET_MODELS: Dict[str, PlanetModel] = {
    "mercury": PlanetModel("mercury", _mercury_elements, 3.34, _mercury_magnitude,
                           perturbations=_mercury_perturbations),
    "venus": PlanetModel("venus", _venus_elements, 8.41, _venus_magnitude,
                         perturbations=_venus_perturbations),
    "mars": PlanetModel("mars", _mars_elements, 4.68, _mars_magnitude),
    "jupiter": PlanetModel("jupiter", _jupiter_elements, 98.47, _jupiter_magnitude,
                           longitude_offset_arcsec=555., latitude_offset_arcsec=-51.),
    "saturn": _ringed("saturn", _saturn_elements),
    "uranus": _ringed("uranus", _epoch_elements(tables.URANUS_ELEMENTS)),
    "neptune": _ringed("neptune", _epoch_elements(tables.NEPTUNE_ELEMENTS)),
    "pluto": _ringed("pluto", _epoch_elements(tables.PLUTO_ELEMENTS)),
}


def _kepler_orbit(el: MeanElements, pert: Perturbation) -> Tuple[float, float, float]:
    ecc = el.eccentricity
    enom = solve_kepler(el.mean_anomaly, ecc)
    vnom = true_anomaly(enom, ecc)
    rad = el.semi_major_axis * (1 - ecc * math.cos(enom))
    lam, beta = _reduce_to_ecliptic(vnom + el.perihelion + pert.longitude,
                                    el.ascending_node, el.inclination)
    beta += pert.latitude
    rad *= 1 + pert.log_radius * LN_10
    return lam, beta, rad


def planet_orbit(model: PlanetModel, frame: "Frame") -> OrbitalState:
    """Heliocentric ecliptic state of a planet at the frame's ephemeris time."""
    el = model.elements(frame.eday, frame.capt)
    pert = model.perturbations(frame.eday, frame.capt) if model.perturbations else Perturbation()
    lam, beta, rad = _kepler_orbit(el, pert)
    lam += model.longitude_offset_arcsec * RADSEC
    beta += model.latitude_offset_arcsec * RADSEC
    a = el.semi_major_axis
    return OrbitalState(
        longitude=reduce_to_range(lam),
        latitude=beta,
        radius=rad,
        motion=el.daily_motion * RADIAN * a * a / (rad * rad),
        semidiameter=model.semidiameter,
        magnitude=model.magnitude(lam, beta, rad, frame),
    )

# ───────────────────────────── Comets ─────────────────────────────

def comet_orbit(comet: CometElements, frame: "Frame") -> OrbitalState:
    ecc = comet.eccentricity
    if ecc > MAX_ECCENTRICITY:
        log.warning("Clamping eccentricity of %s from %.6f to %.3f",
                    comet.name, ecc, MAX_ECCENTRICITY)
        ecc = MAX_ECCENTRICITY
    mrad = comet.perihelion_distance / (1 - ecc)
    motion = GAUSS_K * math.sqrt(1 / (mrad * mrad * mrad)) / RADIAN
    el = MeanElements(
        eccentricity=ecc,
        inclination=comet.inclination * RADIAN,
        ascending_node=(comet.ascending_node + 0.4593) * RADIAN,
        perihelion=(comet.argument_of_perihelion + comet.ascending_node + 0.4066) * RADIAN,
        semi_major_axis=mrad,
        mean_anomaly=(frame.eday - comet.perihelion_day) * motion * RADIAN,
        daily_motion=motion,
    )
    lam, beta, rad = _kepler_orbit(el, Perturbation())
    return OrbitalState(
        longitude=reduce_to_range(lam),
        latitude=beta,
        radius=rad,
        motion=motion * RADIAN * mrad * mrad / (rad * rad),
        semidiameter=0.0,
        magnitude=5.47 + 6.1 / 2.303 * math.log(rad),
    )

# ───────────────────────────── Moon ─────────────────────────────

class _LunarArguments:
    """Principal arguments (degrees) and Brown re-normalisation factors."""
    __slots__ = ("mnom", "msun", "noded", "dmoon", "k1", "k2", "k3", "k4")

    def __init__(self, mnom, msun, noded, dmoon, k1, k2, k3, k4):
        self.mnom, self.msun, self.noded, self.dmoon = mnom, msun, noded, dmoon
        self.k1, self.k2, self.k3, self.k4 = k1, k2, k3, k4

    def term(self, f: Callable[[float], float], coef: float,
             args: Tuple[int, int, int, int], angle: float = 0.0) -> float:
        i, j, k, m = args
        x = coef * f((i * self.mnom + j * self.msun + k * self.noded + m * self.dmoon + angle) * RADIAN)
        x *= self.k1 ** abs(i) * self.k2 ** abs(j) * self.k3 ** abs(k)
        if m % 2:
            x *= self.k4
        return x

    def series(self, f: Callable[[float], float], terms: Sequence[LunarTerm]) -> float:
        return sum(self.term(f, coef, args) for coef, args in terms)


def _moon_magnitude(phase: float) -> float:
    g = abs(180. - phase * 360.) * RADIAN
    return -12.73 + 1.49 * g + 0.043 * g ** 4


def lunar_position(frame: "Frame", occultation_mode: bool = False) -> GeocentricPosition:
    """Geocentric apparent place of the Moon after Brown's theory."""
    eday = frame.eday
    capt = frame.capt
    capt2 = capt * capt
    capt3 = capt * capt2

    # Fundamental elements, epoch 1900 Jan 0.5, mean equinox of date
    dlong = _fmod360(270.434164 + 13.1763965268 * eday - .001133 * capt2 + 2.e-6 * capt3)
    argp = _fmod360(334.329556 + .1114040803 * eday - .010325 * capt2 - 12.e-6 * capt3)
    node = math.remainder(259.183275 - .0529539222 * eday + .002078 * capt2 + 2.e-6 * capt3, 360.)
    lsun = _fmod360(279.696678 + .9856473354 * eday + .000303 * capt2)
    psun = _fmod360(281.220833 + .0000470684 * eday + .000453 * capt2 + 3.e-6 * capt3)
    eccm = 22639.550
    eccs = .01675104 - .00004180 * capt
    cpe = 124.986
    chp = 3422.451

    # Subsidiary longitudes, fixed equinox of 1850.0
    v0 = 342.069128 + 1.6021304820 * eday
    t0 = 98.998753 + 0.9856091138 * eday
    m0 = 293.049675 + 0.5240329445 * eday
    j0 = 237.352319 + 0.0830912295 * eday

    # Periodic corrections to the fundamental elements
    tc = capt + .5
    arg1 = (41.1 + 20.2 * tc) * RADIAN
    arg2 = (dlong - argp + 33. + 3. * t0 - 10. * v0 - 2.6 * tc) * RADIAN
    arg3 = (dlong - argp + 151.1 + 16. * t0 - 18. * v0 - tc) * RADIAN  # great Venus inequality
    arg4 = node * RADIAN
    arg5 = (node + 276.2 - 2.3 * tc) * RADIAN
    arg6 = (313.9 + 13. * t0 - 8. * v0) * RADIAN
    arg7 = (dlong - argp + 112.0 + 29. * t0 - 26. * v0) * RADIAN
    arg8 = (dlong + argp - 2. * lsun + 273. + 21. * t0 - 20. * v0) * RADIAN
    arg9 = (node + 290.1 - 0.9 * tc) * RADIAN
    arg10 = (115. + 38.5 * tc) * RADIAN
    dlong += (0.84 * math.sin(arg1) + 0.31 * math.sin(arg2) + 14.27 * math.sin(arg3)
              + 7.261 * math.sin(arg4) + 0.282 * math.sin(arg5) + 0.237 * math.sin(arg6)
              + 0.108 * math.sin(arg7) + 0.126 * math.sin(arg8)) / 3600.
    argp += (-2.10 * math.sin(arg1) - 0.118 * math.sin(arg3) - 2.076 * math.sin(arg4)
             - 0.840 * math.sin(arg5) - 0.593 * math.sin(arg6)) / 3600.
    node += (0.63 * math.sin(arg1) + 0.17 * math.sin(arg3) + 95.96 * math.sin(arg4)
             + 15.58 * math.sin(arg5) + 1.86 * math.sin(arg9)) / 3600.
    t0 += (-6.40 * math.sin(arg1) - 1.89 * math.sin(arg6)) / 3600.
    psun += (6.40 * math.sin(arg1) + 1.89 * math.sin(arg6)) / 3600.
    dgamma = -4.318 * math.cos(arg4) - 0.698 * math.cos(arg5) - 0.083 * math.cos(arg9)
    j0 += 0.33 * math.sin(arg10)

    # Brown's eccentricities, inclination and parallax brought up to date
    k3 = 1. + 2.708e-6 + .000108008 * dgamma
    k5 = chp / 3422.700
    la = _LunarArguments(
        mnom=dlong - argp,
        msun=lsun - psun,
        noded=dlong - node,
        dmoon=dlong - lsun,
        k1=eccm / 22639.500,
        k2=eccs / .01675104,
        k3=k3,
        k4=cpe / 125.154,
    )

    lterms = la.series(math.sin, tables.MOON_LONGITUDE)
    planets = (t0, v0, j0, m0, node)
    for term in tables.MOON_LONGITUDE_PLANETARY:
        angle = term.offset + sum(p * x for p, x in zip(term.planets, planets))
        lterms += la.term(math.sin, term.coefficient, term.arguments, angle)
    sterms = la.series(math.sin, tables.MOON_LATITUDE_ARGUMENT)
    cterms = la.series(math.cos, tables.MOON_LATITUDE_FACTOR)
    nterms = la.series(math.sin, tables.MOON_LATITUDE_NODE)
    pterms = la.term(math.sin, 0.215, (0, 0, 0, 0), dlong)
    spterms = 3422.700 + la.series(math.cos, tables.MOON_PARALLAX)

    lam = (dlong + lterms / 3600.) * RADIAN
    arglat = (la.noded + sterms / 3600.) * RADIAN
    gamma1 = 18519.700 * k3
    gamma2 = -6.241 * k3 ** 3
    gamma3 = 0.004 * k3 ** 5
    k6 = (gamma1 + cterms) / gamma1
    beta = k6 * (gamma1 * math.sin(arglat) + gamma2 * math.sin(3. * arglat)
                 + gamma3 * math.sin(5. * arglat) + nterms) + pterms
    if occultation_mode:
        beta -= 0.6
    beta *= RADSEC

    spterms = k5 * spterms * RADSEC
    hp = spterms + (spterms * spterms * spterms) / 6.
    semi = .0799 + .272453 * (hp / RADSEC)
    dmoon = la.dmoon
    if dmoon < 0.:
        dmoon += 360.
    phase = dmoon / 360.

    # To equatorial coordinates, true equator and equinox
    lam += frame.nutation_longitude
    obl2 = frame.true_obliquity
    xmp = math.cos(lam) * math.cos(beta)
    ymp = math.sin(lam) * math.cos(beta) * math.cos(obl2) - math.sin(obl2) * math.sin(beta)
    zmp = math.sin(lam) * math.cos(beta) * math.sin(obl2) + math.cos(obl2) * math.sin(beta)
    return GeocentricPosition(
        right_ascension=math.atan2(ymp, xmp),
        declination=math.atan2(zmp, math.sqrt(xmp * xmp + ymp * ymp)),
        horizontal_parallax=hp,
        semidiameter=semi,
        magnitude=_moon_magnitude(phase),
        ecliptic_longitude=reduce_to_range(lam, centered=True),
        distance=1.0,
        phase=phase,
    )

# ───────────────────────────── Earth's shadow ─────────────────────────────

def shadow_position(sun: GeocentricPosition, moon: GeocentricPosition,
                    sun_radius: float) -> GeocentricPosition:
    """Centre of the umbra at the Moon's distance, opposite the Sun."""
    mhp = moon.horizontal_parallax
    return GeocentricPosition(
        right_ascension=math.fmod(sun.right_ascension + math.pi, TWO_PI),
        declination=-sun.declination,
        horizontal_parallax=mhp,
        semidiameter=1.0183 * mhp / RADSEC - 969.85 / sun_radius,
        magnitude=moon.magnitude,
        ecliptic_longitude=reduce_to_range(sun.ecliptic_longitude + math.pi, centered=True),
        distance=moon.distance,
    )
