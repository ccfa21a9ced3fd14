# almanac/core/pipeline.py
# -----------------------------------------------------------------------------
# Coordinate Pipeline: Heliocentric → Geocentric → Topocentric
#
# Stages:
#   • Light-time correction from the body's apparent angular motion
#   • Annual parallax from the frame's geocentric Sun vector
#   • Annual aberration from the Earth's finite-differenced orbital velocity
#   • Nutation in longitude, then ecliptic → equator with the true obliquity
#   • Diurnal parallax on the Clarke spheroid, local hour angle, horizon
#
# Conventions:
#   • Geocentric right ascension from atan2 (−π, π]; topocentric RA in [0, 2π)
#   • Topocentric hour angle in (−π, π]
#   • Azimuth and elevation in degrees; azimuth measured from north through east
#   • Semidiameters in arcseconds
#
# Public API:
#   heliocentric_to_geocentric(state, frame) -> GeocentricPosition
#   geocentric_to_topocentric(position, frame) -> TopocentricPosition
#   horizon_to_equatorial(azimuth_deg, elevation_deg, frame) -> (ra, dec)
#   angular_distance(a, b) -> arcseconds
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple

from almanac.core.frame import Frame
from almanac.core.orbits import GeocentricPosition, OrbitalState, pyth, reduce_to_range
from almanac.core.timescales import Constants

log = logging.getLogger(__name__)

__all__ = [
    "TopocentricPosition",
    "heliocentric_to_geocentric",
    "geocentric_to_topocentric",
    "horizon_to_equatorial",
    "angular_distance",
]

RADIAN = Constants.RADIAN
RADSEC = Constants.RADSEC

LIGHT_TIME = .0057756           # days per AU
SOLAR_PARALLAX = 8.794          # arcseconds at 1 AU
MAGNITUDE_DISTANCE_LIMIT = 2.e5  # AU; beyond this no distance brightening


@dataclass(frozen=True)
class TopocentricPosition:
    right_ascension: float      # radians, [0, 2π)
    declination: float          # radians
    semidiameter: float         # arcseconds
    azimuth: float              # degrees
    elevation: float            # degrees
    hour_angle: float           # radians, (−π, π]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

# ───────────────────────────── Heliocentric → Geocentric ─────────────────────────────

def heliocentric_to_geocentric(state: OrbitalState, frame: Frame) -> GeocentricPosition:
    """Apparent geocentric place of a body given its heliocentric ecliptic state.

    A zero radius places the body at the Earth's position relative to the Sun,
    which is how the Sun itself is carried through the pipeline.
    """
    lam, beta, rad = state.longitude, state.latitude, state.radius
    xms, yms, zms = frame.sun_vector
    xdot, ydot, zdot = frame.earth_velocity

    # Geocentric distance and light-time correction
    xmp = rad * math.cos(beta) * math.cos(lam)
    ymp = rad * math.cos(beta) * math.sin(lam)
    zmp = rad * math.sin(beta)
    rp = math.sqrt((xmp + xms) ** 2 + (ymp + yms) ** 2 + (zmp + zms) ** 2)
    lmb2 = lam - LIGHT_TIME * rp * state.motion
    xmp = rad * math.cos(beta) * math.cos(lmb2)
    ymp = rad * math.cos(beta) * math.sin(lmb2)

    # Annual parallax
    xmp += xms
    ymp += yms
    zmp += zms
    rp = math.sqrt(xmp * xmp + ymp * ymp + zmp * zmp)

    # Annual aberration
    xmp -= xdot * rp
    ymp -= ydot * rp
    zmp -= zdot * rp

    # Mean to true equinox, then to the equator
    lmb2 = math.atan2(ymp, xmp) + frame.nutation_longitude
    beta2 = math.atan2(zmp, math.sqrt(xmp * xmp + ymp * ymp))
    tobliq = frame.true_obliquity
    xmp = rp * math.cos(lmb2) * math.cos(beta2)
    ymp = rp * (math.sin(lmb2) * math.cos(beta2) * math.cos(tobliq) - math.sin(tobliq) * math.sin(beta2))
    zmp = rp * (math.sin(lmb2) * math.cos(beta2) * math.sin(tobliq) + math.cos(tobliq) * math.sin(beta2))

    mag = state.magnitude
    if 0 < rad < MAGNITUDE_DISTANCE_LIMIT:
        mag += 2.17 * math.log(rad * rp)

    return GeocentricPosition(
        right_ascension=math.atan2(ymp, xmp),
        declination=math.atan2(zmp, math.sqrt(xmp * xmp + ymp * ymp)),
        horizontal_parallax=SOLAR_PARALLAX * RADSEC / rp,
        semidiameter=state.semidiameter / rp,
        magnitude=mag,
        ecliptic_longitude=reduce_to_range(lmb2, centered=True),
        distance=rp,
    )

# ───────────────────────────── Geocentric → Topocentric ─────────────────────────────

def geocentric_to_topocentric(position: GeocentricPosition, frame: Frame) -> TopocentricPosition:
    """Diurnal parallax and horizon coordinates for the frame's observer."""
    observer = frame.observer
    gst, wlong = frame.sidereal_time, frame.west_longitude
    glat = observer.geocentric_latitude
    erad = observer.geocentric_radius
    hp = position.horizontal_parallax
    decl = position.declination
    lha = gst - position.right_ascension - wlong

    sa = math.cos(decl) * math.sin(lha)
    ca = math.cos(decl) * math.cos(lha) - erad * math.cos(glat) * math.sin(hp)
    sd = math.sin(decl) - erad * math.sin(glat) * math.sin(hp)
    lha = math.atan2(sa, ca)
    decl2 = math.atan2(sd, math.sqrt(sa * sa + ca * ca))
    f = math.sqrt(sa * sa + ca * ca + sd * sd)

    nlat = observer.latitude
    sel = math.sin(nlat) * math.sin(decl2) + math.cos(nlat) * math.cos(decl2) * math.cos(lha)
    el = math.atan2(sel, pyth(sel))
    saz = math.sin(lha) * math.cos(decl2)
    caz = math.cos(nlat) * math.sin(decl2) - math.sin(nlat) * math.cos(decl2) * math.cos(lha)
    az = math.pi + math.atan2(saz, -caz)

    return TopocentricPosition(
        right_ascension=reduce_to_range(gst - lha - wlong),
        declination=decl2,
        semidiameter=position.semidiameter / f,
        azimuth=az / RADIAN,
        elevation=el / RADIAN,
        hour_angle=lha,
    )


def horizon_to_equatorial(azimuth_deg: float, elevation_deg: float,
                          frame: Frame) -> Tuple[float, float]:
    """Topocentric (RA, Dec) of a horizon direction; inverse of the horizon step."""
    nlat = frame.observer.latitude
    el = elevation_deg * RADIAN
    a = azimuth_deg * RADIAN - math.pi
    sel = math.sin(el)
    saz = math.cos(el) * math.sin(a)
    caz = -math.cos(el) * math.cos(a)
    sdec = math.sin(nlat) * sel + math.cos(nlat) * caz
    cdec_cos_ha = math.cos(nlat) * sel - math.sin(nlat) * caz
    lha = math.atan2(saz, cdec_cos_ha)
    dec = math.atan2(sdec, math.sqrt(saz * saz + cdec_cos_ha * cdec_cos_ha))
    return reduce_to_range(frame.sidereal_time - lha - frame.west_longitude), dec


def angular_distance(a: Any, b: Any) -> float:
    """Great-circle separation in arcseconds of two places with RA/Dec attributes."""
    d = (math.sin(a.declination) * math.sin(b.declination)
         + math.cos(a.declination) * math.cos(b.declination)
         * math.cos(a.right_ascension - b.right_ascension))
    return abs(math.atan2(pyth(d), d)) / RADSEC
