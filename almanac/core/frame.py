# almanac/core/frame.py
# -----------------------------------------------------------------------------
# Per-Instant Ephemeris Frame
#
# Standards Compliance:
#   • Nutation series of the Explanatory Supplement (1961), pp. 44-45
#   • Newcomb mean obliquity and sidereal time polynomials
#   • Cross-validation against IAU 1980 nutation (erfa.nut80), mean
#     obliquity (erfa.obl80) and apparent sidereal time (erfa.gst94)
#
# Contents:
#   • Ephemeris day, Julian centuries, corrected observer longitude
#   • Nutation in longitude and obliquity, mean and true obliquity
#   • Apparent sidereal time at the ephemeris instant
#   • Geocentric Sun vector and the Earth's orbital velocity
#
# A Frame is immutable and built once per sample time; every body model and
# pipeline stage reads it explicitly.
#
# Public API:
#   build_frame(day, observer, delta_t_seconds) -> Frame
#   FrameBuilder(observer, delta_t_seconds)(day) -> Frame
#   validate_frame(frame, strict=False) -> FrameValidation
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any, Tuple

import erfa  # pyERFA - SOFA/ERFA gold standard

from almanac.core import tables
from almanac.core.errors import ValidationError
from almanac.core.orbits import solar_orbit, trig_series
from almanac.core.timescales import Constants, Observer, julian_date

log = logging.getLogger(__name__)

__all__ = [
    "Frame",
    "FrameBuilder",
    "FrameValidation",
    "build_frame",
    "validate_frame",
]

RADIAN = Constants.RADIAN
RADSEC = Constants.RADSEC

# Earth's velocity scale: AU per 0.1 day to aberration (light-time of 1 AU in days / 0.1)
ABERRATION_SCALE = .057756
VELOCITY_STEP_DAYS = .1

# Tolerances against ERFA, arcseconds
VALIDATION_TOLERANCES = {
    'nutation_arcsec': 1.0,
    'obliquity_arcsec': 1.0,
    'sidereal_arcsec': 30.0,
}

Vector = Tuple[float, float, float]

# ───────────────────────────── Frame ─────────────────────────────

@dataclass(frozen=True)
class Frame:
    """Time-dependent quantities shared by every body at one sample instant."""
    day: float                      # universal day number
    delta_t: float                  # seconds
    eday: float                     # ephemeris day number
    capt: float                     # tropical centuries since 1900
    observer: Observer
    west_longitude: float           # observer longitude advanced by ΔT, radians
    nutation_longitude: float       # φ, radians
    nutation_obliquity: float       # ε, radians
    short_nutation_longitude: float
    short_nutation_obliquity: float
    obliquity: float                # mean obliquity, radians
    sidereal_time: float            # apparent, radians
    sun_vector: Vector              # geocentric Sun, ecliptic, AU
    earth_velocity: Vector          # aberration vector
    sun_radius: float               # AU

    @property
    def true_obliquity(self) -> float:
        return self.obliquity + self.nutation_obliquity

    @property
    def capt2(self) -> float:
        return self.capt * self.capt

    @property
    def capt3(self) -> float:
        return self.capt * self.capt * self.capt

    def to_dict(self) -> Dict[str, Any]:
        return {
            'day': self.day,
            'julian_date': julian_date(self.day),
            'delta_t': self.delta_t,
            'eday': self.eday,
            'nutation_longitude_arcsec': self.nutation_longitude / RADSEC,
            'nutation_obliquity_arcsec': self.nutation_obliquity / RADSEC,
            'obliquity_deg': self.obliquity / RADIAN,
            'sidereal_time_deg': self.sidereal_time / RADIAN,
            'sun_radius_au': self.sun_radius,
        }


def _nutation(eday: float, capt: float) -> Tuple[float, float, float, float]:
    """Nutation (φ, ε) and their short-period parts, radians."""
    capt2 = capt * capt
    capt3 = capt * capt2
    mnom = (296.104608 + 13.0649924465 * eday + 9.192e-3 * capt2 + 14.38e-6 * capt3) * RADIAN
    msun = (358.475833 + .9856002669 * eday - .150e-3 * capt2 - 3.33e-6 * capt3) * RADIAN
    noded = (11.250889 + 13.2293504490 * eday - 3.211e-3 * capt2 - 0.33e-6 * capt3) * RADIAN
    dmoon = (350.737486 + 12.1907491914 * eday - 1.436e-3 * capt2 + 1.89e-6 * capt3) * RADIAN
    node = (259.183275 - .0529539222 * eday + 2.078e-3 * capt2 + 2.22e-6 * capt3) * RADIAN

    phi = -(17.2327 + .01737 * capt) * math.sin(node)
    phi += trig_series(math.sin, tables.NUTATION_LONGITUDE, (node, noded, dmoon, msun))
    eps = trig_series(math.cos, tables.NUTATION_OBLIQUITY, (node, noded, dmoon, msun))
    dphi = trig_series(math.sin, tables.NUTATION_LONGITUDE_SHORT, (node, noded, mnom, dmoon))
    deps = trig_series(math.cos, tables.NUTATION_OBLIQUITY_SHORT, (node, noded, mnom))
    return (phi + dphi) * RADSEC, (eps + deps) * RADSEC, dphi * RADSEC, deps * RADSEC


def _sun_vector(eday: float, capt: float) -> Tuple[Vector, float]:
    sun = solar_orbit(eday, capt)
    rc = sun.radius * math.cos(sun.latitude)
    return (rc * math.cos(sun.longitude), rc * math.sin(sun.longitude),
            sun.radius * math.sin(sun.latitude)), sun.radius


def build_frame(day: float, observer: Observer, delta_t_seconds: float) -> Frame:
    """Frame for universal day number ``day`` with a fixed ΔT."""
    eday = day + delta_t_seconds / Constants.SECONDS_PER_DAY
    capt = eday / Constants.DAYS_PER_CENTURY
    capt2 = capt * capt
    capt3 = capt * capt2

    phi, eps, dphi, deps = _nutation(eday, capt)
    obliq = (23.452294 - .0130125 * capt - 1.64e-6 * capt2 + 0.503e-6 * capt3) * RADIAN

    gst = math.fmod(99.690983 + 360.9856473354 * eday + .000387 * capt2 - 180., 360.)
    if gst < 0.:
        gst += 360.
    gst = gst * RADIAN + phi * math.cos(obliq)

    ahead, _ = _sun_vector(eday + VELOCITY_STEP_DAYS, capt)
    sun, srad = _sun_vector(eday, capt)
    velocity = tuple(ABERRATION_SCALE * (a - s) for a, s in zip(ahead, sun))

    return Frame(
        day=day,
        delta_t=delta_t_seconds,
        eday=eday,
        capt=capt,
        observer=observer,
        west_longitude=observer.west_longitude + 15. * delta_t_seconds * RADSEC,
        nutation_longitude=phi,
        nutation_obliquity=eps,
        short_nutation_longitude=dphi,
        short_nutation_obliquity=deps,
        obliquity=obliq,
        sidereal_time=gst,
        sun_vector=sun,
        earth_velocity=velocity,
        sun_radius=srad,
    )


@dataclass(frozen=True)
class FrameBuilder:
    """Builds frames for one observer and one ΔT, as a sampling pass needs."""
    observer: Observer
    delta_t_seconds: float

    def __call__(self, day: float) -> Frame:
        return build_frame(day, self.observer, self.delta_t_seconds)

# ───────────────────────────── Validation ─────────────────────────────

@dataclass(frozen=True)
class FrameValidation:
    """Differences from the ERFA reference, arcseconds."""
    reference_source: str
    nutation_longitude_difference: float
    nutation_obliquity_difference: float
    obliquity_difference: float
    sidereal_difference: float
    passed_tolerance: bool
    notes: List[str] = field(default_factory=list)


def _wrap_arcsec(radians: float) -> float:
    return math.remainder(radians, Constants.TWO_PI) / RADSEC


def validate_frame(frame: Frame, strict: bool = False) -> FrameValidation:
    """Compare nutation, obliquity and sidereal time with ERFA's IAU 1980 models."""
    tt1 = math.floor(frame.eday) + Constants.JD_DAY_ZERO
    tt2 = frame.eday - math.floor(frame.eday)
    dpsi, deps = erfa.nut80(tt1, tt2)
    eps0 = erfa.obl80(tt1, tt2)
    ut1 = math.floor(frame.day) + Constants.JD_DAY_ZERO
    ut2 = frame.day - math.floor(frame.day)
    gst = erfa.gst94(ut1, ut2)

    # The sidereal time is evaluated at ephemeris time; the frame carries the
    # matching ΔT advance in the observer's longitude.
    local_shift = frame.west_longitude - frame.observer.west_longitude

    d_phi = _wrap_arcsec(frame.nutation_longitude - float(dpsi))
    d_eps = _wrap_arcsec(frame.nutation_obliquity - float(deps))
    d_obl = _wrap_arcsec(frame.obliquity - float(eps0))
    d_gst = _wrap_arcsec(frame.sidereal_time - local_shift - float(gst))

    notes = []
    if abs(d_phi) > VALIDATION_TOLERANCES['nutation_arcsec']:
        notes.append(f"nutation_longitude_drift_{d_phi:.3f}arcsec")
    if abs(d_eps) > VALIDATION_TOLERANCES['nutation_arcsec']:
        notes.append(f"nutation_obliquity_drift_{d_eps:.3f}arcsec")
    if abs(d_obl) > VALIDATION_TOLERANCES['obliquity_arcsec']:
        notes.append(f"obliquity_drift_{d_obl:.3f}arcsec")
    if abs(d_gst) > VALIDATION_TOLERANCES['sidereal_arcsec']:
        notes.append(f"sidereal_time_drift_{d_gst:.3f}arcsec")

    report = FrameValidation(
        reference_source="ERFA IAU 1980",
        nutation_longitude_difference=d_phi,
        nutation_obliquity_difference=d_eps,
        obliquity_difference=d_obl,
        sidereal_difference=d_gst,
        passed_tolerance=not notes,
        notes=notes,
    )
    if notes:
        log.warning("Frame at day %.5f drifts from ERFA: %s", frame.day, ", ".join(notes))
        if strict:
            raise ValidationError("Frame exceeds ERFA tolerance", day=frame.day, notes=notes)
    return report
