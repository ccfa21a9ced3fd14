# almanac/core/timescales.py
# -----------------------------------------------------------------------------
# Almanac Time Base and Observer Geometry
#
# Standards Compliance:
#   • IAU SOFA/ERFA calendar conversion (dtf2d / jd2cal) on the UTC scale
#   • ERFA leap-second table (dat) for the TT − UTC alternative ΔT model
#   • Clarke spheroid geocentric latitude and radius corrections
#
# Conventions:
#   • Day number d counts days from 1899 December 31, 12h UTC (JD 2415020.0)
#   • Ephemeris day = d + ΔT / 86400
#   • Angles are radians internally; west longitude is positive
#
# Public API:
#   day_number(when) -> float
#   datetime_from_day(day) -> datetime
#   julian_date(day) -> float
#   delta_t(day, override, model) -> float
#   Observer.from_degrees / Observer.from_string
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
import logging
import warnings as py_warnings
from dataclasses import dataclass, asdict
from datetime import datetime, timezone, timedelta
from enum import Enum
from typing import Any, Dict

import erfa  # pyERFA - SOFA/ERFA gold standard

from almanac.core.errors import LocationError

log = logging.getLogger(__name__)

__all__ = [
    "Constants",
    "DeltaTModel",
    "Observer",
    "MURRAY_HILL",
    "day_number",
    "datetime_from_day",
    "julian_date",
    "delta_t",
]

# ───────────────────────────── Constants ─────────────────────────────

class Constants:
    SECONDS_PER_DAY = 86400.0
    JD_DAY_ZERO = 2415020.0          # 1899-12-31T12:00:00Z
    DELTA_T_SLOPE = 0.001704         # seconds of ΔT per day since day zero
    TT_MINUS_TAI = 32.184            # seconds
    METERS_TO_FEET = 3.28084

    TWO_PI = 2.0 * math.pi
    RADIAN = math.pi / 180.0
    RADSEC = RADIAN / 3600.0

    DAYS_PER_CENTURY = 36524.220     # tropical century
    DAYS_PER_YEAR = 365.24220


class DeltaTModel(Enum):
    """How ΔT (ephemeris minus universal time) is estimated."""
    LINEAR = "linear"    # d × 0.001704 s
    ERFA = "erfa"        # 32.184 s + TAI − UTC from the ERFA leap-second table


# ───────────────────────────── Day numbers ─────────────────────────────

def _as_utc(when: datetime) -> datetime:
    if when.tzinfo is None:
        return when
    return when.astimezone(timezone.utc).replace(tzinfo=None)


def day_number(when: datetime) -> float:
    """Day number of a UTC instant; naive datetimes are taken as UTC."""
    when = _as_utc(when)
    sec = when.second + when.microsecond / 1e6
    with py_warnings.catch_warnings():
        py_warnings.simplefilter("ignore", erfa.ErfaWarning)
        d1, d2 = erfa.dtf2d("UTC", when.year, when.month, when.day,
                            when.hour, when.minute, sec)
    return (float(d1) - Constants.JD_DAY_ZERO) + float(d2)


def julian_date(day: float) -> float:
    return day + Constants.JD_DAY_ZERO


def datetime_from_day(day: float) -> datetime:
    """UTC datetime (timezone-aware) for a day number."""
    jd1 = math.floor(day) + Constants.JD_DAY_ZERO
    jd2 = day - math.floor(day)
    iy, im, iday, fd = erfa.jd2cal(jd1, jd2)
    base = datetime(int(iy), int(im), int(iday), tzinfo=timezone.utc)
    micro = round(float(fd) * Constants.SECONDS_PER_DAY * 1e6)
    return base + timedelta(microseconds=micro)


def delta_t(day: float, override: float = 0.0,
            model: DeltaTModel = DeltaTModel.LINEAR) -> float:
    """ΔT in seconds; a nonzero override wins over any model."""
    if override != 0:
        return override
    if model is DeltaTModel.ERFA:
        when = datetime_from_day(day)
        fd = (when.hour * 3600 + when.minute * 60 + when.second) / Constants.SECONDS_PER_DAY
        with py_warnings.catch_warnings(record=True) as caught:
            py_warnings.simplefilter("always", erfa.ErfaWarning)
            dat = float(erfa.dat(when.year, when.month, when.day, fd))
        if caught:
            log.warning("ERFA leap-second table is dubious for %s", when.date())
        return Constants.TT_MINUS_TAI + dat
    return day * Constants.DELTA_T_SLOPE


# ───────────────────────────── Observer ─────────────────────────────

@dataclass(frozen=True)
class Observer:
    """Observing site: north latitude and west longitude in radians, elevation in metres."""
    latitude: float
    west_longitude: float
    elevation_m: float

    @classmethod
    def from_degrees(cls, nlat: float, wlong: float, elevation_m: float) -> "Observer":
        return cls(nlat * Constants.RADIAN, wlong * Constants.RADIAN, float(elevation_m))

    @classmethod
    def from_string(cls, text: str) -> "Observer":
        """Parse "nlat wlong elev" (degrees, degrees, metres)."""
        fields = text.split()
        if len(fields) < 3:
            raise LocationError(f"Location needs three fields, got {len(fields)}", text=text)
        try:
            nlat, wlong, elev = (float(f) for f in fields[:3])
        except ValueError as e:
            raise LocationError(f"Unparseable location '{text.strip()}': {e}", text=text)
        if not all(math.isfinite(v) for v in (nlat, wlong, elev)):
            raise LocationError(f"Non-finite location '{text.strip()}'", text=text)
        return cls.from_degrees(nlat, wlong, elev)

    @property
    def elevation_ft(self) -> float:
        return self.elevation_m * Constants.METERS_TO_FEET

    @property
    def geocentric_latitude(self) -> float:
        phi = self.latitude
        return (phi - (692.74 * Constants.RADSEC) * math.sin(2 * phi)
                + (1.16 * Constants.RADSEC) * math.sin(4 * phi))

    @property
    def geocentric_radius(self) -> float:
        """Distance from the Earth's centre in equatorial radii."""
        phi = self.latitude
        return (.99832707 + .00167644 * math.cos(2 * phi) - .352e-5 * math.cos(4 * phi)
                + .001e-5 * math.cos(6 * phi) + .1568e-6 * self.elevation_ft)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result['latitude_deg'] = self.latitude / Constants.RADIAN
        result['west_longitude_deg'] = self.west_longitude / Constants.RADIAN
        return result


# Murray Hill, NJ
MURRAY_HILL = Observer.from_degrees(40 + 41.06 / 60, 74 + 23.98 / 60, 150.0)
