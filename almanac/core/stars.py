# almanac/core/stars.py
# -----------------------------------------------------------------------------
# Star Catalog and Lunar Occultations of Stars
#
# Catalog format (fixed-width, one star per line, B1950 mean places):
#   [0:6]   catalog identifier (SAO number)
#   [18:20] [21:23] [24:30]   right ascension h m s
#   [31:37] proper motion in RA, seconds of time per year
#   [38:41] [42:44] [45:50]   declination d m s, sign on the degrees field
#   [51:57] proper motion in declination, arcseconds per year
#   [58:61] parallax (0 = unknown)
#   [63:67] visual magnitude
#
# Apparent place:
#   • E-terms of aberration removed, proper motion applied from epoch 1950.0
#   • Precession from the catalog epoch to date (rigorous to second order)
#   • Mean ecliptic of date, then the common heliocentric pipeline
#
# Public API:
#   parse_catalog_line(line) -> CatalogStar
#   read_catalog(source, strict=True) -> List[CatalogStar]
#   apparent_place(star, frame) -> GeocentricPosition
#   near_lunar_path(lam, beta, eday) -> bool
#   star_occultations(moon, catalog, window, builder, frames, sink, tuning)
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
import logging
from dataclasses import dataclass, asdict, replace
from os import PathLike
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union, TYPE_CHECKING

from almanac.core.bodies import CelestialBody, PositionSample
from almanac.core.errors import CatalogError
from almanac.core.events import EventFlag, EventSink
from almanac.core.frame import Frame, FrameBuilder
from almanac.core.occultation import refine_occultation
from almanac.core.orbits import GeocentricPosition, OrbitalState
from almanac.core.pipeline import heliocentric_to_geocentric
from almanac.core.sampler import SamplingWindow
from almanac.core.timescales import Constants

if TYPE_CHECKING:
    from almanac.core.search import SearchTuning

log = logging.getLogger(__name__)

__all__ = [
    "CatalogStar",
    "parse_catalog_line",
    "read_catalog",
    "ecliptic_of_date",
    "apparent_place",
    "near_lunar_path",
    "moon_ra_window",
    "in_ra_window",
    "star_occultations",
]

RADIAN = Constants.RADIAN
RADSEC = Constants.RADSEC
TWO_PI = Constants.TWO_PI

CATALOG_EPOCH = (1950 - 1900) * Constants.DAYS_PER_YEAR + 0.313
MIN_LINE_LENGTH = 67
MOON_RA_MARGIN = 1000 * RADSEC
LUNAR_PATH_LIMIT = .0183
NO_PARALLAX_DISTANCE = 1.e9     # AU
PARALLAX_SCALE = 20600.         # AU per unit of catalog parallax

CatalogSource = Union[str, PathLike, Iterable[str]]


@dataclass(frozen=True)
class CatalogStar:
    identifier: str
    right_ascension: float      # hours, catalog epoch
    declination: float          # degrees, catalog epoch
    proper_motion_ra: float     # seconds of time per year
    proper_motion_dec: float    # arcseconds per year
    parallax: float
    magnitude: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

# ───────────────────────────── Parsing ─────────────────────────────

def parse_catalog_line(line: str) -> CatalogStar:
    """Parse one fixed-width catalog line; raises CatalogError when malformed."""
    text = line.rstrip("\r\n")
    if len(text) < MIN_LINE_LENGTH:
        raise CatalogError(f"Catalog line too short ({len(text)} < {MIN_LINE_LENGTH})",
                           line=text)
    try:
        rah = int(text[18:20])
        ram = int(text[21:23])
        ras = float(text[24:30])
        da = float(text[31:37].strip())
        degrees_field = text[38:41].strip()
        dday = int(degrees_field)
        dmin = int(text[42:44])
        dsec = float(text[45:50])
        dd = float(text[51:57].strip())
        px = float(text[58:61])
        mag = float(text[63:67])
    except ValueError as e:
        raise CatalogError(f"Malformed catalog line: {e}", line=text)

    # "-00" keeps its sign
    dec = abs(dday) + dmin / 60 + dsec / 3600
    if degrees_field.startswith("-"):
        dec = -dec
    return CatalogStar(
        identifier=text[:6].strip(),
        right_ascension=rah + ram / 60 + ras / 3600,
        declination=dec,
        proper_motion_ra=da,
        proper_motion_dec=dd,
        parallax=px,
        magnitude=mag,
    )


def _lines(source: CatalogSource) -> Iterable[str]:
    if isinstance(source, (str, PathLike)):
        with open(source, encoding="utf-8") as f:
            yield from f
    else:
        yield from source


def read_catalog(source: CatalogSource, strict: bool = True) -> List[CatalogStar]:
    """Parse a catalog file or iterable of lines; blank lines are ignored.

    With strict=False malformed lines are skipped with a warning instead of
    raising CatalogError.
    """
    stars = []
    for number, line in enumerate(_lines(source), 1):
        if not line.strip():
            continue
        try:
            stars.append(parse_catalog_line(line))
        except CatalogError as e:
            if strict:
                e.context['line_number'] = number
                raise
            log.warning("Skipping catalog line %d: %s", number, e)
    log.debug("Read %d catalog stars", len(stars))
    return stars

# ───────────────────────────── Apparent place ─────────────────────────────

def ecliptic_of_date(star: CatalogStar, frame: Frame) -> Tuple[float, float, float]:
    """Mean ecliptic longitude, latitude (radians) and distance (AU) at the frame's date."""
    eday = frame.eday
    alpha = star.right_ascension
    delta = star.declination

    # Remove E-terms of aberration
    alpha += (.341 / (3600. * 15.)) * math.sin((alpha + 11.26) * 15. * RADIAN) / math.cos(delta * RADIAN)
    delta += ((.341 / 3600.) * math.cos((alpha + 11.26) * 15. * RADIAN) * math.sin(delta * RADIAN)
              - (.029 / 3600.) * math.cos(delta * RADIAN))

    # Proper motion
    tau = (eday - CATALOG_EPOCH) / Constants.DAYS_PER_YEAR
    alpha += tau * star.proper_motion_ra / 3600.
    delta += tau * star.proper_motion_dec / 3600.
    alpha *= 15. * RADIAN
    delta *= RADIAN

    xm = math.cos(delta) * math.cos(alpha)
    ym = math.cos(delta) * math.sin(alpha)
    zm = math.sin(delta)

    # Precession from the catalog epoch to date
    capt0 = (CATALOG_EPOCH - 18262.427) / Constants.DAYS_PER_CENTURY
    capt1 = (eday - CATALOG_EPOCH) / Constants.DAYS_PER_CENTURY
    capt12 = capt1 * capt1
    capt13 = capt12 * capt1
    xx = -(.00029696 + 26.e-8 * capt0) * capt12 - 13.e-8 * capt13
    yx = -(.02234941 + 1355.e-8 * capt0) * capt1 - 676.e-8 * capt12 + 221.e-8 * capt13
    zx = -(.00971690 - 414.e-8 * capt0) * capt1 + 207.e-8 * capt12 + 96.e-8 * capt13
    yy = -(.00024975 + 30.e-8 * capt0) * capt12 - 15.e-8 * capt13
    zy = -(.00010858 + 2.e-8 * capt0) * capt12
    zz = -(.00004721 - 4.e-8 * capt0) * capt12
    dxm = xx * xm + yx * ym + zx * zm
    dym = -yx * xm + yy * ym + zy * zm
    dzm = -zx * xm + zy * ym + zz * zm
    xm += dxm
    ym += dym
    zm += dzm

    # Mean ecliptic of date
    alpha = math.atan2(ym, xm)
    delta = math.atan2(zm, math.sqrt(xm * xm + ym * ym))
    obliq = frame.obliquity
    cl = math.cos(delta) * math.cos(alpha)
    sl = math.cos(delta) * math.sin(alpha) * math.cos(obliq) + math.sin(delta) * math.sin(obliq)
    sb = -math.cos(delta) * math.sin(alpha) * math.sin(obliq) + math.sin(delta) * math.cos(obliq)
    lam = math.atan2(sl, cl)
    beta = math.atan2(sb, math.sqrt(cl * cl + sl * sl))
    rad = PARALLAX_SCALE / star.parallax if star.parallax != 0 else NO_PARALLAX_DISTANCE
    return lam, beta, rad


def apparent_place(star: CatalogStar, frame: Frame) -> GeocentricPosition:
    lam, beta, rad = ecliptic_of_date(star, frame)
    geo = heliocentric_to_geocentric(OrbitalState(lam, beta, rad, 0.0, 0.0, star.magnitude), frame)
    return replace(geo, magnitude=star.magnitude)


def near_lunar_path(lam: float, beta: float, eday: float) -> bool:
    """Whether a star lies within the band the Moon can cover."""
    sd = (.0896833 * math.cos(beta) * math.sin(lam - 1.3820 + .00092422117 * eday)
          + 0.99597 * math.sin(beta))
    return abs(sd) <= LUNAR_PATH_LIMIT

# ───────────────────────────── Occultations ─────────────────────────────

def moon_ra_window(moon: Sequence[PositionSample]) -> Tuple[float, float]:
    """Right ascension span (hours) swept by the Moon, widened by 1000″ each side."""
    lo = moon[0].right_ascension - MOON_RA_MARGIN
    if lo < 0:
        lo += TWO_PI
    hi = moon[-1].right_ascension + MOON_RA_MARGIN
    if hi > TWO_PI:
        hi -= TWO_PI
    return lo * 12 / math.pi, hi * 12 / math.pi


def in_ra_window(hours: float, lo: float, hi: float) -> bool:
    if lo > hi:
        return hours >= lo or hours <= hi
    return lo <= hours <= hi


def star_occultations(moon: CelestialBody, catalog: Sequence[CatalogStar],
                      window: SamplingWindow, builder: FrameBuilder,
                      frames: Sequence[Frame], sink: EventSink,
                      tuning: "SearchTuning") -> int:
    """Refine the Moon against catalog stars near its path; returns the candidate count."""
    lo, hi = moon_ra_window(moon.samples)
    frame0 = frames[0]
    candidates = 0
    for star in catalog:
        if not in_ra_window(star.right_ascension, lo, hi):
            continue
        lam, beta, _ = ecliptic_of_date(star, frame0)
        if not near_lunar_path(lam, beta, frame0.eday):
            continue
        candidates += 1
        body = CelestialBody.star(star.identifier, apparent_place(star, frame0))
        for i, frame in enumerate(frames):
            body.sample(i, frame)
        occ = refine_occultation(moon, body, window, builder,
                                 coarse_margin=tuning.coarse_margin,
                                 fine_step=tuning.fine_step,
                                 medium_steps_per_day=tuning.medium_steps_per_day,
                                 walk_limit=tuning.walk_limit)
        if occ.t1 < 0 and occ.t5 < 0:
            continue
        flags = EventFlag.TIMED
        if star.magnitude > 2:
            flags |= EventFlag.DARK
        if star.magnitude < 5:
            flags |= EventFlag.SIGNIFICANT
        if occ.t1 >= 0 and occ.e1 >= 0:
            sink.emit(f"Occultation of {body.display_name} begins at", occ.t1, flags)
        if occ.t5 >= 0 and occ.e5 >= 0:
            sink.emit(f"Occultation of {body.display_name} ends at", occ.t5, flags)
    log.debug("Star occultation pass: %d candidates in RA %.3fh..%.3fh", candidates, lo, hi)
    return candidates
