# almanac/core/search.py
# -----------------------------------------------------------------------------
# Event Search over One Sampled Window
#
# Crossing scans (linear interpolation between bracketing samples):
#   • rise / set          - elevation through a threshold (−0.833°, −18°)
#   • equinox / solstice  - solar right ascension through 12h, 18h, 0h, 6h
#   • meteor showers      - solar ecliptic longitude through a radiant table
#   • lunar phases        - lunar phase fraction through 0, ¼, ½, ¾
#   • elongation          - local maximum of a planet's distance from the Sun
#
# Close approaches involving the Moon, and the Sun with Mercury or Venus, go
# through the occultation refinement; other pairs report a conjunction when
# within the conjunction radius at the first sample.
#
# Public API:
#   SearchTuning
#   rise_index / set_index / solstice_index / ecliptic_crossing_index
#   max_elongation_index / sun_elevation
#   search_window(bodies, window, builder, ...) -> List[Event]
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Sequence

from almanac.core.bodies import BodyKind, CelestialBody, PositionSample
from almanac.core.events import Event, EventFlag, EventSink
from almanac.core.frame import Frame, FrameBuilder
from almanac.core.occultation import refine_occultation
from almanac.core.orbits import reduce_to_range
from almanac.core.pipeline import angular_distance
from almanac.core.sampler import SamplingWindow
from almanac.core.stars import CatalogStar, star_occultations

log = logging.getLogger(__name__)

__all__ = [
    "SearchTuning",
    "SEASONS",
    "METEOR_SHOWERS",
    "rise_index",
    "set_index",
    "solstice_index",
    "ecliptic_crossing_index",
    "max_elongation_index",
    "sun_elevation",
    "search_window",
]

NOT_FOUND = -1.0

SEASONS = ("Fall equinox", "Winter solstice", "Spring equinox", "Summer solstice")

# Solar ecliptic longitude (radians) at each shower's peak
METEOR_SHOWERS = (
    (-1.3572, "Quadrantid"),
    (0.7620, "Eta aquarid"),
    (1.5497, "Ophiuchid"),
    (2.1324, "Capricornid"),
    (2.1991, "Delta aquarid"),
    (2.2158, "Pisces australid"),
    (2.4331, "Perseid"),
    (-2.6578, "Orionid"),
    (-1.8678, "Phoenicid"),
    (-1.7260, "Geminid"),
)

INFERIOR_PLANETS = ("mercury", "venus")


@dataclass(frozen=True)
class SearchTuning:
    """Empirical thresholds of the search pass."""
    dark_threshold: float = -12.0           # degrees of solar elevation
    light_threshold: float = 0.0
    coarse_margin: float = 50.0             # arcseconds
    fine_step: float = 1. / 120
    medium_steps_per_day: int = 2880
    event_capacity: int = 100
    conjunction_radius: float = 5000.0      # arcseconds
    rise_elevation: float = -0.833          # degrees
    twilight_elevation: float = -18.0
    walk_limit: int = 100000

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

# ───────────────────────────── Crossing scans ─────────────────────────────

def rise_index(samples: Sequence[PositionSample], elevation: float) -> float:
    """First upward crossing of `elevation` as a fractional sample index."""
    for i in range(1, len(samples)):
        e1, e2 = samples[i - 1].elevation, samples[i].elevation
        if e1 <= elevation < e2:
            return (i - 1) + (elevation - e1) / (e2 - e1)
    return NOT_FOUND


def set_index(samples: Sequence[PositionSample], elevation: float) -> float:
    for i in range(1, len(samples)):
        e1, e2 = samples[i - 1].elevation, samples[i].elevation
        if e1 > elevation >= e2:
            return (i - 1) + (elevation - e1) / (e2 - e1)
    return NOT_FOUND


def solstice_index(sun: Sequence[PositionSample], n: int) -> float:
    """Crossing of the n-th season: 0 fall, 1 winter, 2 spring, 3 summer."""
    target = n * math.pi / 2 - math.pi
    if n == 0:
        target += math.pi
    d2 = 0.0
    for i in range(len(sun) - 1):
        ra = sun[i].right_ascension
        d1, d2 = d2, reduce_to_range(ra - math.pi if n == 0 else ra, centered=True)
        if i >= 1 and d1 <= target < d2:
            return i - (target - d2) / (d1 - d2)
    return NOT_FOUND


def ecliptic_crossing_index(sun: Sequence[PositionSample], longitude: float) -> float:
    for i in range(1, len(sun)):
        d1, d2 = sun[i - 1].ecliptic_longitude, sun[i].ecliptic_longitude
        if d1 <= longitude < d2:
            return i - (longitude - d2) / (d1 - d2)
    return NOT_FOUND


def max_elongation_index(body: Sequence[PositionSample], sun: Sequence[PositionSample]) -> int:
    """Start of the first three-sample bracket around the largest solar distance, or −1."""
    for i in range(2, len(body)):
        d1 = angular_distance(body[i - 2], sun[i - 2])
        d2 = angular_distance(body[i - 1], sun[i - 1])
        d3 = angular_distance(body[i], sun[i])
        if d2 >= d1 and d2 >= d3:
            return i - 2
    return -1


def sun_elevation(sun: Sequence[PositionSample], t: float, npts: int) -> float:
    """Solar elevation interpolated at a fractional sample index; −90 outside the window."""
    i = int(t)
    if i < 0 or i > npts:
        return -90.
    return sun[i].elevation + (t - i) * (sun[i + 1].elevation - sun[i].elevation)

# ───────────────────────────── Search pass ─────────────────────────────

def _find(bodies: Sequence[CelestialBody], kind: BodyKind) -> Optional[CelestialBody]:
    for body in bodies:
        if body.kind is kind:
            return body
    return None


def _solar_events(sun: CelestialBody, sink: EventSink, tuning: SearchTuning) -> None:
    for n, season in enumerate(SEASONS):
        t = solstice_index(sun.samples, n)
        if t >= 0:
            sink.emit(f"{season} at", t, EventFlag.SIGNIFICANT | EventFlag.TIMED)
    for longitude, shower in METEOR_SHOWERS:
        t = ecliptic_crossing_index(sun.samples, longitude)
        if t >= 0:
            sink.emit(f"{shower} meteor shower", t, EventFlag.SIGNIFICANT)
    t = rise_index(sun.samples, tuning.twilight_elevation)
    if t >= 0:
        sink.emit("Twilight starts at", t, EventFlag.TIMED)
    t = set_index(sun.samples, tuning.twilight_elevation)
    if t >= 0:
        sink.emit("Twilight ends at", t, EventFlag.TIMED)


def _lunar_phases(moon: CelestialBody, sink: EventSink) -> None:
    points = moon.samples
    for j in range(len(points) - 2):
        p0, p1 = points[j].phase, points[j + 1].phase
        if p0 > .75 and p1 < .25:
            sink.emit("New moon")
        if p0 <= .25 < p1:
            sink.emit("First quarter moon")
        if p0 <= .5 < p1:
            sink.emit("Full moon")
        if p0 <= .75 < p1:
            sink.emit("Last quarter moon")


def _elongation(body: CelestialBody, sun: CelestialBody, sink: EventSink, npts: int) -> None:
    if max_elongation_index(body.samples, sun.samples) < 0:
        return
    t = rise_index(body.samples, 0) - rise_index(sun.samples, 0)
    if t < 0:
        t += npts
    if t > npts:
        t -= npts
    side = "Morning" if t > npts / 2 else "Evening"
    sink.emit(f"{side} elongation of {body.display_name}", flags=EventFlag.SIGNIFICANT)


def _close_approach(o: CelestialBody, p: CelestialBody, window: SamplingWindow,
                    builder: FrameBuilder, sink: EventSink, tuning: SearchTuning) -> None:
    occ = refine_occultation(o, p, window, builder,
                             coarse_margin=tuning.coarse_margin,
                             fine_step=tuning.fine_step,
                             medium_steps_per_day=tuning.medium_steps_per_day,
                             walk_limit=tuning.walk_limit)
    if not occ.found:
        return
    flags = EventFlag.SIGNIFICANT | EventFlag.TIMED
    if o.kind is BodyKind.SUN or p.kind is BodyKind.SHADOW:
        eclipsed = o.display_name
        for t, phase in ((occ.t1, "Partial eclipse of {} begins at"),
                         (occ.t2, "Total eclipse of {} begins at"),
                         (occ.t4, "Total eclipse of {} ends at"),
                         (occ.t5, "Partial eclipse of {} ends at")):
            if t >= 0:
                sink.emit(phase.format(eclipsed), t, flags)
        return
    occulted = p.display_name if o.kind is BodyKind.MOON else o.display_name
    if occ.t1 >= 0:
        sink.emit(f"Occultation of {occulted} begins at", occ.t1, flags)
    if occ.t5 >= 0:
        sink.emit(f"Occultation of {occulted} ends at", occ.t5, flags)


def _transit(sun: CelestialBody, planet: CelestialBody, window: SamplingWindow,
             builder: FrameBuilder, sink: EventSink, tuning: SearchTuning) -> None:
    occ = refine_occultation(sun, planet, window, builder,
                             coarse_margin=tuning.coarse_margin,
                             fine_step=tuning.fine_step,
                             medium_steps_per_day=tuning.medium_steps_per_day,
                             walk_limit=tuning.walk_limit)
    if not occ.found:
        return
    flags = EventFlag.SIGNIFICANT | EventFlag.LIGHT | EventFlag.TIMED
    if occ.t1 >= 0:
        sink.emit(f"Transit of {planet.display_name} begins at", occ.t1, flags)
    if occ.t5 >= 0:
        sink.emit(f"Transit of {planet.display_name} ends at", occ.t5, flags)


def search_window(bodies: Sequence[CelestialBody], window: SamplingWindow,
                  builder: FrameBuilder, tuning: SearchTuning = SearchTuning(),
                  frames: Optional[Sequence[Frame]] = None,
                  star_catalog: Optional[Sequence[CatalogStar]] = None) -> List[Event]:
    """Scan bodies already sampled over `window`; returns the ordered events.

    When a star catalog is given the Moon is also tested against every star
    near its path, which needs the window's frames.
    """
    sun = _find(bodies, BodyKind.SUN)
    sink = EventSink(lambda t: sun_elevation(sun.samples, t, window.npts),
                     capacity=tuning.event_capacity,
                     dark_threshold=tuning.dark_threshold,
                     light_threshold=tuning.light_threshold)

    for idx, o in enumerate(bodies):
        if o.kind is BodyKind.SHADOW:
            continue
        flags = EventFlag.TIMED if o.kind is BodyKind.SUN else EventFlag.TIMED | EventFlag.DARK
        t = rise_index(o.samples, tuning.rise_elevation)
        if t >= 0:
            sink.emit(f"{o.display_name} rises at", t, flags)
        t = set_index(o.samples, tuning.rise_elevation)
        if t >= 0:
            sink.emit(f"{o.display_name} sets at", t, flags)

        if o.kind is BodyKind.SUN:
            _solar_events(o, sink, tuning)
        if o.kind is BodyKind.MOON:
            _lunar_phases(o, sink)
        if o.name in INFERIOR_PLANETS:
            _elongation(o, sun, sink, window.npts)

        for p in bodies[idx + 1:]:
            if BodyKind.MOON in (o.kind, p.kind):
                _close_approach(o, p, window, builder, sink, tuning)
                continue
            if o.kind is BodyKind.SUN:
                if p.name in INFERIOR_PLANETS:
                    _transit(o, p, window, builder, sink, tuning)
                continue
            if p.kind is BodyKind.SHADOW:
                continue
            if angular_distance(o.samples[0], p.samples[0]) > tuning.conjunction_radius:
                continue
            sink.emit(f"{o.display_name} is in the house of {p.display_name}")

    if star_catalog:
        moon = _find(bodies, BodyKind.MOON)
        star_occultations(moon, star_catalog, window, builder, frames, sink, tuning)

    return sink.flush()
