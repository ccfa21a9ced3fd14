# almanac/core/almanac.py
# -----------------------------------------------------------------------------
# Almanac Driver
#
# Operations:
#   • compute_almanac   - sample and search successive windows, one report each
#   • compute_positions - every body's place at a single instant
#   • distance_report   - separation of two named bodies at a single instant
#
# Configuration:
#   • AlmanacConfig carries the observer, ΔT handling, window length and
#     count, comet and star-occultation options, and the SearchTuning
#     thresholds
#   • ΔT is evaluated once at the start of each window and held for it
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from almanac.core.bodies import CelestialBody, PositionSample, default_catalog, resolve_body
from almanac.core.events import Event
from almanac.core.frame import FrameBuilder
from almanac.core.orbits import IKEYA_ZHANG, CometElements, OrbitalState
from almanac.core.pipeline import (
    angular_distance,
    geocentric_to_topocentric,
    heliocentric_to_geocentric,
)
from almanac.core.sampler import SamplingWindow, sample_window
from almanac.core.search import SearchTuning, search_window
from almanac.core.stars import CatalogStar, CatalogSource, read_catalog
from almanac.core.timescales import (
    MURRAY_HILL,
    DeltaTModel,
    Observer,
    datetime_from_day,
    day_number,
    delta_t,
    julian_date,
)

log = logging.getLogger(__name__)

__all__ = [
    "AlmanacConfig",
    "PeriodReport",
    "PositionReport",
    "compute_almanac",
    "compute_positions",
    "distance_report",
]

Instant = Union[datetime, float]

# Distance of the reference point used for the equinox hour angle, AU
EQUINOX_DISTANCE = 1.e9


@dataclass(frozen=True)
class AlmanacConfig:
    observer: Observer = MURRAY_HILL
    delta_t_seconds: float = 0.0            # nonzero overrides the model
    delta_t_model: DeltaTModel = DeltaTModel.LINEAR
    period_days: float = 1.0
    periods: int = 1
    include_comet: bool = False
    comet: CometElements = IKEYA_ZHANG
    occultation_mode: bool = False
    star_catalog: Optional[Union[CatalogSource, Sequence[CatalogStar]]] = None
    strict_catalog: bool = True
    tuning: SearchTuning = field(default_factory=SearchTuning)

    def catalog(self) -> List[CelestialBody]:
        return default_catalog(self.comet if self.include_comet else None,
                               self.occultation_mode)

    def delta_t_for(self, day: float) -> float:
        return delta_t(day, self.delta_t_seconds, self.delta_t_model)

    def builder(self, day: float) -> FrameBuilder:
        return FrameBuilder(self.observer, self.delta_t_for(day))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'observer': self.observer.to_dict(),
            'delta_t_seconds': self.delta_t_seconds,
            'delta_t_model': self.delta_t_model.value,
            'period_days': self.period_days,
            'periods': self.periods,
            'include_comet': self.include_comet,
            'comet': self.comet.name,
            'occultation_mode': self.occultation_mode,
            'star_catalog': self.star_catalog if isinstance(self.star_catalog, str) else None,
            'strict_catalog': self.strict_catalog,
            'tuning': self.tuning.to_dict(),
        }


@dataclass(frozen=True)
class PeriodReport:
    """Events of one sampling window."""
    window: SamplingWindow
    delta_t: float
    events: List[Event]
    samples: Dict[str, List[PositionSample]]

    @property
    def day(self) -> float:
        return self.window.start_day

    @property
    def julian_date(self) -> float:
        return julian_date(self.window.start_day)

    @property
    def start(self) -> datetime:
        return datetime_from_day(self.window.start_day)

    def event_time(self, event: Event) -> datetime:
        return datetime_from_day(self.window.offset_day(event.offset))

    def lines(self) -> List[str]:
        return [e.describe(self.event_time(e) if e.timed else None) for e in self.events]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'day': self.day,
            'julian_date': self.julian_date,
            'start': self.start.isoformat(),
            'delta_t': self.delta_t,
            'events': [
                dict(e.to_dict(), time=self.event_time(e).isoformat() if e.timed else None)
                for e in self.events
            ],
        }


@dataclass(frozen=True)
class PositionReport:
    """Every body's place at one instant, with the sidereal header values."""
    day: float
    delta_t: float
    local_hour_angle: float         # hour angle of the equinox, radians
    latitude: float                 # radians
    west_longitude: float           # radians
    elevation_m: float
    positions: Dict[str, PositionSample]

    @property
    def julian_date(self) -> float:
        return julian_date(self.day)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'day': self.day,
            'julian_date': self.julian_date,
            'delta_t': self.delta_t,
            'local_hour_angle': self.local_hour_angle,
            'latitude': self.latitude,
            'west_longitude': self.west_longitude,
            'elevation_m': self.elevation_m,
            'positions': {k: v.to_dict() for k, v in self.positions.items()},
        }


def _as_day(when: Instant) -> float:
    return day_number(when) if isinstance(when, datetime) else float(when)


def _load_catalog(config: AlmanacConfig) -> Optional[List[CatalogStar]]:
    if not config.occultation_mode or config.star_catalog is None:
        return None
    source = config.star_catalog
    if isinstance(source, (list, tuple)) and all(isinstance(s, CatalogStar) for s in source):
        return list(source)
    return read_catalog(source, strict=config.strict_catalog)


def compute_almanac(config: AlmanacConfig, start: Instant) -> List[PeriodReport]:
    """Sample and search `config.periods` successive windows from `start`."""
    day = _as_day(start)
    bodies = config.catalog()
    stars = _load_catalog(config)
    reports = []
    for _ in range(config.periods):
        dt = config.delta_t_for(day)
        builder = FrameBuilder(config.observer, dt)
        window = SamplingWindow(day, config.period_days)
        frames = sample_window(bodies, window, builder)
        events = search_window(bodies, window, builder, config.tuning,
                               frames=frames, star_catalog=stars)
        reports.append(PeriodReport(
            window=window,
            delta_t=dt,
            events=events,
            samples={b.name: list(b.samples) for b in bodies},
        ))
        log.info("Window from day %.5f: %d events", day, len(events))
        day += config.period_days
    return reports


def compute_positions(config: AlmanacConfig, when: Instant) -> PositionReport:
    day = _as_day(when)
    builder = config.builder(day)
    frame = builder(day)
    equinox = heliocentric_to_geocentric(OrbitalState(0.0, 0.0, EQUINOX_DISTANCE, 0.0, 0.0, 0.0), frame)
    header = geocentric_to_topocentric(equinox, frame)
    positions = {body.name: body.compute(frame) for body in config.catalog()}
    return PositionReport(
        day=day,
        delta_t=builder.delta_t_seconds,
        local_hour_angle=header.hour_angle,
        latitude=config.observer.latitude,
        west_longitude=config.observer.west_longitude,
        elevation_m=config.observer.elevation_m,
        positions=positions,
    )


def distance_report(config: AlmanacConfig, when: Instant, first: str, second: str) -> float:
    """Separation in arcseconds between the centres of two bodies."""
    bodies = config.catalog()
    a = resolve_body(bodies, first)
    b = resolve_body(bodies, second)
    day = _as_day(when)
    frame = config.builder(day)(day)
    return angular_distance(a.compute(frame), b.compute(frame))
