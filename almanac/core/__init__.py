"""
Core ephemeris and event-search modules.

This package contains the time frame, orbital models, coordinate pipeline,
trajectory sampler and event search of the almanac.
"""

from .timescales import Observer, DeltaTModel, MURRAY_HILL, day_number, datetime_from_day
from .frame import Frame, build_frame, validate_frame
from .bodies import CelestialBody, PositionSample, default_catalog, resolve_body
from .events import Event, EventFlag
from .search import SearchTuning
from .almanac import AlmanacConfig, compute_almanac, compute_positions, distance_report
from .system_integration import AlmanacSystem, SystemConfig, run_system_check

__all__ = [
    "Observer",
    "DeltaTModel",
    "MURRAY_HILL",
    "day_number",
    "datetime_from_day",
    "Frame",
    "build_frame",
    "validate_frame",
    "CelestialBody",
    "PositionSample",
    "default_catalog",
    "resolve_body",
    "Event",
    "EventFlag",
    "SearchTuning",
    "AlmanacConfig",
    "compute_almanac",
    "compute_positions",
    "distance_report",
    "AlmanacSystem",
    "SystemConfig",
    "run_system_check",
]
