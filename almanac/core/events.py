# almanac/core/events.py
# -----------------------------------------------------------------------------
# Event Records and the Event Sink
#
# Gating:
#   • DARK events are dropped when the Sun is above the dark threshold (−12°)
#   • LIGHT events are dropped when the Sun is below the light threshold (0°)
#
# Ordering:
#   • Stable sort on the sample offset; SIGNIFICANT events sort 1000 samples
#     earlier, so they lead the report in time order among themselves
#
# The sink holds at most `capacity` events; one more raises EventOverflowError
# and the search pass stops.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Flag, auto
from typing import Callable, Dict, List, Any, Optional

from almanac.core.errors import EventOverflowError

log = logging.getLogger(__name__)

__all__ = [
    "EventFlag",
    "Event",
    "EventSink",
    "DEFAULT_CAPACITY",
]

DEFAULT_CAPACITY = 100
SIGNIFICANCE_LEAD = 1000.


class EventFlag(Flag):
    NONE = 0
    DARK = auto()           # only visible when the Sun is well below the horizon
    SIGNIFICANT = auto()
    TIMED = auto()          # offset is meaningful and is reported
    LIGHT = auto()          # only visible when the Sun is up


@dataclass(frozen=True)
class Event:
    """One search result; offset is a fractional sample index within the window."""
    message: str
    offset: float = 0.0
    flags: EventFlag = EventFlag.NONE

    @property
    def timed(self) -> bool:
        return bool(self.flags & EventFlag.TIMED)

    @property
    def significant(self) -> bool:
        return bool(self.flags & EventFlag.SIGNIFICANT)

    def sort_key(self) -> float:
        return self.offset - SIGNIFICANCE_LEAD if self.significant else self.offset

    def describe(self, when: Optional[datetime] = None) -> str:
        if self.timed and when is not None:
            return f"{self.message} {when.isoformat()}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            'message': self.message,
            'offset': self.offset,
            'flags': [f.name for f in EventFlag if f and f in self.flags],
        }


class EventSink:
    """Collects events for one search pass, applying daylight gating."""

    def __init__(self, sun_elevation: Callable[[float], float],
                 capacity: int = DEFAULT_CAPACITY,
                 dark_threshold: float = -12.0,
                 light_threshold: float = 0.0):
        self.sun_elevation = sun_elevation
        self.capacity = capacity
        self.dark_threshold = dark_threshold
        self.light_threshold = light_threshold
        self.events: List[Event] = []
        self.dropped = 0

    def __len__(self) -> int:
        return len(self.events)

    def add(self, event: Event) -> bool:
        """Buffer an event; returns False when gating drops it."""
        if event.flags & EventFlag.DARK and self.sun_elevation(event.offset) > self.dark_threshold:
            self.dropped += 1
            return False
        if event.flags & EventFlag.LIGHT and self.sun_elevation(event.offset) < self.light_threshold:
            self.dropped += 1
            return False
        if len(self.events) >= self.capacity:
            raise EventOverflowError("too many events", capacity=self.capacity,
                                     event=event.message)
        self.events.append(event)
        return True

    def emit(self, message: str, offset: float = 0.0,
             flags: EventFlag = EventFlag.NONE) -> bool:
        return self.add(Event(message, offset, flags))

    def flush(self) -> List[Event]:
        """Ordered events; the buffer is emptied."""
        ordered = sorted(self.events, key=Event.sort_key)
        log.info("Event pass: %d kept, %d dropped by gating", len(ordered), self.dropped)
        self.events = []
        self.dropped = 0
        return ordered
