# almanac/core/sampler.py
# -----------------------------------------------------------------------------
# Trajectory Sampler
#
# One sampling window covers NPTS steps of period/NPTS days plus one extra
# sample, NPTS + 2 in total. For each sample index a fresh Frame is built and
# every body is evaluated against it; ΔT is fixed for the whole window.
#
# Public API:
#   SamplingWindow(start_day, period_days)
#   sample_window(bodies, window, builder)
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from almanac.core.bodies import NPTS, CelestialBody
from almanac.core.frame import Frame, FrameBuilder

log = logging.getLogger(__name__)

__all__ = [
    "NPTS",
    "SamplingWindow",
    "sample_window",
]


@dataclass(frozen=True)
class SamplingWindow:
    """Start day and length of one sampling pass."""
    start_day: float
    period_days: float = 1.0
    npts: int = NPTS

    @property
    def step(self) -> float:
        return self.period_days / self.npts

    @property
    def size(self) -> int:
        return self.npts + 2

    def offset_day(self, offset: float) -> float:
        """Day number of a fractional sample offset."""
        return self.start_day + offset * self.step

    def days(self) -> List[float]:
        return [self.offset_day(i) for i in range(self.size)]


def sample_window(bodies: Sequence[CelestialBody], window: SamplingWindow,
                  builder: FrameBuilder) -> List[Frame]:
    """Fill every body's samples for the window; returns the frames used."""
    frames = []
    for i, day in enumerate(window.days()):
        frame = builder(day)
        for body in bodies:
            body.sample(i, frame)
        frames.append(frame)
    log.debug("Sampled %d bodies over %d points from day %.5f (step %.5f d)",
              len(bodies), window.size, window.start_day, window.step)
    return frames
