# almanac/core/occultation.py
# -----------------------------------------------------------------------------
# Occultation, Eclipse and Transit Refinement
#
# Three stages between a pair of sampled bodies:
#   1. Coarse: local minimum of the separation over three consecutive samples
#   2. Medium: quadratic interpolants of RA, Dec, semidiameter and elevation
#      through the bracketing samples, scanned at ~1 minute resolution
#   3. Fine: true positions re-sampled around the medium minimum, a new
#      interpolant scanned at 1/120 of its span, then walked outward to the
#      contacts where the separation crosses the sum and the difference of
#      the two semidiameters
#
# Contacts (t1..t5) are fractional sample offsets within the window; a
# contact that does not occur keeps the ABSENT sentinel.
#
# Public API:
#   QuadraticInterpolant.from_samples(p1, p2, p3)
#   refine_occultation(first, second, window, builder, ...) -> Occultation
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, NamedTuple, Sequence, Tuple

from almanac.core.bodies import CelestialBody, PositionSample
from almanac.core.errors import RefinementError
from almanac.core.frame import FrameBuilder
from almanac.core.orbits import reduce_to_range
from almanac.core.pipeline import angular_distance
from almanac.core.sampler import SamplingWindow

log = logging.getLogger(__name__)

__all__ = [
    "ABSENT",
    "Occultation",
    "InterpolatedPoint",
    "QuadraticInterpolant",
    "coarse_minimum",
    "refine_occultation",
]

ABSENT = -100.0

COARSE_MARGIN_ARCSEC = 50.0
FINE_STEP = 1. / 120
MEDIUM_STEPS_PER_DAY = 2880
WALK_LIMIT = 100000


@dataclass(frozen=True)
class Occultation:
    """Partial begin, total begin, closest approach, total end, partial end."""
    t1: float = ABSENT
    e1: float = 0.0
    t2: float = ABSENT
    e2: float = 0.0
    t3: float = ABSENT
    e3: float = 0.0
    t4: float = ABSENT
    e4: float = 0.0
    t5: float = ABSENT
    e5: float = 0.0

    @property
    def found(self) -> bool:
        return self.t3 >= 0

    def contacts(self) -> Dict[str, Tuple[float, float]]:
        """Present contacts keyed t1..t5, as (offset, elevation of the first body)."""
        result = {}
        for k in range(1, 6):
            t = getattr(self, f"t{k}")
            if t >= 0:
                result[f"t{k}"] = (t, getattr(self, f"e{k}"))
        return result

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class InterpolatedPoint(NamedTuple):
    right_ascension: float
    declination: float
    semidiameter: float
    elevation: float


class QuadraticInterpolant:
    """Newton forward-difference parabola through three equally spaced samples.

    x = 0, 1, 2 reproduce the samples; angular differences are wrapped to
    (−π, π] so the fit is continuous across RA = 0.
    """

    __slots__ = ("del0", "del1", "del2")

    def __init__(self, del0: InterpolatedPoint, del1: InterpolatedPoint, del2: InterpolatedPoint):
        self.del0, self.del1, self.del2 = del0, del1, del2

    @classmethod
    def from_samples(cls, p1: PositionSample, p2: PositionSample,
                     p3: PositionSample) -> "QuadraticInterpolant":
        del0 = InterpolatedPoint(p1.right_ascension, p1.declination, p1.semidiameter, p1.elevation)
        del1 = InterpolatedPoint(
            reduce_to_range(p2.right_ascension - p1.right_ascension, centered=True),
            reduce_to_range(p2.declination - p1.declination, centered=True),
            p2.semidiameter - p1.semidiameter,
            p2.elevation - p1.elevation,
        )
        del2 = InterpolatedPoint(
            reduce_to_range(p1.right_ascension + p3.right_ascension - 2 * p2.right_ascension,
                            centered=True) / 2,
            reduce_to_range(p1.declination + p3.declination - 2 * p2.declination,
                            centered=True) / 2,
            (p1.semidiameter + p3.semidiameter - 2 * p2.semidiameter) / 2,
            (p1.elevation + p3.elevation - 2 * p2.elevation) / 2,
        )
        return cls(del0, del1, del2)

    def at(self, x: float) -> InterpolatedPoint:
        y = x * (x - 1)
        return InterpolatedPoint(*(a + x * b + y * c
                                   for a, b, c in zip(self.del0, self.del1, self.del2)))


def coarse_minimum(first: Sequence[PositionSample], second: Sequence[PositionSample]) -> int:
    """Index of the first of three samples bracketing a separation minimum, or −1."""
    for i in range(2, len(first)):
        d1 = angular_distance(first[i - 2], second[i - 2])
        d2 = angular_distance(first[i - 1], second[i - 1])
        d3 = angular_distance(first[i], second[i])
        if d2 <= d1 and d2 <= d3:
            return i - 2
    return -1


def _walk(f1: QuadraticInterpolant, f2: QuadraticInterpolant, start: int, x: float,
          step: float, inner: float, outer: float, walk_limit: int):
    """Walk from the minimum until the separation exceeds `outer`.

    Returns the signed step counts (or None) at which `inner` and `outer` are
    crossed, with the interpolated elevation of the first body at each.
    """
    inner_hit = outer_hit = None
    d2 = 0.0
    i = start
    for n in range(walk_limit):
        a1, a2 = f1.at(x), f2.at(x)
        d1, d2 = d2, angular_distance(a1, a2)
        if n:
            if d1 <= inner < d2:
                inner_hit = (i, a1.elevation)
            if d2 > outer:
                if d1 <= outer:
                    outer_hit = (i, a1.elevation)
                return inner_hit, outer_hit
        x += step
        i += 1 if step > 0 else -1
    raise RefinementError("contact walk did not leave the contact zone",
                          start=start, limit=walk_limit)


def refine_occultation(first: CelestialBody, second: CelestialBody,
                       window: SamplingWindow, builder: FrameBuilder,
                       coarse_margin: float = COARSE_MARGIN_ARCSEC,
                       fine_step: float = FINE_STEP,
                       medium_steps_per_day: int = MEDIUM_STEPS_PER_DAY,
                       walk_limit: int = WALK_LIMIT) -> Occultation:
    """Contacts of a close approach of two bodies within the sampled window."""
    i = coarse_minimum(first.samples, second.samples)
    if i < 0:
        return Occultation()

    # Medium pass over the two sample steps around the coarse minimum
    n = medium_steps_per_day * window.period_days / window.npts
    f1 = QuadraticInterpolant.from_samples(*first.samples[i:i + 3])
    f2 = QuadraticInterpolant.from_samples(*second.samples[i:i + 3])
    di = float(i)
    dx = 2 / n
    x = 0.0
    d1 = d2 = d3 = 0.0
    a1 = a2 = None
    ok = False
    for k in range(int(n + 1)):
        a1, a2 = f1.at(x), f2.at(x)
        d1, d2, d3 = d2, d3, angular_distance(a1, a2)
        if k >= 2 and d2 <= d1 and d2 <= d3:
            ok = True
            break
        x += dx
    if not ok:
        raise RefinementError("bad 1: medium pass found no minimum",
                              first=first.name, second=second.name, index=i)
    if d2 > a1.semidiameter + a2.semidiameter + coarse_margin:
        log.debug("%s/%s: closest %.1f\" is outside the contact margin",
                  first.name, second.name, d2)
        return Occultation()

    # Fine pass on true positions around the medium minimum
    di += x - 3 * dx
    points = []
    for k in range(3):
        frame = builder(window.offset_day(di + 2 * k * dx))
        points.append((first.compute(frame), second.compute(frame)))
    dx /= 60
    f1 = QuadraticInterpolant.from_samples(*(p[0] for p in points))
    f2 = QuadraticInterpolant.from_samples(*(p[1] for p in points))
    steps = int(round(2 / fine_step)) + 1
    x = 0.0
    ok = False
    for k in range(steps):
        a1, a2 = f1.at(x), f2.at(x)
        d1, d2, d3 = d2, d3, angular_distance(a1, a2)
        if k >= 2 and d2 <= d1 and d2 <= d3:
            ok = True
            break
        x += fine_step
    if not ok:
        raise RefinementError("bad 2: fine pass found no minimum",
                              first=first.name, second=second.name, offset=di)

    i1 = k - 1
    x1 = x - fine_step
    closest1, closest2 = f1.at(x1), f2.at(x1)
    if d2 > closest1.semidiameter + closest2.semidiameter:
        log.debug("%s/%s: conjunction at %.1f\" without contact", first.name, second.name, d2)
        return Occultation()

    inner = abs(closest1.semidiameter - closest2.semidiameter)
    outer = closest1.semidiameter + closest2.semidiameter
    total_end, partial_end = _walk(f1, f2, i1, x1, fine_step, inner, outer, walk_limit)
    total_begin, partial_begin = _walk(f1, f2, i1, x1, -fine_step, inner, outer, walk_limit)

    def contact(hit):
        if hit is None:
            return ABSENT, 0.0
        return di + (hit[0] - .5) * dx, hit[1]

    t1, e1 = contact(partial_begin)
    t2, e2 = contact(total_begin)
    t4, e4 = contact(total_end)
    t5, e5 = contact(partial_end)
    result = Occultation(t1, e1, t2, e2, di + i1 * dx, closest1.elevation, t4, e4, t5, e5)
    log.debug("%s/%s: contacts %s", first.name, second.name, result.contacts())
    return result
