# almanac/core/bodies.py
# -----------------------------------------------------------------------------
# Celestial Body Catalog
#
# Body kinds:
#   • SUN     - degenerate heliocentric state carried through the pipeline
#   • MOON    - geocentric place from the lunar theory
#   • SHADOW  - anti-solar point at the Moon's distance (umbra centre)
#   • PLANET  - Keplerian model parameterized by its PlanetModel
#   • COMET   - osculating elements
#   • STAR    - fixed apparent place from the star catalog
#
# Each body owns a fixed-length sequence of NPTS + 2 position samples that the
# trajectory sampler overwrites whenever the sampling window advances.
#
# Public API:
#   default_catalog(comet, occultation_mode) -> List[CelestialBody]
#   resolve_body(bodies, name) -> CelestialBody
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from almanac.core.errors import BodyLookupError
from almanac.core.frame import Frame
from almanac.core.orbits import (
    PLANET_MODELS,
    CometElements,
    GeocentricPosition,
    OrbitalState,
    PlanetModel,
    comet_orbit,
    lunar_position,
    planet_orbit,
    shadow_position,
    solar_orbit,
)
from almanac.core.pipeline import geocentric_to_topocentric, heliocentric_to_geocentric

log = logging.getLogger(__name__)

__all__ = [
    "NPTS",
    "BodyKind",
    "PositionSample",
    "CelestialBody",
    "default_catalog",
    "resolve_body",
]

# Samples per window, plus one on either end for interpolation
NPTS = 12

PLANET_ORDER = ("mercury", "venus", "mars", "jupiter", "saturn", "uranus", "neptune", "pluto")


class BodyKind(Enum):
    SUN = "sun"
    MOON = "moon"
    SHADOW = "shadow"
    PLANET = "planet"
    COMET = "comet"
    STAR = "star"


@dataclass(frozen=True)
class PositionSample:
    """Topocentric place of one body at one sample index."""
    right_ascension: float          # radians, [0, 2π)
    declination: float              # radians
    semidiameter: float             # arcseconds
    azimuth: float                  # degrees
    elevation: float                # degrees
    magnitude: float
    ecliptic_longitude: float = 0.0  # apparent, radians, (−π, π]
    phase: Optional[float] = None    # Moon only: elongation / 360°

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class CelestialBody:
    """A named body, its position model, and its samples for the current window."""

    def __init__(self, name: str, display_name: str, kind: BodyKind,
                 model: Optional[PlanetModel] = None,
                 comet: Optional[CometElements] = None,
                 place: Optional[GeocentricPosition] = None,
                 occultation_mode: bool = False):
        self.name = name
        self.display_name = display_name
        self.kind = kind
        self.model = model
        self.comet = comet
        self.place = place
        self.occultation_mode = occultation_mode
        self.samples: List[Optional[PositionSample]] = [None] * (NPTS + 2)

    def __repr__(self) -> str:
        return f"CelestialBody({self.name!r}, kind={self.kind.value})"

    @classmethod
    def star(cls, identifier: str, place: GeocentricPosition) -> "CelestialBody":
        return cls(identifier, f"SAO {identifier}", BodyKind.STAR, place=place)

    # ───────────── position model ─────────────

    def _sun(self, frame: Frame) -> GeocentricPosition:
        orbit = solar_orbit(frame.eday, frame.capt, self.occultation_mode)
        state = OrbitalState(0.0, 0.0, 0.0, 0.0, orbit.semidiameter, orbit.magnitude)
        return heliocentric_to_geocentric(state, frame)

    def geocentric(self, frame: Frame) -> GeocentricPosition:
        """Apparent geocentric place at the frame's instant."""
        if self.kind is BodyKind.SUN:
            return self._sun(frame)
        if self.kind is BodyKind.MOON:
            return lunar_position(frame, self.occultation_mode)
        if self.kind is BodyKind.SHADOW:
            moon = lunar_position(frame, self.occultation_mode)
            return shadow_position(self._sun(frame), moon, frame.sun_radius)
        if self.kind is BodyKind.PLANET:
            return heliocentric_to_geocentric(planet_orbit(self.model, frame), frame)
        if self.kind is BodyKind.COMET:
            return heliocentric_to_geocentric(comet_orbit(self.comet, frame), frame)
        return self.place

    def compute(self, frame: Frame) -> PositionSample:
        geo = self.geocentric(frame)
        topo = geocentric_to_topocentric(geo, frame)
        return PositionSample(
            right_ascension=topo.right_ascension,
            declination=topo.declination,
            semidiameter=topo.semidiameter,
            azimuth=topo.azimuth,
            elevation=topo.elevation,
            magnitude=geo.magnitude,
            ecliptic_longitude=geo.ecliptic_longitude,
            phase=geo.phase,
        )

    def sample(self, index: int, frame: Frame) -> PositionSample:
        point = self.compute(frame)
        self.samples[index] = point
        return point


def default_catalog(comet: Optional[CometElements] = None,
                    occultation_mode: bool = False) -> List[CelestialBody]:
    """Sun, Moon, shadow, Mercury through Pluto, and the comet when given."""
    bodies = [
        CelestialBody("sun", "The sun", BodyKind.SUN, occultation_mode=occultation_mode),
        CelestialBody("moon", "The moon", BodyKind.MOON, occultation_mode=occultation_mode),
        CelestialBody("shadow", "The shadow", BodyKind.SHADOW, occultation_mode=occultation_mode),
    ]
    for name in PLANET_ORDER:
        bodies.append(CelestialBody(name, name.capitalize(), BodyKind.PLANET,
                                    model=PLANET_MODELS[name]))
    if comet is not None:
        bodies.append(CelestialBody("comet", "Comet", BodyKind.COMET, comet=comet))
    return bodies


def resolve_body(bodies: Sequence[CelestialBody], name: str) -> CelestialBody:
    """Find a body by catalog name or display name."""
    key = name.strip()
    for body in bodies:
        if key in (body.name, body.display_name):
            return body
    lowered = key.lower()
    for body in bodies:
        if lowered in (body.name, body.display_name.lower()):
            return body
    raise BodyLookupError(f"Unknown body '{name}'", name=name,
                          known=[b.name for b in bodies])
