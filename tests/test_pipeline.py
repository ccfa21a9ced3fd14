import math

import pytest

from almanac.core.bodies import default_catalog
from almanac.core.orbits import OrbitalState, lunar_position
from almanac.core.pipeline import (
    angular_distance,
    geocentric_to_topocentric,
    heliocentric_to_geocentric,
    horizon_to_equatorial,
)
from almanac.core.timescales import Constants


def _sun_state():
    return OrbitalState(0.0, 0.0, 0.0, 0.0, 961.182, -26.5)


def test_sun_geocentric_distance_and_semidiameter(j2000_frame):
    geo = heliocentric_to_geocentric(_sun_state(), j2000_frame)
    assert geo.distance == pytest.approx(j2000_frame.sun_radius, rel=1e-6)
    assert geo.semidiameter == pytest.approx(961.182 / geo.distance)
    # no distance brightening at zero radius
    assert geo.magnitude == -26.5


def test_sun_ecliptic_longitude_near_j2000(j2000_frame):
    geo = heliocentric_to_geocentric(_sun_state(), j2000_frame)
    assert geo.ecliptic_longitude / Constants.RADIAN % 360 == pytest.approx(280.37, abs=0.05)


@pytest.mark.parametrize("name", ["sun", "moon", "shadow", "mars", "saturn"])
def test_horizon_round_trip(name, j2000_frame):
    body = next(b for b in default_catalog() if b.name == name)
    geo = body.geocentric(j2000_frame)
    topo = geocentric_to_topocentric(geo, j2000_frame)
    ra, dec = horizon_to_equatorial(topo.azimuth, topo.elevation, j2000_frame)
    assert dec == pytest.approx(topo.declination, abs=1e-9)
    assert math.remainder(ra - topo.right_ascension, Constants.TWO_PI) == pytest.approx(0.0, abs=1e-9)


def test_topocentric_ranges(j2000_frame):
    for body in default_catalog():
        topo = geocentric_to_topocentric(body.geocentric(j2000_frame), j2000_frame)
        assert 0.0 <= topo.right_ascension < Constants.TWO_PI
        assert -math.pi < topo.hour_angle <= math.pi
        assert -90.0 <= topo.elevation <= 90.0


def test_lunar_parallax_is_at_most_a_horizontal_parallax(j2000_frame, sample_factory):
    geo = lunar_position(j2000_frame)
    topo = geocentric_to_topocentric(geo, j2000_frame)
    centre = sample_factory(ra=geo.right_ascension, dec=geo.declination)
    shift = angular_distance(centre, topo)
    assert 0.0 < shift <= geo.horizontal_parallax / Constants.RADSEC + 1.0


def test_angular_distance_properties(sample_factory):
    a = sample_factory(ra=1.0, dec=0.2)
    b = sample_factory(ra=1.3, dec=-0.1)
    assert angular_distance(a, a) == pytest.approx(0.0, abs=0.01)
    assert angular_distance(a, b) == pytest.approx(angular_distance(b, a))
    pole = sample_factory(ra=0.0, dec=math.pi / 2)
    equator = sample_factory(ra=2.0, dec=0.0)
    assert angular_distance(pole, equator) == pytest.approx(90 * 3600.0, rel=1e-9)
