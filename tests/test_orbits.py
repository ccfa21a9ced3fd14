import logging
import math

import pytest

from almanac.core.frame import build_frame
from almanac.core.orbits import (
    IKEYA_ZHANG,
    PLANET_MODELS,
    CometElements,
    comet_orbit,
    lunar_position,
    planet_orbit,
    pyth,
    reduce_to_range,
    solar_orbit,
    solve_kepler,
    true_anomaly,
)
from almanac.core.pipeline import geocentric_to_topocentric, heliocentric_to_geocentric
from almanac.core.timescales import Constants, MURRAY_HILL, delta_t

TWO_PI = Constants.TWO_PI


@pytest.mark.parametrize("e", [0.0, 0.01, 0.2056, 0.5, 0.9, 0.99, 0.999])
@pytest.mark.parametrize("m", [-3.0, -1.0, 0.0, 0.3, 1.5, math.pi, 6.0, 100.0])
def test_kepler_residual(e, m):
    E = solve_kepler(m, e)
    assert abs(m - E + e * math.sin(E)) < 1e-13


def test_true_anomaly_circular_orbit_equals_eccentric_anomaly():
    assert true_anomaly(1.2, 0.0) == pytest.approx(1.2)


@pytest.mark.parametrize("angle", [-1e6, -7.0, -math.pi, -1e-12, 0.0, 1.0, math.pi, TWO_PI, 13.0, 1e6])
def test_reduce_to_range(angle):
    a = reduce_to_range(angle)
    assert 0.0 <= a < TWO_PI
    c = reduce_to_range(angle, centered=True)
    assert -math.pi < c <= math.pi
    assert math.cos(a) == pytest.approx(math.cos(angle), abs=1e-9)
    assert math.sin(c) == pytest.approx(math.sin(angle), abs=1e-9)


def test_pyth_clamps():
    assert pyth(0.0) == 1.0
    assert pyth(1.5) == 0.0
    assert pyth(0.6) == pytest.approx(0.8)


def test_solar_distance_at_perihelion_and_aphelion():
    # 2024 perihelion January 3, aphelion July 5
    jan = solar_orbit(45293.0, 45293.0 / Constants.DAYS_PER_CENTURY)
    jul = solar_orbit(45477.0, 45477.0 / Constants.DAYS_PER_CENTURY)
    assert jan.radius == pytest.approx(0.98331, abs=2e-4)
    assert jul.radius == pytest.approx(1.01673, abs=2e-4)
    assert 0.0 <= jan.longitude < TWO_PI


def test_solar_semidiameter_depends_on_mode():
    assert solar_orbit(45000.0, 1.2).semidiameter == 961.182
    assert solar_orbit(45000.0, 1.2, occultation_mode=True).semidiameter == 959.63


@pytest.mark.parametrize("name", sorted(PLANET_MODELS))
def test_planet_states_are_normalised(name, j2000_frame):
    state = planet_orbit(PLANET_MODELS[name], j2000_frame)
    assert 0.0 <= state.longitude < TWO_PI
    assert abs(state.latitude) < 0.35
    assert state.radius > 0.3
    assert state.motion > 0


@pytest.mark.parametrize("name, lo, hi", [
    ("uranus", 18.2, 20.2),
    ("neptune", 29.7, 30.4),
    ("pluto", 29.6, 49.4),
])
def test_outer_planet_distances_from_epoch_elements(name, lo, hi, j2000_frame):
    elements = PLANET_MODELS[name].elements(j2000_frame.eday, j2000_frame.capt)
    assert 0.0 <= elements.eccentricity < 0.3
    state = planet_orbit(PLANET_MODELS[name], j2000_frame)
    assert lo < state.radius < hi


def test_mars_heliocentric_distance_within_orbit(j2000_frame):
    state = planet_orbit(PLANET_MODELS["mars"], j2000_frame)
    assert 1.38 < state.radius < 1.67


def test_saturn_magnitude_stays_in_empirical_range(murray_hill):
    model = PLANET_MODELS["saturn"]
    # one full orbit, monthly
    start = 36525.0
    for k in range(360):
        day = start + 30.4375 * k
        frame = build_frame(day, murray_hill, delta_t(day))
        geo = heliocentric_to_geocentric(planet_orbit(model, frame), frame)
        assert -9.0 <= geo.magnitude <= 2.0


def test_comet_eccentricity_is_clamped(j2000_frame, caplog):
    comet = CometElements("test", 36500.0, 1.0, 1.2, 10.0, 20.0, 30.0)
    with caplog.at_level(logging.WARNING, logger="almanac.core.orbits"):
        state = comet_orbit(comet, j2000_frame)
    assert math.isfinite(state.longitude)
    assert any("Clamping eccentricity" in r.message for r in caplog.records)


def test_ikeya_zhang_near_perihelion(murray_hill):
    day = IKEYA_ZHANG.perihelion_day
    frame = build_frame(day, murray_hill, delta_t(day))
    state = comet_orbit(IKEYA_ZHANG, frame)
    assert state.radius == pytest.approx(IKEYA_ZHANG.perihelion_distance, rel=1e-3)


def test_lunar_position_is_within_physical_ranges(j2000_frame):
    moon = lunar_position(j2000_frame)
    hp_arcsec = moon.horizontal_parallax / Constants.RADSEC
    assert 3200 < hp_arcsec < 3700
    assert 850 < moon.semidiameter < 1010
    assert 0.0 <= moon.phase < 1.0
    assert abs(moon.declination) < 29 * Constants.RADIAN
    assert -12.8 <= moon.magnitude


def test_lunar_topocentric_elevation_is_finite(j2000_frame):
    topo = geocentric_to_topocentric(lunar_position(j2000_frame), j2000_frame)
    assert -90.0 <= topo.elevation <= 90.0
    assert 0.0 <= topo.azimuth <= 360.0
