import math

import pytest

from almanac.core.search import (
    ecliptic_crossing_index,
    max_elongation_index,
    rise_index,
    set_index,
    solstice_index,
    sun_elevation,
)


def _elevations(factory, values):
    return [factory(elevation=v) for v in values]


def test_rise_interpolates_between_bracketing_samples(sample_factory):
    values = [-10, -8, -4, -1, 2, 6, 10, 12, 10, 5, 1, -3, -6, -9]
    samples = _elevations(sample_factory, values)
    assert rise_index(samples, 0.0) == pytest.approx(3 + 1 / 3)
    assert set_index(samples, 0.0) == pytest.approx(10.25)


def test_rise_and_set_report_single_crossing(sample_factory):
    samples = _elevations(sample_factory, [-5, -3, -1, 1, 3, 1, -1, -3, -5, -7, -9, -11, -13, -15])
    assert rise_index(samples, -0.833) == pytest.approx(2 + (1 - 0.833) / 2)
    assert set_index(samples, -0.833) == pytest.approx(5 + (1 + 0.833) / 2)


def test_no_crossing_returns_negative(sample_factory):
    samples = _elevations(sample_factory, [10.0] * 14)
    assert rise_index(samples, 0.0) < 0
    assert set_index(samples, 0.0) < 0


def _ras(factory, hours):
    return [factory(ra=(h % 24) * math.pi / 12) for h in hours]


def test_summer_solstice_crossing(sample_factory):
    # Right ascension 5.8h rising 0.02h per sample
    sun = _ras(sample_factory, [5.8 + 0.02 * k for k in range(14)])
    t = solstice_index(sun, 3)
    assert t == pytest.approx(10.0, abs=1e-9)
    assert solstice_index(sun, 1) < 0


def test_fall_equinox_crossing_of_twelve_hours(sample_factory):
    sun = _ras(sample_factory, [11.9 + 0.02 * k for k in range(14)])
    assert solstice_index(sun, 0) == pytest.approx(5.0, abs=1e-9)
    assert solstice_index(sun, 2) < 0


def test_spring_equinox_crossing_of_zero_hours(sample_factory):
    sun = _ras(sample_factory, [23.9 + 0.02 * k for k in range(14)])
    assert solstice_index(sun, 2) == pytest.approx(5.0, abs=1e-9)


def test_meteor_shower_longitude_crossing(sample_factory):
    sun = [sample_factory(ecliptic_longitude=2.43 + 0.001 * k) for k in range(14)]
    assert ecliptic_crossing_index(sun, 2.4331) == pytest.approx(3.1, abs=1e-6)
    assert ecliptic_crossing_index(sun, 3.0) < 0


def test_max_elongation(sample_factory):
    sun = [sample_factory(ra=0.0, dec=0.0) for _ in range(14)]
    planet = [sample_factory(ra=0.3 - 0.01 * abs(k - 6), dec=0.0) for k in range(14)]
    assert max_elongation_index(planet, sun) == 5


def test_sun_elevation_interpolates_and_clamps(sample_factory):
    sun = _elevations(sample_factory, [float(k) for k in range(14)])
    assert sun_elevation(sun, 2.5, 12) == pytest.approx(2.5)
    assert sun_elevation(sun, 12.0, 12) == pytest.approx(12.0)
    assert sun_elevation(sun, 13.0, 12) == -90.0
    assert sun_elevation(sun, -1.5, 12) == -90.0
