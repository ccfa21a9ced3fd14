import math
from datetime import datetime, timezone

import pytest

from almanac.core.errors import ErrorClass, LocationError
from almanac.core.timescales import (
    Constants,
    DeltaTModel,
    MURRAY_HILL,
    Observer,
    datetime_from_day,
    day_number,
    delta_t,
    julian_date,
)


def test_day_zero_is_1899_december_31_noon():
    assert day_number(datetime(1899, 12, 31, 12)) == pytest.approx(0.0, abs=1e-9)


def test_j2000_day_number_and_julian_date():
    day = day_number(datetime(2000, 1, 1, 12, tzinfo=timezone.utc))
    assert day == pytest.approx(36525.0, abs=1e-9)
    assert julian_date(day) == pytest.approx(2451545.0, abs=1e-9)


def test_aware_datetimes_are_converted_to_utc():
    from datetime import timedelta
    eastern = timezone(timedelta(hours=-5))
    assert day_number(datetime(2024, 4, 8, 13, tzinfo=eastern)) == pytest.approx(
        day_number(datetime(2024, 4, 8, 18)), abs=1e-9)


@pytest.mark.parametrize("when", [
    datetime(1950, 1, 1, 0, 0, tzinfo=timezone.utc),
    datetime(2002, 3, 18, 23, 28, 53, 760000, tzinfo=timezone.utc),
    datetime(2024, 6, 20, 20, 51, tzinfo=timezone.utc),
])
def test_datetime_round_trip(when):
    back = datetime_from_day(day_number(when))
    assert back.tzinfo is not None
    assert abs((back - when).total_seconds()) < 1e-3


def test_delta_t_override_wins():
    assert delta_t(45000.0, override=69.2) == 69.2


def test_delta_t_linear_model():
    assert delta_t(45000.0) == pytest.approx(45000.0 * Constants.DELTA_T_SLOPE)


def test_delta_t_erfa_model_uses_leap_seconds():
    day = day_number(datetime(2024, 1, 1))
    assert delta_t(day, model=DeltaTModel.ERFA) == pytest.approx(32.184 + 37.0)


def test_observer_from_string():
    obs = Observer.from_string("40.6843 74.3997 150")
    assert obs.latitude == pytest.approx(40.6843 * Constants.RADIAN)
    assert obs.west_longitude == pytest.approx(74.3997 * Constants.RADIAN)
    assert obs.elevation_m == 150.0
    assert obs.elevation_ft == pytest.approx(150.0 * Constants.METERS_TO_FEET)


@pytest.mark.parametrize("text", ["", "40.1 74.2", "north 74 150", "40 nan 150"])
def test_observer_from_string_rejects_malformed(text):
    with pytest.raises(LocationError) as info:
        Observer.from_string(text)
    assert info.value.error_class is ErrorClass.MALFORMED_INPUT


def test_geocentric_latitude_is_smaller_than_geodetic():
    assert MURRAY_HILL.geocentric_latitude < MURRAY_HILL.latitude
    diff = (MURRAY_HILL.latitude - MURRAY_HILL.geocentric_latitude) / Constants.RADSEC
    assert 600 < diff < 700


def test_geocentric_radius_at_equator_and_pole():
    equator = Observer(0.0, 0.0, 0.0)
    pole = Observer(math.pi / 2, 0.0, 0.0)
    assert equator.geocentric_radius == pytest.approx(1.0, abs=1e-5)
    assert pole.geocentric_radius == pytest.approx(0.99665, abs=1e-4)
