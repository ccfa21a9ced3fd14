# tests/conftest.py
# Shared fixtures for the almanac test suite.

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from almanac.core.bodies import PositionSample
from almanac.core.frame import build_frame
from almanac.core.timescales import MURRAY_HILL, Observer, day_number, delta_t


@pytest.fixture
def murray_hill() -> Observer:
    return MURRAY_HILL


@pytest.fixture
def dallas() -> Observer:
    return Observer.from_degrees(32.7767, 96.7970, 139.0)


@pytest.fixture
def j2000_day() -> float:
    return day_number(datetime(2000, 1, 1, 12, tzinfo=timezone.utc))


@pytest.fixture
def j2000_frame(j2000_day, murray_hill):
    return build_frame(j2000_day, murray_hill, delta_t(j2000_day))


def make_sample(elevation=0.0, ra=0.0, dec=0.0, semi=0.0, mag=0.0,
                ecliptic_longitude=0.0, phase=None) -> PositionSample:
    return PositionSample(
        right_ascension=ra,
        declination=dec,
        semidiameter=semi,
        azimuth=180.0,
        elevation=elevation,
        magnitude=mag,
        ecliptic_longitude=ecliptic_longitude,
        phase=phase,
    )


@pytest.fixture
def sample_factory():
    return make_sample


def format_catalog_line(sao="123456", rah=5, ram=30, ras=12.5, da=0.001, dec="+12",
                        dmin=30, dsec=15.5, dd=-0.01, px="0.0", mag=4.5) -> str:
    return (f"{sao:<6}" + " " * 12
            + f"{rah:02d} {ram:02d} {ras:6.3f} {da:+6.3f} {dec:>3} {dmin:02d} "
            + f"{dsec:5.2f} {dd:+6.3f} {px:>3}  {mag:4.2f}")


@pytest.fixture
def catalog_line():
    return format_catalog_line
