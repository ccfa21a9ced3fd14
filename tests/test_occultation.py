import math
from datetime import datetime, timedelta, timezone

import pytest

from almanac.core.bodies import default_catalog, resolve_body
from almanac.core.errors import ErrorClass, RefinementError
from almanac.core.frame import FrameBuilder
from almanac.core.occultation import (
    ABSENT,
    Occultation,
    QuadraticInterpolant,
    coarse_minimum,
    refine_occultation,
)
from almanac.core.sampler import SamplingWindow, sample_window
from almanac.core.timescales import Observer, datetime_from_day, day_number, delta_t


def test_interpolant_reproduces_its_samples(sample_factory):
    p = [sample_factory(elevation=e, ra=ra, dec=dec, semi=s)
         for e, ra, dec, s in ((10.0, 1.0, 0.20, 900.0),
                               (12.5, 1.1, 0.22, 905.0),
                               (13.0, 1.3, 0.21, 912.0))]
    f = QuadraticInterpolant.from_samples(*p)
    for x, sample in enumerate(p):
        point = f.at(x)
        assert point.right_ascension == pytest.approx(sample.right_ascension)
        assert point.declination == pytest.approx(sample.declination)
        assert point.semidiameter == pytest.approx(sample.semidiameter)
        assert point.elevation == pytest.approx(sample.elevation)


def test_interpolant_is_continuous_across_zero_hours(sample_factory):
    two_pi = 2 * math.pi
    p = [sample_factory(ra=ra) for ra in (two_pi - 0.02, 0.01, 0.04)]
    f = QuadraticInterpolant.from_samples(*p)
    assert math.fmod(f.at(1).right_ascension, two_pi) == pytest.approx(0.01)
    assert math.fmod(f.at(2).right_ascension, two_pi) == pytest.approx(0.04)
    # Midway between the first two samples, just before the wrap
    assert f.at(0.5).right_ascension == pytest.approx(two_pi - 0.005)


def test_coarse_minimum_finds_first_bracket(sample_factory):
    fixed = [sample_factory(ra=1.0) for _ in range(14)]
    moving = [sample_factory(ra=1.0 + 0.01 * abs(k - 8)) for k in range(14)]
    assert coarse_minimum(fixed, moving) == 7


def test_coarse_minimum_without_minimum(sample_factory):
    fixed = [sample_factory(ra=1.0) for _ in range(14)]
    receding = [sample_factory(ra=1.0 + 0.01 * k) for k in range(14)]
    assert coarse_minimum(fixed, receding) == -1


def test_empty_occultation_has_no_contacts():
    occ = Occultation()
    assert not occ.found
    assert occ.contacts() == {}
    assert occ.t1 == ABSENT


@pytest.fixture(scope="module")
def eclipse_pass():
    """Sun and Moon sampled over 2024-04-08 UTC from Dallas."""
    dallas = Observer.from_degrees(32.7767, 96.7970, 139.0)
    day = day_number(datetime(2024, 4, 8, tzinfo=timezone.utc))
    builder = FrameBuilder(dallas, delta_t(day))
    window = SamplingWindow(day)
    bodies = default_catalog()
    sample_window(bodies, window, builder)
    return resolve_body(bodies, "sun"), resolve_body(bodies, "moon"), window, builder


def _near(window, offset, hour, minute, tolerance_minutes):
    when = datetime_from_day(window.offset_day(offset))
    target = datetime(2024, 4, 8, hour, minute, tzinfo=timezone.utc)
    return abs(when - target) <= timedelta(minutes=tolerance_minutes)


def test_total_solar_eclipse_contacts(eclipse_pass):
    sun, moon, window, builder = eclipse_pass
    occ = refine_occultation(sun, moon, window, builder)
    assert occ.found
    assert _near(window, occ.t1, 17, 23, 10)
    assert _near(window, occ.t3, 18, 42, 10)
    assert _near(window, occ.t5, 20, 2, 10)
    assert occ.t1 < occ.t3 < occ.t5
    # The Sun is high over Texas at mid-eclipse
    assert occ.e3 > 50


def test_refinement_is_repeatable(eclipse_pass):
    sun, moon, window, builder = eclipse_pass
    assert refine_occultation(sun, moon, window, builder) == \
        refine_occultation(sun, moon, window, builder)


def test_distant_pair_reports_nothing(eclipse_pass):
    sun, _, window, builder = eclipse_pass
    bodies = default_catalog()
    sample_window(bodies, window, builder)
    occ = refine_occultation(resolve_body(bodies, "sun"), resolve_body(bodies, "saturn"),
                             window, builder)
    assert not occ.found
    assert occ.contacts() == {}


def test_contact_walk_limit_raises(eclipse_pass):
    sun, moon, window, builder = eclipse_pass
    with pytest.raises(RefinementError) as info:
        refine_occultation(sun, moon, window, builder, walk_limit=1)
    assert info.value.error_class is ErrorClass.ALGORITHM_INSTABILITY
    assert info.value.context["limit"] == 1
