from datetime import datetime, timedelta, timezone

import pytest

from almanac.core.almanac import AlmanacConfig, compute_almanac, compute_positions, distance_report
from almanac.core.bodies import default_catalog
from almanac.core.errors import BodyLookupError
from almanac.core.events import EventFlag
from almanac.core.search import sun_elevation
from almanac.core.timescales import DeltaTModel, Observer

DALLAS = Observer.from_degrees(32.7767, 96.7970, 139.0)


def _find(report, prefix):
    return [e for e in report.events if e.message.startswith(prefix)]


@pytest.fixture(scope="module")
def solstice_report():
    return compute_almanac(AlmanacConfig(), datetime(2024, 6, 20, tzinfo=timezone.utc))[0]


def test_summer_solstice_2024(solstice_report):
    events = _find(solstice_report, "Summer solstice at")
    assert len(events) == 1
    assert events[0].significant and events[0].timed
    when = solstice_report.event_time(events[0])
    assert abs(when - datetime(2024, 6, 20, 20, 51, tzinfo=timezone.utc)) < timedelta(hours=2)


def test_sun_rises_and_sets_once(solstice_report):
    assert len(_find(solstice_report, "The sun rises at")) == 1
    assert len(_find(solstice_report, "The sun sets at")) == 1


def test_dark_events_only_in_darkness():
    config = AlmanacConfig(periods=3)
    for report in compute_almanac(config, datetime(2024, 3, 1, tzinfo=timezone.utc)):
        sun = report.samples["sun"]
        for event in report.events:
            if event.flags & EventFlag.DARK:
                assert sun_elevation(sun, event.offset, report.window.npts) <= -12.0
            if event.flags & EventFlag.LIGHT:
                assert sun_elevation(sun, event.offset, report.window.npts) >= 0.0


def test_significant_events_lead_the_report(solstice_report):
    flags = [e.significant for e in solstice_report.events]
    assert flags == sorted(flags, reverse=True)


def test_successive_windows_advance_by_period():
    reports = compute_almanac(AlmanacConfig(periods=2, period_days=0.5),
                              datetime(2024, 6, 20, tzinfo=timezone.utc))
    assert reports[1].day - reports[0].day == pytest.approx(0.5)
    assert reports[1].delta_t > reports[0].delta_t


def test_report_lines_and_dict(solstice_report):
    lines = solstice_report.lines()
    assert len(lines) == len(solstice_report.events)
    assert any(line.startswith("Summer solstice at 2024-06-20T") for line in lines)
    data = solstice_report.to_dict()
    assert data["start"].startswith("2024-06-20T00:00")
    assert len(data["events"]) == len(lines)


def test_total_solar_eclipse_from_dallas():
    report = compute_almanac(AlmanacConfig(observer=DALLAS),
                             datetime(2024, 4, 8, tzinfo=timezone.utc))[0]
    begins = _find(report, "Partial eclipse of The sun begins at")
    ends = _find(report, "Partial eclipse of The sun ends at")
    assert len(begins) == 1 and len(ends) == 1
    start = report.event_time(begins[0])
    assert abs(start - datetime(2024, 4, 8, 17, 23, tzinfo=timezone.utc)) < timedelta(minutes=10)


def test_total_lunar_eclipse_march_2025():
    report = compute_almanac(AlmanacConfig(), datetime(2025, 3, 14, tzinfo=timezone.utc))[0]
    assert _find(report, "Partial eclipse of The moon begins at")
    assert not _find(report, "Occultation of The shadow")


def test_compute_positions_covers_catalog():
    report = compute_positions(AlmanacConfig(include_comet=True),
                               datetime(2024, 6, 20, 12, tzinfo=timezone.utc))
    names = [b.name for b in default_catalog(AlmanacConfig().comet)]
    assert list(report.positions) == names
    assert report.delta_t == pytest.approx(report.day * 0.001704)
    for sample in report.positions.values():
        assert -90.0 <= sample.elevation <= 90.0
    data = report.to_dict()
    assert set(data["positions"]) == set(names)
    assert data["julian_date"] == pytest.approx(report.day + 2415020)


def test_delta_t_override_reaches_the_report():
    report = compute_positions(AlmanacConfig(delta_t_seconds=69.0), 45000.0)
    assert report.delta_t == 69.0
    erfa_report = compute_positions(AlmanacConfig(delta_t_model=DeltaTModel.ERFA), 45000.0)
    assert erfa_report.delta_t == pytest.approx(69.184)


def test_distance_at_mid_eclipse():
    when = datetime(2024, 4, 8, 18, 42, 45, tzinfo=timezone.utc)
    separation = distance_report(AlmanacConfig(observer=DALLAS), when, "sun", "The moon")
    assert separation < 120.0


def test_unknown_body_is_rejected():
    with pytest.raises(BodyLookupError):
        distance_report(AlmanacConfig(), 45000.0, "sun", "vulcan")


def test_config_dict():
    data = AlmanacConfig().to_dict()
    assert data["periods"] == 1
    assert data["delta_t_model"] == "linear"
    assert data["tuning"]["event_capacity"] == 100


@pytest.mark.parametrize("start, phase", [
    (datetime(2024, 3, 25, tzinfo=timezone.utc), "Full moon"),
    (datetime(2024, 4, 8, tzinfo=timezone.utc), "New moon"),
])
def test_lunar_phases_on_known_dates(start, phase):
    report = compute_almanac(AlmanacConfig(), start)[0]
    messages = [e.message for e in report.events]
    assert messages.count(phase) == 1
    assert not report.events[messages.index(phase)].timed
