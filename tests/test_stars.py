import math
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from almanac.core.bodies import CelestialBody, default_catalog, resolve_body
from almanac.core.errors import CatalogError, ErrorClass
from almanac.core.events import EventFlag, EventSink
from almanac.core.frame import FrameBuilder, build_frame
from almanac.core.occultation import refine_occultation
from almanac.core.orbits import reduce_to_range
from almanac.core.sampler import SamplingWindow, sample_window
from almanac.core.search import SearchTuning
from almanac.core.stars import (
    CatalogStar,
    apparent_place,
    ecliptic_of_date,
    in_ra_window,
    moon_ra_window,
    near_lunar_path,
    parse_catalog_line,
    read_catalog,
    star_occultations,
)
from almanac.core.timescales import MURRAY_HILL, Constants, day_number, delta_t


def test_parse_catalog_line(catalog_line):
    star = parse_catalog_line(catalog_line())
    assert star.identifier == "123456"
    assert star.right_ascension == pytest.approx(5 + 30 / 60 + 12.5 / 3600)
    assert star.declination == pytest.approx(12 + 30 / 60 + 15.5 / 3600)
    assert star.proper_motion_ra == pytest.approx(0.001)
    assert star.proper_motion_dec == pytest.approx(-0.01)
    assert star.parallax == 0.0
    assert star.magnitude == pytest.approx(4.5)


def test_negative_zero_degrees_keeps_sign(catalog_line):
    star = parse_catalog_line(catalog_line(dec="-00", dmin=30, dsec=0.0))
    assert star.declination == pytest.approx(-0.5)


def test_southern_declination(catalog_line):
    star = parse_catalog_line(catalog_line(dec="-23", dmin=15, dsec=0.0))
    assert star.declination == pytest.approx(-23.25)


def test_short_line_is_rejected(catalog_line):
    with pytest.raises(CatalogError) as info:
        parse_catalog_line(catalog_line()[:40])
    assert info.value.error_class is ErrorClass.MALFORMED_INPUT


def test_garbled_field_is_rejected(catalog_line):
    line = catalog_line()
    with pytest.raises(CatalogError):
        parse_catalog_line(line[:18] + "xx" + line[20:])


def test_read_catalog_from_file(tmp_path, catalog_line):
    path = tmp_path / "sao.txt"
    path.write_text("\n".join([catalog_line(sao="1"), "", catalog_line(sao="2", rah=17)]) + "\n")
    stars = read_catalog(path)
    assert [s.identifier for s in stars] == ["1", "2"]
    assert stars[1].right_ascension == pytest.approx(17 + 30 / 60 + 12.5 / 3600)


def test_strict_catalog_reports_line_number(catalog_line):
    with pytest.raises(CatalogError) as info:
        read_catalog([catalog_line(), "short line"])
    assert info.value.context["line_number"] == 2


def test_lenient_catalog_skips_bad_lines(catalog_line, caplog):
    stars = read_catalog([catalog_line(sao="7"), "short line"], strict=False)
    assert [s.identifier for s in stars] == ["7"]
    assert "Skipping catalog line 2" in caplog.text


def test_ra_window_plain_and_wrapped():
    assert in_ra_window(5.0, 4.0, 6.0)
    assert not in_ra_window(7.0, 4.0, 6.0)
    assert in_ra_window(23.8, 23.5, 0.5)
    assert in_ra_window(0.2, 23.5, 0.5)
    assert not in_ra_window(12.0, 23.5, 0.5)


def test_moon_ra_window_wraps_past_zero_hours(sample_factory):
    samples = [sample_factory(ra=(2 * math.pi - 0.05 + 0.01 * k) % (2 * math.pi)) for k in range(14)]
    lo, hi = moon_ra_window(samples)
    assert lo > 23.0
    assert hi < 1.0
    assert in_ra_window(0.0, lo, hi)


# Aldebaran, B1950 mean place
ALDEBARAN = CatalogStar("94027", 4 + 33 / 60 + 3.0 / 3600, 16 + 24 / 60 + 38 / 3600,
                        0.0047, -0.19, 0.048, 0.85)


def test_precession_carries_right_ascension_forward():
    day = day_number(datetime(2024, 1, 1, tzinfo=timezone.utc))
    frame = build_frame(day, MURRAY_HILL, delta_t(day))
    place = apparent_place(ALDEBARAN, frame)
    hours = place.right_ascension * 12 / math.pi
    # About 3.4 s of time per year over 74 years
    assert hours - ALDEBARAN.right_ascension == pytest.approx(4.2 / 60, abs=0.5 / 60)
    assert place.magnitude == ALDEBARAN.magnitude


def test_ecliptic_of_date_uses_parallax_for_distance():
    day = day_number(datetime(2024, 1, 1, tzinfo=timezone.utc))
    frame = build_frame(day, MURRAY_HILL, delta_t(day))
    lam, beta, rad = ecliptic_of_date(ALDEBARAN, frame)
    assert rad == pytest.approx(20600 / 0.048)
    # Aldebaran sits about 5.5 degrees south of the ecliptic
    assert beta / Constants.RADIAN == pytest.approx(-5.47, abs=0.1)


def test_lunar_path_band():
    eday = 45000.0
    node = 1.3820 - .00092422117 * eday
    assert near_lunar_path(node, 0.0, eday)
    assert not near_lunar_path(node, 0.2, eday)


def test_star_far_from_moon_is_not_a_candidate():
    day = day_number(datetime(2024, 4, 8, tzinfo=timezone.utc))
    builder = FrameBuilder(MURRAY_HILL, delta_t(day))
    window = SamplingWindow(day)
    bodies = default_catalog(occultation_mode=True)
    frames = sample_window(bodies, window, builder)
    moon = resolve_body(bodies, "moon")
    moon_hours = moon.samples[0].right_ascension * 12 / math.pi
    far = CatalogStar("1", (moon_hours + 12) % 24, 0.0, 0.0, 0.0, 0.0, 3.0)
    sink = EventSink(lambda t: -90.0)
    assert star_occultations(moon, [far], window, builder, frames, sink, SearchTuning()) == 0
    assert len(sink) == 0


def _star_on_track(target, frame, magnitude, identifier="999999"):
    """Catalog star whose apparent place at `frame` matches a topocentric sample."""
    star = CatalogStar(identifier, target.right_ascension * 12 / math.pi,
                       target.declination / Constants.RADIAN, 0.0, 0.0, 0.0, magnitude)
    for _ in range(5):
        place = CelestialBody.star(identifier, apparent_place(star, frame)).compute(frame)
        dra = reduce_to_range(target.right_ascension - place.right_ascension, centered=True)
        ddec = target.declination - place.declination
        star = replace(star,
                       right_ascension=(star.right_ascension + dra * 12 / math.pi) % 24,
                       declination=star.declination + ddec / Constants.RADIAN)
    return star


@pytest.fixture(scope="module")
def moon_pass():
    day = day_number(datetime(2024, 3, 20, tzinfo=timezone.utc))
    builder = FrameBuilder(MURRAY_HILL, delta_t(day))
    window = SamplingWindow(day)
    bodies = default_catalog(occultation_mode=True)
    frames = sample_window(bodies, window, builder)
    return resolve_body(bodies, "moon"), window, builder, frames


def test_occultation_of_bright_star(moon_pass):
    moon, window, builder, frames = moon_pass
    assert all(s.elevation > 0 for s in moon.samples[1:4])
    star = _star_on_track(moon.samples[2], frames[0], magnitude=3.0)
    sink = EventSink(lambda t: -90.0)
    assert star_occultations(moon, [star], window, builder, frames, sink, SearchTuning()) == 1
    events = sink.flush()
    assert [e.message for e in events] == [
        "Occultation of SAO 999999 begins at",
        "Occultation of SAO 999999 ends at",
    ]
    begin, end = events
    assert 1.0 < begin.offset < 2.0 < end.offset < 3.0
    for event in events:
        assert event.flags == EventFlag.DARK | EventFlag.SIGNIFICANT | EventFlag.TIMED


def test_faint_star_is_not_significant(moon_pass):
    moon, window, builder, frames = moon_pass
    star = _star_on_track(moon.samples[2], frames[0], magnitude=6.5)
    sink = EventSink(lambda t: -90.0)
    star_occultations(moon, [star], window, builder, frames, sink, SearchTuning())
    events = sink.flush()
    assert len(events) == 2
    assert all(e.flags == EventFlag.DARK | EventFlag.TIMED for e in events)


def test_occultation_below_horizon_is_suppressed(moon_pass, monkeypatch):
    moon, window, builder, frames = moon_pass
    below = [k for k in range(2, 11)
             if all(s.elevation < -5 for s in moon.samples[k - 1:k + 2])]
    assert below
    k = below[0]
    star = _star_on_track(moon.samples[k], frames[0], magnitude=3.0)
    monkeypatch.setattr("almanac.core.stars.near_lunar_path", lambda lam, beta, eday: True)

    body = CelestialBody.star(star.identifier, apparent_place(star, frames[0]))
    for i, frame in enumerate(frames):
        body.sample(i, frame)
    occ = refine_occultation(moon, body, window, builder)
    assert occ.found
    assert occ.e1 < 0 and occ.e5 < 0

    sink = EventSink(lambda t: -90.0)
    assert star_occultations(moon, [star], window, builder, frames, sink, SearchTuning()) == 1
    assert len(sink) == 0
