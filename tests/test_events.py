import pytest

from almanac.core.errors import ErrorClass, EventOverflowError
from almanac.core.events import Event, EventFlag, EventSink


def _sink(elevation, **kwargs):
    return EventSink(lambda t: elevation, **kwargs)


def test_dark_event_dropped_when_sun_above_threshold():
    sink = _sink(-5.0)
    assert not sink.emit("Mars rises at", 3.0, EventFlag.TIMED | EventFlag.DARK)
    assert len(sink) == 0
    assert sink.dropped == 1


def test_dark_event_kept_in_darkness():
    sink = _sink(-20.0)
    assert sink.emit("Mars rises at", 3.0, EventFlag.TIMED | EventFlag.DARK)
    assert len(sink) == 1


def test_dark_threshold_is_inclusive():
    assert _sink(-12.0).emit("x", 1.0, EventFlag.DARK)


def test_light_event_dropped_at_night():
    sink = _sink(-0.5)
    assert not sink.emit("Transit of Venus begins at", 2.0, EventFlag.LIGHT | EventFlag.TIMED)
    assert _sink(0.0).emit("Transit of Venus begins at", 2.0, EventFlag.LIGHT)


def test_ungated_events_ignore_the_sun():
    assert _sink(45.0).emit("Full moon")


def test_overflow_raises():
    sink = _sink(0.0, capacity=3)
    for k in range(3):
        sink.emit(f"event {k}")
    with pytest.raises(EventOverflowError) as info:
        sink.emit("one too many")
    assert info.value.error_class is ErrorClass.RESOURCE_EXHAUSTED


def test_flush_orders_significant_events_first():
    sink = _sink(0.0)
    sink.emit("The sun rises at", 5.0, EventFlag.TIMED)
    sink.emit("Summer solstice at", 9.0, EventFlag.SIGNIFICANT | EventFlag.TIMED)
    sink.emit("New moon")
    sink.emit("Perseid meteor shower", 2.0, EventFlag.SIGNIFICANT)
    sink.emit("The sun sets at", 1.0, EventFlag.TIMED)
    ordered = [e.message for e in sink.flush()]
    assert ordered == [
        "Perseid meteor shower",
        "Summer solstice at",
        "New moon",
        "The sun sets at",
        "The sun rises at",
    ]
    assert len(sink) == 0


def test_flush_is_stable_for_equal_times():
    sink = _sink(0.0)
    for name in ("first", "second", "third"):
        sink.emit(name)
    assert [e.message for e in sink.flush()] == ["first", "second", "third"]


def test_event_describe_and_dict():
    from datetime import datetime, timezone
    when = datetime(2024, 6, 20, 20, 51, tzinfo=timezone.utc)
    timed = Event("Summer solstice at", 10.2, EventFlag.SIGNIFICANT | EventFlag.TIMED)
    assert timed.describe(when) == "Summer solstice at 2024-06-20T20:51:00+00:00"
    assert Event("New moon").describe(when) == "New moon"
    assert set(timed.to_dict()["flags"]) == {"SIGNIFICANT", "TIMED"}
