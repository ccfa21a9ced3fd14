from datetime import datetime, timezone

from almanac.core.almanac import AlmanacConfig
from almanac.core.system_integration import (
    PerformanceProfiler,
    SystemConfig,
    SystemStatus,
    run_system_check,
)


def test_profiler_returns_result_and_timing():
    profiler = PerformanceProfiler()
    result, time_ms, memory_mb = profiler.profile_function(sum, [1, 2, 3])
    assert result == 6
    assert time_ms >= 0.0
    assert memory_mb >= 0.0


def test_profiler_without_start():
    assert PerformanceProfiler().stop_profiling() == (0.0, 0.0)


def test_system_check_passes_on_reference_instant():
    config = SystemConfig(
        reference_instants=(datetime(2000, 1, 1, 12, tzinfo=timezone.utc),),
        config=AlmanacConfig(),
    )
    result = run_system_check(config)
    names = [c.name for c in result.checks]
    assert names == ["frame_2000-01-01", "kepler_residual", "almanac_pass"]
    kepler = next(c for c in result.checks if c.name == "kepler_residual")
    assert kepler.passed
    assert result.status in (SystemStatus.HEALTHY, SystemStatus.DEGRADED)
    assert result.passed >= 2


def test_unexpected_error_becomes_failed_check(monkeypatch):
    def broken(config, start):
        raise TypeError("bad elements")

    monkeypatch.setattr("almanac.core.system_integration.compute_almanac", broken)
    config = SystemConfig(reference_instants=(datetime(2000, 1, 1, 12, tzinfo=timezone.utc),))
    result = run_system_check(config)
    almanac_pass = next(c for c in result.checks if c.name == "almanac_pass")
    assert not almanac_pass.passed
    assert almanac_pass.error_message == "TypeError: bad elements"
    assert result.status is not SystemStatus.HEALTHY
