# almanac/core/system_integration.py
# -----------------------------------------------------------------------------
# Almanac Self-Check & Performance Profiling
#
# Checks run end to end over the engine:
#   • Frame cross-validation against ERFA IAU 1980 nutation, obliquity and
#     apparent sidereal time at a set of reference instants
#   • Kepler solver residuals over a grid of eccentricities
#   • A profiled almanac pass (wall time and resident memory)
#
# The overall status follows the share of passing checks.
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
import time
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

import psutil

from almanac.core.almanac import AlmanacConfig, compute_almanac
from almanac.core.errors import AlmanacError
from almanac.core.frame import build_frame, validate_frame
from almanac.core.orbits import solve_kepler
from almanac.core.timescales import MURRAY_HILL, day_number, delta_t

__all__ = [
    "SystemConfig",
    "SystemStatus",
    "CheckResult",
    "SystemCheckResult",
    "PerformanceProfiler",
    "AlmanacSystem",
    "run_system_check",
]

log = logging.getLogger(__name__)


class SystemStatus(Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass(frozen=True)
class SystemConfig:
    """Reference instants and limits for the self-check."""
    reference_instants: Tuple[datetime, ...] = (
        datetime(1990, 1, 1, tzinfo=timezone.utc),
        datetime(2000, 1, 1, 12, tzinfo=timezone.utc),
        datetime(2024, 6, 20, tzinfo=timezone.utc),
    )
    profile_start: datetime = datetime(2024, 6, 20, tzinfo=timezone.utc)
    kepler_tolerance: float = 1e-13
    max_pass_seconds: float = 30.0
    max_memory_mb: float = 500.0
    config: AlmanacConfig = field(default_factory=AlmanacConfig)


@dataclass(frozen=True)
class CheckResult:
    name: str
    passed: bool
    execution_time_ms: float
    memory_usage_mb: float
    detail: str = ""
    error_message: Optional[str] = None


@dataclass(frozen=True)
class SystemCheckResult:
    status: SystemStatus
    checks: List[CheckResult]
    total_execution_time_ms: float
    peak_memory_usage_mb: float
    timestamp: float

    @property
    def passed(self) -> int:
        return sum(1 for c in self.checks if c.passed)


class PerformanceProfiler:
    """Wall time and resident-memory growth of a call."""

    def __init__(self):
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None

    def start_profiling(self) -> None:
        self.start_time = time.perf_counter()
        self.start_memory = psutil.Process().memory_info().rss / 1024 / 1024  # MB

    def stop_profiling(self) -> Tuple[float, float]:
        """(execution_time_ms, memory_usage_mb) since start_profiling."""
        if self.start_time is None:
            return 0.0, 0.0
        execution_time = (time.perf_counter() - self.start_time) * 1000.0
        current_memory = psutil.Process().memory_info().rss / 1024 / 1024
        memory_usage = current_memory - (self.start_memory or 0)
        return execution_time, max(0, memory_usage)

    def profile_function(self, func: Callable[..., Any], *args, **kwargs) -> Tuple[Any, float, float]:
        self.start_profiling()
        try:
            result = func(*args, **kwargs)
        finally:
            time_ms, memory_mb = self.stop_profiling()
        return result, time_ms, memory_mb


class AlmanacSystem:
    """Runs the self-check suite."""

    def __init__(self, config: Optional[SystemConfig] = None):
        self.config = config or SystemConfig()
        self.profiler = PerformanceProfiler()

    def check_frames(self) -> List[CheckResult]:
        results = []
        for when in self.config.reference_instants:
            day = day_number(when)
            report, time_ms, memory_mb = self.profiler.profile_function(
                lambda: validate_frame(build_frame(day, MURRAY_HILL, delta_t(day))))
            results.append(CheckResult(
                name=f"frame_{when.date().isoformat()}",
                passed=report.passed_tolerance,
                execution_time_ms=time_ms,
                memory_usage_mb=memory_mb,
                detail=(f"dpsi {report.nutation_longitude_difference:+.3f}\" "
                        f"deps {report.nutation_obliquity_difference:+.3f}\" "
                        f"gst {report.sidereal_difference:+.3f}\""),
            ))
        return results

    def check_kepler(self) -> CheckResult:
        def worst_residual() -> float:
            worst = 0.0
            for e in (0.0, 0.1, 0.5, 0.9, 0.99, 0.999):
                for k in range(36):
                    m = k * math.pi / 18 - math.pi
                    E = solve_kepler(m, e)
                    worst = max(worst, abs(m - E + e * math.sin(E)))
            return worst

        worst, time_ms, memory_mb = self.profiler.profile_function(worst_residual)
        return CheckResult(
            name="kepler_residual",
            passed=worst < self.config.kepler_tolerance,
            execution_time_ms=time_ms,
            memory_usage_mb=memory_mb,
            detail=f"max residual {worst:.2e}",
        )

    def check_almanac_pass(self) -> CheckResult:
        try:
            reports, time_ms, memory_mb = self.profiler.profile_function(
                compute_almanac, self.config.config, self.config.profile_start)
        except AlmanacError as e:
            log.error("Almanac pass failed: %s", e)
            time_ms, memory_mb = self.profiler.stop_profiling()
            return CheckResult("almanac_pass", False, time_ms, memory_mb,
                               error_message=f"{e.error_class.value}: {e}")
        except Exception as e:
            log.error("Almanac pass raised %s: %s", type(e).__name__, e)
            time_ms, memory_mb = self.profiler.stop_profiling()
            return CheckResult("almanac_pass", False, time_ms, memory_mb,
                               error_message=f"{type(e).__name__}: {e}")
        passed = (time_ms / 1000.0 <= self.config.max_pass_seconds
                  and memory_mb <= self.config.max_memory_mb)
        events = sum(len(r.events) for r in reports)
        return CheckResult("almanac_pass", passed, time_ms, memory_mb,
                           detail=f"{len(reports)} window(s), {events} events")

    def run(self) -> SystemCheckResult:
        log.info("Starting almanac self-check")
        start = time.perf_counter()
        checks = self.check_frames()
        checks.append(self.check_kepler())
        checks.append(self.check_almanac_pass())
        total_ms = (time.perf_counter() - start) * 1000.0

        success_rate = sum(1 for c in checks if c.passed) / len(checks)
        if success_rate == 1.0:
            status = SystemStatus.HEALTHY
        elif success_rate >= 0.5:
            status = SystemStatus.DEGRADED
        else:
            status = SystemStatus.FAILED

        result = SystemCheckResult(
            status=status,
            checks=checks,
            total_execution_time_ms=total_ms,
            peak_memory_usage_mb=max((c.memory_usage_mb for c in checks), default=0.0),
            timestamp=time.time(),
        )
        self._log_results(result)
        return result

    def _log_results(self, result: SystemCheckResult) -> None:
        log.info("Self-check complete - status: %s (%d/%d passed, %.1f ms)",
                 result.status.value, result.passed, len(result.checks),
                 result.total_execution_time_ms)
        for c in result.checks:
            if not c.passed:
                log.warning("Check %s failed: %s", c.name, c.error_message or c.detail)


def run_system_check(config: Optional[SystemConfig] = None) -> SystemCheckResult:
    return AlmanacSystem(config).run()
