"""Timing and resource metering for CLI operations."""

from __future__ import annotations

import logging
import time
import tracemalloc
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator

from paths_le.config import PerformanceConfig
from paths_le.errors import ErrorCategory, ErrorSeverity, PathsLeError, create_error

logger = logging.getLogger(__name__)

# Throughput is only judged for runs at least this long.
THROUGHPUT_WINDOW_MS = 1000.0


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    """Measurements for one operation.

    ``memory_usage`` is the peak traced allocation in bytes, ``cpu_usage`` is
    process CPU time in microseconds, and ``throughput`` is items per second.
    """

    name: str
    duration_ms: float
    memory_usage: int = 0
    cpu_usage: int = 0
    items: int = 0

    @property
    def throughput(self) -> float:
        if self.items <= 0 or self.duration_ms <= 0:
            return 0.0
        return self.items / self.duration_ms * 1000


@dataclass(frozen=True, slots=True)
class PerformanceCheck:
    passed: bool
    warnings: tuple[PathsLeError, ...] = ()
    errors: tuple[PathsLeError, ...] = ()


@dataclass(slots=True)
class OperationMeter:
    """Handle yielded by :meth:`PerformanceMonitor.track`; callers record item counts on it."""

    name: str
    items: int = 0
    metrics: PerformanceMetrics | None = None
    check: PerformanceCheck | None = None


def _threshold_warning(kind: str, message: str, value: float, threshold: float) -> PathsLeError:
    return create_error(
        ErrorCategory.PERFORMANCE,
        message,
        severity=ErrorSeverity.WARNING,
        recoverable=True,
        metadata={"kind": kind, "value": value, "threshold": threshold},
    )


def check_thresholds(metrics: PerformanceMetrics, config: PerformanceConfig) -> PerformanceCheck:
    """Compare ``metrics`` against the configured limits.

    Every exceeded limit adds a warning. A run longer than twice the duration
    limit also adds a non-recoverable error.
    """

    if not config.enabled:
        return PerformanceCheck(passed=True)

    warnings: list[PathsLeError] = []
    errors: list[PathsLeError] = []

    if metrics.duration_ms > config.max_duration_ms:
        warnings.append(
            _threshold_warning(
                "duration",
                f"Duration {format_duration(metrics.duration_ms)} exceeds threshold "
                f"{format_duration(config.max_duration_ms)}",
                metrics.duration_ms,
                config.max_duration_ms,
            )
        )
    if metrics.memory_usage > config.max_memory_usage:
        warnings.append(
            _threshold_warning(
                "memory",
                f"Memory usage {format_bytes(metrics.memory_usage)} exceeds threshold "
                f"{format_bytes(config.max_memory_usage)}",
                metrics.memory_usage,
                config.max_memory_usage,
            )
        )
    if metrics.cpu_usage > config.max_cpu_usage:
        warnings.append(
            _threshold_warning(
                "cpu",
                f"CPU usage {format_duration(metrics.cpu_usage / 1000)} exceeds threshold "
                f"{format_duration(config.max_cpu_usage / 1000)}",
                metrics.cpu_usage,
                config.max_cpu_usage,
            )
        )
    if (
        metrics.items > 0
        and metrics.duration_ms >= THROUGHPUT_WINDOW_MS
        and metrics.throughput < config.min_throughput
    ):
        warnings.append(
            _threshold_warning(
                "throughput",
                f"Throughput {format_throughput(metrics.throughput)} below threshold "
                f"{format_throughput(config.min_throughput)}",
                metrics.throughput,
                config.min_throughput,
            )
        )

    if metrics.duration_ms > config.max_duration_ms * 2:
        errors.append(
            create_error(
                ErrorCategory.PERFORMANCE,
                f"Severe performance degradation: {format_duration(metrics.duration_ms)}",
                context="Consider optimizing the operation or increasing performance thresholds",
                metadata={"operation": metrics.name, "duration": metrics.duration_ms},
            )
        )

    return PerformanceCheck(passed=not errors, warnings=tuple(warnings), errors=tuple(errors))


@dataclass
class PerformanceMonitor:
    """Meters operations and logs threshold breaches.

    Clocks are injectable for tests; ``trace_memory`` turns on
    :mod:`tracemalloc` for the duration of each tracked operation.
    """

    config: PerformanceConfig = field(default_factory=PerformanceConfig)
    trace_memory: bool = True
    clock: Callable[[], float] = time.perf_counter
    cpu_clock: Callable[[], float] = time.process_time
    history: list[PerformanceMetrics] = field(default_factory=list, init=False)

    @contextmanager
    def track(self, name: str) -> Iterator[OperationMeter]:
        meter = OperationMeter(name=name)
        if not self.config.enabled:
            yield meter
            return

        started_tracing = self.trace_memory and not tracemalloc.is_tracing()
        if started_tracing:
            tracemalloc.start()
        baseline = tracemalloc.get_traced_memory()[0] if self.trace_memory else 0
        if self.trace_memory:
            tracemalloc.reset_peak()
        wall_start = self.clock()
        cpu_start = self.cpu_clock()
        try:
            yield meter
        finally:
            duration_ms = (self.clock() - wall_start) * 1000
            cpu_usage = int((self.cpu_clock() - cpu_start) * 1_000_000)
            memory_usage = 0
            if self.trace_memory:
                memory_usage = max(0, tracemalloc.get_traced_memory()[1] - baseline)
            if started_tracing:
                tracemalloc.stop()

        meter.metrics = PerformanceMetrics(
            name=name,
            duration_ms=duration_ms,
            memory_usage=memory_usage,
            cpu_usage=cpu_usage,
            items=meter.items,
        )
        meter.check = check_thresholds(meter.metrics, self.config)
        self.history.append(meter.metrics)
        logger.debug(
            "%s finished in %s (%s, %s)",
            name,
            format_duration(duration_ms),
            format_bytes(memory_usage),
            format_throughput(meter.metrics.throughput),
        )
        for issue in meter.check.warnings + meter.check.errors:
            logger.warning("%s: %s", name, issue.message)

    def report(self) -> str:
        if not self.history:
            return "No performance data recorded."
        lines = ["Performance report:"]
        for metrics in self.history:
            lines.append(
                f"  {metrics.name}: {format_duration(metrics.duration_ms)}, "
                f"{format_bytes(metrics.memory_usage)}, "
                f"{format_throughput(metrics.throughput)}"
            )
        return "\n".join(lines)


_BYTE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_bytes(size: float) -> str:
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    index = 0
    while value >= 1024 and index < len(_BYTE_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {_BYTE_UNITS[index]}"


def format_duration(milliseconds: float) -> str:
    if milliseconds < 1000:
        return f"{milliseconds:.0f}ms"
    if milliseconds < 60_000:
        return f"{milliseconds / 1000:.2f}s"
    if milliseconds < 3_600_000:
        return f"{milliseconds / 60_000:.2f}m"
    return f"{milliseconds / 3_600_000:.2f}h"


def format_throughput(per_second: float) -> str:
    if per_second < 1000:
        return f"{per_second:.0f} items/s"
    if per_second < 1_000_000:
        return f"{per_second / 1000:.1f}K items/s"
    return f"{per_second / 1_000_000:.1f}M items/s"


__all__ = [
    "OperationMeter",
    "PerformanceCheck",
    "PerformanceMetrics",
    "PerformanceMonitor",
    "THROUGHPUT_WINDOW_MS",
    "check_thresholds",
    "format_bytes",
    "format_duration",
    "format_throughput",
]
