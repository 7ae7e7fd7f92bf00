"""
Benchmark timer that appends its results to a log file.

Example::

    bench = Benchmark("Build map")
    bench.start()
    generator.build()
    bench.stop()
"""

import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import structlog

from ..config import settings

logger = structlog.get_logger()

# Nanoseconds per unit
UNITS = {
    "nanoseconds": 1,
    "microseconds": 1_000,
    "milliseconds": 1_000_000,
    "seconds": 1_000_000_000,
    "minutes": 60_000_000_000,
    "hours": 3_600_000_000_000,
}

# Held only while appending, so concurrent benchmarks don't interleave lines
_log_lock = threading.Lock()


class Benchmark:
    """Time a block of code and record the result in the benchmark log."""

    def __init__(
        self,
        label: str,
        unit: str = "microseconds",
        log_path: Optional[Union[str, Path]] = None,
    ):
        if unit not in UNITS:
            raise ValueError(f"Unknown time unit {unit!r}, expected one of {sorted(UNITS)}")
        self.label = label
        self.unit = unit
        self.log_path = Path(log_path or settings.benchmark_log_path)
        self._started_at: Optional[datetime] = None
        self._start_ns: Optional[int] = None

    def __enter__(self) -> "Benchmark":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def start(self) -> None:
        """Start the benchmark clock."""
        self._started_at = datetime.now()
        self._start_ns = time.perf_counter_ns()

    def stop(self) -> int:
        """
        Stop the clock and append the result to the log file.

        Returns:
            Elapsed time, truncated to whole units
        """
        if self._start_ns is None:
            raise RuntimeError(f"Benchmark '{self.label}' was stopped before it was started")

        elapsed_ns = time.perf_counter_ns() - self._start_ns
        completed_at = datetime.now()
        elapsed = elapsed_ns // UNITS[self.unit]

        lines = [
            f"Benchmark:  {self.label}",
            f"Started at:  {self._started_at.isoformat()}",
            f"Completed at:  {completed_at.isoformat()}",
        ]
        if elapsed_ns == 0:
            lines.append("Internal clock did not tick during benchmark")
        else:
            lines.append(f"Total time:  {elapsed} {self.unit}")

        with _log_lock:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with self.log_path.open("a", encoding="utf-8") as log_file:
                log_file.write("\n".join(lines) + "\n\n")

        logger.info("Benchmark complete", label=self.label, elapsed=elapsed, unit=self.unit)
        self._start_ns = None
        return elapsed
