"""Timing helpers to log duration and throughput of operations."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterator, Optional


@dataclass
class _Timer:
    label: str
    logger: logging.Logger
    level: int
    unit: str
    expected_total: Optional[int]
    start: float = field(default_factory=perf_counter)

    def set_total(self, total: int) -> None:
        self.expected_total = total

    def finish(self, success: bool = True) -> None:
        elapsed = perf_counter() - self.start
        total = self.expected_total

        if success:
            message = f"{self.label} completed in {elapsed:.3f}s"
            if total:
                message += f" ({total:,} {self.unit})"
            self.logger.log(self.level, message)
        else:
            fail_message = f"{self.label} failed after {elapsed:.3f}s"
            if total:
                fail_message += f" ({total:,} {self.unit})"
            self.logger.error(fail_message)


@contextmanager
def timeit(
    label: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    unit: str = "items",
    total: Optional[int] = None,
) -> Iterator[_Timer]:
    """Context manager for timing operations.

    Args:
        label: Description of the operation being timed
        logger: Logger instance to use (defaults to "dairy.timer")
        level: Logging level for the timing message
        unit: Unit reported next to the item count (e.g., "records", "months")
        total: Expected total count, when known up front
    """
    log = logger or logging.getLogger("dairy.timer")
    timer = _Timer(label=label, logger=log, level=level, unit=unit, expected_total=total)
    try:
        yield timer
    except Exception:
        timer.finish(success=False)
        raise
    else:
        timer.finish(success=True)
