"""Interval billing arithmetic.

A job of ``duration`` hours is billed in consecutive intervals of
``invoice_interval`` hours, numbered from 1. When the duration is not a
multiple of the interval, the last interval is partial and bills only the
remaining hours.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class IntervalCharge:
    """Value object describing what a single interval bills."""

    interval_number: int
    hours: int
    value: float


def max_intervals(duration: int, invoice_interval: int) -> int:
    """Return the number of billable intervals of a job.

    Example:
        ```py
        >>> max_intervals(35, 10)
        4
        ```
    """
    if duration <= 0 or invoice_interval <= 0:
        raise InvalidArgumentError("duration and invoice_interval must be positive")
    full, remainder = divmod(duration, invoice_interval)
    return full + (1 if remainder else 0)


def hours_for_interval(
    duration: int, invoice_interval: int, interval_number: int
) -> int:
    """Return the number of hours billed by ``interval_number``.

    Raises:
        InvalidArgumentError: If ``interval_number`` is outside ``1..max_intervals``.
    """
    last = max_intervals(duration, invoice_interval)
    if not 1 <= interval_number <= last:
        raise InvalidArgumentError(
            f"interval_number must be between 1 and {last}, got {interval_number}"
        )
    remainder = duration % invoice_interval
    if interval_number == last and remainder:
        return remainder
    return invoice_interval


def charge_for_interval(
    rate: float,
    duration: int,
    invoice_interval: int,
    interval_number: int,
    adjustment: float | None = None,
) -> IntervalCharge:
    """Compute the charge of one interval.

    ``value = max(0, rate * hours + adjustment)``; the value is never negative.

    Raises:
        InvalidArgumentError: If ``adjustment`` is NaN or infinite.
    """
    if adjustment is not None and not math.isfinite(adjustment):
        raise InvalidArgumentError(f"adjustment must be finite, got {adjustment!r}")
    hours = hours_for_interval(duration, invoice_interval, interval_number)
    value = rate * hours + (adjustment or 0.0)
    return IntervalCharge(
        interval_number=interval_number, hours=hours, value=max(0.0, value)
    )
