"""Histogram bucket definitions and the bound pairs derived from them."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from tallymetrics.duration import SECOND, format_duration

MIN_INT64 = -(2 ** 63)
MAX_INT64 = 2 ** 63 - 1
MAX_FLOAT64 = sys.float_info.max


class ValueBuckets(list):
    """Bucket upper bounds given as floats."""

    def as_values(self) -> List[float]:
        return list(self)

    def as_durations(self) -> List[int]:
        """The values read as seconds, converted to nanoseconds."""
        return [int(value * SECOND) for value in self]

    def __str__(self) -> str:
        return "[" + " ".join(f"{value:f}" for value in self) + "]"


class DurationBuckets(list):
    """Bucket upper bounds given as durations in nanoseconds."""

    def as_values(self) -> List[float]:
        """The durations expressed in seconds."""
        return [value / SECOND for value in self]

    def as_durations(self) -> List[int]:
        return list(self)

    def __str__(self) -> str:
        return "[" + " ".join(format_duration(value) for value in self) + "]"


Buckets = Union[ValueBuckets, DurationBuckets]

# Passing this selects a histogram with a single unbounded bucket.
DEFAULT_BUCKETS: Optional[Buckets] = None


@dataclass(frozen=True)
class BucketPair:
    """Lower and upper bound of one histogram bucket."""

    lower_bound_value: float = 0.0
    upper_bound_value: float = 0.0
    lower_bound_duration: int = 0
    upper_bound_duration: int = 0


SINGLE_BUCKET = BucketPair(
    lower_bound_value=-MAX_FLOAT64,
    upper_bound_value=MAX_FLOAT64,
    lower_bound_duration=MIN_INT64,
    upper_bound_duration=MAX_INT64,
)


def _as_values(buckets: Iterable) -> List[float]:
    if isinstance(buckets, (ValueBuckets, DurationBuckets)):
        return buckets.as_values()
    return [float(value) for value in buckets]


def bucket_pairs(buckets: Optional[Iterable]) -> List[BucketPair]:
    """Sorted (lower, upper) pairs covering the whole range around buckets.

    With n bounds there are n + 1 pairs; the outermost reach to the
    smallest and largest representable value. No bounds give one pair
    spanning everything.
    """
    if buckets is None or len(buckets) < 1:  # type: ignore[arg-type]
        return [SINGLE_BUCKET]

    if isinstance(buckets, DurationBuckets):
        edges = [MIN_INT64, *sorted(buckets), MAX_INT64]
        return [
            BucketPair(lower_bound_duration=low, upper_bound_duration=high)
            for low, high in zip(edges, edges[1:])
        ]

    edges = [-MAX_FLOAT64, *sorted(_as_values(buckets)), MAX_FLOAT64]
    return [
        BucketPair(lower_bound_value=low, upper_bound_value=high)
        for low, high in zip(edges, edges[1:])
    ]


def _same_elements(first: Sequence, second: Sequence) -> bool:
    return len(first) == len(second) and all(a == b for a, b in zip(first, second))


def buckets_equal(first: Optional[Buckets], second: Optional[Buckets]) -> bool:
    """Whether two bucket sets are of the same kind with the same bounds."""
    if isinstance(first, DurationBuckets):
        return isinstance(second, DurationBuckets) and _same_elements(first, second)
    if isinstance(first, ValueBuckets):
        return isinstance(second, ValueBuckets) and _same_elements(first, second)
    return True


def _check_count(n: int) -> None:
    if n <= 0:
        raise ValueError("n needs to be > 0")


def _check_exponential(start: float, factor: float) -> None:
    if start <= 0:
        raise ValueError("start needs to be > 0")
    if factor <= 1:
        raise ValueError("factor needs to be > 1")


def linear_value_buckets(start: float, width: float, n: int) -> ValueBuckets:
    """n value bounds start, start + width, start + 2*width, ..."""
    _check_count(n)
    return ValueBuckets(start + float(i) * width for i in range(n))


def linear_duration_buckets(start: int, width: int, n: int) -> DurationBuckets:
    """n duration bounds start, start + width, start + 2*width, ..."""
    _check_count(n)
    return DurationBuckets(start + i * width for i in range(n))


def exponential_value_buckets(start: float, factor: float, n: int) -> ValueBuckets:
    """n value bounds start, start*factor, start*factor**2, ..."""
    _check_count(n)
    _check_exponential(start, factor)
    result = ValueBuckets()
    current = float(start)
    for _ in range(n):
        result.append(current)
        current *= factor
    return result


def exponential_duration_buckets(start: int, factor: float, n: int) -> DurationBuckets:
    """n duration bounds, each the previous times factor, truncated to ns."""
    _check_count(n)
    _check_exponential(start, factor)
    result = DurationBuckets()
    current = int(start)
    for _ in range(n):
        result.append(current)
        current = int(float(current) * factor)
    return result