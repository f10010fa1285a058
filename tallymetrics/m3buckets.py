"""Histogram bucket tagging and batch-size bucketing for the M3 reporter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from tallymetrics.duration import format_duration
from tallymetrics.histogram import (
    MAX_FLOAT64,
    MAX_INT64,
    MIN_INT64,
    BucketPair,
    DurationBuckets,
    bucket_pairs,
)

DEFAULT_HISTOGRAM_BUCKET_TAG_PRECISION = 6
MIN_BUCKET_ID_LENGTH = 4


@dataclass(frozen=True)
class HistogramBucketTag:
    """The tag values and upper bounds identifying one histogram bucket."""

    bucket_id: str
    bucket: str
    value_upper_bound: float
    duration_upper_bound: int


def ndigits(number: int) -> int:
    """Number of decimal digits in number, ignoring its sign."""
    return len(str(abs(int(number))))


def bucket_id(index: int, count: int) -> str:
    """Zero-padded bucket index, at least four digits wide."""
    width = max(ndigits(count), MIN_BUCKET_ID_LENGTH)
    return f"{index:0{width}d}"


def value_bucket_string(
    value: float, precision: int = DEFAULT_HISTOGRAM_BUCKET_TAG_PRECISION
) -> str:
    """Render a value bound, using "infinity" for the outermost bounds."""
    if value == MAX_FLOAT64:
        return "infinity"
    if value == -MAX_FLOAT64:
        return "-infinity"
    return f"{value:.{precision}f}"


def duration_bucket_string(nanoseconds: int) -> str:
    """Render a duration bound, using "infinity" for the outermost bounds."""
    if nanoseconds == 0:
        return "0"
    if nanoseconds == MAX_INT64:
        return "infinity"
    if nanoseconds == MIN_INT64:
        return "-infinity"
    return format_duration(nanoseconds)


def histogram_bucket_tags(
    buckets: Optional[Iterable],
    precision: int = DEFAULT_HISTOGRAM_BUCKET_TAG_PRECISION,
) -> List[HistogramBucketTag]:
    """Tags for every bucket derived from buckets, lowest first.

    Each bucket is named "<lower>-<upper>"; duration buckets use duration
    strings and value buckets use fixed-point values of the given precision.
    """
    is_duration = isinstance(buckets, DurationBuckets)
    count = len(buckets) if buckets else 0  # type: ignore[arg-type]

    tags: List[HistogramBucketTag] = []
    prev_duration = MIN_INT64
    prev_value = -MAX_FLOAT64
    for index, pair in enumerate(bucket_pairs(buckets)):
        if is_duration:
            name = (
                duration_bucket_string(prev_duration)
                + "-"
                + duration_bucket_string(pair.upper_bound_duration)
            )
        else:
            name = (
                value_bucket_string(prev_value, precision)
                + "-"
                + value_bucket_string(pair.upper_bound_value, precision)
            )
        tags.append(
            HistogramBucketTag(
                bucket_id=bucket_id(index, count),
                bucket=name,
                value_upper_bound=pair.upper_bound_value,
                duration_upper_bound=pair.upper_bound_duration,
            )
        )
        prev_duration = pair.upper_bound_duration
        prev_value = pair.upper_bound_value
    return tags


def batch_size_bucket(pairs: Sequence[BucketPair], batch_size: float) -> float:
    """Upper bound of the first pair holding batch_size, else the largest float."""
    return next(
        (pair.upper_bound_value for pair in pairs if pair.upper_bound_value >= batch_size),
        MAX_FLOAT64,
    )