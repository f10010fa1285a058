# tallymetrics

Building blocks for reporting application metrics: histogram bucket layouts,
order-independent identity hashes for tag sets, small thread-safe caches,
in-memory transports for sizing serialized metrics, and the option and tag
handling of an M3 reporter. The package has no dependencies outside the
standard library.

## Installation

```
pip install tallymetrics
```

## Histogram buckets

`tallymetrics.histogram` holds `ValueBuckets` (float bounds) and
`DurationBuckets` (bounds in integer nanoseconds), both list subclasses with
`as_values()`, `as_durations()` and a readable `str()`.

```python
from tallymetrics.histogram import (
    ValueBuckets,
    bucket_pairs,
    linear_value_buckets,
    exponential_duration_buckets,
)

print(linear_value_buckets(1, 1, 3))                 # [1.000000 2.000000 3.000000]
print(exponential_duration_buckets(2_000_000_000, 2, 3))  # [2s 4s 8s]

for pair in bucket_pairs(ValueBuckets([1.0, 3.0, 2.0])):
    print(pair.lower_bound_value, pair.upper_bound_value)
```

`bucket_pairs` sorts the bounds and returns one more `BucketPair` than there
are bounds; the outermost pairs reach to the largest float (or the 64-bit
integer limits for durations). With no bounds it returns a single pair
covering everything. `buckets_equal` compares two bucket sets of the same kind.

`linear_value_buckets`, `linear_duration_buckets`,
`exponential_value_buckets` and `exponential_duration_buckets` raise
`ValueError` for a count of zero or less, and the exponential ones also for a
start of zero or less or a factor of one or less.

`tallymetrics.duration.format_duration` renders nanoseconds as `0s`, `250ns`,
`1.5µs`, `25ms`, `1h2m3.5s` and so on; the module also defines the constants
`NANOSECOND` through `HOUR`.

## Tag identity and caches

```python
from tallymetrics.cache import MetricTag, StringInterner, TagCache, tag_map_key

key = tag_map_key({"env": "test", "host": "web"})
cache = TagCache()
tags = cache.set(key, [MetricTag("env", "test"), MetricTag("host", "web")])
assert cache.get(key) is tags
assert len(cache) == 1
```

`TagCache.set` keeps the first value stored under a key and returns it;
`get` returns `None` for an unknown key. `StringInterner.intern` returns one
shared instance per distinct string.

`tallymetrics.identity` provides `murmur3_sum64` (the first 64 bits of the
x64 128-bit MurmurHash3, seed 0), the immutable `Accumulator` with
`add_string` and `add_uint64`, and the helpers `durations`, `int64s`,
`float64s` and `string_string_map`. The accumulated value does not depend on
the order of the inputs, and an empty input gives 0.

## Transports

`tallymetrics.transports.CalcTransport` counts the bytes written to it
(`write`, `write_byte`, `write_string`) in its `count` attribute without
storing them; `reset_count()` sets it back to zero. `BufferedReadTransport`
reads from an in-memory buffer, raising `EOFError` once it is drained, and
`write` replaces the buffer. Both work as context managers.

## M3 histogram tags

`tallymetrics.m3buckets.histogram_bucket_tags` returns a `HistogramBucketTag`
for every bucket, lowest first, with a zero-padded `bucket_id` (`0000`,
`0001`, ...) and a `bucket` name such as `0-25ms` or `1.000000-2.000000`;
the outermost bounds are written `-infinity` and `infinity`. The helpers
`ndigits`, `bucket_id`, `value_bucket_string`, `duration_bucket_string` and
`batch_size_bucket` are available on their own.

## M3 reporter options

`tallymetrics.m3options` holds:

- `Options` with `with_defaults()`, which checks that at least one
  `host:port` is given and well formed (raising `ValueError` otherwise) and
  fills in a queue size of 4096, a packet size of 32768 bytes, the tag names
  `bucketid` and `bucket`, and a tag precision of 6;
- `Protocol`, either `COMPACT` or `BINARY`;
- `build_common_tags(options, hostname=None)`, which returns the common tags
  plus `service` and `env` (raising `ValueError` when neither the options nor
  the common tags give one) and, with `include_host`, a `host` tag taken from
  `hostname` or the local machine's name;
- `Configuration`, whose `to_options()` turns `host_port` or `host_ports`,
  `queue`, `packet_size` and the rest into `Options`.

## What this package does not do

There is no reporter here: nothing collects counters, gauges, timers or
histograms in scopes, encodes metric batches, or sends them over the network.
`CalcTransport` only counts bytes, and the option helpers only prepare
settings and tags.

## Running the tests

```
pip install -e ".[test]"
pytest
```