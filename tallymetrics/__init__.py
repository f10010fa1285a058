"""Metrics building blocks: histogram buckets, tag identity hashing, caches, transports and M3 reporter options."""

__version__ = "0.1.0"

__all__ = [
    "cache",
    "duration",
    "histogram",
    "identity",
    "m3buckets",
    "m3options",
    "transports",
]