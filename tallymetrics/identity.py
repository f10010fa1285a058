"""Commutative hashing of metric identities (tag maps, bucket values)."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterable, Mapping, Union

_MASK64 = (1 << 64) - 1
_HASH_SEED = 23
_HASH_FOLD = 31

_C1 = 0x87C37B91114253D5
_C2 = 0x4CF5AD432745937F


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (64 - shift))) & _MASK64


def _fmix(k: int) -> int:
    k ^= k >> 33
    k = (k * 0xFF51AFD7ED558CCD) & _MASK64
    k ^= k >> 33
    k = (k * 0xC4CEB9FE1A85EC53) & _MASK64
    k ^= k >> 33
    return k


def _mix_k1(k1: int) -> int:
    k1 = (k1 * _C1) & _MASK64
    k1 = _rotl(k1, 31)
    return (k1 * _C2) & _MASK64


def _mix_k2(k2: int) -> int:
    k2 = (k2 * _C2) & _MASK64
    k2 = _rotl(k2, 33)
    return (k2 * _C1) & _MASK64


def murmur3_sum64(data: Union[str, bytes]) -> int:
    """Return the first 64 bits of the x64 128-bit MurmurHash3 of data (seed 0)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    length = len(data)
    h1 = h2 = 0

    block_end = length - length % 16
    for k1, k2 in struct.iter_unpack("<QQ", data[:block_end]):
        h1 ^= _mix_k1(k1)
        h1 = _rotl(h1, 27)
        h1 = (h1 + h2) & _MASK64
        h1 = (h1 * 5 + 0x52DCE729) & _MASK64

        h2 ^= _mix_k2(k2)
        h2 = _rotl(h2, 31)
        h2 = (h2 + h1) & _MASK64
        h2 = (h2 * 5 + 0x38495AB5) & _MASK64

    tail = data[block_end:]
    if len(tail) > 8:
        h2 ^= _mix_k2(int.from_bytes(tail[8:], "little"))
    if tail:
        h1 ^= _mix_k1(int.from_bytes(tail[:8], "little"))

    h1 ^= length
    h2 ^= length
    h1 = (h1 + h2) & _MASK64
    h2 = (h2 + h1) & _MASK64
    h1 = _fmix(h1)
    h2 = _fmix(h2)
    h1 = (h1 + h2) & _MASK64
    return h1


@dataclass(frozen=True)
class Accumulator:
    """A commutative folding accumulator over unsigned 64-bit values."""

    value: int = _HASH_SEED

    def add_string(self, text: str) -> "Accumulator":
        """Hash text and fold it in, returning the new accumulator."""
        return self.add_uint64(murmur3_sum64(text))

    def add_uint64(self, value: int) -> "Accumulator":
        """Fold a 64-bit value in, returning the new accumulator."""
        folded = ((value & _MASK64) * _HASH_FOLD) & _MASK64
        return Accumulator((self.value + folded) & _MASK64)


def _fold(values: Iterable[int]) -> int:
    acc = Accumulator()
    seen = False
    for value in values:
        acc = acc.add_uint64(value)
        seen = True
    return acc.value if seen else 0


def durations(values: Iterable[int]) -> int:
    """Identity of a sequence of durations given in nanoseconds."""
    return _fold(values)


def int64s(values: Iterable[int]) -> int:
    """Identity of a sequence of signed 64-bit integers."""
    return _fold(values)


def float64s(values: Iterable[float]) -> int:
    """Identity of a sequence of floats, hashed by their IEEE-754 bits."""
    return _fold(struct.unpack("<Q", struct.pack("<d", v))[0] for v in values)


def string_string_map(mapping: Mapping[str, str]) -> int:
    """Order-independent identity of a string-to-string mapping."""
    if not mapping:
        return 0
    acc = Accumulator()
    for key, value in mapping.items():
        acc = acc.add_string(f"{key}={value}")
    return acc.value