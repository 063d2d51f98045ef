"""MurmurHash3 (x86, 32-bit) in incremental form.

Sets hash their interval bounds word by word:

    >>> h = initialize()
    >>> for word in (1, 5, 10, 20):
    ...     h = update(h, word)
    >>> h = finish(h, 4)

Inputs are reduced to 32 bits, so negative sentinels hash like their
two's-complement encoding.
"""

DEFAULT_SEED = 0

_MASK = 0xFFFFFFFF
_C1 = 0xCC9E2D51
_C2 = 0x1B873593


def _rotl(value: int, count: int) -> int:
    return ((value << count) | (value >> (32 - count))) & _MASK


def initialize(seed: int = DEFAULT_SEED) -> int:
    return seed & _MASK


def update(hash: int, value: int) -> int:
    k = (value & _MASK) * _C1 & _MASK
    k = _rotl(k, 15)
    k = k * _C2 & _MASK

    hash ^= k
    hash = _rotl(hash, 13)
    return (hash * 5 + 0xE6546B64) & _MASK


def finish(hash: int, word_count: int) -> int:
    hash ^= (word_count * 4) & _MASK
    hash ^= hash >> 16
    hash = hash * 0x85EBCA6B & _MASK
    hash ^= hash >> 13
    hash = hash * 0xC2B2AE35 & _MASK
    hash ^= hash >> 16
    return hash
