"""
Sieve of Eratosthenes primitives.

Responsibility: marking composites over a dense range or a single segment.
No caching, no growth policy; that lives in prime_cache.

Composite marks are bit-packed: one bit per candidate, bit j of the mark
buffer standing for low + j.
"""

from math import isqrt

import numpy as np
from numba import njit


def new_segment_marks(size: int) -> np.ndarray:
    """Return a zeroed mark buffer with one bit per candidate."""
    return np.zeros((size + 7) // 8, dtype=np.uint8)


@njit
def _mark_composites(marks: np.ndarray, low: int, high: int, base_primes: np.ndarray):
    """Set the bit of every multiple of a base prime in [low, high], from p^2 up."""
    for k in range(len(base_primes)):
        p = base_primes[k]
        if p * p > high:
            break

        first = ((low + p - 1) // p) * p
        if first < p * p:
            first = p * p

        for n in range(first, high + 1, p):
            j = n - low
            marks[j >> 3] |= np.uint8(1 << (j & 7))


@njit
def _collect_unmarked(marks: np.ndarray, low: int, size: int) -> np.ndarray:
    count = 0
    for j in range(size):
        if (marks[j >> 3] >> (j & 7)) & 1 == 0:
            count += 1

    out = np.empty(count, dtype=np.int64)
    i = 0
    for j in range(size):
        if (marks[j >> 3] >> (j & 7)) & 1 == 0:
            out[i] = low + j
            i += 1
    return out


def primes_in_segment(low: int, high: int, base_primes: np.ndarray) -> np.ndarray:
    """
    Return array of primes in [low, high] using previously found primes.

    Parameters
    ----------
    low : int
        Segment start (inclusive).
    high : int
        Segment end (inclusive).
    base_primes : np.ndarray
        Ascending primes covering every p with p*p <= high.

    Returns
    -------
    np.ndarray
        Ascending int64 array of primes in the segment.
    """
    if high < low:
        return np.empty(0, dtype=np.int64)

    size = high - low + 1
    marks = new_segment_marks(size)

    # 0 and 1 are not prime
    for n in range(low, min(2, high + 1)):
        j = n - low
        marks[j >> 3] |= np.uint8(1 << (j & 7))

    _mark_composites(marks, low, high, np.ascontiguousarray(base_primes, dtype=np.int64))
    return _collect_unmarked(marks, low, size)


def primes_upto(N: int) -> np.ndarray:
    """
    Return array of all primes <= N.

    The base primes up to sqrt(N) are found recursively, then [0, N] is
    sieved as one segment. Only meant for the first chunk of a cache, so
    callers cap N.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Ascending int64 array of primes.
    """
    if N < 2:
        return np.empty(0, dtype=np.int64)
    return primes_in_segment(0, N, primes_upto(isqrt(N)))
