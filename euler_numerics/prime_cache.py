"""
Incrementally growable prime cache.

The cache owns an ascending buffer of every prime up to its sieved bound and
only ever sieves numbers above that bound. Queries below the bound are
answered from the buffer; queries above it extend the sieve segment by
segment, using the primes already found as the base set. Sieve memory is
bounded by config.segment_size regardless of how far the cache grows.

The cache is meant to be constructed once and passed to every call that
needs primes. It is not safe for concurrent extension from several threads.
"""

import time
from math import isqrt
from typing import Optional

import numpy as np

from euler_numerics.config import SieveConfig
from euler_numerics.errors import check_natural
from euler_numerics.sieve import primes_in_segment, primes_upto

_INITIAL_CAPACITY = 1024
_INT64_MAX = np.iinfo(np.int64).max


def _readonly(arr: np.ndarray) -> np.ndarray:
    view = arr.view()
    view.flags.writeable = False
    return view


class PrimeCache:
    """
    Primes on demand, amortizing sieve work across calls.

    Parameters
    ----------
    initial_bound : int
        Hint for the first extension, which sieves at least this far.
        Never changes the result of a query.
    config : SieveConfig, optional
        Segment size and growth policies. Defaults to SieveConfig.default().
    verbose : bool
        Print a line for every sieve extension.
    """

    def __init__(self, initial_bound: int = 0, config: Optional[SieveConfig] = None,
                 verbose: bool = False):
        self._initial_bound = check_natural(initial_bound, "initial_bound")
        self.config = config if config is not None else SieveConfig.default()
        self.verbose = verbose

        self._buffer = np.empty(_INITIAL_CAPACITY, dtype=np.int64)
        self._count = 0
        self._sieved_bound = 0

    @property
    def sieved_bound(self) -> int:
        """Largest integer up to which every prime is known."""
        return self._sieved_bound

    def __len__(self) -> int:
        return self._count

    def __contains__(self, n) -> bool:
        n = check_natural(n, "n")
        if n < 2:
            return False
        if n > self._sieved_bound:
            # Trial division by the primes up to sqrt(n) settles it
            base = self.get_values(isqrt(n))
            if n <= _INT64_MAX:
                return not bool(np.any(n % base == 0))
            return all(n % p for p in base.tolist())

        primes = self._known()
        idx = int(np.searchsorted(primes, n))
        return idx < len(primes) and int(primes[idx]) == n

    def __repr__(self) -> str:
        return f"PrimeCache(sieved_bound={self._sieved_bound}, known={self._count})"

    def get_values(self, max_value: int) -> np.ndarray:
        """
        Return all primes <= max_value, ascending.

        Parameters
        ----------
        max_value : int
            Upper bound (inclusive), >= 0.

        Returns
        -------
        np.ndarray
            Read-only int64 array.
        """
        max_value = check_natural(max_value, "max_value")
        self._extend(max_value)

        primes = self._known()
        end = int(np.searchsorted(primes, max_value, side='right'))
        return _readonly(primes[:end])

    def next_value(self, n: int) -> int:
        """
        Return the smallest prime strictly greater than n.

        The sieve grows past max(n, sieved_bound) by config.next_value_step,
        and the step is multiplied by config.next_value_growth until a prime
        above n turns up. Bertrand's postulate puts a prime in (n, 2n], so no
        target goes beyond 2n.
        """
        n = check_natural(n, "n")
        limit = max(2 * n, 2)
        step = self.config.next_value_step

        while True:
            primes = self._known()
            idx = int(np.searchsorted(primes, n, side='right'))
            if idx < len(primes):
                return int(primes[idx])

            self._extend(min(max(n, self._sieved_bound) + step, limit))
            step *= self.config.next_value_growth

    def get_cache(self) -> np.ndarray:
        """Return every prime discovered so far, ascending (read-only)."""
        return _readonly(self._known())

    def _known(self) -> np.ndarray:
        return self._buffer[:self._count]

    def _append(self, primes: np.ndarray):
        needed = self._count + len(primes)
        if needed > len(self._buffer):
            capacity = len(self._buffer)
            while capacity < needed:
                capacity *= 2
            grown = np.empty(capacity, dtype=np.int64)
            grown[:self._count] = self._buffer[:self._count]
            self._buffer = grown

        self._buffer[self._count:needed] = primes
        self._count = needed

    def _extend(self, target: int):
        """Sieve (sieved_bound, target] and append the primes found."""
        if target <= self._sieved_bound:
            return
        if self._sieved_bound == 0:
            target = max(target, self._initial_bound)

        t0 = time.time()
        start = self._sieved_bound + 1
        found_before = self._count
        segment_size = self.config.segment_size
        segments = 0

        # Nothing to sieve with yet: dense sieve over the first chunk
        if self._sieved_bound < 2:
            high = min(target, segment_size)
            self._append(primes_upto(high))
            self._sieved_bound = high
            segments += 1

        # Segments never pass sieved_bound^2, so known primes cover sqrt(high)
        while self._sieved_bound < target:
            low = self._sieved_bound + 1
            high = min(target, self._sieved_bound + segment_size, self._sieved_bound ** 2)

            primes = self._known()
            base = primes[:int(np.searchsorted(primes, isqrt(high), side='right'))]
            self._append(primes_in_segment(low, high, base))
            self._sieved_bound = high
            segments += 1

        if self.verbose:
            print(f"    Sieved [{start:,}, {target:,}] in {segments} segment(s): "
                  f"{self._count - found_before:,} new primes ({time.time() - t0:.2f}s)")
