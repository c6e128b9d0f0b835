"""
Arbitrary-precision natural numbers stored as values and digit sequences.

A NaturalNumber keeps a native value when the magnitude fits a signed 64-bit
integer, and a base-10 digit sequence (least-significant first) otherwise.
Digits of native values are derived lazily and memoized. Addition and
multiplication work digit by digit, so results may exceed the native range;
such results only support base-10 digits and rendering.
"""

import re
from typing import List, Optional, Set

import numpy as np

from euler_numerics.digits import multiply_digits, sum_digits, to_decimal_string
from euler_numerics.errors import InvalidArgumentError, NumberOverflowError, check_natural
from euler_numerics.prime_cache import PrimeCache

INT64_MAX = 2**63 - 1

_DECIMAL = re.compile(r"[0-9]+")


class NaturalNumber:
    """
    An immutable non-negative integer.

    Parameters
    ----------
    value : int or str
        A non-negative integer, or a string of decimal digits. Leading zeros
        in strings are ignored.
    """

    def __init__(self, value):
        self._value: Optional[int] = None
        self._digits: Optional[tuple] = None

        if isinstance(value, str):
            if not _DECIMAL.fullmatch(value):
                raise InvalidArgumentError(f"value must only contain decimal digits, got {value!r}")

            stripped = value.lstrip('0') or '0'
            self._digits = tuple(int(c) for c in reversed(stripped))
            # int64 has at most 19 decimal digits
            if len(stripped) <= 19 and int(stripped) <= INT64_MAX:
                self._value = int(stripped)
        else:
            value = check_natural(value, "value")
            if value <= INT64_MAX:
                self._value = value
            else:
                self._digits = tuple(int(c) for c in reversed(str(value)))

    @property
    def value(self) -> int:
        """The native value; NumberOverflowError beyond the int64 range."""
        if self._value is None:
            raise NumberOverflowError("Value is too large to be represented as an int64.")
        return self._value

    @property
    def fits_native(self) -> bool:
        return self._value is not None

    def get_digits(self, base: int = 10) -> List[int]:
        """
        Return the digits in the given base, least-significant first.

        Base 10 works for any magnitude and is memoized. Other bases need
        the native value.
        """
        base = check_natural(base, "base")
        if base < 2:
            raise InvalidArgumentError(f"base must be >= 2, got {base}")

        if base == 10 and self._digits is not None:
            return list(self._digits)

        remaining = self.value
        digits = []
        while True:
            remaining, digit = divmod(remaining, base)
            digits.append(digit)
            if remaining == 0:
                break

        if base == 10:
            self._digits = tuple(digits)
        return digits

    def add(self, other: "NaturalNumber") -> "NaturalNumber":
        """Schoolbook addition."""
        _check_operand(other)
        summed = sum_digits(self._digit_array(), other._digit_array())
        return NaturalNumber(to_decimal_string(summed))

    def multiply(self, other: "NaturalNumber") -> "NaturalNumber":
        """Schoolbook multiplication."""
        _check_operand(other)
        product = multiply_digits(self._digit_array(), other._digit_array())
        return NaturalNumber(to_decimal_string(product))

    def get_prime_factors(self, prime_cache: PrimeCache) -> List[int]:
        """
        Return the prime factors with multiplicity, ascending.

        Trial division only asks the cache for primes up to a bound that
        starts at config.trial_division_start and grows by
        config.trial_division_growth, so the sieve never runs much past the
        largest prime factor.

        Parameters
        ----------
        prime_cache : PrimeCache
            Shared cache; it is extended as needed.

        Returns
        -------
        list
            Empty for 0 and 1.
        """
        value = self.value
        if value == 0:
            return []

        config = prime_cache.config
        factors = []
        remaining = value
        trial_max = min(value, config.trial_division_start)
        tried = 0

        while remaining != 1:
            primes = prime_cache.get_values(trial_max)
            candidates = primes[tried:]
            tried = len(primes)

            for p in candidates[remaining % candidates == 0].tolist():
                while remaining % p == 0:
                    factors.append(p)
                    remaining //= p

            # Every prime <= trial_max is divided out, so remaining > trial_max
            trial_max = min(trial_max * config.trial_division_growth, remaining)

        return factors

    def get_factors(self, prime_cache: PrimeCache) -> Set[int]:
        """
        Return the set of divisors, including 1.

        Every subset of the prime factor multiset is multiplied out, so the
        cost is 2**k for k prime factors counted with multiplicity.
        """
        if self.value == 0:
            return set()

        prime_factors = self.get_prime_factors(prime_cache)
        factors = set()
        for mask in range(2 ** len(prime_factors)):
            factor = 1
            for bit, p in zip(NaturalNumber(mask).get_digits(2), prime_factors):
                if bit:
                    factor *= p
            factors.add(factor)
        return factors

    def _digit_array(self) -> np.ndarray:
        return np.array(self.get_digits(), dtype=np.int64)

    def __add__(self, other):
        if not isinstance(other, NaturalNumber):
            return NotImplemented
        return self.add(other)

    def __mul__(self, other):
        if not isinstance(other, NaturalNumber):
            return NotImplemented
        return self.multiply(other)

    def __eq__(self, other):
        if not isinstance(other, NaturalNumber):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self):
        return hash(str(self))

    def __int__(self):
        if self._value is not None:
            return self._value
        return int(str(self))

    def __str__(self):
        if self._digits is None:
            return str(self._value)
        return ''.join(str(d) for d in reversed(self._digits))

    def __repr__(self):
        return f"NaturalNumber('{self}')"


def _check_operand(other):
    if not isinstance(other, NaturalNumber):
        raise InvalidArgumentError(
            f"operand must be a NaturalNumber, got {type(other).__name__}"
        )
