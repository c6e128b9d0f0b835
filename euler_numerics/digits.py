"""
Schoolbook arithmetic on base-10 digit buffers.

Buffers are int64 arrays, least-significant digit first. Positions may hold
values above 9 until carries are propagated.
"""

import numpy as np
from numba import njit


@njit
def propagate_carries(buf: np.ndarray) -> np.ndarray:
    """Carry each position's excess one place up, in place. Returns buf."""
    for i in range(len(buf) - 1):
        carry = buf[i] // 10
        buf[i] = buf[i] % 10
        buf[i + 1] += carry
    return buf


@njit
def accumulate_products(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Position i+j accumulates a[i] * b[j]. No carrying."""
    out = np.zeros(len(a) + len(b), dtype=np.int64)
    for i in range(len(a)):
        for j in range(len(b)):
            out[i + j] += a[i] * b[j]
    return out


@njit
def normalize_products(buf: np.ndarray) -> np.ndarray:
    """
    Reduce every position to a single digit, in place. Returns buf.

    A position may hold many times 10 after accumulate_products, so its
    carry is spread digit by digit over the following positions. The buffer
    must be long enough for the represented value (len(a) + len(b) is).
    """
    for i in range(len(buf)):
        carry = buf[i] // 10
        k = i + 1
        while carry != 0:
            buf[k] += carry % 10
            carry //= 10
            k += 1
        buf[i] = buf[i] % 10
    return buf


def sum_digits(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Digit-wise sum with room for one extra carry digit."""
    out = np.zeros(max(len(a), len(b)) + 1, dtype=np.int64)
    out[:len(a)] += a
    out[:len(b)] += b
    return propagate_carries(out)


def multiply_digits(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return normalize_products(accumulate_products(a, b))


def to_decimal_string(buf: np.ndarray) -> str:
    """Most-significant first; high-order zeros are kept."""
    return ''.join(str(d) for d in buf[::-1].tolist())
