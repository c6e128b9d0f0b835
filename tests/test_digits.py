"""
Tests for the digit-buffer kernels behind NaturalNumber arithmetic.
"""

import numpy as np

from euler_numerics.digits import (
    accumulate_products,
    multiply_digits,
    normalize_products,
    propagate_carries,
    sum_digits,
    to_decimal_string,
)


def digits_of(n: int) -> np.ndarray:
    return np.array([int(c) for c in reversed(str(n))], dtype=np.int64)


class TestCarries:

    def test_propagate_carries_in_place(self):
        buf = np.array([12, 19, 0], dtype=np.int64)
        propagate_carries(buf)
        assert buf.tolist() == [2, 0, 2]

    def test_sum_has_room_for_final_carry(self):
        out = sum_digits(digits_of(999), digits_of(1))
        assert out.tolist() == [0, 0, 0, 1]

    def test_sum_keeps_unused_high_digit(self):
        assert to_decimal_string(sum_digits(digits_of(12), digits_of(30))) == "042"


class TestProducts:

    def test_accumulate_products_does_not_carry(self):
        out = accumulate_products(digits_of(99), digits_of(99))
        assert out.tolist() == [81, 162, 81, 0]

    def test_normalize_spreads_multi_digit_carries(self):
        buf = np.array([81, 162, 81, 0], dtype=np.int64)
        assert normalize_products(buf).tolist() == [1, 0, 8, 9]

    def test_multiply_digits(self):
        a, b = 31_415_926_535, 27_182_818_284
        out = multiply_digits(digits_of(a), digits_of(b))
        assert int(to_decimal_string(out)) == a * b
        assert len(out) == len(str(a)) + len(str(b))
