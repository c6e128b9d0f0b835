"""
Tests for the dense and segmented sieve primitives.
"""

import numpy as np
import pytest

from euler_numerics.sieve import new_segment_marks, primes_in_segment, primes_upto

SMALL_PRIMES = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47]
SMALL_COMPOSITES = [4, 6, 8, 9, 10, 12, 14, 15, 16, 18, 20, 21, 22, 24, 25]


class TestPrimesUpto:

    def test_known_primes(self):
        primes = primes_upto(50).tolist()
        assert primes == SMALL_PRIMES
        for n in SMALL_COMPOSITES:
            assert n not in primes, f"{n} should not be prime"

    @pytest.mark.parametrize("N", [0, 1])
    def test_below_two_is_empty(self, N):
        assert len(primes_upto(N)) == 0

    def test_dtype(self):
        assert primes_upto(10).dtype == np.int64


class TestPrimesInSegment:

    @pytest.mark.parametrize("low, high", [
        (0, 50),
        (2, 2),
        (4, 4),
        (24, 47),
        (48, 100),
        (100, 121),
        (1_000, 2_000),
    ])
    def test_matches_dense_sieve(self, low, high):
        base = primes_upto(int(high**0.5) + 1)
        dense = primes_upto(high)
        expected = dense[dense >= low]

        got = primes_in_segment(low, high, base)
        assert np.array_equal(got, expected), f"Segment [{low}, {high}] mismatch"

    def test_squares_of_base_primes_are_marked(self):
        """p^2 is the first multiple that needs marking."""
        got = primes_in_segment(120, 170, primes_upto(13)).tolist()
        assert 121 not in got
        assert 169 not in got
        assert got == [127, 131, 137, 139, 149, 151, 157, 163, 167]

    def test_empty_range(self):
        assert len(primes_in_segment(10, 9, primes_upto(3))) == 0


class TestSegmentMarks:

    def test_one_bit_per_candidate(self):
        assert new_segment_marks(1_000_000).nbytes == 125_000
        assert new_segment_marks(9).nbytes == 2

    def test_partial_final_byte(self):
        """Candidates in the last, partially used byte are still sieved."""
        got = primes_in_segment(90, 102, primes_upto(10)).tolist()
        assert got == [97, 101]
