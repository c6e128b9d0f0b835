"""
Error kinds shared by the prime cache and natural numbers.

Every failure is a caller contract violation or a representational limit,
raised synchronously at the offending call.
"""

from numbers import Integral


class InvalidArgumentError(ValueError):
    """Raised for negative values, non-digit strings and wrong argument types."""
    pass


class NumberOverflowError(OverflowError):
    """Raised when a native value is requested for a magnitude beyond int64."""
    pass


def check_natural(value, name: str) -> int:
    """
    Validate that value is a non-negative integer.

    Parameters
    ----------
    value : int
        Candidate value. numpy integer scalars are accepted, bools are not.
    name : str
        Argument name used in the error message.

    Returns
    -------
    int
        The value as a plain Python int.
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidArgumentError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value < 0:
        raise InvalidArgumentError(f"{name} must be >= 0, got {value}")
    return int(value)
