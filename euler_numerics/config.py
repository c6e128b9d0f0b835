"""
Tuning parameters for sieving and trial division.

Controls the sieve segment size, the trial division schedule used by
factorization, and the growth step of next-prime searches. None of these
change results, only how much work each call does at once.
"""

import yaml
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Union

from euler_numerics.errors import InvalidArgumentError


@dataclass(frozen=True)
class SieveConfig:
    segment_size: int = 1 << 20
    trial_division_start: int = 1000
    trial_division_growth: int = 10
    next_value_step: int = 1024
    next_value_growth: int = 2

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgumentError(
                    f"{f.name} must be an integer, got {type(value).__name__}"
                )
        if self.segment_size < 16:
            raise InvalidArgumentError(f"segment_size must be >= 16, got {self.segment_size}")
        if self.trial_division_start < 2:
            raise InvalidArgumentError(
                f"trial_division_start must be >= 2, got {self.trial_division_start}"
            )
        if self.next_value_step < 1:
            raise InvalidArgumentError(f"next_value_step must be >= 1, got {self.next_value_step}")
        # Growth factors must diverge or the search loops never finish
        if self.trial_division_growth < 2:
            raise InvalidArgumentError(
                f"trial_division_growth must be >= 2, got {self.trial_division_growth}"
            )
        if self.next_value_growth < 2:
            raise InvalidArgumentError(
                f"next_value_growth must be >= 2, got {self.next_value_growth}"
            )

    @classmethod
    def default(cls) -> "SieveConfig":
        return cls()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "SieveConfig":
        """
        Load a config from a YAML mapping.

        Missing keys keep their defaults; unknown keys are rejected.
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise InvalidArgumentError(f"{path}: expected a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidArgumentError(f"{path}: unknown keys {unknown}")

        return cls(**data)
