from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ArithmeticOverflowError

INT_BITS_CHOICES = (8, 16, 32, 64)
OVERFLOW_CHOICES = ("fail", "wrap")
BUILDER_CHOICES = ("recursive", "stack")

ENV_INT_BITS = "INTEXPR_INT_BITS"
ENV_OVERFLOW = "INTEXPR_OVERFLOW"
ENV_BUILDER = "INTEXPR_BUILDER"


@dataclass(frozen=True)
class EvalConfig:
    """
    Integer range and policies shared by the builders and the evaluator.

    `int_bits` bounds both literals (checked while building) and sums (checked
    while evaluating). The default 32-bit range matches a native `int`.
    """

    int_bits: int = 32
    overflow: str = "fail"
    builder: str = "recursive"

    def __post_init__(self) -> None:
        if self.int_bits not in INT_BITS_CHOICES:
            raise ValueError(f"int_bits must be one of {INT_BITS_CHOICES}, got {self.int_bits!r}")
        if self.overflow not in OVERFLOW_CHOICES:
            raise ValueError(f"overflow must be one of {OVERFLOW_CHOICES}, got {self.overflow!r}")
        if self.builder not in BUILDER_CHOICES:
            raise ValueError(f"builder must be one of {BUILDER_CHOICES}, got {self.builder!r}")

    @property
    def min_int(self) -> int:
        return -(1 << (self.int_bits - 1))

    @property
    def max_int(self) -> int:
        return (1 << (self.int_bits - 1)) - 1

    def fits(self, n: int) -> bool:
        return self.min_int <= n <= self.max_int

    def wrap(self, n: int) -> int:
        """Reduce `n` into the signed range using two's complement."""
        span = 1 << self.int_bits
        n &= span - 1
        if n > self.max_int:
            n -= span
        return n

    def add(self, left: int, right: int) -> int:
        total = left + right
        if self.fits(total):
            return total
        if self.overflow == "wrap":
            return self.wrap(total)
        raise ArithmeticOverflowError(left, right, self.int_bits)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EvalConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        raw_bits = env.get(ENV_INT_BITS)
        try:
            int_bits = int(raw_bits) if raw_bits else defaults.int_bits
        except ValueError:
            raise ValueError(f"{ENV_INT_BITS} must be an integer, got {raw_bits!r}") from None
        return cls(
            int_bits=int_bits,
            overflow=env.get(ENV_OVERFLOW) or defaults.overflow,
            builder=env.get(ENV_BUILDER) or defaults.builder,
        )


DEFAULT_CONFIG = EvalConfig()


__all__ = [
    "EvalConfig",
    "DEFAULT_CONFIG",
    "INT_BITS_CHOICES",
    "OVERFLOW_CHOICES",
    "BUILDER_CHOICES",
]
