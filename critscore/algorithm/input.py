"""Weighted inputs to a scoring algorithm, with optional bounds."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from critscore.algorithm.distribution import (
    DEFAULT_DISTRIBUTION_NAME,
    Distribution,
    lookup_distribution,
)
from critscore.algorithm.value import Value


def _divide(num: float, den: float) -> float:
    """Floating point division that yields NaN or infinity for a zero divisor."""
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


def _default_distribution() -> Distribution:
    dist = lookup_distribution(DEFAULT_DISTRIBUTION_NAME)
    assert dist is not None
    return dist


@dataclass(frozen=True)
class Bounds:
    """Clamp a value into [lower, upper] and shift it to start at zero."""

    lower: float = 0.0
    upper: float = 0.0
    smaller_is_better: bool = False

    def apply(self, v: float) -> float:
        """Clamp ``v``, move the lower bound to 0 and invert if asked to."""
        if v < self.lower:
            v = self.lower
        elif v > self.upper:
            v = self.upper
        v -= self.lower
        if self.smaller_is_better:
            v = self.threshold() - v
        return v

    def threshold(self) -> float:
        """The width of the bounds."""
        return self.upper - self.lower


@dataclass
class Input:
    """A value source with its weight, bounds and distribution."""

    source: Value
    bounds: Optional[Bounds] = None
    distribution: Distribution = field(default_factory=_default_distribution)
    tags: List[str] = field(default_factory=list)
    weight: float = 1.0

    def value(self, fields: Mapping[str, float]) -> Optional[float]:
        """Return the normalised value from ``fields``, or None if absent.

        With bounds, the result is scaled by the normalised threshold.
        """
        v = self.source.value(fields)
        if v is None:
            return None
        den = 1.0
        if self.bounds is not None:
            v = self.bounds.apply(v)
            den = self.distribution.normalize(self.bounds.threshold())
        return _divide(self.distribution.normalize(v), den)