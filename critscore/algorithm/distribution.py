"""Named normalisation functions applied to input values."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

DEFAULT_DISTRIBUTION_NAME = "linear"


def _log(x: float) -> float:
    """Natural logarithm that yields -inf at 0 and NaN below it."""
    if math.isnan(x) or x < 0:
        return math.nan
    if x == 0:
        return -math.inf
    return math.log(x)


def _linear(v: float) -> float:
    return float(v)


def _zipfian(v: float) -> float:
    return _log(1 + v)


_NORMALIZERS: Dict[str, Callable[[float], float]] = {
    "linear": _linear,
    "zipfian": _zipfian,
}


@dataclass(frozen=True)
class Distribution:
    """A named function that maps a raw value onto a distribution."""

    name: str
    function: Callable[[float], float] = field(compare=False, repr=False)

    def normalize(self, v: float) -> float:
        """Apply the distribution's function to ``v``."""
        return self.function(v)

    def __str__(self) -> str:
        return self.name


def lookup_distribution(name: str) -> Optional[Distribution]:
    """Return the distribution called ``name``, or None if there is none."""
    function = _NORMALIZERS.get(name)
    if function is None:
        return None
    return Distribution(name, function)