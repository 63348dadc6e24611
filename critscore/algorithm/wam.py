"""The weighted arithmetic mean of a set of inputs."""

from __future__ import annotations

import math
from typing import Iterable, List, Mapping

from critscore.algorithm.input import Input
from critscore.algorithm.registry import Algorithm

NAME = "weighted_arithmetic_mean"


class WeightedArithmeticMean(Algorithm):
    """Averages the values of the inputs present, weighted by their weights."""

    def __init__(self, inputs: Iterable[Input]) -> None:
        self.inputs: List[Input] = list(inputs)

    def score(self, record: Mapping[str, float]) -> float:
        """Return the weighted mean; NaN when no input has a value."""
        item_sum = 0.0
        item_count = 0.0
        for item in self.inputs:
            v = item.value(record)
            if v is not None:
                item_count += item.weight
                item_sum += item.weight * v
        if item_count == 0:
            if item_sum == 0 or math.isnan(item_sum):
                return math.nan
            return math.copysign(math.inf, item_sum)
        return item_sum / item_count


def new(inputs: Iterable[Input]) -> WeightedArithmeticMean:
    """Create a weighted arithmetic mean over ``inputs``."""
    return WeightedArithmeticMean(inputs)