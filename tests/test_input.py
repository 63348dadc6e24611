import math

import pytest

from critscore.algorithm.distribution import lookup_distribution
from critscore.algorithm.input import Bounds, Input
from critscore.algorithm.value import Field


@pytest.mark.parametrize(
    "bounds, v, want",
    [
        (Bounds(0, 10, False), 7, 7),
        (Bounds(0, 10, True), 7, 3),
        (Bounds(40, 80, False), 50, 10),
        (Bounds(40, 20, False), 30, 0),
        (Bounds(40, 40, False), 40, 0),
        (Bounds(40, 40, True), 40, 0),
        (Bounds(0, 10, False), -10, 0),
        (Bounds(20, 30, True), 15, 10),
        (Bounds(0, 10, True), 20, 0),
    ],
)
def test_bounds_apply(bounds, v, want):
    assert bounds.apply(v) == want


def test_bounds_threshold():
    assert Bounds(40, 80).threshold() == 40


def test_input_value_regular():
    i = Input(source=Field("test"), distribution=lookup_distribution("linear"))
    assert i.value({"test": 10}) == 10


def test_input_value_invalid_field():
    i = Input(source=Field("test2"))
    assert i.value({"test": 10}) is None


def test_input_value_with_bounds():
    i = Input(
        source=Field("test"),
        bounds=Bounds(lower=0, upper=10, smaller_is_better=False),
        distribution=lookup_distribution("linear"),
    )
    assert i.value({"test": 5}) == 0.5


def test_input_value_zero_width_bounds_is_nan():
    i = Input(source=Field("test"), bounds=Bounds(40, 40))
    assert i.value({"test": 40}) == pytest.approx(math.nan, nan_ok=True)


def test_input_default_distribution_is_linear():
    assert str(Input(source=Field("a")).distribution) == "linear"