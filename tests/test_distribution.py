import math

import pytest

from critscore.algorithm.distribution import (
    DEFAULT_DISTRIBUTION_NAME,
    lookup_distribution,
)

MAX_INT64 = float(2**63 - 1)


def test_invalid_name_returns_none():
    assert lookup_distribution("invalid") is None


@pytest.mark.parametrize(
    "name, value, want",
    [
        ("linear", 300, 300),
        ("linear", 0, 0),
        ("linear", -10, -10),
        ("linear", MAX_INT64, MAX_INT64),
        ("zipfian", 300, 5.707110264748875),
        ("zipfian", 0, 0),
        ("zipfian", MAX_INT64, 43.668272),
    ],
)
def test_lookup_and_normalize(name, value, want):
    dist = lookup_distribution(name)
    assert str(dist) == name
    assert abs(dist.normalize(value) - want) <= 0.000001


def test_negative_zipfian_is_nan():
    dist = lookup_distribution("zipfian")
    assert str(dist) == "zipfian"
    assert math.isnan(dist.normalize(-10))


def test_zipfian_minus_one_is_negative_infinity():
    assert lookup_distribution("zipfian").normalize(-1) == -math.inf


def test_default_distribution_exists():
    assert str(lookup_distribution(DEFAULT_DISTRIBUTION_NAME)) == "linear"


def test_lookups_compare_equal_by_name():
    assert lookup_distribution("linear") == lookup_distribution("linear")
    assert lookup_distribution("linear") != lookup_distribution("zipfian")