import pytest

from critscore.algorithm import wam
from critscore.algorithm.input import Input
from critscore.algorithm.registry import Algorithm, Registry
from critscore.algorithm.value import Field


class _Sum(Algorithm):
    def __init__(self, inputs):
        self.inputs = inputs

    def score(self, record):
        return sum(record.values())


class _Constant(Algorithm):
    def __init__(self, inputs):
        self.inputs = inputs

    def score(self, record):
        return len(self.inputs)


def test_unknown_algorithm_raises():
    with pytest.raises(ValueError, match="unknown algorithm missing"):
        Registry().new_algorithm("missing", [])


def test_registered_factory_receives_inputs():
    registry = Registry()
    registry.register("sum", _Sum)
    inputs = [Input(source=Field("a"))]
    algo = registry.new_algorithm("sum", inputs)
    assert isinstance(algo, _Sum)
    assert algo.inputs is inputs
    assert algo.score({"a": 2, "b": 3}) == 5


def test_register_replaces_previous_factory():
    registry = Registry()
    registry.register("algo", _Sum)
    registry.register("algo", _Constant)
    algo = registry.new_algorithm("algo", [Input(source=Field("a")), Input(source=Field("b"))])
    assert algo.score({"a": 10}) == 2


def test_factory_errors_propagate():
    def failing(inputs):
        raise RuntimeError("boom")

    registry = Registry()
    registry.register("bad", failing)
    with pytest.raises(RuntimeError, match="boom"):
        registry.new_algorithm("bad", [])


def test_wam_registered_by_name():
    registry = Registry()
    registry.register(wam.NAME, wam.new)
    algo = registry.new_algorithm(wam.NAME, [Input(source=Field("x"))])
    assert algo.score({"x": 4}) == 4