"""Scoring configuration loaded from YAML and turned into an algorithm."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Any, List, Mapping, Optional

import yaml

from critscore.algorithm import wam
from critscore.algorithm.distribution import DEFAULT_DISTRIBUTION_NAME, lookup_distribution
from critscore.algorithm.input import Bounds, Input
from critscore.algorithm.registry import Algorithm, Registry
from critscore.algorithm.value import (
    Condition as ConditionFn,
    ConditionalValue,
    Field,
    Value,
    exists_condition,
    not_condition,
)


class ConfigError(ValueError):
    """Raised when a scoring configuration is invalid."""


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ConfigError(f"{what} must be a mapping")
    return data


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{what} must be a number")
    return float(value)


def _string(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(f"{what} must be a string")
    return value


def _bounds_from_dict(data: Any) -> Optional[Bounds]:
    if data is None:
        return None
    data = _mapping(data, "bounds")
    smaller = data.get("smaller_is_better", False)
    if smaller is None:
        smaller = False
    if not isinstance(smaller, bool):
        raise ConfigError("bounds.smaller_is_better must be a boolean")
    lower = data.get("lower")
    upper = data.get("upper")
    return Bounds(
        lower=0.0 if lower is None else _number(lower, "bounds.lower"),
        upper=0.0 if upper is None else _number(upper, "bounds.upper"),
        smaller_is_better=smaller,
    )


@dataclass
class Condition:
    """A condition on a record: either a negation or a field-exists check."""

    not_: Optional["Condition"] = None
    field_exists: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Condition"]:
        """Build a Condition from parsed YAML; None stays None."""
        if data is None:
            return None
        data = _mapping(data, "condition")
        return cls(
            not_=cls.from_dict(data.get("not")),
            field_exists=_string(data.get("field_exists"), "condition.field_exists"),
        )


def build_condition(condition: Condition) -> ConditionFn:
    """Turn a Condition into a callable; exactly one of its parts must be set."""
    if condition.field_exists and condition.not_ is not None:
        raise ConfigError("only one field of condition must be set")
    if condition.field_exists:
        return exists_condition(Field(condition.field_exists))
    if condition.not_ is not None:
        return not_condition(build_condition(condition.not_))
    raise ConfigError("one condition field must be set")


@dataclass
class InputConfig:
    """The configuration of one input to the scoring algorithm."""

    field: str
    weight: float = 1.0
    distribution: str = DEFAULT_DISTRIBUTION_NAME
    bounds: Optional[Bounds] = None
    condition: Optional[Condition] = None
    tags: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "InputConfig":
        """Build an InputConfig from parsed YAML, applying defaults.

        The field must be set and the weight must be greater than 0.
        """
        data = _mapping(data, "input")
        name = _string(data.get("field"), "field")
        if not name:
            raise ConfigError("field must be set")
        weight = data.get("weight")
        weight = 1.0 if weight is None else _number(weight, "weight")
        if not weight > 0:
            raise ConfigError("weight must be greater than 0")
        distribution = data.get("distribution")
        distribution = (
            DEFAULT_DISTRIBUTION_NAME
            if distribution is None
            else _string(distribution, "distribution")
        )
        raw_tags = data.get("tags")
        tags: Optional[List[str]] = None
        if raw_tags is not None:
            if not isinstance(raw_tags, list):
                raise ConfigError("tags must be a list")
            tags = [_string(tag, "tag") for tag in raw_tags]
        return cls(
            field=name,
            weight=weight,
            distribution=distribution,
            bounds=_bounds_from_dict(data.get("bounds")),
            condition=Condition.from_dict(data.get("condition")),
            tags=tags,
        )

    def to_algorithm_input(self) -> Input:
        """Build the algorithm Input this configuration describes."""
        source: Value = Field(self.field)
        if self.condition is not None:
            source = ConditionalValue(build_condition(self.condition), source)
        dist = lookup_distribution(self.distribution)
        if dist is None:
            raise ConfigError(f"unknown distribution {self.distribution}")
        return Input(
            source=source,
            bounds=self.bounds,
            distribution=dist,
            tags=list(self.tags or []),
            weight=self.weight,
        )


@dataclass
class Config:
    """An algorithm name with the inputs it is built from."""

    name: str = ""
    inputs: List[InputConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """Build a Config from a parsed YAML document."""
        if data is None:
            return cls()
        data = _mapping(data, "config")
        raw_inputs = data.get("inputs")
        if raw_inputs is None:
            raw_inputs = []
        if not isinstance(raw_inputs, list):
            raise ConfigError("inputs must be a list")
        return cls(
            name=_string(data.get("algorithm"), "algorithm"),
            inputs=[InputConfig.from_dict(item) for item in raw_inputs],
        )

    def algorithm(self) -> Algorithm:
        """Create the configured algorithm; raise ValueError if that fails."""
        inputs = [item.to_algorithm_input() for item in self.inputs]
        registry = Registry()
        registry.register(wam.NAME, wam.new)
        return registry.new_algorithm(self.name, inputs)


def load_config(stream: IO[Any]) -> Config:
    """Parse YAML from ``stream`` into a Config; raise ConfigError if invalid."""
    data = stream.read()
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid yaml: {exc}") from exc
    return Config.from_dict(document)