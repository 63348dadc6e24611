"""Sources of values read from a record of named fields."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

Condition = Callable[[Mapping[str, float]], bool]


class Value(abc.ABC):
    """Something that computes a number from a record of fields."""

    @abc.abstractmethod
    def value(self, fields: Mapping[str, float]) -> Optional[float]:
        """Return the computed number, or None if it cannot be produced."""


@dataclass(frozen=True)
class Field(Value):
    """The raw value of the named field."""

    name: str

    def value(self, fields: Mapping[str, float]) -> Optional[float]:
        return fields.get(self.name)

    def __str__(self) -> str:
        return self.name


def not_condition(condition: Condition) -> Condition:
    """Return a condition that is true exactly when ``condition`` is false."""

    def check(fields: Mapping[str, float]) -> bool:
        return not condition(fields)

    return check


def exists_condition(field: Field) -> Condition:
    """Return a condition that is true when ``field`` is in the record."""
    name = str(field)

    def check(fields: Mapping[str, float]) -> bool:
        return name in fields

    return check


@dataclass(frozen=True)
class ConditionalValue(Value):
    """The inner value, produced only when the condition holds."""

    condition: Condition
    inner: Value

    def value(self, fields: Mapping[str, float]) -> Optional[float]:
        result = self.inner.value(fields)
        if result is None or not self.condition(fields):
            return None
        return result