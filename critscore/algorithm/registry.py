"""Scoring algorithms and a registry of their factories by name."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Callable, Dict, List, Mapping

if TYPE_CHECKING:
    from critscore.algorithm.input import Input


class Algorithm(abc.ABC):
    """Computes a score from a record of named values."""

    @abc.abstractmethod
    def score(self, record: Mapping[str, float]) -> float:
        """Return the score for ``record``."""


Factory = Callable[[List["Input"]], Algorithm]


class Registry:
    """Maps algorithm names to factories that create them."""

    def __init__(self) -> None:
        self._factories: Dict[str, Factory] = {}

    def register(self, name: str, factory: Factory) -> None:
        """Register ``factory`` under ``name``, replacing any earlier one."""
        self._factories[name] = factory

    def new_algorithm(self, name: str, inputs: List["Input"]) -> Algorithm:
        """Create the algorithm registered as ``name`` from ``inputs``.

        Raises ValueError if no factory is registered for ``name``; errors
        from the factory propagate.
        """
        try:
            factory = self._factories[name]
        except KeyError:
            raise ValueError(f"unknown algorithm {name}") from None
        return factory(inputs)