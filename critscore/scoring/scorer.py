"""A named scorer that applies a scoring algorithm to records."""

from __future__ import annotations

import math
import unicodedata
from typing import IO, Any, Dict, Mapping, Optional

from critscore.algorithm.registry import Algorithm
from critscore.scoring.config import ConfigError, load_config


def _parse_float(text: str) -> Optional[float]:
    """Parse a strict decimal or hexadecimal float; None if it is not one."""
    if not text or text != text.strip() or "_" in text:
        return None
    body = text.lstrip("+-")
    try:
        if body[:2].lower() == "0x":
            result = float.fromhex(text)
        else:
            result = float(text)
    except (ValueError, OverflowError):
        return None
    if math.isinf(result) and "inf" not in body.lower():
        # Out of range values are rejected rather than rounded to infinity.
        return None
    return result


class Scorer:
    """Scores records using an algorithm, under a name."""

    def __init__(self, name: str, algorithm: Algorithm) -> None:
        self.name = name
        self.algorithm = algorithm

    def score_raw(self, raw: Mapping[str, str]) -> float:
        """Score string values; those that are not numbers are ignored."""
        record: Dict[str, float] = {}
        for key, text in raw.items():
            value = _parse_float(text)
            if value is not None:
                record[key] = value
        return self.algorithm.score(record)

    def score_record(self, record: Mapping[str, Any]) -> float:
        """Score a record; only integer and float values are used."""
        numbers = {
            key: float(value)
            for key, value in record.items()
            if isinstance(value, (int, float)) and not isinstance(value, bool)
        }
        return self.algorithm.score(numbers)


def from_config(name: str, stream: IO[Any]) -> Scorer:
    """Create a Scorer called ``name`` from the YAML config in ``stream``."""
    if not name:
        raise ValueError("name must be non-empty")
    config = load_config(stream)
    try:
        algorithm = config.algorithm()
    except ConfigError:
        raise
    except ValueError as exc:
        raise ConfigError(f"create algorithm: {exc}") from exc
    return Scorer(name, algorithm)


def _base(path: str) -> str:
    if not path:
        return "."
    path = path.rstrip("/")
    if not path:
        return "/"
    return path.rsplit("/", 1)[-1]


def _strip_ext(name: str) -> str:
    dot = name.rfind(".")
    return name[:dot] if dot >= 0 else name


def _normalize_char(char: str) -> str:
    if not (char.isalpha() or unicodedata.category(char) == "Nd"):
        return "_"
    lowered = char.lower()
    return lowered[0] if lowered else char


def name_from_filepath(filepath: str) -> str:
    """Derive a score name from a config file path.

    The file's base name loses its extension, non-alphanumeric characters
    become underscores, letters are lowercased and "_score" is appended.
    """
    stem = _strip_ext(_base(filepath))
    return "".join(_normalize_char(c) for c in stem) + "_score"