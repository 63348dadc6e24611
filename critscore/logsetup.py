"""Logging environments and logger construction."""

from __future__ import annotations

import enum
import json
import logging
import time
from typing import Mapping, Union

CONFIG_LOG_ENV_KEY = "log-env"
CONFIG_LOG_LEVEL_KEY = "log-level"

_LEVEL_NAMES = {
    "": logging.INFO,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "dpanic": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
}

_SHORT_LEVELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
}


class UnknownEnvError(ValueError):
    """Raised when a logging environment name is not recognised."""

    def __init__(self, text: str = "") -> None:
        super().__init__(f"unknown logging environment: {text!r}")
        self.text = text


class Env(enum.IntEnum):
    """The environment a logger is configured for."""

    UNKNOWN = 0
    DEV = 1
    GCP = 2

    def __str__(self) -> str:
        return _ENV_NAMES.get(self, "unknown")


_ENV_NAMES = {Env.DEV: "dev", Env.GCP: "gcp"}
_ENV_BY_NAME = {name: env for env, name in _ENV_NAMES.items()}

DEFAULT_ENV = Env.DEV


def lookup_env(text: str) -> Env:
    """Return the Env named by ``text``, or Env.UNKNOWN."""
    return _ENV_BY_NAME.get(text, Env.UNKNOWN)


def parse_env(text: str) -> Env:
    """Return the Env named by ``text``; raise UnknownEnvError otherwise."""
    env = lookup_env(text)
    if env is Env.UNKNOWN:
        raise UnknownEnvError(text)
    return env


def _parse_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    try:
        return _LEVEL_NAMES[level.lower()]
    except KeyError:
        raise ValueError(f"unrecognized level: {level!r}") from None


class _DevFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        stamp = f"{self.formatTime(record, self.datefmt)}.{int(record.msecs):03d}"
        level = _SHORT_LEVELS.get(record.levelno, record.levelname)
        line = f"{stamp}\t{level}\t{record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class _GCPFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "severity": record.levelname,
            "timestamp": time.strftime(
                "%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)
            )
            + f".{int(record.msecs):03d}Z",
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["stacktrace"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def new_logger(env: Env, level: Union[int, str]) -> logging.Logger:
    """Return a new logger set up for ``env`` with minimum ``level``.

    GCP loggers emit one JSON object per line; any other environment gets
    human-readable development output.
    """
    logger = logging.Logger("critscore", _parse_level(level))
    handler = logging.StreamHandler()
    handler.setFormatter(_GCPFormatter() if env == Env.GCP else _DevFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def new_logger_from_config_map(
    default_env: Env,
    default_level: Union[int, str],
    config: Mapping[str, str],
) -> logging.Logger:
    """Return a logger using the "log-env" and "log-level" keys of ``config``.

    Missing or empty keys fall back to the given defaults.
    """
    env = default_env
    text = config.get(CONFIG_LOG_ENV_KEY, "")
    if text:
        env = parse_env(text)

    level = _parse_level(default_level)
    text = config.get(CONFIG_LOG_LEVEL_KEY, "")
    if text:
        level = _parse_level(text)

    return new_logger(env, level)