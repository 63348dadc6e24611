"""Retrying of HTTP-style requests with back-off and pluggable strategies."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

DEFAULT_MAX_RETRIES = 5
DEFAULT_INITIAL_DELAY = 120.0  # seconds


class NoMoreAttemptsError(RuntimeError):
    """Raised when a request is attempted after it has finished."""

    def __init__(self, message: str = "request cannot be retried") -> None:
        super().__init__(message)


class RetryStrategy(enum.Enum):
    """Whether a failed response should be retried, and how."""

    NO_RETRY = "NoRetry"
    RETRY_IMMEDIATE = "RetryImmediate"
    RETRY_WITH_INITIAL_DELAY = "RetryWithInitialDelay"

    def __str__(self) -> str:
        return self.value


def default_backoff(delay: float) -> float:
    """Double ``delay`` if it is positive; otherwise return 60 seconds."""
    if delay <= 0:
        return 60.0
    return delay * 2


@dataclass
class Options:
    """Settings that control how a request is retried.

    ``retry_after`` maps a response to a delay in seconds (0 when none is
    given). Each of ``strategies`` maps a response to a RetryStrategy; they
    are consulted in order until one asks for a retry.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    initial_delay: float = DEFAULT_INITIAL_DELAY
    backoff: Callable[[float], float] = default_backoff
    retry_after: Optional[Callable[[Any], float]] = None
    strategies: List[Callable[[Any], RetryStrategy]] = field(default_factory=list)
    sleep: Callable[[float], None] = time.sleep


def _status_of(response: Any) -> int:
    status = getattr(response, "status_code", None)
    if status is None:
        status = getattr(response, "status")
    return int(status)


class Request:
    """A single request that may be attempted several times.

    ``client`` is called with ``request`` and returns a response object that
    has a ``status_code`` (or ``status``) attribute.
    """

    def __init__(
        self,
        request: Any,
        client: Callable[[Any], Any],
        options: Optional[Options] = None,
    ) -> None:
        self._request = request
        self._client = client
        self._options = options if options is not None else Options()
        self._attempts = 0
        self._finished = False
        self._delay = 0.0

    @property
    def attempts(self) -> int:
        """How many times the request has been issued."""
        return self._attempts

    def done(self) -> bool:
        """Return True once the request must not be attempted again.

        This happens after a 2xx or 3xx response, after the client or a
        strategy raised, once the attempts exceed ``max_retries``, or when no
        strategy asked for a retry and no Retry-After delay was given.
        """
        return self._finished or self._attempts > self._options.max_retries

    def do(self) -> Any:
        """Issue the request once, sleeping first if this is a retry.

        Returns the response. Raises NoMoreAttemptsError if the request is
        already done; errors from the client or a strategy propagate and
        finish the request.
        """
        if self.done():
            raise NoMoreAttemptsError()
        opts = self._options
        if self._attempts > 0:
            if self._delay > 0:
                opts.sleep(self._delay)
            self._delay = opts.backoff(self._delay)
        self._attempts += 1

        try:
            response = self._client(self._request)
        except Exception:
            self._finished = True
            raise

        if 200 <= _status_of(response) < 400:
            self._finished = True
            return response

        if opts.retry_after is not None:
            delay = opts.retry_after(response)
            if delay:
                self._delay = delay
                return response

        strategy = RetryStrategy.NO_RETRY
        for choose in opts.strategies:
            try:
                strategy = choose(response)
            except Exception:
                self._finished = True
                raise
            if strategy is not RetryStrategy.NO_RETRY:
                break

        if strategy is RetryStrategy.NO_RETRY:
            self._finished = True
            return response

        if self._attempts == 1 and strategy is RetryStrategy.RETRY_WITH_INITIAL_DELAY:
            self._delay = opts.initial_delay
        return response


class RetryingTransport:
    """Send requests through ``inner``, retrying them as ``options`` say."""

    def __init__(
        self, inner: Callable[[Any], Any], options: Optional[Options] = None
    ) -> None:
        self._inner = inner
        self._options = options if options is not None else Options()

    def send(self, request: Any) -> Any:
        """Send ``request`` until it is done and return the last response."""
        response = None
        attempt = Request(request, self._inner, self._options)
        while not attempt.done():
            response = attempt.do()
        return response

    def __call__(self, request: Any) -> Any:
        return self.send(request)