from dataclasses import dataclass

import pytest

from critscore.retry import (
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_RETRIES,
    NoMoreAttemptsError,
    Options,
    Request,
    RetryingTransport,
    RetryStrategy,
    default_backoff,
)


@dataclass
class FakeResponse:
    status_code: int


def fixed(status):
    def client(_request):
        return FakeResponse(status)

    return client


class Sequence:
    def __init__(self, statuses):
        self.statuses = list(statuses)
        self.calls = 0

    def __call__(self, _request):
        status = self.statuses[min(self.calls, len(self.statuses) - 1)]
        self.calls += 1
        return FakeResponse(status)


def test_init_not_done():
    req = Request(object(), fixed(200), Options())
    assert req.done() is False


def test_200_no_strategy():
    req = Request(object(), fixed(200), Options())
    resp = req.do()
    assert req.done() is True
    assert resp.status_code == 200


def test_do_after_done_raises():
    req = Request(object(), fixed(200), Options())
    req.do()
    with pytest.raises(NoMoreAttemptsError):
        req.do()


@pytest.mark.parametrize("code", range(200, 400))
def test_2xx_3xx_always_done(code):
    opts = Options(strategies=[lambda _r: RetryStrategy.RETRY_IMMEDIATE])
    req = Request(object(), fixed(code), opts)
    req.do()
    assert req.done() is True


def test_retry_after_zero_duration():
    req = Request(object(), fixed(400), Options(retry_after=lambda _r: 0))
    req.do()
    assert req.done() is True


def test_retry_after_duration():
    slept = []
    opts = Options(retry_after=lambda _r: 60.0, sleep=slept.append)
    req = Request(object(), fixed(400), opts)
    req.do()
    assert req.done() is False
    req.do()
    assert req.done() is False
    assert sum(slept) == 60.0


def test_zero_max_retries_only_tries_once():
    opts = Options(max_retries=0, retry_after=lambda _r: 60.0)
    req = Request(object(), fixed(400), opts)
    req.do()
    assert req.done() is True


def test_client_error_propagates_and_finishes():
    def client(_request):
        raise ConnectionError("boom")

    req = Request(object(), client, Options())
    with pytest.raises(ConnectionError):
        req.do()
    assert req.done() is True
    with pytest.raises(NoMoreAttemptsError):
        req.do()


def test_strategy_error_propagates_and_finishes():
    def strategy(_response):
        raise ValueError("bad strategy")

    req = Request(object(), fixed(500), Options(strategies=[strategy]))
    with pytest.raises(ValueError, match="bad strategy"):
        req.do()
    assert req.done() is True


def test_no_retry_strategy_finishes():
    opts = Options(strategies=[lambda _r: RetryStrategy.NO_RETRY])
    req = Request(object(), fixed(500), opts)
    resp = req.do()
    assert resp.status_code == 500
    assert req.done() is True


def test_first_retrying_strategy_wins():
    seen = []

    def first(_r):
        seen.append("first")
        return RetryStrategy.RETRY_IMMEDIATE

    def second(_r):
        seen.append("second")
        return RetryStrategy.NO_RETRY

    req = Request(object(), fixed(500), Options(strategies=[first, second]))
    req.do()
    assert seen == ["first"]
    assert req.done() is False


def test_transport_retries_immediately_then_backs_off():
    slept = []
    client = Sequence([500, 500, 200])
    opts = Options(
        strategies=[lambda _r: RetryStrategy.RETRY_IMMEDIATE], sleep=slept.append
    )
    resp = RetryingTransport(client, opts).send(object())
    assert resp.status_code == 200
    assert client.calls == 3
    assert slept == [60.0]


def test_transport_initial_delay():
    slept = []
    client = Sequence([500, 500, 200])
    opts = Options(
        initial_delay=5.0,
        strategies=[lambda _r: RetryStrategy.RETRY_WITH_INITIAL_DELAY],
        sleep=slept.append,
    )
    resp = RetryingTransport(client, opts)(object())
    assert resp.status_code == 200
    assert slept == [5.0, 10.0]


def test_transport_stops_after_max_retries():
    client = Sequence([503])
    opts = Options(
        max_retries=2,
        strategies=[lambda _r: RetryStrategy.RETRY_IMMEDIATE],
        sleep=lambda _d: None,
    )
    resp = RetryingTransport(client, opts).send(object())
    assert resp.status_code == 503
    assert client.calls == 3


def test_default_backoff():
    assert default_backoff(0) == 60.0
    assert default_backoff(-1) == 60.0
    assert default_backoff(10) == 20


def test_default_options():
    opts = Options()
    assert opts.max_retries == DEFAULT_MAX_RETRIES == 5
    assert opts.initial_delay == DEFAULT_INITIAL_DELAY == 120.0
    assert opts.backoff(0) == 60.0


@pytest.mark.parametrize(
    "strategy, text",
    [
        (RetryStrategy.NO_RETRY, "NoRetry"),
        (RetryStrategy.RETRY_IMMEDIATE, "RetryImmediate"),
        (RetryStrategy.RETRY_WITH_INITIAL_DELAY, "RetryWithInitialDelay"),
    ],
)
def test_strategy_str(strategy, text):
    assert str(strategy) == text