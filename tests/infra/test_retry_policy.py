"""
RetryPolicy tests: exponential backoff, jitter bounds and error classes.
"""

import pytest

from infra.errors import CapabilityError, TransientCapabilityError
from infra.llm.retry_policy import RetryPolicy


def _transient(reason=TransientCapabilityError.RATE_LIMITED, status=429):
    return TransientCapabilityError("rate limited", reason=reason, status=status)


class FlakyCall:
    """Fails with the given errors in order, then returns 'ok'."""

    def __init__(self, errors):
        self.errors = list(errors)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "ok"


def test_returns_without_sleeping_on_success():
    delays = []
    policy = RetryPolicy(max_retries=3, sleep=delays.append)

    assert policy.execute_with_retry(FlakyCall([])) == "ok"
    assert delays == []


def test_retries_transient_errors_then_succeeds():
    delays = []
    policy = RetryPolicy(max_retries=5, base_delay=1.0, jitter=1.0, sleep=delays.append)
    call = FlakyCall([_transient(), _transient(TransientCapabilityError.OVERLOADED, 503)])

    assert policy.execute_with_retry(call) == "ok"
    assert call.calls == 3
    assert len(delays) == 2


def test_backoff_delays_strictly_increase():
    delays = []
    policy = RetryPolicy(max_retries=5, base_delay=1.0, jitter=1.0, sleep=delays.append)
    call = FlakyCall([_transient() for _ in range(6)])

    with pytest.raises(TransientCapabilityError):
        policy.execute_with_retry(call)

    assert call.calls == 6
    assert len(delays) == 5
    assert all(a < b for a, b in zip(delays, delays[1:]))
    for attempt, delay in enumerate(delays):
        assert 2 ** attempt <= delay < 2 ** attempt + 1.0


def test_gives_up_after_max_retries():
    delays = []
    policy = RetryPolicy(max_retries=2, base_delay=0.5, jitter=0.0, sleep=delays.append)
    call = FlakyCall([_transient() for _ in range(10)])

    with pytest.raises(TransientCapabilityError):
        policy.execute_with_retry(call)

    assert call.calls == 3
    assert delays == [0.5, 1.0]


def test_non_transient_errors_are_not_retried():
    delays = []
    policy = RetryPolicy(max_retries=5, sleep=delays.append)
    call = FlakyCall([CapabilityError("bad request", status=400)])

    with pytest.raises(CapabilityError):
        policy.execute_with_retry(call)

    assert call.calls == 1
    assert delays == []


def test_unexpected_exceptions_propagate():
    policy = RetryPolicy(max_retries=5, sleep=lambda _: None)
    call = FlakyCall([KeyError("choices")])

    with pytest.raises(KeyError):
        policy.execute_with_retry(call)


def test_jitter_larger_than_base_delay_is_rejected():
    with pytest.raises(ValueError):
        RetryPolicy(base_delay=1.0, jitter=2.0)


def test_jitter_defaults_to_base_delay():
    delays = []
    policy = RetryPolicy(max_retries=3, base_delay=0.25, sleep=delays.append)
    call = FlakyCall([_transient() for _ in range(4)])

    with pytest.raises(TransientCapabilityError):
        policy.execute_with_retry(call)

    assert policy.jitter == 0.25
    for attempt, delay in enumerate(delays):
        assert 0.25 * 2 ** attempt <= delay < 0.25 * 2 ** attempt + 0.25
    assert all(a < b for a, b in zip(delays, delays[1:]))
