"""Generic retry decorator."""

import pytest

from configurations import RetryConfig
from exceptions import FetchError, TransientFetchError
from session import additive_jitter, with_retry

NO_WAIT = RetryConfig(max_attempts=3, base_delay=0.0, jitter=0.0)


def flaky(failures, exception=TransientFetchError):
    calls = {"count": 0}

    def operation():
        calls["count"] += 1
        if calls["count"] <= failures:
            raise exception(f"failure {calls['count']}", status=503)
        return "ok"

    return operation, calls


def test_retries_until_success():
    operation, calls = flaky(2)

    assert with_retry(NO_WAIT)(operation)() == "ok"
    assert calls["count"] == 3


def test_gives_up_after_max_attempts():
    operation, calls = flaky(10)

    with pytest.raises(TransientFetchError, match="failure 3"):
        with_retry(NO_WAIT)(operation)()
    assert calls["count"] == 3


def test_terminal_errors_are_not_retried():
    operation, calls = flaky(1, exception=FetchError)

    with pytest.raises(FetchError):
        with_retry(NO_WAIT)(operation)()
    assert calls["count"] == 1


def test_on_retry_hook_sees_each_failure():
    seen = []
    operation, _ = flaky(2)

    with_retry(NO_WAIT, on_retry=lambda error, attempt: seen.append(attempt))(operation)()

    assert seen == [1, 2]


def test_additive_jitter_bounds():
    jitter = additive_jitter(0.4)
    for _ in range(50):
        value = jitter(1.2)
        assert 1.2 <= value <= 1.6
    assert additive_jitter(0)(2.0) == 2.0


def test_retry_config_validation():
    with pytest.raises(ValueError):
        RetryConfig(max_attempts=0)
    with pytest.raises(ValueError):
        RetryConfig(base_delay=-1)
