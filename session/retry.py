# session/retry.py
"""
Generic retry decorator for I/O calls, built on backoff.
"""

import logging
import random
from typing import Callable, Optional

import backoff

from configurations import RetryConfig
from exceptions import TransientFetchError

logger = logging.getLogger(__name__)


def additive_jitter(bound: float) -> Callable[[float], float]:
    """
    Adds a uniform random delay in [0, bound] to each computed wait
    """

    def _jitter(value: float) -> float:
        if bound <= 0:
            return value
        return value + random.uniform(0, bound)

    return _jitter


def with_retry(
    retry_config: RetryConfig,
    on_retry: Optional[Callable[[Exception, int], None]] = None,
    exceptions=TransientFetchError,
):
    """
    Retry the decorated call on transient failures.

    Waits base_delay, 2*base_delay, 4*base_delay... plus jitter between
    attempts, at most max_attempts calls in total. The last exception is
    re-raised when the budget is spent.

    Args:
        retry_config: attempt budget, base delay and jitter bound
        on_retry: called with (exception, attempt) before each wait
        exceptions: exception class(es) that are retried
    """

    def _on_backoff(details):
        exception = details.get("exception")
        logger.warning(
            "[attempt %d/%d] %s, retrying in %.2fs",
            details["tries"],
            retry_config.max_attempts,
            exception,
            details["wait"],
        )
        if on_retry is not None and exception is not None:
            on_retry(exception, details["tries"])

    def _on_giveup(details):
        logger.error(
            "Giving up after %d attempts: %s",
            details["tries"],
            details.get("exception"),
        )

    return backoff.on_exception(
        backoff.expo,
        exceptions,
        max_tries=retry_config.max_attempts,
        factor=retry_config.base_delay,
        jitter=additive_jitter(retry_config.jitter),
        on_backoff=_on_backoff,
        on_giveup=_on_giveup,
        logger=None,
    )
