# configurations/settings_retry.py
"""
Retry and backoff settings (everything in seconds)
"""

from dataclasses import dataclass
from typing import FrozenSet, Mapping, Optional

from .settings_base import env_flag, env_int, env_ms_as_seconds

TRANSIENT_STATUSES = frozenset({401, 403, 408, 420, 429, 500, 502, 503, 504})
AUTH_STATUSES = frozenset({401, 403})


@dataclass(frozen=True)
class RetryConfig:
    """
    Bounded exponential backoff with additive jitter
    """

    max_attempts: int = 4
    base_delay: float = 1.2
    jitter: float = 0.4
    transient_statuses: FrozenSet[int] = TRANSIENT_STATUSES
    auth_statuses: FrozenSet[int] = AUTH_STATUSES
    direct_fetch_on_auth_failure: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RetryConfig":
        return cls(
            max_attempts=env_int("RETRY_MAX", 4, environ),
            base_delay=env_ms_as_seconds("RETRY_BASE_DELAY_MS", 1200, environ),
            jitter=env_ms_as_seconds("RETRY_JITTER_MS", 400, environ),
            direct_fetch_on_auth_failure=env_flag(
                "USE_NODE_FETCH_ON_401", True, environ
            ),
        )

    @classmethod
    def testing(cls) -> "RetryConfig":
        """
        No waiting between attempts
        """
        return cls(max_attempts=3, base_delay=0.0, jitter=0.0)

    def is_transient(self, status: int) -> bool:
        return status in self.transient_statuses

    def is_auth_failure(self, status: int) -> bool:
        return status in self.auth_statuses

    def __post_init__(self):
        if self.max_attempts <= 0:
            raise ValueError("max_attempts must be greater than 0")
        if self.base_delay < 0:
            raise ValueError("base_delay cannot be negative")
        if self.jitter < 0:
            raise ValueError("jitter cannot be negative")
