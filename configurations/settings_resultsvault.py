# configurations/settings_resultsvault.py
"""
Upstream (ResultsVault / match centre) endpoint and pacing settings.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .settings_base import env_int, env_list, env_ms_as_seconds, env_str


@dataclass(frozen=True)
class ResultsVaultConfig:
    """
    Endpoints, session bootstrap and pacing for the ResultsVault API
    """

    grades_endpoint: str = ""
    matches_endpoint: str = ""
    seasons_endpoint: str = ""

    # Pages opened in the browser to obtain session cookies
    referrer_candidates: Tuple[str, ...] = field(default_factory=tuple)

    season_id: str = ""
    grade_ids: Tuple[str, ...] = field(default_factory=tuple)

    # Optional static key sent as a header on every API call
    api_key: str = ""
    api_key_header: str = "x-api-key"

    navigation_timeout: float = 30.0
    slowdown: float = 1.2
    refresh_referrer_every: int = 5

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "ResultsVaultConfig":
        """
        Build from environment variables
        """
        timeout_ms = env_int(
            "NAVIGATION_TIMEOUT_MS",
            env_int("PUPPETEER_TIMEOUT_MS", 30000, environ),
            environ,
        )
        return cls(
            grades_endpoint=env_str("GRADES_JSON_API_ENDPOINT", "", environ),
            matches_endpoint=env_str("MATCH_JSON_API_ENDPOINT", "", environ),
            seasons_endpoint=env_str("SEASONS_JSON_API_ENDPOINT", "", environ),
            referrer_candidates=tuple(
                value
                for value in (
                    env_str("MATCH_REFERRER_URL", "", environ),
                    env_str("GRADES_REFERRER_URL", "", environ),
                    env_str("SEASONS_REFERRER_URL", "", environ),
                )
                if value
            ),
            season_id=env_str("SEASON_ID", "", environ),
            grade_ids=tuple(env_list("GRADE_IDS", environ)),
            api_key=env_str("RV_API_KEY", "", environ),
            api_key_header=env_str("RV_API_KEY_HEADER", "x-api-key", environ),
            navigation_timeout=timeout_ms / 1000.0,
            slowdown=env_ms_as_seconds("SLOWDOWN_MS", 1200, environ),
            refresh_referrer_every=env_int("REFRESH_REFERRER_EVERY", 5, environ),
        )

    def api_headers(self) -> dict:
        """
        Extra headers sent with each API request
        """
        if self.api_key:
            return {self.api_key_header: self.api_key}
        return {}
