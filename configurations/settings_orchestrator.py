# configurations/settings_orchestrator.py
"""
Main pipeline configuration combining all components.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional
from urllib.parse import urlparse

from exceptions import ConfigurationError
from logger import ScrapingConstants

from .settings_base import EnvironmentVariables, env_flag, env_int, env_str
from .settings_database import DatabaseConfig
from .settings_notifier import TelegramConfig
from .settings_resultsvault import ResultsVaultConfig
from .settings_retry import RetryConfig
from .settings_sheets import SheetsConfig


class LoadFailurePolicy(Enum):
    """
    What to do when the previous snapshot cannot be read.

    FAIL aborts the diff phase. FIRST_RUN continues with an empty snapshot,
    which classifies every current record as created.
    """

    FAIL = "fail"
    FIRST_RUN = "first-run"

    @classmethod
    def parse(cls, value: str) -> "LoadFailurePolicy":
        normalized = value.strip().lower().replace("_", "-")
        for policy in cls:
            if policy.value == normalized:
                return policy
        raise ConfigurationError(
            f"SNAPSHOT_LOAD_FAILURE must be one of "
            f"{', '.join(p.value for p in cls)}, got {value!r}"
        )


@dataclass(frozen=True)
class PipelineConfig:
    """
    Immutable configuration for one sync run. Built once at startup and
    handed to every component.
    """

    resultsvault: ResultsVaultConfig = field(default_factory=ResultsVaultConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    sheets: SheetsConfig = field(default_factory=SheetsConfig)
    telegram: TelegramConfig = field(default_factory=TelegramConfig)
    database: DatabaseConfig = field(
        default_factory=lambda: DatabaseConfig.for_environment("development", {})
    )

    # Output settings
    output_directory: str = "output"
    csv_output: str = ""
    write_csv: bool = True

    # Snapshot / diff settings
    enable_diff: bool = True
    snapshot_table: str = "SNAPSHOT"
    load_failure_policy: Optional[LoadFailurePolicy] = None

    # Logging settings
    log_level: str = "INFO"
    log_dir: str = "logs"
    verbose: int = 0

    script_name: str = "fetchmatches-master"
    version: str = "1.0.0"

    # Environment tracking
    environment: str = "development"

    @classmethod
    def from_env(
        cls,
        environment: str = "development",
        env_file: Optional[str] = ".env",
        environ: Optional[Mapping[str, str]] = None,
    ) -> "PipelineConfig":
        """
        Build the configuration from the process environment (after loading
        the .env file) or from an explicit mapping.
        """
        if environ is None:
            EnvironmentVariables(env_file_path=env_file).load()
            environ = dict(os.environ)

        policy_raw = env_str("SNAPSHOT_LOAD_FAILURE", "", environ)
        try:
            config = cls(
                resultsvault=ResultsVaultConfig.from_env(environ),
                retry=RetryConfig.from_env(environ),
                sheets=SheetsConfig.from_env(environ),
                telegram=TelegramConfig.from_env(environ),
                database=DatabaseConfig.for_environment(environment, environ),
                output_directory=env_str("CSV_DIR", "output", environ),
                csv_output=env_str("CSV_OUTPUT", "", environ),
                enable_diff=env_flag("ENABLE_DIFF", True, environ),
                snapshot_table=env_str("SNAPSHOT_TAB", "SNAPSHOT", environ),
                load_failure_policy=(
                    LoadFailurePolicy.parse(policy_raw) if policy_raw else None
                ),
                log_level=env_str("LOG_LEVEL", "INFO", environ).upper(),
                log_dir=env_str("LOG_DIR", "logs", environ),
                verbose=env_int("VERBOSE", 0, environ),
                environment=environment,
            )
        except ValueError as error:
            raise ConfigurationError(str(error)) from error

        config.validate()
        return config

    def validate(self) -> bool:
        """
        Validate configuration settings

        Raises:
            ConfigurationError: on missing or inconsistent settings
        """
        if not self.resultsvault.grades_endpoint:
            raise ConfigurationError("GRADES_JSON_API_ENDPOINT is required")

        if not self.resultsvault.matches_endpoint:
            raise ConfigurationError("MATCH_JSON_API_ENDPOINT is required")

        for name, url in (
            ("GRADES_JSON_API_ENDPOINT", self.resultsvault.grades_endpoint),
            ("MATCH_JSON_API_ENDPOINT", self.resultsvault.matches_endpoint),
            ("SEASONS_JSON_API_ENDPOINT", self.resultsvault.seasons_endpoint),
        ):
            if not url:
                continue
            host = (urlparse(url).hostname or "").lower()
            if not host.endswith(ScrapingConstants.RV_HOST):
                raise ConfigurationError(
                    f"{name} must point to {ScrapingConstants.RV_HOST} (got {host or url!r})"
                )

        if self.resultsvault.slowdown < 0:
            raise ConfigurationError("SLOWDOWN_MS cannot be negative")

        if self.resultsvault.navigation_timeout <= 0:
            raise ConfigurationError("navigation timeout must be greater than 0")

        if self.enable_diff and self.load_failure_policy is None:
            raise ConfigurationError(
                "SNAPSHOT_LOAD_FAILURE must be set to 'fail' or 'first-run' "
                "when the snapshot diff is enabled"
            )

        if not self.database.database_url:
            raise ConfigurationError("database_url cannot be empty")

        return True

    def ensure_output_directory(self) -> Path:
        path = Path(self.output_directory)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise ConfigurationError(
                f"Cannot create output directory {self.output_directory}: {error}"
            ) from error
        return path

    def get_summary(self) -> dict:
        """
        Get a summary of the current configuration (no secrets)
        """
        rv = self.resultsvault
        return {
            "environment": self.environment,
            "scraping": {
                "season_id": rv.season_id or "n/a",
                "grade_filter": list(rv.grade_ids),
                "slowdown_seconds": rv.slowdown,
                "navigation_timeout": rv.navigation_timeout,
                "refresh_referrer_every": rv.refresh_referrer_every,
            },
            "retry": {
                "max_attempts": self.retry.max_attempts,
                "base_delay": self.retry.base_delay,
                "jitter": self.retry.jitter,
                "direct_fetch_on_auth_failure": self.retry.direct_fetch_on_auth_failure,
            },
            "store": {
                "backend": "google-sheets" if self.sheets.enabled else "sql",
                "impersonation": self.sheets.uses_impersonation,
                "database": self.database.get_connection_info(),
            },
            "diff": {
                "enabled": self.enable_diff,
                "snapshot_table": self.snapshot_table,
                "load_failure_policy": (
                    self.load_failure_policy.value
                    if self.load_failure_policy
                    else None
                ),
            },
            "notifications": {"telegram": self.telegram.enabled},
            "output": {"directory": self.output_directory},
        }
