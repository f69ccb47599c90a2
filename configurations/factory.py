# configurations/factory.py
"""
Configuration factory for creating environment-specific configurations.
"""

from dataclasses import replace
from typing import Mapping, Optional

from .settings_database import DatabaseConfig
from .settings_orchestrator import LoadFailurePolicy, PipelineConfig
from .settings_resultsvault import ResultsVaultConfig
from .settings_retry import RetryConfig

SUPPORTED_ENVIRONMENTS = ["development", "testing", "production"]
DEFAULT_ENVIRONMENT = "development"

TESTING_GRADES_ENDPOINT = (
    "https://api.resultsvault.co.uk/rv/134453/grades/?apiid=1002&seasonid=19"
)
TESTING_MATCHES_ENDPOINT = (
    "https://api.resultsvault.co.uk/rv/134453/matches/"
    "?apiid=1002&action=ors&maxrecs=1000&strmflg=1"
)


class ConfigFactory:
    """
    Factory for creating environment-specific configurations
    """

    @staticmethod
    def development(
        env_file: Optional[str] = ".env",
        environ: Optional[Mapping[str, str]] = None,
    ) -> PipelineConfig:
        """
        Development environment configuration
        """
        config = PipelineConfig.from_env("development", env_file, environ)
        return replace(config, log_level="DEBUG", verbose=max(config.verbose, 1))

    @staticmethod
    def production(
        env_file: Optional[str] = ".env",
        environ: Optional[Mapping[str, str]] = None,
    ) -> PipelineConfig:
        """
        Production environment configuration
        """
        return PipelineConfig.from_env("production", env_file, environ)

    @staticmethod
    def testing(output_directory: str = "output", **overrides) -> PipelineConfig:
        """
        Testing environment configuration - no .env, no waiting, in-memory
        SQL store, first-run policy on load failures.
        """
        config = PipelineConfig(
            resultsvault=ResultsVaultConfig(
                grades_endpoint=TESTING_GRADES_ENDPOINT,
                matches_endpoint=TESTING_MATCHES_ENDPOINT,
                season_id="19",
                navigation_timeout=5.0,
                slowdown=0.0,
                refresh_referrer_every=0,
            ),
            retry=RetryConfig.testing(),
            database=DatabaseConfig.for_environment("testing", {}),
            output_directory=output_directory,
            load_failure_policy=LoadFailurePolicy.FIRST_RUN,
            log_level="ERROR",
            environment="testing",
        )
        if overrides:
            config = replace(config, **overrides)
        config.validate()
        return config


def get_config(
    environment: str = DEFAULT_ENVIRONMENT,
    env_file: Optional[str] = ".env",
    environ: Optional[Mapping[str, str]] = None,
) -> PipelineConfig:
    """
    Get configuration for specified environment
    """
    environment = environment.lower()

    if environment == "development":
        return ConfigFactory.development(env_file, environ)
    elif environment == "testing":
        return ConfigFactory.testing()
    elif environment == "production":
        return ConfigFactory.production(env_file, environ)
    else:
        raise ValueError(f"Unknown environment: {environment}")
