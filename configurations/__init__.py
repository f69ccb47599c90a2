# configurations/__init__.py
"""
configuration module
"""

from .factory import ConfigFactory, get_config
from .settings_base import EnvironmentVariables
from .settings_database import DatabaseConfig
from .settings_notifier import TelegramConfig
from .settings_orchestrator import LoadFailurePolicy, PipelineConfig
from .settings_resultsvault import ResultsVaultConfig
from .settings_retry import RetryConfig
from .settings_sheets import SheetsConfig

__all__ = [
    "EnvironmentVariables",
    "DatabaseConfig",
    "TelegramConfig",
    "LoadFailurePolicy",
    "PipelineConfig",
    "ResultsVaultConfig",
    "RetryConfig",
    "SheetsConfig",
    "ConfigFactory",
    "get_config",
]
