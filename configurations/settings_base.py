# configurations/settings_base.py
"""
Base configuration classes and environment handling.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class EnvironmentVariables:
    """
    This is for the environmental variables:
    """

    env_file_path: Optional[str] = ".env"

    def load(self) -> bool:
        """
        Load the .env file into the process environment, if present.
        Existing variables win over the file.
        """
        if not self.env_file_path:
            return False
        if Path(self.env_file_path).exists():
            load_dotenv(self.env_file_path, override=False)
            logging.info("Loaded environment from: %s", self.env_file_path)
            return True
        logging.warning("Environment file not found: %s", self.env_file_path)
        return False


# ***> Typed readers over a plain mapping (os.environ by default) <***


def env_str(
    name: str, default: str = "", environ: Optional[Mapping[str, str]] = None
) -> str:
    environ = os.environ if environ is None else environ
    value = environ.get(name)
    if value is None:
        return default
    # .env files sometimes carry trailing "# comment" fragments
    value = value.split(" #", 1)[0].strip()
    return value if value else default


def env_int(
    name: str, default: int, environ: Optional[Mapping[str, str]] = None
) -> int:
    raw = env_str(name, "", environ)
    if not raw:
        return default
    try:
        return int(float(raw))
    except ValueError as error:
        raise ValueError(f"{name} must be a number, got {raw!r}") from error


def env_ms_as_seconds(
    name: str, default_ms: int, environ: Optional[Mapping[str, str]] = None
) -> float:
    return env_int(name, default_ms, environ) / 1000.0


def env_flag(
    name: str, default: bool, environ: Optional[Mapping[str, str]] = None
) -> bool:
    raw = env_str(name, "", environ).lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def env_list(name: str, environ: Optional[Mapping[str, str]] = None) -> List[str]:
    raw = env_str(name, "", environ)
    return [part.strip() for part in raw.split(",") if part.strip()]
