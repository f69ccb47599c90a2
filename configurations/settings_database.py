# configurations/settings_database.py
"""
Configuration for the SQL backed tabular store.
Used when Google Sheets is disabled or not configured:
- Development: SQLite (local file)
- Production: SNAPSHOT_DATABASE_URL, or PostgreSQL from POSTGRES_* variables
- Testing: SQLite (in-memory)
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import quote_plus

from .settings_base import env_str

DEFAULT_SQLITE_FILE = "data/snapshot_store.db"


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Database configuration with environment-based selection.
    """

    database_url: str
    database_type: str  # ***> sqlite, postgresql <***
    echo: bool = False

    @classmethod
    def _build_postgres_url(cls, environ: Optional[Mapping[str, str]]) -> str:
        """
        Build PostgreSQL URL from environment variables with proper encoding.
        """
        user = env_str("POSTGRES_USER", "", environ)
        password = env_str("POSTGRES_PASSWORD", "", environ)
        host = env_str("POSTGRES_HOST", "localhost", environ)
        port = env_str("POSTGRES_PORT", "5432", environ)
        database = env_str("POSTGRES_DB", "", environ)

        if not (user and password and database):
            raise ValueError(
                "POSTGRES_USER, POSTGRES_PASSWORD and POSTGRES_DB are required "
                "for a PostgreSQL snapshot store"
            )

        url = (
            f"postgresql://{quote_plus(user)}:{quote_plus(password)}"
            f"@{host}:{port}/{database}"
        )

        # ***> Log safe version without password <***
        logging.info(
            "PostgreSQL URL configured: postgresql://%s:***@%s:%s/%s",
            user,
            host,
            port,
            database,
        )
        return url

    @classmethod
    def from_url(cls, url: str) -> "DatabaseConfig":
        """
        Create config from custom URL.
        Determines database type from URL scheme.
        """
        db_type = "postgresql" if url.startswith("postgresql") else "sqlite"
        return cls(database_url=url, database_type=db_type)

    @classmethod
    def for_environment(
        cls, environment: str, environ: Optional[Mapping[str, str]] = None
    ) -> "DatabaseConfig":
        """
        An explicit SNAPSHOT_DATABASE_URL always wins.
        """
        explicit = env_str("SNAPSHOT_DATABASE_URL", "", environ)
        if explicit:
            return cls.from_url(explicit)

        environment = environment.lower()
        if environment == "testing":
            return cls(database_url="sqlite:///:memory:", database_type="sqlite")
        if environment == "production" and env_str("POSTGRES_DB", "", environ):
            return cls(
                database_url=cls._build_postgres_url(environ),
                database_type="postgresql",
            )
        return cls(
            database_url=f"sqlite:///{DEFAULT_SQLITE_FILE}", database_type="sqlite"
        )

    def is_sqlite(self) -> bool:
        return self.database_type == "sqlite"

    def is_postgresql(self) -> bool:
        return self.database_type == "postgresql"

    def get_connection_info(self) -> dict:
        """
        Get safe connection information for logging.
        """
        info = {"database_type": self.database_type, "echo": self.echo}

        if self.is_postgresql():
            parts = self.database_url.split("://", 1)[-1].split("@")
            if len(parts) == 2:
                info.update({"user": parts[0].split(":")[0], "host_db": parts[1]})
        else:
            info["database_file"] = self.database_url.split("/")[-1]

        return info
