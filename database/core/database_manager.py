# database/core/database_manager.py
"""
Core database management and connection handling
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.base import Base
from exceptions import StoreConnectionError, TabularStoreError

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("sqlite", "postgresql")


class DatabaseManager:
    """
    Core database connection and session management
    Handles: engine creation, sessions, health checks, table creation
    """

    def __init__(self, database_url: str, echo: bool = False):
        """
        Args:
            database_url: SQLAlchemy connection URL
            echo: Whether to echo SQL queries (for debugging)

        Raises:
            StoreConnectionError: If the URL is unsupported or the database
                cannot be reached
        """
        if not database_url or not isinstance(database_url, str):
            raise StoreConnectionError("Database URL must be a non-empty string")
        if not database_url.startswith(SUPPORTED_SCHEMES):
            raise StoreConnectionError(
                f"Unsupported database type in URL: {database_url.split('://')[0]}"
            )

        self.database_url = database_url
        self.echo = echo
        self.db_type = "postgresql" if database_url.startswith("postgresql") else "sqlite"
        self.engine = None
        self.SessionLocal = None

        self._initialize_database()

    @property
    def is_memory(self) -> bool:
        return self.db_type == "sqlite" and self.database_url.endswith(":memory:")

    def _initialize_database(self) -> None:
        try:
            if self.db_type == "sqlite":
                self._ensure_sqlite_directory()
                self.engine = self._create_sqlite_engine()
            else:
                self.engine = self._create_postgresql_engine()

            # ***> Test connection <***
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))

            self.SessionLocal = sessionmaker(
                autocommit=False, autoflush=False, bind=self.engine
            )
        except OperationalError as error:
            raise StoreConnectionError(
                f"Failed to connect to database: {error}"
            ) from error
        except SQLAlchemyError as error:
            raise StoreConnectionError(
                f"Database configuration error: {error}"
            ) from error

    def _create_sqlite_engine(self):
        # One shared connection keeps an in-memory database alive
        if self.is_memory:
            engine = create_engine(
                self.database_url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            engine = create_engine(
                self.database_url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
                pool_pre_ping=True,
            )

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.close()

        return engine

    def _create_postgresql_engine(self):
        return create_engine(
            self.database_url,
            echo=self.echo,
            pool_pre_ping=True,
            pool_recycle=3600,
            pool_size=5,
            max_overflow=5,
            pool_timeout=30,
        )

    def _ensure_sqlite_directory(self) -> None:
        if self.is_memory:
            return
        db_path = self.database_url.replace("sqlite:///", "", 1)
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_session(self):
        """
        Context manager for database sessions. Commits on success, rolls
        back on any error.

        Yields:
            Session: SQLAlchemy session object

        Raises:
            StoreConnectionError: If the connection is lost
            TabularStoreError: If the operation fails
        """
        if not self.SessionLocal:
            raise StoreConnectionError("Database not initialized")

        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except OperationalError as error:
            session.rollback()
            raise StoreConnectionError(f"Database connection lost: {error}") from error
        except IntegrityError as error:
            session.rollback()
            raise TabularStoreError(f"Data integrity violation: {error}") from error
        except SQLAlchemyError as error:
            session.rollback()
            raise TabularStoreError(f"Database session error: {error}") from error
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """
        Create all tables defined in the models

        Raises:
            TabularStoreError: If table creation fails
        """
        try:
            Base.metadata.create_all(bind=self.engine)
        except OperationalError as error:
            raise StoreConnectionError(
                f"Database connection lost during table creation: {error}"
            ) from error
        except SQLAlchemyError as error:
            raise TabularStoreError(f"Failed to create tables: {error}") from error

