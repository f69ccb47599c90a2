from .constants import (
    LoggingConstants,
    ScrapingConstants,
    SheetConstants,
    SnapshotColumns,
)
from .logger import setup_session_logger
from .run_logger import LogEntry, RunLogger

__all__ = [
    "LoggingConstants",
    "ScrapingConstants",
    "SheetConstants",
    "SnapshotColumns",
    "setup_session_logger",
    "LogEntry",
    "RunLogger",
]
