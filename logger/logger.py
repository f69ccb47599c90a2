# logger/logger.py
"""
Session based logging - each sync run gets its own log file
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .constants import LoggingConstants


def setup_session_logger(
    name: str = "match_sync",
    log_dir: Union[str, Path] = "logs",
    level: Union[int, str] = logging.INFO,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure the root logger for one run.

    Log files are named like:
    - match_sync_2025-01-15_14-30-25.log
    - match_sync_2025-01-15_16-45-12.log

    The console gets a RichHandler; module loggers propagate to root so
    every package logs through the same two handlers.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_file = log_dir / f"{name}_{timestamp}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            LoggingConstants.FILE_FORMAT, datefmt=LoggingConstants.FILE_DATE_FORMAT
        )
    )

    console_handler = RichHandler(
        console=console, show_path=False, rich_tracebacks=True
    )
    console_handler.setLevel(level)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if root.hasHandlers():
        root.handlers.clear()
    root.addHandler(file_handler)
    root.addHandler(console_handler)

    for noisy in LoggingConstants.NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger(name)
    logger.info("=== NEW SESSION STARTED: %s ===", timestamp)
    logger.info("Log file: %s", log_file)
    return logger
