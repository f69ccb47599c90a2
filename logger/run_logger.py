# logger/run_logger.py
"""
Structured per-run audit log. Every entry becomes a LOG row and is also
sent to the regular python logger.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional

from .constants import LoggingConstants

_LEVELS = {
    LoggingConstants.LEVEL_INFO: logging.INFO,
    LoggingConstants.LEVEL_WARNING: logging.WARNING,
    LoggingConstants.LEVEL_ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class LogEntry:
    """
    One LOG row
    """

    run_id: str
    timestamp: str
    script: str
    function: str
    action: str
    table: str
    level: str
    message: str
    detail: str = ""

    def to_row(self) -> List[str]:
        return [
            self.run_id,
            self.timestamp,
            self.script,
            self.function,
            self.action,
            self.table,
            self.level,
            self.message,
            self.detail,
        ]


class RunLogger:
    """
    Collects LOG rows for one run.
    """

    def __init__(
        self,
        run_id: str,
        script: str,
        logger: Optional[logging.Logger] = None,
    ):
        self.run_id = run_id
        self.script = script
        self.logger = logger or logging.getLogger(script)
        self.entries: List[LogEntry] = []

    def log(
        self,
        level: str,
        function: str,
        action: str,
        message: str,
        table: str = "",
        detail: Any = "",
    ) -> LogEntry:
        entry = LogEntry(
            run_id=self.run_id,
            timestamp=datetime.now(timezone.utc).isoformat(),
            script=self.script,
            function=function,
            action=action,
            table=table,
            level=level,
            message=message,
            detail="" if detail is None else str(detail),
        )
        self.entries.append(entry)

        text = f"[{function}] {action}"
        if table:
            text += f" {table}"
        text += f": {message}"
        if entry.detail:
            text += f" ({entry.detail})"
        self.logger.log(_LEVELS.get(level, logging.INFO), text)
        return entry

    def info(self, function: str, action: str, message: str, **kwargs) -> LogEntry:
        return self.log(LoggingConstants.LEVEL_INFO, function, action, message, **kwargs)

    def warning(
        self, function: str, action: str, message: str, **kwargs
    ) -> LogEntry:
        return self.log(
            LoggingConstants.LEVEL_WARNING, function, action, message, **kwargs
        )

    def error(self, function: str, action: str, message: str, **kwargs) -> LogEntry:
        return self.log(
            LoggingConstants.LEVEL_ERROR, function, action, message, **kwargs
        )

    @property
    def error_count(self) -> int:
        return sum(1 for e in self.entries if e.level == LoggingConstants.LEVEL_ERROR)

    def rows(self) -> List[List[str]]:
        return [entry.to_row() for entry in self.entries]
