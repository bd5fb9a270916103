"""
Structured Logger for PathKit.

Provides leveled, key-value logging of filesystem operations. Entries are
rendered to a text stream and can also be appended to a JSONL file for later
inspection.
"""

import json
import sys
from dataclasses import dataclass, asdict, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional, Dict, Any, Protocol, TextIO


class LogLevel(Enum):
    """Severity of a log entry. Higher values are more severe."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


def level_for_verbosity(verbosity: int) -> LogLevel:
    """
    Map a verbosity integer to a severity threshold.

    0 logs errors only; 1 adds warnings; 2 and 3 add info; 4 and up
    log everything down to debug.
    """
    if verbosity <= 0:
        return LogLevel.ERROR
    if verbosity == 1:
        return LogLevel.WARNING
    if verbosity <= 3:
        return LogLevel.INFO
    return LogLevel.DEBUG


class PathLogger(Protocol):
    """Anything PathService can log through."""

    def debug(self, message: str, **fields: Any) -> None: ...

    def info(self, message: str, **fields: Any) -> None: ...

    def warning(self, message: str, **fields: Any) -> None: ...

    def error(self, message: str, **fields: Any) -> None: ...


@dataclass
class LogEntry:
    """Represents a single log entry."""
    timestamp: str
    level: str
    message: str
    fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        level: LogLevel,
        message: str,
        fields: Optional[Dict[str, Any]] = None
    ) -> "LogEntry":
        """Factory method to create a log entry with current timestamp."""
        return cls(
            timestamp=datetime.now().isoformat(),
            level=level.name,
            message=message,
            fields=fields or {}
        )

    def to_json(self) -> str:
        """Convert entry to JSON string."""
        return json.dumps(asdict(self), ensure_ascii=False, default=str)

    @classmethod
    def from_json(cls, json_str: str) -> "LogEntry":
        """Create entry from JSON string."""
        data = json.loads(json_str)
        return cls(**data)

    def render(self) -> str:
        """Render as a single human-readable line."""
        parts = [f"{self.timestamp} {self.level:<7} {self.message}"]
        for key in sorted(self.fields):
            parts.append(f"{key}={self.fields[key]}")
        return " ".join(parts)


class StructuredLogger:
    """
    Leveled key-value logger.

    Entries below the configured level are dropped. Accepted entries are
    written to the text stream (stderr unless told otherwise) and, when a
    log path is given, appended to a JSONL file.
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.ERROR,
        log_path: Optional[str] = None,
        stream: Optional[TextIO] = None,
        echo: bool = True
    ):
        """
        Initialize the logger.

        Args:
            level: Minimum severity that gets recorded
            log_path: Optional path to a JSONL log file
            stream: Text stream for rendered entries (default: stderr)
            echo: If False, entries only go to the log file
        """
        self.level = level
        self.log_path = Path(log_path) if log_path else None
        self.stream = stream
        self.echo = echo

    @classmethod
    def for_verbosity(cls, verbosity: int, **kwargs: Any) -> "StructuredLogger":
        """Create a logger whose threshold is derived from a verbosity level."""
        return cls(level=level_for_verbosity(verbosity), **kwargs)

    def _ensure_log_directory(self) -> None:
        """Create the log directory if it doesn't exist."""
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.value >= self.level.value

    def log(
        self,
        level: LogLevel,
        message: str,
        fields: Optional[Dict[str, Any]] = None
    ) -> Optional[LogEntry]:
        """
        Record an entry if it passes the level threshold.

        Returns the created LogEntry, or None if it was filtered out.
        """
        if not self.is_enabled_for(level):
            return None

        entry = LogEntry.create(level, message, fields)

        if self.echo:
            stream = self.stream if self.stream is not None else sys.stderr
            stream.write(entry.render() + "\n")

        if self.log_path is not None:
            self._ensure_log_directory()
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(entry.to_json() + "\n")

        return entry

    def debug(self, message: str, **fields: Any) -> None:
        self.log(LogLevel.DEBUG, message, fields)

    def info(self, message: str, **fields: Any) -> None:
        self.log(LogLevel.INFO, message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.log(LogLevel.WARNING, message, fields)

    def error(self, message: str, **fields: Any) -> None:
        self.log(LogLevel.ERROR, message, fields)

    def get_recent(self, limit: int = 100) -> List[LogEntry]:
        """
        Get the most recent entries from the JSONL log file.

        Args:
            limit: Maximum number of entries to return

        Returns:
            List of LogEntry objects, most recent first
        """
        entries = []

        if self.log_path is None or not self.log_path.exists():
            return entries

        with open(self.log_path, "r", encoding="utf-8") as f:
            lines = f.readlines()

        for line in reversed(lines[-limit:]):
            line = line.strip()
            if line:
                try:
                    entries.append(LogEntry.from_json(line))
                except (json.JSONDecodeError, TypeError):
                    continue

        return entries
