# PathKit - Core Module
"""
Core infrastructure for PathKit.
Logging, error types and settings shared by the filesystem module and the CLI.
"""

from .logger import StructuredLogger, LogEntry, LogLevel, PathLogger, level_for_verbosity
from .exceptions import (
    FilesystemError,
    ExpansionError,
    NotAFileError,
    NotADirectoryPathError,
    FilesystemIOError,
)
from .config import Settings, load_settings, save_settings

__all__ = [
    "StructuredLogger",
    "LogEntry",
    "LogLevel",
    "PathLogger",
    "level_for_verbosity",
    "FilesystemError",
    "ExpansionError",
    "NotAFileError",
    "NotADirectoryPathError",
    "FilesystemIOError",
    "Settings",
    "load_settings",
    "save_settings",
]

__version__ = "0.1.0"
