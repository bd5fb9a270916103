"""
Settings for PathKit.

Settings are read from a YAML file so the CLI can pick a verbosity and a
log file without flags on every call. The library itself never reads it.
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logger import StructuredLogger


DEFAULT_CONFIG_PATH = "pathkit.yaml"


@dataclass
class Settings:
    """PathKit settings."""
    verbosity: int = 0
    log_path: Optional[str] = None
    log_to_stderr: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Build settings from a mapping, ignoring unknown keys."""
        defaults = cls()
        return cls(
            verbosity=int(data.get("verbosity", defaults.verbosity)),
            log_path=data.get("log_path", defaults.log_path),
            log_to_stderr=bool(data.get("log_to_stderr", defaults.log_to_stderr)),
        )

    def build_logger(self) -> StructuredLogger:
        """Create a logger configured from these settings."""
        return StructuredLogger.for_verbosity(
            self.verbosity,
            log_path=self.log_path,
            echo=self.log_to_stderr
        )

    def build_service(self):
        """Create a PathService that logs through a logger built from these settings."""
        from modules.filesystem import PathService

        return PathService(verbosity=self.verbosity, logger=self.build_logger())


def load_settings(config_path: str = DEFAULT_CONFIG_PATH) -> Settings:
    """
    Load settings from a YAML file.

    The file may nest the values under a top-level ``pathkit:`` key or hold
    them directly. A missing or unreadable file gives the defaults.
    """
    path = Path(config_path)
    if not path.exists():
        return Settings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return Settings()

    if not isinstance(config, dict):
        return Settings()

    section = config.get("pathkit", config)
    if not isinstance(section, dict):
        return Settings()

    try:
        return Settings.from_dict(section)
    except (TypeError, ValueError):
        return Settings()


def save_settings(settings: Settings, config_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write settings back to a YAML file under the ``pathkit:`` key."""
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump({"pathkit": asdict(settings)}, f, default_flow_style=False)
