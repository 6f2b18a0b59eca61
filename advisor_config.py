#!/usr/bin/env python3
"""
Advisor Configuration Manager

Persistent settings for advisor, stored as JSON in a .advisor directory
under the user's home (or wherever ADVISOR_HOME points).
"""

import json
import logging
import os
import pathlib
from dataclasses import asdict, dataclass
from typing import Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_TOP_EXTENSIONS = 10


@dataclass
class AdvisorConfig:
    """Settings shared by all advisor commands"""

    version: str = "1.0"
    top_extensions: int = DEFAULT_TOP_EXTENSIONS
    show_progress: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "AdvisorConfig":
        """Create from dictionary, falling back to defaults for invalid values"""
        top = data.get("top_extensions", DEFAULT_TOP_EXTENSIONS)
        if isinstance(top, bool) or not isinstance(top, int) or top <= 0:
            logger.warning("Ignoring invalid top_extensions value %r", top)
            top = DEFAULT_TOP_EXTENSIONS

        show_progress = data.get("show_progress", True)
        if not isinstance(show_progress, bool):
            logger.warning("Ignoring invalid show_progress value %r", show_progress)
            show_progress = True

        return cls(
            version=str(data.get("version", "1.0")),
            top_extensions=top,
            show_progress=show_progress,
        )


class ConfigManager:
    """Loads and saves the advisor configuration file"""

    def __init__(self, config_dir: Optional[Union[str, pathlib.Path]] = None):
        """Initialize configuration manager

        Args:
            config_dir: Override the default .advisor directory location
        """
        if config_dir:
            self.config_dir = pathlib.Path(config_dir)
        elif os.environ.get("ADVISOR_HOME"):
            self.config_dir = pathlib.Path(os.environ["ADVISOR_HOME"])
        else:
            self.config_dir = pathlib.Path.home() / ".advisor"

        self.config_file = self.config_dir / "config.json"

    def load(self) -> AdvisorConfig:
        """Load configuration from file"""
        if not self.config_file.exists():
            return AdvisorConfig()

        try:
            with self.config_file.open() as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            # If config is corrupted, return default
            logger.warning("Could not read %s, using defaults: %s", self.config_file, e)
            return AdvisorConfig()

        if not isinstance(data, dict):
            logger.warning("Unexpected content in %s, using defaults", self.config_file)
            return AdvisorConfig()
        return AdvisorConfig.from_dict(data)

    def save(self, config: AdvisorConfig):
        """Save configuration to file"""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with self.config_file.open("w") as f:
            json.dump(config.to_dict(), f, indent=2)
