"""
Configuration management for regression tests.

This module handles loading and managing configuration settings
for the recorder, the test wrappers and the command line.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "regtest_config.json"


@dataclass
class RegTestConfig:
    """Configuration for regression testing."""

    # Directory, relative to the project root, holding derived baseline paths
    data_dir: str = "regtest_data"

    # Baseline file formatting
    indent: int = 2

    # Raise on the first mismatching entry instead of at finalization
    fail_fast: bool = True

    # Output settings
    verbose: bool = False
    quiet: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegTestConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = {key: value for key, value in data.items() if key in cls.__dataclass_fields__}
        return cls(**known)

    @classmethod
    def from_file(cls, config_path: Path) -> "RegTestConfig":
        """Load configuration from JSON file."""
        config_path = Path(config_path)
        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "r") as f:
                data = json.load(f)
            return cls.from_dict(data)
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            return cls()

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to JSON file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def get_data_dir(self, root: Optional[Path] = None) -> Path:
        """Get the baseline data directory, optionally anchored at ``root``."""
        if root is None:
            return Path(self.data_dir)
        return Path(root) / self.data_dir


class ConfigManager:
    """Manages configuration loading and saving."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = Path(config_path) if config_path else Path(DEFAULT_CONFIG_NAME)
        self.config = RegTestConfig.from_file(self.config_path)

    def get_config(self) -> RegTestConfig:
        """Get the current configuration."""
        return self.config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values."""
        for key, value in kwargs.items():
            if hasattr(self.config, key):
                setattr(self.config, key, value)

    def create_default_config(self) -> None:
        """Create a default configuration file."""
        default_config = RegTestConfig()
        default_config.save_to_file(self.config_path)
        logger.info(f"Created default configuration at {self.config_path}")
