"""Configuration management for dotin."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_FILE = Path("~/.config/dotin/config.yaml")

DEFAULT_CONFIG: Dict[str, Any] = {
    "dotfiles_dir": "~/dotfiles",
    "home_dir": "~",
    "default_group": None,
}


def is_valid_group_name(group: str) -> bool:
    """Check that a group is a single folder directly inside the dotfiles root."""
    if group in ("", ".", ".."):
        return False
    return not any(sep and sep in group for sep in ("/", os.sep, os.altsep))


class Config:
    """Configuration class for dotin.

    Attributes:
        dotfiles_dir (Path): Root of the dotfiles repository, one folder per group.
        home_dir (Path): Directory files are imported from.
        default_group (Optional[str]): Group used when none is given.
    """

    def __init__(self) -> None:
        """Initialize configuration with the defaults."""
        self.config: Dict[str, Any] = {}
        self.dotfiles_dir: Path = Path()
        self.home_dir: Path = Path()
        self.default_group: Optional[str] = None
        self._merge_config(DEFAULT_CONFIG)

    @staticmethod
    def default_path() -> Path:
        """Return the config file location, honouring ``DOTIN_CONFIG``."""
        override = os.environ.get("DOTIN_CONFIG")
        if override:
            return Path(override).expanduser()
        return DEFAULT_CONFIG_FILE.expanduser()

    def load_config(self, config_file: Optional[Path] = None) -> None:
        """Load configuration from a YAML file and merge it over the defaults.

        Args:
            config_file: File to load. If None, the default location is used
                and silently ignored when missing.

        Raises:
            ConfigError: If the file can't be read or parsed.
        """
        if config_file is None:
            config_file = self.default_path()
            if not config_file.exists():
                return

        try:
            with open(config_file, "r") as f:
                user_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config file {config_file}: {e}") from e

        if user_config:
            self._merge_config(user_config)

    def _merge_config(self, config: Dict[str, Any]) -> None:
        """Merge configuration with current configuration."""
        if not isinstance(config, dict):
            raise ConfigError("Configuration must be a dictionary")

        self.config.update(config)

        if "dotfiles_dir" in config:
            if not isinstance(config["dotfiles_dir"], str):
                raise ConfigError("dotfiles_dir must be a string")
            self.dotfiles_dir = Path(config["dotfiles_dir"]).expanduser()

        if "home_dir" in config:
            if not isinstance(config["home_dir"], str):
                raise ConfigError("home_dir must be a string")
            self.home_dir = Path(config["home_dir"]).expanduser()

        if "default_group" in config:
            group = config["default_group"]
            if group is not None and not isinstance(group, str):
                raise ConfigError("default_group must be a string")
            self.default_group = group

    def validate(self) -> List[str]:
        """Validate configuration."""
        errors = []

        if not self.dotfiles_dir.is_absolute():
            errors.append(f"dotfiles_dir {self.dotfiles_dir} must be an absolute path")

        if not self.home_dir.is_absolute():
            errors.append(f"home_dir {self.home_dir} must be an absolute path")

        if self.default_group is not None:
            if not is_valid_group_name(self.default_group):
                errors.append(f"default_group {self.default_group!r} must be a plain folder name")

        return errors

    def group_dir(self, group: str) -> Path:
        """Return the folder of ``group`` inside the dotfiles root."""
        return self.dotfiles_dir / group

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value.

        Args:
            key: The configuration key to get.
            default: The default value to return if the key is not found.

        Returns:
            The configuration value, or the default if not found.
        """
        return self.config.get(key, default)
