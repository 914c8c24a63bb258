"""Configuration management for mailfilter."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from mailfilter.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)

# Longest file name stem written by ``extract --split``
DEFAULT_FILENAME_MAX_LENGTH = 251


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "mailfilter" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        colored_output: Whether to use colored terminal output.
        extract_dir: Default directory for ``extract --split``.
        filename_max_length: Maximum length of a split file name stem.
        config_path: Path where config was loaded from (None if defaults).
    """

    colored_output: bool = True
    extract_dir: Path | None = None
    filename_max_length: int = DEFAULT_FILENAME_MAX_LENGTH
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        if self.extract_dir is not None:
            self.extract_dir = self.extract_dir.expanduser().resolve()
            if self.extract_dir.exists() and not self.extract_dir.is_dir():
                warnings.append(f"Extract directory is not a directory: {self.extract_dir}")

        if self.filename_max_length < 1:
            raise ConfigValidationError(
                "extract.filename_max_length",
                self.filename_max_length,
                "must be a positive integer",
            )

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        # Use defaults
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: mailfilter init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    # Load from file
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    # Parse [extract] section
    extract = data.get("extract", {})
    if "directory" in extract:
        value = extract["directory"]
        if not isinstance(value, str):
            raise ConfigValidationError("extract.directory", value, "must be a string path")
        config.extract_dir = Path(value)

    if "filename_max_length" in extract:
        value = extract["filename_max_length"]
        # bool is an int subclass
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigValidationError(
                "extract.filename_max_length", value, "must be an integer"
            )
        config.filename_max_length = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.

    Returns:
        The resolved path written.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Build TOML structure
    data: dict[str, Any] = {
        "display": {
            "colored_output": config.colored_output,
        },
        "extract": {
            "filename_max_length": config.filename_max_length,
        },
    }

    if config.extract_dir is not None:
        data["extract"]["directory"] = str(config.extract_dir)

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)

    return config_path
