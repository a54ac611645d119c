"""
Configuration loader — reads macsetup.yml into a SetupConfig.

The file is optional. Without one, the built-in package list and
default locations are used.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from macsetup.core.models.config import SetupConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "macsetup.yml"


class ConfigError(Exception):
    """Raised when the setup configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for macsetup.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to macsetup.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None, search: bool = True) -> SetupConfig:
    """Load and validate the setup configuration.

    Args:
        path: Explicit path to a config file. Must exist if given.
        search: When ``path`` is None, look for macsetup.yml upward
            from the cwd. If nothing is found, defaults apply.

    Returns:
        Validated SetupConfig.

    Raises:
        ConfigError: If the file is missing (explicit path), unreadable,
            or invalid.
    """
    if path is None and search:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using built-in defaults", CONFIG_FILE)
        return SetupConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading setup config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "setup" key or be flat
    setup_data = data.get("setup", data)
    if not isinstance(setup_data, dict):
        raise ConfigError(f"Expected 'setup' to be a mapping in {path}")

    try:
        config = SetupConfig.model_validate(setup_data)
    except Exception as e:
        raise ConfigError(f"Invalid setup configuration: {e}") from e

    logger.info("Loaded %d packages from %s", len(config.packages), path)
    return config
