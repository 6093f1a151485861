"""
Configuration loader — reads boardprep.yml into a ProvisionConfig.

The file is optional. Without one, the built-in defaults describe the
stock setup. With one, every key it sets overrides the default.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from boardprep.core.models.config import ProvisionConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "boardprep.yml"


class ConfigError(Exception):
    """Raised when boardprep.yml is unreadable or invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for boardprep.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to boardprep.yml, or None if not found.
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


def load_config(path: Path | None = None) -> ProvisionConfig:
    """Load and validate provisioning configuration.

    Args:
        path: Explicit path to boardprep.yml. If None, searches upward
            and falls back to defaults when nothing is found.

    Returns:
        Validated ProvisionConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using built-in defaults", CONFIG_FILE)
            return ProvisionConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return ProvisionConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = ProvisionConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s", path)
    return config
