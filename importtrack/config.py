"""
Configuration management for the import tracking engine.

This module provides configuration loading with sensible defaults for the
fix mode, warning category and suppression settings.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional
import logging
import os

import yaml

logger = logging.getLogger(__name__)

CONFIG_NAMES = [".importtrack.yml", ".importtrack.yaml", "importtrack.yml", "importtrack.yaml"]


class ConfigError(Exception):
    """Raised when a config file cannot be turned into a TrackerConfig."""


@dataclass
class TrackerConfig:
    """Configuration for unused-import reporting."""

    # Emit fix actions with each warning
    quickfix: bool = False
    # Keep warnings plain even when quickfix is set
    quickfix_silent: bool = False

    category: str = "unused-imports"

    # Suppression policy for SuppressingSink
    suppressed_owners: List[str] = None
    disabled_categories: List[str] = None

    # Qualifier -> deprecation entries, see DeprecationTable.from_config
    deprecations: Dict[str, Any] = None

    def __post_init__(self):
        if self.suppressed_owners is None:
            self.suppressed_owners = []
        if self.disabled_categories is None:
            self.disabled_categories = []
        if self.deprecations is None:
            self.deprecations = {}

    @property
    def emit_fixes(self) -> bool:
        return self.quickfix and not self.quickfix_silent


def _defaults() -> Dict[str, Any]:
    return {
        "quickfix": False,
        "quickfix_silent": False,
        "category": "unused-imports",
        "suppressed_owners": [],
        "disabled_categories": [],
        "deprecations": {},
    }


def _from_mapping(data: Any) -> TrackerConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"expected a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(TrackerConfig)}
    merged = _defaults()
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key: {key}")
            continue
        merged[key] = value

    for key in ("suppressed_owners", "disabled_categories"):
        if not isinstance(merged[key], list):
            raise ConfigError(f"'{key}' must be a list")
        merged[key] = [str(item) for item in merged[key]]
    if not isinstance(merged["deprecations"], dict):
        raise ConfigError("'deprecations' must be a mapping")

    return TrackerConfig(**merged)


def load_config(config_path: Optional[str] = None) -> TrackerConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, uses defaults.

    Returns:
        TrackerConfig instance
    """
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f) or {}
            return _from_mapping(file_config)
        except (yaml.YAMLError, ConfigError, OSError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}; using default configuration")

    return TrackerConfig(**_defaults())


def get_default_config() -> TrackerConfig:
    """Get default configuration without loading from file."""
    return load_config(None)


def save_config(config: TrackerConfig, config_path: str) -> None:
    """
    Save configuration to file.

    Args:
        config: TrackerConfig to save
        config_path: Path where to save the config
    """
    config_dict = {
        "quickfix": config.quickfix,
        "quickfix_silent": config.quickfix_silent,
        "category": config.category,
        "suppressed_owners": config.suppressed_owners,
        "disabled_categories": config.disabled_categories,
        "deprecations": config.deprecations,
    }

    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)


def find_config_file(start_path: str = ".") -> Optional[str]:
    """
    Find configuration file by walking up the directory tree.

    Looks for files in this order:
    1. .importtrack.yml
    2. .importtrack.yaml
    3. importtrack.yml
    4. importtrack.yaml

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to config file or None if not found
    """
    current_path = os.path.abspath(start_path)

    while True:
        for config_name in CONFIG_NAMES:
            config_path = os.path.join(current_path, config_name)
            if os.path.exists(config_path):
                return config_path

        parent_path = os.path.dirname(current_path)
        if parent_path == current_path:
            # Reached the root directory
            break
        current_path = parent_path

    return None
