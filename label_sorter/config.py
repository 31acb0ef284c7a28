"""
Configuration management for label-sorter.

Configuration hierarchy (highest to lowest priority):
1. CLI arguments (passed as overrides)
2. YAML config file (--config)
3. Hardcoded defaults

Example:
    >>> from label_sorter.config import load_config
    >>> config = load_config("label_sorter.yaml", overrides={"port": 9000})
    >>> config.images_dir
    PosixPath('images')
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from label_sorter.errors import ConfigError


logger = logging.getLogger(__name__)

DEFAULT_IMAGES_DIR = "images"
DEFAULT_LABELS_FILE = "labels.txt"
DEFAULT_ARCHIVE_PATH = "result.zip"
DEFAULT_ITEMS_PER_PAGE = 10
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 18081

_PATH_KEYS = {"images_dir", "labels_file", "archive_path", "log_dir"}


@dataclass(frozen=True)
class LabelerConfig:
    """Settings for one run of the service."""
    images_dir: Path = Path(DEFAULT_IMAGES_DIR)
    labels_file: Path = Path(DEFAULT_LABELS_FILE)
    archive_path: Path = Path(DEFAULT_ARCHIVE_PATH)
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_dir: Path = Path("logs")
    log_level: str = "INFO"

    def __post_init__(self):
        if self.items_per_page < 1:
            raise ConfigError(f"items_per_page must be positive, got {self.items_per_page}")
        if not 0 < self.port < 65536:
            raise ConfigError(f"port out of range: {self.port}")

    def with_overrides(self, overrides: Optional[Dict[str, Any]]) -> 'LabelerConfig':
        """Return a copy with non-None overrides applied."""
        if not overrides:
            return self
        return replace(self, **_coerce(overrides))


def _coerce(values: Dict[str, Any]) -> Dict[str, Any]:
    """Keep known keys with a value, converting path settings to Path."""
    known = {f.name for f in fields(LabelerConfig)}
    result = {}
    for key, value in values.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key: {key}")
            continue
        if value is None:
            continue
        result[key] = Path(value) if key in _PATH_KEYS else value
    return result


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML configuration file into a dict."""
    config_file = Path(config_path)
    if not config_file.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping, got {type(data).__name__}")

    logger.info(f"Loaded config from: {config_file}")
    return data


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> LabelerConfig:
    """
    Build the effective configuration.

    Args:
        config_path: Optional YAML file with settings
        overrides: Values that take precedence over the file (None values are skipped)

    Returns:
        LabelerConfig with defaults, file values and overrides merged
    """
    file_values = load_yaml_config(config_path) if config_path else {}
    try:
        return LabelerConfig(**_coerce(file_values)).with_overrides(overrides)
    except TypeError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
