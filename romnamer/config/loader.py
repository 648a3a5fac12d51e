"""Configuration loading and parsing."""

import yaml
from copy import deepcopy
from pathlib import Path
from typing import Dict, Any, Optional

DEFAULT_CONFIG_NAME = "romnamer.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    'paths': {
        'dats': './dats',
        'roms': './roms',
        'plan_csv': 'rename_plan.csv',
        'unmatched': 'unmatched.txt',
    },
    'scanning': {
        'extensions': ['.nes'],
    },
    'renaming': {
        'apply': False,
        'fallback_prefix_strip': False,
        'verbose_byte_dump': False,
    },
    'logging': {
        'level': 'INFO',
        'console': True,
        'file': 'romnamer.log',
    },
}


class ConfigError(Exception):
    """Configuration-related errors."""
    pass


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and parse configuration file.

    Values from the file are merged over DEFAULT_CONFIG. With no explicit
    path, ./romnamer.yaml is used if present, otherwise the defaults.

    Args:
        config_path: Path to YAML config file

    Returns:
        Parsed configuration dictionary

    Raises:
        ConfigError: If config file cannot be loaded or parsed
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not config_path.exists():
            return deepcopy(DEFAULT_CONFIG)
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}")

    # Empty file means "all defaults"
    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ConfigError("Configuration file must contain a YAML dictionary")

    return merge_config(DEFAULT_CONFIG, config)


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge override into a copy of base."""
    result = deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_config(result[key], value)
        else:
            result[key] = value
    return result


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., 'scanning.extensions')
        default: Default value if path not found

    Returns:
        Configuration value or default

    Example:
        >>> get_config_value(config, 'scanning.extensions')
        ['.nes']
    """
    keys = path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
