"""Configuration validation."""

import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary from loader

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    errors.extend(_validate_paths(config.get('paths', {})))
    errors.extend(_validate_scanning(config.get('scanning', {})))
    errors.extend(_validate_renaming(config.get('renaming', {})))
    errors.extend(_validate_logging(config.get('logging', {})))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )


def _validate_paths(section: Dict[str, Any]) -> List[str]:
    """Validate paths section."""
    errors = []

    if not isinstance(section, dict):
        return ["paths must be a mapping"]

    for path_key in ['dats', 'roms']:
        if not section.get(path_key):
            errors.append(f"paths.{path_key} is required")
        elif not isinstance(section[path_key], str):
            errors.append(f"paths.{path_key} must be a string path")

    # Output files are optional; null disables the export
    for path_key in ['plan_csv', 'unmatched']:
        value = section.get(path_key)
        if value is not None and not isinstance(value, str):
            errors.append(f"paths.{path_key} must be a string path or null")

    return errors


def _validate_scanning(section: Dict[str, Any]) -> List[str]:
    """Validate scanning section."""
    errors = []

    if not isinstance(section, dict):
        return ["scanning must be a mapping"]

    extensions = section.get('extensions', ['.nes'])
    if not isinstance(extensions, list):
        errors.append("scanning.extensions must be a list")
    elif not extensions:
        errors.append("scanning.extensions must not be empty")
    else:
        for ext in extensions:
            if not isinstance(ext, str) or not ext.strip():
                errors.append(f"Invalid extension: {ext!r}")
            elif not ext.startswith('.'):
                errors.append(f"Extension must start with '.': {ext}")

    return errors


def _validate_renaming(section: Dict[str, Any]) -> List[str]:
    """Validate renaming options section."""
    errors = []

    if not isinstance(section, dict):
        return ["renaming must be a mapping"]

    for flag in ['apply', 'fallback_prefix_strip', 'verbose_byte_dump']:
        if flag in section and not isinstance(section[flag], bool):
            errors.append(f"renaming.{flag} must be a boolean")

    return errors


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging options section."""
    errors = []

    if not isinstance(section, dict):
        return ["logging must be a mapping"]

    level = section.get('level', 'INFO')
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if not isinstance(level, str) or level.upper() not in valid_levels:
        errors.append(f"logging.level must be one of: {', '.join(valid_levels)}")

    console = section.get('console', True)
    if not isinstance(console, bool):
        errors.append("logging.console must be a boolean")

    if 'file' in section and section['file'] is not None:
        if not isinstance(section['file'], str):
            errors.append("logging.file must be a string path or null")

    return errors
