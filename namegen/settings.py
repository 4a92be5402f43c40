#!/usr/bin/env python3
"""
Settings
========
Application settings for namegen, read from configs/app.yaml.

Usage:
    from namegen import settings

    settings.default_theme()      # 'cyberpunk'
    settings.default_count()      # 10
    settings.get_setting('logging.format')

Set NAMEGEN_CONFIG to the path of another YAML file to replace the bundled
one. The typed accessors check their values and raise SettingsError naming
the offending key.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from .exceptions import SettingsError

CONFIG_DIR = Path(__file__).resolve().parent / "configs"
CONFIG_ENV = "NAMEGEN_CONFIG"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def config_path() -> Path:
    """Settings file in use: $NAMEGEN_CONFIG, else the bundled app.yaml."""
    override = os.environ.get(CONFIG_ENV)
    if override:
        return resolve_path(override)
    return CONFIG_DIR / "app.yaml"


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    path = config_path()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SettingsError(f"Unable to read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in settings file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping")
    return data


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


# =============================================================================
# Typed accessors
# =============================================================================

def _bad(key: str, value: Any, expected: str) -> SettingsError:
    return SettingsError(f"Setting {key} must be {expected}, got {value!r} ({config_path()})")


def default_theme() -> str:
    """Theme used by `namegen generate` when --theme is omitted."""
    value = get_setting('cli.default_theme', 'cyberpunk')
    if not isinstance(value, str) or not value.strip():
        raise _bad('cli.default_theme', value, "a theme name")
    return value.strip()


def default_count() -> int:
    """Names per `namegen generate` call when -n is omitted."""
    value = get_setting('cli.default_count', 10)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise _bad('cli.default_count', value, "a positive integer")
    return value


def logging_level() -> int:
    value = get_setting('logging.level', 'WARNING')
    if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
        raise _bad('logging.level', value, f"one of {', '.join(LOG_LEVELS)}")
    return getattr(logging, value.upper())


def logging_format() -> str:
    value = get_setting('logging.format', DEFAULT_LOG_FORMAT)
    if not isinstance(value, str) or not value:
        raise _bad('logging.format', value, "a format string")
    return value


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a user-supplied path against the working directory (unless absolute)."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if not path.is_absolute():
        path = ((base or Path.cwd()) / path).resolve()
    return path


__all__ = [
    "load_app_config",
    "get_setting",
    "default_theme",
    "default_count",
    "logging_level",
    "logging_format",
    "resolve_path",
]
