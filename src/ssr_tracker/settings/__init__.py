"""
Settings package for the SS Rando tracker.

This package provides a modular, type-safe configuration management system
using Qt's QSettings for cross-platform storage.

Usage:
    from ssr_tracker.settings import AppSettings, ValidationResult

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigVersion, ConfigError, ConflictPolicy, ValidationResult
from .importing import ImportSettings
from .paths import PathSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ConflictPolicy",
    "ValidationResult",
    "ImportSettings",
    "PathSettings",
]
