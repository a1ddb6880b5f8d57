"""
Settings validation system for the SS Rando tracker.
"""

import logging
from pathlib import Path
from typing import List, TYPE_CHECKING

from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # User table overrides are optional, but a configured directory must exist
        tables_dir = self.settings.paths.user_tables_dir
        if tables_dir:
            if not tables_dir.exists():
                errors.append(f"User tables directory does not exist: {tables_dir}")
            elif not tables_dir.is_dir():
                errors.append(f"User tables path is not a directory: {tables_dir}")

        raw_policy = self.settings.settings.value("import/conflict_policy", "")
        if raw_policy and str(raw_policy) not in ("table_order", "error"):
            warnings.append(f"Unknown conflict policy '{raw_policy}', table order is used")

        # Drop recent files that disappeared
        recent_files = self.settings.paths.recent_files
        valid_recent: List[str] = []
        for file_path in recent_files:
            if Path(file_path).exists():
                valid_recent.append(file_path)
            else:
                warnings.append(f"Recent file no longer exists: {file_path}")

        if len(valid_recent) != len(recent_files):
            self.settings.settings.setValue("paths/recent_files", valid_recent)
            self.settings.settings.sync()

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
