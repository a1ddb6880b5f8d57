"""
Settings migration system for the SS Rando tracker.
"""

import logging
from typing import TYPE_CHECKING

from .types import ConfigVersion

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class SettingsMigrator:
    """Handles configuration migration between versions."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def ensure_version(self) -> None:
        """Ensure configuration version is set and handle migrations."""
        current_version = str(self.settings.value("app/version", "") or "")

        if not current_version:
            # First run - set current version
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.sync()
            logger.info("First run detected, initializing configuration")
        elif current_version != ConfigVersion.CURRENT.value:
            self._migrate_config(current_version, ConfigVersion.CURRENT.value)

    def _migrate_config(self, from_version: str, to_version: str) -> None:
        """Migrate configuration from old version to new version."""
        logger.info(f"Migrating configuration from {from_version} to {to_version}")

        if from_version == ConfigVersion.V1_0.value and to_version == ConfigVersion.V1_1.value:
            self._migrate_1_0_to_1_1()
        else:
            logger.warning(
                f"No migration path from {from_version} to {to_version}, keeping stored values"
            )

        self.settings.setValue("app/version", to_version)
        self.settings.setValue("app/migrated_from", from_version)
        self.settings.sync()
        logger.info(f"Migration from {from_version} to {to_version} completed")

    def _migrate_1_0_to_1_1(self) -> None:
        """Migrate from version 1.0 to 1.1 - rename strict flag, drop logic cache."""
        logger.debug("Performing migration from 1.0 to 1.1")

        if self.settings.contains("import/strict"):
            old_strict = self.settings.value("import/strict", False)
            if isinstance(old_strict, str):
                old_strict = old_strict.lower() in ("true", "1", "yes")
            self.settings.setValue("import/strict_version", bool(old_strict))
            self.settings.remove("import/strict")
            logger.info(f"Migrated import/strict -> import/strict_version: {bool(old_strict)}")

        # Logic sources are no longer cached locally
        old_cache = self.settings.value("paths/logic_cache", "")
        if old_cache:
            logger.info(f"Removed obsolete logic cache path: {old_cache}")
            self.settings.remove("paths/logic_cache")

        self.settings.sync()
