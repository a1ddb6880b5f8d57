"""
Core settings management for the SS Rando tracker.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from PySide6.QtCore import QSettings

from .types import ConfigError, ConfigVersion, ConflictPolicy, ValidationResult
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .paths import PathSettings
from .importing import ImportSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)

ORGANIZATION_NAME = "ssrando"
APPLICATION_NAME = "ssr_tracker"


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to tracker settings with cross-platform
    storage, versioned migration and validation.
    """

    def __init__(
        self, profile: str = "default", settings_file: Optional[Union[str, Path]] = None
    ):
        """Initialize settings with organization, application name, and profile.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: Optional INI file to use instead of the native
                per-user store

        Raises:
            ConfigError: If the settings storage cannot be read or written
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings(ORGANIZATION_NAME, APPLICATION_NAME)
        self.profile = profile

        # Use profile as a group to create hierarchy: ssrando/ssr_tracker/default/...
        self.settings.beginGroup(profile)

        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._import = ImportSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        self._migrator.ensure_version()

        status = self.settings.status()
        if status != QSettings.Status.NoError:
            raise ConfigError(
                f"Settings storage {self.settings.fileName()} is not usable: {status.name}"
            )

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def importing(self) -> ImportSettings:
        """Access import behaviour settings subsystem."""
        return self._import

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    # === VERSION ===

    @property
    def version(self) -> str:
        """Get configuration version."""
        return self._get_str("app/version", ConfigVersion.CURRENT.value)

    # === HELPER METHODS ===

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    # === IMPORT SETTINGS (DELEGATED) ===

    @property
    def strict_version(self) -> bool:
        """Whether self-exports with a foreign format tag are rejected."""
        return self._import.strict_version

    @strict_version.setter
    def strict_version(self, value: bool) -> None:
        """Set strict format tag checking."""
        self._import.strict_version = value

    @property
    def conflict_policy(self) -> ConflictPolicy:
        """Get the field conflict policy."""
        return self._import.conflict_policy

    @conflict_policy.setter
    def conflict_policy(self, value: ConflictPolicy) -> None:
        """Set the field conflict policy."""
        self._import.conflict_policy = value

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def user_tables_dir(self) -> Optional[Path]:
        """Get directory holding user overrides for the packaged data tables."""
        return self._paths.user_tables_dir

    @user_tables_dir.setter
    def user_tables_dir(self, value: Optional[Path]) -> None:
        """Set directory holding user table overrides."""
        self._paths.user_tables_dir = value

    @property
    def recent_files(self) -> List[str]:
        """Get list of recently imported files."""
        return self._paths.recent_files

    def add_recent_file(self, file_path: Union[str, Path]) -> None:
        """Add file to recent files list (max 10 items)."""
        self._paths.add_recent_file(file_path)

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
