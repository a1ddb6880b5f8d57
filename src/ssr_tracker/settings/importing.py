"""
Import behaviour settings for the SS Rando tracker.
"""

import logging
from typing import TYPE_CHECKING

from .types import ConflictPolicy

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class ImportSettings:
    """Manages settings that change how documents are imported."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    @property
    def strict_version(self) -> bool:
        """Whether a self-export with a foreign format tag is rejected.

        Off by default: a mismatch is only reported and the load proceeds.
        """
        return self._get_bool("import/strict_version", False)

    @strict_version.setter
    def strict_version(self, value: bool) -> None:
        """Set strict format tag checking."""
        self.settings.setValue("import/strict_version", bool(value))
        self.settings.sync()

    @property
    def conflict_policy(self) -> ConflictPolicy:
        """Get the policy for generator settings that map to the same key."""
        raw = self._get_str("import/conflict_policy", ConflictPolicy.TABLE_ORDER.value)
        try:
            return ConflictPolicy(raw)
        except ValueError:
            logger.warning(f"Unknown conflict policy in settings: {raw}, using table order")
            return ConflictPolicy.TABLE_ORDER

    @conflict_policy.setter
    def conflict_policy(self, value: ConflictPolicy) -> None:
        """Set the field conflict policy."""
        self.settings.setValue("import/conflict_policy", value.value)
        self.settings.sync()

    @property
    def log_untouched_locations(self) -> bool:
        """Whether excluded locations that no rewrite rule matched are logged."""
        return self._get_bool("import/log_untouched_locations", True)

    @log_untouched_locations.setter
    def log_untouched_locations(self, value: bool) -> None:
        """Set logging of untouched location identifiers."""
        self.settings.setValue("import/log_untouched_locations", bool(value))
        self.settings.sync()
