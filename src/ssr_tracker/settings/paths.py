"""
Path-related settings for the SS Rando tracker.
"""

from pathlib import Path
from typing import List, Optional, Union, TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

MAX_RECENT_FILES = 10


class PathSettings:
    """Manages path-related settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_list(self, key: str, default: Optional[List[str]] = None) -> List[str]:
        """Type-safe list retrieval from settings."""
        if default is None:
            default = []
        value = self.settings.value(key, default)
        if isinstance(value, list):
            return [
                str(item) if item is not None else ""
                for item in cast(list[object], value)
            ]
        # INI storage hands back a one-element list as a plain string
        if isinstance(value, str):
            return [value] if value else []
        return default

    @property
    def user_tables_dir(self) -> Optional[Path]:
        """Get directory holding user overrides for the packaged data tables."""
        path_str = self._get_str("paths/user_tables", "")
        return Path(path_str) if path_str else None

    @user_tables_dir.setter
    def user_tables_dir(self, value: Optional[Path]) -> None:
        """Set directory holding user table overrides."""
        self.settings.setValue("paths/user_tables", str(value) if value else "")
        self.settings.sync()

    @property
    def last_import_dir(self) -> Optional[Path]:
        """Get directory of the most recently imported document."""
        path_str = self._get_str("paths/last_import_dir", "")
        return Path(path_str) if path_str else None

    @last_import_dir.setter
    def last_import_dir(self, value: Optional[Path]) -> None:
        """Set directory of the most recently imported document."""
        self.settings.setValue("paths/last_import_dir", str(value) if value else "")
        self.settings.sync()

    @property
    def recent_files(self) -> List[str]:
        """Get list of recently imported files."""
        return self._get_list("paths/recent_files", [])

    def add_recent_file(self, file_path: Union[str, Path]) -> None:
        """Add file to recent files list (max 10 items)."""
        recent = self.recent_files
        file_str = str(file_path)

        if file_str in recent:
            recent.remove(file_str)

        recent.insert(0, file_str)
        recent = recent[:MAX_RECENT_FILES]

        self.settings.setValue("paths/recent_files", recent)
        self.settings.sync()

    def clear_recent_files(self) -> None:
        """Clear recent files list."""
        self.settings.setValue("paths/recent_files", [])
        self.settings.sync()
