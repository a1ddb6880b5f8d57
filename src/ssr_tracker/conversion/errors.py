"""
Exceptions raised while converting documents into tracker state.
"""

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .models import VersionCheck


class ConversionError(Exception):
    """Base exception for the conversion layer."""


class MalformedDocumentError(ConversionError):
    """Raised when a document cannot be parsed into the expected structure."""


class VersionMismatchError(ConversionError):
    """Raised in strict mode when a self-export carries a foreign format tag."""

    def __init__(self, check: "VersionCheck"):
        super().__init__(
            f"Export format '{check.found}' does not match '{check.expected}'"
        )
        self.check = check


class FieldConflictError(ConversionError):
    """Raised when two generator settings translate to the same tracker key."""

    def __init__(self, canonical_name: str, external_names: List[str]):
        super().__init__(
            f"Settings {', '.join(external_names)} all translate to '{canonical_name}'"
        )
        self.canonical_name = canonical_name
        self.external_names = external_names


class DataTableError(ConversionError):
    """Raised when a translation table or rewrite rule table is invalid."""


class SettingValueError(ConversionError):
    """Raised when a value fits none of the supported setting kinds."""
