"""
Conversion of external documents into tracker state.

Provides the import/export service plus the individual steps it is built
from: version check, field mapping, location normalization, settings
synthesis and export serialization.
"""

from .service import TrackerImportService
from .tables import ConversionTables, TableSchema
from .models import (
    FORMAT_VERSION,
    CanonicalSettings,
    ConflictPolicy,
    ExportDocument,
    ExternalSettingsDocument,
    FieldTranslationEntry,
    ImportResult,
    LocationRewriteRule,
    SettingKind,
    SettingValue,
    VersionCheck,
)
from .errors import (
    ConversionError,
    DataTableError,
    FieldConflictError,
    MalformedDocumentError,
    SettingValueError,
    VersionMismatchError,
)
from .version_guard import check_version
from .field_mapper import map_fields
from .location_normalizer import build_exclusions, normalize_locations
from .synthesizer import synthesize
from .export_serializer import serialize

__all__ = [
    # Main service
    "TrackerImportService",
    "ConversionTables",
    "TableSchema",
    # Models
    "FORMAT_VERSION",
    "CanonicalSettings",
    "ConflictPolicy",
    "ExportDocument",
    "ExternalSettingsDocument",
    "FieldTranslationEntry",
    "ImportResult",
    "LocationRewriteRule",
    "SettingKind",
    "SettingValue",
    "VersionCheck",
    # Errors
    "ConversionError",
    "DataTableError",
    "FieldConflictError",
    "MalformedDocumentError",
    "SettingValueError",
    "VersionMismatchError",
    # Steps
    "check_version",
    "map_fields",
    "build_exclusions",
    "normalize_locations",
    "synthesize",
    "serialize",
]
