"""
Import and export of tracker state.

TrackerImportService is the boundary towards the rest of the tracker: it
turns document text into tracker state and hands the result to the
state-loading and logic-source collaborators. Collaborators are only called
after a document has been fully translated, so a failed import never leaves
partial state behind.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, TYPE_CHECKING, Union

from .documents import parse_export_document, parse_external_document, read_document_text
from .errors import MalformedDocumentError
from .export_serializer import dumps, export_filename, serialize
from .field_mapper import map_fields
from .location_normalizer import build_exclusions
from .models import SETTINGS_KEY, ConflictPolicy, ImportResult, LogicSource, TrackerState
from .synthesizer import synthesize
from .tables import ConversionTables
from .version_guard import check_version, enforce_version

if TYPE_CHECKING:
    from ..settings import AppSettings

StateSink = Callable[[TrackerState], None]
LogicSourceSink = Callable[[LogicSource], None]

SELF_EXPORT_SUFFIXES = (".json",)
GENERATOR_CONFIG_SUFFIXES = (".yaml", ".yml")


class TrackerImportService:
    """Service for importing and exporting tracker state.

    Supports two inputs: self-exports written by export_self and generator
    settings documents (config.yaml).
    """

    def __init__(
        self,
        tables: ConversionTables,
        settings: Optional["AppSettings"] = None,
        load_state: Optional[StateSink] = None,
        set_logic_source: Optional[LogicSourceSink] = None,
    ):
        """Initialize the service.

        Args:
            tables: Loaded conversion tables
            settings: App settings for import behaviour; defaults apply when None
            load_state: Receives the tracker state of every successful import
            set_logic_source: Receives the logic source of every successful import
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.tables = tables
        self.settings = settings
        self._load_state = load_state
        self._set_logic_source = set_logic_source

    # === IMPORT ===

    def import_self_export(self, text: str, strict: Optional[bool] = None) -> ImportResult:
        """Import a self-export.

        A foreign format tag is reported through the result and a warning;
        the load still proceeds unless strict checking is on.

        Args:
            text: JSON text of the export
            strict: Override the strict_version setting for this call

        Returns:
            ImportResult with the exported state and logic source

        Raises:
            MalformedDocumentError: If the text is not a valid export
            VersionMismatchError: If strict and the format tag differs
        """
        document = parse_export_document(text)
        check = check_version(document)
        enforce_version(check, self._strict_version if strict is None else strict)

        result = ImportResult(
            state=document.state,
            logic_source=document.logic_branch,
            version_check=check,
        )
        self._deliver(result)
        self.logger.info(f"Imported saved run (format {document.version or 'unknown'})")
        return result

    def import_external_config(self, text: str) -> ImportResult:
        """Import a generator settings document.

        Args:
            text: YAML text written by the generator

        Returns:
            ImportResult with default state carrying the translated settings
            and the default logic source

        Raises:
            MalformedDocumentError: If the text is not a valid settings document
            FieldConflictError: If the conflict policy is ERROR and two
                settings target the same tracker key
        """
        external = parse_external_document(text)
        mapping = map_fields(external.world, self.tables.translation_table, self._conflict_policy)
        exclusions = build_exclusions(
            external.world,
            self.tables.baseline_exclusions(),
            self.tables.rewrite_rules,
            log_untouched=self._log_untouched_locations,
        )
        settings = synthesize(
            self.tables.baseline_settings(), mapping.values, exclusions.locations, external
        )

        state = self.tables.baseline_state()
        state[SETTINGS_KEY] = settings.to_raw()

        result = ImportResult(
            state=state,
            logic_source=self.tables.default_logic_source(),
            unknown_settings=mapping.unknown_settings,
            untouched_locations=exclusions.untouched,
        )
        self._deliver(result)
        self.logger.info(
            f"Imported settings file: {len(mapping.values)} translated settings, "
            f"{len(exclusions.locations)} excluded locations, "
            f"{len(mapping.unknown_settings)} unknown settings ignored"
        )
        return result

    def import_file(self, path: Union[str, Path]) -> ImportResult:
        """Import a document from disk, choosing the format by file suffix.

        Args:
            path: A .json self-export or a .yaml/.yml settings document

        Returns:
            ImportResult of the matching import

        Raises:
            FileNotFoundError: If the file doesn't exist
            MalformedDocumentError: If the suffix is unknown, the file is not UTF-8
                text or the content is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Import file not found: {path}")

        suffix = path.suffix.lower()
        self.logger.info(f"Importing {path}")
        text = read_document_text(path)

        if suffix in SELF_EXPORT_SUFFIXES:
            result = self.import_self_export(text)
        elif suffix in GENERATOR_CONFIG_SUFFIXES:
            result = self.import_external_config(text)
        else:
            raise MalformedDocumentError(f"Unsupported file type '{suffix}': {path}")

        if self.settings is not None:
            self.settings.paths.last_import_dir = path.parent
            self.settings.add_recent_file(path)
        return result

    # === EXPORT ===

    def export_self(self, state: TrackerState, logic_source: LogicSource) -> str:
        """Render tracker state as self-export JSON text."""
        return dumps(serialize(state, logic_source))

    def export_to_file(
        self,
        state: TrackerState,
        logic_source: LogicSource,
        directory: Union[str, Path],
        filename: Optional[str] = None,
    ) -> Path:
        """Write a self-export into a directory.

        Args:
            state: Tracker state to export
            logic_source: Logic source in use
            directory: Target directory (created if missing)
            filename: File name; a timestamped default is used when None

        Returns:
            Path of the written file
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / (filename or export_filename())
        path.write_text(self.export_self(state, logic_source), encoding="utf-8")
        self.logger.info(f"Exported tracker state to {path}")
        return path

    # === HELPERS ===

    def _deliver(self, result: ImportResult) -> None:
        """Hand a completed import to the collaborators."""
        if self._load_state is not None:
            self._load_state(result.state)
        if self._set_logic_source is not None:
            self._set_logic_source(result.logic_source)

    @property
    def _strict_version(self) -> bool:
        return self.settings.strict_version if self.settings is not None else False

    @property
    def _conflict_policy(self) -> ConflictPolicy:
        if self.settings is None:
            return ConflictPolicy.TABLE_ORDER
        return self.settings.conflict_policy

    @property
    def _log_untouched_locations(self) -> bool:
        if self.settings is None:
            return True
        return self.settings.importing.log_untouched_locations
