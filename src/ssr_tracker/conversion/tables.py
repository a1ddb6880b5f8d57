"""
Loading and validation of the conversion data tables.

Three tables drive an import: the default export (baseline state and logic
source), the field translation table and the location rewrite rules. They
ship with the package and can be overridden file by file from a user
directory. Once loaded they are never modified; the baseline is only ever
handed out as a copy.
"""

import copy
import logging
from pathlib import Path
from typing import Any, List, Optional, cast

import orjson

from .. import resources
from .errors import DataTableError, SettingValueError
from .models import (
    EXCLUDED_LOCATIONS_KEY,
    SETTINGS_KEY,
    CanonicalSettings,
    ExportDocument,
    FieldTranslationEntry,
    LocationRewriteRule,
    LogicSource,
    SettingKind,
    SettingValue,
    TrackerState,
)


class TableSchema:
    """Validation schemas for the conversion tables.

    Each method returns a list of error messages, empty when valid.
    """

    REQUIRED_ENTRY_FIELDS = {"name", "options"}
    REQUIRED_RULE_FIELDS = {"match", "replacement"}
    REQUIRED_EXPORT_FIELDS = {"version", "state", "logicBranch"}

    @staticmethod
    def validate_translation_table(data: Any) -> list[str]:
        """Validate the field translation table.

        Args:
            data: Parsed JSON data

        Returns:
            List of error messages (empty if valid)
        """
        if not isinstance(data, dict):
            return ["Translation table must be an object"]

        errors: list[str] = []
        for external_name, entry in cast(dict[str, Any], data).items():
            if not isinstance(entry, dict):
                errors.append(f"'{external_name}': entry must be an object")
                continue
            missing = TableSchema.REQUIRED_ENTRY_FIELDS - entry.keys()
            if missing:
                errors.append(f"'{external_name}': missing required fields: {missing}")
                continue
            if not isinstance(entry["name"], str) or not entry["name"]:
                errors.append(f"'{external_name}': 'name' must be a non-empty string")
            if not isinstance(entry["options"], dict):
                errors.append(f"'{external_name}': 'options' must be an object")
                continue
            for option, value in cast(dict[str, Any], entry["options"]).items():
                try:
                    SettingValue.of(value)
                except SettingValueError as e:
                    errors.append(f"'{external_name}': option '{option}': {e}")
        return errors

    @staticmethod
    def validate_rewrite_rules(data: Any) -> list[str]:
        """Validate the location rewrite rule table.

        Args:
            data: Parsed JSON data

        Returns:
            List of error messages (empty if valid)
        """
        if not isinstance(data, dict) or not isinstance(data.get("rules"), list):
            return ["Rewrite rule table must be an object with a 'rules' array"]

        errors: list[str] = []
        for idx, rule in enumerate(cast(list[Any], data["rules"])):
            if not isinstance(rule, dict):
                errors.append(f"Rule {idx}: must be an object")
                continue
            missing = TableSchema.REQUIRED_RULE_FIELDS - rule.keys()
            if missing:
                errors.append(f"Rule {idx}: missing required fields: {missing}")
                continue
            if not isinstance(rule["match"], str) or not rule["match"]:
                errors.append(f"Rule {idx}: 'match' must be a non-empty string")
            if not isinstance(rule["replacement"], str):
                errors.append(f"Rule {idx}: 'replacement' must be a string")
            if not isinstance(rule.get("replaceAll", False), bool):
                errors.append(f"Rule {idx}: 'replaceAll' must be a boolean")
        return errors

    @staticmethod
    def validate_default_export(data: Any) -> list[str]:
        """Validate the default export holding the baseline settings.

        Args:
            data: Parsed JSON data

        Returns:
            List of error messages (empty if valid)
        """
        if not isinstance(data, dict):
            return ["Default export must be an object"]

        missing = TableSchema.REQUIRED_EXPORT_FIELDS - data.keys()
        if missing:
            return [f"Default export missing required fields: {missing}"]

        errors: list[str] = []
        state = data["state"]
        if not isinstance(state, dict) or not isinstance(state.get(SETTINGS_KEY), dict):
            errors.append(f"Default export 'state' must hold a '{SETTINGS_KEY}' object")
        else:
            settings = cast(dict[str, Any], state[SETTINGS_KEY])
            for key, value in settings.items():
                try:
                    SettingValue.of(value)
                except SettingValueError as e:
                    errors.append(f"Default setting '{key}': {e}")
            exclusions = settings.get(EXCLUDED_LOCATIONS_KEY)
            if exclusions is not None and not isinstance(exclusions, list):
                errors.append(f"Default setting '{EXCLUDED_LOCATIONS_KEY}' must be a list")
        if not isinstance(data["logicBranch"], dict):
            errors.append("Default export 'logicBranch' must be an object")
        if not isinstance(data["version"], str):
            errors.append("Default export 'version' must be a string")
        return errors


def load_translation_table(data: Any) -> List[FieldTranslationEntry]:
    """Build translation entries from parsed table data, keeping declaration order.

    Raises:
        DataTableError: If the data fails validation
    """
    errors = TableSchema.validate_translation_table(data)
    if errors:
        raise DataTableError("Invalid translation table:\n  - " + "\n  - ".join(errors))

    return [
        FieldTranslationEntry(
            external_name=external_name,
            canonical_name=entry["name"],
            options={option: SettingValue.of(value) for option, value in entry["options"].items()},
        )
        for external_name, entry in data.items()
    ]


def load_rewrite_rules(data: Any) -> List[LocationRewriteRule]:
    """Build rewrite rules from parsed table data, keeping declaration order.

    Raises:
        DataTableError: If the data fails validation
    """
    errors = TableSchema.validate_rewrite_rules(data)
    if errors:
        raise DataTableError("Invalid rewrite rules:\n  - " + "\n  - ".join(errors))

    return [
        LocationRewriteRule(
            match=rule["match"],
            replacement=rule["replacement"],
            replace_all=rule.get("replaceAll", False),
        )
        for rule in data["rules"]
    ]


def load_default_export(data: Any) -> ExportDocument:
    """Build the default export document from parsed data.

    Raises:
        DataTableError: If the data fails validation
    """
    errors = TableSchema.validate_default_export(data)
    if errors:
        raise DataTableError("Invalid default export:\n  - " + "\n  - ".join(errors))

    return ExportDocument(
        version=data["version"], state=data["state"], logic_branch=data["logicBranch"]
    )


class ConversionTables:
    """The loaded data tables used by every import.

    Attributes:
        translation_table: Field translation entries in declaration order
        rewrite_rules: Location rewrite rules in declaration order
    """

    def __init__(
        self,
        translation_table: List[FieldTranslationEntry],
        rewrite_rules: List[LocationRewriteRule],
        default_export: ExportDocument,
    ):
        self.translation_table = tuple(translation_table)
        self.rewrite_rules = tuple(rewrite_rules)
        self._default_export = default_export
        self._baseline_settings = CanonicalSettings.from_raw(default_export.state[SETTINGS_KEY])

    @classmethod
    def load(cls, user_dir: Optional[Path] = None) -> "ConversionTables":
        """Load the packaged tables, letting files in user_dir override them.

        Args:
            user_dir: Directory whose default_config.json, config_data.json
                or location_rewrites.json replace the packaged ones

        Returns:
            Loaded ConversionTables

        Raises:
            DataTableError: If a table cannot be read or fails validation
        """
        logger = logging.getLogger(f"{__name__}.{cls.__name__}")
        tables = cls(
            translation_table=load_translation_table(
                _read_table(resources.TRANSLATION_TABLE, user_dir)
            ),
            rewrite_rules=load_rewrite_rules(_read_table(resources.LOCATION_REWRITES, user_dir)),
            default_export=load_default_export(_read_table(resources.DEFAULT_CONFIG, user_dir)),
        )
        logger.info(
            f"Loaded {len(tables.translation_table)} setting translations and "
            f"{len(tables.rewrite_rules)} location rewrite rules"
        )
        return tables

    def baseline_settings(self) -> CanonicalSettings:
        """Return a fresh copy of the default settings."""
        return self._baseline_settings.copy()

    def baseline_exclusions(self) -> List[str]:
        """Return a fresh copy of the default excluded-locations list."""
        value = self._baseline_settings.get(EXCLUDED_LOCATIONS_KEY)
        if value is None or value.kind is not SettingKind.LIST:
            return []
        return list(cast(tuple, value.value))

    def baseline_state(self) -> TrackerState:
        """Return a deep copy of the default tracker state."""
        return copy.deepcopy(self._default_export.state)

    def default_logic_source(self) -> LogicSource:
        """Return a deep copy of the default logic source."""
        return copy.deepcopy(self._default_export.logic_branch)


def _read_table(name: str, user_dir: Optional[Path]) -> Any:
    """Read a table from user_dir if present there, else from the package."""
    logger = logging.getLogger(f"{__name__}._read_table")
    try:
        if user_dir is not None and (user_dir / name).is_file():
            path = user_dir / name
            logger.info(f"Using user table override: {path}")
            return orjson.loads(path.read_bytes())
        return orjson.loads(resources.read_resource_bytes(name))
    except (OSError, orjson.JSONDecodeError) as e:
        raise DataTableError(f"Failed to read table '{name}': {e}") from e
