"""Tests for translating generator settings into tracker settings."""

import pytest

from ssr_tracker.conversion import (
    ConversionTables,
    FieldConflictError,
    FieldTranslationEntry,
    SettingValue,
    map_fields,
)
from ssr_tracker.settings import ConflictPolicy


def _entry(external: str, canonical: str, **options) -> FieldTranslationEntry:
    return FieldTranslationEntry(
        external_name=external,
        canonical_name=canonical,
        options={key: SettingValue.of(value) for key, value in options.items()},
    )


class TestMapFields:
    """Test the field mapper against small hand-written tables."""

    def test_translates_string_values(self) -> None:
        """Test a known setting is renamed and its value translated."""
        table = [_entry("open_thunderhead", "open-thunderhead", on="Open", off="Ballad")]

        result = map_fields({"open_thunderhead": "on"}, table)

        assert result.values == {"open-thunderhead": SettingValue.of("Open")}

    def test_unknown_settings_are_skipped(self) -> None:
        """Test names missing from the table are reported, not translated."""
        table = [_entry("open_thunderhead", "open-thunderhead", on="Open")]

        result = map_fields({"brand_new_setting": "on", "open_thunderhead": "on"}, table)

        assert "brand_new_setting" not in result.values
        assert result.unknown_settings == ["brand_new_setting"]
        assert set(result.values) == {"open-thunderhead"}

    def test_non_string_values_are_left_alone(self) -> None:
        """Test list and numeric values are not translated."""
        table = [
            _entry("excluded_locations", "excluded-locations"),
            _entry("damage_multiplier", "damage-multiplier"),
        ]

        result = map_fields({"excluded_locations": ["A"], "damage_multiplier": 2}, table)

        assert result.values == {}
        assert result.unmapped_values == []

    def test_unknown_value_keeps_default(self) -> None:
        """Test a value without an option is reported and not written."""
        table = [_entry("open_lake_floria", "open-lake-floria", open="Open")]

        result = map_fields({"open_lake_floria": "swim"}, table)

        assert result.values == {}
        assert result.unmapped_values == [("open_lake_floria", "swim")]

    def test_boolean_options(self) -> None:
        """Test on/off switches translate to tracker booleans."""
        table = [_entry("open_earth_temple", "open-earth-temple", on=True, off=False)]

        result = map_fields({"open_earth_temple": "off"}, table)

        assert result.values["open-earth-temple"] == SettingValue.of(False)


class TestFieldConflicts:
    """Test settings that translate to the same tracker key."""

    TABLE = [
        _entry("open_lmf", "open-lmf", open="Open", nodes="Nodes"),
        _entry("open_lanayru_mining_facility", "open-lmf", open="Open", main_node="Main Node"),
    ]

    @pytest.mark.parametrize(
        "document",
        [
            {"open_lmf": "open", "open_lanayru_mining_facility": "main_node"},
            {"open_lanayru_mining_facility": "main_node", "open_lmf": "open"},
        ],
    )
    def test_later_table_entry_wins_regardless_of_document_order(self, document) -> None:
        """Test the result does not depend on document order."""
        result = map_fields(document, self.TABLE)

        assert result.values["open-lmf"] == SettingValue.of("Main Node")
        assert result.conflicts == {"open-lmf": ["open_lmf", "open_lanayru_mining_facility"]}

    def test_error_policy_raises(self) -> None:
        """Test the error policy refuses conflicting settings."""
        document = {"open_lmf": "open", "open_lanayru_mining_facility": "main_node"}

        with pytest.raises(FieldConflictError) as exc_info:
            map_fields(document, self.TABLE, ConflictPolicy.ERROR)

        assert exc_info.value.canonical_name == "open-lmf"

    def test_single_source_is_not_a_conflict(self) -> None:
        """Test the error policy accepts a key produced by one setting only."""
        result = map_fields({"open_lmf": "nodes"}, self.TABLE, ConflictPolicy.ERROR)

        assert result.values["open-lmf"] == SettingValue.of("Nodes")
        assert result.conflicts == {}


class TestPackagedTranslationTable:
    """Test the packaged translation table."""

    def test_table_keys_exist_in_default_settings(self, tables: ConversionTables) -> None:
        """Test every translated key is a key of the default settings."""
        baseline = tables.baseline_settings()
        missing = [entry.canonical_name for entry in tables.translation_table if entry.canonical_name not in baseline]
        assert missing == []

    def test_legacy_lmf_name_is_declared_first(self, tables: ConversionTables) -> None:
        """Test the current generator name takes precedence over the legacy one."""
        names = [entry.external_name for entry in tables.translation_table]
        assert names.index("open_lmf") < names.index("open_lanayru_mining_facility")


class TestConflictPolicyLocation:
    """Test the conflict policy is shared by settings and conversion."""

    def test_settings_reexport_is_same_enum(self) -> None:
        """Test the settings package hands out the conversion enum."""
        from ssr_tracker import conversion, settings

        assert settings.ConflictPolicy is conversion.ConflictPolicy
        assert ConflictPolicy("error") is conversion.ConflictPolicy.ERROR
