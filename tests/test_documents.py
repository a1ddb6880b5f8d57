"""Tests for document parsing."""

import orjson
import pytest

from ssr_tracker.conversion import FORMAT_VERSION, MalformedDocumentError
from ssr_tracker.conversion.documents import parse_export_document, parse_external_document


def _export_text(**overrides) -> str:
    data = {
        "state": {"settings": {"logic-mode": "No Logic"}},
        "version": FORMAT_VERSION,
        "logicBranch": {"type": "latestRelease"},
    }
    data.update(overrides)
    return orjson.dumps(data).decode("utf-8")


class TestParseExportDocument:
    """Test self-export parsing."""

    def test_valid_export(self) -> None:
        """Test the three sections are read."""
        document = parse_export_document(_export_text())

        assert document.version == FORMAT_VERSION
        assert document.state["settings"]["logic-mode"] == "No Logic"
        assert document.logic_branch == {"type": "latestRelease"}

    def test_missing_version_reads_as_empty(self) -> None:
        """Test an export without a format tag still parses."""
        data = orjson.loads(_export_text())
        del data["version"]

        document = parse_export_document(orjson.dumps(data).decode("utf-8"))

        assert document.version == ""

    @pytest.mark.parametrize(
        "text",
        [
            "not json at all",
            "[1, 2, 3]",
            _export_text(state="nope"),
            _export_text(state={"inventory": {}}),
            _export_text(logicBranch=None),
            _export_text(version=2),
        ],
    )
    def test_malformed_exports(self, text: str) -> None:
        """Test structurally invalid exports are rejected."""
        with pytest.raises(MalformedDocumentError):
            parse_export_document(text)


class TestParseExternalDocument:
    """Test generator settings document parsing."""

    def test_fixture_document(self, generator_yaml: str) -> None:
        """Test top-level fields and the world section are read."""
        document = parse_external_document(generator_yaml)

        assert document.seed == "HelloWorld"
        assert document.generate_spoiler_log is True
        assert document.use_plandomizer is False
        assert document.plandomizer_file == ""
        assert document.world["damage_multiplier"] == 2

    def test_on_off_stay_strings(self, generator_yaml: str) -> None:
        """Test on/off switches are not read as booleans."""
        document = parse_external_document(generator_yaml)

        assert document.world["open_thunderhead"] == "on"
        assert document.world["empty_unrequired_dungeons"] == "off"

    def test_numeric_seed_becomes_string(self) -> None:
        """Test a numeric seed is kept as text."""
        document = parse_external_document("seed: 12345\nWorld 1: {}\n")
        assert document.seed == "12345"

    @pytest.mark.parametrize(
        "text",
        [
            "seed: [unclosed",
            "- just\n- a list\n",
            "seed: abc\n",
            "World 1: not a mapping\n",
            "generate_spoiler_log: maybe\nWorld 1: {}\n",
        ],
    )
    def test_malformed_documents(self, text: str) -> None:
        """Test invalid YAML and missing sections are rejected."""
        with pytest.raises(MalformedDocumentError):
            parse_external_document(text)
