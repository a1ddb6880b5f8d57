"""Tests for the command line entry point."""

import logging
from pathlib import Path

import orjson
import pytest

from ssr_tracker.__main__ import main
from ssr_tracker.settings import AppSettings


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by main() so tests stay isolated."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)


class TestCli:
    """Test the ssr-tracker commands."""

    def test_import_yaml_writes_export(self, settings_file: Path, generator_yaml: str, tmp_path: Path) -> None:
        """Test import-yaml converts a settings file into an export."""
        source = tmp_path / "config.yaml"
        source.write_text(generator_yaml, encoding="utf-8")
        output = tmp_path / "export.json"

        code = main(["--settings-file", str(settings_file), "import-yaml", str(source), "-o", str(output)])

        assert code == 0
        data = orjson.loads(output.read_bytes())
        assert data["state"]["settings"]["open-thunderhead"] == "Open"
        assert data["logicBranch"] == {"type": "latestRelease"}

    def test_import_export_strict_mismatch(self, settings_file: Path, tmp_path: Path, capsys) -> None:
        """Test a foreign format tag fails with exit code 2 under --strict."""
        source = tmp_path / "old.json"
        source.write_bytes(orjson.dumps({"state": {"settings": {}}, "version": "OLD", "logicBranch": {}}))

        code = main(["--settings-file", str(settings_file), "import-export", str(source), "--strict"])

        assert code == 2
        assert "Incompatible export" in capsys.readouterr().err

    def test_import_export_permissive(self, settings_file: Path, tmp_path: Path, capsys) -> None:
        """Test a foreign format tag is rewritten with a warning by default."""
        source = tmp_path / "old.json"
        source.write_bytes(orjson.dumps({"state": {"settings": {}}, "version": "OLD", "logicBranch": {}}))

        code = main(["--settings-file", str(settings_file), "import-export", str(source)])

        captured = capsys.readouterr()
        assert code == 0
        assert "incompatible version" in captured.err
        assert orjson.loads(captured.out)["version"] == "SSRANDO-TRACKER-NG-V2"

    def test_malformed_input(self, settings_file: Path, tmp_path: Path) -> None:
        """Test a malformed settings file exits with code 1."""
        source = tmp_path / "config.yaml"
        source.write_text("seed: 1\n", encoding="utf-8")

        assert main(["--settings-file", str(settings_file), "import-yaml", str(source)]) == 1

    def test_missing_file(self, settings_file: Path, tmp_path: Path) -> None:
        """Test a missing input file exits with code 1."""
        assert main(["--settings-file", str(settings_file), "import-yaml", str(tmp_path / "none.yaml")]) == 1

    def test_validate_settings(self, settings_file: Path, capsys) -> None:
        """Test validate-settings reports the settings file."""
        code = main(["--settings-file", str(settings_file), "validate-settings"])

        assert code == 0
        assert "settings.ini" in capsys.readouterr().out

    def test_non_utf8_input(self, settings_file: Path, tmp_path: Path, capsys) -> None:
        """Test a settings file in another encoding exits with code 1."""
        source = tmp_path / "config.yaml"
        source.write_bytes(b"seed: Caf\xe9\nWorld 1: {}\n")

        code = main(["--settings-file", str(settings_file), "import-yaml", str(source)])

        assert code == 1
        assert "not UTF-8" in capsys.readouterr().err

    def test_recent_files_list_and_clear(self, settings_file: Path, tmp_path: Path, capsys) -> None:
        """Test recent-files prints the stored files and --clear forgets them."""
        settings_obj = AppSettings(settings_file=settings_file)
        settings_obj.add_recent_file(tmp_path / "config.yaml")
        settings_obj.sync()

        assert main(["--settings-file", str(settings_file), "recent-files"]) == 0
        assert str(tmp_path / "config.yaml") in capsys.readouterr().out

        assert main(["--settings-file", str(settings_file), "recent-files", "--clear"]) == 0
        assert AppSettings(settings_file=settings_file).recent_files == []
