"""Basic unit tests for tracker import modules."""

import logging
from pathlib import Path


class TestSettingsInitialization:
    """Test settings initialization and basic operations."""

    def test_app_settings_init(self, settings_file: Path) -> None:
        """Test AppSettings can be initialized."""
        from ssr_tracker.settings import AppSettings

        settings_obj = AppSettings(settings_file=settings_file)
        assert settings_obj is not None
        assert settings_obj.get_settings_file_path().endswith("settings.ini")

    def test_app_settings_validation(self, settings_file: Path) -> None:
        """Test settings validation returns result."""
        from ssr_tracker.settings import AppSettings

        settings_obj = AppSettings(settings_file=settings_file)
        validation = settings_obj.validate()
        assert validation is not None
        assert validation.is_valid

    def test_app_settings_version_is_current(self, settings_file: Path) -> None:
        """Test a fresh configuration is stamped with the current version."""
        from ssr_tracker.settings import AppSettings, ConfigVersion

        settings_obj = AppSettings(settings_file=settings_file)
        assert settings_obj.version == ConfigVersion.CURRENT.value


class TestPackageImports:
    """Test the public package surface."""

    def test_import_package(self) -> None:
        """Test the top-level package exposes the service."""
        import ssr_tracker

        assert ssr_tracker.TrackerImportService is not None
        assert ssr_tracker.__version__

    def test_tables_load_from_package(self) -> None:
        """Test packaged tables load without a user directory."""
        from ssr_tracker.conversion import ConversionTables

        tables = ConversionTables.load()
        assert tables.translation_table
        assert tables.rewrite_rules
        assert "excluded-locations" in tables.baseline_settings()


class TestUtilsLogging:
    """Test logging configuration."""

    def test_logging_setup_with_settings(self, settings_file: Path) -> None:
        """Test logging setup works with settings."""
        from ssr_tracker.utils.logging_config import setup_logging
        from ssr_tracker.settings import AppSettings

        settings_obj = AppSettings(settings_file=settings_file)
        settings_obj.logging.console_logging = False
        setup_logging(settings=settings_obj)

        logger = logging.getLogger("ssr_tracker")
        assert logger.level == logging.DEBUG

    def test_file_logging_writes_csv(self, settings_file: Path, tmp_path: Path) -> None:
        """Test the file handler writes CSV lines to the configured path."""
        from ssr_tracker.utils.logging_config import setup_logging
        from ssr_tracker.settings import AppSettings

        log_path = tmp_path / "logs" / "tracker.csv"
        settings_obj = AppSettings(settings_file=settings_file)
        settings_obj.logging.console_logging = False
        settings_obj.logging.file_logging = True
        settings_obj.logging.log_file_path = str(log_path)

        setup_logging(settings=settings_obj)
        logging.getLogger("ssr_tracker.test").warning('value "quoted"')
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_path.read_text(encoding="utf-8")
        assert '"ssr_tracker.test"' in content
        assert 'value ""quoted""' in content

        for handler in list(logging.getLogger().handlers):
            handler.close()
            logging.getLogger().removeHandler(handler)
