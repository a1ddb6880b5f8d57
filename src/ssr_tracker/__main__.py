"""
Command line entry point for the SS Rando tracker import engine.

Usage:
    python -m ssr_tracker import-yaml <config.yaml> [-o out.json]
    python -m ssr_tracker import-export <export.json> [--strict] [-o out.json]
    python -m ssr_tracker validate-settings
    python -m ssr_tracker recent-files [--clear]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .conversion import ConversionError, ConversionTables, TrackerImportService, VersionMismatchError
from .conversion.documents import read_document_text
from .settings import AppSettings, ConfigError
from .utils.logging_config import setup_logging

logger = logging.getLogger(f"{__name__}.main")


def _write_output(text: str, output: Optional[str]) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        print(f"Wrote {output}")
    else:
        print(text)


def cmd_import_yaml(args: argparse.Namespace, service: TrackerImportService) -> int:
    """Convert a generator config.yaml into a tracker export."""
    path = Path(args.file)
    if not path.exists():
        print(f"File not found: {path}", file=sys.stderr)
        return 1

    result = service.import_external_config(read_document_text(path))
    if result.unknown_settings:
        print(
            f"Ignored {len(result.unknown_settings)} unknown settings: "
            f"{', '.join(result.unknown_settings)}",
            file=sys.stderr,
        )
    _write_output(service.export_self(result.state, result.logic_source), args.output)
    return 0


def cmd_import_export(args: argparse.Namespace, service: TrackerImportService) -> int:
    """Check a saved tracker export and write it back in the current format."""
    path = Path(args.file)
    if not path.exists():
        print(f"File not found: {path}", file=sys.stderr)
        return 1

    try:
        result = service.import_self_export(
            read_document_text(path), strict=True if args.strict else None
        )
    except VersionMismatchError as e:
        print(f"Incompatible export: {e}", file=sys.stderr)
        return 2

    if result.version_mismatch:
        print(
            "This export was made with an incompatible version of the tracker; "
            "it was imported anyway.",
            file=sys.stderr,
        )
    _write_output(service.export_self(result.state, result.logic_source), args.output)
    return 0


def cmd_validate_settings(args: argparse.Namespace, settings: AppSettings) -> int:
    """Validate the stored settings."""
    validation = settings.validate()
    for warning in validation.warnings:
        print(f"warning: {warning}")
    for error in validation.errors:
        print(f"error: {error}", file=sys.stderr)
    print(f"Settings file: {settings.get_settings_file_path()}")
    return 0 if validation.is_valid else 1


def cmd_recent_files(args: argparse.Namespace, settings: AppSettings) -> int:
    """List or clear the recently imported files."""
    if args.clear:
        settings.paths.clear_recent_files()
        print("Recent files cleared")
        return 0

    for file_path in settings.recent_files:
        print(file_path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ssr-tracker",
        description="Import randomizer settings and saved runs into the SS Rando tracker",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--settings-file", help="INI settings file to use instead of the user store")
    parser.add_argument("--profile", default="default", help="Settings profile name")

    subparsers = parser.add_subparsers(dest="command", required=True)

    yaml_p = subparsers.add_parser("import-yaml", help="Convert a generator config.yaml")
    yaml_p.add_argument("file", help="Path to config.yaml")
    yaml_p.add_argument("-o", "--output", help="Write the export here instead of stdout")

    export_p = subparsers.add_parser("import-export", help="Check and rewrite a saved run")
    export_p.add_argument("file", help="Path to a tracker export (.json)")
    export_p.add_argument("--strict", action="store_true", help="Reject a foreign format tag")
    export_p.add_argument("-o", "--output", help="Write the export here instead of stdout")

    subparsers.add_parser("validate-settings", help="Validate stored settings")

    recent_p = subparsers.add_parser("recent-files", help="List recently imported files")
    recent_p.add_argument("--clear", action="store_true", help="Forget all recent files")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main command line entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = AppSettings(profile=args.profile, settings_file=args.settings_file)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(settings)

    if args.command == "validate-settings":
        return cmd_validate_settings(args, settings)
    if args.command == "recent-files":
        return cmd_recent_files(args, settings)

    try:
        tables = ConversionTables.load(settings.user_tables_dir)
        service = TrackerImportService(tables, settings=settings)
        if args.command == "import-yaml":
            return cmd_import_yaml(args, service)
        return cmd_import_export(args, service)
    except ConversionError as e:
        logger.error(f"Import failed: {e}")
        print(f"Import failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
