"""
Parsing of self-exports (JSON) and generator settings documents (YAML).

Both parsers validate structure up front so that a malformed document is
rejected before any state is produced.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict

import orjson
import yaml

from .errors import MalformedDocumentError
from .models import SETTINGS_KEY, WORLD_SECTION, ExportDocument, ExternalSettingsDocument

logger = logging.getLogger(__name__)

_YAML_BOOL_TAG = "tag:yaml.org,2002:bool"


class GeneratorConfigLoader(yaml.SafeLoader):
    """Safe YAML loader that only treats true/false as booleans.

    The generator writes switches as on/off, which plain YAML 1.1 would
    turn into booleans; the translation table expects the strings.
    """


GeneratorConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _YAML_BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
GeneratorConfigLoader.add_implicit_resolver(
    _YAML_BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def _as_bool(value: Any, name: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("on", "yes", "true"):
        return True
    if isinstance(value, str) and value.lower() in ("off", "no", "false"):
        return False
    raise MalformedDocumentError(f"'{name}' must be a boolean, got {value!r}")


def parse_export_document(text: str) -> ExportDocument:
    """Parse a self-export produced by this tracker.

    A missing format tag is read as an empty tag, so very old exports still
    reach the version check instead of failing here.

    Args:
        text: JSON text of the export

    Returns:
        Parsed ExportDocument

    Raises:
        MalformedDocumentError: If the text is not JSON or lacks the
            state/logicBranch structure
    """
    try:
        data = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        raise MalformedDocumentError(f"Export is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedDocumentError("Export root must be an object")

    version = data.get("version", "")
    if not isinstance(version, str):
        raise MalformedDocumentError(f"Export 'version' must be a string, got {version!r}")

    state = data.get("state")
    if not isinstance(state, dict):
        raise MalformedDocumentError("Export is missing the 'state' object")
    if not isinstance(state.get(SETTINGS_KEY), dict):
        raise MalformedDocumentError(f"Export state is missing the '{SETTINGS_KEY}' object")

    logic_branch = data.get("logicBranch")
    if not isinstance(logic_branch, dict):
        raise MalformedDocumentError("Export is missing the 'logicBranch' object")

    return ExportDocument(version=version, state=state, logic_branch=logic_branch)


def parse_external_document(text: str) -> ExternalSettingsDocument:
    """Parse a generator settings document (config.yaml).

    Args:
        text: YAML text written by the generator

    Returns:
        Parsed ExternalSettingsDocument

    Raises:
        MalformedDocumentError: If the text is not YAML, the root is not a
            mapping, or the "World 1" section is missing
    """
    try:
        data = yaml.load(text, Loader=GeneratorConfigLoader)
    except yaml.YAMLError as e:
        raise MalformedDocumentError(f"Settings file is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise MalformedDocumentError("Settings file root must be a mapping")

    world = data.get(WORLD_SECTION)
    if not isinstance(world, dict):
        raise MalformedDocumentError(f"Settings file is missing the '{WORLD_SECTION}' section")

    seed = data.get("seed")
    plandomizer_file = data.get("plandomizer_file")
    world_settings: Dict[str, Any] = {str(name): value for name, value in world.items()}

    document = ExternalSettingsDocument(
        world=world_settings,
        seed="" if seed is None else str(seed),
        generate_spoiler_log=_as_bool(data.get("generate_spoiler_log"), "generate_spoiler_log"),
        use_plandomizer=_as_bool(data.get("use_plandomizer"), "use_plandomizer"),
        plandomizer_file="" if plandomizer_file is None else str(plandomizer_file),
    )
    logger.debug(
        f"Parsed settings file with {len(world_settings)} settings (seed: {document.seed or 'none'})"
    )
    return document


def read_document_text(path: Path) -> str:
    """Read a document from disk as text.

    A UTF-8 byte order mark is dropped, as editors on Windows often write one.

    Args:
        path: File to read

    Returns:
        Decoded file content

    Raises:
        MalformedDocumentError: If the file is not UTF-8 text
    """
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise MalformedDocumentError(f"{path.name} is not UTF-8 text: {e}") from e
