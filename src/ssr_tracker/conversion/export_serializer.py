"""
Serialization of tracker state into self-export documents.
"""

import copy
from datetime import datetime, timezone
from typing import Optional

import orjson

from .models import FORMAT_VERSION, ExportDocument, LogicSource, TrackerState

EXPORT_FILENAME_PREFIX = "SS-Rando-Tracker"


def serialize(state: TrackerState, logic_source: LogicSource) -> ExportDocument:
    """Wrap tracker state and logic source into a self-export.

    State and logic source are deep-copied so later changes to the live
    state do not leak into the document.
    """
    return ExportDocument(
        version=FORMAT_VERSION,
        state=copy.deepcopy(state),
        logic_branch=copy.deepcopy(logic_source),
    )


def dumps(document: ExportDocument) -> str:
    """Render a self-export as indented JSON text."""
    return orjson.dumps(document.to_dict(), option=orjson.OPT_INDENT_2).decode("utf-8")


def export_filename(now: Optional[datetime] = None) -> str:
    """Build the default file name for an export, e.g. SS-Rando-Tracker2024-01-31T12-00-00.000Z.json.

    Time fields are separated by dashes so the name is valid on Windows.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    stamp = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S.") + f"{now.microsecond // 1000:03d}Z"
    return f"{EXPORT_FILENAME_PREFIX}{stamp}.json"
