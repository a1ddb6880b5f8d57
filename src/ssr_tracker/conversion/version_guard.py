"""
Format tag check for self-exports.
"""

import logging

from .errors import VersionMismatchError
from .models import FORMAT_VERSION, ExportDocument, VersionCheck

logger = logging.getLogger(__name__)


def check_version(document: ExportDocument, current: str = FORMAT_VERSION) -> VersionCheck:
    """Compare a self-export's format tag with the current one.

    The check is advisory: it never raises and never touches the document.

    Args:
        document: Parsed self-export
        current: Format tag this tracker writes

    Returns:
        VersionCheck describing the comparison
    """
    check = VersionCheck(ok=document.version == current, found=document.version, expected=current)
    if not check.ok:
        logger.warning(
            f"Export was made with format '{check.found}', this tracker uses '{check.expected}'"
        )
    return check


def enforce_version(check: VersionCheck, strict: bool) -> None:
    """Turn a failed check into an error when strict checking is enabled.

    Raises:
        VersionMismatchError: If strict and the format tags differ
    """
    if strict and not check.ok:
        raise VersionMismatchError(check)
