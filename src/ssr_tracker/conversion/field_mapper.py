"""
Translation of generator settings into tracker settings.

Generator setting names are looked up in the translation table; names the
table does not know are skipped so newer or older generator versions still
import. Only string values are translated, composite values (lists,
numbers) are left to the synthesizer.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .errors import FieldConflictError
from .models import ConflictPolicy, FieldTranslationEntry, SettingValue

logger = logging.getLogger(__name__)


@dataclass
class FieldMappingResult:
    """Output of the field mapper.

    Attributes:
        values: Tracker setting key -> translated value
        unknown_settings: Generator names missing from the table, in document order
        unmapped_values: (generator name, value) pairs whose value has no option
        conflicts: Tracker key -> generator names that all produced a value for it
    """

    values: Dict[str, SettingValue] = field(default_factory=dict)
    unknown_settings: List[str] = field(default_factory=list)
    unmapped_values: List[Tuple[str, str]] = field(default_factory=list)
    conflicts: Dict[str, List[str]] = field(default_factory=dict)


def map_fields(
    external: Mapping[str, Any],
    table: Sequence[FieldTranslationEntry],
    conflict_policy: ConflictPolicy = ConflictPolicy.TABLE_ORDER,
) -> FieldMappingResult:
    """Translate a flat generator settings mapping into tracker settings.

    Entries are applied in table order, not document order, so when two
    generator settings target the same tracker key the entry declared later
    in the table wins whatever order the document lists them in.

    Args:
        external: The "World 1" section of a generator document
        table: Translation entries in declaration order
        conflict_policy: What to do when two entries target the same key

    Returns:
        FieldMappingResult with the translated values and diagnostics

    Raises:
        FieldConflictError: If conflict_policy is ERROR and a conflict occurs
    """
    result = FieldMappingResult()
    known_names = {entry.external_name for entry in table}
    sources: Dict[str, List[str]] = {}

    for name in external:
        if name not in known_names:
            result.unknown_settings.append(name)

    for entry in table:
        if entry.external_name not in external:
            continue
        raw = external[entry.external_name]
        if not isinstance(raw, str):
            continue

        translated = entry.options.get(raw)
        if translated is None:
            result.unmapped_values.append((entry.external_name, raw))
            logger.warning(
                f"No translation for {entry.external_name}={raw!r}, keeping default "
                f"'{entry.canonical_name}'"
            )
            continue

        sources.setdefault(entry.canonical_name, []).append(entry.external_name)
        result.values[entry.canonical_name] = translated

    result.conflicts = {key: names for key, names in sources.items() if len(names) > 1}

    for canonical_name, names in result.conflicts.items():
        if conflict_policy is ConflictPolicy.ERROR:
            raise FieldConflictError(canonical_name, names)
        logger.warning(
            f"Settings {names} all translate to '{canonical_name}', using '{names[-1]}'"
        )

    if result.unknown_settings:
        logger.debug(f"Ignoring {len(result.unknown_settings)} unknown settings: {result.unknown_settings}")

    return result
