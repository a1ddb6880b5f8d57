"""
Rewriting of legacy location identifiers into tracker identifiers.

Generator versions name locations with a different hierarchy than the
tracker. Rewrite rules run in table order and each rule sees the output of
the rules before it, so reordering the table changes results. Coverage is
best effort: identifiers no rule matches pass through unchanged.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence

from .errors import MalformedDocumentError
from .models import LocationRewriteRule

logger = logging.getLogger(__name__)

EXCLUDED_LOCATIONS_SETTING = "excluded_locations"
GODDESS_CHEST_SHUFFLE_SETTING = "goddess_chest_shuffle"
NPC_CLOSET_SHUFFLE_SETTING = "npc_closet_shuffle"

ZELDA_CLOSET_LOCATION = "Knight Academy - In Zelda's Closet"


@dataclass
class NormalizationResult:
    """Normalized identifiers plus the ones no rule changed."""

    locations: List[str] = field(default_factory=list)
    untouched: List[str] = field(default_factory=list)


def normalize_identifier(identifier: str, rules: Sequence[LocationRewriteRule]) -> str:
    """Run every rule, in order, over one identifier."""
    for rule in rules:
        identifier = rule.apply(identifier)
    return identifier


def normalize_with_report(
    raw: Sequence[str], rules: Sequence[LocationRewriteRule]
) -> NormalizationResult:
    """Normalize identifiers and report those left unchanged.

    Args:
        raw: Location identifiers as written by the generator
        rules: Rewrite rules in declaration order

    Returns:
        NormalizationResult; locations keep input order and length
    """
    result = NormalizationResult()
    for identifier in raw:
        normalized = normalize_identifier(identifier, rules)
        if normalized == identifier:
            result.untouched.append(identifier)
        result.locations.append(normalized)
    return result


def normalize_locations(raw: Sequence[str], rules: Sequence[LocationRewriteRule]) -> List[str]:
    """Normalize location identifiers, one output per input."""
    return normalize_with_report(raw, rules).locations


def _read_location_list(world: Mapping[str, Any]) -> List[str]:
    raw = world.get(EXCLUDED_LOCATIONS_SETTING)
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise MalformedDocumentError(f"'{EXCLUDED_LOCATIONS_SETTING}' must be a list of strings")
    return list(raw)


def build_exclusions(
    world: Mapping[str, Any],
    baseline_exclusions: Sequence[str],
    rules: Sequence[LocationRewriteRule],
    log_untouched: bool = True,
) -> NormalizationResult:
    """Build the tracker's excluded-locations list from a generator section.

    With goddess chest shuffle off the baseline exclusions are used verbatim
    instead of the document's own list. With vanilla NPC closets Zelda's
    closet is excluded as well.

    Args:
        world: The "World 1" section of a generator document
        baseline_exclusions: Excluded locations of the default settings
        rules: Rewrite rules in declaration order
        log_untouched: Log identifiers no rule matched

    Returns:
        NormalizationResult with the final exclusion list

    Raises:
        MalformedDocumentError: If excluded_locations is not a list of strings
    """
    if world.get(GODDESS_CHEST_SHUFFLE_SETTING) == "off":
        logger.debug("Goddess chest shuffle is off, using default exclusions")
        result = NormalizationResult(locations=list(baseline_exclusions))
    else:
        result = normalize_with_report(_read_location_list(world), rules)
        if log_untouched and result.untouched:
            logger.debug(f"No rewrite rule matched {len(result.untouched)} locations: {result.untouched}")

    if world.get(NPC_CLOSET_SHUFFLE_SETTING) == "vanilla":
        if ZELDA_CLOSET_LOCATION not in result.locations:
            result.locations.append(ZELDA_CLOSET_LOCATION)

    return result
