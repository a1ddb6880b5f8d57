"""
Assembly of tracker settings from a generator document.
"""

import logging
from typing import Mapping, Sequence

from .errors import MalformedDocumentError, SettingValueError
from .models import (
    DAMAGE_MULTIPLIER_KEY,
    EXCLUDED_LOCATIONS_KEY,
    STARTING_ITEMS_KEY,
    STARTING_TABLET_COUNT_KEY,
    CanonicalSettings,
    ExternalSettingsDocument,
    SettingValue,
)

logger = logging.getLogger(__name__)

# Generator setting -> tracker key, copied without translation
PASSTHROUGH_FIELDS = (
    ("starting_inventory", STARTING_ITEMS_KEY),
    ("damage_multiplier", DAMAGE_MULTIPLIER_KEY),
    ("random_starting_tablet_count", STARTING_TABLET_COUNT_KEY),
)


def synthesize(
    baseline: CanonicalSettings,
    mapped: Mapping[str, SettingValue],
    exclusions: Sequence[str],
    external: ExternalSettingsDocument,
) -> CanonicalSettings:
    """Build tracker settings for an imported generator document.

    Steps run in order and later steps overwrite earlier ones: copy the
    baseline, overlay translated fields, set the exclusion list, then copy
    the passthrough fields. The baseline itself is never modified and every
    baseline key is present in the result.

    Args:
        baseline: Default tracker settings
        mapped: Output of the field mapper
        exclusions: Normalized excluded locations
        external: The parsed generator document

    Returns:
        New CanonicalSettings

    Raises:
        MalformedDocumentError: If a passthrough field holds an unsupported value
    """
    settings = baseline.copy()

    for key, value in mapped.items():
        if key not in settings:
            logger.debug(f"Translated setting '{key}' is not part of the default settings")
        settings[key] = value

    settings[EXCLUDED_LOCATIONS_KEY] = SettingValue.of(list(exclusions))

    for external_name, key in PASSTHROUGH_FIELDS:
        if external_name not in external.world:
            logger.debug(f"'{external_name}' missing from document, keeping default '{key}'")
            continue
        try:
            settings[key] = SettingValue.of(external.world[external_name])
        except SettingValueError as e:
            raise MalformedDocumentError(f"Invalid value for '{external_name}': {e}") from e

    return settings
