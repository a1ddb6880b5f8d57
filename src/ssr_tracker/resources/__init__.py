"""
Resources for the SS Rando tracker.

Provides helpers to access the packaged data tables.
"""

from importlib import resources as importlib_resources

DEFAULT_CONFIG = "default_config.json"
TRANSLATION_TABLE = "config_data.json"
LOCATION_REWRITES = "location_rewrites.json"


def read_resource_bytes(name: str) -> bytes:
    """Return the raw content of a packaged data file.

    Raises:
        FileNotFoundError: If the resource is not packaged
    """
    return importlib_resources.files(__name__).joinpath(name).read_bytes()
