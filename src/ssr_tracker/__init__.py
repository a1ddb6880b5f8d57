"""
SS Rando Tracker import engine.

Converts randomizer generator settings (config.yaml) and saved tracker runs
into the tracker's internal state, and writes saved runs back out.
"""

__version__ = "0.3.0"
__author__ = "SS Rando Tracker Contributors"

from .conversion import ConversionTables, TrackerImportService
from .utils.logging_config import setup_logging

__all__ = [
    "ConversionTables",
    "TrackerImportService",
    "setup_logging",
]
