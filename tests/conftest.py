"""Shared fixtures for tracker import tests."""

import textwrap
from pathlib import Path

import pytest

from ssr_tracker.conversion import ConversionTables
from ssr_tracker.settings import AppSettings


GENERATOR_YAML = textwrap.dedent(
    """\
    seed: HelloWorld
    generate_spoiler_log: true
    use_plandomizer: false
    plandomizer_file:
    World 1:
      logic_rules: all_locations_reachable
      open_thunderhead: on
      open_lake_floria: open
      triforce_shuffle: sky_keep
      starting_sword: goddess_sword
      empty_unrequired_dungeons: off
      goddess_chest_shuffle: on
      npc_closet_shuffle: overworld
      some_future_setting: whatever
      excluded_locations:
      - Lumpy Pumpkin - Kina's Crystals
      - Bamboo Island - Clean Cut Minigame
      - Central Skyloft - Goddess Chest on Bazaar Roof
      - Thunderhead - Song from Levias
      starting_inventory:
      - Progressive Sword
      - Emerald Tablet
      damage_multiplier: 2
      random_starting_tablet_count: 1
    """
)


@pytest.fixture(scope="session")
def tables() -> ConversionTables:
    """Packaged conversion tables, loaded once."""
    return ConversionTables.load()


@pytest.fixture
def generator_yaml() -> str:
    """A generator config.yaml covering translated, passthrough and unknown settings."""
    return GENERATOR_YAML


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """Path of a throwaway INI settings file."""
    return tmp_path / "settings.ini"


@pytest.fixture
def app_settings(settings_file: Path) -> AppSettings:
    """AppSettings backed by a throwaway INI file."""
    return AppSettings(settings_file=settings_file)
