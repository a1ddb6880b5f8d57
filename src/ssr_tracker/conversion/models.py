"""
Data models for tracker import and export.

Tracker state and logic sources stay plain dicts, since only the settings
part of the state is interpreted here. Setting values are wrapped in a
tagged SettingValue so translation tables and the synthesizer never guess
at runtime types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, TypeAlias, Union

from .errors import SettingValueError

TrackerState: TypeAlias = Dict[str, Any]
"""Opaque tracker state; carries the canonical settings under SETTINGS_KEY."""

LogicSource: TypeAlias = Dict[str, Any]
"""Opaque reference to the logic branch used to interpret settings."""

RawSettingValue: TypeAlias = Union[str, int, float, bool, List[str]]
"""A setting value as it appears in JSON or YAML."""

FORMAT_VERSION = "SSRANDO-TRACKER-NG-V2"
"""Format tag of the self-export schema; bump whenever the state shape changes."""

SETTINGS_KEY = "settings"
WORLD_SECTION = "World 1"

# Canonical setting keys written outside the translation table
EXCLUDED_LOCATIONS_KEY = "excluded-locations"
STARTING_ITEMS_KEY = "starting-items"
DAMAGE_MULTIPLIER_KEY = "damage-multiplier"
STARTING_TABLET_COUNT_KEY = "starting-tablet-count"


class SettingKind(Enum):
    """Kinds of value a tracker setting can hold."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LIST = "list"


class ConflictPolicy(Enum):
    """How the field mapper treats two generator settings that target the same key."""

    TABLE_ORDER = "table_order"
    """Entries are applied in translation table order; the later entry wins."""

    ERROR = "error"
    """Any conflict aborts the import with FieldConflictError."""


@dataclass(frozen=True)
class SettingValue:
    """A tracker setting value tagged with its kind.

    List values are stored as tuples so a value can be shared between
    settings objects without being mutated through one of them.
    """

    kind: SettingKind
    value: Union[str, int, float, bool, Tuple[str, ...]]

    @classmethod
    def of(cls, raw: Any) -> "SettingValue":
        """Classify a raw JSON/YAML value.

        Args:
            raw: Value read from a document or data table

        Returns:
            Tagged setting value

        Raises:
            SettingValueError: If the value is not a string, number,
                boolean or list of strings
        """
        # bool first: it is a subclass of int
        if isinstance(raw, bool):
            return cls(SettingKind.BOOLEAN, raw)
        if isinstance(raw, (int, float)):
            return cls(SettingKind.NUMBER, raw)
        if isinstance(raw, str):
            return cls(SettingKind.STRING, raw)
        if isinstance(raw, (list, tuple)):
            items = list(raw)
            if not all(isinstance(item, str) for item in items):
                raise SettingValueError(f"List setting values must hold strings only: {raw!r}")
            return cls(SettingKind.LIST, tuple(items))
        raise SettingValueError(f"Unsupported setting value: {raw!r}")

    def to_raw(self) -> RawSettingValue:
        """Return the plain JSON-compatible value (lists come back as new lists)."""
        if self.kind is SettingKind.LIST:
            return list(self.value)  # type: ignore[arg-type]
        return self.value  # type: ignore[return-value]


class CanonicalSettings:
    """Mapping of tracker setting keys to tagged values.

    Created fresh for every import; copying never shares mutable state since
    every SettingValue is immutable.
    """

    def __init__(self, values: Optional[Mapping[str, SettingValue]] = None):
        self._values: Dict[str, SettingValue] = dict(values or {})

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "CanonicalSettings":
        """Build settings from a plain mapping, tagging every value.

        Raises:
            SettingValueError: If any value has an unsupported kind
        """
        return cls({key: SettingValue.of(value) for key, value in raw.items()})

    def to_raw(self) -> Dict[str, RawSettingValue]:
        """Return a plain, freshly allocated dict of the settings."""
        return {key: value.to_raw() for key, value in self._values.items()}

    def copy(self) -> "CanonicalSettings":
        """Return an independent copy of these settings."""
        return CanonicalSettings(self._values)

    def get(self, key: str) -> Optional[SettingValue]:
        return self._values.get(key)

    def keys(self) -> List[str]:
        return list(self._values.keys())

    def __getitem__(self, key: str) -> SettingValue:
        return self._values[key]

    def __setitem__(self, key: str, value: SettingValue) -> None:
        if not isinstance(value, SettingValue):
            raise SettingValueError(f"Setting '{key}' must be a SettingValue, got {value!r}")
        self._values[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CanonicalSettings):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"CanonicalSettings({len(self._values)} keys)"


@dataclass(frozen=True)
class FieldTranslationEntry:
    """Translation of one generator setting into a tracker setting.

    Attributes:
        external_name: Setting name used by the generator (config.yaml)
        canonical_name: Tracker setting key
        options: Generator value string -> tracker value
    """

    external_name: str
    canonical_name: str
    options: Mapping[str, SettingValue]


@dataclass(frozen=True)
class LocationRewriteRule:
    """Substring rewrite applied to legacy location identifiers.

    Attributes:
        match: Substring to look for
        replacement: Text replacing the match
        replace_all: Replace every occurrence instead of only the first
    """

    match: str
    replacement: str
    replace_all: bool = False

    def apply(self, identifier: str) -> str:
        """Apply this rule to a single identifier."""
        if self.replace_all:
            return identifier.replace(self.match, self.replacement)
        return identifier.replace(self.match, self.replacement, 1)


@dataclass
class ExternalSettingsDocument:
    """A parsed generator settings document (config.yaml).

    Attributes:
        world: Entries of the "World 1" section, setting name -> raw value
        seed: Generator seed
        generate_spoiler_log: Whether the generator wrote a spoiler log
        use_plandomizer: Whether a plandomizer file was used
        plandomizer_file: Path of the plandomizer file, if any
    """

    world: Dict[str, Any]
    seed: str = ""
    generate_spoiler_log: bool = False
    use_plandomizer: bool = False
    plandomizer_file: str = ""


@dataclass
class ExportDocument:
    """A self-export: tracker state plus format tag and logic source."""

    version: str
    state: TrackerState
    logic_branch: LogicSource

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON layout of the document."""
        return {
            "state": self.state,
            "version": self.version,
            "logicBranch": self.logic_branch,
        }


@dataclass(frozen=True)
class VersionCheck:
    """Result of comparing a self-export's format tag with the current one."""

    ok: bool
    found: str
    expected: str


@dataclass
class ImportResult:
    """Outcome of a successful import.

    Attributes:
        state: Tracker state ready for the state-loading collaborator
        logic_source: Logic branch reference to activate
        version_check: Format tag comparison (self-exports only)
        unknown_settings: Generator settings the translation table ignores
        untouched_locations: Excluded locations no rewrite rule changed
    """

    state: TrackerState
    logic_source: LogicSource
    version_check: Optional[VersionCheck] = None
    unknown_settings: List[str] = field(default_factory=list)
    untouched_locations: List[str] = field(default_factory=list)

    @property
    def version_mismatch(self) -> bool:
        """True when the imported export had a foreign format tag."""
        return self.version_check is not None and not self.version_check.ok
