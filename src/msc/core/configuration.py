"""Server configuration record and its typed, property-keyed accessor."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
import logging
from typing import Union

PORT_MIN = 1
PORT_MAX = 65535

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Boolean:
    value: bool

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise ValueError(f"Expected true or false, got {self.value!r}")


@dataclass(frozen=True)
class OptionalInteger:
    value: int | None = None

    def __post_init__(self):
        if self.value is None:
            return
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Expected a whole number or nothing, got {self.value!r}")
        if not PORT_MIN <= self.value <= PORT_MAX:
            raise ValueError(f"{self.value} is outside {PORT_MIN}-{PORT_MAX}")


@dataclass(frozen=True)
class OptionalText:
    value: str | None = None

    def __post_init__(self):
        if self.value is not None and not isinstance(self.value, str):
            raise ValueError(f"Expected text or nothing, got {self.value!r}")


TypedValue = Union[Boolean, OptionalInteger, OptionalText]


class Property(str, Enum):
    """Identifiers of the editable server settings (their on-disk names)."""

    BONUS_CHEST = "bonusChest"
    DEMO = "demo"
    ERASE_CACHE = "eraseCache"
    FORCE_UPGRADE = "forceUpgrade"
    INIT_SETTINGS = "initSettings"
    GUI = "gui"
    PORT = "port"
    SAFE_MODE = "safeMode"
    SINGLEPLAYER = "singleplayer"
    UNIVERSE = "universe"
    WORLD = "world"

    @classmethod
    def lookup(cls, name: Property | str) -> Property | None:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass
class ServerConfiguration:
    """Settings passed to the Minecraft server on launch.

    ``None`` on an optional field means "let the server pick its default".
    """

    bonus_chest: bool = True
    demo: bool = False
    erase_cache: bool = False
    force_upgrade: bool = False
    init_settings: bool = False
    gui: bool = False
    port: int | None = None
    safe_mode: bool = False
    singleplayer: bool = False
    universe: str | None = None
    world: str | None = None

    @classmethod
    def defaults(cls) -> ServerConfiguration:
        return cls()

    def get(self, name: Property | str) -> TypedValue:
        """Return the field behind ``name`` wrapped in its typed value.

        Unknown names yield an absent text value.
        """
        prop = Property.lookup(name)
        if prop is None:
            return OptionalText(None)
        attribute, variant = _FIELDS[prop]
        return variant(getattr(self, attribute))

    def set(self, name: Property | str, value: TypedValue) -> None:
        """Write ``value`` into the field behind ``name``.

        The value's variant picks the candidate fields; a name that is unknown
        or belongs to a field of another shape leaves the record untouched.
        """
        prop = Property.lookup(name)
        target = _FIELDS_BY_VARIANT.get(type(value), {}).get(prop)
        if target is None:
            logger.debug("Ignoring %r for property %r", value, name)
            return
        setattr(self, target, value.value)

    def to_dict(self) -> dict[str, bool | int | str | None]:
        return {prop.value: getattr(self, attribute) for prop, (attribute, _) in _FIELDS.items()}

    @classmethod
    def from_dict(cls, data: dict) -> ServerConfiguration:
        """Build a record from its on-disk mapping.

        Missing keys keep their default; unknown keys are ignored. Raises
        ValueError when a value has the wrong type or is out of range.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping, got {type(data).__name__}")
        configuration = cls()
        for prop, (attribute, variant) in _FIELDS.items():
            if prop.value in data:
                setattr(configuration, attribute, variant(data[prop.value]).value)
        return configuration


_FIELDS: dict[Property, tuple[str, type]] = {
    Property.BONUS_CHEST: ("bonus_chest", Boolean),
    Property.DEMO: ("demo", Boolean),
    Property.ERASE_CACHE: ("erase_cache", Boolean),
    Property.FORCE_UPGRADE: ("force_upgrade", Boolean),
    Property.INIT_SETTINGS: ("init_settings", Boolean),
    Property.GUI: ("gui", Boolean),
    Property.PORT: ("port", OptionalInteger),
    Property.SAFE_MODE: ("safe_mode", Boolean),
    Property.SINGLEPLAYER: ("singleplayer", Boolean),
    Property.UNIVERSE: ("universe", OptionalText),
    Property.WORLD: ("world", OptionalText),
}

_FIELDS_BY_VARIANT: dict[type, dict[Property, str]] = {}
for _prop, (_attribute, _variant) in _FIELDS.items():
    _FIELDS_BY_VARIANT.setdefault(_variant, {})[_prop] = _attribute
del _prop, _attribute, _variant

assert set(_FIELDS) == set(Property), "every property needs a field"
assert {a for a, _ in _FIELDS.values()} == {f.name for f in fields(ServerConfiguration)}
