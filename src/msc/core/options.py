"""Catalogue of editable server options and the value shapes they accept."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .configuration import Property


class Scalar(Enum):
    BOOLEAN = auto()
    BOUNDED_INTEGER = auto()
    TEXT = auto()


class ShapeFlag(Enum):
    BOOLEAN = auto()
    BOUNDED_INTEGER = auto()
    TEXT = auto()
    OPTIONAL = auto()


_SCALAR_FLAGS = {
    ShapeFlag.BOOLEAN: Scalar.BOOLEAN,
    ShapeFlag.BOUNDED_INTEGER: Scalar.BOUNDED_INTEGER,
    ShapeFlag.TEXT: Scalar.TEXT,
}


@dataclass(frozen=True)
class OptionShape:
    """A scalar value kind, optionally wrapped in a present/absent choice."""

    scalar: Scalar
    optional: bool = False

    def __post_init__(self):
        if self.optional and self.scalar is Scalar.BOOLEAN:
            raise ValueError("Boolean options cannot be optional")

    @classmethod
    def from_flags(cls, *flags: ShapeFlag) -> OptionShape:
        scalars = [_SCALAR_FLAGS[flag] for flag in flags if flag in _SCALAR_FLAGS]
        if len(scalars) != 1:
            raise ValueError(f"Exactly one scalar flag is required, got {flags!r}")
        return cls(scalars[0], optional=ShapeFlag.OPTIONAL in flags)

    @property
    def flags(self) -> frozenset[ShapeFlag]:
        scalar_flag = next(flag for flag, scalar in _SCALAR_FLAGS.items() if scalar is self.scalar)
        if self.optional:
            return frozenset({scalar_flag, ShapeFlag.OPTIONAL})
        return frozenset({scalar_flag})


BOOLEAN = OptionShape(Scalar.BOOLEAN)
OPTIONAL_INTEGER = OptionShape(Scalar.BOUNDED_INTEGER, optional=True)
OPTIONAL_TEXT = OptionShape(Scalar.TEXT, optional=True)


@dataclass(frozen=True)
class OptionDescriptor:
    property: Property
    name: str
    description: str
    shape: OptionShape


CATALOGUE: tuple[OptionDescriptor, ...] = (
    OptionDescriptor(
        Property.BONUS_CHEST,
        "Bonus chest",
        "Whether or not to add the bonus chest when creating a new world.",
        BOOLEAN,
    ),
    OptionDescriptor(
        Property.DEMO,
        "Demo mode",
        "Shows the players a demo pop-up, players can't place/break/eat once the demo expires.",
        BOOLEAN,
    ),
    OptionDescriptor(
        Property.ERASE_CACHE,
        "Erase the cache",
        "Erases the lighting caches, etc.",
        BOOLEAN,
    ),
    OptionDescriptor(
        Property.FORCE_UPGRADE,
        "Force an upgrade",
        "Forces an upgrade on all the chunks.",
        BOOLEAN,
    ),
    OptionDescriptor(
        Property.INIT_SETTINGS,
        "Initialize server settings",
        "Initializes 'server.properties' and 'eula.txt', then quits.",
        BOOLEAN,
    ),
    OptionDescriptor(
        Property.GUI,
        "GUI mode",
        "When enabled, opens the GUI upon launch of the server.",
        BOOLEAN,
    ),
    OptionDescriptor(
        Property.PORT,
        "Port",
        "Which port to listen on, overrides the server.properties value.",
        OPTIONAL_INTEGER,
    ),
    OptionDescriptor(
        Property.SAFE_MODE,
        "Safe mode",
        "Loads level with vanilla data pack only.",
        BOOLEAN,
    ),
    OptionDescriptor(
        Property.SINGLEPLAYER,
        "Single-player mode",
        "Runs the server in offline mode without authentication. "
        "This is insecure, do not use this when online.",
        BOOLEAN,
    ),
    OptionDescriptor(
        Property.UNIVERSE,
        "Universe name",
        "",
        OPTIONAL_TEXT,
    ),
    OptionDescriptor(
        Property.WORLD,
        "World name",
        "",
        OPTIONAL_TEXT,
    ),
)


def find_option(name: Property | str) -> OptionDescriptor | None:
    prop = Property.lookup(name)
    for option in CATALOGUE:
        if option.property is prop:
            return option
    return None
