"""Immutable data structures for a loaded adventure database.

These are built once by the loader and never mutated afterwards.
"""

import re
from dataclasses import dataclass, field

# Unlimited carry capacity when the header gives a negative limit.
UNLIMITED_CARRY = 32767

DIRECTIONS = ("NORTH", "SOUTH", "EAST", "WEST", "UP", "DOWN")

SYNONYM_MARKER = "*"
TREASURE_MARKER = "*"

_NOUN_MARKER = re.compile(r"/.*/")


@dataclass(frozen=True)
class Header:
    """Counters and settings from the start of the database."""

    game_bytes: int
    number_of_objects: int
    number_of_actions: int
    number_of_words: int
    number_of_rooms: int
    max_objects_carried: int
    starting_room: int
    number_of_treasures: int
    word_length: int
    time_limit: int
    number_of_messages: int
    treasure_room: int


@dataclass(frozen=True)
class Room:
    """A location: description plus one exit per direction (0 = none)."""

    number: int
    description: str
    exits: tuple[int, ...]

    @property
    def is_literal(self) -> bool:
        """Descriptions starting with * are shown without "I'm in a"."""
        return self.description.startswith("*")


@dataclass(frozen=True)
class Obj:
    """An object and where it starts the game."""

    number: int
    description: str
    original_location: int

    @property
    def is_treasure(self) -> bool:
        return self.description.startswith(TREASURE_MARKER)

    @property
    def noun(self) -> str | None:
        """The /NOUN/ marker used by the built-in get and drop handler."""
        parts = self.description.split("/")
        if len(parts) < 2:
            return None
        return parts[1]

    @property
    def display_text(self) -> str:
        """Description with any /NOUN/ marker removed."""
        return _NOUN_MARKER.sub("", self.description)


@dataclass(frozen=True)
class Word:
    """One vocabulary column entry."""

    text: str
    number: int
    canonical: int

    @property
    def is_synonym(self) -> bool:
        return self.text.startswith(SYNONYM_MARKER)

    @property
    def bare_text(self) -> str:
        return self.text.lstrip(SYNONYM_MARKER)


@dataclass(frozen=True)
class Action:
    """A packed action record: header, 5 condition slots, 2 command slots."""

    number: int
    data: tuple[int, ...]
    description: str = ""


@dataclass
class World:
    """The complete static game database."""

    header: Header
    actions: list[Action] = field(default_factory=list)
    verbs: list[Word] = field(default_factory=list)
    nouns: list[Word] = field(default_factory=list)
    rooms: list[Room] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)
    objects: list[Obj] = field(default_factory=list)
    adventure_version: int = 0
    adventure_number: int = 0

    @property
    def dead_room(self) -> int:
        """The highest room id doubles as the game-over room."""
        return self.header.number_of_rooms

    @property
    def max_carried(self) -> int:
        if self.header.max_objects_carried < 0:
            return UNLIMITED_CARRY
        return self.header.max_objects_carried
