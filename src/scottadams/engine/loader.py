"""Parse a Scott Adams packed-integer database into a World.

The file is a flat stream of whitespace separated integers and double
quoted strings, read in this fixed order:

  header      12 integers
  actions     (number_of_actions + 1) x 8 integers
  vocabulary  (number_of_words + 1) x (verb string, noun string)
  rooms       (number_of_rooms + 1) x (6 exit integers, description)
  messages    (number_of_messages + 1) strings
  objects     (number_of_objects + 1) x (description, location)
  action text (number_of_actions + 1) strings
  trailer     adventure version, adventure number

Strings may span lines. A back-tick inside a string stands for a double
quote.
"""

from pathlib import Path

from ..errors import DataFormatError
from ..logging import get_logger
from . import codec
from .opcodes import (
    CONDITION_PARAMS,
    OPCODE_PARAMS,
    OPCODE_START,
    Condition,
    Opcode,
    Param,
    message_number,
)
from .state import (
    ALTERNATE_COUNTERS,
    ALTERNATE_ROOMS,
    CARRIED,
    LIGHT_SOURCE,
    STATUS_FLAGS,
)
from .world import DIRECTIONS, SYNONYM_MARKER, Action, Header, Obj, Room, Word, World

logger = get_logger(__name__)

HEADER_FIELDS = (
    "game_bytes",
    "number_of_objects",
    "number_of_actions",
    "number_of_words",
    "number_of_rooms",
    "max_objects_carried",
    "starting_room",
    "number_of_treasures",
    "word_length",
    "time_limit",
    "number_of_messages",
    "treasure_room",
)

_COUNT_FIELDS = (
    "number_of_objects",
    "number_of_actions",
    "number_of_words",
    "number_of_rooms",
    "number_of_treasures",
    "number_of_messages",
)


class _Scanner:
    """Reads integer and string tokens from database text."""

    def __init__(self, text: str):
        self.text = text.replace("\r\n", "\n").replace("\r", "\n")
        self.pos = 0
        self.line = 1

    def _skip_whitespace(self) -> None:
        text = self.text
        while self.pos < len(text) and text[self.pos].isspace():
            if text[self.pos] == "\n":
                self.line += 1
            self.pos += 1

    def read_int(self, what: str) -> int:
        self._skip_whitespace()
        text = self.text
        start = self.pos
        if start < len(text) and text[start] == "-":
            self.pos += 1
        while self.pos < len(text) and text[self.pos].isdigit():
            self.pos += 1
        token = text[start : self.pos]
        if token in ("", "-"):
            self.pos = start
            if start >= len(text):
                raise DataFormatError(f"unexpected end of file reading {what}", self.line)
            raise DataFormatError(
                f"expected a number for {what}, found {text[start:start + 10]!r}",
                self.line,
            )
        return int(token)

    def read_string(self, what: str) -> str:
        self._skip_whitespace()
        text = self.text
        if self.pos >= len(text):
            raise DataFormatError(f"unexpected end of file reading {what}", self.line)
        if text[self.pos] != '"':
            raise DataFormatError(
                f"expected a quoted string for {what}, "
                f"found {text[self.pos:self.pos + 10]!r}",
                self.line,
            )
        end = text.find('"', self.pos + 1)
        if end == -1:
            raise DataFormatError(f"unterminated string in {what}", self.line)
        value = text[self.pos + 1 : end]
        self.line += value.count("\n")
        self.pos = end + 1
        return value.replace("`", '"')


def _read_header(scanner: _Scanner) -> Header:
    values = {name: scanner.read_int(f"header field {name}") for name in HEADER_FIELDS}
    for name in _COUNT_FIELDS:
        if values[name] < 0:
            raise DataFormatError(f"header field {name} is negative")
    if values["word_length"] < 1:
        raise DataFormatError("header field word_length must be at least 1")
    return Header(**values)


def _read_actions(scanner: _Scanner, count: int) -> list[list[int]]:
    records = []
    for n in range(count + 1):
        records.append(
            [scanner.read_int(f"action {n}") for _ in range(codec.ACTION_ENTRIES)]
        )
    return records


def _words(texts: list[str]) -> list[Word]:
    """Resolve synonyms to the nearest preceding non-synonym entry."""
    words = []
    canonical = 0
    for number, text in enumerate(texts):
        if not text.startswith(SYNONYM_MARKER):
            canonical = number
        words.append(Word(text=text, number=number, canonical=canonical))
    return words


def _read_vocabulary(scanner: _Scanner, count: int) -> tuple[list[Word], list[Word]]:
    verbs: list[str] = []
    nouns: list[str] = []
    for n in range(count + 1):
        verbs.append(scanner.read_string(f"verb {n}"))
        nouns.append(scanner.read_string(f"noun {n}"))
    return _words(verbs), _words(nouns)


def _read_rooms(scanner: _Scanner, count: int) -> list[Room]:
    rooms = []
    for n in range(count + 1):
        exits = tuple(
            scanner.read_int(f"room {n} {direction} exit") for direction in DIRECTIONS
        )
        description = scanner.read_string(f"room {n} description")
        rooms.append(Room(number=n, description=description, exits=exits))
    return rooms


def _read_messages(scanner: _Scanner, count: int) -> list[str]:
    return [scanner.read_string(f"message {n}") for n in range(count + 1)]


def _read_objects(scanner: _Scanner, count: int) -> list[Obj]:
    objects = []
    for n in range(count + 1):
        description = scanner.read_string(f"object {n} description")
        location = scanner.read_int(f"object {n} location")
        objects.append(Obj(number=n, description=description, original_location=location))
    return objects


def parse_world(text: str) -> World:
    """Parse database text and return a validated World."""
    scanner = _Scanner(text)
    header = _read_header(scanner)
    records = _read_actions(scanner, header.number_of_actions)
    verbs, nouns = _read_vocabulary(scanner, header.number_of_words)
    rooms = _read_rooms(scanner, header.number_of_rooms)
    messages = _read_messages(scanner, header.number_of_messages)
    objects = _read_objects(scanner, header.number_of_objects)
    descriptions = [
        scanner.read_string(f"action {n} description")
        for n in range(header.number_of_actions + 1)
    ]
    adventure_version = scanner.read_int("adventure version")
    adventure_number = scanner.read_int("adventure number")

    world = World(
        header=header,
        actions=[
            Action(number=n, data=tuple(data), description=descriptions[n])
            for n, data in enumerate(records)
        ],
        verbs=verbs,
        nouns=nouns,
        rooms=rooms,
        messages=messages,
        objects=objects,
        adventure_version=adventure_version,
        adventure_number=adventure_number,
    )
    validate_world(world)
    return world


def load_world(data_path: Path | str) -> World:
    """Read a database file and return a validated World."""
    try:
        with open(data_path, encoding="latin-1") as fh:
            text = fh.read()
    except OSError as exc:
        raise DataFormatError(f"cannot read game file {data_path}: {exc}") from exc

    world = parse_world(text)
    logger.info(
        "world_loaded",
        path=str(data_path),
        rooms=len(world.rooms),
        objects=len(world.objects),
        actions=len(world.actions),
        words=len(world.verbs),
        messages=len(world.messages),
        adventure=world.adventure_number,
        version=world.adventure_version,
    )
    return world


def _check_param(world: World, kind: Param, value: int, where: str) -> None:
    header = world.header
    match kind:
        case Param.OBJECT:
            valid = 0 <= value <= header.number_of_objects
        case Param.ROOM:
            valid = 0 <= value <= header.number_of_rooms
        case Param.FLAG:
            valid = 0 <= value < STATUS_FLAGS
        case Param.COUNTER_SLOT:
            valid = 0 <= value < ALTERNATE_COUNTERS
        case Param.ROOM_SLOT:
            valid = 0 <= value < ALTERNATE_ROOMS
        case _:
            valid = True
    if not valid:
        raise DataFormatError(f"{where}: {kind.value} {value} out of range")


def _validate_action(world: World, action: Action) -> None:
    where = f"action {action.number}"
    if any(value < 0 for value in action.data):
        raise DataFormatError(f"{where}: negative value in record")

    for code, parameter in codec.conditions(action):
        if code == Condition.PARAMETER:
            continue
        _check_param(world, CONDITION_PARAMS[Condition(code)], parameter, where)

    # Walk the commands the way the executor will, so a missing parameter
    # is caught now rather than mid-game.
    cursor = codec.ParameterCursor(action)
    for slot in codec.commands(action):
        number = message_number(slot)
        if number is not None:
            if number > world.header.number_of_messages:
                raise DataFormatError(f"{where}: message {number} does not exist")
            continue
        if slot == 0:
            continue
        if slot - OPCODE_START > max(Opcode):
            raise DataFormatError(f"{where}: unknown command {slot}")
        opcode = Opcode(slot - OPCODE_START)
        if opcode == Opcode.FILL and world.header.number_of_objects < LIGHT_SOURCE:
            raise DataFormatError(
                f"{where}: FILL needs light source object {LIGHT_SOURCE}"
            )
        for kind in OPCODE_PARAMS.get(opcode, ()):
            _check_param(world, kind, cursor.next(), where)


def validate_world(world: World) -> None:
    """Reject databases that refer to rooms, objects or messages that don't exist."""
    header = world.header
    last_room = header.number_of_rooms

    for name in ("starting_room", "treasure_room"):
        value = getattr(header, name)
        if not 0 <= value <= last_room:
            raise DataFormatError(f"header field {name} refers to missing room {value}")

    for room in world.rooms:
        for exit_room in room.exits:
            if not 0 <= exit_room <= last_room:
                raise DataFormatError(
                    f"room {room.number} has an exit to missing room {exit_room}"
                )

    for obj in world.objects:
        if obj.original_location != CARRIED and not 0 <= obj.original_location <= last_room:
            raise DataFormatError(
                f"object {obj.number} starts in missing room {obj.original_location}"
            )

    for action in world.actions:
        _validate_action(world, action)
