"""Save and restore WorldState in the line-per-integer save format.

Order: adventure version, adventure number, current room, room registers,
counter, alternate counters, object locations, status flags (0/1).
"""

from pathlib import Path

from ..errors import SaveGameError
from ..logging import get_logger
from .state import (
    ALTERNATE_COUNTERS,
    ALTERNATE_ROOMS,
    CARRIED,
    STATUS_FLAGS,
    WorldState,
)
from .world import World

logger = get_logger(__name__)


def dump_state(world: World, state: WorldState) -> list[int]:
    """Flatten the state into save file order."""
    values = [world.adventure_version, world.adventure_number, state.current_room]
    values.extend(state.alternate_rooms)
    values.append(state.counter)
    values.extend(state.alternate_counters)
    values.extend(state.object_locations)
    values.extend(int(flag) for flag in state.flags)
    return values


def restore_state(world: World, values: list[int]) -> WorldState:
    """Rebuild a WorldState from save file values.

    Raises SaveGameError if the save belongs to another game or version,
    or is too short to hold every field.
    """
    if len(values) < 2:
        raise SaveGameError("Invalid savegame")
    if values[0] != world.adventure_version:
        raise SaveGameError("Invalid savegame version")
    if values[1] != world.adventure_number:
        raise SaveGameError("Invalid savegame adventure number")

    number_of_objects = len(world.objects)
    expected = (
        3 + ALTERNATE_ROOMS + 1 + ALTERNATE_COUNTERS + number_of_objects + STATUS_FLAGS
    )
    if len(values) < expected:
        raise SaveGameError("Invalid savegame: file is incomplete")

    it = iter(values[2:])
    current_room = next(it)
    alternate_rooms = [next(it) for _ in range(ALTERNATE_ROOMS)]
    counter = next(it)
    alternate_counters = [next(it) for _ in range(ALTERNATE_COUNTERS)]
    object_locations = [next(it) for _ in range(number_of_objects)]
    flags = [next(it) != 0 for _ in range(STATUS_FLAGS)]

    last_room = world.header.number_of_rooms
    rooms = [current_room, *alternate_rooms]
    rooms += [loc for loc in object_locations if loc != CARRIED]
    if any(not 0 <= room <= last_room for room in rooms):
        raise SaveGameError("Invalid savegame: unknown room")

    return WorldState(
        current_room=current_room,
        object_locations=object_locations,
        flags=flags,
        counter=counter,
        alternate_counters=alternate_counters,
        alternate_rooms=alternate_rooms,
    )


def save_game(path: Path | str, world: World, state: WorldState) -> None:
    """Write the state to a save file."""
    text = "".join(f"{value}\n" for value in dump_state(world, state))
    try:
        with open(path, "w") as fh:
            fh.write(text)
    except OSError as exc:
        logger.warning("save_failed", path=str(path), error=str(exc))
        raise SaveGameError(f'Couldn\'t save "{path}".') from exc
    logger.info("game_saved", path=str(path), room=state.current_room)


def load_game(path: Path | str, world: World) -> WorldState:
    """Read a save file and return the restored state."""
    try:
        with open(path) as fh:
            lines = fh.read().split()
    except OSError as exc:
        logger.info("load_failed", path=str(path), error=str(exc))
        raise SaveGameError(f'Couldn\'t load "{path}". Doesn\'t exist!') from exc

    try:
        values = [int(line) for line in lines]
    except ValueError as exc:
        logger.info("load_failed", path=str(path), error=str(exc))
        raise SaveGameError("Invalid savegame") from exc

    state = restore_state(world, values)
    logger.info("game_loaded", path=str(path), room=state.current_room)
    return state
