"""Execute the command slots of an action.

execute_commands(game, action) is the entry point. Each slot value is
either a message number, a no-op, or an opcode; opcode handlers mutate
game.state in place, write to game.console, and return False to skip the
rest of the action's commands.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from ..errors import GameOver
from ..logging import get_logger
from . import codec
from .codec import ParameterCursor
from .opcodes import OPCODE_START, Opcode, message_number
from .state import (
    CARRIED,
    COUNTER_TIME_LIMIT,
    FLAG_LIGHT_EMPTY,
    FLAG_NIGHT,
    LIGHT_SOURCE,
    STORE,
    WorldState,
)
from .world import DIRECTIONS, Action, World

if TYPE_CHECKING:
    from .dispatcher import Game

logger = get_logger(__name__)

PERCENT_UNITS = 100

TOO_MUCH_TO_CARRY = "I've too much too carry. try -take inventory-"


def get_room_description(world: World, state: WorldState) -> str:
    """Room text, visible objects and obvious exits for the current room."""
    if state.is_dark():
        return "I can't see: Its too dark.\n"

    room = world.rooms[state.current_room]
    if room.is_literal:
        text = room.description[1:]
    else:
        text = f"I'm in a {room.description}"

    visible = [
        obj.display_text
        for obj in world.objects
        if state.object_locations[obj.number] == state.current_room
    ]
    if visible:
        text += ". Visible items here: \n" + "".join(f"{item}. " for item in visible)
    text += "\n"

    exits = [DIRECTIONS[i] for i, dest in enumerate(room.exits) if dest != 0]
    if exits:
        text += "Obvious exits: " + "".join(f"{name} " for name in exits)
    return text + "\n\n"


def get_inventory(world: World, state: WorldState) -> str:
    carried = [
        obj.display_text for obj in world.objects if state.is_carried(obj.number)
    ]
    if not carried:
        return "Nothing\n\n"
    return "".join(f"{item}. " for item in carried) + "\n\n"


def calculate_score(world: World, state: WorldState) -> tuple[int, int]:
    """Return (treasures stored, score out of 100)."""
    stored = sum(
        1
        for obj in world.objects
        if obj.is_treasure
        and state.object_locations[obj.number] == world.header.treasure_room
    )
    total = world.header.number_of_treasures
    if total == 0:
        return stored, PERCENT_UNITS
    return stored, stored * PERCENT_UNITS // total


def _cmd_get(game: "Game", cursor: ParameterCursor) -> bool:
    if game.state.carried_count() >= game.world.max_carried:
        game.console.writeln(TOO_MUCH_TO_CARRY)
        return False
    game.state.object_locations[cursor.next()] = CARRIED
    return True


def _cmd_drop(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.object_locations[cursor.next()] = game.state.current_room
    return True


def _cmd_goto(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.current_room = cursor.next()
    return True


def _cmd_destroy(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.object_locations[cursor.next()] = STORE
    return True


def _cmd_night(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.flags[FLAG_NIGHT] = True
    return True


def _cmd_day(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.flags[FLAG_NIGHT] = False
    return True


def _cmd_set_flag(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.flags[cursor.next()] = True
    return True


def _cmd_clear_flag(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.flags[cursor.next()] = False
    return True


def _cmd_dead(game: "Game", cursor: ParameterCursor) -> bool:
    game.console.writeln("I'm dead...")
    game.state.current_room = game.world.dead_room
    game.state.flags[FLAG_NIGHT] = False
    game.describe_room()
    return True


def _cmd_put(game: "Game", cursor: ParameterCursor) -> bool:
    obj = cursor.next()
    game.state.object_locations[obj] = cursor.next()
    return True


def _cmd_finish(game: "Game", cursor: ParameterCursor) -> bool:
    raise GameOver("finished")


def _cmd_look(game: "Game", cursor: ParameterCursor) -> bool:
    game.describe_room()
    return True


def _cmd_score(game: "Game", cursor: ParameterCursor) -> bool:
    stored, score = calculate_score(game.world, game.state)
    game.console.writeln(
        f"I've stored {stored} treasures. "
        f"ON A SCALE OF 0 TO {PERCENT_UNITS} THAT RATES A {score}"
    )
    if stored == game.world.header.number_of_treasures:
        game.console.writeln("Well done.")
        raise GameOver("all treasures stored")
    return True


def _cmd_inventory(game: "Game", cursor: ParameterCursor) -> bool:
    game.console.write(get_inventory(game.world, game.state))
    return True


def _cmd_set_flag0(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.flags[0] = True
    return True


def _cmd_clear_flag0(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.flags[0] = False
    return True


def _cmd_fill(game: "Game", cursor: ParameterCursor) -> bool:
    state = game.state
    state.alternate_counters[COUNTER_TIME_LIMIT] = game.world.header.time_limit
    state.object_locations[LIGHT_SOURCE] = CARRIED
    state.flags[FLAG_LIGHT_EMPTY] = False
    return True


def _cmd_clear_screen(game: "Game", cursor: ParameterCursor) -> bool:
    game.console.clear()
    return True


def _cmd_save(game: "Game", cursor: ParameterCursor) -> bool:
    game.save_game()
    return True


def _cmd_swap(game: "Game", cursor: ParameterCursor) -> bool:
    locations = game.state.object_locations
    first = cursor.next()
    second = cursor.next()
    locations[first], locations[second] = locations[second], locations[first]
    return True


def _cmd_continue(game: "Game", cursor: ParameterCursor) -> bool:
    game.continuation = True
    return True


def _cmd_superget(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.object_locations[cursor.next()] = CARRIED
    return True


def _cmd_put_with(game: "Game", cursor: ParameterCursor) -> bool:
    locations = game.state.object_locations
    obj = cursor.next()
    locations[obj] = locations[cursor.next()]
    return True


def _cmd_dec_counter(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.decrease_counter(1)
    return True


def _cmd_print_counter(game: "Game", cursor: ParameterCursor) -> bool:
    game.console.write(str(game.state.counter))
    return True


def _cmd_set_counter(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.counter = cursor.next()
    return True


def _cmd_swap_room0(game: "Game", cursor: ParameterCursor) -> bool:
    state = game.state
    state.current_room, state.alternate_rooms[0] = (
        state.alternate_rooms[0],
        state.current_room,
    )
    return True


def _cmd_swap_counter(game: "Game", cursor: ParameterCursor) -> bool:
    state = game.state
    slot = cursor.next()
    state.counter, state.alternate_counters[slot] = (
        state.alternate_counters[slot],
        state.counter,
    )
    return True


def _cmd_add_counter(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.counter += cursor.next()
    return True


def _cmd_sub_counter(game: "Game", cursor: ParameterCursor) -> bool:
    game.state.decrease_counter(cursor.next())
    return True


def _cmd_print_noun(game: "Game", cursor: ParameterCursor) -> bool:
    game.console.write(game.noun_text)
    return True


def _cmd_print_noun_cr(game: "Game", cursor: ParameterCursor) -> bool:
    game.console.writeln(game.noun_text)
    return True


def _cmd_newline(game: "Game", cursor: ParameterCursor) -> bool:
    game.console.writeln()
    return True


def _cmd_swap_room(game: "Game", cursor: ParameterCursor) -> bool:
    state = game.state
    slot = cursor.next()
    state.current_room, state.alternate_rooms[slot] = (
        state.alternate_rooms[slot],
        state.current_room,
    )
    return True


def _cmd_delay(game: "Game", cursor: ParameterCursor) -> bool:
    game.console.pause()
    return True


_OPCODE_DISPATCH: dict[Opcode, Callable[["Game", ParameterCursor], bool]] = {
    Opcode.GET: _cmd_get,
    Opcode.DROP: _cmd_drop,
    Opcode.GOTO: _cmd_goto,
    Opcode.DESTROY: _cmd_destroy,
    Opcode.NIGHT: _cmd_night,
    Opcode.DAY: _cmd_day,
    Opcode.SET_FLAG: _cmd_set_flag,
    Opcode.DESTROY2: _cmd_destroy,
    Opcode.CLEAR_FLAG: _cmd_clear_flag,
    Opcode.DEAD: _cmd_dead,
    Opcode.PUT: _cmd_put,
    Opcode.FINISH: _cmd_finish,
    Opcode.LOOK: _cmd_look,
    Opcode.SCORE: _cmd_score,
    Opcode.INVENTORY: _cmd_inventory,
    Opcode.SET_FLAG0: _cmd_set_flag0,
    Opcode.CLEAR_FLAG0: _cmd_clear_flag0,
    Opcode.FILL: _cmd_fill,
    Opcode.CLEAR_SCREEN: _cmd_clear_screen,
    Opcode.SAVE: _cmd_save,
    Opcode.SWAP: _cmd_swap,
    Opcode.CONTINUE: _cmd_continue,
    Opcode.SUPERGET: _cmd_superget,
    Opcode.PUT_WITH: _cmd_put_with,
    Opcode.LOOK2: _cmd_look,
    Opcode.DEC_COUNTER: _cmd_dec_counter,
    Opcode.PRINT_COUNTER: _cmd_print_counter,
    Opcode.SET_COUNTER: _cmd_set_counter,
    Opcode.SWAP_ROOM0: _cmd_swap_room0,
    Opcode.SWAP_COUNTER: _cmd_swap_counter,
    Opcode.ADD_COUNTER: _cmd_add_counter,
    Opcode.SUB_COUNTER: _cmd_sub_counter,
    Opcode.PRINT_NOUN: _cmd_print_noun,
    Opcode.PRINT_NOUN_CR: _cmd_print_noun_cr,
    Opcode.NEWLINE: _cmd_newline,
    Opcode.SWAP_ROOM: _cmd_swap_room,
    Opcode.DELAY: _cmd_delay,
}


def execute_commands(game: "Game", action: Action) -> None:
    """Run the four command slots of an action in order."""
    cursor = ParameterCursor(action)
    for slot in codec.commands(action):
        number = message_number(slot)
        if number is not None:
            game.console.writeln(game.world.messages[number])
            continue
        if slot == 0:
            continue

        opcode = Opcode(slot - OPCODE_START)
        logger.debug("command", action=action.number, opcode=opcode.name)
        if not _OPCODE_DISPATCH[opcode](game, cursor):
            break
