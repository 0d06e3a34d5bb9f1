"""Run one game turn: match words, fire actions, handle built-in verbs.

Game ties the static World to the mutable WorldState and the Console.
Every condition and command sees the same Game, so there is no module
level state.
"""

from ..errors import SaveGameError
from ..logging import get_logger
from . import codec, persistence
from .commands import TOO_MUCH_TO_CARRY, execute_commands, get_room_description
from .conditions import conditions_hold
from .console import Console
from .prng import LinearCongruentialRandom
from .state import (
    CARRIED,
    COUNTER_TIME_LIMIT,
    FLAG_LIGHT_EMPTY,
    FLAG_NIGHT,
    LIGHT_SOURCE,
    STORE,
    WorldState,
    new_world_state,
)
from .vocabulary import VERB_CARRY, VERB_DROP, VERB_GO, ParsedCommand, parse_command
from .world import DIRECTIONS, Action, Obj, World

logger = get_logger(__name__)

LIGHT_WARNING_THRESHOLD = 25


class Game:
    """A running game: world, state, console and the per-turn flags."""

    def __init__(
        self,
        world: World,
        console: Console,
        state: WorldState | None = None,
        rng: LinearCongruentialRandom | None = None,
        compare_original_location: bool = False,
    ):
        self.world = world
        self.console = console
        self.state = state or new_world_state(world)
        self.rng = rng or LinearCongruentialRandom()
        self.compare_original_location = compare_original_location
        self.continuation = False
        self.noun_text = ""

    def conditions_hold(self, action: Action) -> bool:
        return conditions_hold(
            self.world, self.state, action, self.compare_original_location
        )

    def execute(self, action: Action) -> None:
        logger.debug(
            "action_executed", action=action.number, description=action.description
        )
        execute_commands(self, action)

    def describe_room(self) -> None:
        self.console.write(get_room_description(self.world, self.state))

    def start(self) -> None:
        """Show the starting room and let automatic actions fire once."""
        self.describe_room()
        self.run_actions(0, 0)

    def viable_verbs(self) -> set[int]:
        """Verbs that have at least one action whose conditions hold now."""
        verbs = set()
        for action in self.world.actions:
            verb = codec.action_verb(action)
            if verb > 0 and verb not in verbs and self.conditions_hold(action):
                verbs.add(verb)
        return verbs

    def parse(self, line: str) -> ParsedCommand:
        return parse_command(self.world, line, self.viable_verbs())

    def play_turn(self, line: str) -> None:
        """Process one line of player input."""
        command = self.parse(line)
        self.noun_text = command.noun_text
        if command.has_unknown_words:
            self.console.writeln("You use word(s) I don't know")
            return

        self.run_actions(command.verb, command.noun)
        self.tick_light()
        self.run_actions(0, command.noun)

    def run_actions(self, verb: int, noun: int) -> None:
        """Scan the action table for one dispatch pass.

        With verb 0 this is the ambient pass that fires automatic actions;
        otherwise the first matching word action whose conditions hold runs.
        """
        if verb == VERB_GO and noun <= len(DIRECTIONS):
            self.go(noun)
            return

        verb_known = False
        word_action_done = False
        self.continuation = False

        for action in self.world.actions:
            action_verb, action_noun = codec.decode_header(action.data[0])

            if action_verb == 0 and action_noun == 0:
                if self.continuation and self.conditions_hold(action):
                    self.execute(action)
            else:
                self.continuation = False

            if verb == 0 and action_verb == 0 and action_noun > 0:
                if self.rng.percent() < action_noun and self.conditions_hold(action):
                    logger.debug("automatic_action_fired", action=action.number)
                    self.execute(action)

            if verb > 0 and action_verb == verb and not word_action_done:
                self.continuation = False
                if action_noun == 0 or action_noun == noun:
                    verb_known = True
                    if self.conditions_hold(action):
                        self.execute(action)
                        word_action_done = True
                        if not self.continuation:
                            return

        if verb == 0 or word_action_done:
            return

        if self.carry_or_drop(verb, noun):
            return

        if verb_known:
            self.console.writeln("I can't do that yet")
        else:
            self.console.writeln("I don't understand your command")

    def go(self, noun: int) -> None:
        """Built-in movement for GO with a direction noun."""
        state = self.state
        dark = state.is_dark()
        if dark:
            self.console.writeln("Dangerous to move in the dark!")

        if noun < 1:
            self.console.writeln("Give me a direction too.")
            return

        destination = self.world.rooms[state.current_room].exits[noun - 1]
        if destination < 1:
            if not dark:
                self.console.writeln("I can't go in that direction")
                return
            self.console.writeln("I fell down and broke my neck.")
            destination = self.world.dead_room
            state.flags[FLAG_NIGHT] = False

        state.current_room = destination
        self.describe_room()

    def _object_matches(self, obj: Obj, noun: int) -> bool:
        """Match an object's /NOUN/ marker against the noun id or the typed word."""
        marker = obj.noun
        if not marker:
            return False
        word_length = self.world.header.word_length
        marker = marker.upper()[:word_length]
        if noun > 0 and self.world.nouns[noun].bare_text.upper()[:word_length] == marker:
            return True
        return bool(self.noun_text) and self.noun_text.upper()[:word_length] == marker

    def _move_named_object(self, noun: int, source: int, destination: int) -> bool:
        for obj in self.world.objects:
            if self.state.object_locations[obj.number] != source:
                continue
            if self._object_matches(obj, noun):
                self.state.object_locations[obj.number] = destination
                self.console.writeln("OK")
                return True
        return False

    def carry_or_drop(self, verb: int, noun: int) -> bool:
        """Built-in GET/DROP for objects no action handled. False if not CARRY/DROP."""
        if verb not in (VERB_CARRY, VERB_DROP):
            return False

        if noun == 0 and not any(self._object_matches(obj, 0) for obj in self.world.objects):
            self.console.writeln("What?")
            return True

        state = self.state
        if verb == VERB_CARRY:
            if state.carried_count() >= self.world.max_carried:
                self.console.writeln(TOO_MUCH_TO_CARRY)
            elif not self._move_named_object(noun, state.current_room, CARRIED):
                self.console.writeln("I don't see it here")
        elif not self._move_named_object(noun, CARRIED, state.current_room):
            self.console.writeln("I'm not carrying it")
        return True

    def tick_light(self) -> None:
        """Burn one turn of the light source if it is being carried."""
        state = self.state
        if self.world.header.time_limit < 0 or LIGHT_SOURCE >= len(state.object_locations):
            return
        if not state.is_carried(LIGHT_SOURCE):
            return

        state.alternate_counters[COUNTER_TIME_LIMIT] -= 1
        remaining = state.alternate_counters[COUNTER_TIME_LIMIT]
        if remaining < 0:
            self.console.writeln("Light has run out")
            state.object_locations[LIGHT_SOURCE] = STORE
            state.flags[FLAG_LIGHT_EMPTY] = True
        elif remaining < LIGHT_WARNING_THRESHOLD:
            self.console.writeln(f"Light runs out in {remaining} turns!")

    def save_game(self) -> None:
        """Ask for a file name and write the current state to it."""
        path = self.console.prompt("Name of save file:")
        if not path:
            return
        try:
            persistence.save_game(path, self.world, self.state)
        except SaveGameError as exc:
            self.console.writeln(str(exc))

    def load_game(self) -> bool:
        """Ask for a save file and replace the state with it. True on success."""
        path = self.console.prompt("Name of save file:")
        if not path:
            return False
        try:
            self.state = persistence.load_game(path, self.world)
        except SaveGameError as exc:
            self.console.writeln(str(exc))
            return False
        return True
