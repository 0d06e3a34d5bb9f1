"""Mutable game state.

Holds only ints and bools so it can be compared, copied and written to a
save file. Static data lives in World.
"""

from dataclasses import dataclass, field

from .world import World

# Special location values for objects
CARRIED = -1
STORE = 0

# Fixed object and flag numbers used by the interpreter itself
LIGHT_SOURCE = 9
FLAG_NIGHT = 15
FLAG_LIGHT_EMPTY = 16

STATUS_FLAGS = 32
ALTERNATE_COUNTERS = 9
ALTERNATE_ROOMS = 6
COUNTER_TIME_LIMIT = 8
MINIMUM_COUNTER = -1


@dataclass
class WorldState:
    """All mutable state of a game in progress."""

    current_room: int = 0
    object_locations: list[int] = field(default_factory=list)
    flags: list[bool] = field(default_factory=lambda: [False] * STATUS_FLAGS)
    counter: int = 0
    alternate_counters: list[int] = field(
        default_factory=lambda: [0] * ALTERNATE_COUNTERS
    )
    alternate_rooms: list[int] = field(default_factory=lambda: [0] * ALTERNATE_ROOMS)

    def is_carried(self, obj: int) -> bool:
        return self.object_locations[obj] == CARRIED

    def is_here(self, obj: int) -> bool:
        return self.object_locations[obj] == self.current_room

    def is_available(self, obj: int) -> bool:
        """Carried or in the current room."""
        return self.is_carried(obj) or self.is_here(obj)

    def carried_count(self) -> int:
        return sum(1 for loc in self.object_locations if loc == CARRIED)

    def is_dark(self) -> bool:
        """Night with no working light source at hand."""
        if not self.flags[FLAG_NIGHT]:
            return False
        if LIGHT_SOURCE >= len(self.object_locations):
            return True
        return not self.is_available(LIGHT_SOURCE) or self.flags[FLAG_LIGHT_EMPTY]

    def decrease_counter(self, amount: int) -> None:
        self.counter = max(self.counter - amount, MINIMUM_COUNTER)


def new_world_state(world: World) -> WorldState:
    """Create a fresh state with objects in their starting positions."""
    state = WorldState(
        current_room=world.header.starting_room,
        object_locations=[obj.original_location for obj in world.objects],
    )
    state.alternate_counters[COUNTER_TIME_LIMIT] = world.header.time_limit
    return state
