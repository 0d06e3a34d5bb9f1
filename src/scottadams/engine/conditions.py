"""Evaluate action conditions against the world state."""

from . import codec
from .opcodes import Condition
from .state import CARRIED, STORE, WorldState
from .world import Action, World


def evaluate(
    world: World,
    state: WorldState,
    code: int,
    parameter: int,
    compare_original_location: bool = False,
) -> bool:
    """Evaluate a single condition code with its parameter."""
    locations = state.object_locations
    match Condition(code):
        case Condition.PARAMETER:
            return True
        case Condition.CARRIED:
            return state.is_carried(parameter)
        case Condition.HERE:
            return state.is_here(parameter)
        case Condition.AVAILABLE:
            return state.is_available(parameter)
        case Condition.IN_ROOM:
            return state.current_room == parameter
        case Condition.NOT_HERE:
            return not state.is_here(parameter)
        case Condition.NOT_CARRIED:
            return not state.is_carried(parameter)
        case Condition.NOT_IN_ROOM:
            return state.current_room != parameter
        case Condition.FLAG_SET:
            return state.flags[parameter]
        case Condition.FLAG_CLEAR:
            return not state.flags[parameter]
        case Condition.CARRYING_ANY:
            return CARRIED in locations
        case Condition.CARRYING_NONE:
            return CARRIED not in locations
        case Condition.NOT_AVAILABLE:
            return not state.is_available(parameter)
        case Condition.NOT_IN_STORE:
            return locations[parameter] != STORE
        case Condition.IN_STORE:
            return locations[parameter] == STORE
        case Condition.COUNTER_LE:
            return state.counter <= parameter
        case Condition.COUNTER_GT:
            return state.counter > parameter
        case Condition.ORIGINAL:
            if compare_original_location:
                return locations[parameter] == world.objects[parameter].original_location
            # The reference interpreter compares the location with itself.
            return True
        case Condition.NOT_ORIGINAL:
            if compare_original_location:
                return locations[parameter] != world.objects[parameter].original_location
            return False
        case Condition.COUNTER_EQ:
            return state.counter == parameter


def conditions_hold(
    world: World,
    state: WorldState,
    action: Action,
    compare_original_location: bool = False,
) -> bool:
    """True if every condition of the action holds. Stops at the first failure."""
    for code, parameter in codec.conditions(action):
        if code == Condition.PARAMETER:
            continue
        if not evaluate(world, state, code, parameter, compare_original_location):
            return False
    return True
