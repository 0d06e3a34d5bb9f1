"""Tests for the condition evaluator."""

import pytest

from scottadams.engine.conditions import conditions_hold, evaluate
from scottadams.engine.opcodes import Condition
from scottadams.engine.state import CARRIED, new_world_state
from scottadams.engine.world import World

LAMP = 9
SIGN = 0
KEY = 3


@pytest.fixture
def state(world: World):
    """Player in the forest carrying the lamp."""
    state = new_world_state(world)
    state.object_locations[LAMP] = CARRIED
    return state


@pytest.mark.parametrize(
    "code,param,expected",
    [
        (Condition.PARAMETER, 99, True),
        (Condition.CARRIED, LAMP, True),
        (Condition.CARRIED, SIGN, False),
        (Condition.HERE, SIGN, True),
        (Condition.HERE, LAMP, False),
        (Condition.AVAILABLE, LAMP, True),
        (Condition.AVAILABLE, SIGN, True),
        (Condition.AVAILABLE, KEY, False),
        (Condition.IN_ROOM, 1, True),
        (Condition.IN_ROOM, 2, False),
        (Condition.NOT_HERE, LAMP, True),
        (Condition.NOT_CARRIED, SIGN, True),
        (Condition.NOT_IN_ROOM, 2, True),
        (Condition.CARRYING_ANY, 0, True),
        (Condition.CARRYING_NONE, 0, False),
        (Condition.NOT_AVAILABLE, KEY, True),
        (Condition.NOT_IN_STORE, KEY, False),
        (Condition.IN_STORE, KEY, True),
        (Condition.ORIGINAL, LAMP, True),
        (Condition.NOT_ORIGINAL, LAMP, False),
    ],
)
def test_object_and_room_conditions(world: World, state, code, param, expected):
    assert evaluate(world, state, code, param) is expected


def test_flag_conditions(world: World, state):
    state.flags[8] = True
    assert evaluate(world, state, Condition.FLAG_SET, 8)
    assert not evaluate(world, state, Condition.FLAG_CLEAR, 8)
    assert evaluate(world, state, Condition.FLAG_CLEAR, 9)


def test_counter_conditions(world: World, state):
    state.counter = 5
    assert evaluate(world, state, Condition.COUNTER_LE, 5)
    assert not evaluate(world, state, Condition.COUNTER_LE, 4)
    assert evaluate(world, state, Condition.COUNTER_GT, 4)
    assert not evaluate(world, state, Condition.COUNTER_GT, 5)
    assert evaluate(world, state, Condition.COUNTER_EQ, 5)
    assert not evaluate(world, state, Condition.COUNTER_EQ, 6)


def test_carrying_none(world: World):
    state = new_world_state(world)
    assert evaluate(world, state, Condition.CARRYING_NONE, 0)
    assert not evaluate(world, state, Condition.CARRYING_ANY, 0)


def test_original_location_compared_when_enabled(world: World, state):
    """The lamp started in room 1 and is now carried."""
    assert not evaluate(world, state, Condition.ORIGINAL, LAMP, True)
    assert evaluate(world, state, Condition.NOT_ORIGINAL, LAMP, True)
    assert evaluate(world, state, Condition.ORIGINAL, SIGN, True)


def test_conditions_hold_stops_at_first_failure(world: World, state, make_action):
    action = make_action(
        verb=12,
        conditions=((Condition.IN_ROOM, 1), (Condition.CARRIED, SIGN), (Condition.PARAMETER, 7)),
    )
    assert not conditions_hold(world, state, action)
    state.object_locations[SIGN] = CARRIED
    assert conditions_hold(world, state, action)


def test_parameter_slots_are_not_conditions(world: World, state, make_action):
    """A code-0 slot holding an out-of-range number is still true."""
    action = make_action(verb=1, conditions=((Condition.PARAMETER, 500),))
    assert conditions_hold(world, state, action)
