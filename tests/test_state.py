"""Tests for game state and save files."""

import io

import pytest

from scottadams.engine.persistence import dump_state, load_game, restore_state, save_game
from scottadams.engine.state import (
    CARRIED,
    COUNTER_TIME_LIMIT,
    FLAG_NIGHT,
    LIGHT_SOURCE,
    STATUS_FLAGS,
    new_world_state,
)
from scottadams.engine.world import World
from scottadams.errors import SaveGameError

SAVE_LENGTH = 3 + 6 + 1 + 9 + 11 + STATUS_FLAGS


def test_new_world_state(world: World):
    """Fresh state places objects where the database says."""
    state = new_world_state(world)
    assert state.current_room == 1
    assert state.object_locations[LIGHT_SOURCE] == 1
    assert state.object_locations[3] == 0
    assert state.alternate_counters[COUNTER_TIME_LIMIT] == 30
    assert state.counter == 0
    assert not any(state.flags)


def test_darkness(world: World):
    state = new_world_state(world)
    state.current_room = 3
    assert not state.is_dark()
    state.flags[FLAG_NIGHT] = True
    assert state.is_dark()
    state.object_locations[LIGHT_SOURCE] = CARRIED
    assert not state.is_dark()


def test_dump_layout(world: World):
    state = new_world_state(world)
    state.flags[FLAG_NIGHT] = True
    values = dump_state(world, state)
    assert len(values) == SAVE_LENGTH
    assert values[:3] == [1, 42, 1]
    assert values[9] == 0
    assert values[18] == 30
    assert values[-STATUS_FLAGS + FLAG_NIGHT] == 1


def test_restore_is_exact(world: World):
    state = new_world_state(world)
    state.current_room = 4
    state.counter = 7
    state.alternate_rooms[2] = 3
    state.object_locations[LIGHT_SOURCE] = CARRIED
    state.flags[FLAG_NIGHT] = True
    assert restore_state(world, dump_state(world, state)) == state


def test_save_and_load_file(world: World, tmp_path):
    state = new_world_state(world)
    state.current_room = 3
    state.object_locations[1] = CARRIED
    path = tmp_path / "adventure.sav"

    save_game(path, world, state)
    assert len(path.read_text().splitlines()) == SAVE_LENGTH
    assert load_game(path, world) == state


@pytest.mark.parametrize(
    "index,value,message",
    [
        (0, 2, "Invalid savegame version"),
        (1, 7, "Invalid savegame adventure number"),
        (2, 99, "Invalid savegame: unknown room"),
        (3, 99, "Invalid savegame: unknown room"),
        (8, -1, "Invalid savegame: unknown room"),
    ],
)
def test_rejects_foreign_save(world: World, index, value, message):
    values = dump_state(world, new_world_state(world))
    values[index] = value
    with pytest.raises(SaveGameError, match=message):
        restore_state(world, values)


def test_rejects_incomplete_save(world: World):
    values = dump_state(world, new_world_state(world))
    with pytest.raises(SaveGameError, match="incomplete"):
        restore_state(world, values[:20])


def test_rejects_garbage(world: World, tmp_path):
    path = tmp_path / "bad.sav"
    path.write_text("1\n42\nbanana\n")
    with pytest.raises(SaveGameError, match="Invalid savegame"):
        load_game(path, world)


def test_missing_save_file(world: World, tmp_path):
    path = tmp_path / "nowhere.sav"
    with pytest.raises(SaveGameError, match="Doesn't exist!"):
        load_game(path, world)


def test_unwritable_save_file(world: World, tmp_path):
    path = tmp_path / "no" / "such" / "dir.sav"
    with pytest.raises(SaveGameError, match="Couldn't save"):
        save_game(path, world, new_world_state(world))


def test_game_load_replaces_state(game, output: io.StringIO, tmp_path):
    path = tmp_path / "game.sav"
    saved = new_world_state(game.world)
    saved.current_room = 4
    save_game(path, game.world, saved)

    game.console.stdin = io.StringIO(f"{path}\n")
    assert game.load_game()
    assert game.state.current_room == 4
    assert output.getvalue() == "Name of save file:\n"


def test_game_load_reports_errors(game, output: io.StringIO, tmp_path):
    path = tmp_path / "missing.sav"
    game.console.stdin = io.StringIO(f"{path}\n")
    assert not game.load_game()
    assert game.state.current_room == 1
    assert output.getvalue().endswith(f'Couldn\'t load "{path}". Doesn\'t exist!\n')


def test_game_save_reports_errors(game, output: io.StringIO, tmp_path):
    path = tmp_path / "no" / "dir.sav"
    game.console.stdin = io.StringIO(f"{path}\n")
    game.save_game()
    assert output.getvalue().endswith(f'Couldn\'t save "{path}".\n')


def test_bad_room_register_leaves_game_untouched(game, output: io.StringIO, tmp_path):
    """A save whose room register points nowhere is refused before any swap can use it."""
    values = dump_state(game.world, game.state)
    values[3] = 99
    path = tmp_path / "register.sav"
    path.write_text("".join(f"{value}\n" for value in values))

    game.console.stdin = io.StringIO(f"{path}\n")
    assert not game.load_game()
    assert game.state.alternate_rooms[0] == 0
    assert output.getvalue().endswith("Invalid savegame: unknown room\n")
