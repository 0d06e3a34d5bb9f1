"""Shared test fixtures for the interpreter."""

import io
from dataclasses import replace
from pathlib import Path

import pytest

from scottadams.engine import codec
from scottadams.engine.console import Console
from scottadams.engine.dispatcher import Game
from scottadams.engine.loader import load_world
from scottadams.engine.prng import LinearCongruentialRandom
from scottadams.engine.world import Action, World

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_path() -> Path:
    return DATA_DIR / "tiny.dat"


@pytest.fixture
def world(data_path: Path) -> World:
    return load_world(data_path)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    return Console(stdin=io.StringIO(""), stdout=output, delay_seconds=0)


@pytest.fixture
def game(world: World, console: Console) -> Game:
    return Game(world, console, rng=LinearCongruentialRandom(seed=1))


@pytest.fixture
def make_action():
    """Build an Action from readable parts instead of packed integers."""

    def _make(
        verb: int = 0,
        noun: int = 0,
        conditions: tuple = (),
        commands: tuple = (),
        description: str = "",
    ) -> Action:
        slots = [codec.encode_condition(code, param) for code, param in conditions]
        slots += [0] * (codec.CONDITIONS - len(slots))
        cmds = list(commands) + [0] * (codec.COMMANDS_IN_ACTION - len(commands))
        data = (
            codec.encode_header(verb, noun),
            *slots,
            codec.encode_commands(cmds[0], cmds[1]),
            codec.encode_commands(cmds[2], cmds[3]),
        )
        return Action(number=0, data=data, description=description)

    return _make


@pytest.fixture
def make_game(world: World, console: Console):
    """A Game over the sample world with its actions and header swapped out."""

    def _make(actions: list[Action] | None = None, seed: int = 1, **header_changes) -> Game:
        custom = world
        if header_changes:
            custom = replace(custom, header=replace(custom.header, **header_changes))
        if actions is not None:
            custom = replace(
                custom,
                actions=[replace(a, number=n) for n, a in enumerate(actions)],
            )
        return Game(custom, console, rng=LinearCongruentialRandom(seed))

    return _make
