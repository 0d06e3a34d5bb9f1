"""Play the sample adventure end to end through the session loop.

Route: take the lamp in the forest, fetch the coin from the cave and the
gem from the pit below it, then carry both north to the treasure room.
"""

import io

import pytest

from scottadams import main
from scottadams.app import create_session
from scottadams.config import Config
from scottadams.engine.state import CARRIED
from scottadams.session import PROMPT, GameSession

COIN = 1
GEM = 2
LAMP = 9

WALKTHROUGH = [
    "get lamp",
    "e",
    "get coin",
    "d",
    "get gem",
    "u",
    "w",
    "n",
    "drop coin",
    "drop gem",
    "score",
]


def _session(data_path, lines: list[str]) -> tuple[GameSession, io.StringIO]:
    stdout = io.StringIO()
    config = Config(game_file=data_path, seed=1, show_intro=False, delay_seconds=0)
    stdin = io.StringIO("".join(f"{line}\n" for line in lines))
    return create_session(config, stdin=stdin, stdout=stdout), stdout


def test_walkthrough_to_perfect_score(data_path):
    session, stdout = _session(data_path, WALKTHROUGH + ["look"])
    assert session.run() == 0

    text = stdout.getvalue()
    assert text.startswith("I'm in a forest.")
    assert "Light runs out in 24 turns!" in text
    assert text.endswith(
        "I've stored 2 treasures. ON A SCALE OF 0 TO 100 THAT RATES A 100\n"
        "Well done.\n"
    )
    assert session.turns == len(WALKTHROUGH)

    locations = session.game.state.object_locations
    assert locations[COIN] == locations[GEM] == 2
    assert locations[LAMP] == CARRIED


def test_input_runs_out(data_path):
    session, stdout = _session(data_path, ["look"])
    assert session.run() == 0
    assert stdout.getvalue().count(PROMPT) == 2


def test_quit(data_path):
    session, stdout = _session(data_path, ["quit", "look"])
    assert session.run() == 0
    assert stdout.getvalue().endswith("Bye.\n")
    assert session.turns == 1


def test_save_then_load_game(data_path, tmp_path):
    save_file = tmp_path / "cave.sav"
    lines = ["get lamp", "e", "save game", str(save_file), "w", "load game", str(save_file)]
    session, stdout = _session(data_path, lines)
    session.run()

    state = session.game.state
    assert state.current_room == 3
    assert state.object_locations[LAMP] == CARRIED
    assert stdout.getvalue().count("Name of save file:") == 2
    assert stdout.getvalue().endswith(f"{PROMPT}\n")


def test_load_game_is_case_insensitive(data_path, tmp_path):
    session, stdout = _session(data_path, ["  Load Game", str(tmp_path / "nope.sav")])
    session.run()
    assert "Doesn't exist!" in stdout.getvalue()
    assert session.game.state.current_room == 1


def test_intro_waits_for_enter(data_path):
    stdout = io.StringIO()
    config = Config(game_file=data_path, seed=1, delay_seconds=0)
    session = create_session(config, stdin=io.StringIO("\nquit\n"), stdout=stdout)
    session.run()
    text = stdout.getvalue()
    assert text.index("Happy adventuring") < text.index("I'm in a forest.")
    assert text.endswith("Bye.\n")


def test_create_session_needs_game_file():
    with pytest.raises(ValueError):
        create_session(Config())


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Keep the environment from leaking into main() and log to a file."""
    for name in ("GAME_FILE", "SEED", "LOG_LEVEL", "JSON_LOGS"):
        monkeypatch.delenv(f"SCOTTADAMS_{name}", raising=False)
    monkeypatch.setenv("SCOTTADAMS_LOG_FILE", str(tmp_path / "interpreter.log"))
    monkeypatch.setenv("SCOTTADAMS_SHOW_INTRO", "0")
    monkeypatch.setenv("SCOTTADAMS_DELAY", "0")
    return monkeypatch


def test_main_without_file_prints_usage(env, capsys):
    assert main([]) == 0
    assert capsys.readouterr().out.startswith("Usage: scottadams")


def test_main_help(env, data_path, capsys):
    assert main(["-h", str(data_path)]) == 0
    assert "Display this help and exit" in capsys.readouterr().out


def test_main_rejects_bad_database(env, tmp_path, capsys):
    bad = tmp_path / "bad.dat"
    bad.write_text("not a number\n")
    assert main([str(bad)]) == 1
    assert "Cannot load" in capsys.readouterr().err


def test_main_plays_game(env, data_path, capsys):
    env.setattr("sys.stdin", io.StringIO("quit\n"))
    assert main(["-d", str(data_path)]) == 0
    assert capsys.readouterr().out.endswith("Bye.\n")
