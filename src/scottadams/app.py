"""Application factory: load the database and build a playable session."""

from pathlib import Path
from typing import TextIO

from .config import Config
from .engine.console import Console
from .engine.dispatcher import Game
from .engine.loader import load_world
from .engine.prng import LinearCongruentialRandom
from .logging import bind_game_context, get_logger
from .session import GameSession

logger = get_logger(__name__)


def create_session(
    config: Config,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> GameSession:
    """Load config.game_file and wire a Game to the given streams."""
    if config.game_file is None:
        raise ValueError("no game file configured")

    world = load_world(Path(config.game_file))
    console = Console(stdin=stdin, stdout=stdout, delay_seconds=config.delay_seconds)
    game = Game(
        world,
        console,
        rng=LinearCongruentialRandom(config.seed),
        compare_original_location=config.compare_original_location,
    )
    bind_game_context(adventure=world.adventure_number)
    logger.debug(
        "session_created",
        seed=game.rng.state,
        compare_original_location=config.compare_original_location,
    )
    return GameSession(game, show_intro=config.show_intro)
