"""Session layer: the read-evaluate-print loop around a Game."""

import re

from .engine.dispatcher import Game
from .errors import GameOver
from .logging import get_logger

logger = get_logger(__name__)

PROMPT = "Tell me what to do"

LOAD_GAME = re.compile(r"^\s*LOAD\s*GAME", re.IGNORECASE)

INTRO = """
                 *** Welcome ***

 Unless told differently you must find *TREASURES*
and-return-them-to-their-proper--place!

I'm your puppet. Give me english commands that
consist of a noun and verb. Some examples...

To find out what you're carrying you might say: TAKE INVENTORY
to go into a hole you might say: GO HOLE
to save current game: SAVE GAME

You will at times need special items to do things: But I'm
sure you'll be a good adventurer and figure these things out.

     Happy adventuring... Hit enter to start"""


class GameSession:
    """Reads player commands and feeds them to the game until it ends."""

    def __init__(self, game: Game, show_intro: bool = True):
        self.game = game
        self.console = game.console
        self.show_intro = show_intro
        self.turns = 0

    def intro(self) -> None:
        self.console.clear()
        self.console.writeln(INTRO)
        self.console.read_line()
        self.console.clear()

    def process_line(self, line: str) -> None:
        """Handle one input line, including the LOAD GAME escape."""
        self.turns += 1
        if LOAD_GAME.match(line):
            if self.game.load_game():
                self.game.describe_room()
            return
        self.game.play_turn(line)

    def run(self) -> int:
        """Play until the game ends or input runs out. Returns an exit status."""
        if self.show_intro:
            self.intro()

        try:
            self.game.start()
            while True:
                line = self.console.prompt(PROMPT)
                if line is None:
                    logger.info("input_exhausted", turns=self.turns)
                    break
                self.console.writeln()
                self.process_line(line)
        except GameOver as exc:
            logger.info("game_over", reason=str(exc), turns=self.turns)
        return 0
