"""Exception types raised by the interpreter."""


class AdventureError(Exception):
    """Base class for interpreter errors."""


class DataFormatError(AdventureError):
    """The game database is malformed or refers to ids that do not exist."""

    def __init__(self, message: str, line: int | None = None):
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)
        self.line = line


class SaveGameError(AdventureError):
    """A save file could not be written, read, or does not match the game."""


class GameOver(AdventureError):
    """The game has ended normally (FINISH, perfect score)."""
