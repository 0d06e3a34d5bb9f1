"""Pack and unpack the 8-integer action records.

Record layout: [header, cond1, cond2, cond3, cond4, cond5, cmd01, cmd23]

  header = verb * 150 + noun
  cond   = parameter * 20 + code
  cmdAB  = commandA * 150 + commandB

Commands take their parameters from condition slots whose code is 0, read
in order through a cursor shared by every command of the action.
"""

from dataclasses import dataclass

from ..errors import DataFormatError
from .world import Action

ACTION_ENTRIES = 8
CONDITIONS = 5
COMMANDS_IN_ACTION = 4
COMMAND_OFFSET = 6
CODE_DIVISOR = 150
CONDITION_DIVISOR = 20
PARAMETER_CODE = 0


def decode_header(header: int) -> tuple[int, int]:
    """Return (verb, noun) from a packed header."""
    return divmod(header, CODE_DIVISOR)


def encode_header(verb: int, noun: int) -> int:
    return verb * CODE_DIVISOR + noun


def decode_condition(raw: int) -> tuple[int, int]:
    """Return (code, parameter) from a packed condition slot."""
    parameter, code = divmod(raw, CONDITION_DIVISOR)
    return code, parameter


def encode_condition(code: int, parameter: int) -> int:
    return parameter * CONDITION_DIVISOR + code


def decode_command(data: tuple[int, ...], index: int) -> int:
    """Return command ``index`` (0..3) from a full action record."""
    stored = data[index // 2 + COMMAND_OFFSET]
    if index % 2:
        return stored % CODE_DIVISOR
    return stored // CODE_DIVISOR


def encode_commands(first: int, second: int) -> int:
    return first * CODE_DIVISOR + second


def action_verb(action: Action) -> int:
    return decode_header(action.data[0])[0]


def conditions(action: Action) -> list[tuple[int, int]]:
    """All five (code, parameter) pairs, parameter slots included."""
    return [decode_condition(raw) for raw in action.data[1 : CONDITIONS + 1]]


def commands(action: Action) -> list[int]:
    return [decode_command(action.data, i) for i in range(COMMANDS_IN_ACTION)]


@dataclass
class ParameterCursor:
    """Walks an action's condition slots handing out command parameters."""

    action: Action
    index: int = 1

    def next(self) -> int:
        """Return the parameter of the next slot whose code is 0."""
        while self.index <= CONDITIONS:
            code, parameter = decode_condition(self.action.data[self.index])
            self.index += 1
            if code == PARAMETER_CODE:
                return parameter
        raise DataFormatError(
            f"action {self.action.number} has too few parameter slots"
        )
