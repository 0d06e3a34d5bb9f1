"""Condition and command opcode tables.

The numbering is fixed by the database format. Each opcode also records
what its parameters index, which the loader uses to validate actions.
"""

from enum import Enum, IntEnum


class Param(Enum):
    """What a parameter refers to."""

    OBJECT = "object"
    ROOM = "room"
    FLAG = "flag"
    COUNTER_SLOT = "counter slot"
    ROOM_SLOT = "room register"
    NUMBER = "number"


class Condition(IntEnum):
    PARAMETER = 0
    CARRIED = 1
    HERE = 2
    AVAILABLE = 3
    IN_ROOM = 4
    NOT_HERE = 5
    NOT_CARRIED = 6
    NOT_IN_ROOM = 7
    FLAG_SET = 8
    FLAG_CLEAR = 9
    CARRYING_ANY = 10
    CARRYING_NONE = 11
    NOT_AVAILABLE = 12
    NOT_IN_STORE = 13
    IN_STORE = 14
    COUNTER_LE = 15
    COUNTER_GT = 16
    ORIGINAL = 17
    NOT_ORIGINAL = 18
    COUNTER_EQ = 19


CONDITION_PARAMS: dict[Condition, Param] = {
    Condition.PARAMETER: Param.NUMBER,
    Condition.CARRIED: Param.OBJECT,
    Condition.HERE: Param.OBJECT,
    Condition.AVAILABLE: Param.OBJECT,
    Condition.IN_ROOM: Param.NUMBER,
    Condition.NOT_HERE: Param.OBJECT,
    Condition.NOT_CARRIED: Param.OBJECT,
    Condition.NOT_IN_ROOM: Param.NUMBER,
    Condition.FLAG_SET: Param.FLAG,
    Condition.FLAG_CLEAR: Param.FLAG,
    Condition.CARRYING_ANY: Param.NUMBER,
    Condition.CARRYING_NONE: Param.NUMBER,
    Condition.NOT_AVAILABLE: Param.OBJECT,
    Condition.NOT_IN_STORE: Param.OBJECT,
    Condition.IN_STORE: Param.OBJECT,
    Condition.COUNTER_LE: Param.NUMBER,
    Condition.COUNTER_GT: Param.NUMBER,
    Condition.ORIGINAL: Param.OBJECT,
    Condition.NOT_ORIGINAL: Param.OBJECT,
    Condition.COUNTER_EQ: Param.NUMBER,
}


class Opcode(IntEnum):
    GET = 0
    DROP = 1
    GOTO = 2
    DESTROY = 3
    NIGHT = 4
    DAY = 5
    SET_FLAG = 6
    DESTROY2 = 7
    CLEAR_FLAG = 8
    DEAD = 9
    PUT = 10
    FINISH = 11
    LOOK = 12
    SCORE = 13
    INVENTORY = 14
    SET_FLAG0 = 15
    CLEAR_FLAG0 = 16
    FILL = 17
    CLEAR_SCREEN = 18
    SAVE = 19
    SWAP = 20
    CONTINUE = 21
    SUPERGET = 22
    PUT_WITH = 23
    LOOK2 = 24
    DEC_COUNTER = 25
    PRINT_COUNTER = 26
    SET_COUNTER = 27
    SWAP_ROOM0 = 28
    SWAP_COUNTER = 29
    ADD_COUNTER = 30
    SUB_COUNTER = 31
    PRINT_NOUN = 32
    PRINT_NOUN_CR = 33
    NEWLINE = 34
    SWAP_ROOM = 35
    DELAY = 36


OPCODE_PARAMS: dict[Opcode, tuple[Param, ...]] = {
    Opcode.GET: (Param.OBJECT,),
    Opcode.DROP: (Param.OBJECT,),
    Opcode.GOTO: (Param.ROOM,),
    Opcode.DESTROY: (Param.OBJECT,),
    Opcode.SET_FLAG: (Param.FLAG,),
    Opcode.DESTROY2: (Param.OBJECT,),
    Opcode.CLEAR_FLAG: (Param.FLAG,),
    Opcode.PUT: (Param.OBJECT, Param.ROOM),
    Opcode.SWAP: (Param.OBJECT, Param.OBJECT),
    Opcode.SUPERGET: (Param.OBJECT,),
    Opcode.PUT_WITH: (Param.OBJECT, Param.OBJECT),
    Opcode.SET_COUNTER: (Param.NUMBER,),
    Opcode.SWAP_COUNTER: (Param.COUNTER_SLOT,),
    Opcode.ADD_COUNTER: (Param.NUMBER,),
    Opcode.SUB_COUNTER: (Param.NUMBER,),
    Opcode.SWAP_ROOM: (Param.ROOM_SLOT,),
}

# Command slot value ranges
MESSAGE_1_END = 51
OPCODE_START = 52
MESSAGE_2_START = 102
MESSAGE_2_OFFSET = 50


def message_number(slot: int) -> int | None:
    """Map a command slot value to a message id, or None for opcodes/no-op."""
    if 1 <= slot <= MESSAGE_1_END:
        return slot
    if slot >= MESSAGE_2_START:
        return slot - MESSAGE_2_OFFSET
    return None
