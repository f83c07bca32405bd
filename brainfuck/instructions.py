"""The eight brainfuck commands.

    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the byte in the cell at the pointer
    ,   Input a byte and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Instruction(Enum):
    INCREMENT = "+"
    DECREMENT = "-"
    MOVE_LEFT = "<"
    MOVE_RIGHT = ">"
    OUTPUT = "."
    INPUT = ","
    JUMP_IF_ZERO = "["
    JUMP_IF_NONZERO = "]"

    @classmethod
    def from_char(cls, char: str) -> Optional["Instruction"]:
        return _BY_CHAR.get(char)


_BY_CHAR = {ins.value: ins for ins in Instruction}
