"""
Diagnostics for brainfuck programs.

Two families of located errors are produced by the interpreter core:

    ParseError       the bracket structure of the program is invalid; execution
                     never starts.
    ExecutionError   the cursor left the addressable range of a bounded tape;
                     execution halts at the offending instruction.

Diagnostics are plain values. The core returns them instead of raising, and
callers decide whether to print, log or raise them (see ``RunResult.raise_for_error``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ParseErrorCause(Enum):
    UNCLOSED_LOOP_OPEN = "UnclosedLoopOpen"
    UNMATCHED_LOOP_CLOSE = "UnmatchedLoopClose"


class ExecutionErrorCause(Enum):
    CELL_INDEX_UNDERFLOW = "CellIndexUnderflow"
    CELL_INDEX_OVERFLOW = "CellIndexOverflow"


@dataclass(frozen=True)
class Location:
    """Position of a character in the program text.

    ``offset`` is the 0-based character index, ``line`` and ``column`` are 1-based.
    """

    offset: int
    line: int
    column: int

    @classmethod
    def in_program(cls, program: str, offset: int) -> "Location":
        line = program.count("\n", 0, offset) + 1
        line_start = program.rfind("\n", 0, offset) + 1
        return cls(offset=offset, line=line, column=offset - line_start + 1)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class ParseError:
    location: Location
    cause: ParseErrorCause

    @property
    def message(self) -> str:
        if self.cause is ParseErrorCause.UNMATCHED_LOOP_CLOSE:
            return "unmatched ']' with no open loop"
        return "'[' is never closed"

    def __str__(self) -> str:
        return f"parse error at {self.location} (offset {self.location.offset}): {self.message}"


@dataclass(frozen=True)
class ExecutionError:
    location: Location
    instruction_pointer: int
    cycle_count: int
    cause: ExecutionErrorCause

    @property
    def message(self) -> str:
        if self.cause is ExecutionErrorCause.CELL_INDEX_UNDERFLOW:
            return "cell index moved below the start of the tape"
        return "cell index moved past the end of the tape"

    def __str__(self) -> str:
        return (
            f"execution error at {self.location} (offset {self.location.offset}, "
            f"cycle {self.cycle_count}): {self.message}"
        )


Diagnostic = Union[ParseError, ExecutionError]


class BrainfuckError(Exception):
    """Exception wrapper for callers that prefer raising over inspecting results."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic


class ParseFailure(BrainfuckError):
    pass


class ExecutionFailure(BrainfuckError):
    pass


def to_exception(diagnostic: Diagnostic) -> BrainfuckError:
    if isinstance(diagnostic, ParseError):
        return ParseFailure(diagnostic)
    return ExecutionFailure(diagnostic)


def format_diagnostic(diagnostic: Diagnostic, program: str, context: int = 1) -> str:
    """Render a diagnostic with the offending source line and a caret marker.

    ``context`` extra lines before the offending line are included.
    """
    lines = program.split("\n")
    loc = diagnostic.location
    kind = "error" if isinstance(diagnostic, ParseError) else "runtime error"
    out = [f"{kind}[{diagnostic.cause.value}]: {diagnostic.message}", f"  --> {loc}"]

    first = max(1, loc.line - context)
    width = len(str(loc.line))
    for number in range(first, loc.line + 1):
        out.append(f"{number:>{width}} | {lines[number - 1]}")
    out.append(f"{'':>{width}} | {' ' * (loc.column - 1)}^")

    if isinstance(diagnostic, ExecutionError):
        out.append(
            f"{'':>{width}} = instruction pointer {diagnostic.instruction_pointer}, "
            f"after {diagnostic.cycle_count} cycles"
        )
    return "\n".join(out)
