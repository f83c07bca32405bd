"""Brainfuck interpreter with pluggable tape addressing and located diagnostics."""

from .config import EofPolicy, InterpreterConfig
from .diagnostics import (
    BrainfuckError,
    ExecutionError,
    ExecutionErrorCause,
    ExecutionFailure,
    Location,
    ParseError,
    ParseErrorCause,
    ParseFailure,
    format_diagnostic,
)
from .instructions import Instruction
from .interpreter import BrainfuckInterpreter, Execution, ExecutionState, RunResult
from .io import BufferOutput, BytesInput, CallbackInput, NullInput, StreamInput, StreamOutput
from .loops import LoopTable, match_loops
from .tape import AddressingError, AddressingPolicy, BoundedTape, GrowableTape, SparseTape, make_tape

__version__ = "0.1.0"
