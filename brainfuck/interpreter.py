"""
Brainfuck Interpreter

Runs a program against a tape (see ``brainfuck.tape``) with input pulled from an
input source and output pushed to an output sink. Malformed programs and
addressing errors are returned as diagnostics in the ``RunResult``; the
interpreter never raises for them.

    >>> BrainfuckInterpreter().run("++++++++[>++++++++<-]>+.").output
    b'A'
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional, Union

from .config import EofPolicy, InterpreterConfig
from .diagnostics import Diagnostic, ExecutionError, Location, ParseError, to_exception
from .instructions import Instruction
from .io import InputSource, OutputSink, as_input
from .loops import LoopTable, match_loops
from .tape import AddressingError, Tape, make_tape

logger = logging.getLogger(__name__)


class ExecutionState(Enum):
    RUNNING = "running"
    HALTED_SUCCESS = "halted"
    HALTED_ERROR = "error"


@dataclass
class RunResult:
    """Outcome of a run: the output so far plus at most one diagnostic."""

    output: bytes
    diagnostic: Optional[Diagnostic] = None
    cycle_count: int = 0
    instruction_pointer: int = 0
    hit_step_limit: bool = False

    @property
    def ok(self) -> bool:
        return self.diagnostic is None and not self.hit_step_limit

    @property
    def text(self) -> str:
        return self.output.decode("latin-1")

    def raise_for_error(self) -> "RunResult":
        if self.diagnostic is not None:
            raise to_exception(self.diagnostic)
        return self


class Execution:
    """State of one run of a validated program.

    ``step()`` executes a single instruction (skipping comment characters
    first); ``run()`` steps until the program halts or the budget runs out.
    """

    def __init__(
        self,
        code: str,
        loops: LoopTable,
        tape: Tape,
        input_source: InputSource,
        output_sink: Optional[OutputSink] = None,
        eof: EofPolicy = EofPolicy.UNCHANGED,
    ):
        self.code = code
        self.loops = loops
        self.tape = tape
        self.input_source = input_source
        self.output_sink = output_sink
        self.eof = eof

        self.instruction_pointer = 0
        self.cursor = 0
        self.cycle_count = 0
        self.input_queue: Deque[int] = deque()
        self.output = bytearray()
        self.state = ExecutionState.RUNNING
        self.diagnostic: Optional[ExecutionError] = None
        self.input_exhausted = False

    @property
    def running(self) -> bool:
        return self.state is ExecutionState.RUNNING

    @property
    def current_cell(self) -> int:
        return self.tape.read(self.cursor)

    def skip_comments(self) -> None:
        code = self.code
        ip = self.instruction_pointer
        while ip < len(code) and Instruction.from_char(code[ip]) is None:
            ip += 1
        self.instruction_pointer = ip
        if ip >= len(code):
            self.state = ExecutionState.HALTED_SUCCESS

    def step(self) -> bool:
        """Execute one instruction. Returns False once the run has halted."""
        if not self.running:
            return False
        self.skip_comments()
        if not self.running:
            return False

        ip = self.instruction_pointer
        cmd = Instruction.from_char(self.code[ip])
        tape = self.tape

        if cmd is Instruction.INCREMENT:
            tape.write(self.cursor, tape.read(self.cursor) + 1)

        elif cmd is Instruction.DECREMENT:
            tape.write(self.cursor, tape.read(self.cursor) - 1)

        elif cmd is Instruction.MOVE_LEFT or cmd is Instruction.MOVE_RIGHT:
            delta = -1 if cmd is Instruction.MOVE_LEFT else 1
            try:
                self.cursor = tape.move(self.cursor, delta)
            except AddressingError as e:
                self.diagnostic = ExecutionError(
                    location=Location.in_program(self.code, ip),
                    instruction_pointer=ip,
                    cycle_count=self.cycle_count,
                    cause=e.cause,
                )
                self.state = ExecutionState.HALTED_ERROR
                logger.debug("halted with %s at ip=%d after %d cycles", e.cause.value, ip, self.cycle_count)
                return False

        elif cmd is Instruction.OUTPUT:
            value = tape.read(self.cursor)
            self.output.append(value)
            if self.output_sink is not None:
                self.output_sink.accept(value)

        elif cmd is Instruction.INPUT:
            if self._fill_input():
                tape.write(self.cursor, self.input_queue.popleft())
            elif self.eof is EofPolicy.ZERO:
                tape.write(self.cursor, 0)
            # EofPolicy.UNCHANGED: no input data, leave cell unchanged

        elif cmd is Instruction.JUMP_IF_ZERO:
            if tape.read(self.cursor) == 0:
                ip = self.loops[ip]

        elif cmd is Instruction.JUMP_IF_NONZERO:
            if tape.read(self.cursor) != 0:
                ip = self.loops[ip]

        self.instruction_pointer = ip + 1
        self.cycle_count += 1
        if self.instruction_pointer >= len(self.code):
            self.state = ExecutionState.HALTED_SUCCESS
        return self.running

    def _fill_input(self) -> bool:
        """Refill the queue from the input source if needed; False on exhaustion."""
        if self.input_queue:
            return True
        if self.input_exhausted:
            return False
        chunk = self.input_source.next_bytes()
        if not chunk:
            self.input_exhausted = True
            return False
        self.input_queue.extend(chunk)
        return True

    def run(self, max_steps: Optional[int] = None) -> RunResult:
        steps = 0
        while self.running:
            if max_steps is not None and steps >= max_steps:
                # trailing comments do not count against the budget
                self.skip_comments()
                break
            self.step()
            steps += 1

        if self.state is ExecutionState.HALTED_SUCCESS:
            logger.debug("program finished after %d cycles", self.cycle_count)
        return self.result()

    def result(self) -> RunResult:
        return RunResult(
            output=bytes(self.output),
            diagnostic=self.diagnostic,
            cycle_count=self.cycle_count,
            instruction_pointer=self.instruction_pointer,
            hit_step_limit=self.running,
        )


class BrainfuckInterpreter:
    """Validates and runs brainfuck programs according to an ``InterpreterConfig``."""

    def __init__(self, config: Optional[InterpreterConfig] = None, **overrides):
        config = config or InterpreterConfig()
        self.config = config.replace(**overrides) if overrides else config

    def new_tape(self) -> Tape:
        cfg = self.config
        return make_tape(cfg.addressing, cfg.tape_size, cfg.modulus)

    def prepare(
        self,
        code: str,
        input_data=None,
        output: Optional[OutputSink] = None,
    ) -> Union[Execution, ParseError]:
        """Match loops and set up a fresh execution, or return the parse error."""
        loops = match_loops(code)
        if isinstance(loops, ParseError):
            logger.debug("rejected program: %s", loops)
            return loops
        return Execution(code, loops, self.new_tape(), as_input(input_data), output, self.config.eof)

    def run(
        self,
        code: str,
        input_data=b"",
        output: Optional[OutputSink] = None,
        max_steps: Optional[int] = None,
    ) -> RunResult:
        """Execute brainfuck code with optional input data.

        ``input_data`` may be bytes, str (latin-1) or an ``InputSource``.
        ``max_steps`` overrides the configured step budget for this run.
        """
        execution = self.prepare(code, input_data, output)
        if isinstance(execution, ParseError):
            return RunResult(output=b"", diagnostic=execution)
        if max_steps is None:
            max_steps = self.config.max_steps
        return execution.run(max_steps)

    def run_text(self, code: str, input_text: str = "", max_steps: Optional[int] = None) -> str:
        """Run and return the output as text, raising ``BrainfuckError`` on a diagnostic."""
        return self.run(code, input_text, max_steps=max_steps).raise_for_error().text
