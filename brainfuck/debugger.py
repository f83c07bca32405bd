"""
Brainfuck Step-by-Step Debugger

Shows the step-by-step execution of a brainfuck program, displaying the state of
the memory tape, pending input, and output after every instruction.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .diagnostics import ParseError, format_diagnostic
from .instructions import Instruction
from .interpreter import BrainfuckInterpreter, Execution, RunResult
from .tape import AddressingPolicy


class BrainfuckDebugger(BrainfuckInterpreter):
    """Interpreter that prints the machine state after each step."""

    def __init__(self, config=None, show_memory_range: int = 10, max_steps: int = 100,
                 out: Optional[TextIO] = None, **overrides):
        super().__init__(config, **overrides)
        self.show_memory_range = show_memory_range
        self.max_steps = max_steps  # Prevent infinite loops in debugging
        self.out = out or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def debug_run(self, code: str, input_data=b"") -> RunResult:
        """Execute brainfuck code with step-by-step output."""
        self._print("🐛 BRAINFUCK DEBUGGER")
        self._print(f"Program: {code}")
        data = input_data.encode("latin-1") if isinstance(input_data, str) else bytes(input_data)
        self._print(f"Input: {data!r} (as bytes: {list(data)})")
        self._print("=" * 80)

        execution = self.prepare(code, data)
        if isinstance(execution, ParseError):
            self._print(format_diagnostic(execution, code))
            return RunResult(output=b"", diagnostic=execution)

        self._show_state(execution, "INITIAL")

        steps = 0
        while execution.running and steps < self.max_steps:
            execution.skip_comments()
            if not execution.running:
                break
            ip = execution.instruction_pointer
            cmd = code[ip]
            before = execution.cursor, execution.current_cell
            steps += 1

            self._print(f"\nStep {steps}: Execute '{cmd}' at position {ip}")
            execution.step()
            if execution.diagnostic is not None:
                self._print(format_diagnostic(execution.diagnostic, code))
                break
            self._print("  " + self._describe(execution, Instruction.from_char(cmd), before, ip))
            self._show_state(execution, f"AFTER STEP {steps}")

        if execution.running:
            execution.skip_comments()
        result = execution.result()
        if result.hit_step_limit:
            self._print(f"\n⚠️ Execution stopped after {self.max_steps} steps (possible infinite loop)")

        self._print("\n🎯 FINAL RESULT:")
        self._print(f"Output: {result.text!r} → {list(result.output)}")
        return result

    def _describe(self, execution: Execution, cmd: Instruction, before, ip: int) -> str:
        cursor, cell = before
        now = execution.current_cell
        if cmd is Instruction.MOVE_RIGHT:
            return f"Move pointer right → position {execution.cursor}"
        if cmd is Instruction.MOVE_LEFT:
            return f"Move pointer left → position {execution.cursor}"
        if cmd is Instruction.INCREMENT:
            return f"Increment cell[{cursor}] → {now}"
        if cmd is Instruction.DECREMENT:
            return f"Decrement cell[{cursor}] → {now}"
        if cmd is Instruction.OUTPUT:
            return f"Output cell[{cursor}] = {cell} → {chr(cell)!r}"
        if cmd is Instruction.INPUT:
            if execution.input_exhausted:
                return f"Read input: EOF, cell[{cursor}] = {now}"
            return f"Read input {now} → cell[{cursor}]"
        jumped = execution.instruction_pointer != ip + 1
        if cmd is Instruction.JUMP_IF_ZERO:
            if jumped:
                return f"Loop start: cell[{cursor}] = 0, jump to position {execution.instruction_pointer}"
            return f"Loop start: cell[{cursor}] ≠ 0, enter loop"
        if jumped:
            return f"Loop end: cell[{cursor}] ≠ 0, jump back to position {execution.instruction_pointer}"
        return f"Loop end: cell[{cursor}] = 0, exit loop"

    def _show_state(self, execution: Execution, label: str) -> None:
        """Show current state of memory, pointer, and program."""
        self._print(f"\n{label}:")

        code = execution.code
        ip = execution.instruction_pointer
        program_display = "".join(f"[{c}]" if i == ip else c for i, c in enumerate(code))
        if ip >= len(code):
            program_display += "[END]"
        self._print(f"Program:  {program_display}")

        pending = bytes(execution.input_queue)
        self._print(f"Input:    {pending!r}" + (" [EOF]" if execution.input_exhausted else ""))

        # Memory window focused around the pointer
        start = execution.cursor - self.show_memory_range // 2
        if self.config.addressing is not AddressingPolicy.SPARSE:
            start = max(0, start)
        end = start + self.show_memory_range
        values = execution.tape.snapshot(start, end)
        addresses = range(start, start + len(values))

        self._print("Memory:   [" + "|".join(f"{v:3d}" for v in values) + "]")
        self._print("Pointer:   " + " ".join(" ^ " if i == execution.cursor else "   " for i in addresses))
        self._print("Address:   " + " ".join(f"{i:3d}" for i in addresses))

        if execution.output:
            self._print(f"Output:   {execution.output.decode('latin-1')!r} → {list(execution.output)}")
        else:
            self._print("Output:   (empty)")


def main():
    """Interactive debugger."""
    debugger = BrainfuckDebugger(tape_size=20, show_memory_range=8)

    print("🧠 Brainfuck Step-by-Step Debugger")
    print("Enter 'quit' to exit\n")

    while True:
        print("-" * 60)
        try:
            program = input("Enter Brainfuck program: ").strip()
        except EOFError:
            break
        if program.lower() == "quit":
            break

        input_data = input("Enter input data: ").strip()
        print()
        result = debugger.debug_run(program, input_data)
        if result.diagnostic is None:
            print(f"\n✅ Execution complete. Final output: {result.text!r}")
        else:
            print(f"\n❌ {result.diagnostic}")


if __name__ == "__main__":
    main()
