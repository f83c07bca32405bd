import io

from brainfuck.debugger import BrainfuckDebugger


def _debugger(**kwargs):
    out = io.StringIO()
    return BrainfuckDebugger(out=out, **kwargs), out


def test_increment_program_trace() -> None:
    dbg, out = _debugger(tape_size=15, show_memory_range=6)
    result = dbg.debug_run(",+.", "\x03")
    assert result.output == b"\x04"
    text = out.getvalue()
    assert "Step 1: Execute ',' at position 0" in text
    assert "Read input 3 → cell[0]" in text
    assert "Increment cell[0] → 4" in text
    assert "Output cell[0] = 4" in text
    assert "FINAL RESULT" in text


def test_loop_trace_reports_jumps() -> None:
    dbg, out = _debugger(tape_size=10)
    result = dbg.debug_run(",[>++<-]>.", "\x02")
    assert result.output == b"\x04"
    text = out.getvalue()
    assert "Loop start: cell[0] ≠ 0, enter loop" in text
    assert "Loop end: cell[0] ≠ 0, jump back to position 2" in text
    assert "Loop end: cell[0] = 0, exit loop" in text


def test_eof_is_reported() -> None:
    dbg, out = _debugger()
    dbg.debug_run("+,")
    assert "Read input: EOF, cell[0] = 1" in out.getvalue()


def test_memory_window_marks_pointer() -> None:
    dbg, out = _debugger(tape_size=20, show_memory_range=4)
    dbg.debug_run(">>+")
    lines = out.getvalue().splitlines()
    final_memory = [line for line in lines if line.startswith("Memory:")][-1]
    final_addresses = [line for line in lines if line.startswith("Address:")][-1]
    assert final_memory == "Memory:   [  0|  0|  1|  0]"
    assert final_addresses == "Address:     0   1   2   3"


def test_step_limit_stops_runaway_loop() -> None:
    dbg, out = _debugger(max_steps=10)
    result = dbg.debug_run("+[]")
    assert result.hit_step_limit
    assert "Execution stopped after 10 steps" in out.getvalue()


def test_parse_error_is_formatted() -> None:
    dbg, out = _debugger()
    result = dbg.debug_run("+]")
    assert result.diagnostic is not None
    assert "UnmatchedLoopClose" in out.getvalue()
    assert "Step 1" not in out.getvalue()


def test_execution_error_stops_trace() -> None:
    dbg, out = _debugger()
    result = dbg.debug_run("+<+")
    assert result.diagnostic.cause.value == "CellIndexUnderflow"
    assert "Step 3" not in out.getvalue()
