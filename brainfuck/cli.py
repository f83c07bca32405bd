"""Command line front end: ``bf run``, ``bf check``, ``bf debug`` and ``bf suite``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import EofPolicy, InterpreterConfig
from .debugger import BrainfuckDebugger
from .diagnostics import ParseError, format_diagnostic
from .interpreter import BrainfuckInterpreter
from .io import BytesInput, StreamInput, StreamOutput
from .loops import match_loops
from .suite import load_suite, run_suite
from .tape import AddressingPolicy

EXIT_OK = 0
EXIT_DIAGNOSTIC = 1
EXIT_USAGE = 2
EXIT_STEP_LIMIT = 3


def _read_program(args) -> str:
    if args.code is not None:
        return args.code
    if args.file is None:
        raise ValueError("give a program FILE or -e CODE")
    with open(args.file, "r", encoding="utf-8") as f:
        return f.read()


def _config(args) -> InterpreterConfig:
    base = InterpreterConfig.from_yaml(args.config) if args.config else InterpreterConfig.from_env()
    return base.replace(
        addressing=args.addressing,
        tape_size=args.tape_size,
        modulus=args.modulus,
        eof=args.eof,
        max_steps=args.max_steps,
    )


def cmd_run(args) -> int:
    code = _read_program(args)
    config = _config(args)
    if args.stdin:
        source = StreamInput(sys.stdin.buffer)
    else:
        source = BytesInput(args.input or "")

    sink = StreamOutput(sys.stdout.buffer)
    result = BrainfuckInterpreter(config).run(code, source, output=sink)
    sink.close()

    if result.diagnostic is not None:
        print(format_diagnostic(result.diagnostic, code), file=sys.stderr)
        return EXIT_DIAGNOSTIC
    if result.hit_step_limit:
        print(f"stopped after {config.max_steps} steps (ip={result.instruction_pointer})", file=sys.stderr)
        return EXIT_STEP_LIMIT
    return EXIT_OK


def cmd_check(args) -> int:
    code = _read_program(args)
    table = match_loops(code)
    if isinstance(table, ParseError):
        print(format_diagnostic(table, code), file=sys.stderr)
        return EXIT_DIAGNOSTIC
    print(f"ok: {table.loop_count} loops")
    return EXIT_OK


def cmd_debug(args) -> int:
    code = _read_program(args)
    config = _config(args)
    debugger = BrainfuckDebugger(config, show_memory_range=args.window, max_steps=args.max_steps or 100)
    result = debugger.debug_run(code, args.input or "")
    return EXIT_OK if result.diagnostic is None else EXIT_DIAGNOSTIC


def cmd_suite(args) -> int:
    cases = load_suite(args.suite)
    results = run_suite(cases, InterpreterConfig.from_env())
    width = max((len(r.case.name) for r in results), default=4)
    failed = 0
    for r in results:
        mark = "✅" if r.passed else "❌"
        print(f"{mark} {r.case.name:<{width}}  {r.observed}")
        failed += not r.passed
    print(f"\n{len(results) - failed}/{len(results)} passed")
    return EXIT_OK if failed == 0 else EXIT_DIAGNOSTIC


def _add_program_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("file", nargs="?", help="Path to a brainfuck source file")
    p.add_argument("-e", "--code", help="Program text given inline instead of FILE")


def _add_config_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", help="YAML file with interpreter settings")
    p.add_argument("--addressing", choices=[a.value for a in AddressingPolicy], help="Tape addressing policy")
    p.add_argument("--tape-size", type=int, help="Number of cells for the bounded tape")
    p.add_argument("--modulus", type=int, help="Wrap cell indices modulo N (sparse tape only)")
    p.add_argument("--eof", choices=[e.value for e in EofPolicy], help="Behaviour of ',' once input is exhausted")
    p.add_argument("--max-steps", type=int, help="Stop after N executed instructions")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bf", description="Brainfuck interpreter")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("run", help="Run a program")
    _add_program_args(p)
    _add_config_args(p)
    group = p.add_mutually_exclusive_group()
    group.add_argument("--input", help="Input text fed to ','")
    group.add_argument("--stdin", action="store_true", help="Read input for ',' from standard input")
    p.set_defaults(func=cmd_run)

    p = sub.add_parser("check", help="Validate bracket structure only")
    _add_program_args(p)
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("debug", help="Step through a program, printing state after each instruction")
    _add_program_args(p)
    _add_config_args(p)
    p.add_argument("--input", help="Input text fed to ','")
    p.add_argument("--window", type=int, default=10, help="Number of cells shown around the pointer")
    p.set_defaults(func=cmd_debug)

    p = sub.add_parser("suite", help="Run a YAML/JSON suite of programs with expected output")
    p.add_argument("suite", help="Path to the suite file")
    p.set_defaults(func=cmd_suite)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
