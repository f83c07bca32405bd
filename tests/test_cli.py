import pytest

from brainfuck.cli import EXIT_DIAGNOSTIC, EXIT_OK, EXIT_STEP_LIMIT, EXIT_USAGE, build_parser, main

from .conftest import SIMPLE_HELLO


def test_run_inline_program(capsys) -> None:
    assert main(["run", "-e", SIMPLE_HELLO]) == EXIT_OK
    assert capsys.readouterr().out == "Hello World!\n"


def test_run_file_with_input(tmp_path, capsys) -> None:
    src = tmp_path / "upper.b"
    src.write_text(",[--------------------------------.[-],]")
    assert main(["run", str(src), "--input", "abc"]) == EXIT_OK
    assert capsys.readouterr().out == "ABC"


def test_run_reports_parse_error(capsys) -> None:
    assert main(["run", "-e", "+\n+]"]) == EXIT_DIAGNOSTIC
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error[UnmatchedLoopClose]" in captured.err
    assert "--> 2:2" in captured.err


def test_run_reports_execution_error(capsys) -> None:
    assert main(["run", "-e", ">>>", "--tape-size", "2"]) == EXIT_DIAGNOSTIC
    assert "CellIndexOverflow" in capsys.readouterr().err


def test_run_sparse_addressing(capsys) -> None:
    assert main(["run", "-e", "<+++.", "--addressing", "sparse"]) == EXIT_OK
    assert capsys.readouterr().out == "\x03"


def test_run_step_limit(capsys) -> None:
    assert main(["run", "-e", "+[]", "--max-steps", "5"]) == EXIT_STEP_LIMIT
    assert "stopped after 5 steps" in capsys.readouterr().err


def test_run_with_config_file(tmp_path, capsys) -> None:
    cfg = tmp_path / "bf.yaml"
    cfg.write_text("interpreter:\n  addressing: sparse\n")
    assert main(["run", "-e", "<.", "--config", str(cfg)]) == EXIT_OK


def test_missing_program_is_usage_error(capsys) -> None:
    assert main(["run"]) == EXIT_USAGE
    assert "give a program" in capsys.readouterr().err


def test_missing_file_is_usage_error(tmp_path, capsys) -> None:
    assert main(["run", str(tmp_path / "nope.b")]) == EXIT_USAGE


def test_check(capsys) -> None:
    assert main(["check", "-e", "[[]][]"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "ok: 3 loops"
    assert main(["check", "-e", "[["]) == EXIT_DIAGNOSTIC
    assert "UnclosedLoopOpen" in capsys.readouterr().err


def test_debug(capsys) -> None:
    assert main(["debug", "-e", ",+.", "--input", "A"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "BRAINFUCK DEBUGGER" in out
    assert "Output:   'B'" in out


def test_suite(tmp_path, capsys) -> None:
    path = tmp_path / "suite.yaml"
    path.write_text("ok:\n  program: '+.'\n  expected: [1]\nbad:\n  program: '+.'\n  expected: [9]\n")
    assert main(["suite", str(path)]) == EXIT_DIAGNOSTIC
    out = capsys.readouterr().out
    assert "1/2 passed" in out


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
