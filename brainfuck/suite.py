from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import json
import os

import yaml

from .config import InterpreterConfig
from .interpreter import BrainfuckInterpreter, RunResult


@dataclass
class ProgramCase:
    name: str
    program: str
    input: bytes = b""
    expected: Optional[bytes] = None
    error: Optional[str] = None  # expected diagnostic cause, e.g. "CellIndexUnderflow"
    overrides: Dict[str, Any] = field(default_factory=dict)

    def run(self, config: Optional[InterpreterConfig] = None) -> RunResult:
        itp = BrainfuckInterpreter(config, **self.overrides)
        return itp.run(self.program, self.input)


@dataclass
class CaseResult:
    case: ProgramCase
    result: RunResult

    @property
    def observed(self) -> str:
        if self.result.diagnostic is not None:
            return self.result.diagnostic.cause.value
        if self.result.hit_step_limit:
            return "step limit"
        return repr(self.result.text)

    @property
    def passed(self) -> bool:
        diag = self.result.diagnostic
        if self.case.error is not None:
            return diag is not None and diag.cause.value == self.case.error
        if diag is not None or self.result.hit_step_limit:
            return False
        return self.case.expected is None or self.result.output == self.case.expected


def _as_bytes(val: Any) -> bytes:
    if val is None:
        return b""
    if isinstance(val, str):
        return val.encode("latin-1")
    if isinstance(val, (list, tuple)):
        return bytes(int(v) % 256 for v in val)
    raise ValueError("input/expected must be a string or a list of byte values")


_CASE_KEYS = {"program", "input", "expected", "error"}


def _coerce_case(name: str, val: Any) -> ProgramCase:
    if isinstance(val, str):
        return ProgramCase(name=name, program=val)
    if not isinstance(val, dict) or "program" not in val:
        raise ValueError(f"case {name!r} needs a 'program' entry")
    overrides = {k: v for k, v in val.items() if k not in _CASE_KEYS and k != "name"}
    return ProgramCase(
        name=name,
        program=str(val["program"]),
        input=_as_bytes(val.get("input")),
        expected=None if val.get("expected") is None else _as_bytes(val["expected"]),
        error=val.get("error"),
        overrides=overrides,
    )


def load_suite(path: str) -> List[ProgramCase]:
    """Load program cases from YAML (or JSON).

    Accepts either a list of cases with a 'name' key, or a mapping of name -> case,
    optionally nested under a top-level 'cases' key.
    """
    with open(path, "r") as f:
        text = f.read()
    if os.path.splitext(path)[1].lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)

    if isinstance(data, dict) and "cases" in data:
        data = data["cases"]

    cases: List[ProgramCase] = []
    if isinstance(data, dict):
        for name, val in data.items():
            cases.append(_coerce_case(str(name), val))
    elif isinstance(data, list):
        for i, val in enumerate(data):
            name = val.get("name", f"case_{i}") if isinstance(val, dict) else f"case_{i}"
            cases.append(_coerce_case(str(name), val))
    else:
        raise ValueError(f"{path}: expected a list or mapping of cases")
    return cases


def run_suite(cases: List[ProgramCase], config: Optional[InterpreterConfig] = None) -> List[CaseResult]:
    return [CaseResult(case, case.run(config)) for case in cases]
