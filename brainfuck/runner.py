from typing import Optional, Union
import os

from .config import InterpreterConfig
from .interpreter import BrainfuckInterpreter

DEFAULT_STEP_LIMIT = int(os.environ.get("BF_STEP_LIMIT", "5000"))


def run_once(code: str, x: int, step_limit: int = DEFAULT_STEP_LIMIT,
             config: Optional[InterpreterConfig] = None) -> Optional[int]:
    """Execute BF code with single byte input, return single byte output.
    Uses a fresh tape each time (stateless). Returns None when the program is
    rejected, fails at runtime, or produces no output within the step limit.
    """
    itp = BrainfuckInterpreter(config)
    result = itp.run(code, bytes((x % 256,)), max_steps=step_limit)
    if result.diagnostic is not None or not result.output:
        return None
    return result.output[0]


def run_bytes(code: str, data: Union[bytes, str] = b"", step_limit: Optional[int] = None,
              config: Optional[InterpreterConfig] = None) -> bytes:
    """Execute BF code and return everything it printed.
    Raises BrainfuckError on a parse or execution error.
    """
    itp = BrainfuckInterpreter(config)
    return itp.run(code, data, max_steps=step_limit).raise_for_error().output
