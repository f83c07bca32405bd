"""Bracket matching: builds the jump table used by the interpreter."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Dict, Iterator, List, Union

from .diagnostics import Location, ParseError, ParseErrorCause

logger = logging.getLogger(__name__)


class LoopTable(Mapping):
    """Immutable, symmetric mapping between matching bracket positions."""

    def __init__(self, pairs: Dict[int, int]):
        self._pairs = dict(pairs)

    def __getitem__(self, position: int) -> int:
        return self._pairs[position]

    def __iter__(self) -> Iterator[int]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    @property
    def loop_count(self) -> int:
        return len(self._pairs) // 2

    def __repr__(self) -> str:
        return f"LoopTable({self._pairs!r})"


def match_loops(code: str) -> Union[LoopTable, ParseError]:
    """Build a table mapping bracket positions for efficient jumping.

    Returns a ``ParseError`` instead of a table when brackets do not balance:
    the first unmatched ']' stops the scan, and if '[' brackets are left open
    the innermost one is reported.
    """
    jump_table: Dict[int, int] = {}
    stack: List[int] = []

    for i, cmd in enumerate(code):
        if cmd == "[":
            stack.append(i)
        elif cmd == "]":
            if not stack:
                return ParseError(Location.in_program(code, i), ParseErrorCause.UNMATCHED_LOOP_CLOSE)
            start = stack.pop()
            jump_table[start] = i
            jump_table[i] = start

    if stack:
        return ParseError(Location.in_program(code, stack[-1]), ParseErrorCause.UNCLOSED_LOOP_OPEN)

    logger.debug("matched %d loops in %d characters", len(jump_table) // 2, len(code))
    return LoopTable(jump_table)
