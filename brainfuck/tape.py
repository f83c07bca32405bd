"""
Cell storage for the interpreter.

Every tape stores unsigned 8-bit cells that wrap on overflow, but tapes differ in
how the cell index itself behaves at the edges:

    BoundedTape    fixed range [0, size); leaving it is an addressing error
    GrowableTape   starts at index 0 and grows to the right on demand; moving left
                   of index 0 is an addressing error
    SparseTape     unbounded (or modulus-wrapped) indices backed by a dict; never
                   raises an addressing error
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional

import numpy as np

from .diagnostics import ExecutionErrorCause

logger = logging.getLogger(__name__)

CELL_MODULUS = 256
DEFAULT_TAPE_SIZE = 30000


class AddressingPolicy(Enum):
    BOUNDED = "bounded"
    GROWABLE = "growable"
    SPARSE = "sparse"


class AddressingError(Exception):
    """Raised by ``Tape.move`` when the new index cannot be resolved."""

    def __init__(self, cause: ExecutionErrorCause, index: int):
        super().__init__(f"{cause.value}: index {index}")
        self.cause = cause
        self.index = index


class Tape(ABC):
    policy: AddressingPolicy

    @abstractmethod
    def read(self, index: int) -> int:
        ...

    @abstractmethod
    def write(self, index: int, value: int) -> None:
        ...

    @abstractmethod
    def move(self, index: int, delta: int) -> int:
        ...

    def snapshot(self, start: int, stop: int) -> List[int]:
        """Cell values for indices in [start, stop), reading absent cells as 0."""
        return [self.read(i) for i in range(start, stop)]

    def touched(self) -> Dict[int, int]:
        """Non-zero cells keyed by index."""
        return {}


class BoundedTape(Tape):
    policy = AddressingPolicy.BOUNDED

    def __init__(self, size: int = DEFAULT_TAPE_SIZE):
        if size < 1:
            raise ValueError(f"tape size must be positive, got {size}")
        self.cells = np.zeros(size, dtype=np.uint8)

    @property
    def size(self) -> int:
        return len(self.cells)

    def read(self, index: int) -> int:
        return int(self.cells[index])

    def write(self, index: int, value: int) -> None:
        self.cells[index] = value % CELL_MODULUS

    def move(self, index: int, delta: int) -> int:
        new_index = index + delta
        if new_index < 0:
            raise AddressingError(ExecutionErrorCause.CELL_INDEX_UNDERFLOW, new_index)
        if new_index >= len(self.cells):
            raise AddressingError(ExecutionErrorCause.CELL_INDEX_OVERFLOW, new_index)
        return new_index

    def snapshot(self, start: int, stop: int) -> List[int]:
        start, stop = max(0, start), min(len(self.cells), stop)
        return [int(v) for v in self.cells[start:stop]]

    def touched(self) -> Dict[int, int]:
        return {int(i): int(self.cells[i]) for i in np.flatnonzero(self.cells)}


class GrowableTape(Tape):
    policy = AddressingPolicy.GROWABLE

    def __init__(self, initial_size: int = 1):
        if initial_size < 1:
            raise ValueError(f"initial size must be positive, got {initial_size}")
        self.cells = np.zeros(initial_size, dtype=np.uint8)

    @property
    def size(self) -> int:
        return len(self.cells)

    def read(self, index: int) -> int:
        if index >= len(self.cells):
            return 0
        return int(self.cells[index])

    def write(self, index: int, value: int) -> None:
        self._ensure(index)
        self.cells[index] = value % CELL_MODULUS

    def move(self, index: int, delta: int) -> int:
        new_index = index + delta
        if new_index < 0:
            raise AddressingError(ExecutionErrorCause.CELL_INDEX_UNDERFLOW, new_index)
        self._ensure(new_index)
        return new_index

    def _ensure(self, index: int) -> None:
        if index < len(self.cells):
            return
        new_size = max(index + 1, len(self.cells) * 2)
        grown = np.zeros(new_size, dtype=np.uint8)
        grown[: len(self.cells)] = self.cells
        logger.debug("growing tape from %d to %d cells", len(self.cells), new_size)
        self.cells = grown

    def snapshot(self, start: int, stop: int) -> List[int]:
        return [self.read(i) if i >= 0 else 0 for i in range(start, stop)]

    def touched(self) -> Dict[int, int]:
        return {int(i): int(self.cells[i]) for i in np.flatnonzero(self.cells)}


class SparseTape(Tape):
    """Dict-backed tape; with ``modulus`` set, indices wrap into [0, modulus)."""

    policy = AddressingPolicy.SPARSE

    def __init__(self, modulus: Optional[int] = None):
        if modulus is not None and modulus < 1:
            raise ValueError(f"modulus must be positive, got {modulus}")
        self.modulus = modulus
        self.cells: Dict[int, int] = {}

    def read(self, index: int) -> int:
        return self.cells.get(index, 0)

    def write(self, index: int, value: int) -> None:
        value %= CELL_MODULUS
        if value:
            self.cells[index] = value
        else:
            self.cells.pop(index, None)

    def move(self, index: int, delta: int) -> int:
        new_index = index + delta
        if self.modulus is not None:
            new_index %= self.modulus
        return new_index

    def touched(self) -> Dict[int, int]:
        return dict(sorted(self.cells.items()))


def make_tape(
    policy: AddressingPolicy = AddressingPolicy.BOUNDED,
    size: int = DEFAULT_TAPE_SIZE,
    modulus: Optional[int] = None,
) -> Tape:
    if policy is AddressingPolicy.BOUNDED:
        return BoundedTape(size)
    if policy is AddressingPolicy.GROWABLE:
        return GrowableTape()
    return SparseTape(modulus)
