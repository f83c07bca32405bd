"""Interpreter configuration: dataclass defaults, environment and YAML loading."""

from __future__ import annotations

import os
from dataclasses import dataclass, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .tape import DEFAULT_TAPE_SIZE, AddressingPolicy


class EofPolicy(Enum):
    """What ',' does once the input source is exhausted."""

    UNCHANGED = "unchanged"
    ZERO = "zero"


ENV_PREFIX = "BF_"


def _coerce_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(e.value for e in enum_cls)
        raise ValueError(f"invalid {enum_cls.__name__} {value!r}; expected one of: {choices}") from None


def _optional_int(value) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass
class InterpreterConfig:
    """Configuration parameters for a run."""

    addressing: AddressingPolicy = AddressingPolicy.BOUNDED
    tape_size: int = DEFAULT_TAPE_SIZE
    modulus: Optional[int] = None  # only used by the sparse policy
    eof: EofPolicy = EofPolicy.UNCHANGED
    max_steps: Optional[int] = None  # None means no limit

    def __post_init__(self):
        self.addressing = _coerce_enum(AddressingPolicy, self.addressing)
        self.eof = _coerce_enum(EofPolicy, self.eof)
        self.tape_size = int(self.tape_size)
        self.modulus = _optional_int(self.modulus)
        self.max_steps = _optional_int(self.max_steps)

        if self.tape_size < 1:
            raise ValueError("tape_size must be positive")
        if self.modulus is not None and self.modulus < 1:
            raise ValueError("modulus must be positive")
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError("max_steps must not be negative")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["addressing"] = self.addressing.value
        data["eof"] = self.eof.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InterpreterConfig":
        known = {f for f in cls.__dataclass_fields__}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**dict(data))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InterpreterConfig":
        """Build a config from BF_ADDRESSING, BF_TAPE_SIZE, BF_TAPE_MODULUS, BF_EOF and BF_STEP_LIMIT."""
        environ = os.environ if environ is None else environ
        names = {
            "addressing": "ADDRESSING",
            "tape_size": "TAPE_SIZE",
            "modulus": "TAPE_MODULUS",
            "eof": "EOF",
            "max_steps": "STEP_LIMIT",
        }
        data = {}
        for field_name, suffix in names.items():
            value = environ.get(ENV_PREFIX + suffix)
            if value is not None:
                data[field_name] = value
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "InterpreterConfig":
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at top level")
        data = data.get("interpreter", data)
        return cls.from_dict(data)

    def replace(self, **overrides) -> "InterpreterConfig":
        """Copy with the non-None overrides applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return InterpreterConfig.from_dict(data)
