import pytest

from brainfuck import AddressingPolicy, EofPolicy, InterpreterConfig


def test_defaults() -> None:
    cfg = InterpreterConfig()
    assert cfg.addressing is AddressingPolicy.BOUNDED
    assert cfg.tape_size == 30000
    assert cfg.eof is EofPolicy.UNCHANGED
    assert cfg.max_steps is None
    assert cfg.modulus is None


def test_string_values_are_coerced() -> None:
    cfg = InterpreterConfig(addressing="Sparse", eof="ZERO", tape_size="10", max_steps="5")
    assert cfg.addressing is AddressingPolicy.SPARSE
    assert cfg.eof is EofPolicy.ZERO
    assert cfg.tape_size == 10
    assert cfg.max_steps == 5


@pytest.mark.parametrize(
    "kwargs",
    [
        {"addressing": "circular"},
        {"eof": "minus-one"},
        {"tape_size": 0},
        {"modulus": 0},
        {"max_steps": -1},
    ],
)
def test_invalid_values_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        InterpreterConfig(**kwargs)


def test_from_env() -> None:
    cfg = InterpreterConfig.from_env(
        {"BF_ADDRESSING": "growable", "BF_STEP_LIMIT": "99", "BF_TAPE_MODULUS": "", "OTHER": "x"}
    )
    assert cfg.addressing is AddressingPolicy.GROWABLE
    assert cfg.max_steps == 99
    assert cfg.modulus is None


def test_from_dict_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="unknown config keys"):
        InterpreterConfig.from_dict({"tape": 3})


def test_from_yaml(tmp_path) -> None:
    path = tmp_path / "bf.yaml"
    path.write_text("interpreter:\n  addressing: sparse\n  modulus: 64\n  eof: zero\n")
    cfg = InterpreterConfig.from_yaml(path)
    assert cfg.addressing is AddressingPolicy.SPARSE
    assert cfg.modulus == 64
    assert cfg.eof is EofPolicy.ZERO


def test_from_yaml_flat_and_empty(tmp_path) -> None:
    flat = tmp_path / "flat.yaml"
    flat.write_text("tape_size: 12\n")
    assert InterpreterConfig.from_yaml(flat).tape_size == 12
    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    assert InterpreterConfig.from_yaml(empty) == InterpreterConfig()


def test_round_trip_through_dict() -> None:
    cfg = InterpreterConfig(addressing="sparse", modulus=8, max_steps=3)
    assert cfg.to_dict() == {
        "addressing": "sparse",
        "tape_size": 30000,
        "modulus": 8,
        "eof": "unchanged",
        "max_steps": 3,
    }
    assert InterpreterConfig.from_dict(cfg.to_dict()) == cfg


def test_replace_ignores_none() -> None:
    cfg = InterpreterConfig(tape_size=5)
    new = cfg.replace(tape_size=None, addressing="growable")
    assert new.tape_size == 5
    assert new.addressing is AddressingPolicy.GROWABLE
    assert cfg.addressing is AddressingPolicy.BOUNDED
