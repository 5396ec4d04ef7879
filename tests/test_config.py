import pytest

from intexpr import ArithmeticOverflowError, EvalConfig
from intexpr.config import DEFAULT_CONFIG


def test_defaults() -> None:
    assert DEFAULT_CONFIG == EvalConfig(int_bits=32, overflow="fail", builder="recursive")
    assert DEFAULT_CONFIG.min_int == -2147483648
    assert DEFAULT_CONFIG.max_int == 2147483647


@pytest.mark.parametrize("kwargs", [{"int_bits": 12}, {"overflow": "saturate"}, {"builder": "listener"}])
def test_invalid_values_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        EvalConfig(**kwargs)


def test_wrap_is_twos_complement() -> None:
    config = EvalConfig(int_bits=8)
    assert config.wrap(127) == 127
    assert config.wrap(128) == -128
    assert config.wrap(255) == -1
    assert config.wrap(256) == 0
    assert config.wrap(-129) == 127


def test_add_policies() -> None:
    assert EvalConfig(int_bits=16).add(1, 2) == 3
    with pytest.raises(ArithmeticOverflowError):
        EvalConfig(int_bits=16).add(32767, 1)
    assert EvalConfig(int_bits=16, overflow="wrap").add(32767, 1) == -32768


def test_from_env() -> None:
    config = EvalConfig.from_env({"INTEXPR_INT_BITS": "64", "INTEXPR_OVERFLOW": "wrap", "INTEXPR_BUILDER": "stack"})
    assert config == EvalConfig(int_bits=64, overflow="wrap", builder="stack")
    assert EvalConfig.from_env({}) == DEFAULT_CONFIG


def test_from_env_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        EvalConfig.from_env({"INTEXPR_INT_BITS": "wide"})
    with pytest.raises(ValueError):
        EvalConfig.from_env({"INTEXPR_OVERFLOW": "ignore"})
