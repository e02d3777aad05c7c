import jax.numpy as jnp
import pytest

from ellipjax import checks
from ellipjax import status

from tests._test_checks import _check


def test_status_names() -> None:
    _check(status.status_name(status.OK) == "OK")
    _check(status.status_name(status.NOT_CONVERGED) == "NOT_CONVERGED")
    _check(status.status_name(jnp.int32(2)) == "INVALID_PARAMETER")
    _check(status.status_name(9) == "UNKNOWN")


def test_worst_is_most_severe() -> None:
    a = jnp.array([0, 1, 2, 0, 1], dtype=jnp.int32)
    b = jnp.array([0, 0, 1, 2, 1], dtype=jnp.int32)
    got = status.worst(a, b)
    _check(got.dtype == status.STATUS_DTYPE)
    _check(got.tolist() == [0, 1, 2, 2, 1])


def test_conformant_shape_rules() -> None:
    _check(checks.conformant_shape((), (), "t") == ())
    _check(checks.conformant_shape((), (2, 3), "t") == (2, 3))
    _check(checks.conformant_shape((4,), (), "t") == (4,))
    _check(checks.conformant_shape((5, 1), (1, 3), "t") == (5, 3))
    _check(checks.conformant_shape((2, 2), (2, 2), "t") == (2, 2))
    _check(checks.conformant_shape((1, 1), (1, 1), "t") == (1, 1))
    for u_shape, m_shape in (((3,), (4,)), ((1, 3), (5, 1)), ((2, 3), (3, 2)), ((3,), (1, 3))):
        with pytest.raises(ValueError):
            checks.conformant_shape(u_shape, m_shape, "t")


def test_argument_checks() -> None:
    checks.check_prec_bits(53, 2, 53, "t")
    with pytest.raises(ValueError, match="prec_bits"):
        checks.check_prec_bits(54, 2, 53, "t")
    checks.check_real(jnp.zeros(2), "t")
    with pytest.raises(TypeError):
        checks.check_real(jnp.zeros(2, dtype=jnp.complex128), "t")
    checks.check_same_length(jnp.zeros(3), jnp.zeros(3), "t")
    with pytest.raises(ValueError):
        checks.check_same_length(jnp.zeros((3, 1)), jnp.zeros((3, 1)), "t")


def test_parity_switches(monkeypatch) -> None:
    from ellipjax import validation

    monkeypatch.delenv("ELLIPJAX_RUN_PARITY", raising=False)
    monkeypatch.delenv("ELLIPJAX_PARITY_DPS", raising=False)
    _check(not validation.parity_enabled())
    _check(validation.parity_dps() == validation.DEFAULT_PARITY_DPS)
    monkeypatch.setenv("ELLIPJAX_RUN_PARITY", "1")
    monkeypatch.setenv("ELLIPJAX_PARITY_DPS", "50")
    _check(validation.parity_enabled())
    _check(validation.parity_dps() == 50)
    monkeypatch.setenv("ELLIPJAX_PARITY_DPS", "8")
    with pytest.raises(ValueError):
        validation.parity_dps()
