from __future__ import annotations

import jax.numpy as jnp


def _require(cond: bool, msg: str, *args) -> None:
    if not cond:
        raise ValueError(msg.format(*args))


def check_prec_bits(prec_bits: int, lo: int, hi: int, label: str) -> None:
    _require(lo <= prec_bits <= hi, "{}: expected {} <= prec_bits <= {}, got {}", label, lo, hi, prec_bits)


def check_real(arr, label: str) -> None:
    if jnp.iscomplexobj(arr):
        raise TypeError(f"{label}: expecting a real scalar or array, got dtype {arr.dtype}")


def check_same_length(a, b, label: str) -> None:
    _require(a.ndim == 1 and a.shape == b.shape, "{}: expected equal length 1-D arrays, got {} and {}", label, a.shape, b.shape)


def conformant_shape(u_shape: tuple[int, ...], m_shape: tuple[int, ...], label: str) -> tuple[int, ...]:
    """Shape of the result of pairing ``u`` with ``m``.

    A 0-d argument broadcasts against the other one, a column ``u`` paired
    with a row ``m`` gives their outer product, and otherwise the shapes
    must match exactly.
    """
    if len(u_shape) == 0:
        return tuple(m_shape)
    if len(m_shape) == 0:
        return tuple(u_shape)
    if len(u_shape) == 2 and len(m_shape) == 2 and u_shape[1] == 1 and m_shape[0] == 1:
        return (u_shape[0], m_shape[1])
    _require(tuple(u_shape) == tuple(m_shape), "{}: u shape {} and m shape {} are not conformant", label, u_shape, m_shape)
    return tuple(u_shape)


__all__ = [
    "check_prec_bits",
    "check_real",
    "check_same_length",
    "conformant_shape",
]
