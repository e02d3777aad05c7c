from __future__ import annotations

from contextlib import contextmanager
from math import ceil, log10, sqrt

import jax
import jax.numpy as jnp

from . import checks

jax.config.update("jax_enable_x64", True)

# Kernels evaluate in float64; lower working precisions are emulated by
# re-deriving the thresholds and rounding the results.
DOUBLE_PREC_BITS = 53
MIN_PREC_BITS = 2

_PREC_BITS = DOUBLE_PREC_BITS
_DPS = 16


def dps_to_bits(dps: int) -> int:
    return int(ceil(dps * log10(10) / log10(2)))


def bits_to_dps(prec_bits: int) -> int:
    return int(ceil(prec_bits * log10(2) / log10(10)))


def set_prec_bits(prec_bits: int) -> None:
    global _DPS, _PREC_BITS
    checks.check_prec_bits(int(prec_bits), MIN_PREC_BITS, DOUBLE_PREC_BITS, "precision.set_prec_bits")
    _PREC_BITS = int(prec_bits)
    _DPS = bits_to_dps(_PREC_BITS)


def set_dps(dps: int) -> None:
    global _DPS, _PREC_BITS
    bits = min(dps_to_bits(int(dps)), DOUBLE_PREC_BITS)
    checks.check_prec_bits(bits, MIN_PREC_BITS, DOUBLE_PREC_BITS, "precision.set_dps")
    # digits beyond double precision are not available to the kernels
    _DPS = min(int(dps), bits_to_dps(DOUBLE_PREC_BITS))
    _PREC_BITS = bits


def get_dps() -> int:
    return _DPS


def get_prec_bits() -> int:
    return _PREC_BITS


def _restore(dps: int, prec_bits: int) -> None:
    global _DPS, _PREC_BITS
    _DPS = dps
    _PREC_BITS = prec_bits


@contextmanager
def workdps(dps: int):
    old = (_DPS, _PREC_BITS)
    set_dps(dps)
    try:
        yield
    finally:
        _restore(*old)


@contextmanager
def workprec(prec_bits: int):
    old = (_DPS, _PREC_BITS)
    set_prec_bits(prec_bits)
    try:
        yield
    finally:
        _restore(*old)


def resolve_prec_bits(dps: int | None = None, prec_bits: int | None = None) -> int:
    """Working precision for one call: ``prec_bits``, then ``dps``, then the default."""
    if prec_bits is not None:
        bits = int(prec_bits)
    elif dps is not None:
        bits = min(dps_to_bits(int(dps)), DOUBLE_PREC_BITS)
    else:
        bits = get_prec_bits()
    checks.check_prec_bits(bits, MIN_PREC_BITS, DOUBLE_PREC_BITS, "precision.prec_bits")
    return bits


def eps_from_prec_bits(prec_bits: int = DOUBLE_PREC_BITS) -> float:
    return 2.0 ** (1 - int(prec_bits))


def sqrt_eps_from_prec_bits(prec_bits: int = DOUBLE_PREC_BITS) -> float:
    return sqrt(eps_from_prec_bits(prec_bits))


def _round_real(x: jax.Array, prec_bits: int) -> jax.Array:
    x = jnp.asarray(x, dtype=jnp.float64)
    step = jnp.exp2(jnp.floor(jnp.log2(jnp.abs(x))) - jnp.float64(prec_bits - 1))
    safe = jnp.isfinite(x) & (step > 0.0)
    step = jnp.where(safe, step, 1.0)
    return jnp.where(safe, jnp.round(x / step) * step, x)


def round_to_prec(x: jax.Array, prec_bits: int = DOUBLE_PREC_BITS) -> jax.Array:
    """Round to nearest with ``prec_bits`` significant bits; identity at double precision."""
    x = jnp.asarray(x)
    if prec_bits >= DOUBLE_PREC_BITS:
        return x
    if jnp.iscomplexobj(x):
        return jax.lax.complex(_round_real(jnp.real(x), prec_bits), _round_real(jnp.imag(x), prec_bits))
    return _round_real(x, prec_bits)


__all__ = [
    "DOUBLE_PREC_BITS",
    "MIN_PREC_BITS",
    "dps_to_bits",
    "bits_to_dps",
    "set_prec_bits",
    "set_dps",
    "get_dps",
    "get_prec_bits",
    "workdps",
    "workprec",
    "resolve_prec_bits",
    "eps_from_prec_bits",
    "sqrt_eps_from_prec_bits",
    "round_to_prec",
]
