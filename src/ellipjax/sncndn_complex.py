from __future__ import annotations

from functools import partial

import jax
import jax.numpy as jnp
from jax import lax

from . import checks
from . import precision
from . import sncndn
from . import status

jax.config.update("jax_enable_x64", True)


def _nan_complex(x: jax.Array) -> jax.Array:
    nan = jnp.full_like(x, jnp.nan)
    return lax.complex(nan, nan)


def sncndn_complex_kernel(u: jax.Array, m: jax.Array, eps: float = sncndn._EPS):
    """sn, cn, dn of complex ``u`` from two real evaluations.

    With u = x + iy, the imaginary axis is evaluated at the complementary
    parameter 1 - m (Jacobi imaginary transformation) and combined with the
    real axis solution through the addition theorem. Pure imaginary ``u``
    uses the imaginary transformation alone.
    """
    u = jnp.asarray(u, dtype=jnp.complex128)
    m = jnp.asarray(m, dtype=jnp.float64)
    u, m = jnp.broadcast_arrays(u, m)
    x = jnp.real(u)
    y = jnp.imag(u)

    ss1, cc1, dd1, code1 = sncndn.sncndn_real_kernel(y, 1.0 - m, eps)
    ss, cc, dd, code0 = sncndn.sncndn_real_kernel(x, m, eps)

    zero = jnp.zeros_like(x)
    sn_i = lax.complex(zero, ss1 / cc1)
    cn_i = lax.complex(1.0 / cc1, zero)
    dn_i = lax.complex(dd1 / cc1, zero)

    ddd = cc1 * cc1 + m * ss * ss * ss1 * ss1
    sn_g = lax.complex(ss * dd1 / ddd, cc * dd * ss1 * cc1 / ddd)
    cn_g = lax.complex(cc * cc1 / ddd, -ss * dd * ss1 * dd1 / ddd)
    dn_g = lax.complex(dd * cc1 * dd1 / ddd, -m * ss * cc * ss1 / ddd)

    pure = x == 0.0
    valid = (m >= 0.0) & (m <= 1.0)
    code = jnp.where(pure, code1, status.worst(code1, code0))
    code = jnp.where(valid, code, status.INVALID_PARAMETER).astype(status.STATUS_DTYPE)
    ok = code == status.OK

    nan = _nan_complex(x)
    sn = jnp.where(ok, jnp.where(pure, sn_i, sn_g), nan)
    cn = jnp.where(ok, jnp.where(pure, cn_i, cn_g), nan)
    dn = jnp.where(ok, jnp.where(pure, dn_i, dn_g), nan)
    return sn, cn, dn, code


@jax.jit
def sncndn_complex(u: jax.Array, m: jax.Array):
    return sncndn_complex_kernel(u, m, sncndn._EPS)


@partial(jax.jit, static_argnames=("prec_bits",))
def sncndn_complex_prec(u: jax.Array, m: jax.Array, prec_bits: int = precision.DOUBLE_PREC_BITS):
    checks.check_prec_bits(prec_bits, precision.MIN_PREC_BITS, precision.DOUBLE_PREC_BITS, "sncndn_complex_prec")
    sn, cn, dn, code = sncndn_complex_kernel(u, m, precision.eps_from_prec_bits(prec_bits))
    return (
        precision.round_to_prec(sn, prec_bits),
        precision.round_to_prec(cn, prec_bits),
        precision.round_to_prec(dn, prec_bits),
        code,
    )


def sncndn_complex_batch(u: jax.Array, m: jax.Array):
    u = jnp.asarray(u, dtype=jnp.complex128)
    m = jnp.asarray(m, dtype=jnp.float64)
    checks.check_same_length(u, m, "sncndn_complex_batch")
    return jax.vmap(sncndn_complex)(u, m)


def sncndn_complex_batch_prec(u: jax.Array, m: jax.Array, prec_bits: int = precision.DOUBLE_PREC_BITS):
    u = jnp.asarray(u, dtype=jnp.complex128)
    m = jnp.asarray(m, dtype=jnp.float64)
    checks.check_same_length(u, m, "sncndn_complex_batch_prec")
    return jax.vmap(partial(sncndn_complex_prec, prec_bits=prec_bits))(u, m)


sncndn_complex_batch_jit = jax.jit(sncndn_complex_batch)
sncndn_complex_batch_prec_jit = jax.jit(sncndn_complex_batch_prec, static_argnames=("prec_bits",))


__all__ = [
    "sncndn_complex_kernel",
    "sncndn_complex",
    "sncndn_complex_prec",
    "sncndn_complex_batch",
    "sncndn_complex_batch_prec",
    "sncndn_complex_batch_jit",
    "sncndn_complex_batch_prec_jit",
]
