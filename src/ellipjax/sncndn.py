"""Jacobi elliptic functions sn, cn, dn of real argument.

The parameter range 0 <= m <= 1 is split in three regimes
(Abramowitz and Stegun, chapter 16):

* m < sqrt(eps): circular perturbation series, 16.13
* 1 - m < sqrt(eps): hyperbolic perturbation series, 16.15
* otherwise: arithmetic-geometric mean descent and ascent, 16.4

Every kernel returns ``(sn, cn, dn, status)``; invalid or unconverged
elements carry NaN and a non-zero code from :mod:`ellipjax.status`.
"""

from __future__ import annotations

from functools import partial
from math import sqrt

import jax
import jax.numpy as jnp
from jax import lax

from . import checks
from . import precision
from . import status

jax.config.update("jax_enable_x64", True)

AGM_NMAX = 16

_EPS = precision.eps_from_prec_bits(precision.DOUBLE_PREC_BITS)


def _small_m(u: jax.Array, m: jax.Array) -> tuple[jax.Array, jax.Array, jax.Array]:
    si_u = jnp.sin(u)
    co_u = jnp.cos(u)
    t = 0.25 * m * (u - si_u * co_u)
    sn = si_u - t * co_u
    cn = co_u + t * si_u
    dn = 1.0 - 0.5 * m * si_u * si_u
    return sn, cn, dn


def _near_one(u: jax.Array, m: jax.Array) -> tuple[jax.Array, jax.Array, jax.Array]:
    """First order expansion in m1 = 1 - m about (tanh u, sech u, sech u).

    The correction grows like m1 * sinh(u): sn is accurate while
    m1 * cosh(u) is small, and cn, dn, which decay like sech(u), need
    m1 * cosh(u)**2 small for relative accuracy. For large |u| the results
    are not meaningful even though the status is OK.
    """
    m1 = 1.0 - m
    si_u = jnp.sinh(u)
    ta_u = jnp.tanh(u)
    se_u = 1.0 / jnp.cosh(u)
    # (sinh u cosh u -+ u) sech^2 u rewritten as tanh u -+ u sech^2 u
    q = 0.25 * m1
    d_sn = q * (ta_u - u * se_u * se_u)
    d_cn = q * ta_u * (si_u - u * se_u)
    d_dn = q * ta_u * (si_u + u * se_u)
    exact = m1 == 0.0
    sn = ta_u + jnp.where(exact, 0.0, d_sn)
    cn = se_u - jnp.where(exact, 0.0, d_cn)
    dn = se_u + jnp.where(exact, 0.0, d_dn)
    return sn, cn, dn


def _agm_sequences(m: jax.Array, eps: float) -> tuple[jax.Array, jax.Array, jax.Array]:
    """a[n], c[n] for n = 1 .. AGM_NMAX - 1 and the first n with c[n] / a[n] < eps.

    The returned index is AGM_NMAX when the tolerance was never met.
    """

    def step(carry, n):
        a_prev, b, n_conv = carry
        a_n = 0.5 * (a_prev + b)
        c_n = 0.5 * (a_prev - b)
        b = jnp.sqrt(a_prev * b)
        hit = (n_conv == AGM_NMAX) & (c_n / a_n < eps)
        n_conv = jnp.where(hit, n, n_conv)
        return (a_n, b, n_conv), (a_n, c_n)

    init = (
        jnp.ones_like(m),
        jnp.sqrt(1.0 - m),
        jnp.full(m.shape, AGM_NMAX, dtype=jnp.int32),
    )
    (_, _, n_conv), (a, c) = lax.scan(step, init, jnp.arange(1, AGM_NMAX, dtype=jnp.int32))
    return a, c, n_conv


def _take(seq: jax.Array, idx: jax.Array) -> jax.Array:
    return jnp.take_along_axis(seq, idx[None], axis=0)[0]


def _agm_amplitude(u: jax.Array, a: jax.Array, c: jax.Array, n_conv: jax.Array) -> tuple[jax.Array, jax.Array]:
    """Jacobi amplitude phi and the amplitude of the preceding ascent step."""
    n_top = jnp.minimum(n_conv, AGM_NMAX - 1)
    phi0 = jnp.exp2(n_top.astype(jnp.float64)) * _take(a, n_top - 1) * u

    def body(k, state):
        phi, t = state
        n = n_top - k
        active = n >= 1
        idx = jnp.clip(n - 1, 0, AGM_NMAX - 2)
        phi_next = 0.5 * (jnp.arcsin(_take(c, idx) / _take(a, idx) * jnp.sin(phi)) + phi)
        return jnp.where(active, phi_next, phi), jnp.where(active, phi, t)

    return lax.fori_loop(0, AGM_NMAX - 1, body, (phi0, jnp.zeros_like(phi0)))


def _agm(u: jax.Array, m: jax.Array, eps: float) -> tuple[jax.Array, jax.Array, jax.Array, jax.Array]:
    a, c, n_conv = _agm_sequences(m, eps)
    phi, t = _agm_amplitude(u, a, c, n_conv)
    sn = jnp.sin(phi)
    cn = jnp.cos(phi)
    dn = cn / jnp.cos(t - phi)
    return sn, cn, dn, n_conv >= AGM_NMAX - 1


def sncndn_real_kernel(u: jax.Array, m: jax.Array, eps: float = _EPS):
    """Elementwise sn, cn, dn with convergence tolerance ``eps``.

    ``eps`` is a Python float; the series thresholds are ``sqrt(eps)``.
    Not jitted, so callers can compose it inside their own traces.
    """
    u = jnp.asarray(u, dtype=jnp.float64)
    m = jnp.asarray(m, dtype=jnp.float64)
    u, m = jnp.broadcast_arrays(u, m)
    sqrt_eps = sqrt(eps)

    valid = (m >= 0.0) & (m <= 1.0)
    small = m < sqrt_eps
    near_one = (1.0 - m) < sqrt_eps

    sn_s, cn_s, dn_s = _small_m(u, m)
    sn_h, cn_h, dn_h = _near_one(u, m)
    sn_a, cn_a, dn_a, agm_failed = _agm(u, m, eps)

    sn = jnp.where(small, sn_s, jnp.where(near_one, sn_h, sn_a))
    cn = jnp.where(small, cn_s, jnp.where(near_one, cn_h, cn_a))
    dn = jnp.where(small, dn_s, jnp.where(near_one, dn_h, dn_a))

    failed = agm_failed & ~small & ~near_one
    code = jnp.where(valid, jnp.where(failed, status.NOT_CONVERGED, status.OK), status.INVALID_PARAMETER)
    code = code.astype(status.STATUS_DTYPE)
    ok = code == status.OK
    return jnp.where(ok, sn, jnp.nan), jnp.where(ok, cn, jnp.nan), jnp.where(ok, dn, jnp.nan), code


@jax.jit
def sncndn_real(u: jax.Array, m: jax.Array):
    return sncndn_real_kernel(u, m, _EPS)


@partial(jax.jit, static_argnames=("prec_bits",))
def sncndn_real_prec(u: jax.Array, m: jax.Array, prec_bits: int = precision.DOUBLE_PREC_BITS):
    checks.check_prec_bits(prec_bits, precision.MIN_PREC_BITS, precision.DOUBLE_PREC_BITS, "sncndn_real_prec")
    sn, cn, dn, code = sncndn_real_kernel(u, m, precision.eps_from_prec_bits(prec_bits))
    return (
        precision.round_to_prec(sn, prec_bits),
        precision.round_to_prec(cn, prec_bits),
        precision.round_to_prec(dn, prec_bits),
        code,
    )


def sncndn_real_batch(u: jax.Array, m: jax.Array):
    u = jnp.asarray(u, dtype=jnp.float64)
    m = jnp.asarray(m, dtype=jnp.float64)
    checks.check_same_length(u, m, "sncndn_real_batch")
    return jax.vmap(sncndn_real)(u, m)


def sncndn_real_batch_prec(u: jax.Array, m: jax.Array, prec_bits: int = precision.DOUBLE_PREC_BITS):
    u = jnp.asarray(u, dtype=jnp.float64)
    m = jnp.asarray(m, dtype=jnp.float64)
    checks.check_same_length(u, m, "sncndn_real_batch_prec")
    return jax.vmap(partial(sncndn_real_prec, prec_bits=prec_bits))(u, m)


sncndn_real_batch_jit = jax.jit(sncndn_real_batch)
sncndn_real_batch_prec_jit = jax.jit(sncndn_real_batch_prec, static_argnames=("prec_bits",))


__all__ = [
    "AGM_NMAX",
    "sncndn_real_kernel",
    "sncndn_real",
    "sncndn_real_prec",
    "sncndn_real_batch",
    "sncndn_real_batch_prec",
    "sncndn_real_batch_jit",
    "sncndn_real_batch_prec_jit",
]
