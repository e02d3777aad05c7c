from __future__ import annotations

import jax
import jax.numpy as jnp

from . import checks
from . import precision
from . import sncndn
from . import sncndn_complex

jax.config.update("jax_enable_x64", True)


def evaluate(u, m, prec_bits: int | None = None, dps: int | None = None):
    """``(sn, cn, dn, status)`` for one argument ``u`` and parameter ``m``.

    Complex ``u`` goes through the complex evaluator and yields complex
    results; anything else is evaluated on the real axis. ``m`` outside
    [0, 1] is not an error here: it yields NaN with status
    ``INVALID_PARAMETER``.
    """
    pb = precision.resolve_prec_bits(dps, prec_bits)
    u = jnp.asarray(u)
    m = jnp.asarray(m)
    checks.check_real(m, "evaluate.m")
    if jnp.iscomplexobj(u):
        return sncndn_complex.sncndn_complex_prec(u, m, prec_bits=pb)
    return sncndn.sncndn_real_prec(u, m, prec_bits=pb)


def ellipj(
    u,
    m,
    prec_bits: int | None = None,
    dps: int | None = None,
    return_status: bool = False,
):
    """Jacobi elliptic functions sn(u|m), cn(u|m), dn(u|m) over arrays.

    ``u`` and ``m`` may be scalars or arrays. A scalar pairs with every
    element of the other argument, a column ``u`` of shape (n, 1) with a
    row ``m`` of shape (1, k) gives (n, k) results, and otherwise the two
    shapes must be identical. Any other combination raises ``ValueError``.

    Results have the broadcast shape and the numeric kind of ``u``. With
    ``return_status`` the per-element status codes are returned as a
    fourth array.
    """
    pb = precision.resolve_prec_bits(dps, prec_bits)
    u = jnp.asarray(u)
    m = jnp.asarray(m)
    checks.check_real(m, "ellipj.m")
    shape = checks.conformant_shape(u.shape, m.shape, "ellipj")

    flat_u = jnp.ravel(jnp.broadcast_to(u, shape))
    flat_m = jnp.ravel(jnp.broadcast_to(m, shape))
    if jnp.iscomplexobj(u):
        out = sncndn_complex.sncndn_complex_batch_prec_jit(flat_u, flat_m, prec_bits=pb)
    else:
        out = sncndn.sncndn_real_batch_prec_jit(flat_u, flat_m, prec_bits=pb)

    sn, cn, dn, code = (jnp.reshape(o, shape) for o in out)
    if return_status:
        return sn, cn, dn, code
    return sn, cn, dn


__all__ = [
    "evaluate",
    "ellipj",
]
