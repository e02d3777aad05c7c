from __future__ import annotations

import jax.numpy as jnp

# Ordered by severity so that combining two statuses is a maximum.
OK = 0
NOT_CONVERGED = 1
INVALID_PARAMETER = 2

STATUS_DTYPE = jnp.int32

_NAMES = {
    OK: "OK",
    NOT_CONVERGED: "NOT_CONVERGED",
    INVALID_PARAMETER: "INVALID_PARAMETER",
}


def status_name(code: int) -> str:
    return _NAMES.get(int(code), "UNKNOWN")


def worst(a, b):
    return jnp.maximum(jnp.asarray(a, dtype=STATUS_DTYPE), jnp.asarray(b, dtype=STATUS_DTYPE))


__all__ = [
    "OK",
    "NOT_CONVERGED",
    "INVALID_PARAMETER",
    "STATUS_DTYPE",
    "status_name",
    "worst",
]
