import math

import jax.numpy as jnp
import numpy as np

from ellipjax import precision
from ellipjax import sncndn
from ellipjax import sncndn_complex
from ellipjax import status

from tests._sncndn_reference import CN_TABLE, DN_TABLE, GRID_M, SN_TABLE
from tests._test_checks import _check, _close

EPS = precision.eps_from_prec_bits(53)


def _eval(u, m):
    sn, cn, dn, code = sncndn_complex.sncndn_complex(jnp.asarray(u, dtype=jnp.complex128), jnp.asarray(m, dtype=jnp.float64))
    return np.asarray(sn), np.asarray(cn), np.asarray(dn), np.asarray(code)


def _grid(table):
    u = np.array([complex(row[0], row[1]) for row in table])
    f = np.array([complex(row[2], row[3]) for row in table])
    return u, f


def test_reference_grid():
    for name, table, pick in (("sn", SN_TABLE, 0), ("cn", CN_TABLE, 1), ("dn", DN_TABLE, 2)):
        u, expected = _grid(table)
        _check(u.shape == (121,))
        m = np.full(u.shape, GRID_M)
        out = sncndn_complex.sncndn_complex_batch_jit(jnp.asarray(u), jnp.asarray(m))
        _check(bool(jnp.all(out[3] == status.OK)), f"{name} status")
        _close(out[pick], expected, 1e-9, f"{name} on the reference grid")


def test_known_values():
    sn, cn, dn, code = _eval(math.log(2.0) * 1j, 0.0)
    _check(code == status.OK)
    _close([sn, cn, dn], [0.75j, 1.25, 1.0], 10 * EPS, "u = i ln 2, m = 0")

    sn, cn, dn, _ = _eval(-0.2 + 0.4j, GRID_M)
    expected = [-0.2152524522 + 0.402598347j, 1.059453907 + 0.08179712295j, 1.001705496 + 0.00254669712j]
    _close([sn, cn, dn], expected, 1e-9, "u = -0.2 + 0.4i")

    sn, cn, dn, _ = _eval(0.2 + 0.6j, GRID_M)
    expected = [0.2369100139 + 0.624633635j, 1.16200643 - 0.1273503824j, 1.004913944 - 0.004334880912j]
    _close([sn, cn, dn], expected, 1e-8, "u = 0.2 + 0.6i")

    sn, cn, dn, _ = _eval(0.8 + 0.8j, GRID_M)
    expected = [0.9588386397 + 0.6107824358j, 0.9245978896 - 0.6334016187j, 0.9920785856 - 0.01737733806j]
    _close([sn, cn, dn], expected, 1e-10, "u = 0.8 + 0.8i")


def test_zero_argument():
    for m in (0.0, 0.3, 1.0):
        sn, cn, dn, code = _eval(0.0 + 0.0j, m)
        _check(code == status.OK)
        _close([sn, cn, dn], [0.0, 1.0, 1.0], 0.0, f"(0, 1, 1) at m={m}")


def test_real_axis_matches_real_evaluator():
    x = np.linspace(-3.0, 3.0, 13)
    for m in (1e-10, GRID_M, 0.81, 1.0):
        sn, cn, dn, code = _eval(x + 0.0j, m)
        rs, rc, rd, rcode = sncndn.sncndn_real(jnp.asarray(x), jnp.full(x.shape, m))
        _check(np.all(code == np.asarray(rcode)))
        _close(sn, np.asarray(rs), 4 * EPS, f"sn at m={m}")
        _close(cn, np.asarray(rc), 4 * EPS, f"cn at m={m}")
        _close(dn, np.asarray(rd), 4 * EPS, f"dn at m={m}")


def test_pure_imaginary_circular_limit():
    y = np.linspace(-2.0, 2.0, 9)
    sn, cn, dn, code = _eval(1j * y, 0.0)
    _check(np.all(code == status.OK))
    _check(np.all(sn.real == 0.0) and np.all(cn.imag == 0.0) and np.all(dn.imag == 0.0))
    _close(sn, 1j * np.sinh(y), 1e-14, "sn(iy|0) = i sinh y")
    _close(cn, np.cosh(y), 1e-14, "cn(iy|0) = cosh y")
    _close(dn, np.ones_like(y), 1e-14, "dn(iy|0) = 1")


def test_pure_imaginary_hyperbolic_limit():
    y = np.linspace(-1.2, 1.2, 7)
    sn, cn, dn, code = _eval(1j * y, 1.0)
    _check(np.all(code == status.OK))
    _close(sn, 1j * np.tan(y), 1e-14, "sn(iy|1) = i tan y")
    _close(cn, 1.0 / np.cos(y), 1e-14, "cn(iy|1) = sec y")
    _close(dn, 1.0 / np.cos(y), 1e-14, "dn(iy|1) = sec y")


def test_pythagorean_identities():
    u, _ = _grid(SN_TABLE)
    # keep clear of the poles at Im u = K(1 - m)
    u = u[np.abs(u.imag) <= 1.2]
    for m in (0.0, 1e-10, GRID_M, 0.5, 0.9, 1.0 - 1e-10, 1.0):
        sn, cn, dn, code = _eval(u, m)
        _check(np.all(code == status.OK), f"status m={m}")
        scale = 1.0 + np.abs(sn) ** 2 + np.abs(cn) ** 2
        _close((sn * sn + cn * cn - 1.0) / scale, np.zeros_like(u), 64 * EPS, f"sn^2 + cn^2 at m={m}")
        scale = 1.0 + np.abs(dn) ** 2 + m * np.abs(sn) ** 2
        _close((dn * dn + m * sn * sn - 1.0) / scale, np.zeros_like(u), 64 * EPS, f"dn^2 + m sn^2 at m={m}")


def test_conjugate_symmetry():
    u, _ = _grid(SN_TABLE)
    for m in (GRID_M, 0.2):
        a = _eval(u, m)
        b = _eval(np.conj(u), m)
        for fa, fb, name in zip(a[:3], b[:3], ("sn", "cn", "dn")):
            _close(fb, np.conj(fa), 1e-14, f"{name}(conj u) = conj {name}(u) at m={m}")


def test_invalid_parameter():
    u = np.array([0.0 + 0.0j, 0.3 + 0.0j, 0.0 + 0.7j, -0.5 + 1.1j])
    for m in (1.5, -0.5, -1e-300, np.nan):
        sn, cn, dn, code = _eval(u, m)
        _check(np.all(code == status.INVALID_PARAMETER), f"status m={m}")
        for f in (sn, cn, dn):
            _check(np.all(np.isnan(f.real)) and np.all(np.isnan(f.imag)), f"NaN outputs m={m}")


def test_nan_argument_is_not_invalid():
    sn, cn, dn, code = _eval(complex(np.nan, 0.5), 0.5)
    _check(code == status.OK)
    _check(np.isnan(sn) and np.isnan(cn) and np.isnan(dn))


def test_prec_rounds_both_parts():
    u = jnp.asarray(np.array([0.3 + 0.4j, -0.8 + 1.2j]))
    m = jnp.asarray(np.array([0.2, 0.7]))
    sn, cn, dn, code = sncndn_complex.sncndn_complex_prec(u, m, prec_bits=24)
    ref = sncndn_complex.sncndn_complex(u, m)
    _check(bool(jnp.all(code == status.OK)))
    for lo, hi in zip((sn, cn, dn), ref[:3]):
        lo = np.asarray(lo)
        for part in (lo.real, lo.imag):
            _check(np.all(part == part.astype(np.float32).astype(np.float64)))
        _close(lo, np.asarray(hi), 1e-6)


def test_batch_prec_jit_matches_batch():
    u = jnp.asarray(np.array([0.1 + 0.2j, 0.0 + 0.5j, -1.0 + 0.0j]))
    m = jnp.asarray(np.array([0.3, 0.6, 0.9]))
    a = sncndn_complex.sncndn_complex_batch_jit(u, m)
    b = sncndn_complex.sncndn_complex_batch_prec_jit(u, m, prec_bits=53)
    _check(a[0].shape == (3,) and a[0].dtype == jnp.complex128)
    _check(bool(jnp.all(a[3] == b[3])))
    for fa, fb in zip(a[:3], b[:3]):
        _close(fb, fa, 4 * EPS)


def test_unconverged_agm_propagates():
    # general path, pure imaginary path
    u = jnp.array([0.3 + 0.2j, 0.0 + 0.2j])
    m = jnp.array([0.5, 0.5])
    sn, cn, dn, code = sncndn_complex.sncndn_complex_kernel(u, m, 0.0)
    _check(bool(jnp.all(code == status.NOT_CONVERGED)))
    for f in (sn, cn, dn):
        f = np.asarray(f)
        _check(np.all(np.isnan(f.real)) and np.all(np.isnan(f.imag)))
