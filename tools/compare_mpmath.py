from __future__ import annotations

import argparse

import jax.numpy as jnp
import numpy as np

import mpmath as mp

from ellipjax import precision
from ellipjax import sncndn
from ellipjax import sncndn_complex

from _run_log import log_run


def _regimes(rng: np.random.Generator, n: int) -> dict[str, np.ndarray]:
    sqrt_eps = precision.sqrt_eps_from_prec_bits(53)
    return {
        "small": rng.uniform(0.0, sqrt_eps, size=n),
        "agm": rng.uniform(sqrt_eps, 1.0 - sqrt_eps, size=n),
        "near_one": 1.0 - rng.uniform(0.0, sqrt_eps, size=n),
    }


def _mp_eval(u: np.ndarray, m: np.ndarray) -> np.ndarray:
    out = np.empty((3, u.shape[0]), dtype=np.complex128)
    for i in range(u.shape[0]):
        uu = mp.mpmathify(complex(u[i]))
        mm = mp.mpf(float(m[i]))
        for k, name in enumerate(("sn", "cn", "dn")):
            out[k, i] = complex(mp.ellipfun(name, uu, m=mm))
    return out


def main() -> None:
    parser = argparse.ArgumentParser(description="Compare ellipjax sn, cn, dn against mpmath.ellipfun.")
    parser.add_argument("--samples", type=int, default=500)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--dps", type=int, default=30)
    parser.add_argument("--umax", type=float, default=4.0)
    parser.add_argument("--complex", action="store_true", help="sample complex arguments as well")
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    n = args.samples
    mp.mp.dps = args.dps
    worst_err = 0.0

    print("max abs error vs mpmath (real argument):")
    for regime, m in _regimes(rng, n).items():
        u = rng.uniform(-args.umax, args.umax, size=n)
        sn, cn, dn, code = sncndn.sncndn_real_batch_jit(jnp.asarray(u), jnp.asarray(m))
        ref = _mp_eval(u, m)
        errs = [np.max(np.abs(np.asarray(f) - ref[k].real)) for k, f in enumerate((sn, cn, dn))]
        bad = int(np.sum(np.asarray(code) != 0))
        print(f"{regime:8s} sn={errs[0]:.3e} cn={errs[1]:.3e} dn={errs[2]:.3e} non_ok={bad}")
        worst_err = max(worst_err, *errs)

    if args.complex:
        print("\nmax abs error vs mpmath (complex argument):")
        for regime, m in _regimes(rng, n).items():
            u = rng.uniform(-args.umax, args.umax, size=n) + 1j * rng.uniform(-1.0, 1.0, size=n)
            sn, cn, dn, code = sncndn_complex.sncndn_complex_batch_jit(jnp.asarray(u), jnp.asarray(m))
            ref = _mp_eval(u, m)
            errs = [np.max(np.abs(np.asarray(f) - ref[k])) for k, f in enumerate((sn, cn, dn))]
            bad = int(np.sum(np.asarray(code) != 0))
            print(f"{regime:8s} sn={errs[0]:.3e} cn={errs[1]:.3e} dn={errs[2]:.3e} non_ok={bad}")
            worst_err = max(worst_err, *errs)

    complex_flag = " --complex" if args.complex else ""
    log_run(
        "compare_mpmath",
        f"compare_mpmath.py --samples {n} --seed {args.seed} --dps {args.dps} --umax {args.umax}{complex_flag}",
        f"max_abs_err={worst_err:.3e}",
    )


if __name__ == "__main__":
    main()
