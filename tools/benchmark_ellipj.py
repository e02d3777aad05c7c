from __future__ import annotations

import argparse
import time

import jax.numpy as jnp
import numpy as np

from ellipjax import sncndn
from ellipjax import sncndn_complex

from _run_log import log_run


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark the jitted sn, cn, dn batch kernels.")
    parser.add_argument("--samples", type=int, default=20000)
    parser.add_argument("--which", type=str, default="real", choices=["real", "complex"])
    parser.add_argument("--prec-bits", type=int, default=53)
    parser.add_argument("--repeat", type=int, default=5)
    args = parser.parse_args()

    rng = np.random.default_rng(2143)
    m = jnp.asarray(rng.uniform(0.0, 1.0, size=args.samples))
    if args.which == "real":
        u = jnp.asarray(rng.uniform(-10.0, 10.0, size=args.samples))
        fn = sncndn.sncndn_real_batch_prec_jit
    else:
        u = jnp.asarray(rng.uniform(-3.0, 3.0, size=args.samples) + 1j * rng.uniform(-1.0, 1.0, size=args.samples))
        fn = sncndn_complex.sncndn_complex_batch_prec_jit

    fn(u, m, prec_bits=args.prec_bits)[0].block_until_ready()
    best = float("inf")
    for _ in range(args.repeat):
        t0 = time.perf_counter()
        out = fn(u, m, prec_bits=args.prec_bits)
        out[0].block_until_ready()
        best = min(best, time.perf_counter() - t0)
    ms = best * 1000.0

    print(f"ellipj ({args.which}) | samples={args.samples} | prec_bits={args.prec_bits} | time_ms={ms:.2f}")
    log_run(
        "benchmark_ellipj",
        f"benchmark_ellipj.py --samples {args.samples} --which {args.which} --prec-bits {args.prec_bits}",
        f"time_ms={ms:.2f}",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
