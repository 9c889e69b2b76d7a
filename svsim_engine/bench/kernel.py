"""Benchmark: direct vs insertion kernel wall time."""
from __future__ import annotations

import logging
import time

import numpy as np

from svsim_engine.kernel import direct, insertion
from svsim_engine.kernel import gates as gmod
from svsim_engine.utils.logging_config import setup_logging

log = logging.getLogger(__name__)


def _random_state(n: int, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    psi = rng.normal(size=1 << n) + 1j * rng.normal(size=1 << n)
    return psi / np.linalg.norm(psi)


def _bench_1q(apply_1q, coeff, target, U, reps=10):
    new_coeff = np.zeros_like(coeff)
    apply_1q(coeff, new_coeff, target, U)  # warm up
    t0 = time.perf_counter()
    for _ in range(reps):
        new_coeff.fill(0.0)
        apply_1q(coeff, new_coeff, target, U)
    return (time.perf_counter() - t0) / reps


def _bench_2q(apply_2q, coeff, control, target, U, reps=10):
    new_coeff = np.zeros_like(coeff)
    apply_2q(coeff, new_coeff, control, target, U)
    t0 = time.perf_counter()
    for _ in range(reps):
        new_coeff.fill(0.0)
        apply_2q(coeff, new_coeff, control, target, U)
    return (time.perf_counter() - t0) / reps


def bench_kernel(n: int = 16) -> dict:
    coeff = _random_state(n)
    results = {}
    print(f"n = {n}  ({(1 << n) * 16 / 1e6:.1f} MB per buffer)")
    print(f"{'kernel':<12} {'gate':<8} {'ms':>10}")
    print("-" * 32)
    for name, mod in [("direct", direct), ("insertion", insertion)]:
        for g in ["H", "T"]:
            dt = _bench_1q(mod.apply_1q, coeff, n // 2, gmod.gate_matrix(g))
            results[(name, g)] = dt
            print(f"{name:<12} {g:<8} {dt * 1e3:>10.3f}")
        for g in ["CNOT", "CZ"]:
            dt = _bench_2q(mod.apply_2q, coeff, 0, n - 1, gmod.gate_matrix(g))
            results[(name, g)] = dt
            print(f"{name:<12} {g:<8} {dt * 1e3:>10.3f}")
    print()
    log.info("benchmarked n=%d", n)
    return results


if __name__ == "__main__":
    setup_logging()
    for n in [12, 16, 20]:
        bench_kernel(n)
