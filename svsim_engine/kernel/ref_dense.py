"""Independent in-place reference simulator (oracle for correctness).

Updates amplitude pairs/quads in place with a gather → matmul → scatter,
sharing no code with the engine kernels.
Endianness: little-endian (qubit 0 = bit 0 = LSB).
"""
from __future__ import annotations

from typing import Iterable

import numpy as np

from svsim_engine.circuit.gate import GateSpec


def _apply_1q(psi: np.ndarray, q: int, U: np.ndarray) -> None:
    N = len(psi)
    step = 1 << q
    block = step << 1
    base = np.arange(0, N, block)
    off = np.arange(step)
    idx0 = (base[:, None] + off[None, :]).ravel()
    idx1 = idx0 + step
    r = U @ np.stack([psi[idx0], psi[idx1]])
    psi[idx0], psi[idx1] = r[0], r[1]


def _apply_2q(psi: np.ndarray, qc: int, qt: int, U: np.ndarray) -> None:
    """U in big-endian sub-space: control = MSB, target = LSB."""
    idx = np.arange(len(psi))
    bases = idx[((idx >> qc) & 1 == 0) & ((idx >> qt) & 1 == 0)]
    quad = [bases, bases | (1 << qt), bases | (1 << qc), bases | (1 << qc) | (1 << qt)]
    r = U @ np.stack([psi[i] for i in quad])  # (4, M)
    for row, i in zip(r, quad):
        psi[i] = row


def simulate(nqubit: int, gates: Iterable[GateSpec], psi: np.ndarray | None = None) -> np.ndarray:
    """Run gates from |0...0> (or a copy of ``psi``); return the final state."""
    if psi is None:
        psi = np.zeros(1 << nqubit, dtype=np.complex128)
        psi[0] = 1.0
    else:
        psi = np.array(psi, dtype=np.complex128)
    for g in gates:
        if g.arity == 1:
            _apply_1q(psi, g.target, g.matrix)
        else:
            _apply_2q(psi, g.control, g.target, g.matrix)
    return psi
