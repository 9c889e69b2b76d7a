"""Direct kernels: scan the full basis once per matrix element.

Each (i, j) element of the gate matrix is one pass over all 2^n indices:
every source index J whose gate-qubit bits equal j sends U[i, j] * coeff[J]
to the index I obtained by overwriting those bits with i.

Kernels read ``coeff`` and accumulate into ``new_coeff`` (zero-filled by the
caller).  Inside one pass the destination indices are distinct, so the
fancy-indexed ``+=`` is exact.
"""
from __future__ import annotations

import numpy as np

from svsim_engine.basis import get_bit, set_bit
from svsim_engine.circuit.gate import TWO_QUBIT_BASIS


def apply_1q(coeff: np.ndarray, new_coeff: np.ndarray, target: int, U: np.ndarray) -> None:
    basis = np.arange(len(coeff))
    for i in range(2):
        for j in range(2):
            basis_J = basis[get_bit(basis, target) == j]
            basis_I = set_bit(basis_J, target, i)
            new_coeff[basis_I] += U[i, j] * coeff[basis_J]


def apply_2q(
    coeff: np.ndarray, new_coeff: np.ndarray, control: int, target: int, U: np.ndarray
) -> None:
    basis = np.arange(len(coeff))
    for i, (i_c, i_t) in enumerate(TWO_QUBIT_BASIS):
        for j, (j_c, j_t) in enumerate(TWO_QUBIT_BASIS):
            mask = (get_bit(basis, control) == j_c) & (get_bit(basis, target) == j_t)
            basis_J = basis[mask]
            basis_I = set_bit(set_bit(basis_J, control, i_c), target, i_t)
            new_coeff[basis_I] += U[i, j] * coeff[basis_J]
