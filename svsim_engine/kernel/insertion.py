"""Insertion kernels: iterate only over the qubits the gate does not touch.

For a 1-qubit gate on ``target`` the index K runs over [0, 2^(n-1)), the
configurations of the other n-1 qubits.  ``insert_bit(K, target)`` re-expands
K to an n-qubit index with a 0 placeholder at ``target``; setting that bit
to i or j yields the destination and source indices.  Half the iterations of
the direct kernel, and the same contributions in the same order per
destination, so the results are bit-for-bit identical.
"""
from __future__ import annotations

import numpy as np

from svsim_engine.basis import insert_bit, set_bit
from svsim_engine.circuit.gate import TWO_QUBIT_BASIS


def apply_1q(coeff: np.ndarray, new_coeff: np.ndarray, target: int, U: np.ndarray) -> None:
    basis_K = insert_bit(np.arange(len(coeff) >> 1), target)
    for i in range(2):
        basis_I = set_bit(basis_K, target, i)
        for j in range(2):
            basis_J = set_bit(basis_K, target, j)
            new_coeff[basis_I] += U[i, j] * coeff[basis_J]


def apply_2q(
    coeff: np.ndarray, new_coeff: np.ndarray, control: int, target: int, U: np.ndarray
) -> None:
    lo, hi = sorted((control, target))
    # insert the lower position first so the higher one is still correct
    basis_K = insert_bit(insert_bit(np.arange(len(coeff) >> 2), lo), hi)
    for i, (i_c, i_t) in enumerate(TWO_QUBIT_BASIS):
        basis_I = set_bit(set_bit(basis_K, control, i_c), target, i_t)
        for j, (j_c, j_t) in enumerate(TWO_QUBIT_BASIS):
            basis_J = set_bit(set_bit(basis_K, control, j_c), target, j_t)
            new_coeff[basis_I] += U[i, j] * coeff[basis_J]
