"""Standard gate matrices and GateSpec factories.

1-qubit matrices are 2×2 complex128.  2-qubit matrices are 4×4 complex128
indexed by (control, target) in the order of ``TWO_QUBIT_BASIS``:
row/col 0 → |c=0,t=0>, 1 → |0,1>, 2 → |1,0>, 3 → |1,1>.
"""
from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from svsim_engine.circuit.gate import GateSpec

_S2 = 1.0 / np.sqrt(2.0)


def _mat(*rows):
    return np.array(rows, dtype=np.complex128)


def _controlled(U: np.ndarray) -> np.ndarray:
    """Embed a 2×2 U as the control=1 block of a 4×4 matrix."""
    C = np.eye(4, dtype=np.complex128)
    C[2:, 2:] = U
    return C


# ── 1-qubit ─────────────────────────────────────────────────────────
def I():
    return _mat([1, 0], [0, 1])

def H():
    return _mat([_S2, _S2], [_S2, -_S2])

def X():
    return _mat([0, 1], [1, 0])

def Y():
    return _mat([0, -1j], [1j, 0])

def Z():
    return _mat([1, 0], [0, -1])

def S():
    return _mat([1, 0], [0, 1j])

def T():
    return _mat([1, 0], [0, np.exp(1j * np.pi / 4)])

def RY(theta: float):
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return _mat([c, -s], [s, c])

def R(k: int):
    return _mat([1, 0], [0, np.exp(2j * np.pi / 2**k)])

def G(p: int):
    a = np.sqrt(1.0 / p)
    b = np.sqrt(1.0 - 1.0 / p)
    return _mat([a, -b], [b, a])


# ── 2-qubit ─────────────────────────────────────────────────────────
def CNOT():
    return _controlled(X())

def CY():
    return _controlled(Y())

def CZ():
    return _controlled(Z())

def SWAP():
    return _mat([1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1])

def CR(k: int):
    return _controlled(R(k))

def CU(U: np.ndarray, exponent: int):
    return _controlled(np.linalg.matrix_power(np.asarray(U, dtype=np.complex128), exponent))


# name → (factory, ordered param names)
GATES_1Q: dict[str, tuple[Callable[..., np.ndarray], tuple[str, ...]]] = {
    "I": (I, ()), "H": (H, ()), "X": (X, ()), "Y": (Y, ()),
    "Z": (Z, ()), "S": (S, ()), "T": (T, ()),
    "RY": (RY, ("theta",)), "R": (R, ("k",)), "G": (G, ("p",)),
}
GATES_2Q: dict[str, tuple[Callable[..., np.ndarray], tuple[str, ...]]] = {
    "CNOT": (CNOT, ()), "CY": (CY, ()), "CZ": (CZ, ()), "SWAP": (SWAP, ()),
    "CR": (CR, ("k",)), "CU": (CU, ("U", "exponent")),
}


def gate_matrix(name: str, params: dict | None = None) -> np.ndarray:
    """Return the matrix for a named gate."""
    entry = GATES_1Q.get(name) or GATES_2Q.get(name)
    if entry is None:
        raise ValueError(f"unknown gate {name}")
    factory, keys = entry
    params = params or {}
    missing = [k for k in keys if k not in params]
    if missing:
        raise ValueError(f"gate {name} requires params {missing}")
    return factory(*(params[k] for k in keys))


def is_2q(name: str) -> bool:
    return name in GATES_2Q


def make_gate(name: str, qubits: Sequence[int], params: dict | None = None) -> GateSpec:
    """Build a GateSpec.  For 2-qubit gates qubits = (control, target)."""
    U = gate_matrix(name, params)
    expected = 2 if is_2q(name) else 1
    if len(qubits) != expected:
        raise ValueError(f"{name} needs {expected} qubit(s), got {len(qubits)}")
    # CR3, R2: keep the name-encoded form in listings
    label = f"{name}{params['k']}" if params and "k" in params else name
    if expected == 1:
        return GateSpec(target=qubits[0], matrix=U, name=label)
    return GateSpec(target=qubits[1], matrix=U, control=qubits[0], name=label)
