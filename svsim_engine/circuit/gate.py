"""Gate descriptors and the circuit aggregate.

A 4×4 two-qubit matrix is indexed by the joint (control, target) value in
big-endian sub-space order, see ``TWO_QUBIT_BASIS``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

import numpy as np

# row/col index → (control bit, target bit)
TWO_QUBIT_BASIS = ((0, 0), (0, 1), (1, 0), (1, 1))


@dataclass(frozen=True, eq=False)
class GateSpec:
    """Target qubit, optional control qubit and the gate's dense matrix.

    The matrix is treated as an opaque linear map; it is not checked for
    unitarity.
    """

    target: int
    matrix: np.ndarray
    control: int | None = None
    name: str = "U"

    def __post_init__(self):
        U = np.array(self.matrix, dtype=np.complex128)
        U.setflags(write=False)
        object.__setattr__(self, "matrix", U)
        if self.target < 0 or (self.control is not None and self.control < 0):
            raise ValueError(f"{self.name}: qubit indices must be non-negative")
        if self.control is None:
            if U.shape != (2, 2):
                raise ValueError(f"{self.name}: 1-qubit gate needs a 2x2 matrix, got {U.shape}")
        else:
            if U.shape != (4, 4):
                raise ValueError(f"{self.name}: 2-qubit gate needs a 4x4 matrix, got {U.shape}")
            if self.control == self.target:
                raise ValueError(f"{self.name}: control and target must differ, both {self.target}")

    @property
    def arity(self) -> int:
        return 1 if self.control is None else 2

    @property
    def qubits(self) -> tuple[int, ...]:
        if self.control is None:
            return (self.target,)
        return (self.control, self.target)

    def __str__(self) -> str:
        if self.control is None:
            return f"{self.name}{self.target}"
        return f"{self.name}{self.control}_{self.target}"


@dataclass
class Circuit:
    """Ordered sequence of gates."""

    gates: list[GateSpec] = field(default_factory=list)

    def add_gate(self, gate: GateSpec) -> None:
        self.gates.append(gate)

    def extend(self, gates: Iterable[GateSpec]) -> None:
        self.gates.extend(gates)

    def __iter__(self) -> Iterator[GateSpec]:
        return iter(self.gates)

    def __len__(self) -> int:
        return len(self.gates)

    @property
    def nqubits_required(self) -> int:
        return max((q for g in self.gates for q in g.qubits), default=-1) + 1

    def describe(self) -> list[str]:
        return [str(g) for g in self.gates]
