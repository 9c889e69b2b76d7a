"""Dense state-vector engine (double-buffer).

The engine owns two complex128 arrays of length 2^n:
  - ``_coeff``      the current state, visible through the query methods.
  - ``_new_coeff``  scratch that a kernel accumulates the next state into.

Applying a gate fills the scratch from the current state, then swaps the two
arrays and zero-fills the new scratch.  Callers never observe a half-applied
gate.  One engine must not be used from several threads at once; separate
engines share nothing.
"""
from __future__ import annotations

import logging
import operator
from collections.abc import Iterable, Mapping

import numpy as np

from svsim_engine.basis import BasisState
from svsim_engine.circuit.gate import GateSpec
from svsim_engine.config import DEFAULT_CONFIG, EngineConfig, check_threshold
from svsim_engine.kernel import direct, insertion

log = logging.getLogger(__name__)

_KERNELS_1Q = {"direct": direct.apply_1q, "insertion": insertion.apply_1q}
_KERNELS_2Q = {"direct": direct.apply_2q, "insertion": insertion.apply_2q}


class StateVectorEngine:
    """Full state-vector simulator for a fixed register of ``nqubit`` qubits."""

    def __init__(self, nqubit: int, config: EngineConfig | None = None):
        if isinstance(nqubit, bool):
            raise ValueError(f"nqubit must be a positive int, got {nqubit!r}")
        try:
            nqubit = operator.index(nqubit)
        except TypeError:
            raise ValueError(f"nqubit must be a positive int, got {nqubit!r}") from None
        if nqubit < 1:
            raise ValueError(f"nqubit must be a positive int, got {nqubit!r}")
        self._nqubit = nqubit
        self._nbasis = 1 << nqubit
        self._config = config or DEFAULT_CONFIG
        self._apply_1q = _KERNELS_1Q[self._config.one_qubit_kernel]
        self._apply_2q = _KERNELS_2Q[self._config.two_qubit_kernel]

        self._coeff = np.zeros(self._nbasis, dtype=np.complex128)
        self._new_coeff = np.zeros(self._nbasis, dtype=np.complex128)
        self._coeff[0] = 1.0  # |0...0>
        log.debug(
            "engine: %d qubits, %d amplitudes, kernels 1q=%s 2q=%s",
            nqubit, self._nbasis,
            self._config.one_qubit_kernel, self._config.two_qubit_kernel,
        )

    # ── inspection ──────────────────────────────────────────────────

    @property
    def nqubit(self) -> int:
        return self._nqubit

    @property
    def nbasis(self) -> int:
        return self._nbasis

    @property
    def config(self) -> EngineConfig:
        return self._config

    def _index(self, basis) -> int:
        if isinstance(basis, bool):
            raise ValueError(f"basis state must be an integer index, got {basis!r}")
        try:
            i = operator.index(basis)
        except TypeError:
            raise ValueError(f"basis state must be an integer index, got {basis!r}") from None
        if i < 0 or i >= self._nbasis:
            raise ValueError(f"basis state {i} out of range [0, {self._nbasis})")
        return i

    def amplitude_of(self, basis: BasisState | int) -> complex:
        return complex(self._coeff[self._index(basis)])

    def state_vector(self) -> np.ndarray:
        """Copy of the current amplitudes, indexed by basis state."""
        return self._coeff.copy()

    def render(self, threshold: float | None = None) -> list[str]:
        """One ``(re +im i) |ket>`` term per amplitude with magnitude >= threshold."""
        if threshold is None:
            threshold = self._config.print_threshold
        else:
            check_threshold(threshold, "threshold")
        terms = []
        for i in np.flatnonzero(np.abs(self._coeff) >= threshold):
            c = self._coeff[i]
            terms.append(f"({c.real:f} {c.imag:+f} i) {BasisState(int(i)).ket(self._nqubit)}")
        return terms

    def __str__(self) -> str:
        return "\n".join(self.render())

    def __repr__(self) -> str:
        return f"StateVectorEngine(nqubit={self._nqubit})"

    # ── mutation ────────────────────────────────────────────────────

    def set_state(
        self, assignments: Mapping[BasisState | int, complex] | Iterable[tuple[BasisState | int, complex]]
    ) -> None:
        """Zero the state, then write each (basis, amplitude); later duplicates win.

        No renormalisation and no completeness check.
        """
        items = assignments.items() if isinstance(assignments, Mapping) else assignments
        resolved = [(self._index(b), complex(c)) for b, c in items]
        self._coeff.fill(0.0)
        for i, c in resolved:
            self._coeff[i] = c

    def _check_qubits(self, gate: GateSpec) -> None:
        for q in gate.qubits:
            if q >= self._nqubit:
                raise ValueError(
                    f"{gate}: qubit index out of range: {q} not in [0, {self._nqubit})"
                )

    def apply(self, gate: GateSpec) -> None:
        """Apply one gate as a single step: fill scratch, swap, clear scratch."""
        self._check_qubits(gate)
        log.debug("apply %s", gate)
        try:
            if gate.arity == 1:
                self._apply_1q(self._coeff, self._new_coeff, gate.target, gate.matrix)
            else:
                self._apply_2q(self._coeff, self._new_coeff, gate.control, gate.target, gate.matrix)
        except Exception:
            self._new_coeff.fill(0.0)
            raise
        self._coeff, self._new_coeff = self._new_coeff, self._coeff
        self._new_coeff.fill(0.0)

    def apply_circuit(self, gates: Iterable[GateSpec]) -> None:
        """Apply gates strictly in order."""
        count = 0
        for gate in gates:
            self.apply(gate)
            count += 1
        log.debug("applied %d gates", count)
