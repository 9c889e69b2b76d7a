"""Circuit dict validation and conversion to a Circuit.

Dict format::

    {"number_of_qubits": n,
     "gates": [{"qubits": [0], "gate": "H"},
               {"qubits": [0, 1], "gate": "CNOT"},
               {"qubits": [0], "gate": "RY", "params": {"theta": 0.5}}]}

For 2-qubit entries ``qubits`` is ``[control, target]``.

Endianness convention: LITTLE-ENDIAN.
  qubit 0 = bit 0 (LSB) of the state-vector index.
"""
from __future__ import annotations

import re
from typing import Any

from svsim_engine.circuit.gate import Circuit
from svsim_engine.kernel.gates import GATES_1Q, GATES_2Q, make_gate

ENDIANNESS = "little"

_TOP_KEYS = {"number_of_qubits", "gates"}
_GATE_KEYS = {"qubits", "gate", "params"}


# ── name-encoded parsing ────────────────────────────────────────────
def _parse_name_encoded(raw: str) -> tuple[str, dict]:
    """CR3 → ('CR', {'k':3}),  R3 → ('R', {'k':3}),  H → ('H', {})."""
    m = re.match(r"^(CR|R)(\d+)$", raw)
    if m:
        return m.group(1), {"k": int(m.group(2))}
    return raw, {}


# ── validation ──────────────────────────────────────────────────────
def validate_circuit_dict(d: dict[str, Any]) -> dict:
    """Validate and normalise a circuit dict.  Raises ValueError on bad input."""
    if not isinstance(d, dict):
        raise ValueError("circuit must be a dict")
    missing = _TOP_KEYS - set(d)
    if missing:
        raise ValueError(f"missing required keys: {missing}")
    extra = set(d) - _TOP_KEYS
    if extra:
        raise ValueError(f"unknown top-level keys: {extra}")

    n = d["number_of_qubits"]
    if not isinstance(n, int) or n < 1:
        raise ValueError(f"number_of_qubits must be positive int, got {n!r}")
    if not isinstance(d["gates"], list):
        raise ValueError("gates must be a list")

    return {
        "number_of_qubits": n,
        "gates": [_validate_gate(g, n, i) for i, g in enumerate(d["gates"])],
    }


def _validate_gate(g: dict, nq: int, idx: int) -> dict:
    tag = f"gate[{idx}]"
    if not isinstance(g, dict):
        raise ValueError(f"{tag}: must be a dict")
    if not {"qubits", "gate"} <= set(g):
        raise ValueError(f"{tag}: missing 'qubits' or 'gate'")
    if set(g) - _GATE_KEYS:
        raise ValueError(f"{tag}: unknown keys {set(g) - _GATE_KEYS}")

    qubits = g["qubits"]
    if not isinstance(qubits, list) or not all(isinstance(q, int) for q in qubits):
        raise ValueError(f"{tag}: qubits must be list[int]")
    for q in qubits:
        if q < 0 or q >= nq:
            raise ValueError(f"{tag}: qubit {q} out of range [0, {nq})")
    if len(set(qubits)) != len(qubits):
        raise ValueError(f"{tag}: repeated qubit in {qubits}")

    base, name_params = _parse_name_encoded(g["gate"])
    if base in GATES_1Q:
        expected_arity, (_, keys) = 1, GATES_1Q[base]
    elif base in GATES_2Q:
        expected_arity, (_, keys) = 2, GATES_2Q[base]
    else:
        raise ValueError(f"{tag}: unsupported gate '{g['gate']}'")
    if len(qubits) != expected_arity:
        raise ValueError(f"{tag}: {base} needs {expected_arity} qubit(s), got {len(qubits)}")

    merged = {**name_params, **(g.get("params") or {})}
    for key in keys:
        if key not in merged:
            raise ValueError(f"{tag}: {base} requires param '{key}'")

    return {"qubits": list(qubits), "gate": base, "params": merged}


# ── conversion ──────────────────────────────────────────────────────
def circuit_from_dict(d: dict[str, Any]) -> tuple[int, Circuit]:
    """Validate ``d`` and build its Circuit.  Returns (number_of_qubits, circuit)."""
    cd = validate_circuit_dict(d)
    circuit = Circuit()
    for g in cd["gates"]:
        circuit.add_gate(make_gate(g["gate"], g["qubits"], g["params"]))
    return cd["number_of_qubits"], circuit
