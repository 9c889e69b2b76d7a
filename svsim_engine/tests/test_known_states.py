"""Engine vs known vectors and vs the ref_dense oracle."""
import numpy as np
import pytest

from svsim_engine.circuit.io import circuit_from_dict
from svsim_engine.config import EngineConfig
from svsim_engine.engine import StateVectorEngine
from svsim_engine.kernel.ref_dense import simulate
from svsim_engine.tests.fixtures.circuits import bell_2q, cr3_encoded, ghz, mixed, qft, ry_theta

S2 = 1.0 / np.sqrt(2.0)

KERNEL_CONFIGS = [
    EngineConfig(one_qubit_kernel="direct", two_qubit_kernel="direct"),
    EngineConfig(one_qubit_kernel="insertion", two_qubit_kernel="insertion"),
]


def _run(cd, config=None):
    n, circuit = circuit_from_dict(cd)
    eng = StateVectorEngine(n, config)
    eng.apply_circuit(circuit)
    return eng


def test_ghz3():
    psi = _run(ghz(3)).state_vector()
    # (|000> + |111>)/√2  →  indices 0 and 7
    assert abs(psi[0] - S2) < 1e-12
    assert abs(psi[7] - S2) < 1e-12
    assert abs(np.linalg.norm(psi) - 1.0) < 1e-12


def test_ghz_render():
    assert _run(ghz(3)).render() == [
        "(0.707107 +0.000000 i) |000>",
        "(0.707107 +0.000000 i) |111>",
    ]


def test_hadamard_all():
    """H on all qubits → uniform superposition."""
    n = 4
    cd = {
        "number_of_qubits": n,
        "gates": [{"qubits": [i], "gate": "H"} for i in range(n)],
    }
    psi = _run(cd).state_vector()
    np.testing.assert_allclose(np.abs(psi), 1.0 / 2 ** (n / 2), atol=1e-12)


@pytest.mark.parametrize("n", [2, 3, 4, 5])
def test_norm_preserved_qft(n):
    psi = _run(qft(n)).state_vector()
    assert abs(np.linalg.norm(psi) - 1.0) < 1e-10


@pytest.mark.parametrize(
    "circ_fn",
    [bell_2q, ry_theta, cr3_encoded, lambda: ghz(5), lambda: qft(4),
     lambda: mixed(3), lambda: mixed(6, seed=11, depth=60)],
)
@pytest.mark.parametrize("config", KERNEL_CONFIGS, ids=["direct", "insertion"])
def test_engine_matches_ref(circ_fn, config):
    cd = circ_fn()
    n, circuit = circuit_from_dict(cd)
    ref = simulate(n, circuit)
    got = _run(cd, config).state_vector()
    np.testing.assert_allclose(got, ref, atol=1e-10)


def test_ref_from_prepared_state():
    """Engine and oracle agree when starting from a set_state superposition."""
    n, circuit = circuit_from_dict(mixed(4, seed=3))
    rng = np.random.default_rng(0)
    start = rng.normal(size=16) + 1j * rng.normal(size=16)
    eng = StateVectorEngine(n)
    eng.set_state(enumerate(start))
    eng.apply_circuit(circuit)
    np.testing.assert_allclose(eng.state_vector(), simulate(n, circuit, start), atol=1e-10)
