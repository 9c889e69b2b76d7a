"""Lock the endianness convention: LITTLE-ENDIAN, kets written qubit 0 first.

X on qubit 0 from |000> must put all amplitude at index 1, shown as |100>.
"""
import numpy as np

from svsim_engine.circuit.io import ENDIANNESS, circuit_from_dict
from svsim_engine.engine import StateVectorEngine
from svsim_engine.tests.fixtures.circuits import x_on_q0_3q


def test_endianness_is_little():
    assert ENDIANNESS == "little"


def test_x_on_q0_amplitude_at_index_1():
    n, circuit = circuit_from_dict(x_on_q0_3q())
    eng = StateVectorEngine(n)
    eng.apply_circuit(circuit)
    psi = eng.state_vector()
    assert abs(psi[1]) > 0.999
    assert abs(np.linalg.norm(psi) - 1.0) < 1e-12
    for i in range(8):
        if i != 1:
            assert abs(psi[i]) < 1e-12
    assert eng.render() == ["(1.000000 +0.000000 i) |100>"]
