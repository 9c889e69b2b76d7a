"""Direct and insertion kernels must produce identical scratch arrays."""
import numpy as np
import pytest

from svsim_engine.kernel import direct, insertion
from svsim_engine.kernel import gates as gmod
from svsim_engine.kernel.ref_dense import _apply_1q, _apply_2q


def _random_state(n, seed):
    rng = np.random.default_rng(seed)
    psi = rng.normal(size=1 << n) + 1j * rng.normal(size=1 << n)
    return psi / np.linalg.norm(psi)


def _random_unitary(dim, seed):
    rng = np.random.default_rng(seed)
    Z = rng.normal(size=(dim, dim)) + 1j * rng.normal(size=(dim, dim))
    Q, R = np.linalg.qr(Z)
    return Q * (np.diag(R) / np.abs(np.diag(R)))


MATRICES_1Q = [gmod.I(), gmod.H(), gmod.X(), gmod.Y(), gmod.T(), gmod.RY(0.3),
               _random_unitary(2, 1), _random_unitary(2, 2)]


def _run_1q(kernel, coeff, target, U):
    new_coeff = np.zeros_like(coeff)
    kernel(coeff, new_coeff, target, U)
    return new_coeff


def _run_2q(kernel, coeff, control, target, U):
    new_coeff = np.zeros_like(coeff)
    kernel(coeff, new_coeff, control, target, U)
    return new_coeff


@pytest.mark.parametrize("n", range(1, 11))
def test_1q_kernels_identical(n):
    coeff = _random_state(n, seed=n)
    for target in range(n):
        for U in MATRICES_1Q:
            a = _run_1q(direct.apply_1q, coeff, target, U)
            b = _run_1q(insertion.apply_1q, coeff, target, U)
            np.testing.assert_array_equal(a, b)


@pytest.mark.parametrize("n", [2, 3, 5, 7])
def test_2q_kernels_identical(n):
    coeff = _random_state(n, seed=100 + n)
    mats = [gmod.CNOT(), gmod.SWAP(), gmod.CR(3), _random_unitary(4, n)]
    for control in range(n):
        for target in range(n):
            if control == target:
                continue
            for U in mats:
                a = _run_2q(direct.apply_2q, coeff, control, target, U)
                b = _run_2q(insertion.apply_2q, coeff, control, target, U)
                np.testing.assert_array_equal(a, b)


@pytest.mark.parametrize("kernel", [direct.apply_1q, insertion.apply_1q])
def test_1q_kernel_matches_ref(kernel):
    n = 5
    coeff = _random_state(n, seed=3)
    for target in range(n):
        U = _random_unitary(2, target)
        expected = coeff.copy()
        _apply_1q(expected, target, U)
        np.testing.assert_allclose(_run_1q(kernel, coeff, target, U), expected, atol=1e-12)


@pytest.mark.parametrize("kernel", [direct.apply_2q, insertion.apply_2q])
def test_2q_kernel_matches_ref(kernel):
    n = 4
    coeff = _random_state(n, seed=4)
    U = _random_unitary(4, 9)
    for control, target in [(0, 1), (1, 0), (0, 3), (3, 1), (2, 3)]:
        expected = coeff.copy()
        _apply_2q(expected, control, target, U)
        np.testing.assert_allclose(
            _run_2q(kernel, coeff, control, target, U), expected, atol=1e-12
        )


def test_kernels_do_not_touch_source():
    coeff = _random_state(4, seed=5)
    before = coeff.copy()
    _run_1q(direct.apply_1q, coeff, 2, gmod.H())
    _run_1q(insertion.apply_1q, coeff, 2, gmod.H())
    _run_2q(direct.apply_2q, coeff, 0, 3, gmod.CNOT())
    _run_2q(insertion.apply_2q, coeff, 3, 0, gmod.CNOT())
    np.testing.assert_array_equal(coeff, before)


def test_identity_is_exact():
    coeff = _random_state(6, seed=6)
    for kernel in (direct.apply_1q, insertion.apply_1q):
        for target in range(6):
            np.testing.assert_array_equal(_run_1q(kernel, coeff, target, gmod.I()), coeff)
