# iqs/tests/test_gates.py
import numpy as np
import pytest

from iqs import gates as G
from iqs.errors import InvalidMatrix
from iqs.gates import Matrix

TOL = 1e-5

def test_zeros():
    for dim in (2, 4):
        m = Matrix.zeros(dim, dtype=np.complex64)
        assert m.dim == dim
        assert m.dtype == np.complex64
        assert not m.array.any()

def test_bad_dimensions_rejected():
    with pytest.raises(InvalidMatrix):
        Matrix.zeros(3)
    with pytest.raises(InvalidMatrix):
        Matrix(np.eye(8))
    with pytest.raises(InvalidMatrix):
        Matrix([[1, 0, 0], [0, 1, 0]])
    with pytest.raises(ValueError):
        Matrix([1, 0])

def test_pauli_and_identity():
    assert G.I() == Matrix([[1, 0], [0, 1]])
    assert G.X() == Matrix([[0, 1], [1, 0]])
    assert G.Y() == Matrix([[0, -1j], [1j, 0]])
    assert G.Z() == Matrix([[1, 0], [0, -1]])

def test_hadamard():
    v = np.sqrt(0.5)
    expect = Matrix([[1, 1], [1, -1]], dtype=np.complex64) * v
    assert G.H(np.complex64).allclose(expect, atol=TOL)
    assert G.H().allclose([[v, v], [v, -v]], atol=1e-12)

def test_scalar_multiply():
    m = Matrix([[1, 2], [3, 4j]])
    assert (m * 2).allclose([[2, 4], [6, 8j]])
    assert (2 * m).allclose([[2, 4], [6, 8j]])
    m *= 0.5
    assert m.allclose([[0.5, 1], [1.5, 2j]])

def test_phase_family():
    assert G.PHASE(0.3).allclose([[1, 0], [0, np.exp(0.3j)]])
    assert G.S().allclose([[1, 0], [0, 1j]], atol=1e-12)
    assert G.SDG().allclose([[1, 0], [0, -1j]], atol=1e-12)
    assert G.T().allclose([[1, 0], [0, np.exp(1j*np.pi/4)]])
    assert G.TDG().allclose([[1, 0], [0, np.exp(-1j*np.pi/4)]])
    assert (G.S() @ G.S()).allclose(G.Z(), atol=1e-12)
    assert (G.T() @ G.T()).allclose(G.S(), atol=1e-12)
    assert (G.S() @ G.SDG()).allclose(G.I(), atol=1e-12)

def test_controlled_layout():
    u = Matrix([[1, 2], [3, 4]])
    cu = G.controlled(u)
    expect = np.eye(4, dtype=complex)
    expect[2:, 2:] = [[1, 2], [3, 4]]
    assert cu.dim == 4
    assert cu.allclose(expect)

def test_cx_cy_cz():
    cx = np.array([[1, 0, 0, 0],
                   [0, 1, 0, 0],
                   [0, 0, 0, 1],
                   [0, 0, 1, 0]])
    cy = np.array([[1, 0, 0, 0],
                   [0, 1, 0, 0],
                   [0, 0, 0, -1j],
                   [0, 0, 1j, 0]])
    cz = np.diag([1, 1, 1, -1])
    assert G.CX().allclose(cx)
    assert G.CNOT() == G.CX()
    assert G.CY().allclose(cy)
    assert G.CZ().allclose(cz)

def test_swap():
    expect = np.array([[1, 0, 0, 0],
                       [0, 0, 1, 0],
                       [0, 1, 0, 0],
                       [0, 0, 0, 1]])
    assert G.SWAP().allclose(expect)

def test_constructors_are_fresh():
    a = G.X()
    a[0, 0] = 5
    assert G.X()[0, 0] == 0

def test_named_gates_unitary():
    for m in (G.I(), G.X(), G.Y(), G.Z(), G.H(), G.S(), G.T(), G.RX(0.7), G.RZ(1.1),
              G.CX(), G.CY(), G.CZ(), G.SWAP()):
        a = m.array
        assert np.allclose(a @ a.conj().T, np.eye(m.dim), atol=1e-12)
