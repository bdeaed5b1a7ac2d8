# iqs/gates.py
"""
Gate matrices.

``Matrix`` is a square complex array whose dimension (2 for one qubit, 4 for
a control/target pair) is checked when it is built. Two-qubit matrices use
the basis order 00, 01, 10, 11 with the index ``2*control_bit + target_bit``.
"""
import numpy as np

from .errors import InvalidMatrix

DIMS = (2, 4)


class Matrix:
    __slots__ = ("array",)

    def __init__(self, values, dtype=np.complex128):
        arr = np.array(values, dtype=dtype)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1] or arr.shape[0] not in DIMS:
            raise InvalidMatrix(f"expected a 2x2 or 4x4 matrix, got shape {arr.shape}")
        self.array = arr

    @classmethod
    def zeros(cls, dim: int, dtype=np.complex128) -> "Matrix":
        if dim not in DIMS:
            raise InvalidMatrix(f"matrix dimension must be 2 or 4, got {dim}")
        return cls(np.zeros((dim, dim)), dtype=dtype)

    @property
    def dim(self) -> int:
        return self.array.shape[0]

    @property
    def dtype(self):
        return self.array.dtype

    def __getitem__(self, idx):
        return self.array[idx]

    def __setitem__(self, idx, value):
        self.array[idx] = value

    def __mul__(self, scalar):
        if isinstance(scalar, Matrix):
            return NotImplemented
        return Matrix(self.array * scalar, dtype=self.dtype)

    __rmul__ = __mul__

    def __imul__(self, scalar):
        self.array *= scalar
        return self

    def __matmul__(self, other: "Matrix") -> "Matrix":
        return Matrix(self.array @ other.array, dtype=np.result_type(self.dtype, other.dtype))

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.dim == other.dim and bool(np.array_equal(self.array, other.array))

    def allclose(self, other, atol: float = 1e-6) -> bool:
        other = other.array if isinstance(other, Matrix) else np.asarray(other)
        return self.array.shape == other.shape and bool(np.allclose(self.array, other, atol=atol, rtol=0))

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self.array
        return self.array.astype(dtype)

    def __repr__(self):
        return f"Matrix(dim={self.dim}, dtype={self.dtype}, {self.array.tolist()})"


def as_matrix(m, dim: int) -> np.ndarray:
    """Accept a Matrix or array-like and check it is ``dim`` x ``dim``."""
    arr = m.array if isinstance(m, Matrix) else np.asarray(m)
    if arr.shape != (dim, dim):
        raise InvalidMatrix(f"expected a {dim}x{dim} matrix, got shape {arr.shape}")
    return arr


# ---------------------------- single-qubit ----------------------------

def I(dtype=np.complex128) -> Matrix:
    return Matrix([[1, 0],
                   [0, 1]], dtype=dtype)

def X(dtype=np.complex128) -> Matrix:
    return Matrix([[0, 1],
                   [1, 0]], dtype=dtype)

def Y(dtype=np.complex128) -> Matrix:
    return Matrix([[0, -1j],
                   [1j, 0]], dtype=dtype)

def Z(dtype=np.complex128) -> Matrix:
    return Matrix([[1, 0],
                   [0, -1]], dtype=dtype)

def H(dtype=np.complex128) -> Matrix:
    return Matrix([[1, 1],
                   [1, -1]], dtype=dtype) * np.sqrt(0.5)

def PHASE(theta: float, dtype=np.complex128) -> Matrix:
    """diag(1, e^{i theta})"""
    return Matrix([[1, 0],
                   [0, np.exp(1j*theta)]], dtype=dtype)

def S(dtype=np.complex128) -> Matrix:
    return PHASE(np.pi/2, dtype=dtype)

def SDG(dtype=np.complex128) -> Matrix:
    return PHASE(-np.pi/2, dtype=dtype)

def T(dtype=np.complex128) -> Matrix:
    return PHASE(np.pi/4, dtype=dtype)

def TDG(dtype=np.complex128) -> Matrix:
    return PHASE(-np.pi/4, dtype=dtype)

def RZ(theta: float, dtype=np.complex128) -> Matrix:
    return Matrix([[np.exp(-0.5j*theta), 0],
                   [0, np.exp(+0.5j*theta)]], dtype=dtype)

def RX(theta: float, dtype=np.complex128) -> Matrix:
    c = np.cos(theta/2.0)
    s = -1j*np.sin(theta/2.0)
    return Matrix([[c, s],
                   [s, c]], dtype=dtype)


# ----------------------------- two-qubit ------------------------------

def controlled(u: Matrix) -> Matrix:
    """Identity on the control=0 block, ``u`` on the control=1 block."""
    u2 = as_matrix(u, 2)
    mat = Matrix(np.eye(4), dtype=np.result_type(u2.dtype, np.complex64))
    mat[2:, 2:] = u2
    return mat

def CX(dtype=np.complex128) -> Matrix:
    return controlled(X(dtype))

def CNOT(dtype=np.complex128) -> Matrix:
    return CX(dtype)

def CY(dtype=np.complex128) -> Matrix:
    return controlled(Y(dtype))

def CZ(dtype=np.complex128) -> Matrix:
    return controlled(Z(dtype))

def SWAP(dtype=np.complex128) -> Matrix:
    # exchanges |01> and |10>, fixes |00> and |11>
    mat = Matrix.zeros(4, dtype=dtype)
    mat[0, 0] = 1
    mat[1, 2] = 1
    mat[2, 1] = 1
    mat[3, 3] = 1
    return mat
