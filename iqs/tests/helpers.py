# iqs/tests/helpers.py
import numpy as np

def almost(p, q, tol=1e-6):
    return np.allclose(p, q, atol=tol, rtol=0)

def random_state(rng, n, dtype=np.complex128):
    psi = rng.standard_normal(1 << n) + 1j*rng.standard_normal(1 << n)
    psi /= np.linalg.norm(psi)
    return psi.astype(dtype)

def random_matrix(rng, dim):
    return rng.standard_normal((dim, dim)) + 1j*rng.standard_normal((dim, dim))

def random_unitary(rng, dim):
    q, r = np.linalg.qr(random_matrix(rng, dim))
    return q * (np.diag(r) / np.abs(np.diag(r)))

def dense_single(U, n, k):
    """Full 2^n x 2^n operator for U on qubit k (bit k of the index)."""
    return np.kron(np.kron(np.eye(1 << (n - k - 1)), U), np.eye(1 << k))

def dense_controlled(M, n, control, target):
    """Full operator for a 4x4 matrix in basis index 2*control_bit + target_bit."""
    N = 1 << n
    dh, dl = 1 << control, 1 << target
    full = np.zeros((N, N), dtype=np.complex128)
    for i in range(N):
        s = 2*((i >> control) & 1) + ((i >> target) & 1)
        base = i & ~(dh | dl)
        for t in range(4):
            j = base | ((t >> 1) * dh) | ((t & 1) * dl)
            full[j, i] = M[t, s]
    return full
