# iqs/kernel.py
"""
Single-qubit update kernels.

Every pair of amplitudes whose indices differ only in bit ``k`` is mapped
through the 2x2 matrix::

    a0' = M[0,0]*a0 + M[0,1]*a1
    a1' = M[1,0]*a0 + M[1,1]*a1

The vector is walked in chunks of ``2**(k+1)``; the first half of a chunk
(bit k = 0) pairs element-wise with the second half (bit k = 1). The three
variants only differ in what runs in parallel:

* ``single_serial``     one thread
* ``single_par_outer``  chunks in parallel
* ``single_par_inner``  chunks in sequence, tiles of each half in parallel

Parallel workers always write disjoint slices, so numba's fork-join is the
only synchronisation.
"""
from contextlib import contextmanager
from typing import Optional

import numpy as np
from numba import config as numba_config
from numba import get_num_threads, njit, prange, set_num_threads

from .config import VARIANT_NAMES
from .errors import BufferSizeError, InvalidConfiguration, QubitIndexError
from .gates import as_matrix
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TILE = 16

# ---------- low-level kernels (Numba JIT) ----------

@njit(fastmath=True)
def _single_serial_kernel(psi, U2, k):
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    for base in range(0, N, block):
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            a1 = psi[i1]
            psi[i0] = U2[0, 0]*a0 + U2[0, 1]*a1
            psi[i1] = U2[1, 0]*a0 + U2[1, 1]*a1

@njit(parallel=True, fastmath=True)
def _single_outer_kernel(psi, U2, k):
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    nblocks = N // block
    for b in prange(nblocks):
        base = b * block
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            a1 = psi[i1]
            psi[i0] = U2[0, 0]*a0 + U2[0, 1]*a1
            psi[i1] = U2[1, 0]*a0 + U2[1, 1]*a1

@njit(parallel=True, fastmath=True)
def _single_inner_kernel(psi, U2, k, tile):
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    # last tile of a half may be short when tile does not divide 2**k
    ntiles = (step + tile - 1) // tile
    for base in range(0, N, block):
        for t in prange(ntiles):
            lo = t * tile
            hi = min(lo + tile, step)
            for off in range(lo, hi):
                i0 = base + off
                i1 = i0 + step
                a0 = psi[i0]
                a1 = psi[i1]
                psi[i0] = U2[0, 0]*a0 + U2[0, 1]*a1
                psi[i1] = U2[1, 0]*a0 + U2[1, 1]*a1

# ---------- checked entry points ----------

def _prepare(k, matrix, state: np.ndarray) -> np.ndarray:
    """Validate everything up front and return the matrix in the state's dtype."""
    if not isinstance(state, np.ndarray) or state.ndim != 1:
        raise BufferSizeError("state must be a 1-D numpy array")
    if state.dtype not in (np.complex64, np.complex128):
        raise BufferSizeError(f"state must be complex64 or complex128, got {state.dtype}")
    if not state.flags.c_contiguous or not state.flags.writeable:
        raise BufferSizeError("state must be a writeable contiguous array")
    N = state.shape[0]
    if N == 0 or N & (N - 1):
        raise BufferSizeError(f"state length {N} is not a power of two")
    if k < 0:
        raise QubitIndexError(f"qubit index must be >= 0, got {k}")
    if N < (1 << (k + 1)):
        raise QubitIndexError(f"qubit {k} out of range for a {N.bit_length() - 1}-qubit state")
    return np.ascontiguousarray(as_matrix(matrix, 2), dtype=state.dtype)

def single_serial(k: int, matrix, state: np.ndarray) -> None:
    """Apply ``matrix`` to qubit ``k`` of ``state`` in place on one thread."""
    U2 = _prepare(k, matrix, state)
    _single_serial_kernel(state, U2, int(k))

def single_par_outer(k: int, matrix, state: np.ndarray) -> None:
    """Same as ``single_serial``, with chunks of ``2**(k+1)`` processed in parallel."""
    U2 = _prepare(k, matrix, state)
    _single_outer_kernel(state, U2, int(k))

def single_par_inner(k: int, matrix, state: np.ndarray, tile: int = DEFAULT_TILE) -> None:
    """Same as ``single_serial``, with tiles of ``tile`` pairs processed in parallel inside each chunk."""
    if int(tile) < 1:
        raise InvalidConfiguration(f"tile must be >= 1, got {tile}")
    U2 = _prepare(k, matrix, state)
    _single_inner_kernel(state, U2, int(k), int(tile))

VARIANTS = {
    "serial": single_serial,
    "outer": single_par_outer,
    "inner": single_par_inner,
}

# ---------- executor ----------

def set_threads(n: int) -> int:
    """Set the numba pool size, clamped to the pool numba was started with."""
    requested = int(n)
    n = max(1, min(requested, numba_config.NUMBA_NUM_THREADS))
    if n != requested:
        logger.debug("requested %d threads, numba pool allows %d", requested, n)
    set_num_threads(n)
    return n

@contextmanager
def thread_limit(n: Optional[int]):
    """Run the body on ``n`` numba threads, then put the previous count back."""
    if n is None:
        yield get_num_threads()
        return
    previous = get_num_threads()
    try:
        yield set_threads(n)
    finally:
        set_num_threads(previous)


class Executor:
    """
    The fork-join resource a Register runs its single-qubit gates on:
    one kernel variant plus the numba thread count it uses.
    """

    def __init__(self, variant: str = "outer", tile: int = DEFAULT_TILE, num_threads: Optional[int] = None):
        if variant not in VARIANT_NAMES:
            raise InvalidConfiguration(f"unknown kernel variant {variant!r}; expected one of {VARIANT_NAMES}")
        if int(tile) < 1:
            raise InvalidConfiguration(f"tile must be >= 1, got {tile}")
        if num_threads is not None and int(num_threads) < 1:
            raise InvalidConfiguration(f"num_threads must be >= 1, got {num_threads}")
        self.variant = variant
        self.tile = int(tile)
        self.num_threads = None if num_threads is None else int(num_threads)

    @classmethod
    def from_config(cls, config) -> "Executor":
        return cls(config.variant, config.tile, config.num_threads)

    def __call__(self, k: int, matrix, state: np.ndarray) -> None:
        threads = None if self.variant == "serial" else self.num_threads
        with thread_limit(threads):
            if self.variant == "inner":
                single_par_inner(k, matrix, state, tile=self.tile)
            else:
                VARIANTS[self.variant](k, matrix, state)

    def __repr__(self):
        return f"Executor(variant={self.variant!r}, tile={self.tile}, num_threads={self.num_threads})"
