# iqs/register.py
"""
The quantum register: a fixed number of qubits and the dense vector of
their ``2**n`` amplitudes (bit k of an index is qubit k).

Single-qubit operators go to the register's kernel executor. Controlled
operators are applied here: every basis index whose control and target bits
are both 0 is produced by inserting two zero bits into an (n-2)-bit counter,
and the four siblings of that index are gathered, multiplied by the 4x4
matrix and scattered back.
"""
from typing import Iterable, Optional

import numpy as np
from numba import njit, prange

from .config import DEFAULT_CONFIG, SimulatorConfig
from .errors import BufferSizeError, InvalidConfiguration, PreconditionError, QubitIndexError
from .gates import as_matrix
from .kernel import Executor, thread_limit
from .logging_config import get_logger
from .operator import Controlled, Operator, Single

logger = get_logger(__name__)

# ---------- controlled-gate index arithmetic ----------

@njit(inline="always")
def _insert_zero_bit(i, pos):
    low = i & ((1 << pos) - 1)
    return ((i >> pos) << (pos + 1)) | low

@njit
def _base_index(g, lo, hi):
    # insert at the lower position first so ``hi`` lands on its final bit
    return _insert_zero_bit(_insert_zero_bit(g, lo), hi)

@njit(parallel=True, fastmath=True)
def _controlled_kernel(psi, U4, n, control, target):
    dl = 1 << target
    dh = 1 << control
    lo = min(control, target)
    hi = max(control, target)
    nbases = 1 << (n - 2)
    for g in prange(nbases):
        i0 = _base_index(g, lo, hi)
        i1 = i0 + dl
        i2 = i0 + dh
        i3 = i0 + dh + dl
        a0 = psi[i0]; a1 = psi[i1]; a2 = psi[i2]; a3 = psi[i3]
        psi[i0] = U4[0, 0]*a0 + U4[0, 1]*a1 + U4[0, 2]*a2 + U4[0, 3]*a3
        psi[i1] = U4[1, 0]*a0 + U4[1, 1]*a1 + U4[1, 2]*a2 + U4[1, 3]*a3
        psi[i2] = U4[2, 0]*a0 + U4[2, 1]*a1 + U4[2, 2]*a2 + U4[2, 3]*a3
        psi[i3] = U4[3, 0]*a0 + U4[3, 1]*a1 + U4[3, 2]*a2 + U4[3, 3]*a3

@njit
def _base_indices_kernel(out, control, target):
    lo = min(control, target)
    hi = max(control, target)
    for g in range(out.shape[0]):
        out[g] = _base_index(g, lo, hi)


def _check_pair(n: int, control: int, target: int):
    if n < 2:
        raise QubitIndexError(f"a controlled gate needs at least 2 qubits, register has {n}")
    for name, q in (("control", control), ("target", target)):
        if not 0 <= q < n:
            raise QubitIndexError(f"{name} qubit {q} out of range for {n} qubits")
    if control == target:
        raise PreconditionError(f"control and target must differ, both are {control}")


def base_indices(n: int, control: int, target: int) -> np.ndarray:
    """Every index of an n-qubit state with the control and target bits both 0, ascending."""
    _check_pair(n, control, target)
    out = np.empty(1 << (n - 2), dtype=np.int64)
    _base_indices_kernel(out, control, target)
    return out


# ------------------------------ register ------------------------------

class Register:
    def __init__(self, num_qubits: int, config: Optional[SimulatorConfig] = None):
        if isinstance(num_qubits, bool) or not isinstance(num_qubits, (int, np.integer)):
            raise InvalidConfiguration(f"num_qubits must be an int, got {num_qubits!r}")
        if num_qubits <= 0:
            raise InvalidConfiguration(f"number of qubits must be > 0, got {num_qubits}")
        self.config = (config or DEFAULT_CONFIG).validate()
        self._num_qubits = int(num_qubits)
        self._executor = Executor.from_config(self.config)
        self._psi = np.zeros(1 << self._num_qubits, dtype=self.config.dtype)
        self._psi[0] = 1.0
        logger.info("register created: %d qubits, %s, %r", self._num_qubits, self.dtype, self._executor)

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def dtype(self):
        return self._psi.dtype

    @property
    def state(self) -> np.ndarray:
        """A copy of the amplitudes."""
        return self._psi.copy()

    def set_state(self, values) -> None:
        arr = np.asarray(values)
        if arr.ndim != 1 or arr.shape[0] != self._psi.shape[0]:
            raise BufferSizeError(
                f"expected {self._psi.shape[0]} amplitudes for {self._num_qubits} qubits, got shape {arr.shape}"
            )
        self._psi[:] = arr.astype(self.dtype, copy=False)

    def reset(self) -> None:
        """Back to |0...0>."""
        self._psi[:] = 0
        self._psi[0] = 1.0

    def norm2(self) -> float:
        return float(np.vdot(self._psi, self._psi).real)

    # ---------- gate application ----------

    def apply(self, op: Operator) -> None:
        match op:
            case Single(target=target, matrix=matrix):
                self._check_qubit(target)
                logger.debug("apply single target=%d via %s", target, self._executor.variant)
                self._executor(target, matrix, self._psi)
            case Controlled(control=control, target=target, matrix=matrix):
                _check_pair(self._num_qubits, control, target)
                logger.debug("apply controlled control=%d target=%d", control, target)
                self._apply_controlled(control, target, matrix)
            case _:
                raise TypeError(f"expected a Single or Controlled operator, got {type(op).__name__}")

    def apply_all(self, ops: Iterable[Operator]) -> None:
        for op in ops:
            self.apply(op)

    def _check_qubit(self, q: int) -> None:
        if not 0 <= q < self._num_qubits:
            raise QubitIndexError(f"qubit {q} out of range for {self._num_qubits} qubits")

    def _apply_controlled(self, control: int, target: int, matrix) -> None:
        U4 = np.ascontiguousarray(as_matrix(matrix, 4), dtype=self.dtype)
        with thread_limit(self.config.num_threads):
            _controlled_kernel(self._psi, U4, self._num_qubits, control, target)

    def __repr__(self):
        return f"Register(num_qubits={self._num_qubits}, dtype={self.dtype}, variant={self._executor.variant!r})"
