# iqs/operator.py
"""A gate application request: ``Single`` or ``Controlled``."""
from dataclasses import dataclass
from typing import Union

import numpy as np

from .errors import PreconditionError, QubitIndexError
from .gates import Matrix, as_matrix


def _check_qubit(name: str, q) -> int:
    if isinstance(q, (bool, np.bool_)) or not isinstance(q, (int, np.integer)):
        raise PreconditionError(f"{name} qubit must be an int, got {q!r}")
    if q < 0:
        raise QubitIndexError(f"{name} qubit must be >= 0, got {q}")
    return int(q)


@dataclass(frozen=True, eq=False)
class Single:
    target: int
    matrix: Matrix

    def __post_init__(self):
        object.__setattr__(self, "target", _check_qubit("target", self.target))
        as_matrix(self.matrix, 2)

    @property
    def qubits(self):
        return (self.target,)


@dataclass(frozen=True, eq=False)
class Controlled:
    control: int
    target: int
    matrix: Matrix

    def __post_init__(self):
        object.__setattr__(self, "control", _check_qubit("control", self.control))
        object.__setattr__(self, "target", _check_qubit("target", self.target))
        if self.control == self.target:
            raise PreconditionError(f"control and target must differ, both are {self.target}")
        as_matrix(self.matrix, 4)

    @property
    def qubits(self):
        return (self.control, self.target)


Operator = Union[Single, Controlled]
