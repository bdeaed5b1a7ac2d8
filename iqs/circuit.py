# iqs/circuit.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from . import gates as G
from .config import SimulatorConfig
from .errors import NormalizationError
from .gates import Matrix
from .operator import Controlled, Operator, Single
from .register import Register

# e.g. ("H", (k,)), ("CX", (c, t)), ("PHASE", (k, theta)), ("U", (k, matrix))
Op = Tuple[str, Tuple]

SINGLE = {"I": G.I, "X": G.X, "Y": G.Y, "Z": G.Z, "H": G.H,
          "S": G.S, "SDG": G.SDG, "T": G.T, "TDG": G.TDG}
PARAM = {"PHASE": G.PHASE, "RZ": G.RZ, "RX": G.RX}
TWO = {"CX": G.CX, "CY": G.CY, "CZ": G.CZ, "SWAP": G.SWAP}


@dataclass
class Circuit:
    """An ordered gate list over ``n`` qubits, lowered to operators for a Register."""
    n: int
    ops: List[Op] = field(default_factory=list)

    @staticmethod
    def empty(n: int) -> "Circuit":
        return Circuit(n, [])

    def _add(self, name: str, *args) -> "Circuit":
        self.ops.append((name, args))
        return self

    def i(self, k: int): return self._add("I", k)
    def x(self, k: int): return self._add("X", k)
    def y(self, k: int): return self._add("Y", k)
    def z(self, k: int): return self._add("Z", k)
    def h(self, k: int): return self._add("H", k)
    def s(self, k: int): return self._add("S", k)
    def sdg(self, k: int): return self._add("SDG", k)
    def t(self, k: int): return self._add("T", k)
    def tdg(self, k: int): return self._add("TDG", k)
    def phase(self, k: int, theta: float): return self._add("PHASE", k, theta)
    def rz(self, k: int, theta: float): return self._add("RZ", k, theta)
    def rx(self, k: int, theta: float): return self._add("RX", k, theta)
    def gate(self, matrix: Matrix, k: int): return self._add("U", k, matrix)

    def cx(self, c: int, t: int): return self._add("CX", c, t)
    def cnot(self, c: int, t: int): return self.cx(c, t)
    def cy(self, c: int, t: int): return self._add("CY", c, t)
    def cz(self, c: int, t: int): return self._add("CZ", c, t)
    def swap(self, a: int, b: int): return self._add("SWAP", a, b)
    def controlled(self, u: Matrix, c: int, t: int): return self._add("CU", c, t, u)

    def __len__(self):
        return len(self.ops)

    def operators(self) -> List[Operator]:
        out = []
        for name, args in self.ops:
            if name in SINGLE:
                (k,) = args
                out.append(Single(k, SINGLE[name]()))
            elif name in PARAM:
                k, theta = args
                out.append(Single(k, PARAM[name](theta)))
            elif name == "U":
                k, matrix = args
                out.append(Single(k, matrix))
            elif name in TWO:
                c, t = args
                out.append(Controlled(c, t, TWO[name]()))
            elif name == "CU":
                c, t, u = args
                out.append(Controlled(c, t, G.controlled(u)))
            else:
                raise ValueError(f"Unknown gate {name}")
        return out

    def run(self, config: Optional[SimulatorConfig] = None, check_norm=True, check_norm_tol=None) -> Register:
        # lower first so a bad gate fails before any amplitude moves
        operators = self.operators()
        reg = Register(self.n, config)
        reg.apply_all(operators)
        if check_norm:
            if check_norm_tol is None:
                check_norm_tol = 1e-5 if reg.dtype == "complex64" else 1e-10
            n2 = reg.norm2()
            if not abs(1.0 - n2) <= check_norm_tol:
                raise NormalizationError(f"Normalization failed: ||psi||^2={n2}")
        return reg
