# iqs/tests/test_cross_backend.py
import numpy as np

from iqs.circuit import Circuit
from iqs.config import SimulatorConfig

def max_abs_diff(a, b):
    return float(np.max(np.abs(a - b)))

def test_serial_vs_parallel_small():
    # 3-qubit mixed circuit
    c = Circuit.empty(3).h(0).x(1).cnot(1, 2).h(2).cnot(0, 1).x(2).t(1).cy(2, 0)
    st_s = c.run(SimulatorConfig(variant="serial")).state
    st_o = c.run(SimulatorConfig(variant="outer", num_threads=4)).state
    st_i = c.run(SimulatorConfig(variant="inner", tile=1, num_threads=4)).state
    assert max_abs_diff(st_s, st_o) < 1e-5
    assert max_abs_diff(st_s, st_i) < 1e-5

def test_random_circuits_match():
    rng = np.random.default_rng(123)
    n = 5
    for depth in (5, 10, 20, 40):
        c = Circuit.empty(n)
        for _ in range(depth):
            g = rng.integers(0, 5)  # 0:H,1:X,2:T,3:CNOT,4:SWAP
            if g == 0:
                c.h(int(rng.integers(0, n)))
            elif g == 1:
                c.x(int(rng.integers(0, n)))
            elif g == 2:
                c.t(int(rng.integers(0, n)))
            else:
                c1 = int(rng.integers(0, n))
                c2 = c1
                while c2 == c1:
                    c2 = int(rng.integers(0, n))
                c.cnot(c1, c2) if g == 3 else c.swap(c1, c2)
        s = c.run(SimulatorConfig(variant="serial")).state
        o = c.run(SimulatorConfig(variant="outer", num_threads=8)).state
        i = c.run(SimulatorConfig(variant="inner", tile=4, num_threads=8)).state
        assert np.allclose(s, o, atol=1e-5, rtol=0)
        assert np.allclose(s, i, atol=1e-5, rtol=0)
