# iqs/config.py
"""
Run-wide settings for a register: amplitude precision and which
single-qubit kernel variant does the work.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import InvalidConfiguration

SUPPORTED_DTYPES = (np.complex64, np.complex128)
VARIANT_NAMES = ("serial", "outer", "inner")


@dataclass(frozen=True)
class SimulatorConfig:
    """Configuration for a Register and its kernel executor."""

    # complex64 = single precision, complex128 = double
    dtype: type = np.complex64

    # single-qubit kernel: "serial", "outer" (parallel chunks) or "inner" (parallel tiles)
    variant: str = "outer"

    # amplitudes per tile for the "inner" variant
    tile: int = 16

    # None keeps numba's default thread count
    num_threads: Optional[int] = None

    def validate(self) -> "SimulatorConfig":
        if np.dtype(self.dtype) not in [np.dtype(d) for d in SUPPORTED_DTYPES]:
            raise InvalidConfiguration(
                f"dtype must be complex64 or complex128, got {np.dtype(self.dtype)}"
            )
        if self.variant not in VARIANT_NAMES:
            raise InvalidConfiguration(
                f"unknown kernel variant {self.variant!r}; expected one of {VARIANT_NAMES}"
            )
        if int(self.tile) < 1:
            raise InvalidConfiguration(f"tile must be >= 1, got {self.tile}")
        if self.num_threads is not None and int(self.num_threads) < 1:
            raise InvalidConfiguration(f"num_threads must be >= 1, got {self.num_threads}")
        return self

    @staticmethod
    def from_env(environ=None) -> "SimulatorConfig":
        """Build a config from IQS_DTYPE, IQS_VARIANT, IQS_TILE and IQS_NUM_THREADS."""
        env = os.environ if environ is None else environ
        dtype_name = env.get("IQS_DTYPE", "complex64")
        try:
            dtype = {"complex64": np.complex64, "complex128": np.complex128}[dtype_name]
        except KeyError:
            raise InvalidConfiguration(f"IQS_DTYPE must be complex64 or complex128, got {dtype_name!r}") from None
        try:
            tile = int(env.get("IQS_TILE", "16"))
            threads = env.get("IQS_NUM_THREADS")
            num_threads = int(threads) if threads else None
        except ValueError as e:
            raise InvalidConfiguration(f"bad integer in environment: {e}") from e
        cfg = SimulatorConfig(
            dtype=dtype,
            variant=env.get("IQS_VARIANT", "outer"),
            tile=tile,
            num_threads=num_threads,
        )
        return cfg.validate()


DEFAULT_CONFIG = SimulatorConfig()
