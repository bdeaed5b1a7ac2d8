# iqs/__init__.py
from .config import DEFAULT_CONFIG, SimulatorConfig
from .errors import (
    BufferSizeError,
    InvalidConfiguration,
    InvalidMatrix,
    IqsError,
    NormalizationError,
    PreconditionError,
    QubitIndexError,
)
from .gates import Matrix
from .kernel import Executor, VARIANTS, single_par_inner, single_par_outer, single_serial
from .operator import Controlled, Operator, Single
from .register import Register, base_indices
from .circuit import Circuit

__version__ = "0.1.0"
