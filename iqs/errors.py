# iqs/errors.py


class IqsError(Exception):
    """Base class for everything raised by iqs."""


class InvalidConfiguration(IqsError, ValueError):
    """Register or executor settings that can never work (e.g. zero qubits)."""


class PreconditionError(IqsError, ValueError):
    """A caller bug detected before any amplitude was touched."""


class QubitIndexError(PreconditionError, IndexError):
    pass


class BufferSizeError(PreconditionError):
    pass


class InvalidMatrix(PreconditionError):
    pass


class NormalizationError(IqsError, AssertionError):
    pass
