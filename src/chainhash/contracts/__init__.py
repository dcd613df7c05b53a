"""Error contracts and bundled schemas for chainhash."""

from .error import (
    BadInputError,
    EnvelopeError,
    ErrorEnvelope,
    Exit,
    InputFileError,
    InvariantError,
    die,
    guard_cli,
)

__all__ = [
    "Exit",
    "ErrorEnvelope",
    "EnvelopeError",
    "BadInputError",
    "InvariantError",
    "InputFileError",
    "guard_cli",
    "die",
]
