"""Error kinds, exit codes and the stderr envelope used by the chainhash CLI."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from functools import wraps
from typing import Any, ClassVar, NoReturn, TypeVar

logger = logging.getLogger("chainhash")
T = TypeVar("T")


class Exit(IntEnum):
    """Process exit codes; every subcommand returns or dies with one of these."""

    OK = 0
    NOT_FOUND = 1
    BAD_INPUT = 2
    INVARIANT = 3
    INTERNAL = 4
    IO = 5


@dataclass(slots=True)
class ErrorEnvelope:
    """JSON error payload written to stderr when a command fails."""

    error: str
    detail: str
    hint: str | None = None

    def to_json(self) -> str:
        payload = {"error": self.error, "detail": self.detail}
        if self.hint:
            payload["hint"] = self.hint
        return json.dumps(payload, ensure_ascii=False)


def die(code: Exit, kind: str, detail: str, hint: str | None = None) -> NoReturn:
    """Write an error envelope to stderr and exit with ``code``."""

    env = ErrorEnvelope(error=kind, detail=detail, hint=hint)
    sys.stderr.write(env.to_json() + "\n")
    try:
        sys.stderr.flush()
    finally:
        sys.exit(int(code))


class EnvelopeError(Exception):
    """Base for errors the CLI reports as envelopes.

    Subclasses pick their envelope label and exit code through ``kind`` and
    ``exit_code``.
    """

    kind: ClassVar[str] = "BadInput"
    exit_code: ClassVar[Exit] = Exit.BAD_INPUT

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(error=self.kind, detail=str(self), hint=self.hint)


class BadInputError(EnvelopeError):
    """Malformed pairs file, config value or environment override."""


class InvariantError(EnvelopeError):
    """A table failed ``verify_table``."""

    kind = "Invariant"
    exit_code = Exit.INVARIANT


class InputFileError(EnvelopeError):
    """A pairs file is missing or unreadable."""

    kind = "IO"
    exit_code = Exit.IO


def guard_cli(fn: Callable[..., T]) -> Callable[..., T]:
    """Wrap a command handler so failures become envelopes and exit codes."""

    @wraps(fn)
    def _wrapped(*args: Any, **kwargs: Any) -> T:
        try:
            return fn(*args, **kwargs)
        except EnvelopeError as exc:
            die(exc.exit_code, exc.kind, str(exc), hint=exc.hint)
        except Exception as exc:
            logger.exception("Unhandled CLI exception")
            die(Exit.INTERNAL, "Internal", f"{type(exc).__name__}: {exc}")

    return _wrapped


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
