"""Language-level errors.

Every error a program can run into derives from LangError. The harness
runner catches LangError and reports it as the failure half of its result;
anything else is a bug and propagates.
"""

from __future__ import annotations

from typing import Any


class LangError(Exception):
    """Base exception for errors raised while reading or evaluating code."""


class ParseError(LangError):
    """Source text could not be read into values."""

    def __init__(self, source_name: str, message: str) -> None:
        self.source_name = source_name
        super().__init__(f"{source_name}: {message}")


class UnknownIdentifier(LangError):
    """An identifier with no binding was evaluated."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown identifier: {name}")


class LangTypeError(LangError):
    """An argument has the wrong type for a primitive."""


class WrongNumberOfArgs(LangError):
    """A function was called with the wrong number of arguments."""

    def __init__(self, name: str, expected: int, actual: int) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{name}: wrong number of arguments. Expected {expected}, got {actual}"
        )


class OtherError(LangError):
    """An argument has the right type but an invalid value."""


class NonFunctionCalled(LangError):
    """A value that is not a function was called."""

    def __init__(self, value: Any) -> None:  # noqa: ANN401
        self.value = value
        super().__init__(f"Trying to call a non-function: {value!r}")


class ExitError(LangError):
    """The program asked to stop, or ran out of input."""
