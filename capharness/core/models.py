"""Shared result types for capharness.

This module holds the small value types that cross the boundary between the
evaluator, the capability backends and the harness runner. They live here so
that neither side needs to import the other.

Types:
- FileNotFound: Either-style failure returned by FileReader implementations
- Success / Failure: Discriminated outcome of evaluating a program
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from capharness.lang.errors import LangError


@dataclass(frozen=True)
class FileNotFound:
    """Returned by a FileReader when the requested path does not exist.

    This is an ordinary return value, not an exception: the evaluator decides
    whether a missing file becomes a language-level error.

    Attributes:
        path: The path that was requested.
    """

    path: str

    @property
    def message(self) -> str:
        return f"File not found: {self.path}"


@dataclass(frozen=True)
class Success:
    """Program evaluated to completion.

    Attributes:
        value: Value of the last top-level form (empty list for no forms).
    """

    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Program evaluation stopped on a language-level error.

    Attributes:
        error: The LangError that aborted evaluation.
    """

    error: LangError

    @property
    def ok(self) -> bool:
        return False


EvalOutcome = Success | Failure
