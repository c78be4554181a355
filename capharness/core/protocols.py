"""Protocol definitions for the effect capabilities of the evaluator.

This module defines the Protocol classes through which the evaluator performs
side effects. Each protocol represents one capability; the evaluator only
ever talks to these shapes, never to stdin, the disk or an entropy source
directly.

Design principles:
- Protocols use structural typing (typing.Protocol) for flexibility
- Methods match exactly what the evaluator's primitives call
- Absence and failure are return values (None, FileNotFound), not exceptions
- Each protocol has one production backend (capharness.infra.capabilities)
  and one deterministic backend (capharness.testing.capabilities)

Usage:
    These protocols enable:
    1. Running scripts against the real console, disk and entropy source
    2. Running the same scripts against an in-memory WorldState in tests
    3. Clear contracts between the evaluator and its effects
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from capharness.core.models import FileNotFound


@runtime_checkable
class LineSource(Protocol):
    """Source of input lines (stdin)."""

    def next(self) -> str | None:
        """Return the next line, or None when no input remains."""
        ...


@runtime_checkable
class LineSink(Protocol):
    """Sink for output lines (stdout)."""

    def emit(self, line: str) -> None:
        """Record a line of output. Always succeeds."""
        ...


@runtime_checkable
class FileReader(Protocol):
    """Read-only access to named files."""

    def read(self, path: str) -> str | FileNotFound:
        """Return the file content, or FileNotFound carrying the path."""
        ...


@runtime_checkable
class RandomSource(Protocol):
    """Source of random bytes."""

    def draw(self, n: int) -> bytes:
        """Return exactly n bytes. n must be non-negative."""
        ...


@runtime_checkable
class UuidSource(Protocol):
    """Source of unique identifiers."""

    def next(self) -> str:
        """Return an identifier never returned before by this source."""
        ...


@dataclass
class Capabilities:
    """The capability set injected into one evaluator.

    Attributes:
        stdin: Where get-line! reads from.
        stdout: Where put-str! writes to.
        files: Where read-file! reads from.
        random: Where random-bytes! draws from.
        uuids: Where uuid! takes identifiers from.
    """

    stdin: LineSource
    stdout: LineSink
    files: FileReader
    random: RandomSource
    uuids: UuidSource
