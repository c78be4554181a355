"""Production capability backends: the real console, disk and entropy."""

from __future__ import annotations

import secrets
import uuid
from pathlib import Path

from capharness.core.models import FileNotFound
from capharness.core.protocols import Capabilities


class ConsoleLineSource:
    """Reads lines from the process's stdin."""

    def next(self) -> str | None:
        try:
            return input()
        except EOFError:
            return None


class ConsoleLineSink:
    """Prints lines to the process's stdout."""

    def emit(self, line: str) -> None:
        print(line, flush=True)


class DiskFileReader:
    """Reads UTF-8 files, relative paths resolved against base_dir."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = base_dir or Path.cwd()

    def read(self, path: str) -> str | FileNotFound:
        try:
            return (self.base_dir / path).read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return FileNotFound(path)


class OsRandomSource:
    """Bytes from the operating system's entropy source."""

    def draw(self, n: int) -> bytes:
        if n < 0:
            raise ValueError(f"cannot draw a negative number of bytes: {n}")
        return secrets.token_bytes(n)


class Uuid4Source:
    """Random version-4 UUIDs."""

    def next(self) -> str:
        return str(uuid.uuid4())


def production_capabilities(base_dir: Path | None = None) -> Capabilities:
    """Capabilities wired to the real world."""
    return Capabilities(
        stdin=ConsoleLineSource(),
        stdout=ConsoleLineSink(),
        files=DiskFileReader(base_dir),
        random=OsRandomSource(),
        uuids=Uuid4Source(),
    )
