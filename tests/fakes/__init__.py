"""In-memory fake implementations for testing.

Fakes implement the real capability protocols, so interface mismatches show
up at test time, and they keep every call observable without mocks.

Available fakes:
- FakeLineSource: Serves a fixed list of lines
- FakeLineSink: Records emitted lines
- FakeFileReader: Serves a fixed mapping of files
- FakeRandomSource: Repeats a fixed byte pattern and records draw sizes
- FakeUuidSource: Hands out fake-0, fake-1, ...

Usage:
    from tests.fakes import fake_capabilities

    def test_something():
        caps = fake_capabilities(stdin=["hello"])
        # evaluate code with caps, then inspect caps.stdout.lines
"""

from tests.fakes.capabilities import (
    FakeFileReader,
    FakeLineSink,
    FakeLineSource,
    FakeRandomSource,
    FakeUuidSource,
    fake_capabilities,
)

__all__ = [
    "FakeFileReader",
    "FakeLineSink",
    "FakeLineSource",
    "FakeRandomSource",
    "FakeUuidSource",
    "fake_capabilities",
]
