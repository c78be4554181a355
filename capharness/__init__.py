"""capharness: deterministic capability harness for an embedded Lisp runtime."""

__version__ = "0.1.0"
