"""Deterministic test harness: in-memory capabilities and the runner."""

from capharness.testing.bindings import TEST_ENV_FLAG, test_bindings
from capharness.testing.runner import (
    DEFAULT_SEED,
    run_test,
    run_test_pure,
    run_test_with,
    run_test_with_files,
    run_test_with_pure,
)

__all__ = [
    "DEFAULT_SEED",
    "TEST_ENV_FLAG",
    "run_test",
    "run_test_pure",
    "run_test_with",
    "run_test_with_files",
    "run_test_with_pure",
    "test_bindings",
]
