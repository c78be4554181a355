"""Pytest configuration for capharness tests."""

import os

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Configure test environment before collection.

    Removes CAPHARNESS_* variables so a developer's shell or .env cannot
    change seeds, extensions or script roots under the tests.
    """
    for name in list(os.environ):
        if name.startswith("CAPHARNESS_"):
            os.environ.pop(name)


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Default unmarked tests to unit category."""
    for item in items:
        if any(marker in item.keywords for marker in ("unit", "integration")):
            continue
        item.add_marker(pytest.mark.unit)
