"""Pytest configuration for proclaunch tests."""

import os

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Configure test environment before collection.

    Removes PROCLAUNCH_* variables so a developer's shell or .env cannot
    change launcher defaults under test.
    """
    for name in ("PROCLAUNCH_ENCODING", "PROCLAUNCH_ENCODING_ERRORS", "PROCLAUNCH_CWD"):
        os.environ.pop(name, None)


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Default unmarked tests to unit category."""
    for item in items:
        if any(marker in item.keywords for marker in ("unit", "integration")):
            continue
        item.add_marker(pytest.mark.unit)
