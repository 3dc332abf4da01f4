"""
Auto-mark all tests in this directory as integration tests.

These call the real release indexes, download hosts and IAM endpoint,
so they only run when explicitly enabled:

    MAKE_API_CALLS=true pytest tests/integration/ -m integration

The IAM tests additionally need IBMCLOUD_API_KEY.
"""

import os

import pytest


def pytest_collection_modifyitems(items):
    """Mark, and unless MAKE_API_CALLS=true skip, every test in this directory."""
    enabled = os.environ.get("MAKE_API_CALLS") == "true"
    skip = pytest.mark.skip(reason="set MAKE_API_CALLS=true to run live API tests")
    for item in items:
        if "integration" in item.path.parts:
            item.add_marker(pytest.mark.integration)
            if not enabled:
                item.add_marker(skip)
