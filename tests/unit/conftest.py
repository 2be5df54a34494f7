"""
Unit test fixtures

Fixtures for unit tests that mock external processes.
Unit tests should be fast and isolated.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch


def make_process(returncode=0, stdout=b"", stderr=b""):
    """Mock asyncio subprocess with the given outcome"""
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    return process


@pytest.fixture
def mock_subprocess():
    """
    Patch asyncio.create_subprocess_exec as seen by the process steps

    Yields the AsyncMock; set `.return_value` or `.side_effect` to control
    the outcome. Defaults to a successful run with empty output.
    """
    with patch(
        "rnrelease.services.steps.process.asyncio.create_subprocess_exec",
        new_callable=AsyncMock,
    ) as create:
        create.return_value = make_process()
        yield create


@pytest.fixture
def process_factory():
    """Factory for mock subprocess objects, see make_process"""
    return make_process
