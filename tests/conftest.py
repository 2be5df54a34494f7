"""
Pytest configuration and shared fixtures
Provides common test fixtures for all test modules
"""

import json
import sys
from pathlib import Path

import pytest

# Add src directory to path for imports when the package is not installed
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rnrelease.models.session import Session
from rnrelease.services.steps.base import StepContext


INCREMENT_KINDS = ("patch", "minor", "major", "prepatch", "preminor", "premajor", "prerelease")


@pytest.fixture
def project_dir(tmp_path):
    """App repository root with a package.json at version 1.0.0"""
    (tmp_path / "package.json").write_text(json.dumps({"name": "demo-app", "version": "1.0.0"}))
    return tmp_path


@pytest.fixture
def step_context(project_dir):
    """StepContext with no pauses, rooted at project_dir"""
    return StepContext(
        project_dir=project_dir,
        increment_kinds=INCREMENT_KINDS,
        pause_seconds=0,
    )


@pytest.fixture
def session():
    return Session()


# Pytest markers
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "e2e: End-to-end flow tests")


# Auto-use fixtures
@pytest.fixture(autouse=True)
def reset_singletons():
    """
    Reset singleton instances before each test
    Ensures test isolation
    """
    import rnrelease.services.config.configuration_service as config_module
    import rnrelease.services.config.config_validator as validator_module
    import rnrelease.services.config.template_service as template_module
    config_module._config_service = None
    validator_module._validator = None
    template_module._template_service = None

    yield

    config_module._config_service = None
    validator_module._validator = None
    template_module._template_service = None
