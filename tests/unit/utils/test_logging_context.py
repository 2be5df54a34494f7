"""
Unit tests for logging context helpers
"""

from unittest.mock import MagicMock

import pytest
from structlog.contextvars import clear_contextvars, get_contextvars

from rnrelease.utils.logging_context import (
    bind_flow_context,
    bind_state_context,
    log_context,
    log_performance,
    unbind_context,
)


@pytest.fixture(autouse=True)
def clean_context():
    clear_contextvars()
    yield
    clear_contextvars()


@pytest.mark.unit
class TestLoggingContext:

    def test_flow_context(self):
        bind_flow_context(project_dir="/work/app", run_id="4f1c", flow="release")

        assert get_contextvars() == {"project_dir": "/work/app", "run_id": "4f1c", "flow": "release"}

    def test_state_context_without_previous(self):
        bind_state_context(current_state="init")

        assert get_contextvars() == {"current_state": "init"}

    def test_unbind(self):
        bind_state_context(current_state="done", previous_state="syncing_platform")

        unbind_context("current_state", "previous_state")

        assert get_contextvars() == {}

    def test_log_context_is_temporary(self):
        bind_flow_context(run_id="4f1c")

        with log_context(step="create_script_files"):
            assert get_contextvars()["step"] == "create_script_files"

        assert get_contextvars() == {"run_id": "4f1c"}

    def test_log_context_removed_on_error(self):
        with pytest.raises(RuntimeError):
            with log_context(step="sync_with_platform"):
                raise RuntimeError("boom")

        assert "step" not in get_contextvars()

    def test_log_performance(self):
        logger = MagicMock()

        with log_performance("run_version_bump", logger):
            pass

        events = [call.args[0] for call in logger.debug.call_args_list]
        assert events == ["run_version_bump_started", "run_version_bump_completed"]
        assert "duration_ms" in logger.debug.call_args_list[1].kwargs
