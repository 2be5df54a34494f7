"""
Logging Context Management Utilities

Helpers for adding flow and step context to structured logs.
Context automatically appears in all log statements within the scope.
"""

import time
from contextlib import contextmanager
from typing import Optional
import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars


def bind_flow_context(
    project_dir: Optional[str] = None,
    run_id: Optional[str] = None,
    **kwargs
):
    """
    Bind run-wide context to all logs.

    Args:
        project_dir: Project root the flow operates on
        run_id: Identifier of this invocation
        **kwargs: Additional context key-value pairs

    Example:
        ```python
        bind_flow_context(project_dir="/work/app", run_id="4f1c")
        logger.info("flow started")  # includes project_dir, run_id
        ```
    """
    context = {}

    if project_dir:
        context["project_dir"] = project_dir
    if run_id:
        context["run_id"] = run_id

    context.update(kwargs)
    bind_contextvars(**context)


def bind_state_context(
    current_state: str,
    previous_state: Optional[str] = None,
    **kwargs
):
    """
    Bind state machine context for transition tracking.

    Args:
        current_state: State being entered (e.g., "checking_files")
        previous_state: State being left
        **kwargs: Additional state context
    """
    context = {"current_state": current_state}

    if previous_state:
        context["previous_state"] = previous_state

    context.update(kwargs)
    bind_contextvars(**context)


def unbind_context(*keys: str):
    """Remove specific keys from logging context."""
    unbind_contextvars(*keys)


@contextmanager
def log_context(**context_vars):
    """
    Context manager for temporary logging context.

    Context is added on enter and removed on exit.

    Example:
        ```python
        with log_context(step="create_script_files"):
            logger.info("writing script")  # includes step
        ```
    """
    bind_contextvars(**context_vars)

    try:
        yield
    finally:
        unbind_contextvars(*context_vars.keys())


@contextmanager
def log_performance(operation_name: str, logger=None):
    """
    Context manager for logging operation duration.

    Logs operation start and completion with duration_ms.
    """
    if logger is None:
        logger = structlog.get_logger()

    start_time = time.time()

    logger.debug(f"{operation_name}_started", operation=operation_name)

    try:
        yield
    finally:
        duration_ms = int((time.time() - start_time) * 1000)
        logger.debug(
            f"{operation_name}_completed",
            operation=operation_name,
            duration_ms=duration_ms
        )
