"""Utility functions for logging context and performance tracking."""

from .logging_context import (
    bind_flow_context,
    bind_state_context,
    unbind_context,
    log_context,
    log_performance,
)

__all__ = [
    "bind_flow_context",
    "bind_state_context",
    "unbind_context",
    "log_context",
    "log_performance",
]
