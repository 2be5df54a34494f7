"""Orchestrator package - release flow state machine and its event loop"""

from .commands import Command, QUIT, Transition
from .flow_controller import FlowController
from .event_loop import FlowRunner

__all__ = [
    "Command",
    "QUIT",
    "Transition",
    "FlowController",
    "FlowRunner",
]
