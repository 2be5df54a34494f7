"""
Messages delivered to the flow controller

The event loop has a single consumer; everything it consumes is one of the
message kinds below.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from rnrelease.errors import RnReleaseError
from .session import FlowState


@dataclass(frozen=True)
class StateReached:
    """A step finished; enter `state` and apply `updates` to the session"""
    state: FlowState
    updates: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StepFailed:
    """A step raised a fatal error"""
    step: str
    error: RnReleaseError


@dataclass(frozen=True)
class KeyPressed:
    """
    One key press

    `key` is a single printable character or a named key:
    enter, backspace, space, up, down, home, end, esc, ctrl+c
    """
    key: str


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class Interrupt:
    """SIGINT or an equivalent immediate-terminate request"""


@dataclass(frozen=True)
class Tick:
    """Render request used to animate the spinner"""


Message = Union[StateReached, StepFailed, KeyPressed, Resized, Interrupt, Tick]
