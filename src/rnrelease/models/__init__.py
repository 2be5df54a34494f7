"""Models package - Session state, widget state and loop messages"""

from .session import (
    FlowState,
    IncrementKind,
    FieldTarget,
    FIELD_PROMPTS,
    Session,
)
from .widgets import IncrementOption, TextInput, SelectionList
from .messages import (
    StateReached,
    StepFailed,
    KeyPressed,
    Resized,
    Interrupt,
    Tick,
    Message,
)

__all__ = [
    "FlowState",
    "IncrementKind",
    "FieldTarget",
    "FIELD_PROMPTS",
    "Session",
    "IncrementOption",
    "TextInput",
    "SelectionList",
    "StateReached",
    "StepFailed",
    "KeyPressed",
    "Resized",
    "Interrupt",
    "Tick",
    "Message",
]
