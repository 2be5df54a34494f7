"""Terminal presentation: Rich view, raw keyboard input and the app wiring"""

from .view import FlowView
from .keyboard import KeyReader, decode_keys
from .terminal import TerminalApp

__all__ = [
    "FlowView",
    "KeyReader",
    "decode_keys",
    "TerminalApp",
]
