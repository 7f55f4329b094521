from .core import StoryEngine
from .state import EndReason, TraversalState, TraversalStatus
from .io import (
    BufferSink,
    ConsoleSink,
    ConsoleSource,
    LineSource,
    ScriptedSource,
    TextSink,
)

__all__ = [
    "StoryEngine",
    "EndReason",
    "TraversalState",
    "TraversalStatus",
    "LineSource",
    "TextSink",
    "ConsoleSource",
    "ConsoleSink",
    "ScriptedSource",
    "BufferSink",
]
