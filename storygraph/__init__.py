"""
Branching story graphs with shared sub-trees, and an interactive
engine that walks them one choice at a time.
"""

from .app import StoryGraphApp
from .graph import Node, StoryTree
from .engine import StoryEngine, TraversalState
from .loader import StoryFormatError, build_story, load_story

__all__ = [
    "StoryGraphApp",
    "StoryTree",
    "Node",
    "StoryEngine",
    "TraversalState",
    "StoryFormatError",
    "build_story",
    "load_story",
]
