from .nodes import Node
from .tree import StoryTree, format_value
from .ordering import sort_key, ordered_ids

__all__ = ["Node", "StoryTree", "format_value", "sort_key", "ordered_ids"]
