from typing import Any, Mapping, Optional

from .engine.core import StoryEngine
from .engine.io import ConsoleSink, ConsoleSource, LineSource, TextSink
from .engine.state import TraversalState
from .graph.tree import StoryTree
from .loader import build_story, load_story


class StoryGraphApp:
    """
    Top-level facade for assembling and playing a story.

    Construction and play are kept apart: ``create`` only builds the
    tree, ``play`` only reads it. Input and output channels are always
    supplied by the caller, with the console as the default.
    """

    @staticmethod
    def create(
        *,
        story_path: Optional[str] = None,
        document: Optional[Mapping[str, Any]] = None,
    ) -> StoryTree:
        """
        Build a tree from a story file or an already-decoded document.

        With neither given, an empty tree is returned for the caller to
        fill through ``create_root`` / ``add_node``.
        """
        if story_path is not None and document is not None:
            raise ValueError("Pass either story_path or document, not both")

        if story_path is not None:
            return load_story(story_path)

        if document is not None:
            return build_story(document)

        return StoryTree()

    @staticmethod
    def play(
        tree: StoryTree,
        source: Optional[LineSource] = None,
        sink: Optional[TextSink] = None,
    ) -> TraversalState:
        engine = StoryEngine(tree, sink or ConsoleSink())
        return engine.run(source or ConsoleSource())
