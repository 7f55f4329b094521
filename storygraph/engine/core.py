import logging
from typing import List, Optional, Tuple

from .. import messages
from ..graph.nodes import Node
from ..graph.ordering import is_numeric_id, parse_bounded
from ..graph.tree import StoryTree, format_value
from .io import LineSource, TextSink
from .state import EndReason, TraversalState

logger = logging.getLogger(__name__)

# Selections are parsed as signed 32-bit choice numbers.
MAX_SELECTION = 2 ** 31 - 1


class StoryEngine:
    """
    Interactive traversal of a StoryTree.

    States are AT_NODE(current) and TERMINATED. Every transition writes
    its text to the sink; input arrives one line at a time either from
    ``run`` (blocking on a LineSource) or from explicit ``submit`` calls
    made by a caller that owns the input channel.

    Bad input never moves the session. Only end of input or a node
    without children ends it.
    """

    def __init__(self, tree: StoryTree, sink: TextSink):
        self.tree = tree
        self.sink = sink
        self.state = TraversalState()
        self._started = False

    # ============================================================
    # PUBLIC ENTRY POINTS
    # ============================================================

    def run(self, source: LineSource) -> TraversalState:
        """
        Play until terminated. The selection prompt goes to ``source``,
        not the sink; a console source prints it before reading.
        """
        self.start()

        while not self.state.is_terminated:
            self.submit(source.read_line(messages.SELECTION_PROMPT))

        return self.state

    def start(self) -> TraversalState:
        if self._started:
            raise RuntimeError("Traversal session already started")
        self._started = True

        root = self.tree.root
        if root is None:
            logger.warning("[ENGINE] No root node, nothing to play")
            self._emit(messages.NO_ROOT)
            self.state.terminate(EndReason.NO_ROOT)
            return self.state

        logger.info(f"[ENGINE] Session start at {root.id}")
        self._emit(messages.BEGIN_BANNER)
        self._emit("")

        self._enter(root)
        return self.state

    def submit(self, line: Optional[str]) -> TraversalState:
        """
        Consume one input line while at a node with choices.

        ``None`` means the input stream ended.
        """
        if not self._started:
            raise RuntimeError("Traversal session not started")
        if self.state.is_terminated:
            raise RuntimeError("Traversal session already terminated")

        if line is None:
            logger.info("[ENGINE] Input exhausted")
            self._emit("")
            self._emit(messages.INPUT_EXHAUSTED)
            self._finish(EndReason.INPUT_EXHAUSTED)
            return self.state

        selection = line.strip()
        choice = self._parse_selection(selection)
        if choice is None:
            self.state.reject()
            return self.state

        node = self.state.current.children[choice - 1]
        logger.debug(f"[ENGINE] Choice {choice}: {self.state.current.id} -> {node.id}")

        self._emit("")
        self.state.move_to(node)
        self._present(node)
        return self.state

    def choices(self) -> List[Tuple[int, str]]:
        """Numbered choices offered at the current node."""
        current = self.state.current
        if current is None or self.state.is_terminated:
            return []
        return [
            (number, format_value(child.value))
            for number, child in enumerate(current.children, start=1)
        ]

    # ============================================================
    # TRANSITIONS
    # ============================================================

    def _enter(self, node: Node) -> None:
        self.state.enter(node)
        self._present(node)

    def _present(self, node: Node) -> None:
        self._emit(format_value(node.value))

        if node.is_leaf:
            logger.info(f"[ENGINE] Reached leaf {node.id}")
            self._emit(messages.NO_FURTHER_PATHS)
            self._emit(messages.JOURNEY_ENDS)
            self._emit("")
            self._finish(EndReason.LEAF_REACHED)
            return

        self._emit(messages.CHOOSE_ACTION)
        for number, text in self.choices():
            self._emit(messages.CHOICE_LINE.format(number=number, text=text))

    def _finish(self, reason: EndReason) -> None:
        self.state.terminate(reason)
        self._emit(messages.COMPLETE_BANNER)
        logger.info(
            f"[ENGINE] Session over | reason={reason.value} "
            f"steps={self.state.steps} rejected={self.state.rejected_inputs}"
        )

    # ============================================================
    # INPUT VALIDATION
    # ============================================================

    def _parse_selection(self, selection: str) -> Optional[int]:
        """
        Return the 1-based choice, or None after emitting the notice
        explaining why the input was rejected.
        """
        if not selection:
            self._emit(messages.NEED_NUMBER)
            return None

        if not is_numeric_id(selection):
            self._emit(messages.INVALID_SELECTION)
            return None

        choice = parse_bounded(selection, MAX_SELECTION)
        if choice is None:
            self._emit(messages.INVALID_NUMBER)
            return None

        if choice < 1 or choice > len(self.state.current.children):
            self._emit(messages.OUT_OF_RANGE)
            return None

        return choice

    def _emit(self, text: str) -> None:
        self.sink.write_line(text)
