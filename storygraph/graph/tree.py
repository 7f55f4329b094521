from __future__ import annotations

import logging
from typing import Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from .. import messages
from .nodes import Node
from .ordering import ordered_ids

logger = logging.getLogger(__name__)

T = TypeVar("T")


def format_value(value) -> str:
    """Text form of a payload, with surrounding whitespace removed."""
    return str(value).strip()


class StoryTree(Generic[T]):
    """
    Branching story graph.

    The registry is the single owner of every Node. The root pointer
    and all ``children`` lists are views into registry entries, so a
    child shared by several parents exists exactly once.

    Construction is total: missing nodes are materialized on first
    reference, which lets edges be declared in any order. Nodes that
    appear only as parents are anchors holding ``value_factory()``
    until their payload is set.

    Cycles are permitted. Nothing here detects or rejects them.
    """

    def __init__(self, value_factory: Callable[[], T] = str) -> None:
        self._nodes: Dict[str, Node[T]] = {}
        self._root: Optional[Node[T]] = None
        self._value_factory = value_factory

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    @property
    def root(self) -> Optional[Node[T]]:
        return self._root

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def nodes(self) -> Iterable[Node[T]]:
        return self._nodes.values()

    def node_ids(self) -> List[str]:
        """All ids in deterministic listing order."""
        return ordered_ids(self._nodes)

    def _materialize(self, node_id: str, value: T) -> Node[T]:
        node = Node(node_id, value)
        self._nodes[node_id] = node
        logger.debug("[STORY TREE] Node created: %s | total=%d", node_id, len(self._nodes))
        return node

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def create_root(self, node_id: str, value: T) -> Node[T]:
        """
        Designate ``node_id`` as root.

        An existing node has its payload overwritten. The previous root,
        if any, stays registered.
        """
        node = self._nodes.get(node_id)
        if node is None:
            node = self._materialize(node_id, value)
        else:
            node.value = value

        if self._root is not None and self._root is not node:
            logger.info("[STORY TREE] Root moved: %s -> %s", self._root.id, node_id)

        self._root = node
        return node

    def add_node(self, parent_id: str, child_id: str, value: T) -> Node[T]:
        """
        Link ``child_id`` under ``parent_id`` and return the child.

        - Missing parent → created with a placeholder payload
        - Missing child → created with ``value``
        - Existing child → payload kept, ``value`` ignored
        - Edge already present → no-op
        """
        parent = self._nodes.get(parent_id)
        if parent is None:
            parent = self._materialize(parent_id, self._value_factory())

        child = self._nodes.get(child_id)
        if child is None:
            child = self._materialize(child_id, value)
        elif child.value != value:
            logger.debug("[STORY TREE] Keeping existing payload for %s", child_id)

        if not parent.has_child(child):
            parent.children.append(child)
            logger.debug("[STORY TREE] Edge added: %s -> %s", parent_id, child_id)

        return child

    def find_node(self, node_id: str) -> Optional[Node[T]]:
        return self._nodes.get(node_id)

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def render(self) -> List[str]:
        """
        Full listing of every node, ordered by ``ordering.sort_key``.
        """
        if not self._nodes:
            return [messages.TREE_EMPTY]

        lines = [messages.LISTING_HEADER]
        for node_id in self.node_ids():
            node = self._nodes[node_id]
            lines.append(messages.NODE_LINE.format(id=node_id, text=format_value(node.value)))

            if node.is_leaf:
                lines.append(messages.CHILD_LINE.format(id=messages.NO_CHILDREN))
            else:
                for child in node.children:
                    lines.append(messages.CHILD_LINE.format(id=child.id))

            lines.append("")

        lines.append(messages.LISTING_FOOTER)
        return lines

    def print_all(self, sink) -> None:
        for line in self.render():
            sink.write_line(line)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def play_game(self, source, sink):
        """Run one interactive session from the root. Returns the final state."""
        from ..engine.core import StoryEngine

        return StoryEngine(self, sink).run(source)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def clear(self) -> List[Node[T]]:
        """
        Release every registered node exactly once.

        Returns
        -------
        List[Node]
            The released nodes, one entry per id.
        """
        released = list(self._nodes.values())
        for node in released:
            node.children.clear()

        self._nodes.clear()
        self._root = None

        logger.debug("[STORY TREE] Released %d nodes", len(released))
        return released

    def __enter__(self) -> "StoryTree[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.clear()

    def __iter__(self) -> Iterator[Node[T]]:
        for node_id in self.node_ids():
            yield self._nodes[node_id]
