from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..graph.nodes import Node


class TraversalStatus(Enum):
    AT_NODE = "at_node"
    TERMINATED = "terminated"


class EndReason(Enum):
    NO_ROOT = "no_root"
    LEAF_REACHED = "leaf_reached"
    INPUT_EXHAUSTED = "input_exhausted"


@dataclass
class TraversalState:
    """
    Mutable runtime state of one traversal session.

    This is NOT part of the story tree. The tree is read-only while a
    session runs; everything that changes lives here.
    """

    # ------------------------------------------------------------------
    # Position
    # ------------------------------------------------------------------

    status: TraversalStatus = TraversalStatus.AT_NODE

    current: Optional[Node] = None
    """
    Node the session is at. Kept after termination so callers can see
    where the session stopped.
    """

    end_reason: Optional[EndReason] = None

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    path: List[str] = field(default_factory=list)
    """
    Ids entered in order, root first. A node reached twice through a
    cycle appears twice.
    """

    steps: int = 0
    rejected_inputs: int = 0

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    @property
    def is_terminated(self) -> bool:
        return self.status is TraversalStatus.TERMINATED

    def enter(self, node: Node) -> None:
        self.current = node
        self.path.append(node.id)

    def move_to(self, node: Node) -> None:
        self.steps += 1
        self.enter(node)

    def reject(self) -> None:
        self.rejected_inputs += 1

    def terminate(self, reason: EndReason) -> None:
        self.status = TraversalStatus.TERMINATED
        self.end_reason = reason
