from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

T = TypeVar("T")


@dataclass(eq=False)
class Node(Generic[T]):
    """
    Single addressable unit of a story tree.

    A node is owned by exactly one StoryTree registry. The ``children``
    list holds non-owning references to other registered nodes, in
    choice order (choice 1 is ``children[0]``). The same child may be
    referenced by several parents, but never twice by the same parent.

    Equality is identity: two nodes are the same node only if they are
    the same object.
    """

    id: str
    value: T
    children: List["Node[T]"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def has_child(self, node: "Node[T]") -> bool:
        """Identity check, not value comparison."""
        return any(child is node for child in self.children)

    def child_ids(self) -> List[str]:
        return [child.id for child in self.children]

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, value={self.value!r}, children={self.child_ids()!r})"
