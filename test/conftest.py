import pytest

from storygraph.graph.tree import StoryTree


@pytest.fixture
def story() -> StoryTree:
    """
    1 ─┬─ 2 (leaf)
       └─ 3 ─┬─ 4 (leaf)
             └─ 2 (shared with 1)
    """
    tree = StoryTree()
    tree.create_root("1", "You wake in a dark forest.")
    tree.add_node("1", "2", "Walk toward the light.")
    tree.add_node("1", "3", "Follow the river.")
    tree.add_node("3", "4", "Swim across.")
    tree.add_node("3", "2", "This text is ignored.")
    return tree
