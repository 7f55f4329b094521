from pathlib import Path

from storygraph import StoryGraphApp
from storygraph.engine.io import BufferSink, ScriptedSource

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

# --------------------------------
# Build the story in code
# --------------------------------

tree = StoryGraphApp.create()

tree.create_root("1", "A fork in the road.")
tree.add_node("1", "2", "Take the left road.")
tree.add_node("1", "3", "Take the right road.")
tree.add_node("2", "4", "Both roads meet at an inn. Rest here.")
tree.add_node("3", "4", "Both roads meet at an inn. Rest here.")

for line in tree.render():
    print(line)

# --------------------------------
# Scripted play-through
# --------------------------------

print("\n=== Scripted Session ===\n")

sink = BufferSink()
state = StoryGraphApp.play(tree, ScriptedSource(["banana", "7", "2", "1"]), sink)
print(sink.text)
print(f"\nPath taken: {' -> '.join(state.path)} ({state.end_reason.value})")

# --------------------------------
# Story from file, on the console
# --------------------------------

print("\n=== Forest ===\n")

forest = StoryGraphApp.create(story_path=str(Path(__file__).parent / "stories" / "forest.json"))
for line in forest.render():
    print(line)

StoryGraphApp.play(forest)
