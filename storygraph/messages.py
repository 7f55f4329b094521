"""
User-visible text emitted by the story tree and the traversal engine.

The exact phrasing is observable behavior; scripted clients match on it.
"""

# ------------------------------------------------------------------
# Listing
# ------------------------------------------------------------------

TREE_EMPTY = "Tree is empty."
LISTING_HEADER = "===== Story Tree ====="
LISTING_FOOTER = "======================"
NODE_LINE = "Node {id}: {text}"
CHILD_LINE = "  Child -> {id}"
NO_CHILDREN = "(none)"

# ------------------------------------------------------------------
# Traversal
# ------------------------------------------------------------------

NO_ROOT = "No root node. Cannot play game."
BEGIN_BANNER = "===== Begin Adventure ====="
COMPLETE_BANNER = "===== Adventure Complete ====="
NO_FURTHER_PATHS = "There are no further paths."
JOURNEY_ENDS = "Your journey ends here."
CHOOSE_ACTION = "Choose your next action:"
CHOICE_LINE = "{number}. {text}"
SELECTION_PROMPT = "Selection: "

INPUT_EXHAUSTED = "Input error or EOF. Ending adventure."
NEED_NUMBER = "Please enter a number corresponding to your choice."
INVALID_SELECTION = "Invalid selection. Please enter a number."
INVALID_NUMBER = "Invalid selection. Please enter a valid number."
OUT_OF_RANGE = "Choice out of range. Please select a valid option."
