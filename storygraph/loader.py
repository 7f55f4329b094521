import json
import logging
from typing import Any, Mapping, Optional

from .graph.tree import StoryTree

logger = logging.getLogger(__name__)


class StoryFormatError(ValueError):
    """Raised when a story document cannot be turned into a tree."""


def _require_str(entry: Mapping[str, Any], key: str, where: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        raise StoryFormatError(f"{where}: '{key}' must be a string")
    return value


def build_story(document: Mapping[str, Any], tree: Optional[StoryTree] = None) -> StoryTree:
    """
    Replay a decoded story document through the tree's construction calls.

    Expected shape::

        {
            "root": {"id": "1", "text": "..."},
            "links": [{"parent": "1", "child": "2", "text": "..."}, ...]
        }

    Links are applied in document order, so the first declaration of a
    child decides its text. ``root`` is optional.
    """
    if not isinstance(document, Mapping):
        raise StoryFormatError("story document must be a JSON object")

    tree = tree if tree is not None else StoryTree()

    root = document.get("root")
    if root is not None:
        if not isinstance(root, Mapping):
            raise StoryFormatError("root: must be an object")
        tree.create_root(_require_str(root, "id", "root"), _require_str(root, "text", "root"))

    links = document.get("links", [])
    if not isinstance(links, list):
        raise StoryFormatError("links: must be a list")

    for index, link in enumerate(links):
        where = f"links[{index}]"
        if not isinstance(link, Mapping):
            raise StoryFormatError(f"{where}: must be an object")
        tree.add_node(
            _require_str(link, "parent", where),
            _require_str(link, "child", where),
            _require_str(link, "text", where),
        )

    logger.info("[LOADER] Story built | nodes=%d links=%d", len(tree), len(links))
    return tree


def load_story(path: str, tree: Optional[StoryTree] = None) -> StoryTree:
    with open(path, encoding="utf-8") as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise StoryFormatError(f"{path}: invalid JSON ({e})") from e
        except UnicodeDecodeError as e:
            raise StoryFormatError(f"{path}: not UTF-8 text ({e})") from e

    logger.info("[LOADER] Loaded %s", path)
    return build_story(document, tree)
