import argparse
import logging
import sys

from .app import StoryGraphApp
from .config import StoryConfig
from .engine.io import ConsoleSink
from .loader import StoryFormatError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="storygraph",
        description="Play a branching story from a JSON story file.",
    )
    parser.add_argument("story", nargs="?", help="story file (default: $STORYGRAPH_STORY)")
    parser.add_argument("--list", action="store_true", help="print every node before playing")
    parser.add_argument("--list-only", action="store_true", help="print every node and exit")
    parser.add_argument("--log-level", help="logging level (default: $STORYGRAPH_LOG_LEVEL or WARNING)")
    args = parser.parse_args(argv)

    try:
        env = StoryConfig.from_env()
        config = StoryConfig(
            story_path=args.story or env.story_path,
            log_level=args.log_level or env.log_level,
            show_listing=args.list or args.list_only or env.show_listing,
        )
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=config.level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )

    if config.story_path is None:
        parser.error("no story file given")

    try:
        tree = StoryGraphApp.create(story_path=config.story_path)
    except StoryFormatError as e:
        print(f"storygraph: {e}", file=sys.stderr)
        return 1

    sink = ConsoleSink()
    if config.show_listing:
        tree.print_all(sink)
        sink.write_line("")

    if not args.list_only:
        StoryGraphApp.play(tree, sink=sink)

    return 0


if __name__ == "__main__":
    sys.exit(main())
