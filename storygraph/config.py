import logging
import os
from typing import Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}


class StoryConfig:
    """
    Central configuration for running a story.
    Controls where the story comes from and how chatty logging is.
    """

    def __init__(
        self,
        story_path: Optional[str] = None,
        log_level: str = "WARNING",
        show_listing: bool = False,   # print the full tree before playing
    ):
        self.story_path = story_path
        self.log_level = log_level.upper()
        self.show_listing = show_listing

        self._validate()

    @classmethod
    def from_env(cls) -> "StoryConfig":
        return cls(
            story_path=os.getenv("STORYGRAPH_STORY") or None,
            log_level=os.getenv("STORYGRAPH_LOG_LEVEL", "WARNING"),
            show_listing=os.getenv("STORYGRAPH_SHOW_LISTING", "").lower() in _TRUE_VALUES,
        )

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)

    def _validate(self):
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unsupported log_level: {self.log_level}")

        if self.story_path is not None and not os.path.isfile(self.story_path):
            raise ValueError(f"Story file not found: {self.story_path}")
