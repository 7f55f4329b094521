from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from threading import RLock
from typing import List, Optional

from ..engine.core import StoryEngine
from ..engine.io import BufferSink
from ..graph.tree import StoryTree

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 1000


class Session:
    """
    One traversal session whose input arrives over the network.

    Requests for the same session may arrive on different worker
    threads. ``lock`` serializes them; hold it across a submit and
    everything read from the resulting state.
    """

    def __init__(self, session_id: str, tree: StoryTree) -> None:
        self.id = session_id
        self.sink = BufferSink()
        self.engine = StoryEngine(tree, self.sink)
        self.lock = RLock()

    @property
    def state(self):
        return self.engine.state

    @property
    def is_terminated(self) -> bool:
        return self.engine.state.is_terminated

    def start(self) -> List[str]:
        with self.lock:
            self.engine.start()
            return self.sink.drain()

    def submit(self, line: Optional[str]) -> List[str]:
        with self.lock:
            self.engine.submit(line)
            return self.sink.drain()


class SessionManager:
    """
    Owns the story tree and every live session played against it.

    The tree is built once and only read afterwards, so sessions share
    it without copying.

    At most ``max_sessions`` are kept. Opening one more evicts the
    oldest finished session, or the oldest session of all when none
    has finished.
    """

    def __init__(self, tree: StoryTree, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")

        self.tree = tree
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, Session]" = OrderedDict()
        self._lock = RLock()
        logger.info("[SESSIONS] Initialized | nodes=%d max=%d", len(tree), max_sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def open(self) -> Session:
        session = Session(uuid.uuid4().hex, self.tree)
        with self._lock:
            while len(self._sessions) >= self.max_sessions:
                self._evict_one()
            self._sessions[session.id] = session

            logger.info("[SESSIONS] Opened %s | live=%d", session.id, len(self._sessions))
        return session

    def get(self, session_id: str) -> Session:
        """Raises KeyError for unknown sessions."""
        with self._lock:
            return self._sessions[session_id]

    def close(self, session_id: str) -> None:
        with self._lock:
            del self._sessions[session_id]
        logger.info("[SESSIONS] Closed %s", session_id)

    def _evict_one(self) -> None:
        victim = next(
            (sid for sid, s in self._sessions.items() if s.is_terminated),
            next(iter(self._sessions)),
        )
        del self._sessions[victim]
        logger.warning("[SESSIONS] Evicted %s | limit=%d", victim, self.max_sessions)
