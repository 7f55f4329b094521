from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import List, Optional

from storygraph.config import StoryConfig
from storygraph.graph.tree import StoryTree
from storygraph.loader import load_story
from storygraph.messages import SELECTION_PROMPT
from storygraph.server.sessions import Session, SessionManager

import logging

# ============================================================
# LOGGING
# ============================================================

logger = logging.getLogger("storygraph.server")


# ============================================================
# Models
# ============================================================

class Choice(BaseModel):
    number: int
    text: str

class InputRequest(BaseModel):
    line: Optional[str] = None

class SessionResponse(BaseModel):
    session_id: str
    status: str
    current: Optional[str]
    end_reason: Optional[str]
    choices: List[Choice]
    prompt: Optional[str]
    lines: List[str]

class ListingResponse(BaseModel):
    nodes: int
    lines: List[str]


def to_response(session: Session, lines: List[str]) -> SessionResponse:
    state = session.state
    choices = [Choice(number=n, text=t) for n, t in session.engine.choices()]

    return SessionResponse(
        session_id=session.id,
        status=state.status.value,
        current=state.current.id if state.current else None,
        end_reason=state.end_reason.value if state.end_reason else None,
        choices=choices,
        prompt=None if state.is_terminated else SELECTION_PROMPT,
        lines=lines,
    )


# ============================================================
# App Factory
# ============================================================

def create_app(manager: SessionManager) -> FastAPI:

    app = FastAPI(title="StoryGraph", version="1.0")

    # ------------------------------------------------------------
    # Health
    # ------------------------------------------------------------

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "nodes": len(manager.tree),
            "root": manager.tree.root.id if manager.tree.root else None,
            "sessions": len(manager),
        }

    # ------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------

    @app.get("/story", response_model=ListingResponse)
    def story():
        return ListingResponse(nodes=len(manager.tree), lines=manager.tree.render())

    # ------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------

    @app.post("/sessions", response_model=SessionResponse, status_code=201)
    def open_session():
        session = manager.open()
        with session.lock:
            return to_response(session, session.start())

    @app.get("/sessions/{session_id}", response_model=SessionResponse)
    def get_session(session_id: str):
        try:
            session = manager.get(session_id)
        except KeyError:
            raise HTTPException(status_code=404, detail="Session not found")

        with session.lock:
            return to_response(session, [])

    @app.post("/sessions/{session_id}/input", response_model=SessionResponse)
    def submit_input(session_id: str, request: InputRequest):
        try:
            session = manager.get(session_id)
        except KeyError:
            raise HTTPException(status_code=404, detail="Session not found")

        with session.lock:
            try:
                lines = session.submit(request.line)
            except RuntimeError as e:
                raise HTTPException(status_code=409, detail=str(e))

            return to_response(session, lines)

    @app.delete("/sessions/{session_id}")
    def close_session(session_id: str):
        try:
            manager.close(session_id)
        except KeyError:
            raise HTTPException(status_code=404, detail="Session not found")
        return {"status": "closed", "session_id": session_id}

    return app


# ============================================================
# Default Instance
# ============================================================

def build_default_manager() -> SessionManager:
    config = StoryConfig.from_env()

    logging.basicConfig(
        level=config.level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    if config.story_path is None:
        logger.warning("[SERVER] STORYGRAPH_STORY not set, serving an empty tree")
        return SessionManager(StoryTree())

    return SessionManager(load_story(config.story_path))


def default_app() -> FastAPI:
    """Factory for ``uvicorn --factory storygraph.server.app:default_app``."""
    return create_app(build_default_manager())
