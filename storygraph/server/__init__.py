from .app import create_app, build_default_manager
from .sessions import Session, SessionManager

__all__ = ["create_app", "build_default_manager", "Session", "SessionManager"]
