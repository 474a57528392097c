"""Core session orchestration for the CA rewriter."""

from ca_rewriter.core.session_manager import (
    ActiveTab,
    AppState,
    SessionManager,
    SessionState,
)

__all__ = [
    "ActiveTab",
    "AppState",
    "SessionManager",
    "SessionState",
]
