"""
Session registry
A Session is created at sign-in and destroyed at sign-out. It carries the
signed-in identity, the active role and the shopping cart, so nothing about
the browsing session lives in ambient global state.
"""

import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from fastapi import Request

from ..models.cart import Cart
from ..models.user import Role


@dataclass
class Session:
    session_id: str
    user_id: int
    email: str
    role: Role
    full_name: Optional[str] = None
    cart: Cart = field(default_factory=Cart)
    created_at: datetime = field(default_factory=datetime.now)
    # Held for the whole checkout; a second checkout fails fast instead of overlapping
    checkout_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def checkout_in_progress(self) -> bool:
        return self.checkout_lock.locked()


class SessionRegistry:
    """In-process session store keyed by session id"""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.RLock()

    def create(self, user_id: int, email: str, role: Role,
               full_name: Optional[str] = None) -> Session:
        session = Session(
            session_id=secrets.token_urlsafe(24),
            user_id=user_id,
            email=email,
            role=role,
            full_name=full_name,
        )
        with self._lock:
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(session_id)

    def destroy(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def destroy_user_sessions(self, user_id: int) -> int:
        """Drop every session of a user, e.g. after deactivation"""
        with self._lock:
            doomed = [sid for sid, s in self._sessions.items() if s.user_id == user_id]
            for sid in doomed:
                del self._sessions[sid]
            return len(doomed)

    def update_user_role(self, user_id: int, role: Role) -> int:
        """Apply a role change to the user's live sessions"""
        with self._lock:
            sessions = [s for s in self._sessions.values() if s.user_id == user_id]
            for session in sessions:
                session.role = role
            return len(sessions)

    def active_count(self) -> int:
        with self._lock:
            return len(self._sessions)


session_registry = SessionRegistry()


def get_session_registry(request: Request) -> SessionRegistry:
    """FastAPI dependency: the registry attached to the app, else the global one"""
    return getattr(request.app.state, "sessions", None) or session_registry
