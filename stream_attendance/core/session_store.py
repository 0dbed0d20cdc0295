"""
Auth session resolution and auth-state notifications.

``SessionStore.on_auth_state_change`` registers a listener and hands back a
disposer; calling the disposer unsubscribes. A request resolves its identity
through a ``SessionContext``: the eager ``get_session`` lookup and any
notification that arrives while the request is in flight both go through
``SessionContext.apply``, so the outcome does not depend on which lands first.
"""

from enum import Enum
import itertools
import logging
import threading
from typing import Callable, Dict, Optional

from sqlalchemy.orm import Session

from stream_attendance.core.identity import VerifiedIdentity
from stream_attendance.core.security import decode_access_token
from stream_attendance.models.auth_session import AuthSession
from stream_attendance.utils.datetime_utils import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


Listener = Callable[[AuthEvent, Optional[VerifiedIdentity]], None]


class SessionContext:
    """Identity state for one request, tracking a single auth session id."""

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id
        self.identity: Optional[VerifiedIdentity] = None
        self._signed_out = False

    @classmethod
    def for_token(cls, token: Optional[str]) -> "SessionContext":
        claims = decode_access_token(token) if token else None
        return cls(claims.get("sid") if claims else None)

    def apply(self, event: AuthEvent, identity: Optional[VerifiedIdentity]) -> None:
        if event == AuthEvent.INITIAL_SESSION:
            # A sign-out seen earlier wins over a stale eager lookup
            self.identity = None if self._signed_out else identity
            return

        if identity is None or identity.session_id != self.session_id:
            return

        if event == AuthEvent.SIGNED_OUT:
            self._signed_out = True
            self.identity = None
        elif event == AuthEvent.SIGNED_IN and not self._signed_out:
            self.identity = identity


class SessionStore:
    def __init__(self):
        self._listeners: Dict[int, Listener] = {}
        self._lock = threading.Lock()
        self._ids = itertools.count()

    def on_auth_state_change(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            key = next(self._ids)
            self._listeners[key] = listener

        def dispose() -> None:
            with self._lock:
                self._listeners.pop(key, None)

        return dispose

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def emit(self, event: AuthEvent, identity: Optional[VerifiedIdentity]) -> None:
        with self._lock:
            listeners = list(self._listeners.values())

        for listener in listeners:
            try:
                listener(event, identity)
            except Exception:
                logger.exception(f"Auth state listener failed for {event.value}")

    def load_session(self, db: Session, token: Optional[str]) -> Optional[VerifiedIdentity]:
        """Identity behind a bearer token, or None if the session is unusable"""
        if not token:
            return None

        claims = decode_access_token(token)
        if claims is None:
            return None

        session = db.query(AuthSession).filter(AuthSession.id == claims["sid"]).first()
        if session is None or session.revoked_at is not None:
            return None
        if ensure_utc(session.expires_at) <= utc_now():
            return None

        profile = session.user
        if profile is None or profile.email != claims["sub"]:
            return None

        return VerifiedIdentity(session=session, profile=profile)

    def get_session(self, db: Session, token: Optional[str], context: SessionContext) -> Optional[VerifiedIdentity]:
        context.apply(AuthEvent.INITIAL_SESSION, self.load_session(db, token))
        return context.identity


session_store = SessionStore()
