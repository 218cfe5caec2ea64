# ============================================
#     Parley: Connection Registry
#     Live sessions, keyed by a process-unique id
# ============================================

import uuid
from typing import Callable, Dict, Iterator, List, Optional

from parley.config import DEFAULT_DISPLAY_NAME


def new_session_id() -> str:
    return uuid.uuid4().hex


class Session:
    """
    One live connection.

    display_name / is_logged_in are only changed by the join protocol,
    is_admin only by a successful adminLogin.
    """

    def __init__(self, channel, session_id: Optional[str] = None):
        self.id = session_id or new_session_id()
        self.channel = channel
        self.display_name = DEFAULT_DISPLAY_NAME
        self.is_logged_in = False
        self.is_admin = False

    def __repr__(self):
        return f"<Session {self.id[:8]} name={self.display_name!r} logged_in={self.is_logged_in} admin={self.is_admin}>"


class ConnectionRegistry:
    """
    The set of live sessions, in connection order.

    Removal hooks run with the departing session id so state keyed by it
    (mutes, warnings) can be purged in the same step.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._on_remove: List[Callable[[str], None]] = []

    def on_remove(self, hook: Callable[[str], None]):
        self._on_remove.append(hook)

    def add(self, session: Session):
        self._sessions[session.id] = session

    def remove(self, session_id: str) -> Optional[Session]:
        session = self._sessions.pop(session_id, None)
        for hook in self._on_remove:
            hook(session_id)
        return session

    def get(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def __contains__(self, session_id):
        return session_id in self._sessions

    def __len__(self):
        return len(self._sessions)

    def all(self) -> Iterator[Session]:
        # Snapshot: callers may remove sessions while iterating
        return iter(list(self._sessions.values()))

    def logged_in(self) -> List[Session]:
        return [s for s in self._sessions.values() if s.is_logged_in]

    def admins(self) -> List[Session]:
        return [s for s in self._sessions.values() if s.is_admin]

    def find_by_name(self, name: str) -> Optional[Session]:
        """
        Case-insensitive lookup among logged-in sessions.
        First match in connection order wins.
        """
        if not name:
            return None

        target = name.strip().lower()
        for s in self._sessions.values():
            if s.is_logged_in and s.display_name.lower() == target:
                return s
        return None

    def roster(self) -> List[str]:
        return [s.display_name for s in self._sessions.values() if s.is_logged_in]
