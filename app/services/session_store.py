from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict

from app.errors import SessionNotFoundError
from app.schemas.studyplan import ProgressEntry, UserSession
from app.utils.logger import logger


class SessionStore(ABC):
    """
    Keyed store of UserSession records.

    No ordering is guaranteed between concurrent writers to the same
    user_id: whichever write finishes last wins.
    """

    @abstractmethod
    def get(self, user_id: str) -> UserSession:
        """Raises SessionNotFoundError if absent."""

    @abstractmethod
    def put(self, session: UserSession) -> None:
        """Insert or replace the session for session.user_id."""

    @abstractmethod
    def delete(self, user_id: str) -> None:
        """Remove the session; missing ids are ignored."""

    @abstractmethod
    def __contains__(self, user_id: str) -> bool:
        ...

    def set_progress(self, user_id: str, day: int, completed: bool, notes: str = "") -> ProgressEntry:
        session = self.get(user_id)
        entry = ProgressEntry(
            completed=completed,
            notes=notes,
            updated_at=datetime.now(timezone.utc),
        )
        session.progress[day] = entry
        self.put(session)

        logger.info(f"[SESSION] {user_id} day {day} → completed={completed}")
        return entry


class InMemorySessionStore(SessionStore):
    """Process-local store. Contents are lost on restart."""

    def __init__(self):
        self._sessions: Dict[str, UserSession] = {}

    def get(self, user_id: str) -> UserSession:
        try:
            return self._sessions[user_id]
        except KeyError:
            raise SessionNotFoundError(user_id) from None

    def put(self, session: UserSession) -> None:
        self._sessions[session.user_id] = session

    def delete(self, user_id: str) -> None:
        self._sessions.pop(user_id, None)

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
