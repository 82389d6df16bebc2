import logging
import threading
from typing import Dict, Optional, Sequence

from tastevote.exceptions import EmptyCandidateList, SessionNotFound
from tastevote.models import Candidate, generate_join_code
from .session import Session


logger = logging.getLogger(__name__)


class SessionRegistry:
    """Join code -> Session map for every live session in this process.

    Callers hold `lock` for the whole of any action that reads and mutates a
    session, which serialises Socket.IO handlers running on worker threads.
    """

    def __init__(self, app=None, code_length: int = 6):
        self._sessions: Dict[str, Session] = {}
        self.code_length = code_length
        self.lock = threading.RLock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        self.code_length = int(app.config.get('JOIN_CODE_LENGTH', self.code_length))
        app.extensions['session_registry'] = self

    def create(self, candidates: Sequence[Candidate]) -> str:
        if not candidates:
            raise EmptyCandidateList('No restaurants to choose from')
        with self.lock:
            code = generate_join_code(self.code_length, taken=self._sessions)
            self._sessions[code] = Session(code, list(candidates))
        logger.info("[create] session=%s candidates=%d", code, len(candidates))
        return code

    def get(self, join_code: Optional[str]) -> Optional[Session]:
        if join_code is None:
            return None
        return self._sessions.get(join_code)

    def lookup(self, join_code: Optional[str]) -> Session:
        session = self.get(join_code)
        if session is None:
            raise SessionNotFound(join_code)
        return session

    def on_player_count_changed(self, join_code: str) -> bool:
        """Evict the session once its last player is gone. Returns True if evicted."""
        with self.lock:
            session = self._sessions.get(join_code)
            if session is None or session.num_players > 0:
                return False
            del self._sessions[join_code]
        logger.info("[evict] session=%s status=%s", join_code, session.status.value)
        return True

    def clear(self) -> None:
        with self.lock:
            self._sessions.clear()

    def __contains__(self, join_code):
        return join_code in self._sessions

    def __len__(self):
        return len(self._sessions)
