from contextlib import contextmanager
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union
import logging

from tastevote.exceptions import EmptyCandidateList, InvalidStatus
from tastevote.models import Candidate, SessionStatus
from .queue import CandidateQueue
from .tally import VoteTally


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NextChoice:
    candidate: Candidate


@dataclass(frozen=True)
class GameEnded:
    # None when the group never reached consensus
    winner: Optional[Candidate]

    @property
    def consensus(self) -> bool:
        return self.winner is not None


Outcome = Union[NextChoice, GameEnded]


class Session:
    """One group's game: lobby, then elimination rounds, then a winner.

    The session performs no I/O. Each mutating call returns what happened and
    leaves fetching restaurant detail and broadcasting to the caller.
    """

    def __init__(self, join_code: str, candidates: Sequence[Candidate]):
        if not candidates:
            raise EmptyCandidateList('A session needs at least one restaurant')
        self.join_code = join_code
        self.status = SessionStatus.LOBBY
        self.num_players = 0
        self.queue = CandidateQueue(candidates)
        self.candidate_count = len(candidates)
        self.tally = VoteTally()
        self.subjects: List[Candidate] = []
        self.winner: Optional[Candidate] = None

    def __repr__(self):
        return f"<Session {self.join_code} status={self.status.value} players={self.num_players}>"

    def _require(self, status: SessionStatus) -> None:
        if self.status != status:
            raise InvalidStatus(self.status)

    # ---- players ----

    def join(self) -> int:
        self._require(SessionStatus.LOBBY)
        self.num_players += 1
        return self.num_players

    def leave(self) -> int:
        self.num_players = max(0, self.num_players - 1)
        return self.num_players

    # ---- lifecycle ----

    def start(self) -> Candidate:
        """Move from the lobby into play and return the first subject."""
        self._require(SessionStatus.LOBBY)
        self.status = SessionStatus.PLAYING
        self.tally = VoteTally()
        first = self.queue.front()
        self.subjects = [first]
        return first

    @property
    def current(self) -> Candidate:
        return self.queue.front()

    def vote(self, affirmative: bool) -> Optional[Outcome]:
        """Record one player's vote; returns an outcome once the round completes."""
        self._require(SessionStatus.PLAYING)
        self.tally.record_vote(affirmative)
        if not self.tally.is_round_complete(self.num_players):
            return None
        logger.debug(
            "round=%s totalVotes=%s numPlayers=%s votes for %s: %s",
            self.tally.round, self.tally.num_votes_cast, self.num_players,
            self.current, self.tally.current,
        )
        return self._advance()

    def _advance(self) -> Outcome:
        tally = self.tally
        if tally.current >= self.num_players:
            return self._end(self.queue.front())

        self.queue.rotate(tally.current > 0)
        if self.queue.size() <= 1:
            return self._end(None)

        if tally.num_votes_cast >= 2 * self.candidate_count:
            # only rounds whose subject survived are eligible
            remaining = set(self.queue)
            best = tally.best_round(
                idx for idx, subject in enumerate(self.subjects) if subject in remaining
            )
            return self._end(None if best is None else self.subjects[best])

        tally.new_round()
        subject = self.queue.front()
        self.subjects.append(subject)
        return NextChoice(subject)

    def _end(self, winner: Optional[Candidate]) -> GameEnded:
        self.status = SessionStatus.ENDED
        self.winner = winner
        logger.info("session %s ended winner=%r", self.join_code, winner)
        return GameEnded(winner)

    @contextmanager
    def transaction(self):
        """Restore the session's game state if the block raises."""
        saved = (
            self.status,
            self.queue.snapshot(),
            self.tally.snapshot(),
            list(self.subjects),
            self.winner,
        )
        try:
            yield self
        except Exception:
            status, queue, tally, subjects, winner = saved
            self.status = status
            self.queue.restore(queue)
            self.tally.restore(tally)
            self.subjects = subjects
            self.winner = winner
            raise
