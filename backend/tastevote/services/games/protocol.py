"""Admission checks and action handlers between transport and game engine.

Nothing here knows about sockets. `admit` decides whether an action may run
against a session; the action methods mutate the session and return the
events the transport should broadcast to the session's room.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from tastevote.models import NO_CONSENSUS, SessionStatus
from .registry import SessionRegistry
from .session import GameEnded, NextChoice, Session


# Passed as required_status to skip the status check (disconnects)
ANY_STATUS = None

INVALID_JOIN_CODE = 'Invalid Join Code'


@dataclass(frozen=True)
class Admitted:
    session: Session


@dataclass(frozen=True)
class NotFound:
    join_code: Optional[str]

    @property
    def reason(self) -> str:
        return INVALID_JOIN_CODE


@dataclass(frozen=True)
class StatusMismatch:
    actual: SessionStatus

    @property
    def reason(self) -> str:
        return self.actual.reason


Admission = Union[Admitted, NotFound, StatusMismatch]


@dataclass
class OutboundEvent:
    name: str
    payload: Dict[str, Any] = field(default_factory=dict)


class ProtocolAdapter:
    def __init__(self, registry: SessionRegistry, provider):
        self.registry = registry
        self.provider = provider

    def admit(self, join_code: Optional[str], required_status: Optional[SessionStatus]) -> Admission:
        session = self.registry.get(join_code)
        if session is None:
            return NotFound(join_code)
        if required_status is not ANY_STATUS and session.status != required_status:
            return StatusMismatch(session.status)
        return Admitted(session)

    # ---- actions ----

    def join(self, session: Session) -> List[OutboundEvent]:
        num_players = session.join()
        return [OutboundEvent('joinedGame', {'numPlayers': num_players})]

    def start(self, session: Session) -> List[OutboundEvent]:
        """Start play and announce the first restaurant.

        Raises ProviderError with the session left in the lobby.
        """
        with session.transaction():
            first = session.start()
            detail = self.provider.business(first.id)
        return [OutboundEvent('startedGame', {'restaurant': detail})]

    def vote(self, session: Session, affirmative: bool) -> List[OutboundEvent]:
        with session.transaction():
            outcome = session.vote(affirmative)
            if isinstance(outcome, NextChoice):
                detail = self.provider.business(outcome.candidate.id)
                return [OutboundEvent('nextChoice', {'restaurant': detail})]
        if isinstance(outcome, GameEnded):
            return [ended_event(outcome)]
        return []

    def leave(self, session: Session) -> List[OutboundEvent]:
        num_players = session.leave()
        if self.registry.on_player_count_changed(session.join_code):
            return []
        return [OutboundEvent('joinedGame', {'numPlayers': num_players})]


def ended_event(outcome: GameEnded) -> OutboundEvent:
    restaurant = outcome.winner.to_dict() if outcome.consensus else dict(NO_CONSENSUS)
    return OutboundEvent('endedGame', {'restaurant': restaurant, 'consensus': outcome.consensus})
