"""Game engine: candidate queue, vote tally, sessions and their registry.

Pure domain logic with no Flask or Socket.IO imports; HTTP routes and socket
handlers drive it through the registry and the protocol adapter.
"""

from .queue import CandidateQueue
from .tally import VoteTally
from .session import GameEnded, NextChoice, Session
from .registry import SessionRegistry
from .protocol import (
    ANY_STATUS,
    Admitted,
    NotFound,
    OutboundEvent,
    ProtocolAdapter,
    StatusMismatch,
)

__all__ = [
    'ANY_STATUS',
    'Admitted',
    'CandidateQueue',
    'GameEnded',
    'NextChoice',
    'NotFound',
    'OutboundEvent',
    'ProtocolAdapter',
    'Session',
    'SessionRegistry',
    'StatusMismatch',
    'VoteTally',
]
