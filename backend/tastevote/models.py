from enum import Enum
from typing import Any, Dict, Optional
import random
import string


class SessionStatus(str, Enum):
    LOBBY = 'lobby'
    PLAYING = 'playing'
    ENDED = 'ended'

    @property
    def reason(self) -> str:
        """Human-readable explanation sent to clients acting in the wrong stage."""
        return _STATUS_REASONS[self]


_STATUS_REASONS = {
    SessionStatus.LOBBY: 'This game is still in the lobby',
    SessionStatus.PLAYING: 'This game has already started',
    SessionStatus.ENDED: 'This game has ended',
}

# Sent in place of a restaurant when the group never agrees
NO_CONSENSUS = {'id': None, 'name': "No consensus: you're all too picky"}


class Candidate:
    """A restaurant under consideration.

    Wraps the provider's business record. Two candidates are the same
    restaurant when their ids match, whatever the other attributes say.
    """

    def __init__(self, id: str, attributes: Optional[Dict[str, Any]] = None):
        self.id = id
        self.attributes = dict(attributes or {})

    @classmethod
    def from_business(cls, business: Dict[str, Any]) -> 'Candidate':
        return cls(business['id'], business)

    @property
    def name(self) -> Optional[str]:
        return self.attributes.get('name')

    def __eq__(self, other):
        if not isinstance(other, Candidate):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"Candidate({self.id!r})"

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.attributes)
        data['id'] = self.id
        return data


def generate_join_code(length=6, taken=()):
    """Generate a short join code not present in `taken`."""
    alphabet = string.ascii_lowercase + string.digits
    while True:
        code = ''.join(random.choices(alphabet, k=length))
        if code not in taken:
            return code
