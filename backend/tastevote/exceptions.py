"""Domain exceptions.

Everything the game engine and the provider client raise derives from
TasteVoteError so the HTTP and Socket.IO layers can map them in one place.
"""


class TasteVoteError(Exception):
    """Base class for all game errors."""


class SessionNotFound(TasteVoteError):
    def __init__(self, join_code):
        self.join_code = join_code
        super().__init__(f"Session {join_code!r} not found")


class InvalidStatus(TasteVoteError):
    """An action was attempted in the wrong lifecycle stage."""
    def __init__(self, status):
        self.status = status
        super().__init__(status.reason)


class EmptyCandidateList(TasteVoteError):
    """A session cannot be created without candidates."""


class QueueExhausted(TasteVoteError):
    """The candidate queue has no front."""


class ProviderError(TasteVoteError):
    """The restaurant provider failed or returned an unusable response."""
