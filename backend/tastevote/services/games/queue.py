from collections import deque
from typing import Iterable, List

from tastevote.exceptions import QueueExhausted
from tastevote.models import Candidate


class CandidateQueue:
    """Ordered working set of restaurants still in the running.

    The front is the subject of the current round. Rotating drops the front,
    or cycles it to the back when somebody liked it so it gets another look.
    """

    def __init__(self, candidates: Iterable[Candidate] = ()):
        self._items = deque(candidates)

    def front(self) -> Candidate:
        if not self._items:
            raise QueueExhausted('No candidates left')
        return self._items[0]

    def rotate(self, had_positive_votes: bool) -> Candidate:
        if not self._items:
            raise QueueExhausted('No candidates left')
        removed = self._items.popleft()
        if had_positive_votes:
            self._items.append(removed)
        return removed

    def size(self) -> int:
        return len(self._items)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def snapshot(self) -> List[Candidate]:
        return list(self._items)

    def restore(self, snapshot: List[Candidate]) -> None:
        self._items = deque(snapshot)
