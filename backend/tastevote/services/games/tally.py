from typing import Iterable, List, Optional, Tuple


class VoteTally:
    """Per-round affirmative counts plus the cumulative number of votes cast.

    `votes[round]` accumulates the round in progress. `num_votes_cast` is
    never reset between rounds; a round is complete whenever it is a multiple
    of the player count.
    """

    def __init__(self):
        self.round = 0
        self.votes: List[int] = [0]
        self.num_votes_cast = 0

    @property
    def current(self) -> int:
        return self.votes[self.round]

    def record_vote(self, affirmative: bool) -> None:
        self.num_votes_cast += 1
        if affirmative:
            self.votes[self.round] += 1

    def is_round_complete(self, num_players: int) -> bool:
        return num_players > 0 and self.num_votes_cast % num_players == 0

    def new_round(self) -> None:
        self.votes.append(0)
        self.round += 1

    def best_round(self, rounds: Optional[Iterable[int]] = None) -> Optional[int]:
        """Index of the highest non-zero round count among `rounds` (all by default).

        The earliest round wins ties. None when no round scored a vote.
        """
        best = None
        for idx in (range(len(self.votes)) if rounds is None else rounds):
            count = self.votes[idx]
            if count > 0 and (best is None or count > self.votes[best]):
                best = idx
        return best

    def snapshot(self) -> Tuple[int, List[int], int]:
        return self.round, list(self.votes), self.num_votes_cast

    def restore(self, snapshot: Tuple[int, List[int], int]) -> None:
        self.round, votes, self.num_votes_cast = snapshot
        self.votes = list(votes)
