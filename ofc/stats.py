"""Per-hand player statistics handed to the persistence layer."""
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Sequence, Tuple

from .scoring import PairwiseResult


@dataclass
class HandStatDelta:
    hands_played: int = 1
    royalties: int = 0
    fouled: bool = False
    fantasyland_entered: bool = False
    hand_won: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def compute_stat_deltas(
    player_ids: Iterable[str],
    pairwise: Sequence[Tuple[str, str, PairwiseResult]],
    fantasyland_entered: Iterable[str] = (),
) -> Dict[str, HandStatDelta]:
    """
    Build one stat delta per player from the hand's pairwise results.

    A player wins the hand when their row points plus royalties beat an
    opponent's in any pairing.
    """
    deltas = {pid: HandStatDelta() for pid in player_ids}
    entered = set(fantasyland_entered)

    for a_id, b_id, result in pairwise:
        for pid, detail in ((a_id, result.a), (b_id, result.b)):
            delta = deltas[pid]
            delta.fouled = delta.fouled or detail.foul
            delta.royalties += detail.royalties

        a_score = result.a.line_points + result.a.royalties
        b_score = result.b.line_points + result.b.royalties
        if a_score > b_score:
            deltas[a_id].hand_won = True
        elif b_score > a_score:
            deltas[b_id].hand_won = True

    for pid in entered & deltas.keys():
        deltas[pid].fantasyland_entered = True
    return deltas
