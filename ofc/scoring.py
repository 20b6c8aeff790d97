"""Scoring logic for OFC Pineapple."""
from dataclasses import dataclass, field
from typing import Dict, Optional

from .config import DEFAULT_CONFIG, GameConfig
from .hand_evaluator import compare_hands_3, compare_hands_5
from .royalty import royalty_breakdown
from .validator import validate_board


def _zero_rows() -> Dict[str, int]:
    return {'top': 0, 'middle': 0, 'bottom': 0}


@dataclass
class PlayerScoreDetail:
    """One side of a pairwise settlement."""
    lines: Dict[str, int] = field(default_factory=_zero_rows)
    scoop: int = 0
    royalties: int = 0
    royalties_breakdown: Dict[str, int] = field(default_factory=_zero_rows)
    foul: bool = False
    foul_reason: Optional[str] = None
    total: int = 0

    @property
    def line_points(self) -> int:
        return sum(self.lines.values())

    def to_dict(self) -> dict:
        return {
            'lines': dict(self.lines),
            'scoop': self.scoop,
            'royalties': self.royalties,
            'royalties_breakdown': dict(self.royalties_breakdown),
            'foul': self.foul,
            'foul_reason': self.foul_reason,
            'total': self.total,
        }


@dataclass
class PairwiseResult:
    a: PlayerScoreDetail
    b: PlayerScoreDetail

    def to_dict(self) -> dict:
        return {'a': self.a.to_dict(), 'b': self.b.to_dict()}


def _award_royalties(detail: PlayerScoreDetail, board, config: GameConfig):
    breakdown = royalty_breakdown(board, config.royalties)
    detail.royalties = breakdown.pop('total')
    detail.royalties_breakdown = breakdown


def settle_pairwise_detailed(board_a, board_b,
                             config: GameConfig = DEFAULT_CONFIG) -> PairwiseResult:
    """
    Settle two complete boards against each other.

    Scoring rules:
    - Each row: strictly stronger side gets +row_win, the other -row_win;
      a tie is a push (0/0)
    - Scoop (win all 3 rows): scoop_bonus for the winner, 0 for the loser
    - Royalties: each side adds its own, whatever the row outcome, so the
      two totals need not cancel
    - One foul: the clean side wins every row, the scoop and its royalties;
      every field of the fouled side stays 0
    - Both foul: all zeros

    Returns:
        PairwiseResult with a detail per side
    """
    row_win = config.scoring.row_win
    scoop_bonus = config.scoring.scoop_bonus

    check_a = validate_board(board_a)
    check_b = validate_board(board_b)
    a = PlayerScoreDetail(foul=check_a.fouled, foul_reason=check_a.reason)
    b = PlayerScoreDetail(foul=check_b.fouled, foul_reason=check_b.reason)

    if a.foul and b.foul:
        return PairwiseResult(a, b)

    if a.foul or b.foul:
        winner, board = (b, board_b) if a.foul else (a, board_a)
        winner.lines = {row: row_win for row in winner.lines}
        winner.scoop = scoop_bonus
        _award_royalties(winner, board, config)
        winner.total = winner.line_points + winner.scoop + winner.royalties
        return PairwiseResult(a, b)

    results = {
        'top': compare_hands_3(board_a.top, board_b.top),
        'middle': compare_hands_5(board_a.middle, board_b.middle),
        'bottom': compare_hands_5(board_a.bottom, board_b.bottom),
    }
    for row, cmp in results.items():
        a.lines[row] = cmp * row_win
        b.lines[row] = -cmp * row_win

    if all(cmp > 0 for cmp in results.values()):
        a.scoop = scoop_bonus
    elif all(cmp < 0 for cmp in results.values()):
        b.scoop = scoop_bonus

    _award_royalties(a, board_a, config)
    _award_royalties(b, board_b, config)

    for detail in (a, b):
        detail.total = detail.line_points + detail.scoop + detail.royalties
    return PairwiseResult(a, b)


def format_score_summary(result: PairwiseResult, name_a: str = "A",
                         name_b: str = "B") -> str:
    """Format a pairwise result for display."""
    a, b = result.a, result.b
    lines = []

    if a.foul and b.foul:
        lines.append("Both players fouled - no points.")
        return '\n'.join(lines)

    if a.foul:
        lines.append(f"{name_a} fouled ({a.foul_reason})! {name_b} wins all rows.")
    elif b.foul:
        lines.append(f"{name_b} fouled ({b.foul_reason})! {name_a} wins all rows.")
    else:
        for row, val in a.lines.items():
            if val > 0:
                lines.append(f"{row.capitalize()}: {name_a} wins")
            elif val < 0:
                lines.append(f"{row.capitalize()}: {name_b} wins")
            else:
                lines.append(f"{row.capitalize()}: Push")

    if a.scoop:
        lines.append(f"{name_a} scoops! (+{a.scoop})")
    elif b.scoop:
        lines.append(f"{name_b} scoops! (+{b.scoop})")

    if a.royalties > 0:
        lines.append(f"{name_a} royalties: +{a.royalties}")
    if b.royalties > 0:
        lines.append(f"{name_b} royalties: +{b.royalties}")

    lines.append(f"\nTotals: {name_a} {a.total}, {name_b} {b.total}")
    return '\n'.join(lines)
