"""
Chip management.

Points from pairwise settlement turn into chip transfers between players.
Chips only move between seats, so the table total never changes.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, NamedTuple, Optional, Tuple

from .config import DEFAULT_CONFIG, GameConfig
from .scoring import PairwiseResult, settle_pairwise_detailed

logger = logging.getLogger(__name__)


@dataclass
class ChipSettlement:
    """Outcome of settling one hand for the whole table."""
    pairwise: List[Tuple[str, str, PairwiseResult]] = field(default_factory=list)
    points: Dict[str, int] = field(default_factory=dict)
    chip_changes: Dict[str, int] = field(default_factory=dict)
    total_chips: int = 0


class GameEnd(NamedTuple):
    winner_id: Optional[str]
    loser_id: Optional[str]


def calculate_chip_difference(player_points: int, opponent_points: int,
                              config: GameConfig = DEFAULT_CONFIG) -> int:
    """Uncapped chips won by the player (negative when the opponent wins)."""
    return (player_points - opponent_points) * config.chips.points_per_chip


def calculate_chip_changes(players: Mapping[str, object],
                           config: GameConfig = DEFAULT_CONFIG) -> ChipSettlement:
    """
    Settle every pair of players and convert the points into chips.

    ``players`` maps player id to an object with ``board`` and
    ``table_chips``, in seat order. Each pair's transfer is capped at what
    the paying player still holds at that point, so no balance goes negative.
    """
    settlement = ChipSettlement()
    ids = list(players)
    balances = {pid: players[pid].table_chips for pid in ids}
    settlement.points = {pid: 0 for pid in ids}
    settlement.chip_changes = {pid: 0 for pid in ids}

    for i, a_id in enumerate(ids):
        for b_id in ids[i + 1:]:
            result = settle_pairwise_detailed(players[a_id].board, players[b_id].board, config)
            settlement.pairwise.append((a_id, b_id, result))
            settlement.points[a_id] += result.a.total
            settlement.points[b_id] += result.b.total

            diff = calculate_chip_difference(result.a.total, result.b.total, config)
            if diff > 0:
                transfer = min(diff, balances[b_id])
            else:
                transfer = -min(-diff, balances[a_id])

            balances[a_id] += transfer
            balances[b_id] -= transfer
            settlement.chip_changes[a_id] += transfer
            settlement.chip_changes[b_id] -= transfer
            logger.debug("%s vs %s: points %d/%d, transfer %+d chips",
                         a_id, b_id, result.a.total, result.b.total, transfer)

    settlement.total_chips = sum(balances.values())
    before = sum(players[pid].table_chips for pid in ids)
    if settlement.total_chips != before:
        logger.warning("Chip total drifted from %d to %d", before, settlement.total_chips)
    return settlement


def apply_chip_changes(players: Mapping[str, object], chip_changes: Mapping[str, int]):
    """Apply chip deltas to each player's balance."""
    for player_id, change in chip_changes.items():
        player = players.get(player_id)
        if player is None:
            continue
        old = player.table_chips
        player.table_chips += change
        logger.info("Player %s chips %d -> %d (%+d)", player_id, old,
                    player.table_chips, change)


def check_game_end(players: Mapping[str, object],
                   config: GameConfig = DEFAULT_CONFIG) -> Optional[GameEnd]:
    """
    Check the chip thresholds.

    Returns:
        GameEnd with the first player at or over the win threshold and the
        first at or under the lose threshold, or None if play continues
    """
    winner = next((pid for pid, p in players.items()
                   if p.table_chips >= config.chips.win_threshold), None)
    loser = next((pid for pid, p in players.items()
                  if p.table_chips <= config.chips.lose_threshold), None)
    if winner is None and loser is None:
        return None
    # With more than two seats a bust player need not leave a winner over the
    # threshold; the richest seat takes the match
    if winner is None and len(players) > 1:
        winner = max((pid for pid in players if pid != loser),
                     key=lambda pid: players[pid].table_chips)
    if loser is None and len(players) > 1:
        loser = min((pid for pid in players if pid != winner),
                    key=lambda pid: players[pid].table_chips)
    logger.info("Game end: winner=%s loser=%s", winner, loser)
    return GameEnd(winner, loser)


def validate_chip_totals(players: Mapping[str, object],
                         config: GameConfig = DEFAULT_CONFIG) -> bool:
    """True if the table holds exactly ``starting_chips`` per seat."""
    total = sum(p.table_chips for p in players.values())
    expected = config.chips.starting_chips * len(players)
    if total != expected:
        logger.error("Chip validation failed: total %d, expected %d", total, expected)
        return False
    return True


def get_player_chip_info(player, config: GameConfig = DEFAULT_CONFIG) -> Dict[str, int]:
    return {
        'current_chips': player.table_chips,
        'starting_chips': config.chips.starting_chips,
        'chip_change': player.table_chips - config.chips.starting_chips,
    }
