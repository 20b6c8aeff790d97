"""OFC Pineapple game engine."""
from .errors import OFCError, InputError, InvalidActionError, GameStateError, ConfigError
from .card import Card, Rank, Suit, RANKS, SUITS, RANK_VALUES, cards_from_str
from .deck import make_deck, shuffle_deck, make_hand_seed
from .hand_evaluator import (
    HandCategory, TopCategory, HandRank,
    evaluate_5_card_hand, evaluate_3_card_hand,
    compare_5, compare_3, compare_hands_5, compare_hands_3, is_royal_flush
)
from .royalty import (
    RoyaltyTable, get_top_royalty, get_row_royalty, get_middle_royalty,
    get_bottom_royalty, get_total_royalties, royalty_breakdown
)
from .config import GameConfig, DEFAULT_CONFIG, load_config
from .board import Board, Row
from .validator import FoulCheck, validate_board
from .fantasyland import (
    check_fantasyland_eligibility, check_fantasyland_continuation, next_fantasyland_status
)
from .scoring import PlayerScoreDetail, PairwiseResult, settle_pairwise_detailed, format_score_summary
from .chips import calculate_chip_changes, apply_chip_changes, check_game_end, validate_chip_totals
from .timer import PhaseType, TimerState
from .auto_placement import AutoPlacementResult, auto_place, apply_auto_placement
from .game_state import GameState, PlayerState, RoomPhase
from .engine import GameEngine
from .registry import RoomRegistry

__all__ = [
    'OFCError', 'InputError', 'InvalidActionError', 'GameStateError', 'ConfigError',
    'Card', 'Rank', 'Suit', 'RANKS', 'SUITS', 'RANK_VALUES', 'cards_from_str',
    'make_deck', 'shuffle_deck', 'make_hand_seed',
    'HandCategory', 'TopCategory', 'HandRank', 'evaluate_5_card_hand', 'evaluate_3_card_hand',
    'compare_5', 'compare_3', 'compare_hands_5', 'compare_hands_3', 'is_royal_flush',
    'RoyaltyTable', 'get_top_royalty', 'get_row_royalty', 'get_middle_royalty',
    'get_bottom_royalty', 'get_total_royalties', 'royalty_breakdown',
    'GameConfig', 'DEFAULT_CONFIG', 'load_config',
    'Board', 'Row',
    'FoulCheck', 'validate_board',
    'check_fantasyland_eligibility', 'check_fantasyland_continuation', 'next_fantasyland_status',
    'PlayerScoreDetail', 'PairwiseResult', 'settle_pairwise_detailed', 'format_score_summary',
    'calculate_chip_changes', 'apply_chip_changes', 'check_game_end', 'validate_chip_totals',
    'PhaseType', 'TimerState',
    'AutoPlacementResult', 'auto_place', 'apply_auto_placement',
    'GameState', 'PlayerState', 'RoomPhase',
    'GameEngine', 'RoomRegistry',
]
