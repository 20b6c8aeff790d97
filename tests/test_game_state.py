"""
OFC Pineapple - Player and Room State Tests
"""
import pytest

from ofc.card import cards_from_str
from ofc.game_state import GameState, PlayerState, RoomPhase
from ofc.timer import PhaseType


@pytest.mark.parametrize("dealt, round_number, phase, cap, needed", [
    (0, 1, PhaseType.INITIAL_SET, 5, 5),
    (5, 1, PhaseType.INITIAL_SET, 5, 3),
    (8, 2, PhaseType.ROUND, 2, 3),
    (11, 3, PhaseType.ROUND, 2, 3),
    (14, 4, PhaseType.ROUND, 2, 3),
    (17, 5, PhaseType.ROUND, 2, 0),
])
def test_normal_round_progression(dealt, round_number, phase, cap, needed):
    player = PlayerState("p", "P", cards_dealt=dealt)
    assert player.current_round == round_number
    assert player.phase_type == phase
    assert player.turn_cap == cap
    assert player.cards_needed_for_next_round() == needed
    assert player.is_complete() == (dealt == 17)


def test_fantasyland_player():
    player = PlayerState("p", "P", in_fantasyland=True)
    assert player.cards_needed_for_next_round() == 14
    assert player.phase_type == PhaseType.FANTASYLAND and player.turn_cap == 13

    player.add_cards(cards_from_str("2c 3c 4c 5c 6c 7c 8c 9c Tc Jc Qc Kc Ac 2d"))
    assert player.current_round == 1 and not player.is_complete()
    assert player.cards_needed_for_next_round() == 0, "Fantasyland is dealt once"

    player.mark_ready()
    assert player.has_played_fantasyland_hand and player.is_complete()
    assert player.current_round == 0


def test_add_cards_tracks_current_deal():
    player = PlayerState("p", "P", ready=True)
    player.add_cards(cards_from_str("As Kd Qc Jh Ts"))
    player.add_cards(cards_from_str("2c 3c 4c"))
    assert player.cards_dealt == 8
    assert [str(c) for c in player.current_deal] == ["2c", "3c", "4c"]
    assert len(player.hand) == 8
    assert not player.ready, "A new tranche reopens the turn"


def test_reset_keeps_fantasyland_and_chips():
    player = PlayerState("p", "P", in_fantasyland=True, table_chips=730)
    player.add_cards(cards_from_str("As Kd"))
    player.discards.append(cards_from_str("2c")[0])
    player.mark_ready()
    player.reset_for_new_hand()
    assert player.hand == [] and player.discards == [] and player.cards_dealt == 0
    assert not player.ready and not player.has_played_fantasyland_hand
    assert player.in_fantasyland and player.table_chips == 730


def test_views():
    player = PlayerState("p", "Pat", hand=cards_from_str("As Kd"))
    player.board.top.extend(cards_from_str("2c"))
    public = player.to_public_view()
    assert public['placed'] == {'top': 1, 'middle': 0, 'bottom': 0}
    assert 'hand' not in public, "Opponents never see held cards"
    client = player.to_client_state()
    assert client['hand'] == ["As", "Kd"] and client['board']['top'] == ["2c"]


def test_mixed_mode_and_reveal_gate():
    state = GameState("r")
    normal = state.add_player("n", "Normal")
    fl = state.add_player("f", "Fantasy", in_fantasyland=True)
    assert state.is_mixed_mode
    assert state.players["n"].table_chips == 500

    state.phase = RoomPhase.PLAYING
    normal.cards_dealt, normal.ready = 17, True
    assert not state.should_proceed_to_reveal(), "Fantasyland player not in yet"
    fl.cards_dealt = 14
    fl.mark_ready()
    assert state.should_proceed_to_reveal()

    fl.in_fantasyland = False
    assert not state.is_mixed_mode


def test_expired_timers_and_debug_info():
    state = GameState("r")
    state.add_player("a", "A")
    state.add_player("b", "B")
    state.start_timer("a", PhaseType.INITIAL_SET, 0)
    state.start_timer("b", PhaseType.ROUND, 0)
    assert [pid for pid, _ in state.get_expired_timers(15000)] == ["b"]
    state.stop_timer("b")
    assert state.get_expired_timers(15000) == []

    info = state.get_debug_info(25000)
    assert info['phase'] == "lobby"
    by_id = {p['id']: p for p in info['players']}
    assert by_id['a']['timer_expired'] and not by_id['b']['timer_expired']
