"""
Tests for payments, bankruptcy and turn index bookkeeping.
"""

from tycoon.ledger import credit_pass_start, handle_bankruptcy, pay, renormalize_turn_index
from tycoon.state import PropertyState, update_player, update_property


def test_payment_between_players_conserves_funds(ctx, two_player_game):
    state = two_player_game
    total = state.total_funds()

    result = pay(state.players, state.property_state, "player-1", "player-2", 100, state.logs, ctx)

    assert result.removed_index is None
    assert result.players[0].funds == 1400
    assert result.players[1].funds == 1600
    assert sum(p.funds for p in result.players) == total


def test_payment_to_bank_reduces_funds(ctx, two_player_game):
    state = two_player_game

    result = pay(state.players, state.property_state, "player-1", None, 200, state.logs, ctx)

    assert result.players[0].funds == 1300
    assert result.players[1].funds == 1500


def test_zero_or_negative_amount_is_ignored(ctx, two_player_game):
    state = two_player_game

    for amount in (0, -50):
        result = pay(state.players, state.property_state, "player-1", "player-2", amount, state.logs, ctx)
        assert result.players == state.players
        assert result.logs == state.logs


def test_bankruptcy_to_creditor_transfers_everything(ctx, two_player_game):
    """A player with 20 owing 50 hands over 20 and all tiles, development kept."""
    state = two_player_game
    players = update_player(state.players, "player-1", funds=20)
    players = update_player(players, "player-2", funds=0)
    property_state = update_property(state.property_state, "mill-lane", owner_id="player-1", houses=2)
    property_state = update_property(property_state, "north-station", owner_id="player-1", mortgaged=True)

    result = pay(players, property_state, "player-1", "player-2", 50, state.logs, ctx)

    assert result.removed_index == 0
    assert result.bankrupt_player_id == "player-1"
    assert [p.player_id for p in result.players] == ["player-2"]
    assert result.players[0].funds == 20
    assert result.property_state["mill-lane"] == PropertyState("player-2", 2, False)
    assert result.property_state["north-station"] == PropertyState("player-2", 0, True)
    assert result.logs[-1] == "Alice went bankrupt. Assets pass to Bob."


def test_bankruptcy_to_bank_resets_tiles(ctx, three_player_game):
    state = three_player_game
    players = update_player(state.players, "player-2", funds=10)
    property_state = update_property(state.property_state, "mill-lane", owner_id="player-2", houses=3)
    property_state = update_property(property_state, "power-plant", owner_id="player-2", mortgaged=True)

    result = pay(players, property_state, "player-2", None, 100, state.logs, ctx)

    assert result.removed_index == 1
    assert [p.player_id for p in result.players] == ["player-1", "player-3"]
    assert result.property_state["mill-lane"] == PropertyState()
    assert result.property_state["power-plant"] == PropertyState()
    assert result.logs[-1] == "Bob went bankrupt. Assets return to the municipality."


def test_unknown_creditor_counts_as_bank(ctx, two_player_game):
    state = two_player_game
    property_state = update_property(state.property_state, "mill-lane", owner_id="player-1")

    result = handle_bankruptcy(state.players, property_state, "player-1", "nobody", state.logs, ctx)

    assert result.property_state["mill-lane"] == PropertyState()


def test_credit_pass_start_only_on_forward_wrap(ctx, two_player_game):
    state = two_player_game

    players, logs, credited = credit_pass_start(state.players, "player-1", 38, 1, True, state.logs, ctx)
    assert credited
    assert players[0].funds == 1700
    assert logs[-1] == "Alice collected ZC 200 for passing Start."

    players, _, credited = credit_pass_start(state.players, "player-1", 2, 39, False, state.logs, ctx)
    assert not credited
    assert players[0].funds == 1500

    players, _, credited = credit_pass_start(state.players, "player-1", 5, 12, True, state.logs, ctx)
    assert not credited


def test_renormalize_turn_index():
    assert renormalize_turn_index(2, None, 3) == (2, False)
    assert renormalize_turn_index(2, 0, 2) == (1, False)
    assert renormalize_turn_index(1, 2, 2) == (1, False)
    assert renormalize_turn_index(1, 1, 2) == (1, True)
    # The last seat was removed: wrap to the first
    assert renormalize_turn_index(2, 2, 2) == (0, True)
