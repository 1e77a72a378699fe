"""
Tests for public snapshot serialization.
"""

from dataclasses import replace

from tycoon.engine import roll
from tycoon.snapshot import serialize_snapshot
from tycoon.state import update_property
from tycoon.trade import TradeOffer, propose_trade


def test_snapshot_of_started_game(board, two_player_game):
    snapshot = serialize_snapshot(two_player_game, board)

    assert snapshot.phase == "rolling"
    assert snapshot.current_player_id == "player-1"
    assert snapshot.players[0].tile_name == "Start"
    assert snapshot.players[0].tiles == []
    assert snapshot.pending_action is None
    assert snapshot.winner_id is None


def test_snapshot_lists_owned_tiles(board, two_player_game):
    property_state = update_property(two_player_game.property_state, "mill-lane", owner_id="player-2", houses=2)
    state = replace(two_player_game, property_state=property_state)

    bob = serialize_snapshot(state, board).players[1]

    assert [(t.tile_id, t.group, t.houses) for t in bob.tiles] == [("mill-lane", "brown", 2)]


def test_snapshot_of_pending_purchase(ctx, board, two_player_game):
    state = roll(two_player_game, ctx, (2, 3))

    snapshot = serialize_snapshot(state, board)

    assert snapshot.pending_action.kind == "purchase"
    assert snapshot.pending_action.tile_name == "North Station"
    assert snapshot.pending_action.price == 200
    assert snapshot.last_roll == (2, 3)
    assert snapshot.last_movement_path == [1, 2, 3, 4, 5]


def test_snapshot_is_json_ready(ctx, board, two_player_game):
    state = roll(two_player_game, ctx, (3, 4))
    state, _ = propose_trade(state, ctx, TradeOffer(from_id="player-1", to_id="player-2", give_cash=10))

    data = serialize_snapshot(state, board).model_dump()

    assert data["last_card"]["deck"] == "chance"
    assert data["pending_trade"]["give_cash"] == 10
    assert data["chance_index"] == 1
    assert isinstance(data["logs"], list)
