"""
Tests for development, mortgaging and redemption.
"""

from dataclasses import replace

import pytest

from tycoon.engine import confirm_pending_action, decline_pending_action
from tycoon.property_actions import mortgage, redeem, redeem_cost, request_upgrade, upgrade_cost
from tycoon.state import UpgradeOffer, update_player, update_property
from tycoon.trade import TradeOffer, accept_trade, propose_trade

BROWN = ("mill-lane", "bakers-row")


def _own(state, owner_id, *tile_ids, **changes):
    property_state = state.property_state
    for tile_id in tile_ids:
        property_state = update_property(property_state, tile_id, owner_id=owner_id, **changes)
    return replace(state, property_state=property_state)


def test_upgrade_requires_full_group(ctx, two_player_game):
    state = _own(two_player_game, "player-1", "mill-lane")
    assert request_upgrade(state, ctx, "mill-lane") is state

    state = _own(state, "player-2", "bakers-row")
    assert request_upgrade(state, ctx, "mill-lane") is state


def test_upgrade_offer_and_confirm(ctx, two_player_game):
    state = _own(two_player_game, "player-1", *BROWN)

    offered = request_upgrade(state, ctx, "mill-lane")

    assert offered.pending_action == UpgradeOffer("mill-lane", "player-1", 50, 1)
    assert offered.pending_next_turn_index == 0

    upgraded = confirm_pending_action(offered, ctx)

    assert upgraded.property_state["mill-lane"].houses == 1
    assert upgraded.players[0].funds == 1450
    assert upgraded.pending_action is None
    assert upgraded.current_turn_index == 0
    assert upgraded.logs[-1] == "Alice developed Mill Lane to level 1."


def test_decline_upgrade_changes_nothing(ctx, two_player_game):
    state = _own(two_player_game, "player-1", *BROWN)
    offered = request_upgrade(state, ctx, "mill-lane")

    declined = decline_pending_action(offered, ctx)

    assert declined.pending_action is None
    assert declined.players == state.players
    assert declined.property_state == state.property_state
    assert declined.current_turn_index == 0


def test_unaffordable_upgrade_is_refused_on_confirm(ctx, two_player_game):
    state = _own(two_player_game, "player-1", *BROWN)
    state = replace(state, players=update_player(state.players, "player-1", funds=20))

    result = confirm_pending_action(request_upgrade(state, ctx, "mill-lane"), ctx)

    assert result.property_state["mill-lane"].houses == 0
    assert result.players[0].funds == 20
    assert result.logs[-1] == "Alice cannot afford the development."


def test_upgrade_refused_when_group_traded_away(ctx, two_player_game):
    state = _own(two_player_game, "player-1", *BROWN)
    offered = request_upgrade(state, ctx, "mill-lane")

    offer = TradeOffer(from_id="player-1", to_id="player-2", give_tiles=["bakers-row"], receive_cash=60)
    traded, _ = propose_trade(offered, ctx, offer)
    traded, executed = accept_trade(traded, ctx, "player-2")
    assert executed
    assert traded.property_state["bakers-row"].owner_id == "player-2"

    result = confirm_pending_action(traded, ctx)

    assert result.pending_action is None
    assert result.property_state["mill-lane"].houses == 0
    assert result.players == traded.players


def test_stale_upgrade_level_is_refused(ctx, two_player_game):
    state = _own(two_player_game, "player-1", *BROWN)
    offered = request_upgrade(state, ctx, "mill-lane")
    moved_on = replace(offered, property_state=update_property(offered.property_state, "mill-lane", houses=2))

    result = confirm_pending_action(moved_on, ctx)

    assert result.pending_action is None
    assert result.property_state["mill-lane"].houses == 2
    assert result.players == offered.players


def test_upgrade_only_for_acting_player(ctx, two_player_game):
    state = _own(two_player_game, "player-2", *BROWN)
    assert request_upgrade(state, ctx, "mill-lane") is state


def test_upgrade_blocked_at_top_tier_or_mortgaged(ctx, two_player_game):
    state = _own(two_player_game, "player-1", *BROWN)
    top = replace(state, property_state=update_property(state.property_state, "mill-lane", houses=5))
    assert request_upgrade(top, ctx, "mill-lane") is top

    mortgaged = replace(state, property_state=update_property(state.property_state, "mill-lane", mortgaged=True))
    assert request_upgrade(mortgaged, ctx, "mill-lane") is mortgaged


def test_railways_cannot_be_developed(ctx, two_player_game):
    state = _own(two_player_game, "player-1", "north-station", "east-station", "south-station", "west-station")
    assert request_upgrade(state, ctx, "north-station") is state


@pytest.mark.parametrize("level,expected", [(1, 50), (4, 50), (5, 100)])
def test_upgrade_cost(board, level, expected):
    assert upgrade_cost(board.get_tile_by_id("mill-lane"), level) == expected


def test_mortgage_and_redeem(ctx, two_player_game):
    state = _own(two_player_game, "player-1", "north-station")

    mortgaged = mortgage(state, ctx, "north-station")

    assert mortgaged.property_state["north-station"].mortgaged
    assert mortgaged.players[0].funds == 1600
    assert mortgaged.logs[-1] == "Alice mortgaged North Station for ZC 100."
    assert mortgage(mortgaged, ctx, "north-station") is mortgaged

    redeemed = redeem(mortgaged, ctx, "north-station")

    assert not redeemed.property_state["north-station"].mortgaged
    assert redeemed.players[0].funds == 1600 - 110
    assert redeemed.current_turn_index == state.current_turn_index


def test_developed_tile_cannot_be_mortgaged(ctx, two_player_game):
    state = _own(two_player_game, "player-1", *BROWN)
    state = replace(state, property_state=update_property(state.property_state, "mill-lane", houses=1))

    assert mortgage(state, ctx, "mill-lane") is state


def test_redeem_requires_funds(ctx, two_player_game):
    state = _own(two_player_game, "player-1", "north-station", mortgaged=True)
    state = replace(state, players=update_player(state.players, "player-1", funds=100))

    assert redeem(state, ctx, "north-station") is state


def test_redeem_cost_rounds_up(board):
    assert redeem_cost(board.get_tile_by_id("mill-lane"), 0.10) == 33
    assert redeem_cost(board.get_tile_by_id("north-station"), 0.10) == 110
