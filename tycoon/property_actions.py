"""
Development and mortgaging of owned tiles.

None of these commands move the turn. Upgrades are a two-step exchange:
`request_upgrade` raises an `UpgradeOffer` that the player then confirms or
declines through the engine.
"""

import logging
import math
from dataclasses import replace

from tycoon.context import GameContext
from tycoon.messages import format_funds
from tycoon.rent import owns_full_group
from tycoon.spaces import Tile, TileType
from tycoon.state import GamePhase, GameState, UpgradeOffer, adjust_funds, update_property

logger = logging.getLogger(__name__)


def upgrade_cost(tile: Tile, next_level: int, max_level: int = 5) -> int:
    """Cost of developing a tile to `next_level`. The top tier costs double."""
    house_cost = tile.house_cost or 0
    if next_level >= max_level:
        return house_cost * 2
    return house_cost


def redeem_cost(tile: Tile, interest_rate: float) -> int:
    """Mortgage value plus interest, rounded up."""
    # round() first so 100 * 1.1 does not ceil to 111
    return math.ceil(round(tile.mortgage_value * (1 + interest_rate), 6))


def _acting_owner(state: GameState, tile_id: str):
    """The current player and the tile's ownership record, if they own it."""
    if state.phase != GamePhase.ROLLING:
        return None, None
    player = state.current_player
    meta = state.property_state.get(tile_id)
    if player is None or meta is None or meta.owner_id != player.player_id:
        return None, None
    return player, meta


def can_upgrade(state: GameState, ctx: GameContext, tile_id: str) -> bool:
    """Check if the acting player could ask to develop a tile right now."""
    if state.pending_action is not None:
        return False
    player, meta = _acting_owner(state, tile_id)
    tile = ctx.board.get_tile_by_id(tile_id)
    if player is None or tile is None:
        return False
    if tile.tile_type != TileType.PROPERTY or not tile.group:
        return False
    if meta.mortgaged or meta.houses >= ctx.config.max_upgrade_level:
        return False
    if not owns_full_group(player.player_id, tile, state.property_state, ctx.board):
        return False
    return upgrade_cost(tile, meta.houses + 1, ctx.config.max_upgrade_level) > 0


def request_upgrade(state: GameState, ctx: GameContext, tile_id: str) -> GameState:
    """
    Raise an upgrade offer for one of the acting player's tiles.

    The player must own the whole color group, the tile must be unmortgaged
    and below the top tier. Affordability is checked on confirmation.
    """
    if not can_upgrade(state, ctx, tile_id):
        return state

    player = state.current_player
    tile = ctx.board.get_tile_by_id(tile_id)
    next_level = state.property_state[tile_id].houses + 1
    price = upgrade_cost(tile, next_level, ctx.config.max_upgrade_level)
    logger.debug(f"{player.player_id} requests level {next_level} on {tile_id} for {price}")
    return replace(
        state,
        pending_action=UpgradeOffer(tile_id, player.player_id, price, next_level),
        pending_next_turn_index=state.current_turn_index,
    )


def can_mortgage(state: GameState, tile_id: str) -> bool:
    _, meta = _acting_owner(state, tile_id)
    return meta is not None and not meta.mortgaged and meta.houses == 0


def mortgage(state: GameState, ctx: GameContext, tile_id: str) -> GameState:
    """Mortgage an undeveloped tile owned by the acting player for its mortgage value."""
    tile = ctx.board.get_tile_by_id(tile_id)
    if tile is None or not can_mortgage(state, tile_id):
        return state

    player = state.current_player
    value = tile.mortgage_value
    players = adjust_funds(state.players, player.player_id, value)
    property_state = update_property(state.property_state, tile_id, mortgaged=True)
    logs = ctx.log(state.logs, "mortgaged", name=player.name, tile=tile.name, value=format_funds(value))
    logger.debug(f"{player.player_id} mortgaged {tile_id} for {value}")
    return replace(state, players=players, property_state=property_state, logs=logs)


def can_redeem(state: GameState, ctx: GameContext, tile_id: str) -> bool:
    player, meta = _acting_owner(state, tile_id)
    tile = ctx.board.get_tile_by_id(tile_id)
    if player is None or tile is None or not meta.mortgaged:
        return False
    return player.funds >= redeem_cost(tile, ctx.config.mortgage_interest_rate)


def redeem(state: GameState, ctx: GameContext, tile_id: str) -> GameState:
    """Lift the mortgage on a tile, paying the mortgage value plus interest."""
    if not can_redeem(state, ctx, tile_id):
        return state

    player = state.current_player
    tile = ctx.board.get_tile_by_id(tile_id)
    cost = redeem_cost(tile, ctx.config.mortgage_interest_rate)
    players = adjust_funds(state.players, player.player_id, -cost)
    property_state = update_property(state.property_state, tile_id, mortgaged=False)
    logs = ctx.log(state.logs, "redeemed", name=player.name, tile=tile.name, value=format_funds(cost))
    logger.debug(f"{player.player_id} redeemed {tile_id} for {cost}")
    return replace(state, players=players, property_state=property_state, logs=logs)
