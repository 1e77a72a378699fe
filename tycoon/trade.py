"""
Two-party trades.

Trade flow:
1. A player proposes cash and/or tiles in exchange for the recipient's
2. The recipient accepts or declines, or the proposer withdraws
3. On acceptance everything is re-validated and then swapped atomically

At most one proposal is pending at a time.
"""

import logging
import math
import uuid
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from tycoon.context import GameContext
from tycoon.state import GameState, TradeProposal, adjust_funds, update_property

logger = logging.getLogger(__name__)


class TradeOffer(BaseModel):
    """
    Raw trade input.

    Cash is floored and clamped at zero; tile ids are de-duplicated keeping
    their first occurrence. Ownership is checked against the game state by
    `propose_trade`.
    """

    from_id: str
    to_id: str
    give_cash: int = 0
    receive_cash: int = 0
    give_tiles: List[str] = Field(default_factory=list)
    receive_tiles: List[str] = Field(default_factory=list)

    @field_validator("give_cash", "receive_cash", mode="before")
    @classmethod
    def normalize_cash(cls, value) -> int:
        if value is None:
            return 0
        try:
            return max(0, math.floor(float(value)))
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"cash must be a number, got {value!r}")

    @field_validator("give_tiles", "receive_tiles", mode="before")
    @classmethod
    def unique_tiles(cls, value) -> List[str]:
        if value is None:
            return []
        return list(dict.fromkeys(value))


def create_trade_id() -> str:
    return f"trade-{uuid.uuid4().hex[:12]}"


def _is_empty(give_cash: int, receive_cash: int, give_tiles, receive_tiles) -> bool:
    return give_cash == 0 and receive_cash == 0 and not give_tiles and not receive_tiles


def _held_by(state: GameState, tile_ids: Iterable[str], owner_id: str) -> bool:
    return all(
        tile_id in state.property_state and state.property_state[tile_id].owner_id == owner_id
        for tile_id in tile_ids
    )


def propose_trade(state: GameState, ctx: GameContext, offer: TradeOffer) -> Tuple[GameState, bool]:
    """
    Put a trade on the table.

    The proposal is refused, leaving the state untouched, when another one is
    pending, a party is unknown or both parties are the same player, nothing
    is offered, either side lacks the cash they would hand over, or a listed
    tile is not currently owned by the party that would hand it over.

    Returns:
        (next_state, accepted)
    """
    if state.pending_trade is not None:
        return state, False

    from_player = state.get_player(offer.from_id)
    to_player = state.get_player(offer.to_id)
    if from_player is None or to_player is None or from_player.player_id == to_player.player_id:
        return state, False

    if _is_empty(offer.give_cash, offer.receive_cash, offer.give_tiles, offer.receive_tiles):
        return state, False

    if from_player.funds < offer.give_cash or to_player.funds < offer.receive_cash:
        return state, False

    if not _held_by(state, offer.give_tiles, from_player.player_id):
        return state, False
    if not _held_by(state, offer.receive_tiles, to_player.player_id):
        return state, False

    proposal = TradeProposal(
        trade_id=create_trade_id(),
        from_id=from_player.player_id,
        to_id=to_player.player_id,
        give_cash=offer.give_cash,
        receive_cash=offer.receive_cash,
        give_tiles=tuple(offer.give_tiles),
        receive_tiles=tuple(offer.receive_tiles),
    )
    logs = ctx.log(state.logs, "trade_proposed", from_name=from_player.name, to_name=to_player.name)
    logger.debug(f"Trade {proposal.trade_id} proposed: {proposal}")
    return replace(state, pending_trade=proposal, logs=logs), True


def accept_trade(
    state: GameState, ctx: GameContext, actor_id: Optional[str] = None
) -> Tuple[GameState, bool]:
    """
    Execute the pending trade.

    Funds and ownership are re-checked first. On a mismatch the proposal is
    voided with a log line naming the reason and nothing else changes.

    Args:
        state: Current snapshot
        ctx: Game collaborators
        actor_id: Who is accepting; when given it must be the recipient

    Returns:
        (next_state, executed)
    """
    trade = state.pending_trade
    if trade is None:
        return state, False
    if actor_id is not None and actor_id != trade.to_id:
        return state, False

    from_player = state.get_player(trade.from_id)
    to_player = state.get_player(trade.to_id)
    if from_player is None or to_player is None:
        return replace(state, pending_trade=None), False

    if from_player.funds < trade.give_cash or to_player.funds < trade.receive_cash:
        logs = ctx.log(state.logs, "trade_failed_funds", from_name=from_player.name, to_name=to_player.name)
        logger.debug(f"Trade {trade.trade_id} voided: insufficient funds")
        return replace(state, pending_trade=None, logs=logs), False

    if not _held_by(state, trade.give_tiles, from_player.player_id) or not _held_by(
        state, trade.receive_tiles, to_player.player_id
    ):
        logs = ctx.log(
            state.logs, "trade_failed_ownership", from_name=from_player.name, to_name=to_player.name
        )
        logger.debug(f"Trade {trade.trade_id} voided: ownership changed")
        return replace(state, pending_trade=None, logs=logs), False

    net = trade.receive_cash - trade.give_cash
    players = adjust_funds(state.players, from_player.player_id, net)
    players = adjust_funds(players, to_player.player_id, -net)

    property_state = state.property_state
    for tile_id in trade.give_tiles:
        property_state = update_property(property_state, tile_id, owner_id=to_player.player_id)
    for tile_id in trade.receive_tiles:
        property_state = update_property(property_state, tile_id, owner_id=from_player.player_id)

    logs = ctx.log(state.logs, "trade_completed", from_name=from_player.name, to_name=to_player.name)
    logger.info(f"Trade {trade.trade_id} completed between {from_player.player_id} and {to_player.player_id}")
    return replace(state, players=players, property_state=property_state, pending_trade=None, logs=logs), True


def reject_trade(
    state: GameState, ctx: GameContext, actor_id: Optional[str] = None
) -> Tuple[GameState, bool]:
    """
    Clear the pending trade.

    The actor defaults to the recipient. When the proposer is the actor the
    offer is withdrawn, otherwise it is declined. Nobody else may clear it.

    Returns:
        (next_state, cleared)
    """
    trade = state.pending_trade
    if trade is None:
        return state, False
    if actor_id is not None and actor_id not in (trade.from_id, trade.to_id):
        return state, False

    from_player = state.get_player(trade.from_id)
    to_player = state.get_player(trade.to_id)
    actor = state.get_player(actor_id) if actor_id else None
    actor = actor or to_player or from_player

    if actor is not None and actor.player_id == trade.from_id:
        logs = ctx.log(
            state.logs,
            "trade_withdrawn",
            actor=actor.name,
            counterparty=to_player.name if to_player else "opponent",
        )
    else:
        logs = ctx.log(
            state.logs,
            "trade_declined",
            actor=actor.name if actor else "Player",
            counterparty=from_player.name if from_player else "the offer",
        )
    return replace(state, pending_trade=None, logs=logs), True
