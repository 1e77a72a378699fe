"""
Money movement between players and the bank.

Payments never fail: a payer who cannot cover an amount hands over what they
have and goes bankrupt. Bankruptcy removes the player from the turn order and
passes their tiles to the creditor, or back to the bank.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from tycoon.context import GameContext
from tycoon.messages import format_funds
from tycoon.state import (
    Player,
    PropertyState,
    adjust_funds,
    find_player,
    find_player_index,
    update_player,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentOutcome:
    """Result of a payment or a bankruptcy."""

    players: Tuple[Player, ...]
    property_state: Mapping[str, PropertyState]
    logs: Tuple[str, ...]
    removed_index: Optional[int] = None
    bankrupt_player_id: Optional[str] = None


def pay(
    players: Tuple[Player, ...],
    property_state: Mapping[str, PropertyState],
    payer_id: str,
    receiver_id: Optional[str],
    amount: int,
    logs: Tuple[str, ...],
    ctx: GameContext,
) -> PaymentOutcome:
    """
    Transfer `amount` from a player to another player or, with no receiver, to the bank.

    Args:
        players: Current player order
        property_state: Current ownership map
        payer_id: Player who owes the money
        receiver_id: Player who is owed, or None for the bank
        amount: Amount owed; zero or negative amounts are ignored
        logs: Current rolling log
        ctx: Game collaborators

    Returns:
        PaymentOutcome; `removed_index` is set when the payer went bankrupt
    """
    unchanged = PaymentOutcome(players, property_state, logs)
    if amount <= 0:
        return unchanged

    payer = find_player(players, payer_id)
    if payer is None:
        return unchanged

    receiver = find_player(players, receiver_id) if receiver_id else None

    if payer.funds >= amount:
        players = adjust_funds(players, payer_id, -amount)
        if receiver is not None:
            players = adjust_funds(players, receiver.player_id, amount)
        logger.debug(f"{payer_id} paid {amount} to {receiver_id or 'bank'}")
        return PaymentOutcome(players, property_state, logs)

    available = payer.funds
    if available > 0 and receiver is not None:
        players = adjust_funds(players, receiver.player_id, available)
    players = update_player(players, payer_id, funds=0)
    logger.debug(f"{payer_id} owes {amount} but only has {available}")

    return handle_bankruptcy(players, property_state, payer_id, receiver_id, logs, ctx)


def handle_bankruptcy(
    players: Tuple[Player, ...],
    property_state: Mapping[str, PropertyState],
    bankrupt_id: str,
    creditor_id: Optional[str],
    logs: Tuple[str, ...],
    ctx: GameContext,
) -> PaymentOutcome:
    """
    Remove a bankrupt player and settle their tiles.

    With a creditor, every tile changes hands as-is (development and mortgage
    kept). Without one, tiles return to the bank undeveloped and unmortgaged.
    """
    index = find_player_index(players, bankrupt_id)
    if index is None:
        return PaymentOutcome(players, property_state, logs)

    bankrupt = players[index]
    creditor = find_player(players, creditor_id) if creditor_id != bankrupt_id else None

    next_property_state = {}
    for tile_id, meta in property_state.items():
        if meta.owner_id != bankrupt.player_id:
            next_property_state[tile_id] = meta
        elif creditor is not None:
            next_property_state[tile_id] = PropertyState(creditor.player_id, meta.houses, meta.mortgaged)
        else:
            next_property_state[tile_id] = PropertyState()

    remaining = players[:index] + players[index + 1:]
    if creditor is not None:
        logs = ctx.log(logs, "bankrupted_to_creditor", bankrupt=bankrupt.name, creditor=creditor.name)
    else:
        logs = ctx.log(logs, "bankrupted_bank", bankrupt=bankrupt.name)

    logger.info(
        f"Player {bankrupt.player_id} bankrupt at index {index}, "
        f"creditor: {creditor.player_id if creditor else 'bank'}"
    )

    return PaymentOutcome(
        players=remaining,
        property_state=next_property_state,
        logs=logs,
        removed_index=index,
        bankrupt_player_id=bankrupt.player_id,
    )


def credit_pass_start(
    players: Tuple[Player, ...],
    player_id: str,
    previous: int,
    next_position: int,
    moved_forward: bool,
    logs: Tuple[str, ...],
    ctx: GameContext,
) -> Tuple[Tuple[Player, ...], Tuple[str, ...], bool]:
    """
    Pay the pass-start bonus when a forward move wrapped past the origin.

    Returns:
        (players, logs, credited)
    """
    if not moved_forward or next_position >= previous:
        return players, logs, False

    player = find_player(players, player_id)
    if player is None:
        return players, logs, False

    bonus = ctx.config.pass_start_bonus
    players = adjust_funds(players, player_id, bonus)
    logs = ctx.log(logs, "collected_start", name=player.name, amount=format_funds(bonus))
    logger.debug(f"{player_id} passed start ({previous} -> {next_position})")
    return players, logs, True


def renormalize_turn_index(
    current_index: int, removed_index: Optional[int], new_length: int
) -> Tuple[int, bool]:
    """
    Shift the turn index after a player was removed from the order.

    Args:
        current_index: Index of the acting player before the removal
        removed_index: Index the removed player had, or None if nobody was removed
        new_length: Number of players after the removal

    Returns:
        (index, acting_player_removed). When the acting player was the one
        removed, the index points at whoever slid into their seat.
    """
    if removed_index is None:
        return current_index, False
    if removed_index < current_index:
        return current_index - 1, False
    if removed_index == current_index:
        return (current_index % new_length if new_length > 0 else 0), True
    return current_index, False
