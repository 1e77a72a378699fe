"""
Applies the effect of a drawn Chance or Community Chest card.
"""

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from tycoon.cards import (
    AdvanceToNext,
    CardDefinition,
    Collect,
    GetOutOfJail,
    GoToJail,
    LuckCheck,
    MoveRelative,
    MoveTo,
    Pay,
    Repair,
)
from tycoon.context import GameContext
from tycoon.ledger import PaymentOutcome, credit_pass_start, pay
from tycoon.messages import format_funds
from tycoon.state import Player, PropertyState, adjust_funds, find_player, update_player

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardOutcome:
    """
    Ledger after the card, plus any movement it caused.

    `follow_up_position` is where the card left the player, or None when the
    card did not move them. `removed_index` is set when a payment bankrupted
    the player.
    """

    players: Tuple[Player, ...]
    property_state: Mapping[str, PropertyState]
    logs: Tuple[str, ...]
    follow_up_position: Optional[int] = None
    movement_path: Tuple[int, ...] = ()
    removed_index: Optional[int] = None


def _from_payment(result: PaymentOutcome) -> CardOutcome:
    return CardOutcome(
        result.players, result.property_state, result.logs, removed_index=result.removed_index
    )


def repair_cost(
    effect: Repair, player_id: str, property_state: Mapping[str, PropertyState], max_level: int
) -> int:
    """Levels below the top tier cost `house_cost` each; a landmark costs `hotel_cost`."""
    total = 0
    for meta in property_state.values():
        if meta.owner_id != player_id:
            continue
        houses = min(meta.houses, max_level - 1)
        landmarks = 1 if meta.houses == max_level else 0
        total += houses * effect.house_cost + landmarks * effect.hotel_cost
    return total


def resolve_card(
    card: CardDefinition,
    player_id: str,
    players: Tuple[Player, ...],
    property_state: Mapping[str, PropertyState],
    logs: Tuple[str, ...],
    ctx: GameContext,
) -> CardOutcome:
    """
    Apply one card to the player who drew it.

    Args:
        card: The drawn card
        player_id: Player who drew it
        players: Current player order
        property_state: Current ownership map
        logs: Current rolling log
        ctx: Game collaborators

    Returns:
        CardOutcome with the updated ledger and any follow-up movement
    """
    player = find_player(players, player_id)
    if player is None:
        return CardOutcome(players, property_state, logs)

    board = ctx.board
    effect = card.effect
    logs = ctx.log(logs, "card_drawn", title=card.title)
    logger.debug(f"{player_id} resolves card {card.card_id} ({type(effect).__name__})")

    if isinstance(effect, Collect):
        players = adjust_funds(players, player_id, effect.amount)
        logs = ctx.log(logs, "received", name=player.name, amount=format_funds(effect.amount))
        return CardOutcome(players, property_state, logs)

    if isinstance(effect, Pay):
        return _from_payment(pay(players, property_state, player_id, None, effect.amount, logs, ctx))

    if isinstance(effect, Repair):
        total = repair_cost(effect, player_id, property_state, ctx.config.max_upgrade_level)
        if total > 0:
            logs = ctx.log(logs, "repair_bill", name=player.name, amount=format_funds(total))
        return _from_payment(pay(players, property_state, player_id, None, total, logs, ctx))

    if isinstance(effect, GetOutOfJail):
        players = update_player(players, player_id, has_get_out_of_jail=True)
        logs = ctx.log(logs, "received_release", name=player.name)
        return CardOutcome(players, property_state, logs)

    if isinstance(effect, GoToJail):
        path = board.forward_path(player.position, board.jail_index)
        players = update_player(players, player_id, position=board.jail_index, in_jail=True, jail_turns=0)
        logs = ctx.log(logs, "redirected_to_city_hall", name=player.name)
        return CardOutcome(players, property_state, logs, board.jail_index, tuple(path))

    if isinstance(effect, LuckCheck):
        roll = ctx.dice.roll()
        if roll.is_double:
            players = adjust_funds(players, player_id, effect.success)
            logs = ctx.log(logs, "luck_success", name=player.name, amount=format_funds(effect.success))
            return CardOutcome(players, property_state, logs)
        logs = ctx.log(logs, "luck_failure", name=player.name, amount=format_funds(effect.failure))
        return _from_payment(pay(players, property_state, player_id, None, effect.failure, logs, ctx))

    previous = player.position
    if isinstance(effect, MoveTo):
        target = board.normalize_position(effect.target)
        path: List[int] = board.forward_path(previous, target)
        moved_forward = True
    elif isinstance(effect, MoveRelative):
        target = board.normalize_position(previous + effect.offset)
        path = board.movement_path(previous, effect.offset)
        moved_forward = effect.offset > 0
    elif isinstance(effect, AdvanceToNext):
        steps = board.steps_to_next(previous, effect.tile_type)
        if steps is None:
            return CardOutcome(players, property_state, logs)
        target = board.normalize_position(previous + steps)
        path = board.movement_path(previous, steps)
        moved_forward = True
    else:
        logger.warning(f"Card {card.card_id} has an unsupported effect: {effect!r}")
        return CardOutcome(players, property_state, logs)

    players = update_player(players, player_id, position=target)
    players, logs, _ = credit_pass_start(players, player_id, previous, target, moved_forward, logs, ctx)
    return CardOutcome(players, property_state, logs, target, tuple(path))
