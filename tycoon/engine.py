"""
Turn resolution.

`roll` is the heart of the game: one call consumes a dice roll and returns
the complete next snapshot, after movement, jail, tile effects, bankruptcy
and turn advancement have all been settled.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from tycoon.card_resolver import resolve_card
from tycoon.context import GameContext
from tycoon.jail import resolve_jail_state
from tycoon.ledger import credit_pass_start, pay, renormalize_turn_index
from tycoon.messages import format_funds
from tycoon.rent import calculate_rent, owns_full_group
from tycoon.spaces import TileType
from tycoon.state import (
    CardSnapshot,
    GamePhase,
    GameState,
    PurchaseOffer,
    UpgradeOffer,
    adjust_funds,
    find_player,
    settle_winner,
    update_player,
    update_property,
)

logger = logging.getLogger(__name__)


def collapse_consecutive_duplicates(path: Iterable[int]) -> Tuple[int, ...]:
    """Drop immediate repeats from a movement trail, keeping order."""
    result: List[int] = []
    for index in path:
        if not result or result[-1] != index:
            result.append(index)
    return tuple(result)


def can_roll(state: GameState) -> bool:
    """Rolling is only accepted mid-game with nothing awaiting confirmation."""
    return state.phase == GamePhase.ROLLING and bool(state.players) and state.pending_action is None


def roll(state: GameState, ctx: GameContext, dice: Optional[Tuple[int, int]] = None) -> GameState:
    """
    Roll the dice for the current player and resolve the whole turn.

    Args:
        state: Current snapshot
        ctx: Game collaborators
        dice: Optional fixed roll; by default `ctx.dice` is rolled

    Returns:
        The next snapshot, or `state` itself when a roll is not allowed now
    """
    if not can_roll(state):
        return state

    if dice is None:
        die_a, die_b = ctx.dice.roll().as_tuple()
    else:
        die_a, die_b = dice
    return resolve_roll(state, ctx, die_a, die_b)


def resolve_roll(state: GameState, ctx: GameContext, die_a: int, die_b: int) -> GameState:
    """Resolve a turn for an already-rolled pair of dice."""
    board = ctx.board
    config = ctx.config

    players = state.players
    property_state = state.property_state
    logs = state.logs
    path: List[int] = []

    current_index = state.current_turn_index if state.current_turn_index < len(players) else 0
    active = players[current_index]
    dice_total = die_a + die_b
    is_double = die_a == die_b
    consecutive_doubles = state.consecutive_doubles + 1 if is_double else 0
    stay_on_current = is_double
    last_card: Optional[CardSnapshot] = None
    chance_index = state.chance_index
    chest_index = state.chest_index

    logs = ctx.log(logs, "roll", name=active.name, a=die_a, b=die_b)
    logger.debug(f"{active.player_id} rolled {die_a}+{die_b} at index {current_index}")

    base = replace(
        state,
        last_roll=(die_a, die_b),
        last_card=None,
        last_movement_path=(),
        pending_action=None,
        pending_next_turn_index=None,
    )

    def finish(next_index: int, doubles: int) -> GameState:
        next_state = replace(
            base,
            players=players,
            property_state=property_state,
            logs=logs,
            current_turn_index=next_index,
            consecutive_doubles=doubles,
            last_card=last_card,
            chance_index=chance_index,
            chest_index=chest_index,
            last_movement_path=collapse_consecutive_duplicates(path),
        )
        return settle_winner(next_state, ctx.log)

    # Step 1: too many doubles in a row
    if is_double and consecutive_doubles >= config.max_consecutive_doubles:
        players = update_player(
            players, active.player_id, position=board.jail_index, in_jail=True, jail_turns=0
        )
        logs = ctx.log(logs, "three_doubles", name=active.name)
        logger.debug(f"{active.player_id} jailed for {consecutive_doubles} doubles")
        return finish((current_index + 1) % len(players), 0)

    # Step 2: jail
    jail = resolve_jail_state(active.player_id, die_a, die_b, players, property_state, logs, ctx)
    players, property_state, logs = jail.players, jail.property_state, jail.logs
    current_index, acting_removed = renormalize_turn_index(current_index, jail.removed_index, len(players))
    if acting_removed:
        return finish(current_index, 0)
    if not jail.can_move:
        return finish((current_index + 1) % len(players), 0)

    # Step 3: movement
    active = players[current_index]
    previous = active.position
    next_position = board.normalize_position(previous + dice_total)
    players = update_player(players, active.player_id, position=next_position)
    players, logs, _ = credit_pass_start(
        players, active.player_id, previous, next_position, dice_total > 0, logs, ctx
    )
    path.extend(board.movement_path(previous, dice_total))

    # Step 4: the tile landed on
    tile = board.get_tile(next_position)
    pending_action: Optional[PurchaseOffer] = None
    pending_next_turn_index: Optional[int] = None
    removed_index: Optional[int] = None

    if tile.is_ownable:
        meta = property_state.get(tile.tile_id)
        if meta is not None and not meta.is_owned():
            price = tile.price or 0
            pending_action = PurchaseOffer(tile.tile_id, active.player_id, price)
            pending_next_turn_index = current_index if stay_on_current else (current_index + 1) % len(players)
            logs = ctx.log(logs, "available", tile=tile.name, price=format_funds(price))
        elif meta is not None and meta.owner_id != active.player_id:
            if meta.mortgaged:
                logs = ctx.log(logs, "mortgaged_no_rent", tile=tile.name)
            else:
                rent = calculate_rent(tile, dice_total, property_state, meta.owner_id, board)
                owner = find_player(players, meta.owner_id)
                if owner is not None:
                    logs = ctx.log(
                        logs, "owes_rent", payer=active.name, amount=format_funds(rent), owner=owner.name
                    )
                payment = pay(players, property_state, active.player_id, meta.owner_id, rent, logs, ctx)
                players, property_state, logs = payment.players, payment.property_state, payment.logs
                removed_index = payment.removed_index

    elif tile.tile_type == TileType.TAX:
        fee = tile.price or config.default_tax
        logs = ctx.log(logs, "paid_tax", name=active.name, amount=format_funds(fee))
        payment = pay(players, property_state, active.player_id, None, fee, logs, ctx)
        players, property_state, logs = payment.players, payment.property_state, payment.logs
        removed_index = payment.removed_index

    elif tile.tile_type in (TileType.CHANCE, TileType.CHEST):
        if tile.tile_type == TileType.CHANCE:
            deck_name, deck = "chance", board.chance_cards
            card = deck[chance_index % len(deck)]
            chance_index = (chance_index + 1) % len(deck)
        else:
            deck_name, deck = "chest", board.chest_cards
            card = deck[chest_index % len(deck)]
            chest_index = (chest_index + 1) % len(deck)

        outcome = resolve_card(card, active.player_id, players, property_state, logs, ctx)
        players, property_state, logs = outcome.players, outcome.property_state, outcome.logs
        removed_index = outcome.removed_index
        last_card = CardSnapshot(deck_name, card.card_id, card.title, card.description)
        if removed_index is None:
            if outcome.follow_up_position is not None:
                players = update_player(players, active.player_id, position=outcome.follow_up_position)
            path.extend(outcome.movement_path)
            holder = find_player(players, active.player_id)
            if holder is not None and holder.in_jail:
                stay_on_current = False
                consecutive_doubles = 0

    elif tile.tile_type == TileType.GO_TO_JAIL:
        path.extend(board.forward_path(next_position, board.jail_index))
        players = update_player(
            players, active.player_id, position=board.jail_index, in_jail=True, jail_turns=0
        )
        logs = ctx.log(logs, "redirected_to_city_hall", name=active.name)
        stay_on_current = False
        consecutive_doubles = 0

    if removed_index is not None:
        current_index, acting_removed = renormalize_turn_index(current_index, removed_index, len(players))
        if acting_removed:
            return finish(current_index, 0)

    if pending_action is not None:
        next_state = replace(
            base,
            players=players,
            property_state=property_state,
            logs=logs,
            current_turn_index=current_index,
            consecutive_doubles=consecutive_doubles,
            pending_action=pending_action,
            pending_next_turn_index=pending_next_turn_index,
            last_card=last_card,
            chance_index=chance_index,
            chest_index=chest_index,
            last_movement_path=collapse_consecutive_duplicates(path),
        )
        return settle_winner(next_state, ctx.log)

    # Step 5: who plays next
    if stay_on_current:
        return finish(current_index % len(players), consecutive_doubles)
    return finish((current_index + 1) % len(players), 0)


def _advance_after_pending(state: GameState, **changes) -> GameState:
    """Clear the pending action and move to the pre-computed next turn."""
    players = changes.get("players", state.players)
    if state.pending_next_turn_index is not None:
        next_index = state.pending_next_turn_index
    else:
        next_index = (state.current_turn_index + 1) % max(len(players), 1)
    same_player = next_index == state.current_turn_index
    return replace(
        state,
        pending_action=None,
        pending_next_turn_index=None,
        current_turn_index=next_index,
        consecutive_doubles=state.consecutive_doubles if same_player else 0,
        **changes,
    )


def _clear_pending(state: GameState, **changes) -> GameState:
    return replace(state, pending_action=None, pending_next_turn_index=None, **changes)


def _confirm_purchase(state: GameState, ctx: GameContext, offer: PurchaseOffer) -> GameState:
    tile = ctx.board.get_tile_by_id(offer.tile_id)
    buyer = state.get_player(offer.player_id)
    if tile is None or buyer is None:
        return _clear_pending(state)

    meta = state.property_state.get(tile.tile_id)
    if meta is None or meta.is_owned():
        return _advance_after_pending(state)

    if buyer.funds < offer.price:
        logs = ctx.log(state.logs, "cannot_afford", name=buyer.name, tile=tile.name)
        return _advance_after_pending(state, logs=logs)

    players = adjust_funds(state.players, buyer.player_id, -offer.price)
    property_state = update_property(state.property_state, tile.tile_id, owner_id=buyer.player_id)
    logs = ctx.log(
        state.logs, "purchased", name=buyer.name, tile=tile.name, price=format_funds(offer.price)
    )
    logger.debug(f"{buyer.player_id} bought {tile.tile_id} for {offer.price}")
    return _advance_after_pending(state, players=players, property_state=property_state, logs=logs)


def _confirm_upgrade(state: GameState, ctx: GameContext, offer: UpgradeOffer) -> GameState:
    tile = ctx.board.get_tile_by_id(offer.tile_id)
    upgrader = state.get_player(offer.player_id)
    meta = state.property_state.get(offer.tile_id)
    if tile is None or upgrader is None or meta is None:
        return _clear_pending(state)

    if meta.owner_id != upgrader.player_id or meta.mortgaged:
        return _clear_pending(state)

    # group and level may have changed since the offer was raised
    if not owns_full_group(upgrader.player_id, tile, state.property_state, ctx.board):
        return _clear_pending(state)
    if meta.houses + 1 != offer.next_level or offer.next_level > ctx.config.max_upgrade_level:
        return _clear_pending(state)

    if upgrader.funds < offer.price:
        logs = ctx.log(state.logs, "cannot_afford_upgrade", name=upgrader.name)
        return _clear_pending(state, logs=logs)

    players = adjust_funds(state.players, upgrader.player_id, -offer.price)
    property_state = update_property(state.property_state, tile.tile_id, houses=offer.next_level)
    logs = ctx.log(state.logs, "upgraded", name=upgrader.name, tile=tile.name, level=offer.next_level)
    logger.debug(f"{upgrader.player_id} developed {tile.tile_id} to {offer.next_level}")
    return _clear_pending(state, players=players, property_state=property_state, logs=logs)


def confirm_pending_action(state: GameState, ctx: GameContext) -> GameState:
    """
    Accept the pending purchase or upgrade.

    An unaffordable purchase is treated as a decline. Purchases then hand the
    turn to the pre-computed next player; upgrades never move the turn.
    """
    offer = state.pending_action
    if isinstance(offer, PurchaseOffer):
        return _confirm_purchase(state, ctx, offer)
    if isinstance(offer, UpgradeOffer):
        return _confirm_upgrade(state, ctx, offer)
    return state


def decline_pending_action(state: GameState, ctx: GameContext) -> GameState:
    """Turn down the pending purchase or upgrade. Funds and ownership never change."""
    offer = state.pending_action
    if isinstance(offer, PurchaseOffer):
        return _advance_after_pending(state, logs=ctx.log(state.logs, "purchase_declined"))
    if isinstance(offer, UpgradeOffer):
        return _clear_pending(state)
    return state


def dismiss_drawn_card(state: GameState) -> GameState:
    """Hide the last drawn card."""
    if state.last_card is None:
        return state
    return replace(state, last_card=None)
