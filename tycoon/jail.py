"""
Jail handling.

A jailed player leaves by holding a release card, by rolling doubles, or by
paying the fine. After `max_jail_turns` failed attempts the fine is forced.
"""

import logging
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple

from tycoon.context import GameContext
from tycoon.ledger import pay, renormalize_turn_index
from tycoon.messages import format_funds
from tycoon.state import (
    GameState,
    Player,
    PropertyState,
    find_player,
    settle_winner,
    update_player,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JailOutcome:
    """Whether the acting player may move this turn, plus the updated ledger."""

    can_move: bool
    players: Tuple[Player, ...]
    property_state: Mapping[str, PropertyState]
    logs: Tuple[str, ...]
    removed_index: Optional[int] = None


def _release(players: Tuple[Player, ...], player_id: str) -> Tuple[Player, ...]:
    return update_player(players, player_id, in_jail=False, jail_turns=0)


def resolve_jail_state(
    player_id: str,
    die_a: int,
    die_b: int,
    players: Tuple[Player, ...],
    property_state: Mapping[str, PropertyState],
    logs: Tuple[str, ...],
    ctx: GameContext,
) -> JailOutcome:
    """
    Decide whether a player may move this turn.

    Order of checks: not jailed, release card, doubles, failed attempt. The
    third failed attempt forces the fine; a player who cannot pay it goes
    bankrupt and does not move.
    """
    player = find_player(players, player_id)
    if player is None or not player.in_jail:
        return JailOutcome(True, players, property_state, logs)

    if player.has_get_out_of_jail:
        players = update_player(players, player_id, has_get_out_of_jail=False, in_jail=False, jail_turns=0)
        logs = ctx.log(logs, "used_release", name=player.name)
        return JailOutcome(True, players, property_state, logs)

    if die_a == die_b:
        players = _release(players, player_id)
        logs = ctx.log(logs, "rolled_doubles_left", name=player.name)
        return JailOutcome(True, players, property_state, logs)

    jail_turns = player.jail_turns + 1
    players = update_player(players, player_id, jail_turns=jail_turns)
    logs = ctx.log(
        logs, "waits_in_jail", name=player.name, current=jail_turns, max=ctx.config.max_jail_turns
    )

    if jail_turns < ctx.config.max_jail_turns:
        return JailOutcome(False, players, property_state, logs)

    fine = ctx.config.jail_fine
    result = pay(players, property_state, player_id, None, fine, logs, ctx)
    if result.bankrupt_player_id == player_id:
        logger.info(f"Player {player_id} could not pay the jail fine")
        return JailOutcome(False, result.players, result.property_state, result.logs, result.removed_index)

    players = _release(result.players, player_id)
    logs = ctx.log(result.logs, "paid_exit", name=player.name, amount=format_funds(fine))
    return JailOutcome(True, players, result.property_state, logs, result.removed_index)


def pay_jail_fine(state: GameState, ctx: GameContext, player_id: str) -> GameState:
    """
    A jailed player pays the fine before rolling.

    A player who cannot pay goes bankrupt to the bank; the turn index is
    shifted to account for the removal.
    """
    player = state.get_player(player_id)
    if player is None or not player.in_jail:
        return state

    fine = ctx.config.jail_fine
    result = pay(state.players, state.property_state, player_id, None, fine, state.logs, ctx)

    if result.bankrupt_player_id == player_id:
        index, _ = renormalize_turn_index(
            state.current_turn_index, result.removed_index, len(result.players)
        )
        pending_action = state.pending_action
        pending_next = state.pending_next_turn_index
        if pending_action is not None and pending_action.player_id == player_id:
            pending_action, pending_next = None, None
        elif pending_next is not None:
            pending_next, _ = renormalize_turn_index(pending_next, result.removed_index, len(result.players))
        next_state = replace(
            state,
            players=result.players,
            property_state=result.property_state,
            logs=result.logs,
            current_turn_index=index,
            pending_action=pending_action,
            pending_next_turn_index=pending_next,
        )
        return settle_winner(next_state, ctx.log)

    players = _release(result.players, player_id)
    logs = ctx.log(result.logs, "paid_exit", name=player.name, amount=format_funds(fine))
    return replace(state, players=players, property_state=result.property_state, logs=logs)


def use_jail_release_card(state: GameState, ctx: GameContext, player_id: str) -> GameState:
    """A jailed player spends their release card. No-op without one."""
    player = state.get_player(player_id)
    if player is None or not player.in_jail or not player.has_get_out_of_jail:
        return state

    players = update_player(
        state.players, player_id, has_get_out_of_jail=False, in_jail=False, jail_turns=0
    )
    logs = ctx.log(state.logs, "used_release", name=player.name)
    return replace(state, players=players, logs=logs)
