"""
High-level rules API for controlling game flow.
This module provides the public interface for game actions and legal move detection.
"""

from enum import Enum
from typing import Any, List

from tycoon import engine, jail, property_actions, trade
from tycoon.context import GameContext
from tycoon.exceptions import InvalidActionError
from tycoon.state import GamePhase, GameState


class ActionType(str, Enum):
    """Commands a player can issue during a game."""

    ROLL_DICE = "roll_dice"
    CONFIRM_PENDING = "confirm_pending"
    DECLINE_PENDING = "decline_pending"
    REQUEST_UPGRADE = "request_upgrade"
    MORTGAGE = "mortgage"
    REDEEM = "redeem"
    PROPOSE_TRADE = "propose_trade"
    ACCEPT_TRADE = "accept_trade"
    REJECT_TRADE = "reject_trade"
    PAY_JAIL_FINE = "pay_jail_fine"
    USE_JAIL_CARD = "use_jail_card"
    DISMISS_CARD = "dismiss_card"


class Action:
    """Represents a game action that can be taken."""

    def __init__(self, action_type: ActionType, **params: Any):
        self.action_type = action_type
        self.params = params

    def __repr__(self) -> str:
        return f"Action({self.action_type.value}, {self.params})"


def get_legal_actions(state: GameState, ctx: GameContext, player_id: str) -> List[Action]:
    """
    Get all legal actions available to a player.

    This is the main interface for controllers to decide which commands to offer.

    Args:
        state: Current game state
        ctx: Game collaborators
        player_id: Player to get actions for

    Returns:
        List of legal Action objects
    """
    if state.phase != GamePhase.ROLLING:
        return []

    player = state.get_player(player_id)
    if player is None:
        return []

    actions: List[Action] = _get_trade_actions(state, player_id)

    current_player = state.current_player
    if current_player is None or current_player.player_id != player_id:
        return actions

    if state.last_card is not None:
        actions.append(Action(ActionType.DISMISS_CARD))

    # A pending purchase or upgrade must be answered before anything else
    if state.pending_action is not None:
        if state.pending_action.player_id == player_id:
            actions.append(Action(ActionType.CONFIRM_PENDING))
            actions.append(Action(ActionType.DECLINE_PENDING))
        return actions

    actions.append(Action(ActionType.ROLL_DICE))

    if player.in_jail:
        if player.funds >= ctx.config.jail_fine:
            actions.append(Action(ActionType.PAY_JAIL_FINE, player_id=player_id))
        if player.has_get_out_of_jail:
            actions.append(Action(ActionType.USE_JAIL_CARD, player_id=player_id))

    actions.extend(_get_property_management_actions(state, ctx, player_id))

    if state.pending_trade is None:
        for other in state.players:
            if other.player_id != player_id:
                actions.append(Action(ActionType.PROPOSE_TRADE, to_id=other.player_id))

    return actions


def _get_property_management_actions(state: GameState, ctx: GameContext, player_id: str) -> List[Action]:
    """Get actions related to developing and mortgaging."""
    actions: List[Action] = []

    for tile_id in state.owned_tiles(player_id):
        if property_actions.can_upgrade(state, ctx, tile_id):
            actions.append(Action(ActionType.REQUEST_UPGRADE, tile_id=tile_id))
        if property_actions.can_mortgage(state, tile_id):
            actions.append(Action(ActionType.MORTGAGE, tile_id=tile_id))
        if property_actions.can_redeem(state, ctx, tile_id):
            actions.append(Action(ActionType.REDEEM, tile_id=tile_id))

    return actions


def _get_trade_actions(state: GameState, player_id: str) -> List[Action]:
    """Answers available to either party of the pending trade."""
    proposal = state.pending_trade
    if proposal is None:
        return []
    if proposal.to_id == player_id:
        return [
            Action(ActionType.ACCEPT_TRADE, actor_id=player_id),
            Action(ActionType.REJECT_TRADE, actor_id=player_id),
        ]
    if proposal.from_id == player_id:
        return [Action(ActionType.REJECT_TRADE, actor_id=player_id)]
    return []


def _acting_player_id(state: GameState, action: Action) -> str:
    player_id = action.params.get("player_id")
    if player_id is None and state.current_player is not None:
        player_id = state.current_player.player_id
    return player_id


def apply_action(state: GameState, ctx: GameContext, action: Action) -> GameState:
    """
    Apply an action to the game state.

    This is the main interface for executing moves. Commands that are not
    allowed right now leave the state unchanged.

    Args:
        state: Current game state
        ctx: Game collaborators
        action: Action to apply

    Returns:
        The next game state

    Raises:
        InvalidActionError: the action type is not a known command
    """
    action_type = action.action_type
    params = action.params

    if action_type == ActionType.ROLL_DICE:
        return engine.roll(state, ctx, params.get("dice"))

    elif action_type == ActionType.CONFIRM_PENDING:
        return engine.confirm_pending_action(state, ctx)

    elif action_type == ActionType.DECLINE_PENDING:
        return engine.decline_pending_action(state, ctx)

    elif action_type == ActionType.REQUEST_UPGRADE:
        return property_actions.request_upgrade(state, ctx, params["tile_id"])

    elif action_type == ActionType.MORTGAGE:
        return property_actions.mortgage(state, ctx, params["tile_id"])

    elif action_type == ActionType.REDEEM:
        return property_actions.redeem(state, ctx, params["tile_id"])

    elif action_type == ActionType.PROPOSE_TRADE:
        offer = params.get("offer")
        if offer is None:
            return state
        if not isinstance(offer, trade.TradeOffer):
            offer = trade.TradeOffer.model_validate(offer)
        next_state, _ = trade.propose_trade(state, ctx, offer)
        return next_state

    elif action_type == ActionType.ACCEPT_TRADE:
        next_state, _ = trade.accept_trade(state, ctx, params.get("actor_id"))
        return next_state

    elif action_type == ActionType.REJECT_TRADE:
        next_state, _ = trade.reject_trade(state, ctx, params.get("actor_id"))
        return next_state

    elif action_type == ActionType.PAY_JAIL_FINE:
        return jail.pay_jail_fine(state, ctx, _acting_player_id(state, action))

    elif action_type == ActionType.USE_JAIL_CARD:
        return jail.use_jail_release_card(state, ctx, _acting_player_id(state, action))

    elif action_type == ActionType.DISMISS_CARD:
        return engine.dismiss_drawn_card(state)

    raise InvalidActionError(f"Unknown action type: {action_type!r}")
