"""
Stateful façade over the pure transitions.

`Game` owns the current snapshot and is the only place it is replaced. Every
command runs the matching transition, stores the result and notifies
subscribers with a short cue ("dice", "card" or "ui") that a presentation
layer can map to a sound or an animation.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from tycoon import engine, jail, lobby, property_actions, trade
from tycoon.config import GameConfig
from tycoon.context import GameContext
from tycoon.rules import Action, ActionType, apply_action, get_legal_actions
from tycoon.snapshot import GameSnapshot, serialize_snapshot
from tycoon.state import GamePhase, GameState

logger = logging.getLogger(__name__)

Listener = Callable[[str, GameState], None]

CUE_DICE = "dice"
CUE_CARD = "card"
CUE_UI = "ui"


class Game:
    """A single game table."""

    def __init__(self, ctx: Optional[GameContext] = None, state: Optional[GameState] = None):
        self.ctx = ctx or GameContext()
        self.state = state or lobby.reset(self.ctx)
        self._listeners: List[Listener] = []

    @classmethod
    def from_settings(cls) -> "Game":
        """Build a game whose rule constants come from the environment."""
        return cls(GameContext(config=GameConfig.from_settings()))

    # Listeners

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback for transition cues.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, cue: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(cue, self.state)
            except Exception:
                logger.exception(f"Listener failed on cue {cue!r}")

    def _commit(self, next_state: GameState, cue: str = CUE_UI) -> bool:
        """Store a transition result. Returns whether anything changed."""
        if next_state is self.state:
            return False
        self.state = next_state
        self._notify(cue)
        return True

    # Lobby

    def set_player_count(self, count: int) -> None:
        self._commit(lobby.set_player_count(self.state, count))

    def add_player(self, seat: lobby.PlayerSeat) -> None:
        self._commit(lobby.add_player(self.state, self.ctx, seat))

    def set_players(self, seats: Sequence[lobby.PlayerSeat]) -> None:
        self._commit(lobby.set_players(self.state, self.ctx, seats))

    def update_phase(self, phase: GamePhase) -> None:
        self._commit(lobby.update_phase(self.state, phase))

    def restart(self) -> None:
        self._commit(lobby.reset(self.ctx))

    # Turn

    def roll(self, dice: Optional[Tuple[int, int]] = None) -> bool:
        """Roll for the current player. Returns False when rolling is not allowed."""
        next_state = engine.roll(self.state, self.ctx, dice)
        if not self._commit(next_state, CUE_DICE):
            return False
        if next_state.last_card is not None:
            self._notify(CUE_CARD)
        return True

    def confirm_pending_action(self) -> bool:
        return self._commit(engine.confirm_pending_action(self.state, self.ctx))

    def decline_pending_action(self) -> bool:
        return self._commit(engine.decline_pending_action(self.state, self.ctx))

    def dismiss_drawn_card(self) -> bool:
        return self._commit(engine.dismiss_drawn_card(self.state))

    def pay_jail_fine(self, player_id: str) -> bool:
        return self._commit(jail.pay_jail_fine(self.state, self.ctx, player_id))

    def use_jail_release_card(self, player_id: str) -> bool:
        return self._commit(jail.use_jail_release_card(self.state, self.ctx, player_id))

    # Property management

    def request_upgrade(self, tile_id: str) -> bool:
        return self._commit(property_actions.request_upgrade(self.state, self.ctx, tile_id))

    def mortgage(self, tile_id: str) -> bool:
        return self._commit(property_actions.mortgage(self.state, self.ctx, tile_id))

    def redeem(self, tile_id: str) -> bool:
        return self._commit(property_actions.redeem(self.state, self.ctx, tile_id))

    # Trades

    def propose_trade(self, offer: trade.TradeOffer) -> bool:
        next_state, accepted = trade.propose_trade(self.state, self.ctx, offer)
        self._commit(next_state)
        return accepted

    def accept_trade(self, actor_id: Optional[str] = None) -> bool:
        next_state, executed = trade.accept_trade(self.state, self.ctx, actor_id)
        self._commit(next_state)
        return executed

    def reject_trade(self, actor_id: Optional[str] = None) -> bool:
        next_state, cleared = trade.reject_trade(self.state, self.ctx, actor_id)
        self._commit(next_state)
        return cleared

    # Generic command surface

    def legal_actions(self, player_id: str) -> List[Action]:
        return get_legal_actions(self.state, self.ctx, player_id)

    def apply(self, action: Action) -> bool:
        """Dispatch an `Action`; a roll goes through `roll` so the dice cues fire."""
        if action.action_type == ActionType.ROLL_DICE:
            return self.roll(action.params.get("dice"))
        return self._commit(apply_action(self.state, self.ctx, action))

    def snapshot(self) -> GameSnapshot:
        return serialize_snapshot(self.state, self.ctx.board)
