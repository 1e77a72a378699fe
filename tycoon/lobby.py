"""
Lobby and seating.

A game starts in the lobby, moves to setup while seats are filled in, and
enters the rolling phase once `set_players` seats everyone.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from pydantic import BaseModel, field_validator

from tycoon.context import GameContext
from tycoon.exceptions import SetupError
from tycoon.state import GamePhase, GameState, Player, create_property_state

logger = logging.getLogger(__name__)

TOKEN_OPTIONS: List[str] = [
    "tesla-coil",
    "honey-badger",
    "tractor",
    "orca",
    "dog",
    "pig",
    "bear",
    "frog",
]

PLAYER_COUNT_OPTIONS: List[int] = [2, 3, 4, 5, 6, 7, 8]

PALETTE: List[str] = ["#2b6cee", "#facc15", "#34d399", "#a78bfa", "#f97316", "#fb7185"]

PRE_GAME_PHASES = (GamePhase.LOBBY, GamePhase.SETUP)


class PlayerSeat(BaseModel):
    """A seat as filled in on the setup screen."""

    name: str
    token_id: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value) -> str:
        return str(value or "").strip()


def default_token(index: int) -> str:
    return TOKEN_OPTIONS[index % len(TOKEN_OPTIONS)]


def _seat_player(seat: PlayerSeat, index: int, ctx: GameContext) -> Player:
    return Player(
        player_id=f"player-{index + 1}",
        name=seat.name,
        color=PALETTE[index % len(PALETTE)],
        token_id=seat.token_id or default_token(index),
        funds=ctx.config.starting_funds,
        position=ctx.board.start_index,
    )


def new_game() -> GameState:
    """A fresh lobby snapshot with nobody seated."""
    return GameState()


def reset(ctx: GameContext) -> GameState:
    """Throw the current game away and return to the lobby."""
    logger.info("Game reset to lobby")
    return replace(new_game(), property_state=create_property_state(ctx.board))


def update_phase(state: GameState, phase: GamePhase) -> GameState:
    return replace(state, phase=GamePhase(phase))


def set_player_count(state: GameState, count: int) -> GameState:
    """Choose how many seats the setup screen shows, clamped to the offered options."""
    count = max(PLAYER_COUNT_OPTIONS[0], min(PLAYER_COUNT_OPTIONS[-1], int(count)))
    return replace(state, player_count=count)


def add_player(state: GameState, ctx: GameContext, seat: PlayerSeat) -> GameState:
    """
    Seat one more player before the game starts.

    Raises:
        SetupError: the game already started, the table is full, or the name is empty
    """
    if state.phase not in PRE_GAME_PHASES:
        raise SetupError(f"Cannot add players during the {state.phase.value} phase")
    if len(state.players) >= PLAYER_COUNT_OPTIONS[-1]:
        raise SetupError(f"A game seats at most {PLAYER_COUNT_OPTIONS[-1]} players")
    if not seat.name:
        raise SetupError("Player name is required")

    player = _seat_player(seat, len(state.players), ctx)
    logs = ctx.log(state.logs, "player_joined", name=player.name)
    return replace(
        state,
        players=state.players + (player,),
        player_count=len(state.players) + 1,
        logs=logs,
    )


def set_players(state: GameState, ctx: GameContext, seats: Sequence[PlayerSeat]) -> GameState:
    """
    Seat every player and start the game.

    Everything but the lobby settings is reset: ownership, decks, logs,
    pending actions and trades.

    Args:
        state: Current snapshot
        ctx: Game collaborators
        seats: One seat per player, in turn order

    Returns:
        A snapshot in the rolling phase with the first seat to act

    Raises:
        SetupError: a name is empty or the seat count is not offered
    """
    if len(seats) not in PLAYER_COUNT_OPTIONS:
        raise SetupError(
            f"Expected between {PLAYER_COUNT_OPTIONS[0]} and {PLAYER_COUNT_OPTIONS[-1]} players, got {len(seats)}"
        )
    if any(not seat.name for seat in seats):
        raise SetupError("Every player needs a name")

    players = tuple(_seat_player(seat, index, ctx) for index, seat in enumerate(seats))
    logs = ctx.log((), "game_started", count=len(players))
    logger.info(f"Game started with players: {[p.player_id for p in players]}")

    return GameState(
        phase=GamePhase.ROLLING,
        players=players,
        player_count=len(players),
        property_state=create_property_state(ctx.board),
        logs=logs,
    )
