"""Shared test fixtures for the tycoon engine tests."""

import pytest

from tycoon.board import Board
from tycoon.config import GameConfig
from tycoon.context import GameContext
from tycoon.dice import FixedDice
from tycoon.lobby import PlayerSeat, new_game, set_players


@pytest.fixture
def board():
    """The default 40-tile board."""
    return Board()


@pytest.fixture
def dice():
    """Scripted dice; tests push the rolls they need."""
    return FixedDice(seed=42)


@pytest.fixture
def ctx(board, dice):
    """Game context with default rules and scripted dice."""
    return GameContext(board=board, config=GameConfig(seed=42), dice=dice)


@pytest.fixture
def two_player_game(ctx):
    """Started game with Alice and Bob."""
    return set_players(new_game(), ctx, [PlayerSeat(name="Alice"), PlayerSeat(name="Bob")])


@pytest.fixture
def three_player_game(ctx):
    """Started game with Alice, Bob and Charlie."""
    seats = [PlayerSeat(name="Alice"), PlayerSeat(name="Bob"), PlayerSeat(name="Charlie")]
    return set_players(new_game(), ctx, seats)
