"""
Tycoon Rules Engine

A deterministic, immutable-state implementation of a property-trading board game.
"""

from .board import Board
from .config import EngineSettings, GameConfig
from .context import GameContext
from .dice import Dice, FixedDice
from .game import Game
from .lobby import PlayerSeat
from .rules import Action, ActionType, apply_action, get_legal_actions
from .state import GamePhase, GameState, Player
from .trade import TradeOffer

__all__ = [
    "Action",
    "ActionType",
    "Board",
    "Dice",
    "EngineSettings",
    "FixedDice",
    "Game",
    "GameConfig",
    "GameContext",
    "GamePhase",
    "GameState",
    "Player",
    "PlayerSeat",
    "TradeOffer",
    "apply_action",
    "get_legal_actions",
]
