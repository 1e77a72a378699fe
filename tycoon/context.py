"""
Collaborators shared by every transition.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from tycoon.board import Board
from tycoon.config import GameConfig
from tycoon.dice import Dice
from tycoon.messages import Messages
from tycoon.state import append_log


@dataclass
class GameContext:
    """
    Everything a transition reads besides the state itself.

    The board and config are read-only; `dice` is the only source of
    randomness. Swapping `messages` translates the log.
    """

    board: Board = field(default_factory=Board)
    config: GameConfig = field(default_factory=GameConfig)
    dice: Optional[Dice] = None
    messages: Messages = field(default_factory=Messages)

    def __post_init__(self) -> None:
        if self.dice is None:
            self.dice = Dice(self.config.seed)

    def log(self, logs: Tuple[str, ...], key: str, **params: Any) -> Tuple[str, ...]:
        """Render a message and append it to a rolling log."""
        return append_log(logs, self.messages.render(key, **params), self.config.max_logs)
