"""
Dice rolling mechanics.
"""

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class DiceResult:
    """Result of rolling two dice."""

    die1: int
    die2: int

    @property
    def total(self) -> int:
        """Sum of both dice."""
        return self.die1 + self.die2

    @property
    def is_double(self) -> bool:
        """Check if both dice show the same value."""
        return self.die1 == self.die2

    def as_tuple(self) -> Tuple[int, int]:
        return (self.die1, self.die2)


class Dice:
    """Handles all dice rolling for the game."""

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize dice roller.

        Args:
            seed: Optional seed for reproducible rolls (useful for testing)
        """
        self._random = random.Random(seed)

    def roll(self) -> DiceResult:
        """Roll two six-sided dice."""
        die1 = self._random.randint(1, 6)
        die2 = self._random.randint(1, 6)
        return DiceResult(die1=die1, die2=die2)


class FixedDice(Dice):
    """
    Dice that replay a scripted sequence of rolls.

    Once the script runs out, rolls fall back to a seeded generator.
    """

    def __init__(self, rolls: Iterable[Tuple[int, int]] = (), seed: Optional[int] = 0):
        super().__init__(seed)
        self._script: List[Tuple[int, int]] = list(rolls)

    def push(self, *rolls: Tuple[int, int]) -> None:
        """Queue more rolls at the end of the script."""
        self._script.extend(rolls)

    @property
    def remaining(self) -> int:
        return len(self._script)

    def roll(self) -> DiceResult:
        if self._script:
            die1, die2 = self._script.pop(0)
            return DiceResult(die1=die1, die2=die2)
        return super().roll()
