"""
Board tile definitions and types.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class TileType(str, Enum):
    """Types of tiles on the board."""

    START = "start"
    PROPERTY = "property"
    RAILWAY = "railway"
    UTILITY = "utility"
    CHANCE = "chance"
    CHEST = "chest"
    TAX = "tax"
    PARKING = "parking"
    JAIL = "jail"
    GO_TO_JAIL = "gotojail"


OWNABLE_TYPES = frozenset({TileType.PROPERTY, TileType.RAILWAY, TileType.UTILITY})


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Tile:
    """
    One cell of the board.

    Economic fields are only meaningful for ownable tiles, except `price`
    which doubles as the fee of a tax tile.
    """

    tile_id: str
    name: str
    tile_type: TileType
    price: Optional[int] = None
    rent: Optional[int] = None
    rent_levels: Tuple[int, ...] = field(default_factory=tuple)
    house_cost: Optional[int] = None
    mortgage: Optional[int] = None
    group: Optional[str] = None

    @property
    def is_ownable(self) -> bool:
        return self.tile_type in OWNABLE_TYPES

    @property
    def base_rent(self) -> int:
        """Printed rent, or 10% of the price (at least 10) when none is printed."""
        if self.rent is not None:
            return self.rent
        return max(10, round_half_up((self.price or 0) * 10 / 100))

    @property
    def mortgage_value(self) -> int:
        """Amount the bank lends against this tile."""
        if not self.price and not self.mortgage:
            return 0
        if self.mortgage is not None:
            return self.mortgage
        return round_half_up((self.price or 0) / 2)

    def __repr__(self) -> str:
        return f"Tile(id='{self.tile_id}', type={self.tile_type.value})"
