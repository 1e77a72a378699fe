"""
Rent calculation.
"""

from typing import Mapping

from tycoon.board import Board
from tycoon.spaces import Tile, TileType
from tycoon.state import PropertyState

RAILWAY_FEE = 25


def owns_full_group(owner_id: str, tile: Tile, property_state: Mapping[str, PropertyState], board: Board) -> bool:
    """Check if a player owns every tile in the tile's group."""
    if not tile.group:
        return False
    return all(
        property_state.get(member.tile_id, PropertyState()).owner_id == owner_id
        for member in board.get_group(tile.group)
    )


def count_owned_in_group(owner_id: str, tile: Tile, property_state: Mapping[str, PropertyState], board: Board) -> int:
    """Number of tiles in the tile's group held by a player."""
    if not tile.group:
        return 0
    return sum(
        1
        for member in board.get_group(tile.group)
        if property_state.get(member.tile_id, PropertyState()).owner_id == owner_id
    )


def calculate_rent(
    tile: Tile,
    dice_total: int,
    property_state: Mapping[str, PropertyState],
    owner_id: str,
    board: Board,
) -> int:
    """
    Calculate the rent owed for landing on an owned tile.

    Args:
        tile: Tile landed on
        dice_total: Total of the roll that moved the player (used by utilities)
        property_state: Current ownership map
        owner_id: Owner of the tile
        board: Board catalog, for group lookups

    Returns:
        Rent amount. Mortgage checks are the caller's job.
    """
    meta = property_state.get(tile.tile_id)
    if meta is None:
        return 0

    if tile.tile_type == TileType.RAILWAY:
        owned = count_owned_in_group(owner_id, tile, property_state, board)
        return (tile.rent or RAILWAY_FEE) * max(1, owned)

    if tile.tile_type == TileType.UTILITY:
        owned = count_owned_in_group(owner_id, tile, property_state, board)
        return dice_total * (10 if owned >= 2 else 4)

    rent = tile.base_rent
    if meta.houses > 0 and tile.rent_levels:
        level_index = min(meta.houses, len(tile.rent_levels)) - 1
        return tile.rent_levels[level_index]
    if owns_full_group(owner_id, tile, property_state, board):
        rent *= 2
    return rent
