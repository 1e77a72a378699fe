"""
Tests for the board catalog.
"""

from dataclasses import replace

import pytest

from tycoon.board import Board, create_default_tiles
from tycoon.exceptions import CatalogError
from tycoon.spaces import TileType


def test_default_board_layout(board):
    assert len(board) == 40
    assert board.start_index == 0
    assert board.jail_index == 10
    assert board.get_tile(30).tile_type == TileType.GO_TO_JAIL
    assert board.get_tile(40) is board.get_tile(0)
    assert len(board.ownable_tiles()) == 28
    assert [t.tile_id for t in board.get_group("railway")] == [
        "north-station",
        "east-station",
        "south-station",
        "west-station",
    ]


def test_every_group_has_consistent_tiles(board):
    for group, tiles in board.groups.items():
        types = {tile.tile_type for tile in tiles}
        assert len(types) == 1, group
        assert 2 <= len(tiles) <= 4


def test_paths(board):
    assert board.movement_path(38, 3) == [39, 0, 1]
    assert board.movement_path(1, -2) == [0, 39]
    assert board.forward_path(30, 10)[-1] == 10
    assert len(board.forward_path(30, 10)) == 20
    assert board.forward_path(5, 5) == []
    assert board.steps_to_next(36, TileType.RAILWAY) == 9


def test_wrong_tile_count_is_rejected():
    with pytest.raises(CatalogError):
        Board(tiles=create_default_tiles()[:39])


def test_duplicate_tile_ids_are_rejected():
    tiles = create_default_tiles()
    tiles[3] = replace(tiles[3], tile_id=tiles[1].tile_id)
    with pytest.raises(CatalogError, match="Duplicate"):
        Board(tiles=tiles)


def test_ownable_tile_needs_price():
    tiles = create_default_tiles()
    tiles[1] = replace(tiles[1], price=None)
    with pytest.raises(CatalogError):
        Board(tiles=tiles)


def test_empty_deck_is_rejected():
    with pytest.raises(CatalogError):
        Board(chance_cards=[])
