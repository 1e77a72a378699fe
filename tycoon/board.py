"""
The board catalog: 40 tiles plus the two card decks.

The engine treats the catalog as a read-only lookup table. A custom catalog
can be supplied to `Board`; it is validated once at construction.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from tycoon.cards import CardDefinition, create_chance_deck, create_chest_deck
from tycoon.exceptions import CatalogError
from tycoon.spaces import Tile, TileType

BOARD_SIZE = 40
JAIL_TILE_ID = "just-visiting"


def _property(
    tile_id: str,
    name: str,
    price: int,
    group: str,
    rent: int,
    rent_levels: Tuple[int, int, int, int, int],
    house_cost: int,
    mortgage: int,
) -> Tile:
    return Tile(
        tile_id,
        name,
        TileType.PROPERTY,
        price=price,
        rent=rent,
        rent_levels=rent_levels,
        house_cost=house_cost,
        mortgage=mortgage,
        group=group,
    )


def _railway(tile_id: str, name: str) -> Tile:
    return Tile(tile_id, name, TileType.RAILWAY, price=200, rent=25, mortgage=100, group="railway")


def _utility(tile_id: str, name: str) -> Tile:
    return Tile(tile_id, name, TileType.UTILITY, price=150, mortgage=75, group="utility")


def create_default_tiles() -> List[Tile]:
    """Create the standard 40-tile board."""
    return [
        # Bottom row (0-10)
        Tile("start", "Start", TileType.START),
        _property("mill-lane", "Mill Lane", 60, "brown", 2, (10, 30, 90, 160, 250), 50, 30),
        Tile("chest-1", "Community Chest", TileType.CHEST),
        _property("bakers-row", "Baker's Row", 60, "brown", 4, (20, 60, 180, 320, 450), 50, 30),
        Tile("zoning-fee", "Zoning Fee", TileType.TAX, price=200),
        _railway("north-station", "North Station"),
        _property("willow-street", "Willow Street", 100, "light-blue", 6, (30, 90, 270, 400, 550), 50, 50),
        Tile("chance-1", "Chance", TileType.CHANCE),
        _property("orchard-road", "Orchard Road", 100, "light-blue", 6, (30, 90, 270, 400, 550), 50, 50),
        _property("brook-avenue", "Brook Avenue", 120, "light-blue", 8, (40, 100, 300, 450, 600), 50, 60),
        Tile(JAIL_TILE_ID, "City Hall / Just Visiting", TileType.JAIL),
        # Left side (11-20)
        _property("chapel-place", "Chapel Place", 140, "pink", 10, (50, 150, 450, 625, 750), 100, 70),
        _utility("power-plant", "Power Plant"),
        _property("harbour-walk", "Harbour Walk", 140, "pink", 10, (50, 150, 450, 625, 750), 100, 70),
        _property("lantern-street", "Lantern Street", 160, "pink", 12, (60, 180, 500, 700, 900), 100, 80),
        _railway("east-station", "East Station"),
        _property("foundry-lane", "Foundry Lane", 180, "orange", 14, (70, 200, 550, 750, 950), 100, 90),
        Tile("chest-2", "Community Chest", TileType.CHEST),
        _property("tannery-row", "Tannery Row", 180, "orange", 14, (70, 200, 550, 750, 950), 100, 90),
        _property("granary-square", "Granary Square", 200, "orange", 16, (80, 220, 600, 800, 1000), 100, 100),
        Tile("parking", "Free Parking", TileType.PARKING),
        # Top row (21-30)
        _property("theatre-road", "Theatre Road", 220, "red", 18, (90, 250, 700, 875, 1050), 150, 110),
        Tile("chance-2", "Chance", TileType.CHANCE),
        _property("guild-street", "Guild Street", 220, "red", 18, (90, 250, 700, 875, 1050), 150, 110),
        _property("market-square", "Market Square", 240, "red", 20, (100, 300, 750, 925, 1100), 150, 120),
        _railway("south-station", "South Station"),
        _property("vineyard-lane", "Vineyard Lane", 260, "yellow", 22, (110, 330, 800, 975, 1150), 150, 130),
        _property("meadow-view", "Meadow View", 260, "yellow", 22, (110, 330, 800, 975, 1150), 150, 130),
        _utility("waterworks", "Waterworks"),
        _property("clocktower-court", "Clocktower Court", 280, "yellow", 24, (120, 360, 850, 1025, 1200), 150, 140),
        Tile("go-to-city-hall", "Go to City Hall", TileType.GO_TO_JAIL),
        # Right side (31-39)
        _property("observatory-hill", "Observatory Hill", 300, "green", 26, (130, 390, 900, 1100, 1275), 200, 150),
        _property("academy-road", "Academy Road", 300, "green", 26, (130, 390, 900, 1100, 1275), 200, 150),
        Tile("chest-3", "Community Chest", TileType.CHEST),
        _property("museum-mile", "Museum Mile", 320, "green", 28, (150, 450, 1000, 1200, 1400), 200, 160),
        _railway("west-station", "West Station"),
        Tile("chance-3", "Chance", TileType.CHANCE),
        _property("castle-gardens", "Castle Gardens", 350, "dark-blue", 35, (175, 500, 1100, 1300, 1500), 200, 175),
        Tile("luxury-levy", "Luxury Levy", TileType.TAX, price=100),
        _property("summit-parade", "Summit Parade", 400, "dark-blue", 50, (200, 600, 1400, 1700, 2000), 200, 200),
    ]


class Board:
    """The game board with 40 tiles and the Chance/Chest decks."""

    def __init__(
        self,
        tiles: Optional[Sequence[Tile]] = None,
        chance_cards: Optional[Sequence[CardDefinition]] = None,
        chest_cards: Optional[Sequence[CardDefinition]] = None,
    ):
        self.tiles: Tuple[Tile, ...] = tuple(tiles if tiles is not None else create_default_tiles())
        self.chance_cards: Tuple[CardDefinition, ...] = tuple(
            chance_cards if chance_cards is not None else create_chance_deck()
        )
        self.chest_cards: Tuple[CardDefinition, ...] = tuple(
            chest_cards if chest_cards is not None else create_chest_deck()
        )
        self._validate()

        self._index_by_id: Dict[str, int] = {tile.tile_id: i for i, tile in enumerate(self.tiles)}
        self.groups: Dict[str, List[Tile]] = self._build_groups()
        self.start_index = self._first_index(TileType.START)
        self.jail_index = self._index_by_id.get(JAIL_TILE_ID, self._first_index(TileType.JAIL))

    def _validate(self) -> None:
        if len(self.tiles) != BOARD_SIZE:
            raise CatalogError(f"Board must have {BOARD_SIZE} tiles, got {len(self.tiles)}")

        ids = [tile.tile_id for tile in self.tiles]
        duplicates = {tile_id for tile_id in ids if ids.count(tile_id) > 1}
        if duplicates:
            raise CatalogError(f"Duplicate tile ids: {sorted(duplicates)}")

        types = {tile.tile_type for tile in self.tiles}
        for required in (TileType.START, TileType.JAIL):
            if required not in types:
                raise CatalogError(f"Board has no {required.value} tile")

        for tile in self.tiles:
            if tile.is_ownable and (not tile.price or not tile.group):
                raise CatalogError(f"Ownable tile {tile.tile_id} needs a price and a group")

        if not self.chance_cards or not self.chest_cards:
            raise CatalogError("Both card decks need at least one card")

    def _build_groups(self) -> Dict[str, List[Tile]]:
        """Build a mapping of group keys to their tiles."""
        groups: Dict[str, List[Tile]] = {}
        for tile in self.tiles:
            if tile.group:
                groups.setdefault(tile.group, []).append(tile)
        return groups

    def _first_index(self, tile_type: TileType) -> int:
        for i, tile in enumerate(self.tiles):
            if tile.tile_type == tile_type:
                return i
        return 0

    def __len__(self) -> int:
        return len(self.tiles)

    def get_tile(self, position: int) -> Tile:
        """Get the tile at the given board index."""
        return self.tiles[self.normalize_position(position)]

    def get_tile_by_id(self, tile_id: str) -> Optional[Tile]:
        """Get a tile by id, or None if the id is unknown."""
        index = self._index_by_id.get(tile_id)
        return self.tiles[index] if index is not None else None

    def get_group(self, group: str) -> List[Tile]:
        """Get all tiles sharing a group key."""
        return self.groups.get(group, [])

    def ownable_tiles(self) -> List[Tile]:
        return [tile for tile in self.tiles if tile.is_ownable]

    def normalize_position(self, value: int) -> int:
        return value % len(self.tiles)

    def steps_to_next(self, position: int, tile_type: TileType) -> Optional[int]:
        """
        Number of steps forward to the nearest tile of a type.

        Scans at most one full lap; returns None when the board has no such tile.
        """
        for offset in range(1, len(self.tiles) + 1):
            if self.get_tile(position + offset).tile_type == tile_type:
                return offset
        return None

    def movement_path(self, start: int, steps: int) -> List[int]:
        """Every index passed through when moving `steps` tiles (negative moves backwards)."""
        direction = 1 if steps >= 0 else -1
        return [self.normalize_position(start + direction * i) for i in range(1, abs(steps) + 1)]

    def forward_path(self, start: int, target: int) -> List[int]:
        """Indices passed through when moving forward from `start` to `target`."""
        steps = (target - start) % len(self.tiles)
        return self.movement_path(start, steps)
