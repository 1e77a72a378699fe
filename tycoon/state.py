"""
Game state snapshots.

Every object here is immutable. Transitions never edit a snapshot: they build
the next one with `dataclasses.replace` and the copy-on-write helpers at the
bottom of this module.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

from tycoon.board import Board


class GamePhase(str, Enum):
    """Lifecycle of a game. TRADING is reserved; trades run during ROLLING."""

    LOBBY = "lobby"
    SETUP = "setup"
    ROLLING = "rolling"
    TRADING = "trading"
    SUMMARY = "summary"


@dataclass(frozen=True)
class Player:
    """Represents the complete state of a player in the game."""

    player_id: str
    name: str
    color: str
    token_id: str
    funds: int
    position: int = 0
    in_jail: bool = False
    jail_turns: int = 0
    has_get_out_of_jail: bool = False

    def __repr__(self) -> str:
        return (
            f"Player(id='{self.player_id}', name='{self.name}', "
            f"funds={self.funds}, position={self.position}, in_jail={self.in_jail})"
        )


@dataclass(frozen=True)
class PropertyState:
    """Tracks ownership state of an ownable tile."""

    owner_id: Optional[str] = None
    houses: int = 0
    mortgaged: bool = False

    def is_owned(self) -> bool:
        """Check if the tile is owned by any player."""
        return self.owner_id is not None


@dataclass(frozen=True)
class PurchaseOffer:
    """The acting player may buy the unowned tile they landed on."""

    tile_id: str
    player_id: str
    price: int


@dataclass(frozen=True)
class UpgradeOffer:
    """The acting player asked to develop one of their tiles."""

    tile_id: str
    player_id: str
    price: int
    next_level: int


PendingAction = Union[PurchaseOffer, UpgradeOffer]


@dataclass(frozen=True)
class TradeProposal:
    """A trade offered by `from_id` to `to_id`, awaiting an answer."""

    trade_id: str
    from_id: str
    to_id: str
    give_cash: int = 0
    receive_cash: int = 0
    give_tiles: Tuple[str, ...] = ()
    receive_tiles: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CardSnapshot:
    """The last card drawn, kept for display until dismissed."""

    deck: str
    card_id: str
    title: str
    description: str


@dataclass(frozen=True)
class GameState:
    """
    Represents the complete state of a game.

    `players` is ordered; the order is the turn sequence and only ever
    shrinks when a player goes bankrupt. `current_turn_index` indexes into it.
    """

    phase: GamePhase = GamePhase.LOBBY
    players: Tuple[Player, ...] = ()
    player_count: int = 2
    current_turn_index: int = 0
    last_roll: Tuple[int, int] = (1, 1)
    consecutive_doubles: int = 0
    property_state: Mapping[str, PropertyState] = field(default_factory=dict)
    pending_action: Optional[PendingAction] = None
    pending_next_turn_index: Optional[int] = None
    chance_index: int = 0
    chest_index: int = 0
    last_card: Optional[CardSnapshot] = None
    logs: Tuple[str, ...] = ()
    pending_trade: Optional[TradeProposal] = None
    last_movement_path: Tuple[int, ...] = ()
    winner_id: Optional[str] = None

    @property
    def current_player(self) -> Optional[Player]:
        """Get the player whose turn it is, or None when nobody is seated."""
        if not self.players:
            return None
        return self.players[self.current_turn_index % len(self.players)]

    def get_player(self, player_id: Optional[str]) -> Optional[Player]:
        return find_player(self.players, player_id)

    def owned_tiles(self, player_id: str) -> List[str]:
        """Ids of every tile owned by a player, in catalog order."""
        return [tile_id for tile_id, meta in self.property_state.items() if meta.owner_id == player_id]

    def total_funds(self) -> int:
        return sum(player.funds for player in self.players)


def create_property_state(board: Board) -> Dict[str, PropertyState]:
    """Fresh ownership map: one unowned entry per ownable tile."""
    return {tile.tile_id: PropertyState() for tile in board.ownable_tiles()}


def append_log(logs: Tuple[str, ...], entry: str, limit: int = 6) -> Tuple[str, ...]:
    """Append a line to the rolling log, keeping only the newest `limit` lines."""
    return (tuple(logs) + (entry,))[-limit:]


def find_player(players: Tuple[Player, ...], player_id: Optional[str]) -> Optional[Player]:
    for player in players:
        if player.player_id == player_id:
            return player
    return None


def find_player_index(players: Tuple[Player, ...], player_id: Optional[str]) -> Optional[int]:
    for index, player in enumerate(players):
        if player.player_id == player_id:
            return index
    return None


def update_player(players: Tuple[Player, ...], player_id: str, **changes) -> Tuple[Player, ...]:
    """Return a new player tuple with one player's fields replaced."""
    return tuple(replace(p, **changes) if p.player_id == player_id else p for p in players)


def adjust_funds(players: Tuple[Player, ...], player_id: str, delta: int) -> Tuple[Player, ...]:
    """Return a new player tuple with `delta` added to one player's funds."""
    return tuple(
        replace(p, funds=p.funds + delta) if p.player_id == player_id else p for p in players
    )


def update_property(
    property_state: Mapping[str, PropertyState], tile_id: str, **changes
) -> Dict[str, PropertyState]:
    """Return a copied ownership map with one tile's fields replaced."""
    result = dict(property_state)
    if tile_id in result:
        result[tile_id] = replace(result[tile_id], **changes)
    return result


def compute_winner_id(players: Tuple[Player, ...]) -> Optional[str]:
    """The last player standing, if exactly one remains."""
    return players[0].player_id if len(players) == 1 else None


def settle_winner(state: GameState, log: Optional[Callable[..., Tuple[str, ...]]] = None) -> GameState:
    """
    Record the winner and end the game once a single player remains.

    `log` renders the announcement into the rolling log the first time a
    winner is found; pass `GameContext.log`.
    """
    winner_id = compute_winner_id(state.players)
    phase = state.phase
    if phase == GamePhase.ROLLING and len(state.players) <= 1:
        phase = GamePhase.SUMMARY
    logs = state.logs
    if winner_id is not None and state.winner_id is None and log is not None:
        logs = log(logs, "winner", name=state.players[0].name)
    return replace(state, winner_id=winner_id, phase=phase, logs=logs)
