"""
Public snapshot serialization of GameState.

Produces a UI-friendly view of the current game. `model_dump()` on the
result gives a stable JSON-ready dict.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from tycoon.board import Board
from tycoon.state import GameState, PurchaseOffer


class OwnedTileView(BaseModel):
    tile_id: str
    name: str
    group: Optional[str] = None
    houses: int = 0
    mortgaged: bool = False


class PlayerView(BaseModel):
    player_id: str
    name: str
    color: str
    token_id: str
    funds: int
    position: int
    tile_name: str
    in_jail: bool
    jail_turns: int
    has_get_out_of_jail: bool
    tiles: List[OwnedTileView] = Field(default_factory=list)


class PendingActionView(BaseModel):
    kind: str
    tile_id: str
    tile_name: str
    player_id: str
    price: int
    next_level: Optional[int] = None


class TradeView(BaseModel):
    trade_id: str
    from_id: str
    to_id: str
    give_cash: int
    receive_cash: int
    give_tiles: List[str] = Field(default_factory=list)
    receive_tiles: List[str] = Field(default_factory=list)


class CardView(BaseModel):
    deck: str
    card_id: str
    title: str
    description: str


class GameSnapshot(BaseModel):
    phase: str
    current_turn_index: int
    current_player_id: Optional[str] = None
    last_roll: Tuple[int, int]
    consecutive_doubles: int
    players: List[PlayerView] = Field(default_factory=list)
    pending_action: Optional[PendingActionView] = None
    pending_trade: Optional[TradeView] = None
    last_card: Optional[CardView] = None
    logs: List[str] = Field(default_factory=list)
    last_movement_path: List[int] = Field(default_factory=list)
    chance_index: int
    chest_index: int
    winner_id: Optional[str] = None


def serialize_snapshot(state: GameState, board: Board) -> GameSnapshot:
    """Serialize a GameState into a public snapshot.

    The snapshot includes:
    - phase, turn index and current player
    - players with funds, position, jail status and owned tiles
    - the pending purchase/upgrade and pending trade, if any
    - the last drawn card, rolling log and movement trail
    - deck cursors and the winner
    """
    players: List[PlayerView] = []
    for player in state.players:
        tiles: List[OwnedTileView] = []
        for tile_id in state.owned_tiles(player.player_id):
            tile = board.get_tile_by_id(tile_id)
            meta = state.property_state[tile_id]
            tiles.append(
                OwnedTileView(
                    tile_id=tile_id,
                    name=tile.name if tile else tile_id,
                    group=tile.group if tile else None,
                    houses=meta.houses,
                    mortgaged=meta.mortgaged,
                )
            )

        players.append(
            PlayerView(
                player_id=player.player_id,
                name=player.name,
                color=player.color,
                token_id=player.token_id,
                funds=player.funds,
                position=player.position,
                tile_name=board.get_tile(player.position).name,
                in_jail=player.in_jail,
                jail_turns=player.jail_turns,
                has_get_out_of_jail=player.has_get_out_of_jail,
                tiles=tiles,
            )
        )

    pending = None
    offer = state.pending_action
    if offer is not None:
        tile = board.get_tile_by_id(offer.tile_id)
        pending = PendingActionView(
            kind="purchase" if isinstance(offer, PurchaseOffer) else "upgrade",
            tile_id=offer.tile_id,
            tile_name=tile.name if tile else offer.tile_id,
            player_id=offer.player_id,
            price=offer.price,
            next_level=getattr(offer, "next_level", None),
        )

    trade = None
    if state.pending_trade is not None:
        t = state.pending_trade
        trade = TradeView(
            trade_id=t.trade_id,
            from_id=t.from_id,
            to_id=t.to_id,
            give_cash=t.give_cash,
            receive_cash=t.receive_cash,
            give_tiles=list(t.give_tiles),
            receive_tiles=list(t.receive_tiles),
        )

    card = None
    if state.last_card is not None:
        c = state.last_card
        card = CardView(deck=c.deck, card_id=c.card_id, title=c.title, description=c.description)

    current = state.current_player
    return GameSnapshot(
        phase=state.phase.value,
        current_turn_index=state.current_turn_index,
        current_player_id=current.player_id if current else None,
        last_roll=state.last_roll,
        consecutive_doubles=state.consecutive_doubles,
        players=players,
        pending_action=pending,
        pending_trade=trade,
        last_card=card,
        logs=list(state.logs),
        last_movement_path=list(state.last_movement_path),
        chance_index=state.chance_index,
        chest_index=state.chest_index,
        winner_id=state.winner_id,
    )
