"""
Chance and Community Chest card definitions.

Each card carries exactly one effect. Effects are small frozen dataclasses;
the card resolver dispatches on their type.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from tycoon.spaces import TileType


@dataclass(frozen=True)
class Collect:
    """Bank pays the player."""

    amount: int


@dataclass(frozen=True)
class Pay:
    """Player pays the bank."""

    amount: int


@dataclass(frozen=True)
class MoveTo:
    """Advance to an absolute board index."""

    target: int


@dataclass(frozen=True)
class MoveRelative:
    """Move by a signed number of tiles."""

    offset: int


@dataclass(frozen=True)
class AdvanceToNext:
    """Advance to the nearest tile of a type ahead of the player."""

    tile_type: TileType


@dataclass(frozen=True)
class Repair:
    """Pay per development level across all holdings."""

    house_cost: int
    hotel_cost: int


@dataclass(frozen=True)
class GetOutOfJail:
    """Keep this card to leave jail."""


@dataclass(frozen=True)
class GoToJail:
    """Go directly to jail."""


@dataclass(frozen=True)
class LuckCheck:
    """Roll the dice: doubles win `success`, anything else costs `failure`."""

    success: int
    failure: int


CardEffect = Union[
    Collect, Pay, MoveTo, MoveRelative, AdvanceToNext, Repair, GetOutOfJail, GoToJail, LuckCheck
]


@dataclass(frozen=True)
class CardDefinition:
    """A card as printed in the catalog."""

    card_id: str
    title: str
    description: str
    effect: CardEffect

    def __repr__(self) -> str:
        return f"Card('{self.card_id}')"


def create_chance_deck() -> Tuple[CardDefinition, ...]:
    """Create the default Chance deck, in draw order."""
    return (
        CardDefinition(
            "chance-advance-start",
            "Advance to Start",
            "Advance to the start tile and collect your bonus.",
            MoveTo(0),
        ),
        CardDefinition(
            "chance-town-hall-grant",
            "Town grant",
            "The council awards you a grant of ZC 50.",
            Collect(50),
        ),
        CardDefinition(
            "chance-nearest-railway",
            "Catch the next train",
            "Advance to the nearest railway station.",
            AdvanceToNext(TileType.RAILWAY),
        ),
        CardDefinition(
            "chance-back-three",
            "Wrong turn",
            "Go back three tiles.",
            MoveRelative(-3),
        ),
        CardDefinition(
            "chance-speeding-fine",
            "Speeding fine",
            "Pay ZC 15.",
            Pay(15),
        ),
        CardDefinition(
            "chance-release-permit",
            "Release permit",
            "Keep this card to leave city hall for free.",
            GetOutOfJail(),
        ),
        CardDefinition(
            "chance-market-square",
            "Market day",
            "Advance to Market Square.",
            MoveTo(24),
        ),
        CardDefinition(
            "chance-audit",
            "Surprise audit",
            "Go directly to city hall. Do not collect your start bonus.",
            GoToJail(),
        ),
        CardDefinition(
            "chance-general-repairs",
            "General repairs",
            "Pay ZC 25 per development level and ZC 100 per landmark.",
            Repair(house_cost=25, hotel_cost=100),
        ),
        CardDefinition(
            "chance-nearest-utility",
            "Meter reading",
            "Advance to the nearest utility.",
            AdvanceToNext(TileType.UTILITY),
        ),
        CardDefinition(
            "chance-forward-five",
            "Shortcut",
            "Move forward five tiles.",
            MoveRelative(5),
        ),
        CardDefinition(
            "chance-lottery",
            "Village lottery",
            "Roll the dice: doubles win ZC 150, anything else costs ZC 50.",
            LuckCheck(success=150, failure=50),
        ),
    )


def create_chest_deck() -> Tuple[CardDefinition, ...]:
    """Create the default Community Chest deck, in draw order."""
    return (
        CardDefinition(
            "chest-bank-error",
            "Bank error",
            "Bank error in your favour. Collect ZC 200.",
            Collect(200),
        ),
        CardDefinition(
            "chest-doctor",
            "Doctor's visit",
            "Pay ZC 50.",
            Pay(50),
        ),
        CardDefinition(
            "chest-release-permit",
            "Release permit",
            "Keep this card to leave city hall for free.",
            GetOutOfJail(),
        ),
        CardDefinition(
            "chest-harvest",
            "Harvest festival",
            "Collect ZC 100.",
            Collect(100),
        ),
        CardDefinition(
            "chest-audit",
            "Tax audit",
            "Go directly to city hall.",
            GoToJail(),
        ),
        CardDefinition(
            "chest-street-repairs",
            "Street repairs",
            "Pay ZC 40 per development level and ZC 115 per landmark.",
            Repair(house_cost=40, hotel_cost=115),
        ),
        CardDefinition(
            "chest-advance-start",
            "Advance to Start",
            "Advance to the start tile and collect your bonus.",
            MoveTo(0),
        ),
        CardDefinition(
            "chest-school-fees",
            "School fees",
            "Pay ZC 150.",
            Pay(150),
        ),
        CardDefinition(
            "chest-inheritance",
            "Inheritance",
            "You inherit ZC 100.",
            Collect(100),
        ),
        CardDefinition(
            "chest-raffle",
            "Charity raffle",
            "Roll the dice: doubles win ZC 100, anything else costs ZC 20.",
            LuckCheck(success=100, failure=20),
        ),
    )
