"""
Human-readable log lines.

The engine never builds log strings inline: it asks a `Messages` catalog to
render a message id with parameters. Supplying a different template mapping
translates the whole log.
"""

import logging
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

CURRENCY = "ZC"

DEFAULT_TEMPLATES: Dict[str, str] = {
    "roll": "{name} rolled {a} and {b}.",
    "three_doubles": "{name} rolled three doubles in a row and was audited.",
    "collected_start": "{name} collected {amount} for passing Start.",
    "available": "{tile} is available for {price}.",
    "purchased": "{name} bought {tile} for {price}.",
    "cannot_afford": "{name} cannot afford {tile}.",
    "purchase_declined": "Purchase declined.",
    "owes_rent": "{payer} owes {amount} in rent to {owner}.",
    "mortgaged_no_rent": "{tile} is mortgaged. No rent due.",
    "paid_tax": "{name} paid {amount} in zoning fees.",
    "redirected_to_city_hall": "{name} was redirected to city hall.",
    "used_release": "{name} used a release permit to leave city hall.",
    "rolled_doubles_left": "{name} rolled doubles and left city hall.",
    "waits_in_jail": "{name} waits in city hall ({current}/{max}).",
    "paid_exit": "{name} paid {amount} to exit city hall.",
    "card_drawn": "{title}",
    "received": "{name} received {amount}.",
    "received_release": "{name} received a release permit.",
    "luck_success": "{name} rolled doubles and gained {amount}.",
    "luck_failure": "{name} missed the doubles and owes {amount}.",
    "repair_bill": "{name} owes {amount} for repairs.",
    "upgraded": "{name} developed {tile} to level {level}.",
    "cannot_afford_upgrade": "{name} cannot afford the development.",
    "mortgaged": "{name} mortgaged {tile} for {value}.",
    "redeemed": "{name} redeemed {tile} for {value}.",
    "bankrupted_to_creditor": "{bankrupt} went bankrupt. Assets pass to {creditor}.",
    "bankrupted_bank": "{bankrupt} went bankrupt. Assets return to the municipality.",
    "winner": "{name} wins the game!",
    "trade_proposed": "{from_name} proposed a trade to {to_name}.",
    "trade_failed_funds": "Trade between {from_name} and {to_name} failed due to insufficient funds.",
    "trade_failed_ownership": "Trade between {from_name} and {to_name} failed because ownership changed.",
    "trade_completed": "{from_name} and {to_name} completed a trade.",
    "trade_withdrawn": "{actor} withdrew the trade offer with {counterparty}.",
    "trade_declined": "{actor} declined {counterparty}.",
    "player_joined": "{name} joined the game.",
    "game_started": "The game begins with {count} players.",
}


def format_funds(value: int) -> str:
    """Render an amount of money, e.g. `ZC 1,500`."""
    return f"{CURRENCY} {value:,}"


class Messages:
    """Renders log lines from a template catalog."""

    def __init__(self, templates: Optional[Mapping[str, str]] = None):
        self.templates: Dict[str, str] = dict(DEFAULT_TEMPLATES)
        if templates:
            self.templates.update(templates)

    def render(self, key: str, **params: Any) -> str:
        """
        Render a message id.

        Unknown ids and templates referring to missing parameters fall back
        to the bare id so a broken translation never breaks a transition.
        """
        template = self.templates.get(key)
        if template is None:
            logger.warning(f"Missing message template: {key}")
            return key
        try:
            return template.format(**params)
        except (KeyError, IndexError):
            logger.warning(f"Template {key} is missing parameters: {sorted(params)}")
            return key
