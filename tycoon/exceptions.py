"""
Exception hierarchy for the engine.

Game-rule violations are not exceptions: illegal commands leave the state
unchanged. These errors cover malformed catalogs, invalid setup input and
programming mistakes at the command boundary.
"""


class TycoonError(Exception):
    """Base exception for all engine errors."""


class CatalogError(TycoonError):
    """Board or card catalog is malformed."""


class SetupError(TycoonError):
    """Lobby input is invalid."""


class InvalidActionError(TycoonError):
    """Action type is not recognised by the command surface."""
