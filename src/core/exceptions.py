"""
Custom exceptions shared across layers.

Every error raised on purpose derives from GameError, so the service layer (and anything above it)
can catch a single type. Illegal moves are not in here: the rule engine rejects them silently.
"""


class GameError(Exception):
    """Base class for all errors raised by this application"""


class InvalidSquareError(GameError):
    """A coordinate/index outside of the board, or a square whose piece and team do not match."""


class InvalidFENError(GameError):
    """Board diagram (piece placement part of a FEN string) could not be parsed."""


class GameStateError(GameError):
    """Operation requested that the current session state cannot serve (e.g. scores before the game was prepared)."""


class InvalidRequestError(GameError):
    """
    Validation errors in request models.
    NOTE: not a ValueError. Pydantic only wraps ValueError/AssertionError into a ValidationError,
    so this one propagates unchanged out of the validators.
    """


class RepositoryError(GameError):
    """Something went wrong looking up / storing a session."""


class SessionNotFoundError(RepositoryError):
    """No session stored under the requested ID."""
