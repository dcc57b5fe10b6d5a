"""Custom exceptions shared by all layers"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while playing a game."""


class IllegalMoveError(GameError):
    """The requested move is not among the legal moves of the position."""


class InvalidSquareError(GameError):
    """Coordinates that do not lie on the 8x8 board."""


class InvalidFENError(GameError):
    """A piece placement string that cannot be interpreted."""


class GameStateError(GameError):
    """Operation does not make sense in the current state of the game."""


class InvalidRequestError(GameError):
    """
    Request data from the presentation layer failed validation.

    NOTE: must not subclass ValueError, otherwise pydantic wraps it into a ValidationError.
    """
