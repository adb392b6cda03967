"""
Custom exceptions used across layers.

Everything the domain raises on purpose derives from GameError,
so a caller can catch that single type when the specific reason does not matter.
"""


class GameError(Exception):
    """Top level exception of the chess engine"""


class InvalidFENError(GameError):
    """The supplied string cannot be interpreted as a FEN string"""


class InvalidSquareError(GameError):
    """The supplied string is not the name of a square on the board (a1 - h8)"""


class InvalidPromotionError(GameError):
    """A pawn can only promote into a queen, rook, bishop or knight"""


class IllegalMoveError(GameError):
    """The requested move is not in the set of legal moves"""


class InvalidRequestError(GameError):
    """Request data did not pass validation at the service boundary"""
