"""
Type definitions used across layers
"""

from enum import StrEnum

# --- These mirror the domain enums (src/chess/pieces.py, src/chess/legality.py) in a transport-safe form.
# --- NOTE Same names as in the domain (Color) as that reads clearly; the imports show which version is used where


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECK = "check"
    CHECKMATE = "checkmate"


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PromotionPiece(StrEnum):
    """Values are the letters accepted by Game.select_promotion"""

    QUEEN = "q"
    ROOK = "r"
    BISHOP = "b"
    KNIGHT = "n"
