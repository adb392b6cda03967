"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self


class PieceType(Enum):
    EMPTY = auto()
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# The piece types a pawn may turn into, keyed by their selection letter
PROMOTION_OPTIONS: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}


@dataclass(frozen=True)
class Piece:
    """
    Content of a single square.

    NOTE: immutable on purpose. Boards can then be copied by copying the grid only.
    """

    type: PieceType
    color: Optional[Color] = None

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def recolored(self, color: Color) -> Self:
        """Same kind of piece, other owner (used to keep the promotion choice in sync with the turn)"""
        return type(self)(self.type, color)

    @property
    def is_empty(self) -> bool:
        return self.type == PieceType.EMPTY


EMPTY = Piece(PieceType.EMPTY)


def color_of(piece: Piece) -> Optional[Color]:
    """Owner of the piece, None for an empty square"""
    return None if piece.is_empty else piece.color
