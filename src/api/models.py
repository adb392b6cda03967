"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.chess.square import is_algebraic
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PromotionPiece, Status

SquareName = str


# --- REQUEST MODELS ---
class LoadFenRequest(BaseModel):
    fen: str

    @field_validator("fen")
    @classmethod
    def validate_fen(cls, value: str) -> str:
        """Only the structure is checked here. The FEN codec does the full validation."""
        parts = value.strip().split(" ")
        if len(parts) != 6:
            raise InvalidRequestError(
                "FEN string must contain 6 space-separated parts."
            )
        return value.strip()


class MoveRequest(BaseModel):
    from_square: SquareName
    to_square: SquareName
    promote_to: Optional[PromotionPiece] = None
    strict: bool = False

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not is_algebraic(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value


class LegalMovesRequest(BaseModel):
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not is_algebraic(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value


class PromotionRequest(BaseModel):
    piece: PromotionPiece

    @field_validator("piece", mode="before")
    @classmethod
    def validate_piece(cls, value: str) -> str:
        """Accept 'Q' as well as 'q'"""
        if not isinstance(value, str) or value.lower() not in set(PromotionPiece):
            raise InvalidRequestError(
                f"Cannot promote to {value!r}. Pick one of {', '.join(PromotionPiece)}."
            )
        return value.lower()


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    fen_state: str
    color_to_move: Color
    status: Status
    winner: Optional[Color] = None
    legal_moves: dict[SquareName, list[SquareName]] = {}


class MoveResponse(BaseModel):
    accepted: bool
    reason: Optional[str] = None
    game: GameResponse


class LegalMovesResponse(BaseModel):
    square: SquareName
    legal_moves: list[SquareName]
