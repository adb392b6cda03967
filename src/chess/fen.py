"""
Representation of a single position on the board. The part that can be encoded in a FEN string.
"""

import logging
from dataclasses import dataclass
from typing import Self

from src.chess.board import Board
from src.chess.castling import CASTLING_ORDER, CastlingDirection, CastlingRights
from src.chess.pieces import FEN_TO_PIECE, Color
from src.chess.square import BOARD_DIMENSIONS, NO_SQUARE, Square, is_algebraic
from src.core.exceptions import InvalidFENError

logger = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
EMPTY_SQUARE_COUNTS = "12345678"


def castling_from_fen(castle_fen: str) -> CastlingRights:
    """parse the part of the FEN string that encodes castling rights"""
    return {
        direction: (direction.value in castle_fen) for direction in CastlingDirection
    }


def castling_to_fen(castling_rights: CastlingRights) -> str:
    """create the part of the FEN string that encodes castling rights"""
    castling_chars = "".join(
        [direction.value for direction in CASTLING_ORDER if castling_rights[direction]]
    )
    return castling_chars or "-"


def is_valid_fen(fen: str) -> bool:
    """
    Check if given string follows proper FEN notation.
    """

    # there should be 6 parts to the string
    parts = fen.split(" ")
    if len(parts) != 6:
        return False

    position, color, castling, en_passant, half_move_clock, full_move_number = parts
    return (
        is_valid_position(position)
        and is_valid_color_code(color)
        and is_valid_castling_rights(castling)
        and is_valid_en_passant(en_passant)
        and is_valid_move_counter(half_move_clock)
        and is_valid_move_counter(full_move_number)
    )


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_ranks, num_files = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_ranks:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if character in EMPTY_SQUARE_COUNTS:
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_files:
            return False
    return True


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def is_valid_castling_rights(castling: str) -> bool:
    """
    A valid castling encoding is any selection of the letters K, Q, k, q (each at most once),
    or a '-' if all rights have been revoked. An empty field also means no rights.
    """
    if castling == "-":
        return True
    allowed = {direction.value for direction in CastlingDirection}
    return set(castling) <= allowed and len(set(castling)) == len(castling)


def is_valid_en_passant(en_passant: str) -> bool:
    """Valid en passant square encoding should be a square that exists on the board or a '-'"""
    return (en_passant == "-") or is_algebraic(en_passant)


def is_valid_move_counter(counter: str) -> bool:
    """Plain decimal digits only (no sign, no whitespace)"""
    return counter.isascii() and counter.isdigit()


@dataclass
class FENState:
    """
    Data that can be constructed from a FEN string.
    ----

    FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game.
    The purpose of FEN is to provide all the necessary information to restart a game from a particular position.

    <board position string><active color><castling rights><en passant square><# half move clock><number turns played>

    * The string to describe the board position is described in the Board class
    * The active color is either "w" or "b"
    * Castling rights are denoted as "k" for king-side or "q" for queen-side. Capital letters for the white pieces, small letters for the black pieces.
        In the starting position: KQkq (all rights available), and if all rights are revoked a "-" is used.
    * The en passant square is the square a pawn just skipped over with a double step. If not available a "-" is used.
    * The half move clock counts the number of moves made since the last pawn move or capture.
    * The number of turns starts at 1 and increments after every move black makes.

    ex) The standard starting position has a FEN
    rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1
    i.e. it is white to move, all castling options available, no en passant square, no half moves and we are in the first turn.
    """

    board: Board
    color_to_move: Color
    castling_rights: CastlingRights
    en_passant_square: Square
    half_move_clock: int
    full_move_number: int

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Parse the FEN into data"""

        # raise an exception if invalid FEN (before anything gets constructed):
        if not is_valid_fen(fen):
            raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen!r}")

        # extract the different components. FEN is space separated
        (
            position,
            active_color,
            castling_str,
            en_passant_algebraic,
            half_move_clock,
            full_move_number,
        ) = fen.split(" ")

        en_passant_square = (
            Square.from_algebraic(en_passant_algebraic)
            if en_passant_algebraic != "-"
            else NO_SQUARE
        )
        state = cls(
            board=Board.from_fen(position),
            color_to_move=Color.WHITE if active_color == "w" else Color.BLACK,
            castling_rights=castling_from_fen(castling_str),
            en_passant_square=en_passant_square,
            half_move_clock=int(half_move_clock),
            full_move_number=int(full_move_number),
        )
        logger.debug("Decoded FEN %r", fen)
        return state

    def to_fen(self) -> str:
        """reverse operation: write a FEN from the given data"""
        active_color = "w" if self.color_to_move == Color.WHITE else "b"
        castling_str = castling_to_fen(self.castling_rights)

        en_passant_algebraic = (
            self.en_passant_square.to_algebraic()
            if self.en_passant_square != NO_SQUARE
            else "-"
        )
        return f"{self.board.to_fen()} {active_color} {castling_str} {en_passant_algebraic} {self.half_move_clock} {self.full_move_number}"

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_FEN)
