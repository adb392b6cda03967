"""
Legal moves and the state of the game (check / checkmate).

A pseudo-legal move (see moves.py) only becomes legal if it does not leave your own king attacked.
This is found out by replaying the move on a copy of the board.
"""

import logging
from enum import Enum, auto

from src.chess.board import Board
from src.chess.castling import CastlingRights
from src.chess.moves import pseudo_legal_moves, threatened_squares
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square

logger = logging.getLogger(__name__)


class GameState(Enum):
    IN_PROGRESS = auto()
    CHECK = auto()
    CHECKMATE = auto()


# --- (a) CHECK ONLY ---
def check_state(color: Color, board: Board) -> GameState:
    """
    Is the king of `color` attacked by any of the opponent's pieces?

    NOTE: never enumerates legal moves (only attacked squares), so this is safe to call from the legality filter.
    A board without a king of this color is never in check.
    """
    king_square = board.locate_piece(Piece(PieceType.KING, color))
    if king_square is None:
        return GameState.IN_PROGRESS

    if king_square in threatened_squares(color.opponent, board):
        return GameState.CHECK
    return GameState.IN_PROGRESS


def is_check(color: Color, board: Board) -> bool:
    return check_state(color, board) == GameState.CHECK


# --- LEGALITY FILTER ---
def is_putting_yourself_in_check(origin: Square, destination: Square, board: Board) -> bool:
    """Return True if the move leaves the mover's king attacked

    plan:
    1. Copy the board
    2. make the candidate move (only the moving piece: no rook hop, no en passant removal)
    3. determine if king is in check on the new board
    """
    mover = board.piece(origin)
    hypothetical = board.copy()
    hypothetical.move_piece(origin, destination)
    # for the type checker: an empty square never produces candidates
    assert mover.color is not None
    return is_check(mover.color, hypothetical)


def filter_legal(origin: Square, candidates: set[Square], board: Board) -> set[Square]:
    """Keep those destinations that do not put (or leave) you in check"""
    return {
        destination
        for destination in candidates
        if not is_putting_yourself_in_check(origin, destination, board)
    }


def legal_moves(
    origin: Square,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> set[Square]:
    """Legal destinations of whatever piece stands on `origin`"""
    piece = board.piece(origin)
    candidates = pseudo_legal_moves(
        piece, origin, board, en_passant_square, castling_rights
    )
    return filter_legal(origin, candidates, board)


def all_legal_moves(
    color: Color,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> dict[Square, set[Square]]:
    """Legal destinations for every piece of `color` that has at least one"""
    moves: dict[Square, set[Square]] = {}
    for origin in board.locate_color(color):
        destinations = legal_moves(origin, board, en_passant_square, castling_rights)
        if destinations:
            moves[origin] = destinations
    return moves


def has_legal_move(
    color: Color,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> bool:
    return any(
        legal_moves(origin, board, en_passant_square, castling_rights)
        for origin in board.locate_color(color)
    )


# --- (b) END OF TURN ---
def end_of_turn_state(
    color: Color,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> GameState:
    """
    State of the game for the player (`color`) who is about to move.

    Checkmate: in check and no legal move at all.
    NOTE: Not in check and no legal move (stalemate) is reported as IN_PROGRESS.
    """
    state = check_state(color, board)
    if state == GameState.CHECK and not has_legal_move(
        color, board, en_passant_square, castling_rights
    ):
        state = GameState.CHECKMATE
    logger.debug("End of turn state for %s: %s", color.name, state.name)
    return state
