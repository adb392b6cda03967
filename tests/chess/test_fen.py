"""Unit tests for src/chess/fen.py"""

import pytest

from src.chess.castling import CastlingDirection
from src.chess.fen import (
    STARTING_FEN,
    FENState,
    castling_from_fen,
    castling_to_fen,
    is_valid_castling_rights,
    is_valid_color_code,
    is_valid_en_passant,
    is_valid_fen,
    is_valid_move_counter,
    is_valid_position,
)
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import NO_SQUARE, Square
from src.core.exceptions import InvalidFENError


@pytest.mark.parametrize(
    "fen, expected_rights",
    [
        ("KQkq", {direction: True for direction in CastlingDirection}),
        (
            "KQk",
            {
                CastlingDirection.WHITE_KING_SIDE: True,
                CastlingDirection.WHITE_QUEEN_SIDE: True,
                CastlingDirection.BLACK_KING_SIDE: True,
                CastlingDirection.BLACK_QUEEN_SIDE: False,
            },
        ),
        (
            "Qq",
            {
                CastlingDirection.WHITE_KING_SIDE: False,
                CastlingDirection.WHITE_QUEEN_SIDE: True,
                CastlingDirection.BLACK_KING_SIDE: False,
                CastlingDirection.BLACK_QUEEN_SIDE: True,
            },
        ),
        ("-", {direction: False for direction in CastlingDirection}),
        ("", {direction: False for direction in CastlingDirection}),
    ],
)
def test_castling_from_fen(fen: str, expected_rights: dict) -> None:
    assert castling_from_fen(fen) == expected_rights


@pytest.mark.parametrize("fen", ["KQkq", "KQk", "Kq", "q", "-"])
def test_castling_to_fen(fen: str) -> None:
    """Always written in the order K, Q, k, q. No rights at all is written as '-'"""
    assert castling_to_fen(castling_from_fen(fen)) == fen


def test_castling_to_fen_canonical_order() -> None:
    assert castling_to_fen(castling_from_fen("qkQK")) == "KQkq"
    assert castling_to_fen(castling_from_fen("")) == "-"


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_FEN,
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
        "8/8/8/8/8/8/8/8 w - - 0 0",
        "1B6/8/8/8/8/8/8/8 w  - 0 0",
        "r3k2r/8/8/8/8/8/8/R3K2R b Kq - 17 42",
    ],
)
def test_valid_fen(fen: str) -> None:
    assert is_valid_fen(fen)


@pytest.mark.parametrize(
    "fen, description",
    [
        ("", "empty string"),
        ("not a fen", "too few fields"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0", "five fields"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 1", "seven fields"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1", "seven ranks"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN w KQkq - 0 1", "short rank"),
        ("rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "long rank"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1", "unknown piece"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1", "color"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkx - 0 1", "castling"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e9 0 1", "en passant"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1", "negative"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 one", "not a number"),
    ],
)
def test_invalid_fen(fen: str, description: str) -> None:
    assert not is_valid_fen(fen), description
    with pytest.raises(InvalidFENError):
        FENState.from_fen(fen)


def test_valid_position() -> None:
    assert is_valid_position("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR")
    assert is_valid_position("8/8/8/8/8/8/8/8")
    assert not is_valid_position("8/8/8/8/8/8/8/08")
    assert not is_valid_position("8/8/8/8/8/8/8/44/")


@pytest.mark.parametrize(
    "code, expected", [("w", True), ("b", True), ("W", False), ("", False)]
)
def test_valid_color_code(code: str, expected: bool) -> None:
    assert is_valid_color_code(code) == expected


@pytest.mark.parametrize(
    "castling, expected",
    [
        ("KQkq", True),
        ("k", True),
        ("-", True),
        ("", True),
        ("KK", False),
        ("KQkq-", False),
        ("x", False),
    ],
)
def test_valid_castling_rights(castling: str, expected: bool) -> None:
    assert is_valid_castling_rights(castling) == expected


@pytest.mark.parametrize(
    "en_passant, expected",
    [("-", True), ("e3", True), ("h6", True), ("", False), ("i3", False), ("e", False)],
)
def test_valid_en_passant(en_passant: str, expected: bool) -> None:
    assert is_valid_en_passant(en_passant) == expected


@pytest.mark.parametrize(
    "counter, expected",
    [("0", True), ("123", True), ("", False), ("-1", False), ("+1", False), ("1.5", False)],
)
def test_valid_move_counter(counter: str, expected: bool) -> None:
    assert is_valid_move_counter(counter) == expected


def test_fen_state_fields() -> None:
    fen_state = FENState.from_fen(
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQk e3 4 12"
    )
    assert fen_state.color_to_move == Color.BLACK
    assert fen_state.castling_rights == castling_from_fen("KQk")
    assert fen_state.en_passant_square == Square.from_algebraic("e3")
    assert fen_state.half_move_clock == 4
    assert fen_state.full_move_number == 12
    assert fen_state.board.piece(Square.from_algebraic("e4")) == Piece(
        PieceType.PAWN, Color.WHITE
    )


def test_starting_position() -> None:
    fen_state = FENState.starting_position()
    assert fen_state.color_to_move == Color.WHITE
    assert fen_state.en_passant_square == NO_SQUARE
    assert fen_state.half_move_clock == 0
    assert fen_state.full_move_number == 1
    assert fen_state.to_fen() == STARTING_FEN


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_FEN,
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
        "8/8/8/8/8/8/8/5RK1 b kq - 1 0",
        "r3k2r/8/8/8/8/8/8/R3K2R w - - 99 100",
    ],
)
def test_fen_roundtrip(fen: str) -> None:
    assert FENState.from_fen(fen).to_fen() == fen


def test_empty_castling_field_written_as_dash() -> None:
    """The only input that is not reproduced character for character"""
    fen_state = FENState.from_fen("1B6/8/8/8/8/8/8/8 w  - 0 0")
    assert fen_state.to_fen() == "1B6/8/8/8/8/8/8/8 w - - 0 0"
