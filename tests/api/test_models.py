import pytest
from pydantic import ValidationError

from src.api.models import (
    GameResponse,
    LegalMovesRequest,
    LoadFenRequest,
    MoveRequest,
    MoveResponse,
    PromotionRequest,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PromotionPiece, Status


# -- Validation - LoadFenRequest --
def test_valid_fen() -> None:
    """Test that LoadFenRequest accepts a valid FEN string."""
    valid_fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
    request = LoadFenRequest(fen=valid_fen)
    assert request.fen == valid_fen


def test_surrounding_whitespace_is_stripped() -> None:
    request = LoadFenRequest(fen="  8/8/8/8/8/8/8/8 w - - 0 1\n")
    assert request.fen == "8/8/8/8/8/8/8/8 w - - 0 1"


@pytest.mark.parametrize(
    "invalid_fen",
    [
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0",  # only 5 space-separated values
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 extra",  # too many space-separated values
        "",
    ],
)
def test_invalid_fen(invalid_fen: str) -> None:
    """Structurally invalid FEN: more or less than 6 space-separated fields."""
    with pytest.raises(InvalidRequestError):
        _ = LoadFenRequest(fen=invalid_fen)


def test_structure_only_is_checked() -> None:
    """The content of the six fields is left to the FEN codec"""
    request = LoadFenRequest(fen=" ".join(["mock"] * 6))
    assert request.fen == "mock mock mock mock mock mock"


# -- Validation - MoveRequest --
def test_valid_square_names() -> None:
    """Test that MoveRequest accepts correctly written squares in algebraic notation."""
    request = MoveRequest(from_square="e2", to_square="e4")
    assert request.from_square == "e2"
    assert request.to_square == "e4"
    assert request.promote_to is None
    assert request.strict is False


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",  # anything more than two characters.
        "11",  # First character is not a letter
        "aa",  # second character is not a number
        "i1",  # off the board
        "a9",
    ],
)
def test_invalid_from_square(square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(from_square=square, to_square="e2")


@pytest.mark.parametrize("square", ["nonsense", "11", "aa"])
def test_invalid_to_square(square: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(from_square="e2", to_square=square)


def test_move_with_promotion() -> None:
    request = MoveRequest(from_square="a7", to_square="a8", promote_to="n")
    assert request.promote_to == PromotionPiece.KNIGHT


def test_move_with_unknown_promotion() -> None:
    with pytest.raises(ValidationError):
        _ = MoveRequest(from_square="a7", to_square="a8", promote_to="k")


# -- Validation - LegalMovesRequest --
def test_legal_moves_request() -> None:
    assert LegalMovesRequest(square="g1").square == "g1"
    with pytest.raises(InvalidRequestError):
        _ = LegalMovesRequest(square="z0")


# -- Validation - PromotionRequest --
@pytest.mark.parametrize(
    "letter, expected",
    [
        ("q", PromotionPiece.QUEEN),
        ("R", PromotionPiece.ROOK),
        ("b", PromotionPiece.BISHOP),
        ("N", PromotionPiece.KNIGHT),
    ],
)
def test_promotion_request(letter: str, expected: PromotionPiece) -> None:
    """Letters are accepted in either case"""
    assert PromotionRequest(piece=letter).piece == expected


@pytest.mark.parametrize("letter", ["k", "p", "", "queen", 1])
def test_invalid_promotion_request(letter: object) -> None:
    with pytest.raises(InvalidRequestError):
        _ = PromotionRequest(piece=letter)


# -- Responses --
def test_move_response_nests_game() -> None:
    game = GameResponse(
        fen_state="k7/8/8/8/8/8/K7/8 b - - 9 24",
        color_to_move=Color.BLACK,
        status=Status.IN_PROGRESS,
    )
    response = MoveResponse(accepted=True, game=game)
    assert response.reason is None
    assert response.game.winner is None
    assert response.model_dump()["game"]["status"] == "in progress"
