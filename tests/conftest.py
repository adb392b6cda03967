"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.game import Game
from src.chess.square import Square


@pytest.fixture
def squares() -> Callable[[str], set[Square]]:
    """Call the inner function with space separated square names: 'e2 e4' -> {Square(e2), Square(e4)}"""

    def _to_squares(names: str) -> set[Square]:
        return {Square.from_algebraic(name) for name in names.split()}

    return _to_squares


@pytest.fixture
def board_from_fen() -> Callable[[str], Board]:
    """Only the piece placement part of a FEN string"""
    return Board.from_fen


@pytest.fixture
def game_from_fen() -> Callable[[str], Game]:
    """Full six-field FEN string"""
    return Game.from_fen
