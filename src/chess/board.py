"""The Game board: an 8x8 grid of pieces (in chess: the `position`)"""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.pieces import EMPTY, Color, Piece
from src.chess.square import BOARD_DIMENSIONS, Square, all_squares


@dataclass
class Board:
    """
    Row-major grid: grid[rank][file], rank 0 being the top row of a FEN string.

    NOTE: The grid is created once with 64 cells and never resized. Moves only swap cell contents.
    """

    grid: list[list[Piece]]

    @classmethod
    def empty(cls) -> Self:
        num_ranks, num_files = BOARD_DIMENSIONS
        return cls([[EMPTY] * num_files for _ in range(num_ranks)])

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the first part of a FEN string (the piece placement).

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (the first one written), starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.

        NOTE: assumes a well-formed placement. Validation is done by the FEN codec (see fen.py)
        """
        grid: list[list[Piece]] = []
        for fen_one_rank in fen_str.split("/"):
            row: list[Piece] = []
            for character in fen_one_rank:
                if character.isalpha():
                    # simple case: a letter directly denotes the piece that should be created
                    row.append(Piece.from_fen(character))
                else:
                    # A number denotes the amount of empty squares after each other
                    row.extend([EMPTY] * int(character))
            grid.append(row)
        return cls(grid)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in self.grid)

    def _rank_to_fen(self, row: list[Piece]) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece.is_empty:
                empty_count += 1
                continue

            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def copy(self) -> Self:
        """Value copy of the grid. Pieces are immutable, so the rows are all that need copying."""
        return type(self)([list(row) for row in self.grid])

    def piece(self, square: Square) -> Piece:
        return self.grid[square.rank][square.file]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square).is_empty

    def place_piece(self, piece: Piece, square: Square) -> None:
        self.grid[square.rank][square.file] = piece

    def remove_piece(self, square: Square) -> None:
        self.place_piece(EMPTY, square)

    def move_piece(self, from_square: Square, to_square: Square) -> None:
        """Destination takes the piece on the origin (capturing whatever was there), origin is emptied"""
        self.place_piece(self.piece(from_square), to_square)
        self.remove_piece(from_square)

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square in all_squares() if self.piece(square).color == color]

    def locate_piece(self, piece: Piece) -> Optional[Square]:
        """First square (row-major) holding this exact piece, if any"""
        return next(
            (square for square in all_squares() if self.piece(square) == piece), None
        )
