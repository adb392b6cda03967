"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

from src.core.exceptions import InvalidSquareError

# Chess board is always 8x8: (number of ranks, number of files)
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True, order=True)
class Square:
    """
    Grid coordinates of a square.

    NOTE: rank 0 is the top row as written in a FEN string (the 8th rank, Black's back rank),
    so 'a8' is (0, 0) and 'h1' is (7, 7).
    """

    rank: int
    file: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        if not is_algebraic(sq):
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square name.")
        file = ord(sq[0]) - ord("a")
        rank = BOARD_DIMENSIONS[0] - int(sq[1])
        return cls(rank, file)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{BOARD_DIMENSIONS[0] - self.rank}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.rank < BOARD_DIMENSIONS[0]) and (
            0 <= self.file < BOARD_DIMENSIONS[1]
        )

    def offset(self, dr: int, df: int) -> Square:
        """The square reached by stepping (dr, df). Might be off the board."""
        return Square(self.rank + dr, self.file + df)


# Reserved out-of-range square: "there is no en passant target"
NO_SQUARE = Square(*BOARD_DIMENSIONS)


def is_algebraic(sq: str) -> bool:
    """Valid square should be a letter for the file + a single digit for the rank"""
    num_ranks, num_files = BOARD_DIMENSIONS
    if len(sq) != 2:
        return False

    file_char, rank_char = sq[0], sq[1]
    if file_char not in ascii_lowercase[:num_files]:
        return False

    if not (rank_char.isascii() and rank_char.isdigit()):
        return False

    return 1 <= int(rank_char) <= num_ranks


def all_squares() -> list[Square]:
    """Every square on the board, row-major (rank by rank, then file)"""
    num_ranks, num_files = BOARD_DIMENSIONS
    return [Square(rank, file) for rank in range(num_ranks) for file in range(num_files)]
