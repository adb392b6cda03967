"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the move sets (and attacked squares) for each piece type.


Legality (not leaving your own king in check) is checked later, see legality.py
"""

from typing import Callable, Protocol

from src.chess.castling import CASTLING_RULES, CastlingRights, castling_options
from src.chess.pieces import Color, Piece, PieceType, color_of
from src.chess.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Piece: ...
    def locate_color(self, color: Color) -> list[Square]: ...


Vector = tuple[int, int]

# NOTE: vectors are (delta rank, delta file). Rank 0 is the top of the board (Black's side).
STRAIGHTS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_JUMPS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_STEPS: list[Vector] = STRAIGHTS + DIAGONALS

# White moves UP the board (towards rank 0), black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_STARTING_RANK: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PROMOTION_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, color: Color, board: Board, directions: list[Vector]
) -> set[Square]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.

    ---
    The first occupied square found is included only if it holds an opponent's piece (a capture).
    Nothing beyond it is ever included.
    """
    targets: set[Square] = set()
    for dr, df in directions:
        target_square = square.offset(dr, df)
        while target_square.is_within_bounds():
            owner = color_of(board.piece(target_square))
            if owner is not None:
                if owner != color:
                    targets.add(target_square)
                break

            targets.add(target_square)
            target_square = target_square.offset(dr, df)
    return targets


def single_step_move(
    square: Square, color: Color, board: Board, deltas: list[Vector]
) -> set[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump a single step along a direction"""
    targets: set[Square] = set()
    for dr, df in deltas:
        target_square = square.offset(dr, df)
        if not target_square.is_within_bounds():
            continue

        # an empty square has no color, so this covers "empty or opponent's"
        if color_of(board.piece(target_square)) != color:
            targets.add(target_square)

    return targets


def candidate_pawn_moves(
    square: Square,
    color: Color,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> set[Square]:
    """
    A pawn:
    - moves by a single square forward.
    - It can move by two in their first move (so when on their starting rank)
    - takes diagonally, also onto the en passant square

    NOTE: Promotion is decided when the move is made, not here.
    """
    targets: set[Square] = set()
    direction = PAWN_DIRECTION[color]

    one_step = square.offset(direction, 0)
    if one_step.is_within_bounds() and board.piece(one_step).is_empty:
        targets.add(one_step)

        two_steps = square.offset(2 * direction, 0)
        if square.rank == PAWN_STARTING_RANK[color] and board.piece(two_steps).is_empty:
            targets.add(two_steps)

    for target_square in pawn_capture_squares(square, color):
        is_opponent_piece = color_of(board.piece(target_square)) == color.opponent
        if is_opponent_piece or target_square == en_passant_square:
            targets.add(target_square)
    return targets


def candidate_knight_moves(
    square: Square,
    color: Color,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> set[Square]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, color, board, KNIGHT_JUMPS)


def candidate_bishop_moves(
    square: Square,
    color: Color,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> set[Square]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, color, board, DIAGONALS)


def candidate_rook_moves(
    square: Square,
    color: Color,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> set[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, color, board, STRAIGHTS)


def candidate_queen_moves(
    square: Square,
    color: Color,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> set[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(square, color, board, STRAIGHTS + DIAGONALS)


def candidate_king_moves(
    square: Square,
    color: Color,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> set[Square]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special (two-square) king move.
    """
    targets = single_step_move(square, color, board, KING_STEPS)
    return targets | castling_moves(square, color, board, castling_rights)


def candidate_no_moves(
    square: Square,
    color: Color,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> set[Square]:
    """An empty square has nothing to move"""
    return set()


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Color, Board, Square, CastlingRights], set[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.EMPTY: candidate_no_moves,
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def pseudo_legal_moves(
    piece: Piece,
    origin: Square,
    board: Board,
    en_passant_square: Square,
    castling_rights: CastlingRights,
) -> set[Square]:
    """Destinations allowed by the piece's movement pattern and the occupancy of the board"""
    color = color_of(piece)
    if color is None:
        return set()
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(origin, color, board, en_passant_square, castling_rights)


# --- CAPTURING RULES / ATTACKING RULES ---
def pawn_capture_squares(square: Square, color: Color) -> list[Square]:
    """The (at most two) diagonal-forward squares of a pawn"""
    direction = PAWN_DIRECTION[color]
    diagonals = [square.offset(direction, df) for df in (-1, 1)]
    return [target for target in diagonals if target.is_within_bounds()]


def pawn_coverage(square: Square, color: Color, board: Board) -> set[Square]:
    """
    Pawns threaten both diagonal-forward squares, whether or not something stands there right now.
    """
    return set(pawn_capture_squares(square, color))


def knight_coverage(square: Square, color: Color, board: Board) -> set[Square]:
    return single_step_move(square, color, board, KNIGHT_JUMPS)


def bishop_coverage(square: Square, color: Color, board: Board) -> set[Square]:
    return raycasting_move(square, color, board, DIAGONALS)


def rook_coverage(square: Square, color: Color, board: Board) -> set[Square]:
    return raycasting_move(square, color, board, STRAIGHTS)


def queen_coverage(square: Square, color: Color, board: Board) -> set[Square]:
    return raycasting_move(square, color, board, STRAIGHTS + DIAGONALS)


def king_coverage(square: Square, color: Color, board: Board) -> set[Square]:
    """
    Only the adjacent squares: a castling move never attacks anything.

    NOTE: castling legality asks for attacked squares, so this must never look at castling itself.
    """
    return {
        target
        for target in (square.offset(dr, df) for dr, df in KING_STEPS)
        if target.is_within_bounds()
    }


def no_coverage(square: Square, color: Color, board: Board) -> set[Square]:
    return set()


# --- STRATEGY PATTERN: ATTACKING RULES ---
CoverageFn = Callable[[Square, Color, Board], set[Square]]
COVERAGE_RULES: dict[PieceType, CoverageFn] = {
    PieceType.EMPTY: no_coverage,
    PieceType.PAWN: pawn_coverage,
    PieceType.KNIGHT: knight_coverage,
    PieceType.BISHOP: bishop_coverage,
    PieceType.ROOK: rook_coverage,
    PieceType.QUEEN: queen_coverage,
    PieceType.KING: king_coverage,
}


def attack_coverage(piece: Piece, origin: Square, board: Board) -> set[Square]:
    """Squares the piece standing on `origin` threatens. Independent of whose turn it is."""
    color = color_of(piece)
    if color is None:
        return set()
    return COVERAGE_RULES[piece.type](origin, color, board)


def threatened_squares(by_color: Color, board: Board) -> set[Square]:
    """Union of the coverage of every piece of the given color"""
    threatened: set[Square] = set()
    for square in board.locate_color(by_color):
        threatened |= attack_coverage(board.piece(square), square, board)
    return threatened


# -- CASTLING MOVES ---
def castling_moves(
    square: Square, color: Color, board: Board, castling_rights: CastlingRights
) -> set[Square]:
    """
    Find the castling destinations for a king of the given color standing on `square`
    ---

    **you are allowed to castle if**

    * Castling rights are not yet revoked (and the king stands on its home square).
    * Every square in between the king and the rook is empty.
    * None of the squares the king stands on, passes, or lands on is under attack.
    """
    targets: set[Square] = set()
    threatened: set[Square] | None = None
    for direction in castling_options(color):
        rule = CASTLING_RULES[direction]
        if not castling_rights[direction] or square != rule.king_from:
            continue

        if any(not board.piece(between).is_empty for between in rule.between()):
            continue

        # only compute the attacked squares when there is an actual candidate
        if threatened is None:
            threatened = threatened_squares(color.opponent, board)
        if any(path_square in threatened for path_square in rule.king_path()):
            continue

        targets.add(rule.king_to)
    return targets
