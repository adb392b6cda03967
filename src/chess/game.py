"""
The Game class is the entrypoint into the domain layer.
It owns a single position and is responsible for orchestrating all the business logic required to play a turn:
checking the move is legal, moving the piece(s), and updating everything else a FEN string keeps track of.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.chess.board import Board
from src.chess.castling import (
    CASTLING_RULES,
    CastlingRights,
    castling_options,
    directions_tied_to,
)
from src.chess.fen import FENState
from src.chess.legality import (
    GameState,
    all_legal_moves,
    end_of_turn_state,
    legal_moves,
)
from src.chess.moves import PAWN_STARTING_RANK, PROMOTION_RANK
from src.chess.pieces import PROMOTION_OPTIONS, Color, Piece, PieceType
from src.chess.square import NO_SQUARE, Square
from src.core.config import Settings
from src.core.exceptions import InvalidPromotionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rejected:
    """Outcome of a move attempt that was not allowed. The game is left untouched."""

    reason: str


MoveOutcome = GameState | Rejected


@dataclass
class Game:
    # --- DOMAIN LAYER API ---

    board: Board
    color_to_move: Color
    castling_rights: CastlingRights
    en_passant_square: Square
    half_move_clock: int
    full_move_number: int
    selected_promotion: Piece
    state: GameState

    @classmethod
    def from_fen(cls, fen: str, promote_to: PieceType = PieceType.QUEEN) -> Self:
        """Start from an arbitrary position. Raises InvalidFENError for a malformed string."""
        fen_state = FENState.from_fen(fen)
        return cls(
            board=fen_state.board,
            color_to_move=fen_state.color_to_move,
            castling_rights=fen_state.castling_rights,
            en_passant_square=fen_state.en_passant_square,
            half_move_clock=fen_state.half_move_clock,
            full_move_number=fen_state.full_move_number,
            selected_promotion=Piece(promote_to, fen_state.color_to_move),
            state=cls._evaluate(fen_state),
        )

    @classmethod
    def new_game(cls, settings: Optional[Settings] = None) -> Self:
        """To start a new game with the configured starting position (by default: the standard one)."""
        settings = settings or Settings()
        promotion_type = _promotion_type(settings.default_promotion)
        return cls.from_fen(settings.starting_fen, promote_to=promotion_type)

    def load_fen(self, fen: str) -> None:
        """
        Replace the whole position by the one in the FEN string.

        NOTE: The string is fully decoded before anything is assigned: an invalid FEN leaves the game as it was.
        The kind of piece selected for promotion is kept (re-colored for the new player to move).
        """
        fen_state = FENState.from_fen(fen)
        self.board = fen_state.board
        self.color_to_move = fen_state.color_to_move
        self.castling_rights = fen_state.castling_rights
        self.en_passant_square = fen_state.en_passant_square
        self.half_move_clock = fen_state.half_move_clock
        self.full_move_number = fen_state.full_move_number
        self.selected_promotion = self.selected_promotion.recolored(self.color_to_move)
        self.state = self._evaluate(fen_state)
        logger.debug("Loaded position %r, state: %s", fen, self.state.name)

    def to_fen(self) -> str:
        return self._fen_state().to_fen()

    def select_promotion(self, kind_letter: str) -> None:
        """Pick the piece the next promoting pawn turns into: 'q', 'r', 'b' or 'n' (any case)"""
        promotion_type = _promotion_type(kind_letter)
        self.selected_promotion = Piece(promotion_type, self.color_to_move)

    def current_state(self) -> GameState:
        """The state computed after the last move (or load). Asking does not recompute anything."""
        return self.state

    @property
    def winner(self) -> Optional[Color]:
        """
        For now only works for checkmate.
        Given we know it is checkmate, the player who is requesting to move just got mated and the opponent must be the winner
        """
        if self.state != GameState.CHECKMATE:
            return None
        return self.color_to_move.opponent

    def legal_moves(self, origin: Square) -> set[Square]:
        """
        Legal destinations of the piece on `origin`.
        ----

        Only the player to move has legal moves: an empty square or an opponent's piece gives an empty set.
        """
        if self.board.piece(origin).color != self.color_to_move:
            return set()
        return legal_moves(
            origin, self.board, self.en_passant_square, self.castling_rights
        )

    def all_legal_moves(self) -> dict[Square, set[Square]]:
        """Every legal move of the player to move, grouped by the square the piece starts from"""
        return all_legal_moves(
            self.color_to_move, self.board, self.en_passant_square, self.castling_rights
        )

    def apply_move(self, origin: Square, destination: Square) -> MoveOutcome:
        """
        Attempt to make a move
        -----

        1. make sure you are moving one of your own pieces
        2. make sure the destination is in the set of legal moves
        3. castling: move the rook along / en passant: take the pawn that skipped over the target square
        4. set the en passant square for the next turn
        5. revoke castling rights tied to the squares moved from / to
        6. update the half move clock
        7. move the piece
        8. promote a pawn that reached the final rank
        9. pass the turn (increment the move number after black moved)
        10. keep the promotion choice for the player now to move
        11. determine the state of the game for the player now to move

        Returns the new state of the game, or Rejected (and nothing changed)
        """
        moving_piece = self.board.piece(origin)
        if moving_piece.is_empty:
            return self._reject(origin, destination, "there is no piece to move")
        if moving_piece.color != self.color_to_move:
            return self._reject(origin, destination, "it is not your turn")
        if destination not in self.legal_moves(origin):
            return self._reject(origin, destination, "move is not allowed")

        # Store move info before update
        captured_piece = self.board.piece(destination)
        self.half_move_clock += 1

        if moving_piece.type == PieceType.KING:
            self._castle_rook_if_needed(origin, destination)
            self._revoke_all_castling_rights(self.color_to_move)
        elif moving_piece.type == PieceType.PAWN:
            self._take_en_passant_if_needed(origin, destination)
            self.half_move_clock = 0

        self.en_passant_square = self._determine_en_passant_square(
            moving_piece, origin, destination
        )
        self._revoke_castling_rights_if_needed(origin, destination)

        if not captured_piece.is_empty:
            self.half_move_clock = 0

        self.board.move_piece(origin, destination)
        self._promote_pawn_if_needed(moving_piece, destination)
        self._pass_turn()
        self.state = self._evaluate(self._fen_state())

        logger.debug(
            "Move %s%s accepted. Now %s to move, state: %s",
            origin.to_algebraic(),
            destination.to_algebraic(),
            self.color_to_move.name,
            self.state.name,
        )
        return self.state

    # -- PRIVATE HELPERS ---
    @staticmethod
    def _evaluate(fen_state: FENState) -> GameState:
        return end_of_turn_state(
            fen_state.color_to_move,
            fen_state.board,
            fen_state.en_passant_square,
            fen_state.castling_rights,
        )

    def _fen_state(self) -> FENState:
        return FENState(
            board=self.board,
            color_to_move=self.color_to_move,
            castling_rights=self.castling_rights,
            en_passant_square=self.en_passant_square,
            half_move_clock=self.half_move_clock,
            full_move_number=self.full_move_number,
        )

    def _reject(self, origin: Square, destination: Square, reason: str) -> Rejected:
        logger.debug(
            "Move %s%s rejected: %s",
            origin.to_algebraic(),
            destination.to_algebraic(),
            reason,
        )
        return Rejected(reason)

    def _pass_turn(self) -> None:
        """The move number goes up once black has moved. The promotion choice follows the turn."""
        if self.color_to_move == Color.BLACK:
            self.full_move_number += 1
        self.color_to_move = self.color_to_move.opponent
        self.selected_promotion = self.selected_promotion.recolored(self.color_to_move)

    # -- CASTLING RULE HELPERS ---
    def _castle_rook_if_needed(self, origin: Square, destination: Square) -> None:
        """
        A king jumping from its home square to a castling square (with the right still granted) takes the rook along.

        NOTE: rights are trusted, but a rook is only moved if there is one of your own on its home square.
        """
        own_rook = Piece(PieceType.ROOK, self.color_to_move)
        for direction in castling_options(self.color_to_move):
            rule = CASTLING_RULES[direction]
            is_castling = (origin, destination) == (rule.king_from, rule.king_to)
            if not (is_castling and self.castling_rights[direction]):
                continue
            if self.board.piece(rule.rook_from) == own_rook:
                self.board.move_piece(rule.rook_from, rule.rook_to)

    def _revoke_all_castling_rights(self, color: Color) -> None:
        """Once the king moved, both directions are gone (castling itself included)"""
        for direction in castling_options(color):
            self.castling_rights[direction] = False

    def _revoke_castling_rights_if_needed(
        self, origin: Square, destination: Square
    ) -> None:
        """
        Moving away from a king's / rook's home square, or capturing on it, revokes the rights tied to that square.
        """
        for square in (origin, destination):
            for direction in directions_tied_to(square):
                self.castling_rights[direction] = False

    # --- EN PASSANT RULE HELPERS ----
    def _take_en_passant_if_needed(self, origin: Square, destination: Square) -> None:
        """
        A pawn taking diagonally onto the en passant square removes the opponent's pawn that skipped over it.

        NOTE The pawn removed is standing in the same file as the en_passant square,
        and in the same rank as the moving pawn was originally standing at.
        """
        is_diagonal = origin.file != destination.file
        if is_diagonal and destination == self.en_passant_square:
            self.board.remove_piece(Square(origin.rank, destination.file))

    def _determine_en_passant_square(
        self, moving_piece: Piece, origin: Square, destination: Square
    ) -> Square:
        """The possible en passant square for the next turn: the square a pawn's double step skipped."""
        is_double_step = (
            moving_piece.type == PieceType.PAWN
            and origin.rank == PAWN_STARTING_RANK[self.color_to_move]
            and abs(destination.rank - origin.rank) == 2
        )
        if not is_double_step:
            return NO_SQUARE
        return Square((origin.rank + destination.rank) // 2, origin.file)

    # -- PROMOTION RULE HELPERS ---
    def _promote_pawn_if_needed(self, moving_piece: Piece, destination: Square) -> None:
        if (
            moving_piece.type == PieceType.PAWN
            and destination.rank == PROMOTION_RANK[self.color_to_move]
        ):
            promoted = self.selected_promotion.recolored(self.color_to_move)
            self.board.place_piece(promoted, destination)


def _promotion_type(kind_letter: str) -> PieceType:
    promotion_type = PROMOTION_OPTIONS.get(kind_letter.lower())
    if promotion_type is None:
        raise InvalidPromotionError(
            f"Cannot promote to {kind_letter!r}. Pick one of {', '.join(PROMOTION_OPTIONS)}."
        )
    return promotion_type


# --- OPERATIONS FOR A SURROUNDING APPLICATION ---
def new_standard_game() -> Game:
    return Game.new_game()


def load_fen(game: Game, fen_text: str) -> None:
    game.load_fen(fen_text)


def to_fen(game: Game) -> str:
    return game.to_fen()


def select_promotion(game: Game, kind_letter: str) -> None:
    game.select_promotion(kind_letter)


def current_state(game: Game) -> GameState:
    return game.current_state()


def apply_move(game: Game, origin: str, destination: str) -> MoveOutcome:
    """Squares in algebraic notation, e.g. apply_move(game, 'e2', 'e4')"""
    return game.apply_move(
        Square.from_algebraic(origin), Square.from_algebraic(destination)
    )
