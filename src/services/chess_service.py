"""Orchestration of communication from a front end (requests) to the business logic (and the reverse direction)."""

import logging
from typing import Optional

from src.api.models import (
    GameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    LoadFenRequest,
    MoveRequest,
    MoveResponse,
    PromotionRequest,
)
from src.chess.game import Game, Rejected
from src.chess.legality import GameState
from src.chess.pieces import Color
from src.chess.square import Square
from src.core.config import Settings
from src.core.exceptions import IllegalMoveError
from src.core.shared_types import Color as ColorName
from src.core.shared_types import Status

logger = logging.getLogger(__name__)

STATUS_NAMES: dict[GameState, Status] = {
    GameState.IN_PROGRESS: Status.IN_PROGRESS,
    GameState.CHECK: Status.CHECK,
    GameState.CHECKMATE: Status.CHECKMATE,
}
COLOR_NAMES: dict[Color, ColorName] = {
    Color.WHITE: ColorName.WHITE,
    Color.BLACK: ColorName.BLACK,
}


class ChessService:
    """Orchestration of layers for a single chess game held in memory."""

    def __init__(
        self, game: Optional[Game] = None, settings: Optional[Settings] = None
    ) -> None:
        self.settings = settings or Settings()
        self.game = game or Game.new_game(self.settings)

    def new_game(self) -> GameResponse:
        """Throw away the current game and start from the configured starting position."""
        self.game = Game.new_game(self.settings)
        logger.info("New game started from %r", self.settings.starting_fen)
        return self._create_game_response()

    def load_fen(self, request: LoadFenRequest) -> GameResponse:
        """Replace the position. An invalid FEN (InvalidFENError) leaves the current game untouched."""
        self.game.load_fen(request.fen)
        logger.info("Position loaded: %r", request.fen)
        return self._create_game_response()

    def get_game(self) -> GameResponse:
        return self._create_game_response()

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve the legal destinations of the piece on the requested square."""
        origin = Square.from_algebraic(request.square)
        destinations = sorted(
            square.to_algebraic() for square in self.game.legal_moves(origin)
        )
        return LegalMovesResponse(square=request.square, legal_moves=destinations)

    def select_promotion(self, request: PromotionRequest) -> GameResponse:
        self.game.select_promotion(request.piece.value)
        return self._create_game_response()

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----

        A promotion piece in the request is selected before the move is made.
        A rejected move is reported in the response, unless the request is strict: then IllegalMoveError is raised.
        """
        previous_promotion = self.game.selected_promotion
        if request.promote_to is not None:
            self.game.select_promotion(request.promote_to.value)

        outcome = self.game.apply_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )
        if isinstance(outcome, Rejected):
            # a rejected move leaves the game as it was, promotion choice included
            self.game.selected_promotion = previous_promotion
            logger.info(
                "Move %s%s rejected: %s",
                request.from_square,
                request.to_square,
                outcome.reason,
            )
            if request.strict:
                raise IllegalMoveError(
                    f"Move not allowed: {request.from_square}{request.to_square} ({outcome.reason})"
                )
            return MoveResponse(
                accepted=False,
                reason=outcome.reason,
                game=self._create_game_response(),
            )

        logger.info(
            "Move %s%s played, status: %s",
            request.from_square,
            request.to_square,
            STATUS_NAMES[outcome],
        )
        return MoveResponse(accepted=True, game=self._create_game_response())

    # -- Internal helpers --
    def _create_game_response(self) -> GameResponse:
        """Convert the current Game into a GameResponse."""
        winner = self.game.winner
        return GameResponse(
            fen_state=self.game.to_fen(),
            color_to_move=COLOR_NAMES[self.game.color_to_move],
            status=STATUS_NAMES[self.game.current_state()],
            winner=COLOR_NAMES[winner] if winner is not None else None,
            legal_moves={
                origin.to_algebraic(): sorted(
                    destination.to_algebraic() for destination in destinations
                )
                for origin, destinations in self.game.all_legal_moves().items()
            },
        )
