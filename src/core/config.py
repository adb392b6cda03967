"""
Settings for applications embedding the engine.

The engine itself reads nothing from the environment: whoever creates a Game passes the Settings in.
"""

import logging
from dataclasses import dataclass

from src.chess.fen import STARTING_FEN


@dataclass(frozen=True)
class Settings:
    """Configuration for a new game and the logging around it."""

    starting_fen: str = STARTING_FEN
    """Position a new game starts from"""

    default_promotion: str = "q"
    """Piece a pawn turns into unless another one gets selected: 'q', 'r', 'b' or 'n'"""

    log_level: str = "WARNING"
    """Level for the `src` loggers, by name (DEBUG shows every accepted / rejected move)"""


def configure_logging(settings: Settings) -> None:
    """Attach a stream handler to the package logger. Meant for applications, never called by the engine."""
    package_logger = logging.getLogger("src")
    package_logger.setLevel(settings.log_level.upper())
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        package_logger.addHandler(handler)
