"""Core rules layer — the board, move generation and legality, no Qt.

Quick start::

    from chessrules.core import Board, Square

    board = Board()
    board.pick_up(Square(4, 1))     # e2
    board.put_down(Square(4, 3))    # e4
    print(board.to_fen())
"""

from chessrules.core.board import Board
from chessrules.core.castle_rights import CastleRights
from chessrules.core.config import BoardSettings
from chessrules.core.enums import (
    CastlingRights,
    CheckState,
    GameOverReason,
    MoveType,
    PieceKind,
    PromoType,
    RookWing,
    Side,
)
from chessrules.core.events import BoardEvents, GameOver, MoveCompleted, PromotionBegin
from chessrules.core.exceptions import ChessError, FenError, IntegrityError
from chessrules.core.fen import STARTING_FEN, board_to_fen, parse_fen
from chessrules.core.move import MoveRecord
from chessrules.core.piece import Piece
from chessrules.core.types import NO_SQUARE, Square, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "CheckState",
    "GameOverReason",
    "MoveType",
    "PieceKind",
    "PromoType",
    "RookWing",
    "Side",
    # Types / helpers
    "NO_SQUARE",
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "BoardSettings",
    "CastleRights",
    "MoveRecord",
    "Piece",
    # Events
    "BoardEvents",
    "GameOver",
    "MoveCompleted",
    "PromotionBegin",
    # Errors
    "ChessError",
    "FenError",
    "IntegrityError",
    # FEN
    "STARTING_FEN",
    "board_to_fen",
    "parse_fen",
]
