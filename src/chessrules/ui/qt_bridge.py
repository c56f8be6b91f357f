"""Qt bridge that drives a :class:`Board` through signals and slots."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessrules.core.board import Board
from chessrules.core.config import BoardSettings
from chessrules.core.enums import PromoType, Side
from chessrules.core.events import GameOver, MoveCompleted, PromotionBegin
from chessrules.core.exceptions import ChessError
from chessrules.core.move import MoveRecord

_LOGGER = logging.getLogger(__name__)


class BoardBridge(QObject):
    """Thread-affine owner of a board.

    Board events are re-emitted as Qt signals, and every board command is a
    slot, so a view or a network thread can talk to the rules engine through
    queued connections.
    """

    promotion_begin = pyqtSignal(object, object)
    move_completed = pyqtSignal(object)
    game_over = pyqtSignal(str)
    command_error = pyqtSignal(str)

    __slots__ = ("_board",)

    def __init__(
        self,
        board: Board | None = None,
        *,
        settings: BoardSettings | None = None,
    ) -> None:
        super().__init__()
        self._board = board if board is not None else Board(settings=settings)
        events = self._board.events
        events.on_promotion_begin.append(self._on_promotion_begin)
        events.on_move_completed.append(self._on_move_completed)
        events.on_game_over.append(self._on_game_over)

    @property
    def board(self) -> Board:
        return self._board

    # -- Board callbacks ---------------------------------------------------

    def _on_promotion_begin(self, event: PromotionBegin) -> None:
        self.promotion_begin.emit(event.side, event.square)

    def _on_move_completed(self, event: MoveCompleted) -> None:
        self.move_completed.emit(event)

    def _on_game_over(self, event: GameOver) -> None:
        self.game_over.emit(str(event.reason))

    # -- Commands ----------------------------------------------------------

    @pyqtSlot(object)
    def pick_up(self, square_obj: object) -> None:
        self._board.pick_up(square_obj)  # type: ignore[arg-type]

    @pyqtSlot(object)
    def put_down(self, square_obj: object) -> None:
        self._board.put_down(square_obj)  # type: ignore[arg-type]

    @pyqtSlot(int)
    def end_promotion(self, promo: int) -> None:
        """Finish a pending promotion with ``PromoType(promo)``."""
        try:
            self._board.end_promotion(PromoType(promo))
        except (ChessError, ValueError) as exc:
            self._report(exc)

    @pyqtSlot(object, int)
    def apply_remote_move(self, move_obj: object, promo: int) -> None:
        """Apply the opponent's move received from the network layer."""
        if not isinstance(move_obj, MoveRecord):
            self.command_error.emit("Remote move is not a MoveRecord")
            return
        try:
            self._board.apply_remote_move(move_obj, PromoType(promo))
        except (ChessError, ValueError) as exc:
            self._report(exc)

    @pyqtSlot()
    def reset_board(self) -> None:
        self._board.reset_board()

    @pyqtSlot(int)
    def set_user_side(self, side: int) -> None:
        self._board.set_user_side(Side(side))

    @pyqtSlot(str)
    def load_fen(self, fen: str) -> None:
        try:
            self._board.load_fen(fen)
        except ChessError as exc:
            self._report(exc)

    def _report(self, exc: Exception) -> None:
        _LOGGER.warning("Board command failed: %s", exc)
        self.command_error.emit(str(exc))
