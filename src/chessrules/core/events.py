"""Board lifecycle events and their subscriber lists.

Events are delivered synchronously, in command order, on the caller's
thread.  Within one ply ``MoveCompleted`` always precedes a ``GameOver``
caused by the same move.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from chessrules.core.enums import GameOverReason, Side
from chessrules.core.move import MoveRecord
from chessrules.core.types import Square


@dataclass(frozen=True, slots=True)
class PromotionBegin:
    """A pawn reached the last rank; the board waits for ``end_promotion``."""

    side: Side
    square: Square


@dataclass(frozen=True, slots=True)
class MoveCompleted:
    move: MoveRecord
    was_opponents_move: bool = False


@dataclass(frozen=True, slots=True)
class GameOver:
    """Game finished. *side* is the side to move when it ended."""

    reason: GameOverReason
    side: Side = Side.INVALID


PromotionBeginCallback = Callable[[PromotionBegin], None]
MoveCompletedCallback = Callable[[MoveCompleted], None]
GameOverCallback = Callable[[GameOver], None]


@dataclass
class BoardEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_promotion_begin: list[PromotionBeginCallback] = field(default_factory=list)
    on_move_completed: list[MoveCompletedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
