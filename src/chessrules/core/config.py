"""Board configuration."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Side
from chessrules.core.fen import STARTING_FEN


@dataclass
class BoardSettings:
    """Settings a :class:`~chessrules.core.board.Board` is built and reset from.

    ``user_side`` stays ``Side.INVALID`` for local two-player games; online
    play sets it to the side the local user controls.
    """

    starting_fen: str = STARTING_FEN
    user_side: Side = Side.INVALID
