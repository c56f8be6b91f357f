"""FEN parsing and serialization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chessrules.core.enums import CastlingRights, Side
from chessrules.core.exceptions import FenError
from chessrules.core.move_generator import en_passant_rank
from chessrules.core.piece import Piece
from chessrules.core.types import NO_SQUARE, Square, parse_square

if TYPE_CHECKING:
    from chessrules.core.board import Board

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_SHORT,
    "Q": CastlingRights.WHITE_LONG,
    "k": CastlingRights.BLACK_SHORT,
    "q": CastlingRights.BLACK_LONG,
}


@dataclass(slots=True)
class FenRecord:
    """Parsed FEN fields, before they are applied to a board."""

    pieces: list[Piece] = field(default_factory=list)
    side_to_move: Side = Side.WHITE
    castling: CastlingRights = CastlingRights.NONE
    en_passant: Square = NO_SQUARE
    halfmove_clock: int = 0
    fullmove_number: int = 1


def parse_fen(fen: str) -> FenRecord:
    """Parse a FEN string.

    Only the placement field is required.  Missing fields default to White
    to move, no castling, no en passant.  King counts are not checked here;
    the board logs them when it loads the record.
    """
    parts = fen.split()
    if not (1 <= len(parts) <= 6):
        raise FenError(f"Invalid FEN (need 1-6 fields): {fen!r}")

    record = FenRecord()

    # 1. Piece placement
    ranks = parts[0].split("/")
    if len(ranks) != 8:
        raise FenError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise FenError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise FenError(f"Invalid FEN rank width: {fen!r}")
                try:
                    record.pieces.append(Piece.from_char(ch, Square(file, rank)))
                except ValueError as exc:
                    raise FenError(f"{exc} in FEN {fen!r}") from None
                file += 1
            if file > 8:
                raise FenError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise FenError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if len(parts) > 1:
        if parts[1] == "w":
            record.side_to_move = Side.WHITE
        elif parts[1] == "b":
            record.side_to_move = Side.BLACK
        else:
            raise FenError(f"Invalid FEN side-to-move field: {parts[1]!r}")

    # 3. Castling
    if len(parts) > 2 and parts[2] != "-":
        seen: set[str] = set()
        for ch in parts[2]:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise FenError(f"Invalid FEN castling field: {parts[2]!r}")
            seen.add(ch)
            record.castling |= right

    # 4. En passant
    if len(parts) > 3 and parts[3] != "-":
        try:
            ep = parse_square(parts[3])
        except ValueError:
            raise FenError(f"Invalid FEN en-passant square: {parts[3]!r}") from None
        if ep.y != en_passant_rank(record.side_to_move):
            raise FenError(
                f"Invalid FEN en-passant square for side-to-move: {parts[3]!r}"
            )
        record.en_passant = ep

    # 5–6. Clocks, kept only so the position can be written back out.
    try:
        if len(parts) > 4:
            record.halfmove_clock = int(parts[4])
        if len(parts) > 5:
            record.fullmove_number = int(parts[5])
    except ValueError:
        raise FenError(f"Invalid FEN move counters: {fen!r}") from None
    if record.halfmove_clock < 0 or record.fullmove_number < 1:
        raise FenError(f"Invalid FEN move counters: {fen!r}")

    return record


def placement_to_fen(board: Board) -> str:
    """Serialise the piece placement field only."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board.piece_at(Square(file, rank))
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    side_str = "b" if board.side_to_move == Side.BLACK else "w"
    ep_str = str(board.en_passant_target)
    return (
        f"{placement_to_fen(board)} {side_str} {board.castle_rights} {ep_str} "
        f"{board.halfmove_clock} {board.fullmove_number}"
    )
