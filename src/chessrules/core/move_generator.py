"""Pseudo-legal move and attacked-square generation, per piece kind.

Each generator rewrites a piece's ``pseudo_legal_moves`` and
``attacked_squares`` from the current board.  Pins and check are ignored
here; :mod:`chessrules.core.legality` filters the result afterwards.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessrules.core.castle_rights import both_for, right_for
from chessrules.core.enums import CastlingRights, MoveType, PieceKind, Side
from chessrules.core.move import MoveRecord
from chessrules.core.piece import Piece
from chessrules.core.types import Square, is_on_board

if TYPE_CHECKING:
    from chessrules.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, 1),
    (-2, -1),
    (-1, -2),
    (1, -2),
    (2, -1),
    (2, 1),
    (1, 2),
    (-1, 2),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

DIAGONAL_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (1, -1), (1, 1), (-1, 1))
ORTHOGONAL_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
ALL_DIRS: tuple[tuple[int, int], ...] = DIAGONAL_DIRS + ORTHOGONAL_DIRS

_SHORT: dict[Side, CastlingRights] = {
    Side.WHITE: CastlingRights.WHITE_SHORT,
    Side.BLACK: CastlingRights.BLACK_SHORT,
}
_LONG: dict[Side, CastlingRights] = {
    Side.WHITE: CastlingRights.WHITE_LONG,
    Side.BLACK: CastlingRights.BLACK_LONG,
}


def pawn_direction(side: Side) -> int:
    return 1 if side == Side.WHITE else -1


def pawn_start_rank(side: Side) -> int:
    return 1 if side == Side.WHITE else 6


def promotion_rank(side: Side) -> int:
    return 7 if side == Side.WHITE else 0


def en_passant_rank(side: Side) -> int:
    """Rank of the en-passant target squares *side* can capture on."""
    return 5 if side == Side.WHITE else 2


# -- Bookkeeping helpers ---------------------------------------------------


def _own_rights(piece: Piece) -> CastlingRights:
    """Rights lost by moving *piece* anywhere."""
    if piece.kind == PieceKind.KING:
        return both_for(piece.side)
    if piece.kind == PieceKind.ROOK and not piece.has_moved:
        return right_for(piece.side, piece.wing)
    return CastlingRights.NONE


def _captured_rights(target: Piece) -> CastlingRights:
    """Rights the opponent loses when *target* is captured."""
    if target.kind == PieceKind.ROOK and not target.has_moved:
        return right_for(target.side, target.wing)
    return CastlingRights.NONE


def _step(
    piece: Piece,
    board: Board,
    dest: Square,
    rights: CastlingRights,
) -> None:
    """Non-sliding step: always attacked, pseudo-legal unless friendly."""
    piece.attacked_squares.append(dest)
    target = board.piece_at(dest)
    if target is None:
        piece.pseudo_legal_moves.append(
            MoveRecord(piece.square, dest, rights_to_revoke=rights)
        )
    elif target.side != piece.side:
        piece.pseudo_legal_moves.append(
            MoveRecord(
                piece.square,
                dest,
                rights_to_revoke=rights | _captured_rights(target),
                was_capture=True,
            )
        )


# -- Per-kind generators ---------------------------------------------------


def _slide(
    piece: Piece,
    board: Board,
    directions: tuple[tuple[int, int], ...],
) -> None:
    rights = _own_rights(piece)
    moves = piece.pseudo_legal_moves
    attacked = piece.attacked_squares

    for direction in directions:
        sq = piece.square + direction
        while is_on_board(sq):
            attacked.append(sq)
            target = board.piece_at(sq)
            if target is None:
                moves.append(MoveRecord(piece.square, sq, rights_to_revoke=rights))
                sq = sq + direction
                continue

            if target.side != piece.side:
                moves.append(
                    MoveRecord(
                        piece.square,
                        sq,
                        rights_to_revoke=rights | _captured_rights(target),
                        was_capture=True,
                    )
                )
                # The square behind a checked king stays covered so the king
                # cannot retreat along the checking ray.
                if target.kind == PieceKind.KING:
                    beyond = sq + direction
                    if is_on_board(beyond):
                        attacked.append(beyond)
            break


def _gen_bishop(piece: Piece, board: Board) -> None:
    _slide(piece, board, DIAGONAL_DIRS)


def _gen_rook(piece: Piece, board: Board) -> None:
    _slide(piece, board, ORTHOGONAL_DIRS)


def _gen_queen(piece: Piece, board: Board) -> None:
    _slide(piece, board, ALL_DIRS)


def _gen_knight(piece: Piece, board: Board) -> None:
    for offset in KNIGHT_OFFSETS:
        dest = piece.square + offset
        if is_on_board(dest):
            _step(piece, board, dest, CastlingRights.NONE)


def _gen_king(piece: Piece, board: Board) -> None:
    rights = both_for(piece.side)
    for offset in KING_OFFSETS:
        dest = piece.square + offset
        if is_on_board(dest):
            _step(piece, board, dest, rights)

    _gen_castling(piece, board)


def _gen_castling(king: Piece, board: Board) -> None:
    """Castling needs the right and empty squares up to the rook.

    Attacked squares are not looked at here; the king filter drops castles
    that start in, or pass through, check.
    """
    side = king.side
    castle_rights = board.castle_rights
    rights = both_for(side)
    sq = king.square

    if castle_rights.has(_SHORT[side]):
        f_sq = sq + (1, 0)
        g_sq = sq + (2, 0)
        if (
            is_on_board(g_sq)
            and board.piece_at(f_sq) is None
            and board.piece_at(g_sq) is None
        ):
            king.pseudo_legal_moves.append(
                MoveRecord(sq, g_sq, MoveType.CASTLE, rights_to_revoke=rights)
            )

    if castle_rights.has(_LONG[side]):
        d_sq = sq + (-1, 0)
        c_sq = sq + (-2, 0)
        b_sq = sq + (-3, 0)
        if (
            is_on_board(b_sq)
            and board.piece_at(d_sq) is None
            and board.piece_at(c_sq) is None
            and board.piece_at(b_sq) is None
        ):
            king.pseudo_legal_moves.append(
                MoveRecord(sq, c_sq, MoveType.CASTLE, rights_to_revoke=rights)
            )


def _gen_pawn(piece: Piece, board: Board) -> None:
    side = piece.side
    src = piece.square
    dy = pawn_direction(side)
    last_rank = promotion_rank(side)
    moves = piece.pseudo_legal_moves

    one_step = src + (0, dy)
    if is_on_board(one_step) and board.piece_at(one_step) is None:
        if one_step.y == last_rank:
            moves.append(MoveRecord(src, one_step, MoveType.PROMOTION))
        else:
            moves.append(MoveRecord(src, one_step))
            two_step = one_step + (0, dy)
            if src.y == pawn_start_rank(side) and board.piece_at(two_step) is None:
                moves.append(MoveRecord(src, two_step, MoveType.DOUBLE_PUSH))

    for dx in (-1, 1):
        cap_sq = src + (dx, dy)
        if not is_on_board(cap_sq):
            continue

        piece.attacked_squares.append(cap_sq)
        target = board.piece_at(cap_sq)
        if target is not None:
            if target.side == side:
                continue
            moves.append(
                MoveRecord(
                    src,
                    cap_sq,
                    MoveType.PROMOTION if cap_sq.y == last_rank else MoveType.NORMAL,
                    rights_to_revoke=_captured_rights(target),
                    was_capture=True,
                )
            )
        elif cap_sq == board.en_passant_target and cap_sq.y == en_passant_rank(side):
            moves.append(MoveRecord(src, cap_sq, MoveType.EN_PASSANT, was_capture=True))


_GENERATORS: dict[PieceKind, Callable[[Piece, Board], None]] = {
    PieceKind.PAWN: _gen_pawn,
    PieceKind.KNIGHT: _gen_knight,
    PieceKind.BISHOP: _gen_bishop,
    PieceKind.ROOK: _gen_rook,
    PieceKind.QUEEN: _gen_queen,
    PieceKind.KING: _gen_king,
}


def update_pseudo_legal_and_attacked(piece: Piece, board: Board) -> None:
    """Recompute *piece*'s pseudo-legal moves and attacked squares."""
    piece.pseudo_legal_moves = []
    piece.attacked_squares = []
    _GENERATORS[piece.kind](piece, board)
