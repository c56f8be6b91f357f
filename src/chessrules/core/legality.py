"""Pin detection and legal-move filtering.

Runs after every piece has fresh pseudo-legal moves and attacked squares and
the board's check state is known.  Only pieces of the side to move are
filtered.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessrules.core.enums import CheckState, MoveType, PieceKind
from chessrules.core.move import MoveRecord
from chessrules.core.move_generator import ALL_DIRS
from chessrules.core.piece import Piece
from chessrules.core.types import (
    NO_SQUARE,
    Square,
    is_on_board,
    same_diagonal,
    same_rank_or_file,
    step_towards,
)

if TYPE_CHECKING:
    from chessrules.core.board import Board

_DIAGONAL_SLIDERS = (PieceKind.BISHOP, PieceKind.QUEEN)
_ORTHOGONAL_SLIDERS = (PieceKind.ROOK, PieceKind.QUEEN)


def _sliders_for(direction: tuple[int, int]) -> tuple[PieceKind, ...]:
    if direction[0] != 0 and direction[1] != 0:
        return _DIAGONAL_SLIDERS
    return _ORTHOGONAL_SLIDERS


# -- Pins ------------------------------------------------------------------


def update_pinned_info(piece: Piece, board: Board) -> None:
    """Set ``piece.pinned_by`` to the square of the enemy slider pinning it."""
    piece.pinned_by = NO_SQUARE
    if piece.kind == PieceKind.KING:
        return

    king_sq = board.king_square(piece.side)
    if king_sq == NO_SQUARE or king_sq == piece.square:
        return

    if same_diagonal(king_sq, piece.square):
        pinner_kinds = _DIAGONAL_SLIDERS
    elif same_rank_or_file(king_sq, piece.square):
        pinner_kinds = _ORTHOGONAL_SLIDERS
    else:
        return

    direction = step_towards(king_sq, piece.square)

    # Nothing may stand between the king and this piece.
    sq = king_sq + direction
    while sq != piece.square:
        if board.piece_at(sq) is not None:
            return
        sq = sq + direction

    sq = sq + direction
    while is_on_board(sq):
        other = board.piece_at(sq)
        if other is not None:
            if other.side != piece.side and other.kind in pinner_kinds:
                piece.pinned_by = sq
            return
        sq = sq + direction


# -- Predicates ------------------------------------------------------------


def is_on_pin_line(piece: Piece, move: MoveRecord, board: Board) -> bool:
    """Whether *move* keeps *piece* on the line through its king and pinner."""
    king_sq = board.king_square(piece.side)
    pinner = piece.pinned_by
    to_dest = (move.dest.x - king_sq.x, move.dest.y - king_sq.y)
    to_pinner = (pinner.x - king_sq.x, pinner.y - king_sq.y)
    return to_dest[0] * to_pinner[1] - to_dest[1] * to_pinner[0] == 0


def resolves_check(move: MoveRecord, board: Board) -> bool:
    """Whether a non-king *move* ends a single check.

    The move must capture the checker or land between it and the king.
    Knights and pawns cannot be blocked; a pawn that just double-pushed can
    also be taken en passant.
    """
    checker_sq = board.checking_piece_square
    checker = board.piece_at(checker_sq)
    if checker is None:
        return False

    if move.move_type == MoveType.EN_PASSANT and checker_sq == Square(
        move.dest.x, move.src.y
    ):
        return True

    if move.dest == checker_sq:
        return True

    if not checker.is_slider:
        return False

    king_sq = board.king_square(board.side_to_move)
    direction = step_towards(king_sq, checker_sq)
    sq = king_sq + direction
    while sq != checker_sq:
        if move.dest == sq:
            return True
        sq = sq + direction
    return False


def en_passant_exposes_king(pawn: Piece, move: MoveRecord, board: Board) -> bool:
    """Whether taking en passant would leave the mover's king attacked.

    Both pawns leave their squares at once, so a rook or queen on the pawns'
    rank (or a slider behind the captured pawn) can be uncovered even when
    neither pawn is pinned on its own.
    """
    king_sq = board.king_square(pawn.side)
    if king_sq == NO_SQUARE:
        return False

    vacated = (move.src, Square(move.dest.x, move.src.y))

    for direction in ALL_DIRS:
        attackers = _sliders_for(direction)
        sq = king_sq + direction
        while is_on_board(sq):
            if sq == move.dest:
                break
            if sq not in vacated:
                other = board.piece_at(sq)
                if other is not None:
                    if other.side != pawn.side and other.kind in attackers:
                        return True
                    break
            sq = sq + direction
    return False


# -- Filters ---------------------------------------------------------------


def _non_king_legal_moves(piece: Piece, board: Board) -> list[MoveRecord]:
    check_state = board.check_state
    if check_state == CheckState.DOUBLE_CHECK:
        return []

    if piece.is_pinned:
        if check_state == CheckState.SINGLE_CHECK:
            return []
        legal = [m for m in piece.pseudo_legal_moves if is_on_pin_line(piece, m, board)]
    elif check_state == CheckState.SINGLE_CHECK:
        legal = [m for m in piece.pseudo_legal_moves if resolves_check(m, board)]
    else:
        legal = list(piece.pseudo_legal_moves)

    if piece.kind == PieceKind.PAWN and board.en_passant_target != NO_SQUARE:
        legal = [
            m
            for m in legal
            if m.move_type != MoveType.EN_PASSANT
            or not en_passant_exposes_king(piece, m, board)
        ]
    return legal


def _king_legal_moves(king: Piece, board: Board) -> list[MoveRecord]:
    attacked = board.attacked_squares(king.side.opposite)
    legal: list[MoveRecord] = []
    drop_short = drop_long = False

    for move in king.pseudo_legal_moves:
        if move.dest not in attacked:
            legal.append(move)
            continue
        # An attacked square next to the king also rules out castling
        # through it.
        if move.move_type != MoveType.CASTLE and move.dest.y == king.square.y:
            step = move.dest.x - king.square.x
            if step == 1:
                drop_short = True
            elif step == -1:
                drop_long = True

    in_check = board.check_state != CheckState.NO_CHECK

    def keep(move: MoveRecord) -> bool:
        if move.move_type != MoveType.CASTLE:
            return True
        if in_check:
            return False
        if move.dest.x > king.square.x:
            return not drop_short
        return not drop_long

    return [m for m in legal if keep(m)]


_FILTERS: dict[PieceKind, Callable[[Piece, Board], list[MoveRecord]]] = {
    PieceKind.PAWN: _non_king_legal_moves,
    PieceKind.KNIGHT: _non_king_legal_moves,
    PieceKind.BISHOP: _non_king_legal_moves,
    PieceKind.ROOK: _non_king_legal_moves,
    PieceKind.QUEEN: _non_king_legal_moves,
    PieceKind.KING: _king_legal_moves,
}


def update_legal_moves(piece: Piece, board: Board) -> None:
    """Recompute *piece*'s fully legal moves from its pseudo-legal ones."""
    piece.legal_moves = _FILTERS[piece.kind](piece, board)
