"""Board — owns the 8x8 grid, applies moves and keeps derived state current.

A ply runs through a small state machine::

    Idle --pick_up--> Holding --put_down--> Idle
                                  |
                                  +--(promotion)--> AwaitingPromotion
                                                        |
                                          end_promotion +--> Idle

After every completed move the board rebuilds, in order, all pseudo-legal
moves and attacked squares, the check state, the pins of the side to move
and finally that side's legal moves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from chessrules.core import legality
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
from chessrules.core.exceptions import IntegrityError
from chessrules.core.fen import FenRecord, board_to_fen, parse_fen
from chessrules.core.move import MoveRecord
from chessrules.core.move_generator import update_pseudo_legal_and_attacked
from chessrules.core.piece import Piece
from chessrules.core.types import NO_SQUARE, Square, is_on_board, square_index

_LOGGER = logging.getLogger(__name__)

# Castling letter → (king home, rook home, rook wing)
_CASTLING_HOMES: dict[CastlingRights, tuple[Square, Square, RookWing]] = {
    CastlingRights.WHITE_SHORT: (Square(4, 0), Square(7, 0), RookWing.KING_SIDE),
    CastlingRights.WHITE_LONG: (Square(4, 0), Square(0, 0), RookWing.QUEEN_SIDE),
    CastlingRights.BLACK_SHORT: (Square(4, 7), Square(7, 7), RookWing.KING_SIDE),
    CastlingRights.BLACK_LONG: (Square(4, 7), Square(0, 7), RookWing.QUEEN_SIDE),
}


class Board:
    """Chess board plus the rules engine that drives it.

    Args:
        fen: Position to load. Defaults to ``settings.starting_fen``.
        settings: Start position and local user side used by construction
            and :meth:`reset_board`.
        events: Subscriber lists. Pass pre-populated lists to observe a
            game over detected while the initial position loads.
    """

    __slots__ = (
        "settings",
        "events",
        "user_side",
        "castle_rights",
        "en_passant_target",
        "check_state",
        "checking_piece_square",
        "last_move",
        "halfmove_clock",
        "fullmove_number",
        "_squares",
        "_side_to_move",
        "_king_squares",
        "_last_captured",
        "_held",
        "_awaiting_promotion",
        "_game_over",
    )

    def __init__(
        self,
        fen: str | None = None,
        *,
        settings: BoardSettings | None = None,
        events: BoardEvents | None = None,
    ) -> None:
        self.settings = settings if settings is not None else BoardSettings()
        self.events = events if events is not None else BoardEvents()
        self.user_side = self.settings.user_side
        self._clear()
        self.load_fen(fen if fen is not None else self.settings.starting_fen)

    # ── Element access ───────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        if not is_on_board(sq):
            return None
        return self._squares[square_index(sq)]

    def pieces(self, side: Side | None = None) -> Iterator[Piece]:
        """Pieces on the board in grid order, optionally of one *side*."""
        for piece in self._squares:
            if piece is not None and (side is None or piece.side == side):
                yield piece

    def king_square(self, side: Side) -> Square:
        """Square of *side*'s king, ``NO_SQUARE`` if it has none."""
        return self._king_squares.get(side, NO_SQUARE)

    def attacked_squares(self, side: Side) -> set[Square]:
        """Every square a piece of *side* attacks."""
        attacked: set[Square] = set()
        for piece in self.pieces(side):
            attacked.update(piece.attacked_squares)
        return attacked

    def legal_moves_at(self, sq: Square) -> list[MoveRecord]:
        """Legal moves of the piece on *sq* (empty unless it is on move)."""
        piece = self.piece_at(sq)
        if piece is None or piece.side != self._side_to_move:
            return []
        return list(piece.legal_moves)

    def all_legal_moves(self) -> list[MoveRecord]:
        """All legal moves of the side to move."""
        moves: list[MoveRecord] = []
        for piece in self.pieces(self._side_to_move):
            moves.extend(piece.legal_moves)
        return moves

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Side:
        return self._side_to_move

    @property
    def held_piece(self) -> Piece | None:
        return self._held

    @property
    def is_awaiting_promotion(self) -> bool:
        return self._awaiting_promotion

    @property
    def game_over_reason(self) -> GameOverReason | None:
        return self._game_over

    @property
    def is_in_check(self) -> bool:
        return self.check_state != CheckState.NO_CHECK

    # ── Commands ─────────────────────────────────────────────────────────

    def pick_up(self, sq: Square) -> bool:
        """Latch the piece on *sq* if it belongs to the side to move."""
        if self._awaiting_promotion or self._held is not None:
            return False
        if self.user_side != Side.INVALID and self._side_to_move != self.user_side:
            _LOGGER.debug("Ignoring pick-up on %s: not the user's turn", sq)
            return False

        piece = self.piece_at(sq)
        if piece is None or piece.side != self._side_to_move:
            _LOGGER.debug("Ignoring pick-up on %s", sq)
            return False

        self._held = piece
        return True

    def release(self) -> None:
        """Put the held piece back without moving it."""
        self._held = None

    def put_down(self, sq: Square) -> bool:
        """Try to move the held piece to *sq*. Returns True if a move was made."""
        if self._awaiting_promotion:
            _LOGGER.debug("Ignoring put-down on %s: promotion pending", sq)
            return False

        held = self._held
        self._held = None
        if held is None or not is_on_board(sq):
            return False

        move = next((m for m in held.legal_moves if m.dest == sq), None)
        if move is None:
            _LOGGER.debug("Rejected move %s -> %s", held.square, sq)
            return False

        self.move_piece(move)
        if move.is_promotion:
            self._awaiting_promotion = True
            self._emit_promotion_begin(PromotionBegin(self._side_to_move, move.dest))
            return True

        self.post_move_update()
        return True

    def end_promotion(self, promo_type: PromoType) -> None:
        """Finish a paused promotion ply with the chosen piece."""
        if not self._awaiting_promotion or self.last_move is None:
            _LOGGER.debug("Ignoring end_promotion: no promotion pending")
            return
        if promo_type == PromoType.NONE:
            raise ValueError("A promotion needs a piece to promote to")

        self._awaiting_promotion = False
        self.last_move = self.last_move.with_promotion(promo_type)
        self.post_move_update()

    def apply_remote_move(
        self,
        move: MoveRecord,
        promo_type: PromoType = PromoType.NONE,
    ) -> None:
        """Apply a move received from the opponent and run the full pipeline.

        The transport is trusted: if the move is not among the local legal
        moves it is still applied as given.
        """
        if self._awaiting_promotion:
            _LOGGER.debug("Ignoring remote move %s: promotion pending", move)
            return

        piece = self.piece_at(move.src)
        if piece is None:
            raise IntegrityError(f"Remote move {move} starts on an empty square")

        local = next(
            (m for m in piece.legal_moves if m.src == move.src and m.dest == move.dest),
            None,
        )
        if local is None:
            _LOGGER.warning("Remote move %s is not legal locally; applying it", move)
            local = move

        if promo_type == PromoType.NONE:
            promo_type = move.promo_type
        if local.is_promotion:
            if promo_type == PromoType.NONE:
                raise ValueError(f"Remote promotion {move} has no promotion piece")
            local = local.with_promotion(promo_type)

        self._held = None
        self.move_piece(local.as_opponents_move())
        self.post_move_update()

    def reset_board(self) -> None:
        """Reload the configured start position and clear all game state."""
        _LOGGER.info("Resetting board")
        self._clear()
        self.load_fen(self.settings.starting_fen)

    def set_user_side(self, side: Side) -> None:
        """Declare the side the local user plays (``INVALID`` for local play)."""
        self.user_side = side

    # ── FEN ──────────────────────────────────────────────────────────────

    def load_fen(self, fen: str) -> None:
        """Replace the position with *fen* and compute the legal moves.

        A position without exactly one king per side is logged and still
        loaded.  Raises :class:`~chessrules.core.exceptions.FenError` for
        text that cannot be parsed; the board is left untouched then.
        """
        record = parse_fen(fen)
        self._clear()
        self._setup(record)
        self.update_legal_moves()
        self._check_game_over()

    def to_fen(self) -> str:
        return board_to_fen(self)

    def _setup(self, record: FenRecord) -> None:
        kings = {Side.WHITE: 0, Side.BLACK: 0}
        for piece in record.pieces:
            self._place(piece, piece.square)
            if piece.kind == PieceKind.KING:
                kings[piece.side] += 1

        for side, count in kings.items():
            if count != 1:
                _LOGGER.error(
                    "Error loading FEN: %d %s kings (expected 1)", count, side
                )

        self._side_to_move = record.side_to_move

        for right, (king_home, rook_home, wing) in _CASTLING_HOMES.items():
            if not record.castling & right:
                continue
            side = Side.WHITE if king_home.y == 0 else Side.BLACK
            king = self.piece_at(king_home)
            rook = self.piece_at(rook_home)
            if (
                king is None
                or king.kind != PieceKind.KING
                or king.side != side
                or rook is None
                or rook.kind != PieceKind.ROOK
                or rook.side != side
            ):
                _LOGGER.warning(
                    "FEN grants castling right %s without king and rook at home",
                    right.name,
                )
                continue
            rook.has_moved = False
            rook.wing = wing
            self.castle_rights.add(right)

        self.en_passant_target = record.en_passant
        self.halfmove_clock = record.halfmove_clock
        self.fullmove_number = record.fullmove_number

    # ── Move application ─────────────────────────────────────────────────

    def move_piece(self, move: MoveRecord) -> None:
        """Relocate the piece on ``move.src`` and record *move* as the last move.

        A piece on ``move.dest`` is captured first.
        """
        if self.piece_at(move.src) is None:
            raise IntegrityError(f"No piece on {move.src} for move {move}")
        self._relocate(move.src, move.dest)
        self.last_move = move

    def post_move_update(self) -> None:
        """Finish the ply recorded in :attr:`last_move`.

        Runs the special-move handler, applies castling-right revocations,
        emits ``MoveCompleted``, hands the turn over, recomputes legal moves
        and finally reports checkmate or stalemate.
        """
        move = self.last_move
        if move is None:
            raise IntegrityError("post_move_update without a move")

        mover = self.piece_at(move.dest)
        resets_clock = move.was_capture or (
            mover is not None and mover.kind == PieceKind.PAWN
        )

        if move.move_type == MoveType.DOUBLE_PUSH:
            self.en_passant_target = Square(move.dest.x, (move.src.y + move.dest.y) // 2)
        elif move.move_type == MoveType.EN_PASSANT:
            self._capture(Square(move.dest.x, move.src.y))
        elif move.move_type == MoveType.CASTLE:
            self._handle_castle(move)
        elif move.move_type == MoveType.PROMOTION:
            self._handle_promotion(move)

        self.castle_rights.revoke(move.rights_to_revoke)

        if move.move_type != MoveType.DOUBLE_PUSH:
            self.en_passant_target = NO_SQUARE

        self.halfmove_clock = 0 if resets_clock else self.halfmove_clock + 1
        if self._side_to_move == Side.BLACK:
            self.fullmove_number += 1

        self._emit_move_completed(MoveCompleted(move, move.was_opponents_move))

        self._side_to_move = self._side_to_move.opposite
        self._last_captured = None
        self.update_legal_moves()
        self._check_game_over()

    def _handle_castle(self, move: MoveRecord) -> None:
        is_long = move.dest.x == 2
        rook_src = Square(0 if is_long else 7, move.dest.y)
        rook_dest = Square(move.dest.x + (1 if is_long else -1), move.dest.y)

        king = self.piece_at(move.dest)
        rook = self.piece_at(rook_src)
        if (
            king is None
            or rook is None
            or rook.kind != PieceKind.ROOK
            or rook.side != king.side
        ):
            raise IntegrityError(f"Castle {move} finds no rook on {rook_src}")
        self._relocate(rook_src, rook_dest)

    def _handle_promotion(self, move: MoveRecord) -> None:
        if move.promo_type == PromoType.NONE:
            raise IntegrityError(f"Promotion {move} has no promotion piece")
        pawn = self.piece_at(move.dest)
        if pawn is None:
            raise IntegrityError(f"Promotion {move} finds no pawn on {move.dest}")
        self.make_piece_at(move.promo_type.piece_kind, pawn.side, move.dest)

    # ── Derived state ────────────────────────────────────────────────────

    def update_legal_moves(self) -> None:
        """Recompute all derived move data for the current side to move."""
        # 1) pseudo-legal moves and attacked squares, both sides
        for piece in self.pieces():
            update_pseudo_legal_and_attacked(piece, self)

        # 2) check state from the opponent's attacked squares
        self._update_check_state()

        # 3) pins, side to move only
        for piece in self.pieces(self._side_to_move):
            legality.update_pinned_info(piece, self)

        # 4) fully legal moves, side to move only
        for piece in self.pieces(self._side_to_move):
            legality.update_legal_moves(piece, self)

    def _update_check_state(self) -> None:
        self.check_state = CheckState.NO_CHECK
        self.checking_piece_square = NO_SQUARE
        king_sq = self.king_square(self._side_to_move)
        if king_sq == NO_SQUARE:
            return

        checkers = 0
        for piece in self.pieces(self._side_to_move.opposite):
            if king_sq in piece.attacked_squares:
                checkers += 1
                if checkers == 1:
                    self.checking_piece_square = piece.square
                else:
                    break
        self.check_state = CheckState(min(checkers, 2))

    def _check_game_over(self) -> None:
        if any(piece.legal_moves for piece in self.pieces(self._side_to_move)):
            return

        reason = (
            GameOverReason.CHECKMATE
            if self.check_state != CheckState.NO_CHECK
            else GameOverReason.STALEMATE
        )
        self._game_over = reason
        _LOGGER.info("Game over: %s (%s to move)", reason, self._side_to_move)
        self._emit_game_over(GameOver(reason, self._side_to_move))

    # ── Grid helpers ─────────────────────────────────────────────────────

    def make_piece_at(self, kind: PieceKind, side: Side, sq: Square) -> Piece:
        """Create a new piece on *sq*, capturing whatever stood there."""
        if self.piece_at(sq) is not None:
            self._capture(sq)
        piece = Piece(kind, side, sq)
        self._place(piece, sq)
        return piece

    def _place(self, piece: Piece, sq: Square) -> None:
        piece.square = sq
        self._squares[square_index(sq)] = piece
        if piece.kind == PieceKind.KING:
            self._king_squares[piece.side] = sq

    def _relocate(self, src: Square, dest: Square) -> None:
        if self.piece_at(dest) is not None:
            self._capture(dest)
        piece = self._squares[square_index(src)]
        assert piece is not None
        self._squares[square_index(src)] = None
        self._place(piece, dest)
        if piece.kind == PieceKind.ROOK:
            piece.has_moved = True
            piece.wing = RookWing.NEITHER

    def _capture(self, sq: Square) -> None:
        idx = square_index(sq)
        piece = self._squares[idx]
        self._last_captured = piece
        self._squares[idx] = None
        if (
            piece is not None
            and piece.kind == PieceKind.KING
            and self._king_squares.get(piece.side) == sq
        ):
            del self._king_squares[piece.side]

    def _clear(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        self._side_to_move = Side.WHITE
        self._king_squares: dict[Side, Square] = {}
        self._last_captured: Piece | None = None
        self._held: Piece | None = None
        self._awaiting_promotion = False
        self._game_over: GameOverReason | None = None
        self.castle_rights = CastleRights()
        self.en_passant_target = NO_SQUARE
        self.check_state = CheckState.NO_CHECK
        self.checking_piece_square = NO_SQUARE
        self.last_move: MoveRecord | None = None
        self.halfmove_clock = 0
        self.fullmove_number = 1

    # ── Event emission ───────────────────────────────────────────────────

    def _emit_promotion_begin(self, event: PromotionBegin) -> None:
        for cb in self.events.on_promotion_begin:
            cb(event)

    def _emit_move_completed(self, event: MoveCompleted) -> None:
        for cb in self.events.on_move_completed:
            cb(event)

    def _emit_game_over(self, event: GameOver) -> None:
        for cb in self.events.on_game_over:
            cb(event)

    # ── Copying ──────────────────────────────────────────────────────────

    def copy(self) -> Board:
        """Independent copy of the position with no subscribers attached."""
        b = Board.__new__(Board)
        b.settings = self.settings
        b.events = BoardEvents()
        b.user_side = self.user_side
        b._squares = [p.copy() if p is not None else None for p in self._squares]
        b._side_to_move = self._side_to_move
        b._king_squares = dict(self._king_squares)
        b._last_captured = None
        b._held = None if self._held is None else b.piece_at(self._held.square)
        b._awaiting_promotion = self._awaiting_promotion
        b._game_over = self._game_over
        b.castle_rights = self.castle_rights.copy()
        b.en_passant_target = self.en_passant_target
        b.check_state = self.check_state
        b.checking_piece_square = self.checking_piece_square
        b.last_move = self.last_move
        b.halfmove_clock = self.halfmove_clock
        b.fullmove_number = self.fullmove_number
        return b

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self.piece_at(Square(file, rank))
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
