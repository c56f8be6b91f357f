"""Perft tests — the gold standard for move-generator correctness.

Every node is played through the public ``pick_up``/``put_down``/
``end_promotion`` commands on a board copy, so the counts cover the whole
post-move pipeline and not only generation.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, MoveType, PieceKind, PromoType, Side
from chessrules.core.fen import STARTING_FEN
from chessrules.core.move_generator import update_pseudo_legal_and_attacked
from chessrules.core.piece import Piece
from chessrules.core.types import (
    A1,
    B7,
    C1,
    C3,
    D4,
    D5,
    E1,
    E2,
    E3,
    E4,
    E5,
    E8,
    G1,
    H1,
    H8,
    Square,
)

_PROMOTIONS = (PromoType.QUEEN, PromoType.ROOK, PromoType.BISHOP, PromoType.KNIGHT)


def perft(board: Board, depth: int) -> int:
    """Count leaf nodes at *depth*; promotions count once per piece choice."""
    moves = board.all_legal_moves()
    if depth == 1:
        return sum(4 if m.is_promotion else 1 for m in moves)

    nodes = 0
    for move in moves:
        for promo in _PROMOTIONS if move.is_promotion else (PromoType.NONE,):
            child = board.copy()
            assert child.pick_up(move.src)
            assert child.put_down(move.dest)
            if promo != PromoType.NONE:
                child.end_promotion(promo)
            nodes += perft(child, depth - 1)
    return nodes


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(Board(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(Board(STARTING_FEN), 2) == 400

    def test_depth_3(self) -> None:
        assert perft(Board(STARTING_FEN), 3) == 8_902


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(Board(KIWIPETE), 1) == 48

    def test_depth_2(self) -> None:
        assert perft(Board(KIWIPETE), 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(Board(KIWIPETE), 3) == 97_862


# ── Position 3: en-passant + rank pins ──────────────────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(Board(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(Board(POS3), 2) == 191

    def test_depth_3(self) -> None:
        assert perft(Board(POS3), 3) == 2_812

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft(Board(POS3), 4) == 43_238


# ── Position 4: promotions under check ──────────────────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        assert perft(Board(POS4), 1) == 6

    def test_depth_2(self) -> None:
        assert perft(Board(POS4), 2) == 264

    def test_depth_3(self) -> None:
        assert perft(Board(POS4), 3) == 9_467


# ── Position 5 ──────────────────────────────────────────────────────────────

POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftPos5:
    def test_depth_1(self) -> None:
        assert perft(Board(POS5), 1) == 44

    def test_depth_2(self) -> None:
        assert perft(Board(POS5), 2) == 1_486

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(Board(POS5), 3) == 62_379


# ── Single-piece generation ─────────────────────────────────────────────────


def _dests(board: Board, sq: Square) -> set[Square]:
    piece = board.piece_at(sq)
    assert piece is not None
    return {m.dest for m in piece.pseudo_legal_moves}


class TestPseudoLegal:
    def test_knight_in_corner(self) -> None:
        board = Board("4k3/8/8/8/8/8/8/N3K3 w - - 0 1")
        assert _dests(board, A1) == {Square(1, 2), Square(2, 1)}

    def test_rook_blocked_by_own_piece(self) -> None:
        board = Board("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        dests = _dests(board, A1)
        assert E1 not in dests
        assert Square(3, 0) in dests
        assert Square(0, 7) in dests

    def test_slider_attacks_stop_at_blocker(self) -> None:
        board = Board("4k3/8/8/8/8/8/8/R2PK3 w - - 0 1")
        rook = board.piece_at(A1)
        assert rook is not None
        # The defended pawn counts as attacked, the king behind it does not.
        assert Square(3, 0) in rook.attacked_squares
        assert E1 not in rook.attacked_squares

    def test_slider_attack_extends_past_king(self) -> None:
        board = Board("4K3/8/8/8/8/8/8/R5k1 b - - 0 1")
        rook = board.piece_at(A1)
        assert rook is not None
        assert G1 in rook.attacked_squares
        assert H1 in rook.attacked_squares

    def test_pawn_pushes_from_start(self) -> None:
        board = Board(STARTING_FEN)
        pawn = board.piece_at(E2)
        assert pawn is not None
        moves = {m.dest: m.move_type for m in pawn.pseudo_legal_moves}
        assert moves == {E3: MoveType.NORMAL, E4: MoveType.DOUBLE_PUSH}
        assert set(pawn.attacked_squares) == {Square(3, 2), Square(5, 2)}

    def test_pawn_double_push_blocked(self) -> None:
        board = Board("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert _dests(board, E2) == set()

    def test_pawn_capture_flags(self) -> None:
        board = Board("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
        pawn = board.piece_at(E4)
        assert pawn is not None
        capture = next(m for m in pawn.pseudo_legal_moves if m.dest == D5)
        assert capture.was_capture
        assert capture.move_type == MoveType.NORMAL

    def test_en_passant_generated(self) -> None:
        board = Board("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        pawn = board.piece_at(E5)
        assert pawn is not None
        ep = [m for m in pawn.pseudo_legal_moves if m.move_type == MoveType.EN_PASSANT]
        assert len(ep) == 1
        assert ep[0].dest == Square(3, 5)
        assert ep[0].was_capture

    def test_promotion_moves(self) -> None:
        board = Board("r3k3/1P6/8/8/8/8/8/4K3 w - - 0 1")
        pawn = board.piece_at(B7)
        assert pawn is not None
        types = {m.dest: m.move_type for m in pawn.pseudo_legal_moves}
        assert types == {
            Square(1, 7): MoveType.PROMOTION,
            Square(0, 7): MoveType.PROMOTION,
        }

    def test_capturing_original_rook_revokes_its_right(self) -> None:
        board = Board("r3k2r/1P6/8/8/8/8/8/4K3 w kq - 0 1")
        pawn = board.piece_at(B7)
        assert pawn is not None
        capture = next(m for m in pawn.pseudo_legal_moves if m.dest == Square(0, 7))
        assert capture.rights_to_revoke == CastlingRights.BLACK_LONG

    def test_king_moves_revoke_both_rights(self) -> None:
        board = Board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        king = board.piece_at(E1)
        assert king is not None
        assert all(
            m.rights_to_revoke == CastlingRights.WHITE_BOTH
            for m in king.pseudo_legal_moves
        )

    def test_rook_moves_revoke_own_wing(self) -> None:
        board = Board("r3k3/8/8/8/8/8/8/R3K2R w KQq - 0 1")
        rook = board.piece_at(H1)
        assert rook is not None
        assert all(
            m.rights_to_revoke == CastlingRights.WHITE_SHORT
            for m in rook.pseudo_legal_moves
        )

    def test_castling_generated_with_both_rights(self) -> None:
        board = Board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        king = board.piece_at(E1)
        assert king is not None
        castles = {
            m.dest: m for m in king.pseudo_legal_moves if m.move_type == MoveType.CASTLE
        }
        assert set(castles) == {G1, C1}
        assert castles[G1].rights_to_revoke == CastlingRights.WHITE_BOTH

    def test_long_castle_needs_b_file_empty(self) -> None:
        board = Board("r3k2r/8/8/8/8/8/8/RN2K2R w KQkq - 0 1")
        king = board.piece_at(E1)
        assert king is not None
        castles = {
            m.dest for m in king.pseudo_legal_moves if m.move_type == MoveType.CASTLE
        }
        assert castles == {G1}

    def test_regenerating_clears_previous_lists(self) -> None:
        board = Board("4k3/8/8/8/3N4/8/8/4K3 w - - 0 1")
        knight = board.piece_at(D4)
        assert knight is not None
        update_pseudo_legal_and_attacked(knight, board)
        update_pseudo_legal_and_attacked(knight, board)
        assert len(knight.pseudo_legal_moves) == 8
        assert len(knight.attacked_squares) == 8

    def test_detached_piece_uses_board_lookup(self) -> None:
        board = Board("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        ghost = Piece(PieceKind.BISHOP, Side.BLACK, C3)
        update_pseudo_legal_and_attacked(ghost, board)
        assert E1 in ghost.attacked_squares
        assert H8 in ghost.attacked_squares
        assert E8 not in ghost.attacked_squares
