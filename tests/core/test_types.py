"""Tests for squares, pieces and the small enums."""

import pytest

from chessrules.core.enums import PieceKind, PromoType, RookWing, Side
from chessrules.core.piece import Piece
from chessrules.core.types import (
    A1,
    E4,
    H8,
    NO_SQUARE,
    Square,
    is_on_board,
    parse_square,
    same_diagonal,
    same_rank_or_file,
    square_at,
    square_index,
    square_name,
    step_towards,
)


class TestSquare:
    def test_vector_addition(self) -> None:
        assert Square(4, 3) + (1, -1) == Square(5, 2)
        assert Square(4, 3) - (1, 1) == Square(3, 2)

    def test_addition_returns_square(self) -> None:
        assert isinstance(A1 + (1, 1), Square)

    def test_str_is_name(self) -> None:
        assert str(E4) == "e4"
        assert str(NO_SQUARE) == "-"

    def test_on_board(self) -> None:
        assert is_on_board(A1)
        assert is_on_board(H8)
        assert not is_on_board(NO_SQUARE)
        assert not is_on_board(Square(8, 0))
        assert not is_on_board(Square(0, 8))

    def test_index_roundtrip(self) -> None:
        assert square_index(A1) == 0
        assert square_index(H8) == 63
        assert square_at(28) == E4

    def test_names(self) -> None:
        assert square_name(Square(0, 0)) == "a1"
        assert parse_square("h8") == H8

    @pytest.mark.parametrize("bad", ["", "e", "e9", "i1", "e44"])
    def test_parse_rejects_garbage(self, bad: str) -> None:
        with pytest.raises(ValueError):
            parse_square(bad)

    def test_lines(self) -> None:
        assert same_diagonal(A1, H8)
        assert not same_diagonal(A1, E4)
        assert same_rank_or_file(A1, Square(0, 5))
        assert same_rank_or_file(A1, Square(6, 0))

    def test_step_towards(self) -> None:
        assert step_towards(A1, H8) == (1, 1)
        assert step_towards(E4, Square(4, 0)) == (0, -1)
        assert step_towards(E4, Square(0, 3)) == (-1, 0)


class TestPiece:
    def test_from_char(self) -> None:
        p = Piece.from_char("n", E4)
        assert p.kind == PieceKind.KNIGHT
        assert p.side == Side.BLACK
        assert p.square == E4
        assert str(p) == "n"

    def test_from_char_rejects_unknown(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_char("x")

    def test_slider(self) -> None:
        assert Piece(PieceKind.QUEEN, Side.WHITE).is_slider
        assert not Piece(PieceKind.KNIGHT, Side.WHITE).is_slider

    def test_defaults(self) -> None:
        p = Piece(PieceKind.ROOK, Side.WHITE, A1)
        assert not p.is_pinned
        assert p.has_moved
        assert p.wing == RookWing.NEITHER

    def test_copy_is_independent(self) -> None:
        p = Piece(PieceKind.ROOK, Side.WHITE, A1)
        p.attacked_squares.append(Square(0, 1))
        c = p.copy()
        c.attacked_squares.clear()
        assert p.attacked_squares == [Square(0, 1)]

    def test_symbol(self) -> None:
        assert Piece(PieceKind.KING, Side.WHITE).symbol == "♔"


class TestEnums:
    def test_opposite(self) -> None:
        assert Side.WHITE.opposite == Side.BLACK
        assert Side.BLACK.opposite == Side.WHITE
        assert Side.INVALID.opposite == Side.INVALID

    def test_promo_kind(self) -> None:
        assert PromoType.QUEEN.piece_kind == PieceKind.QUEEN
        assert PromoType.KNIGHT.piece_kind == PieceKind.KNIGHT

    def test_promo_none_has_no_kind(self) -> None:
        with pytest.raises(ValueError):
            PromoType.NONE.piece_kind
