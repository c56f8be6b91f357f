"""Piece — a kind-tagged piece living on the board grid."""

from __future__ import annotations

from chessrules.core.enums import PieceKind, RookWing, Side
from chessrules.core.move import MoveRecord
from chessrules.core.types import NO_SQUARE, Square

# FEN character ↔ (Side, PieceKind)
_CHAR_MAP: dict[str, tuple[Side, PieceKind]] = {
    "P": (Side.WHITE, PieceKind.PAWN),
    "N": (Side.WHITE, PieceKind.KNIGHT),
    "B": (Side.WHITE, PieceKind.BISHOP),
    "R": (Side.WHITE, PieceKind.ROOK),
    "Q": (Side.WHITE, PieceKind.QUEEN),
    "K": (Side.WHITE, PieceKind.KING),
    "p": (Side.BLACK, PieceKind.PAWN),
    "n": (Side.BLACK, PieceKind.KNIGHT),
    "b": (Side.BLACK, PieceKind.BISHOP),
    "r": (Side.BLACK, PieceKind.ROOK),
    "q": (Side.BLACK, PieceKind.QUEEN),
    "k": (Side.BLACK, PieceKind.KING),
}

_UNICODE: dict[tuple[Side, PieceKind], str] = {
    (Side.WHITE, PieceKind.PAWN): "♙",
    (Side.WHITE, PieceKind.KNIGHT): "♘",
    (Side.WHITE, PieceKind.BISHOP): "♗",
    (Side.WHITE, PieceKind.ROOK): "♖",
    (Side.WHITE, PieceKind.QUEEN): "♕",
    (Side.WHITE, PieceKind.KING): "♔",
    (Side.BLACK, PieceKind.PAWN): "♟",
    (Side.BLACK, PieceKind.KNIGHT): "♞",
    (Side.BLACK, PieceKind.BISHOP): "♝",
    (Side.BLACK, PieceKind.ROOK): "♜",
    (Side.BLACK, PieceKind.QUEEN): "♛",
    (Side.BLACK, PieceKind.KING): "♚",
}

_FEN_CHARS: dict[tuple[Side, PieceKind], str] = {v: k for k, v in _CHAR_MAP.items()}


class Piece:
    """A piece plus the move data the board keeps current for it.

    ``pseudo_legal_moves``, ``legal_moves`` and ``attacked_squares`` are
    rewritten by :meth:`Board.update_legal_moves`; ``legal_moves`` is only
    meaningful for the side to move.  ``pinned_by`` holds the square of the
    piece pinning this one to its king, or ``NO_SQUARE``.

    ``has_moved`` and ``wing`` matter for rooks only: an unmoved rook on its
    original wing still backs a castling right.
    """

    __slots__ = (
        "kind",
        "side",
        "square",
        "pseudo_legal_moves",
        "legal_moves",
        "attacked_squares",
        "pinned_by",
        "has_moved",
        "wing",
    )

    def __init__(self, kind: PieceKind, side: Side, square: Square = NO_SQUARE) -> None:
        self.kind = kind
        self.side = side
        self.square = square
        self.pseudo_legal_moves: list[MoveRecord] = []
        self.legal_moves: list[MoveRecord] = []
        self.attacked_squares: list[Square] = []
        self.pinned_by: Square = NO_SQUARE
        self.has_moved = True
        self.wing = RookWing.NEITHER

    @property
    def is_pinned(self) -> bool:
        return self.pinned_by != NO_SQUARE

    @property
    def is_slider(self) -> bool:
        return self.kind in (PieceKind.BISHOP, PieceKind.ROOK, PieceKind.QUEEN)

    def copy(self) -> Piece:
        """Independent copy, move lists included."""
        p = Piece(self.kind, self.side, self.square)
        p.pseudo_legal_moves = self.pseudo_legal_moves.copy()
        p.legal_moves = self.legal_moves.copy()
        p.attacked_squares = self.attacked_squares.copy()
        p.pinned_by = self.pinned_by
        p.has_moved = self.has_moved
        p.wing = self.wing
        return p

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.side, self.kind)]

    def __repr__(self) -> str:
        return f"Piece({self.side.name} {self.kind.name} @ {self.square})"

    @classmethod
    def from_char(cls, char: str, square: Square = NO_SQUARE) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            side, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(kind, side, square)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.side, self.kind)]
