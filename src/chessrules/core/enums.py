"""Core enumerations and flags for the rules engine."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag, auto


class Side(IntEnum):
    """Side color. ``INVALID`` marks uninitialised state only."""

    WHITE = 0
    BLACK = 1
    INVALID = 2

    @property
    def opposite(self) -> Side:
        if self is Side.INVALID:
            return Side.INVALID
        return Side(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveType(IntEnum):
    """Special move classification.

    Castling-rights side effects are carried by
    :attr:`MoveRecord.rights_to_revoke`, captures by
    :attr:`MoveRecord.was_capture`.
    """

    NORMAL = 0
    DOUBLE_PUSH = 1
    EN_PASSANT = 2
    CASTLE = 3
    PROMOTION = 4


class PromoType(IntEnum):
    """Piece a pawn may promote to. ``NONE`` means no promotion chosen."""

    NONE = 0
    QUEEN = 1
    ROOK = 2
    KNIGHT = 3
    BISHOP = 4

    @property
    def piece_kind(self) -> PieceKind:
        if self is PromoType.NONE:
            raise ValueError("PromoType.NONE has no piece kind")
        return _PROMO_KINDS[self]


_PROMO_KINDS: dict[PromoType, PieceKind] = {
    PromoType.QUEEN: PieceKind.QUEEN,
    PromoType.ROOK: PieceKind.ROOK,
    PromoType.KNIGHT: PieceKind.KNIGHT,
    PromoType.BISHOP: PieceKind.BISHOP,
}


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_SHORT = auto()
    WHITE_LONG = auto()
    BLACK_SHORT = auto()
    BLACK_LONG = auto()

    WHITE_BOTH = WHITE_SHORT | WHITE_LONG
    BLACK_BOTH = BLACK_SHORT | BLACK_LONG
    ALL = WHITE_BOTH | BLACK_BOTH


class RookWing(IntEnum):
    """Which castling wing a rook started on (``NEITHER`` once it moved)."""

    NEITHER = 0
    QUEEN_SIDE = auto()
    KING_SIDE = auto()


class CheckState(IntEnum):
    """How many enemy pieces attack the king of the side to move."""

    NO_CHECK = 0
    SINGLE_CHECK = 1
    DOUBLE_CHECK = 2


class GameOverReason(str, Enum):
    """Why a game ended. The engine itself only reports the first two."""

    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    RESIGNATION = "resignation"
    AGREEMENT = "agreement"
    ABANDONMENT = "abandonment"

    def __str__(self) -> str:
        return self.value
