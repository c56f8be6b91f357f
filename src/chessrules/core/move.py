"""MoveRecord value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessrules.core.enums import CastlingRights, MoveType, PromoType
from chessrules.core.types import NO_SQUARE, Square, square_name

_PROMO_CHARS: dict[PromoType, str] = {
    PromoType.KNIGHT: "n",
    PromoType.BISHOP: "b",
    PromoType.ROOK: "r",
    PromoType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Immutable record of a single move.

    ``rights_to_revoke`` is filled in by the move generators, so applying a
    move only has to mask those rights off.  Equality is structural over
    every field.
    """

    src: Square = NO_SQUARE
    dest: Square = NO_SQUARE
    move_type: MoveType = MoveType.NORMAL
    promo_type: PromoType = PromoType.NONE
    rights_to_revoke: CastlingRights = CastlingRights.NONE
    was_capture: bool = False
    was_opponents_move: bool = False

    # ── Derived copies ───────────────────────────────────────────────────

    def with_promotion(self, promo_type: PromoType) -> MoveRecord:
        return replace(self, promo_type=promo_type)

    def as_opponents_move(self) -> MoveRecord:
        return replace(self, was_opponents_move=True)

    @property
    def is_promotion(self) -> bool:
        return self.move_type == MoveType.PROMOTION

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.src)}{square_name(self.dest)}"
        return base + _PROMO_CHARS.get(self.promo_type, "")

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
