"""Castling availability as a mutable four-bit set."""

from __future__ import annotations

from chessrules.core.enums import CastlingRights, RookWing, Side

_BOTH: dict[Side, CastlingRights] = {
    Side.WHITE: CastlingRights.WHITE_BOTH,
    Side.BLACK: CastlingRights.BLACK_BOTH,
}


def right_for(side: Side, wing: RookWing) -> CastlingRights:
    """Single right for *side* on *wing* (``NONE`` for ``RookWing.NEITHER``)."""
    if wing == RookWing.KING_SIDE:
        return (
            CastlingRights.WHITE_SHORT if side == Side.WHITE else CastlingRights.BLACK_SHORT
        )
    if wing == RookWing.QUEEN_SIDE:
        return (
            CastlingRights.WHITE_LONG if side == Side.WHITE else CastlingRights.BLACK_LONG
        )
    return CastlingRights.NONE


def both_for(side: Side) -> CastlingRights:
    return _BOTH.get(side, CastlingRights.NONE)


class CastleRights:
    """{WhiteShort, WhiteLong, BlackShort, BlackLong} with query/add/revoke.

    Within a game the set only ever shrinks; :meth:`add` exists for loading
    positions.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: CastlingRights = CastlingRights.NONE) -> None:
        self._bits = CastlingRights(bits)

    @property
    def bits(self) -> CastlingRights:
        return self._bits

    # ── Queries ──────────────────────────────────────────────────────────

    def has(self, right: CastlingRights) -> bool:
        """Whether every right in *right* is present."""
        return right != CastlingRights.NONE and (self._bits & right) == right

    def has_any(self, side: Side) -> bool:
        return bool(self._bits & both_for(side))

    def has_both(self, side: Side) -> bool:
        return self.has(both_for(side))

    # ── Mutation ─────────────────────────────────────────────────────────

    def add(self, rights: CastlingRights) -> None:
        self._bits |= rights

    def add_both(self, side: Side) -> None:
        self._bits |= both_for(side)

    def revoke(self, rights: CastlingRights) -> None:
        """Clear every right in the mask *rights*."""
        self._bits &= ~rights

    def revoke_both(self, side: Side) -> None:
        self._bits &= ~both_for(side)

    def copy(self) -> CastleRights:
        return CastleRights(self._bits)

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CastleRights):
            return self._bits == other._bits
        if isinstance(other, CastlingRights):
            return self._bits == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(int(self._bits))

    def __bool__(self) -> bool:
        return bool(self._bits)

    def __str__(self) -> str:
        """FEN castling field, e.g. ``KQkq`` or ``-``."""
        text = ""
        if self._bits & CastlingRights.WHITE_SHORT:
            text += "K"
        if self._bits & CastlingRights.WHITE_LONG:
            text += "Q"
        if self._bits & CastlingRights.BLACK_SHORT:
            text += "k"
        if self._bits & CastlingRights.BLACK_LONG:
            text += "q"
        return text or "-"

    def __repr__(self) -> str:
        return f"CastleRights({self})"
