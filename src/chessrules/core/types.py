"""Square type and coordinate helpers.

A square is an ``(x, y)`` pair: ``x`` is the file (0–7, a–h) and ``y`` the
rank (0–7, 1–8).  Grid storage uses the index ``y * 8 + x``::

    a1=0, b1=1, ..., h1=7
    a2=8, ...
    a8=56, ..., h8=63
"""

from __future__ import annotations

from typing import NamedTuple


class Square(NamedTuple):
    """Board coordinate. ``NO_SQUARE`` (-1, -1) means "no square"."""

    x: int
    y: int

    # Vector arithmetic replaces tuple concatenation.
    def __add__(self, other: tuple[int, int]) -> Square:
        return Square(self.x + other[0], self.y + other[1])

    def __sub__(self, other: tuple[int, int]) -> Square:
        return Square(self.x - other[0], self.y - other[1])

    def __str__(self) -> str:
        if not is_on_board(self):
            return "-"
        return square_name(self)


NO_SQUARE = Square(-1, -1)


def is_on_board(sq: tuple[int, int]) -> bool:
    """Whether *sq* lies on the 8x8 board."""
    return 0 <= sq[0] <= 7 and 0 <= sq[1] <= 7


def same_diagonal(a: Square, b: Square) -> bool:
    return abs(a.x - b.x) == abs(a.y - b.y)


def same_rank_or_file(a: Square, b: Square) -> bool:
    return a.x == b.x or a.y == b.y


def step_towards(src: Square, dest: Square) -> Square:
    """Unit step (each component in -1..1) from *src* in the direction of *dest*."""
    dx = dest.x - src.x
    dy = dest.y - src.y
    return Square((dx > 0) - (dx < 0), (dy > 0) - (dy < 0))


def square_index(sq: Square) -> int:
    """Grid index 0–63 of an on-board square."""
    return sq.y * 8 + sq.x


def square_at(index: int) -> Square:
    """Inverse of :func:`square_index`."""
    return Square(index % 8, index // 8)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (0, 0) → 'a1', (7, 7) → 'h8'."""
    return chr(ord("a") + sq.x) + str(sq.y + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(4, 3)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(ord(name[0]) - ord("a"), int(name[1]) - 1)


ALL_SQUARES: tuple[Square, ...] = tuple(square_at(i) for i in range(64))

# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[0:8]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[8:16]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[16:24]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[24:32]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[32:40]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[40:48]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[48:56]
A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[56:64]
