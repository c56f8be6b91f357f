"""Exception hierarchy for the rules engine."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for errors raised by :mod:`chessrules`."""


class FenError(ChessError, ValueError):
    """A FEN string could not be parsed."""


class IntegrityError(ChessError, RuntimeError):
    """Board state contradicts an engine invariant (a programming error)."""
