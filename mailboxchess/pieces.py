"""Colors, piece types, castling rights, pieces, squares and moves.

Squares are integers 0..63 numbered rank by rank from a1 (0) to h8 (63).
A missing square, such as "no en passant square", is ``None``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

FILE_LETTERS = "abcdefgh"
RANK_DIGITS = "12345678"
_PIECE_LETTERS = " PNBRQK"


class ChessError(Exception):
    """Base class for errors raised by this package."""


class ParseError(ChessError, ValueError):
    """Raised when text in a chess notation cannot be parsed."""


def square(file: int, rank: int) -> int:
    """Return the square index for a zero-based file and rank."""
    if not (0 <= file < 8 and 0 <= rank < 8):
        raise ValueError(f"file and rank must be in 0..7, got {file}, {rank}")
    return rank * 8 + file


def file_of(sq: int) -> int:
    """Return the zero-based file of a square."""
    return sq % 8


def rank_of(sq: int) -> int:
    """Return the zero-based rank of a square."""
    return sq // 8


def square_name(sq: Optional[int]) -> str:
    """Return the algebraic name of a square, or "-" for no square."""
    if sq is None:
        return "-"
    return FILE_LETTERS[file_of(sq)] + RANK_DIGITS[rank_of(sq)]


def parse_square(text: str) -> Optional[int]:
    """Parse an algebraic square name such as "e4"; "-" means no square."""
    if text == "-":
        return None
    if len(text) != 2 or text[0] not in FILE_LETTERS or text[1] not in RANK_DIGITS:
        raise ParseError(f"not a square: {text!r}")
    return square(FILE_LETTERS.index(text[0]), RANK_DIGITS.index(text[1]))


class Color(enum.IntEnum):
    WHITE = 0
    BLACK = 1

    def opponent(self) -> "Color":
        """Return the other color."""
        return Color(1 - self)


class PieceType(enum.IntEnum):
    NONE = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """The upper-case letter of the piece type; empty for NONE."""
        return _PIECE_LETTERS[self].strip()


class Castle(enum.IntFlag):
    """Castling rights; bit order matches the FEN letters K, k, Q, q."""

    NONE = 0
    WHITE_KING = 1
    BLACK_KING = 2
    WHITE_QUEEN = 4
    BLACK_QUEEN = 8
    KING = 1
    QUEEN = 4

    @staticmethod
    def for_color(side: "Castle", color: Color) -> "Castle":
        """Return the castle bit for ``side`` (KING or QUEEN) of ``color``."""
        return Castle(int(side) << int(color))


@dataclass(frozen=True)
class Piece:
    color: Color
    kind: PieceType

    def char(self) -> str:
        """Return the FEN letter: upper case for white, lower case for black."""
        letter = self.kind.letter
        return letter if self.color == Color.WHITE else letter.lower()

    @staticmethod
    def from_char(ch: str) -> "Piece":
        """Build a piece from its FEN letter."""
        if len(ch) != 1 or ch.upper() not in _PIECE_LETTERS or ch == " ":
            raise ParseError(f"not a piece letter: {ch!r}")
        color = Color.WHITE if ch.isupper() else Color.BLACK
        return Piece(color, PieceType(_PIECE_LETTERS.index(ch.upper())))


@dataclass(frozen=True)
class Move:
    """A move; castle moves carry the king's from and to squares."""

    from_sq: Optional[int] = None
    to_sq: Optional[int] = None
    promote: PieceType = PieceType.NONE
    castle: Castle = Castle.NONE

    def is_nil(self) -> bool:
        """True for the empty placeholder move."""
        return self.from_sq is None

    def uci(self) -> str:
        """Return the move in coordinate notation, e.g. "e7e8q"; "-" if nil."""
        if self.is_nil() or self.to_sq is None:
            return "-"
        text = square_name(self.from_sq) + square_name(self.to_sq)
        if self.promote != PieceType.NONE:
            text += self.promote.letter.lower()
        return text

    def __str__(self) -> str:
        return self.uci()