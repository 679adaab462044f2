"""Reading and writing positions in Forsyth-Edwards Notation."""

from __future__ import annotations

import re
from typing import Sequence

from .board import Board
from .pieces import (
    Castle,
    Color,
    ParseError,
    Piece,
    parse_square,
    square,
    square_name,
)

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
EMPTY_FEN = "8/8/8/8/8/8/8/8 w - - 0 1"

_CASTLE_LETTERS = "KkQq"
_COLOR_LETTERS = "wb"
_PIECE_LETTERS = "PNBRQKpnbrqk"
_EMPTY_DIGITS = "12345678"
_INTEGER = re.compile(r"-?\d+")


def parse_int(text: str, what: str) -> int:
    """Parse the leading integer of ``text``; raise ParseError naming ``what``."""
    match = _INTEGER.match(text)
    if match is None:
        raise ParseError(f"bad {what}: {text!r}")
    return int(match.group())


def _load_placement(board: Board, placement: str) -> None:
    rank = 7
    sq = square(0, rank)
    for ch in placement:
        if ch == "/":
            rank -= 1
            if rank < 0:
                raise ParseError(f"too many ranks in {placement!r}")
            sq = square(0, rank)
        elif ch in _EMPTY_DIGITS:
            sq += int(ch)
        elif ch in _PIECE_LETTERS:
            if sq >= 64:
                raise ParseError(f"too many squares in {placement!r}")
            board.put_piece(sq, Piece.from_char(ch))
            sq += 1
        else:
            raise ParseError(f"unexpected character {ch!r} in FEN")


def load_fen_fields(board: Board, fields: Sequence[str]) -> None:
    """Set ``board`` from the placement, side, castling and en passant fields."""
    if len(fields) < 4:
        raise ParseError("FEN is missing a part")
    placement, color, castling, en_passant = fields[:4]
    board.clear()
    _load_placement(board, placement)

    if len(color) != 1 or color not in _COLOR_LETTERS:
        raise ParseError(f"bad side to move: {color!r}")
    board.to_move = Color(_COLOR_LETTERS.index(color))

    rights = Castle.NONE
    if castling != "-":
        for ch in castling:
            if ch not in _CASTLE_LETTERS:
                raise ParseError(f"unexpected character {ch!r} in castling rights")
            rights |= Castle(1 << _CASTLE_LETTERS.index(ch))
    board.castling = Castle(rights)

    board.en_passant = parse_square(en_passant)
    board.rehash()


def parse_fen(text: str) -> Board:
    """Build a board from a complete FEN string."""
    fields = text.split()
    if len(fields) < 6:
        raise ParseError("FEN is missing a part")
    board = Board()
    load_fen_fields(board, fields[:4])
    board.set_half_move_clock(parse_int(fields[4], "half move clock"))
    board.set_full_move_number(parse_int(fields[5], "full move number"))
    return board


def render_fen_prefix(board: Board) -> str:
    """The placement, side, castling and en passant fields of the position."""
    rows = []
    for rank in range(7, -1, -1):
        row = ""
        empties = 0
        for file in range(8):
            piece = board.piece_at(square(file, rank))
            if piece is None:
                empties += 1
                continue
            if empties:
                row += str(empties)
                empties = 0
            row += piece.char()
        if empties:
            row += str(empties)
        rows.append(row)

    rights = "".join(
        letter for bit, letter in enumerate(_CASTLE_LETTERS) if board.castling & (1 << bit)
    ) or "-"
    return " ".join((
        "/".join(rows),
        _COLOR_LETTERS[board.to_move],
        rights,
        square_name(board.en_passant),
    ))


def render_fen(board: Board) -> str:
    """The complete FEN string of the position."""
    return (f"{render_fen_prefix(board)} {board.half_move_clock} "
            f"{1 + len(board.history) // 2}")