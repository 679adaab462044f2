"""Standard Algebraic Notation for moves."""

from __future__ import annotations

from typing import Optional, Union

from .board import Board, UndoRecord
from .movegen import legal_moves
from .pieces import (
    FILE_LETTERS,
    RANK_DIGITS,
    Castle,
    Move,
    ParseError,
    PieceType,
    file_of,
    rank_of,
    square,
    square_name,
)

_KIND_LETTERS = " PNBRQK"
_KING_SIDE = Castle.WHITE_KING | Castle.BLACK_KING
_QUEEN_SIDE = Castle.WHITE_QUEEN | Castle.BLACK_QUEEN


def _kind_from_letter(ch: str, allowed: str) -> Optional[PieceType]:
    if len(ch) == 1 and ch in allowed:
        return PieceType(_KIND_LETTERS.index(ch))
    return None


def parse_san(board: Board, text: str) -> Move:
    """Find the legal move on ``board`` that ``text`` names."""
    s = text
    castle = Castle.NONE
    kind = PieceType.PAWN
    file_hint: Optional[int] = None
    rank_hint: Optional[int] = None
    promote = PieceType.NONE
    to_sq: Optional[int] = None

    if s == "O-O":
        castle = Castle.KING
    elif s == "O-O-O":
        castle = Castle.QUEEN
    else:
        i = 0
        if i >= len(s):
            raise ParseError(f"cannot parse move {text!r}")
        letter_kind = _kind_from_letter(s[i], "PNBRQK")
        if letter_kind is not None:
            kind = letter_kind
            i += 1

        if i + 1 >= len(s):
            raise ParseError(f"cannot parse move {text!r}")
        if s[i] in RANK_DIGITS:
            rank_hint = RANK_DIGITS.index(s[i])
            i += 1
        elif s[i] in FILE_LETTERS:
            after = s[i + 1]
            if after in "x-" or after in FILE_LETTERS:
                file_hint = FILE_LETTERS.index(s[i])
                i += 1
            elif (after in RANK_DIGITS and i + 2 < len(s)
                  and (s[i + 2] in "x-" or s[i + 2] in FILE_LETTERS)):
                file_hint = FILE_LETTERS.index(s[i])
                rank_hint = RANK_DIGITS.index(after)
                i += 2

        if i >= len(s):
            raise ParseError(f"cannot parse move {text!r}")
        if s[i] in "x-":
            i += 1

        if i + 1 >= len(s) or s[i] not in FILE_LETTERS or s[i + 1] not in RANK_DIGITS:
            raise ParseError(f"bad destination square in {text!r}")
        to_sq = square(FILE_LETTERS.index(s[i]), RANK_DIGITS.index(s[i + 1]))
        i += 2

        if i < len(s) and s[i] == "=":
            i += 1
            if i >= len(s):
                raise ParseError(f"bad promotion in {text!r}")
            promoted = _kind_from_letter(s[i], "NBRQ")
            if promoted is None:
                raise ParseError(f"bad promotion in {text!r}")
            promote = promoted
            i += 1

        if i < len(s):
            if s[i] not in "+#":
                raise ParseError(f"bad move suffix in {text!r}")
            i += 1
        if i != len(s):
            raise ParseError(f"bad move suffix in {text!r}")

    for move in legal_moves(board):
        if castle:
            if move.castle == castle:
                return move
            continue
        moving = board.piece_at(move.from_sq)
        if (move.to_sq == to_sq and moving is not None and moving.kind == kind
                and (file_hint is None or file_of(move.from_sq) == file_hint)
                and (rank_hint is None or rank_of(move.from_sq) == rank_hint)
                and (promote == PieceType.NONE or move.promote == promote)):
            return move
    raise ParseError(f"{text!r} is not a legal move")


def move_to_san(board: Board, record: Union[UndoRecord, Move]) -> str:
    """SAN text for a move that is legal on ``board`` and not yet made there."""
    if isinstance(record, UndoRecord):
        move = record.move
        captures = record.captured is not None
    else:
        move = record
        captures = not move.is_nil() and board.is_capture(move)
    if move.is_nil():
        return "-"

    if move.castle & _KING_SIDE:
        text = "O-O"
    elif move.castle & _QUEEN_SIDE:
        text = "O-O-O"
    else:
        kind = board.piece_at(move.from_sq).kind
        text = "" if kind == PieceType.PAWN else kind.letter

        rivals = [
            other for other in legal_moves(board)
            if other.to_sq == move.to_sq
            and board.piece_at(other.from_sq).kind == kind
            and other.promote == move.promote
        ]
        same_rank = sum(rank_of(o.from_sq) == rank_of(move.from_sq) for o in rivals)
        same_file = sum(file_of(o.from_sq) == file_of(move.from_sq) for o in rivals)
        if len(rivals) > 1:
            if same_rank > 1 and same_file > 1:
                text += square_name(move.from_sq)
            elif same_file > 1:
                text += RANK_DIGITS[rank_of(move.from_sq)]
            else:
                text += FILE_LETTERS[file_of(move.from_sq)]

        if captures:
            text += "x"
        text += square_name(move.to_sq)
        if move.promote != PieceType.NONE:
            text += "=" + move.promote.letter

    after = board.copy()
    after.make_move(move)
    if after.in_check(after.to_move):
        text += "#" if not legal_moves(after) else "+"
    return text