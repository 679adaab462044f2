"""The chess board: piece placement, side to move, castling, en passant and history.

Moves are made and undone incrementally and the Zobrist hash is kept up to
date as they are.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .pieces import (
    Castle,
    ChessError,
    Color,
    Move,
    ParseError,
    Piece,
    PieceType,
    file_of,
    rank_of,
    square,
    square_name,
)
from .zobrist import ZOBRIST

ROOK_DIRECTIONS = ((0, -1), (-1, 0), (1, 0), (0, 1))
BISHOP_DIRECTIONS = ((-1, -1), (1, -1), (-1, 1), (1, 1))
QUEEN_DIRECTIONS = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))
KING_STEPS = QUEEN_DIRECTIONS
KNIGHT_STEPS = ((-1, -2), (1, -2), (-2, -1), (2, -1), (-2, 1), (2, 1), (-1, 2), (1, 2))

BACK_RANK = {Color.WHITE: 0, Color.BLACK: 7}
PAWN_RANK = {Color.WHITE: 1, Color.BLACK: 6}
PROMOTION_RANK = {Color.WHITE: 7, Color.BLACK: 0}
PAWN_FORWARD = {Color.WHITE: 1, Color.BLACK: -1}

QUEEN_ROOK_FILE = 0
KING_ROOK_FILE = 7
_KING_SIDE = Castle.WHITE_KING | Castle.BLACK_KING
_QUEEN_SIDE = Castle.WHITE_QUEEN | Castle.BLACK_QUEEN

MAX_GAME_MOVES = 256


def _step(sq: int, df: int, dr: int) -> Optional[int]:
    file = file_of(sq) + df
    rank = rank_of(sq) + dr
    if 0 <= file < 8 and 0 <= rank < 8:
        return rank * 8 + file
    return None


def _ray(sq: int, df: int, dr: int) -> Iterator[int]:
    target = _step(sq, df, dr)
    while target is not None:
        yield target
        target = _step(target, df, dr)


def _rook_files(castle: Castle) -> Optional[tuple[int, int]]:
    """Rook's from and to files for a castle move, or None if not a castle."""
    if castle & _QUEEN_SIDE:
        return QUEEN_ROOK_FILE, 3
    if castle & _KING_SIDE:
        return KING_ROOK_FILE, 5
    return None


@dataclass(frozen=True)
class UndoRecord:
    """A move made on the board together with the state needed to take it back."""

    move: Move
    captured: Optional[Piece]
    castling: Castle
    en_passant: Optional[int]
    half_move_clock: int
    hash: int

    @property
    def from_sq(self) -> Optional[int]:
        return self.move.from_sq

    @property
    def to_sq(self) -> Optional[int]:
        return self.move.to_sq

    @property
    def promote(self) -> PieceType:
        return self.move.promote

    @property
    def castle(self) -> Castle:
        return self.move.castle

    def is_nil(self) -> bool:
        """True for a placeholder entry that stands for no real move."""
        return self.move.is_nil()


class Board:
    """A chess position with its move history."""

    def __init__(self) -> None:
        self._squares: list[Optional[Piece]] = [None] * 64
        self.to_move = Color.WHITE
        self.castling = Castle.NONE
        self.en_passant: Optional[int] = None
        self.half_move_clock = 0
        self.history: list[UndoRecord] = []
        self.hash = 0
        self.clear()

    def clear(self) -> None:
        """Empty the board and forget the history."""
        self._squares = [None] * 64
        self.to_move = Color.WHITE
        self.castling = Castle.NONE
        self.en_passant = None
        self.half_move_clock = 0
        self.history = []
        self.rehash()

    def put_piece(self, sq: int, piece: Optional[Piece]) -> None:
        """Put ``piece`` on ``sq`` (None empties it), keeping the hash current."""
        self._remove(sq)
        if piece is not None:
            self._place(sq, piece)

    def rehash(self) -> int:
        """Recompute the hash from scratch and return it."""
        self.hash = ZOBRIST.hash_board(self)
        return self.hash

    def _nil_record(self) -> UndoRecord:
        return UndoRecord(Move(), None, self.castling, self.en_passant,
                          self.half_move_clock, self.hash)

    def set_half_move_clock(self, count: int) -> None:
        """Set the moves since the last capture or pawn move, padding the history."""
        if count < 0 or count >= MAX_GAME_MOVES:
            raise ParseError(f"bad half move clock: {count}")
        self.half_move_clock = count
        while len(self.history) < count:
            self.history.append(self._nil_record())

    def set_full_move_number(self, number: int) -> None:
        """Set the full move number (1-based), padding the history."""
        count = (number - 1) * 2 + (1 if self.to_move == Color.BLACK else 0)
        if count < 0 or count >= MAX_GAME_MOVES:
            raise ParseError(f"bad full move number: {number}")
        while len(self.history) < count:
            self.history.append(self._nil_record())

    def piece_at(self, sq: int) -> Optional[Piece]:
        """The piece on ``sq``, or None if it is empty."""
        return self._squares[sq]

    def pieces(self, color: Color) -> Iterator[tuple[int, Piece]]:
        """Yield (square, piece) for every piece of ``color``."""
        for sq, piece in enumerate(self._squares):
            if piece is not None and piece.color == color:
                yield sq, piece

    def king_square(self, color: Color) -> int:
        """The square of the king of ``color``."""
        king = Piece(color, PieceType.KING)
        for sq, piece in enumerate(self._squares):
            if piece == king:
                return sq
        raise ChessError(f"no {color.name.lower()} king on the board")

    def _remove(self, sq: int) -> None:
        piece = self._squares[sq]
        if piece is not None:
            self.hash ^= ZOBRIST.piece_key(sq, piece)
            self._squares[sq] = None

    def _place(self, sq: int, piece: Piece) -> None:
        self._remove(sq)
        self._squares[sq] = piece
        self.hash ^= ZOBRIST.piece_key(sq, piece)

    def _set_en_passant(self, sq: Optional[int]) -> None:
        if self.en_passant is not None:
            self.hash ^= ZOBRIST.en_passant_key(file_of(self.en_passant))
        self.en_passant = sq
        if sq is not None:
            self.hash ^= ZOBRIST.en_passant_key(file_of(sq))

    def _clear_castle(self, sides: Castle, color: Color) -> None:
        rights = self.castling & ~Castle.for_color(sides, color)
        self.hash ^= ZOBRIST.castle_key(self.castling) ^ ZOBRIST.castle_key(rights)
        self.castling = Castle(rights)

    def make_move(self, move: Move) -> None:
        """Make ``move`` without checking that it is legal."""
        saved = (self.castling, self.en_passant, self.half_move_clock, self.hash)
        mover = self.to_move
        enemy = mover.opponent()
        captured: Optional[Piece] = None

        if move.is_nil():
            self._set_en_passant(None)
        else:
            from_sq, to_sq = move.from_sq, move.to_sq
            piece = self._squares[from_sq]
            if piece is None:
                raise ChessError(f"no piece on {square_name(from_sq)}")
            placed = piece
            take_sq = to_sq
            back = BACK_RANK[mover]
            castled = False

            if piece.kind == PieceType.PAWN:
                self.half_move_clock = 0
                if abs(from_sq - to_sq) == 16:
                    self._set_en_passant((from_sq + to_sq) // 2)
                else:
                    if to_sq == self.en_passant:
                        take_sq += -8 if mover == Color.WHITE else 8
                    elif move.promote != PieceType.NONE:
                        placed = Piece(mover, move.promote)
                    self._set_en_passant(None)
            else:
                self.half_move_clock += 1
                self._set_en_passant(None)
                if piece.kind == PieceType.ROOK:
                    if from_sq == square(QUEEN_ROOK_FILE, back):
                        self._clear_castle(Castle.QUEEN, mover)
                    elif from_sq == square(KING_ROOK_FILE, back):
                        self._clear_castle(Castle.KING, mover)
                elif piece.kind == PieceType.KING:
                    self._clear_castle(Castle.KING | Castle.QUEEN, mover)
                    files = _rook_files(move.castle)
                    if files is not None:
                        # King and rook may swap places, so lift both before placing.
                        rook_from = square(files[0], back)
                        rook_to = square(files[1], back)
                        rook = self._squares[rook_from]
                        self._remove(rook_from)
                        self._remove(from_sq)
                        if rook is not None:
                            self._place(rook_to, rook)
                        self._place(to_sq, placed)
                        castled = True

            if not castled:
                target = self._squares[take_sq]
                if target is not None:
                    self.half_move_clock = 0
                    captured = target
                    self._remove(take_sq)
                    if target.kind == PieceType.ROOK and rank_of(take_sq) == BACK_RANK[enemy]:
                        if file_of(take_sq) == QUEEN_ROOK_FILE:
                            self._clear_castle(Castle.QUEEN, enemy)
                        elif file_of(take_sq) == KING_ROOK_FILE:
                            self._clear_castle(Castle.KING, enemy)
                self._remove(from_sq)
                self._place(to_sq, placed)

        self.history.append(UndoRecord(move, captured, *saved))
        self.hash ^= ZOBRIST.to_move_key()
        self.to_move = enemy

    def undo_move(self) -> UndoRecord:
        """Take back the last move and return its record."""
        if not self.history:
            raise ChessError("no move to undo")
        record = self.history.pop()
        self.to_move = self.to_move.opponent()
        self.castling = record.castling
        self.en_passant = record.en_passant
        self.half_move_clock = record.half_move_clock

        move = record.move
        if not move.is_nil():
            mover = self.to_move
            from_sq, to_sq = move.from_sq, move.to_sq
            piece = self._squares[to_sq]
            if move.promote != PieceType.NONE:
                piece = Piece(mover, PieceType.PAWN)
            files = _rook_files(move.castle)
            if record.captured is not None:
                take_sq = to_sq
                if to_sq == record.en_passant and piece is not None and piece.kind == PieceType.PAWN:
                    take_sq += -8 if mover == Color.WHITE else 8
                self._squares[to_sq] = None
                self._squares[take_sq] = record.captured
                self._squares[from_sq] = piece
            elif files is not None:
                back = BACK_RANK[mover]
                rook_from = square(files[0], back)
                rook_to = square(files[1], back)
                rook = self._squares[rook_to]
                self._squares[to_sq] = None
                self._squares[rook_to] = None
                self._squares[rook_from] = rook
                self._squares[from_sq] = piece
            else:
                self._squares[to_sq] = None
                self._squares[from_sq] = piece

        self.hash = record.hash
        return record

    def make_move_legal(self, move: Move) -> bool:
        """Make ``move`` if it does not leave the mover in check; report whether it was made."""
        self.make_move(move)
        if self.last_move_was_legal():
            return True
        self.undo_move()
        return False

    def last_move_was_legal(self) -> bool:
        """True if the last move made did not leave its side's king attacked."""
        if not self.history:
            raise ChessError("no move has been made")
        record = self.history[-1]
        if record.castle and not record.is_nil():
            low, high = sorted((record.from_sq, record.to_sq))
            return not any(self.is_attacked_by(sq, self.to_move) for sq in range(low, high + 1))
        return not self.in_check(self.to_move.opponent())

    def is_capture(self, move: Move) -> bool:
        """True if ``move`` takes a piece, en passant included."""
        target = self._squares[move.to_sq]
        if target is not None and target.color == self.to_move.opponent():
            return True
        moving = self._squares[move.from_sq]
        return (moving is not None and moving.kind == PieceType.PAWN
                and move.to_sq == self.en_passant)

    def in_check(self, color: Color) -> bool:
        """True if the king of ``color`` is attacked."""
        return self.is_attacked_by(self.king_square(color), color.opponent())

    def _slider_hits(self, sq: int, directions, kinds, color: Color) -> bool:
        for df, dr in directions:
            for target in _ray(sq, df, dr):
                piece = self._squares[target]
                if piece is None:
                    continue
                if piece.color == color and piece.kind in kinds:
                    return True
                break
        return False

    def _step_hits(self, sq: int, steps, piece: Piece) -> bool:
        for df, dr in steps:
            target = _step(sq, df, dr)
            if target is not None and self._squares[target] == piece:
                return True
        return False

    def _pawn_hits(self, sq: int, color: Color) -> bool:
        dr = -PAWN_FORWARD[color]
        return self._step_hits(sq, ((-1, dr), (1, dr)), Piece(color, PieceType.PAWN))

    def is_attacked_by(self, sq: int, color: Color) -> bool:
        """True if any piece of ``color`` attacks ``sq``."""
        return (
            self._slider_hits(sq, ROOK_DIRECTIONS, (PieceType.ROOK, PieceType.QUEEN), color)
            or self._slider_hits(sq, BISHOP_DIRECTIONS, (PieceType.BISHOP, PieceType.QUEEN), color)
            or self._step_hits(sq, KNIGHT_STEPS, Piece(color, PieceType.KNIGHT))
            or self._pawn_hits(sq, color)
            or self._step_hits(sq, KING_STEPS, Piece(color, PieceType.KING))
        )

    def weakest_attacker(self, sq: int, color: Color) -> PieceType:
        """The type of the weakest piece of ``color`` attacking ``sq``; NONE if none does."""
        if self._pawn_hits(sq, color):
            return PieceType.PAWN
        if self._step_hits(sq, KNIGHT_STEPS, Piece(color, PieceType.KNIGHT)):
            return PieceType.KNIGHT
        if self._slider_hits(sq, BISHOP_DIRECTIONS, (PieceType.BISHOP,), color):
            return PieceType.BISHOP
        if self._slider_hits(sq, ROOK_DIRECTIONS, (PieceType.ROOK,), color):
            return PieceType.ROOK
        if self._slider_hits(sq, QUEEN_DIRECTIONS, (PieceType.QUEEN,), color):
            return PieceType.QUEEN
        if self._step_hits(sq, KING_STEPS, Piece(color, PieceType.KING)):
            return PieceType.KING
        return PieceType.NONE

    def copy(self) -> "Board":
        """An independent copy of the board and its history."""
        other = Board()
        other._squares = list(self._squares)
        other.to_move = self.to_move
        other.castling = self.castling
        other.en_passant = self.en_passant
        other.half_move_clock = self.half_move_clock
        other.history = list(self.history)
        other.hash = self.hash
        return other

    def __copy__(self) -> "Board":
        return self.copy()