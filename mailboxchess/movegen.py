"""Move generation: pseudo-legal, legal and capture-only move lists, and perft."""

from __future__ import annotations

from typing import Iterator, Optional

from .board import (
    BISHOP_DIRECTIONS,
    KING_ROOK_FILE,
    KING_STEPS,
    KNIGHT_STEPS,
    PAWN_FORWARD,
    PAWN_RANK,
    PROMOTION_RANK,
    QUEEN_DIRECTIONS,
    QUEEN_ROOK_FILE,
    ROOK_DIRECTIONS,
    Board,
)
from .pieces import Castle, Color, Move, PieceType, file_of, rank_of, square

_PROMOTIONS = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)

# side, king destination file, rook origin file, rook destination file
_CASTLES = (
    (Castle.KING, 6, KING_ROOK_FILE, 5),
    (Castle.QUEEN, 2, QUEEN_ROOK_FILE, 3),
)


def _target(sq: int, df: int, dr: int) -> Optional[int]:
    file = file_of(sq) + df
    rank = rank_of(sq) + dr
    if 0 <= file < 8 and 0 <= rank < 8:
        return square(file, rank)
    return None


def _slider_moves(board: Board, sq: int, directions, color: Color,
                  captures_only: bool) -> Iterator[Move]:
    for df, dr in directions:
        target = _target(sq, df, dr)
        while target is not None:
            piece = board.piece_at(target)
            if piece is None:
                if not captures_only:
                    yield Move(sq, target)
            else:
                if piece.color != color:
                    yield Move(sq, target)
                break
            target = _target(target, df, dr)


def _step_moves(board: Board, sq: int, steps, color: Color,
                captures_only: bool) -> Iterator[Move]:
    for df, dr in steps:
        target = _target(sq, df, dr)
        if target is None:
            continue
        piece = board.piece_at(target)
        if piece is None:
            if not captures_only:
                yield Move(sq, target)
        elif piece.color != color:
            yield Move(sq, target)


def _pawn_targets(from_sq: int, to_sq: int, color: Color) -> Iterator[Move]:
    """A pawn move, expanded into the four promotions when it reaches the last rank."""
    if rank_of(to_sq) != PROMOTION_RANK[color]:
        yield Move(from_sq, to_sq)
    else:
        for kind in _PROMOTIONS:
            yield Move(from_sq, to_sq, promote=kind)


def _pawn_moves(board: Board, sq: int, color: Color, captures_only: bool) -> Iterator[Move]:
    forward = PAWN_FORWARD[color]
    if not captures_only:
        one = _target(sq, 0, forward)
        if one is not None and board.piece_at(one) is None:
            yield from _pawn_targets(sq, one, color)
            if rank_of(sq) == PAWN_RANK[color]:
                two = _target(one, 0, forward)
                if two is not None and board.piece_at(two) is None:
                    yield Move(sq, two)

    diagonals = [t for t in (_target(sq, -1, forward), _target(sq, 1, forward)) if t is not None]
    for target in diagonals:
        piece = board.piece_at(target)
        if piece is not None and piece.color != color:
            yield from _pawn_targets(sq, target, color)
    if board.en_passant is not None:
        for target in diagonals:
            if target == board.en_passant:
                yield from _pawn_targets(sq, target, color)


def _castle_moves(board: Board, king_sq: int, color: Color) -> Iterator[Move]:
    """Castles whose paths are clear; attacks on the king's path are checked later."""
    back = rank_of(king_sq)
    for side, king_file, rook_file, rook_to_file in _CASTLES:
        if not board.castling & Castle.for_color(side, color):
            continue
        king_to = square(king_file, back)
        rook_from = square(rook_file, back)
        rook_to = square(rook_to_file, back)
        low = min(rook_from, rook_to, king_sq, king_to)
        high = max(rook_from, rook_to, king_sq, king_to)
        if all(sq in (rook_from, king_sq) or board.piece_at(sq) is None
               for sq in range(low, high + 1)):
            yield Move(king_sq, king_to, castle=side)


def _generate(board: Board, captures_only: bool) -> list[Move]:
    color = board.to_move
    moves: list[Move] = []
    for sq, piece in list(board.pieces(color)):
        kind = piece.kind
        if kind == PieceType.PAWN:
            moves.extend(_pawn_moves(board, sq, color, captures_only))
        elif kind == PieceType.KNIGHT:
            moves.extend(_step_moves(board, sq, KNIGHT_STEPS, color, captures_only))
        elif kind == PieceType.BISHOP:
            moves.extend(_slider_moves(board, sq, BISHOP_DIRECTIONS, color, captures_only))
        elif kind == PieceType.ROOK:
            moves.extend(_slider_moves(board, sq, ROOK_DIRECTIONS, color, captures_only))
        elif kind == PieceType.QUEEN:
            moves.extend(_slider_moves(board, sq, QUEEN_DIRECTIONS, color, captures_only))
        elif kind == PieceType.KING:
            moves.extend(_step_moves(board, sq, KING_STEPS, color, captures_only))
            if not captures_only:
                moves.extend(_castle_moves(board, sq, color))
    return moves


def pseudo_legal_moves(board: Board) -> list[Move]:
    """All moves for the side to move, ignoring whether they leave the king in check."""
    return _generate(board, captures_only=False)


def noisy_moves(board: Board) -> list[Move]:
    """Pseudo-legal captures, en passant included, for the side to move."""
    return _generate(board, captures_only=True)


def legal_moves(board: Board) -> list[Move]:
    """All legal moves for the side to move."""
    probe = board.copy()
    legal = []
    for move in pseudo_legal_moves(board):
        probe.make_move(move)
        if probe.last_move_was_legal():
            legal.append(move)
        probe.undo_move()
    return legal


def perft(board: Board, depth: int) -> int:
    """Count the leaf positions reached by all legal move sequences of ``depth`` plies."""
    if depth <= 0:
        return 1
    probe = board.copy()

    def walk(remaining: int) -> int:
        moves = legal_moves(probe)
        if remaining == 1:
            return len(moves)
        total = 0
        for move in moves:
            probe.make_move(move)
            total += walk(remaining - 1)
            probe.undo_move()
        return total

    return walk(depth)