"""Draw rules and game phase."""

from __future__ import annotations

from .board import MAX_GAME_MOVES, Board
from .pieces import Color, PieceType

PHASE_MIN = 0
PHASE_MINOR = 1
PHASE_ROOK = 2
PHASE_QUEEN = 4
PHASE_MAX = 24

_PHASE_OF = {
    PieceType.PAWN: 0,
    PieceType.KNIGHT: PHASE_MINOR,
    PieceType.BISHOP: PHASE_MINOR,
    PieceType.ROOK: PHASE_ROOK,
    PieceType.QUEEN: PHASE_QUEEN,
    PieceType.KING: 0,
}

FIFTY_MOVE_PLIES = 2 * 50


def is_drawn(board: Board, repetitions: int) -> bool:
    """True if the game is drawn by length, the fifty-move rule, repetition or dead position."""
    if len(board.history) >= MAX_GAME_MOVES:
        return True
    if board.half_move_clock >= FIFTY_MOVE_PLIES:
        return True
    if is_draw_by_repetition(board, repetitions):
        return True
    return is_dead_draw(board)


def is_draw_by_repetition(board: Board, repetitions: int) -> bool:
    """True if the current position has occurred ``repetitions`` times since the last irreversible move."""
    clock = board.half_move_clock
    if clock < (repetitions - 1) * 4:
        return False
    seen = 1
    history = board.history
    first = max(len(history) - clock, 0)
    index = len(history) - 4
    while index >= first:
        if history[index].hash == board.hash:
            seen += 1
            if seen >= repetitions:
                return True
            index -= 2
        index -= 2
    return False


def is_dead_draw(board: Board) -> bool:
    """True when neither side has the material to force checkmate."""
    minors = {Color.WHITE: 0, Color.BLACK: 0}
    for color in Color:
        for _, piece in board.pieces(color):
            if piece.kind == PieceType.KING:
                continue
            if piece.kind in (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN):
                return False
            minors[color] += 1
    if minors[Color.WHITE] > 1 or minors[Color.BLACK] > 1:
        return False
    return minors[Color.WHITE] == 0 or minors[Color.BLACK] == 0


def game_phase(board: Board) -> int:
    """Game phase: PHASE_MIN with all pieces on, rising toward PHASE_MAX as they come off."""
    phase = PHASE_MAX
    for color in Color:
        for _, piece in board.pieces(color):
            phase -= _PHASE_OF[piece.kind]
    return max(phase, PHASE_MIN)