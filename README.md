# mailboxchess

The core of a chess program, written in pure Python with no dependencies.

- `mailboxchess.pieces`: colors, piece types, castling rights, pieces, squares
  (0 = a1 through 63 = h8) and moves. It also defines the errors `ChessError`
  and `ParseError`.
- `mailboxchess.board`: `Board` holds a position and its move history. It makes
  and undoes moves, including castling, en passant and promotion. It keeps an
  incremental Zobrist hash, and it answers attack and check questions
  (`is_attacked_by`, `in_check` and `weakest_attacker`).
- `mailboxchess.movegen`: `pseudo_legal_moves`, `legal_moves`, `noisy_moves`
  (captures only) and `perft`.
- `mailboxchess.rules`: draws by game length, the fifty-move rule, repetition
  and insufficient material (`is_drawn`, `is_draw_by_repetition`,
  `is_dead_draw`), plus `game_phase`.
- `mailboxchess.zobrist`: `ZobristHasher` uses the Polyglot random keys. It
  provides `hash_board`, which always counts the en passant square, and
  `polyglot_hash`, which counts it only when a pawn stands beside the
  double-pushed pawn.
- `mailboxchess.fen`: `parse_fen`, `render_fen`, `render_fen_prefix` and
  `load_fen_fields`, with the constants `START_FEN` and `EMPTY_FEN`.
- `mailboxchess.san`: `parse_san` and `move_to_san` handle Standard Algebraic
  Notation, with disambiguation, promotion and check and mate marks.

## Installation

```
pip install .
```

## Usage

```python
from mailboxchess.fen import START_FEN, parse_fen, render_fen
from mailboxchess.movegen import legal_moves, perft
from mailboxchess.san import move_to_san, parse_san

board = parse_fen(START_FEN)
print(len(legal_moves(board)))        # 20
print(perft(board, 3))                # 8902

move = parse_san(board, "e4")
print(move.uci())                     # e2e4
board.make_move(move)
print(render_fen(board))
record = board.undo_move()            # returns the UndoRecord of the move
print(move_to_san(board, record))     # e4
```

`Board.make_move` does not check legality. `Board.make_move_legal` makes the
move only if it does not leave the mover's king attacked, and it returns whether
the move was made.

### Draw rules

```python
from mailboxchess.rules import is_drawn, game_phase

print(is_drawn(board, 3))     # length, fifty-move, threefold repetition, dead position
print(game_phase(board))      # 0 with all pieces on, up to 24 as pieces come off
```

### Zobrist hashes

```python
from mailboxchess.zobrist import ZobristHasher

hasher = ZobristHasher()
print(hex(hasher.polyglot_hash(board)))
```

### Errors

Malformed FEN or SAN raises `mailboxchess.pieces.ParseError`, which is a
subclass of both `mailboxchess.pieces.ChessError` and `ValueError`. Board
misuse, such as undoing with an empty history or moving from an empty square,
raises `ChessError`.

## What this package does not do

This package is a library of chess rules and notations only. It does not have
the following:

- game management: players, turns, results or listeners;
- EPD or PGN reading and writing;
- a computer opponent or search;
- a user interface or a command-line program.

## Running the tests

```
pip install .[test]
pytest
```