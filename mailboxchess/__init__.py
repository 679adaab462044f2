"""Chess core: board, move generation, Zobrist hashing, draw rules, FEN and SAN."""

__version__ = "0.1.0"