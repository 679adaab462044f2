import pytest

from mailboxchess.board import Board
from mailboxchess.fen import (
    EMPTY_FEN,
    START_FEN,
    load_fen_fields,
    parse_fen,
    render_fen,
    render_fen_prefix,
)
from mailboxchess.pieces import Castle, Color, ParseError, Piece, PieceType, square
from mailboxchess.zobrist import ZOBRIST


def test_start_position_pieces():
    board = parse_fen(START_FEN)
    assert board.piece_at(square(4, 0)) == Piece(Color.WHITE, PieceType.KING)
    assert board.piece_at(square(3, 7)) == Piece(Color.BLACK, PieceType.QUEEN)
    assert board.piece_at(square(0, 1)) == Piece(Color.WHITE, PieceType.PAWN)
    assert board.piece_at(square(4, 4)) is None
    assert board.to_move == Color.WHITE
    assert board.castling == (Castle.WHITE_KING | Castle.WHITE_QUEEN
                              | Castle.BLACK_KING | Castle.BLACK_QUEEN)
    assert board.en_passant is None


def test_start_position_hash_matches_polyglot():
    board = parse_fen(START_FEN)
    assert board.hash == 0x463B96181691FC9C
    assert board.hash == ZOBRIST.hash_board(board)


def test_empty_fen_round_trip():
    assert render_fen(parse_fen(EMPTY_FEN)) == EMPTY_FEN


def test_start_render_is_stable():
    once = render_fen(parse_fen(START_FEN))
    assert render_fen(parse_fen(once)) == once
    assert once.split()[0] == START_FEN.split()[0]
    assert sorted(once.split()[2]) == sorted("KQkq")
    assert parse_fen(once).hash == parse_fen(START_FEN).hash


def test_prefix_is_first_four_fields():
    board = parse_fen(START_FEN)
    assert render_fen_prefix(board).split() == render_fen(board).split()[:4]


def test_en_passant_square():
    board = parse_fen("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1")
    assert board.en_passant == square(4, 2)
    assert board.to_move == Color.BLACK
    assert render_fen(board).split()[3] == "e3"


def test_full_move_number_round_trip():
    board = parse_fen("4k3/8/8/8/8/8/8/4K3 b - - 0 5")
    assert len(board.history) == 9
    assert render_fen(board).split()[5] == "5"


def test_half_move_clock():
    board = parse_fen("4k3/8/8/8/8/8/8/4K3 w - - 10 20")
    assert board.half_move_clock == 10
    assert render_fen(board).split()[4] == "10"


def test_load_fields_clears_board():
    board = parse_fen(START_FEN)
    load_fen_fields(board, ["4k3/8/8/8/8/8/8/4K3", "b", "-", "-"])
    assert len(list(board.pieces(Color.WHITE))) == 1
    assert len(list(board.pieces(Color.BLACK))) == 1
    assert board.history == []
    assert board.to_move == Color.BLACK
    assert board.hash == ZOBRIST.hash_board(board)


def test_load_fields_needs_four():
    with pytest.raises(ParseError):
        load_fen_fields(Board(), ["8/8/8/8/8/8/8/8", "w", "-"])


@pytest.mark.parametrize("text", [
    "8/8/8/8/8/8/8/8 w - -",
    "8/8/8/8/8/8/8/8 x - - 0 1",
    "8/8/8/8/8/8/8/8 wb - - 0 1",
    "8/8/8/8/8/8/8/8 w KX - 0 1",
    "8/8/8/8/8/8/8/8 w - z9 0 1",
    "8/8/8/8/8/8/8/8 w - - abc 1",
    "8/8/8/8/8/8/8/8 w - - 0 abc",
    "8/8/8/8/8/8/8/8 w - - 300 1",
    "8/8/8/8/8/8/8/8 w - - 0 0",
    "rnbqkbnrr/8/8/8/8/8/8/8 w - - 0 1",
    "8/8/8/8/8/8/8/8/8 w - - 0 1",
    "8/8/8/8/8/8/8/7X w - - 0 1",
])
def test_bad_fen(text):
    with pytest.raises(ParseError):
        parse_fen(text)