import pytest

from mailboxchess.pieces import (
    Castle,
    ChessError,
    Color,
    Move,
    ParseError,
    Piece,
    PieceType,
    file_of,
    parse_square,
    rank_of,
    square,
    square_name,
)


def test_square_file_rank_round_trip():
    for rank in range(8):
        for file in range(8):
            sq = square(file, rank)
            assert file_of(sq) == file
            assert rank_of(sq) == rank
            assert 0 <= sq < 64


def test_square_rejects_out_of_range():
    with pytest.raises(ValueError):
        square(8, 0)
    with pytest.raises(ValueError):
        square(0, -1)


def test_square_name_and_parse_round_trip():
    names = {square_name(sq) for sq in range(64)}
    assert len(names) == 64
    for sq in range(64):
        assert parse_square(square_name(sq)) == sq


def test_square_name_known_value():
    assert square_name(square(4, 3)) == "e4"
    assert square_name(None) == "-"
    assert parse_square("-") is None


@pytest.mark.parametrize("text", ["", "e", "i1", "a9", "e44", "E4"])
def test_parse_square_errors(text):
    with pytest.raises(ParseError):
        parse_square(text)


def test_parse_error_is_chess_error_and_value_error():
    with pytest.raises(ChessError):
        parse_square("zz")
    with pytest.raises(ValueError):
        parse_square("zz")


def test_color_opponent():
    assert Color.WHITE.opponent() == Color.BLACK
    assert Color.BLACK.opponent() == Color.WHITE
    for color in Color:
        assert color.opponent().opponent() == color


def test_castle_for_color():
    assert Castle.for_color(Castle.KING, Color.WHITE) == Castle.WHITE_KING
    assert Castle.for_color(Castle.KING, Color.BLACK) == Castle.BLACK_KING
    assert Castle.for_color(Castle.QUEEN, Color.WHITE) == Castle.WHITE_QUEEN
    assert Castle.for_color(Castle.QUEEN, Color.BLACK) == Castle.BLACK_QUEEN


def test_piece_char_round_trip():
    for color in Color:
        for kind in PieceType:
            if kind == PieceType.NONE:
                continue
            piece = Piece(color, kind)
            assert Piece.from_char(piece.char()) == piece


def test_piece_char_case():
    assert Piece.from_char("K") == Piece(Color.WHITE, PieceType.KING)
    assert Piece.from_char("n") == Piece(Color.BLACK, PieceType.KNIGHT)
    assert Piece(Color.BLACK, PieceType.QUEEN).char() == "q"


@pytest.mark.parametrize("ch", ["x", " ", "", "KK", "1"])
def test_piece_from_char_errors(ch):
    with pytest.raises(ParseError):
        Piece.from_char(ch)


def test_nil_move():
    move = Move()
    assert move.is_nil()
    assert move.uci() == "-"


def test_move_uci():
    move = Move(square(4, 1), square(4, 3))
    assert not move.is_nil()
    assert move.uci() == square_name(square(4, 1)) + square_name(square(4, 3))


def test_promotion_uci():
    move = Move(parse_square("e7"), parse_square("e8"), PieceType.QUEEN)
    assert move.uci() == "e7e8q"
    assert str(move) == move.uci()


def test_moves_compare_by_value():
    a = Move(12, 28)
    b = Move(12, 28)
    assert a == b
    assert hash(a) == hash(b)
    assert Move(12, 28, castle=Castle.KING) != a