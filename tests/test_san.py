import pytest

from mailboxchess.fen import START_FEN, parse_fen
from mailboxchess.movegen import legal_moves
from mailboxchess.pieces import Castle, Move, ParseError, square
from mailboxchess.san import move_to_san, parse_san

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def _record(board, move):
    board.make_move(move)
    return board.undo_move()


def test_parse_pawn_push():
    board = parse_fen(START_FEN)
    assert parse_san(board, "e4") == Move(square(4, 1), square(4, 3))


def test_parse_knight_move():
    board = parse_fen(START_FEN)
    assert parse_san(board, "Nf3") == Move(square(6, 0), square(5, 2))


def test_parse_castles():
    board = parse_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    king_side = parse_san(board, "O-O")
    queen_side = parse_san(board, "O-O-O")
    assert king_side.castle == Castle.KING
    assert king_side.to_sq == square(6, 0)
    assert queen_side.castle == Castle.QUEEN
    assert queen_side.to_sq == square(2, 0)


def test_castle_rendering():
    board = parse_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    move = parse_san(board, "O-O")
    assert move_to_san(board, _record(board, move)) == "O-O"


@pytest.mark.parametrize("text", ["", "e", "Ke2", "e9", "e4!", "e8=K", "i4", "e5"])
def test_bad_san(text):
    board = parse_fen(START_FEN)
    with pytest.raises(ParseError):
        parse_san(board, text)


def test_fools_mate_marked():
    board = parse_fen(START_FEN)
    for text in ("f3", "e5", "g4"):
        board.make_move(parse_san(board, text))
    mate = parse_san(board, "Qh4#")
    assert move_to_san(board, _record(board, mate)) == "Qh4#"
    board.make_move(mate)
    assert legal_moves(board) == []


def test_knight_disambiguation_by_file():
    board = parse_fen("4k3/8/8/8/8/8/8/1N3NK1 w - - 0 1")
    move = Move(square(1, 0), square(3, 1))
    assert move_to_san(board, _record(board, move)) == "Nbd2"
    assert parse_san(board, "Nbd2") == move


def test_rook_disambiguation_by_rank_round_trips():
    board = parse_fen("4k3/8/8/8/8/R7/8/R3K3 w - - 0 1")
    low = Move(square(0, 0), square(0, 1))
    high = Move(square(0, 2), square(0, 1))
    low_text = move_to_san(board, _record(board, low))
    high_text = move_to_san(board, _record(board, high))
    assert low_text != high_text
    assert parse_san(board, low_text) == low
    assert parse_san(board, high_text) == high


def test_promotion_rendering():
    board = parse_fen("8/P3k3/8/8/8/8/8/4K3 w - - 0 1")
    move = Move(square(0, 6), square(0, 7), promote=parse_san(board, "a8=Q").promote)
    text = move_to_san(board, _record(board, move))
    assert text == "a8=Q"
    assert parse_san(board, "a8=N").promote.letter == "N"


def test_plain_move_accepted():
    board = parse_fen(START_FEN)
    move = Move(square(6, 0), square(5, 2))
    assert move_to_san(board, move) == move_to_san(board, _record(board, move))


def test_nil_record():
    board = parse_fen(START_FEN)
    assert move_to_san(board, Move()) == "-"


@pytest.mark.parametrize("fen", [START_FEN, KIWIPETE,
                                 "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
                                 "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"])
def test_round_trip_all_legal_moves(fen):
    board = parse_fen(fen)
    moves = legal_moves(board)
    assert moves
    texts = set()
    for move in moves:
        text = move_to_san(board, _record(board, move))
        texts.add(text)
        assert parse_san(board, text) == move
    assert len(texts) == len(moves)