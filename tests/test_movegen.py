import pytest

from mailboxchess.board import Board
from mailboxchess.movegen import legal_moves, noisy_moves, perft, pseudo_legal_moves
from mailboxchess.pieces import Castle, Color, Move, Piece, PieceType, parse_square
from mailboxchess.zobrist import ZOBRIST


def _board(placement, to_move=Color.WHITE, castling=Castle.NONE, ep=None):
    board = Board()
    for name, ch in placement.items():
        board.put_piece(parse_square(name), Piece.from_char(ch))
    board.to_move = to_move
    board.castling = castling
    board.en_passant = parse_square(ep) if ep else None
    board.rehash()
    return board


def _start():
    back = "RNBQKBNR"
    placement = {}
    for i, f in enumerate("abcdefgh"):
        placement[f + "1"] = back[i]
        placement[f + "2"] = "P"
        placement[f + "7"] = "p"
        placement[f + "8"] = back[i].lower()
    all_rights = Castle.WHITE_KING | Castle.WHITE_QUEEN | Castle.BLACK_KING | Castle.BLACK_QUEEN
    return _board(placement, castling=all_rights)


def sq(name):
    return parse_square(name)


@pytest.mark.parametrize("depth, expected", [(1, 20), (2, 400), (3, 8902)])
def test_perft_start_position(depth, expected):
    assert perft(_start(), depth) == expected


def test_perft_depth_one_matches_legal_moves():
    board = _board({"e1": "K", "e8": "k", "d4": "Q", "b7": "p"}, to_move=Color.WHITE)
    assert perft(board, 1) == len(legal_moves(board))


def test_perft_does_not_change_board():
    board = _start()
    before = board.hash
    perft(board, 2)
    assert board.hash == before
    assert board.history == []


def test_legal_moves_are_subset_of_pseudo_legal():
    board = _board({"e1": "K", "e2": "R", "e8": "r", "a8": "k"})
    legal = legal_moves(board)
    pseudo = pseudo_legal_moves(board)
    assert set(legal) <= set(pseudo)
    # The pinned rook may not leave the e-file.
    assert Move(sq("e2"), sq("d2")) in pseudo
    assert Move(sq("e2"), sq("d2")) not in legal
    assert Move(sq("e2"), sq("e8")) in legal


def test_noisy_moves_are_all_captures():
    board = _board({"e1": "K", "a8": "k", "d4": "Q", "d7": "p", "g7": "n", "c3": "P", "b4": "p"})
    noisy = noisy_moves(board)
    assert noisy
    assert all(board.is_capture(m) for m in noisy)
    captures = [m for m in pseudo_legal_moves(board) if board.is_capture(m)]
    assert set(noisy) == set(captures)


def test_promotions_cover_four_pieces():
    board = _board({"e1": "K", "a8": "k", "g7": "P"})
    promos = {m.promote for m in legal_moves(board) if m.from_sq == sq("g7")}
    assert promos == {PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT}


def test_capture_promotions_are_noisy():
    board = _board({"e1": "K", "a8": "k", "g7": "P", "h8": "r"})
    noisy = {m for m in noisy_moves(board) if m.from_sq == sq("g7")}
    assert {m.to_sq for m in noisy} == {sq("h8")}
    assert {m.promote for m in noisy} == {PieceType.QUEEN, PieceType.ROOK,
                                          PieceType.BISHOP, PieceType.KNIGHT}


def test_en_passant_generated():
    board = _board({"e1": "K", "e8": "k", "e5": "P", "d5": "p"}, ep="d6")
    move = Move(sq("e5"), sq("d6"))
    assert move in legal_moves(board)
    assert move in noisy_moves(board)
    board.make_move(move)
    assert board.piece_at(sq("d5")) is None
    assert board.piece_at(sq("d6")) == Piece(Color.WHITE, PieceType.PAWN)


def test_double_pawn_push_blocked():
    board = _board({"e1": "K", "e8": "k", "d2": "P", "d4": "n"})
    targets = {m.to_sq for m in legal_moves(board) if m.from_sq == sq("d2")}
    assert targets == {sq("d3")}


def test_castling_both_sides_when_clear():
    board = _board({"e1": "K", "a1": "R", "h1": "R", "e8": "k"},
                   castling=Castle.WHITE_KING | Castle.WHITE_QUEEN)
    moves = legal_moves(board)
    assert Move(sq("e1"), sq("g1"), castle=Castle.KING) in moves
    assert Move(sq("e1"), sq("c1"), castle=Castle.QUEEN) in moves


def test_castling_blocked_by_piece():
    board = _board({"e1": "K", "a1": "R", "b1": "N", "h1": "R", "e8": "k"},
                   castling=Castle.WHITE_KING | Castle.WHITE_QUEEN)
    castles = {m.castle for m in pseudo_legal_moves(board) if m.castle}
    assert castles == {Castle.KING}


def test_castling_requires_rights():
    board = _board({"e1": "K", "a1": "R", "h1": "R", "e8": "k"}, castling=Castle.NONE)
    assert not any(m.castle for m in pseudo_legal_moves(board))


def test_castling_through_check_is_illegal():
    board = _board({"e1": "K", "h1": "R", "f8": "r", "a8": "k"}, castling=Castle.WHITE_KING)
    move = Move(sq("e1"), sq("g1"), castle=Castle.KING)
    assert move in pseudo_legal_moves(board)
    assert move not in legal_moves(board)


def test_black_castling():
    board = _board({"e1": "K", "e8": "k", "h8": "r"}, to_move=Color.BLACK,
                   castling=Castle.BLACK_KING)
    move = Move(sq("e8"), sq("g8"), castle=Castle.KING)
    assert move in legal_moves(board)
    board.make_move(move)
    assert board.piece_at(sq("f8")) == Piece(Color.BLACK, PieceType.ROOK)
    assert board.piece_at(sq("g8")) == Piece(Color.BLACK, PieceType.KING)


def test_checkmated_side_has_no_moves():
    board = _board({"h1": "K", "g2": "q", "e4": "k"}, to_move=Color.WHITE)
    board.put_piece(sq("f3"), Piece.from_char("b"))
    board.rehash()
    assert board.in_check(Color.WHITE)
    assert legal_moves(board) == []


def test_every_legal_move_keeps_hash_consistent():
    board = _start()
    for move in legal_moves(board):
        probe = board.copy()
        probe.make_move(move)
        assert probe.hash == ZOBRIST.hash_board(probe)
        probe.undo_move()
        assert probe.hash == board.hash