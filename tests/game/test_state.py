"""Tests for the Game state machine."""

import logging

import pytest

from chessrules.core.enums import CastlingRights, Color, GameStatus, PieceType
from chessrules.core.errors import InvariantViolation, NotationError
from chessrules.core.notation import STARTING_FEN
from chessrules.core.piece import Piece
from chessrules.core.rules import Rules
from chessrules.core.settings import RulesSettings
from chessrules.core.types import D3, D4, E8, F1, G1, H1, parse_square
from chessrules.game.state import Game, new_game

FOOLS_MATE_MOVES = [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]


class TestGameSetup:
    def test_default_is_starting_position(self) -> None:
        game = Game()
        assert game.fen == STARTING_FEN
        assert game.status == GameStatus.IN_PROGRESS
        assert game.active_color == Color.WHITE
        assert not game.white_in_check
        assert not game.black_in_check
        assert game.history == []

    def test_from_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        game = Game.from_fen(fen)
        assert game.active_color == Color.BLACK
        assert game.fen == fen

    def test_new_game_helper(self) -> None:
        assert new_game().fen == STARTING_FEN

    def test_terminal_position_detected_on_construction(self) -> None:
        game = Game.from_fen("8/8/4k3/8/8/4K3/8/8 w - - 100 51")
        assert game.status == GameStatus.DRAW_FIFTY_MOVE
        assert game.is_game_over

    def test_check_flags_on_construction(self) -> None:
        game = Game.from_fen(
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        )
        assert game.white_in_check
        assert game.is_in_check(Color.WHITE)
        assert game.status == GameStatus.CHECKMATE_BLACK_WINS

    def test_malformed_fen_raises(self) -> None:
        with pytest.raises(NotationError):
            Game.from_fen("not a fen")

    def test_board_is_a_copy(self) -> None:
        game = Game()
        board = game.board
        board[parse_square("e2")] = None
        assert game.fen == STARTING_FEN

    def test_repr_shows_fen(self) -> None:
        assert STARTING_FEN in repr(Game())


class TestMakeMove:
    def test_fools_mate(self) -> None:
        game = Game()
        for source, target in FOOLS_MATE_MOVES:
            assert game.make_move(source, target)
        assert game.status == GameStatus.CHECKMATE_BLACK_WINS
        assert game.white_in_check
        assert not game.black_in_check
        assert game.legal_moves() == {}
        assert game.history[-1].was_check

    def test_accepts_coordinates(self) -> None:
        game = Game()
        assert game.make_move((6, 4), (4, 4))
        assert game.active_color == Color.BLACK

    def test_illegal_move_leaves_game_unchanged(self) -> None:
        game = Game()
        assert not game.make_move("e2", "e5")
        assert not game.make_move("e7", "e5")  # black piece on white's turn
        assert not game.make_move("e1", "e2")  # own pawn in the way
        assert not game.make_move("e4", "e5")  # empty square
        assert game.fen == STARTING_FEN
        assert game.history == []

    def test_malformed_square_raises(self) -> None:
        game = Game()
        with pytest.raises(NotationError):
            game.make_move("z9", "e4")
        assert game.fen == STARTING_FEN

    def test_move_into_check_rejected(self) -> None:
        game = Game.from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        assert not game.make_move("e2", "d3")

    def test_history_records(self) -> None:
        game = Game()
        game.make_move("e2", "e4")
        record = game.history[0]
        assert str(record.move) == "e2e4"
        assert record.fen_after == game.fen
        assert not record.was_capture
        assert not record.was_check

    def test_counters(self) -> None:
        game = Game()
        game.make_move("g1", "f3")
        game.make_move("g8", "f6")
        assert game.fen.endswith(" 2 2")

    def test_fifty_move_draw_after_move(self) -> None:
        game = Game.from_fen("8/8/4k3/8/8/4K3/8/8 w - - 99 50")
        assert game.status == GameStatus.IN_PROGRESS
        assert game.make_move("e3", "d3")
        assert game.status == GameStatus.DRAW_FIFTY_MOVE


class TestCheckInPlay:
    def test_white_gives_check(self) -> None:
        game = Game()
        for source, target in [("e2", "e4"), ("f7", "f6"), ("d1", "h5")]:
            assert game.make_move(source, target)
        assert game.black_in_check
        assert not game.white_in_check
        assert game.status == GameStatus.IN_PROGRESS
        assert game.history[-1].was_check
        assert game.make_move("g7", "g6")
        assert not game.black_in_check

    def test_black_gives_check(self) -> None:
        game = Game()
        for source, target in [("f2", "f3"), ("e7", "e6"), ("a2", "a3"), ("d8", "h4")]:
            assert game.make_move(source, target)
        assert game.white_in_check
        assert not game.black_in_check
        assert game.status == GameStatus.IN_PROGRESS
        assert game.history[-1].was_check
        assert game.legal_moves() == {parse_square("g2"): {parse_square("g3")}}

    def test_loaded_position_in_check(self) -> None:
        game = Game.from_fen("4k3/8/8/8/8/8/8/4R1K1 b - - 0 1")
        assert game.black_in_check
        assert not game.white_in_check
        assert game.status == GameStatus.IN_PROGRESS
        assert not game.make_move("e8", "e7")
        assert game.make_move("e8", "d7")

    def test_failed_move_leaves_game_untouched(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        game = Game()

        def broken_status(board, settings=None):
            raise InvariantViolation("status evaluation failed")

        monkeypatch.setattr(Rules, "game_status", broken_status)
        with pytest.raises(InvariantViolation):
            game.make_move("e2", "e4")
        assert game.fen == STARTING_FEN
        assert game.status == GameStatus.IN_PROGRESS
        assert game.history == []


class TestSpecialMoves:
    def test_en_passant(self) -> None:
        game = Game.from_fen("4k3/8/8/8/4p3/8/3P4/4K3 w - - 0 1")
        assert game.make_move("d2", "d4")
        assert game.board.en_passant == D3
        assert D3 in game.legal_moves()[parse_square("e4")]
        assert game.make_move("e4", "d3")
        board = game.board
        assert board[D4] is None
        assert board[D3] == Piece(Color.BLACK, PieceType.PAWN)
        assert game.history[-1].was_capture

    def test_castling(self) -> None:
        game = Game.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        assert game.make_move("e1", "g1")
        board = game.board
        assert board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert board[H1] is None
        assert board.castling == CastlingRights.BLACK_BOTH

    def test_castling_right_lost_for_good(self) -> None:
        game = Game.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        assert game.make_move("h1", "h2")
        assert game.make_move("a8", "a7")
        assert game.make_move("h2", "h1")
        assert game.make_move("a7", "a8")
        assert game.fen.split()[2] == "Qk"
        assert not game.make_move("e1", "g1")

    def test_default_promotion_is_queen(self) -> None:
        game = Game.from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        assert game.make_move("e7", "e8")
        assert game.board[E8] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_configured_promotion(self) -> None:
        game = Game.from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        assert not game.set_promotion_choice("king")
        assert game.promotion_choice == PieceType.QUEEN
        assert game.set_promotion_choice(PieceType.ROOK)
        assert game.make_move("e7", "e8")
        assert game.board[E8] == Piece(Color.WHITE, PieceType.ROOK)

    def test_explicit_promotion_piece(self) -> None:
        game = Game.from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        assert not game.make_move("e7", "e8", PieceType.KING)
        assert game.make_move("e7", "e8", PieceType.KNIGHT)
        assert game.board[E8] == Piece(Color.WHITE, PieceType.KNIGHT)


class TestSettings:
    def test_promotion_from_settings(self) -> None:
        game = Game(settings=RulesSettings(promotion_choice=PieceType.BISHOP))
        assert game.promotion_choice == PieceType.BISHOP

    def test_invalid_settings_rejected(self) -> None:
        with pytest.raises(ValueError, match="promotion choice"):
            Game(settings=RulesSettings(promotion_choice=PieceType.KING))
        with pytest.raises(ValueError, match="fifty-move limit"):
            Game(settings=RulesSettings(fifty_move_limit=0))

    def test_strict_castling_refuses_attacked_transit(self) -> None:
        fen = "4k3/8/8/8/8/5r2/8/4K2R w K - 0 1"
        assert Game.from_fen(fen).make_move("e1", "g1")
        strict = Game.from_fen(fen, RulesSettings(strict_castling=True))
        assert not strict.make_move("e1", "g1")


class TestLogging:
    def test_rejected_move_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="chessrules.game.state")
        Game().make_move("e2", "e5")
        assert "Rejected illegal move e2e5" in caplog.text

    def test_status_change_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="chessrules.game.state")
        game = Game()
        for source, target in FOOLS_MATE_MOVES:
            game.make_move(source, target)
        assert "IN_PROGRESS -> CHECKMATE_BLACK_WINS" in caplog.text
