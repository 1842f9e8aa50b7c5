"""Game management layer: the turn-by-turn state machine.

Quick start::

    from chessrules.game import Game

    game = Game()
    game.make_move("f2", "f3")
    print(game.status, game.fen)
"""

from chessrules.game.state import Game, MoveRecord, new_game

__all__ = [
    "Game",
    "MoveRecord",
    "new_game",
]
