"""xoengine package exposing tic-tac-toe rules, outcome evaluation and the AI opponent."""

from .ai import Difficulty, MinimaxAI, best_move, select_move
from .errors import ContractViolation, InvalidBoard
from .game import (
    WINNING_LINES,
    GameStatus,
    Outcome,
    TicTacToeGame,
    evaluate,
    parse_board,
)

__all__ = [
    "ContractViolation",
    "Difficulty",
    "GameStatus",
    "InvalidBoard",
    "MinimaxAI",
    "Outcome",
    "TicTacToeGame",
    "WINNING_LINES",
    "best_move",
    "evaluate",
    "parse_board",
    "select_move",
]
