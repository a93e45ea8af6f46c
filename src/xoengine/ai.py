"""Minimax AI with alpha-beta pruning and difficulty-based randomization."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union
import math
import os
import random

from .errors import ContractViolation
from .game import (
    EMPTY,
    GameStatus,
    Player,
    TicTacToeGame,
    empty_cells,
    outcome_of,
    parse_board,
)


AI_PLAYER: Player = "O"
HUMAN_PLAYER: Player = "X"
WIN_SCORE = 10
DIFFICULTY_ENV = "XOENGINE_DIFFICULTY"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(
                f"Unsupported difficulty {value!r}. "
                f"Choose one of {', '.join(d.value for d in cls)}."
            ) from exc


# Chance of skipping the search and playing a uniformly random empty cell.
RANDOM_MOVE_PROBABILITY: Dict[Difficulty, float] = {
    Difficulty.EASY: 0.7,
    Difficulty.MEDIUM: 0.3,
    Difficulty.HARD: 0.0,
}


def default_difficulty() -> Difficulty:
    return Difficulty.parse(os.environ.get(DIFFICULTY_ENV, Difficulty.HARD.value))


# ---- public API ----


def select_move(
    board: Sequence[Optional[str]],
    difficulty: Union[Difficulty, str] = Difficulty.HARD,
    rng: Optional[random.Random] = None,
) -> int:
    """Pick the cell "O" should occupy on ``board``.

    Easy and Medium first draw from ``rng`` to decide whether to play a
    random empty cell instead of searching; Hard never touches ``rng``.
    Raises ContractViolation when the game on ``board`` is already over.
    """

    cells = parse_board(board)
    tier = Difficulty.parse(difficulty)
    moves = _playable_cells(cells)

    probability = RANDOM_MOVE_PROBABILITY[tier]
    if probability > 0.0:
        if rng is None:
            rng = random.Random()
        if rng.random() < probability:
            return rng.choice(moves)
    return _search(cells)


def best_move(board: Sequence[Optional[str]]) -> int:
    """Game-theoretically best cell for "O"; deterministic."""

    cells = parse_board(board)
    _playable_cells(cells)
    return _search(cells)


@dataclass
class MinimaxAI:
    """Automated "O" player with a configurable difficulty.

      - MinimaxAI(difficulty="medium", seed=42)
      - choose(board_or_game) -> cell_index
    """

    difficulty: Difficulty = field(default_factory=default_difficulty)
    player: Player = AI_PLAYER
    seed: Optional[int] = None
    rng: Optional[random.Random] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.player != AI_PLAYER:
            raise ValueError(f"The AI always plays {AI_PLAYER!r}")
        self.difficulty = Difficulty.parse(self.difficulty)
        if self.rng is None:
            self.rng = random.Random(self.seed)

    def choose(self, board: Union[TicTacToeGame, Sequence[Optional[str]]]) -> int:
        if isinstance(board, TicTacToeGame):
            if board.current_player != self.player:
                raise ContractViolation("It is not this AI player's turn")
            board = board.board
        return select_move(board, self.difficulty, self.rng)

    def best_move(self, board: Sequence[Optional[str]]) -> int:
        return best_move(board)


# ---- core search ----


def _playable_cells(cells: List[str]) -> List[int]:
    result = outcome_of(cells)
    if result.status is GameStatus.WIN:
        raise ContractViolation(f"Game already won by {result.winner}")
    moves = empty_cells(cells)
    if not moves:
        raise ContractViolation("No empty cells left on the board")
    return moves


def _search(cells: List[str]) -> int:
    """Top-level move loop; ``cells`` is mutated and restored in place."""

    best_score = -math.inf
    best_index = -1
    for index in empty_cells(cells):
        cells[index] = AI_PLAYER
        try:
            score = _minimax(cells, 0, -math.inf, math.inf, False)
        finally:
            cells[index] = EMPTY
        if score > best_score:
            best_score, best_index = score, index
    return best_index


def _minimax(
    cells: List[str],
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
) -> float:
    result = outcome_of(cells)
    if result.status is GameStatus.WIN:
        if result.winner == AI_PLAYER:
            return WIN_SCORE - depth
        return depth - WIN_SCORE
    if result.status is GameStatus.DRAW:
        return 0

    if maximizing:
        value = -math.inf
        for index in empty_cells(cells):
            cells[index] = AI_PLAYER
            try:
                score = _minimax(cells, depth + 1, alpha, beta, False)
            finally:
                cells[index] = EMPTY
            value = max(value, score)
            alpha = max(alpha, value)
            if beta <= alpha:
                break
    else:
        value = math.inf
        for index in empty_cells(cells):
            cells[index] = HUMAN_PLAYER
            try:
                score = _minimax(cells, depth + 1, alpha, beta, True)
            finally:
                cells[index] = EMPTY
            value = min(value, score)
            beta = min(beta, value)
            if beta <= alpha:
                break
    return value
