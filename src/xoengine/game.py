"""Board rules, outcome evaluation and the turn-taking game session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ContractViolation, InvalidBoard

if TYPE_CHECKING:
    from .ai import MinimaxAI

logger = logging.getLogger(__name__)

Player = str  # "X" or "O"

EMPTY = " "
BOARD_SIZE = 9
PLAYERS: Tuple[Player, Player] = ("X", "O")

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


# ---------- Board validation ----------


class BoardModel(BaseModel):
    """Validated 3x3 board snapshot supplied by a caller."""

    cells: List[Optional[str]] = Field(
        min_length=BOARD_SIZE,
        max_length=BOARD_SIZE,
        description="Row-major cells: 'X', 'O', or empty (' ', '' or None)",
    )

    @field_validator("cells")
    @classmethod
    def normalize_cells(cls, value: List[Optional[str]]) -> List[Optional[str]]:
        normalized: List[Optional[str]] = []
        for index, cell in enumerate(value):
            if cell is None or cell in ("", EMPTY):
                normalized.append(EMPTY)
            elif cell in PLAYERS:
                normalized.append(cell)
            else:
                raise ValueError(
                    f"Unsupported value {cell!r} at cell {index}. "
                    f"Use 'X', 'O' or an empty cell."
                )
        return normalized


def parse_board(board: Sequence[Optional[str]]) -> List[str]:
    """Return a private, normalized copy of ``board`` or raise InvalidBoard."""

    if isinstance(board, str):
        raise InvalidBoard("Board must be a sequence of cells, not a string")
    try:
        model = BoardModel(cells=list(board))
    except TypeError as exc:
        raise InvalidBoard(f"Board is not a sequence: {exc}") from exc
    except ValidationError as exc:
        raise InvalidBoard(str(exc)) from exc
    return [str(cell) for cell in model.cells]


# ---------- Outcome ----------


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    status: GameStatus
    winner: Optional[Player] = None

    @property
    def is_terminal(self) -> bool:
        return self.status is not GameStatus.IN_PROGRESS

    @property
    def drawn(self) -> bool:
        return self.status is GameStatus.DRAW


IN_PROGRESS = Outcome(GameStatus.IN_PROGRESS)
DRAW = Outcome(GameStatus.DRAW)
_WINS = {player: Outcome(GameStatus.WIN, player) for player in PLAYERS}


def outcome_of(cells: Sequence[str]) -> Outcome:
    """Evaluate an already-normalized board. Lines are checked in order."""

    for a, b, c in WINNING_LINES:
        v = cells[a]
        if v != EMPTY and v == cells[b] == cells[c]:
            return _WINS[v]
    if EMPTY not in cells:
        return DRAW
    return IN_PROGRESS


def evaluate(board: Sequence[Optional[str]]) -> Outcome:
    """Report whether ``board`` is won, drawn or still in progress.

    Works at any fill level and makes no assumption about how many marks
    each side has placed. Raises InvalidBoard for malformed input.
    """

    return outcome_of(parse_board(board))


def empty_cells(cells: Sequence[str]) -> List[int]:
    return [i for i, c in enumerate(cells) if c == EMPTY]


# ---------- Game ----------


@dataclass
class TicTacToeGame:
    board: List[str] = field(default_factory=lambda: [EMPTY] * BOARD_SIZE)
    current_player: Player = "X"
    winner: Optional[Player] = None
    drawn: bool = False

    def __post_init__(self) -> None:
        if self.current_player not in PLAYERS:
            raise ValueError(f"Unknown player {self.current_player!r}")
        self.board = parse_board(self.board)
        self._update_state()

    # ---- API used by callers & AI ----

    @property
    def is_over(self) -> bool:
        return self.winner is not None or self.drawn

    def outcome(self) -> Outcome:
        return outcome_of(self.board)

    def available_moves(self) -> List[int]:
        if self.is_over:
            return []
        return empty_cells(self.board)

    def play_move(self, index: int) -> None:
        """Place the current player's mark, update the result and pass the turn."""
        if self.is_over:
            raise ValueError("Game already finished")
        if not 0 <= index < BOARD_SIZE:
            raise ValueError(f"Cell index {index} is outside the board")
        if self.board[index] != EMPTY:
            raise ValueError("Cell already occupied")

        player = self.current_player
        self.board[index] = player
        logger.debug("%s played cell %d", player, index)
        self._update_state()

        if self.is_over:
            logger.debug("Game over: winner=%s drawn=%s", self.winner, self.drawn)
            return
        self.current_player = "O" if player == "X" else "X"

    def play_ai_turn(self, ai: "MinimaxAI") -> int:
        """Let ``ai`` pick and play its move; returns the chosen cell."""
        if self.is_over:
            raise ContractViolation("Game already finished")
        if self.current_player != ai.player:
            raise ContractViolation("It is not the AI player's turn")
        index = ai.choose(self.board)
        self.play_move(index)
        return index

    def reset(self) -> None:
        self.board = [EMPTY] * BOARD_SIZE
        self.current_player = "X"
        self.winner = None
        self.drawn = False

    def clone(self) -> "TicTacToeGame":
        return TicTacToeGame(
            board=self.board.copy(),
            current_player=self.current_player,
        )

    # ---- helpers ----

    def _update_state(self) -> None:
        result = outcome_of(self.board)
        self.winner = result.winner
        self.drawn = result.drawn
