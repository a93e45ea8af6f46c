"""Exceptions raised by the tic-tac-toe engine."""

from __future__ import annotations


class InvalidBoard(ValueError):
    """The board is not 9 cells of Empty, "X" or "O"."""


class ContractViolation(ValueError):
    """The engine was asked for a move on a position that has none to offer."""
