"""
Exceptions raised by the Reversi engine.
"""
from typing import Optional


class ReversiError(Exception):
    """Base class for all engine errors."""


class ConstructionError(ReversiError, ValueError):
    """Invalid board dimensions or layout."""


class OutOfRange(ReversiError, IndexError):
    """Grid access outside of the board bounds."""


class GameOverError(ReversiError, RuntimeError):
    """A move was attempted after the game ended."""

    def __init__(self, message: str = "Game is over"):
        super().__init__(message)


class InvalidMove(ReversiError, ValueError):
    """
    A move that is not legal in the current position.

    The engine state is left unchanged; the caller should choose again.
    """

    def __init__(self, coordinate, reason: Optional[str] = None):
        self.coordinate = coordinate
        self.reason = reason
        message = f"Illegal move {coordinate}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
