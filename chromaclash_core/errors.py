from __future__ import annotations

from enum import Enum
from typing import Optional


class Reason(str, Enum):
    """Why a move request was rejected."""
    GAME_OVER = "game_over"
    RESOLVING = "resolving"
    WRONG_PLAYER = "wrong_player"
    OCCUPIED = "occupied"
    NOT_OWNED = "not_owned"
    OUT_OF_BOUNDS = "out_of_bounds"
    MALFORMED = "malformed"


class EngineError(Exception):
    """Base class for all engine errors."""


class OutOfBounds(EngineError, IndexError):
    def __init__(self, r: int, c: int, size: int) -> None:
        super().__init__(f"({r}, {c}) is outside the {size}x{size} board")
        self.r = r
        self.c = c
        self.size = size


class IllegalMove(EngineError, ValueError):
    """A move request that the rules do not allow. The session is left unchanged."""

    def __init__(self, reason: Reason, detail: Optional[str] = None) -> None:
        super().__init__(detail or reason.value.replace("_", " "))
        self.reason = reason


class InvariantViolation(EngineError, RuntimeError):
    """The engine reached a state the rules make impossible."""
