from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .board import Board, Player
from .errors import InvariantViolation


class Phase(str, Enum):
    FIRST_MOVE = "first_move"
    PLAYING = "playing"
    RESOLVING = "resolving"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameStatus:
    """Phase of the game. ``player`` is the placer for FIRST_MOVE and the winner for GAME_OVER."""
    phase: Phase
    player: Optional[Player] = None

    @classmethod
    def first_move(cls, player: Player) -> 'GameStatus':
        return cls(Phase.FIRST_MOVE, player)

    @classmethod
    def playing(cls) -> 'GameStatus':
        return cls(Phase.PLAYING)

    @classmethod
    def resolving(cls) -> 'GameStatus':
        return cls(Phase.RESOLVING)

    @classmethod
    def game_over(cls, winner: Player) -> 'GameStatus':
        return cls(Phase.GAME_OVER, winner)

    @property
    def is_first_move(self) -> bool:
        return self.phase is Phase.FIRST_MOVE

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def __str__(self) -> str:
        if self.player is None:
            return self.phase.value
        return f"{self.phase.value}({self.player.name})"


@dataclass(frozen=True)
class Scores:
    p1: int = 0
    p2: int = 0

    def __getitem__(self, player: Player) -> int:
        return self.p1 if player == Player.P1 else self.p2

    @classmethod
    def of(cls, board: Board) -> 'Scores':
        return cls(board.count_owned(Player.P1), board.count_owned(Player.P2))


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a game session."""
    board: Board
    current_player: Player
    status: GameStatus
    scores: Scores
    turn_count: int

    @classmethod
    def initial(cls) -> 'GameState':
        return cls(
            board=Board.empty(),
            current_player=Player.P1,
            status=GameStatus.first_move(Player.P1),
            scores=Scores(),
            turn_count=0,
        )

    @property
    def acting_player(self) -> Player:
        """The player whose move is awaited: the placer during first moves, else current_player."""
        if self.status.is_first_move:
            if self.status.player is None:
                raise InvariantViolation("first-move status without a player")
            return self.status.player
        return self.current_player

    @property
    def winner(self) -> Optional[Player]:
        return self.status.player if self.status.is_over else None

    def with_board(self, board: Board, status: Optional[GameStatus] = None) -> 'GameState':
        return replace(self, board=board, status=status or self.status)
