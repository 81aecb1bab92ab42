from __future__ import annotations

import logging
import random
import threading
from typing import List, Optional, Tuple

from .ai import choose_move
from .board import Coord, Player
from .errors import IllegalMove, Reason
from .moves import apply_move, legal_moves, validate_move
from .state import GameState, GameStatus

logger = logging.getLogger(__name__)


class GameSession:
    """Owns one game's state and serialises every change to it.

    Callers only ever see immutable ``GameState`` snapshots. A move is
    resolved completely before ``request_move`` returns; while it runs the
    stored status is ``Resolving``, so overlapping requests are rejected like
    any other wrong-phase move.
    """

    def __init__(self, rng: Optional[random.Random] = None, ai_player: Player = Player.P2) -> None:
        self.rng = rng or random.Random()
        self.ai_player = ai_player
        self._lock = threading.RLock()
        self._state = GameState.initial()
        self._frames: Tuple[GameState, ...] = ()

    def snapshot(self) -> GameState:
        return self._state

    @property
    def last_frames(self) -> Tuple[GameState, ...]:
        """Intermediate boards of the most recent move, for animation."""
        return self._frames

    def legal_moves(self) -> List[Coord]:
        return legal_moves(self._state)

    def request_move(self, player: object, r: object, c: object) -> GameState:
        with self._lock:
            before = self._state
            try:
                validate_move(before, player, r, c)
            except IllegalMove as e:
                logger.warning("rejected move by %r at (%r, %r): %s", player, r, c, e.reason.value)
                raise
            self._state = before.with_board(before.board, GameStatus.resolving())
            try:
                result = apply_move(before, player, r, c)
            except BaseException:
                self._state = before
                raise
            self._state = result.state
            self._frames = result.frames
            if len(result.frames) > 1:
                logger.debug("move at (%s, %s) set off %d explosion rounds", r, c, len(result.frames) - 1)
            if result.state.status.is_over:
                logger.info("game over after %d turns: %s wins", before.turn_count + 1, result.state.winner.name)
            return result.state

    def is_ai_turn(self) -> bool:
        state = self._state
        if state.status.is_over:
            return False
        return state.acting_player == self.ai_player

    def play_ai_turn(self) -> Tuple[Coord, GameState]:
        """Lets the evaluator choose and play a move for ``ai_player``."""
        with self._lock:
            if not self.is_ai_turn():
                raise IllegalMove(Reason.GAME_OVER if self._state.status.is_over else Reason.WRONG_PLAYER)
            state = self._state
            move = choose_move(state.board, state.acting_player, state.status.is_first_move, self.rng)
            return move, self.request_move(self.ai_player, move[0], move[1])

    def reset(self) -> GameState:
        with self._lock:
            self._state = GameState.initial()
            self._frames = ()
            logger.debug("session reset")
            return self._state
