from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from .board import Board, Coord, Player
from .constants import CAPTURE_WEIGHT, EXPLOSION_WEIGHT, MAX_CHARGE, THREAT_PENALTY
from .errors import InvariantViolation
from .moves import place, resolve_chain
from .state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveScore:
    """Breakdown of a candidate's heuristic value."""
    coord: Coord
    captures: int
    explosions: int
    threatened: bool
    position: float

    @property
    def total(self) -> float:
        score = self.captures * CAPTURE_WEIGHT + self.explosions * EXPLOSION_WEIGHT + self.position
        if self.threatened:
            score -= THREAT_PENALTY
        return score


def choose_first_move(board: Board, rng: Optional[random.Random] = None) -> Coord:
    """Picks a random empty cell, preferring cells off the board edge."""
    rng = rng or random.Random()
    empties = board.empty_coords()
    if not empties:
        raise InvariantViolation("no empty cell left for a first move")
    interior = [rc for rc in empties if not board.is_edge(*rc)]
    return rng.choice(interior or empties)


def is_threatened(board: Board, r: int, c: int, player: Player) -> bool:
    """True when an opponent neighbour sits one charge below exploding."""
    opponent = player.other()
    for nr, nc in board.neighbors(r, c):
        cell = board.cell_at(nr, nc)
        if cell.owner == opponent and cell.charge == MAX_CHARGE - 1:
            return True
    return False


def evaluate_move(board: Board, r: int, c: int, player: Player) -> MoveScore:
    """Scores adding one charge at (r, c) by simulating the resulting cascade on a copy."""
    resolution = resolve_chain(place(board, player, r, c, first_move=False))
    center = (board.size - 1) / 2
    distance = abs(r - center) + abs(c - center)
    return MoveScore(
        coord=(r, c),
        captures=resolution.captured_from(player.other()),
        explosions=resolution.explosions,
        threatened=is_threatened(board, r, c, player),
        position=board.size - distance,
    )


def choose_move(
    board: Board,
    player: Player,
    is_first_move: bool,
    rng: Optional[random.Random] = None,
) -> Coord:
    """Selects the AI's destination cell. Ties go to the first candidate in row-major order."""
    if is_first_move:
        move = choose_first_move(board, rng)
        logger.debug("%s opens at %s", player.name, move)
        return move
    candidates = board.owned_coords(player)
    if not candidates:
        raise InvariantViolation(f"{player.name} has no cells to play")
    scores = [evaluate_move(board, r, c, player) for r, c in candidates]
    # max() keeps the first of equal totals
    best = max(scores, key=lambda s: s.total)
    logger.debug("%s picks %s (score %.1f of %d candidates)", player.name, best.coord, best.total, len(candidates))
    return best.coord


def ai_pick_move(state: GameState, rng: Optional[random.Random] = None) -> Optional[Coord]:
    """Picks a move for whoever is to act in ``state``; None once the game is over."""
    if state.status.is_over:
        return None
    return choose_move(state.board, state.acting_player, state.status.is_first_move, rng)
