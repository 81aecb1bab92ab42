from __future__ import annotations

# Facade module that re-exports ChromaClash core functionality.
# The Flask app and tests import from here; single-responsibility modules
# live under chromaclash_core/*.

from chromaclash_core.board import Board, Cell, Coord, Player, PLAYERS, EMPTY
from chromaclash_core.constants import (
    BOARD_SIZE,
    MAX_CHARGE,
    FIRST_MOVE_CHARGE,
    FIRST_MOVE_TURNS,
    CAPTURE_WEIGHT,
    EXPLOSION_WEIGHT,
    THREAT_PENALTY,
    MAX_RESOLUTION_ROUNDS,
)
from chromaclash_core.errors import EngineError, IllegalMove, InvariantViolation, OutOfBounds, Reason
from chromaclash_core.state import GameState, GameStatus, Phase, Scores
from chromaclash_core.moves import (
    MoveResult,
    Resolution,
    Round,
    check_move,
    validate_move,
    legal_moves,
    place,
    explode_round,
    resolve_chain,
    finalize_turn,
    apply_move,
)
from chromaclash_core.ai import (
    MoveScore,
    choose_first_move,
    is_threatened,
    evaluate_move,
    choose_move,
    ai_pick_move,
)
from chromaclash_core.session import GameSession
