"""
ChromaClash core Python package.

Pure game logic for a two-player chain-reaction territory game on a 6x6 grid.
Modules:
- board.py: Player, Cell, Board, Coord
- state.py: Phase, GameStatus, Scores, GameState
- moves.py: legality, placement, chain-reaction resolution, turn finalisation
- ai.py: heuristic move evaluator
- session.py: GameSession, the single-writer owner of a game's state
"""
from .board import Board, Cell, Coord, Player, PLAYERS
from .constants import BOARD_SIZE, MAX_CHARGE
from .errors import EngineError, IllegalMove, InvariantViolation, OutOfBounds, Reason
from .state import GameState, GameStatus, Phase, Scores
from .moves import MoveResult, Resolution, Round, apply_move, legal_moves, resolve_chain
from .ai import ai_pick_move, choose_move, evaluate_move
from .session import GameSession

__all__ = [
    "Board", "Cell", "Coord", "Player", "PLAYERS",
    "BOARD_SIZE", "MAX_CHARGE",
    "EngineError", "IllegalMove", "InvariantViolation", "OutOfBounds", "Reason",
    "GameState", "GameStatus", "Phase", "Scores",
    "MoveResult", "Resolution", "Round", "apply_move", "legal_moves", "resolve_chain",
    "ai_pick_move", "choose_move", "evaluate_move",
    "GameSession",
]
