from __future__ import annotations

# Board geometry and charge thresholds.
BOARD_SIZE = 6
MAX_CHARGE = 4
FIRST_MOVE_CHARGE = MAX_CHARGE - 1

# Each player places exactly one primed piece before normal play starts.
FIRST_MOVE_TURNS = 2

# Evaluator weights.
CAPTURE_WEIGHT = 10
EXPLOSION_WEIGHT = 5
THREAT_PENALTY = 15

# Upper bound on explosion rounds in a single resolution. A correct rules
# engine stabilises long before this; hitting it means the board is broken.
MAX_RESOLUTION_ROUNDS = BOARD_SIZE * BOARD_SIZE * MAX_CHARGE * 4
