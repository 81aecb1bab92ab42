from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .board import Board, Cell, Coord, Player, EMPTY
from .constants import FIRST_MOVE_CHARGE, FIRST_MOVE_TURNS, MAX_RESOLUTION_ROUNDS
from .errors import IllegalMove, InvariantViolation, Reason
from .state import GameState, GameStatus, Phase, Scores


@dataclass(frozen=True)
class Round:
    """One sweep of simultaneous explosions."""
    board: Board                                   # board after the round
    exploded: Tuple[Coord, ...]                    # row-major
    flips: Tuple[Tuple[Coord, Player], ...]        # (cell, previous owner) for every owner change between players


@dataclass(frozen=True)
class Resolution:
    board: Board
    rounds: Tuple[Round, ...]

    @property
    def explosions(self) -> int:
        return sum(len(rnd.exploded) for rnd in self.rounds)

    def captured_from(self, player: Player) -> int:
        """Number of times a cell owned by ``player`` changed hands."""
        return sum(1 for rnd in self.rounds for _, prev in rnd.flips if prev == player)


@dataclass(frozen=True)
class MoveResult:
    state: GameState
    frames: Tuple[GameState, ...]  # Resolving snapshots: after placement, then one per round


def check_move(state: GameState, player: object, r: object, c: object) -> Optional[Reason]:
    """Returns why a move would be rejected, or None when it is legal."""
    if not isinstance(r, int) or not isinstance(c, int) or isinstance(r, bool) or isinstance(c, bool):
        return Reason.MALFORMED
    try:
        player = Player(player)
    except ValueError:
        return Reason.MALFORMED
    status = state.status
    if status.phase is Phase.GAME_OVER:
        return Reason.GAME_OVER
    if status.phase is Phase.RESOLVING:
        return Reason.RESOLVING
    if not state.board.in_bounds(r, c):
        return Reason.OUT_OF_BOUNDS
    cell = state.board.cell_at(r, c)
    if status.phase is Phase.FIRST_MOVE:
        if player != status.player:
            return Reason.WRONG_PLAYER
        if cell.owner is not None:
            return Reason.OCCUPIED
        return None
    if player != state.current_player:
        return Reason.WRONG_PLAYER
    if cell.owner != player:
        return Reason.NOT_OWNED
    return None


def validate_move(state: GameState, player: object, r: object, c: object) -> None:
    reason = check_move(state, player, r, c)
    if reason is not None:
        raise IllegalMove(reason, f"move {player!r} at ({r!r}, {c!r}) rejected: {reason.value.replace('_', ' ')}")


def legal_moves(state: GameState) -> List[Coord]:
    """All cells the player to move may act on, row-major."""
    if state.status.phase in (Phase.GAME_OVER, Phase.RESOLVING):
        return []
    player = state.acting_player
    return [rc for rc in state.board.coords() if check_move(state, player, *rc) is None]


def place(board: Board, player: Player, r: int, c: int, first_move: bool) -> Board:
    """A first move seeds a primed piece; later moves add one charge to an owned cell."""
    if first_move:
        return board.with_cell(r, c, Cell(player, FIRST_MOVE_CHARGE))
    cell = board.cell_at(r, c)
    return board.with_cell(r, c, Cell(cell.owner or player, cell.charge + 1))


def explode_round(board: Board) -> Optional[Round]:
    """Explodes every unstable cell at once. Returns None when the board is already stable."""
    exploding = board.unstable_coords()
    if not exploding:
        return None
    owners: List[Optional[Player]] = [cell.owner for cell in board.grid]
    charges: List[int] = [cell.charge for cell in board.grid]
    for r, c in exploding:
        i = board.index(r, c)
        owners[i] = None
        charges[i] = 0
    # Every exploder's owner comes from the pre-round board; last hit wins the neighbour.
    for r, c in exploding:
        owner = board.cell_at(r, c).owner
        for nr, nc in board.neighbors(r, c):
            i = board.index(nr, nc)
            owners[i] = owner
            charges[i] += 1
    after = Board(board.size, tuple(
        Cell(o, ch) if ch else EMPTY for o, ch in zip(owners, charges)
    ))
    flips: List[Tuple[Coord, Player]] = []
    for rc in board.coords():
        prev = board.cell_at(*rc).owner
        now = after.cell_at(*rc).owner
        if prev is not None and now is not None and prev != now:
            flips.append((rc, prev))
    return Round(board=after, exploded=tuple(exploding), flips=tuple(flips))


def resolve_chain(board: Board, max_rounds: Optional[int] = None) -> Resolution:
    """Runs explosion rounds until the board is stable. Never touches the input board."""
    limit = MAX_RESOLUTION_ROUNDS if max_rounds is None else max_rounds
    rounds: List[Round] = []
    current = board
    while True:
        rnd = explode_round(current)
        if rnd is None:
            return Resolution(board=current, rounds=tuple(rounds))
        if len(rounds) >= limit:
            raise InvariantViolation(f"chain reaction did not settle within {limit} rounds")
        rounds.append(rnd)
        current = rnd.board


def finalize_turn(state: GameState, board: Board) -> GameState:
    """Scores the settled board, detects a winner, or hands the turn to the other player."""
    scores = Scores.of(board)
    next_count = state.turn_count + 1
    if next_count > 1:
        total = board.size * board.size
        winner: Optional[Player] = None
        if scores.p1 == total:
            winner = Player.P1
        elif scores.p2 == total:
            winner = Player.P2
        elif scores.p1 == 0 and scores.p2 > 0:
            winner = Player.P2
        elif scores.p2 == 0 and scores.p1 > 0:
            winner = Player.P1
        if winner is not None:
            return replace(state, board=board, scores=scores, status=GameStatus.game_over(winner))
    nxt = state.current_player.other()
    status = GameStatus.first_move(nxt) if next_count < FIRST_MOVE_TURNS else GameStatus.playing()
    return GameState(board=board, current_player=nxt, status=status, scores=scores, turn_count=next_count)


def apply_move(state: GameState, player: object, r: object, c: object) -> MoveResult:
    """Validates and plays a move, resolving every chain reaction before returning."""
    validate_move(state, player, r, c)
    mover = Player(player)
    placed = place(state.board, mover, r, c, state.status.is_first_move)
    resolving = state.with_board(placed, GameStatus.resolving())
    resolution = resolve_chain(placed)
    frames = [resolving] + [resolving.with_board(rnd.board) for rnd in resolution.rounds]
    final = finalize_turn(state, resolution.board)
    if not final.board.is_stable():
        raise InvariantViolation("board left unstable after resolution")
    return MoveResult(state=final, frames=tuple(frames))
