from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional, Tuple

from .constants import BOARD_SIZE, MAX_CHARGE
from .errors import InvariantViolation, OutOfBounds

Coord = Tuple[int, int]

# Orthogonal offsets: up, down, left, right.
_OFFSETS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Player(IntEnum):
    P1 = 1
    P2 = 2

    def other(self) -> 'Player':
        return Player.P2 if self is Player.P1 else Player.P1


PLAYERS: Tuple[Player, ...] = (Player.P1, Player.P2)


@dataclass(frozen=True)
class Cell:
    """One grid position. An empty cell has no owner and zero charge."""
    owner: Optional[Player] = None
    charge: int = 0

    def __post_init__(self) -> None:
        if self.charge < 0 or (self.owner is None) != (self.charge == 0):
            raise InvariantViolation(f"inconsistent cell: owner={self.owner}, charge={self.charge}")

    @property
    def is_empty(self) -> bool:
        return self.owner is None


EMPTY = Cell()


@dataclass(frozen=True)
class Board:
    """Square grid of cells. Every transform returns a new Board."""
    size: int
    grid: Tuple[Cell, ...]  # row-major, length == size * size

    @classmethod
    def empty(cls, size: int = BOARD_SIZE) -> 'Board':
        return cls(size=size, grid=(EMPTY,) * (size * size))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Cell]]) -> 'Board':
        """Builds a board from nested rows; every row must be as long as the row count."""
        flat: List[Cell] = []
        rows_l = [list(r) for r in rows]
        size = len(rows_l)
        for row in rows_l:
            if len(row) != size:
                raise ValueError('Board rows must form a square grid')
            flat.extend(row)
        return cls(size=size, grid=tuple(flat))

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.size and 0 <= c < self.size

    def index(self, r: int, c: int) -> int:
        """Calculates the 1D index for a given row and column."""
        if not self.in_bounds(r, c):
            raise OutOfBounds(r, c, self.size)
        return r * self.size + c

    def cell_at(self, r: int, c: int) -> Cell:
        return self.grid[self.index(r, c)]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates in row-major order."""
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def neighbors(self, r: int, c: int) -> List[Coord]:
        """In-bounds orthogonal neighbours, ordered up, down, left, right."""
        out: List[Coord] = []
        for dr, dc in _OFFSETS:
            nr, nc = r + dr, c + dc
            if self.in_bounds(nr, nc):
                out.append((nr, nc))
        return out

    def is_edge(self, r: int, c: int) -> bool:
        last = self.size - 1
        return r in (0, last) or c in (0, last)

    def with_cell(self, r: int, c: int, cell: Cell) -> 'Board':
        cells = list(self.grid)
        cells[self.index(r, c)] = cell
        return Board(self.size, tuple(cells))

    def empty_coords(self) -> List[Coord]:
        return [rc for rc in self.coords() if self.cell_at(*rc).owner is None]

    def owned_coords(self, player: Player) -> List[Coord]:
        return [rc for rc in self.coords() if self.cell_at(*rc).owner == player]

    def count_owned(self, player: Player) -> int:
        return sum(1 for cell in self.grid if cell.owner == player)

    def total_charge(self) -> int:
        return sum(cell.charge for cell in self.grid)

    def unstable_coords(self) -> List[Coord]:
        """Cells at or above the explosion threshold, row-major."""
        return [rc for rc in self.coords() if self.cell_at(*rc).charge >= MAX_CHARGE]

    def is_stable(self) -> bool:
        return all(cell.charge < MAX_CHARGE for cell in self.grid)

    def rows(self) -> List[List[Cell]]:
        return [list(self.grid[r * self.size:(r + 1) * self.size]) for r in range(self.size)]

    def pretty(self) -> str:
        """Human-readable grid: '.' for empty, 'a'/'b' plus the charge for P1/P2."""
        lines: List[str] = []
        for row in self.rows():
            out: List[str] = []
            for cell in row:
                if cell.owner is None:
                    out.append(" .")
                else:
                    out.append(("a" if cell.owner == Player.P1 else "b") + str(cell.charge))
            lines.append(" ".join(out))
        return "\n".join(lines)
