"""
Shared type definitions for the masterplan grid.

Positions are 1-indexed: (1, 1) is the top-left cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Cardinal direction for a single step."""

    UP = "up"  # decreasing y
    DOWN = "down"  # increasing y
    LEFT = "left"  # decreasing x
    RIGHT = "right"  # increasing x

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class Cell(Enum):
    """A grid cell, keyed by its level-text character."""

    FLOOR = "."
    WALL = "#"
    START = "P"
    GOAL = "G"


# =============================================================================
# Errors
# =============================================================================


class InvalidLevelFormat(ValueError):
    """Level text (or guard data) that cannot be turned into a grid."""


class MissingMarker(ValueError):
    """A level without its START or GOAL marker."""

    def __init__(self, cell: Cell, message: str) -> None:
        super().__init__(message)
        self.cell = cell


# =============================================================================
# Grid Definition Types
# =============================================================================


@dataclass(frozen=True)
class Position:
    """A cell position on the grid."""

    x: int
    y: int

    def step(self, direction: Direction) -> Position:
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Grid:
    """A 2D grid of cells, rows top to bottom."""

    cells: tuple[tuple[Cell, ...], ...]

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def in_bounds(self, x: int, y: int) -> bool:
        return 1 <= x <= self.width and 1 <= y <= self.height

    def cell_at(self, x: int, y: int) -> Cell:
        """Return the cell at (x, y); raises IndexError outside the grid."""
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside the {self.width}x{self.height} grid")
        return self.cells[y - 1][x - 1]

    def passable(self, x: int, y: int) -> bool:
        """True when (x, y) is inside the grid and not a wall."""
        if not self.in_bounds(x, y):
            return False
        return self.cells[y - 1][x - 1] is not Cell.WALL

    def find(self, cell: Cell) -> list[Position]:
        """All positions holding *cell*, in row-major order."""
        return [
            Position(x, y)
            for y, row in enumerate(self.cells, start=1)
            for x, c in enumerate(row, start=1)
            if c is cell
        ]
