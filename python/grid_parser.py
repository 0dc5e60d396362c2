"""
Level text parsing for the masterplan grid.

Provides two input formats:
1. Standard format: a sequence of row strings, one character per cell
2. Concise format: a single string with rows separated by |
"""

from __future__ import annotations

from grid_types import Cell, Grid, InvalidLevelFormat, MissingMarker, Position

__all__ = ["parse_grid", "parse_grid_concise", "locate_markers"]

_VALID_CHARS = "".join(cell.value for cell in Cell)


def parse_grid(rows: list[str] | tuple[str, ...]) -> Grid:
    """
    Parse level rows into a Grid.

    Format:
    - One string per row, top row first
    - One character per cell:
      * '.': floor
      * '#': wall
      * 'P': player start
      * 'G': goal
    - All rows must have the same length

    Example:
        ["P.#", "..G"]
        Creates a 3x2 grid with START at (1, 1) and GOAL at (3, 2).

    Args:
        rows: The level rows

    Returns:
        The parsed Grid

    Raises:
        InvalidLevelFormat: On an empty level, an empty or irregular row, or an
            unknown character
    """
    if not rows:
        raise InvalidLevelFormat("Empty level: at least one row is required")

    cols = len(rows[0])
    parsed: list[tuple[Cell, ...]] = []

    for row_idx, row_str in enumerate(rows):
        if not row_str:
            raise InvalidLevelFormat(f"Empty row at row {row_idx + 1}")

        cells: list[Cell] = []
        for col_idx, char in enumerate(row_str):
            if char not in _VALID_CHARS:
                raise InvalidLevelFormat(
                    f"Invalid character '{char}' in level\n"
                    f"  Row {row_idx + 1}: \"{row_str}\"\n"
                    f"  Position: column {col_idx + 1}\n"
                    f"  Valid characters: '.' floor, '#' wall, 'P' start, 'G' goal"
                )
            cells.append(Cell(char))
        parsed.append(tuple(cells))

    # Validate all rows have same length
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in level\n"
            f"  Expected: {cols} columns (from row 1)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx + 1}: {actual_cols} columns - \"{rows[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise InvalidLevelFormat(error_msg)

    return Grid(tuple(parsed))


def parse_grid_concise(definition: str) -> Grid:
    """
    Parse a grid from a single string with rows separated by |.

    Surrounding whitespace is ignored, so "P..|.#.|..G" and "  P..|.#.|..G\\n"
    are the same grid.
    """
    return parse_grid(definition.strip().split("|"))


def locate_markers(grid: Grid) -> tuple[Position, Position]:
    """
    Find the START and GOAL positions of a grid.

    Returns:
        (start, goal)

    Raises:
        MissingMarker: If there is no START or no GOAL
        InvalidLevelFormat: If either marker appears more than once
    """
    starts = grid.find(Cell.START)
    goals = grid.find(Cell.GOAL)

    if len(starts) > 1:
        raise InvalidLevelFormat(
            "Multiple player starts: " + ", ".join(f"({p.x}, {p.y})" for p in starts)
        )
    if len(goals) > 1:
        raise InvalidLevelFormat(
            "Multiple goals: " + ", ".join(f"({p.x}, {p.y})" for p in goals)
        )

    if not starts:
        raise MissingMarker(Cell.START, "Level has no player start ('P')")
    if not goals:
        raise MissingMarker(Cell.GOAL, "Level has no goal ('G')")
    return starts[0], goals[0]
