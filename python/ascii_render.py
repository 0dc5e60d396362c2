"""
ASCII rendering for The Masterplan.

Draws a game snapshot as a boxed character grid with the planned moves and
the current message underneath. Reads snapshots only; never touches the game.
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_types import Cell, Direction, Position
from masterplan import Outcome, Snapshot

logger = logging.getLogger(__name__)

ARROWS = {
    Direction.UP: "↑",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
    Direction.RIGHT: "→",
}

PLAYER_CHAR = "@"
GUARD_CHAR = "X"


def cell_glyph(
    snapshot: Snapshot, x: int, y: int, guards: set[Position]
) -> tuple[str, Callable[[str], str]]:
    """Character and colorizer for one cell; entities are drawn over the floor."""
    pos = Position(x, y)
    if pos == snapshot.player:
        # Caught: player and guard on the same cell
        if pos in guards:
            return PLAYER_CHAR, chalk.bgWhite.red
        return PLAYER_CHAR, chalk.greenBright
    if pos in guards:
        return GUARD_CHAR, chalk.redBright
    if pos == snapshot.goal:
        return "G", chalk.yellowBright

    cell = snapshot.grid.cell_at(x, y)
    if cell is Cell.WALL:
        return "#", chalk.blue
    return ".", chalk.white


def render_grid(snapshot: Snapshot, cell_width: int = 3) -> list[str]:
    """
    Render the grid as a bordered block.

    Args:
        snapshot: The game snapshot to draw
        cell_width: Characters per cell (default 3)

    Returns:
        List of strings representing the rendered grid lines
    """
    grid = snapshot.grid
    guards = set(snapshot.guards)
    inner_width = grid.width * cell_width

    title = f" {snapshot.level_name} "
    if len(title) <= inner_width:
        title_start = (inner_width - len(title)) // 2
        top = "┌" + "─" * title_start + title + "─" * (inner_width - title_start - len(title)) + "┐"
    else:
        top = "┌" + "─" * inner_width + "┐"

    lines = [top]
    for y in range(1, grid.height + 1):
        parts = ["│"]
        for x in range(1, grid.width + 1):
            char, colorize = cell_glyph(snapshot, x, y, guards)
            content = char if cell_width == 1 else char.center(cell_width)
            parts.append(colorize(content))
        parts.append("│")
        lines.append("".join(parts))
    lines.append("└" + "─" * inner_width + "┘")
    return lines


def render_planned_moves(planned: tuple[Direction, ...], max_moves: int = 3) -> str:
    """Planned moves as arrows, with a placeholder for each unused slot."""
    slots = [chalk.cyan(ARROWS[d]) for d in planned]
    slots += [chalk.white("·")] * max(0, max_moves - len(planned))
    return "Plan: " + " ".join(slots)


def render(snapshot: Snapshot, max_moves: int = 3, cell_width: int = 3) -> str:
    """Render a full frame: grid, plan, status and message."""
    lines = render_grid(snapshot, cell_width)
    lines.append("")
    lines.append(render_planned_moves(snapshot.planned, max_moves))

    status = f"Turn: {snapshot.turn}"
    if snapshot.outcome is Outcome.VICTORY:
        status += "  " + chalk.greenBright("VICTORY")
    elif snapshot.outcome is Outcome.DEFEAT:
        status += "  " + chalk.redBright("DEFEAT")
    lines.append(status)

    if snapshot.message:
        lines.append(chalk.red(snapshot.message))

    logger.debug("Rendered %d lines for '%s'", len(lines), snapshot.level_name)
    return "\n".join(lines)
