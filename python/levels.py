"""
Built-in levels.

Each level is its grid text plus the guards that patrol it. Levels that do
not list guards get DEFAULT_GUARDS.
"""

from __future__ import annotations

from dataclasses import dataclass

from grid_types import Direction, Position


@dataclass(frozen=True)
class GuardSpawn:
    """
    Where a guard starts and the two directions it alternates between.

    Guards only walk LEFT or RIGHT; an UP or DOWN turn leaves them in place.
    """

    position: Position
    route: tuple[Direction, Direction]


DEFAULT_GUARDS: tuple[GuardSpawn, ...] = (
    GuardSpawn(Position(5, 5), (Direction.RIGHT, Direction.LEFT)),
    GuardSpawn(Position(8, 2), (Direction.LEFT, Direction.RIGHT)),
)


@dataclass(frozen=True)
class Level:
    """A level definition: name, grid rows and guard spawns."""

    name: str
    rows: tuple[str, ...]
    guards: tuple[GuardSpawn, ...] = DEFAULT_GUARDS


LEVELS: list[Level] = [
    Level(
        "Level 1",
        (
            "P........G",
            ".#####....",
            "...#......",
            "..###.....",
            "..........",
            "....#####.",
            "...#......",
            "...#......",
            "..........",
            "....#####.",
        ),
    ),
    Level(
        "Level 2",
        (
            "P....#####",
            ".....#...G",
            ".....#....",
            ".....#....",
            "..........",
            "####......",
            "..........",
            "...#####..",
            "..........",
            "..........",
        ),
    ),
]
