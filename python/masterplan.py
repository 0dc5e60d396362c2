"""
Turn resolution for The Masterplan.

A turn is: plan up to max_moves_per_turn moves, confirm, apply the player's
moves in order, then step every guard once along its route.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from grid_parser import locate_markers, parse_grid
from grid_types import Direction, Grid, InvalidLevelFormat, Position
from levels import LEVELS, GuardSpawn, Level

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameRules:
    """Rules governing turn behavior."""

    max_moves_per_turn: int = 3
    detect_outcome: bool = False  # Guard capture / goal reached end the level


class InputEvent(Enum):
    """Discrete input the core reacts to."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    CONFIRM = "confirm"
    RESET_LEVEL = "reset_level"


_GUARD_AXIS = (Direction.LEFT, Direction.RIGHT)

_MOVE_EVENTS = {
    InputEvent.MOVE_UP: Direction.UP,
    InputEvent.MOVE_DOWN: Direction.DOWN,
    InputEvent.MOVE_LEFT: Direction.LEFT,
    InputEvent.MOVE_RIGHT: Direction.RIGHT,
}


class PlanResult(Enum):
    """Result of asking the planner to queue a move."""

    QUEUED = "queued"  # Appended, room for more
    READY = "ready"  # Appended, queue now full
    REJECTED = "rejected"  # Queue was already full


class Notice(Enum):
    """Advisory or warning shown to the player for the current input cycle."""

    MOVES_READY = "moves_ready"
    QUEUE_FULL = "queue_full"
    NOTHING_PLANNED = "nothing_planned"
    LEVEL_OVER = "level_over"


class Outcome(Enum):
    IN_PROGRESS = "in_progress"
    VICTORY = "victory"
    DEFEAT = "defeat"


# =============================================================================
# Move Planner
# =============================================================================


class Planner:
    """
    Bounded FIFO of planned moves for the current turn.

    Moves can only be removed all at once, by reset().
    """

    def __init__(self, max_moves: int = 3) -> None:
        if max_moves < 1:
            raise ValueError(f"max_moves must be at least 1, got {max_moves}")
        self.max_moves = max_moves
        self._moves: list[Direction] = []
        self.notice: Notice | None = None

    def __len__(self) -> int:
        return len(self._moves)

    @property
    def moves(self) -> tuple[Direction, ...]:
        return tuple(self._moves)

    @property
    def is_full(self) -> bool:
        return len(self._moves) >= self.max_moves

    @property
    def message(self) -> str:
        """User-visible text for the current notice ("" when there is none)."""
        if self.notice is Notice.MOVES_READY:
            return f"{self.max_moves} moves used! Press SPACE to confirm."
        if self.notice is Notice.QUEUE_FULL:
            return f"You can't move any further, {self.max_moves} moves max!"
        if self.notice is Notice.NOTHING_PLANNED:
            return "No moves planned!"
        return ""

    def plan(self, direction: Direction) -> PlanResult:
        if self.is_full:
            self.notice = Notice.QUEUE_FULL
            return PlanResult.REJECTED

        self._moves.append(direction)
        self.notice = None
        if self.is_full:
            self.notice = Notice.MOVES_READY
            return PlanResult.READY
        return PlanResult.QUEUED

    def confirm(self) -> tuple[Direction, ...] | None:
        """Return the planned moves, or None (with a warning) if there are none."""
        if not self._moves:
            self.notice = Notice.NOTHING_PLANNED
            return None
        return self.moves

    def reset(self) -> None:
        self._moves.clear()
        self.notice = None


# =============================================================================
# Entity State
# =============================================================================


@dataclass
class Guard:
    """A patrolling guard: current position and a two-step route."""

    position: Position
    route: tuple[Direction, Direction]

    @classmethod
    def from_spawn(cls, spawn: GuardSpawn) -> Guard:
        return cls(spawn.position, spawn.route)

    def toggle_route(self) -> None:
        self.route = (self.route[1], self.route[0])


@dataclass
class GameState:
    """All mutable entities of the level being played."""

    level: Level
    grid: Grid
    player: Position
    goal: Position
    guards: list[Guard] = field(default_factory=list)
    turn: int = 0
    outcome: Outcome = Outcome.IN_PROGRESS


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the game for renderers."""

    level_name: str
    grid: Grid
    player: Position
    goal: Position
    guards: tuple[Position, ...]
    planned: tuple[Direction, ...]
    message: str
    outcome: Outcome
    turn: int


def build_state(level: Level) -> GameState:
    """
    Build the initial state of a level.

    Raises:
        InvalidLevelFormat: Malformed rows, duplicate markers or a guard
            spawning outside the grid
        MissingMarker: No player start or no goal
    """
    grid = parse_grid(level.rows)
    start, goal = locate_markers(grid)

    for i, spawn in enumerate(level.guards):
        if len(spawn.route) != 2:
            raise InvalidLevelFormat(
                f"Guard {i + 1} in '{level.name}' has a route of {len(spawn.route)} "
                f"directions, expected 2"
            )
        if not grid.in_bounds(spawn.position.x, spawn.position.y):
            raise InvalidLevelFormat(
                f"Guard {i + 1} in '{level.name}' spawns at "
                f"({spawn.position.x}, {spawn.position.y}), outside the "
                f"{grid.width}x{grid.height} grid"
            )

    return GameState(
        level=level,
        grid=grid,
        player=start,
        goal=goal,
        guards=[Guard.from_spawn(spawn) for spawn in level.guards],
    )


# =============================================================================
# Turn Executor
# =============================================================================


def move_player(state: GameState, direction: Direction) -> bool:
    """Step the player once if the destination is passable. Returns True if moved."""
    candidate = state.player.step(direction)
    if not state.grid.passable(candidate.x, candidate.y):
        logger.debug(
            "Dropped move %s: (%d, %d) is blocked", direction.value, candidate.x, candidate.y
        )
        return False
    state.player = candidate
    return True


def step_guard(guard: Guard, grid: Grid) -> bool:
    """
    Advance a guard one step along route[0], then swap its route.

    Guards patrol horizontally: only LEFT and RIGHT move them, and only the
    grid edge stops them, not walls. The route is swapped even when the guard
    did not move. Returns True if the guard moved.
    """
    direction = guard.route[0]
    candidate = guard.position.step(direction)
    moved = direction in _GUARD_AXIS and grid.in_bounds(candidate.x, candidate.y)
    if moved:
        guard.position = candidate
    guard.toggle_route()
    return moved


def evaluate_outcome(state: GameState) -> Outcome:
    """Capture takes precedence over reaching the goal."""
    if any(guard.position == state.player for guard in state.guards):
        return Outcome.DEFEAT
    if state.player == state.goal:
        return Outcome.VICTORY
    return Outcome.IN_PROGRESS


def resolve_turn(planner: Planner, state: GameState, rules: GameRules | None = None) -> None:
    """
    Execute the planned moves, then move every guard once.

    All player moves are applied, in planned order, before any guard moves.
    The planner is always cleared at the end.
    """
    if rules is None:
        rules = GameRules()

    for direction in planner.moves:
        move_player(state, direction)

    for guard in state.guards:
        step_guard(guard, state.grid)

    state.turn += 1
    if rules.detect_outcome:
        state.outcome = evaluate_outcome(state)

    logger.debug(
        "Turn %d: player at (%d, %d), guards at %s, outcome %s",
        state.turn,
        state.player.x,
        state.player.y,
        [(g.position.x, g.position.y) for g in state.guards],
        state.outcome.value,
    )
    planner.reset()


# =============================================================================
# Game
# =============================================================================


class Game:
    """
    Owns the game state and planner; the single entry point for input.

    Usage:
        game = Game()
        game.handle(InputEvent.MOVE_RIGHT)
        game.handle(InputEvent.CONFIRM)
        view = game.snapshot()
    """

    def __init__(
        self,
        levels: list[Level] | None = None,
        rules: GameRules | None = None,
        level_index: int = 0,
    ) -> None:
        self.levels = list(LEVELS if levels is None else levels)
        self.rules = rules or GameRules()
        self.planner = Planner(self.rules.max_moves_per_turn)
        self.level_index = level_index
        self.state = self._load(level_index)

    def _load(self, index: int) -> GameState:
        if not (0 <= index < len(self.levels)):
            raise ValueError(
                f"Level {index + 1} not found. Available: 1-{len(self.levels)}"
            )
        state = build_state(self.levels[index])
        logger.info(
            "Loaded '%s': %dx%d, player at (%d, %d), goal at (%d, %d), %d guard(s)",
            state.level.name,
            state.grid.width,
            state.grid.height,
            state.player.x,
            state.player.y,
            state.goal.x,
            state.goal.y,
            len(state.guards),
        )
        return state

    def load_level(self, index: int) -> None:
        """
        Switch to level *index* (0-based) in its initial state.

        On a load error the current state is kept and the error propagates.
        """
        state = self._load(index)
        self.state = state
        self.level_index = index
        self.planner.reset()

    def reset(self) -> None:
        """Restore the current level to its initial state."""
        self.load_level(self.level_index)

    @property
    def message(self) -> str:
        if self.planner.notice is Notice.LEVEL_OVER:
            if self.state.outcome is Outcome.VICTORY:
                return "You reached the goal! Press R to play again."
            return "Caught by a guard! Press R to retry."
        return self.planner.message

    def plan(self, direction: Direction) -> PlanResult:
        if self.state.outcome is not Outcome.IN_PROGRESS:
            self.planner.notice = Notice.LEVEL_OVER
            return PlanResult.REJECTED
        return self.planner.plan(direction)

    def confirm(self) -> bool:
        """Resolve the turn if anything is planned. Returns True if a turn ran."""
        if self.state.outcome is not Outcome.IN_PROGRESS:
            self.planner.notice = Notice.LEVEL_OVER
            return False
        if self.planner.confirm() is None:
            return False
        resolve_turn(self.planner, self.state, self.rules)
        if self.state.outcome is not Outcome.IN_PROGRESS:
            logger.info("'%s' ended: %s", self.state.level.name, self.state.outcome.value)
            self.planner.notice = Notice.LEVEL_OVER
        return True

    def handle(self, event: InputEvent) -> None:
        if event in _MOVE_EVENTS:
            self.plan(_MOVE_EVENTS[event])
        elif event is InputEvent.CONFIRM:
            self.confirm()
        elif event is InputEvent.RESET_LEVEL:
            self.reset()

    def snapshot(self) -> Snapshot:
        return Snapshot(
            level_name=self.state.level.name,
            grid=self.state.grid,
            player=self.state.player,
            goal=self.state.goal,
            guards=tuple(guard.position for guard in self.state.guards),
            planned=self.planner.moves,
            message=self.message,
            outcome=self.state.outcome,
            turn=self.state.turn,
        )
