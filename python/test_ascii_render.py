"""Tests for ascii_render and the interactive front-end helpers."""

import logging
from contextlib import contextmanager
from typing import Iterator

import pytest
import readchar

from ascii_render import ARROWS, GUARD_CHAR, PLAYER_CHAR, render, render_grid, render_planned_moves
from grid_types import Direction, Position
from interactive_play import key_to_event, main
from levels import GuardSpawn, Level
from masterplan import Game, GameRules, InputEvent


class TestRenderGrid:
    """Tests for drawing the board."""

    def test_one_line_per_row_plus_borders(self) -> None:
        """A 10x10 level renders as 12 lines."""
        lines = render_grid(Game().snapshot())
        assert len(lines) == 12
        assert "Level 1" in lines[0]
        assert lines[-1].startswith("└")

    def test_entities_drawn(self) -> None:
        """Player, guards, goal and walls all appear."""
        text = "\n".join(render_grid(Game().snapshot()))
        assert PLAYER_CHAR in text
        assert GUARD_CHAR in text
        assert "G" in text
        assert "#" in text

    def test_player_row(self) -> None:
        """The player is drawn on its own row only."""
        lines = render_grid(Game().snapshot(), cell_width=1)
        assert PLAYER_CHAR in lines[1]
        assert all(PLAYER_CHAR not in line for line in lines[2:])

    def test_long_title_falls_back_to_plain_border(self) -> None:
        """A name wider than the grid is left out of the border."""
        level = Level("A very long level name indeed", ("PG",), ())
        lines = render_grid(Game(levels=[level]).snapshot(), cell_width=1)
        assert lines[0] == "┌──┐"


class TestRender:
    """Tests for a full frame."""

    def test_plan_arrows(self) -> None:
        """Planned moves show as arrows with placeholders for unused slots."""
        line = render_planned_moves((Direction.RIGHT, Direction.UP), 3)
        assert line.startswith("Plan: ")
        assert ARROWS[Direction.RIGHT] in line
        assert ARROWS[Direction.UP] in line
        assert "·" in line

    def test_frame_shows_message(self) -> None:
        """The current warning is part of the frame."""
        game = Game()
        game.confirm()
        frame = render(game.snapshot())
        assert "No moves planned!" in frame
        assert "Turn: 0" in frame

    def test_frame_shows_defeat(self) -> None:
        """A lost level is labelled."""
        spawn = GuardSpawn(Position(3, 1), (Direction.LEFT, Direction.RIGHT))
        level = Level("t", ("P..", "..G"), (spawn,))
        game = Game(levels=[level], rules=GameRules(detect_outcome=True))
        game.plan(Direction.RIGHT)
        game.confirm()

        frame = render(game.snapshot())
        assert "DEFEAT" in frame
        assert "Caught by a guard!" in frame

    def test_frame_shows_victory(self) -> None:
        """A won level is labelled."""
        game = Game(levels=[Level("t", ("PG",), ())], rules=GameRules(detect_outcome=True))
        game.plan(Direction.RIGHT)
        game.confirm()
        assert "VICTORY" in render(game.snapshot())


class TestKeyMapping:
    """Tests for turning key presses into input events."""

    def test_arrow_keys(self) -> None:
        """Arrow keys plan moves."""
        assert key_to_event(readchar.key.UP) is InputEvent.MOVE_UP
        assert key_to_event(readchar.key.LEFT) is InputEvent.MOVE_LEFT

    def test_wasd_any_case(self) -> None:
        """WASD works with or without shift."""
        assert key_to_event("d") is InputEvent.MOVE_RIGHT
        assert key_to_event("S") is InputEvent.MOVE_DOWN

    def test_confirm_and_reset(self) -> None:
        """SPACE confirms, R resets."""
        assert key_to_event(readchar.key.SPACE) is InputEvent.CONFIRM
        assert key_to_event("R") is InputEvent.RESET_LEVEL

    def test_unbound_key(self) -> None:
        """Other keys map to nothing."""
        assert key_to_event("x") is None


@contextmanager
def preserved_root_logger() -> Iterator[None]:
    """Undo any handlers or level change made to the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        yield
    finally:
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)


class TestMain:
    """Tests for the command-line entry point."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self) -> Iterator[None]:
        """'render' calls logging.basicConfig; keep it out of other tests."""
        with preserved_root_logger():
            yield

    def test_render_logging_is_undone(self) -> None:
        """The root logger is back to its earlier state after 'render'."""
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level

        with preserved_root_logger():
            assert main(["render", "1"]) == 0

        assert root.handlers == handlers
        assert root.level == level

    def test_render_initial_board(self, capsys) -> None:
        """'render' prints the starting board and exits cleanly."""
        assert main(["render", "2"]) == 0
        out = capsys.readouterr().out
        assert "Level 2" in out
        assert "Plan:" in out

    def test_unknown_level(self, capsys) -> None:
        """A level number past the list is reported."""
        assert main(["render", "9"]) == 1
        assert "Level 9 not found" in capsys.readouterr().out

    def test_bad_level_argument(self, capsys) -> None:
        """A non-numeric level is reported."""
        assert main(["render", "abc"]) == 1
        assert "Not a level number" in capsys.readouterr().out
