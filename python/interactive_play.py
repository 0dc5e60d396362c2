"""
Interactive terminal play for The Masterplan.
Plan up to three moves with the arrow keys (or WASD), confirm with SPACE.
"""

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render
from grid_types import InvalidLevelFormat, MissingMarker
from masterplan import Game, GameRules, InputEvent, Outcome

KEY_EVENTS = {
    readchar.key.UP: InputEvent.MOVE_UP,
    readchar.key.DOWN: InputEvent.MOVE_DOWN,
    readchar.key.LEFT: InputEvent.MOVE_LEFT,
    readchar.key.RIGHT: InputEvent.MOVE_RIGHT,
    "w": InputEvent.MOVE_UP,
    "s": InputEvent.MOVE_DOWN,
    "a": InputEvent.MOVE_LEFT,
    "d": InputEvent.MOVE_RIGHT,
    readchar.key.SPACE: InputEvent.CONFIRM,
    "r": InputEvent.RESET_LEVEL,
}


def key_to_event(key: str) -> InputEvent | None:
    """Map a key press to an input event; None for unbound keys."""
    event = KEY_EVENTS.get(key)
    if event is None and len(key) == 1:
        event = KEY_EVENTS.get(key.lower())
    return event


class InteractivePlay:
    """Live terminal display driven by single key presses."""

    def __init__(self, game: Game) -> None:
        self.game = game
        self.console = Console()
        self.status_message = "Ready"

    def generate_display(self) -> Panel:
        """Generate the current display with board and key help."""
        snapshot = self.game.snapshot()
        board = render(snapshot, self.game.rules.max_moves_per_turn)

        # Convert ANSI-colored board text to Rich Text
        body = Text.from_ansi(board)
        body.append("\n\n")
        body.append("Keys:\n", style="bold cyan")
        body.append("  Arrows / WASD - Plan a move\n")
        body.append("  SPACE - Confirm planned moves\n")
        body.append("  R - Reset level\n")
        body.append("  Q - Quit\n\n")

        body.append("─" * 40 + "\n", style="dim")
        body.append("Status: ", style="bold")
        body.append(self.status_message)

        border = {
            Outcome.IN_PROGRESS: "green",
            Outcome.VICTORY: "yellow",
            Outcome.DEFEAT: "red",
        }[snapshot.outcome]
        return Panel(body, title="The Masterplan", border_style=border, width=80)

    def run(self) -> None:
        """Run until the player quits."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()
                    if key.lower() == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break

                    event = key_to_event(key)
                    if event is None:
                        self.status_message = f"Unknown key: {repr(key)}"
                        continue
                    self.game.handle(event)
                    self.status_message = f"Turn {self.game.state.turn}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def main(argv: list[str]) -> int:
    """Entry point: [render] [level-number]."""
    render_only = bool(argv) and argv[0] == "render"
    if render_only:
        argv = argv[1:]
        # Configure logging to see level loading
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    level_idx = 0
    if argv:
        try:
            level_idx = int(argv[0]) - 1
        except ValueError:
            print(f"Not a level number: {argv[0]!r}")
            return 1

    try:
        game = Game(rules=GameRules(detect_outcome=True), level_index=level_idx)
    except (InvalidLevelFormat, MissingMarker) as e:
        print(f"Cannot load level {level_idx + 1}:\n{e}")
        return 1
    except ValueError as e:
        print(e)
        return 1

    if render_only:
        print(render(game.snapshot(), game.rules.max_moves_per_turn))
        return 0

    InteractivePlay(game).run()
    return 0


def cli() -> None:
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
