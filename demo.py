"""
Interactive demo for the slot win engine.
Spin random grids or force a win of each category, and see the detected paths.
"""

import logging
import random
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_wins
from force_win import ForceWinController, MutableGrid
from grid_parser import parse_grid_concise
from win_engine import compute_wins
from win_types import DEFAULT_SHAPE, SYMBOL_NAMES, GridShape, WinsResult


def short_label(symbol: str) -> str:
    """'symbol3' -> '3'; other labels are shown as-is."""
    return symbol.removeprefix("symbol") or symbol


class SpinDemo:
    """Interactive demo for win detection."""

    def __init__(
        self,
        grid: MutableGrid,
        shape: GridShape = DEFAULT_SHAPE,
        rng: random.Random | None = None,
    ) -> None:
        self.shape = shape
        self.grid = grid
        self.original_grid = [list(row) for row in grid]  # Copy of the starting grid for reset
        self.controller = ForceWinController(shape, SYMBOL_NAMES, rng)
        self.console = Console()
        self.status_message = "Ready"

    @property
    def wins(self) -> WinsResult:
        return compute_wins(self.grid, self.shape)

    def generate_display(self) -> Panel:
        """Generate the current display with grid, wins and status."""
        wins = self.wins
        grid_text = render_wins(self.grid, wins, title="reels", label_fn=short_label)

        status = Text()
        status.append("Winning paths: ", style="bold")
        status.append(f"{wins.total}\n\n")

        # Convert ANSI-colored grid text to Rich Text properly
        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  SPACE - Random spin\n")
        status.append("  H - Force straight win (alternates row/column)\n")
        status.append("  D - Force diagonal win\n")
        status.append("  C - Force connecting path win\n")
        status.append("  R - Reset to original grid\n")
        status.append("  Q - Quit\n\n")

        # Status line at the bottom
        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Slot Win Demo", border_style="green", width=80)

    def spin(self) -> None:
        self.grid = self.controller.random_spin()
        self.status_message = f"Spun: {self.wins.total} winning paths"

    def force(self, kind: str) -> None:
        """Replace the grid with a forced win of the given kind."""
        try:
            if kind == "straight":
                self.grid = self.controller.force_straight()
            elif kind == "diagonal":
                self.grid = self.controller.force_diagonal()
            else:
                self.grid = self.controller.force_connecting()
        except (ValueError, RuntimeError) as e:
            self.status_message = f"✗ Could not force {kind} win: {e}"
            return
        self.status_message = f"✓ Forced {kind} win"

    def reset_grid(self) -> None:
        """Reset the grid to its original state."""
        self.grid = [list(row) for row in self.original_grid]
        self.status_message = "Grid reset to original state"

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key == ' ':
                        self.spin()
                    elif key.lower() == 'h':
                        self.force("straight")
                    elif key.lower() == 'd':
                        self.force("diagonal")
                    elif key.lower() == 'c':
                        self.force("connecting")
                    elif key.lower() == 'r':
                        self.reset_grid()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


LAYOUTS = dict(
    row = 'AAAAAA|BCDEAB|BCDEBC|BCDEAB',
    column = 'XABCCB|XCDAEF|XEFDFE|XGHEAA',
    diagonal = 'QWERAB|AQSDEF|ZXQVCD|ZXFQCD',
    zigzag = 'AZBCDE|FGZHIJ|KZLMNO|PQZRST',
    mixed = 'AAAAAA|BBBBBB|CDEACG|ABFECG',
)


def load_layout(name: str) -> MutableGrid:
    return [list(row) for row in parse_grid_concise(LAYOUTS[name], shape=DEFAULT_SHAPE)]


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == 'once':
        # Non-interactive: render one layout and its wins
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

        name = sys.argv[2] if len(sys.argv) > 2 else 'zigzag'
        grid = load_layout(name)
        print(render_wins(grid, compute_wins(grid), title=name))
    else:
        demo = SpinDemo(load_layout(sys.argv[1] if len(sys.argv) > 1 else 'mixed'))
        demo.run()
