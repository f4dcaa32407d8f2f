"""
ASCII rendering for symbol grids and their winning paths.

Winning cells are coloured by category; everything else is plain text so the
output stays readable when colour is stripped.
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from win_types import Cell, Coord, Grid, Path, WinCategory, WinsResult

logger = logging.getLogger(__name__)

Colorizer = Callable[[str], str]

CATEGORY_ORDER = (WinCategory.STRAIGHT, WinCategory.DIAGONAL, WinCategory.ADJACENCY)


def category_colors() -> dict[WinCategory, Colorizer]:
    return {
        WinCategory.STRAIGHT: chalk.red,
        WinCategory.DIAGONAL: chalk.yellow,
        WinCategory.ADJACENCY: chalk.cyan,
    }


def format_path(path: Path) -> str:
    """Format a path as (r,c)->(r,c)->..."""
    return "->".join(str(pt) for pt in path)


def winning_cells(wins: WinsResult) -> dict[Coord, WinCategory]:
    """Map each winning cell to the first category (in CATEGORY_ORDER) it appears in."""
    cells: dict[Coord, WinCategory] = {}
    for category in CATEGORY_ORDER:
        for path in wins.paths_for(category):
            for pt in path:
                cells.setdefault(pt, category)
    return cells


def _cell_text(cell: Cell, cell_width: int, label_fn: Callable[[str], str] | None) -> str:
    if not cell:
        char = "_"
    elif label_fn is not None:
        char = label_fn(cell)
    else:
        char = cell
    return char[:cell_width].center(cell_width)


def render_grid(
    grid: Grid,
    wins: WinsResult | None = None,
    cell_width: int = 3,
    title: str | None = None,
    label_fn: Callable[[str], str] | None = None,
) -> list[str]:
    """
    Render a grid as a boxed character display.

    Args:
        grid: The grid to render
        wins: Optional wins whose cells are highlighted
        cell_width: Characters per cell (default 3)
        title: Optional title centred in the top border
        label_fn: Optional function shortening symbol labels for display

    Returns:
        List of strings representing the rendered grid lines
    """
    highlighted = winning_cells(wins) if wins is not None else {}
    colors = category_colors()
    cols = max((len(row) for row in grid), default=0)

    # Calculate dimensions
    grid_width = cols * cell_width + 2

    lines: list[str] = []

    # Top border with title
    title_line = "┌" + "─" * (grid_width - 2) + "┐"
    if title:
        label = f" {title} "
        if len(label) <= grid_width - 2:
            title_start = (grid_width - len(label)) // 2
            title_line = (
                "┌"
                + "─" * (title_start - 1)
                + label
                + "─" * (grid_width - title_start - len(label) - 1)
                + "┐"
            )
    lines.append(title_line)

    # Grid rows
    for r_idx, row in enumerate(grid):
        line_parts = ["│"]
        for c_idx, cell in enumerate(row):
            content = _cell_text(cell, cell_width, label_fn)
            category = highlighted.get(Coord(r_idx, c_idx))
            if category is not None:
                content = colors[category](content)
            line_parts.append(content)
        # Ragged rows are padded so the right border lines up
        line_parts.append(" " * (cell_width * (cols - len(row))))
        line_parts.append("│")
        lines.append("".join(line_parts))

    # Bottom border
    lines.append("└" + "─" * (grid_width - 2) + "┘")

    return lines


def render_wins(
    grid: Grid,
    wins: WinsResult,
    cell_width: int = 3,
    title: str | None = None,
    label_fn: Callable[[str], str] | None = None,
) -> str:
    """Render the grid followed by one summary line per category and its paths."""
    lines = render_grid(grid, wins, cell_width, title, label_fn)
    colors = category_colors()

    for category in CATEGORY_ORDER:
        paths = wins.paths_for(category)
        lines.append(colors[category](f"{category.value}: {len(paths)}"))
        for path in paths:
            lines.append(f"  {format_path(path)}")

    logger.debug("render_wins: %d winning paths", wins.total)
    return "\n".join(lines)
