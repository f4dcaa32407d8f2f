"""
Win detection over a fixed-size symbol grid.
Four independent scans (horizontal, vertical, diagonal, adjacency) followed by a
classification pass that keeps each winning path in exactly one category.
"""

from __future__ import annotations

import logging
from collections import deque

from win_types import (
    DEFAULT_SHAPE,
    CheckResult,
    Coord,
    Grid,
    GridShape,
    InvalidGridShape,
    Path,
    WinsResult,
)

logger = logging.getLogger(__name__)

__all__ = [
    "check_win",
    "compute_wins",
    "dedupe_paths",
    "describe_grid_shape",
    "find_adjacency_wins",
    "find_diagonal_wins",
    "find_horizontal_wins",
    "find_vertical_wins",
    "is_straight_or_diagonal_path",
    "is_valid_grid",
    "require_valid_grid",
]


# =============================================================================
# Validation
# =============================================================================


def describe_grid_shape(grid: Grid | None, shape: GridShape = DEFAULT_SHAPE) -> str | None:
    """Return a description of why grid does not match shape, or None if it does.

    A shape needs at least two rows: with one row every cell is both a
    vertical line and a full-height diagonal.
    """
    if shape.rows < 2:
        return f"Shape needs at least 2 rows, got {shape.rows}"
    if grid is None:
        return f"Expected {shape.rows}x{shape.cols} grid, got None"
    if len(grid) != shape.rows:
        return f"Expected {shape.rows} rows, got {len(grid)}"
    for r, row in enumerate(grid):
        if row is None:
            return f"Row {r} is missing"
        if len(row) != shape.cols:
            return f"Row {r}: expected {shape.cols} columns, got {len(row)}"
    return None


def is_valid_grid(grid: Grid | None, shape: GridShape = DEFAULT_SHAPE) -> bool:
    return describe_grid_shape(grid, shape) is None


def require_valid_grid(grid: Grid | None, shape: GridShape = DEFAULT_SHAPE) -> None:
    """Raise InvalidGridShape if grid does not match shape."""
    problem = describe_grid_shape(grid, shape)
    if problem is not None:
        raise InvalidGridShape(problem)


# =============================================================================
# Line Scans
# =============================================================================


def find_horizontal_wins(grid: Grid, shape: GridShape = DEFAULT_SHAPE) -> list[Path]:
    """Full rows of one symbol, left to right."""
    wins: list[Path] = []
    for r in range(shape.rows):
        first = grid[r][0]
        if first and all(symbol == first for symbol in grid[r]):
            wins.append(tuple(Coord(r, c) for c in range(shape.cols)))
    return wins


def find_vertical_wins(grid: Grid, shape: GridShape = DEFAULT_SHAPE) -> list[Path]:
    """Full columns of one symbol, top to bottom."""
    wins: list[Path] = []
    for c in range(shape.cols):
        first = grid[0][c]
        if first and all(grid[r][c] == first for r in range(1, shape.rows)):
            wins.append(tuple(Coord(r, c) for r in range(shape.rows)))
    return wins


def _diagonal_from(grid: Grid, shape: GridShape, start_col: int, step: int) -> Path | None:
    first = grid[0][start_col]
    if not first:
        return None
    path = [Coord(0, start_col)]
    for r in range(1, shape.rows):
        c = start_col + step * r
        if grid[r][c] != first:
            return None
        path.append(Coord(r, c))
    return tuple(path)


def find_diagonal_wins(grid: Grid, shape: GridShape = DEFAULT_SHAPE) -> list[Path]:
    """
    Diagonal lines spanning every row, with a column step of +1 or -1.

    Slope +1 windows start at columns 0..C-R (ascending), slope -1 windows at
    columns C-1..R-1 (descending). Shorter diagonal runs are not reported.
    """
    wins: list[Path] = []
    if shape.cols < shape.rows:
        return wins

    # Top-left to bottom-right
    for c in range(0, shape.cols - shape.rows + 1):
        path = _diagonal_from(grid, shape, c, 1)
        if path is not None:
            wins.append(path)

    # Top-right to bottom-left
    for c in range(shape.cols - 1, shape.rows - 2, -1):
        path = _diagonal_from(grid, shape, c, -1)
        if path is not None:
            wins.append(path)

    return wins


# =============================================================================
# Adjacency Search
# =============================================================================


def _unique_symbols(grid: Grid) -> list[str]:
    """Distinct non-empty symbols in row-major first-appearance order."""
    seen: dict[str, None] = {}
    for row in grid:
        for symbol in row:
            if symbol:
                seen.setdefault(symbol, None)
    return list(seen)


def _search_from(grid: Grid, shape: GridShape, start_col: int, symbol: str) -> list[Path]:
    """
    Breadth-first search from (0, start_col) through cells holding symbol.

    Each step moves down one row and shifts the column by -1, 0 or +1. A cell is
    marked visited when first enqueued, and the visited set belongs to this
    search only. Entries that reach the bottom row are recorded, not expanded.
    """
    start = Coord(0, start_col)
    queue: deque[tuple[Coord, Path]] = deque([(start, (start,))])
    visited: set[Coord] = {start}
    found: list[Path] = []

    while queue:
        coord, path = queue.popleft()

        if coord.row == shape.rows - 1:
            found.append(path)
            continue

        next_row = coord.row + 1
        for dc in (-1, 0, 1):
            nxt = Coord(next_row, coord.col + dc)
            if (
                0 <= nxt.col < shape.cols
                and nxt not in visited
                and grid[nxt.row][nxt.col] == symbol
            ):
                visited.add(nxt)
                queue.append((nxt, path + (nxt,)))

    return found


def find_adjacency_wins(grid: Grid, shape: GridShape = DEFAULT_SHAPE) -> list[Path]:
    """
    Connected top-to-bottom paths of one symbol, one row down per step.

    Straight and constant-step diagonal paths are included here; compute_wins
    filters them out.
    """
    paths: list[Path] = []
    for symbol in _unique_symbols(grid):
        for c in range(shape.cols):
            if grid[0][c] == symbol:
                paths.extend(_search_from(grid, shape, c, symbol))
    return paths


# =============================================================================
# Classification
# =============================================================================


def is_straight_or_diagonal_path(path: Path) -> bool:
    """True if every step goes down one row with the same column delta."""
    if len(path) <= 1:
        return True
    delta_c = path[1].col - path[0].col
    for prev, cur in zip(path[1:], path[2:]):
        if cur.row - prev.row != 1 or cur.col - prev.col != delta_c:
            return False
    return True


def dedupe_paths(paths: list[Path] | tuple[Path, ...]) -> tuple[Path, ...]:
    """Drop paths whose coordinate set was already seen, keeping the first."""
    seen: set[tuple[Coord, ...]] = set()
    result: list[Path] = []
    for path in paths:
        key = tuple(sorted(path))
        if key not in seen:
            seen.add(key)
            result.append(path)
    return tuple(result)


# =============================================================================
# Entry Points
# =============================================================================


def compute_wins(grid: Grid | None, shape: GridShape = DEFAULT_SHAPE) -> WinsResult:
    """
    Compute every winning path in grid, grouped by category.

    An invalid grid is logged and yields an empty result; it never raises.

    Args:
        grid: R rows of C cells; falsy cells are empty
        shape: Expected grid dimensions (default REEL_COUNT x SYMBOLS_PER_REEL)

    Returns:
        WinsResult with disjoint, deduplicated straight/diagonal/adjacency paths
    """
    problem = describe_grid_shape(grid, shape)
    if problem is not None:
        logger.error("Invalid grid provided: %s", problem)
        return WinsResult.empty()
    if grid is None or shape.cols == 0:
        return WinsResult.empty()

    horizontal = find_horizontal_wins(grid, shape)
    vertical = find_vertical_wins(grid, shape)
    diagonal = find_diagonal_wins(grid, shape)
    adjacency = find_adjacency_wins(grid, shape)

    straight = horizontal + vertical

    # A connecting path that is really a line belongs to straight/diagonal
    adjacency_filtered = [p for p in adjacency if not is_straight_or_diagonal_path(p)]

    wins = WinsResult(
        straight=dedupe_paths(straight),
        diagonal=dedupe_paths(diagonal),
        adjacency=dedupe_paths(adjacency_filtered),
    )
    logger.debug(
        "compute_wins: straight=%d, diagonal=%d, adjacency=%d (raw adjacency=%d)",
        len(wins.straight),
        len(wins.diagonal),
        len(wins.adjacency),
        len(adjacency),
    )
    return wins


def check_win(grid: Grid | None, shape: GridShape = DEFAULT_SHAPE) -> CheckResult:
    """Wrap compute_wins, also returning every path in a single tuple."""
    wins = compute_wins(grid, shape)
    return CheckResult(winning_paths=wins.all_paths(), wins=wins)
