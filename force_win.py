"""
Forced-outcome grid generation.

Builds random grids that contain exactly one win of a requested category,
checking each candidate against the win engine. Used by the demo's "force"
controls; nothing here is needed to evaluate a grid.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Sequence

from win_engine import compute_wins
from win_types import DEFAULT_SHAPE, SYMBOL_NAMES, GridShape, Path, WinsResult

logger = logging.getLogger(__name__)

MutableGrid = list[list[str]]
Validate = Callable[[MutableGrid, GridShape], WinsResult]


def _default_validate(grid: MutableGrid, shape: GridShape) -> WinsResult:
    return compute_wins(grid, shape)


# =============================================================================
# Building Blocks
# =============================================================================


def random_symbol(symbols: Sequence[str], rng: random.Random) -> str:
    if not symbols:
        raise ValueError("random_symbol: empty symbol list")
    return symbols[rng.randrange(len(symbols))]


def make_random_grid(
    rows: int,
    cols: int,
    symbols: Sequence[str],
    rng: random.Random,
    exclude: str | None = None,
) -> MutableGrid:
    """
    Fill a rows x cols grid with random symbols.

    exclude keeps one symbol out of the background so a path painted with it
    is not extended by accident.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"make_random_grid: invalid dimensions {rows}x{cols}")
    pool = [s for s in symbols if s != exclude] if exclude else list(symbols)
    if not pool:
        raise ValueError("make_random_grid: empty pool")
    return [[pool[rng.randrange(len(pool))] for _ in range(cols)] for _ in range(rows)]


def slope_of_path(path: Path) -> int | None:
    """Column step between the first two points, or None for shorter paths."""
    if len(path) < 2:
        return None
    return path[1].col - path[0].col


def _only(wins: WinsResult, straight: int = 0, diagonal: int = 0, adjacency: int = 0) -> bool:
    return (
        len(wins.straight) == straight
        and len(wins.diagonal) == diagonal
        and len(wins.adjacency) == adjacency
    )


# =============================================================================
# Single-Category Generators
# =============================================================================


def straight_win_grid(
    shape: GridShape,
    symbols: Sequence[str],
    want_horizontal: bool,
    rng: random.Random,
    validate: Validate = _default_validate,
    max_attempts: int = 300,
) -> tuple[MutableGrid, bool]:
    """
    Grid with exactly one full row (want_horizontal) or full column.

    Falls back to a painted but unchecked grid after max_attempts.

    Returns:
        (grid, next_horizontal) where next_horizontal is the toggled preference
    """
    sym = random_symbol(symbols, rng)
    for attempt in range(max_attempts):
        grid = make_random_grid(shape.rows, shape.cols, symbols, rng, exclude=sym)
        if want_horizontal:
            r = rng.randrange(shape.rows)
            for c in range(shape.cols):
                grid[r][c] = sym
            wins = validate(grid, shape)
            if _only(wins, straight=1):
                path = wins.straight[0]
                if len(path) == shape.cols and all(pt.row == path[0].row for pt in path):
                    return grid, not want_horizontal
        else:
            c = rng.randrange(shape.cols)
            for r in range(shape.rows):
                grid[r][c] = sym
            wins = validate(grid, shape)
            if _only(wins, straight=1) and slope_of_path(wins.straight[0]) == 0:
                return grid, not want_horizontal
        logger.debug("straight_win_grid: attempt %d rejected", attempt + 1)

    logger.warning(
        "straight_win_grid: no clean grid after %d attempts, using unchecked fallback",
        max_attempts,
    )
    fallback = make_random_grid(shape.rows, shape.cols, symbols, rng, exclude=sym)
    if want_horizontal:
        r = rng.randrange(shape.rows)
        for c in range(shape.cols):
            fallback[r][c] = sym
    else:
        c = rng.randrange(shape.cols)
        for r in range(shape.rows):
            fallback[r][c] = sym
    return fallback, not want_horizontal


def random_diagonal_win(
    shape: GridShape,
    symbols: Sequence[str],
    rng: random.Random,
    validate: Validate = _default_validate,
    max_attempts: int = 200,
) -> MutableGrid | None:
    """Grid with exactly one full-height diagonal and no other wins, or None."""
    sym = random_symbol(symbols, rng)
    for _ in range(max_attempts):
        step = rng.choice((-1, 1))
        if step > 0:
            min_c0, max_c0 = 0, shape.cols - shape.rows
        else:
            min_c0, max_c0 = shape.rows - 1, shape.cols - 1
        if min_c0 > max_c0:
            continue
        c0 = rng.randint(min_c0, max_c0)
        grid = make_random_grid(shape.rows, shape.cols, symbols, rng, exclude=sym)
        for r in range(shape.rows):
            grid[r][c0 + step * r] = sym
        if _only(validate(grid, shape), diagonal=1):
            return grid
    return None


def _random_walk(shape: GridShape, rng: random.Random) -> list[int] | None:
    """Column per row of a top-to-bottom walk that is not a straight line."""
    c = rng.randrange(shape.cols)
    cols = [c]
    steps: list[int] = []
    for r in range(shape.rows - 1):
        choices = [dc for dc in (-1, 0, 1) if 0 <= c + dc < shape.cols]
        dc = rng.choice(choices)
        if r == shape.rows - 2 and steps and all(s == steps[0] for s in steps):
            alternatives = [x for x in choices if x != steps[0]]
            if alternatives:
                dc = rng.choice(alternatives)
        steps.append(dc)
        c += dc
        cols.append(c)
    if not steps or all(s == steps[0] for s in steps):
        return None
    return cols


def random_connecting_win(
    shape: GridShape,
    symbols: Sequence[str],
    rng: random.Random,
    validate: Validate = _default_validate,
    max_attempts: int = 200,
) -> MutableGrid | None:
    """Grid with exactly one non-straight connecting path and no other wins, or None."""
    sym = random_symbol(symbols, rng)
    for _ in range(max_attempts):
        grid = make_random_grid(shape.rows, shape.cols, symbols, rng, exclude=sym)
        walk = _random_walk(shape, rng)
        if walk is None:
            continue
        for r, c in enumerate(walk):
            grid[r][c] = sym
        if _only(validate(grid, shape), adjacency=1):
            return grid
    return None


# =============================================================================
# Retrying Generators
# =============================================================================


def diagonal_win_grid(
    shape: GridShape,
    symbols: Sequence[str],
    rng: random.Random,
    validate: Validate = _default_validate,
    max_rounds: int = 50,
) -> MutableGrid:
    """Retry random_diagonal_win until it succeeds."""
    if shape.cols < shape.rows:
        raise ValueError(
            f"A {shape.rows}x{shape.cols} grid cannot hold a full-height diagonal"
        )
    for round_idx in range(max_rounds):
        grid = random_diagonal_win(shape, symbols, rng, validate)
        if grid is not None:
            return grid
        logger.debug("diagonal_win_grid: round %d found nothing", round_idx + 1)
    raise RuntimeError(f"No diagonal win grid found in {max_rounds} rounds")


def connecting_win_grid(
    shape: GridShape,
    symbols: Sequence[str],
    rng: random.Random,
    validate: Validate = _default_validate,
    max_rounds: int = 50,
) -> MutableGrid:
    """Retry random_connecting_win until it succeeds."""
    if shape.rows < 3 or shape.cols < 2:
        raise ValueError(
            f"A {shape.rows}x{shape.cols} grid cannot hold a non-straight connecting path"
        )
    for round_idx in range(max_rounds):
        grid = random_connecting_win(shape, symbols, rng, validate)
        if grid is not None:
            return grid
        logger.debug("connecting_win_grid: round %d found nothing", round_idx + 1)
    raise RuntimeError(f"No connecting win grid found in {max_rounds} rounds")


# =============================================================================
# Controller
# =============================================================================


class ForceWinController:
    """Produces grids for the force-win controls, alternating straight orientation."""

    def __init__(
        self,
        shape: GridShape = DEFAULT_SHAPE,
        symbols: Sequence[str] = SYMBOL_NAMES,
        rng: random.Random | None = None,
    ) -> None:
        self.shape = shape
        self.symbols = tuple(symbols)
        self.rng = rng if rng is not None else random.Random()
        self.next_horizontal = True

    def random_spin(self) -> MutableGrid:
        return make_random_grid(self.shape.rows, self.shape.cols, self.symbols, self.rng)

    def force_straight(self) -> MutableGrid:
        grid, self.next_horizontal = straight_win_grid(
            self.shape, self.symbols, self.next_horizontal, self.rng
        )
        return grid

    def force_diagonal(self) -> MutableGrid:
        return diagonal_win_grid(self.shape, self.symbols, self.rng)

    def force_connecting(self) -> MutableGrid:
        return connecting_win_grid(self.shape, self.symbols, self.rng)
