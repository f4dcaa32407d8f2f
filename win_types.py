"""
Shared type definitions for the slot win engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

# =============================================================================
# Configuration
# =============================================================================

REEL_COUNT = 4  # Rows in the symbol grid
SYMBOLS_PER_REEL = 6  # Columns in the symbol grid

SYMBOL_NAMES: tuple[str, ...] = (
    "symbol1",
    "symbol2",
    "symbol3",
    "symbol4",
    "symbol5",
)


@dataclass(frozen=True)
class GridShape:
    """Expected dimensions of a symbol grid."""

    rows: int
    cols: int


DEFAULT_SHAPE = GridShape(REEL_COUNT, SYMBOLS_PER_REEL)


# =============================================================================
# Grid Definition Types
# =============================================================================


# A symbol label, or None/"" for an empty cell
Cell = str | None

Grid = Sequence[Sequence[Cell]]


class InvalidGridShape(ValueError):
    """Grid row count or row length does not match the expected shape."""

    pass


class WinCategory(Enum):
    """Category a winning path is attributed to."""

    STRAIGHT = "straight"  # Full row or full column
    DIAGONAL = "diagonal"  # Full-height line with column step +1 or -1
    ADJACENCY = "adjacency"  # Connected top-to-bottom path that is not a line


@dataclass(frozen=True, order=True)
class Coord:
    """A cell address: row 0 is the top, col 0 is the left."""

    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


Path = tuple[Coord, ...]


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class WinsResult:
    """Winning paths grouped by category. The three groups never share a path."""

    straight: tuple[Path, ...] = ()
    diagonal: tuple[Path, ...] = ()
    adjacency: tuple[Path, ...] = ()

    @classmethod
    def empty(cls) -> WinsResult:
        return cls()

    def paths_for(self, category: WinCategory) -> tuple[Path, ...]:
        match category:
            case WinCategory.STRAIGHT:
                return self.straight
            case WinCategory.DIAGONAL:
                return self.diagonal
            case WinCategory.ADJACENCY:
                return self.adjacency
        raise ValueError(f"Unknown win category: {category}")

    def all_paths(self) -> tuple[Path, ...]:
        """All paths in straight, diagonal, adjacency order."""
        return self.straight + self.diagonal + self.adjacency

    @property
    def total(self) -> int:
        return len(self.straight) + len(self.diagonal) + len(self.adjacency)

    @property
    def is_empty(self) -> bool:
        return self.total == 0


@dataclass(frozen=True)
class CheckResult:
    """Flattened view of a WinsResult, as consumed by presentation code."""

    winning_paths: tuple[Path, ...]
    wins: WinsResult
