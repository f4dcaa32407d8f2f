"""
Grid parsing utilities for the slot win engine.

Provides two parsing formats:
1. Standard format with space-separated (possibly multi-character) symbols
2. Concise format with single-character cells
"""

from __future__ import annotations

from win_engine import require_valid_grid
from win_types import Cell, GridShape

__all__ = ["format_grid", "parse_grid", "parse_grid_concise"]

ParsedGrid = tuple[tuple[Cell, ...], ...]

EMPTY_MARKERS = frozenset({"_", "."})


def parse_grid(definition: str, shape: GridShape | None = None) -> ParsedGrid:
    """
    Parse a grid from a compact string format.

    Format:
    - Rows separated by |
    - Cells separated by single spaces
    - Underscore only (_): Empty cell
    - Empty string (from multiple adjacent spaces): Empty cell
    - Anything else: a symbol label, taken verbatim

    Example:
        "A A A|B _ cherry"
        Creates a 2x3 grid:
        (("A", "A", "A"), ("B", None, "cherry"))

    Args:
        definition: Grid definition string
        shape: If given, the parsed grid must match it

    Returns:
        Tuple of rows, each a tuple of cells

    Raises:
        ValueError: If rows have different lengths
        InvalidGridShape: If shape is given and does not match
    """
    row_strings = definition.strip().split("|")
    rows: list[tuple[Cell, ...]] = []

    for row_str in row_strings:
        cells: list[Cell] = []
        for cell_str in row_str.strip().split(" "):
            if not cell_str or cell_str == "_":
                cells.append(None)
            else:
                cells.append(cell_str)
        rows.append(tuple(cells))

    # Validate all rows have same length
    if rows:
        cols = len(rows[0])
        mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
        if mismatched:
            error_msg = (
                f"Inconsistent row lengths in grid definition\n"
                f"  Expected: {cols} columns (from row 0)\n"
                f"  Mismatched rows:\n"
            )
            for row_idx, actual_cols in mismatched:
                error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx].strip()}\"\n"
            error_msg += "  All rows must have the same number of cells"
            raise ValueError(error_msg)

    grid = tuple(rows)
    if shape is not None:
        require_valid_grid(grid, shape)
    return grid


def parse_grid_concise(
    definition: str,
    shape: GridShape | None = None,
    pad: bool = False,
) -> ParsedGrid:
    """
    Parse a grid where every character is one cell.

    Format:
    - Rows separated by | or by newlines (blank lines ignored)
    - Underscore (_) or dot (.): Empty cell
    - Any other non-space character: a single-character symbol

    Rows are returned as written, so ragged input reaches the engine's shape
    check unchanged. With pad=True short rows are filled with empty cells.

    Example:
        \"\"\"
        AAAAAA
        BCD_AB
        \"\"\"

    Args:
        definition: Grid definition string
        shape: If given, the parsed grid must match it
        pad: Pad short rows to the longest row

    Returns:
        Tuple of rows, each a tuple of cells

    Raises:
        ValueError: On whitespace inside a row
        InvalidGridShape: If shape is given and does not match
    """
    lines = [line.strip() for line in definition.replace("|", "\n").split("\n")]
    rows: list[tuple[Cell, ...]] = []

    for row_idx, line in enumerate(line for line in lines if line):
        cells: list[Cell] = []
        for col_idx, char in enumerate(line):
            if char.isspace():
                raise ValueError(
                    f"Whitespace inside row {row_idx} at column {col_idx}: \"{line}\"\n"
                    f"  Use _ or . for an empty cell"
                )
            cells.append(None if char in EMPTY_MARKERS else char)
        rows.append(tuple(cells))

    if pad and rows:
        max_cols = max(len(row) for row in rows)
        rows = [row + (None,) * (max_cols - len(row)) for row in rows]

    grid = tuple(rows)
    if shape is not None:
        require_valid_grid(grid, shape)
    return grid


def format_grid(grid: ParsedGrid | list[list[Cell]]) -> str:
    """Inverse of parse_grid, for log messages and failure output."""
    return "|".join(" ".join(cell if cell else "_" for cell in row) for row in grid)
