# sudoku_io.py
# Plain-text input and output for puzzles, crossover fixtures and domain dumps.

from __future__ import annotations

from typing import List, Sequence, Tuple

from contracts.errors import InvalidPuzzleError, make_error

BLANK_CHARS = {".", "0"}


# ---------- Parsing ----------

def parse_row(line: str, width: int = 9) -> List[int]:
    """Read ``width`` cells from ``line``; digits 1-9 are values, '.'/'0' blanks.

    Any other character (spaces, separators) is skipped.
    """
    values: List[int] = []
    for ch in line:
        if len(values) == width:
            break
        if ch in BLANK_CHARS:
            values.append(0)
        elif "1" <= ch <= "9":
            values.append(int(ch))
    if len(values) != width:
        raise InvalidPuzzleError(
            f"expected {width} cells, found {len(values)} in line {line!r}",
            [make_error("io.row_length", f"expected {width} cells", "$")],
        )
    return values


def _content_lines(text: str) -> List[str]:
    return [line for line in text.splitlines() if line.strip() and not line.lstrip().startswith("#")]


def parse_rows(text: str, width: int = 9) -> List[List[int]]:
    return [parse_row(line, width) for line in _content_lines(text)]


def parse_grid(text: str) -> List[List[int]]:
    """Parse a 9-line puzzle."""
    rows = parse_rows(text)
    if len(rows) != 9:
        raise InvalidPuzzleError(
            f"expected 9 rows, found {len(rows)}",
            [make_error("io.grid_rows", "expected 9 rows", "$")],
        )
    return rows


def read_pmx_input(text: str) -> Tuple[int, int, List[int], List[int]]:
    """Read ``low upp`` (1-based) and two parent rows; returns 0-based bounds."""
    lines = _content_lines(text)
    if len(lines) < 3:
        raise InvalidPuzzleError(
            "PMX input needs a bounds line and two rows",
            [make_error("io.pmx_lines", "expected 3 lines", "$")],
        )
    low, upp = parse_row(lines[0], width=2)
    return low - 1, upp - 1, parse_row(lines[1]), parse_row(lines[2])


def read_mpsx_input(text: str) -> Tuple[List[int], List[List[int]]]:
    """Read a mask line followed by one or more parent rows."""
    lines = _content_lines(text)
    if len(lines) < 2:
        raise InvalidPuzzleError(
            "MPSX input needs a mask line and at least one row",
            [make_error("io.mpsx_lines", "expected at least 2 lines", "$")],
        )
    mask = parse_row(lines[0])
    return mask, [parse_row(line) for line in lines[1:]]


def from_string(s: str) -> List[List[int]]:
    """Parse the 81-character row-major form."""
    s = s.strip().replace("\n", "").replace(" ", "")
    if len(s) != 81:
        raise InvalidPuzzleError(
            f"expected 81 characters, found {len(s)}",
            [make_error("io.string_length", "expected 81 characters", "$")],
        )
    return [parse_row(s[r * 9:(r + 1) * 9]) for r in range(9)]


# ---------- Formatting ----------

def to_string(g: Sequence[Sequence[int]]) -> str:
    return ''.join(str(g[r][c] or 0) for r in range(9) for c in range(9))


def format_row(values: Sequence[int], spaced: bool = True) -> str:
    sep = " " if spaced else ""
    return sep.join(str(v) for v in values)


def format_grid(rows: Sequence[Sequence[int]], spaced: bool = False) -> str:
    return "\n".join(format_row(row, spaced) for row in rows)


def format_domains(domains: Sequence[Sequence[Sequence[int]]]) -> str:
    """One line per cell, row-major, values space separated."""
    return "\n".join(format_row(domain) for row in domains for domain in row)


def pretty_grid(g: Sequence[Sequence[int]]) -> str:
    lines = []
    for r in range(9):
        if r % 3 == 0:
            lines.append("+-------+-------+-------+")
        row = []
        for c in range(9):
            v = g[r][c]
            row.append(str(v) if v != 0 else ".")
            if c % 3 == 2:
                row.append("|")
        lines.append("| " + " ".join(row[:-1]) + " |")
    lines.append("+-------+-------+-------+")
    return "\n".join(lines)


__all__ = [
    "format_domains",
    "format_grid",
    "format_row",
    "from_string",
    "parse_grid",
    "parse_row",
    "parse_rows",
    "pretty_grid",
    "read_mpsx_input",
    "read_pmx_input",
    "to_string",
]
