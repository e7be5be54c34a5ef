# sudoku_grid.py
from collections.abc import Mapping
from numbers import Integral
from typing import Dict, Iterable, List, Tuple, Union

# ----------------------------
# Config
# ----------------------------
DIMS = 9            # cells per row / column / block
BOX = 3             # block edge length
AREA = DIMS * DIMS
EMPTY = 0
DIGITS = range(1, DIMS + 1)

BLANK_SYMBOLS = "0."
SEPARATOR_SYMBOLS = "|-+"

# ----------------------------
# Types
# ----------------------------
Variable = Tuple[int, int]      # (row, column)
Grid = List[List[int]]
Clues = Dict[int, int]          # flat index -> digit
ClueSource = Union[Clues, Iterable[Tuple[int, int]]]
PeerTable = Tuple[Tuple[int, ...], ...]


class InvalidPuzzleError(ValueError):
    """Raised for malformed input: bad shape, digit out of range, or duplicate clues."""


class ContradictionError(ValueError):
    """Raised when a cell is left with no candidate value."""


# ----------------------------
# Coordinates
# ----------------------------
def to_index(row: int, column: int) -> int:
    return row * DIMS + column

def to_coords(index: int) -> Variable:
    return divmod(index, DIMS)

def block_of(row: int, column: int) -> int:
    """Return the block number (0..8, row-major) containing (row, column)."""
    return (row // BOX) * BOX + column // BOX

def cell_name(row: int, column: int) -> str:
    """Human notation for a cell, 1-based: (0, 1) -> 'r1c2'."""
    return f"r{row + 1}c{column + 1}"

# ----------------------------
# Peer index
# ----------------------------
def build_peer_index() -> Tuple[PeerTable, PeerTable, PeerTable]:
    """
    Build the row, column and block tables of flat indices.
    Each entry lists all 9 cells of the unit, the cell itself included.
    """
    rows = tuple(tuple(to_index(row, column) for column in range(DIMS)) for row in range(DIMS))
    columns = tuple(tuple(to_index(row, column) for row in range(DIMS)) for column in range(DIMS))

    blocks: List[List[int]] = [[0] * DIMS for _ in range(DIMS)]
    for row in range(DIMS):
        for column in range(DIMS):
            index_in_block = (row % BOX) * BOX + column % BOX
            blocks[block_of(row, column)][index_in_block] = to_index(row, column)

    return rows, columns, tuple(tuple(block) for block in blocks)

def peers_of(var: Variable) -> List[Variable]:
    """Return list of peer coordinates that share row, column, or 3x3 box with var (excluding var)."""
    row, column = var
    peers: List[Variable] = []

    # row peers
    for peer_column in range(DIMS):
        if peer_column != column:
            peers.append((row, peer_column))

    # column peers
    for peer_row in range(DIMS):
        if peer_row != row:
            peers.append((peer_row, column))

    # box peers not already covered by the row or column
    box_start_row, box_start_column = (row // BOX) * BOX, (column // BOX) * BOX
    for box_row_index in range(box_start_row, box_start_row + BOX):
        for box_column_index in range(box_start_column, box_start_column + BOX):
            if box_row_index != row and box_column_index != column:
                peers.append((box_row_index, box_column_index))

    return peers


PEER_INDEX = build_peer_index()
PEERS: Dict[Variable, Tuple[Variable, ...]] = {
    (row, column): tuple(peers_of((row, column))) for row in range(DIMS) for column in range(DIMS)
}

# ----------------------------
# Validation
# ----------------------------
def _unit_cells() -> List[Tuple[str, Tuple[int, ...]]]:
    rows, columns, blocks = PEER_INDEX
    units = [(f"r{number + 1}", cells) for number, cells in enumerate(rows)]
    units += [(f"c{number + 1}", cells) for number, cells in enumerate(columns)]
    units += [(f"b{number + 1}", cells) for number, cells in enumerate(blocks)]
    return units

def find_duplicates(grid: Grid) -> List[Tuple[str, int]]:
    """Return (unit, digit) pairs for every digit placed more than once in a row, column or block."""
    flat = [value for row in grid for value in row]
    conflicts: List[Tuple[str, int]] = []
    for unit_name, cells in _unit_cells():
        seen = set()
        reported = set()
        for index in cells:
            value = flat[index]
            if value == EMPTY:
                continue
            if value in seen and value not in reported:
                conflicts.append((unit_name, value))
                reported.add(value)
            seen.add(value)
    return conflicts

def _check_digit(value, where: str) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidPuzzleError(f"{where}: expected an int digit, got {value!r}")
    if not EMPTY <= value <= DIMS:
        raise InvalidPuzzleError(f"{where}: digit {value} out of range 0..{DIMS}")

def _check_no_duplicates(grid: Grid) -> None:
    conflicts = find_duplicates(grid)
    if conflicts:
        described = ", ".join(f"{digit} in {unit}" for unit, digit in conflicts)
        raise InvalidPuzzleError("Duplicate clues: " + described)

def validate_grid(grid: Grid) -> None:
    """Check a dense grid: 9 rows of 9 digits in 0..9, no digit repeated within a unit."""
    if len(grid) != DIMS:
        raise InvalidPuzzleError(f"Grid must have {DIMS} rows (got {len(grid)}).")
    for row_index, row in enumerate(grid):
        if len(row) != DIMS:
            raise InvalidPuzzleError(f"Row {row_index + 1} must have {DIMS} cells (got {len(row)}).")
        for column_index, value in enumerate(row):
            _check_digit(value, cell_name(row_index, column_index))
    _check_no_duplicates(grid)

def validate_clues(clues: Clues) -> None:
    """Check a sparse clue mapping: positions in 0..80, digits in 0..9, no duplicates."""
    for index in clues:
        if isinstance(index, bool) or not isinstance(index, Integral) or not 0 <= index < AREA:
            raise InvalidPuzzleError(f"Cell index {index!r} out of range 0..{AREA - 1}")
    validate_grid(grid_from_clues(clues))

# ----------------------------
# Conversions and parsing
# ----------------------------
def normalize_clues(clues: ClueSource) -> Clues:
    """Accept a mapping or an iterable of (index, digit) pairs; later pairs win."""
    if isinstance(clues, Mapping):
        return dict(clues)
    return {index: value for index, value in clues}

def grid_from_clues(clues: Clues) -> Grid:
    grid = [[EMPTY] * DIMS for _ in range(DIMS)]
    for index, value in clues.items():
        row, column = to_coords(index)
        grid[row][column] = value
    return grid

def clues_from_grid(grid: Grid) -> Clues:
    return {
        to_index(row, column): grid[row][column]
        for row in range(DIMS)
        for column in range(DIMS)
        if grid[row][column] != EMPTY
    }

def parse_puzzle(text: str) -> Grid:
    """
    Parse an 81-symbol puzzle string into a grid.
      - digits 1..9
      - '0' or '.' for blanks
      - whitespace and the separators '|', '-', '+' are ignored
    """
    values: List[int] = []
    for position, symbol in enumerate(text):
        if symbol.isspace() or symbol in SEPARATOR_SYMBOLS:
            continue
        if symbol in BLANK_SYMBOLS:
            values.append(EMPTY)
        elif symbol in "123456789":
            values.append(int(symbol))
        else:
            raise InvalidPuzzleError(f"Unexpected symbol {symbol!r} at position {position}")
    if len(values) != AREA:
        raise InvalidPuzzleError(f"Puzzle must have {AREA} cells (got {len(values)}).")
    return [values[row * DIMS:(row + 1) * DIMS] for row in range(DIMS)]

# ----------------------------
# Solution checking
# ----------------------------
def is_complete_solution(grid: Grid) -> bool:
    """True when no cell is empty and every row, column and block holds 1..9 exactly once."""
    if len(grid) != DIMS or any(len(row) != DIMS for row in grid):
        return False
    flat = [value for row in grid for value in row]
    expected = set(DIGITS)
    return all({flat[index] for index in cells} == expected for _, cells in _unit_cells())

# ----------------------------
# Print Sudoku
# ----------------------------
def format_grid(grid: Grid, blank: str = ".") -> str:
    lines: List[str] = []
    for row_index in range(DIMS):
        row_str = ""
        for column_index in range(DIMS):
            val = grid[row_index][column_index]
            row_str += str(val) if val != EMPTY else blank
            if column_index in (2, 5):
                row_str += " | "
            elif column_index != DIMS - 1:
                row_str += " "
        lines.append(row_str)
        if row_index in (2, 5):
            lines.append("-" * 21)
    return "\n".join(lines)

def print_grid(grid: Grid):
    print(format_grid(grid))
    print()
