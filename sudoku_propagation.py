# sudoku_propagation.py
from collections import deque
from typing import Deque, Dict, List, NamedTuple, Optional, Set
import time

from sudoku_grid import (
    BOX, DIGITS, DIMS, EMPTY, ContradictionError, Grid, Variable,
    PEERS, cell_name, format_grid, validate_grid,
)

# ----------------------------
# Cells and solved-cell records
# ----------------------------
class Cell:
    """A cell's remaining candidate values. Givens start as {value}, blanks as {1..9}."""

    def __init__(self, value: int = EMPTY):
        self.possibilities: Set[int] = set(DIGITS) if value == EMPTY else {value}

    def resolve(self) -> int:
        """The only remaining possibility, or 0 while the cell is undetermined."""
        if len(self.possibilities) == 1:
            return next(iter(self.possibilities))
        return EMPTY

    def remove_possibility(self, value: int):
        self.possibilities.discard(value)

    def is_solved(self) -> bool:
        return len(self.possibilities) == 1

    def candidates(self) -> List[int]:
        return sorted(self.possibilities)

    def __repr__(self) -> str:
        return f"Cell({self.candidates()})"


class SolvedCell(NamedTuple):
    row: int
    column: int
    value: int


# ----------------------------
# Propagation board (naked singles only)
# ----------------------------
class PropagationBoard:
    """
    Forward constraint propagation over per-cell candidate sets.

    Every solved cell goes through a FIFO queue exactly once. Processing a solved cell
    removes its value from its 20 peers; a peer that is left with one candidate is
    solved in turn and queued. There is no search and no guessing, so puzzles that need
    more than naked singles stop with some cells still holding several candidates.
    """

    def __init__(self, rows: Grid, verbose: bool = False):
        validate_grid(rows)

        self.verbose = verbose
        self.cells: List[List[Cell]] = []
        # keep solved cells in a queue so they are processed in FIFO order
        self.solved_cells: Deque[SolvedCell] = deque()

        for row_index, row in enumerate(rows):
            new_row: List[Cell] = []
            for column_index, value in enumerate(row):
                value = int(value)
                new_row.append(Cell(value))
                if value != EMPTY:
                    self.solved_cells.append(SolvedCell(row_index, column_index, value))
            self.cells.append(new_row)

        # instrumentation counters
        self.eliminations_count = 0
        self.processed_count = 0
        self.elapsed_time = 0.0

    def solve(self) -> bool:
        """
        Drain the queue of solved cells.
        Returns True when every cell ended up solved, False when propagation stalled.
        Counters describe this call only.
        """
        self.eliminations_count = 0
        self.processed_count = 0
        start_time = time.perf_counter()
        while self.solved_cells:
            solved = self.solved_cells.popleft()
            self.processed_count += 1
            self.reduce_possibilities(solved)
        self.elapsed_time = time.perf_counter() - start_time
        return self.is_solved()

    def reduce_possibilities(self, solved: SolvedCell):
        """Remove the solved cell's value from every cell sharing its row, column or block."""
        for peer_row, peer_column in PEERS[(solved.row, solved.column)]:
            self.reduce_cell_possibilities(peer_row, peer_column, solved.value, source=solved)

    def reduce_cell_possibilities(self, row: int, column: int, value: int, source: Optional[SolvedCell] = None):
        """
        Remove value as a possibility from the cell at (row, column).
          - already solved with a different value -> nothing to do
          - already solved with this value -> contradiction (its domain would become empty)
          - collapses to a single candidate -> queued as newly solved
        """
        cell = self.cells[row][column]

        if cell.is_solved():
            if cell.resolve() == value:
                origin = cell_name(source.row, source.column) if source else "a peer"
                raise ContradictionError(
                    f"{cell_name(row, column)} and {origin} both resolve to {value}"
                )
            return

        if value not in cell.possibilities:
            return

        cell.remove_possibility(value)
        self.eliminations_count += 1

        if cell.is_solved():
            resolved = cell.resolve()
            self.solved_cells.append(SolvedCell(row, column, resolved))
            if self.verbose:
                print(f"  SOLVED {cell_name(row, column)} = {resolved}")

    # ----------------------------
    # Read-only views
    # ----------------------------
    def is_solved(self) -> bool:
        return all(cell.is_solved() for row in self.cells for cell in row)

    @property
    def grid(self) -> Grid:
        """Resolved digit per cell, 0 where a cell still holds several candidates."""
        return [[cell.resolve() for cell in row] for row in self.cells]

    def domains(self) -> Dict[Variable, List[int]]:
        """Snapshot of every cell's candidates, keyed by (row, column)."""
        return {
            (row_index, column_index): cell.candidates()
            for row_index, row in enumerate(self.cells)
            for column_index, cell in enumerate(row)
        }

    def unresolved_cells(self) -> List[Variable]:
        return [
            (row_index, column_index)
            for row_index, row in enumerate(self.cells)
            for column_index, cell in enumerate(row)
            if not cell.is_solved()
        ]

    def __str__(self) -> str:
        return format_grid(self.grid)


def format_candidates(domains: Dict[Variable, List[int]]) -> str:
    """Render a domains() snapshot with every cell's candidates, solved cells as a single digit."""
    width = max(len(values) for values in domains.values())
    lines: List[str] = []
    for row in range(DIMS):
        parts: List[str] = []
        for column in range(DIMS):
            if column and column % BOX == 0:
                parts.append("|")
            parts.append("".join(str(value) for value in domains[(row, column)]).ljust(width))
        lines.append(" ".join(parts))
        if row in (2, 5):
            lines.append("-" * len(lines[-1]))
    return "\n".join(lines)


# ----------------------------
# Example Puzzles
# ----------------------------
if __name__ == "__main__":
    from example_puzzles import PROPAGATION_EXAMPLE_1, PROPAGATION_EXAMPLE_2, SEVENTEEN_CLUES
    from sudoku_grid import parse_puzzle

    examples = (
        ("Example 1", PROPAGATION_EXAMPLE_1),
        ("Example 2", PROPAGATION_EXAMPLE_2),
        ("17 clues", parse_puzzle(SEVENTEEN_CLUES)),
    )
    for name, puzzle in examples:
        board = PropagationBoard(puzzle)
        print(f"=== {name}: given puzzle ===")
        print(board)
        print()

        solved = board.solve()

        if solved:
            print(f"=== {name}: solved puzzle ===")
            print(board)
        else:
            print(f"=== {name}: propagation stalled, {len(board.unresolved_cells())} cells undetermined ===")
            print(format_candidates(board.domains()))

        print(
            f"Processed: {board.processed_count}, Eliminations: {board.eliminations_count}, "
            f"Time: {board.elapsed_time:.4f}s\n"
        )
