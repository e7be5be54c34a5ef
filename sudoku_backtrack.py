# sudoku_backtrack.py
from typing import List, Optional, Tuple
import time

from sudoku_grid import (
    AREA, DIMS, EMPTY, ClueSource, Grid, Variable,
    PEER_INDEX, block_of, cell_name, clues_from_grid, format_grid,
    normalize_clues, to_coords, to_index, validate_clues, validate_grid,
)


class SearchLimitReached(RuntimeError):
    """Raised when solve() runs past its max_steps budget."""


# ----------------------------
# Backtracking solver (iterative cursor, first-empty order)
# ----------------------------
class BacktrackingSudoku:
    """
    Exhaustive depth-first search over the cells that were empty at load time.

    The unsolved cells are walked strictly in ascending index order. A cursor moves
    forward when a cell accepts a value and back when it runs out of values, so the
    search needs no recursion.
    """

    def __init__(self, clues: ClueSource, verbose: bool = False):
        clues = normalize_clues(clues)
        validate_clues(clues)

        self.verbose = verbose
        self.board: List[int] = [EMPTY] * AREA
        for index, value in clues.items():
            self.board[int(index)] = int(value)

        # zero-valued entries are placeholders, not givens
        self.unsolved_cells: Tuple[int, ...] = tuple(
            index for index in range(AREA) if self.board[index] == EMPTY
        )
        self.coords: Tuple[Variable, ...] = tuple(to_coords(index) for index in range(AREA))
        self.rows, self.columns, self.blocks = PEER_INDEX

        # instrumentation counters
        self.assignments_count = 0
        self.backtracks_count = 0
        self.steps_count = 0
        self.elapsed_time = 0.0

    @classmethod
    def from_grid(cls, grid: Grid, verbose: bool = False) -> "BacktrackingSudoku":
        """Build from a dense 9x9 array (0 = empty)."""
        validate_grid(grid)
        return cls(clues_from_grid(grid), verbose=verbose)

    # ----------------------------
    # Cell access
    # ----------------------------
    def get_cell(self, row: int, column: int) -> int:
        return self.board[to_index(row, column)]

    def set_cell(self, row: int, column: int, value: int):
        self.board[to_index(row, column)] = value

    @property
    def grid(self) -> Grid:
        return [self.board[row * DIMS:(row + 1) * DIMS] for row in range(DIMS)]

    # ----------------------------
    # Constraint check
    # ----------------------------
    def is_valid(self, row: int, column: int, value: int) -> bool:
        """Check row, column and block peers for value. Skip the cell itself when scanning."""
        index = to_index(row, column)

        for peer in self.rows[row]:
            if peer == index:
                continue
            if self.board[peer] == value:
                return False

        for peer in self.columns[column]:
            if peer == index:
                continue
            if self.board[peer] == value:
                return False

        for peer in self.blocks[block_of(row, column)]:
            if peer == index:
                continue
            if self.board[peer] == value:
                return False

        return True

    def next_candidate(self, row: int, column: int) -> Optional[int]:
        """Smallest valid value above the cell's current value, or None."""
        for value in range(self.get_cell(row, column) + 1, DIMS + 1):
            if self.is_valid(row, column, value):
                return value
        return None

    def is_solved(self) -> bool:
        for index in self.unsolved_cells:
            value = self.board[index]
            if value == EMPTY or not self.is_valid(*self.coords[index], value):
                return False
        return True

    # ----------------------------
    # Search
    # ----------------------------
    def solve(self, max_steps: Optional[int] = None) -> Optional[Grid]:
        """
        Run the cursor over the unsolved cells until it passes the last one (solved)
        or falls off the front (no solution).

        Returns the solved grid, or None when the puzzle has no solution. In that case
        every unsolved cell has been cleared back to 0.
        """
        self.assignments_count = 0
        self.backtracks_count = 0
        self.steps_count = 0
        start_time = time.perf_counter()

        if self.is_solved():
            self.elapsed_time = time.perf_counter() - start_time
            return self.grid

        # start from a clean slate; an earlier capped run may have left partial values
        for index in self.unsolved_cells:
            self.board[index] = EMPTY

        cursor = 0
        while 0 <= cursor < len(self.unsolved_cells):
            if max_steps is not None and self.steps_count >= max_steps:
                self.elapsed_time = time.perf_counter() - start_time
                raise SearchLimitReached(
                    f"No result after {self.steps_count} steps (cursor at {cursor} of {len(self.unsolved_cells)})"
                )
            self.steps_count += 1

            row, column = self.coords[self.unsolved_cells[cursor]]
            value = self.next_candidate(row, column)
            if value is not None:
                # assign
                self.set_cell(row, column, value)
                self.assignments_count += 1
                if self.verbose:
                    print(f"  ASSIGN {cell_name(row, column)} = {value}")
                cursor += 1
            else:
                # undo and step back to the previous unsolved cell
                self.set_cell(row, column, EMPTY)
                self.backtracks_count += 1
                if self.verbose:
                    print(f"  UNASSIGN {cell_name(row, column)} (backtracking)")
                cursor -= 1

        self.elapsed_time = time.perf_counter() - start_time
        if cursor < 0:
            return None
        return self.grid

    def __str__(self) -> str:
        return format_grid(self.grid)


# ----------------------------
# Example Puzzles
# ----------------------------
if __name__ == "__main__":
    from example_puzzles import BACKTRACKING_EXAMPLE_1, BACKTRACKING_EXAMPLE_2

    for name, clues in (("Example 1", BACKTRACKING_EXAMPLE_1), ("Example 2", BACKTRACKING_EXAMPLE_2)):
        sudoku = BacktrackingSudoku(clues)
        print(f"=== {name}: given puzzle ===")
        print(sudoku)
        print()

        solution = sudoku.solve()

        if solution:
            print(f"=== {name}: solved puzzle ===")
            print(sudoku)
        else:
            print("No solution found.")

        print(
            f"Assignments: {sudoku.assignments_count}, Backtracks: {sudoku.backtracks_count}, "
            f"Time: {sudoku.elapsed_time:.4f}s\n"
        )
