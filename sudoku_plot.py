# sudoku_plot.py
from typing import Dict, List, Optional
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from sudoku_grid import BOX, DIMS, EMPTY, Grid, InvalidPuzzleError, Variable

# ----------------------------
# Config
# ----------------------------
DEFAULT_GRID_PNG = "sudoku_grid.png"
DEFAULT_CANDIDATES_PNG = "sudoku_candidates.png"
FIGURE_SIZE = (6, 6)
DPI = 200
GIVEN_COLOR = "#000000"
FILLED_COLOR = "#1f78b4"
CANDIDATE_COLOR = "#7f7f7f"
UNRESOLVED_FILL = "#f2f2f2"

# ----------------------------
# Drawing helpers
# ----------------------------
def _draw_lines(ax):
    """Thin lines between cells, thick lines between 3x3 blocks."""
    for position in range(DIMS + 1):
        width = 2.0 if position % BOX == 0 else 0.5
        ax.plot([position, position], [0, DIMS], color="black", linewidth=width)
        ax.plot([0, DIMS], [position, position], color="black", linewidth=width)
    ax.set_xlim(0, DIMS)
    ax.set_ylim(DIMS, 0)   # row 0 at the top
    ax.set_aspect("equal")
    ax.set_axis_off()

def _save(fig, out_png: str) -> str:
    plt.tight_layout()
    fig.savefig(out_png, dpi=DPI)
    print("Saved figure to", out_png)
    plt.close(fig)
    return out_png

def _check_shape(grid: Grid):
    if len(grid) != DIMS or any(len(row) != DIMS for row in grid):
        raise InvalidPuzzleError(f"Expected a {DIMS}x{DIMS} grid to plot.")

# ----------------------------
# Public plotting API
# ----------------------------
def plot_grid(grid: Grid, out_png: str = DEFAULT_GRID_PNG, givens: Optional[Grid] = None, title: str = "Sudoku") -> str:
    """
    Save a PNG of the grid. Digits that are non-zero in `givens` are drawn in the
    given colour, the rest in the filled colour. Empty cells stay blank.
    """
    _check_shape(grid)
    if givens is not None:
        _check_shape(givens)

    fig, ax = plt.subplots(1, 1, figsize=FIGURE_SIZE)
    _draw_lines(ax)
    for row in range(DIMS):
        for column in range(DIMS):
            value = grid[row][column]
            if value == EMPTY:
                continue
            is_given = givens is not None and givens[row][column] != EMPTY
            ax.text(
                column + 0.5, row + 0.5, str(value),
                ha="center", va="center", fontsize=18,
                fontweight="bold" if is_given else "normal",
                color=GIVEN_COLOR if is_given else FILLED_COLOR,
            )
    plt.title(title)
    return _save(fig, out_png)

def plot_candidates(domains: Dict[Variable, List[int]], out_png: str = DEFAULT_CANDIDATES_PNG, title: str = "Sudoku candidates") -> str:
    """
    Save a PNG of a candidate snapshot (as returned by PropagationBoard.domains()).
    Solved cells show their digit, undetermined cells show pencil marks in a 3x3 layout.
    """
    missing = [(row, column) for row in range(DIMS) for column in range(DIMS) if (row, column) not in domains]
    if missing:
        raise InvalidPuzzleError(f"Candidate snapshot is missing {len(missing)} cells, e.g. {missing[0]}")

    fig, ax = plt.subplots(1, 1, figsize=FIGURE_SIZE)
    for (row, column), values in sorted(domains.items()):
        if len(values) == 1:
            ax.text(column + 0.5, row + 0.5, str(values[0]), ha="center", va="center", fontsize=18, color=GIVEN_COLOR)
            continue
        ax.add_patch(Rectangle((column, row), 1, 1, color=UNRESOLVED_FILL, zorder=0))
        for value in values:
            sub_row, sub_column = divmod(value - 1, BOX)
            ax.text(
                column + (sub_column + 0.5) / BOX, row + (sub_row + 0.5) / BOX, str(value),
                ha="center", va="center", fontsize=6, color=CANDIDATE_COLOR,
            )
    _draw_lines(ax)
    plt.title(title)
    return _save(fig, out_png)


# ----------------------------
# Main (example)
# ----------------------------
if __name__ == "__main__":
    from example_puzzles import BACKTRACKING_EXAMPLE_1, SEVENTEEN_CLUES
    from sudoku_backtrack import BacktrackingSudoku
    from sudoku_grid import grid_from_clues, normalize_clues, parse_puzzle
    from sudoku_propagation import PropagationBoard

    givens = grid_from_clues(normalize_clues(BACKTRACKING_EXAMPLE_1))
    sudoku = BacktrackingSudoku(BACKTRACKING_EXAMPLE_1)
    solution = sudoku.solve()
    if solution is None:
        print("No solution found.")
    else:
        plot_grid(solution, givens=givens, title="Backtracking solution")

    board = PropagationBoard(parse_puzzle(SEVENTEEN_CLUES))
    board.solve()
    plot_candidates(board.domains(), title="Propagation stalled")
