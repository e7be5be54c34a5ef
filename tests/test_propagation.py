# tests/test_propagation.py
import random
from collections import deque

import pytest

from example_puzzles import (
    BACKTRACKING_EXAMPLE_1, PROPAGATION_EXAMPLE_1, PROPAGATION_EXAMPLE_2, SEVENTEEN_CLUES,
)
from sudoku_backtrack import BacktrackingSudoku
from sudoku_grid import (
    ContradictionError, InvalidPuzzleError, grid_from_clues, is_complete_solution,
    normalize_clues, parse_puzzle,
)
from sudoku_propagation import Cell, PropagationBoard, SolvedCell, format_candidates

EXAMPLE_1_SOLUTION = "716543982948162573523978164857624319439751826162389745394217658275836491681495237"
EXAMPLE_2_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


def flatten(grid):
    return "".join(str(value) for row in grid for value in row)


def dense(clues):
    return grid_from_clues(normalize_clues(clues))


class LifoQueue(deque):
    """Queue stand-in that hands back the most recently solved cell first."""

    def popleft(self):
        return self.pop()


# ----------------------------
# Cell
# ----------------------------
def test_blank_cell_starts_with_all_digits():
    cell = Cell(0)
    assert cell.candidates() == list(range(1, 10))
    assert not cell.is_solved()
    assert cell.resolve() == 0


def test_given_cell_is_a_singleton():
    cell = Cell(4)
    assert cell.possibilities == {4}
    assert cell.is_solved()
    assert cell.resolve() == 4


def test_remove_possibility_collapses_cell():
    cell = Cell()
    for value in range(1, 9):
        cell.remove_possibility(value)
    assert cell.is_solved()
    assert cell.resolve() == 9
    # removing an absent value is a no-op
    cell.remove_possibility(3)
    assert cell.candidates() == [9]


# ----------------------------
# Construction
# ----------------------------
def test_givens_are_queued_in_row_major_order():
    board = PropagationBoard(PROPAGATION_EXAMPLE_2)
    queued = list(board.solved_cells)
    assert queued[:3] == [SolvedCell(0, 0, 5), SolvedCell(0, 1, 3), SolvedCell(0, 4, 7)]
    assert len(queued) == 30
    assert queued == sorted(queued, key=lambda solved: (solved.row, solved.column))
    assert board.cells[0][2].candidates() == list(range(1, 10))


def test_duplicate_clues_are_rejected():
    grid = [row[:] for row in PROPAGATION_EXAMPLE_2]
    grid[8][0] = 5   # column 1 already holds a 5 at the top
    with pytest.raises(InvalidPuzzleError, match="5 in c1"):
        PropagationBoard(grid)


# ----------------------------
# Solving
# ----------------------------
@pytest.mark.parametrize(
    "puzzle, expected",
    [
        (PROPAGATION_EXAMPLE_1, EXAMPLE_1_SOLUTION),
        (PROPAGATION_EXAMPLE_2, EXAMPLE_2_SOLUTION),
    ],
)
def test_naked_singles_puzzles_are_fully_solved(puzzle, expected):
    board = PropagationBoard(puzzle)

    assert board.solve() is True
    assert board.is_solved()
    assert flatten(board.grid) == expected
    assert is_complete_solution(board.grid)
    assert all(len(values) == 1 for values in board.domains().values())
    assert board.unresolved_cells() == []
    # each of the 81 cells went through the queue exactly once
    assert board.processed_count == 81


def test_minimal_puzzle_stalls():
    board = PropagationBoard(parse_puzzle(SEVENTEEN_CLUES))

    assert board.solve() is False
    unresolved = board.unresolved_cells()
    assert unresolved
    assert all(len(board.domains()[variable]) >= 2 for variable in unresolved)
    assert sum(value == 0 for row in board.grid for value in row) == len(unresolved)
    assert board.processed_count == 81 - len(unresolved)


def test_stalled_cells_agree_with_backtracking_solution():
    board = PropagationBoard(dense(BACKTRACKING_EXAMPLE_1))
    assert board.solve() is False

    solution = BacktrackingSudoku(BACKTRACKING_EXAMPLE_1).solve()
    assert is_complete_solution(solution)

    for (row, column), values in board.domains().items():
        assert solution[row][column] in values


def test_empty_grid_makes_no_progress():
    board = PropagationBoard([[0] * 9 for _ in range(9)])
    assert board.solve() is False
    assert len(board.unresolved_cells()) == 81
    assert board.eliminations_count == 0


def test_solving_again_is_a_no_op():
    board = PropagationBoard(PROPAGATION_EXAMPLE_1)
    board.solve()
    before = board.domains()
    assert board.processed_count == 81

    assert board.solve() is True
    assert board.domains() == before
    # counters are reset per call, as in the backtracking engine
    assert board.processed_count == 0
    assert board.eliminations_count == 0


def test_domains_only_shrink(monkeypatch):
    history = []
    original = Cell.remove_possibility

    def recording_remove(cell, value):
        before = set(cell.possibilities)
        original(cell, value)
        history.append((before, set(cell.possibilities)))

    monkeypatch.setattr(Cell, "remove_possibility", recording_remove)
    board = PropagationBoard(dense(BACKTRACKING_EXAMPLE_1))
    board.solve()

    assert history
    for before, after in history:
        assert after <= before
        assert len(after) >= 1
    assert len(history) == board.eliminations_count


def test_solved_peer_with_other_value_is_left_alone():
    board = PropagationBoard(PROPAGATION_EXAMPLE_2)
    board.reduce_cell_possibilities(0, 0, 3)
    assert board.cells[0][0].candidates() == [5]


def test_contradiction_is_flagged():
    # r1c8 and r1c9 are both forced to 9
    grid = [[0] * 9 for _ in range(9)]
    grid[0][:7] = [1, 2, 3, 4, 5, 6, 7]
    grid[3][7] = 8
    grid[6][8] = 8
    board = PropagationBoard(grid)

    with pytest.raises(ContradictionError, match="both resolve to 9"):
        board.solve()


def test_verbose_reports_newly_solved_cells(capsys):
    PropagationBoard(PROPAGATION_EXAMPLE_2, verbose=True).solve()
    out = capsys.readouterr().out
    assert out.count("SOLVED") == 81 - 30


# ----------------------------
# Processing order does not change the result
# ----------------------------
@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize(
    "puzzle",
    [PROPAGATION_EXAMPLE_2, dense(BACKTRACKING_EXAMPLE_1), parse_puzzle(SEVENTEEN_CLUES)],
)
def test_result_is_independent_of_queue_order(puzzle, seed):
    baseline = PropagationBoard(puzzle)
    baseline.solve()

    shuffled = PropagationBoard(puzzle)
    queued = list(shuffled.solved_cells)
    random.Random(seed).shuffle(queued)
    shuffled.solved_cells = LifoQueue(queued) if seed % 2 else deque(queued)
    shuffled.solve()

    assert shuffled.domains() == baseline.domains()


# ----------------------------
# Rendering
# ----------------------------
def test_domains_snapshot_is_a_copy():
    board = PropagationBoard(PROPAGATION_EXAMPLE_2)
    snapshot = board.domains()
    snapshot[(0, 2)].clear()
    assert board.cells[0][2].candidates() == list(range(1, 10))


def test_format_candidates_shows_pencil_marks():
    board = PropagationBoard(parse_puzzle(SEVENTEEN_CLUES))
    board.solve()
    text = format_candidates(board.domains())
    lines = text.split("\n")
    assert len(lines) == 11
    assert lines[0].count("|") == 2
    assert str(board).split("\n")[0] == ". . . | . . . | . 1 ."


def test_accepts_numpy_grid():
    np = pytest.importorskip("numpy")
    board = PropagationBoard(np.array(PROPAGATION_EXAMPLE_2))
    assert all(type(solved.value) is int for solved in board.solved_cells)
    assert board.solve() is True
    assert flatten(board.grid) == EXAMPLE_2_SOLUTION
