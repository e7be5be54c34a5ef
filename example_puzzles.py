# example_puzzles.py
from typing import List, Tuple

from sudoku_grid import Grid

# ----------------------------
# Backtracking examples (sparse clues: flat index -> digit)
# ----------------------------
BACKTRACKING_EXAMPLE_1: List[Tuple[int, int]] = [
    (2, 7), (6, 3), (7, 1), (9, 6), (13, 9), (15, 7), (19, 1), (23, 8), (27, 2), (29, 6), (30, 8),
    (32, 9), (37, 4), (39, 6), (41, 1), (43, 9), (48, 3), (50, 7), (51, 8), (53, 6), (57, 7),
    (61, 3), (65, 1), (67, 8), (71, 2), (73, 2), (74, 5), (78, 6),
]

BACKTRACKING_EXAMPLE_2: List[Tuple[int, int]] = [
    (2, 4), (9, 9), (10, 5), (12, 4), (17, 8), (22, 1), (24, 5), (26, 6), (28, 3), (30, 6),
    (35, 5), (37, 1), (39, 3), (41, 8), (43, 6), (45, 4), (50, 5), (52, 7), (54, 8), (56, 9),
    (58, 4), (63, 3), (68, 2), (70, 5), (71, 4), (78, 2),
]

# ----------------------------
# Propagation examples (dense 9x9, 0 = empty)
# ----------------------------
PROPAGATION_EXAMPLE_1: Grid = [
    [7, 0, 6, 0, 4, 0, 9, 0, 0],
    [0, 0, 0, 1, 6, 2, 0, 7, 0],
    [5, 0, 3, 0, 0, 0, 1, 0, 4],
    [0, 5, 0, 6, 0, 4, 0, 1, 0],
    [4, 3, 0, 0, 0, 0, 0, 2, 6],
    [0, 6, 0, 3, 0, 9, 0, 4, 0],
    [3, 0, 4, 0, 0, 0, 6, 0, 8],
    [0, 7, 0, 8, 3, 6, 0, 0, 0],
    [0, 0, 1, 0, 9, 0, 2, 0, 7],
]

PROPAGATION_EXAMPLE_2: Grid = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]

# minimal puzzle; naked singles resolve a single cell and then stall
SEVENTEEN_CLUES = (
    "000000010"
    "400000000"
    "020000000"
    "000050407"
    "008000300"
    "001090000"
    "300400200"
    "050100000"
    "000806000"
)
