"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

# ── categories ───────────────────────────────────────────────────

CATEGORY_SORTING = "Sorting"
CATEGORY_SEARCHING = "Searching"
CATEGORY_TREE_SEARCH = "Tree Search"
CATEGORY_BACKTRACKING = "Backtracking"

# ── algorithm identifiers ────────────────────────────────────────

BUBBLE_SORT = "bubble-sort"
INSERTION_SORT = "insertion-sort"
SELECTION_SORT = "selection-sort"
QUICK_SORT = "quick-sort"
MERGE_SORT = "merge-sort"

LINEAR_SEARCH = "linear-search"
BINARY_SEARCH = "binary-search"
JUMP_SEARCH = "jump-search"
INTERPOLATION_SEARCH = "interpolation-search"

BINARY_SEARCH_TREE = "binary-search-tree"
B_TREE_SEARCH = "b-tree-search"
TRIE_SEARCH = "trie-search"

N_QUEENS = "n-queens"
SUDOKU = "sudoku"
HAMILTONIAN_PATH = "hamiltonian-path"
SUBSET_SUM = "subset-sum"

# ── tree operations ──────────────────────────────────────────────

OP_SEARCH = "search"
OP_INSERT = "insert"
OP_DELETE = "delete"

# ── default inputs ───────────────────────────────────────────────

DEFAULT_SORT_ARRAY: tuple[int, ...] = (64, 34, 25, 12, 22, 11, 90)
DEFAULT_LINEAR_SEARCH: tuple[tuple[int, ...], int] = ((64, 34, 25, 12, 22, 11, 90), 22)
DEFAULT_BINARY_SEARCH: tuple[tuple[int, ...], int] = ((11, 12, 22, 25, 34, 64, 90), 25)
DEFAULT_JUMP_SEARCH: tuple[tuple[int, ...], int] = (
    (0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89),
    21,
)
DEFAULT_INTERPOLATION_SEARCH: tuple[tuple[int, ...], int] = (
    (10, 12, 13, 16, 18, 19, 20, 21, 22, 23, 24, 33, 35, 42, 47),
    22,
)

DEFAULT_BST_VALUES: tuple[int, ...] = (50, 30, 70, 20, 40, 60, 80)
DEFAULT_BST_VALUE = 45
DEFAULT_B_TREE_KEYS: tuple[int, ...] = (10, 20, 30, 40, 50, 60, 70, 80, 90, 100)
DEFAULT_B_TREE_ORDER = 3
DEFAULT_B_TREE_VALUE = 55
DEFAULT_TRIE_WORDS: tuple[str, ...] = (
    "apple",
    "app",
    "application",
    "banana",
    "band",
    "bat",
    "cat",
    "car",
)
DEFAULT_TRIE_INPUT = "app"

DEFAULT_N_QUEENS = 8
DEFAULT_HAMILTONIAN_VERTICES = 5
DEFAULT_SUBSET_SUM: tuple[tuple[int, ...], int] = ((3, 34, 4, 12, 5, 2), 9)
DEFAULT_SUDOKU: tuple[tuple[int, ...], ...] = (
    (5, 3, 0, 0, 7, 0, 0, 0, 0),
    (6, 0, 0, 1, 9, 5, 0, 0, 0),
    (0, 9, 8, 0, 0, 0, 0, 6, 0),
    (8, 0, 0, 0, 6, 0, 0, 0, 3),
    (4, 0, 0, 8, 0, 3, 0, 0, 1),
    (7, 0, 0, 0, 2, 0, 0, 0, 6),
    (0, 6, 0, 0, 0, 0, 2, 8, 0),
    (0, 0, 0, 4, 1, 9, 0, 0, 5),
    (0, 0, 0, 0, 8, 0, 0, 7, 9),
)

SUDOKU_SIZE = 9
SUDOKU_BOX = 3
EMPTY_CELL = 0
UNVISITED_VERTEX = -1

# ── metadata keys shared across families ────────────────────────

BACKTRACK_COUNT_KEY = "backtrackCount"
NOT_FOUND_KEY = "notFound"

# ── playback ─────────────────────────────────────────────────────

DEFAULT_BASE_INTERVAL = 1.0
DEFAULT_SPEED = 1.0
MIN_SPEED = 0.5
MAX_SPEED = 3.0
SPEED_STEP = 0.5

SCHEDULER_THREADING = "threading"
SCHEDULER_MANUAL = "manual"
