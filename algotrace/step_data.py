"""Step payload variants: one frozen record type per algorithm family.

All collections are tuples so that a captured payload cannot be changed
after the fact; the recorder converts the algorithm's working lists into
these records at capture time.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import ClassVar, Union

Cell = tuple[int, int]
Grid = tuple[tuple[int, ...], ...]


def freeze_grid(grid) -> Grid:
    return tuple(tuple(row) for row in grid)


@dataclass(frozen=True)
class SortStepData:
    kind: ClassVar[str] = "sort"

    array: tuple[int, ...]
    left_run: tuple[int, ...] = ()
    right_run: tuple[int, ...] = ()


@dataclass(frozen=True)
class SearchStepData:
    kind: ClassVar[str] = "search"

    array: tuple[int, ...]
    target: int
    position: int = -1
    search_range: tuple[int, int] | None = None
    probe: int | None = None


@dataclass(frozen=True)
class TreeNodeView:
    id: str
    keys: tuple[int, ...]
    is_leaf: bool


@dataclass(frozen=True)
class TreeStepData:
    """Level-order snapshot of a BST or B-tree plus the search cursor."""

    kind: ClassVar[str] = "tree"

    nodes: tuple[TreeNodeView, ...]
    edges: tuple[tuple[str, str], ...]
    target: int
    current_node: str | None = None
    search_path: tuple[str, ...] = ()


@dataclass(frozen=True)
class TrieNodeView:
    id: str
    label: str
    is_end_of_word: bool


@dataclass(frozen=True)
class TrieStepData:
    kind: ClassVar[str] = "trie"

    nodes: tuple[TrieNodeView, ...]
    edges: tuple[tuple[str, str, str], ...]
    word: str
    current_node: str = "root"
    search_path: tuple[str, ...] = ()
    matches: tuple[str, ...] = ()


@dataclass(frozen=True)
class NQueensStepData:
    kind: ClassVar[str] = "n-queens"

    board: Grid
    queens: tuple[Cell, ...]
    conflicts: tuple[Cell, ...]
    current_position: Cell | None = None


@dataclass(frozen=True)
class SudokuStepData:
    kind: ClassVar[str] = "sudoku"

    board: Grid
    current_cell: Cell | None = None
    possible_values: tuple[int, ...] = ()
    invalid_cells: tuple[Cell, ...] = ()


@dataclass(frozen=True)
class HamiltonianStepData:
    kind: ClassVar[str] = "hamiltonian-path"

    graph: Grid
    path: tuple[int, ...]
    current_vertex: int | None = None
    visited_vertices: tuple[int, ...] = ()
    edges: tuple[tuple[int, int], ...] = ()


@dataclass(frozen=True)
class SubsetSumStepData:
    kind: ClassVar[str] = "subset-sum"

    numbers: tuple[int, ...]
    target: int
    current_subset: tuple[int, ...]
    current_sum: int
    current_index: int
    subset_indices: tuple[int, ...] = ()


StepData = Union[
    SortStepData,
    SearchStepData,
    TreeStepData,
    TrieStepData,
    NQueensStepData,
    SudokuStepData,
    HamiltonianStepData,
    SubsetSumStepData,
]


def step_data_to_dict(data: StepData) -> dict:
    return {"kind": data.kind, **asdict(data)}
