"""Backtracking visualizers: N-Queens, Sudoku, Hamiltonian path and subset sum.

All four run with ``TRACK_BACKTRACKS`` so every Step carries the recorder's
``backtrackCount``. The counter moves once per undone choice, right before
the step that shows the undo. Candidates are always tried in ascending
order (columns, digits 1..9, vertex ids, include before exclude).
"""

from __future__ import annotations

from collections.abc import Sequence

from .. import constants
from ..descriptor import AlgorithmDescriptor, Difficulty
from ..recorder import TraceRecorder
from ..step_data import (
    Cell,
    HamiltonianStepData,
    NQueensStepData,
    SubsetSumStepData,
    SudokuStepData,
    freeze_grid,
)
from ._base import (
    AlgorithmVisualizer,
    require_int,
    require_int_sequence,
    require_non_negative,
    require_square_matrix,
)


class BacktrackingVisualizer(AlgorithmVisualizer):
    TRACK_BACKTRACKS = True


# ── N-Queens ─────────────────────────────────────────────────────


class NQueensVisualizer(BacktrackingVisualizer):
    ALGORITHM_ID = constants.N_QUEENS
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.N_QUEENS,
        name="N-Queens Problem",
        category=constants.CATEGORY_BACKTRACKING,
        description="Place N queens on an N×N chessboard so that no two queens attack each other.",
        time_complexity="O(N!)",
        space_complexity="O(N)",
        difficulty=Difficulty.HARD,
        code="""\
def solve(board, row=0):
    n = len(board)
    if row == n:
        return True
    for col in range(n):
        if is_safe(board, row, col):
            board[row][col] = 1
            if solve(board, row + 1):
                return True
            board[row][col] = 0
    return False


def is_safe(board, row, col):
    n = len(board)
    for r in range(row):
        c = board[r].index(1)
        if c == col or abs(c - col) == row - r:
            return False
    return True
""",
    )

    def __init__(self, n: int = constants.DEFAULT_N_QUEENS):
        self._n = require_non_negative(n, "n")

    @property
    def n(self) -> int:
        return self._n

    def _attackers(self, board: list[list[int]], row: int, col: int) -> list[Cell]:
        """Queens in earlier rows that attack (row, col)."""
        found = []
        for r in range(row):
            for c in range(self._n):
                if board[r][c] and (c == col or abs(c - col) == row - r):
                    found.append((r, c))
        return found

    def _snap(
        self, board: list[list[int]], current: Cell | None = None, conflicts: Sequence[Cell] = ()
    ) -> NQueensStepData:
        queens = tuple(
            (r, c) for r in range(self._n) for c in range(self._n) if board[r][c]
        )
        return NQueensStepData(
            board=freeze_grid(board),
            queens=queens,
            conflicts=tuple(conflicts),
            current_position=current,
        )

    def _run(self, recorder: TraceRecorder) -> None:
        n = self._n
        board = [[0] * n for _ in range(n)]
        recorder.record(f"Starting N-Queens problem with {n}x{n} board", self._snap(board), {})
        if not self._place(recorder, board, 0):
            recorder.record(
                f"No solution exists for {n} queens on a {n}x{n} board",
                self._snap(board),
                {constants.NOT_FOUND_KEY: True},
            )

    def _place(self, recorder: TraceRecorder, board: list[list[int]], row: int) -> bool:
        n = self._n
        if row == n:
            queens = [r * n + c for r in range(n) for c in range(n) if board[r][c]]
            recorder.record(
                f"Solution found! All {n} queens placed successfully.",
                self._snap(board),
                {"solved": True},
                highlights=queens,
                completed=queens,
            )
            return True

        for col in range(n):
            cell = row * n + col
            recorder.record(
                f"Trying to place queen at position ({row}, {col})",
                self._snap(board, (row, col)),
                {"currentPosition": (row, col)},
                highlights=(cell,),
            )
            attackers = self._attackers(board, row, col)
            if attackers:
                recorder.record(
                    f"Position ({row}, {col}) is invalid. Queen conflicts with existing queens.",
                    self._snap(board, (row, col), attackers),
                    {"currentPosition": (row, col), "invalid": True},
                    highlights=(cell,),
                    comparisons=[r * n + c for r, c in attackers],
                )
                continue

            board[row][col] = 1
            recorder.record(
                f"Queen placed at ({row}, {col}). Position is valid.",
                self._snap(board, (row, col)),
                {"currentPosition": (row, col)},
                highlights=(cell,),
                mutations=(cell,),
            )
            if self._place(recorder, board, row + 1):
                return True

            board[row][col] = 0
            recorder.backtrack()
            recorder.record(
                f"Backtracking from ({row}, {col}). Removing queen.",
                self._snap(board, (row, col)),
                {"currentPosition": (row, col), "backtrack": True},
                highlights=(cell,),
                mutations=(cell,),
            )
        return False


# ── Sudoku ───────────────────────────────────────────────────────


def _cell_id(row: int, col: int) -> int:
    return row * constants.SUDOKU_SIZE + col


class SudokuVisualizer(BacktrackingVisualizer):
    ALGORITHM_ID = constants.SUDOKU
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.SUDOKU,
        name="Sudoku Solver",
        category=constants.CATEGORY_BACKTRACKING,
        description=(
            "Fill a 9×9 grid so that every row, column and 3×3 box contains the "
            "digits 1 to 9, trying digits in order and backtracking on dead ends."
        ),
        time_complexity="O(9^m) for m empty cells",
        space_complexity="O(m)",
        difficulty=Difficulty.HARD,
        code="""\
def solve(board):
    for row in range(9):
        for col in range(9):
            if board[row][col] == 0:
                for num in range(1, 10):
                    if is_valid(board, row, col, num):
                        board[row][col] = num
                        if solve(board):
                            return True
                        board[row][col] = 0
                return False
    return True


def is_valid(board, row, col, num):
    if num in board[row]:
        return False
    if any(board[r][col] == num for r in range(9)):
        return False
    br, bc = 3 * (row // 3), 3 * (col // 3)
    return all(board[r][c] != num for r in range(br, br + 3) for c in range(bc, bc + 3))
""",
    )

    def __init__(self, board: Sequence[Sequence[int]] = constants.DEFAULT_SUDOKU):
        grid = require_square_matrix(board, "board")
        if len(grid) != constants.SUDOKU_SIZE:
            raise ValueError(
                f"board must be {constants.SUDOKU_SIZE}x{constants.SUDOKU_SIZE}, "
                f"got {len(grid)}x{len(grid)}"
            )
        for r, row in enumerate(grid):
            for c, v in enumerate(row):
                if not 0 <= v <= constants.SUDOKU_SIZE:
                    raise ValueError(f"board[{r}][{c}] must be between 0 and 9, got {v}")
                if v and self._conflicts(grid, r, c, v):
                    raise ValueError(f"board[{r}][{c}] = {v} clashes with another given digit")
        self._board = grid

    @property
    def board(self) -> tuple[tuple[int, ...], ...]:
        return self._board

    @staticmethod
    def _conflicts(board, row: int, col: int, num: int) -> list[Cell]:
        """Cells other than (row, col) in its row, column or box holding *num*."""
        size, box = constants.SUDOKU_SIZE, constants.SUDOKU_BOX
        cells = [(row, j) for j in range(size) if j != col and board[row][j] == num]
        cells += [(i, col) for i in range(size) if i != row and board[i][col] == num]
        br, bc = row // box * box, col // box * box
        for i in range(br, br + box):
            for j in range(bc, bc + box):
                if (i, j) != (row, col) and board[i][j] == num and (i, j) not in cells:
                    cells.append((i, j))
        return cells

    def _candidates(self, board, row: int, col: int) -> tuple[int, ...]:
        return tuple(
            num
            for num in range(1, constants.SUDOKU_SIZE + 1)
            if not self._conflicts(board, row, col, num)
        )

    def _snap(
        self, board: list[list[int]], cell: Cell | None = None, invalid: Sequence[Cell] = ()
    ) -> SudokuStepData:
        return SudokuStepData(
            board=freeze_grid(board),
            current_cell=cell,
            possible_values=self._candidates(board, *cell) if cell else (),
            invalid_cells=tuple(invalid),
        )

    def _run(self, recorder: TraceRecorder) -> None:
        board = [list(row) for row in self._board]
        recorder.record("Starting Sudoku solver with the given puzzle", self._snap(board), {})
        if not self._solve(recorder, board):
            recorder.record(
                "No valid assignment exists. The puzzle is unsolvable.",
                self._snap(board),
                {constants.NOT_FOUND_KEY: True},
            )

    @staticmethod
    def _first_empty(board: list[list[int]]) -> Cell | None:
        for r, row in enumerate(board):
            for c, v in enumerate(row):
                if v == constants.EMPTY_CELL:
                    return r, c
        return None

    def _solve(self, recorder: TraceRecorder, board: list[list[int]]) -> bool:
        empty = self._first_empty(board)
        if empty is None:
            recorder.record(
                "Sudoku solved! All cells filled correctly.",
                self._snap(board),
                {"solved": True},
                completed=range(constants.SUDOKU_SIZE * constants.SUDOKU_SIZE),
            )
            return True

        row, col = empty
        cell = _cell_id(row, col)
        recorder.record(
            f"Found empty cell at ({row + 1}, {col + 1}). Trying possible values...",
            self._snap(board, empty),
            {},
            highlights=(cell,),
        )
        for num in range(1, constants.SUDOKU_SIZE + 1):
            recorder.record(
                f"Trying value {num} at position ({row + 1}, {col + 1})",
                self._snap(board, empty),
                {"num": num, "trying": True},
                highlights=(cell,),
            )
            clashes = self._conflicts(board, row, col, num)
            if clashes:
                recorder.record(
                    f"Value {num} conflicts with existing numbers. "
                    f"Cannot place at ({row + 1}, {col + 1}).",
                    self._snap(board, empty, clashes),
                    {"num": num, "invalid": True},
                    highlights=(cell,),
                    comparisons=[_cell_id(r, c) for r, c in clashes],
                )
                continue

            board[row][col] = num
            recorder.record(
                f"Value {num} is valid at ({row + 1}, {col + 1}). Placed successfully.",
                self._snap(board, empty),
                {"num": num},
                highlights=(cell,),
                mutations=(cell,),
            )
            if self._solve(recorder, board):
                return True

            board[row][col] = constants.EMPTY_CELL
            recorder.backtrack()
            recorder.record(
                f"Backtracking from ({row + 1}, {col + 1}). Removing {num}.",
                self._snap(board, empty),
                {"num": num, "backtrack": True},
                highlights=(cell,),
                mutations=(cell,),
            )
        return False


# ── Hamiltonian path ─────────────────────────────────────────────


def sample_graph(vertices: int) -> list[list[int]]:
    """A ring over all vertices plus the chords 0-2 and 1-3 where they fit."""
    graph = [[0] * vertices for _ in range(vertices)]

    def link(a: int, b: int) -> None:
        if a != b:
            graph[a][b] = graph[b][a] = 1

    for i in range(vertices):
        link(i, (i + 1) % vertices)
    if vertices > 3:
        link(0, 2)
    if vertices > 4:
        link(1, 3)
    return graph


class HamiltonianPathVisualizer(BacktrackingVisualizer):
    ALGORITHM_ID = constants.HAMILTONIAN_PATH
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.HAMILTONIAN_PATH,
        name="Hamiltonian Path",
        category=constants.CATEGORY_BACKTRACKING,
        description="Find a path that visits every vertex of a graph exactly once.",
        time_complexity="O(N!)",
        space_complexity="O(N)",
        difficulty=Difficulty.HARD,
        code="""\
def hamiltonian_path(graph, path, pos):
    n = len(graph)
    if pos == n:
        return True
    for v in range(n):
        if graph[path[pos - 1]][v] and v not in path:
            path[pos] = v
            if hamiltonian_path(graph, path, pos + 1):
                return True
            path[pos] = -1
    return False
""",
    )

    def __init__(
        self,
        vertices: int | None = None,
        graph: Sequence[Sequence[int]] | None = None,
    ):
        if graph is None:
            count = constants.DEFAULT_HAMILTONIAN_VERTICES if vertices is None else vertices
            require_non_negative(count, "vertices")
            self._graph = freeze_grid(sample_graph(count))
        else:
            self._graph = require_square_matrix(graph, "graph")
            if vertices is not None and require_int(vertices, "vertices") != len(self._graph):
                raise ValueError(
                    f"vertices={vertices} does not match a {len(self._graph)}-vertex graph"
                )
            for i, row in enumerate(self._graph):
                for j, v in enumerate(row):
                    if v not in (0, 1):
                        raise ValueError(f"graph[{i}][{j}] must be 0 or 1, got {v}")
                    if v != self._graph[j][i]:
                        raise ValueError(f"graph must be symmetric: [{i}][{j}] != [{j}][{i}]")

    @property
    def vertices(self) -> int:
        return len(self._graph)

    @property
    def graph(self) -> tuple[tuple[int, ...], ...]:
        return self._graph

    def _snap(self, path: list[int], current: int | None = None) -> HamiltonianStepData:
        visited = tuple(v for v in path if v != constants.UNVISITED_VERTEX)
        return HamiltonianStepData(
            graph=self._graph,
            path=tuple(path),
            current_vertex=current,
            visited_vertices=visited,
            edges=tuple(zip(visited, visited[1:])),
        )

    def _run(self, recorder: TraceRecorder, start_vertex: int = 0) -> None:
        n = self.vertices
        require_int(start_vertex, "start_vertex")
        if n == 0:
            recorder.record(
                "Graph has no vertices. The empty path is trivially Hamiltonian.",
                self._snap([]),
                {"solved": True},
            )
            return
        if not 0 <= start_vertex < n:
            raise ValueError(f"start_vertex must be in [0, {n - 1}], got {start_vertex}")

        path = [constants.UNVISITED_VERTEX] * n
        path[0] = start_vertex
        recorder.record(
            f"Starting Hamiltonian Path search from vertex {start_vertex}",
            self._snap(path, start_vertex),
            {},
            highlights=(start_vertex,),
        )
        if not self._extend(recorder, path, 1):
            recorder.record(
                f"No Hamiltonian path exists starting from vertex {start_vertex}",
                self._snap(path),
                {constants.NOT_FOUND_KEY: True},
            )

    def _extend(self, recorder: TraceRecorder, path: list[int], pos: int) -> bool:
        n = self.vertices
        if pos == n:
            recorder.record(
                "Hamiltonian path found! All vertices visited exactly once.",
                self._snap(path),
                {"solved": True},
                highlights=path,
                completed=path,
            )
            return True

        last = path[pos - 1]
        for vertex in range(n):
            recorder.record(
                f"Trying to add vertex {vertex} to path at position {pos}",
                self._snap(path, vertex),
                {"trying": vertex},
                highlights=(vertex,),
                comparisons=(last, vertex),
            )
            if vertex in path:
                reason = "already visited"
            elif not self._graph[last][vertex]:
                reason = "not adjacent to current vertex"
            else:
                reason = ""
            if reason:
                recorder.record(
                    f"Vertex {vertex} cannot be added: {reason}",
                    self._snap(path, vertex),
                    {"invalid": True, "reason": reason},
                    highlights=(vertex,),
                )
                continue

            path[pos] = vertex
            recorder.record(
                f"Vertex {vertex} added to path. Current path: {path[: pos + 1]}",
                self._snap(path, vertex),
                {},
                highlights=(vertex,),
                mutations=(vertex,),
            )
            if self._extend(recorder, path, pos + 1):
                return True

            path[pos] = constants.UNVISITED_VERTEX
            recorder.backtrack()
            recorder.record(
                f"Backtracking from vertex {vertex}. Removing from path.",
                self._snap(path, vertex),
                {"backtrack": True},
                highlights=(vertex,),
                mutations=(vertex,),
            )
        return False


# ── subset sum ───────────────────────────────────────────────────


class SubsetSumVisualizer(BacktrackingVisualizer):
    """Include/exclude search over non-negative numbers.

    Sums above the target are pruned, which is only sound when no number
    is negative; the constructor enforces that.
    """

    ALGORITHM_ID = constants.SUBSET_SUM
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.SUBSET_SUM,
        name="Subset Sum Problem",
        category=constants.CATEGORY_BACKTRACKING,
        description=(
            "Decide whether some subset of the given numbers adds up exactly to the "
            "target, exploring include and exclude choices with backtracking."
        ),
        time_complexity="O(2^n)",
        space_complexity="O(n)",
        difficulty=Difficulty.MEDIUM,
        code="""\
def subset_sum(numbers, target, index=0, subset=()):
    total = sum(subset)
    if total == target:
        return list(subset)
    if index >= len(numbers) or total > target:
        return None
    with_it = subset_sum(numbers, target, index + 1, subset + (numbers[index],))
    if with_it is not None:
        return with_it
    return subset_sum(numbers, target, index + 1, subset)
""",
    )

    def __init__(
        self,
        numbers: Sequence[int] = constants.DEFAULT_SUBSET_SUM[0],
        target: int = constants.DEFAULT_SUBSET_SUM[1],
    ):
        self._numbers = require_int_sequence(numbers, "numbers")
        for i, v in enumerate(self._numbers):
            require_non_negative(v, f"numbers[{i}]")
        self._target = require_non_negative(target, "target")

    @property
    def numbers(self) -> tuple[int, ...]:
        return self._numbers

    @property
    def target(self) -> int:
        return self._target

    def _snap(self, chosen: list[int], index: int) -> SubsetSumStepData:
        return SubsetSumStepData(
            numbers=self._numbers,
            target=self._target,
            current_subset=tuple(self._numbers[i] for i in chosen),
            current_sum=sum(self._numbers[i] for i in chosen),
            current_index=index,
            subset_indices=tuple(chosen),
        )

    def _run(self, recorder: TraceRecorder) -> None:
        recorder.record(
            f"Starting Subset Sum problem. Target: {self._target}, "
            f"Numbers: {list(self._numbers)}",
            self._snap([], -1),
            {},
        )
        if not self._search(recorder, 0, []):
            recorder.record(
                f"No subset found that sums to {self._target}",
                self._snap([], -1),
                {constants.NOT_FOUND_KEY: True},
            )

    def _search(self, recorder: TraceRecorder, index: int, chosen: list[int]) -> bool:
        numbers = self._numbers
        total = sum(numbers[i] for i in chosen)
        focus = (index,) if index < len(numbers) else ()

        if total == self._target:
            recorder.record(
                f"Solution found! Subset {[numbers[i] for i in chosen]} sums to {self._target}",
                self._snap(chosen, -1),
                {"found": True, "solved": True},
                comparisons=chosen,
                completed=chosen,
            )
            return True

        if index >= len(numbers) or total > self._target:
            if total > self._target:
                description = (
                    f"Current sum {total} exceeds target {self._target}. Backtracking..."
                )
            else:
                description = "Reached end of array without finding solution. Backtracking..."
            recorder.record(
                description,
                self._snap(chosen, index),
                {"deadEnd": True, "exceeded": total > self._target},
                highlights=focus,
                comparisons=chosen,
            )
            return False

        number = numbers[index]
        recorder.record(
            f"Considering number {number} at index {index}. Current sum: {total}",
            self._snap(chosen, index),
            {"considering": True},
            highlights=focus,
            comparisons=chosen,
        )
        recorder.record(
            f"Including {number} in subset. New sum would be: {total + number}",
            self._snap(chosen, index),
            {"including": True},
            highlights=focus,
            comparisons=chosen,
        )
        if self._search(recorder, index + 1, chosen + [index]):
            return True

        recorder.backtrack()
        recorder.record(
            f"Excluding {number} from subset. Trying without it...",
            self._snap(chosen, index),
            {"excluding": True, "backtrack": True},
            highlights=focus,
            comparisons=chosen,
        )
        return self._search(recorder, index + 1, chosen)
