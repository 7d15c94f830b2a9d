"""Instrumented algorithm visualizers, keyed by algorithm id."""

from __future__ import annotations

import importlib
from typing import Any

from .. import constants
from ._base import AlgorithmVisualizer

# Lazy imports to avoid loading every family at startup
_VISUALIZER_CLASSES: dict[str, str] = {
    constants.BUBBLE_SORT: "sorting.BubbleSortVisualizer",
    constants.INSERTION_SORT: "sorting.InsertionSortVisualizer",
    constants.SELECTION_SORT: "sorting.SelectionSortVisualizer",
    constants.QUICK_SORT: "sorting.QuickSortVisualizer",
    constants.MERGE_SORT: "sorting.MergeSortVisualizer",
    constants.LINEAR_SEARCH: "searching.LinearSearchVisualizer",
    constants.BINARY_SEARCH: "searching.BinarySearchVisualizer",
    constants.JUMP_SEARCH: "searching.JumpSearchVisualizer",
    constants.INTERPOLATION_SEARCH: "searching.InterpolationSearchVisualizer",
    constants.BINARY_SEARCH_TREE: "tree_search.BinarySearchTreeVisualizer",
    constants.B_TREE_SEARCH: "tree_search.BTreeSearchVisualizer",
    constants.TRIE_SEARCH: "tree_search.TrieSearchVisualizer",
    constants.N_QUEENS: "backtracking.NQueensVisualizer",
    constants.SUDOKU: "backtracking.SudokuVisualizer",
    constants.HAMILTONIAN_PATH: "backtracking.HamiltonianPathVisualizer",
    constants.SUBSET_SUM: "backtracking.SubsetSumVisualizer",
}

_CATEGORY_MODULES: dict[str, str] = {
    constants.CATEGORY_SORTING: "sorting",
    constants.CATEGORY_SEARCHING: "searching",
    constants.CATEGORY_TREE_SEARCH: "tree_search",
    constants.CATEGORY_BACKTRACKING: "backtracking",
}


def get_visualizer_class(algorithm_id: str) -> type[AlgorithmVisualizer]:
    """Resolve the visualizer class registered for *algorithm_id*.

    Raises ``ValueError`` if *algorithm_id* is not registered.
    """
    entry = _VISUALIZER_CLASSES.get(algorithm_id)
    if entry is None:
        raise ValueError(f"Unsupported algorithm: {algorithm_id}")
    module_name, class_name = entry.split(".")
    mod = importlib.import_module(f".{module_name}", package=__package__)
    return getattr(mod, class_name)


def get_visualizer(algorithm_id: str, **params: Any) -> AlgorithmVisualizer:
    """Instantiate the visualizer for *algorithm_id* with constructor *params*."""
    return get_visualizer_class(algorithm_id)(**params)


def algorithms_in_category(category: str) -> tuple[str, ...]:
    module_name = _CATEGORY_MODULES.get(category)
    if module_name is None:
        raise ValueError(f"Unknown algorithm category: {category}")
    return tuple(
        algorithm_id
        for algorithm_id, entry in _VISUALIZER_CLASSES.items()
        if entry.split(".")[0] == module_name
    )


SUPPORTED_ALGORITHMS: tuple[str, ...] = tuple(_VISUALIZER_CLASSES.keys())
SUPPORTED_CATEGORIES: tuple[str, ...] = tuple(_CATEGORY_MODULES.keys())

__all__ = [
    "AlgorithmVisualizer",
    "get_visualizer",
    "get_visualizer_class",
    "algorithms_in_category",
    "SUPPORTED_ALGORITHMS",
    "SUPPORTED_CATEGORIES",
]
