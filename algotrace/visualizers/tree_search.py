"""Tree search visualizers: binary search tree, B-tree and trie.

Each visualizer builds its tree once at construction and deep-copies it at
the start of every ``generate_steps`` call, so insert and delete traces
never leak into the next run.
"""

from __future__ import annotations

import copy
import logging
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field

from .. import constants
from ..descriptor import AlgorithmDescriptor, Difficulty
from ..recorder import TraceRecorder
from ..step_data import TreeNodeView, TreeStepData, TrieNodeView, TrieStepData
from ._base import AlgorithmVisualizer, require_int, require_int_sequence

logger = logging.getLogger(__name__)


def _require_operation(operation: str, allowed: tuple[str, ...]) -> str:
    if operation not in allowed:
        raise ValueError(f"Unknown tree operation: {operation!r} (expected one of {allowed})")
    return operation


# ── binary search tree ───────────────────────────────────────────


@dataclass
class BSTNode:
    value: int
    left: BSTNode | None = None
    right: BSTNode | None = None


def bst_insert(root: BSTNode | None, value: int) -> BSTNode:
    """Insert *value* without recording; duplicates are ignored."""
    node = BSTNode(value)
    if root is None:
        return node
    current = root
    while True:
        if value == current.value:
            return root
        if value < current.value:
            if current.left is None:
                current.left = node
                return root
            current = current.left
        else:
            if current.right is None:
                current.right = node
                return root
            current = current.right


def _bst_snapshot(
    root: BSTNode | None, target: int, current: int | None, path: list[int]
) -> TreeStepData:
    nodes: list[TreeNodeView] = []
    edges: list[tuple[str, str]] = []
    queue = deque([root] if root else [])
    while queue:
        node = queue.popleft()
        nodes.append(
            TreeNodeView(
                id=str(node.value),
                keys=(node.value,),
                is_leaf=node.left is None and node.right is None,
            )
        )
        for child in (node.left, node.right):
            if child is not None:
                edges.append((str(node.value), str(child.value)))
                queue.append(child)
    return TreeStepData(
        nodes=tuple(nodes),
        edges=tuple(edges),
        target=target,
        current_node=None if current is None else str(current),
        search_path=tuple(str(v) for v in path),
    )


class BinarySearchTreeVisualizer(AlgorithmVisualizer):
    ALGORITHM_ID = constants.BINARY_SEARCH_TREE
    OPERATIONS = (constants.OP_SEARCH, constants.OP_INSERT, constants.OP_DELETE)
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.BINARY_SEARCH_TREE,
        name="Binary Search Tree",
        category=constants.CATEGORY_TREE_SEARCH,
        description=(
            "A tree in which every node has at most two children, with smaller "
            "values in the left subtree and larger values in the right subtree."
        ),
        time_complexity="O(log n) average, O(n) worst",
        space_complexity="O(n)",
        difficulty=Difficulty.MEDIUM,
        code="""\
class Node:
    def __init__(self, value):
        self.value = value
        self.left = None
        self.right = None


def search(root, value):
    current = root
    while current is not None:
        if value == current.value:
            return current
        current = current.left if value < current.value else current.right
    return None


def delete(root, value):
    if root is None:
        return None
    if value < root.value:
        root.left = delete(root.left, value)
    elif value > root.value:
        root.right = delete(root.right, value)
    else:
        if root.left is None:
            return root.right
        if root.right is None:
            return root.left
        successor = root.right
        while successor.left is not None:
            successor = successor.left
        root.value = successor.value
        root.right = delete(root.right, successor.value)
    return root
""",
    )

    def __init__(self, values: Sequence[int] = constants.DEFAULT_BST_VALUES):
        self._values = require_int_sequence(values, "values")
        self._root: BSTNode | None = None
        for v in self._values:
            self._root = bst_insert(self._root, v)

    def _run(
        self,
        recorder: TraceRecorder,
        operation: str = constants.OP_SEARCH,
        value: int = constants.DEFAULT_BST_VALUE,
    ) -> None:
        _require_operation(operation, self.OPERATIONS)
        require_int(value, "value")
        root = copy.deepcopy(self._root)
        if operation == constants.OP_SEARCH:
            self._search(recorder, root, value)
        elif operation == constants.OP_INSERT:
            self._insert(recorder, root, value)
        else:
            self._delete(recorder, root, value)

    def _search(self, recorder: TraceRecorder, root: BSTNode | None, value: int) -> None:
        if root is None:
            recorder.record(
                f"Tree is empty. Cannot search for {value}.",
                _bst_snapshot(root, value, None, []),
                {"target": value, constants.NOT_FOUND_KEY: True},
            )
            return
        recorder.record(
            f"Starting search for value {value} in the Binary Search Tree",
            _bst_snapshot(root, value, None, []),
            {"target": value, "starting": True},
        )
        path: list[int] = []
        current: BSTNode | None = root
        while current is not None:
            path.append(current.value)
            recorder.record(
                f"Comparing target {value} with current node {current.value}",
                _bst_snapshot(root, value, current.value, path),
                {"target": value, "comparing": True},
                highlights=(current.value,),
                comparisons=path,
            )
            if value == current.value:
                recorder.record(
                    f"Found target {value}!",
                    _bst_snapshot(root, value, current.value, path),
                    {"target": value, "found": True},
                    highlights=(current.value,),
                    comparisons=path,
                    completed=(current.value,),
                )
                return
            if value < current.value:
                recorder.record(
                    f"{value} < {current.value}, moving to left subtree",
                    _bst_snapshot(root, value, current.value, path),
                    {"target": value, "movingLeft": True},
                    highlights=(current.value,),
                    comparisons=path,
                )
                current = current.left
            else:
                recorder.record(
                    f"{value} > {current.value}, moving to right subtree",
                    _bst_snapshot(root, value, current.value, path),
                    {"target": value, "movingRight": True},
                    highlights=(current.value,),
                    comparisons=path,
                )
                current = current.right
        recorder.record(
            f"Target {value} not found in the tree",
            _bst_snapshot(root, value, None, path),
            {"target": value, constants.NOT_FOUND_KEY: True},
            comparisons=path,
        )

    def _insert(self, recorder: TraceRecorder, root: BSTNode | None, value: int) -> None:
        recorder.record(
            f"Starting insertion of value {value} into the Binary Search Tree",
            _bst_snapshot(root, value, None, []),
            {"target": value, "starting": True},
        )
        if root is None:
            root = BSTNode(value)
            recorder.record(
                f"Tree was empty. Created root node with value {value}",
                _bst_snapshot(root, value, value, [value]),
                {"target": value, "inserted": True},
                highlights=(value,),
                completed=(value,),
            )
            return

        path: list[int] = []
        parent = root
        current: BSTNode | None = root
        while current is not None:
            parent = current
            path.append(current.value)
            recorder.record(
                f"Comparing {value} with current node {current.value}",
                _bst_snapshot(root, value, current.value, path),
                {"target": value, "comparing": True},
                highlights=(current.value,),
                comparisons=path,
            )
            if value == current.value:
                recorder.record(
                    f"Value {value} already exists in the tree. No insertion needed.",
                    _bst_snapshot(root, value, current.value, path),
                    {"target": value, "alreadyExists": True},
                    highlights=(current.value,),
                    comparisons=path,
                    completed=(current.value,),
                )
                return
            side = "left" if value < current.value else "right"
            recorder.record(
                f"{value} {'<' if side == 'left' else '>'} {current.value}, "
                f"moving to {side} child",
                _bst_snapshot(root, value, current.value, path),
                {"target": value, "movingLeft" if side == "left" else "movingRight": True},
                highlights=(current.value,),
                comparisons=path,
            )
            current = current.left if side == "left" else current.right

        side = "left" if value < parent.value else "right"
        if side == "left":
            parent.left = BSTNode(value)
        else:
            parent.right = BSTNode(value)
        recorder.record(
            f"Inserting {value} as {side} child of {parent.value}",
            _bst_snapshot(root, value, value, path + [value]),
            {"target": value, "inserted": True, "parent": parent.value, "position": side},
            highlights=(value,),
            completed=(value,),
        )

    def _delete(self, recorder: TraceRecorder, root: BSTNode | None, value: int) -> None:
        if root is None:
            recorder.record(
                f"Tree is empty. Cannot delete {value}.",
                _bst_snapshot(root, value, None, []),
                {"target": value, constants.NOT_FOUND_KEY: True},
            )
            return
        recorder.record(
            f"Starting deletion of value {value} from the Binary Search Tree",
            _bst_snapshot(root, value, None, []),
            {"target": value, "starting": True},
        )

        path: list[int] = []
        parent: BSTNode | None = None
        current: BSTNode | None = root
        while current is not None and current.value != value:
            parent = current
            path.append(current.value)
            recorder.record(
                f"Searching for {value} to delete. Comparing with {current.value}",
                _bst_snapshot(root, value, current.value, path),
                {"target": value, "comparing": True},
                highlights=(current.value,),
                comparisons=path,
            )
            current = current.left if value < current.value else current.right

        if current is None:
            recorder.record(
                f"Value {value} not found in the tree. Nothing to delete.",
                _bst_snapshot(root, value, None, path),
                {"target": value, constants.NOT_FOUND_KEY: True},
                comparisons=path,
            )
            return

        path.append(current.value)
        recorder.record(
            f"Found node with value {value} to delete",
            _bst_snapshot(root, value, value, path),
            {"target": value, "found": True},
            highlights=(value,),
            comparisons=path,
        )

        def replace(node: BSTNode | None) -> BSTNode | None:
            """Hang *node* where ``current`` used to be; returns the new root."""
            if parent is None:
                return node
            if parent.left is current:
                parent.left = node
            else:
                parent.right = node
            return root

        if current.left is None and current.right is None:
            recorder.record(
                f"Node {value} has no children. Simple removal.",
                _bst_snapshot(root, value, value, path),
                {"target": value, "case": "no-children"},
                highlights=(value,),
            )
            root = replace(None)
        elif current.right is None:
            recorder.record(
                f"Node {value} has only a left child. Replacing with left child.",
                _bst_snapshot(root, value, value, path),
                {"target": value, "case": "one-child-left"},
                highlights=(value,),
            )
            root = replace(current.left)
        elif current.left is None:
            recorder.record(
                f"Node {value} has only a right child. Replacing with right child.",
                _bst_snapshot(root, value, value, path),
                {"target": value, "case": "one-child-right"},
                highlights=(value,),
            )
            root = replace(current.right)
        else:
            recorder.record(
                f"Node {value} has two children. Finding in-order successor...",
                _bst_snapshot(root, value, value, path),
                {"target": value, "case": "two-children"},
                highlights=(value,),
            )
            successor_parent = current
            successor = current.right
            successor_path = list(path) + [successor.value]
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left
                successor_path.append(successor.value)
                recorder.record(
                    f"Looking for successor. Moving to {successor.value}",
                    _bst_snapshot(root, value, successor.value, successor_path),
                    {"target": value, "findingSuccessor": True},
                    highlights=(successor.value,),
                )
            recorder.record(
                f"Found successor {successor.value} for node {value}",
                _bst_snapshot(root, value, successor.value, successor_path),
                {"target": value, "successorFound": True, "successor": successor.value},
                highlights=(successor.value,),
            )
            if successor_parent is not current:
                successor_parent.left = successor.right
                successor.right = current.right
            successor.left = current.left
            root = replace(successor)
            recorder.record(
                f"Replaced node {value} with successor {successor.value}",
                _bst_snapshot(root, value, successor.value, path[:-1]),
                {"target": value, "replaced": True, "successor": successor.value},
                highlights=(successor.value,),
            )

        recorder.record(
            f"Successfully deleted node with value {value} from the tree",
            _bst_snapshot(root, value, None, path[:-1]),
            {"target": value, "deleted": True},
            completed=(value,),
        )


# ── B-tree ───────────────────────────────────────────────────────


@dataclass
class BTreeNode:
    is_leaf: bool = True
    keys: list[int] = field(default_factory=list)
    children: list[BTreeNode] = field(default_factory=list)


def btree_split_child(parent: BTreeNode, index: int, order: int) -> None:
    """Split the full child ``parent.children[index]`` around its median key."""
    child = parent.children[index]
    sibling = BTreeNode(is_leaf=child.is_leaf)
    median = child.keys[order - 1]
    sibling.keys = child.keys[order:]
    if not child.is_leaf:
        sibling.children = child.children[order:]
        child.children = child.children[:order]
    child.keys = child.keys[: order - 1]
    parent.children.insert(index + 1, sibling)
    parent.keys.insert(index, median)


def btree_contains(node: BTreeNode, key: int) -> bool:
    while True:
        i = 0
        while i < len(node.keys) and key > node.keys[i]:
            i += 1
        if i < len(node.keys) and node.keys[i] == key:
            return True
        if node.is_leaf:
            return False
        node = node.children[i]


def _btree_layout(root: BTreeNode) -> tuple[list[tuple[str, BTreeNode]], list[tuple[str, str]]]:
    """Level-order ids: ``root`` then ``node-1``, ``node-2``, ..."""
    ordered: list[tuple[str, BTreeNode]] = []
    edges: list[tuple[str, str]] = []
    counter = 0
    queue = deque([("root", root)])
    while queue:
        node_id, node = queue.popleft()
        ordered.append((node_id, node))
        if not node.is_leaf:
            for child in node.children:
                counter += 1
                child_id = f"node-{counter}"
                edges.append((node_id, child_id))
                queue.append((child_id, child))
    return ordered, edges


def _btree_snapshot(
    root: BTreeNode, target: int, current: BTreeNode | None, path: list[BTreeNode]
) -> TreeStepData:
    ordered, edges = _btree_layout(root)
    ids = {id(node): node_id for node_id, node in ordered}
    return TreeStepData(
        nodes=tuple(
            TreeNodeView(id=node_id, keys=tuple(node.keys), is_leaf=node.is_leaf)
            for node_id, node in ordered
        ),
        edges=tuple(edges),
        target=target,
        current_node=ids.get(id(current)) if current is not None else None,
        search_path=tuple(ids[id(node)] for node in path if id(node) in ids),
    )


class BTreeSearchVisualizer(AlgorithmVisualizer):
    """B-tree of minimum degree ``order``: every node holds at most 2·order-1 keys."""

    ALGORITHM_ID = constants.B_TREE_SEARCH
    OPERATIONS = (constants.OP_SEARCH, constants.OP_INSERT)
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.B_TREE_SEARCH,
        name="B-Tree Search",
        category=constants.CATEGORY_TREE_SEARCH,
        description=(
            "A self-balancing multiway search tree that keeps sorted keys in wide "
            "nodes and splits full nodes on the way down during insertion."
        ),
        time_complexity="O(log n)",
        space_complexity="O(n)",
        difficulty=Difficulty.HARD,
        code="""\
def search(node, key):
    i = 0
    while i < len(node.keys) and key > node.keys[i]:
        i += 1
    if i < len(node.keys) and node.keys[i] == key:
        return node
    if node.is_leaf:
        return None
    return search(node.children[i], key)
""",
    )

    def __init__(
        self,
        keys: Sequence[int] = constants.DEFAULT_B_TREE_KEYS,
        order: int = constants.DEFAULT_B_TREE_ORDER,
    ):
        require_int(order, "order")
        if order < 2:
            raise ValueError(f"order (minimum degree) must be at least 2, got {order}")
        self._order = order
        self._keys = require_int_sequence(keys, "keys")
        self._root = BTreeNode()
        for key in self._keys:
            self._root = self._insert_silently(self._root, key)

    @property
    def order(self) -> int:
        return self._order

    @property
    def max_keys(self) -> int:
        return 2 * self._order - 1

    def _insert_silently(self, root: BTreeNode, key: int) -> BTreeNode:
        if len(root.keys) == self.max_keys:
            new_root = BTreeNode(is_leaf=False, children=[root])
            btree_split_child(new_root, 0, self._order)
            root = new_root
        node = root
        while not node.is_leaf:
            i = len(node.keys) - 1
            while i >= 0 and key < node.keys[i]:
                i -= 1
            i += 1
            if len(node.children[i].keys) == self.max_keys:
                btree_split_child(node, i, self._order)
                if key > node.keys[i]:
                    i += 1
            node = node.children[i]
        node.keys.append(key)
        node.keys.sort()
        return root

    def _run(
        self,
        recorder: TraceRecorder,
        operation: str = constants.OP_SEARCH,
        value: int = constants.DEFAULT_B_TREE_VALUE,
    ) -> None:
        _require_operation(operation, self.OPERATIONS)
        require_int(value, "value")
        root = copy.deepcopy(self._root)
        if operation == constants.OP_SEARCH:
            self._search(recorder, root, value)
        else:
            self._insert(recorder, root, value)

    def _search(self, recorder: TraceRecorder, root: BTreeNode, key: int) -> None:
        recorder.record(
            f"Starting search for key {key} in the B-Tree of order {self._order}",
            _btree_snapshot(root, key, None, []),
            {"target": key, "order": self._order, "starting": True},
            highlights=(key,),
        )
        path: list[BTreeNode] = []
        node = root
        while True:
            i = 0
            while i < len(node.keys) and key > node.keys[i]:
                i += 1
            path.append(node)
            probe = (node.keys[i],) if i < len(node.keys) else ()
            recorder.record(
                f"Searching in node with keys {node.keys}",
                _btree_snapshot(root, key, node, path),
                {"target": key},
                highlights=(key,),
                comparisons=probe,
            )
            if i < len(node.keys) and node.keys[i] == key:
                recorder.record(
                    f"Found key {key} in the B-Tree!",
                    _btree_snapshot(root, key, node, path),
                    {"target": key, "found": True},
                    highlights=(key,),
                    completed=(key,),
                )
                return
            if node.is_leaf:
                recorder.record(
                    f"Key {key} not found in the B-Tree.",
                    _btree_snapshot(root, key, node, path),
                    {"target": key, constants.NOT_FOUND_KEY: True},
                    highlights=(key,),
                )
                return
            recorder.record(
                f"Key {key} not found in current node. Moving to child node {i}.",
                _btree_snapshot(root, key, node, path),
                {"target": key, "movingToChild": True, "childIndex": i},
                highlights=(key,),
            )
            node = node.children[i]

    def _insert(self, recorder: TraceRecorder, root: BTreeNode, key: int) -> None:
        recorder.record(
            f"Starting insertion of key {key} into the B-Tree",
            _btree_snapshot(root, key, None, []),
            {"target": key, "order": self._order, "starting": True},
            highlights=(key,),
        )
        if btree_contains(root, key):
            recorder.record(
                f"Key {key} already exists in the B-Tree. No insertion needed.",
                _btree_snapshot(root, key, None, []),
                {"target": key, "alreadyExists": True},
                highlights=(key,),
                completed=(key,),
            )
            return

        if len(root.keys) == self.max_keys:
            root = BTreeNode(is_leaf=False, children=[root])
            btree_split_child(root, 0, self._order)
            recorder.record(
                "Root node is full. Creating new root and splitting.",
                _btree_snapshot(root, key, root, [root]),
                {"target": key, "split": True, "newRoot": True},
                highlights=(key,),
            )

        path: list[BTreeNode] = []
        node = root
        while True:
            path.append(node)
            recorder.record(
                f"Inserting key {key} into node with keys {node.keys}",
                _btree_snapshot(root, key, node, path),
                {"target": key},
                highlights=(key,),
            )
            if node.is_leaf:
                break
            i = len(node.keys) - 1
            while i >= 0 and key < node.keys[i]:
                i -= 1
            i += 1
            recorder.record(
                f"Key {key} will be inserted in child {i}",
                _btree_snapshot(root, key, node, path),
                {"target": key, "childIndex": i},
                highlights=(key,),
            )
            if len(node.children[i].keys) == self.max_keys:
                btree_split_child(node, i, self._order)
                recorder.record(
                    f"Child node is full. Splitting child {i}; "
                    f"median {node.keys[i]} moves up.",
                    _btree_snapshot(root, key, node, path),
                    {"target": key, "split": True, "childIndex": i},
                    highlights=(key,),
                )
                if key > node.keys[i]:
                    i += 1
            node = node.children[i]

        node.keys.append(key)
        node.keys.sort()
        recorder.record(
            f"Inserted key {key} into leaf node. New keys: {node.keys}",
            _btree_snapshot(root, key, node, path),
            {"target": key, "inserted": True},
            highlights=(key,),
            completed=(key,),
        )


# ── trie ─────────────────────────────────────────────────────────


@dataclass
class TrieNode:
    children: dict[str, TrieNode] = field(default_factory=dict)
    is_end_of_word: bool = False


def trie_insert(root: TrieNode, word: str) -> None:
    node = root
    for char in word:
        node = node.children.setdefault(char, TrieNode())
    node.is_end_of_word = True


def trie_words(node: TrieNode, prefix: str) -> list[str]:
    """All stored words below *node*, depth first in child insertion order."""
    words = [prefix] if node.is_end_of_word else []
    for char, child in node.children.items():
        words.extend(trie_words(child, prefix + char))
    return words


def _trie_snapshot(
    root: TrieNode,
    word: str,
    current: str,
    path: list[str],
    matches: Sequence[str] = (),
) -> TrieStepData:
    nodes: list[TrieNodeView] = []
    edges: list[tuple[str, str, str]] = []
    queue = deque([(root, "root", "")])
    while queue:
        node, node_id, prefix = queue.popleft()
        nodes.append(TrieNodeView(id=node_id, label=prefix, is_end_of_word=node.is_end_of_word))
        for char, child in node.children.items():
            child_id = f"{node_id}-{char}"
            edges.append((node_id, child_id, char))
            queue.append((child, child_id, prefix + char))
    return TrieStepData(
        nodes=tuple(nodes),
        edges=tuple(edges),
        word=word,
        current_node=current,
        search_path=tuple(path),
        matches=tuple(matches),
    )


class TrieSearchVisualizer(AlgorithmVisualizer):
    ALGORITHM_ID = constants.TRIE_SEARCH
    OPERATIONS = (constants.OP_SEARCH, constants.OP_INSERT)
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.TRIE_SEARCH,
        name="Trie Search",
        category=constants.CATEGORY_TREE_SEARCH,
        description=(
            "A prefix tree over characters used for fast retrieval of strings and "
            "for listing every stored word that starts with a given prefix."
        ),
        time_complexity="O(m)",
        space_complexity="O(n·m)",
        difficulty=Difficulty.HARD,
        code="""\
class TrieNode:
    def __init__(self):
        self.children = {}
        self.is_end_of_word = False


def starts_with(root, prefix):
    node = root
    for char in prefix:
        if char not in node.children:
            return []
        node = node.children[char]
    return collect(node, prefix)


def collect(node, prefix):
    words = [prefix] if node.is_end_of_word else []
    for char, child in node.children.items():
        words.extend(collect(child, prefix + char))
    return words
""",
    )

    def __init__(self, words: Sequence[str] = constants.DEFAULT_TRIE_WORDS):
        if isinstance(words, str) or not isinstance(words, Sequence):
            raise TypeError(f"words must be a sequence of strings, got {type(words).__name__}")
        for i, w in enumerate(words):
            if not isinstance(w, str) or not w:
                raise ValueError(f"words[{i}] must be a non-empty string, got {w!r}")
        self._words = tuple(words)
        self._root = TrieNode()
        for w in self._words:
            trie_insert(self._root, w)

    @property
    def words(self) -> tuple[str, ...]:
        return self._words

    def _run(
        self,
        recorder: TraceRecorder,
        operation: str = constants.OP_SEARCH,
        value: str = constants.DEFAULT_TRIE_INPUT,
    ) -> None:
        _require_operation(operation, self.OPERATIONS)
        if not isinstance(value, str):
            raise TypeError(f"value must be a string, got {type(value).__name__}: {value!r}")
        root = copy.deepcopy(self._root)
        if operation == constants.OP_SEARCH:
            self._search_prefix(recorder, root, value)
        else:
            if not value:
                raise ValueError("Cannot insert an empty word into the trie")
            self._insert(recorder, root, value)

    def _search_prefix(self, recorder: TraceRecorder, root: TrieNode, prefix: str) -> None:
        recorder.record(
            f'Starting search for prefix "{prefix}" in the Trie',
            _trie_snapshot(root, prefix, "root", []),
            {"prefix": prefix, "starting": True},
        )
        node = root
        path: list[str] = []
        current_id = "root"
        for i, char in enumerate(prefix):
            recorder.record(
                f'Checking for character "{char}" at current node',
                _trie_snapshot(root, prefix, current_id, path),
                {"prefix": prefix, "currentChar": char, "currentPrefix": prefix[: i + 1]},
            )
            if char not in node.children:
                recorder.record(
                    f'Character "{char}" not found. Prefix "{prefix}" does not exist in the Trie.',
                    _trie_snapshot(root, prefix, current_id, path),
                    {"prefix": prefix, constants.NOT_FOUND_KEY: True},
                )
                return
            node = node.children[char]
            current_id = f"{current_id}-{char}"
            path.append(current_id)
            recorder.record(
                f'Found character "{char}". Moving to next node.',
                _trie_snapshot(root, prefix, current_id, path),
                {"prefix": prefix, "currentChar": char, "currentPrefix": prefix[: i + 1]},
                highlights=(current_id,),
            )

        matches = trie_words(node, prefix)
        if matches:
            recorder.record(
                f'Found {len(matches)} words with prefix "{prefix}": {", ".join(matches)}',
                _trie_snapshot(root, prefix, current_id, path, matches),
                {"prefix": prefix, "matches": matches, "found": True},
                highlights=(current_id,),
                completed=path,
            )
        else:
            # prefix path with no stored word beneath it
            recorder.record(
                f'Prefix "{prefix}" exists in the Trie, but no complete words use it.',
                _trie_snapshot(root, prefix, current_id, path),
                {"prefix": prefix, "matches": [], constants.NOT_FOUND_KEY: True},
            )

    def _insert(self, recorder: TraceRecorder, root: TrieNode, word: str) -> None:
        recorder.record(
            f'Starting insertion of word "{word}" into the Trie',
            _trie_snapshot(root, word, "root", []),
            {"currentWord": word, "starting": True},
        )
        node = root
        path: list[str] = []
        current_id = "root"
        for i, char in enumerate(word):
            recorder.record(
                f'Processing character "{char}" at position {i}',
                _trie_snapshot(root, word, current_id, path),
                {"currentWord": word, "currentChar": char, "currentPrefix": word[: i + 1]},
            )
            created = char not in node.children
            node = node.children.setdefault(char, TrieNode())
            current_id = f"{current_id}-{char}"
            path.append(current_id)
            if created:
                recorder.record(
                    f'Character "{char}" not found. Creating new node.',
                    _trie_snapshot(root, word, current_id, path),
                    {"currentWord": word, "currentChar": char, "newNode": True},
                    highlights=(current_id,),
                    mutations=(current_id,),
                )
            else:
                recorder.record(
                    f'Character "{char}" already exists. Moving to next node.',
                    _trie_snapshot(root, word, current_id, path),
                    {"currentWord": word, "currentChar": char, "existing": True},
                    highlights=(current_id,),
                )

        if node.is_end_of_word:
            recorder.record(
                f'Word "{word}" already exists in the Trie.',
                _trie_snapshot(root, word, current_id, path),
                {"currentWord": word, "alreadyExists": True},
                completed=path,
            )
            return
        node.is_end_of_word = True
        logger.debug("Inserted %r into trie copy", word)
        recorder.record(
            f'Marking the end of word "{word}". Insertion complete.',
            _trie_snapshot(root, word, current_id, path),
            {"currentWord": word, "inserted": True},
            completed=path,
        )
