from __future__ import annotations

"""
Content Navigator.

Read-only lookups over an assembled hierarchy. The index is computed once
from the immutable tree; nothing here can modify it.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from drivemap.domain.errors import NodeNotFoundError
from drivemap.domain.hierarchy_models import HierarchyNode


class HierarchyIndex:
    """
    Id-based access to the nodes of a tree.

    Args:
        root: Root node of the hierarchy.
    """

    def __init__(self, root: HierarchyNode) -> None:
        self._root = root
        self._nodes: Dict[str, HierarchyNode] = {}
        self._parents: Dict[str, Optional[str]] = {root.id: None}

        for node in root.walk():
            # Keep the first occurrence; duplicates are a validator concern.
            self._nodes.setdefault(node.id, node)
            for child in node.children:
                self._parents.setdefault(child.id, node.id)

    @property
    def root(self) -> HierarchyNode:
        return self._root

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def get_node_by_id(self, node_id: str) -> Optional[HierarchyNode]:
        return self._nodes.get(node_id)

    def get_children(self, node_id: str) -> Tuple[HierarchyNode, ...]:
        """Return the ordered children of a node (empty for files)."""
        return self._require(node_id).children

    def get_path(self, node_id: str) -> Tuple[str, ...]:
        """
        Return the ids from the root down to the given node, inclusive.

        Raises:
            NodeNotFoundError: If the id is not part of the tree.
        """
        self._require(node_id)
        path: List[str] = []
        current: Optional[str] = node_id
        while current is not None:
            path.append(current)
            current = self._parents.get(current)
        path.reverse()
        return tuple(path)

    def find_by_name(self, text: str, exact: bool = False) -> List[HierarchyNode]:
        """
        Search nodes by display or original name, in pre-order.

        Matching is case-insensitive; without exact, substrings match.
        """
        needle = (text or "").strip().lower()
        if not needle:
            return []

        matches: List[HierarchyNode] = []
        for node in self.iter_nodes():
            candidates = (node.display_name.lower(), node.original_name.lower())
            if exact:
                hit = needle in candidates
            else:
                hit = any(needle in candidate for candidate in candidates)
            if hit:
                matches.append(node)
        return matches

    def iter_nodes(self) -> Iterator[HierarchyNode]:
        return self._root.walk()

    def _require(self, node_id: str) -> HierarchyNode:
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node
