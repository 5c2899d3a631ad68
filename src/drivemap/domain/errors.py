from __future__ import annotations

"""
Domain Exceptions.

Only structural failures during a build abort the operation. Decoding,
classification and validation never raise.
"""

from typing import Optional


class HierarchyBuildError(ValueError):
    """Base error for a build that cannot produce a tree."""


class CycleDetectedError(HierarchyBuildError):
    """
    Raised when parent links form a cycle.

    Attributes:
        node_id: First item id seen twice while walking the parent chain.
    """

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Cycle detected in parent links at item '{node_id}'.")


class MissingRootError(HierarchyBuildError):
    """Raised when no root item can be selected from the snapshot."""

    def __init__(self, root_id: Optional[str] = None) -> None:
        self.root_id = root_id
        if root_id:
            msg = f"Root item '{root_id}' is not present in the snapshot."
        else:
            msg = "Snapshot has no root item (every item declares a parent)."
        super().__init__(msg)


class NodeNotFoundError(KeyError):
    """Raised by navigation lookups for ids that are not in the tree."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(node_id)

    def __str__(self) -> str:
        return f"Node '{self.node_id}' not found in hierarchy."
