from __future__ import annotations

"""
Hierarchy Data Models.

Provides the immutable node type of an assembled tree and the result
envelope returned by the builder.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterator, Optional, Tuple

from drivemap.domain.item_models import DecodedName, RawItem, TransformedLinks

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class NodeKind(str, Enum):
    FOLDER = "folder"
    FILE = "file"


@dataclass(frozen=True)
class HierarchyNode:
    """
    One folder or file of an assembled hierarchy.

    Files are leaves: their children tuple is empty. The parent owns the
    position of each child through the order of its children tuple.

    Attributes:
        id: Identifier, unique within a tree.
        kind: Folder or File.
        display_name: Human label after decoding.
        original_name: Unmodified source name.
        parent_id: Identifier of the holding folder (None for the root).
        depth: Distance from the root (root = 0).
        order: Stable sort key among siblings.
        content_type_tags: Classification labels derived from decoding.
        children: Ordered child nodes (folders only).
        markers: Word markers found in the name (tab, hidden, dark...).
        extension: File extension without the dot (files only).
        decoded: Full decoding result, when built from a raw name.
        transformed_links: Preview/download/embed URLs, when provided.
    """
    id: str
    kind: NodeKind
    display_name: str
    original_name: str
    parent_id: Optional[str]
    depth: int
    order: int
    content_type_tags: FrozenSet[str] = field(default_factory=frozenset)
    children: Tuple["HierarchyNode", ...] = ()
    markers: FrozenSet[str] = field(default_factory=frozenset)
    extension: str = ""
    decoded: Optional[DecodedName] = None
    transformed_links: Optional[TransformedLinks] = None

    @property
    def is_folder(self) -> bool:
        return self.kind is NodeKind.FOLDER

    @property
    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE

    def has_marker(self, marker: str) -> bool:
        return marker.lower() in self.markers

    def walk(self) -> Iterator["HierarchyNode"]:
        """Yield this node and every descendant in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

# -----------------------------------------------------------------------------
# BUILD RESULT
# -----------------------------------------------------------------------------

ORPHAN_MISSING_PARENT = "missing-parent"
ORPHAN_EXTRA_ROOT = "extra-root"
ORPHAN_DETACHED = "detached-ancestor"
ORPHAN_FILE_PARENT = "file-parent"


@dataclass(frozen=True)
class OrphanReport:
    """
    A source item left out of the main tree.

    Attributes:
        item: The raw item.
        reason: missing-parent, extra-root, file-parent or detached-ancestor.
    """
    item: RawItem
    reason: str


@dataclass(frozen=True)
class BuildStats:
    total_items: int = 0
    total_files: int = 0
    total_folders: int = 0
    max_depth: int = 0


@dataclass(frozen=True)
class BuildResult:
    """
    Envelope returned by a hierarchy build.

    Attributes:
        root: Root of the assembled tree.
        orphans: Items whose parent could not be resolved (and their subtrees).
        hidden: Ids of items skipped because of the hidden marker.
        duplicates: Items dropped because their id was already indexed.
        stats: Node counts and maximum depth of the tree.
    """
    root: HierarchyNode
    orphans: Tuple[OrphanReport, ...] = ()
    hidden: Tuple[str, ...] = ()
    duplicates: Tuple[RawItem, ...] = ()
    stats: BuildStats = field(default_factory=BuildStats)
