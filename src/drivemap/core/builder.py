from __future__ import annotations

"""
Hierarchy Builder.

Turns a flat snapshot of Drive-like items into an immutable tree. The build
runs in two passes: index and validate the parent links, then assemble
nodes bottom-up so no node is ever observed half-built. Items that cannot
be attached (unknown parent, extra roots, children of files) are reported
alongside the tree instead of being dropped.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Iterable, List, Optional, Set, Tuple

from drivemap.core.classifier import classify, extension_from_mime, split_extension
from drivemap.core.decoder import DEFAULT_POLICY, DecoderPolicy, decode
from drivemap.core.registry import DEFAULT_REGISTRY, CodeRegistry
from drivemap.domain import constants as const
from drivemap.domain.errors import CycleDetectedError, MissingRootError
from drivemap.domain.hierarchy_models import (
    ORPHAN_DETACHED,
    ORPHAN_EXTRA_ROOT,
    ORPHAN_FILE_PARENT,
    ORPHAN_MISSING_PARENT,
    BuildResult,
    BuildStats,
    HierarchyNode,
    NodeKind,
    OrphanReport,
)
from drivemap.domain.item_models import DecodedName, RawItem, TransformedLinks

logger = logging.getLogger(__name__)

LinkTransform = Callable[[RawItem], Optional[TransformedLinks]]


@dataclass(frozen=True)
class BuildOptions:
    """
    Build-time switches.

    Attributes:
        root_id: Explicit root item; its own parent link is ignored.
        include_hidden: Keep items carrying the "_hidden" marker.
        policy: Name tokenization rules.
        link_transform: Optional collaborator producing TransformedLinks.
    """
    root_id: Optional[str] = None
    include_hidden: bool = False
    policy: DecoderPolicy = DEFAULT_POLICY
    link_transform: Optional[LinkTransform] = None


@dataclass(frozen=True)
class _Decoded:
    decoded: DecodedName
    extension: str

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build(
        items: Iterable[RawItem],
        options: Optional[BuildOptions] = None,
        registry: Optional[CodeRegistry] = None,
) -> HierarchyNode:
    """Build a hierarchy and return only its root node."""
    return build_hierarchy(items, options=options, registry=registry).root


def build_hierarchy(
        items: Iterable[RawItem],
        options: Optional[BuildOptions] = None,
        registry: Optional[CodeRegistry] = None,
) -> BuildResult:
    """
    Assemble a typed tree from a snapshot of raw items.

    Args:
        items: Raw items in source order.
        options: Root selection, hidden handling, tokenization policy.
        registry: Code tables for decoding (process default if omitted).

    Returns:
        BuildResult: Root node plus orphan, hidden and duplicate reports.

    Raises:
        CycleDetectedError: Parent links loop back on themselves.
        MissingRootError: No root item can be selected.
    """
    options = options or BuildOptions()
    registry = registry or DEFAULT_REGISTRY
    source = list(items)

    logger.info(f"Building hierarchy from {len(source)} raw items")

    # 1. Index by id (first occurrence wins)
    index, ordered, duplicates = _index_items(source)
    for dup in duplicates:
        logger.warning(f"Duplicate item id '{dup.id}' ('{dup.name}') ignored.")

    # 2. Parent-link integrity
    _detect_cycles(ordered, index, options.root_id)

    # 3. Root selection
    root_item, extra_roots = _select_root(ordered, index, options.root_id)

    # 4. Decode every item once
    decoded = {item.id: _decode_item(item, options.policy, registry) for item in ordered}

    # 5. Group and order children, skipping hidden subtrees
    children_of = _group_children(ordered, index, root_item.id)
    layout, hidden = _layout(root_item, children_of, decoded, options.include_hidden)

    # 6. Bottom-up assembly
    root = _assemble(root_item, layout, decoded, registry, options.link_transform)

    placed: Set[str] = {node.id for node in root.walk()}
    orphans = _collect_orphans(ordered, index, placed, set(hidden), extra_roots)
    for report in orphans:
        logger.warning(f"Orphan item '{report.item.id}' ('{report.item.name}'): {report.reason}")
    if hidden:
        logger.debug(f"Skipped {len(hidden)} hidden items.")

    stats = _compute_stats(root)
    logger.info(
        f"Hierarchy built: {stats.total_items} nodes "
        f"({stats.total_folders} folders, {stats.total_files} files), "
        f"max depth {stats.max_depth}, {len(orphans)} orphans"
    )

    return BuildResult(
        root=root,
        orphans=tuple(orphans),
        hidden=tuple(hidden),
        duplicates=tuple(duplicates),
        stats=stats,
    )

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (INDEXING AND INTEGRITY)
# -----------------------------------------------------------------------------

def _index_items(source: List[RawItem]) -> Tuple[Dict[str, RawItem], List[RawItem], List[RawItem]]:
    index: Dict[str, RawItem] = {}
    ordered: List[RawItem] = []
    duplicates: List[RawItem] = []
    for item in source:
        if item.id in index:
            duplicates.append(item)
            continue
        index[item.id] = item
        ordered.append(item)
    return index, ordered, duplicates


def _detect_cycles(ordered: List[RawItem], index: Dict[str, RawItem], root_id: Optional[str]) -> None:
    """
    Walk every parent chain with a visited set.

    Chains already proven to terminate are remembered so each item is
    walked at most once overall.
    """
    terminating: Set[str] = set()
    for item in ordered:
        seen: Set[str] = set()
        trail: List[str] = []
        current: Optional[str] = item.id
        while current is not None and current not in terminating:
            if current in seen:
                logger.error(f"Cycle detected in parent links at '{current}'.")
                raise CycleDetectedError(current)
            seen.add(current)
            trail.append(current)
            if current == root_id:
                break
            parent = index[current].parent_id
            current = parent if parent and parent in index else None
        terminating.update(trail)


def _select_root(
        ordered: List[RawItem],
        index: Dict[str, RawItem],
        root_id: Optional[str],
) -> Tuple[RawItem, List[RawItem]]:
    parentless = [item for item in ordered if not item.parent_id]

    if root_id:
        if root_id not in index:
            raise MissingRootError(root_id)
        root = index[root_id]
        return root, [item for item in parentless if item.id != root_id]

    if not parentless:
        raise MissingRootError()
    return parentless[0], parentless[1:]

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (DECODING AND LAYOUT)
# -----------------------------------------------------------------------------

def _decode_item(item: RawItem, policy: DecoderPolicy, registry: CodeRegistry) -> _Decoded:
    """Decode a folder name whole, or a file stem with its extension kept aside."""
    if item.is_container:
        return _Decoded(decoded=decode(item.name, registry, policy), extension="")

    stem, extension = split_extension(item.name)
    if not extension:
        extension = extension_from_mime(item.mime_type)
    return _Decoded(decoded=decode(stem, registry, policy), extension=extension)


def _group_children(
        ordered: List[RawItem],
        index: Dict[str, RawItem],
        root_id: str,
) -> Dict[str, List[RawItem]]:
    children_of: Dict[str, List[RawItem]] = {}
    for item in ordered:
        if item.id == root_id or not item.parent_id or item.parent_id not in index:
            continue
        children_of.setdefault(item.parent_id, []).append(item)
    return children_of


def _sort_key(position: int, item: RawItem, decoded: DecodedName) -> Tuple:
    explicit = item.position if item.position is not None else decoded.order
    if explicit is not None:
        return (0, explicit, item.name, position)
    return (1, position, item.name)


@dataclass(frozen=True)
class _Slot:
    item: RawItem
    depth: int
    order: int
    display_name: str
    children: Tuple[str, ...]


def _layout(
        root_item: RawItem,
        children_of: Dict[str, List[RawItem]],
        decoded: Dict[str, _Decoded],
        include_hidden: bool,
) -> Tuple[Dict[str, _Slot], List[str]]:
    """
    Walk top-down from the root assigning depth, order and display names.

    Returns:
        Tuple: slots keyed by id in breadth-first order, and hidden item ids.
    """
    slots: Dict[str, _Slot] = {}
    hidden: List[str] = []
    queue: Deque[Tuple[RawItem, int, int, str]] = deque()
    queue.append((root_item, 0, 0, decoded[root_item.id].decoded.base_name))

    while queue:
        item, depth, order, display_name = queue.popleft()

        visible: List[Tuple[int, RawItem]] = []
        if item.is_container:
            for position, child in enumerate(children_of.get(item.id, [])):
                if not include_hidden and decoded[child.id].decoded.has_marker(const.MARKER_HIDDEN):
                    hidden.extend(_subtree_ids(child, children_of))
                    continue
                visible.append((position, child))

        visible.sort(key=lambda pc: _sort_key(pc[0], pc[1], decoded[pc[1].id].decoded))
        names = _disambiguate([decoded[child.id].decoded.base_name for _, child in visible])

        child_ids: List[str] = []
        for child_order, ((_, child), child_name) in enumerate(zip(visible, names)):
            queue.append((child, depth + 1, child_order, child_name))
            child_ids.append(child.id)

        slots[item.id] = _Slot(
            item=item,
            depth=depth,
            order=order,
            display_name=display_name,
            children=tuple(child_ids),
        )

    return slots, hidden


def _subtree_ids(item: RawItem, children_of: Dict[str, List[RawItem]]) -> List[str]:
    ids: List[str] = []
    stack = [item]
    while stack:
        current = stack.pop()
        ids.append(current.id)
        stack.extend(reversed(children_of.get(current.id, [])))
    return ids


def _disambiguate(names: List[str]) -> List[str]:
    """
    Suffix repeated sibling names with " (2)", " (3)"... in order.

    A generated name never reuses one already taken by an earlier sibling,
    so "A", "A (2)", "A" yields "A", "A (2)", "A (3)".
    """
    taken: Set[str] = set()
    counters: Dict[str, int] = {}
    out: List[str] = []
    for name in names:
        if not name.strip():
            out.append(name)
            continue
        key = name.casefold()
        if key not in taken:
            taken.add(key)
            out.append(name)
            continue

        count = counters.get(key, 1)
        candidate = name
        while candidate.casefold() in taken:
            count += 1
            candidate = f"{name} ({count})"
        counters[key] = count
        taken.add(candidate.casefold())
        out.append(candidate)
    return out

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (ASSEMBLY AND REPORTING)
# -----------------------------------------------------------------------------

def _assemble(
        root_item: RawItem,
        slots: Dict[str, _Slot],
        decoded: Dict[str, _Decoded],
        registry: CodeRegistry,
        link_transform: Optional[LinkTransform],
) -> HierarchyNode:
    """Create nodes leaves-first (reverse breadth-first order)."""
    nodes: Dict[str, HierarchyNode] = {}

    for item_id in reversed(list(slots)):
        slot = slots[item_id]
        item = slot.item
        info = decoded[item_id]
        kind = NodeKind.FOLDER if item.is_container else NodeKind.FILE

        nodes[item_id] = HierarchyNode(
            id=item.id,
            kind=kind,
            display_name=slot.display_name,
            original_name=item.name,
            parent_id=None if item_id == root_item.id else item.parent_id,
            depth=slot.depth,
            order=slot.order,
            content_type_tags=classify(info.decoded, kind, info.extension, registry),
            children=tuple(nodes[child_id] for child_id in slot.children),
            markers=info.decoded.markers,
            extension=info.extension,
            decoded=info.decoded,
            transformed_links=_links_for(item, link_transform),
        )

    return nodes[root_item.id]


def _links_for(item: RawItem, link_transform: Optional[LinkTransform]) -> Optional[TransformedLinks]:
    if link_transform is None:
        return None
    try:
        return link_transform(item)
    except Exception as e:
        logger.warning(f"Link transform failed for '{item.id}': {e}")
        return None


def _collect_orphans(
        ordered: List[RawItem],
        index: Dict[str, RawItem],
        placed: Set[str],
        hidden: Set[str],
        extra_roots: List[RawItem],
) -> List[OrphanReport]:
    extra_ids = {item.id for item in extra_roots}
    reports: List[OrphanReport] = []
    for item in ordered:
        if item.id in placed or item.id in hidden:
            continue
        reports.append(OrphanReport(item=item, reason=_orphan_reason(item, index, extra_ids)))
    return reports


def _orphan_reason(item: RawItem, index: Dict[str, RawItem], extra_ids: Set[str]) -> str:
    if item.id in extra_ids:
        return ORPHAN_EXTRA_ROOT
    if item.parent_id not in index:
        return ORPHAN_MISSING_PARENT
    if not index[item.parent_id].is_container:
        return ORPHAN_FILE_PARENT
    return ORPHAN_DETACHED


def _compute_stats(root: HierarchyNode) -> BuildStats:
    total = files = 0
    max_depth = 0
    for node in root.walk():
        total += 1
        if node.is_file:
            files += 1
        max_depth = max(max_depth, node.depth)
    return BuildStats(
        total_items=total,
        total_files=files,
        total_folders=total - files,
        max_depth=max_depth,
    )
