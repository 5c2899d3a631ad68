from __future__ import annotations

"""
Hierarchy Validator.

Walks an assembled tree in pre-order and checks its structural invariants
and naming rules. Every check runs independently; the outcome is a flat,
ordered list of issues. The tree is never modified and validation itself
never raises, since trees may also come from alternate sources
(deserialization, hand-built fixtures).
"""

import logging
from collections import Counter
from typing import Dict, List, Optional, Tuple

from drivemap.domain import constants as const
from drivemap.domain import validation_models as vm
from drivemap.domain.hierarchy_models import HierarchyNode
from drivemap.domain.validation_models import IssueType, ValidationIssue

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate(
        root: Optional[HierarchyNode],
        max_depth: int = const.DEFAULT_MAX_DEPTH,
) -> List[ValidationIssue]:
    """
    Validate a complete hierarchy.

    Args:
        root: Root node of the tree (None yields a single warning).
        max_depth: Depth above which nodes are reported.

    Returns:
        List[ValidationIssue]: Issues in tree pre-order, not deduplicated.
    """
    issues: List[ValidationIssue] = []

    if root is None:
        issues.append(ValidationIssue(
            type=IssueType.WARNING,
            code=vm.EMPTY_HIERARCHY,
            message="The hierarchy is empty.",
        ))
        return issues

    logger.info(f"Validating hierarchy starting at '{root.original_name}'")

    seen_ids: Dict[str, int] = {}
    stack: List[Tuple[HierarchyNode, Optional[HierarchyNode]]] = [(root, None)]

    while stack:
        node, parent = stack.pop()
        _check_identity(node, seen_ids, issues)
        _check_structure(node, parent, max_depth, issues)
        _check_markers(node, parent, issues)
        if node.is_folder:
            _check_folder(node, issues)
        else:
            _check_file(node, issues)
        stack.extend((child, node) for child in reversed(node.children))

    errors = sum(1 for issue in issues if issue.is_error)
    logger.info(
        f"Validation completed: {errors} errors, {len(issues) - errors} warnings."
    )
    return issues

# -----------------------------------------------------------------------------
# INTERNAL CHECKS
# -----------------------------------------------------------------------------

def _issue(node: HierarchyNode, issue_type: IssueType, code: str, message: str) -> ValidationIssue:
    return ValidationIssue(
        type=issue_type,
        code=code,
        message=message,
        node_id=node.id,
        node_name=node.original_name,
    )


def _check_identity(node: HierarchyNode, seen_ids: Dict[str, int], issues: List[ValidationIssue]) -> None:
    count = seen_ids.get(node.id, 0)
    if count:
        issues.append(_issue(
            node, IssueType.ERROR, vm.DUPLICATE_NODE_ID,
            f"Node id '{node.id}' appears more than once in the tree.",
        ))
    seen_ids[node.id] = count + 1


def _check_structure(
        node: HierarchyNode,
        parent: Optional[HierarchyNode],
        max_depth: int,
        issues: List[ValidationIssue],
) -> None:
    expected_depth = 0 if parent is None else parent.depth + 1
    if node.depth != expected_depth:
        issues.append(_issue(
            node, IssueType.ERROR, vm.DEPTH_MISMATCH,
            f"Depth is {node.depth}, expected {expected_depth}.",
        ))

    if parent is not None and node.parent_id != parent.id:
        issues.append(_issue(
            node, IssueType.ERROR, vm.DANGLING_PARENT,
            f"Parent reference '{node.parent_id}' does not match holding folder '{parent.id}'.",
        ))

    if not (node.display_name or "").strip():
        issues.append(_issue(
            node, IssueType.WARNING, vm.EMPTY_DISPLAY_NAME,
            "Display name is empty after decoding.",
        ))

    if node.depth > max_depth:
        issues.append(_issue(
            node, IssueType.WARNING, vm.DEPTH_EXCEEDED,
            f"Depth {node.depth} exceeds the maximum of {max_depth}.",
        ))


def _check_markers(node: HierarchyNode, parent: Optional[HierarchyNode], issues: List[ValidationIssue]) -> None:
    decoded = node.decoded
    if decoded is not None and decoded.duplicate_prefixes:
        issues.append(_issue(
            node, IssueType.ERROR, vm.DUPLICATE_PREFIX,
            f"Item repeats the prefixes: {', '.join(sorted(decoded.duplicate_prefixes))}.",
        ))
    if decoded is not None and decoded.duplicate_suffixes:
        issues.append(_issue(
            node, IssueType.ERROR, vm.DUPLICATE_SUFFIX,
            f"Item repeats the suffixes: {', '.join(sorted(decoded.duplicate_suffixes))}.",
        ))

    if node.has_marker(const.MARKER_TAB) and node.has_marker(const.MARKER_TABS):
        issues.append(_issue(
            node, IssueType.ERROR, vm.CONFLICTING_MARKERS,
            "An item cannot carry both the tab_ and tabs_ prefixes.",
        ))

    if node.has_marker(const.MARKER_DARK) and node.has_marker(const.MARKER_LIGHT):
        issues.append(_issue(
            node, IssueType.ERROR, vm.CONFLICTING_MARKERS,
            "An item cannot carry both the _dark and _light suffixes.",
        ))

    if parent is not None and node.has_marker(const.MARKER_TAB) and not parent.has_marker(const.MARKER_TABS):
        issues.append(_issue(
            node, IssueType.ERROR, vm.TAB_OUTSIDE_TABS,
            "tab_ items must be placed inside a tabs_ folder.",
        ))


def _check_folder(folder: HierarchyNode, issues: List[ValidationIssue]) -> None:
    children = folder.children

    if not children:
        issues.append(_issue(folder, IssueType.WARNING, vm.EMPTY_FOLDER, "Folder is empty."))

    counts: Counter = Counter()
    for child in children:
        counts[child.order] += 1
        if counts[child.order] > 1:
            issues.append(_issue(
                child, IssueType.WARNING, vm.SIBLING_ORDER_COLLISION,
                f"Order {child.order} is shared with a sibling.",
            ))

    if folder.has_marker(const.MARKER_TABS):
        if not any(child.has_marker(const.MARKER_TAB) for child in children):
            issues.append(_issue(
                folder, IssueType.ERROR, vm.TABS_WITHOUT_TAB,
                "A tabs_ folder must contain at least one tab_ item.",
            ))
        stray = [
            child for child in children
            if not child.has_marker(const.MARKER_TAB) and not child.has_marker(const.MARKER_HIDDEN)
        ]
        if stray:
            issues.append(_issue(
                folder, IssueType.WARNING, vm.TABS_UNEXPECTED_CHILDREN,
                f"tabs_ folder contains {len(stray)} items that are neither tab_ nor hidden.",
            ))

    if folder.has_marker(const.MARKER_ACCORDION):
        if not any(child.has_marker(const.MARKER_SECTION) for child in children):
            issues.append(_issue(
                folder, IssueType.ERROR, vm.ACCORDION_WITHOUT_SECTION,
                "An accordion_ folder must contain at least one section_ item.",
            ))


def _check_file(file_node: HierarchyNode, issues: List[ValidationIssue]) -> None:
    if file_node.children:
        issues.append(_issue(
            file_node, IssueType.ERROR, vm.FILE_WITH_CHILDREN,
            f"File carries {len(file_node.children)} children.",
        ))

    for marker in const.FOLDER_ONLY_MARKERS:
        if file_node.has_marker(marker):
            issues.append(_issue(
                file_node, IssueType.ERROR, vm.FOLDER_MARKER_ON_FILE,
                f"Files must not carry the {marker}_ prefix, it is reserved for folders.",
            ))
