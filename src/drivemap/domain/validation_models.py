from __future__ import annotations

"""
Validation Data Models.

Defines the typed issues produced by the hierarchy validator and the
machine-readable issue codes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class IssueType(str, Enum):
    ERROR = "error"
    WARNING = "warning"


# -----------------------------------------------------------------------------
# ISSUE CODES
# -----------------------------------------------------------------------------

DEPTH_MISMATCH = "depth-mismatch"
SIBLING_ORDER_COLLISION = "sibling-order-collision"
EMPTY_DISPLAY_NAME = "empty-display-name"
EMPTY_FOLDER = "empty-folder"
DANGLING_PARENT = "dangling-parent"
FILE_WITH_CHILDREN = "file-with-children"
DUPLICATE_NODE_ID = "duplicate-node-id"
DEPTH_EXCEEDED = "depth-exceeded"
CONFLICTING_MARKERS = "conflicting-markers"
DUPLICATE_PREFIX = "duplicate-prefix"
DUPLICATE_SUFFIX = "duplicate-suffix"
TABS_WITHOUT_TAB = "tabs-without-tab"
TABS_UNEXPECTED_CHILDREN = "tabs-unexpected-children"
ACCORDION_WITHOUT_SECTION = "accordion-without-section"
FOLDER_MARKER_ON_FILE = "folder-marker-on-file"
TAB_OUTSIDE_TABS = "tab-outside-tabs"
EMPTY_HIERARCHY = "empty-hierarchy"


@dataclass(frozen=True)
class ValidationIssue:
    """
    One defect found while walking a hierarchy.

    Attributes:
        type: Error or Warning.
        code: Machine-readable issue kind.
        message: Human-readable description.
        node_id: Offending node, when the issue is tied to one.
        node_name: Original name of the offending node.
    """
    type: IssueType
    code: str
    message: str
    node_id: Optional[str] = None
    node_name: str = ""

    @property
    def is_error(self) -> bool:
        return self.type is IssueType.ERROR
