from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Puts the 'src' directory on sys.path so the package imports uninstalled.
2. Shares raw snapshots and hand-built trees used across test modules.
"""

import os
import sys
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from drivemap.domain.hierarchy_models import HierarchyNode, NodeKind  # noqa: E402
from drivemap.domain.item_models import RawItem  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def scenario_items() -> List[RawItem]:
    """Minimal campaign: one root folder holding one coded poster file."""
    return [
        RawItem(id="root", name="Campaign", parent_id=None, is_container=True),
        RawItem(id="f1", name="0080 Poster ES", parent_id="root", is_container=False),
    ]


@pytest.fixture
def campaign_items() -> List[RawItem]:
    """
    A realistic marketing snapshot.

    root
    ├── 01_tabs_Materials
    │   ├── 01_tab_Print
    │   │   ├── 0080 Poster 01.pdf
    │   │   └── 0060 Stopper 02.pdf
    │   └── 02_tab_Digital
    │       └── 0192 Post ES.png
    ├── Notes_hidden
    │   └── draft.txt
    └── Brief.docx
    """
    return [
        RawItem(id="root", name="March Campaign", is_container=True),
        RawItem(id="tabs", name="01_tabs_Materials", parent_id="root", is_container=True),
        RawItem(id="print", name="01_tab_Print", parent_id="tabs", is_container=True),
        RawItem(id="digital", name="02_tab_Digital", parent_id="tabs", is_container=True),
        RawItem(id="poster", name="0080 Poster 01.pdf", parent_id="print"),
        RawItem(id="stopper", name="0060 Stopper 02.pdf", parent_id="print"),
        RawItem(id="post", name="0192 Post ES.png", parent_id="digital"),
        RawItem(id="notes", name="Notes_hidden", parent_id="root", is_container=True),
        RawItem(id="draft", name="draft.txt", parent_id="notes"),
        RawItem(id="brief", name="Brief.docx", parent_id="root"),
    ]


@pytest.fixture
def drive_records() -> List[Dict[str, Any]]:
    """Records in the shape returned by the Drive files.list API."""
    return [
        {"id": "root", "name": "Campaign", "mimeType": "application/vnd.google-apps.folder"},
        {
            "id": "f1",
            "name": "0080 Poster ES",
            "parents": ["root"],
            "mimeType": "application/pdf",
        },
    ]


def make_node(
        node_id: str,
        kind: NodeKind = NodeKind.FOLDER,
        name: str = "",
        parent_id: Any = None,
        depth: int = 0,
        order: int = 0,
        children: tuple = (),
        markers: frozenset = frozenset(),
        decoded: Any = None,
) -> HierarchyNode:
    """Build a node by hand, bypassing the builder."""
    label = name or node_id
    return HierarchyNode(
        id=node_id,
        kind=kind,
        display_name=label,
        original_name=label,
        parent_id=parent_id,
        depth=depth,
        order=order,
        children=children,
        markers=markers,
        decoded=decoded,
    )


@pytest.fixture
def node_factory():
    return make_node
