from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies immutability, defaults and helper properties of the value types.
"""

import dataclasses

import pytest

from drivemap.domain.errors import CycleDetectedError, MissingRootError, NodeNotFoundError
from drivemap.domain.hierarchy_models import HierarchyNode, NodeKind
from drivemap.domain.item_models import AssetCode, DecodedName, RawItem


def test_raw_item_defaults_and_immutability():
    item = RawItem(id="1", name="Root")
    assert item.parent_id is None
    assert item.is_container is False
    assert item.position is None
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.name = "Other"


def test_decoded_name_recognition():
    plain = DecodedName(original_name="Poster", base_name="Poster")
    assert not plain.is_recognized
    coded = DecodedName(
        original_name="tab_Poster",
        base_name="Poster",
        recognized_prefixes=frozenset({"tab"}),
        markers=frozenset({"tab"}),
    )
    assert coded.is_recognized
    assert coded.has_marker("TAB")


def test_asset_code_date_parts():
    asset = AssetCode("A", "A", "2412", "0080", "01", "00", "01")
    assert (asset.year, asset.month) == (2024, 12)


def test_hierarchy_node_walk_is_pre_order():
    leaf_a = HierarchyNode("a", NodeKind.FILE, "A", "A", "mid", 2, 0)
    mid = HierarchyNode("mid", NodeKind.FOLDER, "Mid", "Mid", "root", 1, 0, children=(leaf_a,))
    leaf_b = HierarchyNode("b", NodeKind.FILE, "B", "B", "root", 1, 1)
    root = HierarchyNode("root", NodeKind.FOLDER, "Root", "Root", None, 0, 0, children=(mid, leaf_b))

    assert [n.id for n in root.walk()] == ["root", "mid", "a", "b"]
    assert root.is_folder and leaf_b.is_file


def test_error_messages():
    assert "'B'" in str(CycleDetectedError("B"))
    assert "'r'" in str(MissingRootError("r"))
    assert "no root" in str(MissingRootError())
    err = NodeNotFoundError("zz")
    assert isinstance(err, KeyError)
    assert str(err) == "Node 'zz' not found in hierarchy."
