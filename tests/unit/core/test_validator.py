from __future__ import annotations

"""
Unit tests for the Hierarchy Validator.

Trees are built by hand so each invariant can be broken in isolation.
"""

from collections import Counter

from drivemap.core.builder import build
from drivemap.core.decoder import decode
from drivemap.core.validator import validate
from drivemap.domain import validation_models as vm
from drivemap.domain.hierarchy_models import HierarchyNode, NodeKind
from drivemap.domain.item_models import RawItem
from drivemap.domain.validation_models import IssueType

FOLDER = NodeKind.FOLDER
FILE = NodeKind.FILE


def _codes(issues):
    return [issue.code for issue in issues]


def test_validator_checks_are_independent(node_factory):
    """TC-01: One empty-name leaf and one empty folder yield one warning each."""
    blank_leaf = HierarchyNode(
        id="leaf", kind=FILE, display_name="", original_name="0080",
        parent_id="root", depth=1, order=0,
    )
    empty_folder = node_factory("empty", FOLDER, parent_id="root", depth=1, order=1)
    root = node_factory("root", FOLDER, children=(blank_leaf, empty_folder))

    issues = validate(root)

    counts = Counter((issue.type, issue.code) for issue in issues)
    assert counts == Counter({
        (IssueType.WARNING, vm.EMPTY_DISPLAY_NAME): 1,
        (IssueType.WARNING, vm.EMPTY_FOLDER): 1,
    })
    assert not any(issue.is_error for issue in issues)


def test_validate_none_does_not_raise():
    issues = validate(None)
    assert _codes(issues) == [vm.EMPTY_HIERARCHY]


def test_single_file_root_is_valid(node_factory):
    assert validate(node_factory("only", FILE)) == []


def test_depth_mismatch(node_factory):
    child = node_factory("child", FILE, parent_id="root", depth=3)
    root = node_factory("root", FOLDER, children=(child,))
    issues = validate(root)
    assert _codes(issues) == [vm.DEPTH_MISMATCH]
    assert issues[0].node_id == "child"
    assert issues[0].is_error


def test_root_depth_must_be_zero(node_factory):
    assert _codes(validate(node_factory("root", FILE, depth=2))) == [vm.DEPTH_MISMATCH]


def test_dangling_parent(node_factory):
    child = node_factory("child", FILE, parent_id="elsewhere", depth=1)
    root = node_factory("root", FOLDER, children=(child,))
    assert _codes(validate(root)) == [vm.DANGLING_PARENT]


def test_sibling_order_collision(node_factory):
    a = node_factory("a", FILE, parent_id="root", depth=1, order=0)
    b = node_factory("b", FILE, parent_id="root", depth=1, order=0)
    c = node_factory("c", FILE, parent_id="root", depth=1, order=1)
    issues = validate(node_factory("root", FOLDER, children=(a, b, c)))
    assert _codes(issues) == [vm.SIBLING_ORDER_COLLISION]
    assert issues[0].node_id == "b"
    assert issues[0].type is IssueType.WARNING


def test_file_with_children(node_factory):
    inner = node_factory("inner", FILE, parent_id="file", depth=2)
    file_node = node_factory("file", FILE, parent_id="root", depth=1, children=(inner,))
    root = node_factory("root", FOLDER, children=(file_node,))
    assert _codes(validate(root)) == [vm.FILE_WITH_CHILDREN]


def test_duplicate_node_id(node_factory):
    a = node_factory("same", FILE, parent_id="root", depth=1, order=0)
    b = node_factory("same", FILE, parent_id="root", depth=1, order=1)
    issues = validate(node_factory("root", FOLDER, children=(a, b)))
    assert _codes(issues) == [vm.DUPLICATE_NODE_ID]


def test_depth_exceeded(node_factory):
    leaf = node_factory("leaf", FILE, parent_id="mid", depth=2)
    mid = node_factory("mid", FOLDER, parent_id="root", depth=1, children=(leaf,))
    root = node_factory("root", FOLDER, children=(mid,))
    assert validate(root, max_depth=2) == []
    issues = validate(root, max_depth=1)
    assert _codes(issues) == [vm.DEPTH_EXCEEDED]
    assert issues[0].node_id == "leaf"


def test_issues_follow_pre_order_and_repeat(node_factory):
    """Identical issues at different nodes are all reported, in pre-order."""
    e2 = node_factory("e2", FOLDER, parent_id="f", depth=2)
    f = node_factory("f", FOLDER, parent_id="root", depth=1, order=0, children=(e2,))
    e1 = node_factory("e1", FOLDER, parent_id="root", depth=1, order=1)
    issues = validate(node_factory("root", FOLDER, children=(f, e1)))
    assert [(i.code, i.node_id) for i in issues] == [
        (vm.EMPTY_FOLDER, "e2"),
        (vm.EMPTY_FOLDER, "e1"),
    ]


# -----------------------------------------------------------------------------
# Naming markers
# -----------------------------------------------------------------------------

def test_tabs_folder_rules(node_factory):
    tab = node_factory("tab", FOLDER, parent_id="tabs", depth=2, order=0,
                       markers=frozenset({"tab"}),
                       children=(node_factory("x", FILE, parent_id="tab", depth=3),))
    stray = node_factory("stray", FILE, parent_id="tabs", depth=2, order=1)
    hidden = node_factory("hid", FILE, parent_id="tabs", depth=2, order=2, markers=frozenset({"hidden"}))
    tabs = node_factory("tabs", FOLDER, parent_id="root", depth=1, markers=frozenset({"tabs"}),
                        children=(tab, stray, hidden))
    issues = validate(node_factory("root", FOLDER, children=(tabs,)))
    assert _codes(issues) == [vm.TABS_UNEXPECTED_CHILDREN]


def test_tabs_folder_without_tab(node_factory):
    only = node_factory("only", FILE, parent_id="tabs", depth=2)
    tabs = node_factory("tabs", FOLDER, parent_id="root", depth=1, markers=frozenset({"tabs"}),
                        children=(only,))
    codes = _codes(validate(node_factory("root", FOLDER, children=(tabs,))))
    assert codes == [vm.TABS_WITHOUT_TAB, vm.TABS_UNEXPECTED_CHILDREN]


def test_tab_outside_tabs(node_factory):
    tab = node_factory("tab", FILE, parent_id="root", depth=1, markers=frozenset({"tab"}))
    assert _codes(validate(node_factory("root", FOLDER, children=(tab,)))) == [vm.TAB_OUTSIDE_TABS]


def test_accordion_without_section(node_factory):
    item = node_factory("item", FILE, parent_id="acc", depth=2)
    acc = node_factory("acc", FOLDER, parent_id="root", depth=1, markers=frozenset({"accordion"}),
                       children=(item,))
    assert _codes(validate(node_factory("root", FOLDER, children=(acc,)))) == [vm.ACCORDION_WITHOUT_SECTION]


def test_conflicting_markers(node_factory):
    node = node_factory("x", FILE, markers=frozenset({"dark", "light"}))
    assert _codes(validate(node)) == [vm.CONFLICTING_MARKERS]


def test_folder_marker_on_file(node_factory):
    node = node_factory("x", FILE, markers=frozenset({"accordion"}))
    assert _codes(validate(node)) == [vm.FOLDER_MARKER_ON_FILE]


def test_repeated_prefix_marker_is_an_error():
    items = [
        RawItem(id="root", name="tabs_Root", is_container=True),
        RawItem(id="tab", name="tab_tab_Overview", parent_id="root", is_container=True),
        RawItem(id="doc", name="Intro.pdf", parent_id="tab"),
    ]
    issues = validate(build(items))
    assert _codes(issues) == [vm.DUPLICATE_PREFIX]
    assert issues[0].type is IssueType.ERROR
    assert issues[0].node_id == "tab"


def test_repeated_suffix_marker_is_an_error(node_factory):
    decoded = decode("Banner_dark_dark")
    node = node_factory("x", FILE, markers=decoded.markers, decoded=decoded)
    issues = validate(node)
    assert _codes(issues) == [vm.DUPLICATE_SUFFIX]
    assert "dark" in issues[0].message


def test_distinct_markers_are_not_duplicates(node_factory):
    decoded = decode("tab_Banner_dark_hidden")
    node = node_factory("x", FILE, markers=decoded.markers, decoded=decoded)
    assert vm.DUPLICATE_PREFIX not in _codes(validate(node))
    assert vm.DUPLICATE_SUFFIX not in _codes(validate(node))
