from __future__ import annotations

"""
Hierarchy Renderer.

Converts assembled hierarchies into ASCII tree listings and into plain
dictionaries for JSON export. Children are emitted in the order the builder
assigned; the renderer never re-sorts.
"""

from typing import Any, Dict, List, Tuple

from drivemap.domain.hierarchy_models import HierarchyNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_hierarchy(
        root: HierarchyNode,
        lines: List[str],
        prefix: str = "",
        show_tags: bool = False,
) -> None:
    """
    Render the children of a node, depth first, into a list of strings.

    Uses standard ASCII connectors (├──, └──). The label of the node itself
    is left to the caller, see render_to_text(). Deep trees are walked with
    an explicit stack.

    Args:
        root: Node whose children are rendered.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the first level.
        show_tags: Append content-type tags to each label.
    """
    stack: List[Tuple[HierarchyNode, str, bool]] = []
    _push_children(stack, root, prefix)

    while stack:
        node, node_prefix, is_last = stack.pop()
        connector = "└── " if is_last else "├── "
        lines.append(f"{node_prefix}{connector}{format_label(node, show_tags)}")

        if node.children:
            _push_children(stack, node, node_prefix + ("    " if is_last else "│   "))


def render_to_text(root: HierarchyNode, show_tags: bool = False) -> str:
    lines = [format_label(root, show_tags)]
    render_hierarchy(root, lines, show_tags=show_tags)
    return "\n".join(lines)


def format_label(node: HierarchyNode, show_tags: bool = False) -> str:
    """Display label of a node: folders end with '/', files keep their extension."""
    name = node.display_name or node.original_name
    if node.is_folder:
        label = f"{name}/"
    elif node.extension:
        label = f"{name}.{node.extension}"
    else:
        label = name

    if show_tags and node.content_type_tags:
        label += f" [{', '.join(sorted(node.content_type_tags))}]"
    return label


def node_to_dict(node: HierarchyNode) -> Dict[str, Any]:
    """Serialize a node and its subtree into JSON-compatible primitives."""
    result: List[Dict[str, Any]] = []
    stack: List[Tuple[HierarchyNode, List[Dict[str, Any]]]] = [(node, result)]

    while stack:
        current, siblings = stack.pop()
        data = _node_fields(current)
        siblings.append(data)
        if current.is_folder:
            data["children"] = []
            stack.extend((child, data["children"]) for child in reversed(current.children))

    return result[0]


def _push_children(stack: List[Tuple[HierarchyNode, str, bool]], node: HierarchyNode, prefix: str) -> None:
    total = len(node.children)
    for i in range(total - 1, -1, -1):
        stack.append((node.children[i], prefix, i == total - 1))


def _node_fields(node: HierarchyNode) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": node.id,
        "kind": node.kind.value,
        "display_name": node.display_name,
        "original_name": node.original_name,
        "parent_id": node.parent_id,
        "depth": node.depth,
        "order": node.order,
        "content_type_tags": sorted(node.content_type_tags),
        "markers": sorted(node.markers),
    }

    if node.is_file:
        data["extension"] = node.extension

    decoded = node.decoded
    if decoded is not None:
        data["codes"] = {
            "language": decoded.language_code,
            "content_type": decoded.content_type_code,
            "client": decoded.client_code,
            "campaign": decoded.campaign_code,
        }

    links = node.transformed_links
    if links is not None:
        data["links"] = {
            "preview": links.preview,
            "download": links.download,
            "embed": links.embed,
        }

    return data
