from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Loads snapshots and code tables from local JSON files and converts
Drive-style records into RawItem values. Loaders log and return None (or
the fallback registry) instead of propagating I/O and parsing errors.
"""

import json
import logging
import os
from typing import Any, Dict, Iterable, List, Optional

from drivemap.core.registry import DEFAULT_REGISTRY, CodeRegistry, registry_from_mapping
from drivemap.domain.item_models import RawItem

logger = logging.getLogger(__name__)

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"

# -----------------------------------------------------------------------------
# PATH HELPERS
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str]) -> str:
    """Expand ~ and environment variables and return an absolute path ("" if empty)."""
    p = (path or "").strip()
    if not p:
        return ""
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def read_json(path: str) -> Optional[Any]:
    """Parse a JSON file, returning None when it is missing or malformed."""
    target = normalize_path(path)
    if not target or not os.path.isfile(target):
        logger.error(f"File not found: {path}")
        return None
    try:
        with open(target, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read JSON from '{target}': {e}")
        return None

# -----------------------------------------------------------------------------
# SNAPSHOTS
# -----------------------------------------------------------------------------

def unwrap_records(data: Any) -> Optional[List[Dict[str, Any]]]:
    """Accept a bare list of records or an object holding them under "items"/"files"."""
    if isinstance(data, dict):
        data = data.get("items", data.get("files"))
    if not isinstance(data, list):
        return None
    return [record for record in data if isinstance(record, dict)]


def raw_items_from_records(records: Iterable[Dict[str, Any]]) -> List[RawItem]:
    """
    Convert snapshot records into RawItem values.

    Both flat records (id, name, parent_id, is_container, position) and
    Drive API records (parents list, mimeType) are understood. Records
    without an id are skipped.

    Args:
        records: Parsed JSON objects in source order.

    Returns:
        List[RawItem]: Items in the same order.
    """
    items: List[RawItem] = []
    for idx, record in enumerate(records):
        item_id = record.get("id")
        if item_id is None or str(item_id).strip() == "":
            logger.warning(f"Snapshot record #{idx} has no id. Skipped.")
            continue

        mime_type = str(record.get("mimeType", record.get("mime_type", "")) or "")
        items.append(RawItem(
            id=str(item_id),
            name=str(record.get("name", record.get("title", "")) or ""),
            parent_id=_parent_of(record),
            is_container=_is_container(record, mime_type),
            position=_as_position(record.get("position")),
            mime_type=mime_type,
        ))
    return items


def load_snapshot(path: str) -> Optional[List[RawItem]]:
    """Load raw items from a JSON snapshot file; None if it cannot be read."""
    data = read_json(path)
    if data is None:
        return None

    records = unwrap_records(data)
    if records is None:
        logger.error(f"Snapshot '{path}' does not contain a list of items.")
        return None

    items = raw_items_from_records(records)
    logger.info(f"Loaded {len(items)} items from '{path}'")
    return items

# -----------------------------------------------------------------------------
# CODE TABLES
# -----------------------------------------------------------------------------

def load_code_tables(path: str, base: Optional[CodeRegistry] = None) -> CodeRegistry:
    """
    Load a JSON object of {domain: {code: label}} over the base registry.

    Falls back to the base registry when the file cannot be used.
    """
    base = base or DEFAULT_REGISTRY
    data = read_json(path)
    if not isinstance(data, dict):
        if data is not None:
            logger.error(f"Code tables file '{path}' must contain an object. Using built-in codes.")
        return base
    return registry_from_mapping(data, base=base)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _parent_of(record: Dict[str, Any]) -> Optional[str]:
    parent = record.get("parent_id", record.get("parentId"))
    if parent is None:
        parents = record.get("parents")
        if isinstance(parents, list) and parents:
            parent = parents[0]
    if parent is None or str(parent).strip() == "":
        return None
    return str(parent)


def _is_container(record: Dict[str, Any], mime_type: str) -> bool:
    flag = record.get("is_container", record.get("isFolder"))
    if isinstance(flag, bool):
        return flag
    return mime_type == FOLDER_MIME_TYPE


def _as_position(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None
