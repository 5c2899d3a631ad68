from __future__ import annotations

"""
Integration tests for FileSystem loading of snapshots and code tables.
"""

import json
from pathlib import Path

from drivemap.core.builder import build
from drivemap.core.registry import DEFAULT_REGISTRY, CodeDomain
from drivemap.infra.fs import load_code_tables, load_snapshot, raw_items_from_records
from drivemap.infra.links import drive_link_transform, drive_links


def test_raw_items_from_drive_records(drive_records):
    """TC-01: Drive API records (parents list, mimeType) map onto RawItem."""
    items = raw_items_from_records(drive_records)
    assert [(i.id, i.parent_id, i.is_container) for i in items] == [
        ("root", None, True),
        ("f1", "root", False),
    ]
    assert items[1].mime_type == "application/pdf"


def test_raw_items_from_flat_records():
    records = [
        {"id": 1, "name": "Root", "is_container": True},
        {"id": "2", "title": "Child", "parentId": 1, "position": "3"},
        {"name": "no id"},
        {"id": "3", "name": "Bad position", "parent_id": "1", "position": True},
    ]
    items = raw_items_from_records(records)
    assert [i.id for i in items] == ["1", "2", "3"]
    assert items[1].name == "Child"
    assert items[1].parent_id == "1"
    assert items[1].position == 3
    assert items[2].position is None


def test_load_snapshot_and_build(tmp_path: Path, drive_records):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"items": drive_records}), encoding="utf-8")

    items = load_snapshot(str(path))
    root = build(items)
    assert root.children[0].display_name == "Poster ES"
    assert root.children[0].extension == "pdf"


def test_load_snapshot_failures(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")
    scalar = tmp_path / "scalar.json"
    scalar.write_text("42", encoding="utf-8")

    assert load_snapshot(str(bad)) is None
    assert load_snapshot(str(scalar)) is None
    assert load_snapshot(str(tmp_path / "missing.json")) is None


def test_load_code_tables(tmp_path: Path):
    path = tmp_path / "codes.json"
    path.write_text(json.dumps({"file": {"0300": "Roll-up"}}), encoding="utf-8")
    registry = load_code_tables(str(path))
    assert registry.resolve(CodeDomain.CONTENT_TYPE, "0300") == "Roll-up"

    assert load_code_tables(str(tmp_path / "missing.json")) is DEFAULT_REGISTRY


def test_drive_links():
    links = drive_links("abc", "image/png")
    assert links.preview == "https://lh3.googleusercontent.com/d/abc"
    assert links.download == "https://drive.google.com/uc?id=abc&export=download"
    assert links.embed == "https://drive.google.com/file/d/abc/preview"
    assert drive_links("abc").preview.endswith("/view?usp=drivesdk")


def test_drive_link_transform_skips_folders(drive_records):
    folder, pdf = raw_items_from_records(drive_records)
    assert drive_link_transform(folder) is None
    assert drive_link_transform(pdf).embed.endswith("/f1/preview")
