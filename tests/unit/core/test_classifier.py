from __future__ import annotations

"""
Unit tests for Content Classification.

Verifies code-based tags, extension heuristics and MIME fallbacks.
"""

import pytest

from drivemap.core.classifier import classify, extension_from_mime, split_extension
from drivemap.core.decoder import decode
from drivemap.domain.hierarchy_models import NodeKind


@pytest.mark.parametrize("name, expected", [
    ("Poster.pdf", ("Poster", "pdf")),
    ("photo.JPG", ("photo", "jpg")),
    ("Campaña v1.2 final", ("Campaña v1.2 final", "")),
    ("archive.tar.gz", ("archive.tar", "gz")),
    (".env", (".env", "")),
    ("Report 2024.05", ("Report 2024.05", "")),
    ("noext", ("noext", "")),
    ("", ("", "")),
])
def test_split_extension(name, expected):
    assert split_extension(name) == expected


def test_extension_from_mime():
    assert extension_from_mime("application/pdf") == "pdf"
    assert extension_from_mime("application/vnd.google-apps.presentation") == "pptx"
    assert extension_from_mime("application/vnd.google-apps.spreadsheet") == "xlsx"
    assert extension_from_mime("application/x-unknown") == ""
    assert extension_from_mime("") == ""


def test_classify_by_content_type_code():
    """TC-01: Known content-type codes produce label and category."""
    tags = classify(decode("0080 Poster ES"), NodeKind.FILE, "pdf")
    assert tags == frozenset({"Alup80", "poster"})


def test_classify_file_by_extension():
    tags = classify(decode("Brief"), NodeKind.FILE, "docx")
    assert tags == frozenset({"document"})


def test_classify_folder_without_codes_has_no_tags():
    assert classify(decode("Materials"), NodeKind.FOLDER) == frozenset()


def test_classify_folder_with_code():
    assert "Stopper" in classify(decode("0060 Stoppers"), NodeKind.FOLDER)


def test_classify_unknown_extension():
    assert classify(decode("blob"), NodeKind.FILE, "xyz") == frozenset()
