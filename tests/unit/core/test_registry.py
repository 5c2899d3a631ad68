from __future__ import annotations

"""
Unit tests for the Code Registry.

Verifies lookups, the Unknown sentinel, immutability and overlays.
"""

import pytest

from drivemap.core.registry import (
    DEFAULT_REGISTRY,
    CodeDomain,
    CodeRegistry,
    registry_from_mapping,
    resolve,
)
from drivemap.domain.constants import UNKNOWN_LABEL


def test_resolve_known_codes():
    assert resolve(CodeDomain.CONTENT_TYPE, "0080") == "Alup80"
    assert resolve(CodeDomain.LANGUAGE, "01") == "ES"
    assert DEFAULT_REGISTRY.resolve(CodeDomain.CONTENT_CATEGORY, "0060") == "stopper"


@pytest.mark.parametrize("code", ["9999", "", None, "80"])
def test_resolve_unknown_returns_sentinel(code):
    """TC-01: Unknown codes never raise."""
    assert resolve(CodeDomain.CONTENT_TYPE, code) == UNKNOWN_LABEL
    assert DEFAULT_REGISTRY.lookup(CodeDomain.CONTENT_TYPE, code) is None


def test_registry_is_immutable():
    with pytest.raises(AttributeError):
        DEFAULT_REGISTRY.extra = 1
    with pytest.raises(TypeError):
        DEFAULT_REGISTRY.table(CodeDomain.LANGUAGE)["99"] = "XX"


def test_registry_copies_its_input():
    source = {CodeDomain.LANGUAGE: {"01": "ES"}}
    registry = CodeRegistry(source)
    source[CodeDomain.LANGUAGE]["02"] = "CA"
    assert not registry.is_known(CodeDomain.LANGUAGE, "02")
    assert dict(registry.table(CodeDomain.CLIENT)) == {}


def test_registry_from_mapping_overlays_base():
    """TC-02: Overlay keeps base tables and leaves the base untouched."""
    registry = registry_from_mapping({
        "file": {"0300": "Roll-up"},
        "LANGUAGE": {"01": "Español"},
    })
    assert registry.resolve(CodeDomain.CONTENT_TYPE, "0300") == "Roll-up"
    assert registry.resolve(CodeDomain.CONTENT_TYPE, "0080") == "Alup80"
    assert registry.resolve(CodeDomain.LANGUAGE, "01") == "Español"
    assert DEFAULT_REGISTRY.resolve(CodeDomain.LANGUAGE, "01") == "ES"


def test_registry_from_mapping_skips_invalid_entries():
    registry = registry_from_mapping({
        "planets": {"01": "Mars"},
        "lang": {"10": "", "11": None, "": "X", "12": "NL"},
        "client": ["not", "a", "mapping"],
    })
    assert registry.is_known(CodeDomain.LANGUAGE, "12")
    assert not registry.is_known(CodeDomain.LANGUAGE, "10")
    assert not registry.is_known(CodeDomain.LANGUAGE, "11")
    assert registry.to_dict()["client"] == DEFAULT_REGISTRY.to_dict()["client"]


def test_to_dict_uses_domain_values():
    data = DEFAULT_REGISTRY.to_dict()
    assert set(data) == {"lang", "file", "client", "campaign", "category"}
