from __future__ import annotations

"""
Code Registry Service.

Acts as the central authority for the short codes embedded in item names.
Tables are assembled once into an immutable registry; lookups are pure and
unrecognized codes resolve to a sentinel label instead of failing.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from drivemap.domain import constants as const

logger = logging.getLogger(__name__)


class CodeDomain(str, Enum):
    LANGUAGE = "lang"
    CONTENT_TYPE = "file"
    CLIENT = "client"
    CAMPAIGN = "campaign"
    CONTENT_CATEGORY = "category"


CodeTable = Mapping[str, str]

# -----------------------------------------------------------------------------
# REGISTRY
# -----------------------------------------------------------------------------

class CodeRegistry:
    """
    Immutable bundle of code tables partitioned by domain.

    There is no mutation API: overlaying new tables produces a new registry
    through registry_from_mapping().
    """

    __slots__ = ("_tables",)

    def __init__(self, tables: Mapping[CodeDomain, Mapping[str, str]]) -> None:
        frozen: Dict[CodeDomain, CodeTable] = {}
        for domain in CodeDomain:
            frozen[domain] = MappingProxyType(dict(tables.get(domain, {})))
        object.__setattr__(self, "_tables", MappingProxyType(frozen))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("CodeRegistry is immutable.")

    def table(self, domain: CodeDomain) -> CodeTable:
        """Return the read-only table of a domain."""
        return self._tables[domain]

    def lookup(self, domain: CodeDomain, code: Optional[str]) -> Optional[str]:
        """Return the label for a code, or None if it is not registered."""
        if not code:
            return None
        return self._tables[domain].get(code)

    def is_known(self, domain: CodeDomain, code: Optional[str]) -> bool:
        return self.lookup(domain, code) is not None

    def resolve(self, domain: CodeDomain, code: Optional[str]) -> str:
        """
        Resolve a code to its label.

        Args:
            domain: Table to search.
            code: Raw code string (e.g. "0080").

        Returns:
            str: The registered label, or UNKNOWN_LABEL.
        """
        label = self.lookup(domain, code)
        return label if label is not None else const.UNKNOWN_LABEL

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {domain.value: dict(table) for domain, table in self._tables.items()}


def registry_from_mapping(
        data: Mapping[str, Any],
        base: Optional[CodeRegistry] = None,
) -> CodeRegistry:
    """
    Build a new registry overlaying external tables on a base registry.

    Accepts domain keys by value ("lang", "file", ...) or by name
    ("LANGUAGE", "CONTENT_TYPE", ...). Entries whose code or label is not a
    non-empty string are skipped with a warning.

    Args:
        data: Mapping of domain key to {code: label}.
        base: Registry providing the defaults (DEFAULT_REGISTRY if omitted).

    Returns:
        CodeRegistry: The merged registry.
    """
    base = base or DEFAULT_REGISTRY
    tables: Dict[CodeDomain, Dict[str, str]] = {
        domain: dict(base.table(domain)) for domain in CodeDomain
    }

    for key, entries in data.items():
        domain = _parse_domain(key)
        if domain is None:
            logger.warning(f"Registry: Ignoring unknown code domain '{key}'.")
            continue
        if not isinstance(entries, Mapping):
            logger.warning(f"Registry: Domain '{key}' is not a mapping. Skipped.")
            continue
        for code, label in entries.items():
            if not isinstance(code, str) or not code.strip():
                logger.warning(f"Registry: Invalid code {code!r} in '{key}'. Skipped.")
                continue
            if not isinstance(label, str) or not label.strip():
                logger.warning(f"Registry: Invalid label for code '{code}' in '{key}'. Skipped.")
                continue
            tables[domain][code.strip()] = label.strip()

    return CodeRegistry(tables)


def _parse_domain(key: Any) -> Optional[CodeDomain]:
    """Map a domain key given by value or by name to its enum member."""
    if isinstance(key, CodeDomain):
        return key
    if not isinstance(key, str):
        return None
    k = key.strip()
    for domain in CodeDomain:
        if k.lower() == domain.value or k.upper() == domain.name:
            return domain
    return None

# -----------------------------------------------------------------------------
# PROCESS-WIDE DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_REGISTRY = CodeRegistry({
    CodeDomain.LANGUAGE: const.DEFAULT_LANG_CODES,
    CodeDomain.CONTENT_TYPE: const.DEFAULT_FILE_CODES,
    CodeDomain.CLIENT: const.DEFAULT_CLIENT_CODES,
    CodeDomain.CAMPAIGN: const.DEFAULT_CAMPAIGN_CODES,
    CodeDomain.CONTENT_CATEGORY: const.DEFAULT_CATEGORY_CODES,
})


def resolve(domain: CodeDomain, code: Optional[str]) -> str:
    """Resolve a code against the process-wide default registry."""
    return DEFAULT_REGISTRY.resolve(domain, code)
