from __future__ import annotations

"""
Remote Code Tables Client.

Downloads the language, file-type, client and campaign tables from a codes
API, one request per domain (?type=lang, ?type=file, ...). A domain that
cannot be fetched falls back to its built-in table, so a partial outage
still yields a usable registry.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from drivemap.core.registry import DEFAULT_REGISTRY, CodeDomain, CodeRegistry, registry_from_mapping
from drivemap.infra.network.common import CODES_TIMEOUT, default_headers

logger = logging.getLogger(__name__)

REMOTE_DOMAINS = (
    CodeDomain.LANGUAGE,
    CodeDomain.CONTENT_TYPE,
    CodeDomain.CLIENT,
    CodeDomain.CAMPAIGN,
)


def fetch_code_table(base_url: str, domain: CodeDomain) -> Optional[Dict[str, str]]:
    """
    Fetch one code table.

    The endpoint may answer with a {code: label} object or a list of
    {"code": ..., "name"|"label": ...} records.

    Returns:
        Optional[Dict[str, str]]: The table, or None on failure.
    """
    params = {"type": domain.value}
    logger.debug(f"Requesting '{domain.value}' codes from: {base_url}")

    try:
        response = requests.get(base_url, params=params, headers=default_headers(), timeout=CODES_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout:
        logger.warning(f"Network: '{domain.value}' codes request timed out after {CODES_TIMEOUT}s.")
        return None
    except requests.exceptions.RequestException as e:
        logger.error(f"Network: Communication error fetching '{domain.value}' codes: {e}")
        return None
    except ValueError as e:
        logger.error(f"Network: '{domain.value}' codes response is not valid JSON: {e}")
        return None

    table = _normalize_table(data)
    if table is None:
        logger.warning(f"Network: Received malformed '{domain.value}' code table.")
    return table


def fetch_code_tables(base_url: str, base: Optional[CodeRegistry] = None) -> CodeRegistry:
    """
    Build a registry from the remote codes API.

    Args:
        base_url: Endpoint accepting a "type" query parameter.
        base: Registry providing fallback tables (process default if omitted).

    Returns:
        CodeRegistry: Remote tables overlaid on the fallback ones.
    """
    base = base or DEFAULT_REGISTRY
    fetched: Dict[str, Mapping[str, str]] = {}

    for domain in REMOTE_DOMAINS:
        table = fetch_code_table(base_url, domain)
        if table:
            fetched[domain.value] = table
        else:
            logger.info(f"Using built-in '{domain.value}' codes.")

    return registry_from_mapping(fetched, base=base)


def _normalize_table(data: Any) -> Optional[Dict[str, str]]:
    if isinstance(data, dict):
        data = data.get("data", data)
    if isinstance(data, dict):
        return {str(k): str(v) for k, v in data.items() if v is not None}
    if isinstance(data, list):
        table: Dict[str, str] = {}
        for record in data:
            if not isinstance(record, dict) or record.get("code") is None:
                continue
            label = record.get("name", record.get("label"))
            if label is not None:
                table[str(record["code"])] = str(label)
        return table
    return None
