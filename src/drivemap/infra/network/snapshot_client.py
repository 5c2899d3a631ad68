from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from drivemap.infra.fs import unwrap_records
from drivemap.infra.network.common import SNAPSHOT_TIMEOUT, default_headers

logger = logging.getLogger(__name__)


def fetch_snapshot(url: str) -> Optional[List[Dict[str, Any]]]:
    """
    Download a Drive snapshot exported as JSON.

    Accepts either a bare list of records or an object wrapping them under
    "items" or "files" (the Drive API listing shape).

    Returns:
        Optional[List[Dict[str, Any]]]: Raw records, or None on any failure.
    """
    logger.debug(f"Requesting snapshot from: {url}")

    try:
        response = requests.get(url, headers=default_headers(), timeout=SNAPSHOT_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout:
        logger.warning(f"Network: Snapshot download timed out after {SNAPSHOT_TIMEOUT}s.")
        return None
    except requests.exceptions.RequestException as e:
        logger.error(f"Network: Communication error while downloading snapshot: {e}")
        return None
    except ValueError as e:
        logger.error(f"Network: Snapshot response is not valid JSON: {e}")
        return None

    records = unwrap_records(data)
    if records is None:
        logger.warning("Network: Received malformed snapshot (no list of items).")
        return None

    size_kb = len(response.content) / 1024
    logger.info(f"Network: Snapshot downloaded, {len(records)} records ({size_kb:.1f} KB).")
    return records
