from __future__ import annotations

"""
Network Communication Infrastructure.

HTTP clients for the remote snapshot and code-table sources.
"""

from drivemap.infra.network.codes_client import fetch_code_table, fetch_code_tables
from drivemap.infra.network.snapshot_client import fetch_snapshot

__all__ = [
    "fetch_code_table",
    "fetch_code_tables",
    "fetch_snapshot",
]
