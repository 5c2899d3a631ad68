from __future__ import annotations

from drivemap import __version__

USER_AGENT = f"drivemap-client/{__version__}"
SNAPSHOT_TIMEOUT = 15
CODES_TIMEOUT = 5


def default_headers() -> dict:
    return {"User-Agent": USER_AGENT, "Accept": "application/json"}
