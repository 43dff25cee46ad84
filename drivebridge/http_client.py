"""Shared HTTP client for Drive REST calls."""

import requests

_session: requests.Session | None = None


def get_session() -> requests.Session:
    """Return a shared requests.Session for connection pooling.

    No retry adapter is mounted: a failed exchange is surfaced to the caller as-is.
    """
    global _session
    if _session is None:
        _session = requests.Session()
    return _session
