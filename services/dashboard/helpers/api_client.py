"""
API Client Helpers
------------------
Thin GET-JSON transport for the FTC statistics API.

Principles
- No retries/backoff and no caching (the UI stays predictable).
- Status 200 is the only success; any other status is returned as-is with
  no payload, and the body is not inspected.
- Connection problems, timeouts and undecodable JSON raise TransportError.

Config
- API_BASE_URL (or API_URL / API_BASE) selects the API root; local dev falls
  back to http://localhost:8080.
- REQUEST_TIMEOUT (seconds) is optional; unset means requests' default
  (no timeout).
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

import requests

from helpers.errors import TransportError

logger = logging.getLogger(__name__)

# --- Base URL resolution --------------------------------------------------------
API_BASE_URL = (
    os.getenv("API_BASE_URL")
    or os.getenv("API_URL")
    or os.getenv("API_BASE")
    or "http://localhost:8080"
).rstrip("/")


def _timeout_from_env() -> Optional[float]:
    raw = os.getenv("REQUEST_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric REQUEST_TIMEOUT=%r", raw)
        return None


REQUEST_TIMEOUT = _timeout_from_env()


@dataclass(frozen=True)
class FetchResult:
    status_code: int
    payload: Any = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def fetch_json(url: str, *, timeout: Optional[float] = REQUEST_TIMEOUT) -> FetchResult:
    """GET `url` and decode the body when the status is exactly 200.

    Returns:
        FetchResult: status code plus decoded JSON (payload is None off the 200 path).

    Raises:
        TransportError: the request could not complete or the 200 body was not JSON.
    """
    try:
        r = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("GET %s failed: %s", url, e)
        raise TransportError(str(e) or type(e).__name__) from e

    logger.info("GET %s -> %s", url, r.status_code)
    if r.status_code != 200:
        return FetchResult(r.status_code)

    try:
        return FetchResult(r.status_code, r.json())
    except ValueError as e:
        logger.warning("GET %s returned a non-JSON body: %s", url, e)
        raise TransportError(f"Invalid JSON response: {e}") from e
