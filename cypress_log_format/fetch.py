"""Fetch plain-text logs from a URL (used by the CLI `--url` flag and `/api/fetch`)."""

from __future__ import annotations

import logging
import time
from typing import Optional

import requests

from . import config
from .exceptions import (
    FetchNetworkError,
    FetchTimeoutError,
    MissingUrlError,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)


def fetch_remote_text(
    url: object,
    *,
    timeout_s: Optional[float] = None,
    session: Optional[requests.Session] = None,
) -> str:
    """GET `url` and return the body as text.

    Raises:
      MissingUrlError      - `url` is empty or not a string
      UpstreamStatusError  - upstream answered non-2xx (status is passed through)
      FetchTimeoutError    - no answer within the bounded wait (default 10s)
      FetchNetworkError    - any other transport failure (DNS, refused, bad URL...)
    """
    if not isinstance(url, str) or not url.strip():
        raise MissingUrlError()
    url = url.strip()
    timeout = float(timeout_s) if timeout_s is not None else config.fetch_timeout_s()
    getter = session.get if session is not None else requests.get

    t0 = time.monotonic()
    try:
        resp = getter(url, timeout=timeout)
    except requests.exceptions.Timeout as e:
        raise FetchTimeoutError(
            status_code=504, url=url, message=f"Fetch timed out after {timeout:g}s: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        raise FetchNetworkError(status_code=502, url=url, message=f"Fetch failed for {url}: {e}") from e
    finally:
        logger.debug("GET %s took %.2fs", url, time.monotonic() - t0)

    if not (200 <= int(resp.status_code) < 300):
        raise UpstreamStatusError(
            status_code=int(resp.status_code), url=url, message=f"Fetch failed: {resp.status_code}"
        )
    return resp.text
