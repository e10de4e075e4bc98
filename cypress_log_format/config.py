"""Environment-driven settings (single source of truth for defaults).

Every helper re-reads the environment on each call so tests can monkeypatch it.
Bad values fall back to the default (with a warning) instead of failing.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5173
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_MAX_BODY_BYTES = 2 * 1024 * 1024


def _env_number(names, default, cast):
    for name in names:
        raw = os.environ.get(name, "").strip()
        if not raw:
            continue
        try:
            value = cast(raw)
        except ValueError:
            logger.warning("Ignoring invalid %s=%r (using %s)", name, raw, default)
            return default
        if value <= 0:
            logger.warning("Ignoring non-positive %s=%r (using %s)", name, raw, default)
            return default
        return value
    return default


def server_host() -> str:
    return os.environ.get("CYPRESS_LOG_FORMAT_HOST", "").strip() or DEFAULT_HOST


def server_port() -> int:
    """Resolution order: $CYPRESS_LOG_FORMAT_PORT, $PORT, 5173."""
    return int(_env_number(("CYPRESS_LOG_FORMAT_PORT", "PORT"), DEFAULT_PORT, int))


def fetch_timeout_s() -> float:
    return float(_env_number(("CYPRESS_LOG_FORMAT_FETCH_TIMEOUT",), DEFAULT_FETCH_TIMEOUT_S, float))


def max_body_bytes() -> int:
    return int(_env_number(("CYPRESS_LOG_FORMAT_MAX_BODY_BYTES",), DEFAULT_MAX_BODY_BYTES, int))
