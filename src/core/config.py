from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.itunes_client import DEFAULT_BASE_URL, DEFAULT_LIMIT

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 300
DEFAULT_TIMEOUT_S = 15.0


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_BASE_URL
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    result_limit: int = DEFAULT_LIMIT
    request_timeout_s: float = DEFAULT_TIMEOUT_S
    data_dir: Optional[str] = None   # None -> QStandardPaths.AppDataLocation
    debug: bool = False


def _number(environ: Mapping[str, str], key: str, default, cast):
    raw = (environ.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r, using %s", key, raw, default)
        return default
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        api_base_url=(env.get("ITUNES_SEARCH_BASE_URL") or "").strip() or DEFAULT_BASE_URL,
        debounce_ms=_number(env, "ITUNES_SEARCH_DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS, int),
        result_limit=_number(env, "ITUNES_SEARCH_LIMIT", DEFAULT_LIMIT, int),
        request_timeout_s=_number(env, "ITUNES_SEARCH_TIMEOUT", DEFAULT_TIMEOUT_S, float),
        data_dir=(env.get("ITUNES_SEARCH_DATA_DIR") or "").strip() or None,
        debug=env.get("ITUNES_SEARCH_DEBUG") == "1",
    )
