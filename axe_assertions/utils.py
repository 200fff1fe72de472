from __future__ import annotations

import copy
import logging
import threading
from datetime import datetime, timedelta
from typing import Any, Dict, Mapping, Optional

import requests
from requests.adapters import HTTPAdapter
from slugify import slugify
from urllib3.util.retry import Retry

from .config import Settings, get_settings
from .errors import EngineError

logger = logging.getLogger(__name__)

AXE_FILENAME = "axe.min.js"
STAMP_FORMAT = "%Y%m%dT%H%M%S%f"

_stamp_lock = threading.Lock()
_last_stamp: Optional[datetime] = None


def _session_with_retries() -> requests.Session:
    s = requests.Session()
    retries = Retry(total=3, backoff_factor=0.5, status_forcelist=[429, 500, 502, 503, 504],
                    allowed_methods=frozenset(["GET", "HEAD"]), raise_on_status=False)
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.mount("https://", HTTPAdapter(max_retries=retries))
    return s


def ensure_axe_js(settings: Optional[Settings] = None) -> str:
    """Ensure axe.min.js exists locally, download from CDN if missing."""
    settings = settings or get_settings()
    if settings.axe_path is not None:
        if not settings.axe_path.is_file():
            raise EngineError(f"AXE_CORE_PATH does not point to a file: {settings.axe_path}")
        return str(settings.axe_path)

    axe_path = settings.assets_dir / AXE_FILENAME
    if axe_path.exists() and axe_path.stat().st_size > 0:
        return str(axe_path)

    logger.debug("Downloading axe-core from %s", settings.axe_url)
    try:
        r = _session_with_retries().get(settings.axe_url, timeout=20)
        r.raise_for_status()
    except requests.RequestException as e:
        raise EngineError(f"Could not download axe-core from {settings.axe_url}: {e}") from e
    axe_path.parent.mkdir(parents=True, exist_ok=True)
    axe_path.write_bytes(r.content)
    return str(axe_path)


def safe_filename(name: Optional[str]) -> str:
    return slugify(name or "axe-report") or "axe-report"


def deep_merge(*mappings: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge mappings left to right into a new dict.

    Nested mappings are merged key by key; any other value (lists included)
    replaces what was there. Inputs are never mutated and the result shares
    no mutable state with them.
    """
    merged: Dict[str, Any] = {}
    for mapping in mappings:
        if not mapping:
            continue
        for key, value in mapping.items():
            current = merged.get(key)
            if isinstance(value, Mapping) and isinstance(current, dict):
                merged[key] = deep_merge(current, value)
            elif isinstance(value, Mapping):
                merged[key] = deep_merge(value)
            else:
                merged[key] = copy.deepcopy(value)
    return merged


def next_timestamp() -> datetime:
    """Current time, nudged forward so that successive calls never repeat."""
    global _last_stamp
    with _stamp_lock:
        now = datetime.now()
        if _last_stamp is not None and now <= _last_stamp:
            now = _last_stamp + timedelta(microseconds=1)
        _last_stamp = now
        return now


def report_stamp(moment: Optional[datetime] = None) -> str:
    return (moment or next_timestamp()).strftime(STAMP_FORMAT)
