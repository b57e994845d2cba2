"""Content hashing for derived, cached descriptors."""

from __future__ import annotations

import hashlib
import json
from typing import Any


def content_hash(payload: dict[str, Any]) -> str:
    """Compute a stable SHA1 hex digest of *payload*.

    Keys are sorted and the JSON is compact so that two payloads with the
    same content always hash identically regardless of insertion order.

    Parameters
    ----------
    payload : dict
        JSON-serializable inputs the descriptor was derived from.

    Returns
    -------
    str
        40-character lowercase hex digest.
    """
    json_str = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return hashlib.sha1(json_str.encode("utf-8")).hexdigest()
