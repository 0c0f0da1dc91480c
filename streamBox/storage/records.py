"""JSON record-list helpers shared by the favorites / ratings / account stores."""
from __future__ import annotations

import json
import sqlite3
from typing import Any, Dict, List

from streamBox.storage import kv_db
from streamBox.utils import log_debug


def load_list(key: str) -> List[Dict[str, Any]]:
    """Return the JSON list stored at *key* (`[]` if absent).

    Raises `sqlite3.Error` / `ValueError` on store or decode failure so
    writers never overwrite a record list they could not read.
    """
    raw = kv_db.get_item(key)
    if not raw:
        return []
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"{key} does not hold a list")
    if not all(isinstance(item, dict) for item in data):
        raise ValueError(f"{key} holds non-record entries")
    return data


def load_list_or_empty(key: str) -> List[Dict[str, Any]]:
    """Reader variant: log and fall back to `[]`."""
    try:
        return load_list(key)
    except (sqlite3.Error, ValueError) as exc:
        log_debug(f"Error reading {key}: {exc}")
        return []


def save_list(key: str, items: List[Dict[str, Any]]) -> None:
    kv_db.set_item(key, json.dumps(items))
