import json

import pytest

from streamBox import controller
from streamBox.storage import kv_db


@pytest.fixture(autouse=True)
def temp_store(tmp_path, monkeypatch):
    """Fresh SQLite store and debug log per test; no throttle sleeps."""
    monkeypatch.setattr("streamBox.utils.LOG_PATH", tmp_path / "debug.log")
    monkeypatch.setattr("streamBox.utils.time.sleep", lambda _s: None)
    monkeypatch.setattr(controller, "_tmdb", None)
    monkeypatch.setattr(controller, "_auth", None)
    kv_db.use_database(tmp_path / "store.sqlite")
    yield tmp_path
    kv_db.close()


@pytest.fixture
def log_text(tmp_path):
    def _read():
        path = tmp_path / "debug.log"
        return path.read_text(encoding="utf-8") if path.exists() else ""
    return _read


@pytest.fixture
def raw_store():
    """Read / write the raw JSON records behind the stores."""
    class _Raw:
        @staticmethod
        def get(key):
            value = kv_db.get_item(key)
            return json.loads(value) if value is not None else None

        @staticmethod
        def put(key, value):
            kv_db.set_item(key, value if isinstance(value, str) else json.dumps(value))
    return _Raw
