import sqlite3
from unittest.mock import patch

import pytest

from streamBox.settings import FAVORITES_KEY
from streamBox.storage import StorageError, favorites_storage, kv_db
from streamBox.utils import parse_iso


class TestFavorites:

    def test_empty(self):
        assert favorites_storage.get_favorites() == []
        assert favorites_storage.is_favorite(1) is False

    def test_add_keeps_insertion_order(self):
        assert favorites_storage.add_favorite(3) is True
        assert favorites_storage.add_favorite(1) is True
        assert favorites_storage.add_favorite(2) is True
        assert favorites_storage.get_favorites() == [3, 1, 2]

    def test_add_duplicate_is_rejected(self, raw_store):
        favorites_storage.add_favorite(5)
        before = raw_store.get(FAVORITES_KEY)

        assert favorites_storage.add_favorite(5) is False
        assert raw_store.get(FAVORITES_KEY) == before

    def test_records_carry_timestamp(self, raw_store):
        favorites_storage.add_favorite(9)
        record = raw_store.get(FAVORITES_KEY)[0]

        assert record["movieId"] == 9
        assert record["addedAt"].endswith("Z")
        parse_iso(record["addedAt"])
        assert favorites_storage.get_favorite_records()[0].added_at == record["addedAt"]

    def test_remove(self):
        favorites_storage.add_favorite(1)
        favorites_storage.add_favorite(2)

        assert favorites_storage.remove_favorite(1) is True
        assert favorites_storage.get_favorites() == [2]
        assert favorites_storage.remove_favorite(1) is False

    def test_remove_from_empty(self):
        assert favorites_storage.remove_favorite(1) is False

    def test_toggle(self):
        assert favorites_storage.toggle_favorite(4) is True
        assert favorites_storage.is_favorite(4) is True
        assert favorites_storage.toggle_favorite(4) is False
        assert favorites_storage.is_favorite(4) is False

    def test_clear(self, raw_store):
        favorites_storage.add_favorite(1)
        favorites_storage.clear_favorites()
        assert raw_store.get(FAVORITES_KEY) is None
        assert favorites_storage.get_favorites() == []

    def test_corrupt_list_reads_empty_but_refuses_write(self, raw_store, log_text):
        raw_store.put(FAVORITES_KEY, "[{broken")

        assert favorites_storage.get_favorites() == []
        assert "Error reading" in log_text()
        with pytest.raises(StorageError, match="Failed to add favorite"):
            favorites_storage.add_favorite(1)
        # the unreadable record is left in place, not clobbered
        assert kv_db.get_item(FAVORITES_KEY) == "[{broken"

    def test_bad_records_are_skipped(self, raw_store):
        raw_store.put(FAVORITES_KEY, [{"movieId": 1, "addedAt": "x"}, {"nope": True}])
        assert favorites_storage.get_favorites() == [1]

    def test_non_record_entries_refuse_write(self, raw_store):
        raw_store.put(FAVORITES_KEY, [1, 2])

        assert favorites_storage.get_favorites() == []
        with pytest.raises(StorageError, match="Failed to add favorite"):
            favorites_storage.add_favorite(3)
        assert raw_store.get(FAVORITES_KEY) == [1, 2]

    def test_clear_failure(self):
        with patch("streamBox.storage.kv_db.remove_item", side_effect=sqlite3.OperationalError("x")):
            with pytest.raises(StorageError, match="Failed to clear favorites"):
                favorites_storage.clear_favorites()

    def test_remove_failure(self):
        favorites_storage.add_favorite(1)
        with patch("streamBox.storage.kv_db.set_item", side_effect=sqlite3.OperationalError("x")):
            with pytest.raises(StorageError, match="Failed to remove favorite"):
                favorites_storage.remove_favorite(1)
