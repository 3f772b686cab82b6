"""Tests for the in-memory fragment store."""

import time

from viewcells.cache import CacheEntry, FragmentStore, get_fragment_store


class TestFragmentStore:
    """Tests for FragmentStore."""

    def test_write_and_read(self):
        store = FragmentStore()
        store.write("key", "<p>x</p>")

        assert store.read("key") == "<p>x</p>"

    def test_missing_key(self):
        assert FragmentStore().read("nope") is None

    def test_expiry(self):
        store = FragmentStore()
        store.write("key", "value", expires_in=0)

        time.sleep(0.01)
        assert store.read("key") is None
        assert len(store) == 0

    def test_no_expiry_by_default(self):
        entry = CacheEntry("value")

        assert entry.is_expired() is False

    def test_clear_single_key(self):
        store = FragmentStore()
        store.write("a", "1")
        store.write("b", "2")

        store.clear("a")

        assert store.read("a") is None
        assert store.read("b") == "2"

    def test_clear_all(self):
        store = FragmentStore()
        store.write("a", "1")
        store.write("b", "2")

        store.clear()

        assert len(store) == 0

    def test_cleanup_expired(self):
        store = FragmentStore()
        store.write("old", "1", expires_in=0)
        store.write("new", "2", expires_in=3600)

        time.sleep(0.01)
        store.cleanup_expired()

        assert len(store) == 1
        assert store.read("new") == "2"

    def test_global_instance(self):
        assert get_fragment_store() is get_fragment_store()
