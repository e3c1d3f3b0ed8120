"""Unit tests for the in-memory checked-state store."""

from concurrent.futures import ThreadPoolExecutor

from grocerylist.plan.checked_state import InMemoryCheckedStateStore


class TestInMemoryCheckedStateStore:
    """Tests for InMemoryCheckedStateStore."""

    def test_unknown_item(self):
        """Test unsaved items have no state."""
        store = InMemoryCheckedStateStore()

        assert store.get_checked("u1", "garlic") is None

    def test_set_and_get(self):
        """Test saved state is returned per user."""
        store = InMemoryCheckedStateStore()
        store.set_checked("u1", "garlic", True)
        store.set_checked("u2", "garlic", False)

        assert store.get_checked("u1", "garlic") is True
        assert store.get_checked("u2", "garlic") is False
        assert len(store) == 2

    def test_overwrite_and_clear(self):
        """Test state can be changed and cleared."""
        store = InMemoryCheckedStateStore()
        store.set_checked("u1", "garlic", True)
        store.set_checked("u1", "garlic", False)

        assert store.get_checked("u1", "garlic") is False

        store.clear()
        assert len(store) == 0

    def test_concurrent_writes(self):
        """Test writes from many threads are all kept."""
        store = InMemoryCheckedStateStore()

        with ThreadPoolExecutor(max_workers=8) as pool:
            for i in range(200):
                pool.submit(store.set_checked, "u1", f"item-{i}", i % 2 == 0)

        assert len(store) == 200
        assert store.get_checked("u1", "item-10") is True
        assert store.get_checked("u1", "item-11") is False
