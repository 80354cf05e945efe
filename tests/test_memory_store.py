"""
Tests for the in-memory wizard session store.
"""

from __future__ import annotations

from salon_booking.infrastructure.store.memory_store import MemoryWizardSessionStore


def test_create_get_delete():
    store = MemoryWizardSessionStore()
    wizard = object()

    session_id = store.create(wizard)

    assert store.get(session_id) is wizard
    store.delete(session_id)
    assert store.get(session_id) is None
    # Deleting twice is harmless
    store.delete(session_id)


def test_oldest_session_is_evicted_past_the_limit():
    store = MemoryWizardSessionStore(session_limit=2)
    first = store.create(object())
    second = store.create(object())
    third = store.create(object())

    assert len(store) == 2
    assert store.get(first) is None
    assert store.get(second) is not None
    assert store.get(third) is not None
