"""Tests for the execution strategy lookup."""

from space_indexer.models import ExecutionStrategy
from space_indexer.store import InMemoryExecutionStrategyStore, normalize_key

ADDRESS = "0x" + "ab" * 20


def test_miss_returns_none():
    assert InMemoryExecutionStrategyStore().load(ADDRESS) is None


def test_load_is_case_insensitive():
    strategy = ExecutionStrategy(id="0x" + "AB" * 20, type="Vanilla")
    store = InMemoryExecutionStrategyStore([strategy])

    assert store.load(ADDRESS) is strategy
    assert store.load("ab" * 20) is strategy
    assert len(store) == 1


def test_save_replaces_existing_entry():
    store = InMemoryExecutionStrategyStore()
    store.save(ExecutionStrategy(id=ADDRESS, type="Vanilla"))
    store.save(ExecutionStrategy(id=ADDRESS, type="Axiom"))

    assert store.load(ADDRESS).type == "Axiom"
    assert len(store) == 1


def test_normalize_key():
    assert normalize_key("0xABCD") == "0xabcd"
    assert normalize_key("ABCD") == "0xabcd"
