"""Tests for InMemoryTaskStore."""

from __future__ import annotations

import pytest

from taskapp_cli.adapters.memory import InMemoryTaskStore
from taskapp_cli.repositories import StoreError, TransactionFailedError


class TestInMemoryTaskStore:
    def test_query_all_newest_first(self, memory_store):
        assert [t.id for t in memory_store.query_all()] == [4, 2, 3, 1]

    def test_returned_tasks_are_copies(self, memory_store):
        memory_store.query_all()[0].title = "mutated"
        memory_store.get(1).title = "mutated"
        assert memory_store.get(4).title == "Standup"
        assert memory_store.get(1).title == "Buy milk"

    def test_saved_task_is_copied(self, task_factory):
        task = task_factory(1, "original")
        store = InMemoryTaskStore()
        store.save(task)
        task.title = "changed"
        assert store.get(1).title == "original"

    def test_unknown_sort_key(self, memory_store):
        with pytest.raises(ValueError):
            memory_store.query_filtered("home", sort_key="nope")

    def test_max_value(self, memory_store):
        assert memory_store.max_value("id") == 4
        assert InMemoryTaskStore().max_value("id") is None
        with pytest.raises(ValueError):
            memory_store.max_value("date")

    def test_delete(self, memory_store, task_factory):
        assert memory_store.delete(task_factory(2)) is True
        assert memory_store.delete(task_factory(2)) is False

    def test_transaction_restores_on_error(self, memory_store, task_factory):
        with pytest.raises(KeyError):
            with memory_store.transaction():
                memory_store.delete(task_factory(1))
                memory_store.save(task_factory(9))
                raise KeyError("abort")
        assert memory_store.get(1) is not None
        assert memory_store.get(9) is None

    def test_store_error_wrapped(self, memory_store, task_factory):
        with pytest.raises(TransactionFailedError):
            with memory_store.transaction():
                memory_store.delete(task_factory(1))
                raise StoreError("boom")
        assert memory_store.get(1) is not None

    def test_nested_transaction_joins_outer(self, memory_store, task_factory):
        with pytest.raises(RuntimeError):
            with memory_store.transaction():
                with memory_store.transaction():
                    memory_store.delete(task_factory(1))
                raise RuntimeError("abort")
        assert memory_store.get(1) is not None
