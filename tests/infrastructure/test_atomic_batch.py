"""Tests for the atomic batch writer against the in-memory store."""

import pytest

from orderstore.domain.exceptions import StoreTimeoutError, StoreUnavailableError
from orderstore.infrastructure.persistence.batch import AtomicBatch
from tests.fakes import FakeKeyValueStore


class TestCommit:

    def test_applies_all_mutations_together(self):
        store = FakeKeyValueStore()
        with AtomicBatch(store) as batch:
            batch.set_if_absent("a", b"1")
            batch.add_member("idx", "a")
            results = batch.commit()

        assert results == [True, True]
        assert store.values == {"a": b"1"}
        assert store.sets == {"idx": {"a"}}

    def test_nothing_applied_before_commit(self):
        store = FakeKeyValueStore()
        batch = AtomicBatch(store).begin()
        batch.set_if_absent("a", b"1")
        assert store.values == {}
        batch.commit()
        assert store.values == {"a": b"1"}

    def test_results_follow_queue_order(self):
        store = FakeKeyValueStore()
        store.values["a"] = b"old"
        with AtomicBatch(store) as batch:
            batch.set_if_absent("a", b"new")
            batch.set_if_present("a", b"newer")
            batch.delete("missing")
            assert batch.commit() == [False, True, False]
        assert store.values["a"] == b"newer"

    def test_commit_failure_leaves_store_untouched(self):
        store = FakeKeyValueStore()
        store.fail("execute")
        with pytest.raises(StoreUnavailableError, match="insert x: commit failed"):
            with AtomicBatch(store, "insert x") as batch:
                batch.set_if_absent("x", b"1")
                batch.add_member("idx", "x")
                batch.commit()
        assert store.values == {}
        assert store.sets == {}

    def test_commit_timeout_keeps_its_type(self):
        store = FakeKeyValueStore()
        store.fail("execute", timeout=True)
        with pytest.raises(StoreTimeoutError):
            with AtomicBatch(store) as batch:
                batch.delete("x")
                batch.commit()

    def test_mid_commit_failure_rolls_back(self):
        store = FakeKeyValueStore()
        store.fail("delete")
        with pytest.raises(StoreUnavailableError):
            with AtomicBatch(store) as batch:
                batch.set_if_absent("x", b"1")
                batch.delete("y")
                batch.commit()
        assert store.values == {}


class TestAbandon:

    def test_queue_failure_discards_batch(self):
        store = FakeKeyValueStore()
        store.fail("queue add_member")
        with pytest.raises(StoreUnavailableError):
            with AtomicBatch(store) as batch:
                batch.set_if_absent("x", b"1")
                batch.add_member("idx", "x")
                batch.commit()

        assert store.transactions[0].discarded
        assert store.executed == 0
        assert store.values == {}

    def test_leaving_block_without_commit_discards(self):
        store = FakeKeyValueStore()
        with AtomicBatch(store) as batch:
            batch.set_if_absent("x", b"1")
        assert store.transactions[0].discarded
        assert store.values == {}

    def test_exception_in_block_discards(self):
        store = FakeKeyValueStore()
        with pytest.raises(KeyError):
            with AtomicBatch(store) as batch:
                batch.set_if_absent("x", b"1")
                raise KeyError("boom")
        assert store.transactions[0].discarded
        assert store.values == {}

    def test_abandon_after_commit_is_noop(self):
        store = FakeKeyValueStore()
        with AtomicBatch(store) as batch:
            batch.set_if_absent("x", b"1")
            batch.commit()
        assert not store.transactions[0].discarded


class TestMisuse:

    def test_queue_before_begin(self):
        with pytest.raises(RuntimeError, match="not open"):
            AtomicBatch(FakeKeyValueStore()).set_if_absent("x", b"1")

    def test_commit_twice(self):
        store = FakeKeyValueStore()
        batch = AtomicBatch(store).begin()
        batch.commit()
        with pytest.raises(RuntimeError, match="not open"):
            batch.commit()

    def test_begin_twice(self):
        batch = AtomicBatch(FakeKeyValueStore()).begin()
        with pytest.raises(RuntimeError, match="already started"):
            batch.begin()
