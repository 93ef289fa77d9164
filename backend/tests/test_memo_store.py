"""
MemoPad — MemoStore Unit Tests
===============================

What:  Tests for the in-memory CRUD store (no HTTP involved).

What we test:
    ✅ Create stores the memo, stamps createdAt, leaves updatedAt unset
    ✅ Create with blank/missing fields fails without touching the store
    ✅ Partial update keeps untouched fields and stamps updatedAt
    ✅ Update/delete of unknown ids fail and leave the store unchanged
    ✅ Ids are unique and strictly increasing, even within one millisecond
"""

from datetime import timedelta

import pytest

from memopad.exceptions import NotFoundError, ValidationError


class TestMemoStoreCreate:
    """Tests for create() and the records it produces."""

    def test_create_then_get_round_trip(self, store, start_time):
        memo = store.create("Groceries", "milk, eggs")

        fetched = store.get(memo.id)
        assert fetched.title == "Groceries"
        assert fetched.content == "milk, eggs"
        assert fetched.created_at == start_time
        assert fetched.updated_at is None

    def test_created_memo_appears_in_list(self, store):
        memo = store.create("A", "B")

        listed = store.list()
        assert list(listed) == [memo.id]
        assert listed[memo.id] is memo

    def test_id_is_millisecond_timestamp(self, store, start_time):
        memo = store.create("A", "B")
        assert memo.id == str(int(start_time.timestamp() * 1000))

    @pytest.mark.parametrize(
        "title, content",
        [
            (None, "content"),
            ("title", None),
            ("", "content"),
            ("title", ""),
            ("   ", "content"),
            ("title", "\n\t"),
            (None, None),
        ],
    )
    def test_missing_or_blank_fields_rejected(self, store, title, content):
        with pytest.raises(ValidationError) as exc_info:
            store.create(title, content)

        assert exc_info.value.message == "제목과 내용은 필수입니다"
        assert len(store) == 0

    def test_values_stored_untrimmed(self, store):
        memo = store.create("  padded  ", "body\n")
        assert memo.title == "  padded  "
        assert memo.content == "body\n"

    def test_duplicates_allowed(self, store):
        first = store.create("same", "same")
        second = store.create("same", "same")
        assert first.id != second.id
        assert len(store) == 2


class TestMemoStoreIds:
    """Identifier generation."""

    def test_same_millisecond_creations_get_distinct_ids(self, make_store, start_time):
        store = make_store(timedelta(0))

        ids = [store.create(f"t{i}", "c").id for i in range(3)]

        base = int(start_time.timestamp() * 1000)
        assert ids == [str(base), str(base + 1), str(base + 2)]

    def test_ids_never_reused_after_delete(self, make_store):
        store = make_store(timedelta(0))
        first = store.create("t", "c")
        store.delete(first.id)

        second = store.create("t", "c")
        assert second.id != first.id

    def test_clock_going_backwards_keeps_ids_increasing(self, make_store):
        store = make_store(timedelta(seconds=-1))

        first = store.create("t", "c")
        second = store.create("t", "c")
        assert int(second.id) > int(first.id)


class TestMemoStoreGet:

    def test_unknown_id_raises_not_found(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.get("999")
        assert exc_info.value.resource_id == "999"
        assert exc_info.value.message == "메모를 찾을 수 없습니다"

    def test_list_returns_copy(self, store):
        store.create("A", "B")
        snapshot = store.list()
        snapshot.clear()
        assert len(store) == 1


class TestMemoStoreUpdate:
    """Partial updates and updatedAt stamping."""

    def test_title_only_update_keeps_content(self, store, clock, start_time):
        memo = store.create("old title", "kept content")
        expected_update_time = clock.now

        updated = store.update(memo.id, title="new title")

        assert updated.title == "new title"
        assert updated.content == "kept content"
        assert updated.created_at == start_time
        assert updated.updated_at == expected_update_time

    def test_content_only_update_keeps_title(self, store):
        memo = store.create("kept title", "old content")

        store.update(memo.id, content="new content")

        assert store.get(memo.id).title == "kept title"
        assert store.get(memo.id).content == "new content"

    def test_blank_fields_are_ignored(self, store):
        memo = store.create("title", "content")

        store.update(memo.id, title="  ", content="")

        assert memo.title == "title"
        assert memo.content == "content"
        assert memo.updated_at is not None

    def test_update_unknown_id_leaves_store_unchanged(self, store):
        with pytest.raises(NotFoundError):
            store.update("999", title="x", content="y")
        assert len(store) == 0

    def test_id_and_created_at_are_stable(self, store):
        memo = store.create("t", "c")
        original_id, original_created = memo.id, memo.created_at

        store.update(memo.id, title="t2", content="c2")

        assert memo.id == original_id
        assert memo.created_at == original_created


class TestMemoStoreDelete:

    def test_delete_then_get_fails(self, store):
        memo = store.create("t", "c")

        store.delete(memo.id)

        assert memo.id not in store
        with pytest.raises(NotFoundError):
            store.get(memo.id)

    def test_delete_twice_fails_second_time(self, store):
        memo = store.create("t", "c")
        store.delete(memo.id)

        with pytest.raises(NotFoundError):
            store.delete(memo.id)

    def test_delete_leaves_other_memos(self, store):
        keep = store.create("keep", "me")
        drop = store.create("drop", "me")

        store.delete(drop.id)

        assert list(store.list()) == [keep.id]
