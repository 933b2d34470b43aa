"""Unit tests for the in-memory review store."""

from __future__ import annotations

import pytest

from app.services.docs import (
    FileChange,
    InMemoryReviewStore,
    ReviewNotFoundError,
    ReviewStateError,
    ReviewStatus,
)


def _files(*paths: str) -> dict[str, FileChange]:
    return {path: FileChange(before=f"old {path}", after=f"new {path}") for path in paths}


class TestCreate:
    def test_assigns_increasing_ids(self):
        store = InMemoryReviewStore()

        first = store.create(_files("docs/a.md"), pr_number=1)
        second = store.create(_files("docs/b.md"), pr_number=2)

        assert (first.id, second.id) == (1, 2)
        assert first.status == ReviewStatus.PENDING
        assert first.created_at

    def test_rejects_empty_files(self):
        store = InMemoryReviewStore()

        with pytest.raises(ValueError):
            store.create({})

    def test_ids_keep_increasing_after_clear(self):
        store = InMemoryReviewStore()
        store.create(_files("docs/a.md"))
        store.create(_files("docs/b.md"))

        store.clear()
        review = store.create(_files("docs/c.md"))

        assert review.id == 3
        assert store.count() == 1


class TestReads:
    def test_get_unknown_raises(self):
        store = InMemoryReviewStore()

        with pytest.raises(ReviewNotFoundError, match="Review 99 not found"):
            store.get(99)

    def test_returned_reviews_are_copies(self):
        store = InMemoryReviewStore()
        review = store.create(_files("docs/a.md"))

        review.files["docs/a.md"].after = "tampered"
        review.status = ReviewStatus.MERGED

        stored = store.get(review.id)
        assert stored.files["docs/a.md"].after == "new docs/a.md"
        assert stored.status == ReviewStatus.PENDING

    def test_list_pending_excludes_merged(self):
        store = InMemoryReviewStore()
        first = store.create(_files("docs/a.md"), pr_number=1)
        second = store.create(_files("docs/b.md"), pr_number=2)
        third = store.create(_files("docs/c.md"), pr_number=3)

        store.mark_merged(second.id)

        assert [r.id for r in store.list_pending()] == [first.id, third.id]
        assert store.count() == 3

    def test_list_pending_empty(self):
        assert InMemoryReviewStore().list_pending() == []


class TestTransitions:
    def test_mark_merged_once(self):
        store = InMemoryReviewStore()
        review = store.create(_files("docs/a.md"), pr_number=1)

        merged = store.mark_merged(review.id)

        assert merged.status == ReviewStatus.MERGED
        with pytest.raises(ReviewStateError):
            store.mark_merged(review.id)

    def test_update_file_replaces_after_only(self):
        store = InMemoryReviewStore()
        review = store.create(_files("docs/a.md"))

        updated = store.update_file(review.id, "docs/a.md", "edited")

        assert updated.files["docs/a.md"].after == "edited"
        assert updated.files["docs/a.md"].before == "old docs/a.md"

    def test_update_unknown_file_raises(self):
        store = InMemoryReviewStore()
        review = store.create(_files("docs/a.md"))

        with pytest.raises(ReviewStateError, match="File not part of this review"):
            store.update_file(review.id, "docs/other.md", "x")

    def test_clear_empties_store(self):
        store = InMemoryReviewStore()
        store.create(_files("docs/a.md"))

        store.clear()

        assert store.list_pending() == []
        assert store.count() == 0
