"""
Unit tests for the JSON Review Store.
"""

import json
import os
from unittest.mock import patch

import pytest

from reviewboard.store.review_store import JsonReviewStore, ReviewStoreError


def read_file(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def test_read_all(reviews_file):
    store = JsonReviewStore(str(reviews_file))
    reviews = store.read_all()

    assert [r.id for r in reviews] == [7, 8]
    assert reviews[1].approved is True


def test_missing_file_is_fatal(tmp_path):
    store = JsonReviewStore(str(tmp_path / "missing.json"))
    with pytest.raises(ReviewStoreError):
        store.read_all()


def test_corrupt_file_is_fatal(tmp_path):
    path = tmp_path / "reviews.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ReviewStoreError):
        JsonReviewStore(str(path)).read_all()


def test_non_array_file_is_fatal(tmp_path):
    path = tmp_path / "reviews.json"
    path.write_text(json.dumps({"result": []}), encoding="utf-8")

    with pytest.raises(ReviewStoreError, match="JSON array"):
        JsonReviewStore(str(path)).read_all()


def test_empty_store(tmp_path):
    path = tmp_path / "reviews.json"
    path.write_text("[]", encoding="utf-8")
    assert JsonReviewStore(str(path)).read_all() == []


def test_approval_scenario(reviews_file):
    """Approve 7, see it on read, delete it once."""
    store = JsonReviewStore(str(reviews_file))
    store.read_all()  # warm the cache

    result = store.set_approval(7, True)
    assert result.success is True
    assert result.approved is True

    review = next(r for r in store.read_all() if r.id == 7)
    assert review.approved is True

    assert store.delete(7) is True
    assert store.delete(7) is False
    assert [r.id for r in store.read_all()] == [8]


def test_toggle_when_approved_omitted(reviews_file):
    store = JsonReviewStore(str(reviews_file))

    assert store.set_approval(8).approved is False
    assert store.set_approval(8).approved is True
    assert read_file(reviews_file)[1]["approved"] is True


def test_explicit_approval_is_idempotent(reviews_file):
    store = JsonReviewStore(str(reviews_file))

    assert store.set_approval(8, True).approved is True
    assert store.set_approval(8, True).approved is True


def test_unknown_id(reviews_file):
    store = JsonReviewStore(str(reviews_file))

    result = store.set_approval(999)
    assert result.success is False
    assert result.approved is False
    assert store.delete(999) is False


def test_string_and_int_ids_are_equivalent(reviews_file):
    store = JsonReviewStore(str(reviews_file))

    assert store.set_approval("7", True).success is True
    assert store.delete("7") is True


def test_reads_are_cached_while_file_unchanged(reviews_file):
    store = JsonReviewStore(str(reviews_file))

    with patch.object(store, "_read_records", wraps=store._read_records) as read_records:
        assert len(store.read_all()) == 2
        assert len(store.read_all()) == 2

    assert read_records.call_count == 1


def test_external_edit_is_picked_up(reviews_file, sample_records):
    """Another process rewriting the file invalidates the cache."""
    store = JsonReviewStore(str(reviews_file))
    assert len(store.read_all()) == 2

    previous = os.stat(reviews_file).st_mtime_ns
    reviews_file.write_text(json.dumps(sample_records[:1]), encoding="utf-8")
    os.utime(reviews_file, ns=(previous + 10**9, previous + 10**9))

    assert [r.id for r in store.read_all()] == [7]


def test_invalidate_forces_reload(reviews_file):
    store = JsonReviewStore(str(reviews_file))
    store.read_all()
    store.invalidate()

    with patch.object(store, "_read_records", wraps=store._read_records) as read_records:
        store.read_all()

    assert read_records.call_count == 1


def test_write_keeps_backup_and_no_temp_file(reviews_file, sample_records):
    store = JsonReviewStore(str(reviews_file))
    store.set_approval(7, True)

    backup_path = f"{reviews_file}.backup"
    assert os.path.exists(backup_path)
    assert read_file(backup_path) == sample_records
    assert not os.path.exists(f"{reviews_file}.tmp")


def test_invalid_records_skipped_but_preserved(reviews_file, sample_records):
    bad = dict(sample_records[0], id=99, type="unknown")
    reviews_file.write_text(json.dumps(sample_records + [bad]), encoding="utf-8")

    store = JsonReviewStore(str(reviews_file))
    assert [r.id for r in store.read_all()] == [7, 8]

    store.delete(8)
    assert [r["id"] for r in read_file(reviews_file)] == [7, 99]


def test_null_category_score_skips_record(reviews_file, sample_records):
    broken = dict(sample_records[0], id=9, reviewCategory=[{"category": "value", "rating": None}])
    reviews_file.write_text(json.dumps(sample_records + [broken]), encoding="utf-8")

    store = JsonReviewStore(str(reviews_file))
    assert [r.id for r in store.read_all()] == [7, 8]


def test_string_category_score_skips_record(reviews_file, sample_records):
    broken = dict(sample_records[0], id=9, reviewCategory=[{"category": "value", "rating": "9"}])
    reviews_file.write_text(json.dumps([broken]), encoding="utf-8")

    assert JsonReviewStore(str(reviews_file)).read_all() == []


def test_non_boolean_approved_flag_is_not_approved(reviews_file, sample_records):
    record = dict(sample_records[0], approved="false")
    reviews_file.write_text(json.dumps([record]), encoding="utf-8")

    store = JsonReviewStore(str(reviews_file))
    assert store.read_all()[0].approved is False
    assert store.set_approval(7).approved is True


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
