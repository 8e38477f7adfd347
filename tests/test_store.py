import threading
from datetime import timedelta

import pytest

from app.exceptions import DuplicateError, NotFoundError, StringValidationError
from app.models import StringAnalysis

PROPERTY_FIELDS = (
    "value",
    "length",
    "is_palindrome",
    "unique_characters",
    "word_count",
    "sha256_hash",
    "character_frequency_map",
)


def _properties(record):
    return {name: getattr(record, name) for name in PROPERTY_FIELDS}


def test_insert_normalizes(store):
    record = store.insert("  Racecar ")
    assert record.value == "racecar"
    assert record.is_palindrome is True
    assert record.created_at is not None


@pytest.mark.parametrize("variant", [" hi ", "HI", "hi"])
def test_case_and_whitespace_variants_are_duplicates(store, variant):
    store.insert("Hi")
    with pytest.raises(DuplicateError):
        store.insert(variant)


def test_duplicate_does_not_overwrite(store):
    first = store.insert("noon")
    with pytest.raises(DuplicateError):
        store.insert("NOON")
    assert store.get("noon").created_at == first.created_at
    assert len(store.list_all()) == 1


def test_get_round_trip(store):
    inserted = store.insert("Hello World")
    assert _properties(store.get("hello world")) == _properties(inserted)
    assert _properties(store.get("  HELLO world ")) == _properties(inserted)


def test_created_at_is_utc_on_every_read(store):
    inserted = store.insert("timestamped")
    fetched = store.get("timestamped")
    listed = store.list_all()[0]
    assert inserted.created_at.tzinfo is not None
    assert fetched.created_at == inserted.created_at
    assert listed.created_at == inserted.created_at
    assert fetched.created_at.utcoffset() == timedelta(0)
    assert fetched.created_at - inserted.created_at == timedelta(0)


def test_insert_rejects_lone_surrogates(store):
    with pytest.raises(StringValidationError):
        store.insert("x\ud800")
    assert store.count() == 0


def test_lone_surrogate_key_is_never_found(store):
    with pytest.raises(NotFoundError):
        store.get("x\ud800")
    with pytest.raises(NotFoundError):
        store.delete("x\ud800")


def test_get_missing(store):
    with pytest.raises(NotFoundError):
        store.get("nothing here")


def test_delete(store):
    store.insert("gone soon")
    store.delete(" Gone Soon")
    with pytest.raises(NotFoundError):
        store.get("gone soon")
    with pytest.raises(NotFoundError):
        store.delete("gone soon")


def test_reinsert_after_delete_yields_same_properties(store):
    first = _properties(store.insert("level"))
    store.delete("level")
    assert _properties(store.insert("level")) == first


def test_list_all_in_insertion_order(store):
    for text in ["b", "a", "c"]:
        store.insert(text)
    store.delete("a")
    store.insert("d")
    assert [r.value for r in store.list_all()] == ["b", "c", "d"]
    assert store.count() == 3


def test_revalidate(store):
    store.insert("stable text")
    assert store.revalidate("stable text") is True


def test_revalidate_detects_diverged_columns(store, session_factory):
    store.insert("two words")
    with session_factory() as db:
        db.query(StringAnalysis).filter(StringAnalysis.value == "two words").update({"word_count": 99})
        db.commit()

    assert store.revalidate("two words") is False
    # other entries are unaffected
    store.insert("untouched")
    assert store.revalidate("untouched") is True


def test_concurrent_inserts_of_same_key(store):
    results = []
    barrier = threading.Barrier(8)

    def worker(text):
        barrier.wait()
        try:
            store.insert(text)
            results.append("ok")
        except DuplicateError:
            results.append("duplicate")

    threads = [threading.Thread(target=worker, args=(v,)) for v in ["Same", "same", " SAME "] * 2 + ["same", "sAme"]]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert results.count("duplicate") == 7
    assert len(store.list_all()) == 1
