"""
Tests for the retrying document indexer.
"""

import pytest

from jobdesc_rag.core.exceptions import IndexingError, StoreError
from jobdesc_rag.core.ingestion.indexer import DocumentIndexer


def test_index_succeeds_first_time(fake_store, make_document, no_sleep):
    document = make_document()

    DocumentIndexer(fake_store, sleep=no_sleep).index(document)

    assert fake_store.documents[document.id] == document
    assert fake_store.upsert_calls == 1
    assert no_sleep.delays == []


def test_index_succeeds_on_third_attempt_after_backoff(fake_store, make_document, no_sleep):
    document = make_document()
    fake_store.upsert_failures = [StoreError("unavailable"), "Update status: acknowledged"]

    DocumentIndexer(fake_store, sleep=no_sleep).index(document)

    assert fake_store.upsert_calls == 3
    assert no_sleep.delays == [1.0, 2.0]
    assert sum(no_sleep.delays) >= 3.0
    assert document.id in fake_store.documents


def test_index_raises_after_exactly_three_attempts(fake_store, make_document, no_sleep):
    document = make_document()
    fake_store.upsert_failures = [StoreError("down")] * 5

    with pytest.raises(IndexingError) as exc_info:
        DocumentIndexer(fake_store, sleep=no_sleep).index(document)

    assert fake_store.upsert_calls == 3
    assert no_sleep.delays == [1.0, 2.0]
    assert exc_info.value.document_id == document.id
    assert exc_info.value.attempts == 3
    assert "after 3 attempts" in str(exc_info.value)


def test_partial_batch_failure_is_a_failure(make_document, no_sleep):
    from jobdesc_rag.core.vectorstore import UpsertItemResult

    class PartialStore:
        calls = 0

        def upsert_documents(self, documents):
            self.calls += 1
            return [
                UpsertItemResult(document_id=documents[0].id, succeeded=True),
                UpsertItemResult(document_id="other", succeeded=False, error_message="rejected"),
            ]

    store = PartialStore()
    with pytest.raises(IndexingError) as exc_info:
        DocumentIndexer(store, max_attempts=2, sleep=no_sleep).index(make_document())

    assert store.calls == 2
    assert "rejected" in str(exc_info.value)


def test_backoff_delay_doubles():
    indexer = DocumentIndexer(store=None, base_delay=1.0)

    assert [indexer.backoff_delay(n) for n in (1, 2, 3)] == [1.0, 2.0, 4.0]


def test_max_attempts_must_be_positive():
    with pytest.raises(ValueError):
        DocumentIndexer(store=None, max_attempts=0)
