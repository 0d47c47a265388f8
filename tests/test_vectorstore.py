"""
Tests for the Qdrant-backed store against a mocked client.
"""

from unittest.mock import MagicMock

import pytest
from qdrant_client.http import models as rest

from jobdesc_rag.core.exceptions import StoreError
from jobdesc_rag.core.vectorstore import QdrantStore


@pytest.fixture
def qdrant_client() -> MagicMock:
    client = MagicMock()
    client.get_collections.return_value.collections = []
    return client


@pytest.fixture
def embedding_function() -> MagicMock:
    embeddings = MagicMock()
    embeddings.embed_query.return_value = [0.1, 0.2, 0.3, 0.4]
    embeddings.embed_documents.side_effect = lambda texts: [[0.1, 0.2, 0.3, 0.4] for _ in texts]
    return embeddings


@pytest.fixture
def store(qdrant_client, embedding_function) -> QdrantStore:
    return QdrantStore(client=qdrant_client, collection_name="jobs", embedding_function=embedding_function)


def test_collection_and_payload_indexes_are_created(store, qdrant_client):
    qdrant_client.create_collection.assert_called_once()
    vectors_config = qdrant_client.create_collection.call_args.kwargs["vectors_config"]
    assert vectors_config.size == 4
    assert vectors_config.distance == rest.Distance.COSINE

    indexed = {c.kwargs["field_name"]: c.kwargs["field_schema"] for c in qdrant_client.create_payload_index.call_args_list}
    assert indexed["metadata.Title"] == rest.PayloadSchemaType.KEYWORD
    assert indexed["metadata.WorkdayId"] == rest.PayloadSchemaType.KEYWORD
    assert indexed["metadata.IngestionTime"] == rest.PayloadSchemaType.DATETIME
    assert isinstance(indexed["metadata.Description"], rest.TextIndexParams)


def test_existing_collection_is_reused(qdrant_client, embedding_function):
    existing = MagicMock()
    existing.name = "jobs"
    qdrant_client.get_collections.return_value.collections = [existing]

    QdrantStore(client=qdrant_client, collection_name="jobs", embedding_function=embedding_function)

    qdrant_client.create_collection.assert_not_called()


def test_get_document(store, qdrant_client, make_document):
    document = make_document()
    qdrant_client.retrieve.return_value = [MagicMock(payload=document.to_payload())]

    assert store.get_document(document.id) == document
    assert qdrant_client.retrieve.call_args.kwargs["ids"] == [document.id]


def test_get_document_not_found(store, qdrant_client, make_document):
    qdrant_client.retrieve.return_value = []

    assert store.get_document(make_document().id) is None


def test_get_document_with_non_uuid_id_is_not_found(store, qdrant_client):
    assert store.get_document("not-a-uuid") is None
    qdrant_client.retrieve.assert_not_called()


def test_get_document_failure_raises_store_error(store, qdrant_client, make_document):
    qdrant_client.retrieve.side_effect = ConnectionError("refused")

    with pytest.raises(StoreError):
        store.get_document(make_document().id)


def test_search_parses_filter_expression(store, qdrant_client, make_document):
    document = make_document()
    qdrant_client.query_points.return_value.points = [MagicMock(payload=document.to_payload())]
    qdrant_client.count.return_value.count = 1

    page = store.search("Title eq 'Senior Data Engineer' and Company eq 'Contoso'", size=1)

    assert page.total_count == 1
    assert page.items == [document]
    query_filter = qdrant_client.query_points.call_args.kwargs["query_filter"]
    assert [c.key for c in query_filter.must] == ["metadata.Title", "metadata.Company"]
    assert qdrant_client.count.call_args.kwargs["exact"] is True


def test_list_documents_orders_by_ingestion_time(store, qdrant_client):
    qdrant_client.query_points.return_value.points = []
    qdrant_client.count.return_value.count = 0

    page = store.list_documents(search_text="python", size=10, skip=20)

    kwargs = qdrant_client.query_points.call_args.kwargs
    assert kwargs["query"].order_by.key == "metadata.IngestionTime"
    assert kwargs["query"].order_by.direction == rest.Direction.DESC
    assert kwargs["limit"] == 10
    assert kwargs["offset"] == 20
    assert {c.key for c in kwargs["query_filter"].should} == {
        "metadata.Title", "metadata.Company", "metadata.Description", "metadata.Location",
    }
    assert page.total_count == 0


def test_list_documents_without_search_has_no_filter(store, qdrant_client):
    qdrant_client.query_points.return_value.points = []
    qdrant_client.count.return_value.count = 0

    store.list_documents()

    assert qdrant_client.query_points.call_args.kwargs["query_filter"] is None


def test_upsert_reports_per_item_results(store, qdrant_client, make_document):
    first, second = make_document(), make_document(title="Analyst")
    qdrant_client.batch_update_points.return_value = [
        rest.UpdateResult(operation_id=1, status=rest.UpdateStatus.COMPLETED),
        rest.UpdateResult(operation_id=2, status=rest.UpdateStatus.ACKNOWLEDGED),
    ]

    results = store.upsert_documents([first, second])

    assert [(r.document_id, r.succeeded) for r in results] == [(first.id, True), (second.id, False)]
    operations = qdrant_client.batch_update_points.call_args.kwargs["update_operations"]
    assert len(operations) == 2
    point = operations[0].upsert.points[0]
    assert point.id == first.id
    assert point.payload["metadata"]["Title"] == first.title


def test_upsert_request_failure_raises_store_error(store, qdrant_client, make_document):
    qdrant_client.batch_update_points.side_effect = TimeoutError("slow")

    with pytest.raises(StoreError):
        store.upsert_documents([make_document()])


def test_delete_document(store, qdrant_client, make_document):
    document = make_document()
    qdrant_client.retrieve.return_value = [MagicMock(payload=document.to_payload())]

    assert store.delete_document(document.id) is True
    assert qdrant_client.delete.call_args.kwargs["points_selector"].points == [document.id]


def test_delete_missing_document(store, qdrant_client, make_document):
    qdrant_client.retrieve.return_value = []

    assert store.delete_document(make_document().id) is False
    qdrant_client.delete.assert_not_called()


def test_relevance_search_failure_raises_store_error(store):
    store._langchain_qdrant = MagicMock()
    store._langchain_qdrant.similarity_search_with_score.side_effect = RuntimeError("boom")

    with pytest.raises(StoreError):
        store.similarity_search_with_score("python", k=5)
