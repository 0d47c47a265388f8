import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_qdrant import QdrantVectorStore
from qdrant_client import QdrantClient
from qdrant_client.http import models as rest
from qdrant_client.http.models import FieldCondition, Filter, MatchText, PointIdsList

from jobdesc_rag.core.exceptions import StoreError
from jobdesc_rag.core.filters import parse_filter_expression
from jobdesc_rag.models.job_models import JobDescriptionDocument

logger = logging.getLogger(__name__)

KEYWORD_FIELDS = ("Id", "Title", "Company", "Location", "WorkdayId")
DATETIME_FIELDS = ("IngestionTime", "PostingDate")
FULL_TEXT_FIELD = "Description"
SEARCHABLE_FIELDS = ("Title", "Company", "Description", "Location")


@dataclass
class SearchPage:
    items: List[JobDescriptionDocument]
    total_count: int


@dataclass
class UpsertItemResult:
    """Outcome of writing a single document within a batch."""
    document_id: str
    succeeded: bool
    error_message: Optional[str] = None


def _is_point_id(document_id: str) -> bool:
    try:
        uuid.UUID(str(document_id))
    except ValueError:
        return False
    return True


class QdrantStore:
    """
    Qdrant-backed index of job description documents.

    Each point carries the document vector and a payload of the form
    ``{"page_content": <description>, "metadata": {<PascalCase fields>}}``,
    which is the layout the LangChain Qdrant wrapper reads back for
    relevance search.
    """

    def __init__(
        self,
        client: QdrantClient,
        collection_name: str,
        embedding_function: Embeddings,
        ensure_collection: bool = True,
    ):
        self.client = client
        self.collection_name = collection_name
        self.embedding_function = embedding_function
        self._langchain_qdrant: Optional[QdrantVectorStore] = None

        if ensure_collection:
            self._ensure_collection()

    @property
    def langchain_qdrant(self) -> QdrantVectorStore:
        if self._langchain_qdrant is None:
            self._langchain_qdrant = QdrantVectorStore(
                client=self.client,
                collection_name=self.collection_name,
                embedding=self.embedding_function,
                distance=rest.Distance.COSINE,
            )
        return self._langchain_qdrant

    def _ensure_collection(self) -> None:
        """
        Ensure the collection exists in Qdrant, creating it if necessary.
        """
        collections = self.client.get_collections().collections
        collection_names = [collection.name for collection in collections]

        if self.collection_name in collection_names:
            return

        sample_embedding = self.embedding_function.embed_query("sample text")
        embedding_dimension = len(sample_embedding)

        self.client.create_collection(
            collection_name=self.collection_name,
            vectors_config=rest.VectorParams(
                size=embedding_dimension,
                distance=rest.Distance.COSINE,
            ),
        )
        logger.info(f"Qdrant collection {self.collection_name} created with {embedding_dimension} dimensions")

        self._create_payload_indexes()

    def _create_payload_indexes(self) -> None:
        for field in KEYWORD_FIELDS:
            self.client.create_payload_index(
                collection_name=self.collection_name,
                field_name=f"metadata.{field}",
                field_schema=rest.PayloadSchemaType.KEYWORD,
            )

        for field in DATETIME_FIELDS:
            self.client.create_payload_index(
                collection_name=self.collection_name,
                field_name=f"metadata.{field}",
                field_schema=rest.PayloadSchemaType.DATETIME,
            )

        self.client.create_payload_index(
            collection_name=self.collection_name,
            field_name=f"metadata.{FULL_TEXT_FIELD}",
            field_schema=rest.TextIndexParams(
                type=rest.TextIndexType.TEXT,
                tokenizer=rest.TokenizerType.WORD,
                lowercase=True,
            ),
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_document(self, document_id: str) -> Optional[JobDescriptionDocument]:
        """Exact key lookup. Returns None when no document has this id."""
        if not _is_point_id(document_id):
            return None

        try:
            records = self.client.retrieve(
                collection_name=self.collection_name,
                ids=[str(document_id)],
                with_payload=True,
                with_vectors=False,
            )
        except Exception as e:
            raise StoreError(f"Lookup of document {document_id} failed: {str(e)}") from e

        if not records:
            return None
        return JobDescriptionDocument.from_payload(records[0].payload)

    def count(self, filter_expression: Optional[str] = None) -> int:
        query_filter = parse_filter_expression(filter_expression) if filter_expression else None
        try:
            result = self.client.count(
                collection_name=self.collection_name,
                count_filter=query_filter,
                exact=True,
            )
        except Exception as e:
            raise StoreError(f"Count failed for filter {filter_expression!r}: {str(e)}") from e
        return result.count

    def search(self, filter_expression: Optional[str] = None, size: int = 50, skip: int = 0) -> SearchPage:
        """
        Equality-filtered search, returning one page of matches and the total count.
        """
        query_filter = parse_filter_expression(filter_expression) if filter_expression else None
        try:
            response = self.client.query_points(
                collection_name=self.collection_name,
                query_filter=query_filter,
                limit=size,
                offset=skip,
                with_payload=True,
            )
        except Exception as e:
            raise StoreError(f"Search failed for filter {filter_expression!r}: {str(e)}") from e

        items = [JobDescriptionDocument.from_payload(point.payload) for point in response.points]
        return SearchPage(items=items, total_count=self.count(filter_expression))

    def list_documents(self, search_text: Optional[str] = None, size: int = 50, skip: int = 0) -> SearchPage:
        """
        Page through documents, newest ingestion first, optionally restricted
        to documents whose text fields match ``search_text``.
        """
        query_filter = None
        if search_text and search_text.strip():
            query_filter = Filter(
                should=[
                    FieldCondition(key=f"metadata.{field}", match=MatchText(text=search_text.strip()))
                    for field in SEARCHABLE_FIELDS
                ]
            )

        try:
            response = self.client.query_points(
                collection_name=self.collection_name,
                query=rest.OrderByQuery(
                    order_by=rest.OrderBy(key="metadata.IngestionTime", direction=rest.Direction.DESC)
                ),
                query_filter=query_filter,
                limit=size,
                offset=skip,
                with_payload=True,
            )
            total = self.client.count(
                collection_name=self.collection_name,
                count_filter=query_filter,
                exact=True,
            ).count
        except Exception as e:
            raise StoreError(f"Listing job descriptions failed: {str(e)}") from e

        items = [JobDescriptionDocument.from_payload(point.payload) for point in response.points]
        return SearchPage(items=items, total_count=total)

    def similarity_search_with_score(self, query: str, k: int = 5) -> List[Tuple[Document, float]]:
        """
        Relevance search over document vectors.

        Returns:
            List of (document, score) tuples, best match first
        """
        try:
            return self.langchain_qdrant.similarity_search_with_score(query=query, k=k)
        except Exception as e:
            raise StoreError(f"Relevance search failed: {str(e)}") from e

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def upsert_documents(self, documents: List[JobDescriptionDocument]) -> List[UpsertItemResult]:
        """
        Merge-or-upload a batch, keyed by document id.

        One update operation is issued per document so every item gets its
        own status back.
        """
        if not documents:
            return []

        try:
            vectors = self.embedding_function.embed_documents([doc.embedding_text() for doc in documents])
            operations = [
                rest.UpsertOperation(
                    upsert=rest.PointsList(
                        points=[rest.PointStruct(id=doc.id, vector=vector, payload=doc.to_payload())]
                    )
                )
                for doc, vector in zip(documents, vectors)
            ]
            results = self.client.batch_update_points(
                collection_name=self.collection_name,
                update_operations=operations,
                wait=True,
            )
        except Exception as e:
            raise StoreError(f"Batch upsert of {len(documents)} document(s) failed: {str(e)}") from e

        item_results = []
        for doc, result in zip(documents, results):
            succeeded = result.status == rest.UpdateStatus.COMPLETED
            item_results.append(
                UpsertItemResult(
                    document_id=doc.id,
                    succeeded=succeeded,
                    error_message=None if succeeded else f"Update status: {result.status}",
                )
            )
        return item_results

    def delete_document(self, document_id: str) -> bool:
        """
        Delete a document by id.

        Returns:
            False if no document has this id, True once it is deleted
        """
        if self.get_document(document_id) is None:
            return False

        try:
            self.client.delete(
                collection_name=self.collection_name,
                points_selector=PointIdsList(points=[str(document_id)]),
                wait=True,
            )
        except Exception as e:
            raise StoreError(f"Delete of document {document_id} failed: {str(e)}") from e
        return True

    def get_stats(self) -> Dict[str, Any]:
        return self.client.get_collection(self.collection_name).model_dump()
