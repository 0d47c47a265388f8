"""
Pytest configuration for the job description RAG system.

This module provides fixtures and in-memory fakes used by the test suite.
"""

import os
from typing import Callable, Dict, Generator, List, Optional

# Must be set before the broker module is imported anywhere
os.environ["UNIT_TESTS"] = "1"

import pytest
from fastapi.testclient import TestClient
from langchain_core.documents import Document

from jobdesc_rag.core.exceptions import StoreError
from jobdesc_rag.core.filters import parse_filter_expression
from jobdesc_rag.core.vectorstore import SearchPage, UpsertItemResult
from jobdesc_rag.models.job_models import JobDescriptionDocument, JobDescriptionSubmission


class FakeJobStore:
    """
    In-memory stand-in for ``QdrantStore``.

    Filter expressions go through the real parser, so escaping is exercised
    end to end. Failures are injected per operation.
    """

    def __init__(self):
        self.documents: Dict[str, JobDescriptionDocument] = {}
        self.upsert_calls = 0
        self.lookup_error: Optional[Exception] = None
        self.search_error: Optional[Exception] = None
        self.relevance_error: Optional[Exception] = None
        self.relevance_results: List = []
        self.searched_expressions: List[str] = []
        # Each entry is consumed by one upsert call: an Exception is raised,
        # a string becomes a failed item result.
        self.upsert_failures: List = []

    def add(self, document: JobDescriptionDocument) -> None:
        self.documents[document.id] = document

    def get_document(self, document_id: str) -> Optional[JobDescriptionDocument]:
        if self.lookup_error is not None:
            raise self.lookup_error
        return self.documents.get(document_id)

    def _matches(self, document: JobDescriptionDocument, filter_expression: Optional[str]) -> bool:
        if not filter_expression:
            return True
        metadata = document.to_payload()["metadata"]
        for condition in parse_filter_expression(filter_expression).must:
            field = condition.key.split(".", 1)[1]
            if metadata.get(field) != condition.match.value:
                return False
        return True

    def search(self, filter_expression: Optional[str] = None, size: int = 50, skip: int = 0) -> SearchPage:
        self.searched_expressions.append(filter_expression)
        if self.search_error is not None:
            raise self.search_error
        matches = [doc for doc in self.documents.values() if self._matches(doc, filter_expression)]
        return SearchPage(items=matches[skip:skip + size], total_count=len(matches))

    def list_documents(self, search_text: Optional[str] = None, size: int = 50, skip: int = 0) -> SearchPage:
        docs = sorted(self.documents.values(), key=lambda d: d.ingestion_time, reverse=True)
        if search_text:
            needle = search_text.lower()
            docs = [
                d for d in docs
                if needle in " ".join(filter(None, [d.title, d.company, d.description, d.location])).lower()
            ]
        return SearchPage(items=docs[skip:skip + size], total_count=len(docs))

    def similarity_search_with_score(self, query: str, k: int = 5):
        if self.relevance_error is not None:
            raise self.relevance_error
        return self.relevance_results[:k]

    def upsert_documents(self, documents: List[JobDescriptionDocument]) -> List[UpsertItemResult]:
        self.upsert_calls += 1
        if self.upsert_failures:
            failure = self.upsert_failures.pop(0)
            if isinstance(failure, Exception):
                raise failure
            return [UpsertItemResult(document_id=doc.id, succeeded=False, error_message=failure) for doc in documents]

        for doc in documents:
            self.documents[doc.id] = doc
        return [UpsertItemResult(document_id=doc.id, succeeded=True) for doc in documents]

    def delete_document(self, document_id: str) -> bool:
        return self.documents.pop(document_id, None) is not None

    def get_stats(self):
        return {"points_count": len(self.documents)}


class FakeChatClient:
    def __init__(self, answer: str = "Mock answer", error: Optional[Exception] = None):
        self.answer = answer
        self.error = error
        self.calls: List[List[Dict[str, str]]] = []

    def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def fake_store() -> FakeJobStore:
    return FakeJobStore()


@pytest.fixture
def fake_chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def no_sleep() -> Callable[[float], None]:
    """Records backoff delays instead of sleeping."""
    delays: List[float] = []

    def sleep(seconds: float) -> None:
        delays.append(seconds)

    sleep.delays = delays
    return sleep


@pytest.fixture
def sample_submission() -> JobDescriptionSubmission:
    return JobDescriptionSubmission(
        title="Senior Data Engineer",
        company="Contoso",
        description="Build and operate streaming data pipelines.",
        location="Seattle, WA",
        workday_id="JR-10231",
    )


@pytest.fixture
def make_document() -> Callable[..., JobDescriptionDocument]:
    from jobdesc_rag.models.job_models import JobDescriptionMessage

    def _make(**overrides) -> JobDescriptionDocument:
        fields = {
            "title": "Senior Data Engineer",
            "company": "Contoso",
            "description": "Build and operate streaming data pipelines.",
            "location": "Seattle, WA",
            "workday_id": None,
        }
        fields.update(overrides)
        message = JobDescriptionMessage.create(JobDescriptionSubmission(**fields))
        return JobDescriptionDocument.from_message(message)

    return _make


@pytest.fixture
def scored_documents() -> List:
    return [
        (
            Document(
                page_content="Build and operate streaming data pipelines.",
                metadata={
                    "Id": "11111111-1111-1111-1111-111111111111",
                    "Title": "Senior Data Engineer",
                    "Company": "Contoso",
                    "Location": "Seattle, WA",
                    "Description": "Build and operate streaming data pipelines.",
                },
            ),
            0.91,
        ),
        (
            Document(
                page_content="x" * 250,
                metadata={
                    "Id": "22222222-2222-2222-2222-222222222222",
                    "Title": "Machine Learning Engineer",
                    "Company": "Fabrikam",
                    "Location": None,
                    "Description": "x" * 250,
                },
            ),
            0.72,
        ),
    ]


@pytest.fixture
def test_client() -> Generator[TestClient, None, None]:
    """
    FastAPI test client. The lifespan is not run, so no real Qdrant, Redis
    or model is touched; tests override the service dependencies they use.
    """
    from jobdesc_rag.api.main import app

    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
