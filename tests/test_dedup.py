"""
Tests for the duplicate checker.
"""

from jobdesc_rag.core.exceptions import StoreError
from jobdesc_rag.core.ingestion.dedup import DuplicateChecker
from jobdesc_rag.models.enums import DedupOutcome, MatchStrategy


def test_new_document_is_not_a_duplicate(fake_store, make_document):
    result = DuplicateChecker(fake_store).check(make_document())

    assert result.outcome == DedupOutcome.NOT_FOUND
    assert not result.is_duplicate


def test_exact_key_match(fake_store, make_document):
    document = make_document()
    fake_store.add(document)

    result = DuplicateChecker(fake_store).check(document)

    assert result.is_duplicate
    assert result.strategy == MatchStrategy.EXACT_KEY
    assert fake_store.searched_expressions == []


def test_same_title_and_company_with_different_id(fake_store, make_document):
    fake_store.add(make_document())

    result = DuplicateChecker(fake_store).check(make_document(description="Another description"))

    assert result.is_duplicate
    assert result.strategy == MatchStrategy.TITLE_AND_COMPANY


def test_title_and_company_match_is_case_sensitive(fake_store, make_document):
    fake_store.add(make_document())

    result = DuplicateChecker(fake_store).check(make_document(title="senior data engineer"))

    assert not result.is_duplicate


def test_quotes_are_escaped_in_title_company_filter(fake_store, make_document):
    fake_store.add(make_document(title="Lead's Engineer", company="O'Brien & Co"))

    result = DuplicateChecker(fake_store).check(make_document(title="Lead's Engineer", company="O'Brien & Co"))

    assert result.strategy == MatchStrategy.TITLE_AND_COMPANY
    assert fake_store.searched_expressions[0] == "Title eq 'Lead''s Engineer' and Company eq 'O''Brien & Co'"


def test_workday_id_match_regardless_of_title(fake_store, make_document):
    fake_store.add(make_document(title="Analyst", company="Fabrikam", workday_id="WD-42"))

    result = DuplicateChecker(fake_store).check(make_document(workday_id="WD-42"))

    assert result.is_duplicate
    assert result.strategy == MatchStrategy.EXTERNAL_ID
    assert fake_store.searched_expressions[-1] == "WorkdayId eq 'WD-42'"


def test_workday_check_skipped_without_workday_id(fake_store, make_document):
    DuplicateChecker(fake_store).check(make_document(workday_id=None))

    assert len(fake_store.searched_expressions) == 1


def test_lookup_failure_is_treated_as_not_duplicate(fake_store, make_document):
    fake_store.lookup_error = StoreError("connection refused")

    result = DuplicateChecker(fake_store).check(make_document())

    assert result.outcome == DedupOutcome.CHECK_FAILED
    assert "connection refused" in result.error
    assert not result.is_duplicate


def test_search_failure_is_treated_as_not_duplicate(fake_store, make_document):
    fake_store.search_error = StoreError("timeout")

    checker = DuplicateChecker(fake_store)

    assert checker.check(make_document()).outcome == DedupOutcome.CHECK_FAILED
    assert checker.is_duplicate(make_document()) is False
