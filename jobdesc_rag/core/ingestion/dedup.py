"""
Duplicate detection for documents about to be indexed.

Three identities are checked in order and the first positive match wins:
the document key (envelope id), the (title, company) pair, and the
external WorkdayId when one is present. A failure while checking is
reported as ``CHECK_FAILED`` and treated as "not a duplicate", so an
outage of the index never drops a submission.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from jobdesc_rag.core.filters import build_equality_filter
from jobdesc_rag.models.enums import DedupOutcome, MatchStrategy
from jobdesc_rag.models.job_models import JobDescriptionDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DedupResult:
    outcome: DedupOutcome
    strategy: Optional[MatchStrategy] = None
    error: Optional[str] = None

    @property
    def is_duplicate(self) -> bool:
        return self.outcome == DedupOutcome.FOUND

    @classmethod
    def found(cls, strategy: MatchStrategy) -> "DedupResult":
        return cls(outcome=DedupOutcome.FOUND, strategy=strategy)

    @classmethod
    def not_found(cls) -> "DedupResult":
        return cls(outcome=DedupOutcome.NOT_FOUND)

    @classmethod
    def check_failed(cls, error: str) -> "DedupResult":
        return cls(outcome=DedupOutcome.CHECK_FAILED, error=error)


class DuplicateChecker:
    def __init__(self, store):
        self.store = store

    def check(self, document: JobDescriptionDocument, log=None) -> DedupResult:
        log = log or logger
        try:
            if self.store.get_document(document.id) is not None:
                log.warning(f"Document with ID {document.id} already exists")
                return DedupResult.found(MatchStrategy.EXACT_KEY)

            title_company_filter = build_equality_filter({
                "Title": document.title,
                "Company": document.company,
            })
            if self._has_match(title_company_filter):
                log.warning(
                    f"Duplicate job found with same title '{document.title}' "
                    f"and company '{document.company}'"
                )
                return DedupResult.found(MatchStrategy.TITLE_AND_COMPANY)

            if document.workday_id:
                workday_filter = build_equality_filter({"WorkdayId": document.workday_id})
                if self._has_match(workday_filter):
                    log.warning(f"Duplicate job found with same WorkdayId '{document.workday_id}'")
                    return DedupResult.found(MatchStrategy.EXTERNAL_ID)

        except Exception as e:
            log.error(f"Error checking for duplicate document {document.id}: {str(e)}", exc_info=True)
            return DedupResult.check_failed(str(e))

        return DedupResult.not_found()

    def is_duplicate(self, document: JobDescriptionDocument) -> bool:
        return self.check(document).is_duplicate

    def _has_match(self, filter_expression: str) -> bool:
        return self.store.search(filter_expression=filter_expression, size=1).total_count > 0
