"""
Equality filter expressions for the document index.

Callers describe exact-match lookups as small expressions such as
``Title eq 'Data Engineer' and Company eq 'Contoso'``. String values are
quoted with single quotes and any embedded quote is doubled. The store
parses expressions back into Qdrant filters on the document payload.
"""

import re
from typing import Dict, List

from qdrant_client.http.models import FieldCondition, Filter, MatchValue

from jobdesc_rag.core.exceptions import StoreError

# Fields that may appear on the left-hand side of an ``eq`` clause
FILTERABLE_FIELDS = ("Id", "Title", "Company", "Location", "WorkdayId")

_CLAUSE = r"(\w+)\s+eq\s+'((?:[^']|'')*)'"
_CLAUSE_RE = re.compile(_CLAUSE)
_EXPRESSION_RE = re.compile(rf"\s*{_CLAUSE}(?:\s+and\s+{_CLAUSE})*\s*")


class FilterExpressionError(StoreError):
    """The filter expression could not be parsed."""


def escape_filter_value(value: str) -> str:
    """Double every single quote so the value can sit inside a quoted literal."""
    return value.replace("'", "''")


def unescape_filter_value(value: str) -> str:
    return value.replace("''", "'")


def equals(field: str, value: str) -> str:
    return f"{field} eq '{escape_filter_value(value)}'"


def build_equality_filter(conditions: Dict[str, str]) -> str:
    """Join one ``eq`` clause per field with ``and``, preserving order."""
    if not conditions:
        raise FilterExpressionError("At least one filter condition is required")
    return " and ".join(equals(field, value) for field, value in conditions.items())


def parse_filter_expression(expression: str, payload_prefix: str = "metadata") -> Filter:
    """
    Parse an equality expression into a Qdrant ``Filter``.

    Raises:
        FilterExpressionError: the expression is malformed or references a
            field that is not filterable.
    """
    if not expression or not _EXPRESSION_RE.fullmatch(expression):
        raise FilterExpressionError(f"Malformed filter expression: {expression!r}")

    must_conditions: List[FieldCondition] = []
    for match in _CLAUSE_RE.finditer(expression):
        field, raw_value = match.group(1), match.group(2)
        if field not in FILTERABLE_FIELDS:
            raise FilterExpressionError(f"Field '{field}' is not filterable")

        must_conditions.append(
            FieldCondition(
                key=f"{payload_prefix}.{field}",
                match=MatchValue(value=unescape_filter_value(raw_value)),
            )
        )

    return Filter(must=must_conditions)
