"""
Shared pytest fixtures for docquery tests.
Provides an in-memory stand-in for the Couchbase runner.
"""

import logging
from typing import Any, Dict, List, Optional

import pytest

from docquery.config import Settings
from docquery.filters import Operator, parse_filter_key
from docquery.query import Statement

logging.basicConfig(level=logging.CRITICAL)

_MISSING = object()


def _lookup(doc: Dict[str, Any], path: str) -> Any:
    cur: Any = doc
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return _MISSING
        cur = cur[part]
    return cur


def _matches(doc: Dict[str, Any], key: str, value: Any) -> bool:
    fk = parse_filter_key(key)
    actual = _lookup(doc, fk.property_path)
    op = fk.operator
    if op == Operator.NULL:
        return actual is None
    if op == Operator.NOT_NULL:
        return actual is not None and actual is not _MISSING
    if op == Operator.MISSING:
        return actual is _MISSING
    if op == Operator.NULL_OR_MISSING:
        return actual is None or actual is _MISSING
    if actual is None or actual is _MISSING:
        return False
    if op == Operator.EQ:
        return actual == value
    if op == Operator.NE:
        return actual != value
    if op == Operator.GTE:
        return actual >= value
    if op == Operator.LTE:
        return actual <= value
    if op == Operator.IN:
        return actual in value
    if op == Operator.CONTAINS:
        return str(value).lower() in str(actual).lower()
    raise AssertionError(f"unhandled operator {op}")


class FakeRunner:
    """
    Evaluates the filter grammar over an in-memory bucket and answers each
    statement kind with rows shaped like the real N1QL projections.
    """

    def __init__(self, documents: Dict[str, Dict[str, Any]], error: Optional[Exception] = None):
        self.documents = documents
        self.error = error
        self.statements: List[Statement] = []

    def _matching(self, params) -> List[tuple]:
        out = []
        for doc_id, doc in self.documents.items():
            if doc_id.startswith("_sync:"):
                continue
            if all(_matches(doc, k, v) for k, v in params.items()):
                out.append((doc_id, doc))
        return out

    def run(self, statement: Statement) -> List[Dict[str, Any]]:
        self.statements.append(statement)
        if self.error is not None:
            raise self.error
        matched = self._matching(statement.params)
        if statement.kind == "list":
            return [{"data": dict(doc), "id": doc_id} for doc_id, doc in matched]
        if statement.kind == "page":
            window = matched[statement.offset: statement.offset + statement.limit]
            return [{"data": dict(doc), "id": doc_id} for doc_id, doc in window]
        if statement.kind == "count":
            return [{"count": 1, "id": doc_id} for doc_id, _ in matched]
        if statement.kind == "sum":
            rows = []
            for doc_id, doc in matched:
                v = _lookup(doc, statement.field)
                rows.append({"sum": None if v is _MISSING else v, "id": doc_id})
            return rows
        raise AssertionError(f"unknown statement kind {statement.kind}")


@pytest.fixture
def settings() -> Settings:
    return Settings(bucket="docs", jwt_secret="test-secret", global_max_page_size=50)


@pytest.fixture
def documents() -> Dict[str, Dict[str, Any]]:
    return {
        "user::1": {"name": "Anna", "age": 30, "status": "open", "amount": 10},
        "user::2": {"name": "brian", "age": 17, "status": "open", "amount": 5, "nickname": None},
        "user::3": {"name": "Dana", "age": 65, "status": "closed", "amount": 7},
        "user::4": {"name": "Zoltan", "age": 70, "status": "open", "nickname": "Z"},
        "_sync:user::1": {"status": "open", "name": "shadow"},
    }


@pytest.fixture
def runner(documents) -> FakeRunner:
    return FakeRunner(documents)
