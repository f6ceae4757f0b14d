"""
Database operations for the docquery service.

This module handles Couchbase connections and statement execution.
"""

from typing import Any, Dict, List, Protocol

from ..query import Statement
from .couchbase import (
    CouchbaseRunner,
    _cb_connect,
    _execute_statement_with_cluster,
)


class QueryRunner(Protocol):
    def run(self, statement: Statement) -> List[Dict[str, Any]]:
        ...


__all__ = [
    "QueryRunner",
    "CouchbaseRunner",
    "_cb_connect",
    "_execute_statement_with_cluster",
]
