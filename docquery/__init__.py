"""
docquery: flat filter maps to parameterized N1QL against a Couchbase bucket.
"""

from .exceptions import NonUniqueResultError
from .executor import QueryExecutor

__all__ = [
    "NonUniqueResultError",
    "QueryExecutor",
]
