"""
Filter system for the docquery service.

This module provides the filter-key grammar and the paging/sorting models.
"""

from .keys import (
    Operator,
    FilterKey,
    SUFFIX_TABLE,
    parse_filter_key,
)
from .models import (
    IGNORE_CASE_ORDER,
    SortDirection,
    SortOrder,
    PageRequest,
    Page,
    QUERY_SCHEMA,
    QueryModel,
    parse_query_model_json,
)

__all__ = [
    "Operator",
    "FilterKey",
    "SUFFIX_TABLE",
    "parse_filter_key",
    "IGNORE_CASE_ORDER",
    "SortDirection",
    "SortOrder",
    "PageRequest",
    "Page",
    "QUERY_SCHEMA",
    "QueryModel",
    "parse_query_model_json",
]
