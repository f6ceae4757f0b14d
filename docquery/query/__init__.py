"""
Query building module for the docquery service.

This module provides N1QL statement generation from filter maps.
"""

from .builder import (
    compile_predicate,
    system_exclusion,
    where_conjuncts,
    compose_where,
    compile_sort,
    Statement,
    build_list_statement,
    build_page_statement,
    build_count_statement,
    build_sum_statement,
)

__all__ = [
    "compile_predicate",
    "system_exclusion",
    "where_conjuncts",
    "compose_where",
    "compile_sort",
    "Statement",
    "build_list_statement",
    "build_page_statement",
    "build_count_statement",
    "build_sum_statement",
]
