"""
Validation module for the docquery service.

This module checks request property paths and caps page sizes.
"""

from .rules import (
    _assert_filters_allowed,
    _assert_sorts_allowed,
    _assert_field_allowed,
    _cap_page_size,
)

__all__ = [
    "_assert_filters_allowed",
    "_assert_sorts_allowed",
    "_assert_field_allowed",
    "_cap_page_size",
]
