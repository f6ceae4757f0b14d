from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

# ---------------------------------------------------------------------------
# Reserved key suffixes
# ---------------------------------------------------------------------------

CONTAINS_FILTER = "_contains"
FROM_FILTER = "_from"
TO_FILTER = "_to"
NOT_FILTER = "_not"
IN_FILTER = "_in"
NULL_FILTER = "_null"
NOT_NULL_FILTER = "_notnull"
MISSING_FILTER = "_missing"
NULL_OR_MISSING_FILTER = "_nullormissing"


class Operator(str, Enum):
    EQ = "EQ"
    NE = "NE"
    GTE = "GTE"
    LTE = "LTE"
    CONTAINS = "CONTAINS"
    IN = "IN"
    NULL = "NULL"
    NOT_NULL = "NOT_NULL"
    MISSING = "MISSING"
    NULL_OR_MISSING = "NULL_OR_MISSING"


# Checked top to bottom, first match wins. _nullormissing and _notnull sit
# above _null so they are never split as a plain null check.
SUFFIX_TABLE: Tuple[Tuple[str, Operator], ...] = (
    (CONTAINS_FILTER, Operator.CONTAINS),
    (FROM_FILTER, Operator.GTE),
    (TO_FILTER, Operator.LTE),
    (NOT_FILTER, Operator.NE),
    (IN_FILTER, Operator.IN),
    (NULL_OR_MISSING_FILTER, Operator.NULL_OR_MISSING),
    (NOT_NULL_FILTER, Operator.NOT_NULL),
    (MISSING_FILTER, Operator.MISSING),
    (NULL_FILTER, Operator.NULL),
)


@dataclass(frozen=True)
class FilterKey:
    """
    A decoded filter key: the untouched key (used as the parameter name),
    the property path it targets, and the comparison to apply.
    """
    key: str
    property_path: str
    operator: Operator = Operator.EQ


def parse_filter_key(key: str) -> FilterKey:
    """
    Decode one filter key. Never fails: keys without a reserved suffix are
    equality checks on the whole key. A key that is only a suffix token
    yields an empty property path.
    """
    for suffix, operator in SUFFIX_TABLE:
        if key.endswith(suffix):
            return FilterKey(key=key, property_path=key[: -len(suffix)], operator=operator)
    return FilterKey(key=key, property_path=key, operator=Operator.EQ)


__all__ = [
    "CONTAINS_FILTER",
    "FROM_FILTER",
    "TO_FILTER",
    "NOT_FILTER",
    "IN_FILTER",
    "NULL_FILTER",
    "NOT_NULL_FILTER",
    "MISSING_FILTER",
    "NULL_OR_MISSING_FILTER",
    "Operator",
    "SUFFIX_TABLE",
    "FilterKey",
    "parse_filter_key",
]
