from __future__ import annotations
from dataclasses import dataclass, field
from functools import reduce
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional

from ..filters import FilterKey, Operator, PageRequest, SortOrder, parse_filter_key

SYNC_PREFIX_PATTERN = '"_sync:%"'


def _bucket_identifier(bucket: str) -> str:
    """
    Escape a bucket name as a N1QL identifier.
    """
    return f"`{bucket.replace('`', '``')}`"


def _meta_id(bucket_ident: str) -> str:
    return f"META({bucket_ident}).id"


def _param(key: str) -> str:
    return f"${key}"


def _lower(expr: str) -> str:
    return f"LOWER({expr})"


# -----------------------------------------------------------------------------
# Predicates
# -----------------------------------------------------------------------------

_BINARY_OPERATORS = {
    Operator.EQ: "=",
    Operator.NE: "!=",
    Operator.GTE: ">=",
    Operator.LTE: "<=",
    Operator.IN: "IN",
}


def compile_predicate(fk: FilterKey) -> str:
    """
    Render one decoded key as a N1QL boolean fragment. Value-bearing
    fragments reference the untouched key as a named parameter.
    """
    path, op = fk.property_path, fk.operator

    if op in _BINARY_OPERATORS:
        return f"{path} {_BINARY_OPERATORS[op]} {_param(fk.key)}"
    if op == Operator.CONTAINS:
        return f"CONTAINS({_lower(path)}, {_lower(_param(fk.key))})"
    if op == Operator.NULL:
        return f"{path} IS NULL"
    if op == Operator.NOT_NULL:
        return f"{path} IS NOT NULL"
    if op == Operator.MISSING:
        return f"{path} IS MISSING"
    if op == Operator.NULL_OR_MISSING:
        return f"({path} IS NULL OR {path} IS MISSING)"

    raise ValueError(f"Unsupported operator: {op}")


def system_exclusion(bucket: str) -> str:
    """
    Hides Sync Gateway bookkeeping documents from every query shape.
    """
    return f"{_meta_id(_bucket_identifier(bucket))} NOT LIKE {SYNC_PREFIX_PATTERN}"


def where_conjuncts(bucket: str, filters: Mapping[str, Any]) -> List[str]:
    """
    One fragment per filter key in map order, the system exclusion last.
    """
    parts = [compile_predicate(parse_filter_key(key)) for key in filters]
    parts.append(system_exclusion(bucket))
    return parts


def compose_where(bucket: str, filters: Mapping[str, Any]) -> str:
    return reduce(lambda left, right: f"{left} AND {right}", where_conjuncts(bucket, filters))


# -----------------------------------------------------------------------------
# Ordering
# -----------------------------------------------------------------------------

def compile_sort(orders: Iterable[SortOrder]) -> List[str]:
    rendered: List[str] = []
    for order in orders:
        expr = _lower(order.property) if order.ignore_case else order.property
        rendered.append(f"{expr} {order.direction.value}")
    return rendered


# -----------------------------------------------------------------------------
# Statements
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Statement:
    """
    A fully built N1QL statement and the named parameters it binds.
    `params` is the caller's filter map, copied and made read-only.
    """
    kind: str
    sql: str
    params: Mapping[str, Any] = field(default_factory=dict)
    limit: Optional[int] = None
    offset: Optional[int] = None
    field: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


def _select_with_meta(bucket_ident: str) -> str:
    return f"SELECT {bucket_ident} AS data, {_meta_id(bucket_ident)} AS id"


def build_list_statement(bucket: str, filters: Mapping[str, Any]) -> Statement:
    b = _bucket_identifier(bucket)
    sql = f"{_select_with_meta(b)} FROM {b} WHERE {compose_where(bucket, filters)}"
    return Statement(kind="list", sql=sql, params=filters)


def build_page_statement(bucket: str, filters: Mapping[str, Any], page: PageRequest) -> Statement:
    b = _bucket_identifier(bucket)
    sql = f"{_select_with_meta(b)} FROM {b} WHERE {compose_where(bucket, filters)}"
    order_by = compile_sort(page.sort)
    if order_by:
        sql += " ORDER BY " + ", ".join(order_by)
    sql += f" LIMIT {int(page.page_size)} OFFSET {int(page.offset)}"
    return Statement(
        kind="page",
        sql=sql,
        params=filters,
        limit=page.page_size,
        offset=page.offset,
    )


def build_count_statement(bucket: str, filters: Mapping[str, Any]) -> Statement:
    b = _bucket_identifier(bucket)
    meta_id = _meta_id(b)
    sql = (
        f"SELECT COUNT(*) AS count, {meta_id} AS id FROM {b} "
        f"WHERE {compose_where(bucket, filters)} GROUP BY {meta_id}"
    )
    return Statement(kind="count", sql=sql, params=filters)


def build_sum_statement(bucket: str, filters: Mapping[str, Any], field_name: str) -> Statement:
    b = _bucket_identifier(bucket)
    meta_id = _meta_id(b)
    sql = (
        f"SELECT SUM({field_name}) AS sum, {meta_id} AS id FROM {b} "
        f"WHERE {compose_where(bucket, filters)} GROUP BY {meta_id}"
    )
    return Statement(kind="sum", sql=sql, params=filters, field=field_name)


# -----------------------------------------------------------------------------
# Public exports
# -----------------------------------------------------------------------------
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
