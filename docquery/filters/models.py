from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
import json
import math

import jsonschema

IGNORE_CASE_ORDER = "_ignorecase"

# ---------------------------------------------------------------------------
# Sorting and paging
# ---------------------------------------------------------------------------

class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class SortOrder:
    property: str
    direction: SortDirection = SortDirection.ASC
    ignore_case: bool = False

    @classmethod
    def parse(cls, item: str) -> "SortOrder":
        """
        Accepts:
          - 'age'                   -> age ASC
          - '-age'                  -> age DESC
          - 'age DESC'              -> age DESC
          - 'age:desc'              -> age DESC
          - 'name_ignorecase,asc'   -> LOWER(name) ASC
        """
        prop, direction = _parse_sort_item(item)
        ignore_case = prop.endswith(IGNORE_CASE_ORDER)
        if ignore_case:
            prop = prop[: -len(IGNORE_CASE_ORDER)]
        return cls(property=prop, direction=SortDirection(direction), ignore_case=ignore_case)


def _parse_sort_item(item: str) -> Tuple[str, str]:
    s = item.strip()
    if not s:
        return ("", "ASC")

    if s.startswith("-"):
        return (s[1:].strip(), "DESC")

    for sep in (":", ","):
        if s.count(sep) == 1:
            col, dir_ = s.split(sep)
            d = dir_.strip().upper()
            return (col.strip(), "DESC" if d in ("DESC", "D") else "ASC")

    parts = s.split()
    if len(parts) == 2 and parts[1].upper() in ("ASC", "DESC"):
        return (parts[0].strip(), parts[1].upper())

    return (s, "ASC")


@dataclass(frozen=True)
class PageRequest:
    """
    Zero-based page index and page size, plus the sort orders. An explicit
    offset, when given, wins over page_index * page_size.
    """
    page_index: int = 0
    page_size: int = 20
    sort: Tuple[SortOrder, ...] = ()
    explicit_offset: Optional[int] = None

    def __post_init__(self):
        if self.page_index < 0:
            raise ValueError("page_index must be non-negative")
        if self.page_size < 0:
            raise ValueError("page_size must be non-negative")
        if self.explicit_offset is not None and self.explicit_offset < 0:
            raise ValueError("offset must be non-negative")
        object.__setattr__(self, "sort", tuple(self.sort))

    @property
    def offset(self) -> int:
        if self.explicit_offset is not None:
            return self.explicit_offset
        return self.page_index * self.page_size


@dataclass
class Page:
    content: List[Any]
    page_index: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 1
        return math.ceil(self.total / self.page_size)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": list(self.content),
            "pageIndex": self.page_index,
            "pageSize": self.page_size,
            "totalElements": self.total,
            "totalPages": self.total_pages,
        }


# ---------------------------------------------------------------------------
# Request model with camelCase interop
# ---------------------------------------------------------------------------

QUERY_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://example.com/query.schema.json",
    "title": "Filter Map Query",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "entityName": {"type": "string", "minLength": 1},
        "filters": {"type": "object"},
        "sort": {"type": "array", "items": {"type": "string"}},
        "pageSize": {"type": "integer", "minimum": 0},
        "pageIndex": {"type": "integer", "minimum": 0},
        "offset": {"type": ["integer", "null"], "minimum": 0},
        "field": {"type": "string"},
    },
    "required": ["entityName"],
}


@dataclass
class QueryModel:
    entity_name: str = ""
    filters: Dict[str, Any] = field(default_factory=dict)
    sort: List[str] = field(default_factory=list)
    page_size: int = 0
    page_index: int = 0
    offset: Optional[int] = None
    field: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QueryModel":
        offset = data.get("offset")
        return cls(
            entity_name=str(data.get("entityName", "")),
            filters=dict(data.get("filters", {})),
            sort=list(data.get("sort", [])),
            page_size=int(data.get("pageSize", 0) or 0),
            page_index=int(data.get("pageIndex", 0) or 0),
            offset=int(offset) if offset is not None else None,
            field=str(data.get("field", "")),
        )

    def sort_orders(self) -> Tuple[SortOrder, ...]:
        return tuple(SortOrder.parse(s) for s in self.sort if s.strip())

    def page_request(self) -> PageRequest:
        return PageRequest(
            page_index=self.page_index,
            page_size=self.page_size,
            sort=self.sort_orders(),
            explicit_offset=self.offset,
        )


def parse_query_model_json(
    payload: Union[str, Dict[str, Any]],
    *,
    validate: bool = True,
) -> QueryModel:
    """
    Accept a JSON string or dict in camelCase and return a QueryModel.
    Raises jsonschema.ValidationError when validation is on and the
    payload does not match QUERY_SCHEMA.
    """
    data = json.loads(payload) if isinstance(payload, str) else payload
    if validate:
        jsonschema.validate(instance=data, schema=QUERY_SCHEMA)
    return QueryModel.from_dict(data)


__all__ = [
    "IGNORE_CASE_ORDER",
    "SortDirection",
    "SortOrder",
    "PageRequest",
    "Page",
    "QUERY_SCHEMA",
    "QueryModel",
    "parse_query_model_json",
]
