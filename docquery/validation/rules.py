import re

from ..filters import SortOrder
from ..registry import RegistryEntry

# Dotted property paths with optional array indexes, e.g. address.city or tags[0].
# Used for sort and sum fields.
_PROPERTY_PATH_RE = re.compile(r"^[A-Za-z0-9_$.\[\]]*$")

# Filter keys double as N1QL named parameters ($key), so they must be plain
# identifiers: $address.city would read field `city` of parameter $address.
_FILTER_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _assert_property_path(entity: str, path: str, what: str) -> None:
    if not _PROPERTY_PATH_RE.match(path):
        raise ValueError(f"{what} not allowed for {entity}: {path!r}")


def _assert_filters_allowed(entity: str, filters: dict) -> None:
    for key in filters:
        if not _FILTER_KEY_RE.match(key):
            raise ValueError(f"Filter key not allowed for {entity}: {key!r}")


def _assert_sorts_allowed(entity: str, sorts: list[str]) -> None:
    for s in sorts or []:
        if not s.strip():
            continue
        _assert_property_path(entity, SortOrder.parse(s).property, "Sort field")


def _assert_field_allowed(entity: str, field: str) -> None:
    if not field:
        raise ValueError(f"Sum field is required for {entity}")
    _assert_property_path(entity, field, "Sum field")


def _cap_page_size(entity: str, page_size: int, reg: RegistryEntry) -> int:
    cap = int(reg["maxPageSize"])
    if page_size <= 0:
        return min(100, cap)
    return min(page_size, cap)
