from typing import Any, Mapping


class NonUniqueResultError(Exception):
    """
    Raised by find_one when more than one document matches the filter map.
    """

    def __init__(self, filters: Mapping[str, Any]):
        self.filters = dict(filters)
        super().__init__(f"Query returned more than one result for filters {self.filters!r}")
