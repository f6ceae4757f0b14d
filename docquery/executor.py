from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping, Optional

from .config import Settings
from .converters import DataConverter, select_converter
from .database import CouchbaseRunner, QueryRunner
from .exceptions import NonUniqueResultError
from .filters import Page, PageRequest
from .query import (
    Statement,
    build_count_statement,
    build_list_statement,
    build_page_statement,
    build_sum_statement,
)

log = logging.getLogger("executor")


class QueryExecutor:
    """
    Runs filter-map queries against one bucket.

    Every call builds its statement from scratch and hands it to the runner;
    the executor keeps nothing between calls besides the settings, the
    runner and the converter chosen at construction.
    """

    def __init__(
        self,
        settings: Settings,
        runner: Optional[QueryRunner] = None,
        converter: Optional[DataConverter] = None,
    ):
        self.settings = settings
        self.runner = runner if runner is not None else CouchbaseRunner(settings)
        self.converter = converter if converter is not None else select_converter(
            settings.with_sync_gateway, settings.use_default_id_fields
        )

    @property
    def bucket(self) -> str:
        return self.settings.bucket

    def _run(self, statement: Statement) -> List[Dict[str, Any]]:
        log.debug("%s: %s params=%s", statement.kind, statement.sql, list(statement.params))
        return self.runner.run(statement)

    def _convert_all(self, rows: List[Dict[str, Any]], record_type: Any) -> List[Any]:
        return [self.converter.convert(row, record_type) for row in rows]

    def find_one(self, filters: Mapping[str, Any], record_type: Any = dict) -> Optional[Any]:
        """
        None when nothing matches, the record when exactly one does.
        Raises NonUniqueResultError otherwise.
        """
        documents = self.find(filters, record_type)
        if not documents:
            return None
        if len(documents) == 1:
            return documents[0]
        raise NonUniqueResultError(filters)

    def find(self, filters: Mapping[str, Any], record_type: Any = dict) -> List[Any]:
        rows = self._run(build_list_statement(self.bucket, filters))
        return self._convert_all(rows, record_type)

    def find_page(
        self,
        filters: Mapping[str, Any],
        page: PageRequest,
        record_type: Any = dict,
    ) -> Page:
        rows = self._run(build_page_statement(self.bucket, filters, page))
        content = self._convert_all(rows, record_type)
        return Page(
            content=content,
            page_index=page.page_index,
            page_size=page.page_size,
            total=self.count(filters),
        )

    def count(self, filters: Mapping[str, Any]) -> int:
        # Grouped by document id: one row per matching document.
        rows = self._run(build_count_statement(self.bucket, filters))
        return sum(int(row.get("count") or 0) for row in rows)

    def sum(self, filters: Mapping[str, Any], field: str):
        rows = self._run(build_sum_statement(self.bucket, filters, field))
        return sum(row.get("sum") or 0 for row in rows)


__all__ = ["QueryExecutor"]
