from typing import Any, Optional

from .base import DEFAULT_ID_FIELD, DataConverter, document_id_field


class CouchbaseDataConverter(DataConverter):
    """Plain bucket documents; the document key lands in `id`."""

    def id_field(self, record_type: Any) -> Optional[str]:
        return DEFAULT_ID_FIELD


class CouchbaseDataConverterWithReflection(DataConverter):
    """Plain bucket documents; the document key lands in the field marked as document id."""

    def id_field(self, record_type: Any) -> Optional[str]:
        return document_id_field(record_type)
