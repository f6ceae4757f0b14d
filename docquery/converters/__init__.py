"""
Row-to-record converters for the docquery service.

One converter is chosen at startup from two flags: whether documents are
written through Sync Gateway, and whether the default `id` field or a
marked field receives the document key.
"""

import logging

from .base import (
    DataConverter,
    DOCUMENT_ID_MARKER,
    document_id_field,
    to_record,
)
from .couchbase import CouchbaseDataConverter, CouchbaseDataConverterWithReflection
from .sync_gateway import (
    GATEWAY_RESERVED,
    SyncGatewayDataConverter,
    SyncGatewayDataConverterWithReflection,
)

log = logging.getLogger("converters")


def select_converter(with_sync_gateway: bool, use_default_id_fields: bool) -> DataConverter:
    if with_sync_gateway:
        converter = (
            SyncGatewayDataConverter()
            if use_default_id_fields
            else SyncGatewayDataConverterWithReflection()
        )
    else:
        converter = (
            CouchbaseDataConverter()
            if use_default_id_fields
            else CouchbaseDataConverterWithReflection()
        )
    log.info("Using %s", type(converter).__name__)
    return converter


__all__ = [
    "DataConverter",
    "DOCUMENT_ID_MARKER",
    "document_id_field",
    "to_record",
    "CouchbaseDataConverter",
    "CouchbaseDataConverterWithReflection",
    "GATEWAY_RESERVED",
    "SyncGatewayDataConverter",
    "SyncGatewayDataConverterWithReflection",
    "select_converter",
]
