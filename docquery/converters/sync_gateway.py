from typing import Any, Dict, Mapping, Optional

from .base import DEFAULT_ID_FIELD, DataConverter, document_id_field

# Properties Sync Gateway keeps inside (or alongside) the stored document.
GATEWAY_RESERVED = frozenset(
    {"_sync", "_id", "_rev", "_attachments", "_deleted", "_exp", "_revisions"}
)


class SyncGatewayDataConverter(DataConverter):
    """
    Documents written through Sync Gateway: gateway metadata is stripped
    before binding, the document key lands in `id`.
    """

    def unwrap(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in data.items() if k not in GATEWAY_RESERVED}

    def id_field(self, record_type: Any) -> Optional[str]:
        return DEFAULT_ID_FIELD


class SyncGatewayDataConverterWithReflection(SyncGatewayDataConverter):
    def id_field(self, record_type: Any) -> Optional[str]:
        return document_id_field(record_type)
