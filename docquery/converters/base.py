from __future__ import annotations
import dataclasses
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel

DATA_KEY = "data"
ID_KEY = "id"
DEFAULT_ID_FIELD = "id"
# Marker for a custom identity field:
#   Field(json_schema_extra={"document_id": True})  on pydantic models
#   field(metadata={"document_id": True})           on dataclasses
DOCUMENT_ID_MARKER = "document_id"


def document_id_field(record_type: Any) -> Optional[str]:
    """
    Name of the field marked as the document identifier on record_type,
    or None when nothing is marked.
    """
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        for name, info in record_type.model_fields.items():
            extra = info.json_schema_extra
            if isinstance(extra, dict) and extra.get(DOCUMENT_ID_MARKER):
                return info.alias or name
        return None
    if dataclasses.is_dataclass(record_type):
        for f in dataclasses.fields(record_type):
            if f.metadata.get(DOCUMENT_ID_MARKER):
                return f.name
    return None


def to_record(doc: Dict[str, Any], record_type: Any) -> Any:
    if record_type is None or record_type is dict:
        return doc
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return record_type.model_validate(doc)
    if dataclasses.is_dataclass(record_type):
        declared = {f.name for f in dataclasses.fields(record_type)}
        doc = {k: v for k, v in doc.items() if k in declared}
    return record_type(**doc)


class DataConverter(ABC):
    """
    Turns one raw row ({"data": {...}, "id": "..."}) into a record.
    Failures from the record type (e.g. pydantic.ValidationError) propagate.
    """

    def convert(self, row: Mapping[str, Any], record_type: Any) -> Any:
        doc = self.unwrap(row[DATA_KEY])
        id_field = self.id_field(record_type)
        if id_field is not None:
            doc[id_field] = row[ID_KEY]
        return to_record(doc, record_type)

    def unwrap(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return dict(data)

    @abstractmethod
    def id_field(self, record_type: Any) -> Optional[str]:
        ...
