import json
from pathlib import Path
from typing import Any, Iterable, List, Union

from pydantic import field_validator

from healthdoc.commons.types import BulkRequest, HealthRecord


class RecordInput(HealthRecord):
    """HealthRecord as accepted from outside: category and title must carry text."""

    @field_validator("category", "title")
    @classmethod
    def _not_empty(cls, v: str):
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_is_mapping(cls, v: Any):
        # lists or scalars in place of the bag are treated as no metadata
        return v if isinstance(v, dict) else None


def validate_record_or_raise(data: Union[str, bytes, dict]) -> HealthRecord:
    """Build a HealthRecord from JSON text or a dict; raises ValidationError if something is missing."""
    if isinstance(data, (str, bytes)):
        return RecordInput.model_validate_json(data)
    return RecordInput.model_validate(data)


def validate_bulk_or_raise(data: Union[str, bytes, dict, list]) -> BulkRequest:
    """Accepts either a bare list of records or {"title": ..., "records": [...]}."""
    if isinstance(data, (str, bytes)):
        data = json.loads(data)
    if isinstance(data, list):
        data = {"records": data}
    records = [validate_record_or_raise(r) for r in data.get("records", [])]
    return BulkRequest(records=records, title=data.get("title") or "Health Records")


def load_records(paths: Iterable[Union[str, Path]]) -> List[HealthRecord]:
    out = []
    for p in paths:
        text = Path(p).read_text(encoding="utf-8")
        parsed = json.loads(text)
        if isinstance(parsed, list):
            out.extend(validate_record_or_raise(r) for r in parsed)
        else:
            out.append(validate_record_or_raise(parsed))
    return out
