"""
Response envelopes decoded from CouchDB JSON bodies.
"""

from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from couchcandy.errors import CouchDBError, DecodeError

T = TypeVar("T", bound=BaseModel)

# Integers on CouchDB 1.x, opaque strings from 2.x on
SequenceNumber = Union[int, str]


class _ErrorFields(BaseModel):
    error: Optional[str] = None
    reason: Optional[str] = None

    def raise_for_error(self):
        """Raise CouchDBError when the server answered with an error document."""
        if self.error:
            raise CouchDBError(self.error, self.reason or "")
        return self


class OperationResponse(_ErrorFields):
    """Answer to a write: {"ok": true, "id": ..., "rev": ...} or an error document."""

    id: Optional[str] = None
    rev: Optional[str] = None
    ok: bool = False


class DatabaseInfo(_ErrorFields):
    db_name: str = ""
    doc_count: int = 0
    doc_del_count: int = 0
    update_seq: Optional[SequenceNumber] = None
    purge_seq: Optional[SequenceNumber] = None
    compact_running: bool = False
    disk_size: Optional[int] = None
    data_size: Optional[int] = None
    instance_start_time: Optional[str] = None
    disk_format_version: Optional[int] = None
    committed_update_seq: Optional[SequenceNumber] = None
    sizes: Optional[dict[str, int]] = None


class Value(BaseModel):
    rev: Optional[str] = None
    deleted: Optional[bool] = None


class Row(BaseModel):
    id: Optional[str] = None
    key: Optional[str] = None
    value: Optional[Value] = None
    doc: Optional[dict[str, Any]] = None
    error: Optional[str] = None  # set for keys that matched no document

    def document(self, model: type[T]) -> Optional[T]:
        """Decode the embedded document (include_docs=true) into `model`."""
        if self.doc is None:
            return None
        try:
            return model.model_validate(self.doc)
        except ValidationError as e:
            raise DecodeError(f"Row {self.id!r} does not match {model.__name__}: {e}") from e


class AllDocuments(_ErrorFields):
    total_rows: int = 0
    offset: Optional[int] = None
    rows: list[Row] = []


class ViewRow(BaseModel):
    """Row of a view result. Key and value shapes belong to the view's map function."""

    id: Optional[str] = None
    key: Any = None
    value: Any = None
    doc: Optional[dict[str, Any]] = None


class ViewResponse(_ErrorFields):
    total_rows: int = 0
    offset: Optional[int] = None
    rows: list[ViewRow] = []


class Change(BaseModel):
    rev: str = ""


class Result(BaseModel):
    seq: Optional[SequenceNumber] = None
    id: str = ""
    changes: list[Change] = []
    deleted: Optional[bool] = None


class Changes(_ErrorFields):
    results: list[Result] = []
    last_seq: Optional[SequenceNumber] = None
    pending: Optional[int] = None
