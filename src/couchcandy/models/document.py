"""
Document envelope shared by every CouchDB document.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer


class Attachment(BaseModel):
    content_type: Optional[str] = None
    revpos: Optional[int] = None
    digest: Optional[str] = None
    length: Optional[int] = None
    stub: Optional[bool] = None
    data: Optional[str] = None  # base64, only on inline attachments


class Revisions(BaseModel):
    """Revision history, returned when a document is read with revs=true."""

    start: int = 0
    ids: Optional[list[str]] = None

    def is_empty(self) -> bool:
        return self.start == 0 and self.ids is None


class CandyDocument(BaseModel):
    """Base record for domain documents.

    Subclass it to describe your own documents:

        class Person(CandyDocument):
            name: str
            age: int = 0

    `_revisions` is left out of the serialized form while it is empty, so
    new documents are not sent with a revision stub the server rejects.
    """

    id: Optional[str] = Field(default=None, alias="_id")
    rev: Optional[str] = Field(default=None, alias="_rev")
    error: Optional[str] = None
    reason: Optional[str] = None
    attachments: Optional[dict[str, Attachment]] = Field(default=None, alias="_attachments")
    revisions: Optional[Revisions] = Field(default=None, alias="_revisions")

    model_config = {"populate_by_name": True, "extra": "allow"}

    @model_serializer(mode="wrap")
    def _omit_empty_revisions(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.revisions is None or self.revisions.is_empty():
            data.pop("_revisions", None)
            data.pop("revisions", None)
        return data
