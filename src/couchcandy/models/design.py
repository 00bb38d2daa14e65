"""
Design documents, told apart by their `language` field.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from couchcandy.models.document import CandyDocument


class MapReduceView(BaseModel):
    map: str = ""
    reduce: Optional[str] = None


class MapReduceDesignDocument(CandyDocument):
    """Views defined by map/reduce source (language "javascript")."""

    language: Literal["javascript"]
    views: dict[str, MapReduceView] = {}


class IndexMap(BaseModel):
    fields: Union[dict[str, str], list[str]] = {}
    partial_filter_selector: dict[str, Any] = {}


class IndexView(BaseModel):
    map: IndexMap = Field(default_factory=IndexMap)
    reduce: Optional[str] = None
    options: dict[str, Any] = {}


class IndexDesignDocument(CandyDocument):
    """Declarative Mango indexes (language "query")."""

    language: Literal["query"]
    views: dict[str, IndexView] = {}


DesignDocument = Annotated[
    Union[MapReduceDesignDocument, IndexDesignDocument],
    Field(discriminator="language"),
]

KNOWN_LANGUAGES = ("javascript", "query")


class DesignDocs(BaseModel):
    map_reduce: list[MapReduceDesignDocument] = []
    indexes: list[IndexDesignDocument] = []
    skipped: int = 0  # documents with a missing or unrecognized language
