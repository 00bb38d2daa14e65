"""
JSON encoding of outgoing documents and decoding of CouchDB responses.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Iterable, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from couchcandy.errors import DecodeError
from couchcandy.models.document import CandyDocument
from couchcandy.models.design import (
    KNOWN_LANGUAGES,
    DesignDocs,
    DesignDocument,
    IndexDesignDocument,
    MapReduceDesignDocument,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_design_document = TypeAdapter(DesignDocument)
_string_list = TypeAdapter(list[str])


def _is_empty_revisions(value: Any) -> bool:
    """Only the zero shape {"start": 0, "ids": null} counts as empty."""
    return isinstance(value, Mapping) and dict(value) == {"start": 0, "ids": None}


def encode_document(document: Union[BaseModel, Mapping[str, Any]]) -> str:
    """Serialize a document for the request body.

    None-valued fields are dropped, and so is an empty `_revisions`;
    a populated revision history is kept as is.
    """
    if isinstance(document, BaseModel):
        payload = document.model_dump(mode="json", by_alias=True, exclude_none=True)
    elif isinstance(document, Mapping):
        payload = {k: v for k, v in document.items() if v is not None}
        if _is_empty_revisions(payload.get("_revisions")):
            del payload["_revisions"]
    else:
        raise TypeError(f"Cannot encode {type(document).__name__} as a document")
    return json.dumps(payload)


def load_json(raw: Union[str, bytes]) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        raise DecodeError(f"Response is not valid JSON: {e}", {"body": _preview(raw)}) from e


def decode(model: type[T], raw: Union[str, bytes]) -> T:
    """Decode a response body into `model`, raising DecodeError on any mismatch."""
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeError(f"Cannot decode {model.__name__}: {e}", {"body": _preview(raw)}) from e


def decode_document(model: type[T], raw: Union[str, bytes]) -> Union[T, CandyDocument]:
    """Decode a fetched document into `model`.

    An error document such as {"error": "not_found", "reason": "missing"}
    that `model` cannot hold comes back as a bare CandyDocument carrying
    `error` and `reason`.
    """
    data = load_json(raw)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        if isinstance(data, Mapping) and data.get("error"):
            return CandyDocument.model_validate(data)
        raise DecodeError(f"Cannot decode {model.__name__}: {e}", {"body": _preview(raw)}) from e


def decode_string_list(raw: Union[str, bytes]) -> list[str]:
    try:
        return _string_list.validate_json(raw)
    except ValidationError as e:
        raise DecodeError(f"Expected a list of strings: {e}", {"body": _preview(raw)}) from e


def partition_design_documents(documents: Iterable[Mapping[str, Any]]) -> DesignDocs:
    """Split raw design documents into map-reduce and index variants.

    Documents whose `language` is missing or unknown are counted in
    `skipped`. A document that carries a known language but does not
    decode fails the whole batch.
    """
    result = DesignDocs()
    for raw in documents:
        language = raw.get("language") if isinstance(raw, Mapping) else None
        if language not in KNOWN_LANGUAGES:
            logger.debug("Skipping design document %r with language %r", _doc_id(raw), language)
            result.skipped += 1
            continue
        try:
            document = _design_document.validate_python(raw)
        except ValidationError as e:
            raise DecodeError(f"Cannot decode design document {_doc_id(raw)!r}: {e}") from e
        if isinstance(document, MapReduceDesignDocument):
            result.map_reduce.append(document)
        elif isinstance(document, IndexDesignDocument):
            result.indexes.append(document)
    return result


def _doc_id(raw: Any) -> Any:
    return raw.get("_id") if isinstance(raw, Mapping) else None


def _preview(raw: Union[str, bytes]) -> str:
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    return text[:200]
