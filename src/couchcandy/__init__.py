"""
couchcandy: CouchDB client for Python.

Typed documents in, typed responses out, over CouchDB's REST interface.
"""

from couchcandy.client import CouchCandy, AsyncCouchCandy
from couchcandy.session import Session
from couchcandy.options import Options, NotificationStyle
from couchcandy.transport.http import HttpTransport, Transport
from couchcandy.errors import CouchCandyError, TransportError, DecodeError, InvalidDocumentError, CouchDBError
from couchcandy.models.document import CandyDocument, Attachment, Revisions
from couchcandy.models.responses import (
    AllDocuments,
    Changes,
    DatabaseInfo,
    OperationResponse,
    ViewResponse,
)
from couchcandy.models.design import DesignDocs, IndexDesignDocument, MapReduceDesignDocument

__version__ = "0.1.0"
__all__ = [
    "CouchCandy",
    "AsyncCouchCandy",
    "Session",
    "Options",
    "NotificationStyle",
    "HttpTransport",
    "Transport",
    "CouchCandyError",
    "TransportError",
    "DecodeError",
    "InvalidDocumentError",
    "CouchDBError",
    "CandyDocument",
    "Attachment",
    "Revisions",
    "AllDocuments",
    "Changes",
    "DatabaseInfo",
    "OperationResponse",
    "ViewResponse",
    "DesignDocs",
    "IndexDesignDocument",
    "MapReduceDesignDocument",
]
