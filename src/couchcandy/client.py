"""
CouchCandy and AsyncCouchCandy, the public clients.

Each operation is one pipeline: build the URL, encode the body, call the
transport, decode the response. The first failure is raised as is.
"""

import asyncio
import json
import logging
import threading
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel

from couchcandy import codec, urls
from couchcandy.models.design import DesignDocs
from couchcandy.models.document import CandyDocument
from couchcandy.models.responses import AllDocuments, Changes, DatabaseInfo, OperationResponse, ViewResponse
from couchcandy.options import Options, document_query, normalize_all_documents_options
from couchcandy.session import Session
from couchcandy.transport.http import HttpTransport, Transport

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)
Document = Union[BaseModel, dict[str, Any]]

DESIGN_DOCUMENTS_OPTIONS = Options(include_docs=True, start_key='"_design/"', end_key='"_design0"')


class AsyncCouchCandy:
    """Async CouchDB client (primary).

    `session.database` is the database every document operation targets.
    put_database and delete_database switch it to the database they act on.
    """

    def __init__(self, session: Session, transport: Optional[Transport] = None):
        self.session = session
        self._transport: Transport = transport or HttpTransport()

    async def __aenter__(self) -> "AsyncCouchCandy":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    # Databases

    async def get_database_info(self) -> DatabaseInfo:
        raw = await self._transport.get(urls.database_url(self.session))
        return codec.decode(DatabaseInfo, raw)

    async def put_database(self, name: str) -> OperationResponse:
        self.session.database = name
        raw = await self._transport.put(urls.database_url(self.session), "")
        return codec.decode(OperationResponse, raw)

    async def delete_database(self, name: str) -> OperationResponse:
        self.session.database = name
        raw = await self._transport.delete(urls.database_url(self.session))
        return codec.decode(OperationResponse, raw)

    async def get_all_databases(self) -> list[str]:
        raw = await self._transport.get(urls.all_databases_url(self.session))
        return codec.decode_string_list(raw)

    # Documents

    async def get_document(
        self,
        doc_id: str,
        model: Optional[type[T]] = None,
        options: Optional[Options] = None,
    ) -> Union[T, CandyDocument, dict[str, Any]]:
        """Fetch one document, decoded into `model` or returned as a plain dict.

        When the server answers with an error document that `model` cannot
        hold, a CandyDocument carrying `error` and `reason` is returned.
        """
        url = urls.document_url(self.session, doc_id) + document_query(options)
        raw = await self._transport.get(url)
        if model is None:
            return codec.load_json(raw)
        return codec.decode_document(model, raw)

    async def post_document(self, document: Document) -> OperationResponse:
        """Create a document; the server assigns an id when it has none."""
        body = codec.encode_document(document)
        raw = await self._transport.post(urls.database_url(self.session), body)
        return codec.decode(OperationResponse, raw)

    async def put_document(self, document: Document) -> OperationResponse:
        """Create or update a document at the id it carries in `_id`."""
        body = codec.encode_document(document)
        url = urls.document_url_from_body(self.session, body)
        raw = await self._transport.put(url, body)
        return codec.decode(OperationResponse, raw)

    async def put_document_with_id(self, doc_id: str, document: Document) -> OperationResponse:
        body = codec.encode_document(document)
        raw = await self._transport.put(urls.document_url(self.session, doc_id), body)
        return codec.decode(OperationResponse, raw)

    async def delete_document(self, doc_id: str, rev: str) -> OperationResponse:
        url = f"{urls.document_url(self.session, doc_id)}?rev={rev}"
        raw = await self._transport.delete(url)
        return codec.decode(OperationResponse, raw)

    async def get_all_documents(self, options: Optional[Options] = None) -> AllDocuments:
        """List documents. Without an explicit limit only the first 10 rows are returned."""
        options = normalize_all_documents_options(options or Options())
        raw = await self._transport.get(urls.all_documents_url(self.session, options))
        return codec.decode(AllDocuments, raw)

    async def get_documents_by_keys(self, keys: list[str], options: Optional[Options] = None) -> AllDocuments:
        url = urls.all_documents_url(self.session, options or Options())
        raw = await self._transport.post(url, json.dumps({"keys": keys}))
        return codec.decode(AllDocuments, raw)

    async def get_changes(
        self, options: Optional[Options] = None, since: Optional[Union[int, str]] = None,
    ) -> Changes:
        raw = await self._transport.get(urls.changes_url(self.session, options or Options(), since))
        return codec.decode(Changes, raw)

    # Design documents, views and lists

    async def call_view(self, design_doc: str, view: str, options: Optional[Options] = None) -> ViewResponse:
        url = urls.view_url(self.session, design_doc, view, options or Options())
        raw = await self._transport.get(url)
        return codec.decode(ViewResponse, raw)

    async def call_list(
        self, design_doc: str, list_name: str, view: str, options: Optional[Options] = None,
    ) -> ViewResponse:
        url = urls.list_url(self.session, design_doc, list_name, view, options or Options())
        raw = await self._transport.get(url)
        return codec.decode(ViewResponse, raw)

    async def get_design_documents(self) -> DesignDocs:
        raw = await self._transport.get(urls.all_documents_url(self.session, DESIGN_DOCUMENTS_OPTIONS))
        listing = codec.decode(AllDocuments, raw)
        design_docs = codec.partition_design_documents(row.doc for row in listing.rows if row.doc is not None)
        if design_docs.skipped:
            logger.info("Skipped %d design document(s) with an unrecognized language", design_docs.skipped)
        return design_docs

    # Attachments

    async def get_attachment(self, doc_id: str, name: str, rev: str) -> bytes:
        return await self._transport.get(urls.attachment_url(self.session, doc_id, name, rev))

    async def put_attachment(
        self, doc_id: str, rev: str, name: str, content: bytes, content_type: str,
    ) -> OperationResponse:
        url = urls.attachment_url(self.session, doc_id, name, rev)
        raw = await self._transport.put_bytes(url, content_type, content)
        return codec.decode(OperationResponse, raw)

    async def delete_attachment(self, doc_id: str, rev: str, name: str) -> OperationResponse:
        raw = await self._transport.delete(urls.attachment_url(self.session, doc_id, name, rev))
        return codec.decode(OperationResponse, raw)


class CouchCandy:
    """Blocking wrapper around AsyncCouchCandy.

    Calls run on one event loop in a background thread, so several threads
    may call into the same instance at once.
    """

    def __init__(self, session: Session, transport: Optional[Transport] = None):
        self._async = AsyncCouchCandy(session, transport)
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._loop.run_forever, name="couchcandy-loop", daemon=True)
        self._thread.start()

    @classmethod
    def from_env(cls, transport: Optional[Transport] = None) -> "CouchCandy":
        return cls(Session.from_env(), transport)

    def _run(self, coro: Any) -> Any:
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()

    def __enter__(self) -> "CouchCandy":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def session(self) -> Session:
        return self._async.session

    def close(self) -> None:
        if self._loop.is_closed():
            return
        try:
            self._run(self._async.aclose())
        finally:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join()
            self._loop.close()

    def get_database_info(self) -> DatabaseInfo:
        return self._run(self._async.get_database_info())

    def put_database(self, name: str) -> OperationResponse:
        return self._run(self._async.put_database(name))

    def delete_database(self, name: str) -> OperationResponse:
        return self._run(self._async.delete_database(name))

    def get_all_databases(self) -> list[str]:
        return self._run(self._async.get_all_databases())

    def get_document(
        self, doc_id: str, model: Optional[type[T]] = None, options: Optional[Options] = None,
    ) -> Union[T, CandyDocument, dict[str, Any]]:
        return self._run(self._async.get_document(doc_id, model, options))

    def post_document(self, document: Document) -> OperationResponse:
        return self._run(self._async.post_document(document))

    def put_document(self, document: Document) -> OperationResponse:
        return self._run(self._async.put_document(document))

    def put_document_with_id(self, doc_id: str, document: Document) -> OperationResponse:
        return self._run(self._async.put_document_with_id(doc_id, document))

    def delete_document(self, doc_id: str, rev: str) -> OperationResponse:
        return self._run(self._async.delete_document(doc_id, rev))

    def get_all_documents(self, options: Optional[Options] = None) -> AllDocuments:
        return self._run(self._async.get_all_documents(options))

    def get_documents_by_keys(self, keys: list[str], options: Optional[Options] = None) -> AllDocuments:
        return self._run(self._async.get_documents_by_keys(keys, options))

    def get_changes(self, options: Optional[Options] = None, since: Optional[Union[int, str]] = None) -> Changes:
        return self._run(self._async.get_changes(options, since))

    def call_view(self, design_doc: str, view: str, options: Optional[Options] = None) -> ViewResponse:
        return self._run(self._async.call_view(design_doc, view, options))

    def call_list(
        self, design_doc: str, list_name: str, view: str, options: Optional[Options] = None,
    ) -> ViewResponse:
        return self._run(self._async.call_list(design_doc, list_name, view, options))

    def get_design_documents(self) -> DesignDocs:
        return self._run(self._async.get_design_documents())

    def get_attachment(self, doc_id: str, name: str, rev: str) -> bytes:
        return self._run(self._async.get_attachment(doc_id, name, rev))

    def put_attachment(
        self, doc_id: str, rev: str, name: str, content: bytes, content_type: str,
    ) -> OperationResponse:
        return self._run(self._async.put_attachment(doc_id, rev, name, content, content_type))

    def delete_attachment(self, doc_id: str, rev: str, name: str) -> OperationResponse:
        return self._run(self._async.delete_attachment(doc_id, rev, name))
