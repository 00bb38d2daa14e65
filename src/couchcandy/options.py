"""
Query options and their translation into CouchDB query strings.
"""

from enum import Enum
from typing import Optional
from urllib.parse import quote_plus

from pydantic import BaseModel

DEFAULT_ALL_DOCUMENTS_LIMIT = 10


class NotificationStyle(str, Enum):
    """Value of the `style` parameter on the changes feed."""

    MAIN_ONLY = "main_only"
    ALL_DOCS = "all_docs"


class Options(BaseModel):
    """Options available when querying the database.

    Zero values are left out of the query string, apart from
    `descending` and `reduce` which are always sent, and `include_docs`
    which is sent whenever `reduce` is off.

    Key-like values are sent as opaque strings: CouchDB expects JSON there,
    so a string key has to be passed pre-quoted, e.g. `key='"serge"'`.
    """

    revisions: bool = False
    revision: str = ""
    descending: bool = False
    limit: int = 0
    include_docs: bool = False
    notification_style: Optional[NotificationStyle] = None
    key: str = ""
    keys: str = ""
    start_key: str = ""
    end_key: str = ""
    reduce: bool = False
    group_level: int = 0
    skip: int = 0


def _flag(value: bool) -> str:
    return "true" if value else "false"


def to_query_string(options: Options) -> str:
    params: list[tuple[str, str]] = [("descending", _flag(options.descending))]
    # CouchDB rejects include_docs on reduced views
    if not options.reduce:
        params.append(("include_docs", _flag(options.include_docs)))
    params.append(("reduce", _flag(options.reduce)))
    if options.limit:
        params.append(("limit", str(options.limit)))
    if options.key:
        params.append(("key", options.key))
    if options.start_key:
        params.append(("start_key", options.start_key))
    if options.end_key:
        params.append(("end_key", options.end_key))
    if options.group_level:
        params.append(("group_level", str(options.group_level)))
    if options.skip:
        params.append(("skip", str(options.skip)))
    if options.keys:
        params.append(("keys", options.keys))
    return "?" + "&".join(f"{name}={quote_plus(value)}" for name, value in params)


def normalize_all_documents_options(options: Options) -> Options:
    """Cap an unbounded all-documents listing at DEFAULT_ALL_DOCUMENTS_LIMIT rows."""
    if options.limit == 0:
        return options.model_copy(update={"limit": DEFAULT_ALL_DOCUMENTS_LIMIT})
    return options


def document_query(options: Optional[Options]) -> str:
    """Query string for reading a single document: revs and rev only."""
    if options is None:
        return ""
    params = []
    if options.revisions:
        params.append("revs=true")
    if options.revision:
        params.append(f"rev={quote_plus(options.revision)}")
    return "?" + "&".join(params) if params else ""
