"""Shared fixtures: a session and an in-memory transport with canned answers."""

import asyncio
from typing import Optional, Union

import pytest

from couchcandy import CouchCandy, Session


class CannedTransport:
    """Transport double: answers each verb with a canned body after `delay` seconds, or raises `failure`."""

    def __init__(self) -> None:
        self.responses: dict[str, bytes] = {}
        self.failure: Optional[Exception] = None
        self.calls: list[tuple[str, str, Optional[Union[str, bytes]], Optional[str]]] = []
        self.closed = False
        self.delay = 0.0

    async def _answer(self, verb: str, url: str, body=None, content_type=None) -> bytes:
        self.calls.append((verb, url, body, content_type))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.failure is not None:
            raise self.failure
        return self.responses.get(verb, b"{}")

    async def get(self, url: str) -> bytes:
        return await self._answer("GET", url)

    async def post(self, url: str, body) -> bytes:
        return await self._answer("POST", url, body, "application/json")

    async def put(self, url: str, body) -> bytes:
        return await self._answer("PUT", url, body, "application/json")

    async def delete(self, url: str) -> bytes:
        return await self._answer("DELETE", url)

    async def put_bytes(self, url: str, content_type: str, body: bytes) -> bytes:
        return await self._answer("PUT", url, body, content_type)

    async def aclose(self) -> None:
        self.closed = True

    @property
    def last_url(self) -> str:
        return self.calls[-1][1]


@pytest.fixture
def session() -> Session:
    return Session(host="http://127.0.0.1", port=5984, database="candy", username="unit", password="test")


@pytest.fixture
def transport() -> CannedTransport:
    return CannedTransport()


@pytest.fixture
def client(session, transport):
    couch = CouchCandy(session, transport)
    yield couch
    couch.close()
