"""
HTTP transport for the CouchDB REST interface.

The facade depends on the Transport protocol only; HttpTransport is the
default implementation on top of httpx. Status codes are not interpreted
here: CouchDB reports failures in the JSON body, which the codec decodes.
"""

import logging
from typing import Optional, Protocol, Union

import httpx

from couchcandy.errors import TransportError
from couchcandy.urls import redact

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class Transport(Protocol):
    async def get(self, url: str) -> bytes: ...

    async def post(self, url: str, body: Union[str, bytes]) -> bytes: ...

    async def put(self, url: str, body: Union[str, bytes]) -> bytes: ...

    async def delete(self, url: str) -> bytes: ...

    async def put_bytes(self, url: str, content_type: str, body: bytes) -> bytes: ...

    async def aclose(self) -> None: ...


class HttpTransport:
    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": "couchcandy/0.1.0", "Accept": JSON_CONTENT_TYPE},
            timeout=timeout,
        )

    async def _request(
        self,
        method: str,
        url: str,
        content: Optional[Union[str, bytes]] = None,
        content_type: Optional[str] = None,
    ) -> bytes:
        headers = {"Content-Type": content_type} if content_type else None
        logger.debug("%s %s", method, redact(url))
        try:
            async with self._client.stream(method, url, content=content, headers=headers) as resp:
                body = await resp.aread()
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {redact(url)} failed: {e}", {"method": method}) from e
        logger.debug("%s %s -> %d (%d bytes)", method, redact(url), resp.status_code, len(body))
        return body

    async def get(self, url: str) -> bytes:
        return await self._request("GET", url)

    async def post(self, url: str, body: Union[str, bytes]) -> bytes:
        return await self._request("POST", url, body, JSON_CONTENT_TYPE)

    async def put(self, url: str, body: Union[str, bytes]) -> bytes:
        return await self._request("PUT", url, body, JSON_CONTENT_TYPE)

    async def delete(self, url: str) -> bytes:
        return await self._request("DELETE", url)

    async def put_bytes(self, url: str, content_type: str, body: bytes) -> bytes:
        return await self._request("PUT", url, body, content_type)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
