"""
Content sources for token set documents.

A source maps a token set path ("Sys/Color/Light") to its JSON body. The
engine only ever reads from it.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable
from urllib.parse import quote

import httpx

from .errors import make_document_error

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".json"


@runtime_checkable
class ContentSource(Protocol):
    """Anything that can fetch a decoded token set by path."""

    async def fetch(self, path: str) -> dict[str, Any]: ...


def decode_document(path: str, text: str) -> dict[str, Any]:
    """Decode a document body, rejecting anything that is not a JSON object."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise make_document_error(f"invalid JSON: {e}", path, malformed=True) from e
    if not isinstance(data, dict):
        raise make_document_error(
            f"expected a JSON object, got {type(data).__name__}", path, malformed=True
        )
    return data


class FileSystemSource:
    """Reads ``<root>/<path>.json`` from disk."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def document_path(self, path: str) -> Path:
        return self.root / f"{path}{DOCUMENT_SUFFIX}"

    def _read(self, path: str) -> str:
        file_path = self.document_path(path)
        try:
            return file_path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise make_document_error(f"file not found: {file_path}", path) from e
        except OSError as e:
            raise make_document_error(f"cannot read {file_path}: {e}", path) from e

    async def fetch(self, path: str) -> dict[str, Any]:
        text = await asyncio.to_thread(self._read, path)
        return decode_document(path, text)

    def __repr__(self) -> str:
        return f"FileSystemSource({str(self.root)!r})"


class HttpSource:
    """GETs ``<base_url>/<path>.json`` with httpx.

    Timeouts and transport errors surface as missing documents so the
    store can fall back instead of hanging.

    Used as an async context manager (the loader does this once per load),
    the source keeps one ``AsyncClient`` open for every fetch inside the
    block. An injected client is used as is and never closed here.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self._client = client
        self._session: httpx.AsyncClient | None = None
        self._depth = 0

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def __aenter__(self) -> HttpSource:
        if self._client is None and self._depth == 0:
            self._session = self._new_client()
        self._depth += 1
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self._depth -= 1
        if self._depth == 0 and self._session is not None:
            session, self._session = self._session, None
            await session.aclose()

    def document_url(self, path: str) -> str:
        return f"{self.base_url}/{quote(path)}{DOCUMENT_SUFFIX}"

    async def fetch(self, path: str) -> dict[str, Any]:
        url = self.document_url(path)
        client = self._client if self._client is not None else self._session
        if client is not None:
            return await self._fetch_with(client, path, url)
        async with self._new_client() as client:
            return await self._fetch_with(client, path, url)

    async def _fetch_with(self, client: httpx.AsyncClient, path: str, url: str) -> dict[str, Any]:
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise make_document_error(f"request to {url} failed: {e!r}", path) from e
        if response.status_code != 200:
            raise make_document_error(f"GET {url} returned HTTP {response.status_code}", path)
        logger.debug("Fetched %s (%d bytes)", url, len(response.content))
        return decode_document(path, response.text)

    def __repr__(self) -> str:
        return f"HttpSource({self.base_url!r})"
