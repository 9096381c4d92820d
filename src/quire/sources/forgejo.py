"""Forgejo / Gitea content source.

Resolves paths through the repository contents API::

    GET {api}/repos/{owner}/{repo}/contents/{root}/{path}?ref={ref}

A JSON list is a directory listing; a JSON object of ``type: "file"``
is a document whose base64 ``content`` is decoded lazily on ``read()``
(or fetched from ``download_url`` when the API omits it).

Error mapping:
    - 404 → ``NotFound``
    - 429, 5xx, transport errors, timeouts → ``TransientFetchError``
    - any other non-200, undecodable bodies, redirect loops, invalid JSON,
      unexpected shapes → ``MalformedResponse``

Token resolution mirrors provider keys in other clients:
    1. Explicit ``token`` parameter
    2. ``QUIRE_FORGEJO_TOKEN`` environment variable
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
from typing import Any
from urllib.parse import quote

import httpx

from quire.errors import MalformedResponse, NotFound, TransientFetchError
from quire.sources.nodes import Directory, DirectoryEntry, Document, Node, join_path, normalize_path

logger = logging.getLogger("quire.sources")

TOKEN_ENV = "QUIRE_FORGEJO_TOKEN"

# Body excerpt length kept in error messages
_EXCERPT = 200


class ForgejoSource:
    """Content source backed by a Forgejo/Gitea repository.

    Args:
        endpoint: API base URL, e.g. ``https://forge.example.com/api/v1``.
        owner: Repository owner.
        repo: Repository name.
        root: Directory inside the repository that acts as the content
            root (e.g. ``"blog"``).
        ref: Branch, tag, or commit. ``None`` uses the default branch.
        token: Access token for private repositories.
        timeout: Per-request timeout in seconds.
        client: Pre-built ``httpx.Client`` (tests pass one with a
            ``MockTransport``). The source only closes clients it created.
    """

    __slots__ = ("_api", "_client", "_headers", "_owner", "_owns_client", "_ref", "_repo", "_root")

    def __init__(
        self,
        endpoint: str,
        owner: str,
        repo: str,
        *,
        root: str = "",
        ref: str | None = None,
        token: str | None = None,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._api = endpoint.rstrip("/")
        self._owner = owner
        self._repo = repo
        self._root = normalize_path(root)
        self._ref = ref

        headers = {"Accept": "application/json"}
        resolved = token or os.environ.get(TOKEN_ENV, "")
        if resolved:
            headers["Authorization"] = f"token {resolved}"
        self._headers = headers

        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> ForgejoSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def contents_url(self, path: str) -> str:
        """Build the contents API URL for a path under the content root."""
        full = join_path(self._root, path) if path else self._root
        url = f"{self._api}/repos/{quote(self._owner)}/{quote(self._repo)}/contents"
        if full:
            url = f"{url}/{quote(full)}"
        return url

    def open(self, path: str) -> Node:
        path = normalize_path(path)
        params = {"ref": self._ref} if self._ref else None
        response = self._get(self.contents_url(path), path, params=params)

        try:
            payload = response.json()
        except ValueError as exc:
            msg = f"Contents API returned invalid JSON for /{path}"
            raise MalformedResponse(msg, path=path) from exc

        if isinstance(payload, list):
            return Directory(path, (_entry(item, path) for item in payload))
        if isinstance(payload, dict):
            return self._document(payload, path)

        msg = f"Unexpected contents payload for /{path}: {type(payload).__name__}"
        raise MalformedResponse(msg, path=path)

    # -- Internals --

    def _get(self, url: str, path: str, *, params: dict[str, str] | None = None) -> httpx.Response:
        try:
            response = self._client.get(url, params=params, headers=self._headers)
        except httpx.TransportError as exc:
            logger.warning("Fetch failed for %s: %s", url, exc)
            msg = f"Failed to fetch /{path}: {exc}"
            raise TransientFetchError(msg, path=path) from exc
        except httpx.RequestError as exc:
            # DecodingError, TooManyRedirects
            logger.warning("Bad response from %s: %s", url, exc)
            msg = f"Unusable response for /{path}: {exc}"
            raise MalformedResponse(msg, path=path) from exc

        logger.debug("GET %s -> %d", url, response.status_code)
        status = response.status_code
        if status == 200:
            return response
        if status == 404:
            raise NotFound(path)

        excerpt = response.text[:_EXCERPT]
        if status == 429 or status >= 500:
            logger.warning("Transient %d from %s", status, url)
            msg = f"Backend returned {status} for /{path}: {excerpt}"
            raise TransientFetchError(msg, path=path)
        msg = f"Unexpected status {status} for /{path}: {excerpt}"
        raise MalformedResponse(msg, path=path)

    def _document(self, payload: dict[str, Any], path: str) -> Document:
        kind = payload.get("type")
        if kind != "file":
            msg = f"Unsupported node type {kind!r} at /{path}"
            raise MalformedResponse(msg, path=path)

        size = payload.get("size")
        sha = payload.get("sha")
        content = payload.get("content")
        download_url = payload.get("download_url")

        if isinstance(content, str) and payload.get("encoding") == "base64":

            def _decode() -> bytes:
                try:
                    return base64.b64decode(content)
                except (binascii.Error, ValueError) as exc:
                    msg = f"Invalid base64 content at /{path}"
                    raise MalformedResponse(msg, path=path) from exc

            reader = _decode
        elif isinstance(download_url, str) and download_url:

            def _download() -> bytes:
                return self._get(download_url, path).content

            reader = _download
        else:
            msg = f"File payload at /{path} has neither content nor download_url"
            raise MalformedResponse(msg, path=path)

        return Document(
            path,
            reader,
            size=size if isinstance(size, int) else None,
            sha=sha if isinstance(sha, str) else None,
        )


def _entry(item: object, parent: str) -> DirectoryEntry:
    if not isinstance(item, dict):
        msg = f"Malformed listing entry in /{parent}"
        raise MalformedResponse(msg, path=parent)
    name = item.get("name")
    kind = item.get("type")
    if not isinstance(name, str) or not name or not isinstance(kind, str):
        msg = f"Listing entry in /{parent} lacks name or type"
        raise MalformedResponse(msg, path=parent)
    return DirectoryEntry(name=name, is_dir=kind == "dir", path=join_path(parent, name))
