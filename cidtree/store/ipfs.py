"""
IPFS content store.

Talks to a Kubo-compatible HTTP RPC API (default http://127.0.0.1:5001):
- hash  -> POST /api/v0/add   (multipart upload, returns the CID)
- fetch -> POST /api/v0/cat?arg=<cid>

Every failure is raised as ContentStoreException; nothing is retried here.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from cidtree.crypto.hashing import ContentId
from cidtree.http.client import HttpClient, HttpError, HttpResponse
from cidtree.schemas.errors import ContentStoreException


logger = logging.getLogger(__name__)


class IpfsContentStore:
    """
    Content store backed by an IPFS node.

    Usage:
        with IpfsContentStore("http://127.0.0.1:5001") as store:
            cid = store.hash(b"hello")
            assert store.fetch(cid) == b"hello"
    """

    def __init__(
        self,
        api_url: str = "http://127.0.0.1:5001",
        *,
        timeout: float = 30.0,
        proxy: Optional[str] = None,
        pin: bool = True,
        client: Optional[HttpClient] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.pin = pin
        self._client = client or HttpClient(timeout=timeout, proxy=proxy)

    def _endpoint(self, command: str) -> str:
        return f"{self.api_url}/api/v0/{command}"

    def _post(self, command: str, **kwargs: Any) -> HttpResponse:
        url = self._endpoint(command)
        try:
            response = self._client.post(url, **kwargs)
        except HttpError as e:
            raise ContentStoreException(
                f"IPFS {command} request failed: {e}",
                details={"url": url},
            ) from e

        if not response.ok:
            raise ContentStoreException(
                f"IPFS {command} failed: {_error_message(response)}",
                status_code=response.status_code,
                details={"url": url},
            )
        return response

    def hash(self, data: bytes) -> ContentId:
        response = self._post(
            "add",
            params={"pin": str(self.pin).lower()},
            files={"file": ("blob", data)},
        )
        content_id = _parse_add_response(response)
        logger.debug(f"IPFS add: {len(data)} bytes -> {content_id}")
        return content_id

    def fetch(self, content_id: ContentId) -> bytes:
        response = self._post("cat", params={"arg": content_id})
        logger.debug(f"IPFS cat: {content_id} -> {len(response.content)} bytes")
        return response.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "IpfsContentStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def _parse_add_response(response: HttpResponse) -> ContentId:
    # add streams one JSON object per line; the last line describes the upload
    lines = [line for line in response.text.splitlines() if line.strip()]
    if not lines:
        raise ContentStoreException("IPFS add returned an empty response")
    try:
        payload = json.loads(lines[-1])
    except json.JSONDecodeError as e:
        raise ContentStoreException(
            "IPFS add returned malformed JSON",
            details={"body": lines[-1][:200]},
        ) from e

    content_id = payload.get("Hash") if isinstance(payload, dict) else None
    if not content_id:
        raise ContentStoreException(
            "IPFS add response has no Hash field",
            details={"body": lines[-1][:200]},
        )
    return content_id


def _error_message(response: HttpResponse) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("Message"):
        return str(payload["Message"])
    return f"HTTP {response.status_code}"
