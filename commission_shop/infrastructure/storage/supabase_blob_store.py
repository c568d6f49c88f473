from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from commission_shop.application.exceptions import BlobStoreError
from commission_shop.application.ports.blob_store import BlobStorePort


class SupabaseBlobStore(BlobStorePort):
    """Public bucket in the hosted object storage (`/storage/v1`)."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        bucket: str,
        access_token: str | None = None,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not base_url or not api_key:
            raise ValueError("SUPABASE_URL and an API key are required for the Supabase blob store")
        self._storage_url = base_url.rstrip("/") + "/storage/v1"
        self._bucket = bucket
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {access_token or api_key}",
        }
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def upload(self, data: bytes, key: str, content_type: str | None = None) -> str:
        url = f"{self._storage_url}/object/{self._bucket}/{quote(key)}"
        headers = {**self._headers, "Content-Type": content_type or "application/octet-stream"}
        self._send("POST", url, key, content=data, headers=headers)
        return key

    def public_url(self, key: str) -> str:
        return f"{self._public_prefix()}{quote(key)}"

    def delete(self, key: str) -> None:
        url = f"{self._storage_url}/object/{self._bucket}"
        self._send("DELETE", url, key, json={"prefixes": [key]}, headers=self._headers)

    def key_from_url(self, url: str) -> str | None:
        prefix = self._public_prefix()
        if not url.startswith(prefix):
            return None
        return url[len(prefix):].split("?", 1)[0] or None

    def _public_prefix(self) -> str:
        return f"{self._storage_url}/object/public/{self._bucket}/"

    def _send(self, method: str, url: str, key: str, **kwargs) -> None:
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            self._logger.error("Blob store unreachable", extra={"reason": key, "error": str(e)})
            raise BlobStoreError(f"{method} {key} failed: {e}") from e
        if resp.status_code >= 400:
            self._logger.error(
                "Blob store request failed",
                extra={"reason": key, "status": resp.status_code, "error": resp.text},
            )
            raise BlobStoreError(f"{method} {key} returned {resp.status_code}")
