from __future__ import annotations

from commission_shop.application.exceptions import BlobStoreError
from commission_shop.application.ports.blob_store import BlobStorePort


class MemoryBlobStore(BlobStorePort):
    def __init__(self, base_url: str = "memory://blobs") -> None:
        self._base_url = base_url.rstrip("/")
        self._blobs: dict[str, tuple[bytes, str | None]] = {}

    def upload(self, data: bytes, key: str, content_type: str | None = None) -> str:
        if key in self._blobs:
            raise BlobStoreError(f"Blob already exists: {key}")
        self._blobs[key] = (bytes(data), content_type)
        return key

    def public_url(self, key: str) -> str:
        return f"{self._base_url}/{key}"

    def delete(self, key: str) -> None:
        self._blobs.pop(key, None)

    def key_from_url(self, url: str) -> str | None:
        prefix = f"{self._base_url}/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix):] or None

    def get(self, key: str) -> bytes | None:
        blob = self._blobs.get(key)
        return blob[0] if blob else None
