from __future__ import annotations

from abc import ABC, abstractmethod


class BlobStorePort(ABC):
    @abstractmethod
    def upload(self, data: bytes, key: str, content_type: str | None = None) -> str:
        """Store bytes under `key`. Returns the key. Raises BlobStoreError on failure."""
        raise NotImplementedError

    @abstractmethod
    def public_url(self, key: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def key_from_url(self, url: str) -> str | None:
        """Return the key for a URL served by this store, or None for foreign URLs."""
        raise NotImplementedError
