from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class RecordStorePort(ABC):
    @abstractmethod
    def query(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Return rows of `table` whose columns equal every value in `filters`,
        sorted by `order_by` when given.
        Raises RecordStoreError on failure.
        """
        raise NotImplementedError

    @abstractmethod
    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert a row and return it as stored (with id and timestamps)."""
        raise NotImplementedError

    @abstractmethod
    def update(self, table: str, row_id: str, patch: dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, table: str, row_id: str) -> None:
        raise NotImplementedError
