from __future__ import annotations

import copy
import threading
from typing import Any

from commission_shop.application.ports.record_store import RecordStorePort
from commission_shop.infrastructure.store.row_utils import matches, new_row, sort_rows


class MemoryRecordStore(RecordStorePort):
    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._tables: dict[str, list[dict[str, Any]]] = {}
        for table, rows in (tables or {}).items():
            self._tables[table] = [new_row(r) for r in rows]
        self._lock = threading.Lock()

    def query(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        with self._lock:
            rows = [copy.deepcopy(r) for r in self._tables.get(table, []) if matches(r, filters)]
        return sort_rows(rows, order_by, descending)

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        stored = new_row(row)
        with self._lock:
            self._tables.setdefault(table, []).append(stored)
        return copy.deepcopy(stored)

    def update(self, table: str, row_id: str, patch: dict[str, Any]) -> None:
        with self._lock:
            for row in self._tables.get(table, []):
                if row.get("id") == row_id:
                    row.update(copy.deepcopy(patch))
                    row["id"] = row_id

    def delete(self, table: str, row_id: str) -> None:
        with self._lock:
            rows = self._tables.get(table, [])
            self._tables[table] = [r for r in rows if r.get("id") != row_id]
