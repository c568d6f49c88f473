from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from commission_shop.application.exceptions import RecordStoreError
from commission_shop.application.ports.record_store import RecordStorePort
from commission_shop.infrastructure.store.row_utils import matches, new_row, sort_rows


class JsonRecordStore(RecordStorePort):
    """One JSON file per table. Meant for local development, not for concurrent processes."""

    def __init__(self, data_dir: str = "./data/tables", seed: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._logger = logging.getLogger(__name__)
        for table, rows in (seed or {}).items():
            if not self._get_file_path(table).exists():
                self._save_rows(table, [new_row(r) for r in rows])

    def _get_lock(self, table: str) -> threading.Lock:
        """Get or create a lock for a table."""
        with self._lock_lock:
            if table not in self._locks:
                self._locks[table] = threading.Lock()
            return self._locks[table]

    def _get_file_path(self, table: str) -> Path:
        if not table.replace("_", "").isalnum():
            raise RecordStoreError(f"Invalid table name: {table}")
        return self._data_dir / f"{table}.json"

    def _load_rows(self, table: str) -> list[dict[str, Any]]:
        """Load rows from the table file; a missing file is an empty table."""
        file_path = self._get_file_path(table)
        if not file_path.exists():
            return []
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            self._logger.error("Table file unreadable", extra={"table": table, "error": str(e)})
            raise RecordStoreError(f"Cannot read table {table}: {e}") from e
        return list(data.get("rows", []))

    def _save_rows(self, table: str, rows: list[dict[str, Any]]) -> None:
        """Save rows atomically."""
        file_path = self._get_file_path(table)
        temp_path = file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump({"table": table, "rows": rows, "version": 1}, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise RecordStoreError(f"Cannot write table {table}: {e}") from e

    def query(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        with self._get_lock(table):
            rows = [r for r in self._load_rows(table) if matches(r, filters)]
        return sort_rows(rows, order_by, descending)

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        stored = new_row(row)
        with self._get_lock(table):
            rows = self._load_rows(table)
            rows.append(stored)
            self._save_rows(table, rows)
        return dict(stored)

    def update(self, table: str, row_id: str, patch: dict[str, Any]) -> None:
        with self._get_lock(table):
            rows = self._load_rows(table)
            for row in rows:
                if row.get("id") == row_id:
                    row.update(patch)
                    row["id"] = row_id
            self._save_rows(table, rows)

    def delete(self, table: str, row_id: str) -> None:
        with self._get_lock(table):
            rows = self._load_rows(table)
            self._save_rows(table, [r for r in rows if r.get("id") != row_id])
