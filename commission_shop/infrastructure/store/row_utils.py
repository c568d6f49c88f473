from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Any


def matches(row: dict[str, Any], filters: dict[str, Any] | None) -> bool:
    if not filters:
        return True
    return all(row.get(column) == value for column, value in filters.items())


def sort_rows(rows: list[dict[str, Any]], order_by: str | None, descending: bool = False) -> list[dict[str, Any]]:
    if not order_by:
        return rows
    present = [r for r in rows if r.get(order_by) is not None]
    missing = [r for r in rows if r.get(order_by) is None]
    # rows without the sort column go last
    return sorted(present, key=lambda r: r[order_by], reverse=descending) + missing


def new_row(row: dict[str, Any]) -> dict[str, Any]:
    now = now_iso()
    stored = copy.deepcopy(row)
    stored["id"] = str(stored.get("id") or uuid.uuid4())
    stored.setdefault("created_at", now)
    stored.setdefault("updated_at", now)
    return stored


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
