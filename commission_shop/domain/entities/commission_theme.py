from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class CommissionTheme:
    id: str
    name: str
    icon: str = ""
    description: str | None = None
    is_available: bool = True
    order_index: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> CommissionTheme:
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            icon=row.get("icon") or "",
            description=row.get("description"),
            is_available=bool(row.get("is_available", True)),
            order_index=int(row.get("order_index") or 0),
        )
