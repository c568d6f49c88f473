from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from commission_shop.domain.entities.price import Price


@dataclass(frozen=True)
class Extra:
    id: str
    title: str
    price_clp: int
    price_usd: Any
    description: str = ""
    icon: str = ""
    only_for: tuple[str, ...] = ()  # empty = offered to every service
    is_available: bool = True
    order_index: int = 0

    @property
    def price(self) -> Price:
        return Price.of(self.price_clp, self.price_usd)

    def is_offered_for(self, service_id: str) -> bool:
        if not self.only_for:
            return True
        return service_id in self.only_for

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Extra:
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            price_clp=int(row.get("price_clp") or 0),
            price_usd=row.get("price_usd") or 0,
            description=row.get("description") or "",
            icon=row.get("icon") or "",
            only_for=tuple(str(s) for s in (row.get("only_for") or ())),
            is_available=bool(row.get("is_available", True)),
            order_index=int(row.get("order_index") or 0),
        )
