from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from commission_shop.domain.entities.price import Price


@dataclass(frozen=True)
class DetailLevel:
    id: str
    service_id: str
    level_name: str  # "simple", "detallado", "premium"
    level_label: str
    price_clp: int
    price_usd: Any
    description: str | None = None
    includes: str | None = None
    recommendations: tuple[str, ...] = ()
    example_image: str | None = None
    order_index: int = 0
    is_available: bool = True

    @property
    def price(self) -> Price:
        return Price.of(self.price_clp, self.price_usd)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> DetailLevel:
        return cls(
            id=str(row["id"]),
            service_id=str(row["service_id"]),
            level_name=row["level_name"],
            level_label=row.get("level_label") or row["level_name"],
            price_clp=int(row.get("price_clp") or 0),
            price_usd=row.get("price_usd") or 0,
            description=row.get("description"),
            includes=row.get("includes"),
            recommendations=tuple(row.get("recommendations") or ()),
            example_image=row.get("example_image"),
            order_index=int(row.get("order_index") or 0),
            is_available=bool(row.get("is_available", True)),
        )
