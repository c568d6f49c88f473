from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from commission_shop.domain.entities.price import Price


@dataclass(frozen=True)
class Service:
    id: str
    title: str
    price_clp_min: int
    price_usd_min: Any
    price_clp_max: int | None = None
    price_usd_max: Any = None
    category: str = ""
    description: str = ""
    image: str = ""
    is_available: bool = True
    order_index: int = 0
    is_multi_unit_pack: bool = False  # per-unit extras instead of flat extras
    default_unit_count: int = 5

    @property
    def base_price(self) -> Price:
        """The "from" price used when no detail level is chosen."""
        return Price.of(self.price_clp_min, self.price_usd_min)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Service:
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            price_clp_min=int(row.get("price_clp_min") or 0),
            price_usd_min=row.get("price_usd_min") or 0,
            price_clp_max=row.get("price_clp_max"),
            price_usd_max=row.get("price_usd_max"),
            category=row.get("category") or "",
            description=row.get("description") or "",
            image=row.get("image") or "",
            is_available=bool(row.get("is_available", True)),
            order_index=int(row.get("order_index") or 0),
            is_multi_unit_pack=bool(row.get("is_multi_unit_pack", False)),
            default_unit_count=int(row.get("default_unit_count") or 5),
        )
