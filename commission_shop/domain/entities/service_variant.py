from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from commission_shop.domain.entities.price import Price

_PACK_SIZE_RE = re.compile(r"^pack-(\d+)$")


@dataclass(frozen=True)
class ServiceVariant:
    id: str
    service_id: str
    variant_name: str
    variant_label: str
    price_clp: int
    price_usd: Any
    description: str | None = None
    preview_image: str = ""
    order_index: int = 0
    is_available: bool = True

    @property
    def price(self) -> Price:
        return Price.of(self.price_clp, self.price_usd)

    @property
    def pack_size(self) -> int | None:
        """Unit count declared by a "pack-N" variant name, if any."""
        match = _PACK_SIZE_RE.match(self.variant_name or "")
        if not match:
            return None
        return int(match.group(1)) or None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> ServiceVariant:
        return cls(
            id=str(row["id"]),
            service_id=str(row["service_id"]),
            variant_name=row.get("variant_name") or "",
            variant_label=row.get("variant_label") or row.get("variant_name") or "",
            price_clp=int(row.get("price_clp") or 0),
            price_usd=row.get("price_usd") or 0,
            description=row.get("description"),
            preview_image=row.get("preview_image") or "",
            order_index=int(row.get("order_index") or 0),
            is_available=bool(row.get("is_available", True)),
        )
