from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class GalleryItem:
    id: str
    image_url: str
    title: str = ""
    description: str = ""
    service_type: str = ""
    order_index: int = 0
    is_visible: bool = True

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> GalleryItem:
        return cls(
            id=str(row["id"]),
            image_url=row.get("image_url") or "",
            title=row.get("title") or "",
            description=row.get("description") or "",
            service_type=row.get("service_type") or "",
            order_index=int(row.get("order_index") or 0),
            is_visible=bool(row.get("is_visible", True)),
        )


@dataclass(frozen=True)
class Testimonial:
    id: str
    client_name: str
    rating: int  # 1-5 stars
    comment: str
    client_avatar: str | None = None
    gallery_item_id: str | None = None
    service_type: str | None = None
    is_featured: bool = False
    is_visible: bool = False
    order_index: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Testimonial:
        return cls(
            id=str(row["id"]),
            client_name=row.get("client_name") or "",
            rating=int(row.get("rating") or 5),
            comment=row.get("comment") or "",
            client_avatar=row.get("client_avatar"),
            gallery_item_id=row.get("gallery_item_id"),
            service_type=row.get("service_type"),
            is_featured=bool(row.get("is_featured", False)),
            is_visible=bool(row.get("is_visible", False)),
            order_index=int(row.get("order_index") or 0),
        )


@dataclass(frozen=True)
class Rule:
    id: str
    text: str
    is_allowed: bool
    icon: str = ""
    order_index: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Rule:
        return cls(
            id=str(row["id"]),
            text=row.get("text") or "",
            is_allowed=bool(row.get("is_allowed", True)),
            icon=row.get("icon") or "",
            order_index=int(row.get("order_index") or 0),
        )


@dataclass(frozen=True)
class SiteSetting:
    id: str
    key: str
    value: str = ""
    is_active: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> SiteSetting:
        return cls(
            id=str(row["id"]),
            key=row["key"],
            value=row.get("value") or "",
            is_active=bool(row.get("is_active", False)),
        )
