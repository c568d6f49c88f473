from __future__ import annotations

import logging

from commission_shop.application.ports.record_store import RecordStorePort
from commission_shop.domain.entities.content import Testimonial


class SubmitTestimonialUseCase:
    """Public testimonial form. Submissions stay hidden until an admin approves them."""

    def __init__(self, store: RecordStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        client_name: str,
        rating: int,
        comment: str,
        service_type: str | None = None,
        gallery_item_id: str | None = None,
    ) -> Testimonial:
        client_name = (client_name or "").strip()
        comment = (comment or "").strip()
        if not client_name:
            raise ValueError("client_name is required")
        if not comment:
            raise ValueError("comment is required")
        if not 1 <= int(rating) <= 5:
            raise ValueError("rating must be between 1 and 5")

        latest = self._store.query("testimonials", order_by="order_index", descending=True)
        next_order_index = int(latest[0].get("order_index") or 0) + 1 if latest else 0

        row = self._store.insert(
            "testimonials",
            {
                "client_name": client_name,
                "client_avatar": None,
                "rating": int(rating),
                "comment": comment,
                "service_type": service_type or None,
                "gallery_item_id": gallery_item_id or None,
                "is_visible": False,
                "is_featured": False,
                "order_index": next_order_index,
            },
        )
        self._logger.info("Testimonial submitted", extra={"reason": "pending_moderation"})
        return Testimonial.from_row(row)
