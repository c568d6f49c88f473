from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from commission_shop.application.exceptions import RecordStoreError
from commission_shop.application.ports.record_store import RecordStorePort
from commission_shop.domain.entities.catalog_snapshot import CatalogSnapshot
from commission_shop.domain.entities.commission_theme import CommissionTheme
from commission_shop.domain.entities.content import GalleryItem, Rule, SiteSetting, Testimonial
from commission_shop.domain.entities.detail_level import DetailLevel
from commission_shop.domain.entities.emote import EmoteAvailabilityResolver, EmoteConfig, EmoteExtraAvailability
from commission_shop.domain.entities.extra import Extra
from commission_shop.domain.entities.service import Service
from commission_shop.domain.entities.service_variant import ServiceVariant

T = TypeVar("T")

ANNOUNCEMENT_KEY = "announcement_message"

CATALOG_TABLES = (
    "services",
    "service_detail_levels",
    "service_variants",
    "extras",
    "commission_themes",
    "emote_config",
    "emote_extra_availability",
)


class CatalogReader:
    """
    Loads the visitor-facing subset of each table.

    Store failures never propagate from here: the failing table reads as empty
    and the error is kept in `errors` (keyed by table) until the next successful
    read of that table.
    """

    def __init__(self, store: RecordStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)
        self.errors: dict[str, str] = {}

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def catalog_errors(self) -> dict[str, str]:
        return {table: self.errors[table] for table in CATALOG_TABLES if table in self.errors}

    def list_services(self) -> list[Service]:
        rows = self._fetch("services", {"is_available": True}, "order_index")
        return self._build("services", rows, Service.from_row)

    def get_service(self, service_id: str) -> Service | None:
        return next((s for s in self.list_services() if s.id == service_id), None)

    def list_detail_levels(self, service_id: str | None = None) -> list[DetailLevel]:
        filters: dict[str, Any] = {"is_available": True}
        if service_id:
            filters["service_id"] = service_id
        rows = self._fetch("service_detail_levels", filters, "order_index")
        return self._build("service_detail_levels", rows, DetailLevel.from_row)

    def list_variants(self, service_id: str | None = None) -> list[ServiceVariant]:
        filters: dict[str, Any] = {"is_available": True}
        if service_id:
            filters["service_id"] = service_id
        rows = self._fetch("service_variants", filters, "order_index")
        return self._build("service_variants", rows, ServiceVariant.from_row)

    def list_extras(self, service_id: str | None = None) -> list[Extra]:
        """Available extras; narrowed to the ones offered for `service_id` when given."""
        rows = self._fetch("extras", {"is_available": True}, "order_index")
        extras = self._build("extras", rows, Extra.from_row)
        if service_id:
            extras = [e for e in extras if e.is_offered_for(service_id)]
        return extras

    def list_themes(self) -> list[CommissionTheme]:
        rows = self._fetch("commission_themes", {"is_available": True}, "order_index")
        return self._build("commission_themes", rows, CommissionTheme.from_row)

    def list_emote_configs(self, service_id: str | None = None) -> list[EmoteConfig]:
        filters: dict[str, Any] = {"is_active": True}
        if service_id:
            filters["service_id"] = service_id
        rows = self._fetch("emote_config", filters, "emote_number")
        return self._build("emote_config", rows, EmoteConfig.from_row)

    def list_emote_availability(self) -> list[EmoteExtraAvailability]:
        # every override row, including the ones that re-enable an extra
        rows = self._fetch("emote_extra_availability", None, "emote_number")
        return self._build("emote_extra_availability", rows, EmoteExtraAvailability.from_row)

    def get_emote_config(self, service_id: str) -> EmoteAvailabilityResolver:
        return EmoteAvailabilityResolver(
            self.list_emote_configs(service_id),
            self.list_emote_availability(),
        )

    def load_snapshot(self) -> CatalogSnapshot:
        return CatalogSnapshot(
            services=tuple(self.list_services()),
            detail_levels=tuple(self.list_detail_levels()),
            variants=tuple(self.list_variants()),
            extras=tuple(self.list_extras()),
            themes=tuple(self.list_themes()),
            emote_configs=tuple(self.list_emote_configs()),
            emote_availability=tuple(self.list_emote_availability()),
        )

    def list_gallery(self) -> list[GalleryItem]:
        rows = self._fetch("gallery", {"is_visible": True}, "order_index")
        return self._build("gallery", rows, GalleryItem.from_row)

    def list_testimonials(
        self,
        featured_only: bool = False,
        service_type: str | None = None,
        gallery_item_id: str | None = None,
    ) -> list[Testimonial]:
        filters: dict[str, Any] = {"is_visible": True}
        if featured_only:
            filters["is_featured"] = True
        if service_type:
            filters["service_type"] = service_type
        if gallery_item_id:
            filters["gallery_item_id"] = gallery_item_id
        rows = self._fetch("testimonials", filters, "order_index")
        return self._build("testimonials", rows, Testimonial.from_row)

    def list_rules(self) -> tuple[list[Rule], list[Rule]]:
        """Returns (allowed, forbidden)."""
        rows = self._fetch("rules", None, "order_index")
        rules = self._build("rules", rows, Rule.from_row)
        return [r for r in rules if r.is_allowed], [r for r in rules if not r.is_allowed]

    def get_announcement(self) -> str | None:
        rows = self._fetch("site_settings", {"key": ANNOUNCEMENT_KEY}, None)
        settings = self._build("site_settings", rows, SiteSetting.from_row)
        if not settings:
            return None
        setting = settings[0]
        if not setting.is_active or not setting.value.strip():
            return None
        return setting.value

    def _fetch(self, table: str, filters: dict[str, Any] | None, order_by: str | None) -> list[dict[str, Any]]:
        try:
            rows = self._store.query(table, filters=filters, order_by=order_by)
        except RecordStoreError as e:
            self._logger.error("Catalog fetch failed", extra={"table": table, "error": str(e)})
            self.errors[table] = str(e)
            return []
        self.errors.pop(table, None)
        return rows

    def _build(self, table: str, rows: list[dict[str, Any]], factory: Callable[[dict[str, Any]], T]) -> list[T]:
        items: list[T] = []
        for row in rows:
            try:
                items.append(factory(row))
            except (KeyError, TypeError, ValueError) as e:
                self._logger.warning(
                    "Skipping malformed row",
                    extra={"table": table, "row_id": row.get("id"), "error": str(e)},
                )
        return items
