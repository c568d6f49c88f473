from __future__ import annotations

from dataclasses import dataclass

from commission_shop.domain.entities.commission_theme import CommissionTheme
from commission_shop.domain.entities.detail_level import DetailLevel
from commission_shop.domain.entities.emote import EmoteAvailabilityResolver, EmoteConfig, EmoteExtraAvailability
from commission_shop.domain.entities.extra import Extra
from commission_shop.domain.entities.service import Service
from commission_shop.domain.entities.service_variant import ServiceVariant


@dataclass(frozen=True)
class CatalogSnapshot:
    """Read-only view of the available catalog, as fetched at one point in time."""

    services: tuple[Service, ...] = ()
    detail_levels: tuple[DetailLevel, ...] = ()
    variants: tuple[ServiceVariant, ...] = ()
    extras: tuple[Extra, ...] = ()
    themes: tuple[CommissionTheme, ...] = ()
    emote_configs: tuple[EmoteConfig, ...] = ()
    emote_availability: tuple[EmoteExtraAvailability, ...] = ()

    def service(self, service_id: str) -> Service | None:
        return next((s for s in self.services if s.id == service_id), None)

    def detail_level(self, service_id: str, level_name: str | None) -> DetailLevel | None:
        if not level_name:
            return None
        return next(
            (level for level in self.detail_levels if level.service_id == service_id and level.level_name == level_name),
            None,
        )

    def variant(self, service_id: str, variant_id: str | None) -> ServiceVariant | None:
        if not variant_id:
            return None
        return next((v for v in self.variants if v.service_id == service_id and v.id == variant_id), None)

    def extra(self, extra_id: str) -> Extra | None:
        return next((e for e in self.extras if e.id == extra_id), None)

    def theme(self, theme_id: str | None) -> CommissionTheme | None:
        if not theme_id:
            return None
        return next((t for t in self.themes if t.id == theme_id), None)

    def extras_for(self, service_id: str) -> list[Extra]:
        return [e for e in self.extras if e.is_offered_for(service_id)]

    def resolver_for(self, service_id: str) -> EmoteAvailabilityResolver:
        configs = [c for c in self.emote_configs if c.service_id == service_id]
        return EmoteAvailabilityResolver(configs, self.emote_availability)

    def unit_count(self, service: Service, variant: ServiceVariant | None = None) -> int:
        """Number of units in a pack: from a "pack-N" variant, else the service default."""
        if variant is not None and variant.pack_size:
            return variant.pack_size
        return service.default_unit_count
