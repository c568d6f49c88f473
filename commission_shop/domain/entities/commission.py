from __future__ import annotations

from dataclasses import dataclass

from commission_shop.domain.entities.price import Price


@dataclass(frozen=True)
class UnitExtras:
    unit_number: int
    extra_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class FlatSelection:
    extra_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class PackSelection:
    units: tuple[UnitExtras, ...] = ()


@dataclass(frozen=True)
class CommissionRequest:
    """What the visitor picked in the configuration dialog, before pricing."""

    service_id: str
    items: FlatSelection | PackSelection = FlatSelection()
    detail_level_name: str | None = None
    variant_id: str | None = None
    theme_id: str | None = None
    custom_theme: str | None = None


@dataclass(frozen=True)
class CompositionLine:
    kind: str  # "base", "variant", "theme", "custom_theme", "extra", "unit", "unit_extra", "unit_empty"
    label: str
    price: Price | None = None
    unit_number: int | None = None


@dataclass(frozen=True)
class SelectedCommission:
    """
    A priced cart line item. Only references that survived composition are kept,
    so a stale variant or an unavailable unit extra never shows up here.
    """

    service_id: str
    total: Price
    detail_level_name: str | None = None
    variant_id: str | None = None
    extra_ids: tuple[str, ...] = ()
    units: tuple[UnitExtras, ...] | None = None  # set only for pack services
    theme_id: str | None = None
    custom_theme: str | None = None
    lines: tuple[CompositionLine, ...] = ()
    service_title: str = ""  # title at composition time
    id: str = ""  # local cart id, assigned on add

    @property
    def is_pack(self) -> bool:
        return self.units is not None
