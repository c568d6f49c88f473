from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from commission_shop.application.utils.order_summary import Currency
from commission_shop.domain.entities.commission import (
    CommissionRequest,
    CompositionLine,
    FlatSelection,
    PackSelection,
    SelectedCommission,
    UnitExtras,
)
from commission_shop.domain.entities.price import Price


class PriceSchema(BaseModel):
    clp: int
    usd: Decimal

    @classmethod
    def from_price(cls, price: Price) -> PriceSchema:
        return cls(clp=price.clp, usd=price.usd)


class ServiceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    category: str = ""
    description: str = ""
    image: str = ""
    price_clp_min: int
    price_clp_max: int | None = None
    price_usd_min: Decimal
    price_usd_max: Decimal | None = None
    is_multi_unit_pack: bool = False
    default_unit_count: int = 5
    order_index: int = 0


class DetailLevelSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    service_id: str
    level_name: str
    level_label: str
    price_clp: int
    price_usd: Decimal
    description: str | None = None
    includes: str | None = None
    recommendations: list[str] = Field(default_factory=list)
    example_image: str | None = None
    order_index: int = 0


class VariantSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    service_id: str
    variant_name: str
    variant_label: str
    price_clp: int
    price_usd: Decimal
    description: str | None = None
    preview_image: str = ""
    pack_size: int | None = None
    order_index: int = 0


class ExtraSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str = ""
    icon: str = ""
    price_clp: int
    price_usd: Decimal
    only_for: list[str] = Field(default_factory=list)
    order_index: int = 0


class ThemeSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    icon: str = ""
    description: str | None = None
    order_index: int = 0


class ServiceDetailSchema(BaseModel):
    service: ServiceSchema
    detail_levels: list[DetailLevelSchema]
    variants: list[VariantSchema]
    extras: list[ExtraSchema]


class EmoteUnitSchema(BaseModel):
    unit_number: int
    label: str
    description: str | None = None
    available_extra_ids: list[str] = Field(default_factory=list)


class EmoteConfigSchema(BaseModel):
    service_id: str
    unit_count: int
    units: list[EmoteUnitSchema]


class UnitExtrasSchema(BaseModel):
    unit_number: int
    extra_ids: list[str] = Field(default_factory=list)


class CommissionRequestSchema(BaseModel):
    service_id: str
    detail_level_name: str | None = None
    variant_id: str | None = None
    theme_id: str | None = None
    custom_theme: str | None = Field(default=None, max_length=200)
    extra_ids: list[str] = Field(default_factory=list)
    units: list[UnitExtrasSchema] | None = None  # per-unit extras for pack services

    def to_request(self) -> CommissionRequest:
        if self.units is not None:
            items: FlatSelection | PackSelection = PackSelection(
                units=tuple(UnitExtras(u.unit_number, tuple(u.extra_ids)) for u in self.units)
            )
        else:
            items = FlatSelection(extra_ids=tuple(self.extra_ids))
        return CommissionRequest(
            service_id=self.service_id,
            items=items,
            detail_level_name=self.detail_level_name or None,
            variant_id=self.variant_id or None,
            theme_id=self.theme_id or None,
            custom_theme=self.custom_theme,
        )


class LineSchema(BaseModel):
    kind: str
    label: str
    price: PriceSchema | None = None
    unit_number: int | None = None

    @classmethod
    def from_line(cls, line: CompositionLine) -> LineSchema:
        return cls(
            kind=line.kind,
            label=line.label,
            price=PriceSchema.from_price(line.price) if line.price else None,
            unit_number=line.unit_number,
        )


class CommissionSchema(BaseModel):
    id: str
    service_id: str
    detail_level_name: str | None = None
    variant_id: str | None = None
    extra_ids: list[str] = Field(default_factory=list)
    units: list[UnitExtrasSchema] | None = None
    theme_id: str | None = None
    custom_theme: str | None = None
    total: PriceSchema
    lines: list[LineSchema] = Field(default_factory=list)

    @classmethod
    def from_commission(cls, commission: SelectedCommission) -> CommissionSchema:
        return cls(
            id=commission.id,
            service_id=commission.service_id,
            detail_level_name=commission.detail_level_name,
            variant_id=commission.variant_id,
            extra_ids=list(commission.extra_ids),
            units=(
                [UnitExtrasSchema(unit_number=u.unit_number, extra_ids=list(u.extra_ids)) for u in commission.units]
                if commission.units is not None
                else None
            ),
            theme_id=commission.theme_id,
            custom_theme=commission.custom_theme,
            total=PriceSchema.from_price(commission.total),
            lines=[LineSchema.from_line(line) for line in commission.lines],
        )


class CartSchema(BaseModel):
    session_id: str
    count: int
    items: list[CommissionSchema]
    total: PriceSchema


class SummarySchema(BaseModel):
    currency: Currency
    lines: list[str]
    text: str


class HandoffSchema(BaseModel):
    link: str
    message: str
    commission_count: int
    total: PriceSchema


class GalleryItemSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    image_url: str
    title: str = ""
    description: str = ""
    service_type: str = ""
    order_index: int = 0


class TestimonialSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_name: str
    client_avatar: str | None = None
    rating: int
    comment: str
    gallery_item_id: str | None = None
    service_type: str | None = None
    is_featured: bool = False
    is_visible: bool = False


class TestimonialSubmitSchema(BaseModel):
    client_name: str = Field(min_length=1, max_length=100)
    rating: int = Field(default=5, ge=1, le=5)
    comment: str = Field(min_length=1, max_length=2000)
    service_type: str | None = None
    gallery_item_id: str | None = None


class RuleSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    icon: str = ""
    is_allowed: bool


class RulesSchema(BaseModel):
    allowed: list[RuleSchema]
    forbidden: list[RuleSchema]


class AnnouncementSchema(BaseModel):
    message: str | None = None
    is_active: bool = False


class EmoteAvailabilitySchema(BaseModel):
    extra_id: str
    emote_number: int = Field(ge=1)
    is_available: bool | None = None  # None flips the current value


class ToggleResultSchema(BaseModel):
    field: str
    value: bool


class UploadResultSchema(BaseModel):
    url: str


AdminRow = dict[str, Any]
