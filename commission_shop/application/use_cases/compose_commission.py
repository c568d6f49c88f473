from __future__ import annotations

import logging
from typing import Iterable

from commission_shop.application.exceptions import UnknownServiceError
from commission_shop.domain.entities.catalog_snapshot import CatalogSnapshot
from commission_shop.domain.entities.commission import (
    CommissionRequest,
    CompositionLine,
    FlatSelection,
    PackSelection,
    SelectedCommission,
    UnitExtras,
)
from commission_shop.domain.entities.emote import EmoteAvailabilityResolver
from commission_shop.domain.entities.extra import Extra
from commission_shop.domain.entities.price import Price
from commission_shop.domain.entities.service import Service
from commission_shop.domain.entities.service_variant import ServiceVariant

NO_EXTRAS_LABEL = "Sin extras"


class CompositionEngine:
    """
    Prices one commission configuration against a catalog snapshot.

    Order of composition:
    1. base = detail level price if one is selected and found, else the service "from" price
    2. + variant price if selected and found
    3. flat mode: + each extra that exists and is offered for the service
    4. pack mode: + each unit extra that exists, is offered, and is available for that unit
    5. theme / custom theme never change the price

    References that cannot be resolved are dropped from both price and lines.
    Only an unknown service id is an error.
    """

    def __init__(self, snapshot: CatalogSnapshot) -> None:
        self._snapshot = snapshot
        self._logger = logging.getLogger(__name__)

    def compose(
        self,
        request: CommissionRequest,
        resolver: EmoteAvailabilityResolver | None = None,
    ) -> SelectedCommission:
        service = self._snapshot.service(request.service_id)
        if service is None:
            raise UnknownServiceError(f"Unknown service: {request.service_id}")

        lines: list[CompositionLine] = []

        level = self._snapshot.detail_level(service.id, request.detail_level_name)
        if level is not None:
            total = level.price
            lines.append(CompositionLine(kind="base", label=level.level_label, price=level.price))
        else:
            if request.detail_level_name:
                self._drop("detail_level", service.id, request.detail_level_name)
            total = service.base_price
            lines.append(CompositionLine(kind="base", label=service.title, price=service.base_price))

        variant = self._snapshot.variant(service.id, request.variant_id)
        if variant is not None:
            total = total + variant.price
            lines.append(CompositionLine(kind="variant", label=variant.variant_label, price=variant.price))
        elif request.variant_id:
            self._drop("variant", service.id, request.variant_id)

        theme = self._snapshot.theme(request.theme_id)
        custom_theme = (request.custom_theme or "").strip() or None
        if theme is not None:
            custom_theme = None
            lines.append(CompositionLine(kind="theme", label=theme.name))
        elif custom_theme:
            lines.append(CompositionLine(kind="custom_theme", label=custom_theme))

        extra_ids: tuple[str, ...] = ()
        units: tuple[UnitExtras, ...] | None = None
        if service.is_multi_unit_pack:
            requested_units = request.items.units if isinstance(request.items, PackSelection) else ()
            units, unit_lines, units_total = self._compose_units(
                service,
                variant,
                requested_units,
                resolver or self._snapshot.resolver_for(service.id),
            )
            total = total + units_total
            lines.extend(unit_lines)
        else:
            requested_ids = request.items.extra_ids if isinstance(request.items, FlatSelection) else ()
            accepted: list[str] = []
            for extra_id in _unique(requested_ids):
                extra = self._offered_extra(service, extra_id)
                if extra is None:
                    continue
                accepted.append(extra.id)
                total = total + extra.price
                lines.append(CompositionLine(kind="extra", label=extra.title, price=extra.price))
            extra_ids = tuple(accepted)

        return SelectedCommission(
            service_id=service.id,
            service_title=service.title,
            total=total.rounded(),
            detail_level_name=level.level_name if level else None,
            variant_id=variant.id if variant else None,
            extra_ids=extra_ids,
            units=units,
            theme_id=theme.id if theme else None,
            custom_theme=custom_theme,
            lines=tuple(lines),
        )

    def _compose_units(
        self,
        service: Service,
        variant: ServiceVariant | None,
        requested: Iterable[UnitExtras],
        resolver: EmoteAvailabilityResolver,
    ) -> tuple[tuple[UnitExtras, ...], list[CompositionLine], Price]:
        count = self._snapshot.unit_count(service, variant)
        requested_by_unit: dict[int, tuple[str, ...]] = {}
        for unit in requested:
            if not 1 <= unit.unit_number <= count:
                self._drop("unit", service.id, str(unit.unit_number))
                continue
            requested_by_unit.setdefault(unit.unit_number, unit.extra_ids)

        units: list[UnitExtras] = []
        lines: list[CompositionLine] = []
        total = Price.zero()
        for number in range(1, count + 1):
            lines.append(CompositionLine(kind="unit", label=resolver.label(number), unit_number=number))
            accepted: list[str] = []
            for extra_id in _unique(requested_by_unit.get(number, ())):
                extra = self._offered_extra(service, extra_id)
                if extra is None:
                    continue
                # re-checked here: availability may have changed since the dialog was opened
                if not resolver.is_available(extra.id, number):
                    self._logger.info(
                        "Extra unavailable for unit",
                        extra={"service_id": service.id, "extra_id": extra.id, "unit_number": number},
                    )
                    continue
                accepted.append(extra.id)
                total = total + extra.price
                lines.append(
                    CompositionLine(kind="unit_extra", label=extra.title, price=extra.price, unit_number=number)
                )
            if not accepted:
                lines.append(CompositionLine(kind="unit_empty", label=NO_EXTRAS_LABEL, unit_number=number))
            units.append(UnitExtras(unit_number=number, extra_ids=tuple(accepted)))
        return tuple(units), lines, total

    def _offered_extra(self, service: Service, extra_id: str) -> Extra | None:
        extra = self._snapshot.extra(extra_id)
        if extra is None:
            self._drop("extra", service.id, extra_id)
            return None
        if not extra.is_offered_for(service.id):
            self._drop("extra", service.id, extra_id, reason="not_offered")
            return None
        return extra

    def _drop(self, kind: str, service_id: str, ref: str, reason: str = "missing") -> None:
        self._logger.info(
            "Dropped %s reference %s",
            kind,
            ref,
            extra={"service_id": service_id, "reason": reason},
        )


def _unique(ids: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in ids:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
