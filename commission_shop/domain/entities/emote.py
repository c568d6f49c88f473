from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from commission_shop.domain.entities.extra import Extra


@dataclass(frozen=True)
class EmoteConfig:
    id: str
    service_id: str
    emote_number: int
    custom_label: str | None = None
    description: str | None = None
    preview_image: str | None = None
    is_active: bool = True
    order_index: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> EmoteConfig:
        return cls(
            id=str(row["id"]),
            service_id=str(row["service_id"]),
            emote_number=int(row["emote_number"]),
            custom_label=row.get("custom_label"),
            description=row.get("description"),
            preview_image=row.get("preview_image"),
            is_active=bool(row.get("is_active", True)),
            order_index=int(row.get("order_index") or 0),
        )


@dataclass(frozen=True)
class EmoteExtraAvailability:
    id: str
    extra_id: str
    emote_number: int
    is_available: bool

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> EmoteExtraAvailability:
        return cls(
            id=str(row["id"]),
            extra_id=str(row["extra_id"]),
            emote_number=int(row["emote_number"]),
            is_available=bool(row["is_available"]),
        )


class EmoteAvailabilityResolver:
    """
    Answers per-unit questions for a multi-unit pack.

    The availability table is an override table: a missing (extra, unit) record
    means the extra is allowed on that unit. Only an explicit record with
    is_available=False suppresses it.
    """

    def __init__(
        self,
        configs: Iterable[EmoteConfig] = (),
        overrides: Iterable[EmoteExtraAvailability] = (),
    ) -> None:
        self._configs: dict[int, EmoteConfig] = {}
        for config in configs:
            self._configs.setdefault(config.emote_number, config)
        self._overrides: dict[tuple[str, int], bool] = {}
        for record in overrides:
            self._overrides.setdefault((record.extra_id, record.emote_number), record.is_available)

    @property
    def configs(self) -> list[EmoteConfig]:
        return [self._configs[n] for n in sorted(self._configs)]

    def is_available(self, extra_id: str, unit_number: int) -> bool:
        return self._overrides.get((extra_id, unit_number), True)

    def label(self, unit_number: int) -> str:
        config = self._configs.get(unit_number)
        if config and config.custom_label:
            return config.custom_label
        return f"Emote #{unit_number}"

    def description(self, unit_number: int) -> str | None:
        config = self._configs.get(unit_number)
        if config and config.description:
            return config.description
        return None

    def available_extras(self, extras: Iterable[Extra], unit_number: int) -> list[Extra]:
        return [extra for extra in extras if self.is_available(extra.id, unit_number)]
