"""
Tests for the per-(extra, unit) availability overrides of multi-unit packs.
"""

from __future__ import annotations

from commission_shop.domain.entities.emote import EmoteAvailabilityResolver, EmoteConfig, EmoteExtraAvailability
from commission_shop.domain.entities.extra import Extra


def _override(extra_id: str, unit: int, available: bool) -> EmoteExtraAvailability:
    return EmoteExtraAvailability(id=f"{extra_id}-{unit}", extra_id=extra_id, emote_number=unit, is_available=available)


def test_missing_override_means_available():
    """With no rows at all, every extra is allowed on every unit."""
    resolver = EmoteAvailabilityResolver()

    for unit in range(1, 11):
        assert resolver.is_available("background", unit) is True


def test_explicit_false_suppresses_only_that_pair():
    """A disabled (extra, unit) row does not leak to other units or other extras."""
    resolver = EmoteAvailabilityResolver(overrides=[_override("sparkle", 3, False)])

    assert resolver.is_available("sparkle", 3) is False
    assert resolver.is_available("sparkle", 2) is True
    assert resolver.is_available("sparkle", 4) is True
    assert resolver.is_available("background", 3) is True


def test_explicit_true_row_behaves_like_missing_row():
    """A re-enabled pair reads exactly like a pair without any row."""
    resolver = EmoteAvailabilityResolver(overrides=[_override("sparkle", 3, True)])

    assert resolver.is_available("sparkle", 3) is True


def test_labels_fall_back_to_unit_number():
    """Units without a config row get a generated label and no description."""
    resolver = EmoteAvailabilityResolver(
        configs=[
            EmoteConfig(id="c1", service_id="pack", emote_number=1, custom_label="Saludo", description="Hola"),
            EmoteConfig(id="c2", service_id="pack", emote_number=2, custom_label=""),
        ]
    )

    assert resolver.label(1) == "Saludo"
    assert resolver.description(1) == "Hola"
    assert resolver.label(2) == "Emote #2"
    assert resolver.label(5) == "Emote #5"
    assert resolver.description(5) is None
    assert [c.emote_number for c in resolver.configs] == [1, 2]


def test_available_extras_filters_per_unit():
    """available_extras keeps catalog order and drops only the disabled pairs."""
    extras = [
        Extra(id="background", title="Fondo", price_clp=2000, price_usd=3),
        Extra(id="sparkle", title="Brillos", price_clp=1500, price_usd=2),
    ]
    resolver = EmoteAvailabilityResolver(overrides=[_override("sparkle", 3, False)])

    assert [e.id for e in resolver.available_extras(extras, 3)] == ["background"]
    assert [e.id for e in resolver.available_extras(extras, 1)] == ["background", "sparkle"]


def test_seeded_snapshot_resolver(snapshot):
    """The demo catalog disables sparkle on the third emote of the pack."""
    resolver = snapshot.resolver_for("pack-emotes")

    assert resolver.label(1) == "Saludo"
    assert resolver.is_available("sparkle", 3) is False
    assert resolver.is_available("sparkle", 1) is True
