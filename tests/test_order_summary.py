"""
Tests for the hand-off message text and the WhatsApp deep link.
"""

from __future__ import annotations

from decimal import Decimal
from urllib.parse import unquote

from commission_shop.application.use_cases.compose_commission import CompositionEngine
from commission_shop.application.utils.order_summary import (
    PAYMENT_METHODS,
    RULES_CONFIRMATION,
    Currency,
    build_order_summary,
    build_whatsapp_link,
    format_price,
)
from commission_shop.domain.entities.commission import (
    CommissionRequest,
    CompositionLine,
    FlatSelection,
    PackSelection,
    SelectedCommission,
    UnitExtras,
)
from commission_shop.domain.entities.price import Price


def test_format_price():
    assert format_price(Price(12000, Decimal("15")), Currency.CLP) == "$12.000 CLP"
    assert format_price(Price(1500000, Decimal("0")), "CLP") == "$1.500.000 CLP"
    assert format_price(Price(0, Decimal("15.00")), Currency.USD) == "$15 USD"
    assert format_price(Price(0, Decimal("15.5")), Currency.USD) == "$15.50 USD"


def test_flat_commission_summary(snapshot):
    engine = CompositionEngine(snapshot)
    commission = engine.compose(
        CommissionRequest(
            service_id="icon",
            detail_level_name="premium",
            variant_id="icon-frame",
            items=FlatSelection(("background",)),
        )
    )

    lines = build_order_summary([commission], snapshot, Currency.CLP, "k0kho")

    assert lines == [
        "Hola k0kho!",
        "Vengo de tu web. Me interesa una comision:",
        "",
        "1. Icon",
        "   Premium: $30.000 CLP",
        "   Variante Marco de perfil: $5.000 CLP",
        "   Extra Fondo: $2.000 CLP",
        "",
        "Total: $37.000 CLP",
        "",
        RULES_CONFIRMATION,
        PAYMENT_METHODS,
    ]


def test_pack_summary_lists_every_unit(snapshot):
    """Units without extras are still listed, with a "Sin extras" line."""
    commission = CompositionEngine(snapshot).compose(
        CommissionRequest(
            service_id="pack-emotes",
            detail_level_name="simple",
            custom_theme="Piratas",
            items=PackSelection(units=(UnitExtras(1, ("sparkle",)),)),
        )
    )

    lines = build_order_summary([commission], snapshot, Currency.USD)

    assert "   Tema personalizado: Piratas" in lines
    assert "   Personalizacion de emotes:" in lines
    start = lines.index("   Saludo:")
    assert lines[start + 1] == "     Extra Brillos animados: $2 USD"
    assert lines[start + 2] == "   Corazon:"
    assert lines[start + 3] == "     Sin extras"
    assert "   Emote #5:" in lines
    assert "Total: $32 USD" in lines


def test_summary_plural_intro_and_grand_total(snapshot):
    engine = CompositionEngine(snapshot)
    items = [
        engine.compose(CommissionRequest(service_id="chibi")),
        engine.compose(CommissionRequest(service_id="chibi", theme_id="halloween")),
    ]

    lines = build_order_summary(items, snapshot)

    assert lines[1] == "Vengo de tu web. Me interesa las siguientes comisiones:"
    assert "2. Chibi" in lines
    assert "   Tema: Halloween" in lines
    assert "Total: $20.000 CLP" in lines


def test_summary_keeps_items_whose_service_is_gone(snapshot):
    """A stale item is still listed from its stored breakdown and title."""
    stale = SelectedCommission(
        service_id="retired",
        service_title="Retrato",
        total=Price(5000, Decimal("6")),
        lines=(CompositionLine(kind="base", label="Retrato", price=Price(5000, Decimal("6"))),),
    )

    lines = build_order_summary([stale], snapshot)

    assert lines[3:5] == ["1. Retrato", "   Retrato: $5.000 CLP"]
    assert "Total: $5.000 CLP" in lines


def test_whatsapp_link_encoding():
    link = build_whatsapp_link("+56 9 7642 0228", ["Hola k0kho!", "1. Icon & más"])

    assert link.startswith("https://wa.me/56976420228?text=")
    text = link.split("?text=", 1)[1]
    assert "%0A" in text
    assert "%20" in text
    assert "%26" in text
    assert "!" in text
    assert unquote(text) == "Hola k0kho!\n1. Icon & más"
