from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Iterable
from urllib.parse import quote

from commission_shop.domain.entities.catalog_snapshot import CatalogSnapshot
from commission_shop.domain.entities.commission import SelectedCommission
from commission_shop.domain.entities.price import CENTS, Price, sum_prices

WHATSAPP_BASE_URL = "https://wa.me"

RULES_CONFIRMATION = "Confirmo que lei tus reglas (No pido NSFW/Robots/Gore/Realismo)."
PAYMENT_METHODS = "Pago via: BancoEstado / PayPal."


class Currency(str, Enum):
    CLP = "CLP"
    USD = "USD"


def format_price(price: Price, currency: Currency | str = Currency.CLP) -> str:
    if Currency(currency) is Currency.CLP:
        # es-CL groups thousands with dots
        return f"${price.clp:,} CLP".replace(",", ".")
    return f"${_format_usd(price.usd)} USD"


def _format_usd(value: Decimal) -> str:
    if value == value.to_integral_value():
        return str(int(value))
    return str(value.quantize(CENTS))


def build_commission_section(
    index: int,
    commission: SelectedCommission,
    snapshot: CatalogSnapshot,
    currency: Currency | str = Currency.CLP,
) -> list[str]:
    """
    Lines for one cart item, rendered from the breakdown priced when the item
    was added, so they always add up to the item's stored total. The snapshot
    only supplies the current service title.
    """
    service = snapshot.service(commission.service_id)
    title = service.title if service is not None else commission.service_title or commission.service_id

    lines = [f"{index}. {title}"]
    in_units = False
    for line in commission.lines:
        price = format_price(line.price, currency) if line.price is not None else ""
        if line.kind == "base":
            lines.append(f"   {line.label}: {price}")
        elif line.kind == "variant":
            lines.append(f"   Variante {line.label}: {price}")
        elif line.kind == "theme":
            lines.append(f"   Tema: {line.label}")
        elif line.kind == "custom_theme":
            lines.append(f"   Tema personalizado: {line.label}")
        elif line.kind == "extra":
            lines.append(f"   Extra {line.label}: {price}")
        elif line.kind == "unit":
            if not in_units:
                lines.append("   Personalizacion de emotes:")
                in_units = True
            lines.append(f"   {line.label}:")
        elif line.kind == "unit_extra":
            lines.append(f"     Extra {line.label}: {price}")
        elif line.kind == "unit_empty":
            lines.append(f"     {line.label}")
    return lines


def build_order_summary(
    commissions: Iterable[SelectedCommission],
    snapshot: CatalogSnapshot,
    currency: Currency | str = Currency.CLP,
    business_name: str = "k0kho",
) -> list[str]:
    """
    Full hand-off message, one line per entry. Depends only on its arguments,
    so calling it twice with the same cart and snapshot gives the same text.
    """
    items = list(commissions)
    intro = "las siguientes comisiones" if len(items) > 1 else "una comision"
    lines = [
        f"Hola {business_name}!",
        f"Vengo de tu web. Me interesa {intro}:",
        "",
    ]
    for index, commission in enumerate(items, start=1):
        lines.extend(build_commission_section(index, commission, snapshot, currency))
        lines.append("")

    grand_total = sum_prices([c.total for c in items]).rounded()
    lines.extend(
        [
            f"Total: {format_price(grand_total, currency)}",
            "",
            RULES_CONFIRMATION,
            PAYMENT_METHODS,
        ]
    )
    return lines


def build_whatsapp_link(phone: str, lines: list[str]) -> str:
    digits = "".join(ch for ch in phone if ch.isdigit())
    # same reserved set as JavaScript's encodeURIComponent
    text = quote("\n".join(lines), safe="!'()*")
    return f"{WHATSAPP_BASE_URL}/{digits}?text={text}"
