from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

CENTS = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() first so 0.1 stays 0.1 instead of its binary expansion
    return Decimal(str(value))


@dataclass(frozen=True)
class Price:
    """A pair of amounts: CLP in whole pesos, USD as an exact decimal."""

    clp: int = 0
    usd: Decimal = Decimal("0")

    @classmethod
    def of(cls, clp: Any, usd: Any) -> Price:
        return cls(clp=int(clp or 0), usd=to_decimal(usd))

    @classmethod
    def zero(cls) -> Price:
        return cls()

    def __add__(self, other: Price) -> Price:
        if not isinstance(other, Price):
            return NotImplemented
        return Price(clp=self.clp + other.clp, usd=self.usd + other.usd)

    def rounded(self) -> Price:
        """Quantize USD to cents. Only applied to final totals."""
        return Price(clp=self.clp, usd=self.usd.quantize(CENTS, rounding=ROUND_HALF_UP))


def sum_prices(prices: list[Price] | tuple[Price, ...]) -> Price:
    total = Price.zero()
    for price in prices:
        total = total + price
    return total
