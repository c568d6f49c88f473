from __future__ import annotations

import itertools
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass, replace
from typing import Iterator

from commission_shop.application.exceptions import EmptyCartError, RecordStoreError, UnknownServiceError
from commission_shop.application.use_cases.catalog_reader import CatalogReader
from commission_shop.application.use_cases.compose_commission import CompositionEngine
from commission_shop.application.utils.order_summary import (
    Currency,
    build_order_summary,
    build_whatsapp_link,
)
from commission_shop.domain.entities.commission import CommissionRequest, SelectedCommission
from commission_shop.domain.entities.price import Price, sum_prices


class CartStore:
    """Ordered, in-memory commissions of one browsing session."""

    def __init__(self) -> None:
        self._items: list[SelectedCommission] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, commission: SelectedCommission) -> SelectedCommission:
        with self._lock:
            item = replace(commission, id=str(next(self._ids)))
            self._items.append(item)
        return item

    def remove(self, local_id: str) -> bool:
        """Remove by local id. Unknown ids are ignored; returns whether anything was removed."""
        with self._lock:
            for index, item in enumerate(self._items):
                if item.id == local_id:
                    del self._items[index]
                    return True
        return False

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def total(self) -> Price:
        # recomputed on every call; carts hold a handful of items
        return sum_prices([c.total for c in self.items()]).rounded()

    def items(self) -> list[SelectedCommission]:
        with self._lock:
            return list(self._items)

    def __iter__(self) -> Iterator[SelectedCommission]:
        return iter(self.items())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class CartRegistry:
    """
    Carts by session id. Only sessions holding at least one commission are kept,
    and at most `max_sessions` of them; the least recently written cart goes first.
    """

    def __init__(self, max_sessions: int = 1000) -> None:
        self._carts: OrderedDict[str, CartStore] = OrderedDict()
        self._max_sessions = max_sessions
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def get(self, session_id: str) -> CartStore:
        """The session's cart, or a detached empty one that is not kept."""
        with self._lock:
            cart = self._carts.get(session_id)
        return cart if cart is not None else CartStore()

    def add(self, session_id: str, commission: SelectedCommission) -> SelectedCommission:
        with self._lock:
            cart = self._carts.get(session_id)
            if cart is None:
                cart = CartStore()
                self._carts[session_id] = cart
            self._carts.move_to_end(session_id)
            item = cart.add(commission)
            while len(self._carts) > self._max_sessions:
                evicted, _ = self._carts.popitem(last=False)
                self._logger.info("Idle cart evicted", extra={"session_id": evicted})
        return item

    def remove(self, session_id: str, local_id: str) -> bool:
        with self._lock:
            cart = self._carts.get(session_id)
            if cart is None:
                return False
            removed = cart.remove(local_id)
            if not len(cart):
                del self._carts[session_id]
        return removed

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._carts.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._carts)


@dataclass(frozen=True)
class HandoffResult:
    link: str
    message: str
    commission_count: int
    total: Price


class CartUseCase:
    def __init__(
        self,
        reader: CatalogReader,
        carts: CartRegistry,
        whatsapp_phone: str,
        business_name: str,
    ) -> None:
        self._reader = reader
        self._carts = carts
        self._whatsapp_phone = whatsapp_phone
        self._business_name = business_name
        self._logger = logging.getLogger(__name__)

    def cart(self, session_id: str) -> CartStore:
        return self._carts.get(session_id)

    def quote(self, request: CommissionRequest) -> SelectedCommission:
        """Compose against a freshly read catalog, without touching any cart."""
        snapshot = self._reader.load_snapshot()
        errors = self._reader.catalog_errors()
        if snapshot.service(request.service_id) is None and "services" in errors:
            raise RecordStoreError(errors["services"])
        engine = CompositionEngine(snapshot)
        return engine.compose(request, snapshot.resolver_for(request.service_id))

    def add(self, session_id: str, request: CommissionRequest) -> SelectedCommission:
        try:
            commission = self.quote(request)
        except UnknownServiceError:
            self._logger.warning(
                "Commission rejected", extra={"session_id": session_id, "service_id": request.service_id}
            )
            raise
        item = self._carts.add(session_id, commission)
        self._logger.info(
            "Commission added",
            extra={"session_id": session_id, "local_id": item.id, "service_id": item.service_id},
        )
        return item

    def remove(self, session_id: str, local_id: str) -> bool:
        removed = self._carts.remove(session_id, local_id)
        if removed:
            self._logger.info("Commission removed", extra={"session_id": session_id, "local_id": local_id})
        return removed

    def clear(self, session_id: str) -> None:
        self._carts.discard(session_id)

    def summary(self, session_id: str, currency: Currency | str = Currency.CLP) -> list[str]:
        return self._summary(self.cart(session_id).items(), currency)

    def handoff(self, session_id: str, currency: Currency | str = Currency.CLP) -> HandoffResult:
        """Build the WhatsApp link for the current cart, then remove the handed-off commissions."""
        items = self.cart(session_id).items()
        if not items:
            raise EmptyCartError("Cart is empty")
        lines = self._summary(items, currency)
        errors = self._reader.catalog_errors()
        if errors:
            # keep the cart so the visitor can retry once the store is back
            raise RecordStoreError("; ".join(f"{table}: {error}" for table, error in errors.items()))
        result = HandoffResult(
            link=build_whatsapp_link(self._whatsapp_phone, lines),
            message="\n".join(lines),
            commission_count=len(items),
            total=sum_prices([c.total for c in items]).rounded(),
        )
        # only what went into the message; a commission added meanwhile stays
        for item in items:
            self._carts.remove(session_id, item.id)
        self._logger.info(
            "Cart handed off",
            extra={"session_id": session_id, "reason": f"{result.commission_count} commissions"},
        )
        return result

    def _summary(self, items: list[SelectedCommission], currency: Currency | str) -> list[str]:
        snapshot = self._reader.load_snapshot()
        return build_order_summary(items, snapshot, currency, self._business_name)
