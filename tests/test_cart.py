"""
Tests for the session cart and the WhatsApp hand-off.
"""

from __future__ import annotations

import threading
from decimal import Decimal
from typing import Any

import pytest

from commission_shop.application.exceptions import EmptyCartError, RecordStoreError, UnknownServiceError
from commission_shop.application.use_cases.cart import CartRegistry, CartStore, CartUseCase
from commission_shop.application.use_cases.catalog_reader import CatalogReader
from commission_shop.domain.entities.commission import CommissionRequest, FlatSelection, SelectedCommission
from commission_shop.domain.entities.price import Price
from commission_shop.infrastructure.store.memory_record_store import MemoryRecordStore


class FlakyRecordStore(MemoryRecordStore):
    """Memory store whose reads can be switched off per table."""

    def __init__(self, tables):
        super().__init__(tables)
        self.failing: set[str] = set()

    def query(self, table: str, filters: dict[str, Any] | None = None, order_by=None, descending=False):
        if table in self.failing:
            raise RecordStoreError(f"{table} unavailable")
        return super().query(table, filters, order_by, descending)


def _use_case(store) -> CartUseCase:
    return CartUseCase(
        reader=CatalogReader(store),
        carts=CartRegistry(),
        whatsapp_phone="+56 9 7642 0228",
        business_name="k0kho",
    )


def test_cart_store_assigns_ids_and_totals():
    """Ids are unique per cart and the total is the sum of item totals."""
    cart = CartStore()
    first = cart.add(SelectedCommission(service_id="a", total=Price(1000, Decimal("1.50"))))
    second = cart.add(SelectedCommission(service_id="a", total=Price(2000, Decimal("2.25"))))

    assert first.id != second.id
    assert len(cart) == 2
    assert cart.total() == Price(3000, Decimal("3.75"))

    assert cart.remove(first.id) is True
    assert cart.remove("does-not-exist") is False
    assert [c.id for c in cart] == [second.id]
    assert cart.total() == Price(2000, Decimal("2.25"))

    cart.clear()
    assert len(cart) == 0
    assert cart.total() == Price.zero()


def test_removed_id_is_not_reused():
    cart = CartStore()
    first = cart.add(SelectedCommission(service_id="a", total=Price(1000)))
    cart.remove(first.id)
    again = cart.add(SelectedCommission(service_id="a", total=Price(1000)))

    assert again.id != first.id


def test_registry_keeps_sessions_apart():
    registry = CartRegistry()
    registry.add("s1", SelectedCommission(service_id="a", total=Price(1000)))

    assert len(registry.get("s1")) == 1
    assert len(registry.get("s2")) == 0
    registry.discard("s1")
    assert len(registry.get("s1")) == 0


def test_reads_do_not_create_carts():
    """Looking at unknown sessions leaves nothing behind."""
    registry = CartRegistry()
    for i in range(100):
        registry.get(f"anon-{i}")
    registry.remove("anon-0", "1")

    assert len(registry) == 0


def test_emptied_cart_is_dropped():
    registry = CartRegistry()
    item = registry.add("s1", SelectedCommission(service_id="a", total=Price(1000)))

    registry.remove("s1", item.id)

    assert len(registry) == 0


def test_least_recently_written_cart_is_evicted():
    registry = CartRegistry(max_sessions=2)
    registry.add("s1", SelectedCommission(service_id="a", total=Price(1000)))
    registry.add("s2", SelectedCommission(service_id="a", total=Price(1000)))
    registry.add("s1", SelectedCommission(service_id="a", total=Price(1000)))
    registry.add("s3", SelectedCommission(service_id="a", total=Price(1000)))

    assert len(registry) == 2
    assert len(registry.get("s1")) == 2
    assert len(registry.get("s2")) == 0
    assert len(registry.get("s3")) == 1


def test_removing_same_id_twice_is_a_no_op(store):
    """The second removal of an id changes nothing."""
    uc = _use_case(store)
    first = uc.add("s1", CommissionRequest(service_id="chibi"))
    second = uc.add("s1", CommissionRequest(service_id="icon"))

    assert uc.remove("s1", first.id) is True
    before = (uc.cart("s1").items(), uc.cart("s1").total())
    assert uc.remove("s1", first.id) is False

    assert (uc.cart("s1").items(), uc.cart("s1").total()) == before
    assert [c.id for c in uc.cart("s1")] == [second.id]


def test_concurrent_adds_and_removes_lose_nothing():
    """Adds racing removals in one session are all kept."""
    registry = CartRegistry()
    kept: list[str] = []
    kept_lock = threading.Lock()

    def churn() -> None:
        for _ in range(200):
            item = registry.add("s1", SelectedCommission(service_id="a", total=Price(1000)))
            registry.remove("s1", item.id)

    def keep() -> None:
        for _ in range(200):
            item = registry.add("s1", SelectedCommission(service_id="b", total=Price(1000)))
            with kept_lock:
                kept.append(item.id)

    threads = [threading.Thread(target=churn) for _ in range(4)] + [threading.Thread(target=keep) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(c.id for c in registry.get("s1")) == sorted(kept)
    assert registry.get("s1").total() == Price(400 * 1000)


def test_add_prices_against_catalog(store):
    uc = _use_case(store)
    item = uc.add("s1", CommissionRequest(service_id="icon", detail_level_name="simple"))

    assert item.id
    assert item.total == Price(15000, Decimal("18.00"))
    assert uc.cart("s1").items() == [item]


def test_add_unknown_service_leaves_cart_untouched(store):
    uc = _use_case(store)

    with pytest.raises(UnknownServiceError):
        uc.add("s1", CommissionRequest(service_id="nope"))
    assert len(uc.cart("s1")) == 0


def test_add_with_services_unreachable_is_a_store_error(store):
    """An outage is not reported as an unknown service."""
    flaky = FlakyRecordStore({})
    flaky.failing.add("services")

    with pytest.raises(RecordStoreError):
        _use_case(flaky).add("s1", CommissionRequest(service_id="icon"))


def test_handoff_builds_link_and_clears_cart(store):
    """The link carries the summary; the cart is emptied afterwards."""
    uc = _use_case(store)
    uc.add("s1", CommissionRequest(service_id="chibi", items=FlatSelection(("background",))))
    uc.add("s1", CommissionRequest(service_id="icon", detail_level_name="premium"))

    result = uc.handoff("s1")

    assert result.link.startswith("https://wa.me/56976420228?text=")
    assert result.commission_count == 2
    assert result.total == Price(42000, Decimal("50.00"))
    assert "Total: $42.000 CLP" in result.message
    assert len(uc.cart("s1")) == 0


def test_handoff_empty_cart_raises(store):
    with pytest.raises(EmptyCartError):
        _use_case(store).handoff("s1")


def test_handoff_keeps_cart_when_catalog_read_fails(store):
    """Nothing is lost if the summary could not be built from a full catalog."""
    flaky = FlakyRecordStore({"services": store.query("services"), "extras": store.query("extras")})
    uc = _use_case(flaky)
    uc.add("s1", CommissionRequest(service_id="chibi"))

    flaky.failing.add("extras")
    with pytest.raises(RecordStoreError):
        uc.handoff("s1")
    assert len(uc.cart("s1")) == 1

    flaky.failing.clear()
    assert uc.handoff("s1").commission_count == 1


def test_summary_is_repeatable(store):
    """Building the summary twice gives the same lines and leaves the cart alone."""
    uc = _use_case(store)
    uc.add("s1", CommissionRequest(service_id="chibi", theme_id="navidad"))

    assert uc.summary("s1") == uc.summary("s1")
    assert len(uc.cart("s1")) == 1


def test_summary_uses_prices_from_when_commission_was_added(store):
    """A catalog price change after add does not make the message contradict its total."""
    uc = _use_case(store)
    uc.add("s1", CommissionRequest(service_id="chibi", items=FlatSelection(("background",))))

    store.update("services", "chibi", {"price_clp_min": 99000, "title": "Chibi Deluxe"})
    store.update("extras", "background", {"is_available": False})
    lines = uc.summary("s1")

    assert "1. Chibi Deluxe" in lines
    assert "   Chibi: $10.000 CLP" in lines
    assert "   Extra Fondo: $2.000 CLP" in lines
    assert "Total: $12.000 CLP" in lines
    assert not any("99.000" in line for line in lines)


def test_handoff_drops_the_session(store):
    carts = CartRegistry()
    uc = CartUseCase(reader=CatalogReader(store), carts=carts, whatsapp_phone="1", business_name="k0kho")
    uc.add("s1", CommissionRequest(service_id="chibi"))

    uc.handoff("s1")
    uc.clear("s2")
    uc.summary("s3")

    assert len(carts) == 0
