from __future__ import annotations

import copy

import pytest

from commission_shop.application.use_cases.catalog_reader import CatalogReader
from commission_shop.infrastructure.store.memory_record_store import MemoryRecordStore
from commission_shop.infrastructure.store.seed_data import CATALOG_SEED


@pytest.fixture
def store() -> MemoryRecordStore:
    return MemoryRecordStore(copy.deepcopy(CATALOG_SEED))


@pytest.fixture
def snapshot(store):
    return CatalogReader(store).load_snapshot()
