"""
Tests for the memory and JSON-file record stores.
"""

from __future__ import annotations

import json
import tempfile

import pytest

from commission_shop.application.exceptions import RecordStoreError
from commission_shop.infrastructure.store.json_record_store import JsonRecordStore
from commission_shop.infrastructure.store.memory_record_store import MemoryRecordStore


def _exercise(store) -> None:
    a = store.insert("extras", {"title": "A", "order_index": 2, "is_available": True})
    b = store.insert("extras", {"title": "B", "order_index": 1, "is_available": False})
    store.insert("extras", {"title": "C", "is_available": True})

    assert a["id"] and a["id"] != b["id"]
    assert "created_at" in a

    assert [r["title"] for r in store.query("extras", order_by="order_index")] == ["B", "A", "C"]
    assert [r["title"] for r in store.query("extras", order_by="order_index", descending=True)] == ["A", "B", "C"]
    assert [r["title"] for r in store.query("extras", filters={"is_available": True})] == ["A", "C"]

    store.update("extras", b["id"], {"is_available": True, "id": "hijack"})
    assert store.query("extras", filters={"id": b["id"]})[0]["is_available"] is True

    store.delete("extras", a["id"])
    store.delete("extras", "missing")
    assert sorted(r["title"] for r in store.query("extras")) == ["B", "C"]
    assert store.query("unknown_table") == []


def test_memory_store_crud():
    _exercise(MemoryRecordStore())


def test_memory_store_returns_copies():
    store = MemoryRecordStore({"rules": [{"id": "r1", "text": "Fanart"}]})
    row = store.query("rules")[0]
    row["text"] = "changed"

    assert store.query("rules")[0]["text"] == "Fanart"


def test_json_store_crud():
    with tempfile.TemporaryDirectory() as tmpdir:
        _exercise(JsonRecordStore(data_dir=tmpdir))


def test_json_store_persists_across_instances():
    """Rows written by one store instance are read back by a new one."""
    with tempfile.TemporaryDirectory() as tmpdir:
        first = JsonRecordStore(data_dir=tmpdir, seed={"rules": [{"id": "r1", "text": "Fanart"}]})
        first.insert("rules", {"id": "r2", "text": "NSFW"})

        second = JsonRecordStore(data_dir=tmpdir, seed={"rules": [{"id": "other", "text": "ignored"}]})

        assert [r["id"] for r in second.query("rules")] == ["r1", "r2"]


def test_json_store_corrupt_file_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonRecordStore(data_dir=tmpdir)
        with open(f"{tmpdir}/services.json", "w", encoding="utf-8") as f:
            f.write("{not json")

        with pytest.raises(RecordStoreError):
            store.query("services")


def test_json_store_file_format():
    with tempfile.TemporaryDirectory() as tmpdir:
        JsonRecordStore(data_dir=tmpdir).insert("gallery", {"image_url": "x"})

        with open(f"{tmpdir}/gallery.json", encoding="utf-8") as f:
            data = json.load(f)

        assert data["table"] == "gallery"
        assert data["rows"][0]["image_url"] == "x"


def test_json_store_rejects_path_like_table_names():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(RecordStoreError):
            JsonRecordStore(data_dir=tmpdir).query("../secrets")
