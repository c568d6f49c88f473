from __future__ import annotations

import logging
import secrets
import time
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any

from commission_shop.application.exceptions import BlobStoreError, RecordNotFoundError
from commission_shop.application.ports.blob_store import BlobStorePort
from commission_shop.application.ports.record_store import RecordStorePort
from commission_shop.application.use_cases.catalog_reader import ANNOUNCEMENT_KEY

ADMIN_TABLES = frozenset(
    {
        "services",
        "service_detail_levels",
        "service_variants",
        "extras",
        "commission_themes",
        "emote_config",
        "gallery",
        "testimonials",
        "rules",
    }
)

TOGGLE_FIELDS = frozenset({"is_available", "is_visible", "is_featured", "is_active", "is_allowed"})

IMAGE_CONTENT_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
    "image/gif": "gif",
}

_READ_ONLY_COLUMNS = ("id", "created_at", "updated_at")


class AdminCatalogUseCase:
    """Dashboard operations: row CRUD, flag toggles, emote overrides, images, announcement."""

    def __init__(self, store: RecordStorePort, blobs: BlobStorePort) -> None:
        self._store = store
        self._blobs = blobs
        self._logger = logging.getLogger(__name__)

    def list_rows(self, table: str) -> list[dict[str, Any]]:
        _check_table(table)
        order_by = "emote_number" if table == "emote_config" else "order_index"
        return self._store.query(table, order_by=order_by)

    def get_row(self, table: str, row_id: str) -> dict[str, Any]:
        _check_table(table)
        return self._get(table, row_id)

    def create(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        _check_table(table)
        data = _writable(row)
        if table != "emote_config" and data.get("order_index") is None:
            data["order_index"] = len(self._store.query(table))
        created = self._store.insert(table, data)
        self._logger.info("Row created", extra={"table": table, "row_id": created.get("id")})
        return created

    def update(self, table: str, row_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        _check_table(table)
        current = self._get(table, row_id)
        data = _writable(patch)
        data["updated_at"] = _now_iso()
        self._store.update(table, row_id, data)
        self._logger.info("Row updated", extra={"table": table, "row_id": row_id})
        return {**current, **data}

    def delete(self, table: str, row_id: str) -> None:
        _check_table(table)
        if table == "gallery":
            self.delete_gallery_item(row_id)
            return
        self._get(table, row_id)
        self._store.delete(table, row_id)
        self._logger.info("Row deleted", extra={"table": table, "row_id": row_id})

    def toggle_flag(self, table: str, row_id: str, field: str) -> bool:
        """Flip a boolean column and return its new value."""
        _check_table(table)
        if field not in TOGGLE_FIELDS:
            raise ValueError(f"Field cannot be toggled: {field}")
        current = self._get(table, row_id)
        new_value = not bool(current.get(field))
        self._store.update(table, row_id, {field: new_value, "updated_at": _now_iso()})
        return new_value

    def set_emote_extra_availability(self, extra_id: str, emote_number: int, is_available: bool) -> dict[str, Any]:
        """
        Upsert the override for (extra, unit). Rows are never deleted, even when
        set back to available.
        """
        if emote_number < 1:
            raise ValueError("emote_number must be >= 1")
        existing = self._store.query(
            "emote_extra_availability",
            filters={"extra_id": extra_id, "emote_number": emote_number},
        )
        if existing:
            row = existing[0]
            patch = {"is_available": is_available, "updated_at": _now_iso()}
            self._store.update("emote_extra_availability", str(row["id"]), patch)
            result = {**row, **patch}
        else:
            result = self._store.insert(
                "emote_extra_availability",
                {"extra_id": extra_id, "emote_number": emote_number, "is_available": is_available},
            )
        self._logger.info(
            "Emote extra availability set",
            extra={"extra_id": extra_id, "unit_number": emote_number, "reason": str(is_available)},
        )
        return result

    def toggle_emote_extra_availability(self, extra_id: str, emote_number: int) -> dict[str, Any]:
        existing = self._store.query(
            "emote_extra_availability",
            filters={"extra_id": extra_id, "emote_number": emote_number},
        )
        current = bool(existing[0]["is_available"]) if existing else True
        return self.set_emote_extra_availability(extra_id, emote_number, not current)

    def upload_image(self, data: bytes, filename: str, content_type: str | None) -> str:
        """Store an image under a fresh unique key and return its public URL."""
        if not data:
            raise ValueError("Empty upload")
        ext = _image_extension(filename, content_type)
        key = f"{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"
        self._blobs.upload(data, key, content_type)
        url = self._blobs.public_url(key)
        self._logger.info("Image uploaded", extra={"reason": key})
        return url

    def add_gallery_image(
        self,
        data: bytes,
        filename: str,
        content_type: str | None,
        title: str = "",
        description: str = "",
        service_type: str = "",
    ) -> dict[str, Any]:
        url = self.upload_image(data, filename, content_type)
        return self.create(
            "gallery",
            {
                "image_url": url,
                "title": title,
                "description": description,
                "service_type": service_type,
                "is_visible": True,
            },
        )

    def set_row_image(
        self,
        table: str,
        row_id: str,
        column: str,
        data: bytes,
        filename: str,
        content_type: str | None,
    ) -> dict[str, Any]:
        """Upload an image and store its URL in `column` of an existing row."""
        _check_table(table)
        self._get(table, row_id)
        url = self.upload_image(data, filename, content_type)
        return self.update(table, row_id, {column: url})

    def delete_gallery_item(self, row_id: str) -> None:
        row = self._get("gallery", row_id)
        key = self._blobs.key_from_url(row.get("image_url") or "")
        if key:
            try:
                self._blobs.delete(key)
            except BlobStoreError as e:
                # the row still goes; an orphaned blob is harmless
                self._logger.warning("Image delete failed", extra={"row_id": row_id, "error": str(e)})
        self._store.delete("gallery", row_id)
        self._logger.info("Row deleted", extra={"table": "gallery", "row_id": row_id})

    def get_announcement(self) -> dict[str, Any] | None:
        rows = self._store.query("site_settings", filters={"key": ANNOUNCEMENT_KEY})
        return rows[0] if rows else None

    def save_announcement(self, message: str, is_active: bool) -> dict[str, Any]:
        existing = self.get_announcement()
        if existing:
            patch = {"value": message, "is_active": is_active, "updated_at": _now_iso()}
            self._store.update("site_settings", str(existing["id"]), patch)
            return {**existing, **patch}
        return self._store.insert(
            "site_settings",
            {"key": ANNOUNCEMENT_KEY, "value": message, "is_active": is_active},
        )

    def _get(self, table: str, row_id: str) -> dict[str, Any]:
        rows = self._store.query(table, filters={"id": row_id})
        if not rows:
            raise RecordNotFoundError(f"{table}/{row_id} not found")
        return rows[0]


def _check_table(table: str) -> None:
    if table not in ADMIN_TABLES:
        raise ValueError(f"Unknown table: {table}")


def _writable(row: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in row.items() if k not in _READ_ONLY_COLUMNS}


def _image_extension(filename: str, content_type: str | None) -> str:
    if content_type:
        ext = IMAGE_CONTENT_TYPES.get(content_type.split(";")[0].strip().lower())
        if ext is None:
            raise ValueError(f"Unsupported image type: {content_type}")
        return ext
    suffix = PurePosixPath(filename or "").suffix.lstrip(".").lower()
    if suffix == "jpeg":
        suffix = "jpg"
    if suffix not in IMAGE_CONTENT_TYPES.values():
        raise ValueError(f"Unsupported image file: {filename}")
    return suffix


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
