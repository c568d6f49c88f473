"""
Tests for the hosted-backend adapters, driven through httpx.MockTransport.
"""

from __future__ import annotations

import json

import httpx
import pytest

from commission_shop.application.exceptions import BlobStoreError, RecordStoreError
from commission_shop.infrastructure.auth.static_token_auth import StaticTokenAdminAuth
from commission_shop.infrastructure.auth.supabase_auth import SupabaseAdminAuth
from commission_shop.infrastructure.storage.supabase_blob_store import SupabaseBlobStore
from commission_shop.infrastructure.store.supabase_record_store import SupabaseRecordStore, build_query_params

BASE_URL = "https://project.supabase.co"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_build_query_params():
    params = build_query_params({"is_available": True, "service_id": "icon", "gallery_item_id": None}, "order_index")

    assert params == {
        "select": "*",
        "is_available": "eq.true",
        "service_id": "eq.icon",
        "gallery_item_id": "is.null",
        "order": "order_index.asc",
    }
    assert build_query_params(None, "order_index", descending=True)["order"] == "order_index.desc"


def test_record_store_query_and_insert():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.method == "GET":
            return httpx.Response(200, json=[{"id": "chibi"}])
        return httpx.Response(201, json=[{"id": "new", **json.loads(request.content)}])

    store = SupabaseRecordStore(BASE_URL, "anon-key", client=_client(handler))

    assert store.query("services", filters={"is_available": True}, order_by="order_index") == [{"id": "chibi"}]
    created = store.insert("rules", {"text": "Fanart"})

    assert created == {"id": "new", "text": "Fanart"}
    get, post = seen
    assert get.url.path == "/rest/v1/services"
    assert get.url.params["is_available"] == "eq.true"
    assert get.headers["apikey"] == "anon-key"
    assert get.headers["Authorization"] == "Bearer anon-key"
    assert post.headers["Prefer"] == "return=representation"


def test_record_store_update_and_delete_target_row_id():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    store = SupabaseRecordStore(BASE_URL, "key", client=_client(handler))
    store.update("extras", "e1", {"is_available": False})
    store.delete("extras", "e1")

    assert [r.method for r in seen] == ["PATCH", "DELETE"]
    assert all(r.url.params["id"] == "eq.e1" for r in seen)


def test_record_store_maps_http_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "boom"})

    store = SupabaseRecordStore(BASE_URL, "key", client=_client(handler))

    with pytest.raises(RecordStoreError, match="boom"):
        store.query("services")


def test_record_store_maps_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    store = SupabaseRecordStore(BASE_URL, "key", client=_client(handler))

    with pytest.raises(RecordStoreError):
        store.query("services")


def test_record_store_requires_credentials():
    with pytest.raises(ValueError):
        SupabaseRecordStore("", "key")


def test_blob_store_upload_url_and_delete():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    blobs = SupabaseBlobStore(BASE_URL, "key", "gallery-images", client=_client(handler))

    blobs.upload(b"img", "123-abcd.png", "image/png")
    url = blobs.public_url("123-abcd.png")
    blobs.delete(blobs.key_from_url(url))

    assert url == f"{BASE_URL}/storage/v1/object/public/gallery-images/123-abcd.png"
    upload, delete = seen
    assert upload.url.path == "/storage/v1/object/gallery-images/123-abcd.png"
    assert upload.headers["Content-Type"] == "image/png"
    assert json.loads(delete.content) == {"prefixes": ["123-abcd.png"]}
    assert blobs.key_from_url("https://elsewhere.example/x.png") is None


def test_blob_store_error_status():
    blobs = SupabaseBlobStore(
        BASE_URL, "key", "gallery-images", client=_client(lambda request: httpx.Response(413, text="too large"))
    )

    with pytest.raises(BlobStoreError):
        blobs.upload(b"img", "big.png", "image/png")


def test_supabase_auth_accepts_signed_in_user():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.headers["Authorization"] == "Bearer good":
            return httpx.Response(200, json={"id": "user-1"})
        return httpx.Response(401, json={"message": "invalid JWT"})

    auth = SupabaseAdminAuth(BASE_URL, "anon", client=_client(handler))

    assert auth.is_admin("good") is True
    assert auth.is_admin("bad") is False
    assert auth.is_admin(None) is False


def test_static_token_auth():
    auth = StaticTokenAdminAuth("s3cret", env="prod")

    assert auth.is_admin("s3cret") is True
    assert auth.is_admin("wrong") is False
    assert auth.is_admin(None) is False
    assert StaticTokenAdminAuth(None, env="dev").is_admin(None) is True
    assert StaticTokenAdminAuth(None, env="prod").is_admin("anything") is False


def test_static_token_auth_rejects_non_ascii_token():
    """A token with non-ASCII characters is a mismatch, not a crash."""
    auth = StaticTokenAdminAuth("secret", env="prod")

    assert auth.is_admin("sécret") is False
    assert StaticTokenAdminAuth("clave-ñ", env="prod").is_admin("clave-ñ") is True
