from functools import lru_cache
import logging

from commission_shop.core.config import settings
from commission_shop.application.ports.admin_auth import AdminAuthPort
from commission_shop.application.ports.blob_store import BlobStorePort
from commission_shop.application.ports.record_store import RecordStorePort
from commission_shop.application.use_cases.admin_catalog import AdminCatalogUseCase
from commission_shop.application.use_cases.cart import CartRegistry, CartUseCase
from commission_shop.application.use_cases.catalog_reader import CatalogReader
from commission_shop.application.use_cases.testimonials import SubmitTestimonialUseCase
from commission_shop.infrastructure.auth.static_token_auth import StaticTokenAdminAuth
from commission_shop.infrastructure.auth.supabase_auth import SupabaseAdminAuth
from commission_shop.infrastructure.storage.memory_blob_store import MemoryBlobStore
from commission_shop.infrastructure.storage.supabase_blob_store import SupabaseBlobStore
from commission_shop.infrastructure.store.json_record_store import JsonRecordStore
from commission_shop.infrastructure.store.memory_record_store import MemoryRecordStore
from commission_shop.infrastructure.store.seed_data import CATALOG_SEED
from commission_shop.infrastructure.store.supabase_record_store import SupabaseRecordStore


_record_store: RecordStorePort | None = None
_cart_registry: CartRegistry | None = None


def _supabase_key() -> str:
    return settings.SUPABASE_SERVICE_KEY or settings.SUPABASE_ANON_KEY or ""


def get_record_store() -> RecordStorePort:
    global _record_store
    if _record_store is None:
        logger = logging.getLogger(__name__)
        provider = settings.STORE_PROVIDER.lower()
        if provider == "supabase":
            logger.info("Using SupabaseRecordStore")
            _record_store = SupabaseRecordStore(
                base_url=settings.SUPABASE_URL or "",
                api_key=_supabase_key(),
                timeout=settings.SUPABASE_TIMEOUT_SECONDS,
            )
        elif provider == "json":
            logger.info("Using JsonRecordStore")
            _record_store = JsonRecordStore(seed=CATALOG_SEED)
        else:
            logger.info("Using MemoryRecordStore with demo catalog")
            _record_store = MemoryRecordStore(CATALOG_SEED)
    return _record_store


@lru_cache
def get_blob_store() -> BlobStorePort:
    if settings.STORE_PROVIDER.lower() == "supabase":
        return SupabaseBlobStore(
            base_url=settings.SUPABASE_URL or "",
            api_key=_supabase_key(),
            bucket=settings.SUPABASE_STORAGE_BUCKET,
            timeout=settings.SUPABASE_TIMEOUT_SECONDS,
        )
    return MemoryBlobStore()


@lru_cache
def get_admin_auth() -> AdminAuthPort:
    if settings.ADMIN_API_TOKEN or settings.STORE_PROVIDER.lower() != "supabase":
        return StaticTokenAdminAuth(settings.ADMIN_API_TOKEN, env=settings.ENV)
    return SupabaseAdminAuth(
        base_url=settings.SUPABASE_URL or "",
        api_key=settings.SUPABASE_ANON_KEY or "",
        timeout=settings.SUPABASE_TIMEOUT_SECONDS,
    )


def get_cart_registry() -> CartRegistry:
    global _cart_registry
    if _cart_registry is None:
        _cart_registry = CartRegistry(max_sessions=settings.CART_MAX_SESSIONS)
    return _cart_registry


def get_catalog_reader() -> CatalogReader:
    # one reader per request so its error state belongs to that request
    return CatalogReader(get_record_store())


def get_cart_use_case() -> CartUseCase:
    return CartUseCase(
        reader=get_catalog_reader(),
        carts=get_cart_registry(),
        whatsapp_phone=settings.WHATSAPP_PHONE,
        business_name=settings.BUSINESS_NAME,
    )


def get_admin_catalog_use_case() -> AdminCatalogUseCase:
    return AdminCatalogUseCase(store=get_record_store(), blobs=get_blob_store())


def get_submit_testimonial_use_case() -> SubmitTestimonialUseCase:
    return SubmitTestimonialUseCase(store=get_record_store())
