import logging

from fastapi import FastAPI

from commission_shop.api.v1.admin import router as admin_router
from commission_shop.api.v1.cart import router as cart_router
from commission_shop.api.v1.catalog import router as catalog_router
from commission_shop.api.v1.content import router as content_router
from commission_shop.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in (
            "table",
            "row_id",
            "service_id",
            "session_id",
            "local_id",
            "extra_id",
            "unit_number",
            "status",
            "error",
            "reason",
        ):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Commission Shop", version="1.0.0")

app.include_router(catalog_router, prefix="/api/v1", tags=["catalog"])
app.include_router(content_router, prefix="/api/v1", tags=["content"])
app.include_router(cart_router, prefix="/api/v1", tags=["cart"])
app.include_router(admin_router, prefix="/api/v1", tags=["admin"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
