from fastapi import APIRouter, Body, Depends, Header, HTTPException, Query, Request, Response

from commission_shop.api.v1.schemas import (
    AdminRow,
    AnnouncementSchema,
    EmoteAvailabilitySchema,
    ToggleResultSchema,
    UploadResultSchema,
)
from commission_shop.application.exceptions import BlobStoreError, RecordNotFoundError, RecordStoreError
from commission_shop.application.ports.admin_auth import AdminAuthPort
from commission_shop.application.use_cases.admin_catalog import AdminCatalogUseCase
from commission_shop.wiring.dependencies import get_admin_auth, get_admin_catalog_use_case


def require_admin(
    authorization: str | None = Header(None),
    auth: AdminAuthPort = Depends(get_admin_auth),
) -> None:
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip() or None
    if not auth.is_admin(token):
        raise HTTPException(status_code=401, detail="Admin authentication required")


router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, RecordNotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, ValueError):
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=502, detail=str(e))


_ADMIN_ERRORS = (RecordNotFoundError, ValueError, RecordStoreError, BlobStoreError)


@router.get("/announcement", response_model=AnnouncementSchema)
def get_announcement(uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case)):
    try:
        row = uc.get_announcement()
    except RecordStoreError as e:
        raise _http_error(e)
    if row is None:
        return AnnouncementSchema()
    return AnnouncementSchema(message=row.get("value") or "", is_active=bool(row.get("is_active")))


@router.put("/announcement", response_model=AnnouncementSchema)
def save_announcement(
    req: AnnouncementSchema,
    uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case),
):
    try:
        row = uc.save_announcement(req.message or "", req.is_active)
    except RecordStoreError as e:
        raise _http_error(e)
    return AnnouncementSchema(message=row.get("value") or "", is_active=bool(row.get("is_active")))


@router.put("/emote-availability")
def set_emote_availability(
    req: EmoteAvailabilitySchema,
    uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case),
) -> AdminRow:
    try:
        if req.is_available is None:
            return uc.toggle_emote_extra_availability(req.extra_id, req.emote_number)
        return uc.set_emote_extra_availability(req.extra_id, req.emote_number, req.is_available)
    except _ADMIN_ERRORS as e:
        raise _http_error(e)


@router.post("/uploads", response_model=UploadResultSchema, status_code=201)
async def upload_image(
    request: Request,
    filename: str = Query(""),
    uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case),
):
    body = await request.body()
    try:
        url = uc.upload_image(body, filename, request.headers.get("Content-Type"))
    except _ADMIN_ERRORS as e:
        raise _http_error(e)
    return UploadResultSchema(url=url)


@router.post("/gallery/images", status_code=201)
async def add_gallery_image(
    request: Request,
    filename: str = Query(""),
    title: str = Query(""),
    description: str = Query(""),
    service_type: str = Query(""),
    uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case),
) -> AdminRow:
    body = await request.body()
    try:
        return uc.add_gallery_image(
            body,
            filename,
            request.headers.get("Content-Type"),
            title=title,
            description=description,
            service_type=service_type,
        )
    except _ADMIN_ERRORS as e:
        raise _http_error(e)


@router.get("/{table}")
def list_rows(table: str, uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case)) -> list[AdminRow]:
    try:
        return uc.list_rows(table)
    except _ADMIN_ERRORS as e:
        raise _http_error(e)


@router.post("/{table}", status_code=201)
def create_row(
    table: str,
    row: AdminRow = Body(...),
    uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case),
) -> AdminRow:
    try:
        return uc.create(table, row)
    except _ADMIN_ERRORS as e:
        raise _http_error(e)


@router.get("/{table}/{row_id}")
def get_row(table: str, row_id: str, uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case)) -> AdminRow:
    try:
        return uc.get_row(table, row_id)
    except _ADMIN_ERRORS as e:
        raise _http_error(e)


@router.patch("/{table}/{row_id}")
def update_row(
    table: str,
    row_id: str,
    patch: AdminRow = Body(...),
    uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case),
) -> AdminRow:
    try:
        return uc.update(table, row_id, patch)
    except _ADMIN_ERRORS as e:
        raise _http_error(e)


@router.delete("/{table}/{row_id}", status_code=204)
def delete_row(table: str, row_id: str, uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case)) -> Response:
    try:
        uc.delete(table, row_id)
    except _ADMIN_ERRORS as e:
        raise _http_error(e)
    return Response(status_code=204)


@router.post("/{table}/{row_id}/toggle/{field}", response_model=ToggleResultSchema)
def toggle_flag(
    table: str,
    row_id: str,
    field: str,
    uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case),
):
    try:
        value = uc.toggle_flag(table, row_id, field)
    except _ADMIN_ERRORS as e:
        raise _http_error(e)
    return ToggleResultSchema(field=field, value=value)


@router.post("/{table}/{row_id}/image")
async def set_row_image(
    table: str,
    row_id: str,
    request: Request,
    column: str = Query("image"),
    filename: str = Query(""),
    uc: AdminCatalogUseCase = Depends(get_admin_catalog_use_case),
) -> AdminRow:
    body = await request.body()
    try:
        return uc.set_row_image(table, row_id, column, body, filename, request.headers.get("Content-Type"))
    except _ADMIN_ERRORS as e:
        raise _http_error(e)
