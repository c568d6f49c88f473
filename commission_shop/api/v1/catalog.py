from fastapi import APIRouter, Depends, HTTPException, Query, Response

from commission_shop.api.v1.schemas import (
    DetailLevelSchema,
    EmoteConfigSchema,
    EmoteUnitSchema,
    ExtraSchema,
    ServiceDetailSchema,
    ServiceSchema,
    ThemeSchema,
    VariantSchema,
)
from commission_shop.application.use_cases.catalog_reader import CatalogReader
from commission_shop.wiring.dependencies import get_catalog_reader

router = APIRouter(prefix="/catalog")

DEGRADED_HEADER = "X-Catalog-Degraded"


def mark_degraded(response: Response, reader: CatalogReader) -> None:
    # lists still render empty; the header tells the client which tables failed
    if reader.has_errors:
        response.headers[DEGRADED_HEADER] = ",".join(sorted(reader.errors))


@router.get("/services", response_model=list[ServiceSchema])
def list_services(response: Response, reader: CatalogReader = Depends(get_catalog_reader)):
    services = reader.list_services()
    mark_degraded(response, reader)
    return [ServiceSchema.model_validate(s) for s in services]


@router.get("/services/{service_id}", response_model=ServiceDetailSchema)
def get_service(
    service_id: str,
    response: Response,
    reader: CatalogReader = Depends(get_catalog_reader),
):
    service = reader.get_service(service_id)
    if service is None:
        if "services" in reader.errors:
            raise HTTPException(status_code=502, detail=reader.errors["services"])
        raise HTTPException(status_code=404, detail=f"Unknown service: {service_id}")

    detail = ServiceDetailSchema(
        service=ServiceSchema.model_validate(service),
        detail_levels=[DetailLevelSchema.model_validate(d) for d in reader.list_detail_levels(service_id)],
        variants=[VariantSchema.model_validate(v) for v in reader.list_variants(service_id)],
        extras=[ExtraSchema.model_validate(e) for e in reader.list_extras(service_id)],
    )
    mark_degraded(response, reader)
    return detail


@router.get("/services/{service_id}/emotes", response_model=EmoteConfigSchema)
def get_emote_config(
    service_id: str,
    response: Response,
    variant_id: str | None = Query(None),
    reader: CatalogReader = Depends(get_catalog_reader),
):
    snapshot = reader.load_snapshot()
    service = snapshot.service(service_id)
    if service is None:
        if "services" in reader.errors:
            raise HTTPException(status_code=502, detail=reader.errors["services"])
        raise HTTPException(status_code=404, detail=f"Unknown service: {service_id}")

    resolver = snapshot.resolver_for(service_id)
    extras = snapshot.extras_for(service_id)
    unit_count = snapshot.unit_count(service, snapshot.variant(service_id, variant_id))
    units = [
        EmoteUnitSchema(
            unit_number=n,
            label=resolver.label(n),
            description=resolver.description(n),
            available_extra_ids=[e.id for e in resolver.available_extras(extras, n)],
        )
        for n in range(1, unit_count + 1)
    ]
    mark_degraded(response, reader)
    return EmoteConfigSchema(service_id=service_id, unit_count=unit_count, units=units)


@router.get("/extras", response_model=list[ExtraSchema])
def list_extras(
    response: Response,
    service_id: str | None = Query(None),
    reader: CatalogReader = Depends(get_catalog_reader),
):
    extras = reader.list_extras(service_id)
    mark_degraded(response, reader)
    return [ExtraSchema.model_validate(e) for e in extras]


@router.get("/themes", response_model=list[ThemeSchema])
def list_themes(response: Response, reader: CatalogReader = Depends(get_catalog_reader)):
    themes = reader.list_themes()
    mark_degraded(response, reader)
    return [ThemeSchema.model_validate(t) for t in themes]
