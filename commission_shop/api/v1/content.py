from fastapi import APIRouter, Depends, HTTPException, Query, Response

from commission_shop.api.v1.catalog import mark_degraded
from commission_shop.api.v1.schemas import (
    AnnouncementSchema,
    GalleryItemSchema,
    RuleSchema,
    RulesSchema,
    TestimonialSchema,
    TestimonialSubmitSchema,
)
from commission_shop.application.exceptions import RecordStoreError
from commission_shop.application.use_cases.catalog_reader import CatalogReader
from commission_shop.application.use_cases.testimonials import SubmitTestimonialUseCase
from commission_shop.wiring.dependencies import get_catalog_reader, get_submit_testimonial_use_case

router = APIRouter(prefix="/content")


@router.get("/gallery", response_model=list[GalleryItemSchema])
def list_gallery(response: Response, reader: CatalogReader = Depends(get_catalog_reader)):
    items = reader.list_gallery()
    mark_degraded(response, reader)
    return [GalleryItemSchema.model_validate(i) for i in items]


@router.get("/testimonials", response_model=list[TestimonialSchema])
def list_testimonials(
    response: Response,
    featured: bool = Query(False),
    service_type: str | None = Query(None),
    gallery_item_id: str | None = Query(None),
    reader: CatalogReader = Depends(get_catalog_reader),
):
    items = reader.list_testimonials(
        featured_only=featured,
        service_type=service_type,
        gallery_item_id=gallery_item_id,
    )
    mark_degraded(response, reader)
    return [TestimonialSchema.model_validate(t) for t in items]


@router.post("/testimonials", response_model=TestimonialSchema, status_code=201)
def submit_testimonial(
    req: TestimonialSubmitSchema,
    uc: SubmitTestimonialUseCase = Depends(get_submit_testimonial_use_case),
):
    try:
        testimonial = uc.execute(
            client_name=req.client_name,
            rating=req.rating,
            comment=req.comment,
            service_type=req.service_type,
            gallery_item_id=req.gallery_item_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RecordStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return TestimonialSchema.model_validate(testimonial)


@router.get("/rules", response_model=RulesSchema)
def list_rules(response: Response, reader: CatalogReader = Depends(get_catalog_reader)):
    allowed, forbidden = reader.list_rules()
    mark_degraded(response, reader)
    return RulesSchema(
        allowed=[RuleSchema.model_validate(r) for r in allowed],
        forbidden=[RuleSchema.model_validate(r) for r in forbidden],
    )


@router.get("/announcement", response_model=AnnouncementSchema)
def get_announcement(response: Response, reader: CatalogReader = Depends(get_catalog_reader)):
    message = reader.get_announcement()
    mark_degraded(response, reader)
    return AnnouncementSchema(message=message, is_active=message is not None)
