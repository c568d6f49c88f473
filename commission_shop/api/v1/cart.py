from fastapi import APIRouter, Depends, HTTPException, Query, Response

from commission_shop.api.v1.schemas import (
    CartSchema,
    CommissionRequestSchema,
    CommissionSchema,
    HandoffSchema,
    PriceSchema,
    SummarySchema,
)
from commission_shop.application.exceptions import EmptyCartError, RecordStoreError, UnknownServiceError
from commission_shop.application.use_cases.cart import CartUseCase
from commission_shop.application.utils.order_summary import Currency
from commission_shop.core.config import settings
from commission_shop.wiring.dependencies import get_cart_use_case

router = APIRouter(prefix="/cart/{session_id}")


def _cart_schema(session_id: str, uc: CartUseCase) -> CartSchema:
    cart = uc.cart(session_id)
    return CartSchema(
        session_id=session_id,
        count=len(cart),
        items=[CommissionSchema.from_commission(c) for c in cart],
        total=PriceSchema.from_price(cart.total()),
    )


@router.get("", response_model=CartSchema)
def get_cart(session_id: str, uc: CartUseCase = Depends(get_cart_use_case)):
    return _cart_schema(session_id, uc)


@router.post("/quote", response_model=CommissionSchema)
def quote(
    session_id: str,
    req: CommissionRequestSchema,
    uc: CartUseCase = Depends(get_cart_use_case),
):
    try:
        commission = uc.quote(req.to_request())
    except UnknownServiceError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RecordStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return CommissionSchema.from_commission(commission)


@router.post("/commissions", response_model=CommissionSchema, status_code=201)
def add_commission(
    session_id: str,
    req: CommissionRequestSchema,
    uc: CartUseCase = Depends(get_cart_use_case),
):
    try:
        commission = uc.add(session_id, req.to_request())
    except UnknownServiceError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RecordStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return CommissionSchema.from_commission(commission)


@router.delete("/commissions/{local_id}", status_code=204)
def remove_commission(session_id: str, local_id: str, uc: CartUseCase = Depends(get_cart_use_case)) -> Response:
    # unknown ids are a no-op
    uc.remove(session_id, local_id)
    return Response(status_code=204)


@router.delete("", status_code=204)
def clear_cart(session_id: str, uc: CartUseCase = Depends(get_cart_use_case)) -> Response:
    uc.clear(session_id)
    return Response(status_code=204)


@router.get("/summary", response_model=SummarySchema)
def get_summary(
    session_id: str,
    currency: Currency = Query(Currency(settings.DEFAULT_CURRENCY.upper())),
    uc: CartUseCase = Depends(get_cart_use_case),
):
    lines = uc.summary(session_id, currency)
    return SummarySchema(currency=currency, lines=lines, text="\n".join(lines))


@router.post("/handoff", response_model=HandoffSchema)
def handoff(
    session_id: str,
    currency: Currency = Query(Currency(settings.DEFAULT_CURRENCY.upper())),
    uc: CartUseCase = Depends(get_cart_use_case),
):
    try:
        result = uc.handoff(session_id, currency)
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RecordStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return HandoffSchema(
        link=result.link,
        message=result.message,
        commission_count=result.commission_count,
        total=PriceSchema.from_price(result.total),
    )
