from fastapi import APIRouter, Depends, HTTPException

from salon.api.v1.schemas import (
    CatalogResponseSchema,
    ConfirmationSchema,
    DateRequestSchema,
    DraftResponseSchema,
    ServiceSchema,
    TimeRequestSchema,
)
from salon.application.exceptions import (
    EmptySelectionError,
    InvalidServiceIdError,
    NotAuthenticatedError,
    PersistenceFailureError,
    SubmissionInProgressError,
)
from salon.application.ports.service_catalog import ServiceCatalogPort
from salon.application.use_cases.booking import BookingComposer
from salon.application.utils.date_parser import format_booking_date, format_booking_time
from salon.core.config import settings
from salon.wiring.dependencies import get_booking_composer, get_service_catalog, reset_booking_composer

router = APIRouter()


def _draft_response(composer: BookingComposer) -> DraftResponseSchema:
    draft = composer.draft
    services = [ServiceSchema(id=s.id, name=s.name, price=s.price) for s in composer.selected_services]
    return DraftResponseSchema(
        date=format_booking_date(draft.scheduled_at),
        time=format_booking_time(draft.scheduled_at),
        selected_service_ids=[s.id for s in services],
        services=services,
        total_price=draft.total_price,
        can_submit=composer.can_submit,
    )


@router.get("/catalog", response_model=CatalogResponseSchema)
def catalog(catalog: ServiceCatalogPort = Depends(get_service_catalog)):
    return CatalogResponseSchema(
        currency=settings.CURRENCY_SYMBOL,
        services=[ServiceSchema(id=s.id, name=s.name, price=s.price) for s in catalog.list_services()],
    )


@router.get("/booking/draft", response_model=DraftResponseSchema)
def get_draft(composer: BookingComposer = Depends(get_booking_composer)):
    return _draft_response(composer)


@router.delete("/booking/draft", response_model=DraftResponseSchema)
def discard_draft():
    return _draft_response(reset_booking_composer())


@router.put("/booking/draft/date", response_model=DraftResponseSchema)
def set_date(req: DateRequestSchema, composer: BookingComposer = Depends(get_booking_composer)):
    composer.set_date(req.date)
    return _draft_response(composer)


@router.put("/booking/draft/time", response_model=DraftResponseSchema)
def set_time(req: TimeRequestSchema, composer: BookingComposer = Depends(get_booking_composer)):
    composer.set_time(req.time)
    return _draft_response(composer)


@router.post("/booking/draft/services/{service_id}/toggle", response_model=DraftResponseSchema)
def toggle_service(service_id: str, composer: BookingComposer = Depends(get_booking_composer)):
    try:
        composer.toggle_service(service_id)
    except InvalidServiceIdError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _draft_response(composer)


@router.post("/booking/submit", response_model=ConfirmationSchema)
async def submit(composer: BookingComposer = Depends(get_booking_composer)):
    try:
        confirmation = await composer.submit()
    except EmptySelectionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceFailureError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return ConfirmationSchema(
        booking_id=confirmation.booking_id,
        date=confirmation.date,
        time=confirmation.time,
        services=list(confirmation.services),
        total_price=confirmation.total_price,
    )
