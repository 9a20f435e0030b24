from fastapi import APIRouter, Depends, HTTPException

from salon.api.v1.schemas import BookingRecordSchema, ProfileResponseSchema
from salon.application.exceptions import NotAuthenticatedError, PersistenceFailureError, RecordNotFoundError
from salon.application.use_cases.profile import ProfileSession
from salon.wiring.dependencies import get_profile_session

router = APIRouter()


@router.get("/profile", response_model=ProfileResponseSchema)
async def profile(session: ProfileSession = Depends(get_profile_session)):
    session.open()
    try:
        view = await session.load()
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceFailureError as e:
        raise HTTPException(status_code=502, detail=str(e))
    finally:
        session.close()

    return ProfileResponseSchema(
        name=view.name,
        email=view.email,
        upcoming=[
            BookingRecordSchema(
                id=r.id,
                date=r.date,
                time=r.time,
                services=list(r.services),
                total_price=r.total_price,
                status=r.status,
            )
            for r in view.upcoming
        ],
    )
