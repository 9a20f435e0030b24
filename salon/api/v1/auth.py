from fastapi import APIRouter, Depends, HTTPException, Response

from salon.api.v1.schemas import IdentitySchema, LoginRequestSchema, SignUpRequestSchema
from salon.application.exceptions import (
    AuthenticationError,
    CredentialsValidationError,
    PersistenceFailureError,
    SignOutFailureError,
)
from salon.application.ports.identity import IdentityPort
from salon.application.use_cases.authenticate import AuthenticateUseCase
from salon.wiring.dependencies import get_authenticate_use_case, get_identity

router = APIRouter(prefix="/auth")


@router.post("/login", response_model=IdentitySchema)
async def login(
    req: LoginRequestSchema,
    uc: AuthenticateUseCase = Depends(get_authenticate_use_case),
):
    try:
        user = await uc.sign_in(req.email, req.password)
    except CredentialsValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return IdentitySchema(uid=user.uid, email=user.email)


@router.post("/signup", response_model=IdentitySchema, status_code=201)
async def signup(
    req: SignUpRequestSchema,
    uc: AuthenticateUseCase = Depends(get_authenticate_use_case),
):
    try:
        user = await uc.sign_up(req.name, req.email, req.password)
    except CredentialsValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except PersistenceFailureError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return IdentitySchema(uid=user.uid, email=user.email)


@router.post("/logout", status_code=204)
async def logout(identity: IdentityPort = Depends(get_identity)) -> Response:
    try:
        await identity.sign_out()
    except SignOutFailureError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return Response(status_code=204)
