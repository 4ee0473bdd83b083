# shopapi/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from shopapi.data.database import get_db
from shopapi.domain.errors import Conflict, InvalidCredentials
from shopapi.domain.schemas import LegacyLoginIn, LoginIn, LoginOut, MessageOut, RegisterIn, RegisterOut
from shopapi.services.user_service import UserService, login_legacy

router = APIRouter(prefix="/api/auth", tags=["Auth"])
legacy_router = APIRouter(prefix="/api", tags=["Legacy"])


def get_service(db: Session):
    return UserService(db)


@router.post("/register", response_model=RegisterOut, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    """Register a new user (role: customer)."""
    svc = get_service(db)
    try:
        user = svc.register(payload)
    except Conflict as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return RegisterOut(message="User registered successfully", user_id=user.id)


@router.post(
    "/login",
    response_model=LoginOut,
    responses={401: {"model": MessageOut, "description": "Invalid credentials"}},
)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    """Login and get a JWT token valid for 24 hours."""
    svc = get_service(db)
    try:
        return svc.login(payload.email, payload.password)
    except InvalidCredentials as e:
        # ten sam ksztalt co stare /api/login
        return JSONResponse(status_code=e.status_code, content={"message": e.message})


@legacy_router.post(
    "/login",
    response_model=MessageOut,
    responses={401: {"model": MessageOut}},
)
def legacy_login(payload: LegacyLoginIn):
    """Legacy demo login with fixed credentials, kept for old browser tests."""
    if login_legacy(payload.username, payload.password):
        return MessageOut(message="Login Successful")
    return JSONResponse(status_code=401, content={"message": InvalidCredentials.default_message})
