# shopapi/api/deps.py
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Path
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError

from shopapi.domain.errors import Forbidden, Unauthorized
from shopapi.domain.schemas import MAX_INT, AuthUser
from shopapi.domain.session import SessionIdentity
from shopapi.services.user_service import authenticate, require_role

# id z adresu, ograniczony do zakresu kolumny
RowId = Annotated[int, Path(le=MAX_INT)]

bearer_scheme = HTTPBearer(auto_error=False, description="JWT token from the /api/auth/login response")


def get_session_identity(x_session_id: str | None = Header(None)) -> SessionIdentity:
    try:
        return SessionIdentity.from_header(x_session_id)
    except PydanticValidationError:
        raise HTTPException(status_code=400, detail="Invalid x-session-id header")


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AuthUser:
    if credentials is None:
        raise HTTPException(status_code=401, detail=Unauthorized.default_message)
    try:
        return authenticate(credentials.credentials)
    except Unauthorized as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AuthUser | None:
    # brak naglowka = gosc, zly token = 401
    if credentials is None:
        return None
    try:
        return authenticate(credentials.credentials)
    except Unauthorized as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


def role_required(role: str):
    def dependency(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        try:
            return require_role(user, role)
        except Forbidden as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)

    return dependency


require_admin = role_required("admin")
