from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shopapi.data.models.user import UserModel
from shopapi.domain.errors import Conflict, Forbidden, InvalidCredentials, Unauthorized
from shopapi.domain.schemas import AuthUser, LoginOut, RegisterIn, UserRead
from shopapi.repos.user_repo import UserRepo
from shopapi.utils.logging import get_logger
from shopapi.utils.security import create_token, decode_token, hash_password, verify_password
from shopapi.utils.settings import LEGACY_USERNAME, LEGACY_PASSWORD

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: RegisterIn, role: str = "customer") -> UserRead:
        if self.repo.exists_username_or_email(payload.username, payload.email):
            raise Conflict("Username or email already exists")

        user = UserModel(
            username=payload.username,
            email=payload.email,
            password_hash=hash_password(payload.password),
            role=role,
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            # rownolegla rejestracja z tym samym emailem
            self.repo.rollback()
            raise Conflict("Username or email already exists")

        logger.info(f"Registered user {created.id} ({created.username})")
        return UserRead.model_validate(created)

    def login(self, email: str, password: str) -> LoginOut:
        user = self.repo.get_by_email(email)
        # jeden komunikat dla obu przypadkow, bez enumeracji kont
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        token = create_token({"id": user.id, "username": user.username, "role": user.role})
        logger.info(f"User {user.id} logged in")
        return LoginOut(
            message="Login Successful",
            token=token,
            user=UserRead.model_validate(user),
        )


def authenticate(token: str) -> AuthUser:
    claims = decode_token(token)
    if claims.get("id") is None:
        raise Unauthorized("Invalid or expired token")
    return AuthUser(
        id=claims["id"],
        username=claims.get("username", ""),
        role=claims.get("role", "customer"),
    )


def require_role(user: AuthUser, role: str) -> AuthUser:
    if user.role != role:
        raise Forbidden(f"{role.capitalize()} access required")
    return user


def login_legacy(username: str, password: str) -> bool:
    """Stare demo logowanie na sztywne dane."""
    return username == LEGACY_USERNAME and password == LEGACY_PASSWORD
