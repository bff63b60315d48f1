# gagyebu/core/auth.py

import uuid
import logging
from datetime import datetime
from typing import Optional, Union

from fastapi import Depends, Request
from fastapi_users import FastAPIUsers, BaseUserManager, UUIDIDMixin, InvalidPasswordException
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    JWTStrategy,
)
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users.router.common import ErrorCode
from fastapi_users import schemas

from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.ext.asyncio import AsyncSession

from .database import Base, get_async_session
from .config import settings

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

# fastapi-users error codes shown to the user in Korean; anything else passes through
AUTH_ERROR_MESSAGES = {
    ErrorCode.LOGIN_BAD_CREDENTIALS: "이메일 또는 비밀번호가 올바르지 않습니다.",
    ErrorCode.REGISTER_USER_ALREADY_EXISTS: "이미 등록된 이메일입니다.",
}
PASSWORD_MISMATCH_MESSAGE = "비밀번호가 일치하지 않습니다."


class AuthError(Exception):
    """Sign-in or sign-up failure carrying the message shown on the form."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @classmethod
    def from_code(cls, code: str) -> "AuthError":
        return cls(AUTH_ERROR_MESSAGES.get(code, code))


# 1. User DB model
class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(length=320), unique=True, index=True, nullable=False)
    hashed_password = Column(String(length=1024), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_superuser = Column(Boolean, default=False, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

# 2. Pydantic schemas
class UserRead(schemas.BaseUser[uuid.UUID]):
    created_at: Optional[datetime] = None

class UserCreate(schemas.BaseUserCreate):
    pass

class UserUpdate(schemas.BaseUserUpdate):
    pass

# 3. User Manager
class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = settings.SECRET_KEY
    verification_token_secret = settings.SECRET_KEY

    async def validate_password(self, password: str, user: Union[UserCreate, User]) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidPasswordException(
                reason=f"비밀번호는 {MIN_PASSWORD_LENGTH}자 이상이어야 합니다."
            )

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        logger.info(f"User {user.email} has registered. Seeding default categories and payment methods…")
        # Local import: crud depends on the models that depend on this module
        from gagyebu.crud.category import seed_default_categories_for_user
        from gagyebu.crud.payment_method import seed_default_payment_methods_for_user

        session: AsyncSession = self.user_db.session
        try:
            created = await seed_default_categories_for_user(user.id, session)
            methods = await seed_default_payment_methods_for_user(user.id, session)
            logger.info(f"Seeded {len(created)} categories and {len(methods)} payment methods for {user.email}")
        except Exception as e:
            logger.error(f"❌ Seeding defaults failed for {user.email}: {str(e)}")
            await session.rollback()

    async def on_after_login(self, user: User, request: Optional[Request] = None, response=None):
        logger.info(f"User {user.email} logged in")

# 4. User Database
async def get_user_db(session: AsyncSession = Depends(get_async_session)):
    yield SQLAlchemyUserDatabase(session, User)

# 5. User Manager dependency
async def get_user_manager(user_db: SQLAlchemyUserDatabase = Depends(get_user_db)):
    yield UserManager(user_db)

# 6. Authentication
bearer_transport = BearerTransport(tokenUrl="/api/v1/auth/login")

def get_jwt_strategy() -> JWTStrategy:
    return JWTStrategy(
        secret=settings.SECRET_KEY,
        lifetime_seconds=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        token_audience=["fastapi-users:auth"],
        algorithm=settings.ALGORITHM,
    )

auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)

# 7. FastAPI Users instance
fastapi_users = FastAPIUsers[User, uuid.UUID](get_user_manager, [auth_backend])

# 8. Current user dependency
current_active_user = fastapi_users.current_user(active=True)

# Export for other modules
__all__ = [
    "AuthError",
    "fastapi_users",
    "auth_backend",
    "current_active_user",
    "get_user_db",
    "get_user_manager",
    "get_jwt_strategy",
    "User",
    "UserRead",
    "UserCreate",
    "UserUpdate",
    "UserManager",
]
