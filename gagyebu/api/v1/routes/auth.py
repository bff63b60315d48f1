# gagyebu/api/v1/routes/auth.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_users import InvalidPasswordException
from fastapi_users.exceptions import UserAlreadyExists
from fastapi_users.router.common import ErrorCode

from gagyebu.core.auth import (
    PASSWORD_MISMATCH_MESSAGE,
    AuthError,
    User,
    UserCreate,
    UserManager,
    UserRead,
    get_jwt_strategy,
    get_user_manager,
)
from gagyebu.core.cache import query_cache
from gagyebu.core.config import settings
from gagyebu.api.deps import get_current_user, get_optional_current_user
from gagyebu.schemas.user import AuthErrorPage, LoginRequest, SignupRequest, Token
from gagyebu.services.queries import user_prefix

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])

# Mounted at the site root: the page the auth callback redirects to on failure
error_router = APIRouter(tags=["Authentication"])

@router.post("/login", response_model=Token)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    user_manager: UserManager = Depends(get_user_manager),
):
    credentials = OAuth2PasswordRequestForm(username=body.email, password=body.password)
    user = await user_manager.authenticate(credentials)
    if user is None or not user.is_active:
        logger.info(f"Failed login for {body.email}")
        raise AuthError.from_code(ErrorCode.LOGIN_BAD_CREDENTIALS)

    token = await get_jwt_strategy().write_token(user)
    expires_in = settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    response.set_cookie(
        key="access_token",
        value=token,
        max_age=expires_in,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
    )
    await user_manager.on_after_login(user, request)
    return Token(access_token=token, expires_in=expires_in)

@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    request: Request,
    user_manager: UserManager = Depends(get_user_manager),
):
    if body.password != body.password_confirm:
        raise AuthError(PASSWORD_MISMATCH_MESSAGE)

    try:
        user = await user_manager.create(
            UserCreate(email=body.email, password=body.password), safe=True, request=request
        )
    except UserAlreadyExists:
        raise AuthError.from_code(ErrorCode.REGISTER_USER_ALREADY_EXISTS)
    except InvalidPasswordException as e:
        raise AuthError(str(e.reason))
    return user

@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(
    response: Response,
    user: Optional[User] = Depends(get_optional_current_user),
):
    """
    Logout endpoint that doesn't require authentication.
    Clears the access token cookie and the user's cached reads.
    """
    response.delete_cookie(key="access_token")
    if user is not None:
        dropped = query_cache.invalidate_prefix(user_prefix(user.id))
        logger.info(f"User {user.email} logged out, dropped {dropped} cached queries")
    return {"detail": "Successfully logged out"}

@router.get("/me", response_model=UserRead)
async def read_own_profile(user: User = Depends(get_current_user)):
    """Get current user's profile"""
    return user

@error_router.get("/auth/error", response_model=AuthErrorPage)
async def auth_error_page(error: Optional[str] = None):
    message = f"오류 코드: {error}" if error else "알 수 없는 오류가 발생했습니다."
    return AuthErrorPage(title="오류가 발생했습니다", message=message, error=error)
