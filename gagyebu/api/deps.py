# gagyebu/api/deps.py
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import logging

from gagyebu.core.auth import User, UserManager, get_jwt_strategy, get_user_manager

logger = logging.getLogger(__name__)

# Security schemes
optional_security = HTTPBearer(auto_error=False)

def _token_from_request(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """
    Find the session token:
    - Authorization header
    - access_token cookie (set by the login route)
    """
    if credentials and credentials.credentials:
        return credentials.credentials

    token = request.cookies.get("access_token")
    # Remove "Bearer " prefix if present in cookie
    if token and token.startswith("Bearer "):
        token = token[7:]
    return token or None

async def get_current_user(
    request: Request,
    user_manager: UserManager = Depends(get_user_manager),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> User:
    """Resolve the signed-in user; every read and write route depends on this."""
    token = _token_from_request(request, credentials)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await get_jwt_strategy().read_token(token, user_manager)
    if user is None or not user.is_active:
        logger.info("Rejected request with an invalid or expired session token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user

# Optional version of get_current_user that doesn't raise exceptions
async def get_optional_current_user(
    request: Request,
    user_manager: UserManager = Depends(get_user_manager),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> Optional[User]:
    """
    Similar to get_current_user but returns None instead of raising when
    there is no valid session. Used by logout, which must work signed out.
    """
    try:
        return await get_current_user(request, user_manager, credentials)
    except HTTPException:
        return None
