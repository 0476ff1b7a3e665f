from typing import Optional
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session
from account_service.core.database import get_db
from account_service.core.exceptions import BusinessException
from account_service.crud.user import UserCRUD
from account_service.schemas.user import UserResponse
from account_service.services.session_cache import SessionCache
from account_service.services.user_service import UserService

BEARER_PREFIX = "Bearer "
NOT_LOGGED_IN_MESSAGE = "Not logged in or session expired"


def get_session_cache(request: Request) -> SessionCache:
    """Session cache bound to this application's Redis client and settings"""
    return SessionCache.from_settings(request.app.state.redis, request.app.state.settings)


def get_user_service(
    db: Session = Depends(get_db),
    sessions: SessionCache = Depends(get_session_cache),
) -> UserService:
    return UserService(UserCRUD(db), sessions)


def get_token(authorization: str = Header(...)) -> str:
    """
    Session token from the Authorization header.

    Accepts the bare token as issued by /login, or the same value with a
    "Bearer " prefix.
    """
    token = authorization.strip()
    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):].strip()
    return token


def get_current_user(
    token: str = Depends(get_token),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Profile cached for the caller's token; 401 business error if none"""
    user: Optional[UserResponse] = service.get_session_user(token)
    if user is None:
        raise BusinessException(NOT_LOGGED_IN_MESSAGE, code=401)
    return user
