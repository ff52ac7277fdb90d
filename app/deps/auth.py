import secrets

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.db import get_db
from app.errors import ForbiddenError, UnauthorizedError
from app.models.user import User
from app.services.auth_service import resolve_session


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    user = resolve_session(db, request.cookies.get(settings.SESSION_COOKIE_NAME))
    if not user:
        raise UnauthorizedError()
    return user


def require_partner(user: User = Depends(get_current_user)) -> User:
    if user.role != "partner":
        raise ForbiddenError("Partner account required")
    return user


def require_business(user: User = Depends(get_current_user)) -> User:
    if user.role != "business":
        raise ForbiddenError("Business account required")
    return user


def require_admin_key(
    x_admin_key: str | None = Header(default=None, alias="X-Admin-Key"),
) -> None:
    expected = settings.ADMIN_API_KEY
    if not expected or not x_admin_key or not secrets.compare_digest(x_admin_key, expected):
        raise ForbiddenError("Invalid admin key")
