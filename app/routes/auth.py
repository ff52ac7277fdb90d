from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.config import settings
from app.db import get_db
from app.deps.auth import get_current_user
from app.models.user import User
from app.schemas.user import LoginRequest, RegisterRequest, UserOut
from app.services.auth_service import authenticate, close_session, open_session, register_user


router = APIRouter(prefix="/api", tags=["auth"])


def _set_session_cookie(response: Response, signed: str):
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        signed,
        max_age=settings.SESSION_TTL_HOURS * 3600,
        httponly=True,
        samesite="lax",
    )


@router.post("/register", response_model=UserOut, status_code=201)
def register(payload: RegisterRequest, response: Response, db: Session = Depends(get_db)):
    user = register_user(db, payload)
    signed = open_session(db, user)
    db.commit()
    db.refresh(user)

    _set_session_cookie(response, signed)
    return user


@router.post("/login", response_model=UserOut)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)):
    user = authenticate(db, payload.username, payload.password)
    signed = open_session(db, user)
    db.commit()
    db.refresh(user)

    _set_session_cookie(response, signed)
    return user


@router.post("/logout")
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    close_session(db, request.cookies.get(settings.SESSION_COOKIE_NAME))
    db.commit()

    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}


@router.get("/user", response_model=UserOut)
def read_current_user(user: User = Depends(get_current_user)):
    return user
