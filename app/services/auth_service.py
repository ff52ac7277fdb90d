"""
Accounts and server-held login sessions.

Passwords are bcrypt-hashed through passlib. A session is a row in
``user_sessions``; the browser only ever holds the row's random token,
signed with itsdangerous so a tampered cookie is rejected before any
database lookup.
"""

import logging
import secrets
from datetime import timedelta

from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.config import settings
from app.errors import InvalidArgumentError, UnauthorizedError
from app.models.business_profile import BusinessProfile
from app.models.partner_profile import PartnerProfile
from app.models.user import User
from app.models.user_session import UserSession
from app.services.clock import utcnow


logger = logging.getLogger(__name__)

_pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")
_signer = URLSafeTimedSerializer(settings.SECRET_KEY, salt="survey-marketplace-session")


# ============================================================
# PASSWORDS
# ============================================================

def hash_password(password: str) -> str:
    return _pwd_ctx.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return _pwd_ctx.verify(password, hashed)
    except (ValueError, TypeError) as e:
        logger.debug("verify_password error: %s", e)
        return False


# ============================================================
# SESSIONS
# ============================================================

def open_session(db: Session, user: User) -> str:
    """Persist a new session for ``user`` and return the signed cookie value."""
    token = secrets.token_urlsafe(32)
    db.add(
        UserSession(
            token=token,
            user_id=user.id,
            expires_at=utcnow() + timedelta(hours=settings.SESSION_TTL_HOURS),
        )
    )
    db.flush()
    return _signer.dumps(token)


def _unsign(signed: str | None) -> str | None:
    if not signed:
        return None
    try:
        return _signer.loads(signed, max_age=settings.SESSION_TTL_HOURS * 3600)
    except SignatureExpired:
        logger.info("session cookie expired")
        return None
    except BadData:
        logger.warning("rejected session cookie")
        return None


def resolve_session(db: Session, signed: str | None) -> User | None:
    token = _unsign(signed)
    if not token:
        return None

    row = (
        db.query(UserSession)
        .filter(UserSession.token == token)
        .filter(UserSession.expires_at > utcnow())
        .first()
    )
    if not row:
        return None

    return db.query(User).filter(User.id == row.user_id).first()


def close_session(db: Session, signed: str | None) -> bool:
    token = _unsign(signed)
    if not token:
        return False

    deleted = db.query(UserSession).filter(UserSession.token == token).delete(synchronize_session=False)
    db.flush()
    return deleted > 0


# ============================================================
# ACCOUNTS
# ============================================================

def _normalize_gender(value: str | None) -> str | None:
    v = (value or "").strip().lower()

    if not v:
        return None

    if v in {"f", "female", "woman"}:
        return "female"
    if v in {"m", "male", "man"}:
        return "male"
    if v in {"other", "non-binary", "non binary", "nb"}:
        return "other"
    if v in {"unknown", "prefer not to say"}:
        return None

    return v


def register_user(db: Session, payload) -> User:
    taken = (
        db.query(User.id)
        .filter(or_(User.username == payload.username, User.email == payload.email))
        .first()
    )
    if taken:
        raise InvalidArgumentError("Username or email already exists")

    if payload.role == "business" and not (payload.companyName or "").strip():
        raise InvalidArgumentError("companyName is required for business accounts")

    user = User(
        email=payload.email,
        username=payload.username,
        password=hash_password(payload.password),
        full_name=payload.fullName,
        role=payload.role,
    )
    db.add(user)
    db.flush()

    if user.role == "partner":
        db.add(
            PartnerProfile(
                user_id=user.id,
                age=payload.age,
                gender=_normalize_gender(payload.gender),
                location=payload.location,
                occupation=payload.occupation,
                education=payload.education,
            )
        )
    else:
        db.add(
            BusinessProfile(
                user_id=user.id,
                company_name=payload.companyName.strip(),
                industry=payload.industry,
                size=payload.size,
                website=payload.website,
            )
        )
    db.flush()

    logger.info("user registered", extra={"user_id": user.id, "role": user.role})
    return user


def authenticate(db: Session, username: str, password: str) -> User:
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password):
        logger.info("login rejected", extra={"username": username})
        raise UnauthorizedError("Invalid username or password")
    return user
