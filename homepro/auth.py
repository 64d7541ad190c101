# homepro/auth.py
from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

import jwt
from fastapi import Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .config import settings
from .db import get_db
from .models import User

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    user_id: int
    external_id: str
    email: str


# -------------------------
# Local user mirror
# -------------------------
def get_or_create_user(db: Session, *, external_id: str, email: str) -> User:
    """
    Resolve the local row for an external identity.

    Lookup order: external id (email refreshed if it changed), then email
    (external id attached), then create. A concurrent create that loses the
    unique-constraint race rolls back and re-reads by email.
    """
    user = db.scalar(select(User).where(User.external_id == external_id))
    if user is not None:
        if user.email != email:
            user.email = email
            db.commit()
            db.refresh(user)
        return user

    user = db.scalar(select(User).where(User.email == email))
    if user is not None:
        user.external_id = external_id
        db.commit()
        db.refresh(user)
        return user

    user = User(external_id=external_id, email=email)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        user = db.scalar(select(User).where(User.email == email))
        if user is None:
            raise
        log.info("user_create_race_resolved", extra={"user_id": user.id})
        return user

    db.refresh(user)
    log.info("user_created", extra={"user_id": user.id})
    return user


# -------------------------
# Token helpers
# -------------------------
def _bearer(request: Request) -> Optional[str]:
    authorization = request.headers.get("Authorization") or ""
    if authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
        return token or None
    return None


@lru_cache(maxsize=4)
def _jwks_client(url: str) -> jwt.PyJWKClient:
    return jwt.PyJWKClient(url)


def _decode_token(token: str) -> dict[str, Any]:
    options = {"verify_aud": bool(settings.auth_jwt_audience)}
    try:
        if settings.auth_jwks_url:
            key = _jwks_client(settings.auth_jwks_url).get_signing_key_from_jwt(token).key
            algorithms = ["RS256"]
        elif settings.auth_jwt_secret:
            key = settings.auth_jwt_secret
            algorithms = ["HS256"]
        else:
            raise HTTPException(status_code=401, detail="Token verification is not configured")

        return jwt.decode(
            token,
            key,
            algorithms=algorithms,
            audience=settings.auth_jwt_audience,
            issuer=settings.auth_jwt_issuer,
            options=options,
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")


def _identity(request: Request) -> tuple[str, str]:
    """(external_id, email) for the caller, or 401/400."""
    if settings.auth_mode == "jwt":
        token = _bearer(request)
        if not token:
            raise HTTPException(status_code=401, detail="Unauthorized")
        claims = _decode_token(token)
        external_id = str(claims.get("sub") or "").strip()
        email = str(claims.get(settings.auth_email_claim) or "").strip().lower()
    else:
        external_id = (request.headers.get(settings.dev_header_user_id) or "").strip()
        email = (request.headers.get(settings.dev_header_user_email) or "").strip().lower()

    if not external_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    if not email:
        raise HTTPException(status_code=400, detail="User email not found")
    return external_id, email


def resolve_principal(request: Request, db: Session) -> Principal:
    external_id, email = _identity(request)
    user = get_or_create_user(db, external_id=external_id, email=email)
    return Principal(user_id=int(user.id), external_id=str(user.external_id), email=str(user.email))


# -------------------------
# Dependencies
# -------------------------
def get_principal(request: Request, db: Session = Depends(get_db)) -> Principal:
    """
    Auth modes:
      - jwt: Authorization: Bearer <token>, sub + email claim
      - dev: X-User-Id / X-User-Email headers (refused in prod by Settings)
    """
    return resolve_principal(request, db)


def is_cron_request(request: Request) -> bool:
    secret = settings.cron_secret
    token = _bearer(request)
    return bool(secret and token and hmac.compare_digest(token, secret))


def get_cron_or_principal(request: Request, db: Session = Depends(get_db)) -> Optional[Principal]:
    """None for a scheduled caller holding the cron secret, else the user."""
    if is_cron_request(request):
        return None
    return resolve_principal(request, db)


def require_cron(request: Request) -> None:
    """Only enforced when a cron secret is configured."""
    if settings.cron_secret and not is_cron_request(request):
        raise HTTPException(status_code=401, detail="Unauthorized")
