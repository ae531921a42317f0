from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from passlib.context import CryptContext

from app.config import settings


_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
_JWT_ALG = "HS256"

ACCESS = "access"
REFRESH = "refresh"


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("password_blank")
    return _pwd.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return _pwd.verify(password, password_hash)
    except ValueError:
        # Unrecognised or corrupt hash string.
        return False


def _encode(*, user_id: int, token_type: str, secret: str, lifetime: timedelta) -> str:
    if not secret:
        raise ValueError("jwt_secret_blank")

    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=_JWT_ALG)


def _decode(*, token: str, token_type: str, secret: str) -> int:
    """Verify signature, expiry and type; return the user id from `sub`.

    Raises jwt.InvalidTokenError (or a subclass) for anything unacceptable.
    """
    if not token:
        raise jwt.InvalidTokenError("token_blank")
    payload = jwt.decode(
        token,
        secret,
        algorithms=[_JWT_ALG],
        options={"require": ["sub", "exp", "type"]},
    )
    if payload.get("type") != token_type:
        raise jwt.InvalidTokenError("token_wrong_type")
    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        raise jwt.InvalidTokenError("token_sub_not_int")


def create_access_token(user_id: int) -> str:
    return _encode(
        user_id=user_id,
        token_type=ACCESS,
        secret=settings.jwt_secret,
        lifetime=timedelta(minutes=settings.access_token_expire_minutes),
    )


def create_refresh_token(user_id: int) -> str:
    return _encode(
        user_id=user_id,
        token_type=REFRESH,
        secret=settings.jwt_refresh_secret,
        lifetime=timedelta(days=settings.refresh_token_expire_days),
    )


def decode_access_token(token: str) -> int:
    return _decode(token=token, token_type=ACCESS, secret=settings.jwt_secret)


def decode_refresh_token(token: str) -> int:
    return _decode(token=token, token_type=REFRESH, secret=settings.jwt_refresh_secret)
