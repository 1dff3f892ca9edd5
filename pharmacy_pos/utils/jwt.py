# pharmacy_pos/utils/jwt.py
from datetime import datetime, timedelta
from typing import Optional

from jose import jwt

from pharmacy_pos.core.config import settings


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Bearer token for ``subject`` (user email). Issued by the login service;
    kept here so tooling and tests can mint tokens with the same settings.
    """
    now = datetime.utcnow()
    delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": subject,
        "iat": now,
        "exp": now + delta,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(raw_token: str) -> dict:
    return jwt.decode(raw_token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
