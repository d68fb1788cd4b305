"""
Requester identity helpers.

Tokens are HS256 JWTs whose ``sub`` claim carries the user id. Issuing tokens
belongs to the auth service; discovery only needs to read them back.
"""

import logging
import os
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Header, HTTPException

logger = logging.getLogger(__name__)

JWT_SECRET = os.getenv("JWT_SECRET", "dev_secret_change_me")
JWT_ALG = "HS256"


def create_token(sub: str, expires_delta: timedelta = timedelta(days=7)) -> str:
    now = datetime.now(timezone.utc)
    return jwt.encode(
        {"sub": sub, "iat": now, "exp": now + expires_delta},
        JWT_SECRET,
        algorithm=JWT_ALG,
    )


def decode_token(token: str) -> dict:
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])


def auth_requester(authorization: str | None = Header(default=None)) -> str:
    """FastAPI dependency resolving the requesting user id from a bearer token."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Authentication required")
    token = authorization.split(" ", 1)[1].strip()
    try:
        data = decode_token(token)
    except jwt.PyJWTError as e:
        logger.warning(f"Token decode failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")
    requester_id = data.get("sub")
    if not requester_id:
        raise HTTPException(status_code=401, detail="Invalid token")
    return str(requester_id)
