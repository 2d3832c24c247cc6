"""Caller identity from Clerk session tokens.

Clerk issues RS256 JWTs whose ``sub`` claim is the stable user id. Keys are
fetched from the instance JWKS endpoint. Every workout operation receives
the resulting user id as an explicit argument.
"""

from __future__ import annotations

import logging
from typing import Optional

import jwt
from fastapi import Depends, Header

from app.core.config import get_settings
from app.core.errors import Unauthenticated

logger = logging.getLogger(__name__)

_jwks_client: jwt.PyJWKClient | None = None


def get_jwks_client() -> jwt.PyJWKClient | None:
    """Get or create the JWKS client (None when Clerk is not configured)."""
    global _jwks_client
    jwks_url = get_settings().jwks_url
    if _jwks_client is None and jwks_url:
        _jwks_client = jwt.PyJWKClient(jwks_url)
    return _jwks_client


def user_id_from_token(token: str) -> str | None:
    """Verify a Clerk session token and return its subject, or None if it is not acceptable."""
    jwks_client = get_jwks_client()
    if jwks_client is None:
        logger.warning("Token verification not configured (set CLERK_DOMAIN or CLERK_JWKS_URL)")
        return None
    try:
        signing_key = jwks_client.get_signing_key_from_jwt(token)
        payload = jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            options={"verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired session token")
        return None
    except jwt.PyJWTError as e:
        logger.warning("Rejected session token: %s", e)
        return None
    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        logger.warning("Session token has no subject")
        return None
    return user_id


async def get_current_user_id(authorization: Optional[str] = Header(None)) -> str | None:
    """Dependency: the verified caller's user id, or None when unauthenticated."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        return None
    return user_id_from_token(token)


async def require_user_id(user_id: str | None = Depends(get_current_user_id)) -> str:
    """Dependency for read endpoints: refuses the request when there is no verified caller."""
    if user_id is None:
        raise Unauthenticated()
    return user_id
