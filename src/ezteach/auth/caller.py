"""
Caller Identity

Resolves the authenticated caller from a bearer token. The uid in the token's
`sub` claim is the only identity the services trust.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jose import JWTError, jwt

from ezteach.config import Settings, settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller of an operation."""

    uid: str


def decode_bearer_token(token: str, *, config: Settings = settings) -> CallerIdentity | None:
    """Verify a bearer token and return the caller it identifies.

    Args:
        token: Encoded JWT from the Authorization header
        config: Settings holding the verification key and algorithms

    Returns:
        CallerIdentity, or None if the token is invalid, expired or has no subject
    """
    options = {"verify_aud": config.AUTH_JWT_AUDIENCE is not None}
    try:
        claims = jwt.decode(
            token,
            config.AUTH_JWT_SECRET,
            algorithms=config.AUTH_JWT_ALGORITHMS,
            audience=config.AUTH_JWT_AUDIENCE,
            options=options,
        )
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        return None

    uid = claims.get("sub")
    if not isinstance(uid, str) or not uid.strip():
        logger.info("Rejected bearer token without subject")
        return None

    return CallerIdentity(uid=uid)
