"""
Session token handling for MockPrep

Session tokens are HS256 JWTs carrying the user id in the ``uid`` claim.
Sign-in lives outside this service; the helpers here verify tokens and can
mint them for development and tests.
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from mockprep.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_access_token(
    user_id: str,
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    settings = settings or get_settings()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(days=settings.access_token_expire_days)
    payload = {"uid": user_id, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> str | None:
    """Return the user id from a valid token, or None."""
    settings = settings or get_settings()
    if not settings.jwt_secret_key:
        logger.error("JWT_SECRET_KEY is not configured, rejecting all session tokens")
        return None

    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None

    user_id = payload.get("uid")
    if not user_id:
        return None
    return str(user_id)
