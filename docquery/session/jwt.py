import time
from typing import Any, Dict, Tuple

import jwt  # PyJWT

from ..config import Settings


def _secret(settings: Settings) -> str:
    if not settings.jwt_secret:
        raise RuntimeError("APP_JWT_SECRET is not set")
    return settings.jwt_secret


def issue_access_token(settings: Settings, sub: str, roles: list[str], email: str | None = None) -> Tuple[str, int]:
    """
    Returns: access_token, access_exp (epoch)
    """
    iat = int(time.time())
    access_exp = iat + settings.access_ttl
    payload = {
        "iss": settings.jwt_issuer, "aud": settings.jwt_audience, "iat": iat, "exp": access_exp,
        "sub": sub, "email": email, "roles": roles, "typ": "access"
    }
    return jwt.encode(payload, _secret(settings), algorithm="HS256"), access_exp


def verify_access(settings: Settings, token: str) -> Dict[str, Any]:
    payload = jwt.decode(
        token,
        _secret(settings),
        algorithms=["HS256"],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options={"require": ["exp", "iat", "aud", "iss"]},
    )
    if payload.get("typ") != "access":
        raise jwt.InvalidTokenError("wrong token type")
    return payload
