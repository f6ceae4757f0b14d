import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import Settings, load_settings
from ..session import verify_access

log = logging.getLogger("auth")

bearer = HTTPBearer(auto_error=False)


def get_settings() -> Settings:
    return load_settings()


def require_auth(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    settings: Settings = Depends(get_settings),
):
    if not creds or creds.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="Missing bearer token")
    try:
        return verify_access(settings, creds.credentials)
    except Exception as e:
        log.warning("Access token rejected: %s", e)
        raise HTTPException(status_code=401, detail="Invalid or expired token")


def require_roles_access(required: list[str]):
    def _dep(claims=Depends(require_auth)):
        have = set(claims.get("roles", []))
        if not set(required).issubset(have):
            raise HTTPException(status_code=403, detail="Forbidden: missing role")
        return claims

    return _dep
