"""
Process-wide settings, read once from the environment (and `.env`).
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

_TRUTHY = {"true", "1", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    connection_string: str = "couchbase://localhost"
    username: str = ""
    password: str = ""
    bucket: str = "default"

    with_sync_gateway: bool = False
    use_default_id_fields: bool = True

    global_max_page_size: int = 1000
    entities_path: Path = Path("config/entities.yaml")

    jwt_secret: Optional[str] = None
    jwt_issuer: str = "https://data-service"
    jwt_audience: str = "data-service"
    access_ttl: int = 900

    cors_origins: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_env(cls) -> "Settings":
        origins_raw = os.getenv("CORS_ALLOW_ORIGINS", "")
        return cls(
            connection_string=os.getenv("COUCHBASE_CONNECTION_STRING", "couchbase://localhost"),
            username=os.getenv("COUCHBASE_USERNAME", ""),
            password=os.getenv("COUCHBASE_PASSWORD", ""),
            bucket=os.getenv("COUCHBASE_BUCKET", "default"),
            with_sync_gateway=_env_bool("QUERY_EXECUTOR_WITH_SYNC_GATEWAY", False),
            use_default_id_fields=_env_bool("QUERY_EXECUTOR_USE_DEFAULT_ID_FIELDS", True),
            global_max_page_size=int(os.getenv("GLOBAL_MAX_PAGE_SIZE", "1000")),
            entities_path=Path(os.getenv("ENTITIES_FILE", "config/entities.yaml")),
            jwt_secret=os.getenv("APP_JWT_SECRET") or None,
            jwt_issuer=os.getenv("APP_JWT_ISS", "https://data-service"),
            jwt_audience=os.getenv("APP_JWT_AUD", "data-service"),
            access_ttl=int(os.getenv("ACCESS_TOKEN_TTL_SECONDS", "900")),
            cors_origins=tuple(o.strip() for o in origins_raw.split(",") if o.strip()),
        )


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()


__all__ = ["Settings", "load_settings"]
