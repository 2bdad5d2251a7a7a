"""
Central configuration for the portfolio backend.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    app_env: str
    app_name: str
    debug: bool
    log_level: str
    mongo_uri: str
    mongo_db_name: str
    mongo_server_selection_timeout_ms: int
    mongo_connect_timeout_ms: int
    object_bucket_name: str
    object_chunk_size_bytes: int
    max_upload_bytes: int
    admin_username: str
    admin_password: str
    jwt_secret: str
    jwt_algorithm: str
    jwt_expire_minutes: int
    cors_allow_origins: list[str]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except Exception:
        return default


def _env_log_level(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().upper()
    if isinstance(logging.getLevelName(raw), int):
        return raw
    return default


def get_settings() -> Settings:
    raw_origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
    if raw_origins.strip() == "*":
        cors_allow_origins = ["*"]
    else:
        cors_allow_origins = [x.strip() for x in raw_origins.split(",") if x.strip()]

    chunk_size = _env_int("OBJECT_CHUNK_SIZE_BYTES", 255 * 1024)
    if chunk_size <= 0:
        chunk_size = 255 * 1024

    return Settings(
        app_env=os.getenv("APP_ENV", "dev").strip().lower(),
        app_name=os.getenv("APP_NAME", "Professor Portfolio"),
        debug=_env_bool("DEBUG", False),
        log_level=_env_log_level("LOG_LEVEL", "INFO"),
        mongo_uri=os.getenv("MONGODB_URI", "mongodb://localhost:27017").strip(),
        mongo_db_name=os.getenv("MONGODB_DB_NAME", "portfolio").strip() or "portfolio",
        mongo_server_selection_timeout_ms=_env_int("MONGO_SERVER_SELECTION_TIMEOUT_MS", 5000),
        mongo_connect_timeout_ms=_env_int("MONGO_CONNECT_TIMEOUT_MS", 5000),
        object_bucket_name=os.getenv("OBJECT_BUCKET_NAME", "fs").strip() or "fs",
        object_chunk_size_bytes=chunk_size,
        max_upload_bytes=_env_int("MAX_UPLOAD_BYTES", 25 * 1024 * 1024),
        admin_username=os.getenv("ADMIN_USERNAME", "").strip(),
        admin_password=os.getenv("ADMIN_PASSWORD", ""),
        jwt_secret=os.getenv("JWT_SECRET", "CHANGE_ME_SECRET"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_expire_minutes=_env_int("JWT_EXPIRE_MINUTES", 60),
        cors_allow_origins=cors_allow_origins,
    )
