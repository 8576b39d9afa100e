import os
from typing import NamedTuple


class Settings(NamedTuple):
    api_url: str  # GraphQL endpoint
    api_timeout: float
    login_path: str
    session_cookie: str  # cookie forwarded to the API for auth
    cors_origins: list[str]


def _float_from_env(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {raw!r}")
    return value


def load_settings() -> Settings:
    """
    Reads the app configuration from the environment (main.py loads .env first).

    Example .env:
    POST_API_URL=http://localhost:4000/graphql
    POST_API_TIMEOUT=10
    LOGIN_PATH=/login
    SESSION_COOKIE=qid
    CORS_ORIGINS=http://localhost:3000,http://127.0.0.1:3000
    """
    origins = os.environ.get("CORS_ORIGINS", "http://localhost:3000")

    return Settings(
        api_url=os.environ.get("POST_API_URL", "http://localhost:4000/graphql"),
        api_timeout=_float_from_env("POST_API_TIMEOUT", 10.0),
        login_path=os.environ.get("LOGIN_PATH", "/login"),
        session_cookie=os.environ.get("SESSION_COOKIE", "qid"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )
