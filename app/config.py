import os

from dotenv import load_dotenv

load_dotenv(encoding="utf-8")


def _csv(value: str | None) -> list[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


DEFAULT_SECRET_KEY = "dev-key"


class Settings:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./survey_marketplace.db")
    SECRET_KEY = os.getenv("SECRET_KEY") or DEFAULT_SECRET_KEY

    SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "sid")
    SESSION_TTL_HOURS = int(os.getenv("SESSION_TTL_HOURS", 24 * 7))

    # empty = back-office endpoints disabled
    ADMIN_API_KEY = os.getenv("ADMIN_API_KEY") or None

    CORS_ORIGINS = _csv(os.getenv("CORS_ORIGINS")) or [
        "http://localhost:3000",
        "https://localhost:3000",
        "http://127.0.0.1:3000",
        "https://127.0.0.1:3000",
    ]

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
