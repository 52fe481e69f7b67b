import os
from functools import lru_cache
from pathlib import Path

# Prefer loading environment variables from a .env file if python-dotenv is available
try:
    from dotenv import load_dotenv, find_dotenv
    _env_path = find_dotenv(usecwd=True)
    if _env_path:
        load_dotenv(_env_path, override=False)
except Exception:
    # If python-dotenv is not installed, skip silently
    pass

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'storefront.db'}")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # Comma separated list; "*" allows every origin
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Catalog API as seen from the client side
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8000/api")
    API_TIMEOUT_SECONDS: float = float(os.getenv("API_TIMEOUT_SECONDS", "10"))

    # Local cart persistence (one JSON blob per key)
    CART_STORAGE_DIR: str = os.getenv("CART_STORAGE_DIR", str(BASE_DIR / "local_storage"))
    CURRENCY: str = os.getenv("CURRENCY", "FCFA")

    TELEGRAM_API_URL: str = os.getenv("TELEGRAM_API_URL", "https://api.telegram.org")
    TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
    TELEGRAM_CHAT_ID: str = os.getenv("TELEGRAM_CHAT_ID", "")

    EMAIL_BACKEND: str = os.getenv("EMAIL_BACKEND", "console").lower()
    EMAILJS_API_URL: str = os.getenv("EMAILJS_API_URL", "https://api.emailjs.com")
    EMAILJS_SERVICE_ID: str = os.getenv("EMAILJS_SERVICE_ID", "")
    EMAILJS_TEMPLATE_ID: str = os.getenv("EMAILJS_TEMPLATE_ID", "")
    EMAILJS_PUBLIC_KEY: str = os.getenv("EMAILJS_PUBLIC_KEY", "")

    # Upper bound for a single delivery channel during checkout
    CHANNEL_TIMEOUT_SECONDS: float = float(os.getenv("CHANNEL_TIMEOUT_SECONDS", "15"))

    @property
    def cors_origins(self) -> list:
        return [o.strip() for o in (self.CORS_ORIGINS or "").split(",") if o.strip()]


@lru_cache
def get_settings():
    return Settings()
