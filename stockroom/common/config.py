import os
from dataclasses import dataclass


def _get_bool(env_name: str, default: bool = False) -> bool:
    val = os.getenv(env_name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass
class Settings:
    # App
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "8000"))
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key")
    INSTANCE_ID: str = os.getenv("INSTANCE_ID", "unknown")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Database (SQLite file next to the working directory by default)
    DB_URL: str = os.getenv("DB_URL", "sqlite+aiosqlite:///./inventory.db")
    DB_ECHO: bool = _get_bool("DB_ECHO", False)

    # Presentation
    CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "$")


settings = Settings()
