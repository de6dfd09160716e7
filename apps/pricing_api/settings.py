# apps/pricing_api/settings.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def is_enabled(flag: str, default: bool = False) -> bool:
    return os.getenv(flag, str(default)).lower() == "true"


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


def _list_env(name: str) -> List[str]:
    raw = os.getenv(name, "") or ""
    return [x.strip() for x in raw.split(",") if x.strip()]


@dataclass(frozen=True)
class Settings:
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "0.1.0")

    # Partner catalog (CardapioWeb)
    CARDAPIOWEB_BASE_URL: Optional[str] = os.getenv("CARDAPIOWEB_BASE_URL")
    CARDAPIOWEB_API_KEY: Optional[str] = os.getenv("CARDAPIOWEB_API_KEY")
    CARDAPIOWEB_TIMEOUT_SECONDS: float = _float_env("CARDAPIOWEB_TIMEOUT_SECONDS", 20.0)
    CARDAPIOWEB_MAX_RETRIES: int = _int_env("CARDAPIOWEB_MAX_RETRIES", 3)

    # Keeta distance band used when the caller sends none
    DEFAULT_KM_BAND: str = os.getenv("DEFAULT_KM_BAND", "UP_TO_2")

    CORS_ALLOW_ORIGINS: List[str] = field(default_factory=lambda: _list_env("CORS_ALLOW_ORIGINS"))
    DEBUG_PRICING: bool = is_enabled("DEBUG_PRICING", False)

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()

# Global logging (module-level loggers inherit this)
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG_PRICING else settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
