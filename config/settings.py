"""API settings. Values come from env (SOCIETY_API_BASE_URL, SOCIETY_API_TOKEN, ...) or explicit args."""

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from config.defaults import DEFAULT_APP_NAME, DEFAULT_TIMEOUT_SECONDS

_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)


def _env(key: str, default: str = "") -> str:
    return (os.getenv(key) or default).strip()


def _env_float(key: str, default: float) -> float:
    try:
        value = float(_env(key, str(default)))
    except ValueError:
        return default
    return value if value > 0 else default


class ApiSettings:
    """Base URL, credentials and timeout for the society REST API."""

    __slots__ = ("base_url", "token", "timeout", "app_name")

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        app_name: Optional[str] = None,
    ) -> None:
        self.base_url = (base_url if base_url is not None else _env("SOCIETY_API_BASE_URL")).strip().rstrip("/")
        self.token = (token if token is not None else _env("SOCIETY_API_TOKEN")).strip()
        self.timeout = timeout if timeout is not None else _env_float("SOCIETY_API_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)
        self.app_name = app_name or _env("SOCIETY_APP_NAME", DEFAULT_APP_NAME)

    def is_configured(self) -> bool:
        return bool(self.base_url)

    def headers(self) -> Dict[str, str]:
        h = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h


def log_level() -> str:
    level = _env("SOCIETY_LOG_LEVEL", "INFO").upper()
    return level if level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL") else "INFO"
