# src/tasklist_client/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the API token is optional).
- Bad values fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

DEFAULT_API_BASE_URL = "http://localhost:8080"
DEFAULT_HTTP_TIMEOUT_MS = 10_000


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_headers(name: str) -> Dict[str, str]:
    """Parse "Name: value; Other: value" into a dict. Malformed pairs are skipped."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return {}
    out: Dict[str, str] = {}
    for pair in raw.split(";"):
        key, sep, value = pair.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        out[key] = value.strip()
    return out


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str = "tasklist"
    log_level: str = "INFO"
    data_dir: Path = Path(".local/tasklist")

    # ---- Remote task API ----
    api_base_url: str = DEFAULT_API_BASE_URL
    http_timeout_ms: int = DEFAULT_HTTP_TIMEOUT_MS
    api_token: Optional[str] = None
    extra_headers: Dict[str, str] = field(default_factory=dict)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasklist").strip() or "tasklist"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip() or "INFO"
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasklist"))

        api_base_url = _env(_k("API_BASE_URL"), DEFAULT_API_BASE_URL).strip() or DEFAULT_API_BASE_URL
        http_timeout_ms = _env_int(_k("HTTP_TIMEOUT_MS"), DEFAULT_HTTP_TIMEOUT_MS)

        api_token = _env(_k("API_TOKEN"), "").strip() or None
        extra_headers = _env_headers(_k("EXTRA_HEADERS"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            api_base_url=api_base_url,
            http_timeout_ms=http_timeout_ms,
            api_token=api_token,
            extra_headers=extra_headers,
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Load settings once (reading .env first, never overriding the real environment)."""
    global _settings
    if _settings is None:
        load_dotenv(override=False)
        _settings = Settings.from_env()
    return _settings
