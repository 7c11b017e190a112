from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class AuthnConfig:
    # Default timeout applied by the plain (unauthenticated) fetch
    fetch_timeout_seconds: float

    # Optional secret; when set, stored session records are signed
    storage_secret: Optional[str]

    log_level: str


@lru_cache(maxsize=1)
def load_authn_config() -> AuthnConfig:
    """
    Load client authentication configuration from environment variables.

    All settings are optional; unset or unparseable values fall back to defaults.
    """
    timeout_raw = (os.getenv("AUTHN_FETCH_TIMEOUT_SECONDS", "") or "").strip()
    try:
        timeout = float(timeout_raw) if timeout_raw else 30.0
    except ValueError:
        timeout = 30.0
    if timeout < 1:
        timeout = 1.0

    return AuthnConfig(
        fetch_timeout_seconds=timeout,
        storage_secret=(os.getenv("AUTHN_STORAGE_SECRET", "") or "").strip() or None,
        log_level=(os.getenv("AUTHN_LOG_LEVEL", "") or "info").strip().upper() or "INFO",
    )


def resolve_log_level(name: str) -> int:
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(cfg: AuthnConfig | None = None) -> None:
    """Application entry point: configure root logging from `AUTHN_LOG_LEVEL`."""
    cfg = cfg or load_authn_config()
    logging.basicConfig(
        level=resolve_log_level(cfg.log_level),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
