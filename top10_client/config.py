from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


ENV_KEYS = [
    "TOP10_API_BASE",
    "TOP10_HOST",
    "TOP10_TIMEOUT_S",
]

# Older deployments still export the frontend build variable.
LEGACY_API_BASE_KEY = "REACT_APP_API_BASE"

DEV_HOSTNAME = "localhost"
LOCAL_DEV_BASE = "http://127.0.0.1:5000"
PRODUCTION_BASE = "https://ai4u-top10-backend.vercel.app"

DEFAULT_TIMEOUT_S = 30.0


def resolve_endpoint(override: str | None, host: str | None) -> str:
    """Pick the backend base URL for the current environment.

    Priority:
    - explicit override (used verbatim)
    - local dev base when served from localhost
    - production base

    Never fails, and the result never has a trailing slash.
    """
    base = (override or "").strip().rstrip("/")
    if base:
        return base
    if (host or "").strip().lower() == DEV_HOSTNAME:
        return LOCAL_DEV_BASE
    return PRODUCTION_BASE


@dataclass(frozen=True)
class Config:
    api_base: str | None = None
    host: str = ""
    timeout_s: float = DEFAULT_TIMEOUT_S

    @property
    def endpoint(self) -> str:
        return resolve_endpoint(self.api_base, self.host)

    @staticmethod
    def load_from_env(environ: Mapping[str, str] | None = None) -> "Config":
        env = os.environ if environ is None else environ

        api_base = env.get("TOP10_API_BASE") or env.get(LEGACY_API_BASE_KEY) or None
        host = env.get("TOP10_HOST", "")

        raw_timeout = env.get("TOP10_TIMEOUT_S", "").strip()
        timeout_s = DEFAULT_TIMEOUT_S
        if raw_timeout:
            try:
                timeout_s = float(raw_timeout)
            except ValueError:
                raise RuntimeError(f"TOP10_TIMEOUT_S is not a number: {raw_timeout!r}")
            if timeout_s <= 0:
                raise RuntimeError("TOP10_TIMEOUT_S must be positive")

        return Config(api_base=api_base, host=host, timeout_s=timeout_s)
