"""
Environment-driven settings helpers.

Every value is read lazily so tests can tweak the environment with
`monkeypatch.setenv` without reloading modules.
"""

from __future__ import annotations

import logging
import os


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def cors_origins() -> list[str]:
    return env_list("CORS_ORIGINS", ["http://localhost:3000", "http://127.0.0.1:3000"])


def default_page_size() -> int:
    return max(1, env_int("DIRECTORY_PAGE_SIZE", 12))


def max_page_size() -> int:
    return max(1, env_int("DIRECTORY_MAX_PAGE_SIZE", 100))


def referral_source() -> str:
    return env_str("REFERRAL_SOURCE", "")


def referral_campaign() -> str:
    return env_str("REFERRAL_CAMPAIGN", "")


def configure_logging() -> None:
    level_name = env_str("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
