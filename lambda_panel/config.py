"""Central configuration for lambda_panel."""

from __future__ import annotations

import logging
import math
import os
from typing import Set

from .models.settings import Settings

logger = logging.getLogger(__name__)


def _split_ints(s: str) -> Set[int]:
    """Parse comma-separated string into a set of integers.

    Args:
        s: Comma-separated string of integers (e.g., "123,456,789")

    Returns:
        Set of parsed integers. Invalid entries are silently skipped.

    Example:
        >>> _split_ints("123,456,invalid,789")
        {123, 456, 789}
    """
    out = set()
    for part in (s or "").split(","):
        p = part.strip()
        if p.isdigit():
            out.add(int(p))
    return out


def _float_env(name: str, default: float) -> float:
    try:
        value = float(os.environ.get(name, str(default)) or default)
    except ValueError:
        return default
    if not math.isfinite(value):
        return default
    return value


def _int_env(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _read_settings() -> Settings:
    """Read all configuration from environment variables.

    Returns:
        Settings object with all configuration values.

    Note:
        Invalid numeric values fall back to sensible defaults.
    """
    token = os.environ.get("BOT_TOKEN") or None
    allowed = _split_ints(os.environ.get("ALLOWED_CHAT_IDS", ""))
    rate_limit = _float_env("RATE_LIMIT_S", 1.0)

    # AWS
    profile = os.environ.get("AWS_PROFILE") or "default"
    region = (
        os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or "us-east-1"
    )
    cache_ttl = _float_env("CACHE_TTL_MIN", 10.0)
    if cache_ttl < 0:
        cache_ttl = 0.0
    max_pages = _int_env("MAX_PAGES", 200)
    if max_pages < 1:
        max_pages = 200
    cache_file = os.environ.get("CACHE_FILE") or "/app/data/lambda_cache.json"
    panel_max_items = _int_env("PANEL_MAX_ITEMS", 20)

    return Settings(
        BOT_TOKEN=token,
        ALLOWED_CHAT_IDS=allowed,
        RATE_LIMIT_S=rate_limit,
        AWS_PROFILE=profile,
        AWS_REGION=region,
        CACHE_TTL_MIN=cache_ttl,
        MAX_PAGES=max_pages,
        CACHE_FILE=cache_file,
        PANEL_MAX_ITEMS=panel_max_items,
    )


settings = _read_settings()


def validate_settings() -> None:
    """Validate critical configuration and log warnings for issues."""
    if settings.BOT_TOKEN is None:
        logger.error("BOT_TOKEN environment variable is not set")
    if not settings.ALLOWED_CHAT_IDS:
        logger.warning(
            "ALLOWED_CHAT_IDS is empty; guarded commands will be unauthorized."
        )
    if settings.CACHE_TTL_MIN == 0:
        logger.warning("CACHE_TTL_MIN is 0; every /lambdas call hits the AWS API.")


# Exported constants
TOKEN: str | None = settings.BOT_TOKEN
ALLOWED: set[int] = settings.ALLOWED_CHAT_IDS
RATE_LIMIT_S: float = settings.RATE_LIMIT_S
PANEL_MAX_ITEMS: int = settings.PANEL_MAX_ITEMS

validate_settings()
