"""Configuration dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Set


@dataclass
class Settings:
    """Configuration settings for lambda_panel.

    All settings are loaded from environment variables with sensible defaults.
    """

    BOT_TOKEN: str | None
    ALLOWED_CHAT_IDS: Set[int]
    RATE_LIMIT_S: float
    AWS_PROFILE: str
    AWS_REGION: str
    CACHE_TTL_MIN: float
    MAX_PAGES: int
    CACHE_FILE: str
    PANEL_MAX_ITEMS: int
