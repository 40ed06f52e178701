"""Compatibility exports for BotState."""

from __future__ import annotations

from .models.bot_state import BOT_STATE_KEY, BotState

__all__ = ["BOT_STATE_KEY", "BotState"]
