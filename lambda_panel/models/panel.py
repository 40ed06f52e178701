"""Presented panel state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .function_record import PanelItem


class TerminalState(str, Enum):
    CREDENTIALS_EXPIRED = "credentials_expired"
    NO_CREDENTIALS = "no_credentials"


class TrackStatus(str, Enum):
    PENDING = "pending"
    LOADED = "loaded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class PanelView:
    """What the host shows: rows, a loading flag, and an optional terminal state."""

    items: list[PanelItem] = field(default_factory=list)
    is_loading: bool = True
    terminal: TerminalState | None = None
    source: str = "cache"

    def filtered(self, query: str | None) -> list[PanelItem]:
        """Rank prefix matches before substring matches, case-insensitive."""
        q = (query or "").strip().lower()
        if not q:
            return list(self.items)
        starts = [i for i in self.items if i.title.lower().startswith(q)]
        contains = [
            i for i in self.items if q in i.title.lower() and i not in starts
        ]
        return starts + contains
