"""Cache-related dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

from .function_record import FunctionRecord


@dataclass
class CacheEntry:
    """Persisted function list for one profile plus its last fetch time."""

    profile: str
    items: list[FunctionRecord] = field(default_factory=list)
    fetched_at_ms: int | None = None

    @property
    def collection_key(self) -> str:
        return collection_key(self.profile)

    @property
    def fetched_at_key(self) -> str:
        return fetched_at_key(self.profile)


def collection_key(profile: str) -> str:
    return f"lambdas-{profile}"


def fetched_at_key(profile: str) -> str:
    return f"lambdas-{profile}-fetched-at"
