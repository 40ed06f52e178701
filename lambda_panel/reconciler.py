"""Cache reconciler: cached snapshot first, remote refresh when stale.

One activation runs two tracks side by side on the event loop:

- the cache track reads the persisted list for the profile,
- the remote track reads the last fetch time and, when the TTL has elapsed,
  drains the paginated listing.

`view()` merges whatever the tracks have produced so far and is recomputed
after every state change. Once both tracks settle the remote list is written
back, but only when it is non-empty and longer than the cached one.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
import time
from typing import Awaitable, Callable

from .errors import ErrorKind, FunctionListError, classify_error
from .fetcher import DEFAULT_MAX_PAGES, fetch_all_functions
from .lambda_client import LambdaClient, ListingClient
from .models.cache import CacheEntry
from .models.function_record import FunctionRecord, PanelItem
from .models.panel import PanelView, TerminalState, TrackStatus
from .storage import JsonFileStorage, KeyValueStorage

logger = logging.getLogger(__name__)

Listener = Callable[[PanelView], "Awaitable[None] | None"]


def parse_collection(raw: str | None) -> list[FunctionRecord]:
    """Parse a persisted collection; absent or malformed input is empty."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Cached function list is not valid JSON; ignoring it")
        return []
    if not isinstance(data, list):
        logger.warning("Cached function list is not a list; ignoring it")
        return []
    records: list[FunctionRecord] = []
    for entry in data:
        record = FunctionRecord.from_dict(entry)
        if record is not None:
            records.append(record)
    return records


def serialize_collection(records: list[FunctionRecord]) -> str:
    return json.dumps([r.to_dict() for r in records])


def parse_timestamp_ms(raw: str | None) -> int | None:
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring malformed last-fetch timestamp %r", raw)
        return None


class FunctionListReconciler:
    """Coordinates the cache and remote tracks for one profile."""

    def __init__(
        self,
        client: ListingClient,
        storage: KeyValueStorage,
        profile: str,
        region: str,
        ttl_s: float,
        max_pages: int = DEFAULT_MAX_PAGES,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client = client
        self.storage = storage
        self.region = region
        self.ttl_s = ttl_s
        self.max_pages = max_pages
        self._clock = clock
        self._listeners: list[Listener] = []
        self.in_progress = False
        self._reset(profile)

    @classmethod
    def from_settings(cls, settings) -> FunctionListReconciler:
        return cls(
            client=LambdaClient(settings.AWS_PROFILE, settings.AWS_REGION),
            storage=JsonFileStorage(settings.CACHE_FILE),
            profile=settings.AWS_PROFILE,
            region=settings.AWS_REGION,
            ttl_s=settings.CACHE_TTL_MIN * 60,
            max_pages=settings.MAX_PAGES,
        )

    def _reset(self, profile: str) -> None:
        self.cache = CacheEntry(profile=profile)
        self.cache_status = TrackStatus.PENDING
        self.remote_status = TrackStatus.PENDING
        self.remote_items: list[FunctionRecord] = []
        self.remote_error: FunctionListError | None = None
        self.wrote_back = False

    @property
    def profile(self) -> str:
        return self.cache.profile

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with the fresh view after each change."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def _notify(self) -> None:
        current = self.view()
        for listener in list(self._listeners):
            try:
                result = listener(current)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Panel listener failed")

    async def activate(self) -> bool:
        """Run one load/refresh cycle.

        Returns:
            False without doing anything if a cycle is already running.
        """
        if self.in_progress:
            logger.info("Refresh for profile %s already in progress", self.profile)
            return False
        self.in_progress = True
        self._reset(self.profile)
        try:
            await self._notify()
            await asyncio.gather(self._load_cache(), self._refresh_remote())
            await self._write_back()
        finally:
            self.in_progress = False
        await self._notify()
        return True

    async def _load_cache(self) -> None:
        try:
            raw = await asyncio.to_thread(self.storage.get, self.cache.collection_key)
        except Exception:
            logger.exception("Failed to read cached functions for %s", self.profile)
            self.cache.items = []
            self.cache_status = TrackStatus.FAILED
        else:
            self.cache.items = parse_collection(raw)
            self.cache_status = TrackStatus.LOADED
            logger.debug(
                "Loaded %d cached functions for %s", len(self.cache.items), self.profile
            )
        await self._notify()

    def is_stale(self, fetched_at_ms: int | None) -> bool:
        """Return True when the remote list should be fetched again.

        Stale means no recorded fetch, or at least the TTL elapsed since it.
        A last-fetch time later than now (clock skew) also counts as stale,
        unlike a plain `now - fetched_at >= ttl` comparison, which would skip
        the fetch until the clock caught up.
        """
        if fetched_at_ms is None:
            return True
        elapsed_ms = self._now_ms() - fetched_at_ms
        # A timestamp from the future cannot be trusted to mean "fresh".
        if elapsed_ms < 0:
            return True
        return elapsed_ms >= self.ttl_s * 1000

    async def _refresh_remote(self) -> None:
        try:
            raw_ts = await asyncio.to_thread(
                self.storage.get, self.cache.fetched_at_key
            )
            self.cache.fetched_at_ms = parse_timestamp_ms(raw_ts)
            if not self.is_stale(self.cache.fetched_at_ms):
                logger.debug("Cache for %s is fresh; skipping remote fetch", self.profile)
                self.remote_status = TrackStatus.SKIPPED
            else:
                self.remote_items = await asyncio.to_thread(
                    fetch_all_functions, self.client, self.max_pages
                )
                self.remote_status = TrackStatus.LOADED
                await self._store_fetched_at()
        except FunctionListError as exc:
            logger.warning(
                "Remote function listing failed (%s): %s", exc.kind.value, exc
            )
            self.remote_error = exc
            self.remote_status = TrackStatus.FAILED
        except Exception as exc:
            logger.exception("Remote function listing failed")
            self.remote_error = FunctionListError(classify_error(exc), str(exc))
            self.remote_status = TrackStatus.FAILED
        await self._notify()

    async def _store_fetched_at(self) -> None:
        now_ms = self._now_ms()
        try:
            await asyncio.to_thread(
                self.storage.set, self.cache.fetched_at_key, str(now_ms)
            )
        except Exception:
            logger.exception("Failed to store last-fetch time for %s", self.profile)
            return
        self.cache.fetched_at_ms = now_ms

    def should_write_back(self) -> bool:
        return (
            self.remote_status == TrackStatus.LOADED
            and len(self.remote_items) > 0
            and len(self.remote_items) > len(self.cache.items)
        )

    async def _write_back(self) -> None:
        if not self.should_write_back():
            return
        try:
            await asyncio.to_thread(
                self.storage.set,
                self.cache.collection_key,
                serialize_collection(self.remote_items),
            )
        except Exception:
            logger.exception("Failed to write function cache for %s", self.profile)
            return
        self.wrote_back = True
        logger.info(
            "Cached %d functions for %s (was %d)",
            len(self.remote_items),
            self.profile,
            len(self.cache.items),
        )

    def view(self) -> PanelView:
        """Merge both tracks into what the host should show right now."""
        cache_settled = self.cache_status != TrackStatus.PENDING
        cached = self.cache.items if cache_settled else []

        if self.remote_status == TrackStatus.LOADED and len(self.remote_items) > len(
            cached
        ):
            records, source = self.remote_items, "remote"
        else:
            records, source = cached, "cache"

        terminal: TerminalState | None = None
        if self.remote_status == TrackStatus.FAILED and cache_settled and not cached:
            kind = self.remote_error.kind if self.remote_error else ErrorKind.TRANSIENT
            if kind == ErrorKind.SESSION_EXPIRED:
                terminal = TerminalState.CREDENTIALS_EXPIRED
            else:
                terminal = TerminalState.NO_CREDENTIALS

        is_loading = terminal is None and not (
            (cache_settled and cached)
            or self.remote_status == TrackStatus.LOADED
            or (self.remote_status == TrackStatus.SKIPPED and cache_settled)
        )
        return PanelView(
            items=[PanelItem.from_record(r, self.region) for r in records],
            is_loading=is_loading,
            terminal=terminal,
            source=source,
        )
