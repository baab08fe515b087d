"""Translation history persistence and live subscriptions."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from functools import partial
from typing import Protocol

from lingo_live.domain.errors import PersistenceError
from lingo_live.domain.history import NewTranslationRecord, TranslationRecord

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[list[TranslationRecord]], None]
ErrorCallback = Callable[[Exception], None]
ChangeCallback = Callable[[], None]


class HistoryRepository(Protocol):
    """Persistence interface for translation history."""

    def append(self, record: NewTranslationRecord) -> None:
        """Persist a new record; the store assigns id and created_at."""

    def list_for_owner(
        self, app_id: str, owner_user_id: str
    ) -> list[TranslationRecord]:
        """Return an owner's records, newest first."""


class HistoryChannel(Protocol):
    """An open change listener on the history store."""

    async def close(self) -> None:
        """Stop listening and release the channel."""


class HistoryChangeFeed(Protocol):
    """Store-side notifications for changes to an owner's history rows."""

    async def watch(
        self,
        owner_user_id: str,
        on_change: ChangeCallback,
        on_error: ErrorCallback,
    ) -> HistoryChannel:
        """Call on_change after any insert, update or delete for the owner."""

    async def close(self) -> None:
        """Release every channel the feed opened."""


@dataclass(eq=False)
class HistorySubscription:
    """Live view of one owner's history.

    Each store change marks the view stale; a single background refresh
    reloads the snapshot, so changes arriving mid-load collapse into one
    more reload and snapshots are delivered in load order.
    """

    owner_user_id: str
    on_snapshot: SnapshotCallback
    on_error: ErrorCallback
    load: Callable[[], Awaitable[list[TranslationRecord]]]
    channel: HistoryChannel | None = None
    active: bool = True
    _stale: bool = field(default=False, init=False)
    _refresher: asyncio.Task | None = field(default=None, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)

    def mark_stale(self) -> None:
        """Schedule a reload after the store reported a change."""
        if not self.active:
            return
        self._stale = True
        if self._refresher is None or self._refresher.done():
            self._refresher = asyncio.create_task(self._refresh())

    def report(self, exc: Exception) -> None:
        """Forward a listener failure as a PersistenceError."""
        if not self.active:
            return
        if isinstance(exc, PersistenceError):
            self.on_error(exc)
            return
        error = PersistenceError("Could not listen for history changes")
        error.__cause__ = exc
        self.on_error(error)

    async def deliver(self) -> None:
        """Load the current snapshot and hand it to the subscriber."""
        async with self._lock:
            try:
                snapshot = await self.load()
            except PersistenceError as exc:
                self.report(exc)
                return
            if self.active:
                self.on_snapshot(snapshot)

    async def unsubscribe(self) -> None:
        """Stop delivering snapshots. Safe to call more than once."""
        if not self.active:
            return
        self.active = False
        if self._refresher is not None and not self._refresher.done():
            self._refresher.cancel()
        channel, self.channel = self.channel, None
        if channel is None:
            return
        try:
            await channel.close()
        except Exception:
            logger.exception(
                "Failed to close history channel",
                extra={"owner_user_id": self.owner_user_id},
            )

    async def _refresh(self) -> None:
        while self.active and self._stale:
            self._stale = False
            await self.deliver()


@dataclass
class HistoryService:
    """Application service for appending and watching history."""

    repository: HistoryRepository
    change_feed: HistoryChangeFeed
    app_id: str

    async def append(  # noqa: PLR0913
        self,
        owner_user_id: str,
        original_text: str,
        translated_text: str,
        source_language: str,
        target_language: str,
    ) -> None:
        """Persist a translation; live views refresh from the change feed."""
        record = NewTranslationRecord(
            app_id=self.app_id,
            owner_user_id=owner_user_id,
            original_text=original_text,
            translated_text=translated_text,
            source_language=source_language,
            target_language=target_language,
        )
        try:
            await asyncio.to_thread(self.repository.append, record)
        except Exception as exc:
            raise PersistenceError("Could not save translation to history") from exc

    async def snapshot(self, owner_user_id: str) -> list[TranslationRecord]:
        """Return the owner's history, newest first."""
        try:
            return await asyncio.to_thread(
                self.repository.list_for_owner, self.app_id, owner_user_id
            )
        except Exception as exc:
            logger.exception(
                "Failed to load history", extra={"owner_user_id": owner_user_id}
            )
            raise PersistenceError("Could not load translation history") from exc

    async def subscribe(
        self,
        owner_user_id: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> HistorySubscription:
        """Open a live view that receives the owner's full ordered history.

        The current snapshot is delivered before this returns; every later
        change the store reports for the owner delivers a fresh one.
        """
        subscription = HistorySubscription(
            owner_user_id=owner_user_id,
            on_snapshot=on_snapshot,
            on_error=on_error,
            load=partial(self.snapshot, owner_user_id),
        )
        try:
            subscription.channel = await self.change_feed.watch(
                owner_user_id, subscription.mark_stale, subscription.report
            )
        except Exception as exc:
            logger.exception(
                "Failed to watch history", extra={"owner_user_id": owner_user_id}
            )
            subscription.report(exc)
        await subscription.deliver()
        return subscription
