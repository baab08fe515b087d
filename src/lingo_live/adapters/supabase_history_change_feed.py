"""Supabase Realtime change feed for translation history."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from functools import partial
from uuid import uuid4

from supabase import AsyncClient, acreate_client

from lingo_live.services.history import (
    ChangeCallback,
    ErrorCallback,
    HistoryChangeFeed,
    HistoryChannel,
)

_FAILED_STATES = {"CHANNEL_ERROR", "TIMED_OUT"}


@dataclass
class SupabaseHistoryChannel(HistoryChannel):
    """One Realtime channel bound to an owner's history rows."""

    client: AsyncClient
    channel: object

    async def close(self) -> None:
        await self.client.remove_channel(self.channel)


@dataclass
class SupabaseHistoryChangeFeed(HistoryChangeFeed):
    """Listens for postgres_changes on the history table.

    Inserts and updates are filtered by owner on the server. Realtime does
    not filter deletes, so every delete on the table is reported and the
    subscriber's reload decides whether the owner's rows changed. The table
    must be part of the supabase_realtime publication.
    """

    client_factory: Callable[[], Awaitable[AsyncClient]]
    table_name: str = "translations"
    schema: str = "public"
    _client: AsyncClient | None = field(default=None, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)

    @classmethod
    def create(cls, supabase_url: str, api_key: str) -> "SupabaseHistoryChangeFeed":
        """Create a feed whose async client is opened on first use."""
        return cls(client_factory=partial(acreate_client, supabase_url, api_key))

    async def watch(
        self,
        owner_user_id: str,
        on_change: ChangeCallback,
        on_error: ErrorCallback,
    ) -> SupabaseHistoryChannel:
        client = await self._get_client()
        channel = client.channel(f"{self.table_name}:{owner_user_id}:{uuid4().hex}")

        def changed(_payload: object) -> None:
            on_change()

        def status_changed(state: object, error: Exception | None = None) -> None:
            state_name = str(getattr(state, "value", state))
            if state_name in _FAILED_STATES:
                on_error(error or RuntimeError(f"Realtime channel {state_name}"))

        channel.on_postgres_changes(
            "*",
            schema=self.schema,
            table=self.table_name,
            filter=f"owner_user_id=eq.{owner_user_id}",
            callback=changed,
        )
        channel.on_postgres_changes(
            "DELETE", schema=self.schema, table=self.table_name, callback=changed
        )
        await channel.subscribe(status_changed)
        return SupabaseHistoryChannel(client=client, channel=channel)

    async def close(self) -> None:
        """Remove every open channel."""
        if self._client is not None:
            await self._client.remove_all_channels()

    async def _get_client(self) -> AsyncClient:
        async with self._lock:
            if self._client is None:
                self._client = await self.client_factory()
            return self._client
